"""Stable JSON rendering for --json reports.

Reports are compared byte for byte between runs, so key order and
separators never vary. List order is kept: candidate order is meaningful.
"""

import json
from typing import Any

from pydantic import BaseModel


def canonical_dumps(obj: Any) -> str:
    """Render a report model (or plain JSON data) as compact, key-sorted JSON."""
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json")
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
