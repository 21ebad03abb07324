"""Public result models for versionflow package."""

from typing import List, Optional
from pydantic import BaseModel


class ContinuityReport(BaseModel):
    """Outcome of checking a candidate version against a release history."""
    ok: bool
    candidate: str  # canonical text, e.g. "1.1.1"
    reference: Optional[str] = None  # version the candidates were derived from (None for bootstrap)
    resolution: str  # "BOOTSTRAP" | "LATEST_LINE" | "OPEN_LINE" | "SUPERSEDED_MINOR" | "SUPERSEDED_MAJOR"
    policy: str  # "strict" | "tiered"
    possible_versions: List[str]  # canonical texts, candidate order


class NextVersionsReport(BaseModel):
    """Versions that may directly follow a given version."""
    version: str
    candidates: List[str]
