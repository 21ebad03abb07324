"""Public API for versionflow.

High-level functions that accept version literals or Version instances
and return plain, serializable results. Tooling should use these
functions instead of reaching into the kernel.
"""

from typing import Iterable, List, Union

from versionflow.codes import IncreaseKind, RestrictionPolicy
from versionflow.contracts import ContinuityReport, NextVersionsReport
from versionflow.kernel.continuity import ContinuityResult, ContinuityValidator
from versionflow.kernel.version import Version, coerce_version

VersionLike = Union[Version, str]


def _to_report(result: ContinuityResult, policy: RestrictionPolicy) -> ContinuityReport:
    """Convert a kernel ContinuityResult to the public report."""
    return ContinuityReport(
        ok=result.accepted,
        candidate=str(result.candidate),
        reference=str(result.reference) if result.reference is not None else None,
        resolution=result.resolution.value,
        policy=policy.value,
        possible_versions=[str(v) for v in result.possible_versions],
    )


def check_continuity(
    candidate: VersionLike,
    existing: Iterable[VersionLike] = (),
    policy: Union[RestrictionPolicy, str] = RestrictionPolicy.STRICT,
) -> ContinuityReport:
    """
    Check whether `candidate` is a legitimate next release given `existing`.
    
    Args:
        candidate: The proposed version
        existing: Previously released versions (any order, duplicates allowed)
        policy: Restriction applied to superseded release lines
    
    Returns:
        ContinuityReport; `ok` is False when the candidate is out of sequence
    
    Raises:
        ValueError: A version literal or the policy name is invalid
    """
    validator = ContinuityValidator(existing, policy=policy)
    return _to_report(validator.check(candidate), validator.policy)


def next_versions(version: VersionLike) -> NextVersionsReport:
    """List the versions that may be released directly after `version`."""
    version = coerce_version(version)
    return NextVersionsReport(
        version=str(version),
        candidates=[str(v) for v in version.next_candidates()],
    )


def increase_version(version: VersionLike, kind: Union[IncreaseKind, str]) -> str:
    """Return the canonical text of `version` increased by `kind`."""
    return str(coerce_version(version).increase(kind))
