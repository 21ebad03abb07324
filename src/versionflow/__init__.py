"""versionflow: release-workflow continuity checks for version numbers."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("versionflow")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from versionflow.api import check_continuity, next_versions, increase_version
from versionflow.codes import IncreaseKind, ResolutionCode, RestrictionPolicy
from versionflow.contracts import ContinuityReport, NextVersionsReport
from versionflow.kernel.continuity import ContinuityResult, ContinuityValidator
from versionflow.kernel.version import Stability, Version, VersionParseError, parse_version

__all__ = [
    "__version__",
    "check_continuity",
    "next_versions",
    "increase_version",
    "IncreaseKind",
    "ResolutionCode",
    "RestrictionPolicy",
    "ContinuityReport",
    "NextVersionsReport",
    "ContinuityResult",
    "ContinuityValidator",
    "Stability",
    "Version",
    "VersionParseError",
    "parse_version",
]
