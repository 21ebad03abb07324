"""Code constants for versionflow.

These constants prevent stringly-typed increase kinds and policy names
and ensure client code uses the values the kernel understands.
"""

from enum import Enum


class IncreaseKind(str, Enum):
    """Accepted kinds for Version.increase()."""

    # Stability tiers
    ALPHA = "alpha"
    BETA = "beta"
    RC = "rc"
    STABLE = "stable"

    # Plain increments
    MAJOR = "major"
    NEXT = "next"
    MINOR = "minor"
    PATCH = "patch"


class RestrictionPolicy(str, Enum):
    """How a superseded release line is restricted."""

    # Newer minor or newer major: patch bump only
    STRICT = "strict"
    # Newer minor: patch bump only; newer major only: patch or minor bump
    TIERED = "tiered"


class ResolutionCode(str, Enum):
    """How the reference version for a continuity check was chosen."""

    BOOTSTRAP = "BOOTSTRAP"
    LATEST_LINE = "LATEST_LINE"
    OPEN_LINE = "OPEN_LINE"
    SUPERSEDED_MINOR = "SUPERSEDED_MINOR"
    SUPERSEDED_MAJOR = "SUPERSEDED_MAJOR"
