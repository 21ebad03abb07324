"""Version model with the release-workflow increment rules.

Workflow: alpha -> beta -> rc -> stable, one major/minor step at a time.

* 0.x releases have no stability distinction (always rendered as x.y.z)
* A pre-release (alpha, beta, rc) only exists for x.y.0
* Equality is defined by the canonical text, nothing else
"""

import re
from enum import IntEnum
from typing import Any, Tuple, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
    model_validator,
)

from versionflow.codes import IncreaseKind


class Stability(IntEnum):
    """Stability tier of a release. Higher means more stable."""

    ALPHA = 0
    BETA = 1
    RC = 2
    STABLE = 3

    @classmethod
    def from_name(cls, name: str) -> "Stability":
        """Resolve a tier by name, case-insensitive ('beta', 'RC', ...)."""
        return cls[name.upper()]


# Match most common version formats.
# No prefix or build-meta. For historic reasons the stability may be
# separated by a hyphen or dot, or not at all.
VERSION_REGEX = (
    r"(?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?"
    r"(?:[-.]?(?P<stability>beta|rc|alpha|stable)(?:[.-]?(?P<metaver>\d+))?)?"
)

_VERSION_PATTERN = re.compile(r"v?" + VERSION_REGEX, re.IGNORECASE)


class VersionParseError(ValueError):
    """A version literal did not match the accepted formats."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f'Unable to parse version "{text}" Expects an SemVer compatible version without build-metadata. '
            'Either "1.0.0", "1.0", "v1.0" or "1.0.0-beta1", "1.0.0-beta-1"'
        )


class Version(BaseModel):
    """A single immutable version.

    Construct through keyword fields, Version.create() or parse_version().
    For major 0 the stability is always ALPHA, whatever was requested.
    """

    major: int = Field(..., ge=0)
    minor: int = Field(..., ge=0)
    patch: int = Field(0, ge=0)
    stability: Stability = Field(Stability.STABLE, validate_default=True)
    metaver: int = Field(0, ge=0, description="Sequence within the stability tier (the 2 in beta2)")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("stability")
    @classmethod
    def force_alpha_before_first_major(cls, v: Stability, info: ValidationInfo) -> Stability:
        """Pre 1.0 releases are not distinguished by stability."""
        if info.data.get("major") == 0:
            return Stability.ALPHA
        return v

    @model_validator(mode="before")
    @classmethod
    def drop_canonical_text(cls, data: Any) -> Any:
        """canonical_text is derived; accept it in input so dumps validate back."""
        if isinstance(data, dict) and "canonical_text" in data:
            data = {k: v for k, v in data.items() if k != "canonical_text"}
        return data

    @model_validator(mode="after")
    def check_stable_metaver(self) -> "Version":
        if self.stability == Stability.STABLE and self.metaver > 0:
            raise ValueError("Meta version of the stability flag cannot be set for stable.")
        return self

    @classmethod
    def create(
        cls,
        major: int,
        minor: int,
        patch: int = 0,
        stability: Stability = Stability.STABLE,
        metaver: int = 0,
    ) -> "Version":
        """Construction factory; raises ValueError for stable with a meta version."""
        return cls(major=major, minor=minor, patch=patch, stability=stability, metaver=metaver)

    @classmethod
    def from_string(cls, text: str) -> "Version":
        return parse_version(text)

    @computed_field
    @property
    def canonical_text(self) -> str:
        """Normalized rendering, e.g. '1.0.0' or '1.0.0-BETA2'."""
        if self.major > 0 and self.stability < Stability.STABLE:
            return f"{self.major}.{self.minor}.{self.patch}-{self.stability.name}{self.metaver}"
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def sort_key(self) -> Tuple[int, int, int, int, int]:
        """Ordering of the canonical texts as a version comparison would order them."""
        if self.major == 0:
            # 0.x renders without a stability suffix
            return (0, self.minor, self.patch, Stability.STABLE, 0)
        return (self.major, self.minor, self.patch, int(self.stability), self.metaver)

    def __str__(self) -> str:
        return self.canonical_text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.canonical_text == other.canonical_text

    def __hash__(self) -> int:
        return hash(self.canonical_text)

    def equal_to(self, other: "Version") -> bool:
        return self.canonical_text == other.canonical_text

    def next_candidates(self) -> Tuple["Version", ...]:
        """Return every version that may be released directly after this one.

        * 0.1.0 -> 0.1.1, 0.2.0, 1.0.0-BETA1, 1.0.0
        * 1.0.0 -> 1.0.1, 1.1.0-BETA1, 1.1.0, 2.0.0-ALPHA1, 2.0.0-BETA1, 2.0.0
        * 1.1.0 -> 1.1.1, 1.2.0-BETA1, 1.2.0, 2.0.0-ALPHA1, 2.0.0-BETA1, 2.0.0
        * 1.0.0-BETA1 -> 1.0.0-BETA2, 1.0.0-RC1, 1.0.0 (no minor or major increases)
        * 1.0.0-ALPHA1 -> 1.0.0-ALPHA2, 1.0.0-BETA1, 1.0.0-RC1, 1.0.0
        """
        # Pre first-stable: 0.x alpha/beta/rc releases are not considered.
        # RC usually follows beta, but the first major may jump straight to beta or stable.
        if self.major == 0:
            return (
                self.increase(IncreaseKind.PATCH),
                self.increase(IncreaseKind.MINOR),
                Version.create(1, 0, 0, Stability.BETA, 1),
                Version.create(1, 0, 0),
            )

        # Latest is unstable, may only increase stability or metaver.
        # 1.0.1-BETA1 is not accepted, a pre-release only applies for x.y.0
        if self.stability < Stability.STABLE:
            candidates = [Version.create(self.major, self.minor, 0, self.stability, self.metaver + 1)]
            candidates.extend(
                Version.create(self.major, self.minor, 0, tier, 1)
                for tier in Stability
                if self.stability < tier < Stability.STABLE
            )
            candidates.append(Version.create(self.major, self.minor, 0))
            return tuple(candidates)

        # Stable: a patch, a new minor (beta or stable) or a new major; RC is excluded.
        return (
            self.increase(IncreaseKind.PATCH),
            self.increase(IncreaseKind.BETA),
            self.increase(IncreaseKind.MINOR),
            Version.create(self.major + 1, 0, 0, Stability.ALPHA, 1),
            Version.create(self.major + 1, 0, 0, Stability.BETA, 1),
            Version.create(self.major + 1, 0, 0),
        )

    def increase(self, kind: Union[IncreaseKind, str]) -> "Version":
        """Return the version increased by `kind`.

        Note:
        * 'major' on a pre-release produces the stable release of *that* major.
        * 'stable' on a stable release increases the minor version.
        * 'patch' on a counted pre-release increases the metaver instead.

        Raises:
            ValueError: kind is not one of IncreaseKind.
        """
        kind = _coerce_kind(kind)

        if kind is IncreaseKind.PATCH:
            if self.major > 0 and self.metaver > 0:
                return self._next_minor_or_meta()
            return Version.create(self.major, self.minor, self.patch + 1)

        if kind is IncreaseKind.MINOR:
            return Version.create(self.major, self.minor + 1, 0)

        if kind is IncreaseKind.MAJOR:
            if self.stability < Stability.STABLE:
                return Version.create(max(self.major, 1), 0, 0)
            return Version.create(self.major + 1, 0, 0)

        if kind in (IncreaseKind.ALPHA, IncreaseKind.BETA, IncreaseKind.RC):
            return self._increase_tier(Stability.from_name(kind.value))

        if kind is IncreaseKind.STABLE:
            return self._increase_stable()

        return self._next_minor_or_meta()

    def _next_minor_or_meta(self) -> "Version":
        if self.major > 0 and self.stability < Stability.STABLE:
            return Version.create(self.major, self.minor, self.patch, self.stability, self.metaver + 1)
        return Version.create(self.major, self.minor + 1, 0)

    def _increase_tier(self, tier: Stability) -> "Version":
        if self.stability == tier:
            return Version.create(self.major, self.minor, 0, tier, self.metaver + 1)

        if tier > self.stability:
            return Version.create(self.major, self.minor, 0, tier, 1)

        # Lower stability than current, opens a new minor.
        return Version.create(self.major, self.minor + 1, 0, tier, 1)

    def _increase_stable(self) -> "Version":
        if self.stability == Stability.STABLE:
            return Version.create(self.major, self.minor + 1, 0)

        if self.major == 0:
            return Version.create(1, 0, 0)

        return Version.create(self.major, self.minor, 0)


def _coerce_kind(kind: Union[IncreaseKind, str]) -> IncreaseKind:
    if isinstance(kind, IncreaseKind):
        return kind
    try:
        return IncreaseKind(str(kind).lower())
    except ValueError:
        accepted = '", "'.join(k.value for k in IncreaseKind)
        raise ValueError(f'Unknown stability "{kind}", accepts "{accepted}".') from None


def parse_version(text: str) -> Version:
    """Parse a version literal such as 'v1.0', '1.0.0-beta-5' or '1.2.3'.

    Patch defaults to 0, stability to stable and metaver to 0.

    Raises:
        VersionParseError: text is not a supported version literal.
        ValueError: stable with a meta version ('1.0.0-stable-5').
    """
    match = _VERSION_PATTERN.fullmatch(text.strip())
    if match is None:
        raise VersionParseError(text)

    return Version.create(
        int(match.group("major")),
        int(match.group("minor")),
        int(match.group("patch") or 0),
        Stability.from_name(match.group("stability") or "stable"),
        int(match.group("metaver") or 0),
    )


def coerce_version(value: Union[Version, str]) -> Version:
    """Accept a Version or a version literal."""
    if isinstance(value, Version):
        return value
    return parse_version(value)
