"""Check whether a new version continues an existing release history.

Resolution (deterministic):
1. No history: only the bootstrap versions are accepted.
2. Candidate major unknown: the overall latest release line is the reference.
3. Candidate minor unknown under a known major: the latest minor of that major is the reference.
4. A reference line with a newer minor (same major) or a newer major is superseded
   and may only receive backports, see RestrictionPolicy.

Everything is recomputed per check; a validator holds no mutable state.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from versionflow.codes import IncreaseKind, ResolutionCode, RestrictionPolicy
from .version import Version, coerce_version

logger = logging.getLogger(__name__)

BOOTSTRAP_VERSIONS: Tuple[Version, ...] = (
    Version.from_string("0.1.0"),
    Version.from_string("1.0.0-ALPHA1"),
    Version.from_string("1.0.0-BETA1"),
    Version.from_string("1.0.0"),
)

ReleaseLines = Mapping[int, Mapping[int, Version]]


@dataclass(frozen=True)
class ContinuityResult:
    """Result of a single continuity check."""
    candidate: Version
    accepted: bool
    possible_versions: Tuple[Version, ...]  # In candidate order, never empty
    resolution: ResolutionCode
    reference: Optional[Version] = None  # None only for BOOTSTRAP

    def __bool__(self) -> bool:
        return self.accepted


def arrange_release_lines(versions: Iterable[Version]) -> ReleaseLines:
    """Build the read-only major -> minor -> latest version mapping.

    Keys are ascending at both levels; duplicates within a (major, minor)
    line keep the greatest version.
    """
    lines: Dict[int, Dict[int, Version]] = {}
    for version in sorted(versions, key=lambda v: v.sort_key):
        lines.setdefault(version.major, {})[version.minor] = version

    return MappingProxyType({
        major: MappingProxyType(dict(sorted(minors.items())))
        for major, minors in sorted(lines.items())
    })


def _coerce_policy(policy: Union[RestrictionPolicy, str]) -> RestrictionPolicy:
    if isinstance(policy, RestrictionPolicy):
        return policy
    try:
        return RestrictionPolicy(str(policy).lower())
    except ValueError:
        accepted = '", "'.join(p.value for p in RestrictionPolicy)
        raise ValueError(f'Unknown restriction policy "{policy}", accepts "{accepted}".') from None


class ContinuityValidator:
    """Validates new versions against a fixed set of existing versions."""

    def __init__(
        self,
        versions: Iterable[Union[Version, str]] = (),
        policy: Union[RestrictionPolicy, str] = RestrictionPolicy.STRICT,
    ):
        self._versions: Tuple[Version, ...] = tuple(coerce_version(v) for v in versions)
        self._policy = _coerce_policy(policy)

    @property
    def versions(self) -> Tuple[Version, ...]:
        return self._versions

    @property
    def policy(self) -> RestrictionPolicy:
        return self._policy

    def is_continuous(self, candidate: Union[Version, str]) -> bool:
        return self.check(candidate).accepted

    def possible_versions(self, candidate: Union[Version, str]) -> Tuple[Version, ...]:
        """The versions that would have been accepted in place of `candidate`."""
        return self.check(candidate).possible_versions

    def check(self, candidate: Union[Version, str]) -> ContinuityResult:
        candidate = coerce_version(candidate)

        if not self._versions:
            return self._result(candidate, BOOTSTRAP_VERSIONS, ResolutionCode.BOOTSTRAP, None)

        lines = arrange_release_lines(self._versions)
        latest_major = max(lines)

        if candidate.major not in lines:
            minors = lines[latest_major]
            reference = minors[max(minors)]
            logger.debug("No %d.x releases, continuing from latest %s", candidate.major, reference)
            return self._result(candidate, reference.next_candidates(), ResolutionCode.LATEST_LINE, reference)

        minors = lines[candidate.major]
        latest_minor = max(minors)
        minor = candidate.minor if candidate.minor in minors else latest_minor
        reference = minors[minor]

        newer_minor = latest_minor > minor
        newer_major = latest_major > candidate.major

        if newer_minor or (newer_major and self._policy is RestrictionPolicy.STRICT):
            resolution = ResolutionCode.SUPERSEDED_MINOR if newer_minor else ResolutionCode.SUPERSEDED_MAJOR
            possible: Tuple[Version, ...] = (reference.increase(IncreaseKind.PATCH),)
        elif newer_major:
            resolution = ResolutionCode.SUPERSEDED_MAJOR
            possible = (reference.increase(IncreaseKind.PATCH), reference.increase(IncreaseKind.MINOR))
        else:
            resolution = ResolutionCode.OPEN_LINE
            possible = reference.next_candidates()

        logger.debug("Resolved %s against %s (%s)", candidate, reference, resolution.value)
        return self._result(candidate, possible, resolution, reference)

    @staticmethod
    def _result(
        candidate: Version,
        possible: Tuple[Version, ...],
        resolution: ResolutionCode,
        reference: Optional[Version],
    ) -> ContinuityResult:
        return ContinuityResult(
            candidate=candidate,
            accepted=candidate in possible,
            possible_versions=possible,
            resolution=resolution,
            reference=reference,
        )
