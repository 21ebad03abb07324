"""Tests for the continuity validator."""

import logging

import pytest

from versionflow.codes import ResolutionCode, RestrictionPolicy
from versionflow.kernel.continuity import (
    BOOTSTRAP_VERSIONS,
    ContinuityValidator,
    arrange_release_lines,
)
from versionflow.kernel.version import parse_version

BOOTSTRAP = ["0.1.0", "1.0.0-ALPHA1", "1.0.0-BETA1", "1.0.0"]
UNSTABLE_LINE = ["0.2.1", "0.3.0", "1.0.0-BETA1", "1.0.0"]
STABLE_1_1 = ["1.1.1", "1.2.0-BETA1", "1.2.0", "2.0.0-ALPHA1", "2.0.0-BETA1", "2.0.0"]


def _possible(result):
    return [str(v) for v in result.possible_versions]


@pytest.mark.parametrize("new", ["0.1.0", "1.0-ALPHA1", "1.0-BETA1", "1.0"])
def test_accepts_bootstrap_version_without_history(new):
    result = ContinuityValidator().check(new)

    assert result.accepted is True
    assert _possible(result) == BOOTSTRAP
    assert result.resolution is ResolutionCode.BOOTSTRAP
    assert result.reference is None


@pytest.mark.parametrize("new", ["0.2.0", "2.0-ALPHA1", "2.0-BETA1", "1.1", "2.0"])
def test_rejects_non_bootstrap_version_without_history(new):
    result = ContinuityValidator().check(new)

    assert result.accepted is False
    assert _possible(result) == BOOTSTRAP


def test_bootstrap_set():
    assert [str(v) for v in BOOTSTRAP_VERSIONS] == BOOTSTRAP


@pytest.mark.parametrize(
    "new,existing,possible",
    [
        ("0.3", ["0.2", "0.1"], UNSTABLE_LINE),
        ("0.2.1", ["0.2", "0.1"], UNSTABLE_LINE),
        ("1.0", ["0.2", "0.1"], UNSTABLE_LINE),
        ("0.1.1", ["0.2", "0.1"], ["0.1.1"]),
        ("1.0-BETA1", ["0.2", "0.1"], UNSTABLE_LINE),
        ("1.2", ["1.0", "1.1"], STABLE_1_1),
        ("1.1.1", ["1.1", "2.0"], ["1.1.1"]),
        ("1.0.1", ["1.0", "1.1", "2.0"], ["1.0.1"]),
        ("3.5.0", ["v3.5-beta1", "v3.5-beta2"], ["3.5.0-BETA3", "3.5.0-RC1", "3.5.0"]),
    ],
)
def test_accepts_continuous_version(new, existing, possible, versions):
    validator = ContinuityValidator(versions(*existing))
    result = validator.check(parse_version(new))

    assert result.accepted is True, f"Expected one of {_possible(result)}"
    assert _possible(result) == possible


@pytest.mark.parametrize(
    "new,existing,possible",
    [
        ("0.5", ["0.2", "0.1"], UNSTABLE_LINE),
        ("0.2.4", ["0.2", "0.1"], UNSTABLE_LINE),
        ("2.0", ["0.2", "0.1"], UNSTABLE_LINE),
        ("0.1.5", ["0.2", "0.1"], ["0.1.1"]),
        ("1.0-BETA2", ["0.2", "0.1"], UNSTABLE_LINE),
        ("1.0-ALPHA1", ["0.2", "0.1"], UNSTABLE_LINE),
        ("1.3", ["1.0", "1.1"], STABLE_1_1),
        ("1.2.0", ["1.1", "2.0"], ["1.1.1"]),
        ("3.6", ["v3.5-beta1"], ["3.5.0-BETA2", "3.5.0-RC1", "3.5.0"]),
        ("3.6", ["v3.4", "v3.7"], ["3.7.1", "3.8.0-BETA1", "3.8.0", "4.0.0-ALPHA1", "4.0.0-BETA1", "4.0.0"]),
    ],
)
def test_rejects_non_continuous_version(new, existing, possible, versions):
    validator = ContinuityValidator(versions(*existing))
    result = validator.check(parse_version(new))

    assert result.accepted is False
    assert _possible(result) == possible


@pytest.mark.parametrize(
    "new,existing,expected",
    [
        ("0.3", ["0.2", "0.1"], ResolutionCode.OPEN_LINE),
        ("1.0", ["0.2", "0.1"], ResolutionCode.LATEST_LINE),
        ("0.1.1", ["0.2", "0.1"], ResolutionCode.SUPERSEDED_MINOR),
        ("1.1.1", ["1.1", "2.0"], ResolutionCode.SUPERSEDED_MAJOR),
        ("1.0.1", ["1.0", "1.1", "2.0"], ResolutionCode.SUPERSEDED_MINOR),
    ],
)
def test_resolution_codes(new, existing, expected):
    assert ContinuityValidator(existing).check(new).resolution is expected


def test_superseded_line_only_accepts_its_patch_successor():
    validator = ContinuityValidator(["1.0.0", "1.0.1", "1.1.0"])

    assert validator.is_continuous("1.0.2")
    for candidate in ["1.0.3", "1.0.1", "1.0.0-rc1"]:
        assert not validator.is_continuous(candidate)
    assert [str(v) for v in validator.possible_versions("1.0.9")] == ["1.0.2"]


def test_tiered_policy_allows_minor_when_only_a_newer_major_exists():
    validator = ContinuityValidator(["1.1", "2.0"], policy=RestrictionPolicy.TIERED)
    result = validator.check("1.2.0")

    assert result.accepted is True
    assert _possible(result) == ["1.1.1", "1.2.0"]
    assert result.resolution is ResolutionCode.SUPERSEDED_MAJOR


def test_tiered_policy_still_restricts_newer_minor_to_patch():
    validator = ContinuityValidator(["1.0", "1.1", "2.0"], policy="tiered")
    result = validator.check("1.0.1")

    assert result.accepted is True
    assert _possible(result) == ["1.0.1"]
    assert result.resolution is ResolutionCode.SUPERSEDED_MINOR


def test_strict_is_default_policy():
    validator = ContinuityValidator(["1.1", "2.0"])

    assert validator.policy is RestrictionPolicy.STRICT
    assert not validator.is_continuous("1.2.0")


def test_unknown_policy_rejected():
    with pytest.raises(ValueError, match='Unknown restriction policy "loose", accepts "strict", "tiered".'):
        ContinuityValidator([], policy="loose")


@pytest.mark.parametrize(
    "policy,expected",
    [
        ("STRICT", RestrictionPolicy.STRICT),
        ("Tiered", RestrictionPolicy.TIERED),
        (RestrictionPolicy.TIERED, RestrictionPolicy.TIERED),
    ],
)
def test_policy_names_are_case_insensitive(policy, expected):
    assert ContinuityValidator(["1.1", "2.0"], policy=policy).policy is expected


def test_greatest_version_per_line_is_the_reference():
    validator = ContinuityValidator(["1.0.1", "1.0.0-beta1", "1.0.0"])
    result = validator.check("1.0.2")

    assert result.accepted is True
    assert str(result.reference) == "1.0.1"


def test_metaver_ordering_is_numeric():
    validator = ContinuityValidator(["1.0.0-beta10", "1.0.0-beta2"])

    assert validator.is_continuous("1.0.0-beta11")
    assert not validator.is_continuous("1.0.0-beta3")


def test_input_order_does_not_matter():
    existing = ["0.1", "1.0-beta1", "1.0", "1.1", "1.0.1"]
    forward = ContinuityValidator(existing).check("1.0.2")
    backward = ContinuityValidator(list(reversed(existing))).check("1.0.2")

    assert forward.accepted is True
    assert forward == backward


def test_check_is_repeatable():
    validator = ContinuityValidator(["1.1", "2.0"])

    first = validator.check("1.1.1")
    validator.check("2.1.0")
    assert validator.check("1.1.1") == first
    assert bool(first) is True


def test_arrange_release_lines(versions):
    lines = arrange_release_lines(versions("2.0", "1.1.2", "1.1", "1.0", "0.3", "1.1.1"))

    assert list(lines) == [0, 1, 2]
    assert list(lines[1]) == [0, 1]
    assert str(lines[1][1]) == "1.1.2"
    assert str(lines[0][3]) == "0.3.0"


def test_release_lines_are_read_only(versions):
    lines = arrange_release_lines(versions("1.0"))

    with pytest.raises(TypeError):
        lines[2] = {}
    with pytest.raises(TypeError):
        lines[1][5] = parse_version("1.5")


def test_resolution_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="versionflow.kernel.continuity")
    ContinuityValidator(["1.1", "2.0"]).check("1.1.1")

    assert "Resolved 1.1.1 against 1.1.0 (SUPERSEDED_MAJOR)" in caplog.text
