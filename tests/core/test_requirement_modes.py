from __future__ import annotations

import pytest

from candidatematch.core import RequirementMode, evaluate, required_threshold_passes
from candidatematch.schemas import RequirementLevel


@pytest.mark.parametrize(
    ("mode", "met", "failed", "minimum", "expected"),
    [
        (RequirementMode.EXPLICIT_THRESHOLD, 0, 0, 0, True),
        (RequirementMode.EXPLICIT_THRESHOLD, 2, 0, 0, True),
        (RequirementMode.EXPLICIT_THRESHOLD, 2, 1, 0, False),
        (RequirementMode.EXPLICIT_THRESHOLD, 1, 2, 1, True),
        (RequirementMode.EXPLICIT_THRESHOLD, 1, 2, 2, False),
        (RequirementMode.EXPLICIT_THRESHOLD, 0, 1, -1, False),
        (RequirementMode.IMPLICIT_SOFTENING, 0, 1, 0, True),
        (RequirementMode.IMPLICIT_SOFTENING, 0, 2, 0, False),
        (RequirementMode.IMPLICIT_SOFTENING, 1, 2, 0, True),
        (RequirementMode.IMPLICIT_SOFTENING, 0, 3, 5, False),
        (RequirementMode.SCORING_ONLY, 0, 4, 3, True),
    ],
)
def test_required_threshold_passes(mode, met, failed, minimum, expected):
    assert (
        required_threshold_passes(mode, met=met, failed=failed, min_required_met=minimum)
        is expected
    )


def test_legacy_softening_flag_maps_to_modes():
    assert RequirementMode.from_implicit_softening(True) is RequirementMode.IMPLICIT_SOFTENING
    assert RequirementMode.from_implicit_softening(False) is RequirementMode.EXPLICIT_THRESHOLD


@pytest.fixture
def half_met(make_candidate, make_criteria, make_requirement):
    candidate = make_candidate(personality=("kind",), interests=("hiking", "cooking"))
    criteria = make_criteria(
        trait_requirements=[
            make_requirement(RequirementLevel.REQUIRED, interests=("hiking",), hint="Hikes"),
            make_requirement(RequirementLevel.REQUIRED, interests=("gaming",), hint="Games"),
        ],
    )
    return candidate, criteria


def test_explicit_threshold_rejects_any_miss_by_default(half_met):
    result = evaluate(*half_met, RequirementMode.EXPLICIT_THRESHOLD)

    assert result.is_match is False
    assert result.met_requirements == ("Hikes",)
    assert result.failed_requirements == ("Games",)
    assert result.failure_reason == "Missing required trait: Games"


def test_explicit_threshold_honours_minimum(half_met):
    candidate, criteria = half_met
    criteria = criteria.model_copy(update={"min_required_met": 1})

    result = evaluate(candidate, criteria, RequirementMode.EXPLICIT_THRESHOLD)

    assert result.is_match is True
    # no required bonus outside scoring-only mode
    assert result.breakdown.required_bonus == 0.0
    assert result.breakdown.required_penalty == 0.0


def test_implicit_softening_needs_one_of_several(half_met):
    result = evaluate(*half_met, RequirementMode.IMPLICIT_SOFTENING)

    assert result.is_match is True
    assert result.score == pytest.approx(75.0)


def test_implicit_softening_ignores_single_requirement(
    make_candidate, make_criteria, make_requirement
):
    candidate = make_candidate(interests=("cooking",))
    criteria = make_criteria(
        trait_requirements=[
            make_requirement(RequirementLevel.REQUIRED, interests=("hiking",)),
        ],
    )

    assert evaluate(candidate, criteria, RequirementMode.IMPLICIT_SOFTENING).is_match is True
    assert evaluate(candidate, criteria, RequirementMode.EXPLICIT_THRESHOLD).is_match is False


def test_implicit_softening_rejects_when_none_met(
    make_candidate, make_criteria, make_requirement
):
    candidate = make_candidate(interests=("cooking",))
    criteria = make_criteria(
        trait_requirements=[
            make_requirement(RequirementLevel.REQUIRED, interests=("hiking",)),
            make_requirement(RequirementLevel.REQUIRED, interests=("gaming",)),
        ],
    )

    result = evaluate(candidate, criteria, RequirementMode.IMPLICIT_SOFTENING)

    assert result.required_check_failed is True


def test_scoring_only_turns_requirements_into_score(half_met):
    result = evaluate(*half_met, RequirementMode.SCORING_ONLY)

    assert result.is_match is True
    assert result.breakdown.interests_score == 50.0
    assert result.breakdown.required_bonus == 15.0
    assert result.breakdown.required_penalty == 10.0
    assert result.score == pytest.approx(50.0 + 25.0 + 15.0 - 10.0)


def test_scoring_only_still_enforces_hard_checks(
    make_candidate, make_criteria, make_requirement
):
    candidate = make_candidate(interests=("gaming",), red_flags=4)
    criteria = make_criteria(
        trait_requirements=[
            make_requirement(RequirementLevel.REQUIRED, interests=("hiking",)),
        ],
    )

    result = evaluate(candidate, criteria, RequirementMode.SCORING_ONLY)

    assert result.too_many_red_flags is True
    assert result.failed_requirements == ("(no hint)",)
