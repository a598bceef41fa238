"""Candidate evaluation engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..schemas import (
    CandidateProfile,
    ClientProfile,
    Gender,
    MatchCriteria,
    RequirementLevel,
)
from .modes import RequirementMode, required_threshold_passes
from .overlap import TraitCategory, category_score, holds_any
from .result import EvaluationResult, FailureKind, ScoreBreakdown


@dataclass(frozen=True)
class ScoringConfig:
    """Constants of the match score formula."""

    base_score: float = 50.0
    weighted_factor: float = 0.5
    preferred_bonus: float = 5.0
    avoid_penalty: float = 10.0
    required_met_bonus: float = 15.0
    required_failed_penalty: float = 10.0
    age_penalty_per_year: float = 3.0
    min_score: float = 0.0
    max_score: float = 100.0


@dataclass
class _RequirementTally:
    met_requirements: list[str] = field(default_factory=list)
    failed_requirements: list[str] = field(default_factory=list)
    met_preferences: list[str] = field(default_factory=list)
    matched_avoids: list[str] = field(default_factory=list)


class MatchEvaluator:
    """Evaluate candidates against match criteria.

    The evaluator holds only immutable configuration, so a single instance
    can be shared freely. ``mode`` passed to :meth:`evaluate` wins over the
    one bound at construction.
    """

    DEFAULT_MODE = RequirementMode.EXPLICIT_THRESHOLD

    def __init__(
        self,
        *,
        mode: RequirementMode | str | None = None,
        scoring: ScoringConfig | None = None,
    ) -> None:
        self._mode = RequirementMode(mode) if mode is not None else self.DEFAULT_MODE
        self._scoring = scoring or ScoringConfig()

    @property
    def mode(self) -> RequirementMode:
        return self._mode

    def evaluate(
        self,
        candidate: CandidateProfile,
        criteria: MatchCriteria,
        *,
        mode: RequirementMode | str | None = None,
    ) -> EvaluationResult:
        if not isinstance(candidate, CandidateProfile):
            raise TypeError(
                f"candidate must be a CandidateProfile, got {type(candidate).__name__}"
            )
        if not isinstance(criteria, MatchCriteria):
            raise TypeError(
                f"criteria must be a MatchCriteria, got {type(criteria).__name__}"
            )
        active_mode = RequirementMode(mode) if mode is not None else self._mode

        if not self._gender_ok(candidate.gender, criteria.acceptable_genders):
            return EvaluationResult(
                is_match=False,
                failure=FailureKind.GENDER_MISMATCH,
                mode=active_mode,
            )

        years_outside = self._years_outside_range(
            candidate.age, criteria.min_age, criteria.max_age
        )
        age_fields = {
            "age_mismatch": years_outside > 0,
            "years_outside_age_range": years_outside,
        }

        dealbreaker = self._find_dealbreaker(candidate, criteria)
        if dealbreaker is not None:
            return EvaluationResult(
                is_match=False,
                failure=FailureKind.DEALBREAKER,
                dealbreaker_trait=dealbreaker,
                mode=active_mode,
                **age_fields,
            )

        tally = self._evaluate_requirements(candidate, criteria)
        requirement_fields = {
            "met_requirements": tuple(tally.met_requirements),
            "failed_requirements": tuple(tally.failed_requirements),
            "met_preferences": tuple(tally.met_preferences),
            "matched_avoids": tuple(tally.matched_avoids),
        }

        if not required_threshold_passes(
            active_mode,
            met=len(tally.met_requirements),
            failed=len(tally.failed_requirements),
            min_required_met=criteria.min_required_met,
        ):
            return EvaluationResult(
                is_match=False,
                failure=FailureKind.REQUIRED_CHECK_FAILED,
                mode=active_mode,
                **age_fields,
                **requirement_fields,
            )

        red_flags, green_flags = self._count_flags(candidate)
        flag_fields = {"red_flag_count": red_flags, "green_flag_count": green_flags}

        if red_flags > criteria.max_red_flags:
            return EvaluationResult(
                is_match=False,
                failure=FailureKind.TOO_MANY_RED_FLAGS,
                mode=active_mode,
                **age_fields,
                **requirement_fields,
                **flag_fields,
            )
        if green_flags < criteria.min_green_flags:
            return EvaluationResult(
                is_match=False,
                failure=FailureKind.NOT_ENOUGH_GREEN_FLAGS,
                mode=active_mode,
                **age_fields,
                **requirement_fields,
                **flag_fields,
            )

        breakdown = self._build_breakdown(
            candidate, criteria, tally, years_outside, active_mode
        )
        return EvaluationResult(
            is_match=True,
            score=self._final_score(breakdown),
            breakdown=breakdown,
            mode=active_mode,
            **age_fields,
            **requirement_fields,
            **flag_fields,
        )

    def evaluate_for_client(
        self,
        candidate: CandidateProfile,
        client: ClientProfile,
        *,
        mode: RequirementMode | str | None = None,
    ) -> EvaluationResult:
        """Evaluate against a client's criteria; no criteria accepts anyone."""
        if client.match_criteria is None:
            active_mode = RequirementMode(mode) if mode is not None else self._mode
            return EvaluationResult(
                is_match=True,
                score=self._scoring.base_score,
                mode=active_mode,
            )
        return self.evaluate(candidate, client.match_criteria, mode=mode)

    @staticmethod
    def _gender_ok(gender: Gender, acceptable: tuple[Gender, ...]) -> bool:
        if not acceptable:
            return True
        return gender in acceptable

    @staticmethod
    def _years_outside_range(age: int, min_age: int, max_age: int) -> int:
        return max(0, min_age - age, age - max_age)

    @staticmethod
    def _find_dealbreaker(
        candidate: CandidateProfile,
        criteria: MatchCriteria,
    ) -> str | None:
        # Category order is a fixed tie-break: personality, interests, lifestyle.
        for category in TraitCategory:
            held = frozenset(category.candidate_traits(candidate))
            for dealbreaker in category.dealbreakers(criteria):
                if dealbreaker in held:
                    return dealbreaker.display_name
        return None

    @staticmethod
    def _evaluate_requirements(
        candidate: CandidateProfile,
        criteria: MatchCriteria,
    ) -> _RequirementTally:
        held = {
            category: frozenset(category.candidate_traits(candidate))
            for category in TraitCategory
        }
        tally = _RequirementTally()
        for requirement in criteria.trait_requirements:
            is_met = any(
                holds_any(held[category], category.acceptable_traits(requirement))
                for category in TraitCategory
            )
            hint = requirement.hint_text
            if requirement.level is RequirementLevel.REQUIRED:
                if is_met:
                    tally.met_requirements.append(hint)
                else:
                    tally.failed_requirements.append(hint)
            elif requirement.level is RequirementLevel.PREFERRED:
                if is_met:
                    tally.met_preferences.append(hint)
            elif is_met:
                tally.matched_avoids.append(hint)
        return tally

    @staticmethod
    def _count_flags(candidate: CandidateProfile) -> tuple[int, int]:
        red = sum(1 for post in candidate.guaranteed_posts if post.is_red_flag)
        green = sum(1 for post in candidate.guaranteed_posts if post.is_green_flag)
        return red, green

    def _build_breakdown(
        self,
        candidate: CandidateProfile,
        criteria: MatchCriteria,
        tally: _RequirementTally,
        years_outside: int,
        mode: RequirementMode,
    ) -> ScoreBreakdown:
        scoring = self._scoring
        scores = {
            category: category_score(
                category.candidate_traits(candidate),
                criteria.trait_requirements,
                category,
            )
            for category in TraitCategory
        }

        required_bonus = 0.0
        required_penalty = 0.0
        if mode is RequirementMode.SCORING_ONLY:
            required_bonus = len(tally.met_requirements) * scoring.required_met_bonus
            required_penalty = (
                len(tally.failed_requirements) * scoring.required_failed_penalty
            )

        return ScoreBreakdown(
            personality_score=scores[TraitCategory.PERSONALITY],
            interests_score=scores[TraitCategory.INTERESTS],
            lifestyle_score=scores[TraitCategory.LIFESTYLE],
            personality_weight=TraitCategory.PERSONALITY.weight(criteria),
            interests_weight=TraitCategory.INTERESTS.weight(criteria),
            lifestyle_weight=TraitCategory.LIFESTYLE.weight(criteria),
            preferred_bonus=len(tally.met_preferences) * scoring.preferred_bonus,
            avoid_penalty=len(tally.matched_avoids) * scoring.avoid_penalty,
            required_bonus=required_bonus,
            required_penalty=required_penalty,
            age_penalty=years_outside * scoring.age_penalty_per_year,
        )

    def _final_score(self, breakdown: ScoreBreakdown) -> float:
        scoring = self._scoring
        score = (
            scoring.base_score
            + breakdown.weighted_score * scoring.weighted_factor
            + breakdown.preferred_bonus
            - breakdown.avoid_penalty
            + breakdown.required_bonus
            - breakdown.required_penalty
            - breakdown.age_penalty
        )
        return min(max(score, scoring.min_score), scoring.max_score)


_DEFAULT_EVALUATOR = MatchEvaluator()


def evaluate(
    candidate: CandidateProfile,
    criteria: MatchCriteria,
    mode: RequirementMode | str = RequirementMode.EXPLICIT_THRESHOLD,
) -> EvaluationResult:
    """Evaluate ``candidate`` against ``criteria`` with default scoring."""
    return _DEFAULT_EVALUATOR.evaluate(candidate, criteria, mode=mode)


def evaluate_for_client(
    candidate: CandidateProfile,
    client: ClientProfile,
    mode: RequirementMode | str = RequirementMode.EXPLICIT_THRESHOLD,
) -> EvaluationResult:
    return _DEFAULT_EVALUATOR.evaluate_for_client(candidate, client, mode=mode)
