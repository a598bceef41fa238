"""Evaluation result value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .modes import RequirementMode


class FailureKind(str, Enum):
    NONE = "none"
    DEALBREAKER = "dealbreaker"
    GENDER_MISMATCH = "gender_mismatch"
    REQUIRED_CHECK_FAILED = "required_check_failed"
    TOO_MANY_RED_FLAGS = "too_many_red_flags"
    NOT_ENOUGH_GREEN_FLAGS = "not_enough_green_flags"


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """How a match score was assembled."""

    personality_score: float = 0.0
    interests_score: float = 0.0
    lifestyle_score: float = 0.0
    personality_weight: float = 0.0
    interests_weight: float = 0.0
    lifestyle_weight: float = 0.0
    preferred_bonus: float = 0.0
    avoid_penalty: float = 0.0
    required_bonus: float = 0.0
    required_penalty: float = 0.0
    age_penalty: float = 0.0

    @property
    def weighted_score(self) -> float:
        return (
            self.personality_score * self.personality_weight
            + self.interests_score * self.interests_weight
            + self.lifestyle_score * self.lifestyle_weight
        )


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Verdict for one candidate against one set of criteria.

    ``score`` is only meaningful when ``is_match`` is true; hard failures
    leave it at zero with an empty breakdown.
    """

    is_match: bool
    score: float = 0.0
    failure: FailureKind = FailureKind.NONE
    dealbreaker_trait: str | None = None
    age_mismatch: bool = False
    years_outside_age_range: int = 0
    red_flag_count: int = 0
    green_flag_count: int = 0
    met_requirements: tuple[str, ...] = ()
    failed_requirements: tuple[str, ...] = ()
    met_preferences: tuple[str, ...] = ()
    matched_avoids: tuple[str, ...] = ()
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    mode: RequirementMode = RequirementMode.EXPLICIT_THRESHOLD

    @property
    def has_dealbreaker(self) -> bool:
        return self.failure is FailureKind.DEALBREAKER

    @property
    def gender_mismatch(self) -> bool:
        return self.failure is FailureKind.GENDER_MISMATCH

    @property
    def required_check_failed(self) -> bool:
        return self.failure is FailureKind.REQUIRED_CHECK_FAILED

    @property
    def too_many_red_flags(self) -> bool:
        return self.failure is FailureKind.TOO_MANY_RED_FLAGS

    @property
    def not_enough_green_flags(self) -> bool:
        return self.failure is FailureKind.NOT_ENOUGH_GREEN_FLAGS

    @property
    def failure_reason(self) -> str | None:
        """Human-readable rejection reason, ``None`` for a match."""
        if self.is_match:
            return None
        if self.has_dealbreaker:
            return f"Dealbreaker: {self.dealbreaker_trait}"
        if self.gender_mismatch:
            return "Gender preference not met"
        if self.required_check_failed:
            missing = self.failed_requirements[0] if self.failed_requirements else "(unknown)"
            return f"Missing required trait: {missing}"
        if self.too_many_red_flags:
            return f"Too many red flags ({self.red_flag_count})"
        if self.not_enough_green_flags:
            return f"Not enough green flags ({self.green_flag_count})"
        return "Unknown"
