"""Core matching engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .decisions import (
    CandidateDecision,
    DecisionOutcome,
    DecisionRecord,
    DecisionTally,
    classify,
    record_decision,
)
from .evaluation import (
    MatchEvaluator,
    ScoringConfig,
    evaluate,
    evaluate_for_client,
)
from .modes import RequirementMode, required_threshold_passes
from .overlap import TraitCategory, category_score
from .result import EvaluationResult, FailureKind, ScoreBreakdown

__all__ = [
    "CandidateDecision",
    "DecisionOutcome",
    "DecisionRecord",
    "DecisionTally",
    "EvaluationResult",
    "FailureKind",
    "MatchEvaluator",
    "RequirementMode",
    "ScoreBreakdown",
    "ScoringConfig",
    "TraitCategory",
    "category_score",
    "classify",
    "evaluate",
    "evaluate_for_client",
    "record_decision",
    "required_threshold_passes",
]
