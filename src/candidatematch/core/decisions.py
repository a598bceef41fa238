"""Classification of player accept/reject decisions against the evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .result import EvaluationResult


class CandidateDecision(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class DecisionOutcome(str, Enum):
    PENDING = "pending"
    TRUE_POSITIVE = "true_positive"
    FALSE_POSITIVE = "false_positive"
    TRUE_NEGATIVE = "true_negative"
    FALSE_NEGATIVE = "false_negative"


def classify(decision: CandidateDecision, is_match: bool) -> DecisionOutcome:
    if decision is CandidateDecision.ACCEPTED:
        return DecisionOutcome.TRUE_POSITIVE if is_match else DecisionOutcome.FALSE_POSITIVE
    if decision is CandidateDecision.REJECTED:
        return DecisionOutcome.FALSE_NEGATIVE if is_match else DecisionOutcome.TRUE_NEGATIVE
    return DecisionOutcome.PENDING


@dataclass(frozen=True, slots=True)
class DecisionRecord:
    """A decision paired with the evaluation it is judged against."""

    candidate_id: str
    decision: CandidateDecision
    was_actual_match: bool
    match_score: float
    evaluation: EvaluationResult | None = None

    @property
    def outcome(self) -> DecisionOutcome:
        return classify(self.decision, self.was_actual_match)

    @property
    def is_correct(self) -> bool:
        return self.outcome in (DecisionOutcome.TRUE_POSITIVE, DecisionOutcome.TRUE_NEGATIVE)


def record_decision(
    candidate_id: str,
    decision: CandidateDecision | str,
    evaluation: EvaluationResult | None,
) -> DecisionRecord:
    """Build a decision record.

    A missing evaluation (no criteria to judge against) counts as a
    non-match with a zero score.
    """
    decision = CandidateDecision(decision)
    if decision is CandidateDecision.PENDING:
        raise ValueError("Cannot record a pending decision.")
    was_match = evaluation.is_match if evaluation is not None else False
    score = evaluation.score if evaluation is not None else 0.0
    return DecisionRecord(
        candidate_id=candidate_id,
        decision=decision,
        was_actual_match=was_match,
        match_score=score,
        evaluation=evaluation,
    )


@dataclass
class DecisionTally:
    """Running confusion-matrix counts for a session."""

    counts: dict[DecisionOutcome, int] = field(
        default_factory=lambda: {
            outcome: 0 for outcome in DecisionOutcome if outcome is not DecisionOutcome.PENDING
        }
    )

    def add(self, record: DecisionRecord) -> DecisionOutcome:
        outcome = record.outcome
        if outcome is not DecisionOutcome.PENDING:
            self.counts[outcome] += 1
        return outcome

    def reset(self) -> None:
        for outcome in self.counts:
            self.counts[outcome] = 0

    @property
    def total_correct(self) -> int:
        return self.counts[DecisionOutcome.TRUE_POSITIVE] + self.counts[DecisionOutcome.TRUE_NEGATIVE]

    @property
    def total_incorrect(self) -> int:
        return self.counts[DecisionOutcome.FALSE_POSITIVE] + self.counts[DecisionOutcome.FALSE_NEGATIVE]

    @property
    def total_decisions(self) -> int:
        return self.total_correct + self.total_incorrect

    @property
    def accuracy(self) -> float:
        """Percentage of correct decisions; zero before any decision."""
        if self.total_decisions == 0:
            return 0.0
        return self.total_correct / self.total_decisions * 100.0
