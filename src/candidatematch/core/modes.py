"""Policies for how Required trait requirements affect a verdict."""

from __future__ import annotations

from enum import Enum


class RequirementMode(str, Enum):
    """How unmet Required requirements are treated.

    ``EXPLICIT_THRESHOLD``
        Honour ``MatchCriteria.min_required_met``; zero or less means every
        Required requirement must be met.
    ``IMPLICIT_SOFTENING``
        A lone Required requirement never rejects; with two or more, at
        least one must be met.
    ``SCORING_ONLY``
        Required requirements never reject and only move the score.
    """

    EXPLICIT_THRESHOLD = "explicit_threshold"
    IMPLICIT_SOFTENING = "implicit_softening"
    SCORING_ONLY = "scoring_only"

    @classmethod
    def from_implicit_softening(cls, enabled: bool) -> "RequirementMode":
        """Map the legacy on/off softening switch onto a mode."""
        return cls.IMPLICIT_SOFTENING if enabled else cls.EXPLICIT_THRESHOLD


def required_threshold_passes(
    mode: RequirementMode,
    *,
    met: int,
    failed: int,
    min_required_met: int,
) -> bool:
    total = met + failed
    if total == 0:
        return True

    if mode is RequirementMode.SCORING_ONLY:
        return True

    if mode is RequirementMode.IMPLICIT_SOFTENING:
        if total == 1:
            return True
        return met >= 1

    if min_required_met <= 0:
        return failed == 0
    return met >= min_required_met
