"""Per-category trait overlap scoring."""

from __future__ import annotations

from enum import Enum
from typing import Collection, Iterable

from ..schemas import (
    CandidateProfile,
    MatchCriteria,
    RequirementLevel,
    TraitRecord,
    TraitRequirement,
)

NEUTRAL_CATEGORY_SCORE = 50.0


class TraitCategory(str, Enum):
    """The three trait collections, in dealbreaker scan order."""

    PERSONALITY = "personality"
    INTERESTS = "interests"
    LIFESTYLE = "lifestyle"

    def candidate_traits(self, profile: CandidateProfile) -> tuple[TraitRecord, ...]:
        if self is TraitCategory.PERSONALITY:
            return profile.personality_traits
        if self is TraitCategory.INTERESTS:
            return profile.interests
        return profile.lifestyle_traits

    def acceptable_traits(self, requirement: TraitRequirement) -> tuple[TraitRecord, ...]:
        if self is TraitCategory.PERSONALITY:
            return requirement.acceptable_personality_traits
        if self is TraitCategory.INTERESTS:
            return requirement.acceptable_interests
        return requirement.acceptable_lifestyle_traits

    def dealbreakers(self, criteria: MatchCriteria) -> tuple[TraitRecord, ...]:
        if self is TraitCategory.PERSONALITY:
            return criteria.dealbreaker_personality_traits
        if self is TraitCategory.INTERESTS:
            return criteria.dealbreaker_interests
        return criteria.dealbreaker_lifestyle_traits

    def weight(self, criteria: MatchCriteria) -> float:
        if self is TraitCategory.PERSONALITY:
            return criteria.personality_weight
        if self is TraitCategory.INTERESTS:
            return criteria.interests_weight
        return criteria.lifestyle_weight


def holds_any(held: Collection[TraitRecord], wanted: Iterable[TraitRecord]) -> bool:
    return any(trait in held for trait in wanted)


def category_score(
    candidate_traits: Collection[TraitRecord],
    requirements: Iterable[TraitRequirement],
    category: TraitCategory,
) -> float:
    """Percentage of relevant requirements the candidate meets in ``category``.

    Avoid requirements and requirements listing nothing for ``category`` are
    not relevant. Missing signal (no candidate traits, nothing relevant)
    scores the neutral midpoint rather than zero.
    """
    if not candidate_traits:
        return NEUTRAL_CATEGORY_SCORE

    held = frozenset(candidate_traits)
    relevant = 0
    met = 0
    for requirement in requirements:
        if requirement.level is RequirementLevel.AVOID:
            continue
        acceptable = category.acceptable_traits(requirement)
        if not acceptable:
            continue
        relevant += 1
        if holds_any(held, acceptable):
            met += 1

    if relevant == 0:
        return NEUTRAL_CATEGORY_SCORE
    return met / relevant * 100.0
