"""Client match criteria schemas."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from .profile import (
    Gender,
    Interests,
    LifestyleTraits,
    PersonalityArchetype,
    PersonalityTraits,
    empty_if_none,
)


class RequirementLevel(str, Enum):
    REQUIRED = "required"
    PREFERRED = "preferred"
    AVOID = "avoid"


class NarrativeHintCollection(BaseModel):
    """Player-facing hints describing a requirement without naming traits."""

    key: str
    hints: Annotated[tuple[str, ...], BeforeValidator(empty_if_none)] = ()
    related_interests: tuple[str, ...] = ()
    related_personality_traits: tuple[str, ...] = ()
    related_lifestyle_traits: tuple[str, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    def display_hint(self) -> str:
        """Return the hint shown for this collection; stable across calls."""
        if not self.hints:
            return "???"
        return self.hints[0]


class TraitRequirement(BaseModel):
    """A requirement met by holding any one of the acceptable traits."""

    level: RequirementLevel = RequirementLevel.PREFERRED
    acceptable_personality_traits: PersonalityTraits = ()
    acceptable_interests: Interests = ()
    acceptable_lifestyle_traits: LifestyleTraits = ()
    narrative_hints: NarrativeHintCollection | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def hint_text(self) -> str:
        if self.narrative_hints is None:
            return "(no hint)"
        return self.narrative_hints.display_hint()


class MatchCriteria(BaseModel):
    """Everything a client asks of a candidate.

    The age band is inclusive and must be ordered: ``min_age > max_age`` is
    a validation error, so a client authored with an inverted band fails to
    load instead of being scored against it.
    """

    acceptable_genders: Annotated[tuple[Gender, ...], BeforeValidator(empty_if_none)] = ()
    min_age: int = 18
    max_age: int = 50
    trait_requirements: Annotated[
        tuple[TraitRequirement, ...], BeforeValidator(empty_if_none)
    ] = ()
    min_required_met: int = 0
    dealbreaker_personality_traits: PersonalityTraits = ()
    dealbreaker_interests: Interests = ()
    dealbreaker_lifestyle_traits: LifestyleTraits = ()
    max_red_flags: int = Field(default=2, ge=0)
    min_green_flags: int = Field(default=0, ge=0)
    personality_weight: float = 0.33
    interests_weight: float = 0.33
    lifestyle_weight: float = 0.34

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_age_band(self) -> "MatchCriteria":
        if self.min_age > self.max_age:
            raise ValueError("min_age must not exceed max_age")
        return self


class ClientProfile(BaseModel):
    """Person asking for a match. ``match_criteria`` may be left undefined."""

    client_id: str
    name: str = ""
    gender: Gender | None = None
    age: int | None = None
    relationship: str = ""
    backstory: str = ""
    introduction: str = ""
    is_story_client: bool = True
    suggested_level: int = 0
    archetype: PersonalityArchetype | None = None
    personality_traits: PersonalityTraits = ()
    interests: Interests = ()
    lifestyle_traits: LifestyleTraits = ()
    match_criteria: MatchCriteria | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)
