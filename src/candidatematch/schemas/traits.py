"""Trait catalog records shared by profiles, posts and criteria."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InterestCategory(str, Enum):
    OUTDOOR = "outdoor"
    INDOOR = "indoor"
    CREATIVE = "creative"
    ATHLETIC = "athletic"
    SOCIAL = "social"
    INTELLECTUAL = "intellectual"
    ENTERTAINMENT = "entertainment"
    FOOD = "food"
    TRAVEL = "travel"
    TECHNOLOGY = "technology"
    ANIMALS = "animals"
    OTHER = "other"


class LifestyleCategory(str, Enum):
    ACTIVITY_LEVEL = "activity_level"
    SOCIAL_PREFERENCE = "social_preference"
    SCHEDULE = "schedule"
    LIVING_SITUATION = "living_situation"
    WORK_LIFE = "work_life"
    HEALTH_WELLNESS = "health_wellness"
    OTHER = "other"


class TraitRecord(BaseModel):
    """Common shape of a catalog trait.

    Records are frozen and hashable. Equality also compares the concrete
    class, so an ``Interest`` never equals a ``LifestyleTrait`` that happens
    to share a key.
    """

    key: str
    display_name: str
    description: str = ""
    match_weight: int = Field(default=5, ge=1, le=10)

    model_config = ConfigDict(extra="forbid", frozen=True)


class Interest(TraitRecord):
    """Interest or hobby."""

    category: InterestCategory = InterestCategory.OTHER
    related_interests: tuple[str, ...] = ()


class PersonalityTrait(TraitRecord):
    """Personality trait."""

    is_positive: bool = True
    opposite_traits: tuple[str, ...] = ()
    complementary_traits: tuple[str, ...] = ()


class LifestyleTrait(TraitRecord):
    """Day-to-day lifestyle indicator."""

    category: LifestyleCategory = LifestyleCategory.OTHER
    conflicting_traits: tuple[str, ...] = ()
    compatible_traits: tuple[str, ...] = ()
