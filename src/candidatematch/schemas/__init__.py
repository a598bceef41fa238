"""Pydantic schema definitions for traits, profiles and match criteria."""

from __future__ import annotations

from .criteria import (
    ClientProfile,
    MatchCriteria,
    NarrativeHintCollection,
    RequirementLevel,
    TraitRequirement,
)
from .profile import (
    CandidateProfile,
    Gender,
    PersonalityArchetype,
    Post,
    PostType,
)
from .traits import (
    Interest,
    InterestCategory,
    LifestyleCategory,
    LifestyleTrait,
    PersonalityTrait,
    TraitRecord,
)

__all__ = [
    "CandidateProfile",
    "ClientProfile",
    "Gender",
    "Interest",
    "InterestCategory",
    "LifestyleCategory",
    "LifestyleTrait",
    "MatchCriteria",
    "NarrativeHintCollection",
    "PersonalityArchetype",
    "PersonalityTrait",
    "Post",
    "PostType",
    "RequirementLevel",
    "TraitRecord",
    "TraitRequirement",
]
