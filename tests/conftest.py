from __future__ import annotations

from typing import Any, Callable

import pytest

from candidatematch.catalog import TraitCatalog
from candidatematch.schemas import (
    CandidateProfile,
    Gender,
    Interest,
    InterestCategory,
    LifestyleCategory,
    LifestyleTrait,
    MatchCriteria,
    NarrativeHintCollection,
    PersonalityTrait,
    Post,
    RequirementLevel,
    TraitRequirement,
)


@pytest.fixture
def catalog() -> TraitCatalog:
    return TraitCatalog(
        interests=[
            Interest(key="hiking", display_name="Hiking", category=InterestCategory.OUTDOOR),
            Interest(key="cooking", display_name="Cooking", category=InterestCategory.FOOD),
            Interest(key="gaming", display_name="Gaming", category=InterestCategory.ENTERTAINMENT),
            Interest(key="dogs", display_name="Dogs", category=InterestCategory.ANIMALS),
        ],
        personality_traits=[
            PersonalityTrait(key="kind", display_name="Kind"),
            PersonalityTrait(key="honest", display_name="Honest"),
            PersonalityTrait(key="arrogant", display_name="Arrogant", is_positive=False),
        ],
        lifestyle_traits=[
            LifestyleTrait(
                key="early_riser",
                display_name="Early Riser",
                category=LifestyleCategory.SCHEDULE,
            ),
            LifestyleTrait(
                key="night_owl",
                display_name="Night Owl",
                category=LifestyleCategory.SCHEDULE,
            ),
            LifestyleTrait(
                key="smoker",
                display_name="Smoker",
                category=LifestyleCategory.HEALTH_WELLNESS,
            ),
        ],
    )


@pytest.fixture
def make_candidate(catalog: TraitCatalog) -> Callable[..., CandidateProfile]:
    def build(
        *,
        personality: tuple[str, ...] = (),
        interests: tuple[str, ...] = (),
        lifestyle: tuple[str, ...] = (),
        red_flags: int = 0,
        green_flags: int = 0,
        **kwargs: Any,
    ) -> CandidateProfile:
        posts = [Post(content="red", is_red_flag=True) for _ in range(red_flags)]
        posts += [Post(content="green", is_green_flag=True) for _ in range(green_flags)]
        defaults: dict[str, Any] = {
            "candidate_id": "cand-001",
            "name": "Sam",
            "gender": Gender.FEMALE,
            "age": 28,
            "personality_traits": catalog.resolve_personality_traits(personality),
            "interests": catalog.resolve_interests(interests),
            "lifestyle_traits": catalog.resolve_lifestyle_traits(lifestyle),
            "guaranteed_posts": posts,
        }
        defaults.update(kwargs)
        return CandidateProfile(**defaults)

    return build


@pytest.fixture
def make_requirement(catalog: TraitCatalog) -> Callable[..., TraitRequirement]:
    def build(
        level: RequirementLevel,
        *,
        personality: tuple[str, ...] = (),
        interests: tuple[str, ...] = (),
        lifestyle: tuple[str, ...] = (),
        hint: str | None = None,
    ) -> TraitRequirement:
        hints = (
            NarrativeHintCollection(key=f"hint-{hint}", hints=(hint,))
            if hint is not None
            else None
        )
        return TraitRequirement(
            level=level,
            acceptable_personality_traits=catalog.resolve_personality_traits(personality),
            acceptable_interests=catalog.resolve_interests(interests),
            acceptable_lifestyle_traits=catalog.resolve_lifestyle_traits(lifestyle),
            narrative_hints=hints,
        )

    return build


@pytest.fixture
def make_criteria(catalog: TraitCatalog) -> Callable[..., MatchCriteria]:
    def build(
        *,
        dealbreaker_personality: tuple[str, ...] = (),
        dealbreaker_interests: tuple[str, ...] = (),
        dealbreaker_lifestyle: tuple[str, ...] = (),
        **kwargs: Any,
    ) -> MatchCriteria:
        defaults: dict[str, Any] = {
            "dealbreaker_personality_traits": catalog.resolve_personality_traits(
                dealbreaker_personality
            ),
            "dealbreaker_interests": catalog.resolve_interests(dealbreaker_interests),
            "dealbreaker_lifestyle_traits": catalog.resolve_lifestyle_traits(
                dealbreaker_lifestyle
            ),
        }
        defaults.update(kwargs)
        return MatchCriteria(**defaults)

    return build
