"""Candidate profile and social media post schemas."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .traits import Interest, LifestyleTrait, PersonalityTrait


def empty_if_none(value: Any) -> Any:
    """Treat an absent collection as an empty one."""
    return () if value is None else value


PersonalityTraits = Annotated[tuple[PersonalityTrait, ...], BeforeValidator(empty_if_none)]
Interests = Annotated[tuple[Interest, ...], BeforeValidator(empty_if_none)]
LifestyleTraits = Annotated[tuple[LifestyleTrait, ...], BeforeValidator(empty_if_none)]


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non_binary"


class PersonalityArchetype(str, Enum):
    ADVENTUROUS = "adventurous"
    INTELLECTUAL = "intellectual"
    CREATIVE = "creative"
    ATHLETIC = "athletic"
    HOMEBODY = "homebody"
    SOCIAL = "social"
    CAREER_FOCUSED = "career_focused"
    FREE_SPIRIT = "free_spirit"
    TRADITIONAL = "traditional"
    QUIRKY = "quirky"


class PostType(str, Enum):
    PHOTO = "photo"
    TEXT_ONLY = "text_only"
    VIDEO = "video"
    STORY = "story"
    SHARED_POST = "shared_post"
    POLL = "poll"


class Post(BaseModel):
    """Single social media post attached to a candidate."""

    post_type: PostType = PostType.TEXT_ONLY
    content: str = ""
    days_since_posted: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    related_interests: Interests = ()
    related_personality_traits: PersonalityTraits = ()
    related_lifestyle_traits: LifestyleTraits = ()
    is_red_flag: bool = False
    is_green_flag: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


class CandidateProfile(BaseModel):
    """Potential match reviewed on behalf of a client.

    Only ``guaranteed_posts`` are part of the profile; posts drawn from the
    random pool are session decoration and never reach the evaluator.
    """

    candidate_id: str
    name: str = ""
    gender: Gender
    age: int = Field(ge=0)
    bio: str = ""
    archetype: PersonalityArchetype | None = None
    personality_traits: PersonalityTraits = ()
    interests: Interests = ()
    lifestyle_traits: LifestyleTraits = ()
    guaranteed_posts: Annotated[tuple[Post, ...], BeforeValidator(empty_if_none)] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)
