"""Load trait catalogs, candidates and clients from the game's JSON data files."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping, TypeVar

import structlog

from .catalog import TraitCatalog
from .schemas import (
    CandidateProfile,
    ClientProfile,
    Gender,
    Interest,
    InterestCategory,
    LifestyleCategory,
    LifestyleTrait,
    MatchCriteria,
    NarrativeHintCollection,
    PersonalityArchetype,
    PersonalityTrait,
    Post,
    PostType,
    RequirementLevel,
    TraitRequirement,
)

INTERESTS_FILE = "Interests.json"
PERSONALITY_FILE = "PersonalityTraits.json"
LIFESTYLE_FILE = "LifestyleTraits.json"
HINTS_FILE = "NarrativeHints.json"
CANDIDATES_FILE = "Candidates.json"
CLIENTS_FILE = "Clients.json"

# Missing files in this set are load errors; the rest are skipped with a warning.
REQUIRED_FILES = (INTERESTS_FILE, PERSONALITY_FILE, LIFESTYLE_FILE, CANDIDATES_FILE)
OPTIONAL_FILES = (HINTS_FILE, CLIENTS_FILE)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")

E = TypeVar("E", bound=Enum)

_logger = structlog.get_logger(__name__)


class DataLoadError(ValueError):
    """Raised when a data file contains records that could not be loaded."""

    def __init__(self, errors: list[str], partial: Any):
        super().__init__("Data loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Data loading failed: {self.errors}"


class CatalogLoadError(DataLoadError):
    """Raised when trait or hint records fail validation."""


class ProfileLoadError(DataLoadError):
    """Raised when candidate or client records fail to resolve."""


def enum_value(raw: str | None) -> str | None:
    """Normalise ``NonBinary`` / ``Activity_Level`` style names to enum values."""
    if raw is None:
        return None
    return _CAMEL_BOUNDARY.sub("_", raw.strip()).lower()


def parse_enum(
    raw: Any,
    enum_cls: type[E],
    default: E,
    *,
    aliases: Mapping[str, E] | None = None,
) -> E:
    """Map a data-file name onto ``enum_cls``, falling back to ``default``.

    Unknown names are logged and replaced rather than rejected so a single
    odd spelling does not drop the whole record.
    """
    if raw is None:
        return default
    key = _SEPARATORS.sub("_", enum_value(str(raw)) or "")
    if aliases and key in aliases:
        return aliases[key]
    try:
        return enum_cls(key)
    except ValueError:
        _logger.warning(
            "data.unknown_enum_value",
            enum=enum_cls.__name__,
            value=raw,
            default=default.value,
        )
        return default


def parse_gender(raw: Any) -> Gender:
    return parse_enum(raw, Gender, Gender.NON_BINARY, aliases={"nonbinary": Gender.NON_BINARY})


def parse_archetype(raw: Any) -> PersonalityArchetype:
    return parse_enum(raw, PersonalityArchetype, PersonalityArchetype.QUIRKY)


def parse_post_type(raw: Any) -> PostType:
    return parse_enum(raw, PostType, PostType.PHOTO)


def parse_interest_category(raw: Any) -> InterestCategory:
    return parse_enum(raw, InterestCategory, InterestCategory.OTHER)


def parse_lifestyle_category(raw: Any) -> LifestyleCategory:
    return parse_enum(raw, LifestyleCategory, LifestyleCategory.OTHER)


def parse_requirement_level(raw: Any) -> RequirementLevel:
    return parse_enum(raw, RequirementLevel, RequirementLevel.PREFERRED)


def data_file(data_dir: Path, name: str) -> Path:
    """Return ``data_dir / name``, matching the file name case-insensitively."""
    exact = data_dir / name
    if exact.exists() or not data_dir.is_dir():
        return exact
    wanted = name.lower()
    for entry in sorted(data_dir.iterdir()):
        if entry.name.lower() == wanted:
            return entry
    return exact


def read_records(path: Path, root_key: str) -> list[dict[str, Any]]:
    """Return the record list stored under ``root_key``; a missing file is empty."""
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain an object or a list")
    return list(data.get(root_key) or [])


class CatalogLoader:
    """Build a :class:`TraitCatalog` from the three trait files."""

    def load(self, data_dir: Path) -> TraitCatalog:
        errors: list[str] = []
        interests = self._parse(
            data_file(data_dir, INTERESTS_FILE), "interests", self._interest, errors
        )
        personality = self._parse(
            data_file(data_dir, PERSONALITY_FILE),
            "personalityTraits",
            self._personality,
            errors,
        )
        lifestyle = self._parse(
            data_file(data_dir, LIFESTYLE_FILE), "lifestyleTraits", self._lifestyle, errors
        )
        catalog = TraitCatalog(
            interests=interests,
            personality_traits=personality,
            lifestyle_traits=lifestyle,
        )
        if errors:
            raise CatalogLoadError(errors, catalog)
        return catalog

    @staticmethod
    def _parse(
        path: Path,
        root_key: str,
        build: Callable[[dict[str, Any]], Any],
        errors: list[str],
    ) -> list:
        parsed = []
        seen: set[str] = set()
        for idx, record in enumerate(read_records(path, root_key), start=1):
            try:
                item = build(record)
            except (TypeError, ValueError) as exc:
                errors.append(f"{path.name} #{idx}: {exc}")
                continue
            if item.key in seen:
                errors.append(f"{path.name} #{idx}: duplicate key {item.key!r}")
                continue
            seen.add(item.key)
            parsed.append(item)
        return parsed

    @staticmethod
    def _interest(record: dict[str, Any]) -> Interest:
        return Interest(
            key=record.get("assetName", ""),
            display_name=record.get("displayName") or record.get("assetName", ""),
            description=record.get("description") or "",
            category=parse_interest_category(record.get("category")),
            match_weight=record.get("matchWeight", 5),
            related_interests=record.get("relatedInterests") or (),
        )

    @staticmethod
    def _personality(record: dict[str, Any]) -> PersonalityTrait:
        return PersonalityTrait(
            key=record.get("assetName", ""),
            display_name=record.get("displayName") or record.get("assetName", ""),
            description=record.get("description") or "",
            is_positive=record.get("isPositive", True),
            match_weight=record.get("matchWeight", 5),
            opposite_traits=record.get("oppositeTraits") or (),
            complementary_traits=record.get("complementaryTraits") or (),
        )

    @staticmethod
    def _lifestyle(record: dict[str, Any]) -> LifestyleTrait:
        return LifestyleTrait(
            key=record.get("assetName", ""),
            display_name=record.get("displayName") or record.get("assetName", ""),
            description=record.get("description") or "",
            category=parse_lifestyle_category(record.get("category")),
            match_weight=record.get("matchWeight", 5),
            conflicting_traits=record.get("conflictingTraits") or (),
            compatible_traits=record.get("compatibleTraits") or (),
        )


class HintLoader:
    """Load narrative hint collections keyed by asset name."""

    def load(self, path: Path) -> dict[str, NarrativeHintCollection]:
        collections: dict[str, NarrativeHintCollection] = {}
        errors: list[str] = []
        for idx, record in enumerate(read_records(path, "narrativeHints"), start=1):
            try:
                collection = self.parse(record)
            except (TypeError, ValueError) as exc:
                errors.append(f"{path.name} #{idx}: {exc}")
                continue
            if collection.key in collections:
                errors.append(f"{path.name} #{idx}: duplicate key {collection.key!r}")
                continue
            collections[collection.key] = collection
        if errors:
            raise CatalogLoadError(errors, collections)
        return collections

    @staticmethod
    def parse(record: dict[str, Any]) -> NarrativeHintCollection:
        return NarrativeHintCollection(
            key=record.get("assetName", ""),
            hints=record.get("hints"),
            related_interests=record.get("relatedInterests") or (),
            related_personality_traits=record.get("relatedPersonalityTraits") or (),
            related_lifestyle_traits=record.get("relatedLifestyleTraits") or (),
        )


class CandidateLoader:
    """Resolve candidate records against a trait catalog."""

    def __init__(self, catalog: TraitCatalog):
        self._catalog = catalog

    def load(self, path: Path) -> list[CandidateProfile]:
        candidates: list[CandidateProfile] = []
        errors: list[str] = []
        for idx, record in enumerate(read_records(path, "candidates"), start=1):
            try:
                candidates.append(self.parse(record))
            except (KeyError, TypeError, ValueError) as exc:
                errors.append(f"{path.name} #{idx}: {exc}")
        if errors:
            raise ProfileLoadError(errors, candidates)
        return candidates

    def parse(self, record: dict[str, Any]) -> CandidateProfile:
        catalog = self._catalog
        posts = [self._post(item) for item in record.get("guaranteedPosts") or ()]
        gender = record.get("gender")
        archetype = record.get("archetype")
        return CandidateProfile(
            candidate_id=record.get("assetName") or record.get("profileId", ""),
            name=record.get("characterName") or "",
            gender=parse_gender(gender) if gender is not None else None,
            age=record.get("age"),
            bio=record.get("bio") or "",
            archetype=parse_archetype(archetype) if archetype is not None else None,
            personality_traits=catalog.resolve_personality_traits(
                record.get("personalityTraits")
            ),
            interests=catalog.resolve_interests(record.get("interests")),
            lifestyle_traits=catalog.resolve_lifestyle_traits(
                record.get("lifestyleTraits")
            ),
            guaranteed_posts=posts,
        )

    def _post(self, record: dict[str, Any]) -> Post:
        catalog = self._catalog
        return Post(
            post_type=parse_post_type(record.get("postType")),
            content=record.get("content") or "",
            days_since_posted=record.get("daysSincePosted", 0),
            likes=record.get("likes", 0),
            comments=record.get("comments", 0),
            related_interests=catalog.resolve_interests(record.get("relatedInterests")),
            related_personality_traits=catalog.resolve_personality_traits(
                record.get("relatedPersonalityTraits")
            ),
            related_lifestyle_traits=catalog.resolve_lifestyle_traits(
                record.get("relatedLifestyleTraits")
            ),
            is_red_flag=bool(record.get("isRedFlag", False)),
            is_green_flag=bool(record.get("isGreenFlag", False)),
        )


class ClientLoader:
    """Resolve client records, including their match criteria."""

    def __init__(
        self,
        catalog: TraitCatalog,
        hints: Mapping[str, NarrativeHintCollection] | None = None,
    ):
        self._catalog = catalog
        self._hints = dict(hints or {})

    def load(self, path: Path) -> list[ClientProfile]:
        clients: list[ClientProfile] = []
        errors: list[str] = []
        for idx, record in enumerate(read_records(path, "clients"), start=1):
            try:
                clients.append(self.parse(record))
            except (KeyError, TypeError, ValueError) as exc:
                errors.append(f"{path.name} #{idx}: {exc}")
        if errors:
            raise ProfileLoadError(errors, clients)
        return clients

    def parse(self, record: dict[str, Any]) -> ClientProfile:
        catalog = self._catalog
        profile = record.get("profile") or {}
        criteria = record.get("matchCriteria")
        gender = profile.get("gender")
        archetype = profile.get("archetype")
        return ClientProfile(
            client_id=record.get("assetName", ""),
            name=profile.get("clientName") or "",
            gender=parse_gender(gender) if gender is not None else None,
            age=profile.get("age"),
            relationship=profile.get("relationship") or "",
            backstory=profile.get("backstory") or "",
            introduction=record.get("introduction") or "",
            is_story_client=record.get("isStoryClient", True),
            suggested_level=record.get("suggestedLevel", 0),
            archetype=parse_archetype(archetype) if archetype is not None else None,
            personality_traits=catalog.resolve_personality_traits(
                profile.get("personalityTraits")
            ),
            interests=catalog.resolve_interests(profile.get("interests")),
            lifestyle_traits=catalog.resolve_lifestyle_traits(profile.get("lifestyleTraits")),
            match_criteria=self.parse_criteria(criteria) if criteria is not None else None,
        )

    def parse_criteria(self, record: dict[str, Any]) -> MatchCriteria:
        catalog = self._catalog
        defaults = MatchCriteria.model_fields
        values: dict[str, Any] = {
            "acceptable_genders": [
                parse_gender(gender) for gender in record.get("acceptableGenders") or ()
            ],
            "trait_requirements": [
                self._requirement(item) for item in record.get("traitRequirements") or ()
            ],
            "dealbreaker_personality_traits": catalog.resolve_personality_traits(
                record.get("dealbreakerPersonalityTraits")
            ),
            "dealbreaker_interests": catalog.resolve_interests(
                record.get("dealbreakerInterests")
            ),
            "dealbreaker_lifestyle_traits": catalog.resolve_lifestyle_traits(
                record.get("dealbreakerLifestyleTraits")
            ),
        }
        scalar_fields = {
            "minAge": "min_age",
            "maxAge": "max_age",
            "minRequiredMet": "min_required_met",
            "maxRedFlags": "max_red_flags",
            "minGreenFlags": "min_green_flags",
            "personalityWeight": "personality_weight",
            "interestsWeight": "interests_weight",
            "lifestyleWeight": "lifestyle_weight",
        }
        for source, target in scalar_fields.items():
            value = record.get(source)
            values[target] = value if value is not None else defaults[target].default
        return MatchCriteria(**values)

    def _requirement(self, record: dict[str, Any]) -> TraitRequirement:
        catalog = self._catalog
        hint_key = record.get("narrativeHints")
        hints = None
        if hint_key:
            try:
                hints = self._hints[hint_key]
            except KeyError:
                raise ValueError(f"Unknown narrative hint collection {hint_key!r}") from None
        return TraitRequirement(
            level=parse_requirement_level(record.get("level")),
            acceptable_personality_traits=catalog.resolve_personality_traits(
                record.get("acceptablePersonalityTraits")
            ),
            acceptable_interests=catalog.resolve_interests(record.get("acceptableInterests")),
            acceptable_lifestyle_traits=catalog.resolve_lifestyle_traits(
                record.get("acceptableLifestyleTraits")
            ),
            narrative_hints=hints,
        )


@dataclass
class GameData:
    """Everything loaded from a data directory, plus non-fatal load errors."""

    catalog: TraitCatalog
    candidates: list[CandidateProfile]
    clients: list[ClientProfile]
    errors: list[str] = field(default_factory=list)


class GameDataLoader:
    """Load a complete data directory, keeping whatever records resolve."""

    def __init__(self) -> None:
        self._logger = structlog.get_logger(__name__)

    def load(self, data_dir: Path) -> GameData:
        errors: list[str] = []
        for name in REQUIRED_FILES:
            if not data_file(data_dir, name).exists():
                errors.append(f"{name} not found in {data_dir}")
        for name in OPTIONAL_FILES:
            if not data_file(data_dir, name).exists():
                self._logger.warning("data.file_missing", file=name, data_dir=str(data_dir))

        try:
            catalog = CatalogLoader().load(data_dir)
        except CatalogLoadError as exc:
            catalog = exc.partial
            errors.extend(exc.errors)

        try:
            hints = HintLoader().load(data_file(data_dir, HINTS_FILE))
        except CatalogLoadError as exc:
            hints = exc.partial
            errors.extend(exc.errors)

        try:
            candidates = CandidateLoader(catalog).load(data_file(data_dir, CANDIDATES_FILE))
        except ProfileLoadError as exc:
            candidates = exc.partial
            errors.extend(exc.errors)

        try:
            clients = ClientLoader(catalog, hints).load(data_file(data_dir, CLIENTS_FILE))
        except ProfileLoadError as exc:
            clients = exc.partial
            errors.extend(exc.errors)

        return GameData(
            catalog=catalog,
            candidates=candidates,
            clients=clients,
            errors=errors,
        )
