"""Immutable registry of trait records."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, TypeVar

from rapidfuzz import process

from .schemas import Interest, LifestyleTrait, PersonalityTrait, TraitRecord

T = TypeVar("T", bound=TraitRecord)


class UnknownTraitError(KeyError):
    """Raised when a trait key is not present in the catalog."""

    def __init__(self, kind: str, key: str, suggestion: str | None = None):
        super().__init__(key)
        self.kind = kind
        self.key = key
        self.suggestion = suggestion

    def __str__(self) -> str:
        message = f"Unknown {self.kind} {self.key!r}"
        if self.suggestion:
            message += f" (did you mean {self.suggestion!r}?)"
        return message


class TraitCatalog:
    """Lookup of trait records by key.

    Profiles and criteria hold the very record objects returned here, so
    the catalog is the single owner of every trait.
    """

    SUGGESTION_CUTOFF = 70.0

    def __init__(
        self,
        *,
        interests: Iterable[Interest] = (),
        personality_traits: Iterable[PersonalityTrait] = (),
        lifestyle_traits: Iterable[LifestyleTrait] = (),
    ) -> None:
        self._interests = self._index("interest", interests)
        self._personality = self._index("personality trait", personality_traits)
        self._lifestyle = self._index("lifestyle trait", lifestyle_traits)

    @staticmethod
    def _index(kind: str, records: Iterable[T]) -> Mapping[str, T]:
        indexed: dict[str, T] = {}
        for record in records:
            if record.key in indexed:
                raise ValueError(f"Duplicate {kind} key: {record.key!r}")
            indexed[record.key] = record
        return MappingProxyType(indexed)

    @property
    def interests(self) -> Mapping[str, Interest]:
        return self._interests

    @property
    def personality_traits(self) -> Mapping[str, PersonalityTrait]:
        return self._personality

    @property
    def lifestyle_traits(self) -> Mapping[str, LifestyleTrait]:
        return self._lifestyle

    def __len__(self) -> int:
        return len(self._interests) + len(self._personality) + len(self._lifestyle)

    def interest(self, key: str) -> Interest:
        return self._lookup("interest", self._interests, key)

    def personality_trait(self, key: str) -> PersonalityTrait:
        return self._lookup("personality trait", self._personality, key)

    def lifestyle_trait(self, key: str) -> LifestyleTrait:
        return self._lookup("lifestyle trait", self._lifestyle, key)

    def resolve_interests(self, keys: Iterable[str] | None) -> tuple[Interest, ...]:
        return tuple(self.interest(key) for key in keys or ())

    def resolve_personality_traits(
        self, keys: Iterable[str] | None
    ) -> tuple[PersonalityTrait, ...]:
        return tuple(self.personality_trait(key) for key in keys or ())

    def resolve_lifestyle_traits(
        self, keys: Iterable[str] | None
    ) -> tuple[LifestyleTrait, ...]:
        return tuple(self.lifestyle_trait(key) for key in keys or ())

    def _lookup(self, kind: str, records: Mapping[str, T], key: str) -> T:
        try:
            return records[key]
        except KeyError:
            raise UnknownTraitError(kind, key, self._suggest(key, records)) from None

    def _suggest(self, key: str, records: Mapping[str, TraitRecord]) -> str | None:
        if not records:
            return None
        match = process.extractOne(key, list(records), score_cutoff=self.SUGGESTION_CUTOFF)
        return match[0] if match else None
