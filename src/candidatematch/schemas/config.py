"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.modes import RequirementMode


class ScoringSettings(BaseModel):
    base_score: float | None = None
    weighted_factor: float | None = None
    preferred_bonus: float | None = None
    avoid_penalty: float | None = None
    required_met_bonus: float | None = None
    required_failed_penalty: float | None = None
    age_penalty_per_year: float | None = None

    model_config = ConfigDict(extra="forbid")


class CoreConfig(BaseModel):
    mode: RequirementMode | None = None
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)


class AppConfig(BaseModel):
    core: CoreConfig = Field(default_factory=CoreConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        core: dict[str, Any] = {}
        if self.core.mode is not None:
            core["mode"] = self.core.mode.value
        scoring = self.core.scoring.model_dump(exclude_none=True)
        if scoring:
            core["scoring"] = scoring
        if core:
            settings["core"] = core
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
