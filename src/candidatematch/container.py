"""Dependency injection container for the matching tools."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import MatchEvaluator, ScoringConfig
from .loaders import GameDataLoader
from .pipeline import MatchingPipeline, OutputWriter


class MatchingContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    scoring_config = providers.Singleton(ScoringConfig)

    evaluator = providers.Singleton(
        MatchEvaluator,
        mode=config.mode,
        scoring=scoring_config,
    )

    data_loader = providers.Singleton(GameDataLoader)
    writer = providers.Singleton(OutputWriter)

    pipeline = providers.Factory(
        MatchingPipeline,
        evaluator=evaluator,
        data_loader=data_loader,
        writer=writer,
    )


def create_container(*, settings: dict | None = None) -> MatchingContainer:
    """Instantiate container with optional overrides."""

    container = MatchingContainer()

    if not settings:
        return container

    core_settings = settings.get("core", {}) if isinstance(settings, dict) else {}
    if not core_settings:
        return container

    if "mode" in core_settings:
        container.config.mode.from_value(core_settings["mode"])

    if "scoring" in core_settings:
        scoring = ScoringConfig(**core_settings["scoring"])
        container.scoring_config.override(providers.Object(scoring))

    return container
