"""Batch matching of every candidate against every client."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Iterable

import pendulum
import structlog

from . import __version__
from .core import EvaluationResult, MatchEvaluator, RequirementMode
from .loaders import GameDataLoader
from .schemas import CandidateProfile, ClientProfile


def serialize_result(result: EvaluationResult) -> dict[str, Any]:
    """Flatten a result for JSON output, keeping the derived failure reason."""
    payload = asdict(result)
    payload["failure_reason"] = result.failure_reason
    payload["breakdown"]["weighted_score"] = result.breakdown.weighted_score
    return payload


class OutputWriter:
    """Persist matching reports."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default),
            encoding="utf-8",
        )


class AuditLogger:
    """Append-only audit logger writing JSON lines."""

    def __init__(self, path: Path):
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, record: dict) -> None:
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=False, default=_json_default))
            handle.write("\n")


class MatchingPipeline:
    """Load game data, evaluate each client/candidate pair and write a report."""

    def __init__(
        self,
        *,
        evaluator: MatchEvaluator,
        data_loader: GameDataLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._evaluator = evaluator
        self._data_loader = data_loader or GameDataLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        data_dir: Path,
        output_path: Path,
        mode: RequirementMode | str | None = None,
        candidate_ids: Iterable[str] | None = None,
        client_ids: Iterable[str] | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> list[dict]:
        data = self._data_loader.load(data_dir)
        if data.errors:
            self._logger.warning("data.partial_load", errors=data.errors)

        active_mode = RequirementMode(mode) if mode is not None else self._evaluator.mode
        candidates = self._select(data.candidates, candidate_ids, "candidate_id")
        clients = self._select(data.clients, client_ids, "client_id")

        results = self.evaluate_all(
            clients=clients,
            candidates=candidates,
            mode=active_mode,
            audit_logger=audit_logger,
        )

        metadata = {
            "client_count": len(clients),
            "candidate_count": len(candidates),
            "mode": active_mode.value,
            "errors": data.errors,
            "catalog_size": len(data.catalog),
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(
            output_path,
            {
                "metadata": metadata,
                "summary": self._summarize(clients, results),
                "results": results,
            },
        )
        return results

    def evaluate_all(
        self,
        *,
        clients: list[ClientProfile],
        candidates: list[CandidateProfile],
        mode: RequirementMode,
        audit_logger: AuditLogger | None = None,
    ) -> list[dict]:
        results: list[dict] = []
        for client in clients:
            for candidate in candidates:
                outcome = self._evaluator.evaluate_for_client(candidate, client, mode=mode)
                entry = {
                    "client_id": client.client_id,
                    "candidate_id": candidate.candidate_id,
                    "evaluation": serialize_result(outcome),
                }
                results.append(entry)

                if audit_logger:
                    audit_logger.append(
                        {
                            "client_id": client.client_id,
                            "candidate_id": candidate.candidate_id,
                            "mode": mode.value,
                            "is_match": outcome.is_match,
                            "score": outcome.score,
                            "failure": outcome.failure.value,
                            "failure_reason": outcome.failure_reason,
                        }
                    )

                self._logger.info(
                    "matching.result",
                    client_id=client.client_id,
                    candidate_id=candidate.candidate_id,
                    is_match=outcome.is_match,
                    score=outcome.score,
                    failure=outcome.failure.value,
                )
        return results

    @staticmethod
    def _select(records: list, wanted: Iterable[str] | None, attr: str) -> list:
        if not wanted:
            return list(records)
        wanted_ids = set(wanted)
        return [record for record in records if getattr(record, attr) in wanted_ids]

    @staticmethod
    def _summarize(clients: list[ClientProfile], results: list[dict]) -> list[dict]:
        summary: list[dict] = []
        for client in clients:
            matches = [
                entry
                for entry in results
                if entry["client_id"] == client.client_id
                and entry["evaluation"]["is_match"]
            ]
            matches.sort(key=lambda entry: entry["evaluation"]["score"], reverse=True)
            summary.append(
                {
                    "client_id": client.client_id,
                    "match_count": len(matches),
                    "best_candidate_id": matches[0]["candidate_id"] if matches else None,
                    "best_score": matches[0]["evaluation"]["score"] if matches else None,
                }
            )
        return summary


def _json_default(value: Any) -> Any:
    if isinstance(value, pendulum.DateTime):
        return value.to_iso8601_string()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
