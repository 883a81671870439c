"""engine.persistence

Persistence collaborator for terminal career records and the cross-career
statistics aggregate, plus the runner that performs transition effects.

The core never awaits these calls: perform_effects() is best-effort and logs
failures instead of raising them into the game loop.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Protocol, Union

from core.state import CareerHistory, GameStatistics

from .actions import Effect, PersistCareerHistory, PersistStatistics, Rejected
from .savefile import (
    career_history_from_dict,
    career_history_to_dict,
    statistics_from_dict,
    statistics_to_dict,
)

logger = logging.getLogger(__name__)

MAX_CAREER_HISTORIES = 20


class PersistenceStore(Protocol):
    def save_career_history(self, record: CareerHistory) -> None: ...

    def save_statistics(self, statistics: GameStatistics) -> None: ...

    def load_statistics(self) -> GameStatistics: ...

    def load_career_histories(self) -> List[CareerHistory]: ...


class MemoryStore:
    """In-process store (headless runs and tests)."""

    def __init__(self) -> None:
        self.careers: List[CareerHistory] = []
        self.statistics = GameStatistics()

    def save_career_history(self, record: CareerHistory) -> None:
        self.careers = [*self.careers, record][-MAX_CAREER_HISTORIES:]

    def save_statistics(self, statistics: GameStatistics) -> None:
        self.statistics = statistics

    def load_statistics(self) -> GameStatistics:
        return self.statistics

    def load_career_histories(self) -> List[CareerHistory]:
        return list(self.careers)


class JsonFileStore:
    """Two JSON files under `root`: careers.json (newest last) and statistics.json."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    @property
    def careers_path(self) -> Path:
        return self.root / "careers.json"

    @property
    def statistics_path(self) -> Path:
        return self.root / "statistics.json"

    def _write(self, path: Path, payload: object) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(path)

    def save_career_history(self, record: CareerHistory) -> None:
        raw = self._read_careers()
        raw.append(career_history_to_dict(record))
        self._write(self.careers_path, raw[-MAX_CAREER_HISTORIES:])

    def save_statistics(self, statistics: GameStatistics) -> None:
        self._write(self.statistics_path, statistics_to_dict(statistics))

    def load_statistics(self) -> GameStatistics:
        if not self.statistics_path.exists():
            return GameStatistics()
        return statistics_from_dict(json.loads(self.statistics_path.read_text(encoding="utf-8")))

    def load_career_histories(self) -> List[CareerHistory]:
        return [career_history_from_dict(d) for d in self._read_careers()]

    def _read_careers(self) -> list:
        if not self.careers_path.exists():
            return []
        data = json.loads(self.careers_path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"{self.careers_path} must hold a JSON list")
        return data


def perform_effects(effects: Iterable[Effect], store: PersistenceStore) -> int:
    """Run persistence effects; returns how many succeeded."""
    done = 0
    for eff in effects:
        try:
            if isinstance(eff, PersistCareerHistory):
                store.save_career_history(eff.record)
                logger.info("saved career %s (%s)", eff.record.game_id, eff.record.outcome)
            elif isinstance(eff, PersistStatistics):
                store.save_statistics(eff.statistics)
            elif isinstance(eff, Rejected):
                logger.debug("action %s rejected: %s", getattr(eff.action, "kind", "?"), eff.reason)
                continue
            else:
                logger.warning("unknown effect %r", eff)
                continue
            done += 1
        except (OSError, ValueError, TypeError) as e:
            logger.warning("persistence failed for %s: %s", getattr(eff, "kind", "?"), e)
    return done
