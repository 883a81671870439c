"""engine.savefile

Save-file export/import.

A save is JSON-serializable so a session can be exported and resumed later
through the LoadGame action. The same codecs serialize CareerHistory and
GameStatistics for the persistence store.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields, replace
from datetime import date
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union

from content.schemas import scenario_from_dict
from core.state import (
    DEFAULT_START_DATE,
    Achievement,
    CareerHistory,
    GameState,
    GameStatistics,
    HiredStaff,
    HistorySnapshot,
    Lesson,
    LogEntry,
    Outcome,
    PlayerStats,
    Project,
    RecordLabel,
    ScenarioOutcome,
    StaffBonus,
    TerminationOutcome,
)

SAVE_VERSION = 1

T = TypeVar("T")


def _default(obj: Any) -> Any:
    if isinstance(obj, date):
        return obj.isoformat()
    raise TypeError(f"not JSON serializable: {type(obj).__name__}")


def _date(x: Any) -> Optional[date]:
    if x is None or x == "":
        return None
    if isinstance(x, date):
        return x
    return date.fromisoformat(str(x))


def _build(cls: Type[T], d: Mapping[str, Any], **overrides: Any) -> T:
    """Construct a dataclass from a mapping, ignoring keys it doesn't declare."""
    names = {f.name for f in fields(cls)}
    kwargs = {k: v for k, v in dict(d).items() if k in names}
    kwargs.update(overrides)
    return cls(**kwargs)


# --- small records ---


def _lesson(d: Any) -> Optional[Lesson]:
    return _build(Lesson, d) if isinstance(d, Mapping) else None


def _outcome(d: Any) -> Optional[Outcome]:
    if not isinstance(d, Mapping):
        return None
    if d.get("kind") == "termination":
        return _build(TerminationOutcome, d)
    return _build(ScenarioOutcome, d, lesson=_lesson(d.get("lesson")))


def _staff(d: Mapping[str, Any]) -> HiredStaff:
    return _build(
        HiredStaff,
        d,
        bonuses=[_build(StaffBonus, b) for b in d.get("bonuses") or []],
        hired_date=_date(d.get("hired_date")),
        contract_expires_date=_date(d.get("contract_expires_date")),
    )


def _label(d: Any) -> Optional[RecordLabel]:
    return _build(RecordLabel, d) if isinstance(d, Mapping) else None


def _project(d: Any) -> Optional[Project]:
    return _build(Project, d) if isinstance(d, Mapping) else None


def _log_entry(d: Mapping[str, Any]) -> LogEntry:
    return _build(LogEntry, d, date=_date(d.get("date")))


# --- statistics / career history ---


def statistics_to_dict(stats: GameStatistics) -> Dict[str, Any]:
    return asdict(stats)


def statistics_from_dict(d: Optional[Mapping[str, Any]]) -> GameStatistics:
    if not d:
        return GameStatistics()
    base = GameStatistics()
    by = dict(base.careers_by_difficulty)
    by.update({str(k): int(v) for k, v in dict(d.get("careers_by_difficulty") or {}).items()})
    return _build(GameStatistics, d, careers_by_difficulty=by)


def career_history_to_dict(record: CareerHistory) -> Dict[str, Any]:
    return json.loads(json.dumps(asdict(record), default=_default))


def career_history_from_dict(d: Mapping[str, Any]) -> CareerHistory:
    return _build(
        CareerHistory,
        d,
        final_stats=_build(PlayerStats, d.get("final_stats") or {}),
        historical_data=[_build(HistorySnapshot, h) for h in d.get("historical_data") or []],
        ended_on=_date(d.get("ended_on")),
    )


# --- game state ---


def state_to_dict(state: GameState) -> Dict[str, Any]:
    scenario = state.current_scenario
    # Scenario goes through its own schema, not asdict()
    d = asdict(replace(state, current_scenario=None))
    d["current_scenario"] = scenario.to_dict() if scenario is not None else None
    return json.loads(json.dumps(d, default=_default))


def state_from_dict(d: Mapping[str, Any]) -> GameState:
    if not isinstance(d, Mapping):
        raise ValueError("state must be an object")
    if "player_stats" not in d:
        raise ValueError("state.player_stats missing")
    scenario = d.get("current_scenario")
    return _build(
        GameState,
        d,
        player_stats=_build(PlayerStats, d["player_stats"]),
        current_scenario=scenario_from_dict(scenario) if isinstance(scenario, Mapping) else None,
        last_outcome=_outcome(d.get("last_outcome")),
        staff=[_staff(s) for s in d.get("staff") or []],
        current_label=_label(d.get("current_label")),
        current_label_offer=_label(d.get("current_label_offer")),
        current_project=_project(d.get("current_project")),
        contract_start_date=_date(d.get("contract_start_date")),
        contracts_signed=list(d.get("contracts_signed") or []),
        achievements=[_build(Achievement, a) for a in d.get("achievements") or []],
        unseen_achievements=list(d.get("unseen_achievements") or []),
        unlocks_shown=list(d.get("unlocks_shown") or []),
        logs=[_log_entry(e) for e in d.get("logs") or []],
        current_history=[_build(HistorySnapshot, h) for h in d.get("current_history") or []],
        used_scenario_titles=list(d.get("used_scenario_titles") or []),
        start_date=_date(d.get("start_date")) or DEFAULT_START_DATE,
        current_date=_date(d.get("current_date")) or DEFAULT_START_DATE,
        last_staff_payment_date=_date(d.get("last_staff_payment_date")) or DEFAULT_START_DATE,
        lessons_viewed=list(d.get("lessons_viewed") or []),
        statistics=statistics_from_dict(d.get("statistics")),
    )


def make_save_export(*, seed: int, state: GameState) -> Dict[str, Any]:
    return {
        "version": SAVE_VERSION,
        "seed": int(seed),
        "state": state_to_dict(state),
    }


def dumps_save_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)


def load_save_export(raw: Union[str, bytes, Mapping[str, Any]]) -> GameState:
    """Parse an exported save back into a GameState (raises ValueError on bad input)."""
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"save is not valid JSON: {e}") from e
    else:
        data = raw
    if not isinstance(data, Mapping):
        raise ValueError("save must be a JSON object")
    if int(data.get("version") or 0) != SAVE_VERSION:
        raise ValueError(f"unsupported save version: {data.get('version')!r}")
    return state_from_dict(data.get("state") or {})
