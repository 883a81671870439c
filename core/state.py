"""
core.state
Core domain data models (UI/content independent).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Union

STATUSES = ("start", "setup", "loading", "playing", "gameOver")
BOUNDED_STATS = ("fame", "well_being", "career_progress", "hype")
STAT_KEYS = ("cash",) + BOUNDED_STATS

DEFAULT_START_DATE = date(2025, 1, 1)


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def clamp_stat(x: float) -> int:
    return int(clamp(int(round(x)), 0, 100))


Delta = Dict[str, int]


@dataclass(frozen=True)
class PlayerStats:
    """Career statistics.

    cash is unbounded (may go negative); the other four live in 0..100 and are
    clamped by core.effects.apply_delta().
    """

    cash: int
    fame: int
    well_being: int
    career_progress: int
    hype: int


@dataclass(frozen=True)
class StaffBonus:
    stat: str  # cash | fame | hype | well_being
    value: int  # cash: percent on income; others: flat per week
    description: str = ""


@dataclass(frozen=True)
class HiredStaff:
    template_id: str
    name: str
    role: str
    tier: str
    salary: int  # per month, difficulty-adjusted
    bonuses: List[StaffBonus]
    hired_date: date
    contract_duration: int  # months
    contract_expires_date: date
    months_remaining: int


@dataclass(frozen=True)
class RecordLabel:
    """Immutable contract reference data."""

    id: str
    name: str
    type: str  # indie | major
    tier: int
    advance: int
    royalty_rate: int
    term_years: int
    creative_control: int
    recoupment_rate: int = 100
    album_commitment: int = 1
    cross_collateralized: bool = False
    option_clause: bool = False


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    category: str = "milestone"
    unlocked: bool = False


@dataclass(frozen=True)
class LogEntry:
    message: str
    type: str = "info"  # info | success | warning | danger
    week: int = 0
    date: Optional[date] = None


@dataclass(frozen=True)
class HistorySnapshot:
    week: int
    cash: int
    fame: int
    well_being: int
    career_progress: int
    hype: int


@dataclass(frozen=True)
class Project:
    """A single, EP or album in the works; released once progress reaches required_progress."""

    id: str
    name: str
    required_progress: int
    progress: int = 0
    quality: int = 0


@dataclass(frozen=True)
class Lesson:
    title: str
    explanation: str = ""
    real_world_example: str = ""
    tip_for_future: str = ""
    concept_taught: str = ""


@dataclass(frozen=True)
class ScenarioOutcome:
    """What a scenario choice did this turn (as applied, not as authored)."""

    text: str
    cash: int = 0
    fame: int = 0
    well_being: int = 0
    career_progress: int = 0
    hype: int = 0
    lesson: Optional[Lesson] = None
    hired_role: Optional[str] = None
    offered_label_id: Optional[str] = None
    signed_label_id: Optional[str] = None
    started_project_id: Optional[str] = None
    project_progress: int = 0
    kind: str = "scenario"


@dataclass(frozen=True)
class TerminationOutcome:
    text: str
    staff_name: str
    role: str
    tier: str
    severance: int
    well_being: int = 0
    fame: int = 0
    hype: int = 0
    legal_complication: bool = False
    kind: str = "termination"


Outcome = Union[ScenarioOutcome, TerminationOutcome]


@dataclass(frozen=True)
class GameStatistics:
    """Cross-career aggregate, owned by the persistence collaborator."""

    total_games_played: int = 0
    total_weeks_played: int = 0
    longest_career_weeks: int = 0
    average_career_length: int = 0
    games_lost_to_debt: int = 0
    games_lost_to_burnout: int = 0
    careers_abandoned: int = 0
    total_decisions_made: int = 0
    contracts_signed: int = 0
    highest_cash: int = 0
    highest_fame_reached: int = 0
    highest_hype_reached: int = 0
    highest_career_progress_reached: int = 0
    careers_by_difficulty: Dict[str, int] = field(
        default_factory=lambda: {"beginner": 0, "realistic": 0, "hardcore": 0}
    )


@dataclass(frozen=True)
class CareerHistory:
    """Terminal record handed to persistence when a career ends."""

    game_id: str
    artist_name: str
    genre: str
    difficulty: str
    weeks_played: int
    outcome: str  # debt | burnout | abandoned
    final_stats: PlayerStats
    achievements_earned: List[str]
    lessons_learned: List[str]
    contracts_signed: List[str]
    peak_cash: int
    lowest_cash: int
    peak_fame: int
    peak_career_progress: int
    historical_data: List[HistorySnapshot]
    major_events: List[str]
    decisions_count: int
    ended_on: date


@dataclass(frozen=True)
class GameState:
    """Single root aggregate. Only engine.pipeline.transition() builds new ones."""

    status: str
    player_stats: PlayerStats
    difficulty: str = "realistic"
    artist_name: str = ""
    artist_genre: str = ""
    current_scenario: Optional[Any] = None  # content.schemas.Scenario
    last_outcome: Optional[Outcome] = None
    staff: List[HiredStaff] = field(default_factory=list)
    current_label: Optional[RecordLabel] = None
    current_label_offer: Optional[RecordLabel] = None
    current_project: Optional[Project] = None
    contract_start_date: Optional[date] = None
    contracts_signed: List[str] = field(default_factory=list)
    achievements: List[Achievement] = field(default_factory=list)
    unseen_achievements: List[str] = field(default_factory=list)
    debt_turns: int = 0
    burnout_turns: int = 0
    game_over_reason: Optional[str] = None
    fame_threshold_weeks: int = 0
    staff_hiring_unlocked: bool = False
    contract_eligibility_unlocked: bool = False
    unlocks_shown: List[str] = field(default_factory=list)
    logs: List[LogEntry] = field(default_factory=list)
    current_history: List[HistorySnapshot] = field(default_factory=list)
    used_scenario_titles: List[str] = field(default_factory=list)
    consecutive_fallback_count: int = 0
    start_date: date = DEFAULT_START_DATE
    current_date: date = DEFAULT_START_DATE
    last_staff_payment_date: date = DEFAULT_START_DATE
    lessons_viewed: List[str] = field(default_factory=list)
    decisions_made: int = 0
    action_seq: int = 0
    statistics: GameStatistics = field(default_factory=GameStatistics)
    modal: str = "none"
    tutorial_step: int = 0


def weeks_between(start: date, current: date) -> int:
    return max(0, (current - start).days // 7)


def weeks_played(state: GameState) -> int:
    return weeks_between(state.start_date, state.current_date)


def stats_from_mapping(d: Mapping[str, Any]) -> PlayerStats:
    """Bridge helper for dict-based stats (camelCase or snake_case keys)."""
    return PlayerStats(
        cash=int(d.get("cash", 0)),
        fame=clamp_stat(d.get("fame", 0)),
        well_being=clamp_stat(d.get("well_being", d.get("wellBeing", 50))),
        career_progress=clamp_stat(d.get("career_progress", d.get("careerProgress", 0))),
        hype=clamp_stat(d.get("hype", 0)),
    )


def stats_to_dict(s: PlayerStats) -> Dict[str, int]:
    return {
        "cash": int(s.cash),
        "fame": int(s.fame),
        "well_being": int(s.well_being),
        "career_progress": int(s.career_progress),
        "hype": int(s.hype),
    }


def default_start_stats(starting_cash: int) -> PlayerStats:
    return PlayerStats(cash=int(starting_cash), fame=0, well_being=50, career_progress=0, hype=0)


def default_start_state(
    *,
    achievements: Optional[List[Achievement]] = None,
    statistics: Optional[GameStatistics] = None,
    start_date: date = DEFAULT_START_DATE,
) -> GameState:
    """Baseline `start` state.

    Keep it in core so headless tests and the UI share the same baseline.
    Achievement definitions are supplied by the caller (core.achievements)
    to keep this module free of imports.
    """
    return GameState(
        status="start",
        player_stats=default_start_stats(0),
        achievements=list(achievements or []),
        statistics=statistics or GameStatistics(),
        start_date=start_date,
        current_date=start_date,
        last_staff_payment_date=start_date,
    )
