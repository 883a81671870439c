"""
core.lifecycle
Career lifecycle tracking:
- failure counters (debt / burnout) and grace-period game over
- periodic history snapshots
- feature unlocks driven by fame
- terminal CareerHistory records and the cross-career statistics aggregate
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .achievements import unlocked_ids
from .modes import DifficultySpec
from .state import (
    CareerHistory,
    GameState,
    GameStatistics,
    HistorySnapshot,
    PlayerStats,
    weeks_played,
)

CONTRACT_STREAK_WEEKS = 3


@dataclass(frozen=True)
class Counters:
    debt_turns: int
    burnout_turns: int
    burnout_recovered: bool


def update_counters(debt_turns: int, burnout_turns: int, stats: PlayerStats) -> Counters:
    """Counters grow while the condition holds and reset the instant it clears."""
    new_debt = debt_turns + 1 if stats.cash < 0 else 0
    new_burnout = burnout_turns + 1 if stats.well_being <= 0 else 0
    return Counters(
        debt_turns=new_debt,
        burnout_turns=new_burnout,
        burnout_recovered=burnout_turns > 0 and new_burnout == 0,
    )


def game_over_reason(counters: Counters, spec: DifficultySpec) -> Optional[str]:
    if counters.debt_turns > spec.grace_period_weeks:
        return "debt"
    if counters.burnout_turns > spec.grace_period_weeks:
        return "burnout"
    return None


def snapshot(week: int, stats: PlayerStats) -> HistorySnapshot:
    return HistorySnapshot(
        week=int(week),
        cash=int(stats.cash),
        fame=int(stats.fame),
        well_being=int(stats.well_being),
        career_progress=int(stats.career_progress),
        hype=int(stats.hype),
    )


def maybe_snapshot(history: List[HistorySnapshot], week: int, stats: PlayerStats, interval: int = 4) -> List[HistorySnapshot]:
    """Append a snapshot on every `interval`-th week, once per week."""
    if week <= 0 or interval <= 0 or week % interval != 0:
        return list(history)
    if any(h.week == week for h in history):
        return list(history)
    return [*history, snapshot(week, stats)]


@dataclass(frozen=True)
class UnlockUpdate:
    staff_hiring_unlocked: bool
    contract_eligibility_unlocked: bool
    fame_threshold_weeks: int
    newly_unlocked: List[str]


def update_unlocks(state: GameState, stats: PlayerStats, spec: DifficultySpec) -> UnlockUpdate:
    """Staff hiring unlocks at a fame threshold; contracts need a sustained streak."""
    newly: List[str] = []

    staff_unlocked = state.staff_hiring_unlocked
    if not staff_unlocked and stats.fame >= spec.staff_unlock_fame:
        staff_unlocked = True
        newly.append("staff_hiring")

    streak = state.fame_threshold_weeks + 1 if stats.fame >= spec.contract_fame_threshold else 0
    contract_unlocked = state.contract_eligibility_unlocked
    if not contract_unlocked and streak >= CONTRACT_STREAK_WEEKS:
        contract_unlocked = True
        newly.append("contract_eligibility")

    return UnlockUpdate(
        staff_hiring_unlocked=staff_unlocked,
        contract_eligibility_unlocked=contract_unlocked,
        fame_threshold_weeks=streak,
        newly_unlocked=newly,
    )


def build_career_history(state: GameState, outcome: str, game_id: str) -> CareerHistory:
    """Aggregate peak/trough stats from snapshot history plus the final stats."""
    final = state.player_stats
    points = [*state.current_history, snapshot(weeks_played(state), final)]
    major = [e.message for e in state.logs if e.type in ("success", "danger")]
    return CareerHistory(
        game_id=str(game_id),
        artist_name=state.artist_name,
        genre=state.artist_genre,
        difficulty=state.difficulty,
        weeks_played=weeks_played(state),
        outcome=str(outcome),
        final_stats=final,
        achievements_earned=unlocked_ids(state.achievements),
        lessons_learned=list(state.lessons_viewed),
        contracts_signed=list(state.contracts_signed),
        peak_cash=max(p.cash for p in points),
        lowest_cash=min(p.cash for p in points),
        peak_fame=max(p.fame for p in points),
        peak_career_progress=max(p.career_progress for p in points),
        historical_data=list(state.current_history),
        major_events=major[-20:],
        decisions_count=int(state.decisions_made),
        ended_on=state.current_date,
    )


def record_game_end(stats: GameStatistics, record: CareerHistory) -> GameStatistics:
    """Fold one finished career into the aggregate."""
    games = stats.total_games_played + 1
    weeks = int(record.weeks_played)
    by: Dict[str, int] = dict(stats.careers_by_difficulty or {})
    by[record.difficulty] = int(by.get(record.difficulty, 0)) + 1
    return replace(
        stats,
        total_games_played=games,
        total_weeks_played=stats.total_weeks_played + weeks,
        longest_career_weeks=max(stats.longest_career_weeks, weeks),
        average_career_length=(stats.average_career_length * (games - 1) + weeks) // games,
        games_lost_to_debt=stats.games_lost_to_debt + (1 if record.outcome == "debt" else 0),
        games_lost_to_burnout=stats.games_lost_to_burnout + (1 if record.outcome == "burnout" else 0),
        careers_abandoned=stats.careers_abandoned + (1 if record.outcome == "abandoned" else 0),
        total_decisions_made=stats.total_decisions_made + int(record.decisions_count),
        contracts_signed=stats.contracts_signed + len(record.contracts_signed),
        highest_cash=max(stats.highest_cash, record.peak_cash),
        highest_fame_reached=max(stats.highest_fame_reached, record.peak_fame),
        highest_hype_reached=max(stats.highest_hype_reached, max([record.final_stats.hype] + [h.hype for h in record.historical_data])),
        highest_career_progress_reached=max(stats.highest_career_progress_reached, record.peak_career_progress),
        careers_by_difficulty=by,
    )


def career_in_progress(state: GameState) -> bool:
    return state.status in ("loading", "playing") and bool(state.artist_name)


def end_career(state: GameState, outcome: str, game_id: str) -> Tuple[CareerHistory, GameStatistics]:
    record = build_career_history(state, outcome, game_id)
    return record, record_game_end(state.statistics, record)
