"""
core.selfcheck
Minimal "it runs" proof for the simulation core.

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

from dataclasses import asdict, replace
from datetime import timedelta

from .achievements import evaluate, initial_achievements, unlocked_ids
from .effects import apply_delta, debt_interest, living_expenses, passive_decay, roll_random_event
from .lifecycle import game_over_reason, maybe_snapshot, update_counters
from .modes import compute_modifiers, get_difficulty_spec
from .rng import rng_from
from .state import default_start_state, default_start_stats, weeks_played


def run_52_weeks_smoke(difficulty: str = "realistic", base_seed: int = 42) -> None:
    spec = get_difficulty_spec(difficulty)
    state = replace(
        default_start_state(achievements=initial_achievements()),
        status="playing",
        difficulty=spec.key,
        player_stats=default_start_stats(spec.starting_cash),
    )

    unlocked_before = set()
    for turn in range(1, 53):
        rng = rng_from("selfcheck", turn, base_seed=base_seed)
        state = replace(state, current_date=state.current_date + timedelta(days=rng.randint(3, 7)))
        weeks = weeks_played(state)
        st = state.player_stats
        mods = compute_modifiers(spec, weeks, st.career_progress, st.cash)

        # alternating "good week" / "bad week" choice deltas
        choice = {"cash": 150, "fame": 3, "hype": 4} if turn % 2 else {"cash": -80, "well_being": 6}
        st = apply_delta(st, choice)
        st = apply_delta(st, {"cash": -living_expenses(st.cash, mods)})
        st = apply_delta(st, {"cash": -debt_interest(st.cash)})
        rolled = roll_random_event(spec, weeks, rng)
        if rolled is not None:
            st = apply_delta(st, rolled[1])
        st = apply_delta(st, passive_decay(weeks, mods))

        counters = update_counters(state.debt_turns, state.burnout_turns, st)
        achievements, _ = evaluate(state, st)
        state = replace(
            state,
            player_stats=st,
            debt_turns=counters.debt_turns,
            burnout_turns=counters.burnout_turns,
            achievements=achievements,
            current_history=maybe_snapshot(state.current_history, weeks, st),
        )

        # invariants
        for k in ("fame", "well_being", "career_progress", "hype"):
            assert 0 <= getattr(state.player_stats, k) <= 100, k
        assert state.debt_turns == 0 or state.player_stats.cash < 0
        assert state.burnout_turns == 0 or state.player_stats.well_being <= 0
        now_unlocked = set(unlocked_ids(state.achievements))
        assert unlocked_before <= now_unlocked
        unlocked_before = now_unlocked

        if game_over_reason(counters, spec) is not None:
            break

    print("OK: 52-week core smoke test passed.")
    print("Final stats:", asdict(state.player_stats))
    print("Weeks played:", weeks_played(state), "| snapshots:", len(state.current_history))
    print("Unlocked:", sorted(unlocked_before))


if __name__ == "__main__":
    run_52_weeks_smoke()
