from __future__ import annotations

from dataclasses import asdict

import pytest

from core.selfcheck import run_52_weeks_smoke
from core.state import BOUNDED_STATS
from engine.config import EngineConfig
from engine.sim_runner import run_headless_sim


@pytest.mark.parametrize("difficulty", ["beginner", "realistic", "hardcore"])
def test_headless_run_keeps_invariants(difficulty):
    out = run_headless_sim(52, difficulty=difficulty, seed=11)
    assert 1 <= out["turns"] <= 52
    final = out["final"]
    assert final.status in ("playing", "gameOver")
    for state in out["states"]:
        for k in BOUNDED_STATS:
            assert 0 <= getattr(state.player_stats, k) <= 100
        assert state.debt_turns == 0 or state.player_stats.cash < 0
        assert state.burnout_turns == 0 or state.player_stats.well_being <= 0
    dates = [s.current_date for s in out["states"]]
    assert dates == sorted(dates)


def test_game_over_is_persisted():
    out = run_headless_sim(400, difficulty="hardcore", seed=3, config=EngineConfig(base_seed=3))
    final = out["final"]
    if final.status != "gameOver":
        pytest.skip("career survived the whole run")
    careers = out["store"].load_career_histories()
    assert [c.outcome for c in careers] == [final.game_over_reason]
    assert out["store"].load_statistics().total_games_played == 1


def test_same_seed_same_career():
    a = run_headless_sim(30, seed=21)["final"]
    b = run_headless_sim(30, seed=21)["final"]
    assert asdict(a) == asdict(b)


def test_core_smoke_run(capsys):
    run_52_weeks_smoke("hardcore", base_seed=1)
    assert "OK" in capsys.readouterr().out
