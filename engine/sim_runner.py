"""engine.sim_runner

Headless runner for quick sanity checks.

Plays a career end-to-end through transition() with a simple greedy policy,
so tests and CI can exercise the full loop without the Streamlit host.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from content.bank import ContentBank, default_bank
from core.state import GameState

from .actions import (
    DismissOutcome,
    Effect,
    LoadScenario,
    SelectChoice,
    SignContract,
    StartSetup,
    SubmitSetup,
)
from .config import EngineConfig
from .persistence import MemoryStore, PersistenceStore, perform_effects
from .pipeline import new_game_state, transition


def pick_choice(state: GameState) -> int:
    """Greedy policy: patch whatever is about to end the career, else chase progress."""
    scenario = state.current_scenario
    if scenario is None or not scenario.choices:
        return 0
    st = state.player_stats

    def score(i: int) -> float:
        o = scenario.choices[i].outcome
        if st.cash < 100:
            return o.cash + 5 * o.well_being
        if st.well_being < 25:
            return 10 * o.well_being + 0.01 * o.cash
        return 3 * o.career_progress + 2 * o.fame + o.hype + o.well_being + 0.005 * o.cash

    return max(range(len(scenario.choices)), key=score)


def run_headless_sim(
    weeks: int = 52,
    *,
    difficulty: str = "realistic",
    seed: int = 123,
    bank: Optional[ContentBank] = None,
    store: Optional[PersistenceStore] = None,
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    """Play up to `weeks` turns (or until game over) and return a summary."""
    cfg = config or EngineConfig(base_seed=seed)
    bank = bank or default_bank()
    store = store or MemoryStore()

    state = new_game_state(statistics=store.load_statistics())
    effects: List[Effect] = []

    def step(action: Any) -> None:
        nonlocal state
        state, eff = transition(state, action, config=cfg, bank=bank)
        effects.extend(eff)
        perform_effects(eff, store)

    step(StartSetup())
    step(SubmitSetup(name="Headless Harmonies", genre="indie rock", difficulty=difficulty))
    step(LoadScenario())

    turns = 0
    states: List[GameState] = [state]
    while state.status == "playing" and turns < weeks:
        if state.current_label_offer is not None and state.current_label is None:
            step(SignContract())
        step(SelectChoice(choice=pick_choice(state)))
        step(DismissOutcome())
        states.append(state)
        turns += 1

    return {
        "turns": turns,
        "final": state,
        "states": states,
        "effects": effects,
        "store": store,
    }
