from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional

import pytest

from content.bank import ContentBank, bank_from_records, default_bank
from content.scenarios import FILLER
from core.modes import get_difficulty_spec
from core.state import GameState, default_start_stats
from engine.config import EngineConfig
from engine.pipeline import new_game_state


def scenario_record(title: str, choices: Optional[List[Dict[str, Any]]] = None, **extra: Any) -> Dict[str, Any]:
    return {
        "title": title,
        "description": f"{title}: something happens this week.",
        "choices": choices if choices is not None else [{"text": "Go ahead", "outcome": {"text": "It happened."}}],
        **extra,
    }


def make_bank(*records: Dict[str, Any]) -> ContentBank:
    return bank_from_records(list(records), FILLER)


def playing_state(difficulty: str = "realistic", cash: Optional[int] = None, **changes: Any) -> GameState:
    spec = get_difficulty_spec(difficulty)
    s = replace(
        new_game_state(),
        status="playing",
        difficulty=spec.key,
        artist_name="Test Artist",
        artist_genre="indie rock",
        player_stats=default_start_stats(spec.starting_cash if cash is None else cash),
    )
    return replace(s, **changes) if changes else s


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(base_seed=7, random_events=False)


@pytest.fixture
def bank() -> ContentBank:
    return default_bank()
