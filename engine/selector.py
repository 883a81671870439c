"""engine.selector

Scenario selection (headless, pure given an explicit rng).

Order of operations:
1. drop `once` scenarios already used this session
2. drop scenarios whose conditions don't hold for the current state
3. force a label offer when the player is contract-eligible, unsigned and
   hasn't been offered one recently
4. recency-weighted draw over the eligible set
5. empty set -> filler, unless the filler streak hit the limit, in which case
   draw over every available non-filler scenario
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from content.bank import ContentBank
from content.labels import get_label
from content.schemas import Scenario
from core.achievements import unlocked_ids
from core.rng import weighted_index
from core.state import GameState

from .config import EngineConfig

logger = logging.getLogger(__name__)

MIN_RECENCY_WEIGHT = 0.01


def check_conditions(scenario: Scenario, state: GameState) -> bool:
    cond = scenario.conditions
    if cond is None:
        return True
    st = state.player_stats

    if cond.min_fame is not None and st.fame < cond.min_fame:
        return False
    if cond.max_fame is not None and st.fame > cond.max_fame:
        return False
    scaled = cond.min_fame_by_difficulty.get(state.difficulty)
    if scaled is not None and st.fame < scaled:
        return False
    if cond.min_cash is not None and st.cash < cond.min_cash:
        return False
    if cond.max_cash is not None and st.cash > cond.max_cash:
        return False
    if cond.min_well_being is not None and st.well_being < cond.min_well_being:
        return False
    if cond.max_well_being is not None and st.well_being > cond.max_well_being:
        return False
    if cond.min_career_progress is not None and st.career_progress < cond.min_career_progress:
        return False
    if cond.min_hype is not None and st.hype < cond.min_hype:
        return False
    if cond.max_hype is not None and st.hype > cond.max_hype:
        return False

    if cond.required_genre and state.artist_genre.strip().lower() not in cond.required_genre:
        return False
    if cond.required_achievement_id and cond.required_achievement_id not in unlocked_ids(state.achievements):
        return False

    roles = {m.role for m in state.staff}
    if any(r not in roles for r in cond.requires_staff):
        return False
    if any(r in roles for r in cond.missing_staff):
        return False

    if cond.requires_label and state.current_label is None:
        return False
    if cond.requires_no_label and state.current_label is not None:
        return False
    if cond.requires_contract_eligibility and not state.contract_eligibility_unlocked:
        return False
    if cond.project_required and state.current_project is None:
        return False
    if cond.no_project_required and state.current_project is not None:
        return False
    return True


def is_label_offer(scenario: Scenario) -> bool:
    return bool(scenario.label_ids())


def label_offer_tier(scenario: Scenario) -> int:
    """Lowest tier among the labels the scenario can reveal or sign (unknown ids rank last)."""
    tiers = [label.tier for label in (get_label(lid) for lid in scenario.label_ids()) if label is not None]
    return min(tiers) if tiers else 99


def available_scenarios(bank: ContentBank, used_titles: Sequence[str]) -> List[Scenario]:
    used = set(used_titles)
    return [s for s in bank if not (s.once and s.title in used)]


def selections_since(title: str, used_titles: Sequence[str]) -> Optional[int]:
    """1 means it was the previous pick; None means never picked."""
    for back, t in enumerate(reversed(used_titles), start=1):
        if t == title:
            return back
    return None


def recency_weight(title: str, used_titles: Sequence[str], window: int = 11) -> float:
    d = selections_since(title, used_titles)
    if d is None:
        return 1.0
    span = max(1, int(window) - 1)
    return MIN_RECENCY_WEIGHT + (1.0 - MIN_RECENCY_WEIGHT) * min(1.0, ((d - 1) / span) ** 2)


def candidate_weight(scenario: Scenario, state: GameState, bank: ContentBank, config: EngineConfig) -> float:
    w = recency_weight(scenario.title, state.used_scenario_titles, config.recency_window)
    if bank.is_filler(scenario):
        n = sum(1 for t in state.used_scenario_titles if t == scenario.title)
        w = w / (1 + n * n)
    return w


def weighted_pick(candidates: List[Scenario], state: GameState, bank: ContentBank, rng: random.Random, config: EngineConfig) -> Scenario:
    weights = [candidate_weight(s, state, bank, config) for s in candidates]
    return candidates[weighted_index(weights, rng)]


def forced_label_offer(eligible: List[Scenario], state: GameState, bank: ContentBank, config: EngineConfig) -> Optional[Scenario]:
    if not state.contract_eligibility_unlocked or state.current_label is not None:
        return None
    lookback = int(config.label_offer_lookback)
    recent = state.used_scenario_titles[-lookback:] if lookback > 0 else []
    for title in recent:
        seen = bank.get(title)
        if seen is not None and is_label_offer(seen):
            return None
    offers = [s for s in eligible if is_label_offer(s)]
    if not offers:
        return None
    # lowest tier first; bank order breaks ties
    return min(offers, key=label_offer_tier)


def select_scenario(state: GameState, bank: ContentBank, rng: random.Random, config: EngineConfig) -> Scenario:
    available = available_scenarios(bank, state.used_scenario_titles)
    eligible = [s for s in available if check_conditions(s, state)]

    forced = forced_label_offer(eligible, state, bank, config)
    if forced is not None:
        logger.debug("forced label offer: %s", forced.title)
        return forced

    if eligible:
        picked = weighted_pick(eligible, state, bank, rng, config)
        logger.debug("selected %s from %d eligible", picked.title, len(eligible))
        return picked

    if state.consecutive_fallback_count >= int(config.fallback_limit):
        pool = [s for s in available if not bank.is_filler(s)]
        if pool:
            picked = weighted_pick(pool, state, bank, rng, config)
            logger.debug("filler streak %d, forcing %s", state.consecutive_fallback_count, picked.title)
            return picked

    return bank.filler


def register_selection(used_titles: Sequence[str], fallback_count: int, scenario: Scenario, bank: ContentBank):
    """Return (used_titles, consecutive_fallback_count) after showing `scenario`."""
    titles = [*used_titles, scenario.title]
    count = int(fallback_count) + 1 if bank.is_filler(scenario) else 0
    return titles, count
