"""
core.effects
Economy / physics rules:
- stat deltas with clamp rules
- wealth-tiered living expenses and debt interest
- difficulty-specific random events
- passive decay and competition drain
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from .modes import DifficultySpec, Modifiers
from .state import Delta, LogEntry, PlayerStats, clamp_stat


DEBT_INTEREST_RATE = 0.03

# (upper cash bound, tier name, weekly cost); last tier has no bound
LIVING_EXPENSE_TIERS: List[Tuple[Optional[int], str, int]] = [
    (1_000, "basic", 25),
    (5_000, "modest", 75),
    (20_000, "comfortable", 200),
    (100_000, "established", 600),
    (500_000, "star", 1_500),
    (None, "superstar", 4_000),
]


@dataclass(frozen=True)
class RandomEvent:
    id: str
    text: str
    weight: float
    cash: int = 0
    fame: int = 0
    well_being: int = 0
    career_progress: int = 0
    hype: int = 0
    type: str = "warning"


EVENT_TABLES: Dict[str, List[RandomEvent]] = {
    "beginner": [
        RandomEvent("busking_tips", "A passerby films your busking set and tips generously.", 3, cash=120, hype=3, type="success"),
        RandomEvent("cold", "You catch a cold and lose a few days.", 2, well_being=-5),
        RandomEvent("blog_mention", "A local blog mentions your name.", 2, fame=2, hype=2, type="success"),
    ],
    "realistic": [
        RandomEvent("gear_theft", "Your gear is stolen from the van.", 2, cash=-400, well_being=-5, type="danger"),
        RandomEvent("viral_clip", "A clip of your show circulates online.", 2, fame=3, hype=8, type="success"),
        RandomEvent("promoter_no_pay", "A promoter skips town without paying you.", 2, cash=-250, well_being=-3),
        RandomEvent("sync_fee", "A small sync placement pays out.", 1, cash=600, career_progress=1, type="success"),
        RandomEvent("illness", "You fall ill before a big week.", 2, well_being=-10, hype=-3, type="danger"),
        RandomEvent("rival_release", "A rival drops a hit and steals the spotlight.", 2, hype=-6, fame=-1),
    ],
    "hardcore": [
        RandomEvent("gear_theft", "Your gear is stolen from the van.", 2, cash=-800, well_being=-8, type="danger"),
        RandomEvent("tax_audit", "The tax office comes knocking.", 2, cash=-1_200, well_being=-6, type="danger"),
        RandomEvent("scandal", "A fabricated scandal trends against you.", 2, fame=-5, hype=-10, well_being=-8, type="danger"),
        RandomEvent("venue_closure", "Your regular venue shuts down.", 2, cash=-300, career_progress=-2),
        RandomEvent("viral_clip", "A clip of your show circulates online.", 1, fame=3, hype=8, type="success"),
        RandomEvent("exhaustion", "Relentless schedules catch up with you.", 2, well_being=-15, type="danger"),
    ],
}


def apply_delta(stats: PlayerStats, delta: Delta) -> PlayerStats:
    """Apply delta with clamp rules (pure function). Cash is never clamped."""
    return PlayerStats(
        cash=int(stats.cash + int(delta.get("cash", 0))),
        fame=clamp_stat(stats.fame + int(delta.get("fame", 0))),
        well_being=clamp_stat(stats.well_being + int(delta.get("well_being", 0))),
        career_progress=clamp_stat(stats.career_progress + int(delta.get("career_progress", 0))),
        hype=clamp_stat(stats.hype + int(delta.get("hype", 0))),
    )


def scale_cash_delta(cash: int, mods: Modifiers, income_bonus_pct: int = 0) -> int:
    """Income scales with income multiplier and staff bonuses; spending with cost inflation."""
    if cash > 0:
        return int(round(cash * mods.income_multiplier * (1.0 + income_bonus_pct / 100.0)))
    if cash < 0:
        return int(round(cash * mods.cost_multiplier * mods.inflation_multiplier))
    return 0


def living_expense_tier(cash: int) -> Tuple[str, int]:
    for bound, name, cost in LIVING_EXPENSE_TIERS:
        if bound is None or cash < bound:
            return name, cost
    return LIVING_EXPENSE_TIERS[-1][1], LIVING_EXPENSE_TIERS[-1][2]


def living_expenses(cash: int, mods: Modifiers) -> int:
    _, cost = living_expense_tier(cash)
    return int(round(cost * mods.inflation_multiplier))


def debt_interest(cash: int) -> int:
    if cash >= 0:
        return 0
    return int(math.ceil(abs(cash) * DEBT_INTEREST_RATE))


def competition_level(weeks: int) -> float:
    return min(1.0, max(0, weeks) / 104.0)


def roll_random_event(
    spec: DifficultySpec,
    weeks: int,
    rng: random.Random,
) -> Optional[Tuple[RandomEvent, Delta]]:
    """Maybe trigger exactly one event; returns (event, perturbed delta)."""
    if not spec.random_events:
        return None
    table = EVENT_TABLES.get(spec.key) or []
    if not table:
        return None
    p = spec.event_chance * (1.0 + 0.5 * competition_level(weeks))
    if rng.random() >= p:
        return None

    acc = 0.0
    roll = rng.random() * sum(e.weight for e in table)
    ev = table[-1]
    for cand in table:
        acc += cand.weight
        if roll < acc:
            ev = cand
            break

    swing = rng.uniform(0.75, 1.25) * spec.volatility
    delta: Delta = {}
    for k in ("cash", "fame", "well_being", "career_progress", "hype"):
        v = int(getattr(ev, k))
        if v:
            delta[k] = int(round(v * swing))
    return ev, delta


def passive_decay(weeks: int, mods: Modifiers) -> Delta:
    """Weekly drift: fame and well-being erode slowly, hype fast; competition drains hype."""
    drain = 2.0 * competition_level(weeks)
    return {
        "fame": -int(round(1.0 * mods.decay_multiplier)),
        "well_being": -int(round(1.0 * mods.decay_multiplier)),
        "hype": -int(round((3.0 + drain) * mods.decay_multiplier)),
    }


def append_log(
    logs: List[LogEntry],
    message: str,
    *,
    type: str = "info",
    week: int = 0,
    on: Optional[date] = None,
    cap: int = 100,
) -> List[LogEntry]:
    """Return a new rolling log with the entry appended (oldest dropped past `cap`)."""
    out = [*logs, LogEntry(message=message, type=type, week=int(week), date=on)]
    if cap > 0 and len(out) > cap:
        out = out[-cap:]
    return out
