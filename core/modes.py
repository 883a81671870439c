"""
core.modes
Difficulty specifications and the modifier engine.

Kept in core so balancing lives in one place, but UI can still display labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class DifficultySpec:
    key: str
    name: str
    desc: str
    starting_cash: int
    grace_period_weeks: int
    stats_decay_rate: float
    salary_multiplier: float
    advance_multiplier: float
    income_multiplier: float
    annual_inflation: float
    random_events: bool
    event_chance: float
    volatility: float
    staff_unlock_fame: int
    contract_fame_threshold: int


@dataclass(frozen=True)
class Modifiers:
    decay_multiplier: float
    cost_multiplier: float
    income_multiplier: float
    inflation_multiplier: float


DEFAULT_DIFFICULTIES: Dict[str, DifficultySpec] = {
    "beginner": DifficultySpec(
        key="beginner",
        name="Beginner Mode",
        desc="Extra resources and forgiveness. Learn the business without excessive pressure.",
        starting_cash=2000,
        grace_period_weeks=12,
        stats_decay_rate=0.5,
        salary_multiplier=0.7,
        advance_multiplier=1.5,
        income_multiplier=1.2,
        annual_inflation=0.02,
        random_events=False,
        event_chance=0.0,
        volatility=0.6,
        staff_unlock_fame=5,
        contract_fame_threshold=20,
    ),
    "realistic": DifficultySpec(
        key="realistic",
        name="Realistic Mode",
        desc="The true industry experience. Balanced difficulty, real-world challenges.",
        starting_cash=500,
        grace_period_weeks=6,
        stats_decay_rate=1.0,
        salary_multiplier=1.0,
        advance_multiplier=1.0,
        income_multiplier=1.0,
        annual_inflation=0.05,
        random_events=True,
        event_chance=0.15,
        volatility=1.0,
        staff_unlock_fame=10,
        contract_fame_threshold=30,
    ),
    "hardcore": DifficultySpec(
        key="hardcore",
        name="Hardcore Mode",
        desc="Brutal realism. Debt accrues interest, crises hit often, staff cost more.",
        starting_cash=200,
        grace_period_weeks=3,
        stats_decay_rate=1.5,
        salary_multiplier=1.3,
        advance_multiplier=0.7,
        income_multiplier=0.85,
        annual_inflation=0.08,
        random_events=True,
        event_chance=0.25,
        volatility=1.4,
        staff_unlock_fame=15,
        contract_fame_threshold=40,
    ),
}


def get_difficulty_spec(key: str) -> DifficultySpec:
    return DEFAULT_DIFFICULTIES.get(key, DEFAULT_DIFFICULTIES["realistic"])


def _wealth_cost_tier(cash: int) -> float:
    if cash >= 500_000:
        return 1.5
    if cash >= 100_000:
        return 1.25
    if cash >= 20_000:
        return 1.1
    return 1.0


def _progress_decay_tier(career_progress: int) -> float:
    if career_progress >= 75:
        return 1.2
    if career_progress >= 50:
        return 1.1
    return 1.0


def compute_modifiers(spec: DifficultySpec, weeks_played: int, career_progress: int, cash: int) -> Modifiers:
    """Scale decay, costs and income over session length and wealth/progress tier.

    Pure: depends only on the static difficulty table and the four inputs.
    """
    weeks = max(0, int(weeks_played))
    inflation = (1.0 + spec.annual_inflation) ** (weeks / 52.0)
    decay = spec.stats_decay_rate * (1.0 + min(0.5, weeks / 208.0)) * _progress_decay_tier(career_progress)
    cost = _wealth_cost_tier(cash) * (1.1 if career_progress >= 50 else 1.0)
    income = spec.income_multiplier * (1.0 + max(0, career_progress) / 200.0)
    return Modifiers(
        decay_multiplier=float(decay),
        cost_multiplier=float(cost),
        income_multiplier=float(income),
        inflation_multiplier=float(inflation),
    )
