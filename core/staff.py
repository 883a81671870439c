"""
core.staff
Staff contract manager: hiring, payroll, expiry eviction, termination, extension.

All functions are pure over the roster (a list of HiredStaff) and take any
randomness as an explicit `rng`.
"""

from __future__ import annotations

import calendar
import math
import random
from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, List, Optional, Tuple

from .modes import Modifiers
from .state import Delta, HiredStaff, StaffBonus, TerminationOutcome


ROLES = ("Manager", "Booker", "Promoter")
TIERS = ("entry", "experienced", "elite")
CONTRACT_DURATIONS = (3, 6, 12)
DEFAULT_SCENARIO_HIRE_MONTHS = 6

HIRE_BUFFER_MONTHS = 3
SEVERANCE_MONTHS = 2
LEGAL_SEVERANCE_MONTHS = 3
EXTENSION_MORALE_BONUS = 3
PAYROLL_INTERVAL_DAYS = 30

LEGAL_COMPLICATION_CHANCE: Dict[str, float] = {"entry": 0.0, "experienced": 0.15, "elite": 0.30}


@dataclass(frozen=True)
class StaffTemplate:
    id: str
    name: str
    role: str
    tier: str
    salary: int  # per month, before difficulty scaling
    bonuses: List[StaffBonus]


STAFF_TEMPLATES: List[StaffTemplate] = [
    StaffTemplate("MANAGER_ENTRY", "Sam Okafor", "Manager", "entry", 400, [
        StaffBonus("fame", 1, "+1 Fame/week from local connections"),
    ]),
    StaffTemplate("MANAGER_EXPERIENCED", "Alex 'The Fixer' Chen", "Manager", "experienced", 900, [
        StaffBonus("cash", 10, "+10% income from better deals"),
        StaffBonus("fame", 1, "+1 Fame/week from industry connections"),
    ]),
    StaffTemplate("MANAGER_ELITE", "Diana Mensah", "Manager", "elite", 2000, [
        StaffBonus("cash", 20, "+20% income from major-league negotiation"),
        StaffBonus("fame", 2, "+2 Fame/week from global connections"),
        StaffBonus("well_being", 1, "+1 Well-Being/week, she handles the chaos"),
    ]),
    StaffTemplate("BOOKER_ENTRY", "Tunde Bello", "Booker", "entry", 250, [
        StaffBonus("cash", 5, "+5% income from steady bookings"),
    ]),
    StaffTemplate("BOOKER_EXPERIENCED", "Maya 'The Calendar' Singh", "Booker", "experienced", 600, [
        StaffBonus("cash", 10, "+10% income from better negotiated fees"),
        StaffBonus("hype", 1, "+1 Hype/week from bigger stages"),
    ]),
    StaffTemplate("BOOKER_ELITE", "Jordan Blake", "Booker", "elite", 1400, [
        StaffBonus("cash", 15, "+15% income from festival circuits"),
        StaffBonus("fame", 1, "+1 Fame/week from headline slots"),
    ]),
    StaffTemplate("PROMOTER_ENTRY", "Kemi Ade", "Promoter", "entry", 300, [
        StaffBonus("hype", 2, "+2 Hype/week from street promo"),
    ]),
    StaffTemplate("PROMOTER_EXPERIENCED", "Leo 'The Mouthpiece' Petrov", "Promoter", "experienced", 700, [
        StaffBonus("hype", 3, "+3 Hype/week from constant PR"),
    ]),
    StaffTemplate("PROMOTER_ELITE", "Nia Roberts", "Promoter", "elite", 1600, [
        StaffBonus("hype", 5, "+5 Hype/week from national campaigns"),
        StaffBonus("fame", 1, "+1 Fame/week from press coverage"),
    ]),
]

# (weight, well_being, fame, hype, text) per tier
TERMINATION_TABLES: Dict[str, List[Tuple[float, int, int, int, str]]] = {
    "entry": [
        (6, -2, 0, 0, "The parting is amicable. You both knew it wasn't working."),
        (3, -5, 0, 0, "It's an awkward conversation, but it's over quickly."),
        (1, 2, 0, 0, "Honestly, you feel lighter already."),
    ],
    "experienced": [
        (4, -5, 0, 0, "They take it professionally, though the mood is tense."),
        (3, -8, 0, -2, "Word gets around the scene that your team is in flux."),
        (2, -3, 0, 0, "They wish you well and leave their contacts behind."),
        (1, 3, 1, 0, "The clean break earns you respect for decisiveness."),
    ],
    "elite": [
        (3, -10, -2, -5, "They publicly question your direction on the way out."),
        (3, -6, 0, -3, "The industry notices a big name has left your camp."),
        (2, -15, -3, -8, "It turns ugly. Blogs run the story for a week."),
        (2, 4, 2, 3, "Fans cheer your independence. The story plays in your favor."),
    ],
}


def get_template(template_id: str) -> Optional[StaffTemplate]:
    return next((t for t in STAFF_TEMPLATES if t.id == template_id), None)


def entry_template_for(role: str) -> Optional[StaffTemplate]:
    return next((t for t in STAFF_TEMPLATES if t.role == role and t.tier == "entry"), None)


def add_months(d: date, months: int) -> date:
    m = d.month - 1 + int(months)
    year = d.year + m // 12
    month = m % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_until(expires: date, now: date) -> int:
    return max(0, int(math.ceil((expires - now).days / 30.0)))


def effective_salary(template: StaffTemplate, salary_multiplier: float) -> int:
    return int(round(template.salary * salary_multiplier))


def hire_from_template(
    template: StaffTemplate,
    duration: int,
    hired_on: date,
    salary_multiplier: float = 1.0,
) -> HiredStaff:
    expires = add_months(hired_on, duration)
    return HiredStaff(
        template_id=template.id,
        name=template.name,
        role=template.role,
        tier=template.tier,
        salary=effective_salary(template, salary_multiplier),
        bonuses=list(template.bonuses),
        hired_date=hired_on,
        contract_duration=int(duration),
        contract_expires_date=expires,
        months_remaining=int(duration),
    )


def update_contract_time(staff: List[HiredStaff], now: date) -> List[HiredStaff]:
    """monthsRemaining is derived from the expiry date, never decremented by hand."""
    return [replace(s, months_remaining=months_until(s.contract_expires_date, now)) for s in staff]


def hire_rejection(staff: List[HiredStaff], cash: int, template: StaffTemplate, salary_multiplier: float) -> Optional[str]:
    """Return why a hire is refused, or None if it may proceed."""
    if any(s.role == template.role for s in staff):
        return "role_filled"
    if cash < HIRE_BUFFER_MONTHS * effective_salary(template, salary_multiplier):
        return "insufficient_funds"
    return None


def hire(
    staff: List[HiredStaff],
    cash: int,
    template: StaffTemplate,
    duration: int,
    hired_on: date,
    salary_multiplier: float = 1.0,
) -> Optional[Tuple[List[HiredStaff], int, HiredStaff]]:
    """Returns (new roster, new cash, hire) or None when refused."""
    if hire_rejection(staff, cash, template, salary_multiplier) is not None:
        return None
    member = hire_from_template(template, duration, hired_on, salary_multiplier)
    return [*staff, member], int(cash - member.salary), member


def passive_bonus_delta(staff: List[HiredStaff]) -> Delta:
    """Flat weekly bonuses (fame/hype/well_being); cash bonuses are handled as income %."""
    out: Delta = {}
    for s in staff:
        for b in s.bonuses:
            if b.stat in ("fame", "hype", "well_being"):
                out[b.stat] = out.get(b.stat, 0) + int(b.value)
    return out


def income_bonus_pct(staff: List[HiredStaff]) -> int:
    return sum(int(b.value) for s in staff for b in s.bonuses if b.stat == "cash")


@dataclass(frozen=True)
class PayrollResult:
    staff: List[HiredStaff]
    cost: int
    paid: bool
    last_payment_date: date
    evicted: List[HiredStaff]


def run_payroll(
    staff: List[HiredStaff],
    now: date,
    last_payment_date: date,
    mods: Modifiers,
) -> PayrollResult:
    """Monthly payroll: deduct salaries, refresh months remaining, evict expired contracts."""
    if (now - last_payment_date).days < PAYROLL_INTERVAL_DAYS:
        return PayrollResult(staff=list(staff), cost=0, paid=False, last_payment_date=last_payment_date, evicted=[])

    total = sum(int(s.salary) for s in staff)
    cost = int(round(total * mods.cost_multiplier * mods.inflation_multiplier))

    refreshed = update_contract_time(staff, now)
    kept = [s for s in refreshed if s.months_remaining > 0]
    evicted = [s for s in refreshed if s.months_remaining <= 0]
    return PayrollResult(staff=kept, cost=cost, paid=True, last_payment_date=now, evicted=evicted)


@dataclass(frozen=True)
class TerminationResult:
    staff: List[HiredStaff]
    severance: int
    outcome: TerminationOutcome


def terminate(staff: List[HiredStaff], index: int, rng: random.Random) -> Optional[TerminationResult]:
    """Remove staff[index]; severance is 2x salary, 3x on a legal complication."""
    if index < 0 or index >= len(staff):
        return None
    member = staff[index]

    legal = rng.random() < LEGAL_COMPLICATION_CHANCE.get(member.tier, 0.0)
    months = LEGAL_SEVERANCE_MONTHS if legal else SEVERANCE_MONTHS
    severance = int(member.salary) * months

    table = TERMINATION_TABLES.get(member.tier) or TERMINATION_TABLES["entry"]
    roll = rng.random() * sum(row[0] for row in table)
    acc = 0.0
    chosen = table[-1]
    for row in table:
        acc += row[0]
        if roll < acc:
            chosen = row
            break
    _, wb, fame, hype, text = chosen
    if legal:
        text = f"{text} Their lawyer gets involved and the settlement costs extra."

    outcome = TerminationOutcome(
        text=f"You let {member.name} ({member.role}) go. {text}",
        staff_name=member.name,
        role=member.role,
        tier=member.tier,
        severance=severance,
        well_being=int(wb),
        fame=int(fame),
        hype=int(hype),
        legal_complication=bool(legal),
    )
    rest = [s for i, s in enumerate(staff) if i != index]
    return TerminationResult(staff=rest, severance=severance, outcome=outcome)


def extend(staff: List[HiredStaff], index: int, months: int, now: date) -> Optional[List[HiredStaff]]:
    if index < 0 or index >= len(staff) or int(months) not in CONTRACT_DURATIONS:
        return None
    member = staff[index]
    expires = add_months(member.contract_expires_date, months)
    updated = replace(
        member,
        contract_expires_date=expires,
        contract_duration=int(member.contract_duration) + int(months),
        months_remaining=months_until(expires, now),
    )
    return [updated if i == index else s for i, s in enumerate(staff)]
