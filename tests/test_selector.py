from __future__ import annotations

import random
from collections import Counter
from dataclasses import replace

import pytest

from content.bank import FILLER_TITLE
from content.labels import get_label
from core.staff import get_template, hire_from_template
from engine.selector import (
    candidate_weight,
    check_conditions,
    forced_label_offer,
    is_label_offer,
    label_offer_tier,
    recency_weight,
    register_selection,
    select_scenario,
)
from tests.conftest import make_bank, playing_state, scenario_record


def _one(record):
    return make_bank(record).scenarios[0]


def test_no_conditions_always_eligible():
    assert check_conditions(_one(scenario_record("Anything")), playing_state())


def test_stat_thresholds():
    s = _one(scenario_record("Mid fame", conditions={"min_fame": 10, "max_fame": 20, "max_cash": -1}))
    st = playing_state(cash=-5)
    assert not check_conditions(s, st)
    assert check_conditions(s, replace(st, player_stats=replace(st.player_stats, fame=15)))
    assert not check_conditions(s, replace(st, player_stats=replace(st.player_stats, fame=21)))
    assert not check_conditions(s, replace(st, player_stats=replace(st.player_stats, fame=15, cash=0)))


def test_fame_threshold_scales_with_difficulty():
    s = _one(scenario_record("Scaled", conditions={"min_fame_by_difficulty": {"beginner": 5, "hardcore": 30}}))
    beginner = playing_state("beginner")
    hardcore = playing_state("hardcore")
    fame = lambda st, f: replace(st, player_stats=replace(st.player_stats, fame=f))
    assert check_conditions(s, fame(beginner, 10))
    assert not check_conditions(s, fame(hardcore, 10))
    assert check_conditions(s, fame(hardcore, 30))
    # no entry for realistic -> no requirement
    assert check_conditions(s, playing_state("realistic"))


def test_staff_genre_achievement_and_label_gates():
    needs = _one(scenario_record("Needs manager", conditions={"requires_staff": ["Manager"]}))
    lacks = _one(scenario_record("Lacks manager", conditions={"missing_staff": ["Manager"]}))
    genre = _one(scenario_record("Genre gate", conditions={"required_genre": ["Indie Rock", "jazz"]}))
    ach = _one(scenario_record("Achievement gate", conditions={"required_achievement_id": "SELLOUT"}))
    signed = _one(scenario_record("Label gate", conditions={"requires_label": True}))

    st = playing_state()
    assert not check_conditions(needs, st) and check_conditions(lacks, st)
    managed = replace(st, staff=[hire_from_template(get_template("MANAGER_ENTRY"), 6, st.current_date)])
    assert check_conditions(needs, managed) and not check_conditions(lacks, managed)

    assert check_conditions(genre, st)
    assert not check_conditions(genre, replace(st, artist_genre="metal"))

    assert not check_conditions(ach, st)
    unlocked = [replace(a, unlocked=True) if a.id == "SELLOUT" else a for a in st.achievements]
    assert check_conditions(ach, replace(st, achievements=unlocked))

    assert not check_conditions(signed, st)
    assert check_conditions(signed, replace(st, current_label=get_label("INDIE")))


def test_recency_weight_curve():
    used = ["A", "B", "C"]
    assert recency_weight("Z", used) == 1.0
    assert recency_weight("C", used) == pytest.approx(0.01)
    assert recency_weight("A", used) == pytest.approx(0.01 + 0.99 * (2 / 10) ** 2)
    far = ["A"] + [f"T{i}" for i in range(10)]
    assert recency_weight("A", far) == pytest.approx(1.0)


def test_filler_penalty_is_quadratic(bank, config):
    spread = [f"T{i}" for i in range(11)]
    once = playing_state(used_scenario_titles=[FILLER_TITLE, *spread])
    twice = playing_state(used_scenario_titles=[FILLER_TITLE, FILLER_TITLE, *spread])
    assert candidate_weight(bank.filler, once, bank, config) == pytest.approx(1 / 2)
    assert candidate_weight(bank.filler, twice, bank, config) == pytest.approx(1 / 5)


def test_recently_seen_scenario_is_picked_far_less_often(config):
    bank = make_bank(scenario_record("Seen last turn"), scenario_record("Never seen"))
    st = playing_state(used_scenario_titles=["Seen last turn"])
    rng = random.Random(99)
    counts = Counter(select_scenario(st, bank, rng, config).title for _ in range(2_000))
    assert counts["Never seen"] > 10 * counts["Seen last turn"]


def test_used_once_scenarios_are_excluded(config):
    bank = make_bank(scenario_record("One shot", once=True), scenario_record("Repeatable"))
    st = playing_state(used_scenario_titles=["One shot"])
    rng = random.Random(1)
    assert {select_scenario(st, bank, rng, config).title for _ in range(200)} == {"Repeatable"}


def test_filler_when_nothing_fits(config):
    bank = make_bank(scenario_record("Superstar only", conditions={"min_fame": 90}))
    st = playing_state()
    assert select_scenario(st, bank, random.Random(0), config).title == FILLER_TITLE


def test_filler_streak_forces_real_content(config):
    bank = make_bank(
        scenario_record("Superstar only", conditions={"min_fame": 90}),
        scenario_record("Spent", once=True, conditions={"min_fame": 90}),
    )
    st = playing_state(consecutive_fallback_count=3, used_scenario_titles=["Spent"])
    assert select_scenario(st, bank, random.Random(0), config).title == "Superstar only"


def test_forced_contract_offer(bank, config):
    st = playing_state(
        contract_eligibility_unlocked=True,
        used_scenario_titles=["The Open Mic Night", "Wedding Gig Offer"],
    )
    st = replace(st, player_stats=replace(st.player_stats, fame=35))
    picked = select_scenario(st, bank, random.Random(5), config)
    assert is_label_offer(picked)
    assert label_offer_tier(picked) == 1
    assert picked.title == "The Indie Label Offer"


def test_no_forced_offer_when_recently_offered_or_signed(bank, config):
    base = playing_state(contract_eligibility_unlocked=True)
    eligible = list(bank)
    recent = replace(base, used_scenario_titles=["The Indie Label Offer", "A", "B", "C"])
    assert forced_label_offer(eligible, recent, bank, config) is None
    signed = replace(base, current_label=get_label("INDIE"))
    assert forced_label_offer(eligible, signed, bank, config) is None
    locked = replace(base, contract_eligibility_unlocked=False)
    assert forced_label_offer(eligible, locked, bank, config) is None
    old = replace(base, used_scenario_titles=["The Indie Label Offer", "A", "B", "C", "D", "E"])
    assert forced_label_offer(eligible, old, bank, config) is not None


def test_register_selection_tracks_filler_streak(bank):
    titles, count = register_selection(["A"], 2, bank.filler, bank)
    assert titles == ["A", FILLER_TITLE] and count == 3
    real = bank.scenarios[0]
    titles, count = register_selection(titles, count, real, bank)
    assert titles[-1] == real.title and count == 0
