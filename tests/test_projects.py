from __future__ import annotations

import random
from dataclasses import replace

import pytest

from content.schemas import scenario_from_dict
from core.achievements import ACHIEVEMENT_DEFS
from core.projects import (
    PROJECT_TEMPLATES,
    get_project_template,
    is_ready,
    progress_project,
    release_achievement_id,
    release_bonus,
    start_project,
)
from engine.selector import check_conditions
from tests.conftest import make_bank, playing_state, scenario_record


def test_templates_and_release_achievements_line_up():
    ids = {d.id for d in ACHIEVEMENT_DEFS}
    assert [p.required_progress for p in PROJECT_TEMPLATES] == [20, 50, 100, 150]
    for p in PROJECT_TEMPLATES:
        assert release_achievement_id(p) in ids


def test_start_project_is_fresh_copy():
    p = start_project("ep_1")
    assert (p.id, p.progress, p.quality) == ("EP_1", 0, 0)
    assert start_project("MIXTAPE") is None
    assert get_project_template(None) is None


def test_progress_adds_amount_and_quality():
    p = start_project("SINGLE_1")
    for seed in range(20):
        q = progress_project(p, 10, 40, random.Random(seed))
        assert q.progress == 10
        assert 2 <= q.quality <= 6
    worse = progress_project(p, 5, -200, random.Random(0))
    assert worse.quality == 0


def test_ready_and_release_bonus():
    p = replace(start_project("ALBUM_1"), progress=100, quality=35)
    assert is_ready(p)
    assert not is_ready(replace(p, progress=99))
    assert not is_ready(None)
    assert release_bonus(p, 40) == {"fame": 8, "hype": 11, "career_progress": 13}


def test_project_gates():
    needs = make_bank(scenario_record("Needs project", conditions={"project_required": True})).scenarios[0]
    idle = make_bank(scenario_record("Needs free hands", conditions={"no_project_required": True})).scenarios[0]
    s = playing_state()
    assert not check_conditions(needs, s) and check_conditions(idle, s)
    busy = replace(s, current_project=start_project("SINGLE_1"))
    assert check_conditions(needs, busy) and not check_conditions(idle, busy)


def test_camel_case_project_fields():
    s = scenario_from_dict(
        {
            "title": "Camel Project",
            "description": "Written with camelCase keys.",
            "conditions": {"noProjectRequired": True},
            "choices": [{"text": "Go", "outcome": {"text": "Started.", "startProject": "single_1", "progressProject": 4}}],
        }
    )
    o = s.choices[0].outcome
    assert (o.start_project, o.progress_project) == ("SINGLE_1", 4)
    assert s.conditions.no_project_required
    assert scenario_from_dict(s.to_dict()) == s


@pytest.mark.parametrize(
    "record, message",
    [
        (scenario_record("Bad project", choices=[{"text": "Go", "outcome": {"text": "x", "start_project": "MIXTAPE"}}]), "project"),
        (scenario_record("Negative work", choices=[{"text": "Go", "outcome": {"text": "x", "progress_project": -3}}]), "negative"),
        (scenario_record("Both project flags", conditions={"project_required": True, "no_project_required": True}), "exclusive"),
    ],
)
def test_invalid_project_records(record, message):
    with pytest.raises(ValueError, match=message):
        scenario_from_dict(record)


def test_default_bank_can_finish_every_project(bank):
    started = {c.outcome.start_project for s in bank for c in s.choices if c.outcome.start_project}
    assert started == {p.id for p in PROJECT_TEMPLATES}
    assert any(c.outcome.progress_project for s in bank for c in s.choices)
    assert any(c.outcome.progress_project for c in bank.filler.choices)
