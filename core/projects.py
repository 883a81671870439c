"""
core.projects
Music projects (singles, EPs, albums): templates, progress and release payoff.

A career holds at most one project at a time. Choice outcomes start one or
push its progress; the weekly turn releases it once progress reaches the
template's requirement and grants PROJECT_<id>.
"""

from __future__ import annotations

import math
import random
from dataclasses import replace
from typing import List, Optional

from .state import Delta, Project

PROJECT_TEMPLATES: List[Project] = [
    Project(id="SINGLE_1", name="Debut Single", required_progress=20),
    Project(id="EP_1", name="Debut EP", required_progress=50),
    Project(id="ALBUM_1", name="Full-Length Album", required_progress=100),
    Project(id="ALBUM_2", name="Sophomore Album", required_progress=150),
]

_BY_ID = {p.id: p for p in PROJECT_TEMPLATES}


def get_project_template(project_id: Optional[str]) -> Optional[Project]:
    if not project_id:
        return None
    return _BY_ID.get(str(project_id).strip().upper())


def start_project(project_id: Optional[str]) -> Optional[Project]:
    template = get_project_template(project_id)
    if template is None:
        return None
    return replace(template, progress=0, quality=0)


def progress_project(project: Project, amount: int, fame_delta: int, rng: random.Random) -> Project:
    """Add progress; quality grows by a 0-4 roll plus a twentieth of the outcome's fame."""
    gain = math.floor(rng.random() * 5 + fame_delta / 20)
    return replace(
        project,
        progress=project.progress + max(0, int(amount)),
        quality=max(0, project.quality + gain),
    )


def is_ready(project: Optional[Project]) -> bool:
    return project is not None and project.progress >= project.required_progress


def release_bonus(project: Project, hype: int) -> Delta:
    q = int(project.quality)
    quality_bonus = q // 10
    return {
        "fame": 5 + quality_bonus,
        "hype": math.floor(q / 5 + hype / 10),
        "career_progress": 10 + quality_bonus,
    }


def release_achievement_id(project: Project) -> str:
    return f"PROJECT_{project.id}"
