"""
core.achievements
Achievement definitions and the (monotonic) evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable, List, Optional, Tuple

from .state import Achievement, GameState, PlayerStats, weeks_played


Condition = Callable[[GameState, PlayerStats], bool]


@dataclass(frozen=True)
class AchievementDef:
    id: str
    name: str
    description: str
    category: str
    condition: Optional[Condition] = None  # None => granted by outcomes only


def _has_role(role: str) -> Condition:
    return lambda s, _st: any(m.role == role for m in s.staff)


def _survived(difficulty: str, weeks: int) -> Condition:
    return lambda s, _st: s.difficulty == difficulty and weeks_played(s) >= weeks


def _all_difficulties(s: GameState, _st: PlayerStats) -> bool:
    by = s.statistics.careers_by_difficulty or {}
    return all(int(by.get(k, 0)) > 0 for k in ("beginner", "realistic", "hardcore"))


ACHIEVEMENT_DEFS: List[AchievementDef] = [
    # Milestones
    AchievementDef("CASH_10K", "Making Bank", "Accumulate $10,000.", "milestone", lambda s, st: st.cash >= 10_000),
    AchievementDef("CASH_100K", "Seriously Rich", "Accumulate $100,000.", "milestone", lambda s, st: st.cash >= 100_000),
    AchievementDef("CASH_1M", "Music Millionaire", "Accumulate $1,000,000.", "milestone", lambda s, st: st.cash >= 1_000_000),
    AchievementDef("FAME_25", "Local Hero", "Reach 25 Fame.", "milestone", lambda s, st: st.fame >= 25),
    AchievementDef("FAME_50", "Rising Star", "Reach 50 Fame.", "milestone", lambda s, st: st.fame >= 50),
    AchievementDef("FAME_100", "Superstar", "Reach 100 Fame.", "milestone", lambda s, st: st.fame >= 100),
    AchievementDef("HYPE_50", "Talk of the Town", "Reach 50 Hype.", "milestone", lambda s, st: st.hype >= 50),
    AchievementDef("HYPE_100", "Zeitgeist", "Reach 100 Hype.", "milestone", lambda s, st: st.hype >= 100),
    AchievementDef("CAREER_50", "Seasoned Pro", "Reach 50 Career Progress.", "milestone", lambda s, st: st.career_progress >= 50),
    AchievementDef("CAREER_100", "Living Legend", "Reach 100 Career Progress.", "milestone", lambda s, st: st.career_progress >= 100),
    # Longevity
    AchievementDef("WEEK_12", "Finding Your Feet", "Survive 12 weeks.", "career", lambda s, st: weeks_played(s) >= 12),
    AchievementDef("WEEK_52", "Year One", "Survive 52 weeks.", "career", lambda s, st: weeks_played(s) >= 52),
    AchievementDef("WEEK_104", "Two Year Legend", "Survive 104 weeks.", "career", lambda s, st: weeks_played(s) >= 104),
    AchievementDef("SURVIVOR_REALISTIC", "Industry Veteran", "Survive 52 weeks on Realistic.", "career", _survived("realistic", 52)),
    AchievementDef("SURVIVOR_HARDCORE", "Against All Odds", "Survive 26 weeks on Hardcore.", "career", _survived("hardcore", 26)),
    AchievementDef("DIFFICULTY_MASTER", "Difficulty Master", "Finish a career on every difficulty.", "career", _all_difficulties),
    # Releases
    AchievementDef("PROJECT_SINGLE_1", "First Pressing", "Release your debut single.", "project"),
    AchievementDef("PROJECT_EP_1", "Extended Play", "Release your debut EP.", "project"),
    AchievementDef("PROJECT_ALBUM_1", "The Big One", "Release your debut album.", "project"),
    AchievementDef("PROJECT_ALBUM_2", "Sophomore Success", "Release your second album.", "project"),
    # Business
    AchievementDef("STAFF_MANAGER", "Got a Manager", "Hire your first manager.", "business", _has_role("Manager")),
    AchievementDef("STAFF_BOOKER", "On the Books", "Hire your first booker.", "business", _has_role("Booker")),
    AchievementDef("STAFF_PROMOTER", "Hype Machine", "Hire your first promoter.", "business", _has_role("Promoter")),
    AchievementDef(
        "STAFF_FULL_TEAM", "Assemble the A-Team", "Have a Manager, Booker and Promoter at once.", "business",
        lambda s, st: {"Manager", "Booker", "Promoter"} <= {m.role for m in s.staff},
    ),
    AchievementDef("SIGNED_INDIE", "Indie Darling", "Sign with an independent label.", "business"),
    AchievementDef("SIGNED_DISTRIBUTION_ONLY", "Own Your Masters", "Sign a distribution-only deal.", "business"),
    AchievementDef("SIGNED_MAJOR_ADVANCE", "Take the Money", "Sign a major deal for a big advance.", "business"),
    AchievementDef("SIGNED_MAJOR_ROYALTIES", "The Long Game", "Sign a major deal for better royalties.", "business"),
    AchievementDef("SIGNED_360_DEAL", "All In", "Sign a 360 deal.", "business"),
    # Learning
    AchievementDef("LESSONS_5", "Student of the Game", "Learn 5 industry lessons.", "learning", lambda s, st: len(s.lessons_viewed) >= 5),
    AchievementDef("LESSONS_20", "Industry Scholar", "Learn 20 industry lessons.", "learning", lambda s, st: len(s.lessons_viewed) >= 20),
    # Events
    AchievementDef("SELLOUT", "Corporate Shill", "License a song for a major ad campaign.", "event"),
    AchievementDef("BATTLE_WINNER", "Best in Show", "Win the Battle of the Bands.", "event"),
    AchievementDef("VIRAL_HIT", "Viral Sensation", "Have a song go viral online.", "event"),
    AchievementDef("CRITICAL_DARLING", "For the Critics", "Receive a glowing review for a daring performance.", "event"),
    AchievementDef("BURNOUT_RECOVERY", "Bounced Back", "Recover from a serious burnout.", "event"),
]


def initial_achievements() -> List[Achievement]:
    return [Achievement(id=d.id, name=d.name, description=d.description, category=d.category) for d in ACHIEVEMENT_DEFS]


def unlocked_ids(achievements: Iterable[Achievement]) -> List[str]:
    return [a.id for a in achievements if a.unlocked]


def _flip(achievements: List[Achievement], ids: Iterable[str]) -> Tuple[List[Achievement], List[str]]:
    wanted = list(dict.fromkeys(ids))
    newly: List[str] = []
    out: List[Achievement] = []
    for a in achievements:
        if not a.unlocked and a.id in wanted:
            out.append(replace(a, unlocked=True))
            newly.append(a.id)
        else:
            out.append(a)
    newly.sort(key=wanted.index)
    return out, newly


def evaluate(state: GameState, new_stats: PlayerStats) -> Tuple[List[Achievement], List[str]]:
    """Re-derive the unlocked set from the aggregate state.

    Idempotent and monotonic: never unflips, and returns only ids unlocked by
    this call.
    """
    hits = [d.id for d in ACHIEVEMENT_DEFS if d.condition is not None and d.condition(state, new_stats)]
    return _flip(list(state.achievements), hits)


def grant(achievements: List[Achievement], ids: Iterable[str]) -> Tuple[List[Achievement], List[str]]:
    """Unlock explicitly granted achievements (outcome side effects, label signing)."""
    return _flip(list(achievements), ids)


def merge_unlocked(live: List[Achievement], other: List[Achievement]) -> List[Achievement]:
    """Union of unlocked flags; definitions come from `live` (falls back to `other`)."""
    base = live or other
    return grant(base, unlocked_ids(live) + unlocked_ids(other))[0]


def add_unseen(unseen: List[str], ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys([*unseen, *ids]))
