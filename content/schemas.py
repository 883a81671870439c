"""content.schemas

Contracts for the content bank:
- Scenario: a weekly vignette with 1-4 choices and optional eligibility conditions.
- Choice / ChoiceOutcome: authored stat deltas plus optional side effects.

Schema strategy:
Bank records may come from Python literals or JSON files, with either
snake_case or camelCase keys. Everything is normalized here and validated
before it reaches the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from core.projects import get_project_template
from core.state import Lesson

ALLOWED_ROLES = {"Manager", "Booker", "Promoter"}
ALLOWED_DIFFICULTIES = {"beginner", "realistic", "hardcore"}
STAT_FIELDS = ("cash", "fame", "well_being", "career_progress", "hype")

_ALIASES = {
    "wellBeing": "well_being",
    "careerProgress": "career_progress",
    "hireStaff": "hire_staff",
    "offerLabel": "offer_label",
    "viewContract": "offer_label",
    "signLabel": "sign_label",
    "grantAchievement": "grant_achievement",
    "startProject": "start_project",
    "progressProject": "progress_project",
    "minFame": "min_fame",
    "maxFame": "max_fame",
    "minFameByDifficulty": "min_fame_by_difficulty",
    "minCash": "min_cash",
    "maxCash": "max_cash",
    "minWellBeing": "min_well_being",
    "maxWellBeing": "max_well_being",
    "minCareerProgress": "min_career_progress",
    "minHype": "min_hype",
    "maxHype": "max_hype",
    "requiredGenre": "required_genre",
    "requiredAchievementId": "required_achievement_id",
    "requiresStaff": "requires_staff",
    "missingStaff": "missing_staff",
    "requiresLabel": "requires_label",
    "requiresNoLabel": "requires_no_label",
    "requiresContractEligibility": "requires_contract_eligibility",
    "projectRequired": "project_required",
    "noProjectRequired": "no_project_required",
    "realWorldExample": "real_world_example",
    "tipForFuture": "tip_for_future",
    "conceptTaught": "concept_taught",
}


def _as_int(x: Any, default: int = 0) -> int:
    try:
        return int(x)
    except (TypeError, ValueError):
        return int(default)


def _opt_int(x: Any) -> Optional[int]:
    if x is None:
        return None
    return _as_int(x)


def _snake(d: Mapping[str, Any]) -> Dict[str, Any]:
    return {_ALIASES.get(str(k), str(k)): v for k, v in dict(d).items()}


def normalize_role(role: Any) -> Optional[str]:
    r = str(role or "").strip()
    if not r:
        return None
    for allowed in ALLOWED_ROLES:
        if r.lower() == allowed.lower():
            return allowed
    return r


def normalize_roles(roles: Any) -> List[str]:
    if roles is None:
        return []
    if isinstance(roles, str):
        roles = [roles]
    out: List[str] = []
    for r in roles:
        nr = normalize_role(r)
        if nr:
            out.append(nr)
    return out


def normalize_genres(genres: Any) -> List[str]:
    if genres is None:
        return []
    if isinstance(genres, str):
        genres = [genres]
    return [str(g).strip().lower() for g in genres if str(g or "").strip()]


@dataclass(frozen=True)
class ScenarioConditions:
    min_fame: Optional[int] = None
    max_fame: Optional[int] = None
    min_fame_by_difficulty: Dict[str, int] = field(default_factory=dict)
    min_cash: Optional[int] = None
    max_cash: Optional[int] = None
    min_well_being: Optional[int] = None
    max_well_being: Optional[int] = None
    min_career_progress: Optional[int] = None
    min_hype: Optional[int] = None
    max_hype: Optional[int] = None
    required_genre: List[str] = field(default_factory=list)
    required_achievement_id: Optional[str] = None
    requires_staff: List[str] = field(default_factory=list)
    missing_staff: List[str] = field(default_factory=list)
    requires_label: bool = False
    requires_no_label: bool = False
    requires_contract_eligibility: bool = False
    project_required: bool = False
    no_project_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for k, v in self.__dict__.items():
            if v is None or v is False or v == [] or v == {}:
                continue
            out[k] = list(v) if isinstance(v, list) else (dict(v) if isinstance(v, dict) else v)
        return out


@dataclass(frozen=True)
class ChoiceOutcome:
    text: str
    cash: int = 0
    fame: int = 0
    well_being: int = 0
    career_progress: int = 0
    hype: int = 0
    hire_staff: Optional[str] = None
    offer_label: Optional[str] = None
    sign_label: Optional[str] = None
    grant_achievement: Optional[str] = None
    start_project: Optional[str] = None
    progress_project: int = 0
    lesson: Optional[Lesson] = None

    def deltas(self) -> Dict[str, int]:
        return {k: int(getattr(self, k)) for k in STAT_FIELDS}

    def label_ids(self) -> List[str]:
        return [x for x in (self.offer_label, self.sign_label) if x]


@dataclass(frozen=True)
class Choice:
    text: str
    outcome: ChoiceOutcome


@dataclass(frozen=True)
class Scenario:
    title: str
    description: str
    choices: List[Choice]
    conditions: Optional[ScenarioConditions] = None
    once: bool = False

    def label_ids(self) -> List[str]:
        """Labels this scenario can reveal or sign (non-empty => label-offer scenario)."""
        out: List[str] = []
        for c in self.choices:
            for lid in c.outcome.label_ids():
                if lid not in out:
                    out.append(lid)
        return out

    def to_dict(self) -> Dict[str, Any]:
        def outcome_dict(o: ChoiceOutcome) -> Dict[str, Any]:
            d: Dict[str, Any] = {"text": o.text, **o.deltas()}
            for k in ("hire_staff", "offer_label", "sign_label", "grant_achievement", "start_project", "progress_project"):
                if getattr(o, k):
                    d[k] = getattr(o, k)
            if o.lesson is not None:
                d["lesson"] = dict(o.lesson.__dict__)
            return d

        out: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "choices": [{"text": c.text, "outcome": outcome_dict(c.outcome)} for c in self.choices],
        }
        if self.conditions is not None:
            out["conditions"] = self.conditions.to_dict()
        if self.once:
            out["once"] = True
        return out


def lesson_from_dict(data: Any) -> Optional[Lesson]:
    if not isinstance(data, Mapping):
        return None
    d = _snake(data)
    title = str(d.get("title") or "").strip()
    if not title:
        return None
    return Lesson(
        title=title,
        explanation=str(d.get("explanation") or "").strip(),
        real_world_example=str(d.get("real_world_example") or "").strip(),
        tip_for_future=str(d.get("tip_for_future") or "").strip(),
        concept_taught=str(d.get("concept_taught") or "").strip(),
    )


def outcome_from_dict(data: Mapping[str, Any]) -> ChoiceOutcome:
    d = _snake(data)
    return ChoiceOutcome(
        text=str(d.get("text") or "").strip(),
        cash=_as_int(d.get("cash")),
        fame=_as_int(d.get("fame")),
        well_being=_as_int(d.get("well_being")),
        career_progress=_as_int(d.get("career_progress")),
        hype=_as_int(d.get("hype")),
        hire_staff=normalize_role(d.get("hire_staff")),
        offer_label=(str(d["offer_label"]).strip() or None) if d.get("offer_label") else None,
        sign_label=(str(d["sign_label"]).strip() or None) if d.get("sign_label") else None,
        grant_achievement=(str(d["grant_achievement"]).strip() or None) if d.get("grant_achievement") else None,
        start_project=(str(d["start_project"]).strip().upper() or None) if d.get("start_project") else None,
        progress_project=_as_int(d.get("progress_project")),
        lesson=lesson_from_dict(d.get("lesson")),
    )


def conditions_from_dict(data: Any) -> Optional[ScenarioConditions]:
    if not isinstance(data, Mapping) or not data:
        return None
    d = _snake(data)
    by_diff = d.get("min_fame_by_difficulty") or {}
    return ScenarioConditions(
        min_fame=_opt_int(d.get("min_fame")),
        max_fame=_opt_int(d.get("max_fame")),
        min_fame_by_difficulty={str(k): _as_int(v) for k, v in dict(by_diff).items()},
        min_cash=_opt_int(d.get("min_cash")),
        max_cash=_opt_int(d.get("max_cash")),
        min_well_being=_opt_int(d.get("min_well_being")),
        max_well_being=_opt_int(d.get("max_well_being")),
        min_career_progress=_opt_int(d.get("min_career_progress")),
        min_hype=_opt_int(d.get("min_hype")),
        max_hype=_opt_int(d.get("max_hype")),
        required_genre=normalize_genres(d.get("required_genre")),
        required_achievement_id=(str(d["required_achievement_id"]).strip() or None) if d.get("required_achievement_id") else None,
        requires_staff=normalize_roles(d.get("requires_staff")),
        missing_staff=normalize_roles(d.get("missing_staff")),
        requires_label=bool(d.get("requires_label", False)),
        requires_no_label=bool(d.get("requires_no_label", False)),
        requires_contract_eligibility=bool(d.get("requires_contract_eligibility", False)),
        project_required=bool(d.get("project_required", False)),
        no_project_required=bool(d.get("no_project_required", False)),
    )


def scenario_from_dict(data: Mapping[str, Any]) -> Scenario:
    """Parse and validate one bank record."""
    d = _snake(data)
    choices: List[Choice] = []
    for raw in d.get("choices") or []:
        if not isinstance(raw, Mapping):
            continue
        choices.append(
            Choice(
                text=str(raw.get("text") or "").strip(),
                outcome=outcome_from_dict(raw.get("outcome") or {}),
            )
        )
    s = Scenario(
        title=str(d.get("title") or "").strip(),
        description=str(d.get("description") or "").strip(),
        choices=choices,
        conditions=conditions_from_dict(d.get("conditions")),
        once=bool(d.get("once", False)),
    )
    validate_scenario(s)
    return s


def validate_scenario(s: Scenario) -> None:
    if len((s.title or "").strip()) < 3:
        raise ValueError("scenario.title too short")
    if len((s.description or "").strip()) < 10:
        raise ValueError(f"scenario {s.title!r}: description too short")
    if not isinstance(s.choices, list) or not 1 <= len(s.choices) <= 4:
        raise ValueError(f"scenario {s.title!r}: choices must be a list of 1-4 items")

    for i, c in enumerate(s.choices):
        if len((c.text or "").strip()) < 2:
            raise ValueError(f"scenario {s.title!r} choice {i}: text too short")
        if not (c.outcome.text or "").strip():
            raise ValueError(f"scenario {s.title!r} choice {i}: outcome text empty")
        if c.outcome.hire_staff and c.outcome.hire_staff not in ALLOWED_ROLES:
            raise ValueError(f"scenario {s.title!r} choice {i}: unknown staff role {c.outcome.hire_staff!r}")
        if c.outcome.start_project and get_project_template(c.outcome.start_project) is None:
            raise ValueError(f"scenario {s.title!r} choice {i}: unknown project {c.outcome.start_project!r}")
        if c.outcome.progress_project < 0:
            raise ValueError(f"scenario {s.title!r} choice {i}: progress_project must not be negative")

    cond = s.conditions
    if cond is None:
        return None
    for role in [*cond.requires_staff, *cond.missing_staff]:
        if role not in ALLOWED_ROLES:
            raise ValueError(f"scenario {s.title!r}: unknown staff role {role!r}")
    for k in cond.min_fame_by_difficulty:
        if k not in ALLOWED_DIFFICULTIES:
            raise ValueError(f"scenario {s.title!r}: unknown difficulty {k!r}")
    if cond.requires_label and cond.requires_no_label:
        raise ValueError(f"scenario {s.title!r}: requires_label and requires_no_label are exclusive")
    if cond.project_required and cond.no_project_required:
        raise ValueError(f"scenario {s.title!r}: project_required and no_project_required are exclusive")
    return None
