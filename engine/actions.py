"""engine.actions

Action vocabulary (the only inputs the transition function accepts) and the
effects it asks the host to perform.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from core.state import CareerHistory, GameState, GameStatistics


@dataclass(frozen=True)
class StartSetup:
    kind: str = "start_setup"


@dataclass(frozen=True)
class SubmitSetup:
    name: str
    genre: str
    difficulty: str = "realistic"
    kind: str = "submit_setup"


@dataclass(frozen=True)
class LoadScenario:
    kind: str = "load_scenario"


@dataclass(frozen=True)
class SelectChoice:
    choice: int  # index into current_scenario.choices
    kind: str = "select_choice"


@dataclass(frozen=True)
class DismissOutcome:
    kind: str = "dismiss_outcome"


@dataclass(frozen=True)
class Restart:
    kind: str = "restart"


@dataclass(frozen=True)
class HireStaff:
    template_id: str
    duration: int = 6
    kind: str = "hire_staff"


@dataclass(frozen=True)
class TerminateStaff:
    index: int
    kind: str = "terminate_staff"


@dataclass(frozen=True)
class ExtendStaffContract:
    index: int
    months: int
    kind: str = "extend_staff_contract"


@dataclass(frozen=True)
class SignContract:
    kind: str = "sign_contract"


@dataclass(frozen=True)
class DeclineContract:
    kind: str = "decline_contract"


@dataclass(frozen=True)
class LoadGame:
    state: GameState
    kind: str = "load_game"


@dataclass(frozen=True)
class OpenModal:
    name: str
    kind: str = "open_modal"


@dataclass(frozen=True)
class CloseModal:
    kind: str = "close_modal"


@dataclass(frozen=True)
class AdvanceTutorial:
    kind: str = "advance_tutorial"


@dataclass(frozen=True)
class SkipTutorial:
    kind: str = "skip_tutorial"


Action = Union[
    StartSetup,
    SubmitSetup,
    LoadScenario,
    SelectChoice,
    DismissOutcome,
    Restart,
    HireStaff,
    TerminateStaff,
    ExtendStaffContract,
    SignContract,
    DeclineContract,
    LoadGame,
    OpenModal,
    CloseModal,
    AdvanceTutorial,
    SkipTutorial,
]


# --- effects ---


@dataclass(frozen=True)
class PersistCareerHistory:
    record: CareerHistory
    kind: str = "persist_career_history"


@dataclass(frozen=True)
class PersistStatistics:
    statistics: GameStatistics
    kind: str = "persist_statistics"


@dataclass(frozen=True)
class Rejected:
    """The action was refused; the returned state is the input state."""

    action: Any
    reason: str
    kind: str = "rejected"


Effect = Union[PersistCareerHistory, PersistStatistics, Rejected]
