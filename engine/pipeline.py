"""engine.pipeline

Turn transition function (headless).

Responsibilities:
- Dispatch one action against the current GameState
- Apply choice outcomes (stats, staff hire, label offer/sign, project work,
  achievement grants)
- Run the weekly turn advance (payroll, project release, living costs,
  interest, events, decay, snapshots, failure counters, unlocks)
- Hand terminal CareerHistory records back to the host as effects

This layer is UI-agnostic. Every random draw comes from
rng_from(kind, state.action_seq, base_seed=config.base_seed), so a career
replays exactly from (initial state, action log, seed).
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from content.bank import ContentBank
from content.labels import get_label
from core.achievements import add_unseen, evaluate, grant, initial_achievements, merge_unlocked
from core.effects import (
    append_log,
    apply_delta,
    debt_interest,
    living_expense_tier,
    living_expenses,
    passive_decay,
    roll_random_event,
    scale_cash_delta,
)
from core.lifecycle import (
    career_in_progress,
    end_career,
    game_over_reason,
    maybe_snapshot,
    update_counters,
    update_unlocks,
)
from core.modes import DEFAULT_DIFFICULTIES, compute_modifiers, get_difficulty_spec
from core.projects import is_ready, progress_project, release_achievement_id, release_bonus, start_project
from core.rng import rng_from
from core.staff import (
    CONTRACT_DURATIONS,
    DEFAULT_SCENARIO_HIRE_MONTHS,
    EXTENSION_MORALE_BONUS,
    entry_template_for,
    extend,
    get_template,
    hire,
    hire_rejection,
    income_bonus_pct,
    passive_bonus_delta,
    run_payroll,
    terminate,
)
from core.state import (
    DEFAULT_START_DATE,
    GameState,
    GameStatistics,
    RecordLabel,
    ScenarioOutcome,
    default_start_state,
    default_start_stats,
    weeks_between,
    weeks_played,
)

from .actions import (
    AdvanceTutorial,
    CloseModal,
    DeclineContract,
    DismissOutcome,
    Effect,
    ExtendStaffContract,
    HireStaff,
    LoadGame,
    LoadScenario,
    OpenModal,
    PersistCareerHistory,
    PersistStatistics,
    Rejected,
    Restart,
    SelectChoice,
    SignContract,
    SkipTutorial,
    StartSetup,
    SubmitSetup,
    TerminateStaff,
)
from .config import EngineConfig
from .selector import register_selection, select_scenario

logger = logging.getLogger(__name__)

MODALS = ("management", "achievements", "history", "statistics", "lesson", "tutorial")
TUTORIAL_STEPS = 5

Result = Tuple[GameState, List[Effect]]


def new_game_state(statistics: Optional[GameStatistics] = None) -> GameState:
    """Fresh session in `start` with every achievement defined and locked."""
    return default_start_state(achievements=initial_achievements(), statistics=statistics)


def _rng(kind: str, state: GameState, config: EngineConfig) -> random.Random:
    return rng_from(kind, int(state.action_seq), base_seed=int(config.base_seed))


def _reject(state: GameState, action: Any, reason: str) -> Result:
    logger.debug("rejected %s: %s", getattr(action, "kind", type(action).__name__), reason)
    return state, [Rejected(action=action, reason=reason)]


def _log(state: GameState, message: str, config: EngineConfig, type: str = "info", **changes: Any) -> GameState:
    """Append one narrative line, stamped with the (possibly updated) week and date."""
    s = replace(state, **changes) if changes else state
    logs = append_log(
        s.logs,
        message,
        type=type,
        week=weeks_played(s),
        on=s.current_date,
        cap=int(config.max_log_entries),
    )
    return replace(s, logs=logs)


def _settle(state: GameState, granted: Optional[List[str]] = None) -> GameState:
    """Post-mutation bookkeeping shared by every stat-changing action.

    Clears failure counters whose condition no longer holds, grants explicit
    ids, re-runs the evaluator and queues anything new as unseen.
    """
    granted = list(granted or [])
    st = state.player_stats
    if state.debt_turns and st.cash >= 0:
        state = replace(state, debt_turns=0)
    if state.burnout_turns and st.well_being > 0:
        state = replace(state, burnout_turns=0)
        granted.append("BURNOUT_RECOVERY")

    achievements, newly = grant(state.achievements, granted)
    interim = replace(state, achievements=achievements)
    achievements, auto = evaluate(interim, interim.player_stats)
    newly = [*newly, *auto]
    if not newly:
        return interim
    return replace(interim, achievements=achievements, unseen_achievements=add_unseen(state.unseen_achievements, newly))


# --- lifecycle ---


def _new_career(state: GameState, name: str, genre: str, difficulty: str, config: EngineConfig) -> GameState:
    spec = get_difficulty_spec(difficulty)
    fresh = GameState(
        status="loading",
        player_stats=default_start_stats(spec.starting_cash),
        difficulty=spec.key,
        artist_name=name,
        artist_genre=genre,
        achievements=list(state.achievements) or initial_achievements(),
        unseen_achievements=list(state.unseen_achievements),
        start_date=DEFAULT_START_DATE,
        current_date=DEFAULT_START_DATE,
        last_staff_payment_date=DEFAULT_START_DATE,
        action_seq=state.action_seq,
        statistics=state.statistics,
        tutorial_step=state.tutorial_step,
    )
    return _log(fresh, f"{name} starts a {genre} career on {spec.name}.", config)


def _start_setup(state: GameState, action: StartSetup, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "start":
        return _reject(state, action, "not_at_start")
    return replace(state, status="setup", achievements=list(state.achievements) or initial_achievements()), []


def _submit_setup(state: GameState, action: SubmitSetup, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "setup":
        return _reject(state, action, "not_in_setup")
    name = (action.name or "").strip()
    if not name:
        return _reject(state, action, "missing_name")
    if action.difficulty not in DEFAULT_DIFFICULTIES:
        return _reject(state, action, "unknown_difficulty")
    return _new_career(state, name, (action.genre or "").strip(), action.difficulty, config), []


def _restart(state: GameState, action: Restart, config: EngineConfig, bank: ContentBank) -> Result:
    if not state.artist_name:
        return _reject(state, action, "no_career")
    effects: List[Effect] = []
    base = state
    if career_in_progress(state):
        game_id = "%032x" % _rng("game-id", state, config).getrandbits(128)
        record, statistics = end_career(state, "abandoned", game_id)
        logger.info("career %s abandoned after %d weeks", game_id, record.weeks_played)
        effects = [PersistCareerHistory(record=record), PersistStatistics(statistics=statistics)]
        base = replace(state, statistics=statistics)
    # cross-difficulty achievements read the updated aggregate
    return _settle(_new_career(base, state.artist_name, state.artist_genre, state.difficulty, config)), effects


def _load_game(state: GameState, action: LoadGame, config: EngineConfig, bank: ContentBank) -> Result:
    loaded = action.state
    if state.status == "gameOver":
        return _reject(state, action, "game_over")
    if not isinstance(loaded, GameState) or not loaded.artist_name:
        return _reject(state, action, "invalid_save")
    if loaded.status == "gameOver":
        return _reject(state, action, "save_is_over")
    status = "playing" if loaded.current_scenario is not None else "loading"
    roster = []
    for m in loaded.staff:
        if all(r.role != m.role for r in roster):
            roster.append(m)
    resumed = replace(
        loaded,
        status=status,
        player_stats=apply_delta(loaded.player_stats, {}),
        staff=roster,
        achievements=merge_unlocked(list(state.achievements), list(loaded.achievements)),
        unseen_achievements=add_unseen(state.unseen_achievements, loaded.unseen_achievements),
        statistics=state.statistics,
        action_seq=max(int(state.action_seq), int(loaded.action_seq)),
        modal="none",
    )
    return _settle(resumed), []


# --- scenario flow ---


def _show_next_scenario(state: GameState, config: EngineConfig, bank: ContentBank) -> GameState:
    scenario = select_scenario(state, bank, _rng("scenario", state, config), config)
    titles, fallback = register_selection(state.used_scenario_titles, state.consecutive_fallback_count, scenario, bank)
    return replace(
        state,
        status="playing",
        current_scenario=scenario,
        last_outcome=None,
        used_scenario_titles=titles,
        consecutive_fallback_count=fallback,
    )


def _load_scenario(state: GameState, action: LoadScenario, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "loading":
        return _reject(state, action, "not_loading")
    return _show_next_scenario(state, config, bank), []


def _scenario_hire(state: GameState, role: str, config: EngineConfig) -> GameState:
    spec = get_difficulty_spec(state.difficulty)
    template = entry_template_for(role)
    if template is None:
        logger.warning("no entry template for role %s", role)
        return state
    result = hire(
        state.staff,
        state.player_stats.cash,
        template,
        DEFAULT_SCENARIO_HIRE_MONTHS,
        state.current_date,
        spec.salary_multiplier,
    )
    if result is None:
        reason = hire_rejection(state.staff, state.player_stats.cash, template, spec.salary_multiplier)
        logger.warning("scenario hire of %s refused: %s", role, reason)
        return _log(state, f"You couldn't bring on a {role} right now.", config, type="warning")
    roster, cash, member = result
    return _log(
        state,
        f"{member.name} joins as your {member.role} (${member.salary}/month).",
        config,
        type="success",
        staff=roster,
        player_stats=replace(state.player_stats, cash=cash),
    )


def _sign_label(state: GameState, label: RecordLabel, config: EngineConfig) -> GameState:
    spec = get_difficulty_spec(state.difficulty)
    advance = int(round(label.advance * spec.advance_multiplier))
    signed = replace(
        state,
        player_stats=replace(state.player_stats, cash=state.player_stats.cash + advance),
        current_label=label,
        current_label_offer=None,
        contract_start_date=state.current_date,
        contracts_signed=[*state.contracts_signed, label.id],
    )
    signed = _log(signed, f"You signed with {label.name}. Advance: ${advance:,}.", config, type="success")
    return _settle(signed, [f"SIGNED_{label.id}"])


def _select_choice(state: GameState, action: SelectChoice, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "playing" or state.current_scenario is None:
        return _reject(state, action, "no_scenario")
    if state.last_outcome is not None and state.last_outcome.kind != "termination":
        return _reject(state, action, "outcome_pending")
    choices = state.current_scenario.choices
    idx = int(action.choice)
    if idx < 0 or idx >= len(choices):
        return _reject(state, action, "unknown_choice")
    outcome = choices[idx].outcome

    spec = get_difficulty_spec(state.difficulty)
    before = state.player_stats
    mods = compute_modifiers(spec, weeks_played(state), before.career_progress, before.cash)
    delta = outcome.deltas()
    delta["cash"] = scale_cash_delta(outcome.cash, mods, income_bonus_pct(state.staff))
    after = apply_delta(before, delta)

    s = replace(state, player_stats=after, decisions_made=state.decisions_made + 1)
    s = _log(s, outcome.text, config)

    if outcome.hire_staff:
        s = _scenario_hire(s, outcome.hire_staff, config)

    offered: Optional[str] = None
    if outcome.offer_label and s.current_label is None:
        label = get_label(outcome.offer_label)
        if label is None:
            logger.warning("unknown label offered: %s", outcome.offer_label)
        else:
            offered = label.id
            s = _log(s, f"{label.name} sent over a contract.", config, current_label_offer=label)

    signed: Optional[str] = None
    if outcome.sign_label and s.current_label is None:
        label = get_label(outcome.sign_label)
        if label is None:
            logger.warning("unknown label signed: %s", outcome.sign_label)
        else:
            signed = label.id
            s = _sign_label(s, label, config)

    started: Optional[str] = None
    if outcome.start_project and s.current_project is None:
        project = start_project(outcome.start_project)
        if project is None:
            logger.warning("unknown project started: %s", outcome.start_project)
        else:
            started = project.id
            s = _log(s, f"You started work on '{project.name}'.", config, current_project=project)

    progressed = 0
    if outcome.progress_project and s.current_project is not None:
        before_progress = s.current_project.progress
        project = progress_project(s.current_project, outcome.progress_project, outcome.fame, _rng("project", state, config))
        progressed = project.progress - before_progress
        s = replace(s, current_project=project)

    if outcome.lesson is not None and outcome.lesson.title not in s.lessons_viewed:
        s = replace(s, lessons_viewed=[*s.lessons_viewed, outcome.lesson.title])

    s = _settle(s, [outcome.grant_achievement] if outcome.grant_achievement else [])

    applied = ScenarioOutcome(
        text=outcome.text,
        cash=after.cash - before.cash,
        fame=after.fame - before.fame,
        well_being=after.well_being - before.well_being,
        career_progress=after.career_progress - before.career_progress,
        hype=after.hype - before.hype,
        lesson=outcome.lesson,
        hired_role=outcome.hire_staff if len(s.staff) > len(state.staff) else None,
        offered_label_id=offered,
        signed_label_id=signed,
        started_project_id=started,
        project_progress=progressed,
    )
    return replace(s, last_outcome=applied), []


# --- turn advance ---


@dataclass(frozen=True)
class TurnResult:
    state: GameState
    game_over_reason: Optional[str]


def advance_turn(state: GameState, rng: random.Random, config: EngineConfig) -> TurnResult:
    """One weekly step: calendar, staff, costs, events, decay, bookkeeping.

    Returns the advanced state (still `playing`) and the game-over reason, if any.
    """
    spec = get_difficulty_spec(state.difficulty)

    # 1) calendar
    now = state.current_date + timedelta(days=rng.randint(3, 7))
    s = replace(state, current_date=now)
    weeks = weeks_between(s.start_date, now)
    mods = compute_modifiers(spec, weeks, s.player_stats.career_progress, s.player_stats.cash)

    # 2) staff bonuses + payroll
    bonus = passive_bonus_delta(s.staff)
    if bonus:
        s = replace(s, player_stats=apply_delta(s.player_stats, bonus))
    payroll = run_payroll(s.staff, now, s.last_staff_payment_date, mods)
    if payroll.paid:
        s = replace(
            s,
            staff=payroll.staff,
            last_staff_payment_date=payroll.last_payment_date,
            player_stats=apply_delta(s.player_stats, {"cash": -payroll.cost}),
        )
        if payroll.cost:
            s = _log(s, f"Paid ${payroll.cost:,} in staff salaries.", config)
        for gone in payroll.evicted:
            s = _log(s, f"{gone.name}'s contract as your {gone.role} has expired.", config, type="warning")

    # 3) project release
    released: List[str] = []
    if is_ready(s.current_project):
        project = s.current_project
        bonus = release_bonus(project, s.player_stats.hype)
        s = _log(
            s,
            f"You released '{project.name}'! It gained {bonus['fame']} Fame, {bonus['hype']} Hype "
            f"and {bonus['career_progress']} Career Progress.",
            config,
            type="success",
            current_project=None,
            player_stats=apply_delta(s.player_stats, bonus),
        )
        released.append(release_achievement_id(project))
        logger.info("released %s (quality %d)", project.id, project.quality)

    # 4) living expenses
    tier, _ = living_expense_tier(s.player_stats.cash)
    cost = living_expenses(s.player_stats.cash, mods)
    s = replace(s, player_stats=apply_delta(s.player_stats, {"cash": -cost}))

    # 5) debt interest
    interest = debt_interest(s.player_stats.cash)
    if interest:
        s = _log(
            s,
            f"Debt interest cost you ${interest:,}.",
            config,
            type="warning",
            player_stats=apply_delta(s.player_stats, {"cash": -interest}),
        )

    # 6) random event
    if config.random_events:
        rolled = roll_random_event(spec, weeks, rng)
        if rolled is not None:
            event, delta = rolled
            s = _log(s, event.text, config, type=event.type, player_stats=apply_delta(s.player_stats, delta))

    # 7) decay
    s = replace(s, player_stats=apply_delta(s.player_stats, passive_decay(weeks, mods)))
    logger.debug("week %d: %s living, interest %d", weeks, tier, interest)

    # 8) snapshot
    s = replace(
        s,
        current_history=maybe_snapshot(s.current_history, weeks, s.player_stats, int(config.history_interval_weeks)),
    )

    # 9) failure counters
    counters = update_counters(s.debt_turns, s.burnout_turns, s.player_stats)
    s = replace(s, debt_turns=counters.debt_turns, burnout_turns=counters.burnout_turns)
    if s.debt_turns == 1:
        s = _log(s, "You're in debt. Get back above zero before creditors lose patience.", config, type="danger")
    if s.burnout_turns == 1:
        s = _log(s, "You're burnt out. Rest before it ends your career.", config, type="danger")
    reason = game_over_reason(counters, spec)

    # 10) achievements + unlocks
    s = _settle(s, [*released, *(["BURNOUT_RECOVERY"] if counters.burnout_recovered else [])])
    unlocks = update_unlocks(s, s.player_stats, spec)
    s = replace(
        s,
        staff_hiring_unlocked=unlocks.staff_hiring_unlocked,
        contract_eligibility_unlocked=unlocks.contract_eligibility_unlocked,
        fame_threshold_weeks=unlocks.fame_threshold_weeks,
        unlocks_shown=[*s.unlocks_shown, *unlocks.newly_unlocked],
    )
    if "staff_hiring" in unlocks.newly_unlocked:
        s = _log(s, "People are noticing you. You can now hire staff.", config, type="success")
    if "contract_eligibility" in unlocks.newly_unlocked:
        s = _log(s, "Your sustained fame has caught the attention of record labels.", config, type="success")

    return TurnResult(state=s, game_over_reason=reason)


def _dismiss_outcome(state: GameState, action: DismissOutcome, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "playing":
        return _reject(state, action, "not_playing")
    # staff notices close without spending the week
    if state.last_outcome is not None and state.last_outcome.kind == "termination":
        return replace(state, last_outcome=None), []

    rng = _rng("turn", state, config)
    turn = advance_turn(state, rng, config)
    s = turn.state

    if turn.game_over_reason is None:
        return _show_next_scenario(replace(s, last_outcome=None), config, bank), []

    game_id = "%032x" % rng.getrandbits(128)
    s = _log(s, f"Game over: your career ended in {turn.game_over_reason}.", config, type="danger")
    record, statistics = end_career(s, turn.game_over_reason, game_id)
    s = replace(
        s,
        status="gameOver",
        game_over_reason=turn.game_over_reason,
        current_scenario=None,
        last_outcome=None,
        statistics=statistics,
    )
    # cross-difficulty achievements read the updated aggregate
    s = _settle(s)
    logger.info("career %s over (%s) after %d weeks", game_id, turn.game_over_reason, record.weeks_played)
    return s, [PersistCareerHistory(record=record), PersistStatistics(statistics=statistics)]


# --- staff ---


def _hire_staff(state: GameState, action: HireStaff, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "playing":
        return _reject(state, action, "not_playing")
    if not state.staff_hiring_unlocked:
        return _reject(state, action, "staff_hiring_locked")
    template = get_template(action.template_id)
    if template is None:
        return _reject(state, action, "unknown_template")
    if int(action.duration) not in CONTRACT_DURATIONS:
        return _reject(state, action, "invalid_duration")

    spec = get_difficulty_spec(state.difficulty)
    result = hire(state.staff, state.player_stats.cash, template, int(action.duration), state.current_date, spec.salary_multiplier)
    if result is None:
        return _reject(state, action, hire_rejection(state.staff, state.player_stats.cash, template, spec.salary_multiplier) or "refused")
    roster, cash, member = result
    s = _log(
        state,
        f"You hired {member.name} as your {member.role} for {member.contract_duration} months.",
        config,
        type="success",
        staff=roster,
        player_stats=replace(state.player_stats, cash=cash),
    )
    return _settle(s), []


def _terminate_staff(state: GameState, action: TerminateStaff, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "playing":
        return _reject(state, action, "not_playing")
    result = terminate(state.staff, int(action.index), _rng("terminate", state, config))
    if result is None:
        return _reject(state, action, "unknown_staff")
    o = result.outcome
    stats = apply_delta(
        state.player_stats,
        {"cash": -result.severance, "well_being": o.well_being, "fame": o.fame, "hype": o.hype},
    )
    # an unread scenario outcome keeps priority; the notice still lands in the log
    pending = state.last_outcome if state.last_outcome is not None and state.last_outcome.kind != "termination" else o
    s = _log(state, o.text, config, type="warning", staff=result.staff, player_stats=stats, last_outcome=pending)
    return _settle(s), []


def _extend_staff(state: GameState, action: ExtendStaffContract, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "playing":
        return _reject(state, action, "not_playing")
    idx = int(action.index)
    if idx < 0 or idx >= len(state.staff):
        return _reject(state, action, "unknown_staff")
    if int(action.months) not in CONTRACT_DURATIONS:
        return _reject(state, action, "invalid_duration")
    member = state.staff[idx]
    if state.player_stats.cash < member.salary:
        return _reject(state, action, "insufficient_funds")
    roster = extend(state.staff, idx, int(action.months), state.current_date)
    if roster is None:
        return _reject(state, action, "invalid_duration")
    stats = apply_delta(state.player_stats, {"cash": -member.salary, "well_being": EXTENSION_MORALE_BONUS})
    s = _log(
        state,
        f"You extended {member.name}'s contract by {int(action.months)} months.",
        config,
        type="success",
        staff=roster,
        player_stats=stats,
    )
    return _settle(s), []


# --- labels ---


def _sign_contract(state: GameState, action: SignContract, config: EngineConfig, bank: ContentBank) -> Result:
    if state.status != "playing":
        return _reject(state, action, "not_playing")
    if state.current_label_offer is None:
        return _reject(state, action, "no_offer")
    if state.current_label is not None:
        return _reject(state, action, "already_signed")
    return _sign_label(state, state.current_label_offer, config), []


def _decline_contract(state: GameState, action: DeclineContract, config: EngineConfig, bank: ContentBank) -> Result:
    if state.current_label_offer is None:
        return _reject(state, action, "no_offer")
    name = state.current_label_offer.name
    return _log(state, f"You turned down {name}.", config, current_label_offer=None), []


# --- ui-only ---


def _open_modal(state: GameState, action: OpenModal, config: EngineConfig, bank: ContentBank) -> Result:
    if action.name not in MODALS:
        return _reject(state, action, "unknown_modal")
    if action.name == "management":
        return replace(state, modal="management", unseen_achievements=[]), []
    return replace(state, modal=action.name), []


def _close_modal(state: GameState, action: CloseModal, config: EngineConfig, bank: ContentBank) -> Result:
    return replace(state, modal="none"), []


def _advance_tutorial(state: GameState, action: AdvanceTutorial, config: EngineConfig, bank: ContentBank) -> Result:
    if state.tutorial_step >= TUTORIAL_STEPS:
        return _reject(state, action, "tutorial_finished")
    return replace(state, tutorial_step=state.tutorial_step + 1), []


def _skip_tutorial(state: GameState, action: SkipTutorial, config: EngineConfig, bank: ContentBank) -> Result:
    return replace(state, tutorial_step=TUTORIAL_STEPS), []


Handler = Callable[[GameState, Any, EngineConfig, ContentBank], Result]

HANDLERS: Dict[type, Handler] = {
    StartSetup: _start_setup,
    SubmitSetup: _submit_setup,
    LoadScenario: _load_scenario,
    SelectChoice: _select_choice,
    DismissOutcome: _dismiss_outcome,
    Restart: _restart,
    HireStaff: _hire_staff,
    TerminateStaff: _terminate_staff,
    ExtendStaffContract: _extend_staff,
    SignContract: _sign_contract,
    DeclineContract: _decline_contract,
    LoadGame: _load_game,
    OpenModal: _open_modal,
    CloseModal: _close_modal,
    AdvanceTutorial: _advance_tutorial,
    SkipTutorial: _skip_tutorial,
}


def transition(state: GameState, action: Any, *, config: EngineConfig, bank: ContentBank) -> Result:
    """Apply one action. Returns (new_state, effects for the host to perform).

    Refused actions return the input state unchanged plus a Rejected effect.
    """
    handler = HANDLERS.get(type(action))
    if handler is None:
        return _reject(state, action, "unknown_action")
    if state.status == "gameOver" and not isinstance(action, (Restart, OpenModal, CloseModal)):
        return _reject(state, action, "game_over")

    new_state, effects = handler(state, action, config, bank)
    if new_state is state:
        return state, effects
    return replace(new_state, action_seq=int(new_state.action_seq) + 1), effects
