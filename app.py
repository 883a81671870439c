"""MusicSim (Streamlit)

UI / host layer.

Principles:
- UI only renders + dispatches actions.
- Core domain and engine are pure Python modules; every state change goes
  through engine.pipeline.transition().
- Effects returned by the engine (career records, statistics) are performed
  here, best-effort.

Entry point for Streamlit Cloud: app.py
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List

import streamlit as st

from content.bank import default_bank
from core.achievements import unlocked_ids
from core.effects import living_expense_tier
from core.modes import DEFAULT_DIFFICULTIES, get_difficulty_spec
from core.rng import stable_int_seed
from core.staff import CONTRACT_DURATIONS, STAFF_TEMPLATES
from core.state import GameState, weeks_played

from engine.actions import (
    CloseModal,
    DeclineContract,
    DismissOutcome,
    ExtendStaffContract,
    HireStaff,
    LoadGame,
    LoadScenario,
    OpenModal,
    Rejected,
    Restart,
    SelectChoice,
    SignContract,
    StartSetup,
    SubmitSetup,
    TerminateStaff,
)
from engine.config import config_from_env
from engine.persistence import JsonFileStore, perform_effects
from engine.pipeline import new_game_state, transition
from engine.savefile import dumps_save_export, load_save_export, make_save_export

logger = logging.getLogger(__name__)

APP_TITLE = "MusicSim"
APP_SUBTITLE = "Weekly music-career simulation: scenario, choice, consequences."
APP_VERSION = "1.0.0"

st.set_page_config(page_title=APP_TITLE, page_icon="🎵", layout="wide", initial_sidebar_state="expanded")

CSS = """
<style>
.block-container {padding-top: 3.2rem; padding-bottom: 2rem;}
.card {
  border: 1px solid rgba(255,255,255,0.08);
  border-radius: 16px;
  padding: 14px 16px;
  background: rgba(255,255,255,0.03);
}
.pill {
  display: inline-block;
  padding: 2px 10px;
  border-radius: 999px;
  border: 1px solid rgba(255,255,255,0.12);
  font-size: 12px;
  opacity: .85;
}
.pill.warn {border-color: rgba(255,190,90,0.35);}
.pill.ok {border-color: rgba(120,255,160,0.25);}
.pill.bad {border-color: rgba(255,120,120,0.25);}
.small {font-size: 13px; opacity:.75;}
</style>
"""

st.markdown(CSS, unsafe_allow_html=True)

STAT_LABELS = {
    "cash": "Cash",
    "fame": "Fame",
    "well_being": "Well-Being",
    "career_progress": "Career",
    "hype": "Hype",
}

LOG_ICONS = {"info": "•", "success": "✅", "warning": "⚠️", "danger": "🔥"}


def _stat_badge(val: int, lo: int, hi: int) -> str:
    if val <= lo:
        return "bad"
    if val >= hi:
        return "ok"
    return "warn"


def _delta_summary(delta: Dict[str, int]) -> str:
    parts: List[str] = []
    for k, label in STAT_LABELS.items():
        v = int(delta.get(k, 0))
        if not v:
            continue
        if k == "cash":
            parts.append(f"{label} {'+' if v > 0 else '-'}${abs(v):,}")
        else:
            parts.append(f"{label} {v:+d}")
    return " · ".join(parts) if parts else "No change"


# =========================
# Session State
# =========================


def _secret(name: str, default: str = "") -> str:
    # Streamlit Cloud: st.secrets; local: env via config_from_env
    try:
        if name in st.secrets:
            return str(st.secrets[name])  # type: ignore
    except FileNotFoundError:
        pass
    return default


def _ensure_state() -> None:
    ss = st.session_state
    if "engine_config" not in ss:
        cfg = config_from_env()
        seed = _secret("MUSICSIM_SEED")
        if seed:
            cfg = config_from_env(base_seed=int(seed))
        elif cfg.base_seed == 0:
            cfg = config_from_env(base_seed=stable_int_seed(datetime.utcnow().isoformat()))
        ss.engine_config = cfg
    if "bank" not in ss:
        ss.bank = default_bank()
    if "store" not in ss:
        ss.store = JsonFileStore(ss.engine_config.data_dir)
    if "game_state" not in ss:
        try:
            stats = ss.store.load_statistics()
        except (OSError, ValueError) as e:
            logger.warning("could not load statistics: %s", e)
            stats = None
        ss.game_state = new_game_state(statistics=stats)
    if "flash" not in ss:
        ss.flash = ""


def dispatch(action: Any) -> GameState:
    ss = st.session_state
    state, effects = transition(ss.game_state, action, config=ss.engine_config, bank=ss.bank)
    perform_effects(effects, ss.store)
    rejected = [e for e in effects if isinstance(e, Rejected)]
    ss.flash = rejected[0].reason.replace("_", " ") if rejected else ""
    ss.game_state = state
    return state


# =========================
# Pages
# =========================


def stats_bar(gs: GameState) -> None:
    p = gs.player_stats
    cols = st.columns(6)
    cols[0].metric("Cash", f"${p.cash:,}")
    cols[1].metric("Fame", p.fame)
    cols[2].metric("Well-Being", p.well_being)
    cols[3].metric("Career", p.career_progress)
    cols[4].metric("Hype", p.hype)
    cols[5].metric("Week", weeks_played(gs))

    spec = get_difficulty_spec(gs.difficulty)
    tier, _ = living_expense_tier(p.cash)
    pills = [
        f"<span class='pill'>{spec.name}</span>",
        f"<span class='pill'>{gs.current_date.isoformat()}</span>",
        f"<span class='pill'>Lifestyle: {tier}</span>",
    ]
    if gs.debt_turns:
        pills.append(f"<span class='pill bad'>In debt {gs.debt_turns}/{spec.grace_period_weeks}</span>")
    if gs.burnout_turns:
        pills.append(f"<span class='pill bad'>Burnout {gs.burnout_turns}/{spec.grace_period_weeks}</span>")
    if gs.current_label is not None:
        pills.append(f"<span class='pill ok'>Signed: {gs.current_label.name}</span>")
    if gs.current_project is not None:
        pr = gs.current_project
        pills.append(f"<span class='pill'>{pr.name}: {pr.progress}/{pr.required_progress}</span>")
    wb = _stat_badge(p.well_being, 20, 60)
    pills.append(f"<span class='pill {wb}'>Health</span>")
    st.markdown(" ".join(pills), unsafe_allow_html=True)


def page_setup() -> None:
    gs = st.session_state.game_state
    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)

    if gs.status == "start":
        if st.button("Start a new career", use_container_width=True):
            dispatch(StartSetup())
            st.rerun()
        return

    name = st.text_input("Artist name")
    genre = st.text_input("Genre", value="indie pop")
    keys = list(DEFAULT_DIFFICULTIES.keys())
    difficulty = st.radio("Difficulty", keys, index=1, format_func=lambda k: DEFAULT_DIFFICULTIES[k].name)
    st.caption(DEFAULT_DIFFICULTIES[difficulty].desc)
    if st.button("Begin", use_container_width=True, disabled=not name.strip()):
        dispatch(SubmitSetup(name=name, genre=genre, difficulty=difficulty))
        st.rerun()


def page_play() -> None:
    ss = st.session_state
    gs: GameState = ss.game_state

    if gs.status == "loading":
        with st.spinner("Finding your next week..."):
            time.sleep(max(0.0, float(ss.engine_config.scenario_delay_seconds)))
        dispatch(LoadScenario())
        st.rerun()
        return

    st.title(gs.artist_name)
    st.caption(gs.artist_genre)
    stats_bar(gs)

    if gs.status == "gameOver":
        st.error(f"Game over: your career ended in {gs.game_over_reason}.")
        if st.button("Try again", use_container_width=True):
            dispatch(Restart())
            st.rerun()
        return

    if gs.unseen_achievements:
        st.success(f"New achievements: {', '.join(gs.unseen_achievements)}. Open Management to review.")

    if gs.current_label_offer is not None and gs.current_label is None:
        lab = gs.current_label_offer
        spec = get_difficulty_spec(gs.difficulty)
        st.markdown("<div class='card'>", unsafe_allow_html=True)
        st.subheader(f"Contract offer: {lab.name}")
        st.write(
            f"Advance ${int(round(lab.advance * spec.advance_multiplier)):,} · royalty {lab.royalty_rate}% · "
            f"{lab.term_years} years · creative control {lab.creative_control}% · "
            f"{lab.album_commitment} album(s) · recoupment {lab.recoupment_rate}%"
        )
        cols = st.columns(2)
        if cols[0].button("Sign", use_container_width=True):
            dispatch(SignContract())
            st.rerun()
        if cols[1].button("Decline", use_container_width=True):
            dispatch(DeclineContract())
            st.rerun()
        st.markdown("</div>", unsafe_allow_html=True)

    outcome = gs.last_outcome
    if outcome is not None:
        st.markdown("<div class='card'>", unsafe_allow_html=True)
        st.markdown(f"### {'Staff change' if outcome.kind == 'termination' else 'Outcome'}")
        st.write(outcome.text)
        if outcome.kind == "termination":
            st.write(f"Severance paid: ${outcome.severance:,}")
        else:
            st.markdown(f"<span class='small'>{_delta_summary(asdict(outcome))}</span>", unsafe_allow_html=True)
            if outcome.lesson is not None:
                with st.expander(f"Lesson: {outcome.lesson.title}"):
                    st.write(outcome.lesson.explanation)
                    if outcome.lesson.tip_for_future:
                        st.caption(outcome.lesson.tip_for_future)
        st.markdown("</div>", unsafe_allow_html=True)
        if st.button("Continue", use_container_width=True):
            dispatch(DismissOutcome())
            st.rerun()
        return

    scenario = gs.current_scenario
    if scenario is None:
        st.info("No scenario loaded.")
        return
    st.markdown(f"## {scenario.title}")
    st.write(scenario.description)
    for i, choice in enumerate(scenario.choices):
        if st.button(choice.text, key=f"choice_{gs.action_seq}_{i}", use_container_width=True):
            dispatch(SelectChoice(choice=i))
            st.rerun()


def page_management() -> None:
    ss = st.session_state
    gs: GameState = ss.game_state
    if gs.modal != "management":
        dispatch(OpenModal("management"))
        gs = ss.game_state
    st.title("Management")
    spec = get_difficulty_spec(gs.difficulty)

    st.subheader("Team")
    if not gs.staff:
        st.caption("No staff hired.")
    for i, m in enumerate(gs.staff):
        st.markdown("<div class='card'>", unsafe_allow_html=True)
        st.markdown(f"**{m.name}** · {m.role} ({m.tier}) · ${m.salary:,}/month · {m.months_remaining} months left")
        st.caption(" · ".join(b.description for b in m.bonuses))
        cols = st.columns(2)
        months = cols[0].selectbox("Extend by", CONTRACT_DURATIONS, key=f"ext_{i}")
        if cols[0].button("Extend", key=f"extend_{i}"):
            dispatch(ExtendStaffContract(index=i, months=int(months)))
            st.rerun()
        if cols[1].button("Terminate", key=f"fire_{i}"):
            dispatch(TerminateStaff(index=i))
            st.rerun()
        st.markdown("</div>", unsafe_allow_html=True)

    st.subheader("Hire")
    if not gs.staff_hiring_unlocked:
        st.caption(f"Reach {spec.staff_unlock_fame} fame to hire staff.")
    else:
        duration = st.selectbox("Contract length (months)", CONTRACT_DURATIONS, index=1)
        for t in STAFF_TEMPLATES:
            salary = int(round(t.salary * spec.salary_multiplier))
            cols = st.columns([3, 1])
            cols[0].markdown(f"**{t.name}** · {t.role} ({t.tier}) · ${salary:,}/month")
            if cols[1].button("Hire", key=f"hire_{t.id}"):
                dispatch(HireStaff(template_id=t.id, duration=int(duration)))
                st.rerun()

    st.subheader("Achievements")
    unlocked = set(unlocked_ids(gs.achievements))
    st.caption(f"{len(unlocked)}/{len(gs.achievements)} unlocked")
    for a in gs.achievements:
        st.markdown(f"{'🏆' if a.id in unlocked else '🔒'} **{a.name}** · {a.description}")

    if st.button("Close", use_container_width=True):
        dispatch(CloseModal())
        st.rerun()


def page_history() -> None:
    ss = st.session_state
    gs: GameState = ss.game_state
    st.title("History")

    st.subheader("This career")
    if gs.current_history:
        st.line_chart({k: [getattr(h, k) for h in gs.current_history] for k in ("fame", "well_being", "career_progress", "hype")})
    for entry in reversed(gs.logs):
        st.markdown(f"{LOG_ICONS.get(entry.type, '•')} Week {entry.week}: {entry.message}")

    st.subheader("Past careers")
    try:
        careers = ss.store.load_career_histories()
    except (OSError, ValueError) as e:
        st.error(f"Could not read career history: {e}")
        careers = []
    if not careers:
        st.info("No finished careers yet.")
    for c in reversed(careers):
        st.markdown(
            f"**{c.artist_name}** ({c.genre}, {c.difficulty}) · {c.weeks_played} weeks · {c.outcome} · "
            f"peak fame {c.peak_fame} · peak cash ${c.peak_cash:,}"
        )

    st.subheader("Statistics")
    st.json(asdict(gs.statistics))


def page_debug() -> None:
    ss = st.session_state
    st.title("Debug")

    st.subheader("EngineConfig")
    st.json(asdict(ss.engine_config))

    st.subheader("GameState")
    st.json(make_save_export(seed=ss.engine_config.base_seed, state=ss.game_state)["state"])


def export_import_controls() -> None:
    ss = st.session_state
    gs: GameState = ss.game_state
    st.sidebar.markdown("---")
    st.sidebar.markdown("### Save Export / Import")

    payload = make_save_export(seed=ss.engine_config.base_seed, state=gs)
    st.sidebar.download_button(
        "Download save",
        data=dumps_save_export(payload).encode("utf-8"),
        file_name=f"musicsim_{gs.artist_name or 'career'}.json",
        mime="application/json",
        disabled=gs.status not in ("loading", "playing"),
    )

    up = st.sidebar.file_uploader("Load save", type=["json"], accept_multiple_files=False)
    if up is not None:
        try:
            loaded = load_save_export(up.read().decode("utf-8"))
        except ValueError as e:
            st.sidebar.error(f"Import failed: {e}")
            return
        if ss.get("loaded_upload") == up.file_id:
            return
        ss.loaded_upload = up.file_id
        dispatch(LoadGame(state=loaded))
        if ss.flash:
            st.sidebar.error(f"Import refused: {ss.flash}")
        else:
            st.sidebar.success("Save loaded.")
            st.rerun()


# =========================
# Sidebar
# =========================


def sidebar() -> str:
    ss = st.session_state
    gs: GameState = ss.game_state

    st.sidebar.markdown(f"**{APP_TITLE}**  ")
    st.sidebar.markdown(f"v{APP_VERSION} · seed {ss.engine_config.base_seed}")

    if gs.artist_name:
        if st.sidebar.button("Restart career", use_container_width=True):
            dispatch(Restart())
            st.rerun()

    export_import_controls()

    st.sidebar.markdown("---")
    page = st.sidebar.radio("Page", ["Play", "Management", "History", "Debug"], index=0)
    if page != "Management" and gs.modal == "management":
        dispatch(CloseModal())
    return page


# =========================
# Main
# =========================


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    _ensure_state()
    page = sidebar()

    ss = st.session_state
    if ss.flash:
        st.warning(f"Not possible: {ss.flash}")

    if ss.game_state.status in ("start", "setup"):
        page_setup()
        return

    if page == "Play":
        page_play()
    elif page == "Management":
        page_management()
    elif page == "History":
        page_history()
    else:
        page_debug()


if __name__ == "__main__":
    main()
