"""Ultra Crew — Streamlit race-day nutrition dashboard.

Run with:
    streamlit run streamlit_app/app.py

Reads CREW_* environment variables (see scheduler/config.py).
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import streamlit as st

# scheduler/ lives at the repo root next to streamlit_app/
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from crew_sync import (
    BackupConfig,
    BackupService,
    DebouncedSaver,
    JsonFileStore,
    PersistenceError,
    flatten_snapshot,
)
from fuel_engine import RaceSession
from fuel_engine.health import SYMPTOM_LABELS
from fuel_engine.models.enums import (
    BACKUP_INTERVAL_MAX_MIN,
    BACKUP_INTERVAL_MIN_MIN,
    MAX_RACE_HOURS,
    MIN_RACE_HOURS,
    EventStatus,
    SymptomKey,
    YTMode,
)
from fuel_engine.models.race import RaceToggles
from fuel_engine.schedule.replacements import REPLACEMENT_OPTIONS, parse_custom_items

from helpers import (
    SEVERITY_COLORS,
    SKIP_REASONS,
    URINE_COLOR_LABELS,
    default_start_time,
    event_label,
    fixed_offset,
    format_clock,
    format_hms,
    minutes_until,
    storage_size_label,
    symptom_label,
)
from scheduler.config import (
    BACKUP_INTERVAL_MINUTES,
    BACKUP_RETENTION,
    EXPORT_DIR,
    STATE_PATH,
    UTC_OFFSET_HOURS,
    WEBHOOK_URL,
)

TZ = fixed_offset(UTC_OFFSET_HOURS)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Ultra Crew",
    page_icon="🥤",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Session wiring
# ---------------------------------------------------------------------------


@st.cache_resource
def get_store() -> JsonFileStore:
    return JsonFileStore(STATE_PATH)


@st.cache_resource
def get_saver() -> DebouncedSaver:
    return DebouncedSaver(get_store())


def _load_session() -> RaceSession:
    """Rehydrate from disk, or start empty if nothing (or garbage) is saved."""
    saver = get_saver()
    kwargs = {"on_change": lambda s: saver.schedule(s.to_app_state())}
    try:
        state = get_store().load()
    except PersistenceError as e:
        st.session_state["load_error"] = str(e)
        state = None
    if state is None:
        return RaceSession(**kwargs)
    return RaceSession.from_app_state(state, **kwargs)


if "session" not in st.session_state:
    st.session_state["session"] = _load_session()
session: RaceSession = st.session_state["session"]

if "backup" not in st.session_state:
    service = BackupService(
        session.to_app_state,
        config=BackupConfig(
            interval_minutes=BACKUP_INTERVAL_MINUTES,
            max_backups=BACKUP_RETENTION,
            export_dir=EXPORT_DIR,
            webhook_url=WEBHOOK_URL,
        ),
    )
    service.start()
    st.session_state["backup"] = service
backup: BackupService = st.session_state["backup"]


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_alarm() -> None:
    if not session.skip_alarm_active:
        return
    st.error(
        f"🚨 {session.consecutive_skips} feedings skipped in a row. "
        "Get carbs and fluid into the athlete now."
    )
    if st.button("Dismiss alarm", key="dismiss_alarm"):
        session.dismiss_alarm()
        st.rerun()


def _render_event_actions(event, key_prefix: str) -> None:
    """Done / skip / replace controls for one DUE event."""
    col_done, col_skip, col_repl = st.columns(3)
    with col_done:
        if st.button("✅ Done", key=f"{key_prefix}_done_{event.id}"):
            session.complete(event.id)
            st.rerun()
    with col_skip:
        with st.popover("⏭️ Skip"):
            quick = st.selectbox(
                "Reason", ("",) + SKIP_REASONS, key=f"{key_prefix}_skipq_{event.id}"
            )
            custom = st.text_input(
                "Or type a reason", max_chars=100, key=f"{key_prefix}_skipc_{event.id}"
            )
            if st.button("Confirm skip", key=f"{key_prefix}_skipok_{event.id}"):
                if session.skip(event.id, custom or quick):
                    st.rerun()
                st.warning("A reason of 1-100 characters is required.")
    with col_repl:
        with st.popover("🔄 Replace"):
            names = {opt.name: opt for opt in REPLACEMENT_OPTIONS}
            choice = st.selectbox(
                "Quick option", [""] + list(names), key=f"{key_prefix}_rq_{event.id}"
            )
            custom = st.text_input(
                "Custom (e.g. GEL100:1, M320:150ml)", key=f"{key_prefix}_rc_{event.id}"
            )
            if st.button("Confirm replace", key=f"{key_prefix}_rok_{event.id}"):
                if custom:
                    items = parse_custom_items(custom)
                    note = "Custom"
                elif choice:
                    items = names[choice].transform(event.items)
                    note = names[choice].note
                else:
                    items = None
                    note = None
                if items is not None and session.replace(event.id, items, note):
                    st.rerun()
                st.warning("Pick an option or enter items like 'GEL100:1, M320:150ml'.")


# ---------------------------------------------------------------------------
# Sidebar: race setup
# ---------------------------------------------------------------------------

st.sidebar.title("Race Setup")

if st.session_state.get("load_error"):
    st.sidebar.warning(f"Saved state could not be read: {st.session_state['load_error']}")

race = session.race
with st.sidebar.expander("Race", expanded=race is None):
    now_local = datetime.now(TZ)
    start_default = race.start_time.astimezone(TZ) if race else default_start_time(now_local, TZ)
    start_date = st.date_input("Start date", value=start_default.date())
    start_clock = st.time_input("Start time", value=start_default.time().replace(tzinfo=None))
    duration = st.number_input(
        "Duration (h)", MIN_RACE_HOURS, MAX_RACE_HOURS,
        int(race.duration_hours if race else 24),
    )
    ph_powder = st.checkbox(
        "PH powder in bottles", value=race.toggles.ph_powder if race else False
    )
    yt_mode = st.selectbox(
        "Protein drink mode",
        [m.value for m in YTMode],
        index=[m for m in YTMode].index(race.toggles.yt_mode) if race else 0,
    )
    start_time = datetime.combine(start_date, start_clock, tzinfo=TZ)

    if race is None:
        if st.button("Start race plan"):
            toggles = RaceToggles(ph_powder=ph_powder, yt_mode=YTMode(yt_mode))
            if session.initialize_race(start_time, int(duration), toggles):
                st.rerun()
            st.sidebar.error("Start time must not be in the past.")
    else:
        st.caption("Applying settings regenerates the schedule and clears all logged events.")
        if st.button("Apply settings"):
            session.update_settings(
                start_time=start_time,
                duration_hours=int(duration),
                ph_powder=ph_powder,
                yt_mode=YTMode(yt_mode),
            )
            st.rerun()

with st.sidebar.expander("Danger zone"):
    if st.button("Reset everything"):
        session.reset()
        get_saver().flush()
        st.rerun()

if race is None:
    st.title("Ultra Crew")
    st.info("Set up the race in the sidebar to generate the feeding schedule.")
    st.stop()


# ---------------------------------------------------------------------------
# Header: race clock
# ---------------------------------------------------------------------------

st.title("Ultra Crew")
_render_alarm()

elapsed_s, remaining_s, finished, end = session.race_clock()
col_e, col_r, col_end = st.columns(3)
col_e.metric("Elapsed", format_hms(elapsed_s))
col_r.metric("Remaining", format_hms(remaining_s))
col_end.metric("Finish", "🏁 Finished" if finished else format_clock(end, TZ))

tab_now, tab_log, tab_nutrition, tab_inventory, tab_health, tab_backup = st.tabs(
    ["Now", "Log", "Nutrition", "Inventory", "Health", "Backup"]
)

# ---------------------------------------------------------------------------
# Tab: Now
# ---------------------------------------------------------------------------

with tab_now:
    now = session.now()
    previous = session.previous_loggable_event()
    if previous is not None:
        st.subheader("Still to log")
        st.markdown(event_label(previous, TZ))
        _render_event_actions(previous, "prev")

    st.subheader("Next up")
    upcoming = session.next_events()
    if not upcoming:
        st.caption("No upcoming feedings.")
    for event in upcoming:
        mins = minutes_until(event, now)
        st.markdown(f"{event_label(event, TZ)} — in {mins} min")
        _render_event_actions(event, "next")

    late = session.overdue()
    if late:
        st.subheader(f"Overdue ({len(late)})")
        for event in late:
            st.markdown(event_label(event, TZ))

    st.subheader("Protein")
    slot_cols = st.columns(len(race.protein_slots) or 1)
    for col, slot in zip(slot_cols, race.protein_slots):
        with col:
            if slot.completed:
                st.markdown(f"✅ {slot.time}")
            elif st.button(slot.time, key=f"protein_{slot.time}"):
                session.complete_protein_slot(slot.time)
                st.rerun()

# ---------------------------------------------------------------------------
# Tab: Log
# ---------------------------------------------------------------------------

with tab_log:
    for event in session.events:
        with st.expander(event_label(event, TZ)):
            if event.is_due:
                _render_event_actions(event, "log")
                continue
            note = st.text_input("Note", value=event.note or "", key=f"note_{event.id}")
            col_save, col_undo = st.columns(2)
            with col_save:
                if st.button("Save note", key=f"savenote_{event.id}"):
                    if not session.update_event_details(event.id, note=note or None):
                        st.warning("Skipped events need a reason of 1-100 characters.")
                    else:
                        st.rerun()
            with col_undo:
                if st.button("Undo", key=f"undo_{event.id}"):
                    session.undo(event.id)
                    st.rerun()

# ---------------------------------------------------------------------------
# Tab: Nutrition
# ---------------------------------------------------------------------------

with tab_nutrition:
    targets = session.baseline_targets()
    st.caption(
        f"Hourly targets: {targets.carbs:g} g carbs, {targets.sodium:g} mg sodium, "
        f"{targets.fluid:g} ml fluid"
    )
    table = session.hourly_table()
    if table.empty:
        st.caption("No events yet.")
    else:
        st.dataframe(table, hide_index=True, use_container_width=True)
        st.bar_chart(table.set_index("hour")[["planned_carbs", "actual_carbs"]])

    done = sum(1 for e in session.events if e.status == EventStatus.DONE)
    skipped = sum(1 for e in session.events if e.status == EventStatus.SKIPPED)
    st.markdown(f"**Done:** {done} · **Skipped:** {skipped} · **Total:** {len(session.events)}")

# ---------------------------------------------------------------------------
# Tab: Inventory
# ---------------------------------------------------------------------------

with tab_inventory:
    counts = session.inventory.to_dict()
    edited = {}
    cols = st.columns(3)
    for i, (sku, count) in enumerate(sorted(counts.items())):
        with cols[i % 3]:
            edited[sku] = st.number_input(sku, 0.0, 999.0, float(count), step=1.0, key=f"inv_{sku}")
    if st.button("Save inventory"):
        changed = {sku: v for sku, v in edited.items() if v != counts[sku]}
        rejected = session.update_inventory(**changed)
        if rejected:
            st.warning(f"Rejected: {', '.join(rejected)}")
        st.rerun()

# ---------------------------------------------------------------------------
# Tab: Health
# ---------------------------------------------------------------------------

with tab_health:
    health = session.health
    st.subheader("Symptoms")
    sym_cols = st.columns(3)
    for i, key in enumerate(SymptomKey):
        with sym_cols[i % 3]:
            checked = st.checkbox(
                symptom_label(key, SYMPTOM_LABELS),
                value=health.symptoms.get(key, False),
                key=f"sym_{key.value}",
            )
            if checked != health.symptoms.get(key, False):
                session.toggle_symptom(key)
                st.rerun()

    flags = health.flags
    if flags.hypo_risk:
        st.error("Hyponatremia risk — restrict plain water, give sodium.")
    if flags.hyper_risk:
        st.warning("Dehydration / hypernatremia risk — increase fluid intake.")
    if flags.gi_risk:
        st.warning("GI distress — reduce concentration, slow intake.")

    st.subheader("Recommendations")
    for rec in session.recommendations():
        color = SEVERITY_COLORS[rec.severity]
        st.markdown(
            f'<div style="background:{color};padding:6px 12px;border-radius:4px;margin:2px 0;">'
            f"<strong>{rec.condition}</strong> ({rec.severity.name.lower()})</div>",
            unsafe_allow_html=True,
        )
        for action in rec.actions:
            ticked = st.checkbox(
                action, value=action in health.actions, key=f"act_{rec.condition}_{action}"
            )
            if ticked != (action in health.actions):
                session.toggle_action(action)
                st.rerun()

    st.subheader("Measurements")
    col_w, col_u = st.columns(2)
    with col_w:
        weight = st.number_input("Weight (kg)", 0.0, 200.0, float(health.weight_kg or 0.0), step=0.1)
    with col_u:
        urine = st.selectbox(
            "Urine colour",
            [0] + list(URINE_COLOR_LABELS),
            format_func=lambda v: URINE_COLOR_LABELS.get(v, "not recorded"),
            index=health.urine_color or 0,
        )
    if st.button("Save measurements"):
        session.record_measurements(weight_kg=weight or None, urine_color=urine or None)
        st.rerun()

# ---------------------------------------------------------------------------
# Tab: Backup
# ---------------------------------------------------------------------------

with tab_backup:
    status = backup.status()
    col_a, col_b, col_c = st.columns(3)
    col_a.metric("Backups", status["total_backups"])
    col_b.metric("Last", format_clock(status["last_backup"], TZ))
    col_c.metric("Next", format_clock(status["next_backup"], TZ))
    for sink, error in status["last_errors"].items():
        st.warning(f"{sink}: {error}")

    saver = get_saver()
    if saver.last_error is not None:
        st.error(f"Autosave failed: {saver.last_error}")
    info = get_store().storage_info()
    st.caption(
        f"Local state: {storage_size_label(info['size'])}, "
        f"last saved {format_clock(info['last_saved'], TZ)}"
    )

    interval = st.slider(
        "Backup interval (min)", BACKUP_INTERVAL_MIN_MIN, BACKUP_INTERVAL_MAX_MIN,
        backup.config.interval_minutes, step=5,
    )
    if interval != backup.config.interval_minutes:
        backup.update_config(interval_minutes=interval)

    if st.button("Back up now"):
        backup.manual_backup()
        st.rerun()

    history = backup.history()
    if history:
        latest = history[0]
        st.dataframe(flatten_snapshot(latest), hide_index=True, use_container_width=True)
        labels = [s.timestamp.astimezone(TZ).strftime("%H:%M:%S") for s in history]
        picked = st.selectbox("Restore from", range(len(history)), format_func=lambda i: labels[i])
        if st.button("Restore selected backup"):
            restored = backup.restore(history[picked])
            saver_kwargs = {"on_change": lambda s: saver.schedule(s.to_app_state())}
            st.session_state["session"] = RaceSession.from_app_state(restored, **saver_kwargs)
            saver.schedule(restored)
            backup.stop()
            del st.session_state["backup"]
            st.rerun()
