"""NiceGUI web UI for the circuit timer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from nicegui import ui

from circuit_timer.core.display import SessionProgress, format_time
from circuit_timer.ui.audio import BROWSER_AUDIO_JS, BrowserCues
from circuit_timer.ui.controller import SessionController
from circuit_timer.ui.wake_lock import BROWSER_WAKE_LOCK_JS, BrowserWakeLock
from circuit_timer.workout.library import WorkoutCatalog
from circuit_timer.workout.model import WorkoutDefinition


SEGMENT_TEXT = {
    "rest": "Rest",
    "round_rest": "Round rest",
    "switching": "Switch sides",
}
SEGMENT_COLORS = {
    "exercise": "#22c55e",
    "rest": "#38bdf8",
    "round_rest": "#818cf8",
    "switching": "#f59e0b",
}


@dataclass
class WebState:
    status: str = "Pick a workout"
    progress: SessionProgress | None = None


def _overview_rows(workout: WorkoutDefinition) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for index, phase in enumerate(workout.phases, start=1):
        rows.append(
            {
                "idx": index,
                "phase": f"{phase.icon} {phase.name}".strip(),
                "rounds": phase.rounds,
                "exercises": ", ".join(exercise.name for exercise in phase.exercises),
                "duration": format_time(phase.total_duration_sec),
            }
        )
    return rows


def _side_text(progress: SessionProgress) -> str:
    if progress.segment == "switching":
        return "Switch to the right side"
    if progress.side == "left":
        return "Left side"
    if progress.side == "right":
        return "Right side"
    return ""


def run_web_ui(
    *,
    catalog: WorkoutCatalog,
    host: str = "127.0.0.1",
    port: int = 8090,
    partner_mode: bool = False,
) -> int:
    @ui.page("/")
    def index() -> None:
        client = ui.context.client
        wake_lock = BrowserWakeLock(client)
        controller = SessionController(
            catalog=catalog,
            cues=BrowserCues(client),
            wake_lock=wake_lock,
            partner_mode=partner_mode,
        )
        state = WebState()
        client.on_disconnect(controller.shutdown)

        ui.add_head_html(BROWSER_AUDIO_JS)
        ui.add_head_html(BROWSER_WAKE_LOCK_JS)
        ui.add_head_html(
            """
            <style>
              body { background: #0b1220; color: #e5e7eb; font-family: Arial, sans-serif; }
              .ct-card { background: #0f1b35; border: 1px solid rgba(148,163,184,.22); border-radius: 14px; }
              .ct-time { font-size: 6rem; font-weight: 800; line-height: 1; font-variant-numeric: tabular-nums; }
              .ct-muted { color: #9caecf; }
            </style>
            """
        )

        options = {workout.id: workout.name for workout in catalog.list()}

        with ui.column().classes("w-full max-w-[900px] mx-auto gap-3 p-4") as setup_view:
            ui.label("Circuit Timer").classes("text-2xl font-bold")
            workout_select = ui.select(options, label="Workout").classes("w-full")
            description_label = ui.label("").classes("ct-muted")
            overview_table = ui.table(
                columns=[
                    {"name": "idx", "label": "#", "field": "idx"},
                    {"name": "phase", "label": "Phase", "field": "phase", "align": "left"},
                    {"name": "rounds", "label": "Rounds", "field": "rounds"},
                    {"name": "exercises", "label": "Exercises", "field": "exercises", "align": "left"},
                    {"name": "duration", "label": "Time", "field": "duration"},
                ],
                rows=[],
            ).classes("w-full")
            total_label = ui.label("").classes("ct-muted")
            with ui.row().classes("items-center gap-4"):
                partner_switch = ui.switch("Partner mode", value=partner_mode)
                sound_switch = ui.switch("Sound", value=True)
                phase_select = ui.select({}, label="Start at phase").classes("w-48")
                start_btn = ui.button("Start").props("color=primary")

        with ui.column().classes("w-full max-w-[900px] mx-auto gap-3 p-4") as workout_view:
            with ui.card().classes("w-full ct-card"):
                with ui.row().classes("w-full justify-between items-center"):
                    phase_label = ui.label("").classes("text-lg font-semibold")
                    round_label = ui.label("").classes("ct-muted")
                progress_bar = ui.linear_progress(value=0, show_value=False).classes("w-full")
                segment_label = ui.label("").classes("text-xl font-bold")
                exercise_label = ui.label("").classes("text-3xl font-bold")
                side_label = ui.label("").classes("text-lg")
                time_label = ui.label("00:00").classes("ct-time")
                next_label = ui.label("").classes("ct-muted")
            with ui.card().classes("w-full ct-card") as details_card:
                instructions_label = ui.label("").classes("whitespace-pre-line")
                tip_label = ui.label("").classes("ct-muted italic")
            with ui.row().classes("w-full gap-3") as partner_row:
                with ui.card().classes("flex-1 ct-card"):
                    ui.label("Person A").classes("ct-muted")
                    partner_a_label = ui.label("")
                with ui.card().classes("flex-1 ct-card"):
                    ui.label("Person B").classes("ct-muted")
                    partner_b_label = ui.label("")
            with ui.row().classes("gap-2"):
                prev_btn = ui.button("Previous").props("outline")
                pause_btn = ui.button("Pause").props("color=primary")
                next_btn = ui.button("Next").props("outline")
                restart_btn = ui.button("Restart").props("outline color=negative")
            phase_buttons = ui.row().classes("gap-2")
            status_label = ui.label("").classes("ct-muted")

        workout_view.set_visibility(False)

        def show_setup_screen() -> None:
            setup_view.set_visibility(True)
            workout_view.set_visibility(False)

        def show_workout_screen() -> None:
            setup_view.set_visibility(False)
            workout_view.set_visibility(True)

        def rebuild_phase_buttons(workout: WorkoutDefinition) -> None:
            phase_buttons.clear()
            with phase_buttons:
                for i, phase in enumerate(workout.phases):
                    ui.button(
                        f"{phase.icon} {phase.name}".strip(),
                        on_click=lambda _e, target=i: controller.go_to_phase(target),
                    ).props("flat dense")

        def on_workout_change() -> None:
            workout_id = cast(str | None, workout_select.value)
            workout = controller.select(workout_id) if workout_id else None
            if workout is None:
                overview_table.rows = []
                phase_select.options = {}
                description_label.text = ""
                total_label.text = ""
                state.status = "Pick a workout"
            else:
                overview_table.rows = _overview_rows(workout)
                phase_select.options = {
                    i: f"{i + 1}. {phase.name}" for i, phase in enumerate(workout.phases)
                }
                phase_select.value = 0
                description_label.text = workout.description
                total_label.text = f"Total: {format_time(workout.total_duration_sec)}"
                rebuild_phase_buttons(workout)
                state.status = f"{workout.name} ready"
            overview_table.update()
            phase_select.update()
            refresh_ui()

        def refresh_ui() -> None:
            state.progress = controller.progress()
            engine_state = controller.state
            start_btn.set_enabled(controller.workout is not None)
            status_label.text = state.status

            progress = state.progress
            if progress is None or not engine_state.is_started:
                return

            phase_label.text = (
                f"{progress.phase_icon} {progress.phase_name} "
                f"({progress.phase_index + 1}/{progress.phase_total})"
            ).strip()
            round_label.text = (
                f"Round {progress.round}/{progress.round_total} | "
                f"Exercise {progress.exercise_index + 1}/{progress.exercise_total}"
            )
            progress_bar.value = progress.progress_pct / 100.0
            segment_label.text = SEGMENT_TEXT.get(progress.segment, "")
            segment_label.style(f"color: {SEGMENT_COLORS[progress.segment]}")
            exercise_label.text = progress.exercise_name
            side_label.text = _side_text(progress)
            time_label.text = progress.time_text
            time_label.style(f"color: {SEGMENT_COLORS[progress.segment]}")
            if progress.next_info is not None:
                next_label.text = f"{progress.next_info.label}: {progress.next_info.name}"
            else:
                next_label.text = ""
            instructions_label.text = "\n".join(f"• {line}" for line in progress.instructions)
            tip_label.text = progress.tip or ""
            details_card.set_visibility(bool(progress.instructions or progress.tip))

            partner_row.set_visibility(progress.partner is not None)
            if progress.partner is not None:
                for label, status in zip((partner_a_label, partner_b_label), progress.partner):
                    text = status.exercise.name
                    if status.finished_early:
                        text += " (done, wait for partner)"
                    elif status.is_switching:
                        text += " (switch sides)"
                    elif status.side is not None:
                        text += f" ({status.side})"
                    label.text = text

            if progress.is_finished:
                state.status = "Workout complete"
                pause_btn.set_enabled(False)
            else:
                pause_btn.set_enabled(True)
                pause_btn.text = "Pause" if progress.is_running else "Resume"

        def on_start() -> None:
            if controller.workout is None:
                return
            controller.toggle_partner_mode(bool(partner_switch.value))
            start_phase = int(phase_select.value or 0)
            controller.start_from_phase(start_phase)
            state.status = "Workout started"
            show_workout_screen()
            refresh_ui()

        def on_restart() -> None:
            controller.restart()
            state.status = "Workout reset"
            show_setup_screen()
            refresh_ui()

        def on_sound_toggle() -> None:
            if bool(sound_switch.value) != controller.state.sound_enabled:
                controller.toggle_sound()

        def on_visibility(event: Any) -> None:
            args = getattr(event, "args", None) or {}
            if args.get("visible"):
                controller.on_visible()
            else:
                controller.on_hidden()

        def on_wake_lock_report(event: Any) -> None:
            args = getattr(event, "args", None) or {}
            wake_lock.on_browser_report(
                supported=bool(args.get("supported")),
                active=bool(args.get("active")),
            )

        workout_select.on_value_change(lambda _: on_workout_change())
        partner_switch.on_value_change(lambda _: controller.toggle_partner_mode(bool(partner_switch.value)))
        sound_switch.on_value_change(lambda _: on_sound_toggle())
        start_btn.on_click(on_start)
        prev_btn.on_click(lambda: (controller.previous(), refresh_ui()))
        next_btn.on_click(lambda: (controller.next(), refresh_ui()))
        pause_btn.on_click(lambda: (controller.toggle_running(), refresh_ui()))
        restart_btn.on_click(on_restart)
        ui.on("ct_visibility", on_visibility)
        ui.on("ct_wake_lock", on_wake_lock_report)

        refresh_ui()
        ui.timer(0.25, refresh_ui)

    ui.run(host=host, port=port, reload=False, title="Circuit Timer")
    return 0
