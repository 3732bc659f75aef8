"""Terminal CLI entrypoint for the circuit timer."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from circuit_timer.core.display import SessionProgress, format_time
from circuit_timer.ui.audio import ConsoleCues
from circuit_timer.ui.controller import SessionController
from circuit_timer.workout.library import WorkoutCatalog, load_catalog
from circuit_timer.workout.parser import WorkoutParseError


SEGMENT_LABELS = {
    "exercise": "",
    "rest": "Rest",
    "round_rest": "Round rest",
    "switching": "Switch sides",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Guided interval workout timer")
    parser.add_argument("--list", action="store_true", help="List available workouts")
    parser.add_argument("--run", metavar="WORKOUT_ID", default=None, help="Run a workout in the terminal")
    parser.add_argument(
        "--catalog",
        action="append",
        default=[],
        metavar="PATH",
        help="Extra JSON workout catalog (repeatable)",
    )
    parser.add_argument(
        "--partner",
        action="store_true",
        help="Partner mode: two people share the clock on offset stations",
    )
    parser.add_argument(
        "--from-phase",
        type=int,
        default=1,
        help="Start at this phase number (1-based)",
    )
    parser.add_argument("--mute", action="store_true", help="Disable audio cues")
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=1.0,
        help="Seconds between ticks (lower values fast-forward the workout)",
    )
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI)",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8090,
        help="Port for --ui-web",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def print_catalog(catalog: WorkoutCatalog) -> int:
    workouts = catalog.list()
    if not workouts:
        print("No workouts available")
        return 0
    for workout in workouts:
        print(
            f"{workout.id:<24} {format_time(workout.total_duration_sec):>6} "
            f"{len(workout.phases)} phases  {workout.name}"
        )
    return 0


def format_progress_line(progress: SessionProgress) -> str:
    segment = SEGMENT_LABELS[progress.segment]
    side = f" ({progress.side})" if progress.side else ""
    parts = [
        f"{progress.phase_name} R{progress.round}/{progress.round_total}",
        f"{segment or progress.exercise_name}{side}",
        progress.time_text,
    ]
    if progress.partner is not None and progress.segment == "exercise":
        person_a, person_b = progress.partner
        parts.append(f"A: {person_a.exercise.name} | B: {person_b.exercise.name}")
    if progress.next_info is not None and progress.segment != "exercise":
        parts.append(f"{progress.next_info.label}: {progress.next_info.name}")
    return " | ".join(parts)


async def run_workout(
    workout_id: str,
    catalog: WorkoutCatalog,
    *,
    partner_mode: bool,
    start_phase: int,
    sound_enabled: bool,
    tick_interval_sec: float,
) -> int:
    controller = SessionController(
        catalog=catalog,
        cues=ConsoleCues(),
        partner_mode=partner_mode,
        sound_enabled=sound_enabled,
        tick_interval_sec=tick_interval_sec,
    )
    workout = controller.select(workout_id)
    if workout is None:
        print(f"Unknown workout '{workout_id}'. Use --list to see available ids.")
        return 1
    if not 0 <= start_phase < len(workout.phases):
        print(f"Workout '{workout_id}' has {len(workout.phases)} phases")
        return 1

    controller.subscribe(lambda progress: print(format_progress_line(progress)))
    print(f"{workout.name} - {format_time(workout.total_duration_sec)}")
    try:
        controller.start_from_phase(start_phase)
        while controller.state.is_running:
            await asyncio.sleep(tick_interval_sec / 2)
    finally:
        controller.shutdown()

    if controller.state.is_finished:
        print("Workout complete")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.catalog)
    except (OSError, WorkoutParseError) as exc:
        print(f"Cannot load workouts: {exc}", file=sys.stderr)
        return 1

    if args.ui_web:
        from circuit_timer.ui.web_app import run_web_ui

        return run_web_ui(
            catalog=catalog,
            host=args.web_host,
            port=args.web_port,
            partner_mode=args.partner,
        )

    if args.list:
        return print_catalog(catalog)

    if args.run is None:
        parser.print_help()
        return 1
    if args.tick_interval <= 0:
        print("--tick-interval must be > 0", file=sys.stderr)
        return 1

    try:
        return asyncio.run(
            run_workout(
                args.run,
                catalog,
                partner_mode=args.partner,
                start_phase=args.from_phase - 1,
                sound_enabled=not args.mute,
                tick_interval_sec=args.tick_interval,
            )
        )
    except KeyboardInterrupt:
        print("Workout stopped")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
