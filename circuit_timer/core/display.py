"""Values published to the display collaborator."""

from __future__ import annotations

from dataclasses import dataclass

from circuit_timer.core.engine import ProgressionEngine
from circuit_timer.core.partner import ParticipantStatus
from circuit_timer.core.state import SegmentKind, Side
from circuit_timer.workout.model import PhaseType


@dataclass(frozen=True)
class NextInfo:
    label: str
    name: str


@dataclass(frozen=True)
class SessionProgress:
    workout_name: str
    phase_name: str
    phase_type: PhaseType
    phase_icon: str
    phase_index: int
    phase_total: int
    exercise_name: str
    exercise_index: int
    exercise_total: int
    instructions: tuple[str, ...]
    tip: str | None
    round: int
    round_total: int
    segment: SegmentKind
    side: Side | None
    time_left: int
    time_text: str
    progress_pct: float
    is_running: bool
    is_finished: bool
    partner_mode: bool
    next_info: NextInfo | None
    partner: tuple[ParticipantStatus, ParticipantStatus] | None


def format_time(total_seconds: int) -> str:
    minutes, seconds = divmod(max(0, total_seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


def progress_pct(engine: ProgressionEngine) -> float:
    workout = engine.workout
    state = engine.state
    if workout is None or not workout.phases:
        return 0.0
    if state.is_finished:
        return 100.0
    total_exercises = engine.total_exercises or 1
    phase_progress = (state.exercise_index + (0.5 if state.is_resting else 0.0)) / total_exercises
    return (state.phase_index + phase_progress) / len(workout.phases) * 100.0


def next_info(engine: ProgressionEngine) -> NextInfo | None:
    """Describe the segment that follows the current one."""
    workout = engine.workout
    current = engine.state
    upcoming = engine.peek_next()
    if workout is None or upcoming is None or upcoming.is_finished:
        return None

    phase = workout.phases[upcoming.phase_index]
    exercise = phase.exercises[upcoming.exercise_index]
    if upcoming.phase_index != current.phase_index:
        return NextInfo(label=f"Next: {phase.name}", name=exercise.name)
    if current.is_round_rest or upcoming.is_round_rest or upcoming.round != current.round:
        return NextInfo(label="Next round", name=phase.exercises[0].name)
    if upcoming.is_switching_sides:
        return NextInfo(label="Switch sides", name=exercise.name)
    if upcoming.is_resting:
        return NextInfo(label="Rest", name=format_time(upcoming.time_left))
    if upcoming.side == "right" and upcoming.exercise_index == current.exercise_index:
        return NextInfo(label="Right side", name=exercise.name)
    return NextInfo(label="Next", name=exercise.name)


def build_progress(engine: ProgressionEngine) -> SessionProgress | None:
    workout = engine.workout
    phase = engine.current_phase
    exercise = engine.current_exercise
    if workout is None or phase is None or exercise is None:
        return None
    state = engine.state
    return SessionProgress(
        workout_name=workout.name,
        phase_name=phase.name,
        phase_type=phase.type,
        phase_icon=phase.icon,
        phase_index=state.phase_index,
        phase_total=len(workout.phases),
        exercise_name=exercise.name,
        exercise_index=state.exercise_index,
        exercise_total=len(phase.exercises),
        instructions=exercise.instructions,
        tip=exercise.tip,
        round=state.round,
        round_total=phase.rounds,
        segment=state.segment,
        side=state.side,
        time_left=state.time_left,
        time_text=format_time(state.time_left),
        progress_pct=progress_pct(engine),
        is_running=state.is_running,
        is_finished=state.is_finished,
        partner_mode=state.partner_mode,
        next_info=next_info(engine),
        partner=engine.partner_statuses(),
    )
