from __future__ import annotations

from dataclasses import replace

import pytest

from circuit_timer.core.display import NextInfo, build_progress, format_time, next_info, progress_pct
from circuit_timer.core.engine import ProgressionEngine
from circuit_timer.workout.model import WorkoutDefinition


def _engine_after(workout: WorkoutDefinition, advances: int, phase: int = 0, cues=None) -> ProgressionEngine:
    engine = ProgressionEngine(workout, cues=cues)
    engine.start_from_phase(phase)
    for _ in range(advances):
        engine.advance()
    return engine


def test_format_time() -> None:
    assert format_time(0) == "00:00"
    assert format_time(65) == "01:05"
    assert format_time(600) == "10:00"
    assert format_time(-3) == "00:00"


def test_progress_pct_counts_rest_as_half_an_exercise(full_workout: WorkoutDefinition) -> None:
    assert progress_pct(_engine_after(full_workout, 0)) == 0.0

    resting = _engine_after(full_workout, 4)
    assert resting.state.is_resting
    assert progress_pct(resting) == pytest.approx(25.0)

    circuit = _engine_after(full_workout, 0, phase=1)
    assert progress_pct(circuit) == pytest.approx(100.0 / 3)


def test_progress_pct_is_complete_when_finished(full_workout: WorkoutDefinition) -> None:
    engine = _engine_after(full_workout, 1, phase=2)

    assert engine.state.is_finished
    assert progress_pct(engine) == 100.0
    assert progress_pct(ProgressionEngine()) == 0.0


@pytest.mark.parametrize(
    ("phase", "advances", "expected"),
    [
        (0, 0, NextInfo("Next", "Hip Circles")),
        (0, 1, NextInfo("Switch sides", "Hip Circles")),
        (0, 2, NextInfo("Right side", "Hip Circles")),
        (0, 3, NextInfo("Rest", "00:05")),
        (0, 4, NextInfo("Next: Circuit", "Squats")),
        (1, 8, NextInfo("Next round", "Squats")),
        (1, 9, NextInfo("Next round", "Squats")),
        (1, 18, NextInfo("Next: Cooldown", "Stretch")),
        (2, 0, None),
    ],
)
def test_next_info_peeks_one_step(
    full_workout: WorkoutDefinition, phase: int, advances: int, expected: NextInfo | None
) -> None:
    assert next_info(_engine_after(full_workout, advances, phase=phase)) == expected


def test_next_info_does_not_touch_state_or_audio(full_workout: WorkoutDefinition, cues) -> None:
    engine = _engine_after(full_workout, 4, cues=cues)
    before = replace(engine.state)
    events = list(cues.events)

    next_info(engine)
    engine.peek_next()

    assert engine.state == before
    assert cues.events == events


def test_build_progress_snapshot(full_workout: WorkoutDefinition) -> None:
    engine = _engine_after(full_workout, 1, phase=1)

    progress = build_progress(engine)

    assert progress is not None
    assert progress.workout_name == "Full"
    assert progress.phase_name == "Circuit"
    assert progress.phase_type == "workout"
    assert (progress.phase_index, progress.phase_total) == (1, 3)
    assert progress.exercise_name == "Squats"
    assert progress.segment == "rest"
    assert (progress.round, progress.round_total) == (1, 2)
    assert progress.time_left == 10
    assert progress.time_text == "00:10"
    assert progress.next_info == NextInfo("Next", "Lunges")
    assert progress.partner is None
    assert progress.is_running


def test_build_progress_without_workout() -> None:
    assert build_progress(ProgressionEngine()) is None
