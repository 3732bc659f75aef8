from __future__ import annotations

from circuit_timer.workout.model import (
    BilateralTiming,
    Exercise,
    Phase,
    WorkoutDefinition,
    effective_duration,
)


def test_effective_duration_counts_both_sides_and_switch() -> None:
    plain = Exercise("Squats", duration_sec=40, rest_after_sec=15)
    lunges = Exercise("Lunges", bilateral=BilateralTiming(per_side_sec=30, switch_rest_sec=5))
    quick = Exercise("Kicks", bilateral=BilateralTiming(per_side_sec=10, switch_rest_sec=0))

    assert effective_duration(plain) == 40
    assert effective_duration(lunges) == 65
    assert lunges.effective_duration_sec == 65
    assert effective_duration(quick) == 20
    assert lunges.is_bilateral
    assert not plain.is_bilateral


def test_bilateral_timing_default_switch_rest() -> None:
    assert BilateralTiming(per_side_sec=20).switch_rest_sec == 5


def test_phase_duration_includes_rounds_and_round_rests(full_workout: WorkoutDefinition) -> None:
    warmup, circuit, cooldown = full_workout.phases

    assert warmup.total_duration_sec == 30 + 25 + 5
    # Squats 50, Lunges 75, Burpees 35, Plank 45 per round.
    assert circuit.total_duration_sec == 205 * 2 + 20
    assert cooldown.total_duration_sec == 30
    assert full_workout.total_duration_sec == 60 + 430 + 30
    assert full_workout.exercise_count == 7


def test_single_round_phase_has_no_round_rest() -> None:
    phase = Phase(
        type="workout",
        name="Main",
        exercises=(Exercise("Squats", duration_sec=40, rest_after_sec=10),),
        rest_between_rounds_sec=60,
    )

    assert phase.total_duration_sec == 50
