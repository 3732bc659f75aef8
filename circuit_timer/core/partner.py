"""Partner mode: two people sharing one clock on offset exercises."""

from __future__ import annotations

from dataclasses import dataclass

from circuit_timer.core.state import Side
from circuit_timer.workout.model import Exercise, effective_duration


PARTNER_REST_BONUS_SEC = 5


@dataclass(frozen=True)
class ParticipantStatus:
    exercise: Exercise
    side: Side | None
    is_switching: bool
    finished_early: bool


def partner_exercise_index(exercise_index: int, total_exercises: int) -> int:
    """Person B always runs the station after Person A's, wrapping at the end."""
    if total_exercises <= 0:
        return 0
    return (exercise_index + 1) % total_exercises


def shared_duration(exercise_a: Exercise, exercise_b: Exercise) -> int:
    return max(effective_duration(exercise_a), effective_duration(exercise_b))


def partner_rest(exercise_a: Exercise, exercise_b: Exercise) -> int:
    """Rest after a partner station; equipment handoff adds a fixed bonus."""
    longest = max(exercise_a.rest_after_sec, exercise_b.rest_after_sec)
    if longest <= 0:
        return 0
    return longest + PARTNER_REST_BONUS_SEC


def participant_status(exercise: Exercise, elapsed_sec: int) -> ParticipantStatus:
    side: Side | None = None
    is_switching = False
    if exercise.bilateral is not None:
        per_side = exercise.bilateral.per_side_sec
        switch_rest = exercise.bilateral.switch_rest_sec
        if elapsed_sec < per_side:
            side = "left"
        elif elapsed_sec < per_side + switch_rest:
            side = "left"
            is_switching = True
        else:
            side = "right"
    return ParticipantStatus(
        exercise=exercise,
        side=side,
        is_switching=is_switching,
        finished_early=elapsed_sec >= effective_duration(exercise),
    )
