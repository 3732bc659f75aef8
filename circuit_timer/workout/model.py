"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


PhaseType = Literal["warmup", "workout", "cooldown"]

PHASE_TYPES: tuple[PhaseType, ...] = ("warmup", "workout", "cooldown")
DEFAULT_SWITCH_REST_SEC = 5


@dataclass(frozen=True)
class BilateralTiming:
    per_side_sec: int
    switch_rest_sec: int = DEFAULT_SWITCH_REST_SEC


@dataclass(frozen=True)
class Exercise:
    name: str
    duration_sec: int = 0
    rest_after_sec: int = 0
    instructions: tuple[str, ...] = ()
    tip: str | None = None
    bilateral: BilateralTiming | None = None

    @property
    def is_bilateral(self) -> bool:
        return self.bilateral is not None

    @property
    def effective_duration_sec(self) -> int:
        return effective_duration(self)


@dataclass(frozen=True)
class Phase:
    type: PhaseType
    name: str
    exercises: tuple[Exercise, ...]
    icon: str = ""
    rounds: int = 1
    rest_between_rounds_sec: int | None = None

    @property
    def total_duration_sec(self) -> int:
        per_round = sum(
            effective_duration(exercise) + exercise.rest_after_sec
            for exercise in self.exercises
        )
        round_rests = (self.rounds - 1) * (self.rest_between_rounds_sec or 0)
        return per_round * self.rounds + round_rests


@dataclass(frozen=True)
class WorkoutDefinition:
    id: str
    name: str
    description: str
    phases: tuple[Phase, ...]

    @property
    def total_duration_sec(self) -> int:
        return sum(phase.total_duration_sec for phase in self.phases)

    @property
    def exercise_count(self) -> int:
        return sum(len(phase.exercises) for phase in self.phases)


def effective_duration(exercise: Exercise) -> int:
    """On-body time of one pass through ``exercise``, switch rest included."""
    if exercise.bilateral is not None:
        timing = exercise.bilateral
        return timing.per_side_sec * 2 + timing.switch_rest_sec
    return exercise.duration_sec
