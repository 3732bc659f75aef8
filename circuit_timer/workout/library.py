"""Built-in workouts and the catalog accessor."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from circuit_timer.workout.model import BilateralTiming, Exercise, Phase, WorkoutDefinition
from circuit_timer.workout.parser import load_catalog_file
from circuit_timer.workout.user_workouts import list_user_workouts


_MOBILITY_WARMUP = Phase(
    type="warmup",
    name="Warmup",
    icon="🔥",
    exercises=(
        Exercise(
            "Jumping Jacks",
            duration_sec=45,
            rest_after_sec=10,
            instructions=("Land softly on the balls of your feet", "Keep a steady rhythm"),
        ),
        Exercise(
            "Arm Circles",
            duration_sec=30,
            rest_after_sec=10,
            instructions=("Arms straight at shoulder height", "Reverse direction halfway"),
        ),
        Exercise(
            "Hip Openers",
            rest_after_sec=10,
            instructions=("Lift the knee and rotate it out", "Hold onto a wall if needed"),
            bilateral=BilateralTiming(per_side_sec=20),
        ),
    ),
)

_STRETCH_COOLDOWN = Phase(
    type="cooldown",
    name="Cooldown",
    icon="🧘",
    exercises=(
        Exercise(
            "Quad Stretch",
            instructions=("Pull the heel towards the glute", "Keep knees together"),
            bilateral=BilateralTiming(per_side_sec=30),
        ),
        Exercise(
            "Child's Pose",
            duration_sec=45,
            instructions=("Sit back on your heels", "Reach the arms forward and breathe"),
        ),
    ),
)


BUILTIN_WORKOUTS: tuple[WorkoutDefinition, ...] = (
    WorkoutDefinition(
        id="full_body_circuit",
        name="Full Body Circuit",
        description="Three rounds of compound moves with a short break between rounds.",
        phases=(
            _MOBILITY_WARMUP,
            Phase(
                type="workout",
                name="Main Circuit",
                icon="💪",
                rounds=3,
                rest_between_rounds_sec=60,
                exercises=(
                    Exercise(
                        "Squats",
                        duration_sec=40,
                        rest_after_sec=15,
                        instructions=("Feet shoulder-width apart", "Push the hips back"),
                        tip="Keep your chest up and weight in the heels.",
                    ),
                    Exercise(
                        "Push-ups",
                        duration_sec=40,
                        rest_after_sec=15,
                        instructions=("Hands under the shoulders", "Lower until the chest is close to the floor"),
                        tip="Drop to the knees to keep good form.",
                    ),
                    Exercise(
                        "Reverse Lunges",
                        rest_after_sec=15,
                        instructions=("Step back and lower the back knee", "Drive through the front heel"),
                        bilateral=BilateralTiming(per_side_sec=30),
                    ),
                    Exercise(
                        "Plank",
                        duration_sec=45,
                        rest_after_sec=15,
                        instructions=("Elbows under the shoulders", "Squeeze glutes and abs"),
                    ),
                ),
            ),
            _STRETCH_COOLDOWN,
        ),
    ),
    WorkoutDefinition(
        id="core_crusher",
        name="Core Crusher",
        description="Short abdominal circuit, two rounds back to back.",
        phases=(
            _MOBILITY_WARMUP,
            Phase(
                type="workout",
                name="Core Circuit",
                icon="🎯",
                rounds=2,
                rest_between_rounds_sec=45,
                exercises=(
                    Exercise(
                        "Dead Bug",
                        duration_sec=40,
                        rest_after_sec=10,
                        instructions=("Lower the opposite arm and leg", "Keep the lower back flat"),
                    ),
                    Exercise(
                        "Side Plank",
                        rest_after_sec=10,
                        instructions=("Stack the feet", "Lift the hips off the floor"),
                        bilateral=BilateralTiming(per_side_sec=25, switch_rest_sec=5),
                    ),
                    Exercise(
                        "Mountain Climbers",
                        duration_sec=30,
                        rest_after_sec=20,
                        instructions=("Drive the knees to the chest", "Hips level with the shoulders"),
                    ),
                ),
            ),
            _STRETCH_COOLDOWN,
        ),
    ),
    WorkoutDefinition(
        id="partner_burner",
        name="Partner Burner",
        description="Station circuit built for two people sharing equipment.",
        phases=(
            _MOBILITY_WARMUP,
            Phase(
                type="workout",
                name="Partner Stations",
                icon="🤝",
                rounds=2,
                rest_between_rounds_sec=90,
                exercises=(
                    Exercise(
                        "Kettlebell Swings",
                        duration_sec=45,
                        rest_after_sec=15,
                        instructions=("Hinge at the hips", "Snap the hips forward"),
                    ),
                    Exercise(
                        "Single-Arm Rows",
                        rest_after_sec=15,
                        instructions=("Brace on a bench", "Pull the elbow to the hip"),
                        bilateral=BilateralTiming(per_side_sec=30),
                    ),
                    Exercise(
                        "Burpees",
                        duration_sec=30,
                        rest_after_sec=20,
                        instructions=("Chest to the floor", "Jump and clap overhead"),
                    ),
                    Exercise(
                        "Goblet Squats",
                        duration_sec=40,
                        rest_after_sec=15,
                        instructions=("Hold the weight at the chest", "Elbows inside the knees"),
                    ),
                ),
            ),
            _STRETCH_COOLDOWN,
        ),
    ),
)


class WorkoutCatalog:
    """Read-only lookup of workout definitions by id."""

    def __init__(self, workouts: Iterable[WorkoutDefinition] = BUILTIN_WORKOUTS) -> None:
        self._workouts: dict[str, WorkoutDefinition] = {}
        for workout in workouts:
            # Later definitions override earlier ones with the same id.
            self._workouts[workout.id] = workout

    def list(self) -> tuple[WorkoutDefinition, ...]:
        return tuple(self._workouts.values())

    def get(self, workout_id: str) -> WorkoutDefinition | None:
        return self._workouts.get(workout_id)

    def __contains__(self, workout_id: object) -> bool:
        return workout_id in self._workouts

    def __len__(self) -> int:
        return len(self._workouts)


def load_catalog(
    paths: Iterable[str | Path] = (),
    user_dir: Path | None = None,
    include_builtin: bool = True,
) -> WorkoutCatalog:
    workouts: list[WorkoutDefinition] = list(BUILTIN_WORKOUTS) if include_builtin else []
    for path in paths:
        workouts.extend(load_catalog_file(path))
    for user_workout in list_user_workouts(user_dir):
        workouts.extend(user_workout.workouts)
    return WorkoutCatalog(workouts)
