"""Shared test fixtures: recording collaborators and small workouts."""

from __future__ import annotations

import pytest

from circuit_timer.workout.model import BilateralTiming, Exercise, Phase, WorkoutDefinition


class RecordingCues:
    def __init__(self) -> None:
        self.events: list[str] = []

    def init_audio(self) -> None:
        self.events.append("init")

    def play_countdown(self, n: int) -> None:
        self.events.append(f"countdown:{n}")

    def play_start(self) -> None:
        self.events.append("start")

    def play_change(self) -> None:
        self.events.append("change")

    def play_phase_end(self) -> None:
        self.events.append("phase_end")


class FakeWakeLock:
    supported = True

    def __init__(self) -> None:
        self.active = False
        self.acquired = 0
        self.released = 0

    def acquire(self) -> bool:
        self.acquired += 1
        self.active = True
        return True

    def release(self) -> None:
        if self.active:
            self.released += 1
        self.active = False


@pytest.fixture
def cues() -> RecordingCues:
    return RecordingCues()


@pytest.fixture
def wake_lock() -> FakeWakeLock:
    return FakeWakeLock()


@pytest.fixture
def round_rest_workout() -> WorkoutDefinition:
    """Two rounds of one 40s move with 15s rest and 60s between rounds."""
    return WorkoutDefinition(
        id="rounds",
        name="Rounds",
        description="",
        phases=(
            Phase(
                type="workout",
                name="Main",
                rounds=2,
                rest_between_rounds_sec=60,
                exercises=(Exercise("Squats", duration_sec=40, rest_after_sec=15),),
            ),
        ),
    )


@pytest.fixture
def bilateral_workout() -> WorkoutDefinition:
    return WorkoutDefinition(
        id="sides",
        name="Sides",
        description="",
        phases=(
            Phase(
                type="workout",
                name="Main",
                exercises=(
                    Exercise("Side Plank", bilateral=BilateralTiming(per_side_sec=30, switch_rest_sec=5)),
                ),
            ),
        ),
    )


@pytest.fixture
def full_workout() -> WorkoutDefinition:
    """Warmup, a two-round circuit with a bilateral move, and a cooldown."""
    return WorkoutDefinition(
        id="full",
        name="Full",
        description="Three phases",
        phases=(
            Phase(
                type="warmup",
                name="Warmup",
                exercises=(
                    Exercise("March", duration_sec=30),
                    Exercise("Hip Circles", rest_after_sec=5, bilateral=BilateralTiming(per_side_sec=10)),
                ),
            ),
            Phase(
                type="workout",
                name="Circuit",
                rounds=2,
                rest_between_rounds_sec=20,
                exercises=(
                    Exercise("Squats", duration_sec=40, rest_after_sec=10),
                    Exercise("Lunges", rest_after_sec=10, bilateral=BilateralTiming(per_side_sec=30)),
                    Exercise("Burpees", duration_sec=20, rest_after_sec=15),
                    Exercise("Plank", duration_sec=45),
                ),
            ),
            Phase(
                type="cooldown",
                name="Cooldown",
                exercises=(Exercise("Stretch", duration_sec=30),),
            ),
        ),
    )


@pytest.fixture
def partner_workout() -> WorkoutDefinition:
    return WorkoutDefinition(
        id="partner",
        name="Partner",
        description="",
        phases=(
            Phase(
                type="warmup",
                name="Warmup",
                exercises=(Exercise("Leg Swings", bilateral=BilateralTiming(per_side_sec=10)),),
            ),
            Phase(
                type="workout",
                name="Stations",
                exercises=(
                    Exercise("Rows", duration_sec=30, rest_after_sec=10),
                    Exercise("Swings", duration_sec=45, rest_after_sec=20),
                    Exercise("Lunges", bilateral=BilateralTiming(per_side_sec=30)),
                    Exercise("Burpees", duration_sec=40),
                ),
            ),
        ),
    )
