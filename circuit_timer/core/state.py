"""Mutable progression state owned by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Side = Literal["left", "right"]
SegmentKind = Literal["exercise", "rest", "round_rest", "switching"]


@dataclass
class ProgressionState:
    phase_index: int = 0
    exercise_index: int = 0
    round: int = 1
    time_left: int = 0
    is_resting: bool = False
    is_round_rest: bool = False
    is_switching_sides: bool = False
    side: Side | None = None
    is_started: bool = False
    is_running: bool = False
    is_finished: bool = False
    partner_mode: bool = False
    sound_enabled: bool = True

    @property
    def segment(self) -> SegmentKind:
        if self.is_switching_sides:
            return "switching"
        if self.is_round_rest:
            return "round_rest"
        if self.is_resting:
            return "rest"
        return "exercise"

    def clear_modes(self) -> None:
        self.is_resting = False
        self.is_round_rest = False
        self.is_switching_sides = False
