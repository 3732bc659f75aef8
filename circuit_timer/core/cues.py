"""Abstract audio cues emitted by the progression engine."""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Cue(str, Enum):
    START = "start"
    CHANGE = "change"
    SIDE_SWITCH = "side_switch"
    PHASE_END = "phase_end"
    COUNTDOWN = "countdown"


class CueSink(Protocol):
    """Audio collaborator that turns cues into sound."""

    def init_audio(self) -> None: ...

    def play_countdown(self, n: int) -> None: ...

    def play_start(self) -> None: ...

    def play_change(self) -> None: ...

    def play_phase_end(self) -> None: ...


def dispatch_cue(sink: CueSink, cue: Cue, value: int | None = None) -> None:
    if cue is Cue.COUNTDOWN:
        sink.play_countdown(value if value is not None else 1)
    elif cue is Cue.START:
        sink.play_start()
    elif cue in (Cue.CHANGE, Cue.SIDE_SWITCH):
        sink.play_change()
    elif cue is Cue.PHASE_END:
        sink.play_phase_end()
