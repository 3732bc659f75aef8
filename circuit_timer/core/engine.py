"""Workout progression state machine.

The engine owns one ``ProgressionState`` for the selected workout and is the
only writer of it. User commands (start, pause, next, previous, partner
toggle) and the once-per-second ``tick`` both run through here; cues go out to
an optional ``CueSink`` and every mutation is published to subscribers.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from circuit_timer.core.cues import Cue, CueSink, dispatch_cue
from circuit_timer.core.partner import (
    ParticipantStatus,
    participant_status,
    partner_exercise_index,
    partner_rest,
    shared_duration,
)
from circuit_timer.core.state import ProgressionState
from circuit_timer.workout.model import Exercise, Phase, WorkoutDefinition


logger = logging.getLogger(__name__)

StateListener = Callable[[ProgressionState], None]

COUNTDOWN_FROM = 3


class ProgressionEngine:
    def __init__(
        self,
        workout: WorkoutDefinition | None = None,
        cues: CueSink | None = None,
        partner_mode: bool = False,
        sound_enabled: bool = True,
    ) -> None:
        self._workout = workout
        self._cues = cues
        self._listeners: list[StateListener] = []
        self.state = ProgressionState(partner_mode=partner_mode, sound_enabled=sound_enabled)

    # -- selection and observation -------------------------------------------------

    @property
    def workout(self) -> WorkoutDefinition | None:
        return self._workout

    def load(self, workout: WorkoutDefinition | None) -> None:
        """Select ``workout`` (or none) and discard the previous progression."""
        self._workout = workout
        self._reset()
        self._notify()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- derived values ---------------------------------------------------------------

    @property
    def current_phase(self) -> Phase | None:
        if self._workout is None:
            return None
        index = self.state.phase_index
        if 0 <= index < len(self._workout.phases):
            return self._workout.phases[index]
        return None

    @property
    def current_exercise(self) -> Exercise | None:
        phase = self.current_phase
        if phase is None:
            return None
        index = self.state.exercise_index
        if 0 <= index < len(phase.exercises):
            return phase.exercises[index]
        return None

    @property
    def total_exercises(self) -> int:
        phase = self.current_phase
        return len(phase.exercises) if phase is not None else 0

    @property
    def total_rounds(self) -> int:
        phase = self.current_phase
        return phase.rounds if phase is not None else 1

    @property
    def in_partner_phase(self) -> bool:
        phase = self.current_phase
        return self.state.partner_mode and phase is not None and phase.type == "workout"

    @property
    def partner_exercise(self) -> Exercise | None:
        """Person B's exercise while partner mode drives a workout phase."""
        phase = self.current_phase
        if phase is None or not self.in_partner_phase:
            return None
        index = partner_exercise_index(self.state.exercise_index, len(phase.exercises))
        return phase.exercises[index]

    def partner_statuses(self) -> tuple[ParticipantStatus, ParticipantStatus] | None:
        exercise_a = self.current_exercise
        exercise_b = self.partner_exercise
        if exercise_a is None or exercise_b is None:
            return None
        if self.state.is_resting or self.state.is_round_rest:
            return None
        elapsed = max(0, shared_duration(exercise_a, exercise_b) - self.state.time_left)
        return participant_status(exercise_a, elapsed), participant_status(exercise_b, elapsed)

    def peek_next(self) -> ProgressionState | None:
        """State after one ``advance``, computed on a copy with cues muted."""
        if self._workout is None or not self.state.is_started or self.state.is_finished:
            return None
        probe = ProgressionEngine(self._workout)
        probe.state = replace(self.state, sound_enabled=False)
        probe.advance()
        return probe.state

    # -- commands -----------------------------------------------------------------------

    def start(self) -> None:
        self.start_from_phase(0)

    def start_from_phase(self, phase_index: int) -> None:
        if not self._is_valid_phase(phase_index):
            return
        if self.state.is_started and not self.state.is_finished:
            return
        assert self._workout is not None
        self._reset()
        state = self.state
        state.phase_index = phase_index
        self._load_exercise()
        state.is_started = True
        state.is_running = True
        self._init_audio()
        self._emit(Cue.START)
        logger.info("Started workout '%s' at phase %d", self._workout.id, phase_index)
        self._notify()

    def go_to_phase(self, phase_index: int) -> None:
        state = self.state
        if not state.is_started or state.is_finished:
            return
        if not self._is_valid_phase(phase_index) or phase_index == state.phase_index:
            return
        state.phase_index = phase_index
        state.exercise_index = 0
        state.round = 1
        state.clear_modes()
        self._load_exercise()
        self._notify()

    def toggle_running(self) -> None:
        state = self.state
        if self._workout is None or not state.is_started or state.is_finished:
            return
        state.is_running = not state.is_running
        self._notify()

    def restart(self) -> None:
        if self._workout is None:
            return
        self._reset()
        self._notify()

    def toggle_partner_mode(self, enabled: bool | None = None) -> None:
        """Change how later segments are timed; the current one is left as is."""
        state = self.state
        state.partner_mode = (not state.partner_mode) if enabled is None else enabled
        self._notify()

    def toggle_sound(self) -> None:
        self.state.sound_enabled = not self.state.sound_enabled
        self._notify()

    def tick(self) -> None:
        state = self.state
        if self._workout is None or not state.is_running or state.is_finished:
            return
        if state.time_left <= 1:
            self.advance()
            return
        if state.time_left <= COUNTDOWN_FROM + 1:
            self._emit(Cue.COUNTDOWN, state.time_left - 1)
        state.time_left -= 1
        self._notify()

    def advance(self) -> None:
        state = self.state
        exercise = self.current_exercise
        if exercise is None or not state.is_started or state.is_finished:
            return
        partner = self.in_partner_phase

        if state.is_switching_sides and not partner:
            state.is_switching_sides = False
            state.side = "right"
            state.time_left = _per_side(exercise)
            self._emit(Cue.START)
        elif state.is_round_rest:
            state.is_round_rest = False
            state.exercise_index = 0
            self._load_exercise()
            self._emit(Cue.START)
        elif state.is_resting:
            state.is_resting = False
            self._next_exercise(Cue.START)
        else:
            state.is_switching_sides = False
            if not partner and exercise.bilateral is not None and state.side == "left":
                self._switch_sides(exercise)
                self._notify()
                return
            state.side = None
            exercise_b = self.partner_exercise
            if partner and exercise_b is not None:
                rest = partner_rest(exercise, exercise_b)
            else:
                rest = exercise.rest_after_sec
            if rest > 0:
                state.is_resting = True
                state.time_left = rest
                self._emit(Cue.CHANGE)
            else:
                self._next_exercise(Cue.CHANGE)
        self._notify()

    def retreat(self) -> None:
        state = self.state
        phase = self.current_phase
        exercise = self.current_exercise
        if phase is None or exercise is None or not state.is_started or state.is_finished:
            return

        if state.is_switching_sides:
            state.is_switching_sides = False
            self._load_exercise()
        elif state.is_round_rest:
            state.is_round_rest = False
            state.round = max(1, state.round - 1)
            state.exercise_index = len(phase.exercises) - 1
            self._load_exercise()
        elif state.is_resting:
            state.is_resting = False
            self._resume_finished_exercise()
        elif not self.in_partner_phase and exercise.bilateral is not None and state.side == "right":
            state.side = "left"
            state.time_left = _per_side(exercise)
        elif state.exercise_index > 0:
            state.exercise_index -= 1
            self._load_exercise()
        elif state.round > 1:
            state.round -= 1
            state.exercise_index = len(phase.exercises) - 1
            self._load_exercise()
        elif state.phase_index > 0 and self._workout is not None:
            previous = self._workout.phases[state.phase_index - 1]
            state.phase_index -= 1
            state.round = previous.rounds
            state.exercise_index = len(previous.exercises) - 1
            self._load_exercise()
        else:
            return
        self._notify()

    # -- transitions ----------------------------------------------------------------

    def _switch_sides(self, exercise: Exercise) -> None:
        assert exercise.bilateral is not None
        state = self.state
        if exercise.bilateral.switch_rest_sec <= 0:
            state.side = "right"
            state.time_left = exercise.bilateral.per_side_sec
            self._emit(Cue.START)
            return
        state.is_switching_sides = True
        state.time_left = exercise.bilateral.switch_rest_sec
        self._emit(Cue.SIDE_SWITCH)

    def _next_exercise(self, cue: Cue) -> None:
        state = self.state
        phase = self.current_phase
        assert phase is not None
        next_index = state.exercise_index + 1
        if next_index < len(phase.exercises):
            state.exercise_index = next_index
            self._load_exercise()
            self._emit(cue)
        elif state.round < phase.rounds:
            state.round += 1
            if phase.rest_between_rounds_sec:
                state.is_round_rest = True
                state.side = None
                state.time_left = phase.rest_between_rounds_sec
            else:
                state.exercise_index = 0
                self._load_exercise()
            self._emit(Cue.CHANGE)
        else:
            self._next_phase()

    def _next_phase(self) -> None:
        assert self._workout is not None
        state = self.state
        next_index = state.phase_index + 1
        state.clear_modes()
        state.side = None
        self._emit(Cue.PHASE_END)
        if next_index >= len(self._workout.phases):
            state.is_finished = True
            state.is_running = False
            state.time_left = 0
            logger.info("Workout '%s' finished", self._workout.id)
            return
        state.phase_index = next_index
        state.exercise_index = 0
        state.round = 1
        self._load_exercise()

    def _load_exercise(self) -> None:
        """Set side and time for a fresh start of the current exercise."""
        state = self.state
        exercise = self.current_exercise
        if exercise is None:
            return
        exercise_b = self.partner_exercise
        if exercise_b is not None:
            state.side = None
            state.time_left = shared_duration(exercise, exercise_b)
        elif exercise.bilateral is not None:
            state.side = "left"
            state.time_left = exercise.bilateral.per_side_sec
        else:
            state.side = None
            state.time_left = exercise.duration_sec

    def _resume_finished_exercise(self) -> None:
        """Back out of a rest into the final stretch of the exercise before it."""
        state = self.state
        exercise = self.current_exercise
        if exercise is None:
            return
        exercise_b = self.partner_exercise
        if exercise_b is not None:
            state.side = None
            state.time_left = shared_duration(exercise, exercise_b)
        elif exercise.bilateral is not None:
            state.side = "right"
            state.time_left = exercise.bilateral.per_side_sec
        else:
            state.side = None
            state.time_left = exercise.duration_sec

    # -- plumbing -------------------------------------------------------------------

    def _reset(self) -> None:
        previous = self.state
        self.state = ProgressionState(
            partner_mode=previous.partner_mode,
            sound_enabled=previous.sound_enabled,
        )

    def _is_valid_phase(self, phase_index: int) -> bool:
        return self._workout is not None and 0 <= phase_index < len(self._workout.phases)

    def _init_audio(self) -> None:
        if self._cues is None:
            return
        try:
            self._cues.init_audio()
        except Exception as exc:
            logger.warning("Audio unavailable: %s", exc)

    def _emit(self, cue: Cue, value: int | None = None) -> None:
        if self._cues is None or not self.state.sound_enabled:
            return
        try:
            dispatch_cue(self._cues, cue, value)
        except Exception as exc:
            logger.warning("Audio cue '%s' failed: %s", cue.value, exc)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception as exc:
                logger.warning("State listener %r failed: %s", listener, exc)


def _per_side(exercise: Exercise) -> int:
    if exercise.bilateral is not None:
        return exercise.bilateral.per_side_sec
    return exercise.duration_sec
