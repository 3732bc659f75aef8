"""Session controller shared by the terminal runner and the web UI."""

from __future__ import annotations

import logging
from typing import Callable

from circuit_timer.core.cues import CueSink
from circuit_timer.core.display import SessionProgress, build_progress
from circuit_timer.core.engine import ProgressionEngine
from circuit_timer.core.state import ProgressionState
from circuit_timer.ui.wake_lock import NullWakeLock, WakeLock
from circuit_timer.workout.library import WorkoutCatalog
from circuit_timer.workout.model import WorkoutDefinition
from circuit_timer.workout.runner import TickScheduler


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[SessionProgress], None]


class SessionController:
    """One workout session: catalog lookup, engine, tick driver and wake lock.

    Commands that set the workout running must be issued on the event loop,
    since that is where the tick scheduler lives.
    """

    def __init__(
        self,
        catalog: WorkoutCatalog | None = None,
        cues: CueSink | None = None,
        wake_lock: WakeLock | None = None,
        partner_mode: bool = False,
        sound_enabled: bool = True,
        tick_interval_sec: float = 1.0,
    ) -> None:
        self._catalog = catalog or WorkoutCatalog()
        self.engine = ProgressionEngine(
            cues=cues,
            partner_mode=partner_mode,
            sound_enabled=sound_enabled,
        )
        self._scheduler = TickScheduler(self.engine, interval_sec=tick_interval_sec)
        self._wake_lock: WakeLock = wake_lock or NullWakeLock()
        self._was_running = False
        self._progress_listeners: list[ProgressCallback] = []
        self.engine.subscribe(self._on_state)

    @property
    def catalog(self) -> WorkoutCatalog:
        return self._catalog

    @property
    def workout(self) -> WorkoutDefinition | None:
        return self.engine.workout

    @property
    def state(self) -> ProgressionState:
        return self.engine.state

    @property
    def ticking(self) -> bool:
        return self._scheduler.is_running

    @property
    def wake_lock(self) -> WakeLock:
        return self._wake_lock

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        self._progress_listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._progress_listeners:
                self._progress_listeners.remove(callback)

        return unsubscribe

    def progress(self) -> SessionProgress | None:
        return build_progress(self.engine)

    def select(self, workout_id: str) -> WorkoutDefinition | None:
        workout = self._catalog.get(workout_id)
        if workout is None:
            logger.warning("Unknown workout '%s'", workout_id)
            return None
        self.engine.load(workout)
        return workout

    def deselect(self) -> None:
        self.engine.load(None)

    def start(self) -> None:
        self.engine.start()

    def start_from_phase(self, phase_index: int) -> None:
        self.engine.start_from_phase(phase_index)

    def go_to_phase(self, phase_index: int) -> None:
        self.engine.go_to_phase(phase_index)

    def toggle_running(self) -> None:
        self.engine.toggle_running()

    def next(self) -> None:
        self.engine.advance()

    def previous(self) -> None:
        self.engine.retreat()

    def restart(self) -> None:
        self.engine.restart()

    def toggle_partner_mode(self, enabled: bool | None = None) -> None:
        self.engine.toggle_partner_mode(enabled)

    def toggle_sound(self) -> None:
        self.engine.toggle_sound()

    def on_visible(self) -> None:
        """Host view is back in the foreground; browsers drop the lock when hidden."""
        if self._was_running:
            self._wake_lock.acquire()

    def on_hidden(self) -> None:
        self._wake_lock.release()

    def shutdown(self) -> None:
        self._scheduler.stop()
        self._wake_lock.release()
        self._was_running = False

    def _on_state(self, state: ProgressionState) -> None:
        running = state.is_running and not state.is_finished
        if running and not self._was_running:
            self._scheduler.start()
            self._wake_lock.acquire()
        elif not running and self._was_running:
            self._scheduler.stop()
            self._wake_lock.release()
        self._was_running = running

        if not self._progress_listeners:
            return
        progress = build_progress(self.engine)
        if progress is None:
            return
        for callback in list(self._progress_listeners):
            callback(progress)
