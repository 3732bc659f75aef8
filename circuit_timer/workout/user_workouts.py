"""User-defined workout catalogs stored locally."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from circuit_timer.workout.model import WorkoutDefinition
from circuit_timer.workout.parser import load_catalog_file


logger = logging.getLogger(__name__)


def _default_workouts_dir() -> Path:
    return Path.home() / ".circuit-timer" / "workouts"


@dataclass(frozen=True)
class UserWorkoutFile:
    key: str
    path: Path
    workouts: tuple[WorkoutDefinition, ...]


def list_user_workouts(base_dir: Path | None = None) -> list[UserWorkoutFile]:
    """Load every ``*.json`` catalog in the user directory.

    Invalid files raise ``WorkoutParseError``: a broken workout is an authoring
    mistake that must be fixed before the timer can use it.
    """
    root = base_dir or _default_workouts_dir()
    if not root.exists():
        return []
    out: list[UserWorkoutFile] = []
    for file in sorted(root.glob("*.json")):
        workouts = tuple(load_catalog_file(file))
        logger.debug("Loaded %d workout(s) from %s", len(workouts), file)
        out.append(UserWorkoutFile(key=file.stem, path=file, workouts=workouts))
    return out
