"""Workout catalog parser (JSON)."""

from __future__ import annotations

import json
from pathlib import Path

from circuit_timer.workout.model import (
    DEFAULT_SWITCH_REST_SEC,
    PHASE_TYPES,
    BilateralTiming,
    Exercise,
    Phase,
    PhaseType,
    WorkoutDefinition,
)


class WorkoutParseError(ValueError):
    """Raised when a workout catalog is invalid."""


def load_catalog_file(path: str | Path) -> list[WorkoutDefinition]:
    file_path = Path(path)
    if file_path.suffix.lower() != ".json":
        raise WorkoutParseError(
            f"Unsupported catalog format '{file_path.suffix}'. Use .json"
        )
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"{file_path.name}: invalid JSON: {exc}") from exc
    return parse_catalog(data, default_id=file_path.stem)


def parse_catalog(data: object, default_id: str | None = None) -> list[WorkoutDefinition]:
    """Accept one workout object, a list of them, or ``{"workouts": [...]}``."""
    if isinstance(data, dict) and "workouts" in data:
        data = data["workouts"]
    if isinstance(data, dict):
        return [parse_workout(data, default_id=default_id)]
    if not isinstance(data, list):
        raise WorkoutParseError("Catalog JSON must be an object or an array")

    workouts: list[WorkoutDefinition] = []
    seen: set[str] = set()
    for i, raw in enumerate(data):
        workout = parse_workout(raw, index=i)
        if workout.id in seen:
            raise WorkoutParseError(f"Duplicate workout id '{workout.id}'")
        seen.add(workout.id)
        workouts.append(workout)
    return workouts


def parse_workout(
    raw: object, *, index: int = 0, default_id: str | None = None
) -> WorkoutDefinition:
    if not isinstance(raw, dict):
        raise WorkoutParseError(f"Workout {index + 1}: must be an object")

    id_obj = raw.get("id")
    if id_obj is None:
        id_obj = default_id
    if not isinstance(id_obj, str) or not id_obj.strip():
        raise WorkoutParseError(f"Workout {index + 1}: field 'id' must be a non-empty string")
    workout_id = id_obj.strip()
    where = f"Workout '{workout_id}'"

    name_obj = raw.get("name", workout_id)
    if not isinstance(name_obj, str):
        raise WorkoutParseError(f"{where}: field 'name' must be a string")
    description_obj = raw.get("description", "")
    if not isinstance(description_obj, str):
        raise WorkoutParseError(f"{where}: field 'description' must be a string")

    phases_obj = raw.get("phases")
    if not isinstance(phases_obj, list) or not phases_obj:
        raise WorkoutParseError(f"{where}: field 'phases' must be a non-empty array")

    phases = tuple(
        _build_phase(item, where=f"{where} phase {i + 1}")
        for i, item in enumerate(phases_obj)
    )
    return WorkoutDefinition(
        id=workout_id,
        name=name_obj.strip() or workout_id,
        description=description_obj.strip(),
        phases=phases,
    )


def _build_phase(raw: object, *, where: str) -> Phase:
    if not isinstance(raw, dict):
        raise WorkoutParseError(f"{where}: must be an object")

    type_obj = raw.get("type")
    if type_obj not in PHASE_TYPES:
        raise WorkoutParseError(
            f"{where}: field 'type' must be one of {', '.join(PHASE_TYPES)}"
        )
    phase_type: PhaseType = type_obj

    name_obj = raw.get("name", phase_type.capitalize())
    if not isinstance(name_obj, str):
        raise WorkoutParseError(f"{where}: field 'name' must be a string")

    rounds = _parse_int_field(raw.get("rounds", 1), field_name="rounds", where=where)
    if rounds < 1:
        raise WorkoutParseError(f"{where}: rounds must be >= 1")

    rest_between_rounds = _parse_optional_int_field(
        raw.get("restBetweenRounds"), field_name="restBetweenRounds", where=where
    )
    if rest_between_rounds is not None and rest_between_rounds < 0:
        raise WorkoutParseError(f"{where}: restBetweenRounds must be >= 0")

    exercises_obj = raw.get("exercises")
    if not isinstance(exercises_obj, list) or not exercises_obj:
        raise WorkoutParseError(f"{where}: field 'exercises' must be a non-empty array")

    exercises = tuple(
        _build_exercise(item, where=f"{where} exercise {i + 1}")
        for i, item in enumerate(exercises_obj)
    )
    return Phase(
        type=phase_type,
        name=name_obj.strip() or phase_type.capitalize(),
        exercises=exercises,
        icon=str(raw.get("icon") or ""),
        rounds=rounds,
        rest_between_rounds_sec=rest_between_rounds or None,
    )


def _build_exercise(raw: object, *, where: str) -> Exercise:
    if not isinstance(raw, dict):
        raise WorkoutParseError(f"{where}: must be an object")

    name_obj = raw.get("name")
    if not isinstance(name_obj, str) or not name_obj.strip():
        raise WorkoutParseError(f"{where}: field 'name' must be a non-empty string")

    rest_after = _parse_int_field(raw.get("restAfter", 0), field_name="restAfter", where=where)
    if rest_after < 0:
        raise WorkoutParseError(f"{where}: restAfter must be >= 0")

    instructions_obj = raw.get("instructions", [])
    if not isinstance(instructions_obj, list) or not all(
        isinstance(item, str) for item in instructions_obj
    ):
        raise WorkoutParseError(f"{where}: field 'instructions' must be an array of strings")

    tip: str | None
    tip_obj = raw.get("tip")
    if tip_obj is None:
        tip = None
    else:
        tip = str(tip_obj).strip() or None

    bilateral: BilateralTiming | None = None
    duration = 0
    if raw.get("bilateral"):
        per_side = _parse_optional_int_field(
            raw.get("perSideDuration"), field_name="perSideDuration", where=where
        )
        if per_side is None:
            raise WorkoutParseError(f"{where}: bilateral exercise requires perSideDuration")
        if per_side <= 0:
            raise WorkoutParseError(f"{where}: perSideDuration must be > 0")
        switch_rest = _parse_optional_int_field(
            raw.get("switchRestDuration"), field_name="switchRestDuration", where=where
        )
        if switch_rest is None:
            switch_rest = DEFAULT_SWITCH_REST_SEC
        if switch_rest < 0:
            raise WorkoutParseError(f"{where}: switchRestDuration must be >= 0")
        bilateral = BilateralTiming(per_side_sec=per_side, switch_rest_sec=switch_rest)
    else:
        duration = _parse_int_field(raw.get("duration"), field_name="duration", where=where)
        if duration <= 0:
            raise WorkoutParseError(f"{where}: duration must be > 0")

    return Exercise(
        name=name_obj.strip(),
        duration_sec=duration,
        rest_after_sec=rest_after,
        instructions=tuple(item.strip() for item in instructions_obj),
        tip=tip,
        bilateral=bilateral,
    )


def _parse_int_field(raw: object, *, field_name: str, where: str) -> int:
    if raw is None or isinstance(raw, bool):
        raise WorkoutParseError(f"{where}: invalid {field_name}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise WorkoutParseError(f"{where}: {field_name} must be a whole number of seconds")
        return int(raw)
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"{where}: invalid {field_name}") from exc


def _parse_optional_int_field(raw: object, *, field_name: str, where: str) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, str) and raw.strip() == "":
        return None
    return _parse_int_field(raw, field_name=field_name, where=where)
