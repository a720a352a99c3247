"""Exercise catalog file parser (CSV/JSON)."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, cast

from breather.exercise.model import PHASE_TYPES, Exercise, Phase, PhaseType


class ExerciseParseError(ValueError):
    """Raised when an exercise catalog file is invalid."""


def load_catalog(path: str | Path) -> Mapping[str, Exercise]:
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return _load_json(file_path)
    if suffix == ".csv":
        return _load_csv(file_path)
    raise ExerciseParseError(
        f"Unsupported catalog format '{file_path.suffix}'. Use .json or .csv"
    )


def _load_json(path: Path) -> Mapping[str, Exercise]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ExerciseParseError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ExerciseParseError("Catalog JSON must be an object")

    exercises_obj = data.get("exercises")
    if not isinstance(exercises_obj, dict):
        raise ExerciseParseError("Catalog field 'exercises' must be an object")

    exercises: dict[str, Exercise] = {}
    for exercise_id, raw in exercises_obj.items():
        if not isinstance(raw, dict):
            raise ExerciseParseError(f"Exercise '{exercise_id}': must be an object")

        name_obj = raw.get("name", exercise_id)
        if not isinstance(name_obj, str):
            raise ExerciseParseError(
                f"Exercise '{exercise_id}': field 'name' must be a string"
            )

        phases_obj = raw.get("phases")
        if not isinstance(phases_obj, list):
            raise ExerciseParseError(
                f"Exercise '{exercise_id}': field 'phases' must be an array"
            )

        phases: list[Phase] = []
        for i, raw_phase in enumerate(phases_obj):
            if not isinstance(raw_phase, dict):
                raise ExerciseParseError(
                    f"Exercise '{exercise_id}' phase {i + 1}: must be an object"
                )
            phases.append(
                _build_phase(
                    type_obj=raw_phase.get("type"),
                    duration_obj=raw_phase.get("duration_ms"),
                    instruction_obj=raw_phase.get("instruction"),
                    exercise_id=exercise_id,
                    index=i,
                )
            )

        exercises[exercise_id] = _build_exercise(
            exercise_id=exercise_id,
            name=name_obj.strip() or exercise_id,
            phases=phases,
        )

    return _build_catalog(exercises)


def _load_csv(path: Path) -> Mapping[str, Exercise]:
    names: dict[str, str] = {}
    grouped: dict[str, list[Phase]] = {}
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        fields = set(reader.fieldnames or [])
        required = {"exercise_id", "type", "duration_ms"}
        if not required.issubset(fields):
            raise ExerciseParseError(
                "CSV must contain headers: exercise_id,type,duration_ms[,name,instruction]"
            )

        for row in reader:
            exercise_id = (row.get("exercise_id") or "").strip()
            if not exercise_id:
                raise ExerciseParseError(f"Line {reader.line_num}: missing exercise_id")
            phases = grouped.setdefault(exercise_id, [])
            name = (row.get("name") or "").strip()
            if name and exercise_id not in names:
                names[exercise_id] = name
            phases.append(
                _build_phase(
                    type_obj=row.get("type"),
                    duration_obj=row.get("duration_ms"),
                    instruction_obj=row.get("instruction"),
                    exercise_id=exercise_id,
                    index=len(phases),
                )
            )

    exercises = {
        exercise_id: _build_exercise(
            exercise_id=exercise_id,
            name=names.get(exercise_id, exercise_id),
            phases=phases,
        )
        for exercise_id, phases in grouped.items()
    }
    return _build_catalog(exercises)


def _build_phase(
    *,
    type_obj: object,
    duration_obj: object,
    instruction_obj: object,
    exercise_id: str,
    index: int,
) -> Phase:
    where = f"Exercise '{exercise_id}' phase {index + 1}"

    phase_type = str(type_obj).strip().lower() if type_obj is not None else ""
    if phase_type not in PHASE_TYPES:
        raise ExerciseParseError(
            f"{where}: type must be one of {', '.join(PHASE_TYPES)}"
        )

    if duration_obj is None or isinstance(duration_obj, bool):
        raise ExerciseParseError(f"{where}: invalid duration_ms")
    try:
        duration_ms = int(str(duration_obj).strip())
    except ValueError as exc:
        raise ExerciseParseError(f"{where}: invalid duration_ms") from exc
    if duration_ms <= 0:
        raise ExerciseParseError(f"{where}: duration_ms must be > 0")

    instruction = str(instruction_obj).strip() if instruction_obj is not None else ""
    if not instruction:
        instruction = phase_type.capitalize()

    return Phase(
        type=cast(PhaseType, phase_type),
        duration_ms=duration_ms,
        instruction=instruction,
    )


def _build_exercise(*, exercise_id: str, name: str, phases: list[Phase]) -> Exercise:
    if not phases:
        raise ExerciseParseError(
            f"Exercise '{exercise_id}' must contain at least one phase"
        )
    return Exercise(name=name, phases=tuple(phases))


def _build_catalog(exercises: dict[str, Exercise]) -> Mapping[str, Exercise]:
    if not exercises:
        raise ExerciseParseError("Catalog must contain at least one exercise")
    return MappingProxyType(exercises)
