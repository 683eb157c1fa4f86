from __future__ import annotations

import json
from typing import Any, List, Optional, Union

from .models import ExportData, WorkoutSet

CSV_HEADER = "date,workoutName,exerciseName,setNumber,weightKg,reps,rpe,distance,duration,status"


def _quote(text: Optional[str]) -> str:
    return '"' + (text or "").replace('"', '""') + '"'


def _text(value: Optional[str]) -> str:
    if not value:
        return ""
    if any(ch in value for ch in ",\"\r\n"):
        return _quote(value)
    return value


def _number(value: Union[int, float, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _set_row(date: str, workout_name: str, exercise_name: str, number: int, s: WorkoutSet, status: str) -> str:
    return ",".join(
        [
            date,
            workout_name,
            exercise_name,
            str(number),
            _number(s.weight_kg),
            _number(s.reps),
            _number(s.rpe),
            _number(s.distance),
            _text(s.duration),
            status,
        ]
    )


def to_csv(data: ExportData) -> str:
    """
    One row per set. Within an exercise, completed sets come first, then
    skipped ones, numbered from 1.
    """
    lines: List[str] = [CSV_HEADER]
    for workout in data.workouts:
        date = workout.start_date or ""
        workout_name = _quote(workout.name)
        for exercise in workout.exercises:
            exercise_name = _quote(exercise.name)
            tagged = [(s, "completed") for s in exercise.completed_sets] + [
                (s, "skipped") for s in exercise.skipped_sets
            ]
            for number, (s, status) in enumerate(tagged, start=1):
                lines.append(_set_row(date, workout_name, exercise_name, number, s, status))
    return "\n".join(lines)


def strip_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: strip_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [strip_nulls(v) for v in value]
    return value


def to_json(data: ExportData) -> str:
    return json.dumps(strip_nulls(data.to_dict()), ensure_ascii=False, indent=2)
