from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional, Sequence

from .cells import parse_set
from .models import CellSetGroup, RawLog, Workout, WorkoutExercise

WORKOUT_LOG_TYPES = frozenset({"WORKOUT", "LOG"})
UNKNOWN_EXERCISE = "Unknown"


def _first_present(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value is not None:
            return value
    return None


def build_exercise(group: CellSetGroup, measurement_map: Mapping[str, str]) -> WorkoutExercise:
    parsed = [p for p in (parse_set(s) for s in group.cell_sets) if p is not None]
    return WorkoutExercise(
        name=measurement_map.get(group.measurement_id, UNKNOWN_EXERCISE),
        # A missing completed flag counts as completed; only an explicit False is skipped.
        completed_sets=tuple(p.set for p in parsed if p.completed is not False),
        skipped_sets=tuple(p.set for p in parsed if p.completed is False),
    )


def build_workout(log: RawLog, measurement_map: Mapping[str, str]) -> Workout:
    exercises = [build_exercise(g, measurement_map) for g in log.cell_set_groups]
    return Workout(
        id=log.id,
        name=_first_present(log.name_en, log.name_custom),
        start_date=log.start_date,
        end_date=log.end_date,
        timezone=log.timezone_id,
        exercises=tuple(e for e in exercises if e.set_count > 0),
    )


def transform_logs(logs: Sequence[RawLog], measurement_map: Mapping[str, str]) -> List[Workout]:
    """
    Turn raw logs into workouts, newest first.

    Only WORKOUT and LOG entries are kept. The backend returns logs oldest
    first, so the result is the filtered input in reverse order.
    """
    workouts = [
        build_workout(log, measurement_map) for log in logs if log.log_type in WORKOUT_LOG_TYPES
    ]
    workouts.reverse()
    return workouts


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing Z and naive values are read as UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def filter_by_date_range(workouts: Iterable[Workout], start: datetime, end: datetime) -> List[Workout]:
    """Keep workouts whose start date lies in [start, end]; undated workouts are dropped."""
    lower, upper = _as_utc(start), _as_utc(end)
    kept: List[Workout] = []
    for workout in workouts:
        if not workout.start_date:
            continue
        try:
            started = parse_timestamp(workout.start_date)
        except ValueError:
            continue
        if lower <= started <= upper:
            kept.append(workout)
    return kept


def count_sets(workouts: Iterable[Workout]) -> int:
    return sum(e.set_count for w in workouts for e in w.exercises)
