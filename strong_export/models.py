"""
Records for a Strong export.

Raw records (Cell, CellSet, CellSetGroup, RawLog) mirror the backend payload
and are parsed from JSON when fetched. Derived records (WorkoutSet,
WorkoutExercise, Workout, ExportData) are what the serializers consume.
Everything here is immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Credentials:
    username_or_email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username_or_email={self.username_or_email!r}, password='***')"


@dataclass(frozen=True)
class AuthToken:
    access_token: str
    refresh_token: str
    user_id: str


def _optional_str(raw: Dict, key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _object(raw: Any, what: str) -> Dict:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise TypeError(f"{what} must be an object")
    return raw


def _list(raw: Any, what: str) -> List:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise TypeError(f"{what} must be a list")
    return raw


@dataclass(frozen=True)
class Cell:
    cell_type: str
    value: Optional[str] = None

    @classmethod
    def from_json(cls, raw: Dict) -> "Cell":
        raw = _object(raw, "cell")
        cell_type = raw.get("cellType")
        if not isinstance(cell_type, str):
            raise ValueError("cell is missing cellType")
        return cls(cell_type=cell_type, value=_optional_str(raw, "value"))


@dataclass(frozen=True)
class CellSet:
    cells: Tuple[Cell, ...] = ()
    is_completed: Optional[bool] = None

    @classmethod
    def from_json(cls, raw: Dict) -> "CellSet":
        raw = _object(raw, "cellSet")
        completed = raw.get("isCompleted")
        if completed is not None and not isinstance(completed, bool):
            raise TypeError("isCompleted must be a boolean")
        cells = tuple(Cell.from_json(c) for c in _list(raw.get("cells"), "cells"))
        return cls(cells=cells, is_completed=completed)


@dataclass(frozen=True)
class CellSetGroup:
    measurement_href: str = ""
    cell_sets: Tuple[CellSet, ...] = ()

    @property
    def measurement_id(self) -> str:
        return self.measurement_href.rstrip("/").split("/")[-1] if self.measurement_href else ""

    @classmethod
    def from_json(cls, raw: Dict) -> "CellSetGroup":
        raw = _object(raw, "cellSetGroup")
        links = _object(raw.get("_links"), "_links")
        measurement = _object(links.get("measurement"), "_links.measurement")
        href = _optional_str(measurement, "href") or ""
        cell_sets = tuple(CellSet.from_json(s) for s in _list(raw.get("cellSets"), "cellSets"))
        return cls(measurement_href=href, cell_sets=cell_sets)


@dataclass(frozen=True)
class RawLog:
    id: str
    name_en: Optional[str] = None
    name_custom: Optional[str] = None
    log_type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    timezone_id: Optional[str] = None
    cell_set_groups: Tuple[CellSetGroup, ...] = ()

    @classmethod
    def from_json(cls, raw: Dict) -> "RawLog":
        raw = _object(raw, "log")
        log_id = raw.get("id")
        if not isinstance(log_id, str):
            raise ValueError("log is missing id")
        name = _object(raw.get("name"), "name")
        embedded = _object(raw.get("_embedded"), "_embedded")
        groups = tuple(
            CellSetGroup.from_json(g) for g in _list(embedded.get("cellSetGroup"), "cellSetGroup")
        )
        return cls(
            id=log_id,
            name_en=_optional_str(name, "en"),
            name_custom=_optional_str(name, "custom"),
            log_type=_optional_str(raw, "logType"),
            start_date=_optional_str(raw, "startDate"),
            end_date=_optional_str(raw, "endDate"),
            timezone_id=_optional_str(raw, "timezoneId"),
            cell_set_groups=groups,
        )


@dataclass(frozen=True)
class WorkoutSet:
    weight_kg: Optional[float] = None
    reps: Optional[int] = None
    rpe: Optional[float] = None
    distance: Optional[float] = None
    duration: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weightKg": self.weight_kg,
            "reps": self.reps,
            "rpe": self.rpe,
            "distance": self.distance,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class WorkoutExercise:
    name: str
    completed_sets: Tuple[WorkoutSet, ...] = ()
    skipped_sets: Tuple[WorkoutSet, ...] = ()

    @property
    def set_count(self) -> int:
        return len(self.completed_sets) + len(self.skipped_sets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "completedSets": [s.to_dict() for s in self.completed_sets],
            "skippedSets": [s.to_dict() for s in self.skipped_sets],
        }


@dataclass(frozen=True)
class Workout:
    id: str
    name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    timezone: Optional[str] = None
    exercises: Tuple[WorkoutExercise, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "timezone": self.timezone,
            "exercises": [e.to_dict() for e in self.exercises],
        }


@dataclass(frozen=True)
class ExportData:
    exported_at: str
    total_workouts: int
    workouts: Tuple[Workout, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exportedAt": self.exported_at,
            "totalWorkouts": self.total_workouts,
            "workouts": [w.to_dict() for w in self.workouts],
        }
