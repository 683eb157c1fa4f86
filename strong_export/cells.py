from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .models import Cell, CellSet, WorkoutSet

WEIGHT_CELL_TYPES = frozenset(
    {
        "OTHER_WEIGHT",
        "DUMBBELL_WEIGHT",
        "BARBELL_WEIGHT",
        "WEIGHTED_BODYWEIGHT",
    }
)
# Cell sets carrying either of these are timers/notes, not performed sets.
NON_SET_CELL_TYPES = frozenset({"REST_TIMER", "NOTE"})

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class ParsedSet:
    set: WorkoutSet
    completed: Optional[bool]


def _first_value(cells: Iterable[Cell], accepted: Iterable[str]) -> Optional[str]:
    accepted = frozenset(accepted)
    for cell in cells:
        if cell.cell_type in accepted:
            return cell.value or None
    return None


def _to_float(value: Optional[str]) -> Optional[float]:
    if not value or "_" in value:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    # Finite only: JSON has no NaN or Infinity.
    return parsed if math.isfinite(parsed) else None


def _to_int(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    m = _LEADING_INT.match(value)
    if not m:
        return None
    return int(m.group(1))


def parse_set(cell_set: CellSet) -> Optional[ParsedSet]:
    """
    Decode one cell set into a WorkoutSet.

    Returns None for rest timers and notes. Fields with no matching cell, an
    empty value, or an unparseable number come back as None.
    """
    cells = cell_set.cells
    if any(c.cell_type in NON_SET_CELL_TYPES for c in cells):
        return None

    workout_set = WorkoutSet(
        weight_kg=_to_float(_first_value(cells, WEIGHT_CELL_TYPES)),
        reps=_to_int(_first_value(cells, ("REPS",))),
        rpe=_to_float(_first_value(cells, ("RPE",))),
        distance=_to_float(_first_value(cells, ("DISTANCE",))),
        duration=_first_value(cells, ("DURATION",)),
    )
    return ParsedSet(set=workout_set, completed=cell_set.is_completed)
