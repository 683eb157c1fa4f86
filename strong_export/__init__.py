"""
Export workout history from the Strong app backend.

`export_strong.py` is the CLI entrypoint; the implementation lives in
`strong_export/*`.
"""

from .cells import ParsedSet, parse_set
from .client import StrongApiError, StrongAuthError, StrongError, login, make_session
from .env import load_dotenv
from .logs import continuation_from_href, fetch_workout_logs
from .measurements import fetch_measurements, paginate_numbered
from .models import (
    AuthToken,
    Cell,
    CellSet,
    CellSetGroup,
    Credentials,
    ExportData,
    RawLog,
    Workout,
    WorkoutExercise,
    WorkoutSet,
)
from .serializers import to_csv, to_json
from .service import export_workouts, with_workouts
from .transform import count_sets, filter_by_date_range, transform_logs

__all__ = [
    "AuthToken",
    "Cell",
    "CellSet",
    "CellSetGroup",
    "Credentials",
    "ExportData",
    "ParsedSet",
    "RawLog",
    "StrongApiError",
    "StrongAuthError",
    "StrongError",
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
    "continuation_from_href",
    "count_sets",
    "export_workouts",
    "fetch_measurements",
    "fetch_workout_logs",
    "filter_by_date_range",
    "load_dotenv",
    "login",
    "make_session",
    "paginate_numbered",
    "parse_set",
    "to_csv",
    "to_json",
    "transform_logs",
    "with_workouts",
]
