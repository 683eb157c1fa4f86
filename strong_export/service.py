"""
End-to-end export: log in, fetch the measurement catalogs and the workout
logs side by side, then reconcile them into ExportData.

Nothing is retried. A failed login raises StrongAuthError; a failed fetch
raises StrongApiError from whichever branch failed first.
"""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Sequence

import requests

from .client import login, make_session
from .logs import fetch_workout_logs
from .measurements import fetch_measurements
from .models import Credentials, ExportData, Workout
from .paths import STRONG_BACKEND_DEFAULT
from .transform import transform_logs

SessionFactory = Callable[[], requests.Session]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_exported_at(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_workouts(
    credentials: Credentials,
    *,
    backend: str = STRONG_BACKEND_DEFAULT,
    session_factory: SessionFactory = make_session,
    log_progress: bool = False,
    now: Callable[[], datetime] = _utc_now,
) -> ExportData:
    login_session = session_factory()
    try:
        token = login(credentials, backend=backend, session=login_session)
    finally:
        login_session.close()
    if log_progress:
        print(f"[strong] Logged in as user {token.user_id}; fetching exercises and logs…")

    # Each branch gets its own session; requests.Session is not shared across threads.
    measurements_session, logs_session = session_factory(), session_factory()
    try:
        with ThreadPoolExecutor(max_workers=2) as ex:
            measurements_future = ex.submit(
                fetch_measurements,
                token.access_token,
                token.user_id,
                backend=backend,
                session=measurements_session,
                log_progress=log_progress,
            )
            logs_future = ex.submit(
                fetch_workout_logs,
                token.access_token,
                token.user_id,
                backend=backend,
                session=logs_session,
                log_progress=log_progress,
            )
            done, _ = wait((measurements_future, logs_future), return_when=FIRST_EXCEPTION)
            # Surface the first failure.
            for fut in done:
                err = fut.exception()
                if err is not None:
                    raise err
            measurement_map = measurements_future.result()
            logs = logs_future.result()
    finally:
        measurements_session.close()
        logs_session.close()

    workouts = transform_logs(logs, measurement_map)
    return ExportData(
        exported_at=format_exported_at(now()),
        total_workouts=len(workouts),
        workouts=tuple(workouts),
    )


def with_workouts(data: ExportData, workouts: Sequence[Workout]) -> ExportData:
    """Copy of `data` holding `workouts`, with the count kept in step."""
    return replace(data, workouts=tuple(workouts), total_workouts=len(workouts))