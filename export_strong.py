"""
Export workouts from the Strong app.

Commands:
    python export_strong.py export [-u EMAIL] [--format json|csv] [--from 2026-01-01] [--to 2026-12-31] [-o PATH]
    python export_strong.py login [-u EMAIL]

Credentials fall back to STRONG_USER / STRONG_PASS (a local .env is read
too); the password is prompted for when neither is given.
"""

import argparse
import getpass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from strong_export import (
    Credentials,
    StrongApiError,
    StrongAuthError,
    count_sets,
    export_workouts,
    filter_by_date_range,
    load_dotenv,
    login,
    to_csv,
    to_json,
    with_workouts,
)
from strong_export.env import resolve_backend, resolve_password, resolve_username
from strong_export.paths import EXPORTS_DIR
from strong_export.transform import parse_timestamp

FORMATS = ("json", "csv")
DEFAULT_RANGE_DAYS = 30


def resolve_date_range(
    start: Optional[str], end: Optional[str], now: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """
    --from defaults to 30 days ago and --to to now. An explicit --to covers
    the whole day (up to 23:59:59.999 UTC).
    """
    now = now or datetime.now(timezone.utc)
    start_dt = parse_timestamp(start) if start else now - timedelta(days=DEFAULT_RANGE_DAYS)
    if end:
        end_dt = parse_timestamp(end).astimezone(timezone.utc).replace(
            hour=23, minute=59, second=59, microsecond=999000
        )
    else:
        end_dt = now
    return start_dt, end_dt


def resolve_output_path(output: Optional[str], fmt: str, today: Optional[str] = None) -> Path:
    if output:
        return Path(output if output.endswith(f".{fmt}") else f"{output}.{fmt}")
    today = today or datetime.now(timezone.utc).date().isoformat()
    return EXPORTS_DIR / f"strong-export-{today}.{fmt}"


def _credentials(args: argparse.Namespace) -> Credentials:
    username = resolve_username(args.username)
    if not username:
        raise SystemExit("Username required: use --username or set STRONG_USER")
    password = resolve_password(args.password)
    if password is None:
        password = getpass.getpass("Password: ")
    return Credentials(username_or_email=username, password=password)


def cmd_export(args: argparse.Namespace) -> None:
    fmt = args.format.lower()
    if fmt not in FORMATS:
        raise SystemExit(f"Invalid format: {args.format}. Must be 'json' or 'csv'")
    try:
        start, end = resolve_date_range(args.start, args.end)
    except ValueError as e:
        raise SystemExit(f"Invalid date: {e}")

    credentials = _credentials(args)
    print("[strong] Logging in to Strong...")
    try:
        raw = export_workouts(credentials, backend=resolve_backend(args.backend), log_progress=True)
    except StrongAuthError as e:
        raise SystemExit(f"\nLogin failed: {e}\n\nCheck your username and password.")
    except StrongApiError as e:
        raise SystemExit(f"\nExport failed: {e}")

    data = with_workouts(raw, filter_by_date_range(raw.workouts, start, end))
    content = to_csv(data) if fmt == "csv" else to_json(data)

    out_path = resolve_output_path(args.output, fmt)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")

    print(
        f"\nExported {data.total_workouts} workouts ({count_sets(data.workouts)} sets) "
        f"from {start.date().isoformat()} to {end.date().isoformat()}."
    )
    print(f"Saved to: {out_path}")


def cmd_login(args: argparse.Namespace) -> None:
    credentials = _credentials(args)
    print("[strong] Testing authentication...")
    try:
        token = login(credentials, backend=resolve_backend(args.backend))
    except StrongAuthError as e:
        raise SystemExit(f"\nLogin failed: {e}")
    print("Login successful!")
    print(f"User ID: {token.user_id}")


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("-u", "--username", default=None, help="Strong account email (or set STRONG_USER).")
    p.add_argument(
        "-p",
        "--password",
        default=None,
        help="Strong account password (or set STRONG_PASS, will prompt if omitted).",
    )
    p.add_argument("--backend", default=None, help="Backend base URL (or set STRONG_BACKEND).")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export your workout data from the Strong app.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_export = sub.add_parser("export", help="Export workouts to JSON or CSV.")
    _add_common(p_export)
    p_export.add_argument("-o", "--output", default=None, help="Output file path.")
    p_export.add_argument("--format", default="json", help="Output format: json or csv.")
    p_export.add_argument(
        "--from",
        dest="start",
        default=None,
        help="Start date inclusive (ISO date, e.g. 2026-01-01). Defaults to 30 days ago.",
    )
    p_export.add_argument(
        "--to",
        dest="end",
        default=None,
        help="End date inclusive (ISO date, e.g. 2026-12-31). Defaults to today.",
    )
    p_export.set_defaults(func=cmd_export)

    p_login = sub.add_parser("login", help="Check that your credentials work.")
    _add_common(p_login)
    p_login.set_defaults(func=cmd_login)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
