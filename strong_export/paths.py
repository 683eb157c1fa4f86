from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
EXPORTS_DIR = Path("exports")
DOTENV_PATH = ROOT / ".env"

STRONG_BACKEND_DEFAULT = "https://back.strong.app/"
LOGIN_PATH = "auth/login"
MEASUREMENTS_PATH = "api/measurements"
USER_MEASUREMENTS_PATH = "api/users/{user_id}/measurements"
USER_LOGS_PATH = "api/users/{user_id}"

LOG_PAGE_LIMIT = 200
REQUEST_TIMEOUT = 30
