from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .paths import DOTENV_PATH, STRONG_BACKEND_DEFAULT

USER_ENV = "STRONG_USER"
PASSWORD_ENV = "STRONG_PASS"
BACKEND_ENV = "STRONG_BACKEND"


def load_dotenv(path: Path = DOTENV_PATH) -> None:
    """
    Minimal .env loader.
    - Supports KEY=VALUE lines
    - Ignores blank lines and comments
    - Does not overwrite existing environment variables
    """
    if not path.exists():
        return
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip("'").strip('"')
        if not key or key in os.environ:
            continue
        os.environ[key] = value


def resolve_username(option: Optional[str]) -> Optional[str]:
    return option if option is not None else os.environ.get(USER_ENV)


def resolve_password(option: Optional[str]) -> Optional[str]:
    return option if option is not None else os.environ.get(PASSWORD_ENV)


def resolve_backend(option: Optional[str]) -> str:
    return option or os.environ.get(BACKEND_ENV) or STRONG_BACKEND_DEFAULT
