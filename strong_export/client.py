from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from .models import AuthToken, Credentials
from .paths import LOGIN_PATH, REQUEST_TIMEOUT, STRONG_BACKEND_DEFAULT

DEFAULT_HEADERS = {
    # The backend only answers clients that look like the Android app.
    "User-Agent": "Strong Android",
    "Content-Type": "application/json",
    "Accept": "application/json",
    "X-Client-Build": "600013",
    "X-Client-Platform": "android",
}


class StrongError(RuntimeError):
    """Base class for failures talking to the Strong backend."""


@dataclass(frozen=True)
class StrongAuthError(StrongError):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class StrongApiError(StrongError):
    message: str
    status: Optional[int] = None

    def __str__(self) -> str:
        return self.message


def make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(DEFAULT_HEADERS)
    return session


def endpoint_url(backend: str, path: str) -> str:
    if not backend.endswith("/"):
        backend += "/"
    return urljoin(backend, path)


def auth_headers(token: str) -> Dict[str, str]:
    return {**DEFAULT_HEADERS, "Authorization": f"Bearer {token}"}


def login(
    credentials: Credentials,
    *,
    backend: str = STRONG_BACKEND_DEFAULT,
    session: Optional[requests.Session] = None,
) -> AuthToken:
    """
    Exchange a username/email and password for an access token.

    Any non-200 status, transport error, or body without string
    accessToken/refreshToken/userId raises StrongAuthError.
    """
    sess = session or make_session()
    try:
        resp = sess.post(
            endpoint_url(backend, LOGIN_PATH),
            json={
                "usernameOrEmail": credentials.username_or_email,
                "password": credentials.password,
            },
            headers=DEFAULT_HEADERS,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise StrongAuthError(f"Authentication failed: {e}") from e

    if resp.status_code != 200:
        raise StrongAuthError(f"Authentication failed: {resp.status_code} - {resp.text}")

    try:
        data: Any = resp.json()
    except ValueError as e:
        raise StrongAuthError("Authentication failed: response was not JSON") from e

    if not isinstance(data, dict):
        raise StrongAuthError("Unexpected login response shape")
    fields = (data.get("accessToken"), data.get("refreshToken"), data.get("userId"))
    if not all(isinstance(f, str) for f in fields):
        raise StrongAuthError("Unexpected login response shape")

    access_token, refresh_token, user_id = fields
    return AuthToken(access_token=access_token, refresh_token=refresh_token, user_id=user_id)
