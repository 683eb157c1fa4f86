from __future__ import annotations

import time
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urljoin, urlsplit

import requests

from .client import StrongApiError, auth_headers, endpoint_url, make_session
from .models import RawLog
from .paths import LOG_PAGE_LIMIT, REQUEST_TIMEOUT, STRONG_BACKEND_DEFAULT, USER_LOGS_PATH


def continuation_from_href(href: str, backend: str = STRONG_BACKEND_DEFAULT) -> str:
    """Pull the `continuation` query parameter out of a (possibly relative) next link."""
    query = urlsplit(urljoin(backend, href)).query
    values = parse_qs(query, keep_blank_values=True).get("continuation") or [""]
    return values[0]


def _parse_page(data: Dict) -> Tuple[List[RawLog], Optional[str]]:
    if not isinstance(data, dict):
        raise TypeError("log page must be an object")
    embedded = data.get("_embedded") or {}
    raw_batch = embedded.get("log") or []
    if not isinstance(raw_batch, list):
        raise TypeError("_embedded.log must be a list")
    batch = [RawLog.from_json(item) for item in raw_batch]
    links = data.get("_links") or {}
    next_href = (links.get("continuation") or {}).get("href")
    if next_href is not None and not isinstance(next_href, str):
        raise TypeError("_links.continuation.href must be a string")
    return batch, next_href


def fetch_workout_logs(
    token: str,
    user_id: str,
    *,
    backend: str = STRONG_BACKEND_DEFAULT,
    session: Optional[requests.Session] = None,
    limit: int = LOG_PAGE_LIMIT,
    log_progress: bool = False,
) -> List[RawLog]:
    """
    Fetch every log for a user via continuation-token pagination.

    Unlike the measurement catalogs, a bad status on any page fails the whole
    fetch. The loop ends when there is no continuation link, the batch is
    empty, or the link carries an empty token.
    """
    sess = session or make_session()
    url = endpoint_url(backend, USER_LOGS_PATH.format(user_id=user_id))
    logs: List[RawLog] = []
    continuation = ""
    page = 0
    started = time.monotonic()

    while True:
        page += 1
        try:
            resp = sess.get(
                url,
                params={"limit": limit, "continuation": continuation, "include": "log"},
                headers=auth_headers(token),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StrongApiError(f"Failed to fetch workout logs: {e}") from e

        if resp.status_code != 200:
            raise StrongApiError(
                f"Failed to fetch logs: {resp.status_code} - {resp.text}",
                status=resp.status_code,
            )

        try:
            batch, next_href = _parse_page(resp.json())
        except (ValueError, TypeError, AttributeError) as e:
            raise StrongApiError(
                f"Failed to fetch workout logs: malformed response ({e})",
                status=resp.status_code,
            ) from e

        logs.extend(batch)
        if log_progress:
            print(f"[logs] page {page} · {len(batch)} logs · {len(logs)} total")

        if not next_href or not batch:
            break
        try:
            continuation = continuation_from_href(next_href, backend)
        except ValueError as e:
            raise StrongApiError(f"Failed to fetch workout logs: bad continuation link ({e})") from e
        if not continuation:
            break

    if log_progress:
        print(f"[logs] done · fetched {len(logs)} logs in {time.monotonic() - started:.1f}s")
    return logs
