from __future__ import annotations

import time
from typing import Dict, Iterable, List, Optional

import requests

from .client import StrongApiError, auth_headers, endpoint_url, make_session
from .paths import (
    MEASUREMENTS_PATH,
    REQUEST_TIMEOUT,
    STRONG_BACKEND_DEFAULT,
    USER_MEASUREMENTS_PATH,
)


def measurement_name(item: Dict) -> str:
    """Custom name, then the English name, then the raw id."""
    name = item.get("name") or {}
    for candidate in (name.get("custom"), name.get("en"), item.get("id")):
        if candidate is not None:
            return str(candidate)
    return ""


def paginate_numbered(
    url: str,
    token: str,
    *,
    session: requests.Session,
) -> Iterable[List[Dict]]:
    """
    Yield pages of measurement items from one catalog endpoint.

    Pages are numbered from 0. We stop on any non-200 status (treated as the
    end of the catalog), on an empty page, or when the response has no
    `_links.next`.
    """
    page = 0
    while True:
        resp = session.get(
            url,
            params={"page": page},
            headers=auth_headers(token),
            timeout=REQUEST_TIMEOUT,
        )
        if resp.status_code != 200:
            break

        data = resp.json() or {}
        if not isinstance(data, dict):
            raise TypeError("measurement page must be an object")
        items = (data.get("_embedded") or {}).get("measurement") or []
        if not isinstance(items, list):
            raise TypeError("_embedded.measurement must be a list")
        if items:
            yield items

        if not (data.get("_links") or {}).get("next") or not items:
            break
        page += 1


def fetch_measurements(
    token: str,
    user_id: str,
    *,
    backend: str = STRONG_BACKEND_DEFAULT,
    session: Optional[requests.Session] = None,
    log_progress: bool = False,
) -> Dict[str, str]:
    """
    Build the measurement id -> exercise name lookup.

    The global catalog is read first and the user's own catalog second, so
    user-defined names win on an id collision.
    """
    sess = session or make_session()
    started = time.monotonic()
    lookup: Dict[str, str] = {}
    endpoints = (
        MEASUREMENTS_PATH,
        USER_MEASUREMENTS_PATH.format(user_id=user_id),
    )
    try:
        for path in endpoints:
            pages = 0
            for items in paginate_numbered(endpoint_url(backend, path), token, session=sess):
                pages += 1
                for item in items:
                    if not isinstance(item, dict) or item.get("id") is None:
                        continue
                    lookup[str(item["id"])] = measurement_name(item)
            if log_progress:
                print(f"[measurements] {path} · {pages} pages · {len(lookup)} names so far")
    except requests.RequestException as e:
        raise StrongApiError(f"Failed to fetch measurements: {e}") from e
    except (ValueError, TypeError, AttributeError) as e:
        raise StrongApiError(f"Failed to fetch measurements: malformed response ({e})") from e

    if log_progress:
        print(f"[measurements] done · {len(lookup)} names in {time.monotonic() - started:.1f}s")
    return lookup
