import json
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlsplit

BACKEND = "https://strong.test/"


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None and self.text:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """
    Stand-in for requests.Session. `handler(method, path, params, body)`
    returns a FakeResponse (or raises); every call is recorded.
    """

    def __init__(self, handler: Callable[..., FakeResponse]):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def _request(self, method: str, url: str, params=None, json=None, headers=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append(
            {"method": method, "url": url, "path": path, "params": dict(params or {}), "json": json, "headers": headers}
        )
        return self.handler(method, path, dict(params or {}), json)

    def get(self, url: str, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self._request("POST", url, **kwargs)

    def close(self) -> None:
        self.closed = True


def make_log(log_id: str = "log-1", **overrides) -> Dict[str, Any]:
    log = {
        "id": log_id,
        "logType": "WORKOUT",
        "startDate": "2026-01-01T10:00:00Z",
        "endDate": "2026-01-01T11:00:00Z",
        "_embedded": {
            "cellSetGroup": [
                {
                    "_links": {"measurement": {"href": "/api/measurements/abc123"}},
                    "cellSets": [
                        {
                            "cells": [
                                {"cellType": "BARBELL_WEIGHT", "value": "100"},
                                {"cellType": "REPS", "value": "5"},
                            ],
                            "isCompleted": True,
                        }
                    ],
                }
            ]
        },
    }
    log.update(overrides)
    return log
