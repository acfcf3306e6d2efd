"""Requests-backed HTTP transport.

Usage example:
    from dexpaprika_sdk.infrastructure.transport import RequestsTransport

    transport = RequestsTransport(
        base_url="https://api.dexpaprika.com",
        user_agent="dexpaprika-sdk-python/1.0.0",
    )
    response = transport.perform("GET", "/stats", params={})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import override

import requests

from ..exceptions import TransportConnectionError, TransportError
from ..protocols import HttpTransport, Params, ParamValue, QueryValue, TransportResponse


def _query_value(value: QueryValue) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Params) -> dict[str, str | list[str]]:
    """Render params as query-string values; None entries are dropped."""
    query: dict[str, str | list[str]] = {}
    for key, value in params.items():
        if isinstance(value, list | tuple):
            items = [rendered for item in value if (rendered := _query_value(item)) is not None]
            if items:
                query[key] = items
            continue
        rendered = _query_value(value)
        if rendered is not None:
            query[key] = rendered
    return query


def _json_body(params: Params) -> dict[str, ParamValue]:
    return {key: value for key, value in params.items() if value is not None}


class RequestsTransport(HttpTransport):
    """Performs single requests against a base URL with a shared session."""

    def __init__(
        self,
        *,
        base_url: str,
        user_agent: str,
        timeout_seconds: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._headers: Mapping[str, str] = {
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
        self._session = session if session is not None else requests.Session()

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    @override
    def perform(self, method: str, endpoint: str, *, params: Params) -> TransportResponse:
        method = method.upper()
        url = self._url(endpoint)
        try:
            if method == "GET":
                response = self._session.request(
                    method,
                    url,
                    params=build_query(params),
                    headers=dict(self._headers),
                    timeout=self.timeout_seconds,
                )
            else:
                response = self._session.request(
                    method,
                    url,
                    json=_json_body(params),
                    headers=dict(self._headers),
                    timeout=self.timeout_seconds,
                )
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise TransportConnectionError(str(exc)) from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    @override
    def close(self) -> None:
        self._session.close()
