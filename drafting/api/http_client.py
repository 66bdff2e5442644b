from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import json
import logging
import threading

import httpx
import requests

from drafting.errors import ApiError, RequestCancelled

logger = logging.getLogger(__name__)


@dataclass
class ApiResponse:
    success: bool
    data: Any = None
    message: str = ""
    status: Optional[int] = None


def _error_message(body: Any, fallback: str) -> str:
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            val = body.get(key)
            if isinstance(val, str) and val:
                return val
            if isinstance(val, dict) and isinstance(val.get("message"), str):
                return val["message"]
    if isinstance(body, str) and body:
        return body
    return fallback


def _read_body(r) -> Any:
    # requests.Response and httpx.Response share headers, json() and text
    ctype = r.headers.get("content-type", "")
    if "application/json" in ctype:
        try:
            return r.json()
        except ValueError:
            pass
    text = r.text
    try:
        return json.loads(text)
    except ValueError:
        return {"raw": text}


def normalize_envelope(body: Any, status: Optional[int] = None) -> ApiResponse:
    """
    Bodies with a boolean `success` are kept as the backend sent them (their
    `data` unwrapped when present); anything else counts as a successful payload.
    """
    if isinstance(body, dict) and isinstance(body.get("success"), bool):
        data = body["data"] if "data" in body else body
        return ApiResponse(
            success=body["success"],
            data=data,
            message=body.get("message") or "",
            status=status,
        )
    return ApiResponse(success=True, data=body, status=status)


class _BaseClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        time_out_s: Optional[float] = None,
        extra_headers: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_s = time_out_s
        self.extra_headers = dict(extra_headers or {})

    def url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def headers(self) -> Dict[str, str]:
        h = {"Content-Type": "application/json", **self.extra_headers}
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    def _finish(self, r, ok: bool) -> ApiResponse:
        body = _read_body(r)
        if not ok:
            raise ApiError(_error_message(body, "Request failed"), status=r.status_code, body=body)
        return normalize_envelope(body, r.status_code)


class ApiClient(_BaseClient):
    """Blocking client for the library, template and project endpoints."""

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        params: Any = None,
        signal: Optional[threading.Event] = None,
    ) -> ApiResponse:
        url = self.url(endpoint)
        if signal is not None and signal.is_set():
            raise RequestCancelled(f"{method} {url} aborted before sending")

        logger.debug("%s %s", method, url)
        try:
            r = requests.request(
                method,
                url,
                json=json,
                params=params,
                headers=self.headers(),
                timeout=self.timeout_s,
            )
        except requests.RequestException as e:
            if signal is not None and signal.is_set():
                raise RequestCancelled(f"{method} {url} aborted") from e
            raise ApiError(f"Network error: {e}") from e

        # a response that lands after abort must not be acted on
        if signal is not None and signal.is_set():
            raise RequestCancelled(f"{method} {url} aborted after response")

        return self._finish(r, r.ok)

    def get(self, endpoint: str, **kw) -> ApiResponse:
        return self.request("GET", endpoint, **kw)

    def post(self, endpoint: str, **kw) -> ApiResponse:
        return self.request("POST", endpoint, **kw)


class AsyncApiClient(_BaseClient):
    """
    Client for the long-running drafting calls. Cancelling the awaiting task
    closes the connection, so an abandoned inquiry or generation frees its
    socket immediately instead of waiting for the backend to answer.
    """

    def __init__(self, base_url: str, *, transport: Optional[httpx.AsyncBaseTransport] = None, **kw):
        super().__init__(base_url, **kw)
        self.transport = transport

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        params: Any = None,
        signal: Optional[threading.Event] = None,
    ) -> ApiResponse:
        url = self.url(endpoint)
        if signal is not None and signal.is_set():
            raise RequestCancelled(f"{method} {url} aborted before sending")

        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
                r = await client.request(method, url, json=json, params=params, headers=self.headers())
        except httpx.HTTPError as e:
            raise ApiError(f"Network error: {e}") from e

        if signal is not None and signal.is_set():
            raise RequestCancelled(f"{method} {url} aborted after response")
        return self._finish(r, r.is_success)

    async def get(self, endpoint: str, **kw) -> ApiResponse:
        return await self.request("GET", endpoint, **kw)

    async def post(self, endpoint: str, **kw) -> ApiResponse:
        return await self.request("POST", endpoint, **kw)
