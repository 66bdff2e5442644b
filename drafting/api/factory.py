from __future__ import annotations
from typing import Any, Dict

from .drafting_client import DraftingHttpClient
from .http_client import ApiClient, AsyncApiClient


def _client_kwargs(cfg: Dict[str, Any]) -> Dict[str, Any]:
    api = cfg.get("api") or {}
    if not api.get("base_url"):
        raise ValueError("Missing api.base_url in config")
    timeout = api.get("time_out_s")
    return dict(
        base_url=api["base_url"],
        token=api.get("token") or None,
        time_out_s=float(timeout) if timeout is not None else None,
        extra_headers=api.get("headers") or {},
    )


def build_api_client(cfg: Dict[str, Any]) -> ApiClient:
    return ApiClient(**_client_kwargs(cfg))


def build_async_api_client(cfg: Dict[str, Any]) -> AsyncApiClient:
    return AsyncApiClient(**_client_kwargs(cfg))


def build_drafting_client(cfg: Dict[str, Any]):
    api = cfg.get("api") or {}
    if api.get("provider", "http") == "http":
        return DraftingHttpClient(build_async_api_client(cfg))
    raise ValueError(f"Unknown drafting provider: {api.get('provider')}")
