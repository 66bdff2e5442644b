from __future__ import annotations
from typing import Any, Dict

from drafting.api.factory import build_api_client

from .preview import PROXY_PDF_PATH, DocumentPreviewService


def build_preview_service(cfg: Dict[str, Any]) -> DocumentPreviewService:
    proxy_path = (cfg.get("documents") or {}).get("proxy_path", PROXY_PDF_PATH)
    return DocumentPreviewService(build_api_client(cfg), proxy_path=proxy_path)
