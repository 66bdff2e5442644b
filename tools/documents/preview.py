from __future__ import annotations
from typing import Any, Optional
from urllib.parse import quote
import logging

from drafting.api import routes
from drafting.api.http_client import ApiClient
from drafting.errors import ApiError

logger = logging.getLogger(__name__)

PROXY_PDF_PATH = "/proxy-pdf"

# characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def proxy_preview_url(url: Optional[str], proxy_path: str = PROXY_PDF_PATH) -> Optional[str]:
    """Signed storage urls are always opened through the proxy, never directly."""
    if not isinstance(url, str) or not url:
        return None
    return f"{proxy_path}?url={quote(url, safe=_URI_COMPONENT_SAFE)}"


def _preview_url(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        return data.get("preview_url")
    return None


class DocumentPreviewService:
    def __init__(self, api: ApiClient, proxy_path: str = PROXY_PDF_PATH):
        self.api = api
        self.proxy_path = proxy_path

    def preview_document(self, document_id: str) -> Optional[str]:
        resp = self.api.post(routes.document_preview(document_id))
        if not resp.success:
            raise ApiError(resp.message or "Failed to fetch preview URL", body=resp.data)
        proxied = proxy_preview_url(_preview_url(resp.data), self.proxy_path)
        if proxied is None:
            logger.warning("No preview url returned for document %s", document_id)
        return proxied

    def public_preview_document(self, s3_key: str) -> Optional[str]:
        resp = self.api.post(routes.REF_DOCUMENTS_PUBLIC_PREVIEW, json={"s3_key": s3_key})
        if not resp.success:
            raise ApiError(resp.message or "Failed to fetch preview URL", body=resp.data)
        return proxy_preview_url(_preview_url(resp.data), self.proxy_path)
