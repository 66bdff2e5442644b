from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
import logging

import requests

from drafting.api import routes
from drafting.api.http_client import ApiClient
from drafting.errors import ApiError, TemplateUploadError
from drafting.languages import DEFAULT_LANGUAGE, language_code
from uistate.state import UploadFile

from .base import (
    InitUploadRequest,
    InitUploadResult,
    ListTemplatesParams,
    ProgressCallback,
    TemplateItem,
    TemplatePage,
)
from .normalize import clamp_limit, clamp_page, normalize_template_page

logger = logging.getLogger(__name__)

TEMPLATE_FILE_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

CHUNK_SIZE = 64 * 1024


class _ProgressReader:
    """File wrapper that reports percent uploaded; __len__ lets requests send Content-Length."""

    def __init__(self, fh, total: int, on_progress: Optional[ProgressCallback]):
        self._fh = fh
        self._total = total
        self._sent = 0
        self._last = -1
        self._on_progress = on_progress

    def __len__(self) -> int:
        return self._total

    def read(self, size: int = -1) -> bytes:
        chunk = self._fh.read(CHUNK_SIZE if size is None or size < 0 else size)
        self._sent += len(chunk)
        if self._on_progress is not None and self._total:
            pct = min(100, int(self._sent * 100 / self._total))
            if pct != self._last:
                self._last = pct
                self._on_progress(pct)
        return chunk


def _template_from(data: Any) -> TemplateItem:
    if isinstance(data, dict) and isinstance(data.get("template"), dict):
        return TemplateItem.from_dict(data["template"])
    if isinstance(data, dict) and data.get("id"):
        return TemplateItem.from_dict(data)
    raise ApiError("Template missing from response", body=data)


class TemplateHttpService:
    name = "templates"

    def __init__(self, api: ApiClient, time_out_s: Optional[float] = None):
        self.api = api
        self.timeout_s = time_out_s

    def list_templates(self, params: Optional[ListTemplatesParams] = None) -> TemplatePage:
        p = params or ListTemplatesParams()
        query: List[Tuple[str, Any]] = []
        # backend expects filters, then paging, then user_id
        for key in ("category", "language", "doc_type", "title"):
            val = getattr(p, key)
            if val:
                query.append((key, val))
        if p.tags:
            query.append(("tags", ",".join(p.tags)))
        page = clamp_page(p.page)
        limit = clamp_limit(p.limit, 10)
        query += [("page", page), ("limit", limit)]
        if p.user_id:
            query.append(("user_id", p.user_id))

        resp = self.api.get(routes.LIST_TEMPLATES, params=query)
        if not resp.success:
            raise ApiError(resp.message or "Failed to fetch templates", body=resp.data)
        return normalize_template_page(resp.data, page, limit)

    def search_templates(self, query: str, page: int = 1, limit: int = 20) -> TemplatePage:
        """
        Search applies the same query to category, language, doc_type, title
        and tags; the backend ANDs the conditions together.
        """
        q = (query or "").strip()
        page = clamp_page(page)
        limit = clamp_limit(limit, 20)
        if not q:
            logger.debug("Empty search query, returning empty results")
            return TemplatePage(templates=[], total_count=0, page=page, limit=limit)

        params = [(k, q) for k in ("category", "language", "doc_type", "title", "tags")]
        params += [("page", page), ("limit", limit)]
        resp = self.api.get(routes.SEARCH_TEMPLATES, params=params)
        if not resp.success:
            raise ApiError(resp.message or "Failed to search templates", body=resp.data)
        result = normalize_template_page(resp.data, page, limit)
        logger.debug("Search %r returned %d of %d templates", q, len(result.templates), result.total_count)
        return result

    def get_template(self, template_id: str) -> TemplateItem:
        resp = self.api.get(routes.template(template_id))
        if not resp.success:
            raise ApiError(resp.message or f"Template {template_id} not found", body=resp.data)
        return _template_from(resp.data)

    def init_upload(self, request: InitUploadRequest) -> InitUploadResult:
        resp = self.api.post(routes.INIT_TEMPLATE_UPLOAD, json=request.to_payload())
        data: Dict[str, Any] = resp.data if isinstance(resp.data, dict) else {}
        if not resp.success or not all(data.get(k) for k in ("upload_url", "template_id", "s3_key")):
            raise TemplateUploadError(resp.message or "Failed to initialize upload")
        return InitUploadResult(
            upload_url=data["upload_url"],
            template_id=str(data["template_id"]),
            s3_key=data["s3_key"],
            expires_in=data.get("expires_in"),
        )

    def upload_to_storage(self, upload_url: str, file: UploadFile, on_progress: Optional[ProgressCallback] = None) -> None:
        if file.path is None:
            raise TemplateUploadError(f"No local path for {file.name}")
        with open(file.path, "rb") as fh:
            body = _ProgressReader(fh, file.size, on_progress)
            try:
                r = requests.put(
                    upload_url,
                    data=body,
                    headers={"Content-Type": file.content_type},
                    timeout=self.timeout_s,
                )
            except requests.RequestException as e:
                raise TemplateUploadError(f"Upload to storage failed: {e}") from e
        if not r.ok:
            raise TemplateUploadError(f"Upload to storage failed: {r.status_code} {r.reason}")

    def complete_upload(self, template_id: str, s3_key: str) -> TemplateItem:
        resp = self.api.post(
            routes.COMPLETE_TEMPLATE_UPLOAD,
            json={"template_id": template_id, "s3_key": s3_key},
        )
        if not resp.success:
            raise TemplateUploadError(resp.message or "Failed to complete upload")
        try:
            return _template_from(resp.data)
        except ApiError:
            return TemplateItem(id=template_id, title="", s3_key=s3_key)

    def upload_template(
        self,
        file: UploadFile,
        *,
        title: Optional[str] = None,
        language: str = DEFAULT_LANGUAGE,
        on_progress: Optional[ProgressCallback] = None,
    ) -> TemplateItem:
        """init -> PUT to storage -> complete. Any failure aborts the whole upload."""
        if file.content_type not in TEMPLATE_FILE_TYPES:
            raise TemplateUploadError("Please upload only PDF or Word documents (.pdf, .doc, .docx)")

        try:
            init = self.init_upload(InitUploadRequest(
                title=title or file.name.split(".")[0],
                language=language_code(language),
                doc_type="Draft",
                category="Legal",
                file_name=file.name,
                file_size=file.size,
                file_type=file.content_type,
                is_public=False,
            ))
            self.upload_to_storage(init.upload_url, file, on_progress)
            template = self.complete_upload(init.template_id, init.s3_key)
        except ApiError as e:
            logger.error("Upload error: %s", e)
            raise TemplateUploadError(str(e)) from e
        except TemplateUploadError as e:
            logger.error("Upload error: %s", e)
            raise

        if not template.s3_key:
            template.s3_key = init.s3_key
        return template
