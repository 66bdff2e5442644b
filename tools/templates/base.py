from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol

from uistate.state import UploadFile

ProgressCallback = Callable[[int], None]


@dataclass
class TemplateItem:
    id: str
    title: str
    doc_type: str = "Other"
    category: str = "Other"
    language: str = ""
    s3_key: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    owner_id: str = ""
    jurisdiction: str = ""
    is_public: bool = False
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TemplateItem":
        return cls(
            id=str(d.get("id") or ""),
            title=d.get("title") or "",
            doc_type=d.get("doc_type") or "Other",
            category=d.get("category") or "Other",
            language=d.get("language") or "",
            s3_key=d.get("s3_key") or d.get("s3Key"),
            tags=list(d.get("tags") or []),
            owner_id=d.get("owner_id") or "",
            jurisdiction=d.get("jurisdiction") or "",
            is_public=bool(d.get("is_public", False)),
            created_at=d.get("created_at") or "",
            updated_at=d.get("updated_at") or "",
        )


@dataclass
class TemplatePage:
    templates: List[TemplateItem]
    total_count: int
    page: int
    limit: int


@dataclass
class ListTemplatesParams:
    category: Optional[str] = None
    language: Optional[str] = None
    doc_type: Optional[str] = None
    title: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    user_id: Optional[str] = None
    page: int = 1
    limit: int = 10


@dataclass
class InitUploadRequest:
    title: str
    language: str
    doc_type: str
    category: str
    file_name: str
    file_size: int
    file_type: str
    jurisdiction: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    is_public: bool = False

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "title": self.title,
            "language": self.language,
            "doc_type": self.doc_type,
            "category": self.category,
            "file_name": self.file_name,
            "file_size": self.file_size,
            "file_type": self.file_type,
            "is_public": self.is_public,
        }
        if self.jurisdiction:
            payload["jurisdiction"] = self.jurisdiction
        if self.tags:
            payload["tags"] = list(self.tags)
        return payload


@dataclass
class InitUploadResult:
    upload_url: str
    template_id: str
    s3_key: str
    expires_in: Optional[int] = None


class TemplateService(Protocol):
    def list_templates(self, params: Optional[ListTemplatesParams] = None) -> TemplatePage:
        ...

    def search_templates(self, query: str, page: int = 1, limit: int = 20) -> TemplatePage:
        ...

    def get_template(self, template_id: str) -> TemplateItem:
        ...

    def init_upload(self, request: InitUploadRequest) -> InitUploadResult:
        '''phase 1: ask the backend for a presigned upload url'''
        ...

    def upload_to_storage(self, upload_url: str, file: UploadFile, on_progress: Optional[ProgressCallback] = None) -> None:
        ...

    def complete_upload(self, template_id: str, s3_key: str) -> TemplateItem:
        "the template is usable only after this succeeds"
        ...
