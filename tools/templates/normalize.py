from __future__ import annotations
from typing import Any, Dict, List, Tuple, TypedDict, Union

from .base import TemplateItem, TemplatePage


class FlatTemplateBody(TypedDict, total=False):
    templates: List[Dict[str, Any]]
    total_count: int


class NestedTemplateBody(TypedDict, total=False):
    data: FlatTemplateBody


# the list/search endpoints answer with either shape
TemplateBody = Union[FlatTemplateBody, NestedTemplateBody]


def _unwrap(raw: Any) -> Tuple[List[Any], int]:
    if not isinstance(raw, dict):
        return [], 0
    if isinstance(raw.get("templates"), list):
        body = raw
    elif isinstance(raw.get("data"), dict) and isinstance(raw["data"].get("templates"), list):
        body = raw["data"]
    else:
        return [], 0
    total = body.get("total_count")
    return body["templates"], total if isinstance(total, int) else 0


def normalize_template_page(raw: TemplateBody, page: int, limit: int) -> TemplatePage:
    templates, total = _unwrap(raw)
    items = [TemplateItem.from_dict(t) for t in templates if isinstance(t, dict)]
    return TemplatePage(templates=items, total_count=total, page=page, limit=limit)


def clamp_page(page: Any) -> int:
    return page if isinstance(page, int) and page >= 1 else 1


def clamp_limit(limit: Any, default: int) -> int:
    return limit if isinstance(limit, int) and 1 <= limit <= 100 else default
