from __future__ import annotations
from typing import Any, Optional


class DraftingError(Exception):
    """Base error for the drafting client."""


class ApiError(DraftingError):
    def __init__(self, message: str, *, status: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status = status
        self.body = body


class RequestCancelled(DraftingError):
    """The abort signal of a request was set before its result could be used."""


class TemplateUploadError(DraftingError):
    pass


class UnknownScopeError(KeyError):
    pass
