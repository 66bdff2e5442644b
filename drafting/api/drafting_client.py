from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol
import threading

from drafting.api import routes
from drafting.api.http_client import ApiResponse, AsyncApiClient


@dataclass
class InquiryRequest:
    user_prompt: str
    language: str
    doc_type_hint: str
    user_profile: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "user_prompt": self.user_prompt,
            "language": self.language,
            "doc_type_hint": self.doc_type_hint,
            "user_profile": self.user_profile,
        }


@dataclass
class GenerationRequest:
    user_prompt: str
    user_id: str
    doc_type_hint: str
    language: str
    skip_clarification: bool
    clarification_answers: Optional[Dict[str, str]] = None
    s3_key: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "user_prompt": self.user_prompt,
            "user_id": self.user_id,
            "doc_type_hint": self.doc_type_hint,
            "language": self.language,
            "skip_clarification": self.skip_clarification,
            "s3_key": self.s3_key,
            "metadata": self.metadata,
        }
        # skipping means the server infers everything from the prompt
        if self.clarification_answers is not None:
            payload["clarification_answers"] = self.clarification_answers
        return payload


class DraftingClient(Protocol):
    async def inquire(
        self,
        request: InquiryRequest,
        *,
        signal: Optional[threading.Event] = None,
    ) -> ApiResponse: ...

    async def generate(
        self,
        request: GenerationRequest,
        *,
        signal: Optional[threading.Event] = None,
    ) -> ApiResponse: ...


class DraftingHttpClient:
    def __init__(self, api: AsyncApiClient):
        self.api = api

    async def inquire(self, request: InquiryRequest, *, signal: Optional[threading.Event] = None) -> ApiResponse:
        return await self.api.post(routes.DRAFT_INQUIRY, json=request.to_payload(), signal=signal)

    async def generate(self, request: GenerationRequest, *, signal: Optional[threading.Event] = None) -> ApiResponse:
        return await self.api.post(routes.DRAFT_GENERATE, json=request.to_payload(), signal=signal)
