from __future__ import annotations
import asyncio
from typing import Any, List, Optional

import pytest

from drafting.api.http_client import ApiResponse
from drafting.state import DraftSession

PROMPT = "Draft a residential lease agreement for a two bedroom flat in Pune for eleven months."


class FakeDraftingClient:
    """In-memory DraftingClient; a `gate` holds the call open until it is set."""

    def __init__(self, inquiry: Any = None, generation: Any = None):
        self.inquiry = inquiry
        self.generation = generation
        self.inquiries: List[Any] = []
        self.generations: List[Any] = []
        self.inquiry_entered = asyncio.Event()
        self.generation_entered = asyncio.Event()
        self.inquiry_gate: Optional[asyncio.Event] = None
        self.generation_gate: Optional[asyncio.Event] = None
        self.aborted: List[str] = []

    @staticmethod
    def _reply(result):
        if isinstance(result, Exception):
            raise result
        return result

    async def _hold(self, gate, kind):
        if gate is None:
            return
        try:
            await gate.wait()
        except asyncio.CancelledError:
            self.aborted.append(kind)
            raise

    async def inquire(self, request, *, signal=None):
        self.inquiries.append(request)
        self.inquiry_entered.set()
        await self._hold(self.inquiry_gate, "inquiry")
        return self._reply(self.inquiry)

    async def generate(self, request, *, signal=None):
        self.generations.append(request)
        self.generation_entered.set()
        await self._hold(self.generation_gate, "generation")
        return self._reply(self.generation)


def generated_body(html="<p>{{party_a}} agrees on {{start_date}}</p>"):
    return ApiResponse(
        success=True,
        data={
            "html_content": html,
            "template_json": '{"variables": [{"variable_name": "party_a", "label": "Party A"}]}',
            "doc_metadata": {"title": "Lease"},
            "pipeline_metrics": {"ms": 1200},
        },
    )


@pytest.fixture
def session():
    return DraftSession(prompt=PROMPT, project_name="Pune Lease")


@pytest.fixture
def fake_client():
    return FakeDraftingClient(generation=generated_body())
