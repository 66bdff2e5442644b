from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union
import asyncio
import inspect
import logging

from drafting.api.drafting_client import DraftingClient, GenerationRequest, InquiryRequest
from drafting.api.http_client import ApiResponse
from drafting.dictation import DictationBuffer
from drafting.errors import RequestCancelled
from drafting.handles import HandleRegistry, OperationHandle, OperationKind
from drafting.state import (
    DraftSession,
    Failed,
    Generated,
    GenerationOutcome,
    InquiryOutcome,
    NeedsClarification,
    ProceedToGeneration,
    Superseded,
    ValidationFailed,
)
from drafting.variables import extract_variables, parse_template_json, reconcile_placeholders

logger = logging.getLogger(__name__)

DraftSuccessHandler = Callable[[Generated, str], Union[Awaitable[Any], Any]]


def _clarification_questions(response: ApiResponse) -> List[str]:
    data = response.data if isinstance(response.data, dict) else {}
    questions = data.get("clarification_questions") or []
    if not isinstance(questions, list):
        return []
    return [q for q in questions if isinstance(q, str) and q.strip()]


def build_generated(data: Dict[str, Any]) -> Generated:
    html = data.get("html_content") or ""
    template_json = parse_template_json(data.get("template_json"))
    # the generator does not always enumerate every placeholder it emits
    variables, added = reconcile_placeholders(html, extract_variables(template_json))
    return Generated(
        html_content=html,
        template_json=template_json,
        doc_metadata=data.get("doc_metadata") or {},
        pipeline_metrics=data.get("pipeline_metrics") or {},
        variables=variables,
        synthesized=added,
    )


@dataclass
class DraftingWizardController:
    client: DraftingClient
    user_id: str = "guest"
    profile: dict = field(default_factory=dict)
    client_name: str = "LexDraft"
    on_draft_success: Optional[DraftSuccessHandler] = None

    def __post_init__(self):
        self.handles = HandleRegistry()
        self.prompt_dictation = DictationBuffer()
        self.answer_dictation: Dict[int, DictationBuffer] = {}

    @property
    def is_busy(self) -> bool:
        return bool(self.handles)

    def cancel_all(self) -> None:
        self.handles.cancel_all()

    def _sync_generating(self, session: DraftSession) -> None:
        # a superseded call must not clear the flag for its successor
        session.is_generating = bool(self.handles)

    async def _call(self, handle: OperationHandle, fn, request):
        task = asyncio.ensure_future(fn(request, signal=handle.signal))
        handle.attach(task)
        return await task

    # ---- inquiry ----

    def _inquiry_request(self, session: DraftSession) -> InquiryRequest:
        return InquiryRequest(
            user_prompt=session.prompt,
            language=session.language,
            doc_type_hint=session.project_name,
            user_profile={
                "preferred_language": session.language,
                "profession": self.profile.get("profession", "User"),
                "default_state": self.profile.get("default_state", "India"),
            },
        )

    async def submit_inquiry(self, session: DraftSession) -> InquiryOutcome:
        errors = session.validation_errors()
        if errors:
            return ValidationFailed(errors)

        handle = self.handles.start(OperationKind.INQUIRY)
        session.is_generating = True
        try:
            try:
                response = await self._call(handle, self.client.inquire, self._inquiry_request(session))
            except (asyncio.CancelledError, RequestCancelled):
                if handle.cancelled:
                    logger.debug("Inquiry superseded")
                    return Superseded()
                raise
            except Exception as e:
                if handle.cancelled:
                    return Superseded()
                logger.warning("Error fetching inquiry questions, attempting direct generation: %s", e)
                reason = f"inquiry failed: {e}"
            else:
                if handle.cancelled:
                    return Superseded()
                questions = _clarification_questions(response) if response.success else []
                if questions:
                    session.set_questions(questions)
                    if session.step == 1:
                        session.go_to_questions()
                    return NeedsClarification(list(questions))
                if response.success:
                    reason = "no clarification questions"
                else:
                    logger.warning("Inquiry failed or empty, attempting direct generation")
                    reason = f"inquiry unsuccessful: {response.message or 'no data'}"

            generation = await self.submit_generation(session, skip_clarification=True)
            return ProceedToGeneration(generation, reason)
        finally:
            self.handles.release(handle)
            self._sync_generating(session)

    # ---- generation ----

    def _generation_request(
        self,
        session: DraftSession,
        skip_clarification: bool,
        override_first_answer: Optional[str],
    ) -> GenerationRequest:
        answers = None
        if not skip_clarification:
            answers = session.clarification_answers(override_first_answer)
        return GenerationRequest(
            user_prompt=session.prompt,
            user_id=self.user_id,
            doc_type_hint=session.project_name,
            language=session.language,
            skip_clarification=skip_clarification,
            clarification_answers=answers,
            s3_key=session.template_s3_key or None,
            metadata={
                "client_name": self.client_name,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    async def _hand_off(self, generated: Generated, project_name: str) -> None:
        if self.on_draft_success is None:
            return
        result = self.on_draft_success(generated, project_name)
        if inspect.isawaitable(result):
            await result

    async def _generate(
        self,
        handle: OperationHandle,
        session: DraftSession,
        request: GenerationRequest,
    ) -> GenerationOutcome:
        try:
            response = await self._call(handle, self.client.generate, request)
        except (asyncio.CancelledError, RequestCancelled):
            if handle.cancelled:
                logger.debug("Generation superseded")
                return Superseded()
            raise
        except Exception as e:
            if handle.cancelled:
                return Superseded()
            logger.error("Error creating draft: %s", e)
            return Failed(str(e) or type(e).__name__)

        if handle.cancelled:
            return Superseded()
        if not response.success or not isinstance(response.data, dict):
            logger.error("Failed to generate template: %s", response.message or response.data)
            return Failed(response.message or "Failed to generate draft")

        generated = build_generated(response.data)
        try:
            await self._hand_off(generated, session.project_name)
        except Exception as e:
            logger.error("Draft generated but hand-off failed: %s", e)
            return Failed(f"Draft generated but could not be saved: {e}")
        return generated

    async def submit_generation(
        self,
        session: DraftSession,
        skip_clarification: bool = False,
        override_first_answer: Optional[str] = None,
    ) -> GenerationOutcome:
        handle = self.handles.start(OperationKind.GENERATION)
        session.is_generating = True
        request = self._generation_request(session, skip_clarification, override_first_answer)
        try:
            outcome = await self._generate(handle, session, request)
        finally:
            self.handles.release(handle)
            self._sync_generating(session)

        if isinstance(outcome, Generated) and not handle.cancelled:
            self.close(session)
        return outcome

    async def skip_questions(self, session: DraftSession) -> GenerationOutcome:
        if not session.questions:
            return await self.submit_generation(session, skip_clarification=True)

        prompt = session.prompt
        self._answer_buffer(0).sync(prompt)
        session.set_answer(0, prompt)
        session.interim_answers[0] = ""
        session.mark_skipped(0)
        return await self.submit_generation(
            session,
            skip_clarification=False,
            override_first_answer=prompt,
        )

    def close(self, session: DraftSession) -> None:
        self.cancel_all()
        session.reset()
        self.prompt_dictation.clear()
        self.answer_dictation.clear()

    # ---- dictation ----

    def _answer_buffer(self, index: int) -> DictationBuffer:
        if index not in self.answer_dictation:
            self.answer_dictation[index] = DictationBuffer()
        return self.answer_dictation[index]

    def type_prompt(self, session: DraftSession, text: str) -> None:
        session.prompt = text
        self.prompt_dictation.sync(text)

    def dictate_prompt(self, session: DraftSession, text: str, is_final: bool) -> None:
        session.prompt = self.prompt_dictation.apply(text, is_final)
        session.interim_transcript = "" if is_final else text

    def stop_prompt_dictation(self, session: DraftSession) -> None:
        session.interim_transcript = ""
        session.prompt = self.prompt_dictation.stop()

    def type_answer(self, session: DraftSession, index: int, text: str) -> None:
        session.set_answer(index, text)
        self._answer_buffer(index).sync(text)

    def dictate_answer(self, session: DraftSession, index: int, text: str, is_final: bool) -> None:
        value = self._answer_buffer(index).apply(text, is_final)
        session.set_answer(index, value)
        session.interim_answers[index] = "" if is_final else text

    def stop_answer_dictation(self, session: DraftSession, index: int) -> None:
        session.interim_answers[index] = ""
        session.set_answer(index, self._answer_buffer(index).stop())
