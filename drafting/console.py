from __future__ import annotations
from typing import Optional
import asyncio

from drafting.controller import DraftingWizardController
from drafting.errors import ApiError
from drafting.languages import LANGUAGES, normalize_language
from drafting.parser.router import parse_user_text
from drafting.parser.schema import Action
from drafting.state import (
    DraftSession,
    Failed,
    Generated,
    NeedsClarification,
    ProceedToGeneration,
    Superseded,
    ValidationFailed,
)
from tools.templates.base import TemplateService

HELP = (
    "Commands:\n"
    "  name <project name>        set the project name\n"
    "  prompt <instructions>      describe the document (50+ characters)\n"
    "  lang <language>            one of: " + ", ".join(LANGUAGES) + "\n"
    "  search <query>             search the template library\n"
    "  template [<id>]            use a template (no id clears it)\n"
    "  submit                     ask for clarification questions\n"
    "  answer <n> <text>          answer question n\n"
    "  generate                   generate with your answers\n"
    "  skip                       skip the questions and generate\n"
    "  back                       return to the prompt step\n"
    "  show                       show the current draft settings\n"
    "  close                      cancel and start over\n"
    "  q                          quit"
)


def render_session(session: DraftSession) -> str:
    lines = [
        "----- DRAFT -----",
        f"Project:  {session.project_name}",
        f"Language: {session.language}",
        f"Template: {session.selected_template_id or '(none)'}",
        f"Step:     {session.step}",
        f"Prompt ({len(session.prompt)} chars):",
        session.prompt or "(empty)",
    ]
    for i, q in enumerate(session.questions):
        lines.append(f"Q{i + 1}. {q}")
        answer = session.answers.get(i, "")
        tag = "  (skipped, using prompt text)" if session.skipped_questions.get(i) else ""
        lines.append(f"    -> {answer}{tag}")
    lines.append("-----------------")
    return "\n".join(lines)


def render_outcome(outcome) -> str:
    if isinstance(outcome, ValidationFailed):
        return "\n".join(outcome.errors)
    if isinstance(outcome, NeedsClarification):
        qs = "\n".join(f"{i + 1}. {q}" for i, q in enumerate(outcome.questions))
        return f"A few questions before drafting:\n{qs}\nAnswer with: answer <n> <text>, or: skip"
    if isinstance(outcome, ProceedToGeneration):
        return render_outcome(outcome.generation)
    if isinstance(outcome, Generated):
        extra = f", {len(outcome.synthesized)} added from content" if outcome.synthesized else ""
        return f"Draft generated ({len(outcome.variables)} variables{extra})."
    if isinstance(outcome, Failed):
        return f"Could not generate the draft: {outcome.reason}\nAdjust and try again."
    if isinstance(outcome, Superseded):
        return "Cancelled."
    return str(outcome)


class WizardConsole:
    def __init__(
        self,
        controller: DraftingWizardController,
        templates: Optional[TemplateService] = None,
        session: Optional[DraftSession] = None,
    ):
        self.controller = controller
        self.templates = templates
        self.session = session or DraftSession()

    async def _select_template(self, template_id: str) -> str:
        if not template_id:
            self.session.select_template(None)
            return "Template cleared."
        if self.templates is None:
            return "Template library is not configured."
        try:
            template = await asyncio.to_thread(self.templates.get_template, template_id)
        except ApiError as e:
            return f"Could not load template: {e}"
        self.session.select_template(template.id, template.s3_key)
        return f"Using template: {template.title or template.id}"

    async def _search(self, query: str) -> str:
        if self.templates is None:
            return "Template library is not configured."
        try:
            page = await asyncio.to_thread(self.templates.search_templates, query)
        except ApiError as e:
            return f"Search failed: {e}"
        if not page.templates:
            return "No templates found"
        return "\n".join(f"{t.id}  {t.title}  [{t.doc_type} / {t.category}]" for t in page.templates)

    async def handle(self, user_text: str) -> Optional[str]:
        """Run one command; returns text to print, None on quit."""
        cmd = parse_user_text(user_text)
        if cmd.error:
            return cmd.error

        s = self.session
        c = self.controller
        a = cmd.action

        if a is Action.QUIT:
            c.close(s)
            return None
        if a is Action.HELP:
            return HELP
        if a is Action.SHOW:
            return render_session(s)
        if a is Action.NAME:
            s.project_name = cmd.args["name"]
            return f"Project name: {s.project_name}"
        if a is Action.PROMPT:
            c.type_prompt(s, cmd.args["text"])
            return f"Prompt set ({len(s.prompt)} chars)."
        if a is Action.LANGUAGE:
            lang = normalize_language(cmd.args["language"])
            if lang is None:
                return "Supported languages: " + ", ".join(LANGUAGES)
            s.language = lang
            return f"Language: {lang}"
        if a is Action.TEMPLATE:
            return await self._select_template(cmd.args.get("template_id", ""))
        if a is Action.SEARCH:
            return await self._search(cmd.args["query"])
        if a is Action.SUBMIT:
            if s.step != 1:
                return "Already at the questions step (use: generate, skip or back)."
            return render_outcome(await c.submit_inquiry(s))
        if a is Action.ANSWER:
            try:
                c.type_answer(s, cmd.args["index"], cmd.args["text"])
            except IndexError as e:
                return str(e)
            return f"Answered question {cmd.args['index'] + 1}."
        if a is Action.GENERATE:
            if s.step != 2:
                return "Submit your prompt first."
            if not s.has_answered_question:
                return "Please answer at least one question"
            return render_outcome(await c.submit_generation(s))
        if a is Action.SKIP:
            if s.step != 2:
                return "Nothing to skip."
            return render_outcome(await c.skip_questions(s))
        if a is Action.BACK:
            try:
                s.go_back()
            except ValueError as e:
                return str(e)
            return "Back to the prompt step."
        if a is Action.CLOSE:
            c.close(s)
            return "Draft discarded."
        return f"Unsupported command: {a.value}"
