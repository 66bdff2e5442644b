from unittest.mock import MagicMock

import pytest

from conftest import PROMPT
from drafting.api.http_client import ApiResponse
from drafting.console import WizardConsole, render_session
from drafting.controller import DraftingWizardController
from drafting.errors import ApiError
from tools.templates.base import TemplateItem, TemplatePage


@pytest.fixture
def console(fake_client):
    templates = MagicMock()
    return WizardConsole(DraftingWizardController(fake_client), templates=templates)


@pytest.mark.asyncio
async def test_full_flow(console, fake_client):
    fake_client.inquiry = ApiResponse(True, {"clarification_questions": ["Who is the tenant?"]})
    await console.handle("name Pune Lease")
    await console.handle(f"prompt {PROMPT}")
    out = await console.handle("submit")
    assert "1. Who is the tenant?" in out
    assert console.session.step == 2

    assert await console.handle("generate") == "Please answer at least one question"
    await console.handle("answer 1 Meera Iyer")
    out = await console.handle("generate")
    assert out.startswith("Draft generated (2 variables")
    assert fake_client.generations[0].clarification_answers == {"Who is the tenant?": "Meera Iyer"}
    assert console.session.step == 1 and console.session.prompt == ""


@pytest.mark.asyncio
async def test_validation_messages(console, fake_client):
    out = await console.handle("submit")
    assert "Project name is required." in out
    assert fake_client.inquiries == []


@pytest.mark.asyncio
async def test_language(console):
    assert await console.handle("lang tamil") == "Language: Tamil"
    assert (await console.handle("lang klingon")).startswith("Supported languages:")
    assert console.session.language == "Tamil"


@pytest.mark.asyncio
async def test_template_selection(console):
    console.templates.get_template.return_value = TemplateItem(id="7", title="Rent Agreement", s3_key="t/7.docx")
    assert await console.handle("template 7") == "Using template: Rent Agreement"
    assert console.session.template_s3_key == "t/7.docx"
    assert await console.handle("template") == "Template cleared."
    assert console.session.selected_template_id is None

    console.templates.get_template.side_effect = ApiError("not found")
    assert "not found" in await console.handle("template 8")


@pytest.mark.asyncio
async def test_search(console):
    console.templates.search_templates.return_value = TemplatePage([], 0, 1, 20)
    assert await console.handle("search lease") == "No templates found"
    console.templates.search_templates.return_value = TemplatePage(
        [TemplateItem(id="7", title="Rent Agreement", doc_type="Lease", category="Property")], 1, 1, 20
    )
    assert "7  Rent Agreement  [Lease / Property]" in await console.handle("search lease")


@pytest.mark.asyncio
async def test_step_guards_and_quit(console):
    assert await console.handle("generate") == "Submit your prompt first."
    assert await console.handle("skip") == "Nothing to skip."
    assert "Cannot go back" in await console.handle("back")
    assert await console.handle("answer 1 x") == "No clarification question at index 0"
    assert "unknown command" in await console.handle("hello")
    assert await console.handle("q") is None


def test_render_session(console):
    s = console.session
    s.project_name = "Deed"
    s.set_questions(["Q?"])
    s.set_answer(0, "A")
    s.mark_skipped(0)
    text = render_session(s)
    assert "Project:  Deed" in text
    assert "Q1. Q?" in text and "(skipped, using prompt text)" in text
