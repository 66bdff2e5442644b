import pytest

from drafting.parser.router import parse_user_text
from drafting.parser.schema import Action


@pytest.mark.parametrize("text,action", [
    ("", Action.HELP),
    ("submit", Action.SUBMIT),
    ("NEXT", Action.SUBMIT),
    ("gen", Action.GENERATE),
    ("skip", Action.SKIP),
    ("b", Action.BACK),
    ("ls", Action.SHOW),
    ("cancel", Action.CLOSE),
    ("?", Action.HELP),
    ("exit", Action.QUIT),
])
def test_simple_commands(text, action):
    cmd = parse_user_text(text)
    assert cmd.action is action and not cmd.error


def test_text_commands():
    cmd = parse_user_text("prompt  Draft a gift deed for my daughter ")
    assert cmd.action is Action.PROMPT
    assert cmd.args == {"text": "Draft a gift deed for my daughter"}
    assert parse_user_text("lang hindi").args == {"language": "hindi"}
    assert parse_user_text("name Gift Deed").args == {"name": "Gift Deed"}


def test_text_command_requires_value():
    cmd = parse_user_text("name")
    assert cmd.action is Action.NAME and cmd.error


def test_template_without_id_clears():
    cmd = parse_user_text("template")
    assert cmd.action is Action.TEMPLATE and not cmd.error
    assert cmd.args == {"template_id": ""}


def test_answer():
    cmd = parse_user_text("answer 2 Mr. Rao, Pune")
    assert cmd.args == {"index": 1, "text": "Mr. Rao, Pune"}
    assert parse_user_text("a 1").args == {"index": 0, "text": ""}
    assert parse_user_text("answer zero x").error
    assert parse_user_text("answer 0 x").error


def test_unknown():
    cmd = parse_user_text("draft something")
    assert cmd.action is Action.UNKNOWN
    assert "draft" in cmd.error
    # a simple word with trailing text is not the simple command
    assert parse_user_text("skip it").action is Action.UNKNOWN
