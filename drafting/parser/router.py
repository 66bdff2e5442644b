# drafting/parser/router.py
from __future__ import annotations
from .schema import Action, ParsedCommand

_SIMPLE = {
    "submit": Action.SUBMIT,
    "next": Action.SUBMIT,
    "skip": Action.SKIP,
    "generate": Action.GENERATE,
    "gen": Action.GENERATE,
    "back": Action.BACK,
    "b": Action.BACK,
    "show": Action.SHOW,
    "ls": Action.SHOW,
    "close": Action.CLOSE,
    "cancel": Action.CLOSE,
    "c": Action.CLOSE,
    "help": Action.HELP,
    "h": Action.HELP,
    "?": Action.HELP,
    "quit": Action.QUIT,
    "q": Action.QUIT,
    "exit": Action.QUIT,
}

# commands that take the rest of the line as their value
_WITH_TEXT = {
    "name": (Action.NAME, "name"),
    "prompt": (Action.PROMPT, "text"),
    "lang": (Action.LANGUAGE, "language"),
    "language": (Action.LANGUAGE, "language"),
    "template": (Action.TEMPLATE, "template_id"),
    "search": (Action.SEARCH, "query"),
}


def parse_user_text(user_text: str) -> ParsedCommand:
    t = (user_text or "").strip()
    if not t:
        return ParsedCommand(Action.HELP)

    tokens = t.split()
    head = tokens[0].lower()
    rest = t[len(tokens[0]):].strip()

    if head in _SIMPLE and not rest:
        return ParsedCommand(_SIMPLE[head])

    if head in _WITH_TEXT:
        action, key = _WITH_TEXT[head]
        # `template` alone clears the selection
        if not rest and action is not Action.TEMPLATE:
            return ParsedCommand(action, error=f"usage: {head} <{key}>")
        return ParsedCommand(action, {key: rest})

    # answer <n> <text...>  (questions are numbered from 1 on screen)
    if head in ("answer", "a"):
        if len(tokens) < 2 or not tokens[1].isdigit() or int(tokens[1]) < 1:
            return ParsedCommand(Action.ANSWER, error="usage: answer <question number> <text>")
        text = t.split(None, 2)[2] if len(tokens) >= 3 else ""
        return ParsedCommand(Action.ANSWER, {"index": int(tokens[1]) - 1, "text": text})

    return ParsedCommand(Action.UNKNOWN, {"raw": t}, error=f"unknown command: {tokens[0]}")
