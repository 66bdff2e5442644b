# drafting/parser/schema.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Action(str, Enum):
    NAME = "NAME"
    PROMPT = "PROMPT"
    LANGUAGE = "LANGUAGE"
    TEMPLATE = "TEMPLATE"
    SEARCH = "SEARCH"
    SUBMIT = "SUBMIT"
    ANSWER = "ANSWER"
    SKIP = "SKIP"
    GENERATE = "GENERATE"
    BACK = "BACK"
    SHOW = "SHOW"
    CLOSE = "CLOSE"
    HELP = "HELP"
    QUIT = "QUIT"
    UNKNOWN = "UNKNOWN"


@dataclass
class ParsedCommand:
    action: Action
    args: Dict[str, Any] = field(default_factory=dict)
    error: str = ""
