# drafting/state.py  session + outcomes
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from drafting.languages import DEFAULT_LANGUAGE, LANGUAGES
from drafting.variables import TemplateVariable

MIN_PROMPT_CHARS = 50

Step = Literal[1, 2]


@dataclass
class DraftSession:
    prompt: str = ""
    project_name: str = ""
    language: str = DEFAULT_LANGUAGE
    step: Step = 1
    questions: List[str] = field(default_factory=list)
    answers: Dict[int, str] = field(default_factory=dict)
    skipped_questions: Dict[int, bool] = field(default_factory=dict)
    selected_template_id: Optional[str] = None
    template_s3_key: Optional[str] = None
    is_generating: bool = False
    interim_transcript: str = ""
    interim_answers: Dict[int, str] = field(default_factory=dict)

    def validation_errors(self) -> List[str]:
        errors: List[str] = []
        if not self.prompt.strip():
            errors.append("Please describe the document you want to draft.")
        elif len(self.prompt) < MIN_PROMPT_CHARS:
            errors.append(
                f"Instructions must be at least {MIN_PROMPT_CHARS} characters "
                f"({len(self.prompt)}/{MIN_PROMPT_CHARS})."
            )
        if not self.project_name.strip():
            errors.append("Project name is required.")
        if self.language not in LANGUAGES:
            errors.append(f"Unsupported language: {self.language}")
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors()

    def set_questions(self, questions: List[str]) -> None:
        # answers are keyed by index, so anything from the old list is stale
        self.questions = list(questions)
        self.answers = {}
        self.skipped_questions = {}
        self.interim_answers = {}

    def set_answer(self, index: int, text: str) -> None:
        if not 0 <= index < len(self.questions):
            raise IndexError(f"No clarification question at index {index}")
        self.answers[index] = text

    def mark_skipped(self, index: int) -> None:
        if not 0 <= index < len(self.questions):
            raise IndexError(f"No clarification question at index {index}")
        self.skipped_questions[index] = True

    def go_to_questions(self) -> None:
        if self.step != 1:
            raise ValueError(f"Cannot move to questions from step {self.step}")
        if not self.questions:
            raise ValueError("No clarification questions to answer")
        self.step = 2

    def go_back(self) -> None:
        if self.step != 2:
            raise ValueError(f"Cannot go back from step {self.step}")
        self.step = 1

    def select_template(self, template_id: Optional[str], s3_key: Optional[str] = None) -> None:
        self.selected_template_id = template_id
        self.template_s3_key = s3_key if template_id else None

    @property
    def has_answered_question(self) -> bool:
        return any(a and a.strip() for a in self.answers.values())

    def clarification_answers(self, override_first_answer: Optional[str] = None) -> Dict[str, str]:
        """
        Pair each question with its trimmed answer. Empty answers are left out,
        except question 0 when override_first_answer is given.
        """
        out: Dict[str, str] = {}
        for idx, question in enumerate(self.questions):
            value = (self.answers.get(idx) or "").strip()
            if value:
                out[question] = value
            elif idx == 0 and override_first_answer is not None:
                out[question] = override_first_answer
        return out

    def reset(self) -> None:
        fresh = DraftSession()
        for name in self.__dataclass_fields__:
            setattr(self, name, getattr(fresh, name))


# ---- outcomes ----

@dataclass
class ValidationFailed:
    errors: List[str]
    kind: str = field(default="validation_failed", init=False)


@dataclass
class NeedsClarification:
    questions: List[str]
    kind: str = field(default="needs_clarification", init=False)


@dataclass
class Superseded:
    kind: str = field(default="superseded", init=False)


@dataclass
class Generated:
    html_content: str
    template_json: Dict[str, Any]
    doc_metadata: Dict[str, Any]
    pipeline_metrics: Dict[str, Any]
    variables: Dict[str, TemplateVariable]
    synthesized: List[str] = field(default_factory=list)
    kind: str = field(default="generated", init=False)


@dataclass
class Failed:
    reason: str
    kind: str = field(default="failed", init=False)


@dataclass
class ProceedToGeneration:
    generation: "GenerationOutcome"
    reason: str
    kind: str = field(default="proceed_to_generation", init=False)


InquiryOutcome = ValidationFailed | NeedsClarification | ProceedToGeneration | Superseded
GenerationOutcome = Generated | Failed | Superseded
