# uistate/state.py  per-dialog UI state
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Literal, Optional, Union
import mimetypes

CreationType = Literal["scratch", "upload", "template"]


@dataclass(frozen=True)
class UploadFile:
    name: str
    size: int
    content_type: str
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "UploadFile":
        p = Path(path)
        ctype, _ = mimetypes.guess_type(p.name)
        return cls(
            name=p.name,
            size=p.stat().st_size,
            content_type=ctype or "application/octet-stream",
            path=p,
        )


@dataclass(frozen=True)
class InvalidFile:
    name: str
    size: int
    type: str


@dataclass(frozen=True)
class DropdownPosition:
    top: float = 0
    left: float = 0
    width: float = 0


@dataclass
class DialogUIState:
    step: int = 1
    selected_type: str = ""
    is_dropdown_open: bool = False
    dropdown_position: DropdownPosition = field(default_factory=DropdownPosition)
    project_name: str = ""
    form_data: Dict[str, Union[str, List[str]]] = field(default_factory=dict)
    input_values: Dict[str, str] = field(default_factory=dict)
    creation_type: CreationType = "scratch"
    files: List[UploadFile] = field(default_factory=list)
    drag_active: bool = False
    invalid_files: List[InvalidFile] = field(default_factory=list)
    show_template_upload: bool = False
    template_file: Optional[UploadFile] = None
    show_ai_draft_form: bool = False
    should_trigger_upload: bool = False
