from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
import logging

from uistate.scoped import ScopedUIStore
from uistate.state import InvalidFile, UploadFile

logger = logging.getLogger(__name__)

VALID_FILE_TYPES = {
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
}
MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB


def validate_file(file: UploadFile) -> Tuple[bool, Optional[str]]:
    if file.content_type not in VALID_FILE_TYPES:
        return False, "Invalid file type. Please upload a PDF, DOCX, or TXT file."
    if file.size > MAX_FILE_SIZE:
        return False, "File size exceeds the limit of 50MB."
    return True, None


@dataclass
class FileSelection:
    valid: List[UploadFile] = field(default_factory=list)
    invalid: List[InvalidFile] = field(default_factory=list)

    @property
    def summary(self) -> str:
        # count only; per-file reasons were already reported during validation
        if not self.invalid:
            return ""
        n = len(self.invalid)
        return f"You had {n} invalid file{'s' if n != 1 else ''}."


def select_files(store: ScopedUIStore, scope_key: str, files: Iterable[UploadFile]) -> FileSelection:
    selection = FileSelection()
    for f in files:
        ok, reason = validate_file(f)
        if ok:
            selection.valid.append(f)
        else:
            logger.warning("Rejected %s: %s", f.name, reason)
            selection.invalid.append(InvalidFile(name=f.name, size=f.size, type=f.content_type))

    if selection.valid:
        store.add_files(scope_key, selection.valid)
        store.set_creation_type(scope_key, "upload")
    if selection.invalid:
        store.add_invalid_files(scope_key, selection.invalid)
    return selection
