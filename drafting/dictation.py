from __future__ import annotations
from dataclasses import dataclass


@dataclass
class DictationBuffer:
    """
    Speech-to-text accumulator for one text field.

    `base` is the committed text; interim results are previewed on top of it
    and only final results are appended.
    """
    base: str = ""

    def _join(self, text: str) -> str:
        return self.base + (" " if self.base else "") + text

    def sync(self, typed: str) -> None:
        self.base = typed

    def apply(self, text: str, is_final: bool) -> str:
        if is_final:
            self.base = self._join(text)
            return self.base
        return self._join(text)

    def stop(self) -> str:
        return self.base

    def clear(self) -> None:
        self.base = ""
