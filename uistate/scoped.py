from __future__ import annotations
from dataclasses import fields, replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import copy
import logging

from drafting.errors import UnknownScopeError
from uistate.state import CreationType, DialogUIState, DropdownPosition, InvalidFile, UploadFile

logger = logging.getLogger(__name__)

Listener = Callable[[str, DialogUIState, Tuple[str, ...]], None]

FIELD_NAMES = tuple(f.name for f in fields(DialogUIState))


class ScopedUIStore:
    """
    Dialog UI state partitioned by an opaque scope key.

    Every mutation swaps the scope's slice for a new object, so neither another
    scope nor a snapshot taken earlier can observe it. Reads go through
    get/snapshot/subscribe, writes through the setters.
    """

    def __init__(self) -> None:
        self._scopes: Dict[str, DialogUIState] = {}
        self._listeners: List[Tuple[str, Optional[frozenset], Listener]] = []

    # ---- read side ----

    def has_scope(self, key: str) -> bool:
        return key in self._scopes

    def scope_keys(self) -> List[str]:
        return list(self._scopes)

    def _slice(self, key: str) -> DialogUIState:
        try:
            return self._scopes[key]
        except KeyError:
            raise UnknownScopeError(f"Scope '{key}' is not initialized; call init_scope first") from None

    def get(self, key: str, field_name: str):
        if field_name not in FIELD_NAMES:
            raise AttributeError(f"DialogUIState has no field '{field_name}'")
        return copy.deepcopy(getattr(self._slice(key), field_name))

    def snapshot(self, key: str) -> DialogUIState:
        return copy.deepcopy(self._slice(key))

    def subscribe(self, key: str, listener: Listener, watch: Optional[Iterable[str]] = None) -> Callable[[], None]:
        """Call listener(key, snapshot, changed_fields) when watched fields of `key` change."""
        watched = frozenset(watch) if watch is not None else None
        entry = (key, watched, listener)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def _notify(self, key: str, changed: Tuple[str, ...]) -> None:
        if not changed:
            return
        state = None
        for scope, watched, listener in list(self._listeners):
            if scope != key:
                continue
            if watched is not None and not watched.intersection(changed):
                continue
            if state is None:
                state = self.snapshot(key)
            listener(key, state, changed)

    # ---- command side ----

    def _update(self, key: str, **changes) -> None:
        current = self._scopes.get(key) or DialogUIState()
        updated = replace(current, **changes)
        self._scopes[key] = updated
        changed = tuple(name for name in changes if getattr(current, name) != getattr(updated, name))
        self._notify(key, changed)

    def init_scope(self, key: str) -> None:
        if key in self._scopes:
            return
        logger.debug("Initializing UI scope %s", key)
        self._scopes[key] = DialogUIState()

    def reset(self, key: str) -> None:
        previous = self._scopes.get(key)
        self._scopes[key] = DialogUIState()
        if previous is not None:
            changed = tuple(n for n in FIELD_NAMES if getattr(previous, n) != getattr(self._scopes[key], n))
            self._notify(key, changed)

    def set_step(self, key: str, step: int) -> None:
        if step not in (1, 2):
            raise ValueError(f"step must be 1 or 2, got {step}")
        self._update(key, step=step)

    def set_selected_type(self, key: str, selected_type: str) -> None:
        self._update(key, selected_type=selected_type)

    def set_is_dropdown_open(self, key: str, is_open: bool) -> None:
        self._update(key, is_dropdown_open=is_open)

    def set_dropdown_position(self, key: str, position: DropdownPosition) -> None:
        self._update(key, dropdown_position=position)

    def set_project_name(self, key: str, name: str) -> None:
        self._update(key, project_name=name)

    def set_creation_type(self, key: str, creation_type: CreationType) -> None:
        if creation_type not in ("scratch", "upload", "template"):
            raise ValueError(f"Unknown creation type: {creation_type}")
        self._update(key, creation_type=creation_type)

    def set_files(self, key: str, files: Iterable[UploadFile]) -> None:
        self._update(key, files=list(files))

    def add_files(self, key: str, files: Iterable[UploadFile]) -> None:
        current = self._scopes.get(key) or DialogUIState()
        self._update(key, files=[*current.files, *files])

    def set_drag_active(self, key: str, active: bool) -> None:
        self._update(key, drag_active=active)

    def add_invalid_files(self, key: str, invalid: Iterable[InvalidFile]) -> None:
        current = self._scopes.get(key) or DialogUIState()
        self._update(key, invalid_files=[*current.invalid_files, *invalid])

    def clear_invalid_files(self, key: str) -> None:
        self._update(key, invalid_files=[])

    def set_show_template_upload(self, key: str, show: bool) -> None:
        self._update(key, show_template_upload=show)

    def set_template_file(self, key: str, file: Optional[UploadFile]) -> None:
        self._update(key, template_file=file)

    def set_show_ai_draft_form(self, key: str, show: bool) -> None:
        self._update(key, show_ai_draft_form=show)

    def set_should_trigger_upload(self, key: str, should: bool) -> None:
        self._update(key, should_trigger_upload=should)

    def set_form_field_value(self, key: str, field_name: str, value: str) -> None:
        current = self._scopes.get(key) or DialogUIState()
        self._update(key, form_data={**current.form_data, field_name: value})

    def set_multi_entry_input_value(self, key: str, field_name: str, value: str) -> None:
        current = self._scopes.get(key) or DialogUIState()
        self._update(key, input_values={**current.input_values, field_name: value})

    def add_multi_entry_value(self, key: str, field_name: str, value: str) -> None:
        value = (value or "").strip()
        if not value:
            return
        current = self._scopes.get(key) or DialogUIState()
        existing = current.form_data.get(field_name)
        entries = list(existing) if isinstance(existing, list) else []
        self._update(
            key,
            form_data={**current.form_data, field_name: [*entries, value]},
            input_values={**current.input_values, field_name: ""},
        )

    def remove_multi_entry_value(self, key: str, field_name: str, index: int) -> None:
        current = self._scopes.get(key) or DialogUIState()
        existing = current.form_data.get(field_name)
        entries = list(existing) if isinstance(existing, list) else []
        if not 0 <= index < len(entries):
            return
        self._update(
            key,
            form_data={**current.form_data, field_name: [v for i, v in enumerate(entries) if i != index]},
        )
