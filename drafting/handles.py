from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional
import asyncio
import logging
import threading

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    INQUIRY = "inquiry"
    GENERATION = "generation"


@dataclass(eq=False)
class OperationHandle:
    kind: OperationKind
    signal: threading.Event = field(default_factory=threading.Event)
    task: Optional[asyncio.Future] = None

    @property
    def cancelled(self) -> bool:
        return self.signal.is_set()

    def attach(self, task: asyncio.Future) -> None:
        self.task = task
        if self.cancelled:
            task.cancel()

    def cancel(self) -> None:
        # cancelling the task aborts the request and closes its connection
        self.signal.set()
        if self.task is not None and not self.task.done():
            self.task.cancel()


class HandleRegistry:
    """At most one live handle per operation kind."""

    def __init__(self) -> None:
        self._handles: Dict[OperationKind, OperationHandle] = {}

    def start(self, kind: OperationKind) -> OperationHandle:
        # a new call of either kind supersedes everything in flight
        self.cancel_all()
        handle = OperationHandle(kind)
        self._handles[kind] = handle
        return handle

    def release(self, handle: OperationHandle) -> None:
        if self._handles.get(handle.kind) is handle:
            del self._handles[handle.kind]

    def cancel_all(self) -> None:
        for handle in list(self._handles.values()):
            logger.debug("Cancelling in-flight %s request", handle.kind.value)
            handle.cancel()
        self._handles.clear()

    def __bool__(self) -> bool:
        return bool(self._handles)
