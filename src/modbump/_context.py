"""Cancellation contexts shared between the executor and its operations."""

from __future__ import annotations

import threading
import time
from typing import Optional

from eris import ErisError

from ._errors import CanceledError, DeadlineExceededError


class Context:
    """Carries a cancellation signal and an optional deadline.

    Contexts form a tree: a child is done as soon as its parent is done. All
    methods are safe to call from any thread.

    Arguments:
        parent: The context this one derives from (if any).
        deadline: A time.monotonic() timestamp after which the context is
            done.
    """

    def __init__(
        self,
        *,
        parent: Optional[Context] = None,
        deadline: Optional[float] = None,
    ) -> None:
        self._parent = parent
        self._deadline = deadline
        self._cancelled = threading.Event()

    def with_cancel(self) -> Context:
        """Returns a child context that can be cancelled independently."""
        return Context(parent=self)

    def with_timeout(self, seconds: float) -> Context:
        """Returns a child context that expires after @seconds seconds."""
        return Context(parent=self, deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Cancels this context and, by extension, all of its children."""
        self._cancelled.set()

    def done(self) -> bool:
        """True if this context has been cancelled or has expired."""
        return self.err() is not None

    def err(self) -> Optional[ErisError]:
        """Returns the reason this context is done (None if it isn't)."""
        if self._parent is not None and (e := self._parent.err()):
            return e

        if self._cancelled.is_set():
            return CanceledError("context canceled")

        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceededError("context deadline exceeded")

        return None


def background() -> Context:
    """Returns a root context that is never done unless cancelled."""
    return Context()
