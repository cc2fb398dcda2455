"""Cancellation token shared by every store call of one evaluation."""

from __future__ import annotations

import threading
import time

from MibigSearch.core.errors import EvaluationCancelled


class CancelToken:
    """Deadline plus cancel flag propagated through an evaluation.

    Args:
        timeout: Seconds from now until the deadline, or None for no deadline.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        """Raise EvaluationCancelled if the token was cancelled or expired."""
        if self._event.is_set():
            raise EvaluationCancelled("evaluation cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise EvaluationCancelled("evaluation deadline exceeded")
