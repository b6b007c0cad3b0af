"""
Recompute Controller
====================
Keeps token counts in sync with example text and tells listeners about
every committed change.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from cost_estimator.core.state import (
    CountSource,
    EstimationInputs,
    TokenKind,
    coerce_count,
)
from cost_estimator.core.tokenizer import TokenizerAdapter
from cost_estimator.schemas.estimate import DerivedEstimate

logger = structlog.get_logger()

Listener = Callable[[DerivedEstimate], None]


class RecomputeController:
    """
    Applies text edits and direct count overrides to session inputs.

    The most recent change wins: a text edit recomputes that kind's token
    count right away, and a direct override holds until the next text edit.
    Counts are always updated synchronously, so a read made right after an
    edit never sees a stale value.

    Listeners registered with :meth:`subscribe` receive a fresh estimate
    after every change. Inside :meth:`batch`, notifications are held back
    and sent once when the outermost batch exits.
    """

    def __init__(
        self,
        inputs: EstimationInputs,
        tokenizer: TokenizerAdapter,
        estimator: Callable[[], DerivedEstimate],
    ):
        self._inputs = inputs
        self._tokenizer = tokenizer
        self._estimator = estimator
        self._listeners: list[Listener] = []
        self._batch_depth = 0
        self._pending = False

    def text_changed(self, kind: TokenKind, text: str) -> int:
        """
        Store new example text and recompute its token count.

        Returns:
            The recomputed token count
        """
        # Anything that is not text counts as cleared text
        if not isinstance(text, str):
            text = ""
        self._inputs.set_text(kind, text)
        count = self._tokenizer.token_count(text)
        self._inputs.set_token_count(kind, count, CountSource.TEXT)
        logger.debug("Token count recomputed", kind=kind.value, tokens=count)
        self.notify()
        return count

    def count_overridden(self, kind: TokenKind, value: Any) -> int:
        """
        Set a token count directly, ignoring the example text.

        Returns:
            The coerced token count
        """
        count = coerce_count(value)
        self._inputs.set_token_count(kind, count, CountSource.MANUAL)
        logger.debug("Token count overridden", kind=kind.value, tokens=count)
        self.notify()
        return count

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for new estimates.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        """Publish the current estimate, or defer it while batching."""
        if self._batch_depth:
            self._pending = True
            return
        self._publish()

    @contextmanager
    def batch(self) -> Iterator["RecomputeController"]:
        """Coalesce notifications for several edits into one."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._pending:
                self._pending = False
                self._publish()

    def _publish(self) -> None:
        if not self._listeners:
            return

        estimate = self._estimator()
        for listener in list(self._listeners):
            try:
                listener(estimate)
            except Exception:
                logger.exception("Estimate listener failed", listener=repr(listener))
