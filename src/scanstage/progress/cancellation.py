"""Single-owner cancellation token shared by every scheduled unit of work."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class CancellationToken:
    """A one-shot flag checked before every state mutation.

    The owner calls :meth:`cancel` exactly once at teardown; later calls are
    no-ops.  Units register release callbacks (usually "cancel my pending
    timer") which run once, in registration order, when the flag is set.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Register a release hook. Runs immediately if already cancelled."""
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)

    def cancel(self) -> bool:
        """Set the flag and release registered resources.

        Returns ``True`` when this call performed the cancellation.
        """
        if self._cancelled:
            return False
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        logger.debug("Cancellation requested; releasing %d unit(s)", len(callbacks))
        for callback in callbacks:
            callback()
        return True
