"""
Shared confirmation prompt.

The dashboard has one confirmation dialog for every destructive
action.  It holds at most one pending callback: showing the dialog
again replaces the previous callback, confirming runs it once, and
cancelling drops it.
"""

import logging
from typing import Any, Callable, Optional


logger = logging.getLogger(__name__)


class ConfirmDialog:
    def __init__(self) -> None:
        self.is_open = False
        self.message = ""
        self._callback: Optional[Callable[[], Any]] = None

    @property
    def has_pending(self) -> bool:
        return self._callback is not None

    def show(self, message: str, callback: Callable[[], Any]) -> None:
        self.message = message
        self.is_open = True
        self._callback = callback

    def confirm(self) -> Any:
        """Close the dialog and run the pending callback, if any."""
        self.is_open = False
        callback, self._callback = self._callback, None
        if callback is None:
            logger.debug("Confirm pressed with no pending action")
            return None
        return callback()

    def cancel(self) -> None:
        self.is_open = False
        self._callback = None
