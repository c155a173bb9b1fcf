"""Base classes for flux-tui screens and widgets.

Both carry :meth:`notify_user`, which shows a toast and keeps errors on
screen longer than routine messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from textual.app import ComposeResult
from textual.screen import Screen
from textual.widget import Widget

if TYPE_CHECKING:
    from textual.app import App
    from textual.notifications import SeverityLevel

T = TypeVar("T")

# Seconds a toast stays visible, by severity
NOTIFY_TIMEOUTS: dict[str, float] = {
    "information": 3.0,
    "warning": 6.0,
    "error": 10.0,
}


def _notify(app: App[object], message: str, severity: SeverityLevel) -> None:
    app.notify(message, severity=severity, timeout=NOTIFY_TIMEOUTS[severity])


class BaseWidget(Widget):
    """Base class for dashboard widgets."""

    def notify_user(
        self,
        message: str,
        severity: SeverityLevel = "information",
    ) -> None:
        """Show a toast notification.

        Args:
            message: Notification text.
            severity: "information", "warning" or "error".
        """
        _notify(self.app, message, severity)


class BaseScreen(Screen[T]):
    """Base class for dashboard screens.

    Type Parameters:
        T: Result type passed to ``dismiss``.
    """

    def notify_user(
        self,
        message: str,
        severity: SeverityLevel = "information",
    ) -> None:
        """Show a toast notification.

        Args:
            message: Notification text.
            severity: "information", "warning" or "error".
        """
        _notify(self.app, message, severity)

    def compose(self) -> ComposeResult:
        raise NotImplementedError(f"{type(self).__name__} must implement compose()")
