"""Actions understood by the dashboard state engine.

Every user intent and timer tick is turned into one of these values and
fed to :meth:`flux_tui.core.reducer.AppController.update`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Action:
    """Base class for all actions."""


@dataclass(frozen=True)
class Quit(Action):
    """Leave the application. Handled by the application loop."""


@dataclass(frozen=True)
class NextTab(Action):
    pass


@dataclass(frozen=True)
class PreviousTab(Action):
    pass


@dataclass(frozen=True)
class Up(Action):
    pass


@dataclass(frozen=True)
class Down(Action):
    pass


@dataclass(frozen=True)
class Top(Action):
    pass


@dataclass(frozen=True)
class Bottom(Action):
    pass


@dataclass(frozen=True)
class Select(Action):
    """Open the details popup for the selected resource."""


@dataclass(frozen=True)
class Reconcile(Action):
    pass


@dataclass(frozen=True)
class ReconcileWithSource(Action):
    """Reconcile the selected resource together with its source."""


@dataclass(frozen=True)
class FilterNamespace(Action):
    """Open the namespace filter popup."""


@dataclass(frozen=True)
class SetNamespace(Action):
    """Apply a namespace filter. ``None`` means all namespaces."""

    namespace: str | None = None


@dataclass(frozen=True)
class NamespaceUp(Action):
    """Move the namespace popup cursor up."""


@dataclass(frozen=True)
class NamespaceDown(Action):
    """Move the namespace popup cursor down."""


@dataclass(frozen=True)
class ClosePopup(Action):
    pass


@dataclass(frozen=True)
class Refresh(Action):
    pass


@dataclass(frozen=True)
class ToggleSuspend(Action):
    pass


@dataclass(frozen=True)
class Noop(Action):
    pass
