"""Screen definitions for the Flux dashboard."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import Container

from flux_tui.core.state import NoPopup
from flux_tui.tui.apps.flux.widgets import (
    HeaderBar,
    PopupPanel,
    ResourceTable,
    StateWidget,
    StatusBar,
    TabBar,
)
from flux_tui.tui.base import BaseScreen

if TYPE_CHECKING:
    from flux_tui.core.state import AppState


class DashboardScreen(BaseScreen[None]):
    """Single dashboard screen: header, tabs, table, status bar and popup overlay."""

    DEFAULT_CSS = """
    DashboardScreen {
        layers: base overlay;
    }

    DashboardScreen #popup-layer {
        layer: overlay;
        width: 100%;
        height: 100%;
        align: center middle;
        background: rgba(0, 0, 0, 0.5);
    }
    """

    def __init__(self, state: AppState) -> None:
        """Initialize the dashboard screen.

        Args:
            state: Dashboard state rendered by every widget.
        """
        super().__init__()
        self._state = state

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield HeaderBar(self._state, id="header")
        yield TabBar(self._state, id="tabs")
        yield ResourceTable(self._state, id="resources")
        yield StatusBar(self._state, id="status")
        with Container(id="popup-layer"):
            yield PopupPanel(self._state, id="popup")

    def on_mount(self) -> None:
        """Render the initial state."""
        self.refresh_view()

    def refresh_view(self) -> None:
        """Re-render every widget from the current state."""
        self.query_one("#popup-layer", Container).display = not isinstance(
            self._state.popup, NoPopup
        )
        for widget in self.query(StateWidget):
            widget.refresh()
