"""Main Textual application for the Flux dashboard.

Key presses and the refresh timer only enqueue actions. A single worker
drains the queue and applies each action to completion, so state is never
written by two tasks at once.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from textual import events
from textual.app import App
from textual.binding import Binding

from flux_tui.config import DEFAULT_REFRESH_INTERVAL
from flux_tui.core.actions import Action, Noop, Quit, Refresh
from flux_tui.tui.apps.flux.keymap import action_for_key
from flux_tui.tui.apps.flux.screens import DashboardScreen

if TYPE_CHECKING:
    from flux_tui.core.reducer import AppController

logger = structlog.get_logger()


class FluxApp(App[None]):
    """TUI application for watching and reconciling Flux resources.

    Args:
        controller: Controller owning the dashboard state.
        refresh_interval: Seconds between automatic refreshes.
    """

    TITLE = "flux-tui"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        controller: AppController,
        refresh_interval: int = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        """Initialize the dashboard app.

        Args:
            controller: Controller owning the dashboard state.
            refresh_interval: Seconds between automatic refreshes.
        """
        super().__init__()
        self._controller = controller
        self._refresh_interval = refresh_interval
        self._actions: asyncio.Queue[Action] = asyncio.Queue()
        self._dashboard: DashboardScreen | None = None
        self._log = logger.bind(entity="app")

    @property
    def controller(self) -> AppController:
        return self._controller

    def on_mount(self) -> None:
        """Show the dashboard and start the action worker and refresh timer."""
        self._dashboard = DashboardScreen(self._controller.state)
        self._controller.on_change = self.refresh_view
        self.push_screen(self._dashboard)
        self.run_worker(self._drain_actions(), name="actions", exclusive=True)
        self.set_interval(self._refresh_interval, self._on_refresh_tick)

    def refresh_view(self) -> None:
        """Re-render the dashboard from the current state."""
        if self._dashboard is not None and self._dashboard.is_mounted:
            self._dashboard.refresh_view()

    def enqueue(self, action: Action) -> None:
        """Queue an action for the worker."""
        self._actions.put_nowait(action)

    def _on_refresh_tick(self) -> None:
        # Skip the tick while earlier actions are still waiting
        if self._actions.empty():
            self.enqueue(Refresh())

    async def _drain_actions(self) -> None:
        while True:
            action = await self._actions.get()
            try:
                await self._controller.update(action)
            except Exception as e:
                self._log.exception("action_failed", action=type(action).__name__)
                if self._dashboard is not None:
                    self._dashboard.notify_user(f"{type(action).__name__} failed: {e}", "error")
            finally:
                self._actions.task_done()
            self.refresh_view()

    async def on_key(self, event: events.Key) -> None:
        """Map key presses to actions for the open popup."""
        action = action_for_key(event.key, self._controller.state.popup)
        if isinstance(action, Noop):
            return
        event.prevent_default()
        event.stop()
        if isinstance(action, Quit):
            self.exit()
            return
        self.enqueue(action)

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()
