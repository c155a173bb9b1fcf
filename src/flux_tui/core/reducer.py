"""The single writer of dashboard state.

:class:`AppController` turns actions into state changes, one action at a
time. Renderers read ``controller.state`` between actions.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from flux_tui.core.actions import (
    Action,
    Bottom,
    ClosePopup,
    Down,
    FilterNamespace,
    NamespaceDown,
    NamespaceUp,
    NextTab,
    PreviousTab,
    Reconcile,
    ReconcileWithSource,
    Refresh,
    Select,
    SetNamespace,
    ToggleSuspend,
    Top,
    Up,
)
from flux_tui.core.commands import CommandDispatcher
from flux_tui.core.interfaces import CommandRunner, ResourceFetcher
from flux_tui.core.refresh import RefreshOrchestrator
from flux_tui.core.state import (
    NAMESPACE_ALL_LABEL,
    AppState,
    NamespaceFilterPopup,
    NoPopup,
    ReconcilingPopup,
    ResourceDetailsPopup,
)

logger = structlog.get_logger()


class AppController:
    """Applies actions to an :class:`AppState`.

    Args:
        state: State owned by this controller.
        fetcher: Source of resource lists and namespaces.
        runner: Executor for reconcile and suspend/resume commands.
        on_change: Optional listener called at in-flight points of a long
            action (loading started, reconcile started) so a renderer can
            show them before the action finishes.
    """

    def __init__(
        self,
        state: AppState,
        fetcher: ResourceFetcher,
        runner: CommandRunner,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.state = state
        self.on_change = on_change
        self._refresher = RefreshOrchestrator(fetcher)
        self._commands = CommandDispatcher(runner, self._refresher)
        self._log = logger.bind(entity="controller")

    @classmethod
    async def create(
        cls,
        fetcher: ResourceFetcher,
        runner: CommandRunner,
        *,
        cluster_name: str = "unknown",
        namespace_filter: str | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> AppController:
        """Build a controller and perform the initial refresh.

        A failed initial refresh is not fatal; it leaves empty lists and
        ``last_error`` set.
        """
        state = AppState(cluster_name=cluster_name, namespace_filter=namespace_filter)
        controller = cls(state, fetcher, runner, on_change=on_change)
        await controller.refresh()
        return controller

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    async def refresh(self) -> None:
        await self._refresher.refresh(self.state, self._notify)

    async def update(self, action: Action) -> None:
        """Apply one action to completion.

        Actions that do not apply in the current state change nothing.
        ``Quit`` is left to the application loop.

        Args:
            action: The action to apply.
        """
        state = self.state
        popup = state.popup
        self._log.debug("action", action=type(action).__name__)

        # Tabs and cursor
        if isinstance(action, NextTab):
            state.tab = state.tab.next()
        elif isinstance(action, PreviousTab):
            state.tab = state.tab.previous()
        elif isinstance(action, Up):
            state.set_current_selected(max(state.current_selected() - 1, 0))
        elif isinstance(action, Down):
            count = state.current_item_count()
            if count > 0:
                state.set_current_selected(min(state.current_selected() + 1, count - 1))
        elif isinstance(action, Top):
            state.set_current_selected(0)
        elif isinstance(action, Bottom):
            count = state.current_item_count()
            if count > 0:
                state.set_current_selected(count - 1)

        # Popups
        elif isinstance(action, Select):
            if isinstance(popup, NoPopup):
                resource = state.selected_resource()
                if resource is not None:
                    state.popup = ResourceDetailsPopup(resource=resource.model_copy(deep=True))
        elif isinstance(action, FilterNamespace):
            if isinstance(popup, NoPopup):
                state.popup = NamespaceFilterPopup(
                    namespaces=(NAMESPACE_ALL_LABEL, *state.namespaces),
                    selected=0,
                )
        elif isinstance(action, NamespaceUp):
            if isinstance(popup, NamespaceFilterPopup):
                state.popup = NamespaceFilterPopup(
                    namespaces=popup.namespaces,
                    selected=max(popup.selected - 1, 0),
                )
        elif isinstance(action, NamespaceDown):
            if isinstance(popup, NamespaceFilterPopup):
                state.popup = NamespaceFilterPopup(
                    namespaces=popup.namespaces,
                    selected=min(popup.selected + 1, len(popup.namespaces) - 1),
                )
        elif isinstance(action, SetNamespace):
            if isinstance(popup, NamespaceFilterPopup):
                state.namespace_filter = action.namespace
                state.popup = NoPopup()
                self._log.info("namespace_filter_changed", namespace=action.namespace or "all")
                await self.refresh()
        elif isinstance(action, ClosePopup):
            if not isinstance(popup, ReconcilingPopup):
                state.popup = NoPopup()

        # Data and commands
        elif isinstance(action, Refresh):
            await self.refresh()
        elif isinstance(action, Reconcile | ReconcileWithSource):
            if isinstance(popup, NoPopup):
                await self._commands.reconcile(
                    state,
                    with_source=isinstance(action, ReconcileWithSource),
                    on_change=self._notify,
                )
        elif isinstance(action, ToggleSuspend):
            if isinstance(popup, NoPopup):
                await self._commands.toggle_suspend(state, on_change=self._notify)
