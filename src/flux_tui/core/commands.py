"""Reconcile and suspend/resume commands on the selected resource."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from flux_tui.core.state import ErrorPopup, NoPopup, ReconcilingPopup

if TYPE_CHECKING:
    from flux_tui.core.interfaces import CommandRunner
    from flux_tui.core.refresh import RefreshOrchestrator
    from flux_tui.core.state import AppState

logger = structlog.get_logger()

RECONCILE_ERROR_PREFIX = "Reconcile failed"
TOGGLE_SUSPEND_ERROR_PREFIX = "Toggle suspend failed"


class CommandDispatcher:
    """Runs commands against the selected resource and folds the outcome
    into the popup state.

    Each command is attempted once. A successful command is followed by a
    refresh so the table shows the new state.
    """

    def __init__(self, runner: CommandRunner, refresher: RefreshOrchestrator) -> None:
        self._runner = runner
        self._refresher = refresher
        self._log = logger.bind(entity="command")

    async def reconcile(
        self,
        state: AppState,
        with_source: bool = False,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Reconcile the selected resource.

        The reconciling popup is shown (through ``on_change``) before the
        runner is called. Failure replaces it with an error popup.

        Args:
            state: State to update.
            with_source: Reconcile the resource's source as well.
            on_change: Called after the reconciling popup is set.
        """
        resource = state.selected_resource()
        if resource is None:
            return

        state.popup = ReconcilingPopup(name=resource.name, namespace=resource.namespace)
        if on_change is not None:
            on_change()

        self._log.info(
            "reconcile_requested",
            kind=resource.kind.value,
            name=resource.name,
            namespace=resource.namespace,
            with_source=with_source,
        )
        try:
            await self._runner.reconcile(
                resource.name, resource.namespace, resource.kind, with_source
            )
        except Exception as e:
            self._log.warning("reconcile_failed", name=resource.name, error=str(e))
            state.popup = ErrorPopup(message=f"{RECONCILE_ERROR_PREFIX}: {e}")
            return

        state.popup = NoPopup()
        await self._refresher.refresh(state, on_change)

    async def toggle_suspend(
        self,
        state: AppState,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        """Suspend the selected resource, or resume it if suspended.

        Kinds that cannot be suspended are left alone.

        Args:
            state: State to update.
            on_change: Passed on to the follow-up refresh.
        """
        resource = state.selected_resource()
        if resource is None or not resource.kind.supports_suspend:
            return

        suspended = resource.is_suspended
        self._log.info(
            "toggle_suspend_requested",
            kind=resource.kind.value,
            name=resource.name,
            namespace=resource.namespace,
            suspended=suspended,
        )
        try:
            await self._runner.toggle_suspend(
                resource.name, resource.namespace, resource.kind, suspended
            )
        except Exception as e:
            self._log.warning("toggle_suspend_failed", name=resource.name, error=str(e))
            state.popup = ErrorPopup(message=f"{TOGGLE_SUSPEND_ERROR_PREFIX}: {e}")
            return

        await self._refresher.refresh(state, on_change)
