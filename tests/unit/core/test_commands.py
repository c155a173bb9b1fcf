"""Unit tests for the command dispatcher."""

from __future__ import annotations

import pytest

from flux_tui.core.commands import CommandDispatcher
from flux_tui.core.refresh import RefreshOrchestrator
from flux_tui.core.state import AppState, ErrorPopup, NoPopup, ReconcilingPopup, Tab
from flux_tui.integrations.kubernetes.flux_cli import FluxCommandError
from flux_tui.integrations.kubernetes.models import ResourceKind
from tests.unit.conftest import FakeFetcher, FakeRunner


async def _loaded_state(fetcher: FakeFetcher) -> AppState:
    state = AppState()
    await RefreshOrchestrator(fetcher).refresh(state)
    return state


def _dispatcher(runner: FakeRunner, fetcher: FakeFetcher) -> CommandDispatcher:
    return CommandDispatcher(runner, RefreshOrchestrator(fetcher))


@pytest.mark.unit
class TestReconcile:
    """Tests for CommandDispatcher.reconcile."""

    @pytest.mark.asyncio
    async def test_reconciles_selected_resource(
        self, runner: FakeRunner, fetcher: FakeFetcher
    ) -> None:
        """The selected resource is reconciled and the data refreshed."""
        state = await _loaded_state(fetcher)
        state.set_current_selected(1)
        fetcher.calls.clear()

        await _dispatcher(runner, fetcher).reconcile(state)

        assert runner.reconciled == [("infra", "flux-system", ResourceKind.KUSTOMIZATION, False)]
        assert isinstance(state.popup, NoPopup)
        assert len(fetcher.calls) == 4

    @pytest.mark.asyncio
    async def test_with_source(self, runner: FakeRunner, fetcher: FakeFetcher) -> None:
        """with_source is passed to the runner."""
        state = await _loaded_state(fetcher)
        state.tab = Tab.HELM_RELEASES

        await _dispatcher(runner, fetcher).reconcile(state, with_source=True)

        assert runner.reconciled == [("podinfo", "apps", ResourceKind.HELM_RELEASE, True)]

    @pytest.mark.asyncio
    async def test_reconciling_popup_shown_while_running(
        self, runner: FakeRunner, fetcher: FakeFetcher
    ) -> None:
        """on_change sees the reconciling popup before the runner finishes."""
        state = await _loaded_state(fetcher)
        popups: list[object] = []

        await _dispatcher(runner, fetcher).reconcile(
            state, on_change=lambda: popups.append(state.popup)
        )

        assert popups[0] == ReconcilingPopup(name="flux-system", namespace="flux-system")

    @pytest.mark.asyncio
    async def test_failure_shows_error_popup(self, fetcher: FakeFetcher) -> None:
        """A failed reconcile shows an error and skips the refresh."""
        state = await _loaded_state(fetcher)
        fetcher.calls.clear()
        runner = FakeRunner(error=FluxCommandError("Flux command failed: not found"))

        await _dispatcher(runner, fetcher).reconcile(state)

        assert state.popup == ErrorPopup(
            message="Reconcile failed: Flux command failed: not found"
        )
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_any_exception_becomes_error_popup(self, fetcher: FakeFetcher) -> None:
        """Unexpected runner errors are shown instead of raised."""
        state = await _loaded_state(fetcher)
        runner = FakeRunner(error=RuntimeError("unexpected"))

        await _dispatcher(runner, fetcher).reconcile(state)

        assert state.popup == ErrorPopup(message="Reconcile failed: unexpected")

    @pytest.mark.asyncio
    async def test_no_selection_does_nothing(
        self, runner: FakeRunner, fetcher: FakeFetcher
    ) -> None:
        """An empty tab has nothing to reconcile."""
        state = AppState()

        await _dispatcher(runner, fetcher).reconcile(state)

        assert runner.reconciled == []
        assert isinstance(state.popup, NoPopup)


@pytest.mark.unit
class TestToggleSuspend:
    """Tests for CommandDispatcher.toggle_suspend."""

    @pytest.mark.asyncio
    async def test_passes_current_suspend_state(
        self, runner: FakeRunner, fetcher: FakeFetcher
    ) -> None:
        """The runner gets the resource's current suspend flag."""
        state = await _loaded_state(fetcher)
        state.set_current_selected(2)

        await _dispatcher(runner, fetcher).toggle_suspend(state)

        assert runner.toggled == [("apps", "apps", ResourceKind.KUSTOMIZATION, True)]
        assert isinstance(state.popup, NoPopup)

    @pytest.mark.asyncio
    async def test_refreshes_after_success(
        self, runner: FakeRunner, fetcher: FakeFetcher
    ) -> None:
        """A successful toggle refreshes the data."""
        state = await _loaded_state(fetcher)
        fetcher.calls.clear()

        await _dispatcher(runner, fetcher).toggle_suspend(state)

        assert len(fetcher.calls) == 4

    @pytest.mark.asyncio
    async def test_helm_chart_ignored(self, runner: FakeRunner, fetcher: FakeFetcher) -> None:
        """HelmCharts cannot be suspended, so nothing happens."""
        state = await _loaded_state(fetcher)
        state.tab = Tab.HELM_CHARTS

        await _dispatcher(runner, fetcher).toggle_suspend(state)

        assert runner.toggled == []
        assert isinstance(state.popup, NoPopup)

    @pytest.mark.asyncio
    async def test_failure_shows_error_popup(self, fetcher: FakeFetcher) -> None:
        """A failed toggle shows an error popup."""
        state = await _loaded_state(fetcher)
        runner = FakeRunner(error=FluxCommandError("Flux command failed: forbidden"))

        await _dispatcher(runner, fetcher).toggle_suspend(state)

        assert state.popup == ErrorPopup(
            message="Toggle suspend failed: Flux command failed: forbidden"
        )

    @pytest.mark.asyncio
    async def test_no_selection_does_nothing(
        self, runner: FakeRunner, fetcher: FakeFetcher
    ) -> None:
        """An empty tab has nothing to toggle."""
        await _dispatcher(runner, fetcher).toggle_suspend(AppState())

        assert runner.toggled == []
