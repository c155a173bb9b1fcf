"""Unit tests for AppController.update."""

from __future__ import annotations

import pytest
import pytest_asyncio

from flux_tui.core.actions import (
    Bottom,
    ClosePopup,
    Down,
    FilterNamespace,
    NamespaceDown,
    NamespaceUp,
    NextTab,
    Noop,
    PreviousTab,
    Quit,
    Reconcile,
    ReconcileWithSource,
    Refresh,
    Select,
    SetNamespace,
    ToggleSuspend,
    Top,
    Up,
)
from flux_tui.core.reducer import AppController
from flux_tui.core.state import (
    NAMESPACE_ALL_LABEL,
    ErrorPopup,
    NamespaceFilterPopup,
    NoPopup,
    ReconcilingPopup,
    ResourceDetailsPopup,
    Tab,
)
from flux_tui.integrations.kubernetes.exceptions import KubernetesError
from flux_tui.integrations.kubernetes.models import ResourceKind
from tests.unit.conftest import FakeFetcher, FakeRunner, make_kustomization


@pytest_asyncio.fixture
async def controller(fetcher: FakeFetcher, runner: FakeRunner) -> AppController:
    """Controller after a successful initial refresh."""
    return await AppController.create(fetcher, runner, cluster_name="prod")


# =============================================================================
# Creation
# =============================================================================


@pytest.mark.unit
class TestCreate:
    """Tests for AppController.create."""

    @pytest.mark.asyncio
    async def test_initial_refresh(self, fetcher: FakeFetcher, runner: FakeRunner) -> None:
        """The first snapshot is loaded before the controller is returned."""
        controller = await AppController.create(fetcher, runner, cluster_name="prod")

        assert controller.state.cluster_name == "prod"
        assert len(controller.state.kustomizations) == 3
        assert controller.state.last_error is None

    @pytest.mark.asyncio
    async def test_initial_namespace_filter(
        self, fetcher: FakeFetcher, runner: FakeRunner
    ) -> None:
        """A configured namespace applies to the first fetch."""
        controller = await AppController.create(fetcher, runner, namespace_filter="apps")

        assert controller.state.namespace_filter == "apps"
        assert [k.name for k in controller.state.kustomizations] == ["apps"]

    @pytest.mark.asyncio
    async def test_failed_initial_refresh_is_not_fatal(self, runner: FakeRunner) -> None:
        """A broken cluster still yields a usable, empty dashboard."""
        fetcher = FakeFetcher()
        fetcher.errors["kustomizations"] = KubernetesError("unreachable")

        controller = await AppController.create(fetcher, runner)

        assert controller.state.kustomizations == []
        assert controller.state.last_error == (
            "Failed to fetch resources: Kustomizations: unreachable"
        )


# =============================================================================
# Navigation
# =============================================================================


@pytest.mark.unit
class TestNavigation:
    """Tests for tab and cursor actions."""

    @pytest.mark.asyncio
    async def test_tabs_wrap(self, controller: AppController) -> None:
        """NextTab and PreviousTab cycle through the tabs."""
        await controller.update(PreviousTab())
        assert controller.state.tab is Tab.HELM_CHARTS

        await controller.update(NextTab())
        await controller.update(NextTab())
        assert controller.state.tab is Tab.HELM_RELEASES

    @pytest.mark.asyncio
    async def test_down_clamps_at_last_item(self, controller: AppController) -> None:
        """Down stops at the last row."""
        for _ in range(5):
            await controller.update(Down())

        assert controller.state.current_selected() == 2

    @pytest.mark.asyncio
    async def test_up_clamps_at_zero(self, controller: AppController) -> None:
        """Up stops at the first row."""
        await controller.update(Down())
        await controller.update(Up())
        await controller.update(Up())

        assert controller.state.current_selected() == 0

    @pytest.mark.asyncio
    async def test_top_and_bottom(self, controller: AppController) -> None:
        """Top and Bottom jump to the ends."""
        await controller.update(Bottom())
        assert controller.state.current_selected() == 2

        await controller.update(Top())
        assert controller.state.current_selected() == 0

    @pytest.mark.asyncio
    async def test_empty_tab(self, controller: AppController) -> None:
        """Down and Bottom on an empty list keep the cursor at zero."""
        controller.state.helm_charts = []
        controller.state.tab = Tab.HELM_CHARTS

        await controller.update(Down())
        await controller.update(Bottom())

        assert controller.state.current_selected() == 0

    @pytest.mark.asyncio
    async def test_selection_is_per_tab(self, controller: AppController) -> None:
        """Each tab remembers its own cursor."""
        await controller.update(Bottom())
        await controller.update(NextTab())
        await controller.update(Down())
        await controller.update(NextTab())

        assert controller.state.selected == [2, 1, 0]

        await controller.update(NextTab())
        assert controller.state.current_selected() == 2

    @pytest.mark.asyncio
    async def test_navigation_allowed_under_popup(self, controller: AppController) -> None:
        """Cursor actions still apply while a popup is shown."""
        controller.state.popup = ErrorPopup(message="x")

        await controller.update(Down())

        assert controller.state.current_selected() == 1

    @pytest.mark.asyncio
    async def test_quit_and_noop_change_nothing(self, controller: AppController) -> None:
        """Quit is handled by the app loop and Noop does nothing."""
        before = (controller.state.tab, list(controller.state.selected), controller.state.popup)

        await controller.update(Quit())
        await controller.update(Noop())

        after = (controller.state.tab, list(controller.state.selected), controller.state.popup)
        assert before == after


# =============================================================================
# Popups
# =============================================================================


@pytest.mark.unit
class TestPopups:
    """Tests for popup transitions."""

    @pytest.mark.asyncio
    async def test_select_opens_details(self, controller: AppController) -> None:
        """Select shows the selected resource."""
        await controller.update(Down())
        await controller.update(Select())

        popup = controller.state.popup
        assert isinstance(popup, ResourceDetailsPopup)
        assert popup.resource.name == "infra"

    @pytest.mark.asyncio
    async def test_details_survive_refresh(
        self, controller: AppController, fetcher: FakeFetcher
    ) -> None:
        """The details popup keeps the resource as it was when opened."""
        await controller.update(Select())
        fetcher.kustomizations = [make_kustomization("replaced")]

        await controller.update(Refresh())

        popup = controller.state.popup
        assert isinstance(popup, ResourceDetailsPopup)
        assert popup.resource.name == "flux-system"
        assert [k.name for k in controller.state.kustomizations] == ["replaced"]

    @pytest.mark.asyncio
    async def test_select_on_empty_tab(self, controller: AppController) -> None:
        """Nothing opens without a selected resource."""
        controller.state.helm_charts = []
        controller.state.tab = Tab.HELM_CHARTS

        await controller.update(Select())

        assert isinstance(controller.state.popup, NoPopup)

    @pytest.mark.asyncio
    async def test_select_ignored_under_popup(self, controller: AppController) -> None:
        """Select only works from the table."""
        controller.state.popup = ErrorPopup(message="x")

        await controller.update(Select())

        assert controller.state.popup == ErrorPopup(message="x")

    @pytest.mark.asyncio
    async def test_filter_namespace_opens_picker(self, controller: AppController) -> None:
        """The picker lists the All entry followed by the namespaces."""
        await controller.update(FilterNamespace())

        assert controller.state.popup == NamespaceFilterPopup(
            namespaces=(NAMESPACE_ALL_LABEL, "apps", "default", "flux-system"),
            selected=0,
        )

    @pytest.mark.asyncio
    async def test_namespace_cursor_clamps(self, controller: AppController) -> None:
        """The picker cursor stays within the list."""
        await controller.update(FilterNamespace())
        await controller.update(NamespaceUp())
        assert controller.state.popup.selected == 0  # type: ignore[attr-defined]

        for _ in range(10):
            await controller.update(NamespaceDown())
        assert controller.state.popup.selected == 3  # type: ignore[attr-defined]

    @pytest.mark.asyncio
    async def test_namespace_cursor_ignored_without_picker(
        self, controller: AppController
    ) -> None:
        """NamespaceUp and NamespaceDown need the picker open."""
        await controller.update(NamespaceDown())

        assert isinstance(controller.state.popup, NoPopup)

    @pytest.mark.asyncio
    async def test_set_namespace_refreshes(
        self, controller: AppController, fetcher: FakeFetcher
    ) -> None:
        """SetNamespace applies the filter, closes the picker and refreshes."""
        await controller.update(FilterNamespace())
        fetcher.calls.clear()

        await controller.update(SetNamespace("apps"))

        assert controller.state.namespace_filter == "apps"
        assert isinstance(controller.state.popup, NoPopup)
        assert ("kustomizations", "apps") in fetcher.calls
        assert [k.name for k in controller.state.kustomizations] == ["apps"]

    @pytest.mark.asyncio
    async def test_set_namespace_none_clears_filter(self, controller: AppController) -> None:
        """SetNamespace(None) shows every namespace."""
        await controller.update(FilterNamespace())
        await controller.update(SetNamespace("apps"))
        await controller.update(FilterNamespace())
        await controller.update(SetNamespace(None))

        assert controller.state.namespace_filter is None
        assert len(controller.state.kustomizations) == 3

    @pytest.mark.asyncio
    async def test_set_namespace_needs_picker(
        self, controller: AppController, fetcher: FakeFetcher
    ) -> None:
        """SetNamespace outside the picker changes nothing."""
        controller.state.popup = ErrorPopup(message="Reconcile failed: boom")
        fetcher.calls.clear()

        await controller.update(SetNamespace("apps"))

        assert controller.state.namespace_filter is None
        assert controller.state.popup == ErrorPopup(message="Reconcile failed: boom")
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_close_popup(self, controller: AppController) -> None:
        """ClosePopup dismisses details, picker and error popups."""
        for popup in (
            ErrorPopup(message="x"),
            NamespaceFilterPopup(namespaces=(NAMESPACE_ALL_LABEL,)),
        ):
            controller.state.popup = popup
            await controller.update(ClosePopup())
            assert isinstance(controller.state.popup, NoPopup)

    @pytest.mark.asyncio
    async def test_reconciling_popup_cannot_be_closed(self, controller: AppController) -> None:
        """The reconciling popup stays until the command finishes."""
        controller.state.popup = ReconcilingPopup(name="apps", namespace="flux-system")

        await controller.update(ClosePopup())

        assert isinstance(controller.state.popup, ReconcilingPopup)


# =============================================================================
# Commands
# =============================================================================


@pytest.mark.unit
class TestCommands:
    """Tests for reconcile, suspend and refresh actions."""

    @pytest.mark.asyncio
    async def test_reconcile(self, controller: AppController, runner: FakeRunner) -> None:
        """Reconcile runs against the selected resource."""
        await controller.update(Reconcile())

        assert runner.reconciled == [
            ("flux-system", "flux-system", ResourceKind.KUSTOMIZATION, False)
        ]
        assert isinstance(controller.state.popup, NoPopup)

    @pytest.mark.asyncio
    async def test_reconcile_with_source(
        self, controller: AppController, runner: FakeRunner
    ) -> None:
        """ReconcileWithSource sets with_source."""
        await controller.update(ReconcileWithSource())

        assert runner.reconciled[0][3] is True

    @pytest.mark.asyncio
    async def test_reconcile_ignored_under_popup(
        self, controller: AppController, runner: FakeRunner
    ) -> None:
        """Commands only run from the table."""
        controller.state.popup = ErrorPopup(message="x")

        await controller.update(Reconcile())
        await controller.update(ToggleSuspend())

        assert runner.reconciled == []
        assert runner.toggled == []

    @pytest.mark.asyncio
    async def test_reconcile_failure(self, fetcher: FakeFetcher) -> None:
        """A failed reconcile leaves an error popup."""
        controller = await AppController.create(fetcher, FakeRunner(error=RuntimeError("nope")))

        await controller.update(Reconcile())

        assert controller.state.popup == ErrorPopup(message="Reconcile failed: nope")

    @pytest.mark.asyncio
    async def test_toggle_suspend(self, controller: AppController, runner: FakeRunner) -> None:
        """ToggleSuspend passes the current suspend flag."""
        await controller.update(Bottom())
        await controller.update(ToggleSuspend())

        assert runner.toggled == [("apps", "apps", ResourceKind.KUSTOMIZATION, True)]

    @pytest.mark.asyncio
    async def test_refresh_reports_errors(
        self, controller: AppController, fetcher: FakeFetcher
    ) -> None:
        """A failed refresh keeps data and sets last_error."""
        fetcher.errors["namespaces"] = KubernetesError("timeout")

        await controller.update(Refresh())

        assert len(controller.state.kustomizations) == 3
        assert controller.state.last_error == "Failed to fetch resources: Namespaces: timeout"

    @pytest.mark.asyncio
    async def test_on_change_called_for_in_flight_states(
        self, controller: AppController
    ) -> None:
        """Listeners see loading and reconciling states as they happen."""
        seen: list[str] = []
        controller.on_change = lambda: seen.append(
            type(controller.state.popup).__name__
            if not controller.state.loading
            else "loading"
        )

        await controller.update(Reconcile())

        assert seen == ["ReconcilingPopup", "loading"]
