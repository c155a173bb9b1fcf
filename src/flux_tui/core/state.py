"""Dashboard state: tabs, per-tab selection, popups and fetched resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from flux_tui.integrations.kubernetes.models import (
    FluxResource,
    HelmChart,
    HelmRelease,
    Kustomization,
)

NAMESPACE_ALL_LABEL = "All namespaces"


class Tab(Enum):
    """Resource tabs in display order."""

    KUSTOMIZATIONS = 0
    HELM_RELEASES = 1
    HELM_CHARTS = 2

    @property
    def index(self) -> int:
        """Fixed slot index of the tab."""
        return self.value

    @property
    def title(self) -> str:
        """Display title of the tab."""
        return _TAB_TITLES[self]

    def next(self) -> Tab:
        """Tab to the right, wrapping around."""
        return Tab((self.value + 1) % len(Tab))

    def previous(self) -> Tab:
        """Tab to the left, wrapping around."""
        return Tab((self.value - 1) % len(Tab))


_TAB_TITLES: dict[Tab, str] = {
    Tab.KUSTOMIZATIONS: "Kustomizations",
    Tab.HELM_RELEASES: "HelmReleases",
    Tab.HELM_CHARTS: "HelmCharts",
}


# =============================================================================
# Popups
# =============================================================================


@dataclass(frozen=True)
class Popup:
    """Base class for overlay states."""


@dataclass(frozen=True)
class NoPopup(Popup):
    pass


@dataclass(frozen=True)
class NamespaceFilterPopup(Popup):
    """Namespace picker. Entry 0 is the "All namespaces" label."""

    namespaces: tuple[str, ...]
    selected: int = 0

    def namespace_for_index(self, index: int) -> tuple[bool, str | None]:
        """Map a picker row to a namespace filter.

        Returns:
            ``(True, None)`` for row 0, ``(True, name)`` for a namespace row
            and ``(False, None)`` for an index outside the list.
        """
        if index == 0:
            return True, None
        if 0 < index < len(self.namespaces):
            return True, self.namespaces[index]
        return False, None


@dataclass(frozen=True)
class ResourceDetailsPopup(Popup):
    """Details of a resource, frozen at the moment it was opened."""

    resource: FluxResource


@dataclass(frozen=True)
class ReconcilingPopup(Popup):
    name: str
    namespace: str


@dataclass(frozen=True)
class ErrorPopup(Popup):
    message: str


# =============================================================================
# Application state
# =============================================================================


@dataclass
class AppState:
    """Everything the dashboard renders.

    Only :class:`flux_tui.core.reducer.AppController` writes to it.
    """

    cluster_name: str = "unknown"
    tab: Tab = Tab.KUSTOMIZATIONS
    kustomizations: list[Kustomization] = field(default_factory=list)
    helm_releases: list[HelmRelease] = field(default_factory=list)
    helm_charts: list[HelmChart] = field(default_factory=list)
    selected: list[int] = field(default_factory=lambda: [0, 0, 0])
    namespace_filter: str | None = None
    namespaces: list[str] = field(default_factory=list)
    popup: Popup = field(default_factory=NoPopup)
    loading: bool = False
    last_error: str | None = None

    def resources_for(self, tab: Tab) -> list[FluxResource]:
        """Resources listed on a tab."""
        if tab is Tab.KUSTOMIZATIONS:
            return list(self.kustomizations)
        if tab is Tab.HELM_RELEASES:
            return list(self.helm_releases)
        return list(self.helm_charts)

    def current_resources(self) -> list[FluxResource]:
        return self.resources_for(self.tab)

    def current_item_count(self) -> int:
        if self.tab is Tab.KUSTOMIZATIONS:
            return len(self.kustomizations)
        if self.tab is Tab.HELM_RELEASES:
            return len(self.helm_releases)
        return len(self.helm_charts)

    def current_selected(self) -> int:
        """Cursor position on the active tab."""
        return self.selected[self.tab.index]

    def set_current_selected(self, index: int) -> None:
        """Move the cursor on the active tab."""
        self.selected[self.tab.index] = index

    def selected_resource(self) -> FluxResource | None:
        """Resource under the cursor, or None when the index is out of range."""
        resources = self.current_resources()
        index = self.current_selected()
        if 0 <= index < len(resources):
            return resources[index]
        return None

    @property
    def namespace_label(self) -> str:
        """Header text for the active namespace filter."""
        return self.namespace_filter or NAMESPACE_ALL_LABEL
