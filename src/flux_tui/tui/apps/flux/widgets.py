"""Widgets for the Flux dashboard.

Every widget renders straight from the shared :class:`AppState`. None of
them is focusable, so key presses reach the application's key handler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from flux_tui.core.state import (
    ErrorPopup,
    NamespaceFilterPopup,
    NoPopup,
    ReconcilingPopup,
    ResourceDetailsPopup,
    Tab,
)
from flux_tui.integrations.kubernetes.models import (
    FluxResource,
    HelmChart,
    HelmRelease,
    Kustomization,
)
from flux_tui.tui.base import BaseWidget
from flux_tui.tui.theme import Colors, Styles
from flux_tui.utils.text import truncate

if TYPE_CHECKING:
    from flux_tui.core.state import AppState

ERROR_DISPLAY_LENGTH = 40
SUSPENDED_MARK = "⏸"

# Column definitions per tab: list of (label, min width) tuples
COLUMN_DEFS: dict[Tab, list[tuple[str, int]]] = {
    Tab.KUSTOMIZATIONS: [
        ("NAME", 20),
        ("NAMESPACE", 15),
        ("READY", 5),
        ("STATUS", 30),
        ("REVISION", 15),
        ("SUS", 3),
    ],
    Tab.HELM_RELEASES: [
        ("NAME", 20),
        ("NAMESPACE", 15),
        ("READY", 5),
        ("STATUS", 25),
        ("CHART", 15),
        ("VERSION", 10),
        ("SUS", 3),
    ],
    Tab.HELM_CHARTS: [
        ("NAME", 20),
        ("NAMESPACE", 15),
        ("READY", 5),
        ("STATUS", 25),
        ("CHART", 15),
        ("VERSION", 10),
        ("SOURCE", 20),
    ],
}

KEY_HINTS: dict[type, list[tuple[str, str]]] = {
    NoPopup: [
        ("↑↓", "Navigate"),
        ("←→", "Tabs"),
        ("Enter", "Details"),
        ("r", "Reconcile"),
        ("R", "+Source"),
        ("s", "Suspend"),
        ("n", "Namespace"),
        ("F5", "Refresh"),
        ("q", "Quit"),
    ],
    NamespaceFilterPopup: [("↑↓", "Select"), ("Enter", "Apply"), ("Esc", "Cancel")],
    ResourceDetailsPopup: [("Esc", "Close"), ("q", "Quit")],
    ReconcilingPopup: [("q", "Quit")],
    ErrorPopup: [("Enter/Esc", "Dismiss"), ("q", "Quit")],
}


def resource_row(resource: FluxResource) -> list[str]:
    """Table cells (Rich markup) for a resource."""
    ready = Styles.status(resource.status)
    suspended = SUSPENDED_MARK if resource.is_suspended else "-"
    if isinstance(resource, Kustomization):
        return [
            escape(resource.name),
            escape(resource.namespace),
            ready,
            escape(truncate(resource.status_message, 30)),
            escape(truncate(resource.revision or "-", 15)),
            suspended,
        ]
    if isinstance(resource, HelmRelease):
        return [
            escape(resource.name),
            escape(resource.namespace),
            ready,
            escape(truncate(resource.status_message, 25)),
            escape(resource.chart),
            escape(resource.chart_version or "-"),
            suspended,
        ]
    return [
        escape(resource.name),
        escape(resource.namespace),
        ready,
        escape(truncate(resource.status_message, 25)),
        escape(resource.chart),
        escape(resource.chart_version or "-"),
        escape(truncate(resource.source_ref, 20)),
    ]


def resource_details(resource: FluxResource) -> str:
    """Details popup body (Rich markup) for a resource."""
    lines = [
        f"Name:      {escape(resource.name)}",
        f"Kind:      {resource.kind.value}",
        f"Namespace: {escape(resource.namespace or '-')}",
        f"Ready:     {'Yes' if resource.is_ready else 'No'}",
        f"Status:    {Styles.status(resource.status, resource.status.value)}",
        f"Message:   {escape(resource.status_message)}",
        f"Revision:  {escape(resource.revision or '-')}",
        f"Suspended: {'Yes' if resource.is_suspended else 'No'}",
    ]
    if isinstance(resource, Kustomization):
        lines.append(f"Source:    {escape(resource.source_ref)}")
        lines.append(f"Path:      {escape(resource.path)}")
    elif isinstance(resource, HelmRelease):
        lines.append(escape(f"Chart:     {resource.chart} {resource.chart_version or ''}".rstrip()))
    elif isinstance(resource, HelmChart):
        lines.append(escape(f"Chart:     {resource.chart} {resource.chart_version or ''}".rstrip()))
        lines.append(f"Source:    {escape(resource.source_ref)}")
    lines.append(f"Age:       {resource.age}")

    if resource.conditions:
        lines.append("")
        lines.append(Styles.bold("Conditions"))
        for condition in resource.conditions:
            reason = f" ({condition.reason})" if condition.reason else ""
            lines.append(escape(f"  {condition.type}={condition.status}{reason}"))
    return "\n".join(lines)


class StateWidget(BaseWidget):
    """Widget that renders from the shared dashboard state."""

    def __init__(self, state: AppState, **kwargs: Any) -> None:
        """Initialize the widget.

        Args:
            state: Dashboard state to render.
            **kwargs: Additional widget arguments.
        """
        super().__init__(**kwargs)
        self.state = state


class HeaderBar(StateWidget):
    """Application name, cluster and namespace filter."""

    DEFAULT_CSS = f"""
    HeaderBar {{
        height: 1;
        background: {Colors.HEADER_BG};
        text-style: bold;
    }}
    """

    def render(self) -> RenderableType:
        text = Text.from_markup(
            f" flux-tui  [dim]cluster:[/dim] {escape(self.state.cluster_name)}"
            f" │ [dim]ns:[/dim] {escape(self.state.namespace_filter or 'all')}"
        )
        if self.state.loading:
            text.append("  ⟳ loading", style=Colors.RECONCILING)
        return text


class TabBar(StateWidget):
    """Resource tabs with item counts."""

    DEFAULT_CSS = """
    TabBar {
        height: 1;
    }
    """

    def render(self) -> RenderableType:
        text = Text()
        for tab in Tab:
            count = len(self.state.resources_for(tab))
            label = f" {tab.title} ({count}) "
            if tab is self.state.tab:
                text.append(label, style=f"bold on {Colors.TAB_ACTIVE_BG}")
            else:
                text.append(label, style="dim")
            text.append(" ")
        return text


class ResourceTable(StateWidget):
    """Table of resources on the active tab with the cursor row highlighted."""

    DEFAULT_CSS = """
    ResourceTable {
        height: 1fr;
    }
    """

    def _visible_range(self, count: int, selected: int) -> range:
        # Header, borders and header separator take four lines
        visible = max(self.size.height - 4, 1)
        start = max(0, selected - visible + 1)
        return range(start, min(count, start + visible))

    def render(self) -> RenderableType:
        state = self.state
        table = Table(
            expand=True,
            border_style=Colors.KEY,
            header_style="bold",
            show_lines=False,
        )
        for label, width in COLUMN_DEFS[state.tab]:
            table.add_column(label, min_width=width, no_wrap=True)

        resources = state.current_resources()
        selected = state.current_selected()
        if not resources:
            table.add_row(Styles.muted(f"No {state.tab.title} found"))
            return table

        for index in self._visible_range(len(resources), selected):
            style = f"bold on {Colors.SELECTION_BG}" if index == selected else None
            table.add_row(*resource_row(resources[index]), style=style)
        return table


class StatusBar(StateWidget):
    """Key hints for the open popup and the last refresh error."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
    }
    """

    def render(self) -> RenderableType:
        hints = KEY_HINTS.get(type(self.state.popup), [])
        markup = Styles.muted(" │ ").join(f"{Styles.key(key)} {desc}" for key, desc in hints)
        if self.state.last_error:
            markup += "  │  " + Styles.error(
                escape(f"Error: {truncate(self.state.last_error, ERROR_DISPLAY_LENGTH)}")
            )
        return Text.from_markup(markup)


class PopupPanel(StateWidget):
    """Overlay for the open popup."""

    DEFAULT_CSS = f"""
    PopupPanel {{
        width: 70%;
        height: auto;
        max-height: 80%;
        background: {Colors.SURFACE};
    }}
    """

    def render(self) -> RenderableType:
        popup = self.state.popup
        if isinstance(popup, NamespaceFilterPopup):
            rows = [
                Text(f" ▶ {name} ", style=f"bold on {Colors.SELECTION_BG}")
                if index == popup.selected
                else Text(f"   {name} ")
                for index, name in enumerate(popup.namespaces)
            ]
            return Panel(Group(*rows), title=" Select Namespace ", border_style=Colors.KEY)
        if isinstance(popup, ResourceDetailsPopup):
            return Panel(
                Text.from_markup(resource_details(popup.resource)),
                title=f" {popup.resource.kind.value} Details ",
                border_style=Colors.KEY,
            )
        if isinstance(popup, ReconcilingPopup):
            return Panel(
                Text(f"Reconciling {popup.namespace}/{popup.name} ..."),
                title=" Reconciling ",
                border_style=Colors.RECONCILING,
            )
        if isinstance(popup, ErrorPopup):
            return Panel(
                Text(popup.message, style=Colors.FAILED),
                title=" Error ",
                border_style=Colors.FAILED,
            )
        return Text("")
