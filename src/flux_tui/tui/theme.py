"""Theme constants and style utilities for TUI components.

Usage:
    from flux_tui.tui.theme import Colors, Styles

    styled_text = Styles.status(ResourceStatus.READY, "Ready")
"""

from __future__ import annotations

from flux_tui.integrations.kubernetes.models import ResourceStatus


class Colors:
    """Color constants for TUI theming.

    Semantic names map to Textual CSS variables; the status colors are hex
    values so they also work in Rich markup.
    """

    # Semantic colors (Textual CSS variables)
    PRIMARY = "$primary"
    ERROR = "$error"
    TEXT_MUTED = "$text-muted"
    SURFACE = "$surface"

    # Status colors
    READY = "#22c55e"  # green-500
    FAILED = "#ef4444"  # red-500
    RECONCILING = "#f59e0b"  # amber-500
    SUSPENDED = "#6b7280"  # gray-500
    UNKNOWN = "#94a3b8"  # slate-400

    # Chrome
    HEADER_BG = "#0f172a"  # slate-900
    TAB_ACTIVE_BG = "#1e3a8a"  # blue-900
    SELECTION_BG = "#1e293b"  # slate-800
    KEY = "#3b82f6"  # blue-500


STATUS_COLORS: dict[ResourceStatus, str] = {
    ResourceStatus.READY: Colors.READY,
    ResourceStatus.FAILED: Colors.FAILED,
    ResourceStatus.RECONCILING: Colors.RECONCILING,
    ResourceStatus.SUSPENDED: Colors.SUSPENDED,
    ResourceStatus.UNKNOWN: Colors.UNKNOWN,
}

STATUS_ICONS: dict[ResourceStatus, str] = {
    ResourceStatus.READY: "✓",
    ResourceStatus.FAILED: "✗",
    ResourceStatus.RECONCILING: "●",
    ResourceStatus.SUSPENDED: "⏸",
    ResourceStatus.UNKNOWN: "?",
}


class Styles:
    """Style helper functions for Rich markup."""

    @staticmethod
    def error(text: str) -> str:
        """Style text as error (red)."""
        return f"[{Colors.FAILED}]{text}[/]"

    @staticmethod
    def muted(text: str) -> str:
        """Style text as muted (dim)."""
        return f"[dim]{text}[/dim]"

    @staticmethod
    def bold(text: str) -> str:
        """Style text as bold."""
        return f"[bold]{text}[/bold]"

    @staticmethod
    def key(text: str) -> str:
        """Style a key hint."""
        return f"[bold {Colors.KEY}]{text}[/]"

    @staticmethod
    def status(status: ResourceStatus, text: str | None = None) -> str:
        """Style text in the color of a resource status.

        Args:
            status: Status selecting the color.
            text: Text to style, defaulting to the status icon.
        """
        return f"[{STATUS_COLORS[status]}]{text or STATUS_ICONS[status]}[/]"
