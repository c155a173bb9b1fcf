"""Dashboard state engine: actions, state, refresh, commands and reducer."""

from flux_tui.core.interfaces import CommandRunner, ResourceFetcher
from flux_tui.core.reducer import AppController
from flux_tui.core.state import AppState, Tab

__all__ = [
    "AppController",
    "AppState",
    "CommandRunner",
    "ResourceFetcher",
    "Tab",
]
