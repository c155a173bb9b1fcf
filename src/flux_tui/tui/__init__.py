"""Terminal User Interface for flux-tui.

Usage:
    from flux_tui.tui import BaseScreen, BaseWidget, Colors, Styles
    from flux_tui.tui.apps.flux import FluxApp
"""

from flux_tui.tui.base import BaseScreen, BaseWidget
from flux_tui.tui.theme import Colors, Styles

__all__ = [
    "BaseScreen",
    "BaseWidget",
    "Colors",
    "Styles",
]
