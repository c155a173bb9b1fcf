"""Flux dashboard TUI application.

Usage:
    from flux_tui.tui.apps.flux import FluxApp

    app = FluxApp(controller, refresh_interval=5)
    app.run()
"""

from flux_tui.tui.apps.flux.app import FluxApp

__all__ = ["FluxApp"]
