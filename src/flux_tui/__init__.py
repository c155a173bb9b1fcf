"""flux-tui - a terminal dashboard for Flux CD reconciliation resources."""

from flux_tui.__version__ import __version__

__all__ = ["__version__"]
