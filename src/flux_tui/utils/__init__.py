"""Utility functions for flux_tui."""

from flux_tui.utils.text import truncate

__all__ = ["truncate"]
