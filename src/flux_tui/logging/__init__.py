"""Logging configuration for flux_tui."""

from flux_tui.logging.config import configure_logging

__all__ = ["configure_logging"]
