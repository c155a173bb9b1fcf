"""Kubernetes service managers."""

from flux_tui.services.kubernetes.flux_manager import FluxManager

__all__ = ["FluxManager"]
