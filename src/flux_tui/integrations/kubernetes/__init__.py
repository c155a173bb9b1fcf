"""Kubernetes integration - API client, flux CLI runner and resource models."""

from flux_tui.integrations.kubernetes.client import KubernetesClient
from flux_tui.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
)
from flux_tui.integrations.kubernetes.flux_cli import (
    FluxBinaryNotFoundError,
    FluxCLI,
    FluxCommandError,
    FluxError,
)

__all__ = [
    "FluxBinaryNotFoundError",
    "FluxCLI",
    "FluxCommandError",
    "FluxError",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConnectionError",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesTimeoutError",
]
