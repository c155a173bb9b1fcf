"""Capabilities the state engine consumes.

The reducer never talks to the cluster or the ``flux`` binary directly;
it is handed implementations of these interfaces at construction time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flux_tui.integrations.kubernetes.models import (
        HelmChart,
        HelmRelease,
        Kustomization,
        ResourceKind,
    )


class ResourceFetcher(ABC):
    """Lists Flux resources and namespaces from a cluster.

    A ``None`` namespace means every namespace.
    """

    @abstractmethod
    async def list_kustomizations(self, namespace: str | None = None) -> list[Kustomization]:
        """List Kustomizations."""

    @abstractmethod
    async def list_helm_releases(self, namespace: str | None = None) -> list[HelmRelease]:
        """List HelmReleases."""

    @abstractmethod
    async def list_helm_charts(self, namespace: str | None = None) -> list[HelmChart]:
        """List HelmCharts."""

    @abstractmethod
    async def list_namespaces(self) -> list[str]:
        """List namespace names."""


class CommandRunner(ABC):
    """Triggers reconciliation actions on Flux resources."""

    @abstractmethod
    async def reconcile(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        with_source: bool = False,
    ) -> None:
        """Request an immediate reconciliation.

        Raises:
            KubernetesError: If the request fails.
        """

    @abstractmethod
    async def toggle_suspend(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        currently_suspended: bool,
    ) -> None:
        """Resume a suspended resource or suspend a running one.

        Raises:
            KubernetesError: If the request fails.
        """
