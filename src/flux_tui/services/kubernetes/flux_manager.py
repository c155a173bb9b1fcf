"""Flux CD resource manager.

Lists Flux Kustomizations, HelmReleases and HelmCharts through the
Kubernetes ``CustomObjectsApi``, and namespaces through ``CoreV1Api``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from flux_tui.core.interfaces import ResourceFetcher
from flux_tui.integrations.kubernetes.models import HelmChart, HelmRelease, Kustomization
from flux_tui.services.kubernetes.base import K8sBaseManager

# =============================================================================
# CRD Coordinates
# =============================================================================

# Source CRDs
SOURCE_GROUP = "source.toolkit.fluxcd.io"
SOURCE_VERSION = "v1"
HELM_CHART_PLURAL = "helmcharts"

# Kustomization CRD
KUSTOMIZE_GROUP = "kustomize.toolkit.fluxcd.io"
KUSTOMIZE_VERSION = "v1"
KUSTOMIZATION_PLURAL = "kustomizations"

# HelmRelease CRD
HELM_GROUP = "helm.toolkit.fluxcd.io"
HELM_VERSION = "v2"
HELM_RELEASE_PLURAL = "helmreleases"


T = TypeVar("T")


class FluxManager(K8sBaseManager, ResourceFetcher):
    """Read-only manager for the Flux resources shown by the dashboard.

    The ``list_*_sync`` methods call the blocking kubernetes client; the
    async ``list_*`` methods run them in a worker thread.
    """

    _entity_name = "flux"

    def _list_custom_objects(
        self,
        group: str,
        version: str,
        plural: str,
        namespace: str | None,
        factory: Callable[[dict[str, Any]], T],
        resource_type: str,
    ) -> list[T]:
        """List a Flux CRD in one namespace or across the cluster.

        Items without ``metadata.name`` are skipped.
        """
        scope = namespace or "all"
        self._log.debug(f"listing_{plural}", namespace=scope)
        try:
            if namespace:
                result = self._client.custom_objects.list_namespaced_custom_object(
                    group,
                    version,
                    namespace,
                    plural,
                )
            else:
                result = self._client.custom_objects.list_cluster_custom_object(
                    group,
                    version,
                    plural,
                )
        except Exception as e:
            self._handle_api_error(e, resource_type, None, namespace)

        items: list[dict[str, Any]] = result.get("items", [])
        resources = [
            factory(item)
            for item in items
            if (item.get("metadata") or {}).get("name")
        ]
        self._log.debug(f"listed_{plural}", count=len(resources), namespace=scope)
        return resources

    # =========================================================================
    # Kustomization Operations
    # =========================================================================

    def list_kustomizations_sync(self, namespace: str | None = None) -> list[Kustomization]:
        """List Flux Kustomizations.

        Args:
            namespace: Target namespace, or None for all namespaces.

        Returns:
            List of Kustomizations.
        """
        return self._list_custom_objects(
            KUSTOMIZE_GROUP,
            KUSTOMIZE_VERSION,
            KUSTOMIZATION_PLURAL,
            namespace,
            Kustomization.from_k8s_object,
            "Kustomization",
        )

    async def list_kustomizations(self, namespace: str | None = None) -> list[Kustomization]:
        return await asyncio.to_thread(self.list_kustomizations_sync, namespace)

    # =========================================================================
    # HelmRelease Operations
    # =========================================================================

    def list_helm_releases_sync(self, namespace: str | None = None) -> list[HelmRelease]:
        """List Flux HelmReleases.

        Args:
            namespace: Target namespace, or None for all namespaces.

        Returns:
            List of HelmReleases.
        """
        return self._list_custom_objects(
            HELM_GROUP,
            HELM_VERSION,
            HELM_RELEASE_PLURAL,
            namespace,
            HelmRelease.from_k8s_object,
            "HelmRelease",
        )

    async def list_helm_releases(self, namespace: str | None = None) -> list[HelmRelease]:
        return await asyncio.to_thread(self.list_helm_releases_sync, namespace)

    # =========================================================================
    # HelmChart Operations
    # =========================================================================

    def list_helm_charts_sync(self, namespace: str | None = None) -> list[HelmChart]:
        """List Flux HelmCharts.

        Args:
            namespace: Target namespace, or None for all namespaces.

        Returns:
            List of HelmCharts.
        """
        return self._list_custom_objects(
            SOURCE_GROUP,
            SOURCE_VERSION,
            HELM_CHART_PLURAL,
            namespace,
            HelmChart.from_k8s_object,
            "HelmChart",
        )

    async def list_helm_charts(self, namespace: str | None = None) -> list[HelmChart]:
        return await asyncio.to_thread(self.list_helm_charts_sync, namespace)

    # =========================================================================
    # Namespace Operations
    # =========================================================================

    def list_namespaces_sync(self) -> list[str]:
        """List namespace names in the cluster.

        Returns:
            Namespace names in the order the API returns them.
        """
        self._log.debug("listing_namespaces")
        try:
            result = self._client.core_v1.list_namespace()
        except Exception as e:
            self._handle_api_error(e, "Namespace")

        names = [
            item.metadata.name for item in result.items if item.metadata and item.metadata.name
        ]
        self._log.debug("listed_namespaces", count=len(names))
        return names

    async def list_namespaces(self) -> list[str]:
        return await asyncio.to_thread(self.list_namespaces_sync)
