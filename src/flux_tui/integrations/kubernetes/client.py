"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client with kubeconfig context
selection, lazy API group initialization, cluster name discovery and
consistent error translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import structlog

from flux_tui.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesTimeoutError,
)

if TYPE_CHECKING:
    from kubernetes.client import CoreV1Api, CustomObjectsApi, VersionApi

    from flux_tui.config import FluxTUIConfig

logger = structlog.get_logger()


def cluster_name_from_host(host: str | None) -> str:
    """Derive a short display name from an API server URL.

    The first DNS label of the host is used with ``api-`` and ``-server``
    removed, so ``https://api-prod.example.com:6443`` becomes ``prod``.

    Args:
        host: API server URL as stored in the client configuration.

    Returns:
        The short cluster name, or "unknown" when no host is configured.
    """
    if not host:
        return "unknown"
    hostname = urlparse(host).hostname or host
    label = hostname.split(".")[0]
    return label.replace("api-", "").replace("-server", "")


class KubernetesClient:
    """Kubernetes API client for a single kubeconfig context.

    Example:
        ```python
        from flux_tui.config import load_config
        from flux_tui.integrations.kubernetes import KubernetesClient

        with KubernetesClient(load_config()) as client:
            print(client.cluster_name)
        ```
    """

    def __init__(self, config: FluxTUIConfig) -> None:
        """Initialize Kubernetes client from application config.

        Args:
            config: Application configuration supplying kubeconfig and context.

        Raises:
            KubernetesConnectionError: If no usable configuration can be loaded.
        """
        self._config = config
        self._current_context: str | None = None
        self._cluster_name = "unknown"

        # Lazy-loaded API group instances
        self._core_v1: CoreV1Api | None = None
        self._custom_objects: CustomObjectsApi | None = None
        self._version_api: VersionApi | None = None

        self._load_config()

        logger.info(
            "Kubernetes client initialized",
            context=self._current_context,
            cluster=self._cluster_name,
        )

    def _load_config(self) -> None:
        """Load Kubernetes configuration from kubeconfig or in-cluster."""
        from kubernetes import config
        from kubernetes.client import Configuration
        from kubernetes.config import ConfigException

        try:
            config.load_kube_config(
                config_file=self._config.kubeconfig,
                context=self._config.context,
            )
            self._current_context = self._config.context or self._active_context_name()
            logger.debug(
                "loaded_kubeconfig",
                context=self._current_context,
                kubeconfig=self._config.kubeconfig,
            )
        except ConfigException:
            try:
                config.load_incluster_config()
                self._current_context = "in-cluster"
                logger.debug("loaded_incluster_config")
            except ConfigException as e:
                raise KubernetesConnectionError(
                    message="Cannot load Kubernetes configuration. "
                    "Ensure kubeconfig exists or running inside a cluster.",
                    original_error=e,
                ) from e

        self._cluster_name = cluster_name_from_host(Configuration.get_default_copy().host)
        self._invalidate_api_cache()

    def _active_context_name(self) -> str | None:
        """Read the active context name from the kubeconfig."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        try:
            _, active = config.list_kube_config_contexts(config_file=self._config.kubeconfig)
        except ConfigException:
            return None
        return active.get("name") if active else None

    def _invalidate_api_cache(self) -> None:
        """Clear cached API group instances."""
        self._core_v1 = None
        self._custom_objects = None
        self._version_api = None

    # =========================================================================
    # Lazy API Group Accessors
    # =========================================================================

    @property
    def core_v1(self) -> CoreV1Api:
        """Get CoreV1Api instance (namespaces)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api()
        return self._core_v1

    @property
    def custom_objects(self) -> CustomObjectsApi:
        """Get CustomObjectsApi instance (Flux CRDs)."""
        if self._custom_objects is None:
            from kubernetes.client import CustomObjectsApi

            self._custom_objects = CustomObjectsApi()
        return self._custom_objects

    @property
    def version_api(self) -> VersionApi:
        """Get VersionApi instance for cluster version info."""
        if self._version_api is None:
            from kubernetes.client import VersionApi

            self._version_api = VersionApi()
        return self._version_api

    # =========================================================================
    # Context Information
    # =========================================================================

    def get_current_context(self) -> str:
        """Get the current active context name.

        Returns:
            The current context name, 'in-cluster' inside a pod, or 'unknown'.
        """
        return self._current_context or "unknown"

    @property
    def cluster_name(self) -> str:
        """Short cluster name derived from the API server host."""
        return self._cluster_name

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a kubernetes ApiException to a custom exception.

        Args:
            e: The original exception.
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException
        from urllib3.exceptions import HTTPError, ReadTimeoutError

        if isinstance(e, KubernetesError):
            return e

        if isinstance(e, ReadTimeoutError):
            return KubernetesTimeoutError(message=f"Timed out listing {resource_type or 'resources'}")

        if isinstance(e, HTTPError):
            return KubernetesConnectionError(message=str(e), original_error=e)

        if not isinstance(e, ApiException):
            return KubernetesError(
                message=str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status

        if status in (401, 403):
            return KubernetesAuthError(
                message=e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        return KubernetesError(
            message=e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    # =========================================================================
    # Connection Check
    # =========================================================================

    def check_connection(self) -> bool:
        """Check if connection to the Kubernetes API server is working.

        Returns:
            True if connection is successful, False otherwise.
        """
        try:
            self.version_api.get_code()
            return True
        except Exception:
            return False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the client and release resources."""
        self._invalidate_api_cache()
        logger.debug("Kubernetes client closed")

    def __enter__(self) -> KubernetesClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
