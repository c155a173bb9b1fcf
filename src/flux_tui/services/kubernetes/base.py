"""Shared plumbing for managers that read from the cluster."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import structlog

if TYPE_CHECKING:
    from flux_tui.integrations.kubernetes.client import KubernetesClient

logger = structlog.get_logger()


class K8sBaseManager:
    """Base class for managers built on :class:`KubernetesClient`.

    Subclasses name themselves with ``_entity_name``; it is bound to every
    log line as ``entity``.
    """

    _entity_name: str = ""

    def __init__(self, client: KubernetesClient) -> None:
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    def _handle_api_error(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        """Log a failed API call and raise it as a ``KubernetesError``.

        Args:
            e: Exception raised by the kubernetes client.
            resource_type: Kind that was being listed or read.
            resource_name: Resource name, for single-object calls.
            namespace: Namespace of the call, None when cluster-wide.

        Raises:
            KubernetesError: The translated error, chained to ``e``.
        """
        error = self._client.translate_api_exception(
            e,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
        self._log.warning(
            "api_call_failed",
            resource_type=resource_type,
            namespace=namespace or "all",
            error=str(error),
        )
        raise error from e
