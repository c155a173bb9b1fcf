"""Errors raised while talking to the cluster.

Everything the dashboard shows in its status bar or error popup is a
:class:`KubernetesError`, so ``str(error)`` is written for the operator.
"""

from __future__ import annotations

# Flux controller that serves each CRD kind, used to explain a 404 on list
FLUX_CONTROLLERS = {
    "Kustomization": "kustomize-controller",
    "HelmRelease": "helm-controller",
    "HelmChart": "source-controller",
}


class KubernetesError(Exception):
    """Base exception for cluster operations.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status from the API server, if any.
        resource_type: Kind involved, e.g. "Kustomization".
        resource_name: Name of the resource involved.
        namespace: Namespace of the resource.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.resource_type = resource_type
        self.resource_name = resource_name
        self.namespace = namespace

    @property
    def location(self) -> str | None:
        """``Kind/name in namespace`` when the error concerns one resource."""
        if not (self.resource_type and self.resource_name):
            return None
        location = f"{self.resource_type}/{self.resource_name}"
        if self.namespace:
            location = f"{location} in {self.namespace}"
        return location

    def __str__(self) -> str:
        text = self.message
        if self.status_code:
            text = f"{text} (status: {self.status_code})"
        if self.location:
            text = f"{text} [{self.location}]"
        return text


class KubernetesConnectionError(KubernetesError):
    """No kubeconfig could be loaded or the API server is unreachable."""

    def __init__(
        self,
        message: str = "Failed to connect to Kubernetes cluster",
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message=message)
        self.original_error = original_error


class KubernetesAuthError(KubernetesError):
    """The API server rejected the credentials (401) or the request (403)."""

    def __init__(
        self,
        message: str = "Kubernetes authentication/authorization failed",
        status_code: int | None = 401,
        reason: str | None = None,
    ) -> None:
        super().__init__(message=message, status_code=status_code)
        self.reason = reason


class KubernetesNotFoundError(KubernetesError):
    """A resource or a whole CRD is missing (404).

    Listing a Flux kind that returns 404 means the controller owning the
    CRD is not installed, and the message names that controller.
    """

    def __init__(
        self,
        message: str = "Kubernetes resource not found",
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> None:
        if resource_type and resource_name:
            message = f"{resource_type} '{resource_name}' not found"
            if namespace:
                message += f" in namespace '{namespace}'"
        elif resource_type:
            controller = FLUX_CONTROLLERS.get(resource_type)
            hint = f"is {controller} installed?" if controller else "is the CRD installed?"
            message = f"{resource_type} resources not found ({hint})"
        super().__init__(
            message=message,
            status_code=404,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )


class KubernetesTimeoutError(KubernetesError):
    """An API call did not answer in time."""

    def __init__(
        self,
        message: str = "Kubernetes operation timed out",
        timeout_seconds: int | None = None,
    ) -> None:
        if timeout_seconds:
            message = f"{message} (after {timeout_seconds}s)"
        super().__init__(message=message)
        self.timeout_seconds = timeout_seconds
