"""Flux resource display models."""

from flux_tui.integrations.kubernetes.models.base import K8sEntityBase, ResourceKind
from flux_tui.integrations.kubernetes.models.flux import (
    FluxResource,
    FluxResourceBase,
    HelmChart,
    HelmRelease,
    Kustomization,
)
from flux_tui.integrations.kubernetes.models.status import (
    FluxCondition,
    ResourceStatus,
    classify_status,
    format_revision,
)

__all__ = [
    "FluxCondition",
    "FluxResource",
    "FluxResourceBase",
    "HelmChart",
    "HelmRelease",
    "K8sEntityBase",
    "Kustomization",
    "ResourceKind",
    "ResourceStatus",
    "classify_status",
    "format_revision",
]
