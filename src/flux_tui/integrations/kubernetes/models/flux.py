"""Flux CD resource display models.

Flux CRDs are accessed via ``CustomObjectsApi`` which returns raw
``dict`` objects rather than typed SDK classes.  The ``from_k8s_object``
classmethods therefore use ``dict.get()`` instead of ``getattr()``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field

from flux_tui.integrations.kubernetes.models.base import K8sEntityBase, ResourceKind
from flux_tui.integrations.kubernetes.models.status import (
    FluxCondition,
    ResourceStatus,
    classify_status,
    format_revision,
    parse_conditions,
)


def _format_source_ref(spec: dict[str, Any], default_kind: str) -> str:
    """Render ``spec.sourceRef`` as ``Kind/name``."""
    source_ref: dict[str, Any] | None = spec.get("sourceRef")
    if not source_ref:
        return "unknown"
    kind = source_ref.get("kind") or default_kind
    name = source_ref.get("name") or "unknown"
    return f"{kind}/{name}"


def _metadata_fields(metadata: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": metadata.get("name", ""),
        "namespace": metadata.get("namespace") or "",
        "uid": metadata.get("uid"),
        "creation_timestamp": metadata.get("creationTimestamp"),
    }


class FluxResourceBase(K8sEntityBase):
    """Fields and read-only capabilities shared by every Flux resource."""

    # Messages and revisions are kept exactly as the controllers report them
    model_config = ConfigDict(str_strip_whitespace=False)

    status: ResourceStatus = Field(default=ResourceStatus.UNKNOWN, description="Derived status")
    status_message: str = Field(default="Status unknown", description="Message behind the status")
    revision: str | None = Field(default=None, description="Last applied or fetched revision")
    conditions: tuple[FluxCondition, ...] = Field(default=(), description="Status conditions")

    @property
    def is_ready(self) -> bool:
        """Whether the derived status is Ready."""
        return self.status is ResourceStatus.READY

    @property
    def is_suspended(self) -> bool:
        """Whether reconciliation is suspended."""
        return False


# =============================================================================
# Kustomization
# =============================================================================


class Kustomization(FluxResourceBase):
    """Flux Kustomization display model."""

    kind: Literal[ResourceKind.KUSTOMIZATION] = ResourceKind.KUSTOMIZATION
    source_ref: str = Field(default="unknown", description="Source reference (Kind/name)")
    path: str = Field(default="./", description="Path within the source")
    suspended: bool = Field(default=False, description="Whether reconciliation is suspended")

    @property
    def is_suspended(self) -> bool:
        """Whether reconciliation is suspended."""
        return self.suspended

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> Kustomization:
        """Create from a Flux Kustomization CRD dict."""
        metadata: dict[str, Any] = obj.get("metadata") or {}
        spec: dict[str, Any] = obj.get("spec") or {}
        status: dict[str, Any] = obj.get("status") or {}

        suspended = bool(spec.get("suspend", False))
        conditions = parse_conditions(status)
        resource_status, message = classify_status(
            conditions, suspended, ResourceKind.KUSTOMIZATION
        )
        revision: str | None = status.get("lastAppliedRevision")

        return cls(
            **_metadata_fields(metadata),
            status=resource_status,
            status_message=message,
            revision=format_revision(revision) if revision else None,
            conditions=tuple(conditions),
            source_ref=_format_source_ref(spec, "GitRepository"),
            path=spec.get("path") or "./",
            suspended=suspended,
        )


# =============================================================================
# HelmRelease
# =============================================================================


class HelmRelease(FluxResourceBase):
    """Flux HelmRelease display model."""

    kind: Literal[ResourceKind.HELM_RELEASE] = ResourceKind.HELM_RELEASE
    chart: str = Field(default="unknown", description="Chart name")
    chart_version: str | None = Field(default=None, description="Chart version constraint")
    suspended: bool = Field(default=False, description="Whether reconciliation is suspended")

    @property
    def is_suspended(self) -> bool:
        """Whether reconciliation is suspended."""
        return self.suspended

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> HelmRelease:
        """Create from a Flux HelmRelease CRD dict."""
        metadata: dict[str, Any] = obj.get("metadata") or {}
        spec: dict[str, Any] = obj.get("spec") or {}
        status: dict[str, Any] = obj.get("status") or {}

        chart_spec: dict[str, Any] = (spec.get("chart") or {}).get("spec") or {}
        suspended = bool(spec.get("suspend", False))
        conditions = parse_conditions(status)
        resource_status, message = classify_status(
            conditions, suspended, ResourceKind.HELM_RELEASE
        )

        # helm-controller v2 records releases in status.history, newest first
        revision: str | None = status.get("lastAppliedRevision")
        if not revision:
            history: list[dict[str, Any]] = status.get("history") or []
            if history:
                revision = history[0].get("chartVersion")

        return cls(
            **_metadata_fields(metadata),
            status=resource_status,
            status_message=message,
            revision=revision,
            conditions=tuple(conditions),
            chart=chart_spec.get("chart") or "unknown",
            chart_version=chart_spec.get("version"),
            suspended=suspended,
        )


# =============================================================================
# HelmChart
# =============================================================================


class HelmChart(FluxResourceBase):
    """Flux HelmChart (source-controller) display model.

    HelmCharts are generated from HelmReleases and cannot be suspended
    from the dashboard, so ``is_suspended`` is always False.
    """

    kind: Literal[ResourceKind.HELM_CHART] = ResourceKind.HELM_CHART
    chart: str = Field(default="unknown", description="Chart name")
    chart_version: str | None = Field(default=None, description="Chart version constraint")
    source_ref: str = Field(default="unknown", description="Source reference (Kind/name)")

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> HelmChart:
        """Create from a Flux HelmChart CRD dict."""
        metadata: dict[str, Any] = obj.get("metadata") or {}
        spec: dict[str, Any] = obj.get("spec") or {}
        status: dict[str, Any] = obj.get("status") or {}

        conditions = parse_conditions(status)
        resource_status, message = classify_status(conditions, False, ResourceKind.HELM_CHART)
        artifact: dict[str, Any] = status.get("artifact") or {}

        return cls(
            **_metadata_fields(metadata),
            status=resource_status,
            status_message=message,
            revision=artifact.get("revision"),
            conditions=tuple(conditions),
            chart=spec.get("chart") or "unknown",
            chart_version=spec.get("version"),
            source_ref=_format_source_ref(spec, "HelmRepository"),
        )


FluxResource = Annotated[
    Kustomization | HelmRelease | HelmChart,
    Field(discriminator="kind"),
]
