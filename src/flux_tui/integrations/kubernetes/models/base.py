"""Base models for Flux resource display."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(StrEnum):
    """Flux resource kinds shown by the dashboard."""

    KUSTOMIZATION = "Kustomization"
    HELM_RELEASE = "HelmRelease"
    HELM_CHART = "HelmChart"

    @property
    def cli_noun(self) -> str:
        """Noun used on the ``flux`` command line for this kind."""
        return _CLI_NOUNS[self]

    @property
    def supports_suspend(self) -> bool:
        """Whether the kind can be suspended and resumed from the dashboard."""
        return self is not ResourceKind.HELM_CHART

    @property
    def supports_with_source(self) -> bool:
        """Whether ``flux reconcile --with-source`` applies to the kind."""
        return self is not ResourceKind.HELM_CHART


_CLI_NOUNS: dict[ResourceKind, str] = {
    ResourceKind.KUSTOMIZATION: "kustomization",
    ResourceKind.HELM_RELEASE: "helmrelease",
    ResourceKind.HELM_CHART: "source chart",
}


class K8sEntityBase(BaseModel):
    """Base class for all Flux display models.

    Models are frozen so a copy handed to a popup can never drift from
    what was fetched.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(description="Resource name")
    namespace: str = Field(default="", description="Resource namespace")
    uid: str | None = Field(default=None, description="Kubernetes UID")
    creation_timestamp: str | None = Field(default=None, description="Creation time")

    @property
    def age(self) -> str:
        """Human-readable age string."""
        if not self.creation_timestamp:
            return "Unknown"
        try:
            created = datetime.fromisoformat(self.creation_timestamp.replace("Z", "+00:00"))
            delta = datetime.now(UTC) - created
            days = delta.days
            hours, remainder = divmod(delta.seconds, 3600)
            minutes = remainder // 60
            if days > 0:
                return f"{days}d"
            if hours > 0:
                return f"{hours}h"
            return f"{minutes}m"
        except (ValueError, TypeError):
            return "Unknown"
