"""Flux status conditions and resource status classification.

Flux controllers publish their state as a list of conditions under
``.status.conditions``. The dashboard reduces that list, together with the
``spec.suspend`` flag, to a single :class:`ResourceStatus` and a message.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from flux_tui.integrations.kubernetes.models.base import ResourceKind

SUSPENDED_MESSAGE = "Suspended"
UNKNOWN_STATUS_MESSAGE = "Status unknown"
MISSING_MESSAGE = "Unknown"

# Ready=False reasons that mean "still working" rather than "broken"
TRANSIENT_REASONS: dict[ResourceKind, frozenset[str]] = {
    ResourceKind.KUSTOMIZATION: frozenset({"Progressing"}),
    ResourceKind.HELM_RELEASE: frozenset({"Progressing", "ArtifactFailed"}),
    ResourceKind.HELM_CHART: frozenset(),
}


class ResourceStatus(StrEnum):
    """Derived status of a Flux resource."""

    READY = "Ready"
    FAILED = "Failed"
    RECONCILING = "Reconciling"
    SUSPENDED = "Suspended"
    UNKNOWN = "Unknown"


class FluxCondition(BaseModel):
    """Flux status condition from ``.status.conditions[]``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: str = Field(default="", description="Condition type (Ready, Reconciling, Stalled, etc.)")
    status: str = Field(default="Unknown", description="Condition status (True, False, Unknown)")
    reason: str | None = Field(default=None, description="Machine-readable reason")
    message: str | None = Field(default=None, description="Human-readable message")
    last_transition_time: str | None = Field(default=None, description="Last transition timestamp")

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> FluxCondition:
        """Create from a condition dict."""
        return cls(
            type=obj.get("type", ""),
            status=obj.get("status", "Unknown"),
            reason=obj.get("reason"),
            message=obj.get("message"),
            last_transition_time=obj.get("lastTransitionTime"),
        )


def parse_conditions(status: dict[str, Any]) -> list[FluxCondition]:
    """Parse ``.status.conditions`` into a list of FluxCondition."""
    raw: list[dict[str, Any]] = status.get("conditions") or []
    return [FluxCondition.from_k8s_object(c) for c in raw]


def classify_status(
    conditions: list[FluxCondition],
    suspended: bool,
    kind: ResourceKind,
) -> tuple[ResourceStatus, str]:
    """Reduce conditions and the suspend flag to a status and message.

    Suspension wins over everything. Otherwise the first ``Ready`` condition
    with a True/False/Unknown status decides; a ``Ready=False`` whose reason
    is transient for the kind counts as reconciling. Without a deciding
    ``Ready`` condition, the first ``Reconciling=True`` condition marks the
    resource as reconciling.

    Args:
        conditions: Conditions in the order the controller published them.
        suspended: Value of ``spec.suspend``.
        kind: Resource kind, selecting the transient reason set.

    Returns:
        Tuple of (status, message).
    """
    if suspended:
        return ResourceStatus.SUSPENDED, SUSPENDED_MESSAGE

    for condition in conditions:
        if condition.type != "Ready":
            continue
        message = condition.message or MISSING_MESSAGE
        if condition.status == "True":
            return ResourceStatus.READY, message
        if condition.status == "False":
            if condition.reason in TRANSIENT_REASONS[kind]:
                return ResourceStatus.RECONCILING, message
            return ResourceStatus.FAILED, message
        if condition.status == "Unknown":
            return ResourceStatus.RECONCILING, message

    for condition in conditions:
        if condition.type == "Reconciling" and condition.status == "True":
            return ResourceStatus.RECONCILING, condition.message or MISSING_MESSAGE

    return ResourceStatus.UNKNOWN, UNKNOWN_STATUS_MESSAGE


def format_revision(revision: str) -> str:
    """Shorten a source revision for display.

    ``<branch>@<sha>`` revisions keep the branch and the first seven
    characters of the sha; anything else is cut to 12 characters.

    Args:
        revision: Raw revision string.

    Returns:
        Shortened revision.
    """
    parts = revision.split("@")
    if len(parts) == 2:
        branch, sha = parts
        return f"{branch}@{sha[:7]}"
    return revision[:12]
