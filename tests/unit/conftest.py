"""Fakes and fixtures shared by the state engine and dashboard tests."""

from __future__ import annotations

from typing import Any

import pytest

from flux_tui.core.interfaces import CommandRunner, ResourceFetcher
from flux_tui.integrations.kubernetes.models import (
    HelmChart,
    HelmRelease,
    Kustomization,
    ResourceKind,
    ResourceStatus,
)


def make_kustomization(name: str, namespace: str = "flux-system", **kwargs: Any) -> Kustomization:
    """Build a Kustomization without going through a CRD dict."""
    kwargs.setdefault("status", ResourceStatus.READY)
    return Kustomization(name=name, namespace=namespace, **kwargs)


def make_helm_release(name: str, namespace: str = "apps", **kwargs: Any) -> HelmRelease:
    """Build a HelmRelease without going through a CRD dict."""
    return HelmRelease(name=name, namespace=namespace, **kwargs)


def make_helm_chart(name: str, namespace: str = "flux-system", **kwargs: Any) -> HelmChart:
    """Build a HelmChart without going through a CRD dict."""
    return HelmChart(name=name, namespace=namespace, **kwargs)


class FakeFetcher(ResourceFetcher):
    """In-memory fetcher with per-list failure injection."""

    def __init__(
        self,
        kustomizations: list[Kustomization] | None = None,
        helm_releases: list[HelmRelease] | None = None,
        helm_charts: list[HelmChart] | None = None,
        namespaces: list[str] | None = None,
    ) -> None:
        self.kustomizations = kustomizations or []
        self.helm_releases = helm_releases or []
        self.helm_charts = helm_charts or []
        self.namespaces = namespaces or []
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, str | None]] = []

    def _result(self, key: str, namespace: str | None, items: list[Any]) -> list[Any]:
        self.calls.append((key, namespace))
        if key in self.errors:
            raise self.errors[key]
        if namespace is None or key == "namespaces":
            return list(items)
        return [item for item in items if item.namespace == namespace]

    async def list_kustomizations(self, namespace: str | None = None) -> list[Kustomization]:
        return self._result("kustomizations", namespace, self.kustomizations)

    async def list_helm_releases(self, namespace: str | None = None) -> list[HelmRelease]:
        return self._result("helm_releases", namespace, self.helm_releases)

    async def list_helm_charts(self, namespace: str | None = None) -> list[HelmChart]:
        return self._result("helm_charts", namespace, self.helm_charts)

    async def list_namespaces(self) -> list[str]:
        return self._result("namespaces", None, self.namespaces)


class FakeRunner(CommandRunner):
    """Records commands and optionally fails them."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.reconciled: list[tuple[str, str, ResourceKind, bool]] = []
        self.toggled: list[tuple[str, str, ResourceKind, bool]] = []

    async def reconcile(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        with_source: bool = False,
    ) -> None:
        self.reconciled.append((name, namespace, kind, with_source))
        if self.error is not None:
            raise self.error

    async def toggle_suspend(
        self,
        name: str,
        namespace: str,
        kind: ResourceKind,
        currently_suspended: bool,
    ) -> None:
        self.toggled.append((name, namespace, kind, currently_suspended))
        if self.error is not None:
            raise self.error


@pytest.fixture
def fetcher() -> FakeFetcher:
    """Fetcher with a small multi-namespace fleet."""
    return FakeFetcher(
        kustomizations=[
            make_kustomization("flux-system"),
            make_kustomization("infra"),
            make_kustomization("apps", namespace="apps", suspended=True),
        ],
        helm_releases=[make_helm_release("podinfo"), make_helm_release("redis")],
        helm_charts=[make_helm_chart("apps-podinfo")],
        namespaces=["apps", "default", "flux-system"],
    )


@pytest.fixture
def runner() -> FakeRunner:
    """Runner whose commands succeed."""
    return FakeRunner()
