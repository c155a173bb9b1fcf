"""Concurrent all-or-nothing refresh of the dashboard data."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from flux_tui.core.interfaces import ResourceFetcher
    from flux_tui.core.state import AppState

logger = structlog.get_logger()

REFRESH_ERROR_PREFIX = "Failed to fetch resources"

# Labels used in the aggregated error message, in fetch order
FETCH_LABELS = ("Kustomizations", "HelmReleases", "HelmCharts", "Namespaces")


class RefreshOrchestrator:
    """Fetch all resource lists and namespaces, then apply them together.

    The four fetches run concurrently and all of them are awaited. If any
    fails, the previous snapshot stays in place and ``last_error`` describes
    every failure.
    """

    def __init__(self, fetcher: ResourceFetcher) -> None:
        self._fetcher = fetcher
        self._log = logger.bind(entity="refresh")

    async def refresh(
        self,
        state: AppState,
        on_change: Callable[[], None] | None = None,
    ) -> bool:
        """Refresh ``state`` in place.

        Args:
            state: State to update.
            on_change: Called once ``loading`` has been set, before fetching.

        Returns:
            True if the snapshot was replaced, False if it was kept.
        """
        state.loading = True
        if on_change is not None:
            on_change()

        namespace = state.namespace_filter
        self._log.debug("refresh_started", namespace=namespace or "all")

        results = await asyncio.gather(
            self._fetcher.list_kustomizations(namespace),
            self._fetcher.list_helm_releases(namespace),
            self._fetcher.list_helm_charts(namespace),
            self._fetcher.list_namespaces(),
            return_exceptions=True,
        )

        failures = [
            (label, result)
            for label, result in zip(FETCH_LABELS, results, strict=True)
            if isinstance(result, BaseException)
        ]

        if failures:
            details = "; ".join(f"{label}: {error}" for label, error in failures)
            state.last_error = f"{REFRESH_ERROR_PREFIX}: {details}"
            self._log.warning(
                "refresh_failed",
                failed=[label for label, _ in failures],
                error=state.last_error,
            )
            state.loading = False
            return False

        kustomizations, helm_releases, helm_charts, namespaces = results
        state.kustomizations = list(kustomizations)
        state.helm_releases = list(helm_releases)
        state.helm_charts = list(helm_charts)
        state.namespaces = list(namespaces)
        state.last_error = None
        state.loading = False

        self._log.debug(
            "refresh_completed",
            kustomizations=len(state.kustomizations),
            helm_releases=len(state.helm_releases),
            helm_charts=len(state.helm_charts),
            namespaces=len(state.namespaces),
        )
        return True
