"""Shared fixtures for Kubernetes service tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from flux_tui.integrations.kubernetes.client import KubernetesClient


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Create a mock Kubernetes client.

    Error translation uses the real implementation so managers raise the
    same exceptions they would against a cluster.
    """
    mock_client = MagicMock()
    mock_client.translate_api_exception = KubernetesClient.translate_api_exception
    return mock_client
