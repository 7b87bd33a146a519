"""Client-specific test fixtures: a patched GKE ClusterManager client."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture
def mock_cluster_manager() -> Iterator[MagicMock]:
    """Patch ClusterManagerClient construction and yield the client instance."""
    with patch("gke_cluster_access.clients.gke.container_v1.ClusterManagerClient") as mock_cls:
        instance = MagicMock()
        mock_cls.return_value = instance
        instance.constructor = mock_cls
        yield instance
