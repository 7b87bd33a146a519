"""Shared test fixtures for all test modules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from typing import Any

import pytest
from google.cloud import container_v1

from gke_cluster_access.config import GkeConfig


@pytest.fixture
def gke_config() -> GkeConfig:
    """Return the project/region pair used across tests."""
    return GkeConfig(project="acme", region="us-central1")


@pytest.fixture
def fake_credentials_provider() -> Any:
    """Credentials provider returning a static, unexpired access token."""

    def _provider() -> SimpleNamespace:
        return SimpleNamespace(token="ya29.test-token", expiry=datetime.now(tz=UTC) + timedelta(hours=1))

    return _provider


def make_cluster(
    name: str = "prod",
    location: str = "us-central1",
    endpoint: str = "10.0.0.1",
    ca_certificate: str = "YWJj",
    status: container_v1.Cluster.Status = container_v1.Cluster.Status.RUNNING,
    master_version: str = "1.30.5-gke.1014001",
    node_count: int = 3,
    node_pools: list[str] | None = None,
) -> container_v1.Cluster:
    """Create a GKE cluster descriptor as returned by the ClusterManager API."""
    return container_v1.Cluster(
        name=name,
        location=location,
        endpoint=endpoint,
        master_auth=container_v1.MasterAuth(cluster_ca_certificate=ca_certificate),
        status=status,
        current_master_version=master_version,
        current_node_count=node_count,
        node_pools=[container_v1.NodePool(name=p) for p in (node_pools or ["default-pool"])],
    )


@pytest.fixture
def cluster_factory() -> Any:
    """Factory for GKE cluster descriptors."""
    return make_cluster
