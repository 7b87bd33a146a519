"""list_gke_clusters, get_gke_cluster, check_gke_cluster_access handlers."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import structlog
from google.cloud import container_v1

from gke_cluster_access.clients.gke import GkeClusterClient
from gke_cluster_access.config import GkeConfig
from gke_cluster_access.kubeconfig import context_name
from gke_cluster_access.models import (
    ClusterAccessOutput,
    ClusterDetailOutput,
    ClusterListOutput,
    ClusterSummary,
    ToolError,
)

log = structlog.get_logger()


def _summarize(cluster: container_v1.Cluster) -> ClusterSummary:
    return ClusterSummary(
        name=cluster.name,
        location=cluster.location,
        status=container_v1.Cluster.Status(cluster.status).name,
        current_master_version=cluster.current_master_version or None,
        current_node_count=cluster.current_node_count,
    )


async def list_clusters_handler(gke_config: GkeConfig) -> ClusterListOutput:
    """Core handler for list_gke_clusters."""
    gke_client = GkeClusterClient(gke_config)
    response = await asyncio.to_thread(gke_client.list_clusters)

    clusters = [_summarize(c) for c in response.clusters]
    missing_zones = list(response.missing_zones)
    errors: list[ToolError] = []
    if missing_zones:
        errors.append(
            ToolError(
                error=f"Provider could not reach zones: {', '.join(missing_zones)}",
                source="gke-api",
                partial_data=True,
            )
        )

    count = len(clusters)
    summary = f"{count} cluster{'s' if count != 1 else ''} in project {gke_config.project}"
    not_running = [c.name for c in clusters if c.status != "RUNNING"]
    if not_running:
        summary += f", {len(not_running)} not running ({', '.join(not_running)})"

    return ClusterListOutput(
        project=gke_config.project,
        clusters=clusters,
        missing_zones=missing_zones,
        summary=summary,
        timestamp=datetime.now(tz=UTC).isoformat(),
        errors=errors,
    )


async def get_cluster_handler(gke_config: GkeConfig, cluster_name: str) -> ClusterDetailOutput:
    """Core handler for get_gke_cluster."""
    gke_client = GkeClusterClient(gke_config)
    cluster = await asyncio.to_thread(gke_client.get_cluster, cluster_name)

    summary_model = _summarize(cluster)
    node_pools = [pool.name for pool in cluster.node_pools]
    summary = f"{cluster.name} in {cluster.location} is {summary_model.status}"
    if summary_model.current_master_version:
        summary += f", running {summary_model.current_master_version}"

    return ClusterDetailOutput(
        cluster=summary_model,
        context=context_name(gke_config.project, cluster.location, cluster.name),
        node_pools=node_pools,
        summary=summary,
        timestamp=datetime.now(tz=UTC).isoformat(),
    )


async def check_cluster_access_handler(gke_config: GkeConfig, cluster_name: str) -> ClusterAccessOutput:
    """Core handler for check_gke_cluster_access.

    Client materialization failures propagate; a failed /version call is
    reported as an unreachable cluster.
    """
    gke_client = GkeClusterClient(gke_config)
    k8s = await asyncio.to_thread(gke_client.get_cluster_client, cluster_name)

    errors: list[ToolError] = []
    server_version: str | None = None
    try:
        info = await asyncio.to_thread(k8s.version().get_code)
        server_version = info.git_version
    except Exception:
        log.error("failed_to_get_server_version", cluster=cluster_name, context=k8s.context)
        errors.append(
            ToolError(
                error="Failed to query Kubernetes API server version",
                source="k8s-api",
                cluster=cluster_name,
            )
        )
    finally:
        k8s.api_client.close()

    reachable = server_version is not None
    if reachable:
        summary = f"{k8s.context} reachable, server version {server_version}"
    else:
        summary = f"{k8s.context} credentials built but API server unreachable"

    return ClusterAccessOutput(
        cluster=cluster_name,
        context=k8s.context,
        reachable=reachable,
        server_version=server_version,
        summary=summary,
        timestamp=datetime.now(tz=UTC).isoformat(),
        errors=errors,
    )
