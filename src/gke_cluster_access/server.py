"""MCP server entry point and tool registration."""

from __future__ import annotations

import sys
import time

import structlog
from mcp.server.fastmcp import FastMCP

from gke_cluster_access.config import GkeConfig, load_gke_config, validate_gke_config
from gke_cluster_access.models import scrub_sensitive_values
from gke_cluster_access.tools.gke_clusters import (
    check_cluster_access_handler,
    get_cluster_handler,
    list_clusters_handler,
)

# Configure structlog for JSON output to stderr
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
    ],
    logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
)

log = structlog.get_logger()

mcp = FastMCP("GKE Cluster Access")

_gke_config: GkeConfig | None = None


def get_gke_config() -> GkeConfig:
    """Load the GKE configuration on first use."""
    global _gke_config
    if _gke_config is None:
        _gke_config = load_gke_config()
    return _gke_config


@mcp.tool()
async def list_gke_clusters() -> str:
    """List GKE clusters across all locations of the configured GCP project.

    Returns each cluster's name, location, status, control plane version and
    node count, plus any zones the provider could not reach.
    Use this to discover which clusters exist before inspecting one.
    """
    start = time.monotonic()
    try:
        result = await list_clusters_handler(get_gke_config())
        output = scrub_sensitive_values(result.model_dump_json(indent=2))
        log.info("tool_completed", tool="list_gke_clusters", latency_ms=_elapsed_ms(start))
        return output
    except Exception as e:
        sanitised = scrub_sensitive_values(str(e))
        log.error("tool_failed", tool="list_gke_clusters", error=sanitised)
        raise RuntimeError(sanitised) from None


@mcp.tool()
async def get_gke_cluster(cluster_name: str) -> str:
    """Get metadata for one GKE cluster in the configured region.

    Returns status, control plane version, node count, node pool names and the
    kubeconfig context name the cluster maps to.

    Args:
        cluster_name: Name of the GKE cluster (e.g., 'prod').
    """
    start = time.monotonic()
    try:
        result = await get_cluster_handler(get_gke_config(), cluster_name)
        output = scrub_sensitive_values(result.model_dump_json(indent=2))
        log.info("tool_completed", tool="get_gke_cluster", cluster=cluster_name, latency_ms=_elapsed_ms(start))
        return output
    except Exception as e:
        sanitised = scrub_sensitive_values(str(e))
        log.error("tool_failed", tool="get_gke_cluster", cluster=cluster_name, error=sanitised)
        raise RuntimeError(sanitised) from None


@mcp.tool()
async def check_gke_cluster_access(cluster_name: str) -> str:
    """Verify that an authenticated Kubernetes client can be built for a GKE cluster.

    Synthesizes a single-context kubeconfig from the cluster's endpoint and CA
    certificate, authenticates through Google credentials, and queries the
    API server version. Use this to diagnose credential or connectivity problems.

    Args:
        cluster_name: Name of the GKE cluster (e.g., 'prod').
    """
    start = time.monotonic()
    try:
        result = await check_cluster_access_handler(get_gke_config(), cluster_name)
        output = scrub_sensitive_values(result.model_dump_json(indent=2))
        log.info(
            "tool_completed", tool="check_gke_cluster_access", cluster=cluster_name, latency_ms=_elapsed_ms(start)
        )
        return output
    except Exception as e:
        sanitised = scrub_sensitive_values(str(e))
        log.error("tool_failed", tool="check_gke_cluster_access", cluster=cluster_name, error=sanitised)
        raise RuntimeError(sanitised) from None


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def main() -> None:
    validate_gke_config(get_gke_config())
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
