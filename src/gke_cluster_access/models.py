"""Pydantic v2 models for tool outputs and errors."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field


class ToolError(BaseModel):
    """Structured error attached to tool outputs."""

    error: str
    source: str
    cluster: str | None = None
    partial_data: bool = False


# --- Output scrubbing ---

_IP_PATTERN = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")
_BEARER_PATTERN = re.compile(r"\bBearer\s+[\w.~+/=-]+", re.IGNORECASE)
# Google OAuth2 access tokens
_ACCESS_TOKEN_PATTERN = re.compile(r"\bya29\.[\w.-]+")


def scrub_sensitive_values(text: str) -> str:
    """Remove IP addresses and OAuth bearer tokens from text.

    Cluster names and context names are preserved.
    """
    if not text:
        return text
    result = _BEARER_PATTERN.sub("Bearer [REDACTED]", text)
    result = _ACCESS_TOKEN_PATTERN.sub("[REDACTED_TOKEN]", result)
    result = _IP_PATTERN.sub("[REDACTED_IP]", result)
    return result


# --- Cluster listing models ---


class ClusterSummary(BaseModel):
    """Identity and state of a single GKE cluster."""

    name: str
    location: str
    status: str
    current_master_version: str | None = None
    current_node_count: int = 0


class ClusterListOutput(BaseModel):
    """Output for list_gke_clusters."""

    project: str
    clusters: list[ClusterSummary]
    missing_zones: list[str] = Field(default_factory=list)
    summary: str
    timestamp: str
    errors: list[ToolError] = Field(default_factory=list)


# --- Cluster detail models ---


class ClusterDetailOutput(BaseModel):
    """Output for get_gke_cluster."""

    cluster: ClusterSummary
    context: str
    node_pools: list[str] = Field(default_factory=list)
    summary: str
    timestamp: str


# --- Cluster access models ---


class ClusterAccessOutput(BaseModel):
    """Output for check_gke_cluster_access."""

    cluster: str
    context: str
    reachable: bool
    server_version: str | None = None
    summary: str
    timestamp: str
    errors: list[ToolError] = Field(default_factory=list)
