"""Input validation helpers for cluster operations."""

from __future__ import annotations


def validate_cluster_name(cluster_name: str) -> None:
    """Validate a GKE cluster name before it is placed in a resource path.

    Existence and naming rules are left to the provider; only values that would
    produce a malformed resource path are rejected here.
    """
    if not cluster_name or not cluster_name.strip():
        msg = "Invalid cluster name: must be non-empty."
        raise ValueError(msg)
    if "/" in cluster_name:
        msg = f"Invalid cluster name: {cluster_name!r}. Must not contain '/'."
        raise ValueError(msg)
