"""GKE project/region configuration and environment variable overrides."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"


@dataclass(frozen=True)
class GkeConfig:
    """Project and region every cluster operation is scoped to."""

    project: str
    region: str


_REQUIRED_FIELDS = ("project", "region")


def _load_gke_config(path: Path) -> GkeConfig:
    """Parse a YAML configuration file and apply environment overrides.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The resolved GkeConfig.

    Raises:
        FileNotFoundError: If the file does not exist and the environment does not
            provide both GKE_PROJECT and GKE_REGION.
        ValueError: If the file content is malformed or missing required fields.
    """
    overrides = {
        "project": os.environ.get("GKE_PROJECT"),
        "region": os.environ.get("GKE_REGION"),
    }

    if not path.exists():
        if all(overrides.values()):
            return GkeConfig(project=str(overrides["project"]), region=str(overrides["region"]))
        msg = (
            f"GKE configuration file not found: {path}. "
            "Copy gke.example.yaml to gke.yaml and fill in your project and region, "
            "set GKE_ACCESS_CONFIG to point to your config file, "
            "or set both GKE_PROJECT and GKE_REGION."
        )
        raise FileNotFoundError(msg)

    raw = yaml.safe_load(path.read_text())

    if not isinstance(raw, dict) or "gke" not in raw:
        msg = f"GKE config file {path} must contain a top-level 'gke' key."
        raise ValueError(msg)

    entry: Any = raw["gke"]
    if not isinstance(entry, dict):
        msg = f"GKE config file {path}: 'gke' must be a mapping, got {type(entry).__name__}."
        raise ValueError(msg)

    merged = {key: overrides[key] or entry.get(key) for key in _REQUIRED_FIELDS}
    missing = [f for f in _REQUIRED_FIELDS if merged[f] is None]
    if missing:
        msg = f"GKE config file {path} is missing required fields: {', '.join(missing)}."
        raise ValueError(msg)

    return GkeConfig(project=str(merged["project"]), region=str(merged["region"]))


def load_gke_config() -> GkeConfig:
    """Load GKE configuration from YAML.

    Reads the file path from the ``GKE_ACCESS_CONFIG`` environment variable,
    defaulting to ``gke.yaml`` in the current working directory. ``GKE_PROJECT``
    and ``GKE_REGION`` take precedence over the file.
    """
    path = Path(os.environ.get("GKE_ACCESS_CONFIG", "gke.yaml"))
    return _load_gke_config(path)


# GCP project ID: 6-30 chars, lowercase letter first, no trailing hyphen
_PROJECT_ID_RE = re.compile(r"^[a-z][a-z0-9\-]{4,28}[a-z0-9]$")


def validate_gke_config(config: GkeConfig) -> None:
    """Validate a GKE configuration at startup.

    Raises RuntimeError if placeholder values, malformed project IDs,
    or empty regions are detected.
    """
    errors: list[str] = []
    if config.project.startswith("<") and config.project.endswith(">"):
        errors.append("placeholder project detected")
    elif not _PROJECT_ID_RE.match(config.project):
        errors.append(f"project {config.project!r} is not a valid GCP project ID")

    if not config.region:
        errors.append("region is empty")
    elif config.region.startswith("<") and config.region.endswith(">"):
        errors.append("placeholder region detected")

    if errors:
        detail = "; ".join(errors)
        msg = f"GKE configuration errors: {detail}. Fix before running in production."
        raise RuntimeError(msg)
