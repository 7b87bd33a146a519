"""In-memory kubeconfig synthesis for a single GKE cluster."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from google.cloud import container_v1
from pydantic import BaseModel, Field, model_validator

from gke_cluster_access.config import CLOUD_PLATFORM_SCOPE
from gke_cluster_access.errors import CertificateDecodeError

GCP_AUTH_PROVIDER = "gcp"


class KubeconfigCluster(BaseModel):
    """API server location and trust anchor."""

    server: str
    certificate_authority_data: bytes = b""


class KubeconfigContext(BaseModel):
    """Named pairing of a cluster entry and an auth-info entry."""

    cluster: str
    auth_info: str


class KubeconfigAuthProvider(BaseModel):
    """External token source the Kubernetes client defers authentication to."""

    name: str = GCP_AUTH_PROVIDER
    config: dict[str, str] = Field(default_factory=lambda: {"scopes": CLOUD_PLATFORM_SCOPE})


class KubeconfigAuthInfo(BaseModel):
    """Credential entry; only auth-provider credentials are produced."""

    auth_provider: KubeconfigAuthProvider = Field(default_factory=KubeconfigAuthProvider)


class SynthesizedKubeconfig(BaseModel):
    """A kubeconfig holding exactly one cluster, one context and one auth-info."""

    current_context: str
    clusters: dict[str, KubeconfigCluster]
    contexts: dict[str, KubeconfigContext]
    auth_infos: dict[str, KubeconfigAuthInfo]

    @model_validator(mode="after")
    def _single_resolved_context(self) -> SynthesizedKubeconfig:
        name = self.current_context
        for section in ("clusters", "contexts", "auth_infos"):
            keys = list(getattr(self, section))
            if keys != [name]:
                msg = f"{section} must hold exactly one entry named {name!r}, got {keys}"
                raise ValueError(msg)
        context = self.contexts[name]
        if context.cluster != name or context.auth_info != name:
            msg = f"context {name!r} must reference cluster and auth-info {name!r}"
            raise ValueError(msg)
        return self

    @property
    def cluster(self) -> KubeconfigCluster:
        return self.clusters[self.current_context]

    def to_dict(self) -> dict[str, Any]:
        """Render the standard kubeconfig document consumed by the kubernetes client."""
        name = self.current_context
        cluster_entry: dict[str, Any] = {"server": self.cluster.server}
        # The kubernetes client expects base64 text here and decodes it itself.
        if self.cluster.certificate_authority_data:
            cluster_entry["certificate-authority-data"] = base64.b64encode(
                self.cluster.certificate_authority_data
            ).decode("ascii")

        provider = self.auth_infos[name].auth_provider
        return {
            "apiVersion": "v1",
            "kind": "Config",
            "current-context": name,
            "clusters": [{"name": name, "cluster": cluster_entry}],
            "contexts": [
                {
                    "name": name,
                    "context": {
                        "cluster": self.contexts[name].cluster,
                        "user": self.contexts[name].auth_info,
                    },
                }
            ],
            "users": [
                {
                    "name": name,
                    "user": {"auth-provider": {"name": provider.name, "config": dict(provider.config)}},
                }
            ],
        }


def context_name(project: str, location: str, cluster_name: str) -> str:
    """Return the gcloud-style context name, e.g. ``gke_acme_us-central1_prod``."""
    return f"gke_{project}_{location}_{cluster_name}"


def decode_ca_certificate(name: str, encoded: str) -> bytes:
    """Strictly decode a base64 CA certificate.

    Raises:
        CertificateDecodeError: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CertificateDecodeError(name, encoded, str(e)) from e


def build_kubeconfig(project: str, cluster: container_v1.Cluster) -> SynthesizedKubeconfig:
    """Synthesize a single-context kubeconfig from a fetched cluster descriptor.

    Location and name are taken from the descriptor so the context name reflects
    the provider's canonical values.
    """
    name = context_name(project, cluster.location, cluster.name)
    cert = decode_ca_certificate(name, cluster.master_auth.cluster_ca_certificate)

    return SynthesizedKubeconfig(
        current_context=name,
        clusters={name: KubeconfigCluster(server="https://" + cluster.endpoint, certificate_authority_data=cert)},
        contexts={name: KubeconfigContext(cluster=name, auth_info=name)},
        auth_infos={name: KubeconfigAuthInfo()},
    )
