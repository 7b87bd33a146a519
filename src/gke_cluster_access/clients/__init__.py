"""Client wrappers for the GKE control plane and the Kubernetes API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urlsplit

import google.auth
import google.auth.transport.requests
import structlog
from kubernetes import client as k8s_client
from kubernetes.config.kube_config import KubeConfigLoader

from gke_cluster_access.config import CLOUD_PLATFORM_SCOPE
from gke_cluster_access.errors import TransportBuildError
from gke_cluster_access.kubeconfig import SynthesizedKubeconfig

log = structlog.get_logger()


class CredentialsProvider(Protocol):
    """Returns refreshed google-auth credentials exposing ``token`` and ``expiry``."""

    def __call__(self) -> Any: ...


def default_google_credentials() -> Any:
    """Application Default Credentials scoped to cloud-platform, freshly refreshed.

    Passed to the kubernetes client's gcp auth provider, which calls it again
    whenever the bearer token expires.
    """
    credentials, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
    credentials.refresh(google.auth.transport.requests.Request())
    return credentials


@dataclass(frozen=True)
class KubernetesClient:
    """A connected Kubernetes API client paired with its REST configuration."""

    context: str
    api_client: k8s_client.ApiClient
    configuration: k8s_client.Configuration

    def core_v1(self) -> k8s_client.CoreV1Api:
        return k8s_client.CoreV1Api(self.api_client)

    def version(self) -> k8s_client.VersionApi:
        return k8s_client.VersionApi(self.api_client)


def build_kubernetes_client(
    kubeconfig: SynthesizedKubeconfig,
    credentials_provider: CredentialsProvider = default_google_credentials,
) -> KubernetesClient:
    """Create an isolated Kubernetes API client for the kubeconfig's single context.

    Uses a dedicated KubeConfigLoader and Configuration so no global SDK state
    is read or mutated.

    Raises:
        TransportBuildError: If the server URL, the loader, the credentials or the
            ApiClient construction fail. No partially built handle is returned.
    """
    name = kubeconfig.current_context
    server = kubeconfig.cluster.server
    _, _, rest = server.partition("://")
    if not urlsplit(server).hostname or "://" in rest:
        log.error("invalid_cluster_server", context=name, server=server)
        msg = f"error building kubernetes config: server {server!r} is not a single-scheme URL with a host"
        raise TransportBuildError(msg)

    configuration = k8s_client.Configuration()
    try:
        loader = KubeConfigLoader(
            config_dict=kubeconfig.to_dict(),
            active_context=name,
            get_google_credentials=credentials_provider,
        )
        loader.load_and_set(configuration)
    except Exception as e:
        log.error("failed_to_build_kubernetes_config", context=name, error=str(e))
        msg = f"error building kubernetes config: {e}"
        raise TransportBuildError(msg) from e

    try:
        api_client = k8s_client.ApiClient(configuration=configuration)
    except Exception as e:
        log.error("failed_to_build_kubernetes_client", context=name, error=str(e))
        msg = f"error building kubernetes client: {e}"
        raise TransportBuildError(msg) from e

    log.info("cluster_client_built", context=name, host=configuration.host)
    return KubernetesClient(context=name, api_client=api_client, configuration=configuration)
