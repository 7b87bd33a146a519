"""GKE cluster manager wrapper: list, get, and materialize Kubernetes clients."""

from __future__ import annotations

from typing import Any

import structlog
from google.cloud import container_v1

from gke_cluster_access.clients import (
    CredentialsProvider,
    KubernetesClient,
    build_kubernetes_client,
    default_google_credentials,
)
from gke_cluster_access.config import GkeConfig
from gke_cluster_access.errors import CertificateDecodeError, ClientInitError, GetError, ListError
from gke_cluster_access.kubeconfig import build_kubeconfig
from gke_cluster_access.validation import validate_cluster_name

log = structlog.get_logger()


class GkeClusterClient:
    """Wrapper around the GKE ClusterManager API for one project and region.

    A new ClusterManagerClient is created for every operation; nothing fetched
    from the provider is cached between calls.
    """

    def __init__(
        self,
        gke_config: GkeConfig,
        credentials: Any | None = None,
        credentials_provider: CredentialsProvider = default_google_credentials,
    ) -> None:
        self._config = gke_config
        self._credentials = credentials
        self._credentials_provider = credentials_provider

    def _new_cluster_manager(self) -> container_v1.ClusterManagerClient:
        try:
            return container_v1.ClusterManagerClient(credentials=self._credentials)
        except Exception as e:
            log.error("failed_to_create_cluster_manager", project=self._config.project, error=str(e))
            msg = f"could not create google container client: {e}"
            raise ClientInitError(msg) from e

    def cluster_path(self, cluster_name: str) -> str:
        return f"projects/{self._config.project}/locations/{self._config.region}/clusters/{cluster_name}"

    def list_clusters(self) -> container_v1.ListClustersResponse:
        """List clusters in every location of the configured project.

        Returns the provider response unmodified.
        """
        client = self._new_cluster_manager()
        parent = f"projects/{self._config.project}/locations/-"
        with client:
            try:
                return client.list_clusters(request=container_v1.ListClustersRequest(parent=parent))
            except Exception as e:
                log.error("failed_to_list_clusters", project=self._config.project, error=str(e))
                msg = f"error listing container clusters: {e}"
                raise ListError(msg) from e

    def get_cluster(self, cluster_name: str) -> container_v1.Cluster:
        """Fetch a single cluster descriptor in the configured region.

        Args:
            cluster_name: Name of the cluster. Existence is checked by the provider.
        """
        validate_cluster_name(cluster_name)
        client = self._new_cluster_manager()
        request = container_v1.GetClusterRequest(name=self.cluster_path(cluster_name))
        with client:
            try:
                return client.get_cluster(request=request)
            except Exception as e:
                log.error(
                    "failed_to_get_cluster",
                    project=self._config.project,
                    region=self._config.region,
                    cluster=cluster_name,
                    error=str(e),
                )
                msg = f"error getting container cluster: {e}"
                raise GetError(msg) from e

    def client_for_cluster(self, cluster: container_v1.Cluster) -> KubernetesClient:
        """Build a Kubernetes client for an already fetched cluster descriptor."""
        try:
            kubeconfig = build_kubeconfig(self._config.project, cluster)
        except CertificateDecodeError as e:
            log.error("invalid_cluster_certificate", context=e.context_name)
            raise
        return build_kubernetes_client(kubeconfig, self._credentials_provider)

    def get_cluster_client(self, cluster_name: str) -> KubernetesClient:
        """Fetch a cluster and return an authenticated Kubernetes client for it.

        Raises:
            ClientInitError, GetError: If the cluster cannot be fetched.
            CertificateDecodeError: If the cluster CA certificate is malformed.
            TransportBuildError: If the REST configuration or client cannot be built.
        """
        cluster = self.get_cluster(cluster_name)
        return self.client_for_cluster(cluster)
