"""Tests for the credentials provider and Kubernetes client construction."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from kubernetes import client as k8s_client

from gke_cluster_access.clients import (
    KubernetesClient,
    build_kubernetes_client,
    default_google_credentials,
)
from gke_cluster_access.config import CLOUD_PLATFORM_SCOPE
from gke_cluster_access.errors import TransportBuildError
from gke_cluster_access.kubeconfig import build_kubeconfig


class TestDefaultGoogleCredentials:
    def test_scoped_and_refreshed(self) -> None:
        credentials = MagicMock()
        with (
            patch("google.auth.default", return_value=(credentials, "acme")) as mock_default,
            patch("google.auth.transport.requests.Request") as mock_request,
        ):
            result = default_google_credentials()

        assert result is credentials
        mock_default.assert_called_once_with(scopes=[CLOUD_PLATFORM_SCOPE])
        credentials.refresh.assert_called_once_with(mock_request.return_value)


class TestBuildKubernetesClient:
    def test_isolated_configuration(self, cluster_factory: Any, fake_credentials_provider: Any) -> None:
        kubeconfig = build_kubeconfig("acme", cluster_factory())
        first = build_kubernetes_client(kubeconfig, fake_credentials_provider)
        second = build_kubernetes_client(kubeconfig, fake_credentials_provider)
        assert first.configuration is not second.configuration

    def test_loader_failure_raises_transport_error(self, cluster_factory: Any, fake_credentials_provider: Any) -> None:
        kubeconfig = build_kubeconfig("acme", cluster_factory())
        with (
            patch("gke_cluster_access.clients.KubeConfigLoader", side_effect=Exception("Invalid kube-config file")),
            pytest.raises(TransportBuildError, match="error building kubernetes config: Invalid kube-config file"),
        ):
            build_kubernetes_client(kubeconfig, fake_credentials_provider)

    @pytest.mark.parametrize("endpoint", ["", ":443", "https://10.0.0.1", "http://10.0.0.1"])
    def test_server_without_host_rejected(
        self, cluster_factory: Any, fake_credentials_provider: Any, endpoint: str
    ) -> None:
        kubeconfig = build_kubeconfig("acme", cluster_factory(endpoint=endpoint))
        with (
            patch("gke_cluster_access.clients.KubeConfigLoader") as mock_loader,
            pytest.raises(TransportBuildError),
        ):
            build_kubernetes_client(kubeconfig, fake_credentials_provider)
        mock_loader.assert_not_called()


class TestKubernetesClientHandle:
    def test_api_groups_share_api_client(self) -> None:
        api_client = MagicMock(spec=k8s_client.ApiClient)
        handle = KubernetesClient(
            context="gke_acme_us-central1_prod",
            api_client=api_client,
            configuration=k8s_client.Configuration(),
        )
        assert handle.core_v1().api_client is api_client
        assert handle.version().api_client is api_client
