"""Error taxonomy for GKE cluster access."""

from __future__ import annotations


class GkeAccessError(Exception):
    """Base class for all cluster access failures."""


class ClientInitError(GkeAccessError):
    """The GKE cluster manager client could not be constructed."""


class ListError(GkeAccessError):
    """The provider rejected or failed a cluster list request."""


class GetError(GkeAccessError):
    """The provider rejected or failed a single cluster request."""


class CertificateDecodeError(GkeAccessError):
    """The cluster CA certificate is not valid base64."""

    def __init__(self, context_name: str, encoded: str, reason: str) -> None:
        self.context_name = context_name
        self.encoded = encoded
        super().__init__(f"invalid certificate cluster={context_name} cert={encoded}: {reason}")


class TransportBuildError(GkeAccessError):
    """A Kubernetes REST configuration or API client could not be built."""
