"""Configuration provider following Black Box Design principles."""
import logging
import os
import ssl
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from ..errors import NotInClusterError

logger = logging.getLogger(__name__)

SERVICE_ACCOUNT_DIR = "/var/run/secrets/kubernetes.io/serviceaccount"
TOKEN_FILE = f"{SERVICE_ACCOUNT_DIR}/token"
ROOT_CA_FILE = f"{SERVICE_ACCOUNT_DIR}/ca.crt"

HOST_ENV = "KUBERNETES_SERVICE_HOST"
PORT_ENV = "KUBERNETES_SERVICE_PORT"


@dataclass(frozen=True)
class ClusterConfig:
    """
    Snapshot of the credentials used to talk to the API server.

    Snapshots are replaced as a whole when the token rotates.
    """
    host: str
    bearer_token: str = ""
    trust_anchors: Optional[ssl.SSLContext] = None

    def __repr__(self) -> str:
        # Keep the token out of reprs that end up in logs and tracebacks.
        return f"ClusterConfig(host={self.host!r}, bearer_token='<redacted>')"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def load(self) -> ClusterConfig:
        """Return a fresh configuration snapshot."""
        ...


def join_host_port(host: str, port: str) -> str:
    """Join host and port, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class InClusterConfigProvider:
    """
    Service-account based configuration provider.

    Reads the API server address from the environment and the token and CA
    bundle from the files Kubernetes mounts into every pod. Each call to
    load() reads the token again, so rotated tokens are picked up.
    """

    def __init__(
        self,
        token_file: str = TOKEN_FILE,
        root_ca_file: str = ROOT_CA_FILE,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.token_file = token_file
        self.root_ca_file = root_ca_file
        self.environ = environ if environ is not None else os.environ

    def load(self) -> ClusterConfig:
        """
        Load in-cluster configuration.

        Returns:
            ClusterConfig for the current token

        Raises:
            NotInClusterError: if the service host or port is not defined
            OSError: if the token or CA file cannot be read
            ssl.SSLError: if the CA bundle is not valid PEM
        """
        host = self.environ.get(HOST_ENV, "")
        port = self.environ.get(PORT_ENV, "")
        if not host or not port:
            raise NotInClusterError()

        with open(self.token_file, "r", encoding="utf-8") as f:
            token = f.read().strip()

        trust_anchors = ssl.create_default_context(cafile=self.root_ca_file)

        logger.debug(f"Loaded in-cluster configuration for {host}:{port}")
        return ClusterConfig(
            host="https://" + join_host_port(host, port),
            bearer_token=token,
            trust_anchors=trust_anchors,
        )


class StaticConfigProvider:
    """
    Provider that hands out pre-built snapshots.

    Snapshots are returned in order; once exhausted the last one is repeated.
    """

    def __init__(self, *configs: ClusterConfig):
        if not configs:
            raise ValueError("StaticConfigProvider needs at least one config")
        self._configs = list(configs)
        self.calls = 0

    def load(self) -> ClusterConfig:
        index = min(self.calls, len(self._configs) - 1)
        self.calls += 1
        return self._configs[index]
