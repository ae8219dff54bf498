"""
Shared pytest fixtures for kubelite tests.

This module provides common fixtures including:
- Cluster configuration snapshots and static providers
- RecordingStopEvent: a stop event that records retry delays instead of sleeping
- api_mock: respx router standing in for the Kubernetes API server
- ca_bundle: a throwaway CA certificate on disk
"""

import os
import sys
import threading
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest
import respx
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kubelite.config.provider import ClusterConfig, StaticConfigProvider
from kubelite.modules.executor import RequestExecutor
from kubelite.modules.pods import PodClient

API_HOST = "https://kubernetes.test"
TOKEN_ONE = "token-one-5f2b8c"
TOKEN_TWO = "token-two-9d41ae"
NAMESPACE = "default"
POD_NAME = "web-0"
POD_PATH = f"/api/v1/namespaces/{NAMESPACE}/pods/{POD_NAME}"
CA_COMMON_NAME = "kubelite-test-ca"


# =============================================================================
# Stop Event Recording
# =============================================================================

class RecordingStopEvent(threading.Event):
    """
    Stop event that never blocks.

    Every wait() records the requested delay and returns immediately,
    reporting whether the event is set. Tests can inspect the backoff
    schedule without sleeping through it.
    """

    def __init__(self):
        super().__init__()
        self.delays: List[float] = []

    def wait(self, timeout: Optional[float] = None) -> bool:
        self.delays.append(timeout)
        return self.is_set()


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def cluster_config() -> ClusterConfig:
    """Configuration carrying the first token."""
    return ClusterConfig(host=API_HOST, bearer_token=TOKEN_ONE)


@pytest.fixture
def rotated_config() -> ClusterConfig:
    """Configuration carrying a rotated token."""
    return ClusterConfig(host=API_HOST, bearer_token=TOKEN_TWO)


@pytest.fixture
def static_provider(cluster_config) -> StaticConfigProvider:
    """Provider whose token never changes."""
    return StaticConfigProvider(cluster_config)


@pytest.fixture
def rotating_provider(cluster_config, rotated_config) -> StaticConfigProvider:
    """Provider that returns a new token from the second load on."""
    return StaticConfigProvider(cluster_config, rotated_config)


@pytest.fixture
def stop_event() -> RecordingStopEvent:
    return RecordingStopEvent()


@pytest.fixture
def executor(static_provider, stop_event) -> RequestExecutor:
    return RequestExecutor(static_provider, stop_event)


@pytest.fixture
def pod_client(executor) -> PodClient:
    return PodClient(executor)


# =============================================================================
# HTTP Mocking
# =============================================================================

@pytest.fixture
def api_mock():
    """respx router for the fake API server."""
    with respx.mock(base_url=API_HOST, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def ca_bundle(tmp_path):
    """Write a self-signed CA certificate and return its path."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, CA_COMMON_NAME)])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
        .sign(key, hashes.SHA256())
    )
    path = tmp_path / "ca.crt"
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return path


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: Tests that wait on real timers"
    )
