"""
Kubelite - Minimal in-cluster Kubernetes client

A small client for reading and patching pods from inside a pod, using the
service-account credentials the cluster mounts into it.

Architecture:
- Each module is self-contained with clear interfaces
- Credentials are read through a config provider and swapped, never edited
- Only the executor knows about retries, backoff and status codes

Modules:
- config: In-cluster configuration discovery
- api: Pod and patch data models
- executor: Request execution, retries and credential refresh
- pods: Pod operations and label patch helpers
"""

__version__ = "1.0.0"

from .config.provider import ClusterConfig, InClusterConfigProvider, StaticConfigProvider
from .errors import (
    KubeliteError,
    NamespaceUnsetError,
    NotFoundError,
    NotInClusterError,
    PatchOperationUnsetError,
    PodNameUnsetError,
    RequestFailedError,
    StatusError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from .modules.api.models import Metadata, Patch, PatchOperation, Pod
from .modules.executor import RequestExecutor
from .modules.pods import PodClient, label_patches

__all__ = [
    "ClusterConfig",
    "InClusterConfigProvider",
    "StaticConfigProvider",
    "KubeliteError",
    "NamespaceUnsetError",
    "NotFoundError",
    "NotInClusterError",
    "PatchOperationUnsetError",
    "PodNameUnsetError",
    "RequestFailedError",
    "StatusError",
    "UnauthorizedError",
    "UnexpectedStatusError",
    "Metadata",
    "Patch",
    "PatchOperation",
    "Pod",
    "RequestExecutor",
    "PodClient",
    "label_patches",
]
