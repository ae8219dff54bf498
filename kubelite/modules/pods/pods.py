"""Pod operations against the core/v1 API."""

import logging
import threading
from typing import Optional

from ...config.provider import ConfigProvider, InClusterConfigProvider
from ...errors import NamespaceUnsetError, PatchOperationUnsetError, PodNameUnsetError
from ..api.models import ApiRequest, Patch, PatchOperation, Pod, encode_patches
from ..executor import RequestExecutor

logger = logging.getLogger(__name__)

POD_ENDPOINT = "/api/v1/namespaces/{namespace}/pods/{pod_name}"
JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"


def _validate_target(namespace: str, pod_name: str) -> None:
    if not namespace:
        raise NamespaceUnsetError()
    if not pod_name:
        raise PodNameUnsetError()


class PodClient:
    """
    Minimal pod client.

    Only supports reading a pod and patching it; everything else a general
    Kubernetes client does is out of scope.
    """

    def __init__(self, executor: RequestExecutor):
        self.executor = executor

    @classmethod
    def in_cluster(
        cls,
        stop_event: threading.Event,
        logger: Optional[logging.Logger] = None,
        config_provider: Optional[ConfigProvider] = None,
    ) -> "PodClient":
        """
        Create a client from the pod's service-account credentials.

        Args:
            stop_event: Set to stop any pending retries
            logger: Optional logger for the executor
            config_provider: Provider to use instead of InClusterConfigProvider

        Raises:
            NotInClusterError: if not running inside a cluster
        """
        provider = config_provider or InClusterConfigProvider()
        return cls(RequestExecutor(provider, stop_event, logger=logger))

    def _url(self, namespace: str, pod_name: str) -> str:
        endpoint = POD_ENDPOINT.format(namespace=namespace, pod_name=pod_name)
        return self.executor.config.host + endpoint

    def get_pod(self, namespace: str, pod_name: str) -> Optional[Pod]:
        """
        Get a pod.

        Args:
            namespace: Namespace of the pod
            pod_name: Name of the pod

        Returns:
            The pod, or None if the stop event interrupted the retries

        Raises:
            NamespaceUnsetError, PodNameUnsetError: before any request is made
            NotFoundError: if the pod does not exist
        """
        _validate_target(namespace, pod_name)

        request = ApiRequest(method="GET", url=self._url(namespace, pod_name))
        return self.executor.execute(request, Pod)

    def patch_pod(self, namespace: str, pod_name: str, *patches: Patch) -> None:
        """
        Apply JSON patches to a pod.

        The pod is updated in place, not recreated. Calling this without
        patches is a no-op and makes no request.

        Raises:
            NamespaceUnsetError, PodNameUnsetError: before any request is made
            PatchOperationUnsetError: if any patch has no operation
        """
        _validate_target(namespace, pod_name)
        if not patches:
            return

        for patch in patches:
            if patch.operation == PatchOperation.UNSET:
                raise PatchOperationUnsetError(patch.path)

        request = ApiRequest(
            method="PATCH",
            url=self._url(namespace, pod_name),
            body=encode_patches(list(patches)),
            headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
        )
        logger.debug(f"Patching pod {namespace}/{pod_name} with {len(patches)} operation(s)")
        self.executor.execute(request)
