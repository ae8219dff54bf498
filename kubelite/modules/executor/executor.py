"""
Request executor.

Sends prepared requests to the Kubernetes API server, retrying transient
failures with exponential backoff and picking up rotated service-account
tokens when the server rejects the current one.
"""

import logging
import threading
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from ...config.provider import ClusterConfig, ConfigProvider
from ...errors import (
    NotFoundError,
    RequestFailedError,
    StatusError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from ..api.models import ApiRequest
from .backoff import ExponentialBackoff
from .diagnostics import redact, sanitized_debugging_info

# Maximum number of attempts per request, the first one included.
MAX_RETRIES = 10

SUCCESS_STATUS_CODES = frozenset({200, 201, 202, 204})
AUTH_STATUS_CODES = frozenset({401, 403})
TRANSIENT_STATUS_CODES = frozenset({500, 502, 503, 504})

CONNECT_TIMEOUT = 30.0

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestExecutor:
    """
    Executes API requests with retries.

    The stop event is shared by every caller: once set, any pending or
    future wait between attempts is abandoned. Requests already on the
    wire are not interrupted.
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        stop_event: threading.Event,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the executor and load the first configuration snapshot.

        Args:
            config_provider: Source of configuration, re-read on 401/403
            stop_event: Set to stop retrying
            logger: Logger to use instead of the module logger

        Raises:
            NotInClusterError: if the provider cannot find in-cluster configuration
        """
        self.config_provider = config_provider
        self.stop_event = stop_event
        self.logger = logger or logging.getLogger(__name__)
        self._config_lock = threading.Lock()
        self._config = config_provider.load()

    @property
    def config(self) -> ClusterConfig:
        """Current configuration snapshot."""
        return self._config

    def execute(
        self,
        request: ApiRequest,
        response_model: Optional[Type[ModelT]] = None,
    ) -> Optional[ModelT]:
        """
        Execute a request, retrying if necessary.

        Args:
            request: Fully built request
            response_model: Model to decode a successful body into, or None
                to discard the body

        Returns:
            The decoded body, or None if no model was given or the stop
            event was set while waiting for the next attempt

        Raises:
            StatusError: for non-success responses that are terminal or
                outlast the retry budget
            RequestFailedError: if no response was received
        """
        last_error: Optional[StatusError] = None
        backoff = ExponentialBackoff()

        for attempt in range(MAX_RETRIES):
            if attempt:
                delay = backoff.next_backoff()
                self.logger.debug(
                    f"Retrying {request.method} {request.url} in {delay:.2f}s "
                    f"(attempt {attempt + 1}/{MAX_RETRIES})"
                )
                if self.stop_event.wait(delay):
                    self.logger.debug(f"Stop requested, abandoning {request.method} {request.url}")
                    return None

            try:
                return self._attempt_request(request, response_model)
            except StatusError as e:
                if not e.retryable:
                    raise
                last_error = e
                self.logger.debug(f"Attempt {attempt + 1}/{MAX_RETRIES} failed: {e}")

        raise last_error

    def _build_client(self, config: ClusterConfig) -> httpx.Client:
        verify = config.trust_anchors if config.trust_anchors is not None else True
        return httpx.Client(
            verify=verify,
            timeout=httpx.Timeout(None, connect=CONNECT_TIMEOUT),
        )

    def _attempt_request(
        self,
        request: ApiRequest,
        response_model: Optional[Type[ModelT]],
    ) -> Optional[ModelT]:
        """
        Try one single request.

        The response is always closed before returning, whichever way the
        classification goes.
        """
        config = self._config

        headers = dict(request.headers)
        headers["Authorization"] = f"Bearer {config.bearer_token}"
        headers["Accept"] = "application/json"

        with self._build_client(config) as client:
            http_request = client.build_request(
                request.method,
                request.url,
                content=request.body,
                headers=headers,
            )
            try:
                response = client.send(http_request, stream=True)
            except httpx.RequestError as e:
                raise self._request_failed(config, request, e) from e

            try:
                return self._handle_response(config, request, response, response_model)
            finally:
                self._close(response)

    def _request_failed(
        self, config: ClusterConfig, request: ApiRequest, error: httpx.RequestError
    ) -> RequestFailedError:
        reason = redact(str(error), [config.bearer_token])
        return RequestFailedError(
            f"request failed: req method: {request.method}, req url: {request.url}: {reason}"
        )

    def _handle_response(
        self,
        config: ClusterConfig,
        request: ApiRequest,
        response: httpx.Response,
        response_model: Optional[Type[ModelT]],
    ) -> Optional[ModelT]:
        status = response.status_code

        if status in SUCCESS_STATUS_CODES:
            if response_model is None:
                return None
            try:
                body = response.read()
            except httpx.RequestError as e:
                raise self._request_failed(config, request, e) from e
            return response_model.model_validate_json(body)

        info = sanitized_debugging_info(
            request, status, self._read_body(response), [config.bearer_token]
        )

        if status in AUTH_STATUS_CODES:
            # The token file may have been rotated since we last read it.
            refreshed = self.config_provider.load()
            if refreshed.bearer_token == config.bearer_token:
                raise UnauthorizedError(status, info)
            self._swap_config(refreshed)
            raise UnauthorizedError(status, info, retryable=True)

        if status == 404:
            raise NotFoundError(status, info)

        raise UnexpectedStatusError(status, info, retryable=status in TRANSIENT_STATUS_CODES)

    def _swap_config(self, config: ClusterConfig) -> None:
        with self._config_lock:
            self._config = config
        self.logger.info("Service account token rotated, retrying with refreshed credentials")

    def _read_body(self, response: httpx.Response) -> bytes:
        try:
            return response.read()
        except httpx.HTTPError as e:
            self.logger.debug(f"Unable to read response body: {e}")
            return b""

    def _close(self, response: httpx.Response) -> None:
        try:
            response.close()
        except Exception as e:
            # Unclosed responses hold on to pooled connections.
            self.logger.warning(f"unable to close response body: {e}")
