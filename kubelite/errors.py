"""
Kubelite exceptions.

Precondition errors are raised before any network call is made. Status
errors carry the sanitized debugging info of the request that produced
them and never include request or response headers.
"""

from typing import Optional


class KubeliteError(Exception):
    """Base class for all kubelite errors."""


class NamespaceUnsetError(KubeliteError):
    """Raised when an operation is called without a namespace."""

    def __init__(self):
        super().__init__('"namespace" is unset')


class PodNameUnsetError(KubeliteError):
    """Raised when an operation is called without a pod name."""

    def __init__(self):
        super().__init__('"pod_name" is unset')


class PatchOperationUnsetError(KubeliteError):
    """Raised when a patch still carries the unset operation."""

    def __init__(self, path: Optional[str] = None):
        message = "patch operation must be set"
        if path:
            message = f"{message} (path: {path})"
        super().__init__(message)
        self.path = path


class NotInClusterError(KubeliteError):
    """Raised when the process is not running with in-cluster configuration."""

    def __init__(self):
        super().__init__(
            "unable to load in-cluster configuration, "
            "KUBERNETES_SERVICE_HOST and KUBERNETES_SERVICE_PORT must be defined"
        )


class RequestFailedError(KubeliteError):
    """Raised when the request never produced a response (connection, TLS, ...)."""


class StatusError(KubeliteError):
    """
    Raised when the API answered with a status code that is not a success.

    Attributes:
        status_code: HTTP status code of the response
        debugging_info: Sanitized description of the request and response
        retryable: Whether the executor may try the request again
    """

    prefix = "unexpected status code"

    def __init__(self, status_code: int, debugging_info: str, retryable: bool = False):
        super().__init__(self._format(debugging_info))
        self.status_code = status_code
        self.debugging_info = debugging_info
        self.retryable = retryable

    def _format(self, debugging_info: str) -> str:
        return f"{self.prefix}: {debugging_info}"


class UnauthorizedError(StatusError):
    """401 or 403. Retryable only when a rotated token was picked up."""

    prefix = "bad status code"


class NotFoundError(StatusError):
    """404. Never retried; callers can branch on it."""

    def __init__(self, status_code: int, debugging_info: str):
        super().__init__(status_code, debugging_info, retryable=False)

    def _format(self, debugging_info: str) -> str:
        return debugging_info


class UnexpectedStatusError(StatusError):
    """Any other non-success status. Retryable for 500, 502, 503 and 504."""
