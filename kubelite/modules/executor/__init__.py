"""
Executor Module - Black Box Interface

Purpose: Send requests to the Kubernetes API server and classify the outcome
Interface: RequestExecutor.execute()
Hidden: Retry loop, backoff schedule, token refresh, response cleanup

Callers only build requests; retry policy is fixed and not configurable.
"""

from .backoff import ExponentialBackoff
from .executor import MAX_RETRIES, RequestExecutor

__all__ = ["ExponentialBackoff", "MAX_RETRIES", "RequestExecutor"]
