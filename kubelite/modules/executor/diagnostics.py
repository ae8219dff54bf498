"""
Sanitized request/response descriptions for errors and logs.

Headers are never rendered: the live request carries the bearer token in
its Authorization header.
"""

from typing import Iterable, Optional

from ..api.models import ApiRequest

REDACTED = "<redacted>"


def _text(body: Optional[bytes]) -> str:
    if not body:
        return ""
    return body.decode("utf-8", errors="replace")


def redact(text: str, secrets: Iterable[str]) -> str:
    """Replace every literal secret in text."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


def sanitized_debugging_info(
    request: ApiRequest,
    status_code: int,
    response_body: Optional[bytes],
    secrets: Iterable[str] = (),
) -> str:
    """
    Describe a request and its response without headers.

    Args:
        request: Request that was sent
        status_code: Status code of the response
        response_body: Raw response body, if any was read
        secrets: Strings to scrub from the rendered bodies

    Returns:
        One-line description safe to log or embed in exceptions
    """
    info = (
        f"req method: {request.method}, req url: {request.url}, "
        f"req body: {_text(request.body)}, resp statuscode: {status_code}, "
        f"resp body: {_text(response_body)}"
    )
    return redact(info, secrets)
