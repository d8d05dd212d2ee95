"""Error classifiers for transport exceptions.

Converts httpx exceptions raised while talking to the remote translation API
into standardized OperationResult objects.

Usage:
    from infrastructure.operations.classifiers import classify_transport_error

    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        return classify_transport_error(exc)
"""

import httpx

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def classify_transport_error(exc: Exception) -> OperationResult:
    """Classify an httpx failure into an OperationResult.

    Status Code Mapping:
    - 429: Rate limiting -> TRANSIENT_ERROR
    - 404: Not found -> NOT_FOUND
    - 5xx: Server error -> TRANSIENT_ERROR
    - Other 4xx: Rejected request -> PERMANENT_ERROR
    - Timeouts and connection failures -> TRANSIENT_ERROR

    Args:
        exc: Exception raised by httpx (or any other transport failure)

    Returns:
        OperationResult with status, message and error_code
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        error_code = f"HTTP_{status_code}"
        message = f"HTTP {status_code} from {exc.request.url}"

        if status_code == 429 or status_code >= 500:
            return OperationResult.transient_error(message, error_code=error_code)
        if status_code == 404:
            return OperationResult.error(
                OperationStatus.NOT_FOUND, message, error_code=error_code
            )
        return OperationResult.permanent_error(message, error_code=error_code)

    if isinstance(exc, httpx.TimeoutException):
        return OperationResult.transient_error(
            f"Request timed out: {exc}", error_code="TRANSPORT_TIMEOUT"
        )

    # Connection errors, protocol errors and anything else the transport raises
    return OperationResult.transient_error(
        f"Transport error: {type(exc).__name__}: {exc}",
        error_code="TRANSPORT_ERROR",
    )
