"""Operation result dataclass.

Uniform result type returned from multi-step operations (table loads, sync
passes) that recover from item-level failures instead of raising.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Uniform result returned from operations.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs/troubleshooting
        data: Optional[Any] -- optional payload
        error_code: Optional[str] -- optional machine error code
        failures: Dict[str, str] -- item-level failures that did not abort the
            operation (e.g. language code -> error message)
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        """True if status is SUCCESS, even when some items failed."""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_partial(self) -> bool:
        """True for a successful operation that skipped failed items."""
        return self.is_success and bool(self.failures)

    @classmethod
    def success(
        cls,
        data: Optional[Any] = None,
        message: str = "ok",
        failures: Optional[Dict[str, str]] = None,
    ) -> "OperationResult":
        """Create a SUCCESS OperationResult.

        Args:
            data: Optional payload to include with the result
            message: Human-friendly success message
            failures: Item-level failures that were recovered from

        Returns:
            OperationResult with SUCCESS status
        """
        return cls(
            status=OperationStatus.SUCCESS,
            message=message,
            data=data,
            failures=dict(failures or {}),
        )

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create an error OperationResult.

        Args:
            status: OperationStatus indicating error type
            message: Human-friendly error message
            error_code: Optional machine error code
            data: Optional payload to include with the error

        Returns:
            OperationResult with specified error status
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            data=data,
        )

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a transient error result (network failures, timeouts, 5xx)."""
        return cls.error(OperationStatus.TRANSIENT_ERROR, message, error_code)

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a permanent error result.

        Use for errors that will not succeed without intervention, such as:
        - Malformed index or table payloads
        - Read-only storage
        - Rejected requests (4xx)
        """
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)
