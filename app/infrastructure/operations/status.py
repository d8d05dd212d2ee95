"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of loads and
sync passes for appropriate error handling.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed, possibly with isolated item failures
        TRANSIENT_ERROR: Error that may go away on a later attempt (network, timeout)
        PERMANENT_ERROR: Error that will not go away by itself (bad payload, config)
        NOT_FOUND: Remote resource or backing file does not exist
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
