"""Operation result types and status enums.

Standardized result types for operations that recover from item-level
failures, plus the classifier for transport exceptions.
"""

from infrastructure.operations.classifiers import classify_transport_error
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_transport_error",
]
