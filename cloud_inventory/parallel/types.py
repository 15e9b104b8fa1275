"""
cloud_inventory/parallel/types.py - Worker pool and error classification types
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCategory(Enum):
    """Failure classification used in logs and collected errors"""

    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    THROTTLING = "throttling"
    TIMEOUT = "timeout"
    NETWORK = "network"
    EXPIRED_TOKEN = "expired_token"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    UNKNOWN = "unknown"


@dataclass
class TaskResult(Generic[T]):
    """Outcome of one unit run on the worker pool

    Attributes:
        unit: unit label (service name)
        success: False when the unit raised
        data: unit return value
        error: exception raised by the unit
        duration_ms: wall time spent in the unit
    """

    unit: str
    success: bool
    data: T | None = None
    error: BaseException | None = None
    duration_ms: float = 0.0
