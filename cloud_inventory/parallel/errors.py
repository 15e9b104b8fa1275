"""
cloud_inventory/parallel/errors.py - Error classification and collection

Collects every non-fatal failure of a discovery run (service, region, child
and side lookups) with enough context to diagnose it, and logs it through the
driver's log sink.

Components:
- ErrorSeverity: severity, decides the log level
- CollectedError: one reported failure
- categorize_error / categorize_error_code / get_error_code: classification
- ErrorCollector: thread-safe collector
- try_or_default: best-effort call returning a default on failure

Example:
    collector = ErrorCollector("aws")

    tags = try_or_default(
        lambda: s3.get_bucket_tagging(Bucket=name)["TagSet"],
        default=[],
        collector=collector,
        service="s3",
        operation="get_bucket_tagging",
    )
"""

from __future__ import annotations

import logging
import threading
import traceback
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from ..exceptions import InventoryError, is_access_denied, is_not_found, is_throttling, provider_error_code
from .types import ErrorCategory

logger = logging.getLogger(__name__)

T = TypeVar("T")

LogSink = Callable[[str, str, dict[str, Any]], None]


class ErrorSeverity(Enum):
    """Severity of a collected error"""

    CRITICAL = "critical"  # whole service lost
    WARNING = "warning"  # region or child listing lost
    INFO = "info"
    DEBUG = "debug"  # side lookups (tags, locations)


_LOG_LEVELS = {
    ErrorSeverity.CRITICAL: ("error", logging.ERROR),
    ErrorSeverity.WARNING: ("warn", logging.WARNING),
    ErrorSeverity.INFO: ("info", logging.INFO),
    ErrorSeverity.DEBUG: ("debug", logging.DEBUG),
}


def categorize_error_code(error_code: str) -> ErrorCategory:
    """Classify an error code string by keyword

    Args:
        error_code: provider error code (e.g. "AccessDenied", "TooManyRequests")

    Returns:
        ErrorCategory, UNKNOWN when nothing matches
    """
    code = error_code.lower()

    if any(x in code for x in ["accessdenied", "unauthorized", "forbidden", "notauthorized", "notauthenticated"]):
        return ErrorCategory.ACCESS_DENIED
    if any(x in code for x in ["notfound", "nosuch", "doesnotexist"]):
        return ErrorCategory.NOT_FOUND
    if any(x in code for x in ["throttl", "ratelimit", "toomanyrequests", "rateexceeded"]):
        return ErrorCategory.THROTTLING
    if any(x in code for x in ["timeout", "timedout"]):
        return ErrorCategory.TIMEOUT
    if "expiredtoken" in code:
        return ErrorCategory.EXPIRED_TOKEN
    if any(x in code for x in ["invalid", "validation", "malformed"]):
        return ErrorCategory.INVALID_REQUEST
    if any(x in code for x in ["internal", "serviceunavailable", "serviceerror"]):
        return ErrorCategory.SERVICE_ERROR

    return ErrorCategory.UNKNOWN


def categorize_error(error: BaseException) -> ErrorCategory:
    """Classify an exception raised by a provider SDK or a collector"""
    if is_throttling(error):
        return ErrorCategory.THROTTLING
    if is_access_denied(error):
        return ErrorCategory.ACCESS_DENIED
    if is_not_found(error):
        return ErrorCategory.NOT_FOUND

    code = provider_error_code(error)
    if code:
        category = categorize_error_code(code)
        if category != ErrorCategory.UNKNOWN:
            return category

    status = getattr(error, "status", None)
    if isinstance(status, int) and status >= 500:
        return ErrorCategory.SERVICE_ERROR

    if isinstance(error, TimeoutError):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.NETWORK

    return ErrorCategory.UNKNOWN


def get_error_code(error: BaseException) -> str:
    """Provider error code, else the exception class name"""
    return provider_error_code(error) or error.__class__.__name__


@dataclass
class CollectedError:
    """One reported failure

    Attributes:
        timestamp: when it was collected (UTC)
        provider: provider key
        service: service being collected
        region: region or None for global scope
        operation: what was being done ("collect", "list_subnets", ...)
        error_type: class name of the original exception
        error_code: provider error code or class name
        error_message: message of the original exception
        severity: ErrorSeverity
        category: ErrorCategory
        resource_id: parent / resource involved, if any
        stack: formatted traceback, if captured
    """

    timestamp: datetime
    provider: str
    service: str
    region: str | None
    operation: str
    error_type: str
    error_code: str
    error_message: str
    severity: ErrorSeverity
    category: ErrorCategory
    resource_id: str | None = None
    stack: str | None = field(default=None, repr=False)

    def __str__(self) -> str:
        loc = f"{self.service}/{self.region}" if self.region else self.service
        text = f"[{self.severity.value.upper()}] {self.provider}:{loc} - {self.operation}: {self.error_code}"
        if self.resource_id:
            text = f"{text} ({self.resource_id})"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "provider": self.provider,
            "service": self.service,
            "region": self.region,
            "operation": self.operation,
            "error_type": self.error_type,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "severity": self.severity.value,
            "category": self.category.value,
            "resource_id": self.resource_id,
            "stack": self.stack,
        }


class ErrorCollector:
    """Thread-safe collector of non-fatal failures

    Every collected error is also logged, through ``log_sink`` when given
    (the driver logger), else through this module's logger.
    """

    def __init__(self, provider: str, log_sink: LogSink | None = None):
        self.provider = provider
        self._log_sink = log_sink
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(
        self,
        error: BaseException,
        service: str,
        region: str | None = None,
        operation: str = "collect",
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        resource_id: str | None = None,
        with_stack: bool = False,
    ) -> CollectedError:
        """Record and log a failure

        ``InventoryError`` wrappers are unwrapped so classification reflects
        the provider error that caused them.
        """
        original = error.cause if isinstance(error, InventoryError) and error.cause else error
        stack = None
        if with_stack:
            stack = "".join(traceback.format_exception(type(original), original, original.__traceback__))

        collected = CollectedError(
            timestamp=datetime.now(timezone.utc),
            provider=self.provider,
            service=service,
            region=region,
            operation=operation,
            error_type=type(original).__name__,
            error_code=get_error_code(original),
            error_message=str(original),
            severity=severity,
            category=categorize_error(original),
            resource_id=resource_id,
            stack=stack,
        )

        with self._lock:
            self._errors.append(collected)

        level, stdlib_level = _LOG_LEVELS[severity]
        message = str(error) if isinstance(error, InventoryError) else str(collected)
        if self._log_sink is not None:
            self._log_sink(level, message, collected.to_dict())
        else:
            logger.log(stdlib_level, message)

        return collected

    @property
    def errors(self) -> list[CollectedError]:
        with self._lock:
            return list(self._errors)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return len(self._errors) > 0

    def for_service(self, service: str) -> list[CollectedError]:
        with self._lock:
            return [e for e in self._errors if e.service == service]

    def get_summary(self) -> str:
        """Error counts by severity, e.g. "3 errors (critical: 1, warning: 2)" """
        with self._lock:
            if not self._errors:
                return "no errors"

            by_severity: dict[str, int] = {}
            for e in self._errors:
                by_severity[e.severity.value] = by_severity.get(e.severity.value, 0) + 1

            parts = [f"{k}: {v}" for k, v in sorted(by_severity.items())]
            return f"{len(self._errors)} errors ({', '.join(parts)})"

    def clear(self) -> None:
        with self._lock:
            self._errors.clear()


def try_or_default(
    func: Callable[[], T],
    default: T,
    collector: ErrorCollector | None = None,
    service: str = "",
    region: str | None = None,
    operation: str = "",
    resource_id: str | None = None,
    severity: ErrorSeverity = ErrorSeverity.DEBUG,
) -> T:
    """Run ``func``, returning ``default`` when it raises

    For side lookups (tags, bucket location) whose failure must not drop the
    resource itself.

    Returns:
        ``func()`` or ``default``
    """
    try:
        return func()
    except Exception as e:
        if collector:
            collector.collect(e, service, region, operation, severity, resource_id)
        else:
            logger.debug(f"[{service}/{region}] {operation}: {get_error_code(e)}")
        return default
