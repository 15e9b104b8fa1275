"""
cloud_inventory/parallel - Worker pool, client factory and error collection

Components:
- execute_ordered / ParallelConfig: bounded worker pool over service units
- get_client: boto3 client with retry settings
- ErrorCollector / CollectedError / try_or_default: non-fatal failure reporting

Example:
    from cloud_inventory.parallel import ErrorCollector, try_or_default

    collector = ErrorCollector("aws")
    tags = try_or_default(lambda: fetch_tags(arn), default=[], collector=collector, service="rds")
"""

from .client import get_client
from .errors import (
    CollectedError,
    ErrorCollector,
    ErrorSeverity,
    categorize_error,
    categorize_error_code,
    get_error_code,
    try_or_default,
)
from .executor import ParallelConfig, execute_ordered
from .types import ErrorCategory, TaskResult

__all__: list[str] = [
    # Executor
    "ParallelConfig",
    "execute_ordered",
    # Client
    "get_client",
    # Error handling
    "ErrorCollector",
    "ErrorSeverity",
    "CollectedError",
    "categorize_error",
    "categorize_error_code",
    "get_error_code",
    "try_or_default",
    # Types
    "ErrorCategory",
    "TaskResult",
]
