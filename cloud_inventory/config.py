"""
cloud_inventory/config.py - Library defaults and driver settings

Components:
- Constants shared by drivers (redaction marker, global scope, regions)
- get_default_region: AWS region from the environment
- aws_client_config: botocore retry, timeout and pool settings
- DriverSettings: validated view over a driver's ``config`` mapping

Example:
    settings = DriverSettings.from_config(
        {"services": ["ec2", "s3"], "regions": "us-west-2", "max_workers": 4},
        default_regions=["us-east-1"],
    )
    settings.regions  # ["us-west-2"]
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from botocore.config import Config

from .exceptions import ConfigurationError

# =============================================================================
# Defaults
# =============================================================================

# Marker written over sensitive configuration fields
REDACTION_MARKER = "***REDACTED***"

# Client cache scope for non-regional services
GLOBAL_SCOPE = "global"

# Sequential collection unless a driver config asks for a worker pool
DEFAULT_MAX_WORKERS = 1
MAX_WORKERS_LIMIT = 32

# Region used for AWS global endpoints (IAM, S3 ListBuckets, STS, CloudFront, Route 53)
AWS_GLOBAL_REGION = "us-east-1"
AWS_DEFAULT_REGION = "us-east-1"

# botocore client settings
AWS_MAX_ATTEMPTS = 5
AWS_RETRY_MODE = "adaptive"
AWS_CONNECT_TIMEOUT = 10
AWS_READ_TIMEOUT = 30
AWS_MAX_POOL_CONNECTIONS = 25


def get_default_region() -> str:
    """AWS region from AWS_REGION / AWS_DEFAULT_REGION, else us-east-1"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or AWS_DEFAULT_REGION


def aws_client_config(max_workers: int = DEFAULT_MAX_WORKERS) -> Config:
    """botocore settings for the AWS clients of one driver

    Adaptive retries and fixed timeouts; the HTTP pool is at least
    ``AWS_MAX_POOL_CONNECTIONS`` and grows with ``max_workers``.
    """
    return Config(
        retries={"max_attempts": AWS_MAX_ATTEMPTS, "mode": AWS_RETRY_MODE},
        connect_timeout=AWS_CONNECT_TIMEOUT,
        read_timeout=AWS_READ_TIMEOUT,
        max_pool_connections=max(AWS_MAX_POOL_CONNECTIONS, max_workers * 2),
    )


def normalize_service_name(name: Any) -> str:
    """Trim and lower-case a service name. None becomes an empty string."""
    if name is None:
        return ""
    return str(name).strip().lower()


def ensure_list(value: Any) -> list[Any]:
    """Wrap a scalar in a list. None and empty values become []."""
    if not value:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


# =============================================================================
# Driver settings
# =============================================================================


@dataclass
class DriverSettings:
    """Validated driver configuration

    Attributes:
        services: configured service names in order, None for the provider catalog
        regions: regions to visit, in order
        max_workers: service-level worker pool size (1 = sequential)
        extra: every other key of the config mapping, untouched
    """

    services: list[str] | None = None
    regions: list[str] = field(default_factory=list)
    max_workers: int = DEFAULT_MAX_WORKERS
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}", key="max_workers")
        if self.max_workers > MAX_WORKERS_LIMIT:
            self.max_workers = MAX_WORKERS_LIMIT

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any] | None,
        default_regions: Iterable[str] | None = None,
    ) -> DriverSettings:
        """Parse a driver ``config`` mapping

        Args:
            config: raw driver configuration
            default_regions: regions used when neither ``regions`` nor ``region`` is set

        Raises:
            ConfigurationError: malformed services, regions or max_workers
        """
        config = dict(config or {})

        raw_services = config.pop("services", None)
        services: list[str] | None = None
        if raw_services is not None:
            if not isinstance(raw_services, (str, list, tuple)):
                raise ConfigurationError("services must be a string or a list of strings", key="services")
            services = _unique(normalize_service_name(s) for s in ensure_list(raw_services))

        raw_regions = config.pop("regions", None) or config.pop("region", None)
        config.pop("region", None)
        if raw_regions is not None and not isinstance(raw_regions, (str, list, tuple)):
            raise ConfigurationError("regions must be a string or a list of strings", key="regions")
        regions = _unique(str(r).strip() for r in ensure_list(raw_regions))
        if not regions:
            regions = _unique(default_regions or [])

        raw_workers = config.pop("max_workers", DEFAULT_MAX_WORKERS)
        try:
            max_workers = int(raw_workers)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"max_workers must be an integer, got {raw_workers!r}", key="max_workers", cause=e)

        return cls(services=services, regions=regions, max_workers=max_workers, extra=config)
