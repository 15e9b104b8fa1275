"""
cloud_inventory/drivers/base.py - Driver contract

Every provider implements the same four capabilities:

    initialize()            idempotent bootstrap (credentials, account id)
    list_resources(options) lazy, restartable stream of NormalizedResource
    health_check()          cheap liveness probe
    destroy()               drop cached clients, idempotent

The base class only holds passive configuration (id, driver key,
credentials, config, logger sink, parsed settings) and the per-instance
ClientCache. Providers declare their service enum and catalog and implement
``_initialize``.

Example:
    driver = AwsInventoryDriver(
        driver="aws",
        credentials={"profile": "prod"},
        config={"services": ["ec2", "s3"], "regions": ["us-east-1", "eu-west-1"]},
    )
    with driver:
        for resource in driver.list_resources({"discovery": {"exclude": ["s3"]}}):
            print(resource.resource_type, resource.resource_id)
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from ..auth.cache import ClientCache
from ..config import DriverSettings
from ..discovery.normalize import Tags, build_resource
from ..exceptions import ConfigurationError
from ..types import HealthStatus, NormalizedResource

if TYPE_CHECKING:
    from ..discovery.orchestrator import Collector, DiscoveryRun

logger = logging.getLogger(__name__)

LogCallback = Callable[[str, str, Mapping[str, Any]], Any]

_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


# =============================================================================
# Logger
# =============================================================================


class DriverLogger:
    """Four-level logger for one driver

    Writes to the stdlib logger ``cloud_inventory.drivers.<key>`` and
    forwards ``(level, message, meta)`` to the caller's sink. A sink that
    raises is ignored.
    """

    def __init__(self, driver_key: str, sink: LogCallback | None = None):
        self.sink = sink
        self._logger = logging.getLogger(f"cloud_inventory.drivers.{driver_key}")

    def log(self, level: str, message: str, meta: Mapping[str, Any] | None = None) -> None:
        meta = dict(meta or {})
        stdlib_level = _STDLIB_LEVELS.get(level, logging.INFO)
        if meta:
            self._logger.log(stdlib_level, f"{message} {meta}")
        else:
            self._logger.log(stdlib_level, message)

        if self.sink is None:
            return
        try:
            self.sink(level, message, meta)
        except Exception as e:
            self._logger.debug(f"log sink failed: {e}")

    def debug(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self.log("debug", message, meta)

    def info(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self.log("info", message, meta)

    def warn(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self.log("warn", message, meta)

    def error(self, message: str, meta: Mapping[str, Any] | None = None) -> None:
        self.log("error", message, meta)


# =============================================================================
# Driver
# =============================================================================


class Driver(ABC):
    """Base class of every provider driver

    Class attributes set by providers:
        provider: backend tag written on every resource
        service_enum: Enum of known service names
        sensitive_fields: top-level configuration fields to redact

    Attributes:
        id: driver instance id (defaults to the driver key)
        driver: driver key used to construct this instance
        credentials: opaque credential mapping
        config: opaque configuration mapping
        settings: parsed DriverSettings
        clients: per-instance ClientCache
        account_id: resolved by ``initialize()``
        last_run: state of the most recent list_resources call
    """

    provider: ClassVar[str] = ""
    service_enum: ClassVar[type[Enum]]
    sensitive_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(
        self,
        driver: str | None = None,
        id: str | None = None,
        credentials: Mapping[str, Any] | None = None,
        config: Mapping[str, Any] | None = None,
        logger: LogCallback | None = None,
    ):
        if not isinstance(driver, str) or not driver.strip():
            raise ConfigurationError("Cloud driver definition requires a 'driver' key", key="driver")
        if credentials is not None and not isinstance(credentials, Mapping):
            raise ConfigurationError("credentials must be a mapping", key="credentials")
        if config is not None and not isinstance(config, Mapping):
            raise ConfigurationError("config must be a mapping", key="config")
        if logger is not None and not callable(logger):
            raise ConfigurationError("logger must be callable", key="logger")

        self.driver = driver.strip().lower()
        self.id = id or self.driver
        self.credentials: dict[str, Any] = dict(credentials or {})
        self.config: dict[str, Any] = dict(config or {})
        self.log = DriverLogger(self.driver, logger)
        self.settings = DriverSettings.from_config(self.config, default_regions=self.default_regions())
        self.clients = ClientCache(self.provider or self.driver)
        self.account_id: str | None = None
        self.last_run: DiscoveryRun | None = None

        self._initialized = False
        self._init_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Provider hooks
    # -------------------------------------------------------------------------

    def default_regions(self) -> list[str]:
        """Regions used when the config names none"""
        return []

    @abstractmethod
    def service_catalog(self) -> Mapping[Enum, Collector]:
        """Known services mapped to their collector, in default collection order"""

    @abstractmethod
    def _initialize(self) -> None:
        """Resolve credentials and identity. Raise AuthenticationError on failure."""

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Bootstrap once; later calls are no-ops"""
        with self._init_lock:
            if self._initialized:
                return
            self._initialize()
            self._initialized = True
        self.log.info(
            f"{self.provider or self.driver} driver initialized",
            {"account_id": self.account_id, "services": self.configured_services(), "regions": self.settings.regions},
        )

    def configured_services(self) -> list[str]:
        if self.settings.services is not None:
            return list(self.settings.services)
        return [member.value for member in self.service_catalog()]

    def list_resources(self, options: Mapping[str, Any] | None = None) -> Iterator[NormalizedResource]:
        """Lazy stream of every discoverable resource

        Each call is an independent run. Only ConfigurationError and
        AuthenticationError are raised; every other failure is logged and
        skipped.

        Args:
            options: {"discovery": {"include": ..., "exclude": ...},
                      "runtime": {"emit_progress": callable}}
        """
        from ..discovery.orchestrator import run_discovery

        self.initialize()
        yield from run_discovery(self, options)

    def health_check(self) -> HealthStatus:
        """Report healthy without contacting the backend"""
        return HealthStatus(healthy=True, message="not checked", details={"driver": self.driver})

    def destroy(self) -> None:
        """Drop cached clients. Safe to call repeatedly or before initialize()."""
        self.clients.clear()
        self._initialized = False

    def __enter__(self) -> Driver:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.destroy()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, driver={self.driver!r})"

    # -------------------------------------------------------------------------
    # Collector helpers
    # -------------------------------------------------------------------------

    def resource(
        self,
        service: str,
        resource_type: str,
        raw: Any,
        resource_id: str | None,
        region: str | None = None,
        name: str | None = None,
        tags: Tags | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> NormalizedResource | None:
        """NormalizedResource stamped with this driver's provider and account"""
        return build_resource(
            provider=self.provider,
            service=service,
            resource_type=resource_type,
            raw=raw,
            resource_id=resource_id,
            sensitive_fields=self.sensitive_fields,
            account_id=self.account_id,
            region=region,
            name=name,
            tags=tags,
            metadata=metadata,
        )
