"""
cloud_inventory/drivers/registry.py - Driver key -> driver factory

Built-in drivers are imported lazily on first use of their key, so the oci
SDK is never imported by an AWS-only caller. Extra drivers are added with
``registry.register()``.

Example:
    from cloud_inventory.drivers.registry import create_driver

    driver = create_driver({"driver": "aws", "credentials": {"profile": "prod"}})
"""

from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from ..config import normalize_service_name as _normalize_key
from ..exceptions import ConfigurationError, DriverNotFoundError
from .base import Driver

logger = logging.getLogger(__name__)

DriverFactory = Callable[..., Driver]

# key -> (module, attribute)
BUILTIN_DRIVERS: dict[str, tuple[str, str]] = {
    "aws": ("cloud_inventory.drivers.aws", "AwsInventoryDriver"),
    "oci": ("cloud_inventory.drivers.oci", "OciInventoryDriver"),
    "oracle": ("cloud_inventory.drivers.oci", "OciInventoryDriver"),
}

_DEFINITION_KEYS = {"id", "driver", "credentials", "config", "logger"}


def validate_definition(definition: Any) -> dict[str, Any]:
    """Check a driver definition and return a normalized copy

    Raises:
        ConfigurationError: not a mapping, missing/blank driver, wrong field types
    """
    if not isinstance(definition, Mapping):
        raise ConfigurationError("Cloud driver definition must be a mapping")

    driver = definition.get("driver")
    if not isinstance(driver, str) or not driver.strip():
        raise ConfigurationError("Cloud driver definition requires a 'driver' key", key="driver")

    if "id" in definition and definition["id"] is not None:
        if not isinstance(definition["id"], str) or not definition["id"].strip():
            raise ConfigurationError("Cloud driver 'id' must be a non-empty string", key="id")

    for key in ("credentials", "config"):
        value = definition.get(key)
        if value is not None and not isinstance(value, Mapping):
            raise ConfigurationError(f"Cloud driver '{key}' must be a mapping", key=key)

    unknown = set(definition) - _DEFINITION_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown driver definition keys: {', '.join(sorted(unknown))}")

    normalized = dict(definition)
    normalized["driver"] = _normalize_key(driver)
    return normalized


class DriverRegistry:
    """Maps lower-case driver keys to driver factories

    Factories are Driver subclasses or any callable accepting the driver
    keyword arguments (driver, id, credentials, config, logger).
    """

    def __init__(self, builtins: Mapping[str, tuple[str, str]] | None = None):
        self._lazy: dict[str, tuple[str, str]] = dict(BUILTIN_DRIVERS if builtins is None else builtins)
        self._factories: dict[str, DriverFactory] = {}
        self._lock = threading.Lock()

    def register(self, key: str, factory: DriverFactory, replace: bool = False) -> None:
        """Register a driver factory under ``key``

        Raises:
            ConfigurationError: blank key, non-callable factory, or key taken and ``replace`` is False
        """
        name = _normalize_key(key)
        if not name:
            raise ConfigurationError("Driver key must be a non-empty string", key="driver")
        if not callable(factory):
            raise ConfigurationError(f"Driver factory for '{name}' must be callable", key="driver")

        with self._lock:
            if not replace and (name in self._factories or name in self._lazy):
                raise ConfigurationError(f"Driver '{name}' is already registered", key="driver")
            self._lazy.pop(name, None)
            self._factories[name] = factory
        logger.debug(f"Registered cloud driver: {name}")

    def unregister(self, key: str) -> bool:
        name = _normalize_key(key)
        with self._lock:
            removed = self._factories.pop(name, None) is not None
            removed = self._lazy.pop(name, None) is not None or removed
        return removed

    def available(self) -> list[str]:
        with self._lock:
            return sorted(set(self._factories) | set(self._lazy))

    def is_loaded(self, key: str) -> bool:
        with self._lock:
            return _normalize_key(key) in self._factories

    def load(self, key: str) -> DriverFactory:
        """Resolve a key, importing the driver module on first use

        Raises:
            DriverNotFoundError: unknown key
            ConfigurationError: the driver module could not be imported
        """
        name = _normalize_key(key)
        with self._lock:
            factory = self._factories.get(name)
            if factory is not None:
                return factory

            target = self._lazy.get(name)
            if target is None:
                raise DriverNotFoundError(name, set(self._factories) | set(self._lazy))

            module_path, attr_name = target
            try:
                module = importlib.import_module(module_path)
                factory = getattr(module, attr_name)
            except (ImportError, AttributeError) as e:
                raise ConfigurationError(f"Cloud driver '{name}' could not be loaded", key="driver", cause=e)

            self._factories[name] = factory
            logger.debug(f"Loaded cloud driver: {name} ({module_path}.{attr_name})")
            return factory

    def create(self, definition: Mapping[str, Any] | str | None = None, **kwargs: Any) -> Driver:
        """Build a driver from a definition mapping or a key plus keyword arguments"""
        if isinstance(definition, str):
            definition = {"driver": definition, **kwargs}
        elif definition is None:
            definition = dict(kwargs)
        else:
            definition = {**definition, **kwargs}

        validated = validate_definition(definition)
        factory = self.load(validated["driver"])
        return factory(**validated)


# Module-level registry
registry = DriverRegistry()


def create_driver(definition: Mapping[str, Any] | str | None = None, **kwargs: Any) -> Driver:
    return registry.create(definition, **kwargs)


def register_driver(key: str, factory: DriverFactory, replace: bool = False) -> None:
    registry.register(key, factory, replace=replace)


def list_drivers() -> list[str]:
    return registry.available()
