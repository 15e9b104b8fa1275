"""
cloud_inventory/drivers - Driver contract and registry

Provider packages (aws, oci) are imported by the registry on first use.

Usage:
    from cloud_inventory.drivers import create_driver

    driver = create_driver("oci", credentials={"profile": "PROD"})
"""

from .base import Driver, DriverLogger
from .registry import DriverRegistry, create_driver, list_drivers, register_driver, registry, validate_definition

__all__ = [
    "Driver",
    "DriverLogger",
    "DriverRegistry",
    "create_driver",
    "list_drivers",
    "register_driver",
    "registry",
    "validate_definition",
]
