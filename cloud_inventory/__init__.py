"""
cloud_inventory - Multi-cloud resource inventory

Drivers list every resource of a cloud account as NormalizedResource records,
one lazy stream per call, with per-service failure isolation.

Usage:
    from cloud_inventory import create_driver

    with create_driver({"driver": "aws", "config": {"services": ["ec2", "s3"]}}) as driver:
        for resource in driver.list_resources():
            print(resource.resource_type, resource.resource_id)

Note:
    Submodules are imported lazily on first attribute access.
"""

__version__ = "0.1.0"

__all__ = [
    # Drivers
    "Driver",
    "create_driver",
    "register_driver",
    "list_drivers",
    # Types
    "NormalizedResource",
    "ProgressInfo",
    "HealthStatus",
    # Errors
    "InventoryError",
    "ConfigurationError",
    "DriverNotFoundError",
    "AuthenticationError",
    "ServiceCollectionError",
    "ChildExpansionError",
    # Progress
    "discovery_progress",
]

_IMPORT_MAPPING = {
    "Driver": (".drivers.base", "Driver"),
    "create_driver": (".drivers.registry", "create_driver"),
    "register_driver": (".drivers.registry", "register_driver"),
    "list_drivers": (".drivers.registry", "list_drivers"),
    "NormalizedResource": (".types", "NormalizedResource"),
    "ProgressInfo": (".types", "ProgressInfo"),
    "HealthStatus": (".types", "HealthStatus"),
    "InventoryError": (".exceptions", "InventoryError"),
    "ConfigurationError": (".exceptions", "ConfigurationError"),
    "DriverNotFoundError": (".exceptions", "DriverNotFoundError"),
    "AuthenticationError": (".exceptions", "AuthenticationError"),
    "ServiceCollectionError": (".exceptions", "ServiceCollectionError"),
    "ChildExpansionError": (".exceptions", "ChildExpansionError"),
    "discovery_progress": (".progress", "discovery_progress"),
}


def __getattr__(name: str):
    if name in _IMPORT_MAPPING:
        module_path, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_path, __name__)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
