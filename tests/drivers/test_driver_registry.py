"""
tests/drivers/test_driver_registry.py - DriverRegistry and create_driver
"""

import pytest
from conftest import FakeDriver

from cloud_inventory.drivers.registry import DriverRegistry, create_driver, list_drivers, validate_definition
from cloud_inventory.exceptions import ConfigurationError, DriverNotFoundError


class TestValidateDefinition:
    """validate_definition"""

    def test_normalizes_driver_key(self):
        assert validate_definition({"driver": " AWS "})["driver"] == "aws"

    @pytest.mark.parametrize(
        "definition",
        [
            None,
            {},
            {"driver": ""},
            {"driver": "aws", "credentials": "k"},
            {"driver": "aws", "config": 1},
            {"driver": "aws", "id": ""},
            {"driver": "aws", "regions": ["us-east-1"]},
        ],
    )
    def test_invalid(self, definition):
        with pytest.raises(ConfigurationError):
            validate_definition(definition)


class TestDriverRegistry:
    """DriverRegistry"""

    def test_register_and_create(self):
        registry = DriverRegistry(builtins={})
        registry.register("Fake", FakeDriver)

        driver = registry.create({"driver": "fake", "id": "test", "config": {"regions": ["r9"]}})

        assert isinstance(driver, FakeDriver)
        assert driver.id == "test"
        assert driver.settings.regions == ["r9"]
        assert registry.available() == ["fake"]

    def test_create_from_key_and_kwargs(self):
        registry = DriverRegistry(builtins={})
        registry.register("fake", FakeDriver)

        driver = registry.create("fake", credentials={"token": "x"})

        assert driver.credentials == {"token": "x"}

    def test_unknown_key_lists_valid_keys(self):
        registry = DriverRegistry(builtins={"aws": ("cloud_inventory.drivers.aws", "AwsInventoryDriver")})

        with pytest.raises(DriverNotFoundError) as exc_info:
            registry.create({"driver": "gcp"})

        assert exc_info.value.available == ["aws"]
        assert "aws" in str(exc_info.value)

    def test_duplicate_registration(self):
        registry = DriverRegistry(builtins={})
        registry.register("fake", FakeDriver)

        with pytest.raises(ConfigurationError):
            registry.register("fake", FakeDriver)

        registry.register("fake", FakeDriver, replace=True)

    def test_lazy_builtin_is_imported_on_first_use(self):
        registry = DriverRegistry(builtins={"fake": ("conftest", "FakeDriver")})

        assert not registry.is_loaded("fake")
        assert registry.load("fake") is FakeDriver
        assert registry.is_loaded("fake")

    def test_broken_builtin(self):
        registry = DriverRegistry(builtins={"broken": ("cloud_inventory.no_such_module", "Driver")})

        with pytest.raises(ConfigurationError) as exc_info:
            registry.load("broken")

        assert not isinstance(exc_info.value, DriverNotFoundError)

    def test_unregister(self):
        registry = DriverRegistry(builtins={})
        registry.register("fake", FakeDriver)

        assert registry.unregister("fake") is True
        assert registry.unregister("fake") is False


class TestModuleRegistry:
    """Module-level registry"""

    def test_builtin_keys(self):
        assert {"aws", "oci", "oracle"} <= set(list_drivers())

    def test_create_aws_driver(self, aws_credentials):
        driver = create_driver({"driver": "aws", "config": {"services": ["ec2"]}})

        assert driver.provider == "aws"
        assert driver.configured_services() == ["ec2"]
        assert driver.settings.regions == ["us-east-1"]

    def test_oracle_alias(self):
        driver = create_driver("oracle", config={"regions": ["us-ashburn-1"]})

        assert driver.provider == "oci"
        assert driver.driver == "oracle"

    def test_unknown_driver(self):
        with pytest.raises(DriverNotFoundError):
            create_driver({"driver": "gcp"})
