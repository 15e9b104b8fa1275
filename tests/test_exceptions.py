"""
tests/test_exceptions.py - Exception hierarchy
"""

from cloud_inventory.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DriverNotFoundError,
    InventoryError,
    ServiceCollectionError,
    is_fatal,
)


class TestExceptions:
    """Exception messages and details"""

    def test_driver_not_found_lists_valid_keys(self):
        error = DriverNotFoundError("gcp", ["oci", "aws"])

        assert isinstance(error, ConfigurationError)
        assert error.available == ["aws", "oci"]
        assert str(error) == "Unknown cloud driver 'gcp'. Valid drivers: aws, oci"

    def test_authentication_error_names_inputs(self):
        error = AuthenticationError("aws", checked=["credentials.profile", "environment"])

        assert str(error) == "No usable aws credentials found (checked: credentials.profile, environment)"
        assert error.details["checked"] == ["credentials.profile", "environment"]

    def test_service_collection_error_wraps_cause(self):
        cause = RuntimeError("boom")
        error = ServiceCollectionError("ec2", cause, region="us-east-1")

        assert error.cause is cause
        assert str(error) == "Collection failed [ec2/us-east-1]: boom"
        assert error.to_dict()["details"] == {"service": "ec2", "region": "us-east-1"}

    def test_is_fatal(self):
        assert is_fatal(ConfigurationError("x"))
        assert is_fatal(AuthenticationError("oci"))
        assert not is_fatal(ServiceCollectionError("ec2", RuntimeError()))
        assert not is_fatal(InventoryError("x"))
        assert not is_fatal(RuntimeError())
