"""
cloud_inventory/exceptions.py - Exception hierarchy

Exceptions shared by every driver, the orchestrator and the registry.

Hierarchy:
    InventoryError (base)
    ├── ConfigurationError      invalid construction input, fatal
    │   └── DriverNotFoundError unknown driver key
    ├── AuthenticationError     no usable credentials / identity, fatal
    ├── ServiceCollectionError  one service failed, reported and skipped
    └── ChildExpansionError     child listing failed under a parent, reported

Only ConfigurationError and AuthenticationError leave ``list_resources``.

Usage:
    from cloud_inventory.exceptions import AuthenticationError

    raise AuthenticationError(
        "aws",
        checked=["credentials.access_key_id", "credentials.profile"],
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

# =============================================================================
# Base
# =============================================================================


class InventoryError(Exception):
    """Base class for every cloud_inventory error

    Attributes:
        message: error message
        cause: underlying exception, if any
        details: structured context for logging
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Error as a plain dict"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# Fatal errors
# =============================================================================


class ConfigurationError(InventoryError):
    """Statically invalid driver configuration. Not retriable."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.key = key
        if key:
            self.details["key"] = key


class DriverNotFoundError(ConfigurationError):
    """No driver is registered under the requested key"""

    def __init__(self, driver_key: str, available: Iterable[str]):
        self.driver_key = driver_key
        self.available = sorted(available)
        valid = ", ".join(self.available) or "none"
        super().__init__(
            f"Unknown cloud driver '{driver_key}'. Valid drivers: {valid}",
            key="driver",
        )
        self.details["available"] = self.available


class AuthenticationError(InventoryError):
    """No credential source produced usable credentials, or identity lookup failed

    Attributes:
        provider: provider key ("aws", "oci")
        checked: every input that was inspected, in resolution order
    """

    def __init__(
        self,
        provider: str,
        checked: Iterable[str] = (),
        reason: str | None = None,
        cause: Exception | None = None,
    ):
        self.provider = provider
        self.checked = list(checked)
        message = reason or f"No usable {provider} credentials found"
        if self.checked:
            message = f"{message} (checked: {', '.join(self.checked)})"
        super().__init__(message, cause)
        self.details.update({"provider": provider, "checked": self.checked})


# =============================================================================
# Reported errors
# =============================================================================


class ServiceCollectionError(InventoryError):
    """One service (or one region of a service) failed to list"""

    def __init__(
        self,
        service: str,
        cause: Exception,
        region: str | None = None,
    ):
        scope = f"{service}/{region}" if region else service
        super().__init__(f"Collection failed [{scope}]", cause)
        self.service = service
        self.region = region
        self.details.update({"service": service, "region": region})


class ChildExpansionError(InventoryError):
    """Sub-resource listing failed under an already emitted parent"""

    def __init__(
        self,
        service: str,
        parent_id: str,
        child_type: str,
        cause: Exception,
        region: str | None = None,
    ):
        super().__init__(f"Could not list {child_type} under {parent_id}", cause)
        self.service = service
        self.parent_id = parent_id
        self.child_type = child_type
        self.region = region
        self.details.update(
            {
                "service": service,
                "parent_id": parent_id,
                "child_type": child_type,
                "region": region,
            }
        )


def is_fatal(error: BaseException) -> bool:
    """True for errors that must abort a discovery run"""
    return isinstance(error, (ConfigurationError, AuthenticationError))


# =============================================================================
# Provider error helpers
# =============================================================================

ACCESS_DENIED_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedAccess",
    "UnauthorizedOperation",
    "NotAuthorizedOrNotFound",
    "NotAuthenticated",
}

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "TooManyRequests",
    "RateExceeded",
}

NOT_FOUND_CODES = {
    "ResourceNotFoundException",
    "NotFoundException",
    "NoSuchEntity",
    "NoSuchBucket",
    "NoSuchTagSet",
    "NotFound",
    "InvalidInstanceID.NotFound",
}


def provider_error_code(error: BaseException) -> str | None:
    """Extract the provider error code

    botocore ClientError carries it in ``response["Error"]["Code"]``,
    oci ServiceError in ``code``.
    """
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return response.get("Error", {}).get("Code") or None
    code = getattr(error, "code", None)
    if isinstance(code, str):
        return code
    return None


def is_access_denied(error: BaseException) -> bool:
    status = getattr(error, "status", None)
    if status in (401, 403):
        return True
    return provider_error_code(error) in ACCESS_DENIED_CODES


def is_throttling(error: BaseException) -> bool:
    if getattr(error, "status", None) == 429:
        return True
    return provider_error_code(error) in THROTTLING_CODES


def is_not_found(error: BaseException) -> bool:
    if getattr(error, "status", None) == 404:
        return True
    return provider_error_code(error) in NOT_FOUND_CODES
