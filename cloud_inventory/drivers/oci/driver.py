"""
cloud_inventory/drivers/oci/driver.py - Oracle Cloud Infrastructure inventory driver

Config keys besides services/regions/max_workers:
    tenancy_id      tenancy OCID when the credentials do not carry one
    compartment_id  compartment to list (defaults to the tenancy)
    account_id      label written as account_id (defaults to the tenancy OCID)

Without configured regions the driver visits every READY region subscription
of the tenancy.

Example:
    from cloud_inventory.drivers.oci import OciInventoryDriver

    driver = OciInventoryDriver(
        driver="oci",
        credentials={"config_file": "~/.oci/config", "profile": "PROD"},
        config={"services": ["compute", "vcn"], "compartment_id": "ocid1.compartment.oc1..xxx"},
    )
    for resource in driver.list_resources():
        print(resource.resource_type, resource.resource_id)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import oci

from ...auth.chain import ResolvedCredentials
from ...exceptions import AuthenticationError, ConfigurationError, InventoryError
from ...types import HealthStatus
from ..base import Driver
from .credentials import OciAuth, build_credential_chain
from .services import OCI_SENSITIVE_FIELDS, SERVICE_COLLECTORS, OciService

# client name -> SDK client class
CLIENT_CLASSES: dict[str, type] = {
    "compute": oci.core.ComputeClient,
    "blockstorage": oci.core.BlockstorageClient,
    "network": oci.core.VirtualNetworkClient,
    "identity": oci.identity.IdentityClient,
    "objectstorage": oci.object_storage.ObjectStorageClient,
    "filestorage": oci.file_storage.FileStorageClient,
    "database": oci.database.DatabaseClient,
    "containerengine": oci.container_engine.ContainerEngineClient,
    "loadbalancer": oci.load_balancer.LoadBalancerClient,
    "dns": oci.dns.DnsClient,
}


class OciInventoryDriver(Driver):
    """Inventory driver for one OCI tenancy/compartment"""

    provider = "oci"
    service_enum = OciService
    sensitive_fields = OCI_SENSITIVE_FIELDS

    def __init__(self, **kwargs: Any):
        super().__init__(**kwargs)
        self.auth: OciAuth | None = None
        self.credential_source: ResolvedCredentials[OciAuth] | None = None
        self.tenancy_id: str | None = None
        self.compartment_id: str | None = None
        self.home_region: str | None = None
        self._configured_regions = list(self.settings.regions)

    def service_catalog(self) -> Mapping[OciService, Any]:
        return SERVICE_COLLECTORS

    def _initialize(self) -> None:
        resolved = build_credential_chain().resolve(self.credentials)
        auth = resolved.value
        extra = self.settings.extra

        tenancy_id = auth.tenancy_id or extra.get("tenancy_id")
        if not tenancy_id:
            raise AuthenticationError(
                "oci",
                checked=[resolved.description, "config.tenancy_id"],
                reason="OCI tenancy could not be determined",
            )

        home_region = auth.region or (self._configured_regions[0] if self._configured_regions else None)
        if not home_region:
            raise ConfigurationError("OCI region could not be determined", key="regions")

        self.auth = auth
        self.credential_source = resolved
        self.tenancy_id = tenancy_id
        self.home_region = home_region
        self.compartment_id = extra.get("compartment_id") or tenancy_id
        self.account_id = extra.get("account_id") or tenancy_id

        if self._configured_regions:
            self.settings.regions = list(self._configured_regions)
        else:
            self.settings.regions = self._subscribed_regions(resolved.description)

        self.log.debug(
            "OCI credentials resolved",
            {"source": str(resolved.source), "compartment_id": self.compartment_id, "home_region": home_region},
        )

    def _subscribed_regions(self, source: str) -> list[str]:
        try:
            subscriptions = self.client("identity").list_region_subscriptions(self.tenancy_id).data
        except InventoryError:
            raise
        except Exception as e:
            self.auth = None
            self.tenancy_id = None
            self.credential_source = None
            self.clients.clear()
            reason = getattr(e, "code", None) or f"{type(e).__name__}: {e}"
            raise AuthenticationError(
                "oci",
                checked=[source],
                reason=f"ListRegionSubscriptions failed: {reason}",
                cause=e,
            )
        regions = [s.region_name for s in subscriptions if getattr(s, "status", "READY") == "READY"]
        return regions or [self.home_region]

    def client(self, service_name: str, region: str | None = None) -> Any:
        """Cached SDK client; ``region=None`` targets the home region"""
        if self.auth is None:
            self.initialize()
        auth = self.auth
        assert auth is not None

        client_class = CLIENT_CLASSES.get(service_name)
        if client_class is None:
            raise ConfigurationError(f"Unknown OCI client: {service_name}")

        return self.clients.get_or_create(
            region,
            service_name,
            lambda: client_class(**auth.client_kwargs(region or self.home_region)),
        )

    def health_check(self) -> HealthStatus:
        """Read the tenancy through the identity service"""
        try:
            self.initialize()
            tenancy = self.client("identity").get_tenancy(self.tenancy_id).data
        except (AuthenticationError, ConfigurationError, oci.exceptions.ServiceError) as e:
            return HealthStatus(healthy=False, message=str(e), details={"driver": self.driver})
        return HealthStatus(
            healthy=True,
            message="ok",
            details={"driver": self.driver, "tenancy": getattr(tenancy, "name", None), "account_id": self.account_id},
        )

    def destroy(self) -> None:
        super().destroy()
        self.auth = None
        self.credential_source = None
