"""
cloud_inventory/drivers/aws/driver.py - AWS inventory driver

Example:
    from cloud_inventory.drivers.aws import AwsInventoryDriver

    driver = AwsInventoryDriver(
        driver="aws",
        credentials={"profile": "prod"},
        config={"services": ["ec2", "vpc"], "regions": ["us-east-1", "eu-west-1"]},
    )
    for resource in driver.list_resources():
        print(resource.resource_type, resource.resource_id, resource.region)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...auth.chain import ResolvedCredentials
from ...config import AWS_GLOBAL_REGION, aws_client_config, get_default_region
from ...exceptions import AuthenticationError
from ...parallel.client import get_client
from ...types import HealthStatus
from ..base import Driver
from .credentials import build_credential_chain
from .services import AWS_SENSITIVE_FIELDS, SERVICE_COLLECTORS, AwsService


class AwsInventoryDriver(Driver):
    """Inventory driver for one AWS account

    ``initialize()`` resolves a boto3 Session through the credential chain
    and reads the account id from STS GetCallerIdentity.
    """

    provider = "aws"
    service_enum = AwsService
    sensitive_fields = AWS_SENSITIVE_FIELDS

    def __init__(self, **kwargs: Any):
        super().__init__(**kwargs)
        self.session: boto3.Session | None = None
        self.credential_source: ResolvedCredentials[boto3.Session] | None = None
        self.client_config = aws_client_config(self.settings.max_workers)

    def default_regions(self) -> list[str]:
        return [get_default_region()]

    def service_catalog(self) -> Mapping[AwsService, Any]:
        return SERVICE_COLLECTORS

    def _initialize(self) -> None:
        resolved = build_credential_chain().resolve(self.credentials)
        session = resolved.value

        try:
            identity = get_client(session, "sts", AWS_GLOBAL_REGION, self.client_config).get_caller_identity()
        except (ClientError, BotoCoreError) as e:
            raise AuthenticationError(
                "aws",
                checked=[resolved.description],
                reason=f"GetCallerIdentity failed: {e}",
                cause=e,
            )

        self.session = session
        self.credential_source = resolved
        self.account_id = identity.get("Account")
        self.log.debug("AWS credentials resolved", {"source": str(resolved.source), "arn": identity.get("Arn")})

    def client(self, service_name: str, region: str | None = None) -> Any:
        """Cached boto3 client; ``region=None`` targets the global endpoint region"""
        if self.session is None:
            self.initialize()
        session = self.session
        assert session is not None
        return self.clients.get_or_create(
            region,
            service_name,
            lambda: get_client(session, service_name, region or AWS_GLOBAL_REGION, self.client_config),
        )

    def health_check(self) -> HealthStatus:
        """Call STS GetCallerIdentity with the resolved credentials"""
        try:
            self.initialize()
            identity = self.client("sts").get_caller_identity()
        except (AuthenticationError, ClientError, BotoCoreError) as e:
            return HealthStatus(healthy=False, message=str(e), details={"driver": self.driver})
        return HealthStatus(
            healthy=True,
            message="ok",
            details={"driver": self.driver, "account_id": identity.get("Account")},
        )

    def destroy(self) -> None:
        super().destroy()
        self.session = None
        self.credential_source = None
