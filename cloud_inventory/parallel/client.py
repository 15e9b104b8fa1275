"""
cloud_inventory/parallel/client.py - boto3 client factory

Every AWS client a driver creates goes through ``get_client`` so it carries
the settings of ``config.aws_client_config``.

Example:
    from cloud_inventory.config import aws_client_config
    from cloud_inventory.parallel.client import get_client

    ec2 = get_client(session, "ec2", "us-west-2", aws_client_config(max_workers=8))
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import aws_client_config

if TYPE_CHECKING:
    import boto3
    from botocore.config import Config


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    config: Config | None = None,
) -> Any:
    """boto3 client for ``service_name`` in ``region_name``

    ``config`` defaults to ``aws_client_config()``.
    """
    return session.client(service_name, region_name=region_name, config=config or aws_client_config())
