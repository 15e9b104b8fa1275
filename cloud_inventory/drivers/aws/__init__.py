"""
cloud_inventory/drivers/aws - AWS inventory driver

- AwsInventoryDriver: driver registered under the "aws" key
- AwsService: known service names
"""

from .driver import AwsInventoryDriver
from .services import AwsService

__all__ = [
    "AwsInventoryDriver",
    "AwsService",
]
