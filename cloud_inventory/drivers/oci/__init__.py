"""
cloud_inventory/drivers/oci - Oracle Cloud Infrastructure inventory driver

- OciInventoryDriver: driver registered under the "oci" and "oracle" keys
- OciService: known service names
"""

from .driver import OciInventoryDriver
from .services import OciService

__all__ = [
    "OciInventoryDriver",
    "OciService",
]
