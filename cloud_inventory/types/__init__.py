"""
cloud_inventory/types - Shared data types
"""

from .resource import HealthStatus, NormalizedResource, ProgressInfo

__all__ = [
    "NormalizedResource",
    "ProgressInfo",
    "HealthStatus",
]
