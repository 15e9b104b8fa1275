"""
cloud_inventory/discovery - Filtering, normalization and run orchestration

- DiscoveryFilter / should_collect: include/exclude service filters
- build_resource / extract_tags / sanitize_configuration: normalization
- CollectionContext / iter_regions / expand_children: failure isolation
- run_discovery: one lazy discovery run over a driver's service plan
"""

from .filters import DiscoveryFilter, should_collect
from .isolation import CollectionContext, expand_children, iter_regions
from .normalize import TagModel, build_resource, extract_tags, sanitize_configuration
from .orchestrator import (
    DiscoveryRun,
    OutcomeStatus,
    PlanStatus,
    ServiceOutcome,
    ServicePlan,
    build_plan,
    collect_isolated,
    run_discovery,
)

__all__ = [
    # Filters
    "DiscoveryFilter",
    "should_collect",
    # Normalization
    "TagModel",
    "build_resource",
    "extract_tags",
    "sanitize_configuration",
    # Isolation
    "CollectionContext",
    "expand_children",
    "iter_regions",
    # Orchestration
    "DiscoveryRun",
    "OutcomeStatus",
    "PlanStatus",
    "ServiceOutcome",
    "ServicePlan",
    "build_plan",
    "collect_isolated",
    "run_discovery",
]
