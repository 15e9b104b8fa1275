"""
cloud_inventory/types/resource.py - Normalized resource data model

Every driver maps provider objects into NormalizedResource. The record is
self-describing: provenance, scope and type are readable without any other
record. Parent/child relationships live in ``metadata`` (e.g. ``vpc_id`` on a
subnet).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class NormalizedResource:
    """One discovered resource

    Attributes:
        provider: backend tag ("aws", "oci")
        service: configured service key that produced the resource
        resource_type: dotted, provider-namespaced type ("aws.ec2.instance")
        resource_id: provider-native identifier, unique per (provider, account_id, resource_type)
        account_id: owning account / tenancy
        subscription_id: owning subscription (unused by aws/oci)
        organization_id: owning organization (unused by aws/oci)
        project_id: owning project (unused by aws/oci)
        region: region, None for global resources
        name: best-effort human label
        tags: provider tags, None when the type supports no tagging
        metadata: relationship data, e.g. parent ids
        configuration: sanitized deep copy of the raw provider object
    """

    provider: str
    service: str
    resource_type: str
    resource_id: str
    account_id: str | None = None
    subscription_id: str | None = None
    organization_id: str | None = None
    project_id: str | None = None
    region: str | None = None
    name: str | None = None
    tags: dict[str, str | None] | None = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)
    configuration: dict[str, Any] = field(default_factory=dict)

    @property
    def identity(self) -> tuple[str, str | None, str, str]:
        """(provider, account_id, resource_type, resource_id)"""
        return (self.provider, self.account_id, self.resource_type, self.resource_id)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for serialization"""
        return asdict(self)


@dataclass(frozen=True)
class ProgressInfo:
    """Payload handed to a progress sink once per emitted resource"""

    service: str
    resource_id: str
    resource_type: str


@dataclass
class HealthStatus:
    """Result of Driver.health_check()"""

    healthy: bool
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.healthy
