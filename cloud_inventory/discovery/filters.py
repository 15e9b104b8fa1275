"""
cloud_inventory/discovery/filters.py - Call-time include/exclude filtering

A service is collected iff it is not excluded and, when an include set is
given, it is included. Exclude wins when a name appears in both sets.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..config import ensure_list, normalize_service_name
from ..exceptions import ConfigurationError


def _name_set(value: Any, option: str) -> frozenset[str]:
    if value is not None and not isinstance(value, (str, list, tuple, set, frozenset)):
        raise ConfigurationError(f"discovery.{option} must be a string or a list of strings", key=f"discovery.{option}")
    return frozenset(n for n in (normalize_service_name(v) for v in ensure_list(value)) if n)


def should_collect(service: str, include: Iterable[str] = (), exclude: Iterable[str] = ()) -> bool:
    """Apply the include/exclude rule to one service name"""
    name = normalize_service_name(service)
    if name in set(exclude):
        return False
    include = set(include)
    if include and name not in include:
        return False
    return True


@dataclass(frozen=True)
class DiscoveryFilter:
    """Normalized include/exclude sets for one list_resources call"""

    include: frozenset[str] = field(default_factory=frozenset)
    exclude: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> DiscoveryFilter:
        """Build from ``options["discovery"]``. Missing keys mean "no filter"."""
        discovery = (options or {}).get("discovery") or {}
        if not isinstance(discovery, Mapping):
            raise ConfigurationError("discovery options must be a mapping", key="discovery")
        return cls(
            include=_name_set(discovery.get("include"), "include"),
            exclude=_name_set(discovery.get("exclude"), "exclude"),
        )

    def allows(self, service: str) -> bool:
        return should_collect(service, self.include, self.exclude)
