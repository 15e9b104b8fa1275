"""
cloud_inventory/discovery/isolation.py - Failure isolation below the service level

Collectors use these helpers so that one region, or one parent's child
listing, can fail without losing the rest of the service:

- iter_regions: visit regions sequentially, report and skip a failing region
- expand_children: list children after a parent, report and skip on failure
- CollectionContext: the per-service handle passed to every collector

ConfigurationError and AuthenticationError are never caught here.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TypeVar

from ..exceptions import ChildExpansionError, ServiceCollectionError, is_fatal
from ..parallel.errors import ErrorCollector, ErrorSeverity, try_or_default

R = TypeVar("R")
T = TypeVar("T")


def iter_regions(
    regions: Iterable[str],
    collect_region: Callable[[str], Iterable[R]],
    service: str,
    errors: ErrorCollector,
) -> Iterator[R]:
    """Chain ``collect_region(region)`` over ``regions``, isolating each region"""
    for region in regions:
        try:
            yield from collect_region(region)
        except Exception as e:
            if is_fatal(e):
                raise
            errors.collect(
                ServiceCollectionError(service, e, region=region),
                service,
                region,
                operation="collect_region",
                severity=ErrorSeverity.WARNING,
                with_stack=True,
            )


def expand_children(
    parent_id: str,
    child_type: str,
    list_children: Callable[[], Iterable[R]],
    service: str,
    errors: ErrorCollector,
    region: str | None = None,
) -> Iterator[R]:
    """Yield children of an already emitted parent

    A failure stops this parent's children only. Children yielded before the
    failure stay in the stream.
    """
    try:
        yield from list_children()
    except Exception as e:
        if is_fatal(e):
            raise
        errors.collect(
            ChildExpansionError(service, parent_id, child_type, e, region=region),
            service,
            region,
            operation=f"list_{child_type}",
            severity=ErrorSeverity.WARNING,
            resource_id=parent_id,
        )


@dataclass
class CollectionContext:
    """Per-service state handed to a collector

    Attributes:
        service: configured service name being collected
        regions: regions to visit for regional services
        errors: run-wide error collector
    """

    service: str
    regions: list[str]
    errors: ErrorCollector

    def each_region(self, collect_region: Callable[[str], Iterable[R]]) -> Iterator[R]:
        return iter_regions(self.regions, collect_region, self.service, self.errors)

    def children(
        self,
        parent_id: str,
        child_type: str,
        list_children: Callable[[], Iterable[R]],
        region: str | None = None,
    ) -> Iterator[R]:
        return expand_children(parent_id, child_type, list_children, self.service, self.errors, region)

    def lookup(
        self,
        func: Callable[[], T],
        default: T,
        operation: str,
        region: str | None = None,
        resource_id: str | None = None,
        severity: ErrorSeverity = ErrorSeverity.DEBUG,
    ) -> T:
        """Best-effort side call (tags, locations); failures give ``default``

        Pass ``severity=ErrorSeverity.WARNING`` when a failure drops the item.
        """
        return try_or_default(
            func,
            default,
            collector=self.errors,
            service=self.service,
            region=region,
            operation=operation,
            resource_id=resource_id,
            severity=severity,
        )
