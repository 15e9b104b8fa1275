"""
cloud_inventory/discovery/orchestrator.py - Discovery run orchestration

Turns one ``list_resources(options)`` call into a single lazy stream:

1. Resolve include/exclude filters (DiscoveryFilter)
2. Build the service plan: every configured name becomes a ServicePlan tagged
   COLLECT, FILTERED or UNKNOWN
3. Run each COLLECT plan through ``collect_isolated``, which yields the
   service's resources and returns a ServiceOutcome instead of raising
4. Emit progress once per resource and yield it to the caller

Services run sequentially in configured order. With ``max_workers > 1`` the
COLLECT plans run on a bounded worker pool and are still yielded in
configured order.

Only ConfigurationError and AuthenticationError leave the stream.

Example:
    for resource in run_discovery(driver, {"discovery": {"exclude": "iam"}}):
        store(resource)

    driver.last_run.summary()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from ..exceptions import ServiceCollectionError, is_fatal
from ..parallel.errors import CollectedError, ErrorCollector, ErrorSeverity
from ..parallel.executor import ParallelConfig, execute_ordered
from ..types import NormalizedResource, ProgressInfo
from .filters import DiscoveryFilter
from .isolation import CollectionContext

if TYPE_CHECKING:
    from ..drivers.base import Driver

logger = logging.getLogger(__name__)

R = TypeVar("R")

Collector = Callable[["Driver", CollectionContext], Iterable[NormalizedResource]]
ProgressSink = Callable[[ProgressInfo], Any]


# =============================================================================
# Service plan
# =============================================================================


class PlanStatus(Enum):
    COLLECT = "collect"
    FILTERED = "filtered"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ServicePlan:
    """What to do with one configured service name

    Attributes:
        name: normalized service name
        status: PlanStatus
        service: provider service enum member, None when UNKNOWN
        collector: collector for COLLECT plans
    """

    name: str
    status: PlanStatus
    service: Enum | None = None
    collector: Collector | None = None


def build_plan(
    names: Iterable[str],
    service_enum: type[Enum],
    catalog: Mapping[Enum, Collector],
    filters: DiscoveryFilter,
) -> list[ServicePlan]:
    """Classify configured service names, keeping configured order

    Filtering is applied before the known-service lookup, so an excluded
    unknown name is simply filtered.
    """
    plans: list[ServicePlan] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        seen.add(name)

        if not filters.allows(name):
            plans.append(ServicePlan(name, PlanStatus.FILTERED))
            continue

        try:
            member = service_enum(name)
        except ValueError:
            plans.append(ServicePlan(name, PlanStatus.UNKNOWN))
            continue

        collector = catalog.get(member)
        if collector is None:
            plans.append(ServicePlan(name, PlanStatus.UNKNOWN, service=member))
            continue
        plans.append(ServicePlan(name, PlanStatus.COLLECT, service=member, collector=collector))
    return plans


# =============================================================================
# Run state
# =============================================================================


class OutcomeStatus(Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ServiceOutcome:
    """Result of one service within a run

    Attributes:
        service: service name
        status: OutcomeStatus
        resource_count: resources yielded (before a failure, if any)
        error: the collected error for FAILED outcomes
        duration_ms: time spent in the collector
    """

    service: str
    status: OutcomeStatus
    resource_count: int = 0
    error: CollectedError | None = None
    duration_ms: float = 0.0


@dataclass
class DiscoveryRun:
    """State of one list_resources call, discarded with the stream"""

    provider: str
    filters: DiscoveryFilter
    errors: ErrorCollector
    emit_progress: ProgressSink | None = None
    plans: list[ServicePlan] = field(default_factory=list)
    outcomes: list[ServiceOutcome] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @property
    def resource_count(self) -> int:
        return sum(o.resource_count for o in self.outcomes)

    @property
    def failed_services(self) -> list[str]:
        return [o.service for o in self.outcomes if o.status is OutcomeStatus.FAILED]

    def summary(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "resources": self.resource_count,
            "services": [o.service for o in self.outcomes if o.status is not OutcomeStatus.SKIPPED],
            "failed_services": self.failed_services,
            "skipped_services": [p.name for p in self.plans if p.status is not PlanStatus.COLLECT],
            "errors": self.errors.get_summary(),
        }


# =============================================================================
# Isolation combinator
# =============================================================================


def collect_isolated(
    driver: Driver,
    plan: ServicePlan,
    run: DiscoveryRun,
) -> Generator[NormalizedResource, None, ServiceOutcome]:
    """Yield one service's resources; return its ServiceOutcome

    Any exception other than ConfigurationError/AuthenticationError is
    reported as a ServiceCollectionError and ends this service only.
    Resources already yielded stay in the stream.
    """
    assert plan.collector is not None
    ctx = CollectionContext(service=plan.name, regions=list(driver.settings.regions), errors=run.errors)
    count = 0
    start_time = time.monotonic()

    try:
        for resource in plan.collector(driver, ctx):
            count += 1
            yield resource
    except Exception as e:
        if is_fatal(e):
            raise
        collected = run.errors.collect(
            ServiceCollectionError(plan.name, e),
            plan.name,
            operation="collect",
            severity=ErrorSeverity.CRITICAL,
            with_stack=True,
        )
        return ServiceOutcome(
            service=plan.name,
            status=OutcomeStatus.FAILED,
            resource_count=count,
            error=collected,
            duration_ms=(time.monotonic() - start_time) * 1000,
        )

    return ServiceOutcome(
        service=plan.name,
        status=OutcomeStatus.COMPLETED,
        resource_count=count,
        duration_ms=(time.monotonic() - start_time) * 1000,
    )


def drain(stream: Generator[R, None, ServiceOutcome]) -> tuple[list[R], ServiceOutcome]:
    """Exhaust an isolated service stream into (resources, outcome)"""
    items: list[R] = []
    while True:
        try:
            items.append(next(stream))
        except StopIteration as stop:
            return items, stop.value


# =============================================================================
# Run
# =============================================================================


def _progress_sink(options: Mapping[str, Any] | None) -> ProgressSink | None:
    runtime = (options or {}).get("runtime") or {}
    sink = runtime.get("emit_progress") if isinstance(runtime, Mapping) else None
    if sink is not None and not callable(sink):
        logger.debug("runtime.emit_progress is not callable, ignored")
        return None
    return sink


def _emit_progress(driver: Driver, run: DiscoveryRun, service: str, resource: NormalizedResource) -> None:
    if run.emit_progress is None:
        return
    try:
        run.emit_progress(ProgressInfo(service, resource.resource_id, resource.resource_type))
    except Exception as e:
        driver.log.warn("Progress sink failed", {"service": service, "error": str(e)})


def _emitting(
    driver: Driver,
    run: DiscoveryRun,
    service: str,
    stream: Generator[NormalizedResource, None, ServiceOutcome],
) -> Generator[NormalizedResource, None, ServiceOutcome]:
    try:
        while True:
            try:
                resource = next(stream)
            except StopIteration as stop:
                return stop.value
            _emit_progress(driver, run, service, resource)
            yield resource
    finally:
        stream.close()


def _collect_sequential(
    driver: Driver,
    plans: Sequence[ServicePlan],
    run: DiscoveryRun,
) -> Iterator[NormalizedResource]:
    for plan in plans:
        outcome = yield from _emitting(driver, run, plan.name, collect_isolated(driver, plan, run))
        run.outcomes.append(outcome)


def _collect_parallel(
    driver: Driver,
    plans: Sequence[ServicePlan],
    run: DiscoveryRun,
) -> Iterator[NormalizedResource]:
    config = ParallelConfig(max_workers=driver.settings.max_workers)
    results = execute_ordered(
        plans,
        lambda plan: drain(collect_isolated(driver, plan, run)),
        config,
        label=lambda plan: plan.name,
    )
    try:
        for result in results:
            if not result.success:
                assert result.error is not None
                if is_fatal(result.error):
                    raise result.error
                collected = run.errors.collect(
                    ServiceCollectionError(result.unit, result.error),
                    result.unit,
                    operation="collect",
                    severity=ErrorSeverity.CRITICAL,
                )
                run.outcomes.append(ServiceOutcome(result.unit, OutcomeStatus.FAILED, error=collected))
                continue

            assert result.data is not None
            resources, outcome = result.data
            run.outcomes.append(outcome)
            for resource in resources:
                _emit_progress(driver, run, outcome.service, resource)
                yield resource
    finally:
        results.close()


def run_discovery(driver: Driver, options: Mapping[str, Any] | None = None) -> Iterator[NormalizedResource]:
    """Stream every resource of the driver's effective service list

    The driver must already be initialized. The run state is published as
    ``driver.last_run``.
    """
    filters = DiscoveryFilter.from_options(options)
    run = DiscoveryRun(
        provider=driver.provider,
        filters=filters,
        errors=ErrorCollector(driver.provider, driver.log.log),
        emit_progress=_progress_sink(options),
    )
    run.plans = build_plan(driver.configured_services(), driver.service_enum, driver.service_catalog(), filters)
    driver.last_run = run

    for plan in run.plans:
        if plan.status is PlanStatus.FILTERED:
            driver.log.debug("Service filtered out", {"service": plan.name})
            run.outcomes.append(ServiceOutcome(plan.name, OutcomeStatus.SKIPPED))
        elif plan.status is PlanStatus.UNKNOWN:
            driver.log.warn("No collector for service, skipping", {"service": plan.name})
            run.outcomes.append(ServiceOutcome(plan.name, OutcomeStatus.SKIPPED))

    active = [plan for plan in run.plans if plan.status is PlanStatus.COLLECT]
    driver.log.info(
        "Discovery started",
        {"services": [p.name for p in active], "regions": list(driver.settings.regions)},
    )

    if driver.settings.max_workers > 1 and len(active) > 1:
        yield from _collect_parallel(driver, active, run)
    else:
        yield from _collect_sequential(driver, active, run)

    run.finished_at = datetime.now(timezone.utc)
    driver.log.info("Discovery finished", run.summary())
