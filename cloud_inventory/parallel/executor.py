"""
cloud_inventory/parallel/executor.py - Bounded worker pool over independent units

Runs independent units (one per service) on a ThreadPoolExecutor and yields
their results in submission order. Used by the orchestrator when a driver
is configured with ``max_workers > 1``.

Components:
- ParallelConfig: worker pool settings
- execute_ordered: run units, yield TaskResult in unit order

Example:
    config = ParallelConfig(max_workers=4)
    for result in execute_ordered(["ec2", "s3"], collect_one, config, label=str):
        if result.success:
            handle(result.data)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

from ..config import DEFAULT_MAX_WORKERS, MAX_WORKERS_LIMIT
from .types import TaskResult

logger = logging.getLogger(__name__)

U = TypeVar("U")
T = TypeVar("T")


def _clear_exception_chain(e: BaseException) -> None:
    """Drop tracebacks held by a captured exception and its chain"""
    e.__traceback__ = None
    if e.__context__ is not None:
        e.__context__.__traceback__ = None
    if e.__cause__ is not None:
        e.__cause__.__traceback__ = None


@dataclass
class ParallelConfig:
    """Worker pool settings

    Attributes:
        max_workers: concurrent threads (1..MAX_WORKERS_LIMIT)
    """

    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.max_workers > MAX_WORKERS_LIMIT:
            self.max_workers = MAX_WORKERS_LIMIT


def _run_unit(func: Callable[[U], T], unit: U, name: str) -> TaskResult[T]:
    start_time = time.monotonic()
    try:
        data = func(unit)
    except Exception as e:
        return TaskResult(
            unit=name,
            success=False,
            error=e,
            duration_ms=(time.monotonic() - start_time) * 1000,
        )
    return TaskResult(
        unit=name,
        success=True,
        data=data,
        duration_ms=(time.monotonic() - start_time) * 1000,
    )


def execute_ordered(
    units: Sequence[U],
    func: Callable[[U], T],
    config: ParallelConfig | None = None,
    label: Callable[[U], str] = str,
) -> Iterator[TaskResult[T]]:
    """Run ``func`` over ``units`` on a thread pool, yielding results in unit order

    Results are yielded as soon as the next unit in order has finished.
    Closing the iterator early cancels every unit that has not started.

    Args:
        units: independent work items
        func: unit -> T, runs on a worker thread
        config: pool settings
        label: unit -> display name

    Yields:
        TaskResult per unit. A unit that raised yields ``success=False``
        with the exception in ``error``.
    """
    config = config or ParallelConfig()
    if not units:
        return

    logger.debug(f"Worker pool start: {len(units)} units, max_workers={config.max_workers}")

    executor = ThreadPoolExecutor(max_workers=config.max_workers, thread_name_prefix="cloud-inventory")
    try:
        futures: list[Future[TaskResult[T]]] = [
            executor.submit(_run_unit, func, unit, label(unit)) for unit in units
        ]
        for future in futures:
            result = future.result()
            yield result
            if result.error is not None and not result.success:
                _clear_exception_chain(result.error)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
