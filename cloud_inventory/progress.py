"""
cloud_inventory/progress.py - Console progress for discovery runs

A rich spinner that counts resources as they are discovered. The tracker is
itself a progress sink, so it plugs straight into ``runtime.emit_progress``.

Components:
- DiscoveryTracker: thread-safe per-service resource counter
- discovery_progress: context manager showing the live counter

Example:
    from cloud_inventory.progress import discovery_progress

    with discovery_progress("AWS inventory") as tracker:
        resources = list(driver.list_resources({"runtime": {"emit_progress": tracker}}))

    tracker.total, tracker.by_service
"""

from __future__ import annotations

import threading
from collections.abc import Generator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import Progress, ProgressColumn, SpinnerColumn, Task, TaskID, TextColumn, TimeElapsedColumn
from rich.text import Text

from .types import ProgressInfo

# =============================================================================
# Columns
# =============================================================================


class ResourceCountColumn(ProgressColumn):
    """'128 resources / 4 services'"""

    def __init__(self, tracker: DiscoveryTracker) -> None:
        super().__init__()
        self._tracker = tracker

    def render(self, task: Task) -> Text:
        total = self._tracker.total
        services = len(self._tracker.by_service)
        text = Text()
        text.append(f"{total}", style="green")
        text.append(" resources / ")
        text.append(f"{services}", style="cyan")
        text.append(" services")
        return text


# =============================================================================
# Tracker
# =============================================================================


class DiscoveryTracker:
    """Counts ProgressInfo events per service

    Safe to call from worker threads.
    """

    def __init__(self, progress: Progress | None = None, task_id: TaskID | None = None) -> None:
        self._progress = progress
        self._task_id = task_id
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}
        self.last: ProgressInfo | None = None

    def __call__(self, info: ProgressInfo) -> None:
        with self._lock:
            self._counts[info.service] = self._counts.get(info.service, 0) + 1
            self.last = info
            completed = sum(self._counts.values())

        if self._progress is not None and self._task_id is not None:
            self._progress.update(
                self._task_id,
                completed=completed,
                description=f"[cyan]{info.service}[/] {info.resource_type}",
            )

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())

    @property
    def by_service(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)


@contextmanager
def discovery_progress(
    description: str = "Discovering resources",
    console: Console | None = None,
) -> Generator[DiscoveryTracker, None, None]:
    """Live resource counter for one discovery run

    Args:
        description: label shown next to the spinner
        console: rich Console to render on (default: stderr)

    Yields:
        DiscoveryTracker to pass as ``runtime.emit_progress``
    """
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn(""),
        TimeElapsedColumn(),
        console=console or Console(stderr=True),
        expand=False,
    )

    with progress:
        task_id = progress.add_task(f"[cyan]{description}", total=None)
        tracker = DiscoveryTracker(progress, task_id)
        progress.columns = (
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            ResourceCountColumn(tracker),
            TimeElapsedColumn(),
        )

        try:
            yield tracker
        finally:
            progress.update(task_id, description=f"[green]{description} done ({tracker.total} resources)")
