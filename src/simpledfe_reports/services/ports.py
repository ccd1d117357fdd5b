from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from simpledfe_reports.layout.primitives import RenderedPage
from simpledfe_reports.models.enums import JobStatus
from simpledfe_reports.models.geometry import PageGeometry
from simpledfe_reports.models.internal import QueueTask, ReportJobRecord


class ReportRenderer(Protocol):
    """Drawing backend that turns laid-out pages into a document."""

    def render(self, pages: Sequence[RenderedPage], geometry: PageGeometry) -> bytes:
        """Render pages to finished document bytes."""

        ...


class ReportStore(Protocol):
    """Destination for finished report documents."""

    def save(self, filename: str, content: bytes) -> Path:
        """Persist content and return where it was written."""

        ...


class ReportJobRepository(Protocol):
    """Persistence contract for report job records."""

    async def create(self, job: ReportJobRecord) -> None:
        """Persist a new job record."""

        ...

    async def get(self, job_id: str) -> ReportJobRecord | None:
        """Load one job by id."""

        ...

    async def save(self, job: ReportJobRecord) -> None:
        """Update an existing job record."""

        ...

    async def list(self, *, limit: int = 100, status: JobStatus | None = None) -> list[ReportJobRecord]:
        """List latest job records, optionally only those in one status."""

        ...


class TaskQueue(Protocol):
    """Queue abstraction used by service and worker."""

    async def enqueue(self, task: QueueTask) -> None:
        """Push one task into queue."""

        ...

    async def dequeue(self) -> QueueTask:
        """Pop one task from queue."""

        ...

    def task_done(self) -> None:
        """Mark one consumed task as complete."""

        ...
