from __future__ import annotations

import asyncio

from simpledfe_reports.models.enums import JobStatus
from simpledfe_reports.models.internal import QueueTask, ReportJobRecord


class InMemoryReportJobRepository:
    """Report job records kept in process memory.

    Records go in and come out as copies, so a caller holding a record
    (the worker while it generates, the API while it serializes) never sees
    another caller's unsaved changes.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, ReportJobRecord] = {}
        self._lock = asyncio.Lock()

    async def create(self, job: ReportJobRecord) -> None:
        async with self._lock:
            if job.job_id in self._jobs:
                raise ValueError(f"report job {job.job_id} already exists")
            self._jobs[job.job_id] = job.model_copy(deep=True)

    async def get(self, job_id: str) -> ReportJobRecord | None:
        async with self._lock:
            job = self._jobs.get(job_id)
            return None if job is None else job.model_copy(deep=True)

    async def save(self, job: ReportJobRecord) -> None:
        """Replace the stored record with a copy of `job`."""

        async with self._lock:
            self._jobs[job.job_id] = job.model_copy(deep=True)

    async def list(self, *, limit: int = 100, status: JobStatus | None = None) -> list[ReportJobRecord]:
        """Newest jobs first, optionally only those in one status."""

        async with self._lock:
            jobs = [job for job in self._jobs.values() if status is None or job.status == status]
            jobs.sort(key=lambda job: job.created_at, reverse=True)
            return [job.model_copy(deep=True) for job in jobs[:limit]]


class InMemoryTaskQueue:
    """Generation tasks waiting for the inline worker."""

    def __init__(self) -> None:
        self._tasks: asyncio.Queue[QueueTask] = asyncio.Queue()

    async def enqueue(self, task: QueueTask) -> None:
        await self._tasks.put(task)

    async def dequeue(self) -> QueueTask:
        """Wait for the next task."""

        return await self._tasks.get()

    def task_done(self) -> None:
        self._tasks.task_done()
