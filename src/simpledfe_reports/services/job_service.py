from __future__ import annotations

from simpledfe_reports.models.api_requests import CreateReportJobRequest
from simpledfe_reports.models.enums import JobStatus
from simpledfe_reports.models.internal import QueueTask, ReportJobRecord
from simpledfe_reports.services.ports import ReportJobRepository, TaskQueue


class ReportJobService:
    """Application service creating and querying background report jobs."""

    def __init__(self, repo: ReportJobRepository, queue: TaskQueue) -> None:
        """Bind repository and queue implementations."""

        self.repo = repo
        self.queue = queue

    async def create_job(self, req: CreateReportJobRequest) -> ReportJobRecord:
        """Persist a new job and enqueue its generation task."""

        job, _ = await self.create_job_with_task(req)
        return job

    async def create_job_with_task(self, req: CreateReportJobRequest) -> tuple[ReportJobRecord, QueueTask]:
        """Persist a job and return the corresponding queued task."""

        job = ReportJobRecord.new(req)
        task = QueueTask.new(job_id=job.job_id)
        await self.repo.create(job)
        await self.queue.enqueue(task)
        return job, task

    async def get_job(self, job_id: str) -> ReportJobRecord | None:
        """Load a job by id."""

        return await self.repo.get(job_id)

    async def list_jobs(self, *, limit: int = 100, status: JobStatus | None = None) -> list[ReportJobRecord]:
        """List latest jobs for API query."""

        return await self.repo.list(limit=limit, status=status)
