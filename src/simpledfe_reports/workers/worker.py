from __future__ import annotations

import logging

from simpledfe_reports.errors import ReportGenerationError
from simpledfe_reports.models.common import ErrorInfo
from simpledfe_reports.models.enums import JobStatus
from simpledfe_reports.services.ports import ReportJobRepository, TaskQueue
from simpledfe_reports.services.report_service import ReportService

logger = logging.getLogger(__name__)


class ReportWorker:
    """Queue worker that generates queued reports."""

    def __init__(
        self,
        *,
        repo: ReportJobRepository,
        queue: TaskQueue,
        reports: ReportService,
    ) -> None:
        """Bind repository, queue and report service."""

        self.repo = repo
        self.queue = queue
        self.reports = reports

    async def run_forever(self) -> None:
        """Continuously consume queue tasks."""

        while True:
            await self.run_once()

    async def run_once(self) -> None:
        """Generate a single queued report and update job state."""

        task = await self.queue.dequeue()
        try:
            job = await self.repo.get(task.job_id)
            if job is None:
                logger.warning("Dropping task %s for unknown job %s", task.task_id, task.job_id)
                return
            job.status = JobStatus.RUNNING
            job.touch()
            await self.repo.save(job)

            written = await self.reports.write_pdf_async(job.request, job.kind)
            job.output_path = str(written.path)
            job.page_count = written.page_count
            job.status = JobStatus.COMPLETED
            job.error = None
            job.touch()
            await self.repo.save(job)
        except ReportGenerationError as exc:
            await self._fail(task.job_id, exc.to_error_info())
        except Exception as exc:  # pragma: no cover
            logger.exception("Report job %s crashed", task.job_id)
            await self._fail(task.job_id, ErrorInfo(code="REPORT_JOB_FAILED", message=str(exc)))
        finally:
            self.queue.task_done()

    async def _fail(self, job_id: str, error: ErrorInfo) -> None:
        job = await self.repo.get(job_id)
        if job is None:
            return
        job.status = JobStatus.FAILED
        job.error = error
        job.touch()
        await self.repo.save(job)
