from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from simpledfe_reports.models.api_requests import CreateReportJobRequest
from simpledfe_reports.models.common import ErrorInfo, StrictModel
from simpledfe_reports.models.enums import JobStatus, ReportKind
from simpledfe_reports.models.report import ReportRequest


class ReportJobRecord(StrictModel):
    """Internal persisted state for one background report generation."""

    job_id: str
    kind: ReportKind
    status: JobStatus
    request: ReportRequest
    output_path: str | None = None
    page_count: int | None = None
    error: ErrorInfo | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, req: CreateReportJobRequest) -> "ReportJobRecord":
        """Build an initial queued job record from create request."""

        now = datetime.now(UTC)
        return cls(
            job_id=str(uuid4()),
            kind=req.kind,
            status=JobStatus.QUEUED,
            request=req.report,
            created_at=now,
            updated_at=now,
        )

    def touch(self) -> None:
        self.updated_at = datetime.now(UTC)


class QueueTask(StrictModel):
    """Internal queue message format consumed by worker."""

    task_id: str
    job_id: str
    created_at: datetime

    @classmethod
    def new(cls, *, job_id: str) -> "QueueTask":
        """Construct a queue task with generated id and timestamp."""

        return cls(
            task_id=str(uuid4()),
            job_id=job_id,
            created_at=datetime.now(UTC),
        )
