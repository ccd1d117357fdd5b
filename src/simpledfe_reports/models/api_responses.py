from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from simpledfe_reports.models.common import ErrorInfo, StrictModel
from simpledfe_reports.models.enums import JobStatus, ReportKind
from simpledfe_reports.models.internal import ReportJobRecord
from simpledfe_reports.models.version import SCHEMA_VERSION


class ReportJobResponse(StrictModel):
    """Public job response contract returned by API endpoints."""

    schema_version: Literal["v1"] = SCHEMA_VERSION
    job_id: str
    kind: ReportKind
    status: JobStatus
    company_count: int = 0
    document_count: int = 0
    page_count: int | None = None
    output_path: str | None = None
    error: ErrorInfo | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: ReportJobRecord) -> "ReportJobResponse":
        """Map internal storage model to stable public response shape."""

        return cls(
            job_id=record.job_id,
            kind=record.kind,
            status=record.status,
            company_count=len(record.request.companies),
            document_count=record.request.document_count,
            page_count=record.page_count,
            output_path=record.output_path,
            error=record.error,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ReportJobListResponse(StrictModel):
    """List response wrapper for job query endpoint."""

    schema_version: Literal["v1"] = SCHEMA_VERSION
    total: int
    items: list[ReportJobResponse] = Field(default_factory=list)


class ErrorResponse(StrictModel):
    """Body returned when a report generation fails."""

    schema_version: Literal["v1"] = SCHEMA_VERSION
    error: ErrorInfo
