"""Public model exports for report data, layout configuration and API schema v1."""

from simpledfe_reports.models.api_requests import CreateReportJobRequest
from simpledfe_reports.models.api_responses import (
    ErrorResponse,
    ReportJobListResponse,
    ReportJobResponse,
)
from simpledfe_reports.models.common import ErrorInfo
from simpledfe_reports.models.enums import Alignment, JobStatus, Orientation, ReportKind
from simpledfe_reports.models.geometry import ColumnSpec, PageGeometry
from simpledfe_reports.models.internal import QueueTask, ReportJobRecord
from simpledfe_reports.models.report import CompanyGroup, DocumentLine, ReportRequest, TaxTotals
from simpledfe_reports.models.variant import ReportVariant, TextStyle
from simpledfe_reports.models.version import SCHEMA_VERSION

__all__ = [
    "Alignment",
    "ColumnSpec",
    "CompanyGroup",
    "CreateReportJobRequest",
    "DocumentLine",
    "ErrorInfo",
    "ErrorResponse",
    "JobStatus",
    "Orientation",
    "PageGeometry",
    "QueueTask",
    "ReportJobListResponse",
    "ReportJobRecord",
    "ReportJobResponse",
    "ReportKind",
    "ReportRequest",
    "ReportVariant",
    "SCHEMA_VERSION",
    "TaxTotals",
    "TextStyle",
]
