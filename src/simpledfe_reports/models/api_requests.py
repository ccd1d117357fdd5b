from __future__ import annotations

from pydantic import AliasChoices, Field

from simpledfe_reports.models.common import StrictModel
from simpledfe_reports.models.enums import ReportKind
from simpledfe_reports.models.report import ReportRequest


class CreateReportJobRequest(StrictModel):
    """Request payload for queueing a report generation job."""

    # Main field name is `kind`; accept `type` as used by the report page.
    kind: ReportKind = Field(validation_alias=AliasChoices("kind", "type"))
    report: ReportRequest
