from __future__ import annotations

from dataclasses import dataclass

from simpledfe_reports.config import Settings, get_settings
from simpledfe_reports.integrations.filesystem_adapter import LocalReportStore
from simpledfe_reports.integrations.in_memory import InMemoryReportJobRepository, InMemoryTaskQueue
from simpledfe_reports.render import PdfRenderer
from simpledfe_reports.services.job_service import ReportJobService
from simpledfe_reports.services.report_service import ReportService
from simpledfe_reports.workers.worker import ReportWorker


@dataclass
class AppContainer:
    """Runtime dependency container for API/service/worker wiring."""

    settings: Settings
    repo: InMemoryReportJobRepository
    queue: InMemoryTaskQueue
    store: LocalReportStore
    reports: ReportService
    jobs: ReportJobService
    worker: ReportWorker


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create default in-memory runtime container for local execution."""

    settings = settings or get_settings()
    repo = InMemoryReportJobRepository()
    queue = InMemoryTaskQueue()
    store = LocalReportStore(settings.output_dir)
    reports = ReportService(
        renderer=PdfRenderer(),
        store=store,
        repeat_header_on_break=settings.repeat_header_on_break,
    )
    jobs = ReportJobService(repo, queue)
    worker = ReportWorker(repo=repo, queue=queue, reports=reports)
    return AppContainer(
        settings=settings,
        repo=repo,
        queue=queue,
        store=store,
        reports=reports,
        jobs=jobs,
        worker=worker,
    )
