from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import FileResponse, JSONResponse, Response

from simpledfe_reports.errors import ReportGenerationError
from simpledfe_reports.integrations.container import AppContainer, build_container
from simpledfe_reports.logging_config import configure_logging
from simpledfe_reports.models.api_requests import CreateReportJobRequest
from simpledfe_reports.models.api_responses import (
    ErrorResponse,
    ReportJobListResponse,
    ReportJobResponse,
)
from simpledfe_reports.models.enums import JobStatus, ReportKind
from simpledfe_reports.models.report import ReportRequest

container: AppContainer = build_container()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup/shutdown lifecycle and inline worker task."""

    if container.settings.run_inline_worker:
        app.state.worker_task = asyncio.create_task(container.worker.run_forever())
    try:
        yield
    finally:
        task = getattr(app.state, "worker_task", None)
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
            app.state.worker_task = None


app = FastAPI(title="SimpleDFe fiscal document reports", version="0.1.0", lifespan=lifespan)


@app.exception_handler(ReportGenerationError)
async def report_generation_error_handler(request: Request, exc: ReportGenerationError) -> JSONResponse:
    """Surface a failed run as one structured error."""

    body = ErrorResponse(error=exc.to_error_info())
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Lightweight health endpoint for liveness checks."""

    return {"status": "ok"}


@app.post("/v1/reports/{kind}/pdf")
async def generate_report_pdf(kind: ReportKind, req: ReportRequest) -> Response:
    """Generate a report and return it as a PDF download."""

    content = await container.reports.generate_pdf_async(req, kind)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="relatorio_{kind.value}.pdf"'},
    )


@app.post("/v1/report-jobs", response_model=ReportJobResponse)
async def create_report_job(req: CreateReportJobRequest) -> ReportJobResponse:
    """Create a job and enqueue report generation."""

    job = await container.jobs.create_job(req)
    return ReportJobResponse.from_record(job)


@app.get("/v1/report-jobs", response_model=ReportJobListResponse)
async def list_report_jobs(
    limit: int = Query(100, ge=1, le=1000),
    status: JobStatus | None = None,
) -> ReportJobListResponse:
    """List report jobs with stable v1 response envelope."""

    records = await container.jobs.list_jobs(limit=limit, status=status)
    items = [ReportJobResponse.from_record(r) for r in records]
    return ReportJobListResponse(total=len(items), items=items)


@app.get("/v1/report-jobs/{job_id}", response_model=ReportJobResponse)
async def get_report_job(job_id: str) -> ReportJobResponse:
    """Fetch one job by id."""

    job = await container.jobs.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="job not found")
    return ReportJobResponse.from_record(job)


@app.get("/v1/report-jobs/{job_id}/file")
async def download_report_job_file(job_id: str) -> FileResponse:
    """Serve the PDF written by a completed job."""

    job = await container.jobs.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="job not found")
    if job.status != JobStatus.COMPLETED or not job.output_path:
        raise HTTPException(status_code=409, detail=f"job is {job.status.value}")
    path = Path(job.output_path)
    if not container.store.contains(path):
        raise HTTPException(status_code=404, detail="report file not found")
    return FileResponse(path=path, media_type="application/pdf", filename=path.name)


def run() -> None:
    """Local API entrypoint used by script/console command."""

    import uvicorn

    settings = container.settings
    configure_logging(settings.log_level)
    uvicorn.run(
        "simpledfe_reports.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    run()
