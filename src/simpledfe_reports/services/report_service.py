from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from simpledfe_reports.errors import ReportGenerationError
from simpledfe_reports.layout.engine import generate_report
from simpledfe_reports.layout.primitives import RenderedPage
from simpledfe_reports.layout.variants import VARIANTS
from simpledfe_reports.models.enums import ReportKind
from simpledfe_reports.models.report import ReportRequest
from simpledfe_reports.models.variant import ReportVariant
from simpledfe_reports.services.ports import ReportRenderer, ReportStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WrittenReport:
    """Where a finished report was stored and what it contains."""

    path: Path
    page_count: int
    size: int


class ReportService:
    """Application service running layout, rendering and persistence for one report."""

    def __init__(
        self,
        *,
        renderer: ReportRenderer,
        store: ReportStore,
        variants: Mapping[ReportKind, ReportVariant] | None = None,
        repeat_header_on_break: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Bind backend, store and variant configuration."""

        self.renderer = renderer
        self.store = store
        self.variants = dict(variants or VARIANTS)
        self.repeat_header_on_break = repeat_header_on_break
        self.clock = clock

    def variant_for(self, kind: ReportKind) -> ReportVariant:
        """Variant of `kind` with the configured table-header policy applied."""

        variant = self.variants[ReportKind(kind)]
        if self.repeat_header_on_break:
            variant = variant.with_repeat_header(True)
        return variant

    def build_pages(
        self,
        request: ReportRequest,
        kind: ReportKind,
        *,
        generated_at: datetime | None = None,
    ) -> list[RenderedPage]:
        """Lay out a report without rendering it."""

        return generate_report(
            request,
            self.variant_for(kind),
            generated_at=generated_at or self.clock(),
        )

    def generate_pdf(
        self,
        request: ReportRequest,
        kind: ReportKind,
        *,
        generated_at: datetime | None = None,
    ) -> bytes:
        """Return the finished PDF content, e.g. for an HTTP download."""

        content, _ = self._render(request, kind, generated_at or self.clock())
        return content

    def write_pdf(
        self,
        request: ReportRequest,
        kind: ReportKind,
        *,
        generated_at: datetime | None = None,
    ) -> WrittenReport:
        """Render a report and persist it through the report store."""

        stamp = generated_at or self.clock()
        content, page_count = self._render(request, kind, stamp)
        filename = f"relatorio_{ReportKind(kind).value}_{int(stamp.timestamp() * 1000)}.pdf"
        try:
            path = self.store.save(filename, content)
        except Exception as exc:
            logger.exception("Failed to write %s report %s", ReportKind(kind).value, filename)
            raise ReportGenerationError(
                "REPORT_WRITE_FAILED",
                f"Could not write report file {filename}",
                cause=exc,
            ) from exc
        logger.info("Wrote %s report (%d pages) to %s", ReportKind(kind).value, page_count, path)
        return WrittenReport(path=path, page_count=page_count, size=len(content))

    async def generate_pdf_async(
        self,
        request: ReportRequest,
        kind: ReportKind,
        *,
        generated_at: datetime | None = None,
    ) -> bytes:
        """Non-blocking wrapper around `generate_pdf`."""

        return await asyncio.to_thread(self.generate_pdf, request, kind, generated_at=generated_at)

    async def write_pdf_async(
        self,
        request: ReportRequest,
        kind: ReportKind,
        *,
        generated_at: datetime | None = None,
    ) -> WrittenReport:
        """Non-blocking wrapper around `write_pdf`."""

        return await asyncio.to_thread(self.write_pdf, request, kind, generated_at=generated_at)

    def _render(self, request: ReportRequest, kind: ReportKind, stamp: datetime) -> tuple[bytes, int]:
        variant = self.variant_for(kind)
        try:
            pages = generate_report(request, variant, generated_at=stamp)
            content = self.renderer.render(pages, variant.geometry)
        except Exception as exc:
            logger.exception("Failed to generate %s report", variant.kind.value)
            raise ReportGenerationError(
                "REPORT_RENDER_FAILED",
                f"Could not generate {variant.label}",
                cause=exc,
            ) from exc
        return content, len(pages)
