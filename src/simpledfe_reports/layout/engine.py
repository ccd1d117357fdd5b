"""Paginated report layout.

Turns a `ReportRequest` into positioned drawing instructions, page by page.
The layout never touches a drawing backend: it decides where things go and
when a page breaks, and `simpledfe_reports.render` turns the result into PDF.

Pass one walks the companies in order with a single `LayoutCursor`, starting
a new page (and re-emitting the report header) whenever the next block does
not fit above `PageGeometry.bottom_limit`. Pass two stamps "page i of N" on
every page once N is known.
"""

from __future__ import annotations

import logging
from datetime import datetime

from simpledfe_reports.layout.formatting import (
    format_cell,
    format_currency,
    format_date,
    format_tax_id,
    format_timestamp,
    truncate,
)
from simpledfe_reports.layout.primitives import (
    LayoutCursor,
    LineOp,
    RectOp,
    RenderedPage,
    TextOp,
)
from simpledfe_reports.models.enums import Alignment
from simpledfe_reports.models.geometry import PageGeometry
from simpledfe_reports.models.report import (
    MONEY_FIELDS,
    TAX_FIELDS,
    CompanyGroup,
    DocumentLine,
    ReportRequest,
)
from simpledfe_reports.models.variant import ReportVariant, TextStyle

logger = logging.getLogger(__name__)


def generate_report(
    request: ReportRequest,
    variant: ReportVariant,
    *,
    generated_at: datetime | str,
    geometry: PageGeometry | None = None,
) -> list[RenderedPage]:
    """Lay out a report and return its pages.

    Args:
        request: Companies and documents, already aggregated and totaled.
        variant: Report kind configuration (texts, spacing, styles).
        generated_at: Stamp for the "Gerado em" header line; supplied by
            the caller so that layout itself never reads the clock.
        geometry: Overrides `variant.geometry` when given.

    Returns:
        Pages in order, each with its footer already stamped.
    """

    if geometry is not None:
        variant = variant.with_geometry(geometry)
    stamp = format_timestamp(generated_at) if isinstance(generated_at, datetime) else generated_at
    layout = _ReportLayout(request, variant, stamp)
    pages = layout.run()
    logger.debug(
        "Laid out %s report: %d companies, %d documents, %d pages",
        variant.kind.value,
        len(request.companies),
        request.document_count,
        len(pages),
    )
    return pages


class _ReportLayout:
    """State of one layout run. Not shared between runs."""

    def __init__(self, request: ReportRequest, variant: ReportVariant, stamp: str) -> None:
        self.request = request
        self.variant = variant
        self.geometry = variant.geometry
        self.stamp = stamp
        self.pages: list[RenderedPage] = []
        self.cursor = LayoutCursor(y=self.geometry.margin)
        self._page_top = self.geometry.margin
        self.totals = _totals_fields(request)

    def run(self) -> list[RenderedPage]:
        self._new_page()
        self._emit_summary()
        companies = self.request.companies
        for position, company in enumerate(companies):
            self._emit_company(company, is_last=position == len(companies) - 1)
        self._emit_grand_total()
        self._stamp_footers()
        return self.pages

    # -- cursor and pages -------------------------------------------------

    @property
    def page(self) -> RenderedPage:
        return self.pages[-1]

    def _remaining(self) -> float:
        return self.geometry.bottom_limit - self.cursor.y

    def _ensure_space(self, needed: float) -> bool:
        """Break to a new page when `needed` mm do not fit; report whether it broke.

        Breaks at most once, so a block taller than a whole page is drawn
        from the top of a fresh page instead of looping. Never breaks while
        nothing has been drawn below the page header yet.
        """

        if needed <= self._remaining() or self.cursor.y <= self._page_top:
            return False
        self._new_page()
        return True

    def _new_page(self) -> None:
        self.pages.append(RenderedPage(index=len(self.pages) + 1))
        self.cursor.page_index = len(self.pages) - 1
        self.cursor.y = self.geometry.margin
        self._emit_header()
        self._page_top = self.cursor.y

    def _anchor_x(self, alignment: Alignment) -> float:
        if alignment == Alignment.CENTER:
            return self.geometry.width / 2
        if alignment == Alignment.RIGHT:
            return self.geometry.width - self.geometry.margin
        return self.geometry.margin

    def _text(
        self,
        x: float,
        y: float,
        text: str,
        style: TextStyle,
        align: Alignment = Alignment.LEFT,
    ) -> None:
        if not text:
            return
        self.page.ops.append(
            TextOp(x=x, y=y, text=text, size=style.size, bold=style.bold, align=align)
        )

    def _rule(self, y: float, width: float = 0.2) -> None:
        g = self.geometry
        self.page.ops.append(LineOp(x1=g.margin, y1=y, x2=g.width - g.margin, y2=y, width=width))

    # -- blocks -----------------------------------------------------------

    def _emit_header(self) -> None:
        header = self.variant.header
        center = self._anchor_x(Alignment.CENTER)

        if header.brand:
            self._text(
                self.geometry.margin,
                self.cursor.y,
                header.brand,
                header.brand_style or header.title_style,
            )
        self._text(center, self.cursor.y, header.title, header.title_style, Alignment.CENTER)
        self.cursor.y += header.title_advance

        period = header.period_template.format(
            start=format_date(self.request.period_start),
            end=format_date(self.request.period_end),
        )
        self._text(center, self.cursor.y, period, header.line_style, Alignment.CENTER)
        self.cursor.y += header.line_advance

        filter_line = self._company_filter_line()
        if filter_line:
            self._text(center, self.cursor.y, filter_line, header.line_style, Alignment.CENTER)
            self.cursor.y += header.line_advance

        self._text(
            self._anchor_x(header.generated_alignment),
            self.cursor.y,
            header.generated_template.format(timestamp=self.stamp),
            header.generated_style,
            header.generated_alignment,
        )
        self.cursor.y += header.gap_after

    def _company_filter_line(self) -> str | None:
        template = self.variant.header.filter_template
        wanted = self.request.company_filter
        if not template or not wanted:
            return None
        wanted_digits = _digits(wanted)
        for company in self.request.companies:
            if company.tax_id and _digits(company.tax_id) == wanted_digits:
                return template.format(name=company.name, tax_id=format_tax_id(company.tax_id))
        return None

    def _emit_summary(self) -> None:
        summary = self.variant.summary
        if summary is None:
            return
        self._ensure_space(summary.reserve)
        self._text(self.geometry.margin, self.cursor.y, summary.title, summary.title_style)
        self.cursor.y += summary.title_advance
        top = self.cursor.y
        for column in summary.columns:
            x = self.geometry.margin + column.x_offset
            for row, line in enumerate(column.lines):
                y = top + row * summary.line_advance
                self._text(x, y, line.format(**self.totals), summary.line_style)
        depth = max(len(column.lines) for column in summary.columns)
        self.cursor.y = top + depth * summary.line_advance + summary.gap_after

    def _emit_company(self, company: CompanyGroup, *, is_last: bool) -> None:
        spec = self.variant.company
        margin = self.geometry.margin

        # Keeps the company header on the same page as its table header and first row.
        self._ensure_space(spec.block_height)

        fields = {
            "name": company.name,
            "tax_id": format_tax_id(company.tax_id),
            "total": format_currency(company.total),
            "count": len(company.documents),
        }
        self._text(margin, self.cursor.y, spec.title_template.format(**fields), spec.title_style)
        self.cursor.y += spec.title_advance
        if company.tax_id and company.tax_id.strip():
            self._text(margin, self.cursor.y, spec.detail_template.format(**fields), spec.detail_style)
            self.cursor.y += spec.detail_advance
        else:
            self.cursor.y += spec.missing_detail_advance

        self._emit_table_header()
        for index, document in enumerate(company.documents):
            self._emit_row(index, document)

        self._ensure_space(spec.total_gap_before + self.geometry.row_height)
        self.cursor.y += spec.total_gap_before
        if spec.subtotal_label is not None:
            self._emit_subtotal_row(company)
        else:
            self._text(
                self.geometry.width - margin - spec.total_inset,
                self.cursor.y,
                spec.total_template.format(**fields),
                spec.total_style,
                Alignment.RIGHT,
            )
        self.cursor.y += spec.total_advance

        if not is_last:
            self._ensure_space(spec.separator_reserve)
            self._rule(self.cursor.y)
            self.cursor.y += spec.separator_advance

    def _emit_subtotal_row(self, company: CompanyGroup) -> None:
        """Company subtotals aligned under their money columns."""

        spec = self.variant.company
        y = self.cursor.y + spec.subtotal_text_offset
        for column in self.geometry.columns:
            if column.field == spec.subtotal_label_field:
                text = spec.subtotal_label
            elif column.field in MONEY_FIELDS:
                text = format_currency(company.subtotal(column.field))
            else:
                continue
            self._text(column.anchor_x, y, text, spec.total_style, column.alignment)

    def _emit_table_header(self) -> None:
        table = self.variant.table
        g = self.geometry
        y = self.cursor.y
        self.page.ops.append(
            RectOp(
                x=g.margin,
                y=y - table.header_rect_offset,
                width=g.content_width,
                height=table.header_height,
                fill=table.header_fill,
            )
        )
        for column in g.columns:
            self._text(
                column.anchor_x,
                y + table.header_text_offset,
                column.title,
                table.header_style,
                column.alignment,
            )
        self.cursor.y += table.header_advance

    def _emit_row(self, index: int, document: DocumentLine) -> None:
        table = self.variant.table
        g = self.geometry

        if self._ensure_space(g.row_height) and g.repeat_header_on_break:
            self._emit_table_header()

        y = self.cursor.y
        self.page.row_tops.append(y)
        if index % 2 == 0:
            self.page.ops.append(
                RectOp(
                    x=g.margin,
                    y=y - table.row_rect_offset,
                    width=g.content_width,
                    height=g.row_height,
                    fill=table.row_fill,
                )
            )
        for column in g.columns:
            text = truncate(format_cell(column.field, getattr(document, column.field)), column.max_chars)
            self._text(column.anchor_x, y + table.row_text_offset, text, table.row_style, column.alignment)
        self.cursor.y += g.row_height

    def _emit_grand_total(self) -> None:
        spec = self.variant.grand_total
        self._ensure_space(spec.reserve)
        self.cursor.y += spec.gap_before
        self._rule(self.cursor.y, width=spec.line_width)
        self.cursor.y += spec.advance
        x = self._anchor_x(spec.alignment)
        self._text(x, self.cursor.y, spec.template.format(**self.totals), spec.style, spec.alignment)
        if not spec.lines:
            return
        self.cursor.y += spec.title_advance
        for line in spec.lines:
            self._text(x, self.cursor.y, line.format(**self.totals), spec.line_style or spec.style, spec.alignment)
            self.cursor.y += spec.line_advance

    def _stamp_footers(self) -> None:
        footer = self.variant.footer
        height = self.geometry.height
        x = self._anchor_x(footer.alignment)
        total = len(self.pages)
        for page in self.pages:
            page.footer = [
                TextOp(
                    x=x,
                    y=height - footer.offset,
                    text=footer.template.format(page=page.index, pages=total),
                    size=footer.style.size,
                    bold=footer.style.bold,
                    align=footer.alignment,
                )
            ]
            if footer.caption:
                page.footer.append(
                    TextOp(
                        x=x,
                        y=height - footer.caption_offset,
                        text=footer.caption,
                        size=footer.style.size,
                        bold=footer.style.bold,
                        align=footer.alignment,
                    )
                )


def _totals_fields(request: ReportRequest) -> dict[str, object]:
    """Report-wide values available to summary and grand total templates."""

    taxes = request.grand_tax_totals
    fields: dict[str, object] = {
        "companies": len(request.companies),
        "documents": (
            request.declared_document_count
            if request.declared_document_count is not None
            else request.document_count
        ),
        "total": format_currency(request.grand_total),
        "taxes": format_currency(taxes.taxes),
    }
    fields.update({name: format_currency(getattr(taxes, name)) for name in TAX_FIELDS})
    return fields


def _digits(value: str) -> str:
    return "".join(char for char in value if char.isdigit())
