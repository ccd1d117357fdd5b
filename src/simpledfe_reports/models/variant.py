"""Text, spacing and styling choices that make up one report variant.

Vertical advances are millimetres added to the layout cursor after a block is
drawn; offsets are relative to the cursor at the time a block is drawn.
"""

from __future__ import annotations

from pydantic import Field

from simpledfe_reports.models.common import FrozenModel
from simpledfe_reports.models.enums import Alignment, ReportKind
from simpledfe_reports.models.geometry import DocumentField, PageGeometry

RGB = tuple[int, int, int]


class TextStyle(FrozenModel):
    """Font size in points plus weight."""

    size: float = Field(gt=0)
    bold: bool = False


class HeaderSpec(FrozenModel):
    """Report header repeated at the top of every page."""

    title: str
    title_style: TextStyle
    brand: str | None = None
    brand_style: TextStyle | None = None
    period_template: str = "Período: {start} a {end}"
    filter_template: str | None = None
    line_style: TextStyle
    generated_template: str = "Gerado em: {timestamp}"
    generated_style: TextStyle
    generated_alignment: Alignment = Alignment.CENTER
    title_advance: float
    line_advance: float
    gap_after: float


class SummaryColumn(FrozenModel):
    """Summary lines stacked at one x position."""

    x_offset: float = Field(default=0, ge=0, description="Distance from the left margin.")
    lines: tuple[str, ...]


class SummarySpec(FrozenModel):
    """Overall summary printed once, below the first page header.

    Columns start side by side at the same y; the block is as tall as its
    longest column.
    """

    title: str
    title_style: TextStyle
    columns: tuple[SummaryColumn, ...] = Field(min_length=1)
    line_style: TextStyle
    reserve: float
    title_advance: float
    line_advance: float
    gap_after: float


class CompanySpec(FrozenModel):
    """Company header, subtotal and separator."""

    title_template: str
    title_style: TextStyle
    title_advance: float
    detail_template: str
    detail_style: TextStyle
    detail_advance: float
    missing_detail_advance: float
    block_height: float = Field(
        description="Space required before a company starts: header, table header and one row.",
    )
    total_template: str = ""
    total_style: TextStyle
    subtotal_label: str | None = Field(
        default=None,
        description="When set, the subtotal is a table row: this label plus one value per money column.",
    )
    subtotal_label_field: DocumentField = "supplier_name"
    subtotal_text_offset: float = 0
    total_gap_before: float
    total_inset: float = Field(description="Distance of the subtotal anchor from the right margin.")
    total_advance: float
    separator_reserve: float
    separator_advance: float


class TableSpec(FrozenModel):
    """Table header and data row styling."""

    header_style: TextStyle
    header_fill: RGB
    header_height: float
    header_advance: float
    header_rect_offset: float
    header_text_offset: float
    row_style: TextStyle
    row_fill: RGB
    row_rect_offset: float
    row_text_offset: float


class GrandTotalSpec(FrozenModel):
    """Closing separator, grand total line and optional detail lines."""

    template: str = "TOTAL GERAL: {total}"
    style: TextStyle
    alignment: Alignment = Alignment.CENTER
    reserve: float
    gap_before: float
    line_width: float
    advance: float
    lines: tuple[str, ...] = ()
    line_style: TextStyle | None = None
    title_advance: float = 0
    line_advance: float = 0


class FooterSpec(FrozenModel):
    """Page numbering stamped once the page count is known."""

    template: str = "Página {page} de {pages}"
    caption: str | None = None
    style: TextStyle
    alignment: Alignment = Alignment.CENTER
    offset: float = Field(description="Distance of the page number baseline from the page bottom.")
    caption_offset: float = 0


class ReportVariant(FrozenModel):
    """Complete layout configuration of one report kind."""

    kind: ReportKind
    label: str
    geometry: PageGeometry
    header: HeaderSpec
    summary: SummarySpec | None = None
    company: CompanySpec
    table: TableSpec
    grand_total: GrandTotalSpec
    footer: FooterSpec

    def with_geometry(self, geometry: PageGeometry) -> "ReportVariant":
        return self.model_copy(update={"geometry": geometry})

    def with_repeat_header(self, enabled: bool) -> "ReportVariant":
        """Copy of this variant with the table-header repetition policy set."""

        if self.geometry.repeat_header_on_break == enabled:
            return self
        geometry = self.geometry.model_copy(update={"repeat_header_on_break": enabled})
        return self.with_geometry(geometry)
