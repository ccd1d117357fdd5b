"""Page geometry and table column model. All lengths are millimetres."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator, model_validator

from simpledfe_reports.models.common import FrozenModel
from simpledfe_reports.models.enums import Alignment, Orientation

DocumentField = Literal[
    "number",
    "issue_date",
    "supplier_name",
    "supplier_tax_id",
    "amount",
    "iss",
    "pis",
    "cofins",
    "inss",
    "irrf",
    "csll",
]


class ColumnSpec(FrozenModel):
    """One table column: which document field it shows and where."""

    title: str
    field: DocumentField
    x_offset: float = Field(ge=0)
    width: float = Field(gt=0)
    alignment: Alignment = Alignment.LEFT
    max_chars: int | None = Field(
        default=None,
        ge=4,
        description="Cell text longer than this is cut and suffixed with '...'.",
    )

    @field_validator("alignment")
    @classmethod
    def _left_or_right(cls, value: Alignment) -> Alignment:
        if value == Alignment.CENTER:
            raise ValueError("table columns are aligned left or right")
        return value

    @property
    def anchor_x(self) -> float:
        """X where cell text is anchored; right-aligned text ends at the column edge."""

        if self.alignment == Alignment.RIGHT:
            return self.x_offset + self.width
        return self.x_offset


class PageGeometry(FrozenModel):
    """Page size, margins and table layout for one report variant."""

    width: float = Field(gt=0)
    height: float = Field(gt=0)
    margin: float = Field(ge=0)
    orientation: Orientation = Orientation.PORTRAIT
    row_height: float = Field(gt=0)
    columns: tuple[ColumnSpec, ...] = Field(min_length=1)
    bottom_reserve: float = Field(
        default=0,
        ge=0,
        description="Space kept free above the page bottom for the footer.",
    )
    repeat_header_on_break: bool = Field(
        default=False,
        description="Re-emit the table header when a company table continues on a new page.",
    )

    @model_validator(mode="after")
    def _has_content_area(self) -> "PageGeometry":
        if self.bottom_limit <= self.margin:
            raise ValueError("bottom_reserve leaves no vertical space below the top margin")
        if self.content_width <= 0:
            raise ValueError("margin leaves no horizontal space")
        return self

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Lowest y any body content may reach."""

        return self.height - self.bottom_reserve
