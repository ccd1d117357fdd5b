"""Backend-independent drawing instructions produced by the layout engine.

Coordinates are millimetres from the top-left page corner. The y of a text
instruction is its baseline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from simpledfe_reports.models.common import FrozenModel
from simpledfe_reports.models.enums import Alignment


class TextOp(FrozenModel):
    """Place one line of text."""

    kind: Literal["text"] = "text"
    x: float
    y: float
    text: str
    size: float
    bold: bool = False
    align: Alignment = Alignment.LEFT


class RectOp(FrozenModel):
    """Filled rectangle without border."""

    kind: Literal["rect"] = "rect"
    x: float
    y: float
    width: float
    height: float
    fill: tuple[int, int, int]


class LineOp(FrozenModel):
    """Straight black line; `width` is the stroke width in millimetres."""

    kind: Literal["line"] = "line"
    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.2


DrawOp = Annotated[Union[TextOp, RectOp, LineOp], Field(discriminator="kind")]


class RenderedPage(BaseModel):
    """Drawing instructions of one page.

    `footer` stays empty until the footer pass stamps the page numbers.
    `row_tops` records the cursor y of each data row laid out on the page.
    """

    index: int = Field(ge=1)
    ops: list[DrawOp] = Field(default_factory=list)
    footer: list[DrawOp] = Field(default_factory=list)
    row_tops: list[float] = Field(default_factory=list)

    @property
    def all_ops(self) -> list[DrawOp]:
        return [*self.ops, *self.footer]

    def texts(self) -> list[str]:
        return [op.text for op in self.all_ops if isinstance(op, TextOp)]


@dataclass
class LayoutCursor:
    """Running position of a single layout run."""

    y: float
    page_index: int = 0
