from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import get_settings
from .errors import ReportGenerationError
from .integrations.filesystem_adapter import LocalReportStore
from .layout.variants import VARIANTS
from .logging_config import configure_logging
from .models.enums import ReportKind
from .models.report import ReportRequest
from .render import PdfRenderer, render_pdf_to_images
from .services.report_service import ReportService

app = typer.Typer(help="SimpleDFe fiscal document report generator.")
console = Console()


def _load_request(data_path: Path) -> ReportRequest:
    """Read report data JSON (camelCase export keys or snake_case field names)."""

    return ReportRequest.model_validate_json(data_path.read_text(encoding="utf-8"))


@app.command()
def generate(
    data_path: Path,
    kind: Optional[ReportKind] = typer.Option(
        None, case_sensitive=False, help="Report variant (nfe or nfse)."
    ),
    out: Optional[Path] = typer.Option(
        None, help="Output directory (defaults to SIMPLEDFE_OUTPUT_DIR)."
    ),
    repeat_header: bool = typer.Option(
        False,
        "--repeat-header",
        help="Repeat the table header when a company table continues on a new page.",
    ),
) -> None:
    """
    Generate a fiscal document summary report PDF from aggregated JSON data.

    The JSON holds the period bounds, the companies with their documents and
    the precomputed company totals.
    """

    settings = get_settings()
    configure_logging(settings.log_level)
    kind = kind or settings.default_kind
    repeat_header = repeat_header or settings.repeat_header_on_break

    if not data_path.is_file():
        console.print(f"[red]Report data not found:[/red] {data_path}")
        raise typer.Exit(code=2)
    try:
        request = _load_request(data_path)
    except ValidationError as exc:
        console.print(f"[red]Invalid report data in[/red] {data_path}")
        console.print(str(exc))
        raise typer.Exit(code=2) from exc

    service = ReportService(
        renderer=PdfRenderer(),
        store=LocalReportStore(out or settings.output_dir),
        repeat_header_on_break=repeat_header,
    )
    console.print(
        f"[cyan]Generating {kind.value} report[/cyan] "
        f"({len(request.companies)} companies, {request.document_count} documents)"
    )
    try:
        written = service.write_pdf(request, kind)
    except ReportGenerationError as exc:
        console.print(f"[red]{exc.code}[/red] {exc.message}")
        if exc.cause is not None:
            console.print(f"[red]cause:[/red] {exc.cause}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Wrote[/green] {written.path} ({written.page_count} pages)")


@app.command()
def preview(
    pdf_path: Path,
    out: Path = Path("temp/preview"),
    dpi: int = typer.Option(110, help="Rendering DPI for page images."),
) -> None:
    """Render each page of a generated report to PNG for a quick visual check."""

    if not pdf_path.is_file():
        console.print(f"[red]PDF not found:[/red] {pdf_path}")
        raise typer.Exit(code=2)
    images = render_pdf_to_images(pdf_path, out, dpi=dpi)
    for image in images:
        console.print(f"[green]Rendered[/green] {image}")


@app.command()
def variants() -> None:
    """List the built-in report variants and their page geometry."""

    table = Table(title="Report variants")
    table.add_column("kind")
    table.add_column("label")
    table.add_column("page (mm)")
    table.add_column("margin")
    table.add_column("columns")
    for kind, variant in VARIANTS.items():
        g = variant.geometry
        table.add_row(
            kind.value,
            variant.label,
            f"{g.width:g} x {g.height:g} {g.orientation.value}",
            f"{g.margin:g}",
            ", ".join(column.title for column in g.columns),
        )
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
