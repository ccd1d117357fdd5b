"""Built-in report variants: NFe (portrait), NFSe and NFSe tributos (landscape).

All share the same layout algorithm; only geometry, texts and spacing
differ. Column offsets already include the cell padding.
"""

from __future__ import annotations

from simpledfe_reports.models.enums import Alignment, Orientation, ReportKind
from simpledfe_reports.models.geometry import ColumnSpec, PageGeometry
from simpledfe_reports.models.variant import (
    CompanySpec,
    FooterSpec,
    GrandTotalSpec,
    HeaderSpec,
    ReportVariant,
    SummaryColumn,
    SummarySpec,
    TableSpec,
    TextStyle,
)

A4_SHORT = 210.0
A4_LONG = 297.0

PRODUCT_CAPTION = "SimpleDFe - Sistema de Gestão de Documentos Fiscais"

NFE_SUPPLIER_MAX_CHARS = 35
NFSE_SUPPLIER_MAX_CHARS = 45
TRIBUTOS_SUPPLIER_MAX_CHARS = 30


NFE_VARIANT = ReportVariant(
    kind=ReportKind.NFE,
    label="Relatório de NFe",
    geometry=PageGeometry(
        width=A4_SHORT,
        height=A4_LONG,
        margin=20,
        orientation=Orientation.PORTRAIT,
        row_height=6,
        bottom_reserve=30,
        columns=(
            ColumnSpec(title="Número NFe", field="number", x_offset=22, width=23),
            ColumnSpec(title="Data Emissão", field="issue_date", x_offset=47, width=23),
            ColumnSpec(
                title="Fornecedor",
                field="supplier_name",
                x_offset=72,
                width=58,
                max_chars=NFE_SUPPLIER_MAX_CHARS,
            ),
            ColumnSpec(title="CNPJ Fornecedor", field="supplier_tax_id", x_offset=132, width=30),
            ColumnSpec(
                title="Valor",
                field="amount",
                x_offset=163,
                width=25,
                alignment=Alignment.RIGHT,
            ),
        ),
    ),
    header=HeaderSpec(
        title="RELATÓRIO DE NFe - RESUMO",
        title_style=TextStyle(size=20, bold=True),
        line_style=TextStyle(size=12),
        generated_style=TextStyle(size=12),
        title_advance=15,
        line_advance=10,
        gap_after=20,
    ),
    company=CompanySpec(
        title_template="EMPRESA: {name}",
        title_style=TextStyle(size=14, bold=True),
        title_advance=8,
        detail_template="CNPJ: {tax_id}",
        detail_style=TextStyle(size=10),
        detail_advance=12,
        missing_detail_advance=8,
        block_height=40,
        total_template="Total da Empresa: {total}",
        total_style=TextStyle(size=9, bold=True),
        total_gap_before=5,
        total_inset=2,
        total_advance=15,
        separator_reserve=10,
        separator_advance=10,
    ),
    table=TableSpec(
        header_style=TextStyle(size=8, bold=True),
        header_fill=(230, 230, 230),
        header_height=8,
        header_advance=8,
        header_rect_offset=2,
        header_text_offset=3,
        row_style=TextStyle(size=7),
        row_fill=(248, 248, 248),
        row_rect_offset=1,
        row_text_offset=3,
    ),
    grand_total=GrandTotalSpec(
        style=TextStyle(size=14, bold=True),
        alignment=Alignment.CENTER,
        reserve=30,
        gap_before=10,
        line_width=1,
        advance=10,
    ),
    footer=FooterSpec(
        caption=PRODUCT_CAPTION,
        style=TextStyle(size=8),
        alignment=Alignment.CENTER,
        offset=10,
        caption_offset=5,
    ),
)


NFSE_VARIANT = ReportVariant(
    kind=ReportKind.NFSE,
    label="Relatório de NFSe",
    geometry=PageGeometry(
        width=A4_LONG,
        height=A4_SHORT,
        margin=15,
        orientation=Orientation.LANDSCAPE,
        row_height=6,
        bottom_reserve=15,
        columns=(
            ColumnSpec(title="Número NFSe", field="number", x_offset=17, width=33),
            ColumnSpec(title="Data Emissão", field="issue_date", x_offset=52, width=23),
            ColumnSpec(
                title="Fornecedor",
                field="supplier_name",
                x_offset=77,
                width=98,
                max_chars=NFSE_SUPPLIER_MAX_CHARS,
            ),
            ColumnSpec(title="CNPJ Fornecedor", field="supplier_tax_id", x_offset=177, width=48),
            ColumnSpec(
                title="Valor",
                field="amount",
                x_offset=227,
                width=53,
                alignment=Alignment.RIGHT,
            ),
        ),
    ),
    header=HeaderSpec(
        title="RELATÓRIO RESUMO DE NFSE",
        title_style=TextStyle(size=16, bold=True),
        brand="SIMPLDFÉ",
        brand_style=TextStyle(size=20, bold=True),
        filter_template="Empresa: {name} - CNPJ: {tax_id}",
        line_style=TextStyle(size=12),
        generated_style=TextStyle(size=10),
        generated_alignment=Alignment.RIGHT,
        title_advance=10,
        line_advance=8,
        gap_after=15,
    ),
    summary=SummarySpec(
        title="RESUMO GERAL",
        title_style=TextStyle(size=14, bold=True),
        columns=(
            SummaryColumn(
                lines=(
                    "Total de Empresas: {companies}",
                    "Total de NFSe: {documents}",
                    "Valor Total Geral: {total}",
                ),
            ),
        ),
        line_style=TextStyle(size=11),
        reserve=25,
        title_advance=8,
        line_advance=5,
        gap_after=10,
    ),
    company=CompanySpec(
        title_template="{name}",
        title_style=TextStyle(size=12, bold=True),
        title_advance=5,
        detail_template="CNPJ: {tax_id} | Total: {total} | NFSe: {count}",
        detail_style=TextStyle(size=10),
        detail_advance=10,
        missing_detail_advance=5,
        block_height=40,
        total_template="Subtotal {name}: {total}",
        total_style=TextStyle(size=9, bold=True),
        total_gap_before=3,
        total_inset=2,
        total_advance=15,
        separator_reserve=10,
        separator_advance=10,
    ),
    table=TableSpec(
        header_style=TextStyle(size=9, bold=True),
        header_fill=(240, 240, 240),
        header_height=8,
        header_advance=10,
        header_rect_offset=2,
        header_text_offset=3,
        row_style=TextStyle(size=8),
        row_fill=(250, 250, 250),
        row_rect_offset=2,
        row_text_offset=2,
    ),
    grand_total=GrandTotalSpec(
        style=TextStyle(size=12, bold=True),
        alignment=Alignment.CENTER,
        reserve=15,
        gap_before=0,
        line_width=0.2,
        advance=8,
    ),
    footer=FooterSpec(
        caption=PRODUCT_CAPTION,
        style=TextStyle(size=8),
        alignment=Alignment.CENTER,
        offset=10,
        caption_offset=5,
    ),
)



TRIBUTOS_TAX_COLUMNS = (
    ("ISS", "iss", 156),
    ("PIS", "pis", 178),
    ("COFINS", "cofins", 200),
    ("INSS", "inss", 222),
    ("IRRF", "irrf", 244),
    ("CSLL", "csll", 266),
)

NFSE_TRIBUTOS_VARIANT = ReportVariant(
    kind=ReportKind.NFSE_TRIBUTOS,
    label="Relatório de Tributos NFSe",
    geometry=PageGeometry(
        width=A4_LONG,
        height=A4_SHORT,
        margin=15,
        orientation=Orientation.LANDSCAPE,
        row_height=5,
        bottom_reserve=25,
        columns=(
            ColumnSpec(title="NFSe", field="number", x_offset=16, width=19),
            ColumnSpec(title="Data", field="issue_date", x_offset=38, width=21),
            ColumnSpec(
                title="Fornecedor",
                field="supplier_name",
                x_offset=62,
                width=64,
                max_chars=TRIBUTOS_SUPPLIER_MAX_CHARS,
            ),
            ColumnSpec(
                title="Valor Serv.",
                field="amount",
                x_offset=129,
                width=22,
                alignment=Alignment.RIGHT,
            ),
            *(
                ColumnSpec(
                    title=title,
                    field=field,
                    x_offset=x_offset,
                    # The last column ends on the right margin.
                    width=16 if field == "csll" else 17,
                    alignment=Alignment.RIGHT,
                )
                for title, field, x_offset in TRIBUTOS_TAX_COLUMNS
            ),
        ),
    ),
    header=HeaderSpec(
        title="RELATÓRIO DE TRIBUTOS NFSe",
        title_style=TextStyle(size=18, bold=True),
        line_style=TextStyle(size=11),
        generated_style=TextStyle(size=11),
        title_advance=12,
        line_advance=8,
        gap_after=15,
    ),
    summary=SummarySpec(
        title="RESUMO GERAL DE TRIBUTOS",
        title_style=TextStyle(size=14, bold=True),
        columns=(
            SummaryColumn(
                lines=(
                    "Total de NFSe: {documents}",
                    "Valor Total Serviços: {total}",
                    "Total ISS: {iss}",
                ),
            ),
            SummaryColumn(
                x_offset=A4_LONG / 2 - 15,
                lines=("Total PIS: {pis}", "Total COFINS: {cofins}", "Total INSS: {inss}"),
            ),
            SummaryColumn(
                x_offset=A4_LONG - 80 - 15,
                lines=("Total IRRF: {irrf}", "Total CSLL: {csll}"),
            ),
        ),
        line_style=TextStyle(size=9),
        reserve=50,
        title_advance=10,
        line_advance=5,
        gap_after=5,
    ),
    company=CompanySpec(
        title_template="EMPRESA: {name}",
        title_style=TextStyle(size=12, bold=True),
        title_advance=6,
        detail_template="CNPJ: {tax_id}",
        detail_style=TextStyle(size=9),
        detail_advance=10,
        missing_detail_advance=6,
        block_height=45,
        total_style=TextStyle(size=8, bold=True),
        subtotal_label="SUBTOTAIS:",
        subtotal_label_field="supplier_name",
        subtotal_text_offset=2.5,
        total_gap_before=3,
        total_inset=0,
        total_advance=10,
        separator_reserve=8,
        separator_advance=8,
    ),
    table=TableSpec(
        header_style=TextStyle(size=7, bold=True),
        header_fill=(230, 230, 230),
        header_height=6,
        header_advance=6,
        header_rect_offset=1,
        header_text_offset=3,
        row_style=TextStyle(size=6),
        row_fill=(248, 248, 248),
        row_rect_offset=1,
        row_text_offset=2.5,
    ),
    grand_total=GrandTotalSpec(
        template="TOTAIS GERAIS",
        style=TextStyle(size=12, bold=True),
        alignment=Alignment.CENTER,
        reserve=25,
        gap_before=8,
        line_width=1,
        advance=8,
        lines=("Valor Total Serviços: {total}", "Total Tributos: {taxes}"),
        line_style=TextStyle(size=10, bold=True),
        title_advance=8,
        line_advance=5,
    ),
    footer=FooterSpec(
        caption=PRODUCT_CAPTION,
        style=TextStyle(size=8),
        alignment=Alignment.CENTER,
        offset=8,
        caption_offset=4,
    ),
)


VARIANTS: dict[ReportKind, ReportVariant] = {
    ReportKind.NFE: NFE_VARIANT,
    ReportKind.NFSE: NFSE_VARIANT,
    ReportKind.NFSE_TRIBUTOS: NFSE_TRIBUTOS_VARIANT,
}


def get_variant(kind: ReportKind | str) -> ReportVariant:
    """Look up the built-in variant for a report kind."""

    return VARIANTS[ReportKind(kind)]
