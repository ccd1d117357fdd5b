from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from simpledfe_reports.layout.variants import NFE_VARIANT, NFSE_VARIANT, VARIANTS, get_variant
from simpledfe_reports.models import (
    ColumnSpec,
    CompanyGroup,
    CreateReportJobRequest,
    DocumentLine,
    PageGeometry,
    ReportRequest,
)
from simpledfe_reports.models.enums import Alignment, Orientation, ReportKind


def _nfse_payload() -> dict:
    """Report data as produced by the NFSe aggregation query."""

    return {
        "dataInicial": "2024-01-01",
        "dataFinal": "2024-01-31",
        "empresa": "all",
        "totalNfses": 3,
        "totalGeral": 1500.75,
        "empresas": {
            "12345678000195": {
                "nome": "Alpha Serviços",
                "cnpj": "12345678000195",
                "total": 1000.5,
                "nfses": [
                    {
                        "numero": 101,
                        "dataEmissao": "2024-01-10",
                        "fornecedor": "Beta Consultoria",
                        "cnpjFornecedor": "11222333000181",
                        "valor": 600.5,
                    },
                    {
                        "numero": "102",
                        "dataEmissao": None,
                        "fornecedor": None,
                        "cnpjFornecedor": None,
                        "valor": 400,
                    },
                ],
            },
            "98765432000110": {
                "nome": "Gamma Tecnologia",
                "cnpj": None,
                "total": 500.25,
                "nfses": [{"numero": "7", "valor": 500.25}],
            },
        },
    }


def test_null_amounts_and_names_render_as_blank_or_zero() -> None:
    """Null money values become zero and a null company name an empty title."""

    line = DocumentLine.model_validate({"numero": 101.0, "valor": None})
    company = CompanyGroup.model_validate({"nome": None, "total": None, "nfses": [{"numero": 7.5}]})

    assert line.number == "101"
    assert line.amount == Decimal("0")
    assert company.name == ""
    assert company.total == Decimal("0")
    assert company.documents[0].number == "7.5"


def test_document_line_tax_values() -> None:
    """Service documents carry the withheld taxes; missing ones are zero."""

    line = DocumentLine.model_validate(
        {"numero": "9", "valorServico": "1000.00", "valorISS": 50, "valorPIS": None, "valorCSLL": "10.00"}
    )

    assert line.amount == Decimal("1000.00")
    assert (line.iss, line.pis, line.cofins, line.csll) == (Decimal("50"), 0, 0, Decimal("10.00"))
    assert line.taxes == Decimal("60.00")


def test_company_total_taken_from_tax_totals() -> None:
    company = CompanyGroup.model_validate(
        {"nome": "Alpha", "totais": {"valorServico": 1500, "valorISS": 75, "valorIRRF": 22.5}}
    )

    assert company.total == Decimal("1500")
    assert company.subtotal("amount") == Decimal("1500")
    assert company.subtotal("iss") == Decimal("75")
    assert CompanyGroup(name="Beta", total=Decimal("5")).subtotal("iss") == Decimal("0")


def test_declared_document_count_and_report_tax_totals() -> None:
    payload = _nfse_payload()
    payload["totaisGerais"] = {"valorServico": 1500.75, "valorISS": 30}

    request = ReportRequest.model_validate(payload)

    assert request.declared_document_count == 3
    assert request.grand_tax_totals.iss == Decimal("30")
    assert request.grand_tax_totals.taxes == Decimal("30")


def test_document_line_accepts_camelcase_keys() -> None:
    """camelCase source keys map onto the report fields."""

    line = DocumentLine.model_validate(
        {
            "numero": "000123",
            "dataEmissao": "2024-01-05",
            "fornecedor": "Fornecedor Ltda",
            "cnpjFornecedor": "11222333000181",
            "valor": "99.90",
        }
    )

    assert line.number == "000123"
    assert line.issue_date == "2024-01-05"
    assert line.supplier_name == "Fornecedor Ltda"
    assert line.supplier_tax_id == "11222333000181"
    assert line.amount == Decimal("99.90")


def test_report_request_from_nfse_payload() -> None:
    """Companies keyed by tax id keep their order; 'all' means no filter."""

    request = ReportRequest.model_validate(_nfse_payload())

    assert [company.name for company in request.companies] == ["Alpha Serviços", "Gamma Tecnologia"]
    assert request.company_filter is None
    assert request.document_count == 3
    assert request.grand_total == Decimal("1500.75")
    first, second = request.companies[0].documents
    assert first.number == "101"
    assert second.issue_date == ""
    assert second.supplier_name == ""
    assert request.companies[1].tax_id is None


def test_snake_case_keys_and_date_objects() -> None:
    """Field names work as keys and dates may be real dates."""

    request = ReportRequest(
        period_start=date(2024, 3, 1),
        period_end=date(2024, 3, 31),
        companies=[{"name": "Alpha", "documents": [{"number": "1", "amount": 5}], "total": 5}],
        company_filter="12345678000195",
    )

    assert request.period_start == date(2024, 3, 1)
    assert request.company_filter == "12345678000195"
    assert request.grand_total == Decimal("5")


def test_grand_total_sums_companies_when_absent() -> None:
    payload = _nfse_payload()
    del payload["totalGeral"]

    request = ReportRequest.model_validate(payload)

    assert request.grand_total == Decimal("1500.75")


def test_source_models_are_immutable() -> None:
    """Report data cannot be changed while a report is laid out."""

    request = ReportRequest.model_validate(_nfse_payload())

    with pytest.raises(ValidationError):
        request.companies[0].total = Decimal("1")
    with pytest.raises(ValidationError):
        request.companies[0].documents[0].amount = Decimal("1")


def test_report_request_requires_period() -> None:
    with pytest.raises(ValidationError):
        ReportRequest.model_validate({"empresas": []})


def test_column_spec_rejects_center_alignment() -> None:
    """Table columns are left or right aligned only."""

    with pytest.raises(ValidationError):
        ColumnSpec(title="Valor", field="amount", x_offset=0, width=10, alignment=Alignment.CENTER)


def test_column_spec_rejects_unknown_field() -> None:
    with pytest.raises(ValidationError):
        ColumnSpec(title="X", field="discount", x_offset=0, width=10)


def test_column_anchor_follows_alignment() -> None:
    left = ColumnSpec(title="Nº", field="number", x_offset=22, width=23)
    right = ColumnSpec(title="Valor", field="amount", x_offset=163, width=25, alignment=Alignment.RIGHT)

    assert left.anchor_x == 22
    assert right.anchor_x == 188


def test_page_geometry_requires_content_area() -> None:
    """A bottom reserve that swallows the page is rejected."""

    column = ColumnSpec(title="Nº", field="number", x_offset=10, width=10)
    with pytest.raises(ValidationError):
        PageGeometry(width=100, height=100, margin=20, row_height=5, bottom_reserve=85, columns=(column,))
    with pytest.raises(ValidationError):
        PageGeometry(width=30, height=100, margin=15, row_height=5, columns=(column,))


def test_variant_geometry_matches_page_formats() -> None:
    """NFe is A4 portrait, NFSe is A4 landscape with wider columns."""

    nfe = NFE_VARIANT.geometry
    nfse = NFSE_VARIANT.geometry

    assert (nfe.width, nfe.height, nfe.margin) == (210, 297, 20)
    assert nfe.orientation == Orientation.PORTRAIT
    assert (nfse.width, nfse.height, nfse.margin) == (297, 210, 15)
    assert nfse.orientation == Orientation.LANDSCAPE
    assert nfe.columns[2].max_chars == 35
    assert nfse.columns[2].max_chars == 45
    assert nfse.columns[2].width > nfe.columns[2].width
    assert nfse.columns[3].width > nfe.columns[3].width


@pytest.mark.parametrize("kind", list(ReportKind))
def test_variant_columns_inside_content_area(kind: ReportKind) -> None:
    geometry = VARIANTS[kind].geometry
    for column in geometry.columns:
        assert column.x_offset >= geometry.margin
        assert column.x_offset + column.width <= geometry.width - geometry.margin
    assert geometry.columns[-1].alignment == Alignment.RIGHT


@pytest.mark.parametrize("kind", [ReportKind.NFE, ReportKind.NFSE])
def test_summary_variants_share_document_columns(kind: ReportKind) -> None:
    geometry = VARIANTS[kind].geometry
    assert [c.field for c in geometry.columns] == [
        "number",
        "issue_date",
        "supplier_name",
        "supplier_tax_id",
        "amount",
    ]


def test_get_variant_by_name() -> None:
    assert get_variant("nfse") is NFSE_VARIANT
    assert get_variant(ReportKind.NFE) is NFE_VARIANT
    with pytest.raises(ValueError):
        get_variant("cte")


def test_with_repeat_header_returns_copy() -> None:
    """Changing the header policy never mutates the shared built-in variant."""

    repeated = NFE_VARIANT.with_repeat_header(True)

    assert repeated.geometry.repeat_header_on_break is True
    assert NFE_VARIANT.geometry.repeat_header_on_break is False
    assert repeated.geometry.columns == NFE_VARIANT.geometry.columns


def test_create_job_request_accepts_type_alias() -> None:
    """The job payload may name the report kind `type`."""

    req = CreateReportJobRequest.model_validate({"type": "nfse", "report": _nfse_payload()})

    assert req.kind == ReportKind.NFSE
    assert len(req.report.companies) == 2


def test_create_job_request_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        CreateReportJobRequest.model_validate(
            {"kind": "nfe", "report": _nfse_payload(), "priority": "high"}
        )
