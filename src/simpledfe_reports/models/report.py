"""Report source data: periods, companies and their fiscal documents."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from simpledfe_reports.models.common import SourceModel

TAX_FIELDS = ("iss", "pis", "cofins", "inss", "irrf", "csll")
MONEY_FIELDS = ("amount", *TAX_FIELDS)


def _zero_for_null(value: Any) -> Any:
    if value is None or value == "":
        return Decimal("0")
    return value


class TaxAmounts(SourceModel):
    """Withheld service taxes, all defaulting to zero."""

    iss: Decimal = Field(default=Decimal("0"), validation_alias=AliasChoices("iss", "valorISS"))
    pis: Decimal = Field(default=Decimal("0"), validation_alias=AliasChoices("pis", "valorPIS"))
    cofins: Decimal = Field(default=Decimal("0"), validation_alias=AliasChoices("cofins", "valorCOFINS"))
    inss: Decimal = Field(default=Decimal("0"), validation_alias=AliasChoices("inss", "valorINSS"))
    irrf: Decimal = Field(default=Decimal("0"), validation_alias=AliasChoices("irrf", "valorIRRF"))
    csll: Decimal = Field(default=Decimal("0"), validation_alias=AliasChoices("csll", "valorCSLL"))

    @field_validator(*TAX_FIELDS, mode="before")
    @classmethod
    def _tax_zero_for_null(cls, value: Any) -> Any:
        return _zero_for_null(value)

    @property
    def taxes(self) -> Decimal:
        """Sum of all withheld taxes."""

        return sum((getattr(self, name) for name in TAX_FIELDS), Decimal("0"))


class TaxTotals(TaxAmounts):
    """Precomputed service value and tax totals of a company or a whole report."""

    amount: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("amount", "valorServico", "valor"),
    )

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_zero_for_null(cls, value: Any) -> Any:
        return _zero_for_null(value)


class DocumentLine(TaxAmounts):
    """One fiscal document listed in a company table."""

    number: str = Field(validation_alias=AliasChoices("number", "numero"))
    issue_date: date | str = Field(
        default="",
        validation_alias=AliasChoices("issue_date", "dataEmissao"),
    )
    supplier_name: str = Field(
        default="",
        validation_alias=AliasChoices("supplier_name", "fornecedor"),
    )
    supplier_tax_id: str = Field(
        default="",
        validation_alias=AliasChoices("supplier_tax_id", "cnpjFornecedor"),
    )
    amount: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("amount", "valor", "valorServico"),
    )

    @field_validator("number", "supplier_name", "supplier_tax_id", mode="before")
    @classmethod
    def _blank_for_null(cls, value: Any) -> Any:
        """Render missing strings as blank cells and accept numeric ids."""

        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("issue_date", mode="before")
    @classmethod
    def _blank_date_for_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_zero_for_null(cls, value: Any) -> Any:
        return _zero_for_null(value)


class CompanyGroup(SourceModel):
    """One reporting company with its documents and precomputed subtotal.

    `total` (and `tax_totals`, when given) are trusted as given; they are
    never recomputed from the documents. Without an explicit `total` the
    service value of `tax_totals` is used.
    """

    name: str = Field(validation_alias=AliasChoices("name", "nome"))
    tax_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tax_id", "cnpj"),
    )
    documents: tuple[DocumentLine, ...] = Field(
        default=(),
        validation_alias=AliasChoices("documents", "nfes", "nfses"),
    )
    total: Decimal = Field(default=Decimal("0"))
    tax_totals: TaxTotals | None = Field(
        default=None,
        validation_alias=AliasChoices("tax_totals", "totais"),
    )

    @model_validator(mode="before")
    @classmethod
    def _total_from_tax_totals(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("total") is not None:
            return data
        totals = data.get("tax_totals", data.get("totais"))
        if isinstance(totals, TaxTotals):
            return {**data, "total": totals.amount}
        if isinstance(totals, dict):
            for key in ("amount", "valorServico", "valor"):
                if totals.get(key) is not None:
                    return {**data, "total": totals[key]}
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _blank_name_for_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("total", mode="before")
    @classmethod
    def _total_zero_for_null(cls, value: Any) -> Any:
        return _zero_for_null(value)

    def subtotal(self, field: str) -> Decimal:
        """Trusted company subtotal of one money column.

        Tax subtotals come from `tax_totals` only; without them they are zero.
        """

        if field == "amount":
            return self.total
        if self.tax_totals is None:
            return Decimal("0")
        return getattr(self.tax_totals, field)


class ReportRequest(SourceModel):
    """Input of one report generation run."""

    # Period bounds are shown in the header only, never checked against documents.
    period_start: date | str = Field(validation_alias=AliasChoices("period_start", "dataInicial"))
    period_end: date | str = Field(validation_alias=AliasChoices("period_end", "dataFinal"))
    companies: tuple[CompanyGroup, ...] = Field(
        default=(),
        validation_alias=AliasChoices("companies", "empresas"),
    )
    total_general: Decimal | None = Field(
        default=None,
        validation_alias=AliasChoices("total_general", "totalGeral"),
    )
    tax_totals: TaxTotals | None = Field(
        default=None,
        validation_alias=AliasChoices("tax_totals", "totaisGerais"),
    )
    declared_document_count: int | None = Field(
        default=None,
        validation_alias=AliasChoices("declared_document_count", "totalNfses"),
    )
    company_filter: str | None = Field(
        default=None,
        validation_alias=AliasChoices("company_filter", "empresa"),
    )

    @field_validator("companies", mode="before")
    @classmethod
    def _companies_from_mapping(cls, value: Any) -> Any:
        """Accept companies keyed by tax id, keeping insertion order."""

        if isinstance(value, dict):
            return list(value.values())
        return value

    @field_validator("company_filter", mode="before")
    @classmethod
    def _no_filter_for_all(cls, value: Any) -> Any:
        if value in (None, "", "all"):
            return None
        return value

    @property
    def grand_total(self) -> Decimal:
        """Explicit grand total, or the sum of the trusted company totals."""

        if self.total_general is not None:
            return self.total_general
        if self.tax_totals is not None:
            return self.tax_totals.amount
        return sum((company.total for company in self.companies), Decimal("0"))

    @property
    def grand_tax_totals(self) -> TaxTotals:
        """Explicit report tax totals, or the sum of the company subtotals."""

        if self.tax_totals is not None:
            return self.tax_totals
        sums = {
            name: sum((company.subtotal(name) for company in self.companies), Decimal("0"))
            for name in TAX_FIELDS
        }
        return TaxTotals(amount=self.grand_total, **sums)

    @property
    def document_count(self) -> int:
        return sum(len(company.documents) for company in self.companies)
