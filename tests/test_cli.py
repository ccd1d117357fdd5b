import json
from pathlib import Path

import fitz  # PyMuPDF
from typer.testing import CliRunner

from simpledfe_reports import cli

runner = CliRunner()


def _write_report_data(path: Path, n_docs: int = 2) -> None:
    documents = [
        {
            "numero": str(100 + i),
            "dataEmissao": "2024-01-10",
            "fornecedor": "Fornecedor Exemplo Ltda",
            "cnpjFornecedor": "11222333000181",
            "valor": 10.0,
        }
        for i in range(n_docs)
    ]
    payload = {
        "dataInicial": "2024-01-01",
        "dataFinal": "2024-01-31",
        "empresas": {
            "12345678000195": {
                "nome": "Alpha",
                "cnpj": "12345678000195",
                "total": 10.0 * n_docs,
                "nfses": documents,
            }
        },
    }
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def test_generate_writes_pdf(tmp_path: Path) -> None:
    data_path = tmp_path / "dados.json"
    _write_report_data(data_path)
    out_dir = tmp_path / "out"

    result = runner.invoke(
        cli.app,
        ["generate", str(data_path), "--kind", "nfse", "--out", str(out_dir)],
    )

    assert result.exit_code == 0, result.output
    pdfs = list(out_dir.glob("relatorio_nfse_*.pdf"))
    assert len(pdfs) == 1
    with fitz.open(pdfs[0]) as doc:
        assert doc.page_count == 1
        assert "RESUMO GERAL" in doc[0].get_text()


def test_generate_repeat_header_flag(tmp_path: Path) -> None:
    data_path = tmp_path / "dados.json"
    _write_report_data(data_path, n_docs=32)
    out_dir = tmp_path / "out"

    result = runner.invoke(
        cli.app,
        ["generate", str(data_path), "--kind", "nfe", "--out", str(out_dir), "--repeat-header"],
    )

    assert result.exit_code == 0, result.output
    (pdf_path,) = out_dir.glob("relatorio_nfe_*.pdf")
    with fitz.open(pdf_path) as doc:
        assert doc.page_count == 2
        assert "CNPJ Fornecedor" in doc[1].get_text()


def test_generate_missing_file_exits_2(tmp_path: Path) -> None:
    result = runner.invoke(cli.app, ["generate", str(tmp_path / "nope.json"), "--out", str(tmp_path)])

    assert result.exit_code == 2
    assert not list(tmp_path.glob("*.pdf"))


def test_generate_invalid_data_exits_2(tmp_path: Path) -> None:
    data_path = tmp_path / "dados.json"
    data_path.write_text(json.dumps({"empresas": []}), encoding="utf-8")

    result = runner.invoke(cli.app, ["generate", str(data_path), "--out", str(tmp_path / "out")])

    assert result.exit_code == 2
    assert not (tmp_path / "out").exists()


def test_preview_renders_pages(tmp_path: Path) -> None:
    data_path = tmp_path / "dados.json"
    _write_report_data(data_path, n_docs=32)
    out_dir = tmp_path / "out"
    runner.invoke(cli.app, ["generate", str(data_path), "--kind", "nfe", "--out", str(out_dir)])
    (pdf_path,) = out_dir.glob("*.pdf")

    result = runner.invoke(
        cli.app,
        ["preview", str(pdf_path), "--out", str(tmp_path / "preview"), "--dpi", "40"],
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in (tmp_path / "preview").glob("page_*.png")) == [
        "page_01.png",
        "page_02.png",
    ]


def test_variants_lists_every_kind() -> None:
    result = runner.invoke(cli.app, ["variants"])

    assert result.exit_code == 0
    assert "nfe" in result.output
    assert "nfse" in result.output
    assert "nfse_tributos" in result.output
