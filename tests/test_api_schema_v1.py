from __future__ import annotations
"""Contract tests for frozen API schema v1."""

import time
from pathlib import Path
from typing import Any

import pytest

from simpledfe_reports.config import Settings
from simpledfe_reports.integrations.container import build_container


def _report_payload() -> dict[str, Any]:
    """Report data with the camelCase export keys."""

    return {
        "dataInicial": "2024-01-01",
        "dataFinal": "2024-01-31",
        "totalGeral": 350.0,
        "empresas": [
            {
                "nome": "Alpha",
                "cnpj": "12345678000195",
                "total": 350.0,
                "nfes": [
                    {
                        "numero": "1",
                        "dataEmissao": "2024-01-10",
                        "fornecedor": "Fornecedor A",
                        "cnpjFornecedor": "11222333000181",
                        "valor": 100.0,
                    },
                    {
                        "numero": "2",
                        "dataEmissao": "2024-01-11",
                        "fornecedor": "Fornecedor B",
                        "cnpjFornecedor": "11222333000181",
                        "valor": 250.0,
                    },
                ],
            }
        ],
    }


def _get_test_client_and_module(tmp_path: Path, *, inline_worker: bool = False):
    """Lazily import FastAPI app with a fresh container writing under tmp_path."""

    pytest.importorskip("fastapi")
    from fastapi.testclient import TestClient

    import simpledfe_reports.api.main as api_main

    api_main.container = build_container(
        Settings(output_dir=tmp_path, run_inline_worker=inline_worker)
    )
    return TestClient, api_main


class FailingRenderer:
    def render(self, pages, geometry) -> bytes:
        raise RuntimeError("font missing")


def test_healthz(tmp_path: Path) -> None:
    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        res = client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


@pytest.mark.parametrize("kind", ["nfe", "nfse", "nfse_tributos"])
def test_generate_pdf_download(tmp_path: Path, kind: str) -> None:
    """Direct generation returns the PDF as an attachment."""

    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        res = client.post(f"/v1/reports/{kind}/pdf", json=_report_payload())

    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert f"relatorio_{kind}.pdf" in res.headers["content-disposition"]
    assert res.content.startswith(b"%PDF")


def test_generate_pdf_unknown_kind_rejected(tmp_path: Path) -> None:
    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        res = client.post("/v1/reports/cte/pdf", json=_report_payload())
    assert res.status_code == 422


def test_generate_pdf_missing_period_rejected(tmp_path: Path) -> None:
    payload = _report_payload()
    del payload["dataInicial"]

    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        res = client.post("/v1/reports/nfe/pdf", json=payload)
    assert res.status_code == 422


def test_generation_failure_returns_structured_error(tmp_path: Path) -> None:
    """A backend failure surfaces as one v1 error body with its cause."""

    TestClient, api_main = _get_test_client_and_module(tmp_path)
    api_main.container.reports.renderer = FailingRenderer()
    with TestClient(api_main.app) as client:
        res = client.post("/v1/reports/nfe/pdf", json=_report_payload())

    assert res.status_code == 500
    body = res.json()
    assert body["schema_version"] == "v1"
    assert body["error"]["code"] == "REPORT_RENDER_FAILED"
    assert body["error"]["details"]["cause"] == "RuntimeError"


def test_api_contract_v1_job_lifecycle(tmp_path: Path) -> None:
    """Queued job is processed by the inline worker and its file is served."""

    TestClient, api_main = _get_test_client_and_module(tmp_path, inline_worker=True)
    with TestClient(api_main.app) as client:
        create_res = client.post("/v1/report-jobs", json={"type": "nfe", "report": _report_payload()})
        assert create_res.status_code == 200
        created = create_res.json()
        assert created["schema_version"] == "v1"
        assert created["kind"] == "nfe"
        assert created["company_count"] == 1
        assert created["document_count"] == 2
        job_id = created["job_id"]

        deadline = time.monotonic() + 10
        got: dict[str, Any] = created
        while time.monotonic() < deadline:
            got = client.get(f"/v1/report-jobs/{job_id}").json()
            if got["status"] in ("completed", "failed"):
                break
            time.sleep(0.05)
        assert got["status"] == "completed"
        assert got["page_count"] == 1
        assert got["error"] is None

        file_res = client.get(f"/v1/report-jobs/{job_id}/file")
        assert file_res.status_code == 200
        assert file_res.headers["content-type"] == "application/pdf"
        assert file_res.content.startswith(b"%PDF")

        list_res = client.get("/v1/report-jobs")
        assert list_res.status_code == 200
        list_body = list_res.json()
        assert list_body["schema_version"] == "v1"
        assert list_body["total"] == 1
        assert list_body["items"][0]["job_id"] == job_id


def test_job_file_conflict_while_queued(tmp_path: Path) -> None:
    """Without a worker the job stays queued and has no file yet."""

    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        job_id = client.post("/v1/report-jobs", json={"kind": "nfse", "report": _report_payload()}).json()["job_id"]
        assert client.get(f"/v1/report-jobs/{job_id}").json()["status"] == "queued"
        res = client.get(f"/v1/report-jobs/{job_id}/file")
    assert res.status_code == 409


def test_unknown_job_returns_404(tmp_path: Path) -> None:
    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        assert client.get("/v1/report-jobs/missing").status_code == 404
        assert client.get("/v1/report-jobs/missing/file").status_code == 404


@pytest.mark.parametrize("limit", [0, -5, 1001])
def test_list_jobs_limit_out_of_range_rejected(tmp_path: Path, limit: int) -> None:
    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        res = client.get("/v1/report-jobs", params={"limit": limit})
    assert res.status_code == 422


def test_list_jobs_filtered_by_status(tmp_path: Path) -> None:
    """Without a worker every job stays queued, so none is completed."""

    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        for _ in range(2):
            client.post("/v1/report-jobs", json={"kind": "nfe", "report": _report_payload()})
        queued = client.get("/v1/report-jobs", params={"status": "queued", "limit": 1}).json()
        completed = client.get("/v1/report-jobs", params={"status": "completed"}).json()

    assert queued["total"] == 1
    assert queued["items"][0]["status"] == "queued"
    assert completed["total"] == 0


def test_create_job_extra_field_rejected(tmp_path: Path) -> None:
    TestClient, api_main = _get_test_client_and_module(tmp_path)
    with TestClient(api_main.app) as client:
        res = client.post(
            "/v1/report-jobs",
            json={"kind": "nfe", "report": _report_payload(), "priority": "high"},
        )
    assert res.status_code == 422


def _openapi_contract_subset(spec: dict) -> dict:
    """Keep only v1 contract-relevant paths and schema components."""

    paths = {}
    for path, methods in spec.get("paths", {}).items():
        if not path.startswith("/v1/") and path != "/healthz":
            continue
        paths[path] = methods
    components = spec.get("components", {}).get("schemas", {})
    return {"paths": paths, "schemas": components}


def test_openapi_exposes_v1_routes(tmp_path: Path) -> None:
    _, api_main = _get_test_client_and_module(tmp_path)
    current = _openapi_contract_subset(api_main.app.openapi())

    assert set(current["paths"]) == {
        "/healthz",
        "/v1/reports/{kind}/pdf",
        "/v1/report-jobs",
        "/v1/report-jobs/{job_id}",
        "/v1/report-jobs/{job_id}/file",
    }
    assert "ReportJobResponse" in current["schemas"]

