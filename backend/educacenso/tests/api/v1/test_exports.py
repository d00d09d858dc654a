# backend/educacenso/tests/api/v1/test_exports.py

import csv
import io

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

REFERENCE = {"referenceDate": "2024-06-01"}
ALL_RECORDS = {
    "includeStudents": True,
    "includeTeachers": True,
    "includeClassrooms": True,
    "includeInfrastructure": True,
}


class TestEducacensoRoutes:
    async def test_export_inline(self, client: AsyncClient, snapshot_data):
        payload = dict(snapshot_data, options=ALL_RECORDS)
        response = await client.post("/api/v1/educacenso/export", json=payload, params=REFERENCE)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["fileName"] == "educacenso_20240601_1escolas.txt"
        assert body["errors"] is None
        assert [line[:3] for line in body["content"].split("\n")] == [
            "00|", "40|", "30|", "10|", "20|", "20|"
        ]

    async def test_export_failure_is_reported_inline(self, client: AsyncClient, snapshot_data):
        payload = dict(snapshot_data, options={"schoolId": "s9"})
        response = await client.post("/api/v1/educacenso/export", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["content"] == ""
        assert body["errors"] == ["Escola não encontrada"]

    async def test_export_file(self, client: AsyncClient, snapshot_data):
        payload = dict(snapshot_data, options=ALL_RECORDS)
        response = await client.post(
            "/api/v1/educacenso/export/file", json=payload, params=REFERENCE
        )

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="educacenso_20240601_1escolas.txt"'
        )
        assert response.text.startswith("00|12345678|Escola Teste|")

    async def test_export_file_failure(self, client: AsyncClient, snapshot_data):
        payload = dict(snapshot_data, options={"schoolId": "s9"})
        response = await client.post("/api/v1/educacenso/export/file", json=payload)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "census_export_failed"
        assert error["errors"] == ["Escola não encontrada"]
        assert error["context"]["school_id"] == "s9"

    async def test_null_flags_are_accepted(self, client: AsyncClient, snapshot_data):
        snapshot_data["schools"][0]["infrastructure"]["library"] = None
        snapshot_data["schools"][0]["infrastructure"]["classrooms"] = None
        snapshot_data["schools"][0]["academicYears"][0]["turmas"][0]["isMultiGrade"] = None
        snapshot_data["students"][0]["hasSpecialNeeds"] = None
        snapshot_data["students"][0]["receivesSchoolMeal"] = None
        payload = dict(snapshot_data, options=ALL_RECORDS)

        response = await client.post("/api/v1/educacenso/export", json=payload, params=REFERENCE)
        assert response.status_code == 200
        lines = response.json()["content"].split("\n")
        assert lines[1] == "40|12345678|0|0|1|0|1|1|0|0|1"
        assert lines[3].endswith("|0|0")

        report = await client.post(
            "/api/v1/inconsistencies/report", json=snapshot_data, params=REFERENCE
        )
        assert report.status_code == 200
        assert report.json()["totalErrors"] == 0

    async def test_malformed_snapshot(self, client: AsyncClient):
        response = await client.post("/api/v1/educacenso/export", json={"schools": "none"})
        assert response.status_code == 422


class TestInconsistencyRoutes:
    async def test_report(self, client: AsyncClient, snapshot_data):
        response = await client.post(
            "/api/v1/inconsistencies/report", json=snapshot_data, params=REFERENCE
        )

        assert response.status_code == 200
        body = response.json()
        assert body["totalErrors"] == 0
        assert body["totalWarnings"] == 2
        assert body["summary"]["students"] == {"errors": 0, "warnings": 2, "info": 0}
        assert body["inconsistencies"][0]["entityId"] == "st1"

    async def test_filtered_report_keeps_totals(self, client: AsyncClient, snapshot_data):
        params = dict(REFERENCE, type="warning", entity="school")
        response = await client.post(
            "/api/v1/inconsistencies/report", json=snapshot_data, params=params
        )

        body = response.json()
        assert body["inconsistencies"] == []
        assert body["totalWarnings"] == 2

    async def test_unknown_filter_value(self, client: AsyncClient, snapshot_data):
        response = await client.post(
            "/api/v1/inconsistencies/report", json=snapshot_data, params={"type": "fatal"}
        )
        assert response.status_code == 422

    async def test_csv_file(self, client: AsyncClient, snapshot_data):
        response = await client.post(
            "/api/v1/inconsistencies/report/file", json=snapshot_data, params=REFERENCE
        )

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="inconsistencias_2024-06-01.csv"'
        )
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == ["Tipo", "Entidade", "ID", "Nome", "Campo", "Mensagem", "Sugestão"]
        assert len(rows) == 3

    async def test_pdf_file(self, client: AsyncClient, snapshot_data):
        params = dict(REFERENCE, format="pdf")
        response = await client.post(
            "/api/v1/inconsistencies/report/file", json=snapshot_data, params=params
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    async def test_unsupported_format(self, client: AsyncClient, snapshot_data):
        response = await client.post(
            "/api/v1/inconsistencies/report/file", json=snapshot_data, params={"format": "xls"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "unsupported_format"


class TestSystemRoutes:
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "educacenso-export"

    async def test_root(self, client: AsyncClient):
        response = await client.get("/")
        assert response.json()["status"] == "active"
