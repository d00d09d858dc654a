# backend/educacenso/tests/unit/test_cli.py

import json

import pytest

from educacenso.cli import CensusExportRunner, main
from educacenso.core.exceptions import InvalidSnapshotError


@pytest.fixture
def snapshot_file(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


def _run(tmp_path, *args):
    output_dir = tmp_path / "out"
    code = main(["--output-dir", str(output_dir), "--reference-date", "2024-06-01", *args])
    return code, output_dir


class TestCommandLine:
    def test_export_writes_file(self, tmp_path, snapshot_file):
        code, output_dir = _run(tmp_path, "export", str(snapshot_file), "--all")
        assert code == 0
        content = (output_dir / "educacenso_20240601_1escolas.txt").read_text(encoding="utf-8")
        assert content.startswith("00|12345678|Escola Teste|")
        assert len(content.split("\n")) == 6

    def test_failed_export_writes_nothing(self, tmp_path, snapshot_file, capsys):
        code, output_dir = _run(tmp_path, "export", str(snapshot_file), "--school-id", "s9")
        assert code == 1
        assert not output_dir.exists()
        assert "Erro: Escola não encontrada" in capsys.readouterr().err

    def test_report_as_csv(self, tmp_path, snapshot_file, capsys):
        code, output_dir = _run(tmp_path, "report", str(snapshot_file))
        assert code == 0
        text = (output_dir / "inconsistencias_2024-06-01.csv").read_text(encoding="utf-8")
        assert text.startswith("Tipo,Entidade,ID,Nome,Campo,Mensagem,Sugestão")
        assert "0 erro(s), 2 aviso(s)" in capsys.readouterr().out

    def test_report_as_pdf(self, tmp_path, snapshot_file):
        code, output_dir = _run(tmp_path, "report", str(snapshot_file), "--format", "pdf")
        assert code == 0
        assert (output_dir / "inconsistencias_2024-06-01.pdf").read_bytes().startswith(b"%PDF")

    def test_unreadable_snapshot(self, tmp_path, capsys):
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        code, _ = _run(tmp_path, "export", str(broken))
        assert code == 1
        assert "Arquivo não contém JSON válido" in capsys.readouterr().err

    def test_invalid_reference_date(self, tmp_path, snapshot_file):
        with pytest.raises(SystemExit):
            main(["--reference-date", "ontem", "export", str(snapshot_file)])


class TestRunner:
    def test_missing_file(self, tmp_path):
        runner = CensusExportRunner(str(tmp_path))
        with pytest.raises(InvalidSnapshotError) as exc_info:
            runner.load_snapshot(str(tmp_path / "missing.json"))
        assert exc_info.value.context["source"].endswith("missing.json")

    def test_schema_mismatch(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"schools": "none"}), encoding="utf-8")
        with pytest.raises(InvalidSnapshotError) as exc_info:
            CensusExportRunner(str(tmp_path)).load_snapshot(str(path))
        error = exc_info.value
        assert error.status_code == 400
        assert error.validation_errors[0]["loc"] == ("schools",)
