# backend/educacenso/cli.py
"""
Command line for the Educacenso exports.

Reads a snapshot JSON file (the same body the HTTP API accepts) and writes the
generated file into the export directory instead of sending it to a browser.

Usage:
    educacenso-export export snapshot.json --all
    educacenso-export --reference-date 2024-06-01 report snapshot.json --format pdf
"""
import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from dateutil import parser as date_parser
from pydantic import ValidationError

from .config import get_settings, setup_logging
from .core.exceptions import AppError, InvalidSnapshotError
from .schemas.census import CensusSnapshot
from .schemas.export import (
    EducacensoExportOptions,
    EducacensoExportResult,
    InconsistencyReport,
)
from .services.export import (
    export_educacenso,
    generate_inconsistency_report,
    inconsistency_report_file_name,
    render_inconsistency_report,
)

logger = logging.getLogger(__name__)


class CensusExportRunner:
    """Runs the exports for a snapshot file and writes the results to disk."""

    def __init__(
        self, output_dir: Optional[str] = None, reference_date: Optional[date] = None
    ):
        self.settings = get_settings()
        self.output_dir = Path(output_dir or self.settings.EXPORT_DIR)
        self.reference_date = reference_date

    def load_snapshot(self, path: str) -> CensusSnapshot:
        """
        Read and validate a snapshot file.

        Raises:
            InvalidSnapshotError: if the file cannot be read, is not JSON or
                does not match the snapshot schema.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise InvalidSnapshotError(
                f"Não foi possível ler o arquivo {path}", source=path, cause=e
            )
        except ValueError as e:
            raise InvalidSnapshotError(
                "Arquivo não contém JSON válido", source=path, details=str(e), cause=e
            )

        try:
            snapshot = CensusSnapshot.model_validate(data)
        except ValidationError as e:
            raise InvalidSnapshotError(
                source=path, validation_errors=e.errors(include_url=False), cause=e
            )

        logger.info(
            f"Loaded snapshot {path}: {len(snapshot.schools)} school(s), "
            f"{len(snapshot.students)} student(s), {len(snapshot.teachers)} teacher(s)"
        )
        return snapshot

    def _write(self, file_name: str, content: bytes) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / file_name
        target.write_bytes(content)
        logger.info(f"Wrote {len(content)} bytes to {target}")
        return target

    def export(
        self, snapshot: CensusSnapshot, options: EducacensoExportOptions
    ) -> Tuple[EducacensoExportResult, Optional[Path]]:
        """Build the Educacenso file; nothing is written when the export fails."""
        result = export_educacenso(
            snapshot.schools,
            snapshot.students,
            snapshot.teachers,
            snapshot.curriculum_stages,
            options,
            reference_date=self.reference_date,
        )
        if not result.success:
            return result, None
        return result, self._write(result.file_name, result.content.encode("utf-8"))

    def report(
        self, snapshot: CensusSnapshot, output_format: str = "csv"
    ) -> Tuple[InconsistencyReport, Path]:
        report = generate_inconsistency_report(
            snapshot.schools,
            snapshot.students,
            snapshot.teachers,
            snapshot.curriculum_stages,
            reference_date=self.reference_date,
        )
        content = render_inconsistency_report(report, output_format)
        file_name = inconsistency_report_file_name(output_format, self.reference_date)
        return report, self._write(file_name, content)


def _reference_date(value: str) -> date:
    try:
        return date_parser.isoparse(value).date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r} (use YYYY-MM-DD)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Educacenso export and inconsistency report")
    parser.add_argument("--output-dir", help="Directory for generated files (default: EXPORT_DIR)")
    parser.add_argument(
        "--reference-date",
        type=_reference_date,
        help="Date used for file names and ages (default: today, UTC)",
    )

    subparsers = parser.add_subparsers(dest="command")

    export_parser = subparsers.add_parser("export", help="Generate the Educacenso file")
    export_parser.add_argument("snapshot", help="Snapshot JSON file")
    export_parser.add_argument("--school-id", help="Export a single school")
    export_parser.add_argument("--academic-year-id", help="Academic year to export")
    export_parser.add_argument("--students", action="store_true", help="Include student records")
    export_parser.add_argument("--teachers", action="store_true", help="Include teacher records")
    export_parser.add_argument("--classrooms", action="store_true", help="Include class records")
    export_parser.add_argument(
        "--infrastructure", action="store_true", help="Include infrastructure records"
    )
    export_parser.add_argument("--all", action="store_true", help="Include every record type")

    report_parser = subparsers.add_parser("report", help="Generate the inconsistency report")
    report_parser.add_argument("snapshot", help="Snapshot JSON file")
    report_parser.add_argument("--format", choices=["csv", "pdf"], default="csv")

    return parser


def _export_options(args: argparse.Namespace) -> EducacensoExportOptions:
    return EducacensoExportOptions(
        school_id=args.school_id,
        academic_year_id=args.academic_year_id,
        include_students=args.all or args.students,
        include_teachers=args.all or args.teachers,
        include_classrooms=args.all or args.classrooms,
        include_infrastructure=args.all or args.infrastructure,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(get_settings())
    runner = CensusExportRunner(args.output_dir, args.reference_date)

    try:
        snapshot = runner.load_snapshot(args.snapshot)

        if args.command == "export":
            result, path = runner.export(snapshot, _export_options(args))
            for warning in result.warnings or []:
                print(f"Aviso: {warning}")
            if path is None:
                for error in result.errors or []:
                    print(f"Erro: {error}", file=sys.stderr)
                return 1
            print(f"Arquivo Educacenso gerado: {path}")

        else:
            report, path = runner.report(snapshot, args.format)
            print(
                f"Relatório gerado: {path} ({report.total_errors} erro(s), "
                f"{report.total_warnings} aviso(s))"
            )

    except AppError as e:
        logger.error(str(e))
        print(f"Erro: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
