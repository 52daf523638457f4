"""Command line interface for the transfer tool."""

import argparse
import logging
import sys
from typing import List, Optional

import pydantic

from .models.settings import ConnectionSettings
from .models.transfer import FileFormat, TransferConfig, TransferRun, TransferStatus
from .orchestrator import TransferOrchestrator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def _add_connection_args(parser: argparse.ArgumentParser):
    """Add database connection and common options to a subcommand."""
    group = parser.add_argument_group("connection")
    group.add_argument("--endpoint", "-e", help="Database endpoint (default: http://localhost:8000)")
    group.add_argument("--user", "-u", dest="username", help="Root username (default: root)")
    group.add_argument("--pass", "-p", dest="password", help="Root password (default: root)")
    group.add_argument("--ns", dest="namespace", help="Namespace (default: test)")
    group.add_argument("--db", dest="database", help="Database (default: test)")

    parser.add_argument("--report", help="Write a JSON run report to this path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="surreal-transfer",
        description="Seed or dump SurrealDB tables from/to JSON and CSV files",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Import files
    import_parser = subparsers.add_parser("import", help="Import JSON files, one table per file")
    import_parser.add_argument("files", nargs="+", help="Input files; the file stem is the table name")
    import_parser.add_argument("--dry-run", action="store_true", help="Read and validate files without inserting")
    _add_connection_args(import_parser)

    # Export tables
    export_parser = subparsers.add_parser("export", help="Export tables to files")
    export_parser.add_argument("tables", nargs="+", help="Tables to export")
    export_parser.add_argument(
        "--format", "-f",
        choices=[f.value for f in FileFormat],
        default=FileFormat.JSON.value,
        help="Output format (default: json)",
    )
    export_parser.add_argument("--output-dir", "-o", default=".", help="Output directory (default: .)")
    export_parser.add_argument("--page-size", type=int, default=1000, help="Maximum records per table (default: 1000)")
    export_parser.add_argument("--workers", type=int, help="Maximum concurrent table exports")
    _add_connection_args(export_parser)

    return parser


def config_from_args(args: argparse.Namespace) -> TransferConfig:
    """Build the transfer configuration from parsed arguments."""
    if args.command == "import":
        return TransferConfig(
            operation="import",
            items=list(args.files),
            dry_run=args.dry_run,
            report_path=args.report,
        )
    return TransferConfig(
        operation="export",
        items=list(args.tables),
        format=FileFormat(args.format),
        output_dir=args.output_dir,
        page_size=args.page_size,
        max_workers=args.workers,
        report_path=args.report,
    )


def settings_from_args(args: argparse.Namespace) -> ConnectionSettings:
    """Build connection settings; flags win over SURREAL_* environment variables."""
    return ConnectionSettings.from_env({
        "endpoint": args.endpoint,
        "username": args.username,
        "password": args.password,
        "namespace": args.namespace,
        "database": args.database,
    })


def exit_code(run: TransferRun) -> int:
    if run.status == TransferStatus.FAILED:
        return EXIT_FATAL
    if run.status == TransferStatus.COMPLETED_WITH_ERRORS:
        return EXIT_PARTIAL
    return EXIT_OK


def print_summary(run: TransferRun):
    """Print a human readable summary of the run."""
    print("\n" + "=" * 60)
    print(f"{run.operation.upper()} COMPLETE")
    print("=" * 60)
    print(f"Status: {run.status.value}")

    for outcome in run.outcomes:
        if outcome.success:
            target = outcome.output_path or outcome.table
            print(f"  OK    {outcome.item} -> {target} ({outcome.record_count} records)")
        else:
            print(f"  FAIL  {outcome.item}: {outcome.error.message}")
        for warning in outcome.warnings:
            print(f"        warning: {warning}")

    for error in run.errors:
        print(f"Error: {error['message']}")

    print(f"Succeeded: {run.total_succeeded}")
    print(f"Failed: {run.total_failed}")
    if run.duration_seconds is not None:
        print(f"Duration: {run.duration_seconds:.2f} seconds")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FATAL

    # Set up logging
    log_level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        settings = settings_from_args(args)
    except pydantic.ValidationError as e:
        logger.error(f"Invalid connection settings: {e}")
        return EXIT_FATAL

    orchestrator = TransferOrchestrator(config_from_args(args), settings)
    run = orchestrator.run_transfer()

    print_summary(run)
    return exit_code(run)


if __name__ == "__main__":
    sys.exit(main())
