"""
Main CLI entry point for fit-tables using Click.

Usage:
    fit-tables check FILE
    fit-tables tables FILE
    fit-tables decode FILE [--output DIR] [--format parquet|json]
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from fittables.enums import ColumnOrder
from fittables.errors import FitTablesError, IntegrityCheckFailed
from fittables.parsers import check_integrity, read_header
from fittables.tables import UNRECOGNIZED_SENTINEL
from fittables.validation import TableValidator
from fittables.workflow import DecodeResult, decode_file
from fittables.writers import JSONWriter, ParquetWriter


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class Config:
    """Shared configuration for CLI commands."""

    def __init__(self) -> None:
        self.verbose = False
        self.debug = False


pass_config = click.make_pass_decorator(Config, ensure=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.version_option(version="0.1.0", prog_name="fit-tables")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Decode FIT telemetry files into dense per-message tables."""
    ctx.ensure_object(Config)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def check(config: Config, file: str, as_json: bool) -> None:
    """Check the structural integrity of a FIT file.

    Verifies the header, the .FIT signature, the declared data size and
    the CRCs of every chained file segment.

    Example:
        fit-tables check activity.fit
    """
    error: Optional[str] = None
    try:
        headers = check_integrity(file)
    except IntegrityCheckFailed as e:
        error = str(e)
        headers = []

    header = headers[0] if headers else None
    if header is None:
        try:
            header = read_header(file)
        except FitTablesError:
            header = None

    if as_json:
        output = {
            "path": file,
            "valid": error is None,
            "error": error,
            "segments": len(headers),
            "header": (
                {
                    "header_size": header.header_size,
                    "protocol": header.protocol,
                    "profile": header.profile,
                    "data_size": header.data_size,
                }
                if header
                else None
            ),
        }
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(f"File: {Path(file).name}")
        if header:
            click.echo(f"Protocol: {header.protocol}")
            click.echo(f"Profile: {header.profile}")
            click.echo(f"Data size: {header.data_size} bytes")
        if error is None:
            click.echo(f"Segments: {len(headers)}")
            click.echo(f"Integrity: {click.style('PASSED', fg='green')}")
        else:
            click.echo(f"Integrity: {click.style('FAILED', fg='red')} ({error})")

    if error is not None:
        sys.exit(1)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_config
def tables(config: Config, file: str, as_json: bool) -> None:
    """List the message tables found in a FIT file.

    Example:
        fit-tables tables activity.fit
    """
    result = _decode(file, ColumnOrder.NAME, unrecognized_value=UNRECOGNIZED_SENTINEL)

    if as_json:
        output = [
            {
                "name": name,
                "type_id": table.type_id,
                "rows": table.row_count,
                "columns": table.column_names,
                "units": table.units_by_column,
            }
            for name, table in result.tables.items()
        ]
        click.echo(json.dumps(output, indent=2))
    else:
        for name, table in result.tables.items():
            click.echo(
                f"{name} (#{table.type_id}): {table.row_count} rows, "
                f"{len(table.columns)} columns"
            )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False),
    help="Output directory for table files",
)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["parquet", "json"]),
    default="parquet",
    show_default=True,
    help="Output file format",
)
@click.option(
    "--order",
    type=click.Choice([o.value for o in ColumnOrder]),
    default=ColumnOrder.NAME.value,
    show_default=True,
    help="Column order: alphabetical or first-seen",
)
@click.option(
    "--null-unrecognized",
    is_flag=True,
    help="Store null instead of -1 for fields of unrecognized type",
)
@click.option("--skip-validation", is_flag=True, help="Skip validation step")
@click.option("--json", "as_json", is_flag=True, help="Output summary as JSON")
@pass_config
def decode(
    config: Config,
    file: str,
    output: Optional[str],
    fmt: str,
    order: str,
    null_unrecognized: bool,
    skip_validation: bool,
    as_json: bool,
) -> None:
    """Decode a FIT file into one table per message type.

    Without --output only the summary is printed.

    Example:
        fit-tables decode activity.fit --output ./tables --format parquet
    """
    logger = logging.getLogger("decode")

    unrecognized = None if null_unrecognized else UNRECOGNIZED_SENTINEL
    result = _decode(file, order, unrecognized_value=unrecognized)

    # Validate
    if not skip_validation:
        logger.info("Validating tables...")
        validation = TableValidator().validate(result)

        if not validation.is_valid:
            click.echo(click.style("Validation failed:", fg="red"), err=True)
            for issue in validation.errors:
                click.echo(f"  [{issue.severity}] {issue.field}: {issue.message}", err=True)
            sys.exit(1)

        for issue in validation.warnings:
            click.echo(
                click.style(f"Warning: {issue.field}: {issue.message}", fg="yellow"),
                err=True,
            )

    if as_json:
        _print_summary_json(result)
    else:
        click.echo(result.summary())

    if not output:
        return

    logger.info(f"Writing to: {output}")
    writer = ParquetWriter(output) if fmt == "parquet" else JSONWriter(output)
    try:
        paths = writer.write(result)
    except OSError as e:
        raise click.ClickException(f"Error writing output: {e}")

    if not as_json:
        click.echo(click.style("\nOutput files:", fg="green"))
        for name, path in paths.items():
            click.echo(f"  {name}: {path}")


def _decode(file: str, order: str, unrecognized_value: Optional[float]) -> DecodeResult:
    """Decode a file, turning library errors into CLI errors."""
    try:
        return decode_file(file, column_order=order, unrecognized_value=unrecognized_value)
    except FitTablesError as e:
        raise click.ClickException(f"Error decoding {file}: {e}")


def _print_summary_json(result: DecodeResult) -> None:
    """Print decode summary as JSON."""
    output = {
        "file": result.source_file,
        "records": result.record_count,
        "tables": {
            name: {
                "type_id": table.type_id,
                "rows": table.row_count,
                "columns": len(table.columns),
            }
            for name, table in result.tables.items()
        },
        "warnings": result.warnings,
    }
    click.echo(json.dumps(output, indent=2))


def app(args: Optional[list[str]] = None) -> int:
    """
    Main application entry point (for testing).

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success)
    """
    try:
        cli(args, standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 1
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
