# wspcheck/cli.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

# Verbose module logging when WSPCHECK_VERBOSE is set
import wspcheck.observability  # noqa: F401

from wspcheck.config import SCHEMAS_PATH, WHISPER_ROOT
from wspcheck.log import err, info
from wspcheck.report.tables import (
    check_table,
    count_lines,
    info_table,
    schemas_to_yaml,
    write_check_report,
)
from wspcheck.schema.errors import SchemaError
from wspcheck.schema.loader import load_storage_schemas
from wspcheck.schema.model import Schema
from wspcheck.schema.resolver import count_definitions
from wspcheck.schema.retentions import format_retention_list
from wspcheck.schema.validate import check_retentions, has_failures
from wspcheck.storage.paths import find_whisper_files
from wspcheck.storage.whisper_reader import StorageReadError, read_info


app = typer.Typer(help="a toolset to work with whisper files")
schema_app = typer.Typer(help="run analysis in comparison to a storage-schemas.conf")
app.add_typer(schema_app, name="schema")

_SCHEMA_HELP = "path to storage-schemas.conf, defaults to $WSPCHECK_SCHEMAS"


# -----------------------
# Helpers
# -----------------------
def _stdout() -> Console:
    # built per command so COLUMNS and redirected stdout are picked up
    return Console(highlight=False)


def _load_schemas(path: Optional[Path]) -> List[Schema]:
    path = path or SCHEMAS_PATH
    try:
        return load_storage_schemas(path)
    except (SchemaError, OSError) as e:
        err(f"failed to parse schemas {path}: {e}")
        raise typer.Exit(code=2)


def _discover(root: Path) -> List[str]:
    files = find_whisper_files(str(root))
    if not files:
        err(f"no .wsp files found under {root}")
        raise typer.Exit(code=2)
    return files


# -----------------------
# Commands
# -----------------------
@app.command("info")
def info_cmd(
    path: Path = typer.Argument(..., help="whisper file"),
    short: bool = typer.Option(False, "--short", help="print retentions in storage-schemas.conf format (e.g. 5m:60d,1h:2y)"),
) -> None:
    """
    Dump header and archive layout of a whisper file.
    """
    try:
        wi = read_info(str(path))
    except StorageReadError as e:
        err(f"Error opening '{path}': {e.cause}")
        raise typer.Exit(code=1)

    if short:
        typer.echo(format_retention_list(wi.retentions()))
        return

    typer.echo(f"File: {path}")
    typer.echo(f"Aggregation: {wi.aggregation_method}")
    typer.echo(f"xFilesFactor: {wi.x_files_factor:g}")
    typer.echo("")
    _stdout().print(info_table(wi))


@schema_app.command("check")
def check_cmd(
    root: Path = typer.Argument(WHISPER_ROOT, help="whisper directory, defaults to $WSPCHECK_ROOT"),
    schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=_SCHEMA_HELP),
    exit_on_mismatch: bool = typer.Option(
        True,
        "--exit-on-mismatch/--no-exit-on-mismatch",
        help="exit with code 1 if any mismatch or read error is found",
    ),
    report: Optional[Path] = typer.Option(None, "--report", help="also write results as YAML to this file"),
) -> None:
    """
    Check that whisper files match the retentions defined for them.
    """
    schemas = _load_schemas(schema)
    files = _discover(root)

    checks = check_retentions(schemas, str(root), files)
    _stdout().print(check_table(checks))

    if report is not None:
        write_check_report(checks, report)
        info(f"report written to {report}")

    if has_failures(checks) and exit_on_mismatch:
        raise typer.Exit(code=1)


@schema_app.command("count")
def count_cmd(
    root: Path = typer.Argument(WHISPER_ROOT, help="whisper directory, defaults to $WSPCHECK_ROOT"),
    schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=_SCHEMA_HELP),
) -> None:
    """
    Count matching metrics per schema definition.
    """
    schemas = _load_schemas(schema)
    info(f"Found {len(schemas)} schema definitions")
    files = _discover(root)
    info(f"Found {len(files)} whisper files")

    for line in count_lines(count_definitions(schemas, str(root), files)):
        typer.echo(line)


@schema_app.command("show")
def show_cmd(schema: Optional[Path] = typer.Option(None, "--schema", "-s", help=_SCHEMA_HELP)) -> None:
    """
    Print the parsed schema definitions (in match order) as YAML.
    """
    typer.echo(schemas_to_yaml(_load_schemas(schema)), nl=False)


# -----------------------
# Entrypoint
# -----------------------
if __name__ == "__main__":
    app()
