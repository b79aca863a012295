"""CLI for the ``ledger_ingest`` package.

Command handlers (``cmd_parse``, ``cmd_map``, ``cmd_formats``) are plain
functions returning a process exit code; the Typer commands below are thin
wrappers around them. Environment variables (notably
``LEDGER_INGEST_LOG_LEVEL``) are loaded from a local ``.env`` with
``python-dotenv`` before any command runs.

Exit codes: ``0`` records were imported (possibly zero), ``1`` the file could
not be read or parsed, ``2`` the format was not recognized and a manual
column mapping is needed (see ``ledger-ingest map``).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich.text import Text
from typer.models import OptionInfo

from .logging_setup import configure_logging
from .models import Detected, Failed, ManualMapping, NeedsManualMapping, ParseOptions, ParseOutcome

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NEEDS_MAPPING = 2

console = Console()
err_console = Console(stderr=True)


# ---- Rendering helpers --------------------------------------------------------


def _error(message: str) -> None:
    err_console.print(Text("Error: " + message, style="red"))


def _read_bytes(csv_path: str) -> bytes | None:
    try:
        return Path(csv_path).read_bytes()
    except FileNotFoundError:
        _error(f"File not found: {csv_path}")
    except PermissionError:
        _error(f"Permission denied: {csv_path}")
    except IsADirectoryError:
        _error(f"Not a file: {csv_path}")
    return None


def _render_detected(outcome: Detected) -> None:
    console.print(
        f"Format: {outcome.profile_name} ({outcome.profile_id})",
        markup=False,
    )
    console.print(
        f"Rows: {outcome.total_row_count}  imported: {outcome.imported_row_count}  "
        f"skipped: {outcome.skipped_row_count}",
        markup=False,
    )
    if outcome.records:
        table = Table(show_lines=False)
        for col in ("date", "amount", "counterparty", "category", "memo"):
            table.add_column(col, justify="right" if col == "amount" else "left")
        for r in outcome.records:
            table.add_row(
                Text(r.date),
                Text(f"{r.amount:,}"),
                Text(r.counterparty),
                Text(r.source_category or ""),
                Text(r.memo or ""),
            )
        console.print(table)
    for err in outcome.errors:
        err_console.print(Text(err, style="yellow"))


def _render_needs_mapping(outcome: NeedsManualMapping) -> None:
    err_console.print(
        "Format not recognized; assign columns with `ledger-ingest map`.", markup=False
    )
    console.print("Headers: " + ", ".join(outcome.headers), markup=False)
    if outcome.sample_rows:
        table = Table(title=f"First {len(outcome.sample_rows)} of {outcome.total_row_count} rows")
        for h in outcome.headers:
            table.add_column(Text(h))
        for row in outcome.sample_rows:
            table.add_row(*(Text(row.get(h, "")) for h in outcome.headers))
        console.print(table)


def _exit_code(outcome: ParseOutcome) -> int:
    match outcome:
        case Detected():
            return EXIT_OK
        case NeedsManualMapping():
            return EXIT_NEEDS_MAPPING
        case Failed():
            return EXIT_FAILED


def _emit(outcome: ParseOutcome, *, as_json: bool) -> int:
    if as_json:
        # JSON mode writes only the document to stdout, errors included.
        typer.echo(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
        return _exit_code(outcome)
    match outcome:
        case Detected():
            _render_detected(outcome)
        case NeedsManualMapping():
            _render_needs_mapping(outcome)
        case Failed():
            for err in outcome.errors:
                _error(err)
    return _exit_code(outcome)


# ---- Command handlers ---------------------------------------------------------


def cmd_parse(
    csv_path: str,
    *,
    encoding: str | None = None,
    skip_rows: int = 0,
    as_json: bool = False,
) -> int:
    """Auto-detect the format of ``csv_path`` and print the parse outcome."""

    from .parse import parse_ledger

    data = _read_bytes(csv_path)
    if data is None:
        return EXIT_FAILED
    options = ParseOptions(encoding=encoding, skip_rows=skip_rows)
    return _emit(parse_ledger(data, options), as_json=as_json)


def cmd_map(
    csv_path: str,
    *,
    date: str,
    amount: str,
    counterparty: str,
    memo: str | None = None,
    category: str | None = None,
    encoding: str | None = None,
    skip_rows: int = 0,
    as_json: bool = False,
) -> int:
    """Parse ``csv_path`` with an explicit field -> column assignment."""

    from pydantic import ValidationError

    from .parse import parse_with_manual_mapping

    try:
        mapping = ManualMapping(
            date=date, amount=amount, counterparty=counterparty, memo=memo, category=category
        )
    except ValidationError as e:
        _error(f"invalid column mapping: {e}")
        return EXIT_FAILED

    data = _read_bytes(csv_path)
    if data is None:
        return EXIT_FAILED
    options = ParseOptions(encoding=encoding, skip_rows=skip_rows)
    return _emit(parse_with_manual_mapping(data, mapping, options), as_json=as_json)


def cmd_formats() -> int:
    """Print the registered formats in detection order."""

    from .ingest.registry import ALL_MAPPERS

    table = Table(title="Registered formats (first match wins)")
    for col in ("#", "id", "name", "detects on", "encoding"):
        table.add_column(col)
    for pos, mapper in enumerate(ALL_MAPPERS, start=1):
        p = mapper.profile
        table.add_row(
            str(pos),
            Text(p.id),
            Text(f"{p.name} / {p.name_ja}"),
            Text(mapper.describe_detection()),
            Text(p.encoding),
        )
    console.print(table)
    return EXIT_OK


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Import accounting-tool ledger exports (freee, Money Forward, Yayoi, generic CSV).",
)

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults).
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,
    "--csv-path",
    help="Path to the exported ledger CSV",
    dir_okay=False,
    file_okay=True,
    exists=False,  # the handler reports missing files itself
)


@app.command("parse")
def parse_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    encoding: Annotated[
        str | None, typer.Option(help="Decode with this codec (default: UTF-8, then CP932).")
    ] = None,
    skip_rows: Annotated[int, typer.Option(min=0, help="Preamble lines above the header.")] = 0,
    as_json: Annotated[bool, typer.Option("--json", help="Print the outcome as JSON.")] = False,
) -> None:
    """Detect the export format and import every row."""

    raise typer.Exit(
        cmd_parse(str(csv_path), encoding=encoding, skip_rows=skip_rows, as_json=as_json)
    )


@app.command("map")
def map_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    date: Annotated[str, typer.Option(help="Column holding the transaction date.")],
    amount: Annotated[str, typer.Option(help="Column holding the amount.")],
    counterparty: Annotated[str, typer.Option(help="Column holding the counterparty.")],
    memo: Annotated[str | None, typer.Option(help="Optional memo column.")] = None,
    category: Annotated[str | None, typer.Option(help="Optional category column.")] = None,
    encoding: Annotated[
        str | None, typer.Option(help="Decode with this codec (default: UTF-8, then CP932).")
    ] = None,
    skip_rows: Annotated[int, typer.Option(min=0, help="Preamble lines above the header.")] = 0,
    as_json: Annotated[bool, typer.Option("--json", help="Print the outcome as JSON.")] = False,
) -> None:
    """Import rows using an explicit column assignment (no detection)."""

    raise typer.Exit(
        cmd_map(
            str(csv_path),
            date=date,
            amount=amount,
            counterparty=counterparty,
            memo=memo,
            category=category,
            encoding=encoding,
            skip_rows=skip_rows,
            as_json=as_json,
        )
    )


@app.command("formats")
def formats_cmd() -> None:
    """List the known export formats in detection order."""

    raise typer.Exit(cmd_formats())


@app.callback()
def _root(
    log_level: Annotated[
        str | None, typer.Option(help="Log level (falls back to LEDGER_INGEST_LOG_LEVEL).")
    ] = None,
) -> None:
    """Load ``.env`` from the working directory and configure logging."""

    # override=False keeps variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


def main() -> None:  # pragma: no cover - console script entry
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
