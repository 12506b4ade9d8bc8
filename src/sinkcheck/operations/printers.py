"""
Human-readable and JSON output formatting.

Centralizes all CLI output so commands only decide what to print.
"""
from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..fields import ALL_FIELDS
from ..models import CompressionType, ConfigurationSnapshot, ValidationOutcome
from ..rules import CompressionPolicy

_console = Console()
_err_console = Console(stderr=True)


def print_outcome(outcome: ValidationOutcome, snapshot: ConfigurationSnapshot, verbose: bool = False) -> None:
    """
    Print a validation outcome as a table of field -> messages.

    Only fields with violations are listed unless verbose is set, in which
    case every field is shown with its configured value.

    Args:
        outcome: Outcome to display
        snapshot: Snapshot that was validated
        verbose: Show all fields and their values
    """
    values = snapshot.to_properties()

    if outcome.is_valid:
        _console.print(f"[bold green]VALID[/] bucket={escape(snapshot.bucket_name)}")
        if not verbose:
            return

    table = Table(title="Configuration")
    table.add_column("Field", style="cyan", no_wrap=True)
    if verbose:
        table.add_column("Value", style="yellow")
    table.add_column("Errors", style="red")

    for name, messages in outcome.to_dict(include_valid=verbose).items():
        row = [name]
        if verbose:
            row.append(escape(values.get(name, "")))
        row.append("\n".join(escape(m) for m in messages) if messages else "[dim]ok[/]")
        table.add_row(*row)

    _console.print(table)
    if not outcome.is_valid:
        _console.print(
            f"[bold red]INVALID[/] {outcome.violation_count} violation(s) on {len(outcome.invalid_fields)} field(s)"
        )


def print_outcome_json(outcome: ValidationOutcome, snapshot: ConfigurationSnapshot) -> None:
    """Print the outcome as a JSON document."""
    payload = {
        "valid": outcome.is_valid,
        "config": snapshot.to_properties(),
        "errors": outcome.to_dict(include_valid=True),
    }
    typer.echo(json.dumps(payload, indent=2))


def print_formats(policy: CompressionPolicy) -> None:
    """
    Print compression-safe formats and known compression types.

    Args:
        policy: Policy in effect
    """
    table = Table(title="Compression compatibility")
    table.add_column("Compression", style="cyan")
    table.add_column("Allowed format classes", style="yellow")

    for compression in CompressionType:
        if compression is CompressionType.NONE:
            table.add_row(compression.value, "any")
        else:
            table.add_row(compression.value, escape(policy.supported))

    _console.print(table)
    _console.print(f"[dim]Checked fields: {', '.join(ALL_FIELDS)}[/]")


def print_error(exc: BaseException) -> None:
    """Report a non-validation error on stderr."""
    _err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
