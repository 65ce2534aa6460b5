from __future__ import annotations

import json
from typing import Any, List, Optional

import typer

from triearray import config as ta_config
from triearray import from_sequence, to_sequence
from triearray.errors import TrieArrayError

from .options import coerce_literals, resolve_format
from .support.benchmark_utils import run_operation_benchmark


def _emit(payload: dict[str, Any], output_format: str) -> None:
    if output_format == "json":
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        return
    for key, value in payload.items():
        typer.echo(f"{key}: {value}")


def _format_or_exit(value: str) -> str:
    try:
        return resolve_format(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--format") from exc


def config_command(
    output_format: str = typer.Option("text", "--format", help="Output format: text or json."),
) -> None:
    """Print the resolved runtime configuration."""

    fmt = _format_or_exit(output_format)
    try:
        runtime = ta_config.runtime_config()
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    _emit(runtime.describe(), fmt)


def inspect_command(
    values: Optional[List[str]] = typer.Argument(None, help="Initial elements."),
    prepend: Optional[List[str]] = typer.Option(None, "--prepend", help="Prepend a value (repeatable)."),
    append: Optional[List[str]] = typer.Option(None, "--append", help="Append a value (repeatable)."),
    bits: Optional[int] = typer.Option(None, "--bits", help="Bits per trie level."),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json."),
) -> None:
    """Build an array, apply edits and show its contents and trie shape."""

    fmt = _format_or_exit(output_format)
    try:
        array = from_sequence(coerce_literals(values), bits=bits)
        for value in coerce_literals(prepend):
            array = array.prepend(value)
        for value in coerce_literals(append):
            array = array.append(value)
    except (TrieArrayError, ValueError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    payload: dict[str, Any] = {"values": to_sequence(array)}
    payload.update(array.describe())
    _emit(payload, fmt)


def bench_command(
    size: int = typer.Option(10_000, "--size", min=1, help="Elements in the base array."),
    operations: int = typer.Option(1_000, "--operations", min=0, help="Operations per timed phase."),
    seed: int = typer.Option(0, "--seed", help="Seed for generated values and indices."),
    bits: Optional[int] = typer.Option(None, "--bits", help="Bits per trie level."),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json."),
) -> None:
    """Time the core array operations on generated data."""

    fmt = _format_or_exit(output_format)
    try:
        _, results = run_operation_benchmark(size=size, operations=operations, seed=seed, bits=bits)
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if fmt == "json":
        typer.echo(json.dumps([result.as_dict() for result in results], indent=2))
        return
    for result in results:
        typer.echo(
            f"{result.operation:>14}  {result.operations:>8d} ops  "
            f"{result.elapsed_seconds * 1e3:10.3f} ms  {result.operations_per_second:14.1f} ops/s"
        )


__all__ = ["config_command", "inspect_command", "bench_command"]
