from __future__ import annotations

import typer

from .commands import bench_command, config_command, inspect_command


_HELP = """Persistent trie array command line interface.

Subcommands cover configuration, inspection, and benchmarking."""

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=_HELP,
)


@app.callback()
def parray_callback() -> None:
    """Root callback reserved for shared options (none yet)."""
    pass


app.command(name="config", help="Show the resolved runtime configuration.")(config_command)
app.command(name="inspect", help="Build an array and show its trie shape.")(inspect_command)
app.command(name="bench", help="Time append, prepend, set, get and fold.")(bench_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
