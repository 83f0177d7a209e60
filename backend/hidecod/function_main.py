"""Function Host Entry — reads the run input JSON, writes the run result JSON to stdout.

Invariants:
    - Exactly one JSON document in, one JSON document out
    - Unparseable input produces {"operations": []}
    - No logging: stdout carries only the result

Usage:
    hide-cod-run < input.json
    hide-cod-run input.json
"""

import json
import pathlib
import sys
from typing import Optional

import typer

from hidecod.core.run_input import run

app = typer.Typer(add_completion=False, help="Evaluate one checkout and print hide operations")


@app.command()
def main(
    source: Optional[pathlib.Path] = typer.Argument(
        None, help="Run input JSON file (default: stdin)",
    ),
):
    """Print the run result for the given checkout input."""
    raw = source.read_text(encoding="utf-8") if source else sys.stdin.read()
    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError):
        payload = None
    typer.echo(json.dumps(run(payload)))


if __name__ == "__main__":
    app()
