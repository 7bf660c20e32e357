from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ruxt.domain.models import ExpandConfig
from ruxt.errors import RuxtError
from ruxt.orchestrator.pipeline import expand_file
from ruxt.pages.scanner import scan_pages


app = typer.Typer(
    name="ruxt",
    help="Expand @ruxt.main / @ruxt.route functions against a pages directory.",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    # without -v, warnings and errors go through logging's last-resort stderr handler
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _config(root: str, pages: str, runtime_decorator: Optional[str] = None) -> ExpandConfig:
    root_path = Path(root).expanduser().resolve()
    if not root_path.is_dir():
        raise typer.BadParameter(f"Root is not a directory: {root_path}")
    return ExpandConfig(root=root_path, pages_dir=pages, runtime_decorator=runtime_decorator)


@app.command()
def expand(
    file: str = typer.Argument(..., help="Python source with @ruxt.main / @ruxt.route functions"),
    root: str = typer.Option(".", help="Project root the pages directory is relative to"),
    pages: str = typer.Option("src/pages", help="Pages directory, relative to --root"),
    out: Optional[str] = typer.Option(None, help="Output path (default: print to stdout)"),
    runtime_decorator: Optional[str] = typer.Option(None, help="Decorator put on expanded main functions"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace expansions"),
) -> None:
    _configure_logging(verbose)
    src_path = Path(file).expanduser()
    if not src_path.is_file():
        raise typer.BadParameter(f"Source file does not exist: {src_path}")

    config = _config(root, pages, runtime_decorator)
    try:
        result = expand_file(src_path, config)
    except RuxtError as e:
        err_console.print(f"[bold red]error[/bold red]: {e}")
        raise typer.Exit(code=1)

    text = result.source + "\n"
    if out:
        out_path = Path(out).expanduser()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        console.print(f"[bold green]Wrote[/bold green] expanded source to: {out_path}")
        console.print(f"Functions expanded: {len(result.expanded)}")
        console.print(f"Routes registered: {len(result.routes)}")
    else:
        # plain stdout so the output can be piped into a file
        typer.echo(text, nl=False)


@app.command()
def routes(
    root: str = typer.Option(".", help="Project root the pages directory is relative to"),
    pages: str = typer.Option("src/pages", help="Pages directory, relative to --root"),
    format: str = typer.Option("table", help="Output format: table|json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace discovery"),
) -> None:
    _configure_logging(verbose)
    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")

    config = _config(root, pages)
    try:
        found = scan_pages(config=config)
    except RuxtError as e:
        err_console.print(f"[bold red]error[/bold red]: {e}")
        raise typer.Exit(code=1)

    if fmt == "json":
        payload = [
            {
                "url_path": d.url_path,
                "handler": d.handler_name,
                "segments": list(d.segments),
                "file": d.file_path,
            }
            for d in found
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(f"[bold]Pages:[/bold] {config.pages_path}")
    console.print(f"[bold]Routes:[/bold] {len(found)}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("HANDLER", no_wrap=True)
    table.add_column("FILE")

    for d in found:
        table.add_row("GET", d.url_path, d.handler_name, os.path.relpath(d.file_path, config.pages_path))

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
