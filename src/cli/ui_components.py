"""CLI presentation components (Rich).

Why separate components:
- Keeps command logic free of visual details.
- Non-interactive mode bypasses Rich entirely and writes plain,
  tab-separated text that is safe to pipe into other tools.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import Snippet


def build_snippets_table(snippets: Iterable[Snippet], *, title: str = "Snippets") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True, justify="right")
    table.add_column("Title", style="white")
    table.add_column("File", style="magenta")
    table.add_column("Visibility", style="green")
    table.add_column("Updated", style="dim")
    for snippet in snippets:
        updated = snippet.updated_at.strftime("%Y-%m-%d %H:%M") if snippet.updated_at else ""
        table.add_row(
            str(snippet.id),
            snippet.title,
            snippet.file_name or "",
            snippet.visibility or "",
            updated,
        )
    return table


def snippet_line(snippet: Snippet) -> str:
    return "\t".join((str(snippet.id), snippet.title, snippet.file_name or "", snippet.visibility or ""))


def print_snippets(console: Console, snippets: list[Snippet], *, interactive: bool, title: str = "Snippets") -> None:
    if not interactive:
        for snippet in snippets:
            typer.echo(snippet_line(snippet))
        return
    if not snippets:
        console.print("[dim]No snippets found.[/dim]")
        return
    console.print(build_snippets_table(snippets, title=title))


def print_json(console: Console, data: Any, *, interactive: bool, compact: bool = False) -> None:
    """Emit a JSON document; pretty unless `compact`."""

    if compact:
        typer.echo(json.dumps(data, ensure_ascii=False, separators=(",", ":")))
    elif interactive:
        console.print_json(data=data, sort_keys=True)
    else:
        typer.echo(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True))


def print_saved(console: Console, snippet: Snippet, *, action: str, interactive: bool) -> None:
    if not interactive:
        typer.echo(f"{snippet.id}\t{snippet.web_url or ''}")
        return
    text = Text.assemble((f"{action} snippet ", "green"), (str(snippet.id), "bold"))
    if snippet.web_url:
        text.append(f": {snippet.web_url}")
    console.print(text, soft_wrap=True)


def print_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("Error: ", "bold red"), message), soft_wrap=True)
