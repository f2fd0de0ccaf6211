"""Command-line interface for querying Confluence through the REST client."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from .config import ConfluenceConfig, ensure_config
from .confluence import Confluence, ConfluenceError
from .confluence.models import Content, PagingInformation
from .logging_config import setup_logging

app = typer.Typer(help="Query Confluence content, spaces and labels from the command line.")
console = Console()

T = TypeVar("T")


def create_client(config: ConfluenceConfig) -> Confluence:
    return Confluence.from_config(config)


def _run(ctx: typer.Context, operation: Callable[[Confluence], Awaitable[T]]) -> T:
    config: ConfluenceConfig = ctx.obj["config"]

    async def _call() -> T:
        async with create_client(config) as client:
            return await operation(client)

    try:
        return asyncio.run(_call())
    except ConfluenceError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _content_table(title: str, items: list[Content]) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Space")
    table.add_column("Title")
    table.add_column("Version", justify="right")
    for item in items:
        table.add_row(
            str(item.id or ""),
            item.type or "",
            item.space.key if item.space and item.space.key else "",
            item.title or "",
            str(item.version.number) if item.version and item.version.number else "",
        )
    return table


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a configuration TOML file",
    ),
    base_url: Optional[str] = typer.Option(None, help="Base URL of the Confluence instance"),
    username: Optional[str] = typer.Option(None, help="User name or account email"),
    api_token: Optional[str] = typer.Option(None, help="Confluence API token"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr"),
) -> None:
    setup_logging("DEBUG" if verbose else "WARNING")
    try:
        config = ensure_config(
            base_url=base_url,
            username=username,
            api_token=api_token,
            config_path=config_path,
        )
    except (RuntimeError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    ctx.obj = {"config": config}


@app.command()
def get(
    ctx: typer.Context,
    content_id: int = typer.Argument(..., help="Content ID"),
    expand: Optional[list[str]] = typer.Option(None, "--expand", "-e", help="Expand value, repeatable"),
) -> None:
    """Show a single content item."""

    content = _run(ctx, lambda client: client.get(content_id, expand=expand or None))
    console.print(_content_table(f"Content {content_id}", [content]))
    if content.body and content.body.storage:
        console.print(content.body.storage.value)


@app.command()
def search(
    ctx: typer.Context,
    cql: str = typer.Argument(..., help="CQL query"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Cursor from a previous page"),
    fetch_all: bool = typer.Option(False, "--all", help="Follow cursors until every result is shown"),
) -> None:
    """Search content with CQL."""

    if fetch_all:
        async def _collect(client: Confluence) -> list[Content]:
            return [item async for item in client.iter_search(cql, limit=limit)]

        items = _run(ctx, _collect)
        console.print(_content_table("Search results", items))
        return

    result = _run(
        ctx,
        lambda client: client.search(cql, cursor=cursor, paging=PagingInformation(limit=limit)),
    )
    console.print(_content_table("Search results", result.items))
    if result.cursor:
        console.print(f"Next cursor: [bold]{result.cursor}[/bold]")


@app.command()
def children(
    ctx: typer.Context,
    content_id: int = typer.Argument(..., help="Parent content ID"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
) -> None:
    """List child pages."""

    result = _run(ctx, lambda client: client.get_children(content_id, paging=PagingInformation(limit=limit)))
    console.print(_content_table(f"Children of {content_id}", result.items))


@app.command()
def labels(
    ctx: typer.Context,
    content_id: int = typer.Argument(..., help="Content ID"),
) -> None:
    """List the labels of a content item."""

    result = _run(ctx, lambda client: client.get_labels(content_id))
    table = Table(title=f"Labels of {content_id}")
    table.add_column("Prefix")
    table.add_column("Name")
    for label in result.items:
        table.add_row(label.prefix, label.name)
    console.print(table)


@app.command()
def spaces(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
) -> None:
    """List spaces."""

    result = _run(ctx, lambda client: client.get_spaces(paging=PagingInformation(limit=limit)))
    table = Table(title="Spaces")
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Type")
    for space in result.items:
        table.add_row(space.key or "", space.name or "", space.type or "")
    console.print(table)


def run() -> None:
    """Entry point for console scripts."""

    app()


if __name__ == "__main__":  # pragma: no cover
    run()
