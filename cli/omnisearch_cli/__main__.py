"""OmniSearch CLI - Entry Point."""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.text import Text

from omnisearch import (
    HttpRemoteSearch,
    SearchFunction,
    SearchResult,
    contains_ignore_case,
    field_matcher,
    wait_for_result,
)
from omnisearch.config import get_settings
from omnisearch.logging import configure_logging
from omnisearch_cli import catalog

console = Console()


def load_items(path: Path) -> list[Any]:
    """Load seed items from a JSON list or a file with one item per line."""
    content = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(content)
        if not isinstance(data, list):
            raise click.BadParameter(f"{path} must contain a JSON list")
        return data
    return [line.strip() for line in content.splitlines() if line.strip()]


def _render(item: Any) -> Text:
    if isinstance(item, catalog.Product):
        return catalog.render_product(item)
    if isinstance(item, dict):
        return Text(item.get("name") or item.get("title") or json.dumps(item))
    return Text(str(item))


def print_result(result: SearchResult) -> None:
    """Print one snapshot."""
    source = result.source.value
    if result.is_loading:
        console.print(f"[yellow]⟳[/] [dim]{source}[/] searching remote sources...")
        return
    if result.has_error:
        console.print(f"[red]✗[/] [dim]{source}[/] Error: {result.error}")
        return

    console.print(
        f"[bold]{len(result.items)}[/] {source} results for [cyan]\"{result.query}\"[/]"
    )
    for i, item in enumerate(result.items, 1):
        line = Text()
        line.append(f"  [{i}] ", style="dim")
        line.append_text(_render(item))
        console.print(line)


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error", "critical"], case_sensitive=False),
    help="Log level (default: from config or info)",
)
@click.pass_context
def main(ctx, log_level: Optional[str]):
    """OmniSearch - instant local search with a remote fallback.

    Run without arguments to launch the interactive demo.
    """
    configure_logging(log_level or get_settings().log_level)

    if ctx.invoked_subcommand is None:
        from omnisearch_cli.app import run_app
        run_app()


@main.command()
def tui():
    """Launch the interactive demo."""
    from omnisearch_cli.app import run_app
    run_app()


@main.command()
@click.argument("query")
@click.option(
    "-d", "--data",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Seed items (.json list or one item per line). Defaults to the demo catalog.",
)
@click.option("-u", "--url", default=None, help="Remote search endpoint base URL")
@click.option("--path", "endpoint", default="/search", show_default=True, help="Remote search path")
@click.option("-p", "--param", default=None, help="Query parameter name for the remote endpoint")
@click.option("-f", "--field", "fields", multiple=True, help="Item field to match on (JSON objects)")
@click.option("--force", is_flag=True, help="Search remotely even when local items match")
@click.option("--debounce", type=int, default=None, help="Debounce in milliseconds")
def search(
    query: str,
    data: Optional[Path],
    url: Optional[str],
    endpoint: str,
    param: Optional[str],
    fields: tuple,
    force: bool,
    debounce: Optional[int],
):
    """Search local items, falling back to the remote source.

    Example: omnisearch search tablet
    """
    settings = get_settings()
    url = url or settings.remote_url

    if data is not None:
        items = load_items(data)
        if fields:
            match = field_matcher(*[(lambda item, f=f: item.get(f)) for f in fields])
        else:
            match = contains_ignore_case
    else:
        items = list(catalog.LOCAL_PRODUCTS)
        match = catalog.match_product

    debounce_seconds = settings.debounce_seconds if debounce is None else debounce / 1000

    async def _search(remote) -> None:
        search_function = SearchFunction(
            remote,
            match,
            initial_data=items,
            debounce_duration=debounce_seconds,
        )
        with search_function:
            search_function.results_stream.subscribe(print_result)
            done = wait_for_result(
                search_function.results_stream,
                lambda r: r.is_remote and not r.is_loading,
            )

            if force:
                search_function.force_remote_search(query)
                expects_remote = True
            else:
                local = search_function.search(query)
                expects_remote = not local.items

            if len(query) < max(search_function.min_remote_query_length, 1):
                expects_remote = False

            if expects_remote:
                await done
            else:
                done.cancel()

    async def _run() -> None:
        if url:
            async with HttpRemoteSearch(
                url,
                path=endpoint,
                query_param=param or settings.remote_query_param,
                timeout=settings.remote_timeout,
            ) as remote:
                await _search(remote)
        else:
            await _search(catalog.mock_remote_search)

    asyncio.run(_run())


if __name__ == "__main__":
    main()
