"""
Main CLI application for the article distiller.

Provides the command-line interface for:
- Extracting an article from a URL or a saved HTML file
- Viewing and initializing configuration
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from distiller import __version__
from distiller.config import Settings, load_config
from distiller.core.exceptions import DistillerError
from distiller.models import ContentFormat, ParsedArticle, ParserOptions
from distiller.parser import Parser
from distiller.utils.logging import get_logger, setup_logging

# Initialize Typer app
app = typer.Typer(
    name="distiller",
    help="Article distiller - Extract the main content of web articles",
    add_completion=False,
    no_args_is_help=True,
)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]Article Distiller[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Article distiller - Extract clean article content from web pages.

    Use 'distiller --help' for command list.
    """


@app.command()
def parse(
    url: str = typer.Argument(
        ...,
        help="URL of the article (also the base URL for --html-file)",
    ),
    html_file: Optional[Path] = typer.Option(
        None,
        "--html-file",
        help="Parse this saved HTML file instead of fetching the URL",
        exists=True,
        dir_okay=False,
    ),
    content_format: Optional[ContentFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Content output format",
        case_sensitive=False,
    ),
    pages: Optional[bool] = typer.Option(
        None,
        "--pages/--no-pages",
        help="Follow next-page links and merge them",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the whole result as JSON",
    ),
    extractors: Optional[Path] = typer.Option(
        None,
        "--extractors",
        "-e",
        help="YAML file or directory of site extractors",
        exists=True,
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Extract the article at a URL.

    Examples:
        distiller parse https://example.com/story
        distiller parse https://example.com/story --html-file story.html --format text
    """
    try:
        settings = load_config(config_file)
    except DistillerError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_logging(settings.logging, level="DEBUG" if verbose else None)

    options = ParserOptions(
        fetch_all_pages=settings.pagination.enabled if pages is None else pages,
        content_format=content_format or ContentFormat(settings.output.content_format),
    )

    try:
        article = asyncio.run(_parse_async(url, html_file, settings, options, extractors))
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Cancelled by user[/yellow]")
        raise typer.Exit(1)
    except DistillerError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        logger.debug("Parse failed", exc_info=True)
        raise typer.Exit(1)

    if as_json:
        console.print_json(data=article.to_dict())
    else:
        _show_article(article)

    if article.content is None:
        err_console.print("[yellow]No extractable content found[/yellow]")
        raise typer.Exit(1)


async def _parse_async(
    url: str,
    html_file: Optional[Path],
    settings: Settings,
    options: ParserOptions,
    extractors: Optional[Path],
) -> ParsedArticle:
    """Async parse implementation."""
    async with Parser(settings) as parser:
        if extractors is not None:
            parser.registry.load_path(extractors)

        if html_file is not None:
            return await parser.parse_html(html_file.read_bytes(), url, options)
        return await parser.parse(url, options)


def _show_article(article: ParsedArticle) -> None:
    """Print article metadata followed by its content."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("URL", article.url)
    table.add_row("Author", article.author or "-")
    table.add_row(
        "Published",
        article.date_published.isoformat() if article.date_published else "-",
    )
    table.add_row("Words", str(article.word_count))
    table.add_row("Pages", str(article.total_pages))

    console.print(Panel(
        table,
        title=article.title or "Untitled",
        border_style="blue",
    ))

    if article.content:
        console.print(article.content, markup=False, highlight=False, soft_wrap=True)


@config_app.command("show")
def config_show(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Show the effective configuration."""
    try:
        settings = load_config(config_file)
    except DistillerError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(Panel(
        "[bold]Current Configuration[/bold]",
        border_style="blue",
    ))

    for section, values in settings.model_dump().items():
        console.print(f"\n[bold cyan]{section}:[/bold cyan]")
        for key, value in values.items():
            console.print(f"  {key}: [dim]{escape(str(value))}[/dim]", highlight=False)


@config_app.command("init")
def config_init(
    output: Path = typer.Option(
        Path("distiller.yaml"),
        "--output",
        "-o",
        help="Output path for config file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing file",
    ),
) -> None:
    """Write the default configuration to a YAML file."""
    if output.exists() and not force:
        if not typer.confirm(f"File {output} exists. Overwrite?"):
            raise typer.Exit(0)

    config_dict = Settings().model_dump(mode="json")

    with open(output, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]✓[/green] Configuration saved to: {output}")


if __name__ == "__main__":
    app()
