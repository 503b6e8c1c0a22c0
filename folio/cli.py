"""CLI entrypoints for Folio content tooling."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .cache import CacheError, InvalidIdentifierError
from .config import CONFIG_FILENAME, Config, load_config
from .content import FrontMatterError
from .service import ContentService, locate_content
from .sources import DirectorySource
from .templates import TemplateRenderError

console = Console()
app = typer.Typer(help="Folio content resolution and rendering toolkit.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file."),
]

_RENDER_ERRORS = (CacheError, InvalidIdentifierError, FrontMatterError, TemplateRenderError)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log cache and render activity."),
    ] = False,
) -> None:
    """Folio content resolution and rendering toolkit."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


@app.command()
def fetch(
    identifier: Annotated[str, typer.Argument(..., help="Content identifier, e.g. posts/hello.md.")],
    config_path: ConfigPathOption = CONFIG_FILENAME,
) -> None:
    """Warm the cache for a content item."""
    config = _load(config_path)
    service = _service(config)
    try:
        already_cached = service.cache.contains(identifier)
        data = service.fetch(identifier)
    except _RENDER_ERRORS as exc:
        console.print(f"[bold red]Fetch failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    state = "cached" if already_cached else "fetched"
    console.print(
        f"[bold green]{state.capitalize()}[/] {identifier} "
        f"({len(data)} bytes) -> {_display_path(service.cache.path_for(identifier))}",
        soft_wrap=True,
    )


@app.command()
def render(
    identifier: Annotated[str, typer.Argument(..., help="Content identifier, e.g. posts/hello.md.")],
    config_path: ConfigPathOption = CONFIG_FILENAME,
    html: Annotated[
        bool,
        typer.Option("--html", help="Convert the rendered Markdown body to HTML."),
    ] = False,
    variables: Annotated[
        list[str] | None,
        typer.Option("--var", help="Template variable as KEY=VALUE (repeatable)."),
    ] = None,
) -> None:
    """Render a content item and print its title and body."""
    config = _load(config_path)
    service = _service(config)
    context = _parse_variables(variables or [])

    try:
        if html:
            page = service.render_html(identifier, context)
            title = page.title_html
            body = page.body_html or ""
        else:
            document = service.render(identifier, context)
            title = document.title
            body = document.body
    except _RENDER_ERRORS as exc:
        console.print(f"[bold red]Render failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    if title:
        console.print(f"[bold blue]Title[/]: {escape(title)}", highlight=False)
    console.print(body, markup=False, highlight=False, soft_wrap=True)


@app.command("resolve-path")
def resolve_path(
    url_path: Annotated[str, typer.Argument(..., help="URL path, e.g. /about or /blog.")],
    config_path: ConfigPathOption = CONFIG_FILENAME,
    ext: Annotated[
        str | None,
        typer.Option("--ext", help="File extension; defaults to the configured extension."),
    ] = None,
) -> None:
    """Print the content file a URL path maps to."""
    config = _load(config_path)
    path = locate_content(config, url_path, ext)
    console.print(str(path), markup=False, highlight=False, soft_wrap=True)


def _service(config: Config) -> ContentService:
    if config.source_dir is None:
        raise typer.BadParameter("Configuration does not define 'source_dir'.")
    return ContentService(config, DirectorySource(config.source_dir))


def _parse_variables(values: list[str]) -> dict[str, str]:
    context: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--var")
        context[key.strip()] = value
    return context


def _display_path(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
