# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for author lookups and logging status

import json as jsonlib

import asyncclick as click
from rich.console import Console
from rich.panel import Panel

from authorinfo.config import get_config
from authorinfo.core.service import AuthorInfoService
from authorinfo.services.translation import MappingTranslator
from authorinfo.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
)
from authorinfo.utils.rich_tables import (
    create_author_info_table,
    create_logging_status_table,
    print_rich_table,
)

console = Console()


@click.command()
@click.argument("author")
@click.option("--lang", default=None, help="Wikipedia language code (defaults to configuration)")
@click.option("--base-url", default=None, help="Catalog search path used in generated links")
@click.option("--legacy", is_flag=True, help="Emit the template key layout (name, wiki_lang, altimage)")
@click.pass_context
async def lookup(ctx, author: str, lang: str | None, base_url: str | None, legacy: bool):
    """
    📚 Look up an author on Wikipedia.

    Follows redirects, picks the infobox image and renders the lead section
    as an HTML fragment.
    """
    json_output = ctx.obj["json_output"]
    config = get_config()
    service = AuthorInfoService(translator=MappingTranslator(config.translations))

    try:
        info = await service.get(author, language=lang)
    finally:
        await service.close()

    if info is None:
        if json_output:
            click.echo("null")
        else:
            console.print(f"[red]❌ No author information found for {author!r}[/red]")
        return

    info = info.with_base_url(base_url or config.search_base_url)

    if json_output or legacy:
        payload = info.to_legacy_dict() if legacy else info.model_dump()
        click.echo(jsonlib.dumps(payload, indent=2, ensure_ascii=False))
        return

    print_rich_table(console, create_author_info_table(info))
    console.print(Panel(info.description, title="📜 Description", border_style="blue"))


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    print_rich_table(console, create_logging_status_table(status))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output JSON instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    📚 Author Info - Wikipedia author summaries for library catalogs

    Fetch an author's Wikipedia article, follow redirects and produce a
    sanitized description with the article's portrait.
    """
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(lookup)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
