"""CLI entry point for Schema Translator."""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from .config import Config
from .exceptions import TranslatorError
from .logging_setup import configure_logging
from .models.common import Visibility
from .plugins import PluginResolver, PluginRole, registered_plugins
from .translator import Translator


@click.group()
@click.option(
    "--config-file", "-c",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to a JSON configuration file.",
    envvar="SCHEMA_TRANSLATOR_CONFIG_FILE"
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None, # Falls back to the Config default
    help="Override the logging level (e.g., DEBUG, INFO).",
    envvar="SCHEMA_TRANSLATOR_LOGGING_LEVEL"
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Override logging format.",
    envvar="SCHEMA_TRANSLATOR_LOGGING_FORMAT"
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str], log_format: Optional[str]) -> None:
    """Schema Translator - converts schema descriptions from one format to another."""
    try:
        if config_file:
            cfg = Config.from_file(Path(config_file))
        else:
            # Environment variables (and .env if present)
            cfg = Config()
    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)

    if log_level:
        cfg.logging.level = log_level.upper()
    if log_format:
        cfg.logging.format = log_format.lower()

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command()
@click.argument("input_file", type=click.Path(allow_dash=True, dir_okay=False))
@click.option("--from", "-f", "parser", help="Parser name, dotted module path, or registered alias (e.g. 'xmi').")
@click.option("--to", "-t", "producer", help="Producer name, dotted module path, or registered alias (e.g. 'json').")
@click.option(
    "--visibility",
    type=click.Choice([v.value for v in Visibility], case_sensitive=False),
    default=None,
    help="Only translate classes and attributes passing this visibility filter.",
)
@click.option(
    "--output-file", "-o",
    type=click.Path(dir_okay=False, writable=True, resolve_path=True),
    help="Write the output here instead of stdout."
)
@click.pass_context
def translate(
    ctx: click.Context,
    input_file: str,
    parser: Optional[str],
    producer: Optional[str],
    visibility: Optional[str],
    output_file: Optional[str],
) -> None:
    """Translates INPUT_FILE ('-' for stdin) with the chosen parser and producer."""
    config: Config = ctx.obj["config"]
    logger = configure_logging(config.logging)

    try:
        translator = Translator(parser=parser, producer=producer, config=config, logger=logger)
        if input_file == "-":
            result = translator.run(sys.stdin, visibility=visibility)
        else:
            result = translator.run(filename=input_file, visibility=visibility)
    except TranslatorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result.no_data:
        return
    if result.failed:
        click.echo(f"Error: {result.error_message}", err=True)
        sys.exit(1)

    output = result.value if isinstance(result.value, str) else str(result.value)
    if output_file:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output)
            click.echo(f"Output written to {output_file}")
        except IOError as e:
            click.echo(f"Error writing output file {output_file}: {e}", err=True)
            sys.exit(1)
    else:
        click.echo(output)


@cli.command()
@click.pass_context
def plugins(ctx: click.Context) -> None:
    """List registered parser and producer names."""
    config: Config = ctx.obj["config"]
    resolver = PluginResolver(config.plugins)
    for role in PluginRole:
        resolver.load_namespace(role)
        names = sorted(registered_plugins(role))
        click.echo(f"{role.value}s: {', '.join(names) if names else '(none)'}")


@cli.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    click.echo(f"Schema Translator v{__version__}")


@cli.command()
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration."""
    config = ctx.obj["config"]
    click.echo(json.dumps(config.model_dump(mode="json"), indent=2))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
