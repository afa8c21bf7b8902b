"""Command-line interface for swatchcut."""

import json
import logging
import sys
from typing import Optional

import click
import rich.traceback
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .core.generator import Role
from .core.palette import Palette, PaletteBuilder
from .core.swatch import Swatch
from .utils.config import ConfigManager
from .utils.logging import setup_logging

console = Console()
rich.traceback.install(console=console)

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress output")
@click.option(
    "--config", type=click.Path(exists=True), help="Path to configuration file"
)
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool, config):
    """swatchcut: extract prominent colors and theme roles from images."""
    ctx.ensure_object(dict)

    try:
        config_manager = ConfigManager.from_env(config)
    except ValueError as e:
        raise click.ClickException(str(e))

    log_level = logging.getLevelName(
        str(config_manager.get("logging.level", "INFO")).upper()
    )
    if not isinstance(log_level, int):
        log_level = logging.INFO
    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    setup_logging(level=log_level, log_file=config_manager.get("logging.file"))

    ctx.obj["config_manager"] = config_manager
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


def _swatch_cell(swatch: Optional[Swatch]) -> Text:
    if swatch is None:
        return Text("-", style="dim")
    return Text(f"  {swatch.hex}  ", style=f"on {swatch.hex}")


def _print_palette(palette: Palette) -> None:
    roles_table = Table(title="Roles")
    roles_table.add_column("Role")
    roles_table.add_column("Color")
    roles_table.add_column("Population", justify="right")
    roles_table.add_column("Score", justify="right")

    scores = palette.scores
    for role in Role:
        swatch = palette.get_swatch(role)
        roles_table.add_row(
            role.value,
            _swatch_cell(swatch),
            str(swatch.population) if swatch is not None else "-",
            f"{scores[role]:.4f}" if role in scores else "-",
        )

    swatch_table = Table(title=f"Swatches ({len(palette)})")
    swatch_table.add_column("Color")
    swatch_table.add_column("HSL")
    swatch_table.add_column("Population", justify="right")

    for swatch in sorted(palette.swatches, key=lambda s: s.population, reverse=True):
        h, s, l = swatch.hsl
        swatch_table.add_row(
            _swatch_cell(swatch), f"{h:6.1f} {s:.3f} {l:.3f}", str(swatch.population)
        )

    console.print(roles_table)
    console.print(swatch_table)


@cli.command()
@click.argument("input_image", type=click.Path(exists=True, dir_okay=False))
@click.option("--max-colors", type=int, help="Maximum number of swatches to extract")
@click.option(
    "--resize-max-dimension",
    type=int,
    help="Longest image side, in pixels, before quantization",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write JSON to file")
@click.pass_context
def extract(ctx, input_image, max_colors, resize_max_dimension, output_format, output):
    """Extract the palette of INPUT_IMAGE."""
    config_manager: ConfigManager = ctx.obj["config_manager"]

    if max_colors is not None:
        config_manager.set("quantizer.max_colors", max_colors)
    if resize_max_dimension is not None:
        config_manager.set("image.resize_max_dimension", resize_max_dimension)

    try:
        palette_config = config_manager.get_palette_config()
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        palette = PaletteBuilder.from_image(input_image, config=palette_config).generate()
    except Exception as e:
        logger.error(f"Error during palette extraction: {e}", exc_info=ctx.obj["verbose"])
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.info(f"Extracted {len(palette)} swatches from {input_image}")

    if output:
        with open(output, "w") as f:
            json.dump(palette.to_dict(), f, indent=2)
        if not ctx.obj["quiet"]:
            click.echo(f"Palette saved to {output}")
    elif output_format == "json":
        click.echo(json.dumps(palette.to_dict(), indent=2))

    if output_format == "table" and not ctx.obj["quiet"]:
        _print_palette(palette)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default="./swatchcut_config.yaml",
    help="Output configuration file path (.yaml, .yml or .json)",
)
def init_config(output):
    """Initialize a default configuration file."""
    ConfigManager().save_config(output)
    click.echo(f"Configuration created at: {output}")
    logger.info(f"Initialized config file at {output}")


@cli.command()
def version():
    """Display swatchcut version."""
    click.echo(f"swatchcut version: {__version__}")


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
