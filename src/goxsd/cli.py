"""Command-line interface for goxsd."""

import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import Config, LogLevel, OutputFormat
from .converter import Converter
from .logger import create_logger


def validate_input_file(ctx, param, value):
    """Validate input file exists and has correct extension."""
    if value is None:
        return None

    path = Path(value)
    if not path.exists():
        raise click.BadParameter(f"Input file does not exist: {value}")

    if path.suffix.lower() not in {'.xsd', '.xml'}:
        raise click.BadParameter(f"Input file must have .xsd or .xml extension: {value}")

    return path


@click.command()
@click.version_option(__version__)
@click.option(
    "--input", "-i",
    required=True,
    callback=validate_input_file,
    help="Path to XSD schema file; imports and includes are followed"
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    help="Output file (default: stdout)"
)
@click.option(
    "--format", "output_format",
    type=click.Choice([OutputFormat.GO.value, OutputFormat.JSON.value]),
    default=OutputFormat.GO.value,
    help="Output format: Go structs or the JSON element tree"
)
@click.option(
    "--package", "-p",
    default="main",
    help="Name of the generated Go package"
)
@click.option(
    "--export", "-e",
    is_flag=True,
    help="Generate exported struct type names"
)
@click.option(
    "--prefix", "-x",
    default="",
    help="Prefix prepended to generated struct type names"
)
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel]),
    default=LogLevel.WARN.value,
    help="Logging level (logs go to stderr)"
)
@click.option(
    "--pretty/--compact",
    default=True,
    help="Pretty-print JSON output (default: pretty)"
)
def main(
    input: Path,
    output: Optional[Path],
    output_format: str,
    package: str,
    export: bool,
    prefix: str,
    log_level: str,
    pretty: bool,
) -> None:
    """Generate Go structs for decoding XML documents valid against an XSD.

    Examples:
        # Print structs for a schema
        goxsd --input schema.xsd

        # Exported types in package "feed", written to a file
        goxsd -i schema.xsd -p feed -e -o feed.go
    """
    config = Config.from_cli_args(
        input_file=input,
        output_file=output,
        output_format=output_format,
        package_name=package,
        export=export,
        prefix=prefix,
        log_level=log_level,
        pretty=pretty,
    )

    logger = create_logger(level=config.logging.level, component="cli")

    errors = config.validate()
    if errors:
        logger.error("Configuration validation failed", errors=errors)
        for error in errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)

    logger.info(
        "Starting goxsd generation",
        inputFile=str(config.input_file),
        outputFile=str(config.output_file) if config.output_file else "-",
        outputFormat=config.output_format,
    )

    try:
        result = Converter(config).convert()
    except KeyboardInterrupt:
        logger.info("Generation interrupted by user")
        click.echo("\nGeneration interrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        logger.error("Unexpected error during generation", error=str(e), type=type(e).__name__)
        click.echo(f"✗ Unexpected error: {e}", err=True)
        if config.logging.level == LogLevel.DEBUG:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    if not result.success:
        click.echo("✗ Generation failed:", err=True)
        for error in result.errors:
            click.echo(f"  {error}", err=True)
        sys.exit(1)

    if result.output_file is None:
        click.echo(result.output, nl=False)
    else:
        click.echo(f"✓ Wrote {result.output_file}")
        click.echo(f"  Root elements: {result.statistics['roots']}")
        click.echo(f"  Processing time: {result.processing_time:.2f}s")


if __name__ == "__main__":
    main()
