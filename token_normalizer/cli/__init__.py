"""Command line interface: parse sources, lint themes, list token types."""

import json
import sys
from pathlib import Path
from typing import Any

import click

from ..adapters import ADAPTERS, InputAdapter
from ..errors import InvalidSourceError, TokenNormalizerError
from ..lint import LintConfig, create_linter, get_preset, list_presets, load_config
from ..normalizer_logging import LogCategory, get_category_logger, setup_logging
from ..registry import get_default_registry
from ..schema.codec import theme_from_dict, theme_to_dict
from ..schema.tokens import ThemeFile
from .output import OutputConfig, OutputManager

logger = get_category_logger(LogCategory.CLI)

SOURCE_FORMATS = ("css", "compact", "native")


def detect_source_format(path: Path, data: Any = None) -> str:
    """Guess the source format from the file suffix and, for JSON, its shape.

    A JSON object whose values are all strings is the compact export;
    anything else is taken as native Figma variables.
    """
    if path.suffix.lower() in (".css", ".scss", ".pcss"):
        return "css"
    if isinstance(data, dict) and data and all(isinstance(v, str) for v in data.values()):
        return "compact"
    return "native"


def load_source(path: Path, source_format: str | None, name: str | None) -> ThemeFile:
    """Parse a source file into a theme, detecting its format if not given."""
    if source_format is None:
        data = None
        if path.suffix.lower() == ".json" and path.is_file():
            with open(path, encoding="utf-8") as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise InvalidSourceError("json", [f"Cannot read {path}: {e}"]) from e
        source_format = detect_source_format(path, data)
        logger.debug("Detected %s source format for %s", source_format, path)

    adapter: InputAdapter = ADAPTERS[source_format]()
    options = {"theme_name": name, "file_name": name} if name else None
    return adapter.parse_file(path, options)


def load_theme(path: Path) -> ThemeFile:
    """Read a theme JSON file written by `parse`."""
    try:
        with open(path, encoding="utf-8") as f:
            return theme_from_dict(json.load(f))
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise InvalidSourceError("theme", [f"Cannot read {path}: {e}"]) from e


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--log-file", type=click.Path(path_type=Path), help="Also log to this file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, no_color: bool, log_file: Path | None) -> None:
    """Normalize and lint design tokens from Figma and CSS."""
    if quiet and verbose:
        raise click.UsageError("--quiet and --verbose are mutually exclusive")

    setup_logging(level="WARNING", quiet=quiet, verbose=verbose, log_file=log_file)
    ctx.ensure_object(dict)
    ctx.obj["output"] = OutputManager(
        OutputConfig.from_flags(verbose=verbose, quiet=quiet, no_color=no_color)
    )


def _fail(output: OutputManager, error: TokenNormalizerError) -> None:
    output.error(error.format(use_color=output.config.use_color))
    sys.exit(error.exit_code)


@cli.command()
@click.argument("source", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "source_format",
    type=click.Choice(SOURCE_FORMATS),
    help="Source format (detected from the file when omitted)",
)
@click.option("--name", help="Theme name")
@click.option("--output", "-o", type=click.Path(path_type=Path), help="Write JSON here")
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
@click.pass_context
def parse(
    ctx: click.Context,
    source: Path,
    source_format: str | None,
    name: str | None,
    output: Path | None,
    indent: int,
) -> None:
    """Parse a CSS, Figma compact or Figma native SOURCE into theme JSON."""
    out: OutputManager = ctx.obj["output"]
    try:
        theme = load_source(source, source_format, name)
    except TokenNormalizerError as e:
        _fail(out, e)
        return

    text = json.dumps(theme_to_dict(theme), indent=indent)
    if output is None:
        click.echo(text)
        return

    output.write_text(text + "\n", encoding="utf-8")
    token_count = sum(
        group.token_count() for c in theme.collections for group in c.tokens.values()
    )
    out.success(
        f"Wrote {len(theme.collections)} collections, {token_count} tokens to {output}"
    )


@cli.command()
@click.argument("theme_file", type=click.Path(path_type=Path))
@click.option(
    "--from",
    "source_format",
    type=click.Choice(("theme",) + SOURCE_FORMATS),
    default="theme",
    show_default=True,
    help="Lint theme JSON, or parse a source first",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Lint config file")
@click.option("--preset", type=click.Choice(list_presets()), help="Use a preset instead")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(("text", "json")),
    default="text",
    show_default=True,
)
@click.pass_context
def lint(
    ctx: click.Context,
    theme_file: Path,
    source_format: str,
    config_path: Path | None,
    preset: str | None,
    output_format: str,
) -> None:
    """Lint THEME_FILE; exits with status 1 when errors are found."""
    out: OutputManager = ctx.obj["output"]
    try:
        if source_format == "theme":
            if not theme_file.exists():
                raise InvalidSourceError("theme", [f"File not found: {theme_file}"])
            theme = load_theme(theme_file)
        else:
            theme = load_source(theme_file, source_format, None)
        config: LintConfig = get_preset(preset) if preset else load_config(config_path)
    except TokenNormalizerError as e:
        _fail(out, e)
        return

    result = create_linter(config).lint(theme)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        for message in result.messages:
            out.lint_message(message)
        out.lint_summary(result)

    if not result.passed:
        sys.exit(1)


@cli.command(name="types")
@click.pass_context
def list_types(ctx: click.Context) -> None:
    """List registered token types in detection order."""
    out: OutputManager = ctx.obj["output"]
    for handler in get_default_registry().handlers:
        namespace = handler.default_namespace or "-"
        kind = "composite" if handler.is_composite else "scalar"
        out.plain(
            f"{handler.type_tag:<14} {handler.priority:>4}  {kind:<9}  {namespace}",
            force=True,
        )


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
