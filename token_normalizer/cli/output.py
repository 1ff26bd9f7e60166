"""Output manager for the CLI with color and quiet mode support.

Follows the NO_COLOR convention (https://no-color.org/) and falls back to
plain bracketed symbols when colors are off.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import TextIO

import click

from ..lint.base import LintMessage, LintResult, Severity


def should_use_color(
    explicit_flag: bool | None = None,
    stream: TextIO | None = None,
) -> bool:
    """Determine if color output should be used.

    Priority order:
    1. Explicit --no-color flag (if passed)
    2. NO_COLOR environment variable
    3. TTY detection (only colorize if output is a terminal)

    Args:
        explicit_flag: True forces colors, False disables them, None detects.
        stream: Output stream to check for TTY. Defaults to stdout.
    """
    if explicit_flag is not None:
        return explicit_flag

    # Any value, including empty, means "no color"
    if "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True

    if stream is None:
        stream = sys.stdout
    if hasattr(stream, "isatty") and not stream.isatty():
        return False
    return True


@dataclass
class OutputConfig:
    """Configuration for CLI output behavior."""

    use_color: bool = True
    quiet: bool = False
    verbose: bool = False
    stream: TextIO = field(default_factory=lambda: sys.stdout)
    err_stream: TextIO = field(default_factory=lambda: sys.stderr)

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
    ) -> OutputConfig:
        use_color = should_use_color(explicit_flag=False if no_color else None)
        return cls(use_color=use_color, quiet=quiet, verbose=verbose)


class OutputManager:
    """Centralized output handler for CLI commands.

    Example:
        >>> output = OutputManager(OutputConfig(use_color=False))
        >>> output.success("Parsed 12 tokens")
        [OK] Parsed 12 tokens
    """

    COLORS = {
        "green": "\033[92m",
        "red": "\033[91m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "cyan": "\033[96m",
        "bold": "\033[1m",
        "dim": "\033[2m",
        "reset": "\033[0m",
    }

    SYMBOLS = {
        "success": {"color": "\033[92m✓\033[0m", "plain": "[OK]"},
        "error": {"color": "\033[91m✗\033[0m", "plain": "[FAIL]"},
        "warning": {"color": "\033[93m⚠\033[0m", "plain": "[WARN]"},
        "info": {"color": "\033[94mℹ\033[0m", "plain": "[INFO]"},
    }

    SEVERITY_SYMBOLS = {
        Severity.ERROR: "error",
        Severity.WARNING: "warning",
        Severity.INFO: "info",
    }

    def __init__(self, config: OutputConfig | None = None):
        self.config = config or OutputConfig()

    def _get_symbol(self, symbol_type: str) -> str:
        symbol_data = self.SYMBOLS.get(symbol_type, self.SYMBOLS["info"])
        return symbol_data["color"] if self.config.use_color else symbol_data["plain"]

    def _colorize(self, text: str, color: str) -> str:
        if not self.config.use_color:
            return text
        return f"{self.COLORS.get(color, '')}{text}{self.COLORS['reset']}"

    def _output(
        self,
        message: str,
        symbol_type: str | None = None,
        err: bool = False,
        force: bool = False,
    ) -> None:
        """Output a message with optional symbol prefix.

        Args:
            message: Message to output.
            symbol_type: Type of symbol to prefix (or None for no symbol).
            err: Output to stderr instead of stdout.
            force: Output even in quiet mode.
        """
        if self.config.quiet and not err and not force:
            return

        stream = self.config.err_stream if err else self.config.stream
        line = f"{self._get_symbol(symbol_type)} {message}" if symbol_type else message
        click.echo(line, file=stream)

    def success(self, message: str, force: bool = False) -> None:
        self._output(message, symbol_type="success", force=force)

    def error(self, message: str) -> None:
        """Output an error message (always shown, even in quiet mode)."""
        self._output(message, symbol_type="error", err=True, force=True)

    def warning(self, message: str, force: bool = False) -> None:
        self._output(message, symbol_type="warning", force=force)

    def info(self, message: str) -> None:
        self._output(message, symbol_type="info")

    def plain(self, message: str, force: bool = False) -> None:
        self._output(message, force=force)

    def lint_message(self, message: LintMessage) -> None:
        """Output one lint finding with its location and suggestion."""
        location = " ".join(
            part for part in (message.collection, message.path) if part
        )
        rule = self._colorize(f"[{message.rule}]", "dim")
        text = f"{message.message} {rule}"
        if location:
            text = f"{self._colorize(location, 'cyan')}: {text}"
        self._output(
            text,
            symbol_type=self.SEVERITY_SYMBOLS[message.severity],
            force=message.severity is Severity.ERROR,
        )
        if message.suggestion and self.config.verbose:
            self._output(f"    {self._colorize(message.suggestion, 'dim')}")

    def lint_summary(self, result: LintResult) -> None:
        """Output the counts line of a lint run (always shown)."""
        text = (
            f"{result.error_count} errors | {result.warning_count} warnings"
            f" | {result.info_count} info"
        )
        if result.error_count:
            self._output(text, symbol_type="error", force=True)
        elif result.warning_count:
            self._output(text, symbol_type="warning", force=True)
        else:
            self._output(text, symbol_type="success", force=True)
