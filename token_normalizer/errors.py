"""Structured error types with recovery suggestions.

Parsing is permissive and lint findings are data, so exceptions are reserved
for rejected inputs, misuse of the registry, configuration problems and
reference chains that cannot be resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of errors for organization and handling."""

    VALIDATION = "validation"  # Rejected input sources
    REGISTRY = "registry"  # Unknown or duplicate token types
    REFERENCE = "reference"  # Unresolvable reference chains
    CONFIGURATION = "configuration"  # Invalid lint config
    FILE_SYSTEM = "file_system"  # Missing or unreadable files


@dataclass
class TokenNormalizerError(Exception):
    """Base class for structured errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error terminates the CLI.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class InvalidSourceError(TokenNormalizerError):
    """Raised when an adapter's validate() step rejects a whole input."""

    def __init__(self, source: str, errors: list[str]):
        self.errors = list(errors)
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=f"Invalid {source} input: {'; '.join(self.errors)}",
            suggestion="Run validate() on the source to inspect every problem",
            details={"source": source, "errors": len(self.errors)},
            exit_code=2,
        )


class UnknownTokenTypeError(TokenNormalizerError):
    """Raised when a type tag has no registered handler."""

    def __init__(self, type_tag: str, known: list[str] | None = None):
        super().__init__(
            category=ErrorCategory.REGISTRY,
            message=f"Unknown token type: {type_tag}",
            suggestion=(
                f"Known types: {', '.join(sorted(known))}" if known else None
            ),
            details={"type": type_tag},
        )


class DuplicateTypeError(TokenNormalizerError):
    """Raised when two handlers claim the same type tag."""

    def __init__(self, type_tag: str):
        super().__init__(
            category=ErrorCategory.REGISTRY,
            message=f"Token type {type_tag} is already registered",
            suggestion="Give the new handler a distinct type tag",
            details={"type": type_tag},
        )


class CircularReferenceError(TokenNormalizerError):
    """Raised when resolving a reference chain revisits a path."""

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(
            category=ErrorCategory.REFERENCE,
            message=f"Circular reference: {' -> '.join(self.chain)}",
            suggestion="Point one of the tokens at a concrete value",
            details={"start": self.chain[0] if self.chain else None},
        )


class ConfigurationError(TokenNormalizerError):
    """Error in a lint configuration file or preset."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check your configuration file syntax and rule names"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
        )


class SourceNotFoundError(TokenNormalizerError):
    """Error when an input file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=f"Source file not found: {path}",
            suggestion="Verify the path exists and you have read permissions",
            details={"path": path},
        )
