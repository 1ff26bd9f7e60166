"""Base class for token input adapters.

Input adapters turn one source format (Figma REST variables, the Figma
compact export, CSS custom properties) into a ThemeFile. Parsing is
permissive; validate() is the only step allowed to reject a whole input.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import InvalidSourceError, SourceNotFoundError
from ..registry import TokenTypeRegistry, get_default_registry
from ..schema.tokens import ThemeFile


@dataclass
class ValidationResult:
    """Outcome of validating a source before parsing."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(
        cls, errors: list[str], warnings: list[str] | None = None
    ) -> "ValidationResult":
        return cls(valid=not errors, errors=errors, warnings=warnings or [])


class InputAdapter(ABC):
    """Abstract base class for input adapters.

    Each adapter validates and parses one source format, dispatching every
    value through the token type registry it was constructed with.
    """

    def __init__(self, registry: TokenTypeRegistry | None = None):
        self.registry = registry or get_default_registry()

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Short name of the source format, used in errors."""
        ...

    @abstractmethod
    def validate(self, source: Any) -> ValidationResult:
        """Check that a source is structurally usable.

        Args:
            source: Raw input in the adapter's format.

        Returns:
            ValidationResult listing every problem found.
        """
        ...

    @abstractmethod
    def _parse(self, source: Any, options: Any) -> ThemeFile:
        """Parse a source that has already passed validation."""
        ...

    def parse(self, source: Any, options: Any = None) -> ThemeFile:
        """Validate and parse a source into a theme.

        Args:
            source: Raw input in the adapter's format.
            options: Adapter-specific options object or dict.

        Returns:
            Parsed ThemeFile.

        Raises:
            InvalidSourceError: If validation fails.
        """
        result = self.validate(source)
        if not result.valid:
            raise InvalidSourceError(self.source_name, result.errors)
        return self._parse(source, options)

    def read_file(self, file_path: Path) -> Any:
        """Load a source file; JSON unless the adapter reads text."""
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)

    def parse_file(self, file_path: str | Path, options: Any = None) -> ThemeFile:
        """Read and parse a source file.

        Args:
            file_path: Path to the source file.
            options: Adapter-specific options object or dict.

        Returns:
            Parsed ThemeFile.

        Raises:
            SourceNotFoundError: If the file doesn't exist.
            InvalidSourceError: If the file is unreadable or fails validation.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise SourceNotFoundError(str(file_path))
        try:
            source = self.read_file(file_path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise InvalidSourceError(self.source_name, [f"Cannot read {file_path}: {e}"]) from e
        return self.parse(source, options)
