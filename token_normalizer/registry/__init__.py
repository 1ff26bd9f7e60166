"""Token type registry: per-type detection, parsing and rendering."""

from .base import (
    DIMENSION_SCOPES,
    NAMESPACES,
    CompactContext,
    NativeContext,
    TextOptions,
    TokenTypeHandler,
)
from .registry import TokenTypeRegistry, create_registry, get_default_registry

__all__ = [
    "DIMENSION_SCOPES",
    "NAMESPACES",
    "CompactContext",
    "NativeContext",
    "TextOptions",
    "TokenTypeHandler",
    "TokenTypeRegistry",
    "create_registry",
    "get_default_registry",
]
