"""Token type registry.

The registry is assembled once by create_registry() and never changes
afterwards. It is passed to parsers, the codec and the linter by reference;
get_default_registry() caches one instance holding the built-in handlers.
"""

from collections.abc import Iterable
from types import MappingProxyType
from typing import Any

from ..errors import DuplicateTypeError, UnknownTokenTypeError
from ..normalizer_logging import LogCategory, get_category_logger
from ..schema.tokens import Reference
from .base import CompactContext, NativeContext, TextOptions, TokenTypeHandler

logger = get_category_logger(LogCategory.REGISTRY)

# Figma resolvedType -> type tag when no handler claims a variable
NATIVE_FALLBACK_TYPES = {
    "COLOR": "color",
    "BOOLEAN": "boolean",
    "FLOAT": "number",
    "STRING": "string",
}
FALLBACK_TYPE = "string"


class TokenTypeRegistry:
    """Immutable, priority-ordered dispatch table of token type handlers.

    Lookup by type tag is a dict access. Detection walks handlers from the
    highest priority down and returns the first match; handlers with equal
    priority keep their registration order.
    """

    __slots__ = ("_by_tag", "_ordered")

    def __init__(self, handlers: Iterable[TokenTypeHandler]):
        by_tag: dict[str, TokenTypeHandler] = {}
        for handler in handlers:
            if handler.type_tag in by_tag:
                raise DuplicateTypeError(handler.type_tag)
            by_tag[handler.type_tag] = handler

        self._by_tag = MappingProxyType(by_tag)
        self._ordered = tuple(sorted(by_tag.values(), key=lambda h: -h.priority))

    def __contains__(self, type_tag: object) -> bool:
        return type_tag in self._by_tag

    def __len__(self) -> int:
        return len(self._by_tag)

    @property
    def handlers(self) -> tuple[TokenTypeHandler, ...]:
        """Handlers in detection order."""
        return self._ordered

    @property
    def tags(self) -> tuple[str, ...]:
        """Registered type tags in detection order."""
        return tuple(handler.type_tag for handler in self._ordered)

    def has(self, type_tag: str) -> bool:
        return type_tag in self._by_tag

    def get(self, type_tag: str) -> TokenTypeHandler:
        """Get the handler for a type tag.

        Raises:
            UnknownTokenTypeError: If no handler is registered for the tag.
        """
        try:
            return self._by_tag[type_tag]
        except KeyError:
            raise UnknownTokenTypeError(type_tag, list(self._by_tag)) from None

    def detect_native(self, context: NativeContext) -> str:
        """Detect the type of a Figma variable; never fails."""
        for handler in self._ordered:
            if handler.detect_native(context):
                return handler.type_tag
        return self._native_fallback(context.resolved_type)

    def detect_compact(self, context: CompactContext) -> str:
        """Detect the type of a bare string under a path; never fails."""
        for handler in self._ordered:
            if handler.detect_compact(context):
                return handler.type_tag
        return FALLBACK_TYPE if FALLBACK_TYPE in self._by_tag else self._ordered[-1].type_tag

    def _native_fallback(self, resolved_type: str) -> str:
        tag = NATIVE_FALLBACK_TYPES.get(resolved_type, FALLBACK_TYPE)
        if tag not in self._by_tag:
            logger.debug("No handler for fallback type %s, using string", tag)
            tag = FALLBACK_TYPE
        return tag

    def parse_native(
        self, type_tag: str, value: Any, scopes: tuple[str, ...] = ()
    ) -> Any:
        return self.get(type_tag).parse_native(value, scopes)

    def parse_compact(self, type_tag: str, raw: str) -> Any:
        return self.get(type_tag).parse_compact(raw)

    def to_text(
        self, type_tag: str, value: Any, options: TextOptions | None = None
    ) -> str:
        """Render a value; references become a variable lookup in the dialect.

        Args:
            type_tag: Declared type of the token.
            value: Canonical value or Reference.
            options: Color format, dialect and variable prefix.
        """
        options = options or TextOptions()
        if isinstance(value, Reference):
            name = options.prefix + "-".join(value.segments)
            if options.dialect == "scss":
                return f"${name}"
            return f"var(--{name})"
        if type_tag not in self._by_tag:
            return str(value)
        return self._by_tag[type_tag].to_text(value, options)

    def get_namespace(self, type_tag: str, path: tuple[str, ...] | list[str]) -> str | None:
        """Output namespace for a token: path-specific first, then the default."""
        handler = self._by_tag.get(type_tag)
        if handler is None:
            return None
        return handler.get_namespace(tuple(path)) or handler.default_namespace

    def value_to_dict(self, type_tag: str, value: Any) -> Any:
        if isinstance(value, Reference):
            return value.to_dict()
        return self.get(type_tag).value_to_dict(value)

    def value_from_dict(self, type_tag: str, data: Any) -> Any:
        if isinstance(data, dict) and "$ref" in data:
            return Reference.from_dict(data)
        return self.get(type_tag).value_from_dict(data)


def create_registry(handlers: Iterable[TokenTypeHandler] | None = None) -> TokenTypeRegistry:
    """Build a registry.

    Args:
        handlers: Handlers to register; the built-in set when omitted.

    Returns:
        A new immutable TokenTypeRegistry.

    Raises:
        DuplicateTypeError: If two handlers share a type tag.
    """
    if handlers is None:
        from .handlers import builtin_handlers

        handlers = builtin_handlers()
    return TokenTypeRegistry(handlers)


# Global registry instance
_default_registry: TokenTypeRegistry | None = None


def get_default_registry() -> TokenTypeRegistry:
    """Get the shared registry with all built-in handlers."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_registry()
    return _default_registry
