"""ThemeFile <-> JSON-compatible dict conversion.

Token wire keys follow the W3C design tokens draft (`$type`, `$value`,
`$description`, `$extensions`); references are `{"$ref": "a.b"}`. Value
encoding is delegated to the handler registered for each token's type so
new token types need no changes here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .tokens import ThemeFile, ThemeMeta, Token, TokenCollection, TokenGroup

if TYPE_CHECKING:
    from ..registry import TokenTypeRegistry


def _registry(registry: TokenTypeRegistry | None) -> TokenTypeRegistry:
    if registry is not None:
        return registry
    from ..registry import get_default_registry

    return get_default_registry()


def is_token_dict(data: Any) -> bool:
    """Whether a wire mapping is a token rather than a group."""
    return isinstance(data, dict) and "$type" in data and "$value" in data


def token_to_dict(token: Token, registry: TokenTypeRegistry | None = None) -> dict[str, Any]:
    """Convert a token to its wire form."""
    data: dict[str, Any] = {
        "$type": token.type,
        "$value": _registry(registry).value_to_dict(token.type, token.value),
    }
    if token.description:
        data["$description"] = token.description
    if token.extensions:
        data["$extensions"] = dict(token.extensions)
    return data


def token_from_dict(data: dict[str, Any], registry: TokenTypeRegistry | None = None) -> Token:
    """Rebuild a token from its wire form.

    Raises:
        UnknownTokenTypeError: If `$type` has no registered handler.
    """
    type_tag = data["$type"]
    return Token(
        type=type_tag,
        value=_registry(registry).value_from_dict(type_tag, data["$value"]),
        description=data.get("$description"),
        extensions=data.get("$extensions"),
    )


def group_to_dict(group: TokenGroup, registry: TokenTypeRegistry | None = None) -> dict[str, Any]:
    """Convert a group and everything below it."""
    result: dict[str, Any] = {}
    for name, member in group.items():
        if isinstance(member, Token):
            result[name] = token_to_dict(member, registry)
        else:
            result[name] = group_to_dict(member, registry)
    return result


def group_from_dict(data: dict[str, Any], registry: TokenTypeRegistry | None = None) -> TokenGroup:
    """Rebuild a group; `$`-prefixed keys on groups are ignored."""
    children: dict[str, Token | TokenGroup] = {}
    for name, member in data.items():
        if name.startswith("$") or not isinstance(member, dict):
            continue
        if is_token_dict(member):
            children[name] = token_from_dict(member, registry)
        else:
            children[name] = group_from_dict(member, registry)
    return TokenGroup(children)


def collection_to_dict(
    collection: TokenCollection, registry: TokenTypeRegistry | None = None
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": collection.name,
        "modes": list(collection.modes),
        "defaultMode": collection.default_mode,
        "tokens": {
            mode: group_to_dict(group, registry)
            for mode, group in collection.tokens.items()
        },
    }
    if collection.description:
        data["description"] = collection.description
    return data


def collection_from_dict(
    data: dict[str, Any], registry: TokenTypeRegistry | None = None
) -> TokenCollection:
    modes = tuple(data.get("modes") or data.get("tokens", {}).keys())
    return TokenCollection(
        name=data["name"],
        modes=modes,
        default_mode=data.get("defaultMode", modes[0] if modes else ""),
        tokens={
            mode: group_from_dict(group, registry)
            for mode, group in data.get("tokens", {}).items()
        },
        description=data.get("description"),
    )


def theme_to_dict(theme: ThemeFile, registry: TokenTypeRegistry | None = None) -> dict[str, Any]:
    """Convert a theme to a JSON-compatible dict.

    Args:
        theme: Theme to convert.
        registry: Registry used to encode values; the default when omitted.

    Returns:
        Dict suitable for json.dumps().
    """
    data: dict[str, Any] = {"name": theme.name}
    if theme.description:
        data["description"] = theme.description
    data["collections"] = [collection_to_dict(c, registry) for c in theme.collections]
    if theme.meta is not None:
        data["meta"] = theme.meta.to_dict()
    return data


def theme_from_dict(data: dict[str, Any], registry: TokenTypeRegistry | None = None) -> ThemeFile:
    """Rebuild a theme from its wire form.

    Raises:
        KeyError: If a required field is missing.
        UnknownTokenTypeError: If a token type has no registered handler.
    """
    meta = data.get("meta")
    return ThemeFile(
        name=data["name"],
        collections=tuple(
            collection_from_dict(c, registry) for c in data.get("collections", [])
        ),
        meta=ThemeMeta.from_dict(meta) if meta else None,
        description=data.get("description"),
    )
