"""Assemble flat (path, token) entries into nested token trees.

Parsers stage tokens in a TreeBuilder per mode and freeze the result into
TokenGroups. Placement is last-write-wins: a token that sits where a group
is needed (or a group where a token is needed) is replaced, not reported.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence

from .normalizer_logging import LogCategory, get_category_logger
from .schema.tokens import ThemeFile, Token, TokenCollection, TokenGroup

logger = get_category_logger(LogCategory.PARSER)

TokenPath = tuple[str, ...]


def path_key(path: Sequence[str]) -> str:
    """Dot-joined form of a path, as used by references."""
    return ".".join(path)


class TreeBuilder:
    """Mutable staging tree for one mode of one collection."""

    def __init__(self) -> None:
        self._root: dict = {}

    def set(self, path: Sequence[str], token: Token) -> None:
        """Place a token at a path, creating groups on the way.

        Args:
            path: Non-empty sequence of segments.
            token: Token to store at the final segment.

        Raises:
            ValueError: If the path is empty.
        """
        if not path:
            raise ValueError("Token path must have at least one segment")

        node = self._root
        for segment in path[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                if child is not None:
                    logger.debug(
                        "Replacing token at %s with a group", segment,
                        extra={"token_path": path_key(path)},
                    )
                child = {}
                node[segment] = child
            node = child
        node[path[-1]] = token

    def update(self, entries: Iterable[tuple[Sequence[str], Token]]) -> "TreeBuilder":
        for path, token in entries:
            self.set(path, token)
        return self

    def is_empty(self) -> bool:
        return not self._root

    def build(self) -> TokenGroup:
        """Freeze the staged tree."""
        return _freeze(self._root)


def _freeze(node: dict) -> TokenGroup:
    children: dict = {}
    for name, member in node.items():
        children[name] = member if isinstance(member, Token) else _freeze(member)
    return TokenGroup(children)


def build_group(entries: Iterable[tuple[Sequence[str], Token]]) -> TokenGroup:
    """Build a TokenGroup from (path, token) pairs."""
    return TreeBuilder().update(entries).build()


def build_collection(
    name: str,
    entries_by_mode: Mapping[str, Iterable[tuple[Sequence[str], Token]]],
    default_mode: str,
    description: str | None = None,
) -> TokenCollection:
    """Build a collection from per-mode entries.

    Modes keep their mapping order with the default mode moved first; the
    default mode always exists, even when it has no entries.
    """
    modes = [default_mode] + [mode for mode in entries_by_mode if mode != default_mode]
    tokens = {
        mode: build_group(entries_by_mode.get(mode, ())) for mode in modes
    }
    return TokenCollection(
        name=name,
        modes=tuple(modes),
        default_mode=default_mode,
        tokens=tokens,
        description=description,
    )


def merge_groups(base: TokenGroup, override: TokenGroup) -> TokenGroup:
    """Deep-merge two groups; members of override win."""
    children = dict(base.children)
    for name, member in override.items():
        existing = children.get(name)
        if isinstance(existing, TokenGroup) and isinstance(member, TokenGroup):
            children[name] = merge_groups(existing, member)
        else:
            children[name] = member
    return TokenGroup(children)


def walk_tokens(
    theme: ThemeFile,
) -> Iterator[tuple[TokenCollection, str, TokenPath, Token]]:
    """Yield (collection, mode, path, token) for every token in a theme."""
    for collection in theme.collections:
        for mode, group in collection.tokens.items():
            for path, token in group.walk():
                yield collection, mode, path, token
