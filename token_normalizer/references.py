"""Reference lookup, resolution and graph checks over a parsed theme.

A reference names another token by its dot-joined path inside a
collection's mode tree ("color.primary"), without the collection name.
Lookups search every collection and therefore see the whole theme; the
first match in the requested mode wins, then any other mode.

Resolution is lazy: nothing here caches or rewrites the theme, so calling
it twice gives the same answer.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import CircularReferenceError
from .normalizer_logging import LogCategory, get_category_logger
from .schema.tokens import Reference, ThemeFile, Token
from .tree import path_key, walk_tokens

logger = get_category_logger(LogCategory.REFERENCES)

ReferenceGraph = dict[str, set[str]]

_DONE = object()


@dataclass(frozen=True)
class BrokenReference:
    """A reference whose target path exists nowhere in the theme."""

    collection: str
    mode: str
    path: str  # Path of the referencing token
    ref: str  # Missing target

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "collection": self.collection,
            "mode": self.mode,
            "path": self.path,
            "ref": self.ref,
        }


def collect_token_paths(theme: ThemeFile) -> set[str]:
    """Every token path of every collection and mode."""
    return {path_key(path) for _, _, path, _ in walk_tokens(theme)}


def find_token(theme: ThemeFile, path: str, mode: str | None = None) -> Token | None:
    """Find the token at an exact path.

    Args:
        theme: Theme to search.
        path: Dot-separated token path.
        mode: Preferred mode; each collection's default mode when omitted.

    Returns:
        The token, or None if no collection has a token at that path.
    """
    for collection in theme.collections:
        node = collection.mode_tokens(
            mode if mode in collection.tokens else None
        ).get(path)
        if isinstance(node, Token):
            return node

    for collection in theme.collections:
        for group in collection.tokens.values():
            node = group.get(path)
            if isinstance(node, Token):
                return node
    return None


def resolve_reference(
    theme: ThemeFile, ref: Reference, mode: str | None = None
) -> Token | None:
    """Follow one reference one hop."""
    return find_token(theme, ref.ref, mode)


def resolve_value(theme: ThemeFile, token: Token, mode: str | None = None) -> Any:
    """Follow a chain of references down to a concrete value.

    Args:
        theme: Theme the token belongs to.
        token: Token to resolve; a non-reference resolves to its own value.
        mode: Preferred mode for every hop.

    Returns:
        The first non-reference value on the chain, or None when a link
        points at a missing token.

    Raises:
        CircularReferenceError: If the chain revisits a path.
    """
    chain: list[str] = []
    current = token
    while isinstance(current.value, Reference):
        target = current.value.ref
        if target in chain:
            raise CircularReferenceError(chain + [target])
        chain.append(target)

        found = find_token(theme, target, mode)
        if found is None:
            logger.debug(
                "Broken link in reference chain %s",
                " -> ".join(chain),
                extra={"token_path": target},
            )
            return None
        current = found
    return current.value


def theme_modes(theme: ThemeFile) -> list[str]:
    """Mode names of every collection, first occurrence first."""
    return list(dict.fromkeys(mode for c in theme.collections for mode in c.modes))


def build_reference_graph(theme: ThemeFile, mode: str | None = None) -> ReferenceGraph:
    """Edges from each path to the path its token references in one mode.

    Each path's edge comes from the token find_token() returns for that
    mode, so the graph follows the same hops resolve_value() takes.

    Args:
        theme: Theme to scan.
        mode: Mode to build the graph for; default modes when omitted.
    """
    graph: ReferenceGraph = {}
    for path in dict.fromkeys(path_key(p) for _, _, p, _ in walk_tokens(theme)):
        token = find_token(theme, path, mode)
        if token is not None and isinstance(token.value, Reference):
            graph[path] = {token.value.ref}
    return graph


def find_cycles(graph: Mapping[str, set[str]]) -> list[list[str]]:
    """Find reference cycles with an iterative depth-first search.

    A cycle is reported only when an edge leads back to a node on the
    current DFS stack, so two paths converging on one target (a diamond)
    are never a cycle. Once reported, a cycle's members are not searched
    again, which keeps each cycle to a single entry.

    Args:
        graph: Adjacency sets as built by build_reference_graph().

    Returns:
        One list of member paths per cycle, in the order they were walked.
    """
    checked: set[str] = set()
    cycles: list[list[str]] = []

    for start in graph:
        if start in checked:
            continue

        order = [start]
        position = {start: 0}
        stack = [iter(sorted(graph.get(start, ())))]
        while stack:
            child = next(stack[-1], _DONE)
            if child is _DONE:
                stack.pop()
                node = order.pop()
                del position[node]
                checked.add(node)
                continue

            if child in position:
                cycle = order[position[child]:]
                cycles.append(cycle)
                checked.update(cycle)
                logger.debug("Found reference cycle %s", " -> ".join(cycle + [child]))
                continue
            if child in checked:
                continue

            position[child] = len(order)
            order.append(child)
            stack.append(iter(sorted(graph.get(child, ()))))

    return cycles


def find_broken_references(theme: ThemeFile) -> list[BrokenReference]:
    """Every reference whose target path does not exist in the theme."""
    paths = collect_token_paths(theme)
    broken = []
    for collection, mode, path, token in walk_tokens(theme):
        if isinstance(token.value, Reference) and token.value.ref not in paths:
            broken.append(
                BrokenReference(
                    collection=collection.name,
                    mode=mode,
                    path=path_key(path),
                    ref=token.value.ref,
                )
            )
    return broken


def find_reference_cycles(theme: ThemeFile) -> list[list[str]]:
    """Reference cycles of every mode, each set of members reported once.

    Modes are checked separately: a -> b in one mode and b -> a in another
    never loop during resolution, so they are not a cycle.
    """
    seen: set[frozenset[str]] = set()
    cycles: list[list[str]] = []
    for mode in theme_modes(theme):
        for cycle in find_cycles(build_reference_graph(theme, mode)):
            members = frozenset(cycle)
            if members not in seen:
                seen.add(members)
                cycles.append(cycle)
    return cycles
