"""
Shared fixtures for the token normalizer test suite.

Provides test fixtures for:
- Sample sources in each input format (CSS, Figma compact, Figma native)
- Small hand-built themes for reference and lint tests
- The default token type registry
"""

import json
from pathlib import Path

import pytest

from token_normalizer.registry import TokenTypeRegistry, get_default_registry
from token_normalizer.schema.tokens import (
    Color,
    Dimension,
    Reference,
    ThemeFile,
    ThemeMeta,
    Token,
)
from token_normalizer.tree import build_collection

# ---------------------------------------------------------------------------
# Sample sources
# ---------------------------------------------------------------------------

SAMPLE_CSS = """
:root {
  --color-primary: #3880f6;
  --spacing-4: 16px;
}
.dark {
  --color-primary: #4c8df7;
}
"""

SAMPLE_COMPACT = {
    "Colors/Brand/Primary": "#3880f6",
    "Colors/Brand/Surface": "#ffffff,#000000",
    "Spacing/Gap/Small": "8",
    "Typography/Heading/Font Weight": "700",
    "Typography/Heading/Style": 'Font(family: "DM Sans", size: 56, weight: 700, lineHeight: 64)',
    "Effects/Shadow/Card": "Effect(type: DROP_SHADOW, color: #1D293D05, offset: (0, 1), radius: 2)",
}

SAMPLE_NATIVE = {
    "status": 200,
    "error": False,
    "meta": {
        "variableCollections": {
            "VariableCollectionId:1": {
                "id": "VariableCollectionId:1",
                "name": "Colors",
                "modes": [
                    {"modeId": "1:0", "name": "Light"},
                    {"modeId": "1:1", "name": "Dark"},
                ],
                "defaultModeId": "1:0",
                "hiddenFromPublishing": False,
            },
            "VariableCollectionId:2": {
                "id": "VariableCollectionId:2",
                "name": "Spacing",
                "modes": [{"modeId": "2:0", "name": "Default"}],
                "defaultModeId": "2:0",
            },
        },
        "variables": {
            "VariableID:1": {
                "id": "VariableID:1",
                "name": "Brand/Primary",
                "variableCollectionId": "VariableCollectionId:1",
                "resolvedType": "COLOR",
                "description": "Main brand color",
                "scopes": ["ALL_FILLS"],
                "valuesByMode": {
                    "1:0": {"r": 0.2196, "g": 0.502, "b": 0.9647, "a": 1},
                    "1:1": {"r": 0.298, "g": 0.553, "b": 0.969, "a": 1},
                },
            },
            "VariableID:2": {
                "id": "VariableID:2",
                "name": "Button/Background",
                "variableCollectionId": "VariableCollectionId:1",
                "resolvedType": "COLOR",
                "scopes": ["ALL_FILLS"],
                "valuesByMode": {
                    "1:0": {"type": "VARIABLE_ALIAS", "id": "VariableID:1"},
                    "1:1": {"type": "VARIABLE_ALIAS", "id": "VariableID:1"},
                },
            },
            "VariableID:3": {
                "id": "VariableID:3",
                "name": "Radius/Medium",
                "variableCollectionId": "VariableCollectionId:2",
                "resolvedType": "FLOAT",
                "scopes": ["CORNER_RADIUS"],
                "valuesByMode": {"2:0": 8},
            },
        },
    },
}


@pytest.fixture
def sample_css() -> str:
    """CSS with a light :root block and a .dark override."""
    return SAMPLE_CSS


@pytest.fixture
def sample_compact() -> dict:
    """Compact export covering colors, sizes, weights and constructors."""
    return json.loads(json.dumps(SAMPLE_COMPACT))


@pytest.fixture
def sample_native() -> dict:
    """REST variables response with a two-mode and a one-mode collection."""
    return json.loads(json.dumps(SAMPLE_NATIVE))


@pytest.fixture
def registry() -> TokenTypeRegistry:
    """The shared registry with every built-in handler."""
    return get_default_registry()


# ---------------------------------------------------------------------------
# Hand-built themes
# ---------------------------------------------------------------------------


def _theme(*collections, name: str = "Test Theme") -> ThemeFile:
    return ThemeFile(name=name, collections=tuple(collections), meta=ThemeMeta())


def _single_mode_theme(entries: dict[str, Token], collection: str = "tokens") -> ThemeFile:
    return _theme(
        build_collection(
            name=collection,
            entries_by_mode={"default": [(tuple(p.split(".")), t) for p, t in entries.items()]},
            default_mode="default",
        )
    )


def ref(target: str) -> Token:
    """A color token that points at another path."""
    return Token(type="color", value=Reference(target))


@pytest.fixture
def make_theme():
    """Build a one-collection, one-mode theme from {dotted path: token}."""
    return _single_mode_theme


@pytest.fixture
def ref_token():
    """Build a reference token to a dotted path."""
    return ref


@pytest.fixture
def small_theme() -> ThemeFile:
    """Two-mode theme with a reference and a dimension."""
    primary = Token(type="color", value=Color(0.2196, 0.502, 0.9647, 1.0), description="Brand")
    primary_dark = Token(type="color", value=Color(0.298, 0.553, 0.969, 1.0), description="Brand")
    return _theme(
        build_collection(
            name="tokens",
            entries_by_mode={
                "light": [
                    (("color", "primary"), primary),
                    (("color", "link"), ref("color.primary")),
                    (("spacing", "md"), Token(type="dimension", value=Dimension(16, "px"))),
                ],
                "dark": [
                    (("color", "primary"), primary_dark),
                    (("color", "link"), ref("color.primary")),
                    (("spacing", "md"), Token(type="dimension", value=Dimension(16, "px"))),
                ],
            },
            default_mode="light",
        )
    )


@pytest.fixture
def crossed_modes_theme() -> ThemeFile:
    """a -> b in light and b -> a in dark. Neither mode loops on its own."""
    blue = Token(type="color", value=Color(0.0, 0.0, 1.0, 1.0))
    return _theme(
        build_collection(
            name="tokens",
            entries_by_mode={
                "light": [(("a",), ref("b")), (("b",), ref("c")), (("c",), blue)],
                "dark": [(("a",), blue), (("b",), ref("a")), (("c",), blue)],
            },
            default_mode="light",
        )
    )

@pytest.fixture
def write_file(tmp_path: Path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
