"""Tests for the CSS custom property parser."""

import pytest

from token_normalizer.adapters.css_vars import (
    CSSOptions,
    CSSVariablesAdapter,
    detect_css_type,
    extract_variables,
    parse_css,
    variable_to_path,
)
from token_normalizer.errors import InvalidSourceError, SourceNotFoundError
from token_normalizer.schema.tokens import Color, Dimension, Duration, Reference


class TestScenario:
    """The light/dark :root example end to end."""

    def test_light_and_dark(self, sample_css):
        theme = parse_css(sample_css)
        assert len(theme.collections) == 1

        collection = theme.collections[0]
        assert list(collection.modes) == ["default", "dark"]
        assert collection.default_mode == "default"

        primary = collection.mode_tokens().get("color.primary")
        assert primary.type == "color"
        assert primary.value.r == pytest.approx(0.2196, abs=0.001)
        assert primary.value.g == pytest.approx(0.5020, abs=0.001)
        assert primary.value.b == pytest.approx(0.9647, abs=0.001)
        assert primary.value.a == 1.0

        spacing = collection.mode_tokens().get("spacing.4")
        assert spacing.type == "dimension"
        assert spacing.value == Dimension(16.0, "px")

        dark = collection.mode_tokens("dark")
        assert dark.get("color.primary").value.r == pytest.approx(0x4C / 255)
        assert dark.get("spacing.4") is None

    def test_theme_metadata(self, sample_css):
        theme = parse_css(sample_css)
        assert theme.name == "CSS Theme"
        assert theme.meta.source == "css"
        assert theme.collections[0].name == "tokens"

    def test_idempotent(self, sample_css):
        """Parsing the same CSS twice yields equal trees."""
        assert parse_css(sample_css) == parse_css(sample_css)


class TestExtraction:
    """Tests for finding declarations in theme blocks."""

    def test_contexts_and_lines(self):
        css = (
            ":root {\n"
            "  --a: 1px;\n"
            "}\n"
            "@theme {\n"
            "  --b: 2px;\n"
            "}\n"
            "[data-theme=\"dark\"] { --c: 3px; }\n"
        )
        variables = extract_variables(css)
        assert [(v.name, v.context, v.line) for v in variables] == [
            ("a", ":root", 2),
            ("b", "@theme", 5),
            ("c", '[data-theme="dark"]', 7),
        ]
        assert [v.scheme for v in variables] == ["light", "light", "dark"]

    def test_comments_are_ignored(self):
        css = ":root { /* --hidden: 1px; */ --shown: 2px; }"
        assert [v.name for v in extract_variables(css)] == ["shown"]

    def test_other_selectors_are_ignored(self):
        css = ".button { --local: 1px; } :root { --global: 2px; }"
        assert [v.name for v in extract_variables(css)] == ["global"]

    def test_nested_at_rules_are_transparent(self):
        css = "@layer base { :root { --a: 1px; } } @supports (display: grid) { .dark { --a: 2px; } }"
        variables = extract_variables(css)
        assert [(v.name, v.scheme) for v in variables] == [("a", "light"), ("a", "dark")]

    def test_dark_media_query(self):
        css = "@media (prefers-color-scheme: dark) { :root { --bg: #000; } }"
        variables = extract_variables(css)
        assert len(variables) == 1
        assert variables[0].scheme == "dark"

    def test_compound_dark_selector(self):
        css = ":root.dark { --bg: #000; } .darkish { --bg: #111; }"
        variables = extract_variables(css)
        assert [v.value for v in variables] == ["#000"]

    def test_block_switches(self):
        css = ":root { --a: 1px; } @theme { --b: 2px; } .dark { --a: 3px; }"
        options = CSSOptions(parse_theme_block=False, parse_dark_mode=False)
        assert [v.name for v in extract_variables(css, options)] == ["a"]

    def test_value_without_trailing_semicolon(self):
        variables = extract_variables(":root { --a: 1px; --b: 2px }")
        assert [(v.name, v.value) for v in variables] == [("a", "1px"), ("b", "2px")]


class TestPathsAndTypes:
    """Tests for name-to-path conversion and value classification."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("color-primary-500", ("color", "primary", "500")),
            ("font-family-sans", ("fontFamily", "sans")),
            ("line-height-tight", ("lineHeight", "tight")),
            ("--spacing-4", ("spacing", "4")),
        ],
    )
    def test_variable_to_path(self, name, expected):
        assert variable_to_path(name) == expected

    def test_strip_prefix(self):
        assert variable_to_path("ion-color-primary", "ion-") == ("color", "primary")
        assert variable_to_path("ion-color-primary", "--ion-") == ("color", "primary")

    @pytest.mark.parametrize(
        "name,value,expected",
        [
            ("color-primary", "#3880f6", "color"),
            ("color-overlay", "rgb(0 0 0 / 50%)", "color"),
            ("spacing-4", "16px", "dimension"),
            ("duration-fast", "150ms", "duration"),
            ("font-sans", "Inter, system-ui, sans-serif", "fontFamily"),
            ("font-display", "'Playfair Display'", "fontFamily"),
            ("font-weight-bold", "700", "fontWeight"),
            ("weight-heading", "bold", "fontWeight"),
            ("z-index-modal", "700", "number"),
            ("opacity-50", "0.5", "number"),
            ("shadow-sm", "0 1px 2px rgba(0, 0, 0, 0.05)", "string"),
            ("width-prose", "65ch", "string"),
        ],
    )
    def test_detect_css_type(self, name, value, expected):
        assert detect_css_type(name, value) == expected


class TestReferences:
    """Tests for var() references."""

    def test_var_becomes_reference_typed_from_target(self):
        css = ":root { --blue: #3880f6; --color-link: var(--blue); --gap: var(--missing); }"
        group = parse_css(css).collections[0].mode_tokens()
        link = group.get("color.link")
        assert link.value == Reference("blue")
        assert link.type == "color"
        assert group.get("gap").type == "string"

    def test_reference_chain_type(self):
        css = ":root { --a: 4px; --b: var(--a); --c: var(--b); }"
        group = parse_css(css).collections[0].mode_tokens()
        assert group.get("c").type == "dimension"
        assert group.get("c").value == Reference("b")

    def test_reference_path_strips_prefix(self):
        css = ":root { --ds-blue: #00f; --ds-link: var(--ds-blue); }"
        group = parse_css(css, {"strip_prefix": "ds-"}).collections[0].mode_tokens()
        assert group.get("link").value == Reference("blue")


class TestOptionsAndSources:
    """Tests for options, dict sources and validation."""

    def test_options_from_camel_case(self):
        options = CSSOptions.from_dict(
            {"collectionName": "theme", "defaultMode": "light", "stripPrefix": "ion-"}
        )
        assert options.collection_name == "theme"
        assert options.default_mode == "light"
        assert options.strip_prefix == "ion-"

    def test_dict_source(self):
        theme = parse_css({"css": ":root { --a: 1ms; }", "fileName": "tokens"})
        assert theme.name == "tokens"
        assert theme.collections[0].mode_tokens().get("a").value == Duration(1.0, "ms")

    def test_light_only_has_one_mode(self):
        theme = parse_css(":root { --a: 1px; }", {"default_mode": "light"})
        assert theme.collections[0].modes == ("light",)

    def test_unparseable_color_keyword_is_string(self):
        group = parse_css(":root { --fg: currentColor; }").collections[0].mode_tokens()
        assert group.get("fg").type == "string"
        assert group.get("fg").value == "currentColor"

    def test_malformed_color_function_is_string(self):
        group = parse_css(
            ":root { --bad: rgb(1.2.3, 0, 0); --fade: linear-gradient(90deg, hsl(1.2.3, 50%, 50%) 0%, #fff 100%); --ok: #fff; }"
        ).collections[0].mode_tokens()
        assert group.get("bad").type == "string"
        assert group.get("bad").value == "rgb(1.2.3, 0, 0)"
        assert group.get("fade") is not None
        assert group.get("ok").value == Color(1.0, 1.0, 1.0, 1.0)

    def test_named_color(self):
        group = parse_css(":root { --danger: red; }").collections[0].mode_tokens()
        assert group.get("danger").value == Color(1.0, 0.0, 0.0, 1.0)

    @pytest.mark.parametrize(
        "source,message",
        [
            (None, "CSS content is required"),
            ({"fileName": "x"}, "CSS content is required"),
            (42, "CSS content must be a string"),
            ("   ", "CSS content is empty"),
        ],
    )
    def test_validation(self, source, message):
        result = CSSVariablesAdapter().validate(source)
        assert result.errors == [message]

    def test_parse_rejects_empty(self):
        with pytest.raises(InvalidSourceError):
            parse_css("")

    def test_parse_file(self, write_file, sample_css):
        path = write_file("brand.css", sample_css)
        theme = CSSVariablesAdapter().parse_file(path)
        assert theme.name == "brand"
        assert theme.collections[0].modes == ("default", "dark")

    def test_parse_file_missing(self, tmp_path):
        with pytest.raises(SourceNotFoundError):
            CSSVariablesAdapter().parse_file(tmp_path / "missing.css")
