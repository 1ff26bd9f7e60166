"""Tests for the Figma variables (REST and MCP) parser."""

import pytest

from token_normalizer.adapters.figma_native import (
    FigmaNativeAdapter,
    NativeOptions,
    is_alias,
    parse_native,
    variable_path,
)
from token_normalizer.errors import InvalidSourceError
from token_normalizer.references import resolve_value
from token_normalizer.schema.tokens import Color, Dimension, Reference


class TestHelpers:
    def test_variable_path(self):
        assert variable_path("Colors/Primary 500") == ("colors", "primary-500")

    def test_is_alias(self):
        assert is_alias({"type": "VARIABLE_ALIAS", "id": "VariableID:1"})
        assert not is_alias({"r": 0, "g": 0, "b": 0})


class TestValidation:
    """Tests for validate()."""

    def test_valid_rest_response(self, sample_native):
        assert FigmaNativeAdapter().validate(sample_native).valid

    def test_valid_bare_meta(self, sample_native):
        assert FigmaNativeAdapter().validate(sample_native["meta"]).valid

    def test_empty(self):
        result = FigmaNativeAdapter().validate({})
        assert not result.valid

    def test_error_flag_and_missing_sections(self):
        result = FigmaNativeAdapter().validate({"error": True, "meta": {}})
        assert result.errors == [
            "Variables response contains error",
            "Variables response missing variables data",
            "Variables response missing collections data",
        ]

    def test_parse_raises(self):
        with pytest.raises(InvalidSourceError):
            parse_native({"meta": {"variables": {}}})


class TestParsing:
    """Tests for parse()."""

    def test_collections_and_modes(self, sample_native):
        theme = parse_native(sample_native)
        colors = theme.get_collection("Colors")
        assert colors.modes == ("Light", "Dark")
        assert colors.default_mode == "Light"
        assert colors.description == "Figma collection: Colors"
        assert theme.get_collection("Spacing").modes == ("Default",)

    def test_color_values_per_mode(self, sample_native):
        colors = parse_native(sample_native).get_collection("Colors")
        light = colors.mode_tokens("Light").get("brand.primary")
        dark = colors.mode_tokens("Dark").get("brand.primary")
        assert light.value == Color(0.2196, 0.502, 0.9647, 1.0)
        assert dark.value.r == pytest.approx(0.298)
        assert light.description == "Main brand color"

    def test_alias_becomes_reference(self, sample_native):
        theme = parse_native(sample_native)
        button = theme.get_collection("Colors").mode_tokens().get("button.background")
        assert button.type == "color"
        assert button.value == Reference("brand.primary")
        assert resolve_value(theme, button) == Color(0.2196, 0.502, 0.9647, 1.0)

    def test_scoped_float_is_dimension(self, sample_native):
        spacing = parse_native(sample_native).get_collection("Spacing").mode_tokens()
        radius = spacing.get("radius.medium")
        assert radius.type == "dimension"
        assert radius.value == Dimension(8.0, "px")

    def test_figma_extensions(self, sample_native):
        token = parse_native(sample_native).collections[0].mode_tokens().get("brand.primary")
        figma = token.extensions["com.figma"]
        assert figma["variableId"] == "VariableID:1"
        assert figma["scopes"] == ["ALL_FILLS"]
        assert figma["hiddenFromPublishing"] is False

    def test_unknown_alias_target_keeps_id(self, sample_native):
        variables = sample_native["meta"]["variables"]
        variables["VariableID:2"]["valuesByMode"]["1:0"] = {
            "type": "VARIABLE_ALIAS",
            "id": "VariableID:404",
        }
        theme = parse_native(sample_native)
        token = theme.get_collection("Colors").mode_tokens().get("button.background")
        assert token.value == Reference("VariableID:404")

    def test_meta(self, sample_native):
        theme = parse_native(sample_native, {"figma_file_key": "abc123"})
        assert theme.name == "Untitled"
        assert theme.meta.source == "figma-api"
        assert theme.meta.figma_file_key == "abc123"

    def test_mcp_file_data(self, sample_native):
        source = dict(sample_native["meta"], name="Design System", lastModified="2024-05-01")
        theme = parse_native(source)
        assert theme.name == "Design System"
        assert theme.meta.source == "figma-mcp"
        assert theme.meta.last_synced == "2024-05-01"

    def test_hidden_collections(self, sample_native):
        collections = sample_native["meta"]["variableCollections"]
        collections["VariableCollectionId:2"]["hiddenFromPublishing"] = True

        theme = parse_native(sample_native)
        assert theme.get_collection("Spacing") is None

        theme = parse_native(sample_native, NativeOptions(include_hidden=True))
        assert theme.get_collection("Spacing") is not None

    def test_collection_without_variables_is_dropped(self, sample_native):
        sample_native["meta"]["variableCollections"]["VariableCollectionId:3"] = {
            "id": "VariableCollectionId:3",
            "name": "Empty",
            "modes": [{"modeId": "3:0", "name": "Default"}],
            "defaultModeId": "3:0",
        }
        theme = parse_native(sample_native)
        assert theme.get_collection("Empty") is None

    def test_unparseable_value_degrades_to_string(self, sample_native):
        variable = sample_native["meta"]["variables"]["VariableID:3"]
        variable["valuesByMode"]["2:0"] = "wide"
        token = parse_native(sample_native).get_collection("Spacing").mode_tokens().get(
            "radius.medium"
        )
        assert token.type == "string"
        assert token.value == "wide"

    def test_idempotent(self, sample_native):
        assert parse_native(sample_native) == parse_native(sample_native)


class TestMalformedEntries:
    """Entries missing required fields are skipped instead of failing the parse."""

    def test_variable_without_name(self, sample_native):
        del sample_native["meta"]["variables"]["VariableID:2"]["name"]
        group = parse_native(sample_native).get_collection("Colors").mode_tokens()
        assert group.get("button.background") is None
        assert group.get("brand.primary") is not None

    def test_alias_to_nameless_variable_keeps_id(self, sample_native):
        sample_native["meta"]["variables"]["VariableID:1"]["name"] = None
        token = parse_native(sample_native).get_collection("Colors").mode_tokens().get(
            "button.background"
        )
        assert token.value == Reference("VariableID:1")

    def test_collection_without_name(self, sample_native):
        del sample_native["meta"]["variableCollections"]["VariableCollectionId:2"]["name"]
        theme = parse_native(sample_native)
        assert [c.name for c in theme.collections] == ["Colors"]

    def test_collection_without_usable_modes(self, sample_native):
        collection = sample_native["meta"]["variableCollections"]["VariableCollectionId:2"]
        collection["modes"] = [{"name": "Default"}, {"modeId": "2:1"}]
        theme = parse_native(sample_native)
        assert theme.get_collection("Spacing") is None

    def test_mode_without_id_is_dropped(self, sample_native):
        collection = sample_native["meta"]["variableCollections"]["VariableCollectionId:1"]
        collection["modes"][1] = {"name": "Dark"}
        assert parse_native(sample_native).get_collection("Colors").modes == ("Light",)

    def test_values_by_mode_not_an_object(self, sample_native):
        sample_native["meta"]["variables"]["VariableID:3"]["valuesByMode"] = [8]
        spacing = parse_native(sample_native).get_collection("Spacing")
        assert spacing.mode_tokens().get("radius.medium") is None
