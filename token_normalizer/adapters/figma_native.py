"""Parser for Figma variables as returned by the REST API or the MCP server.

Accepted shapes:

- REST `GET /v1/files/:key/variables/local` response: `{"meta": {...}}`
- The bare `meta` object: `{"variables": {...}, "variableCollections": {...}}`
- MCP file data, the same plus `name` and `lastModified`

Every value of every mode is classified with the registry's native
detection and converted with the matching handler. Aliases become
references to the target variable's dotted, normalized name.
"""

from dataclasses import dataclass
from typing import Any

from ..normalizer_logging import LogCategory, get_category_logger
from ..registry.base import NativeContext
from ..schema.tokens import Reference, ThemeFile, ThemeMeta, Token, TokenCollection
from ..tree import build_collection
from .base import InputAdapter, ValidationResult
from .figma_compact import normalize_segment

logger = get_category_logger(LogCategory.PARSER)


@dataclass
class NativeOptions:
    """Options for the native parser."""

    theme_name: str | None = None  # Defaults to the file name, then "Untitled"
    figma_file_key: str | None = None
    include_hidden: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "NativeOptions":
        data = data or {}
        return cls(
            theme_name=data.get("theme_name", data.get("fileName")),
            figma_file_key=data.get("figma_file_key", data.get("fileKey")),
            include_hidden=data.get("include_hidden", False),
        )


def _meta(source: dict[str, Any]) -> dict[str, Any]:
    meta = source.get("meta")
    return meta if isinstance(meta, dict) else source


def has_name(item: Any, *keys: str) -> bool:
    """Whether item is an object with a string "name" and every given key."""
    return (
        isinstance(item, dict)
        and isinstance(item.get("name"), str)
        and all(key in item for key in keys)
    )


def is_alias(value: Any) -> bool:
    return isinstance(value, dict) and value.get("type") == "VARIABLE_ALIAS"


def variable_path(name: str) -> tuple[str, ...]:
    """Split "Colors/Primary 500" into ("colors", "primary-500")."""
    return tuple(normalize_segment(segment) for segment in name.split("/"))


class FigmaNativeAdapter(InputAdapter):
    """Parses Figma variable collections into a ThemeFile."""

    @property
    def source_name(self) -> str:
        return "figma-native"

    def validate(self, source: Any) -> ValidationResult:
        errors: list[str] = []
        if not isinstance(source, dict) or not source:
            errors.append("A Figma variables response or MCP file data must be provided")
            return ValidationResult.from_errors(errors)

        if source.get("error"):
            errors.append("Variables response contains error")
        meta = _meta(source)
        if not isinstance(meta.get("variables"), dict):
            errors.append("Variables response missing variables data")
        if not isinstance(meta.get("variableCollections"), dict):
            errors.append("Variables response missing collections data")
        return ValidationResult.from_errors(errors)

    def create_reference(
        self, alias: dict[str, Any], variables_by_id: dict[str, dict[str, Any]]
    ) -> Reference:
        """Reference to an aliased variable, or to its raw id when unknown."""
        target = variables_by_id.get(alias.get("id", ""))
        if target is None:
            logger.debug("Alias %s points at an unknown variable", alias.get("id"))
            return Reference(str(alias.get("id")))
        return Reference(".".join(variable_path(target["name"])))

    def create_token(
        self,
        variable: dict[str, Any],
        value: Any,
        variables_by_id: dict[str, dict[str, Any]],
    ) -> Token | None:
        """Build one token for one mode's value; None when it cannot be parsed."""
        scopes = tuple(variable.get("scopes") or ())
        context = NativeContext(
            resolved_type=variable.get("resolvedType", "STRING"),
            scopes=scopes,
            name=variable.get("name", ""),
        )
        type_tag = self.registry.detect_native(context)

        figma: dict[str, Any] = {
            "variableId": variable.get("id"),
            "scopes": list(scopes),
            "hiddenFromPublishing": variable.get("hiddenFromPublishing", False),
        }
        code_syntax = variable.get("codeSyntax") or {}
        if code_syntax:
            figma["codeSyntax"] = {
                "web": code_syntax.get("WEB"),
                "android": code_syntax.get("ANDROID"),
                "ios": code_syntax.get("iOS"),
            }

        if is_alias(value):
            parsed: Any = self.create_reference(value, variables_by_id)
        else:
            handler = self.registry.get(type_tag)
            parsed = handler.parse_native(value, scopes)
            if parsed is None:
                if handler.is_composite or value is None:
                    logger.debug(
                        "Skipping unparseable %s variable %s",
                        type_tag,
                        variable.get("name"),
                        extra={"token_path": variable.get("name")},
                    )
                    return None
                type_tag, parsed = "string", str(value)

        return Token(
            type=type_tag,
            value=parsed,
            description=variable.get("description") or None,
            extensions={"com.figma": figma},
        )

    def parse_collection(
        self,
        collection: dict[str, Any],
        variables: list[dict[str, Any]],
        variables_by_id: dict[str, dict[str, Any]],
    ) -> TokenCollection:
        """Build one collection with a token tree per mode."""
        modes = [m for m in collection.get("modes") or () if has_name(m, "modeId")]
        mode_names = [mode["name"] for mode in modes]
        default_mode = next(
            (m["name"] for m in modes if m["modeId"] == collection.get("defaultModeId")),
            mode_names[0] if mode_names else "Default",
        )

        entries_by_mode: dict[str, list] = {name: [] for name in mode_names}
        for mode in modes:
            for variable in variables:
                values = variable.get("valuesByMode")
                if not isinstance(values, dict) or mode["modeId"] not in values:
                    continue
                token = self.create_token(variable, values[mode["modeId"]], variables_by_id)
                if token is not None:
                    entries_by_mode[mode["name"]].append(
                        (variable_path(variable["name"]), token)
                    )

        return build_collection(
            name=collection["name"],
            entries_by_mode=entries_by_mode,
            default_mode=default_mode,
            description=f"Figma collection: {collection['name']}",
        )

    def _parse(self, source: dict[str, Any], options: Any) -> ThemeFile:
        if not isinstance(options, NativeOptions):
            options = NativeOptions.from_dict(options)

        meta = _meta(source)
        variables: dict[str, dict[str, Any]] = meta["variables"]
        collections: dict[str, dict[str, Any]] = meta["variableCollections"]

        variables_by_id: dict[str, dict[str, Any]] = {}
        for key, variable in variables.items():
            if not has_name(variable):
                logger.debug("Skipping variable %s without a name", key)
                continue
            variables_by_id[variable.get("id", key)] = variable

        by_collection: dict[str, list[dict[str, Any]]] = {}
        for variable in variables_by_id.values():
            by_collection.setdefault(variable.get("variableCollectionId", ""), []).append(
                variable
            )

        parsed = []
        for key, collection in collections.items():
            if not has_name(collection):
                logger.debug("Skipping collection %s without a name", key)
                continue
            if not any(has_name(m, "modeId") for m in collection.get("modes") or ()):
                logger.debug("Skipping collection %s without modes", collection["name"])
                continue
            collection_vars = by_collection.get(collection.get("id", key), [])
            if not collection_vars:
                continue
            if collection.get("hiddenFromPublishing") and not options.include_hidden:
                continue
            parsed.append(self.parse_collection(collection, collection_vars, variables_by_id))

        is_mcp = "meta" not in source and "name" in source
        return ThemeFile(
            name=options.theme_name or source.get("name") or "Untitled",
            collections=tuple(parsed),
            meta=ThemeMeta(
                source="figma-mcp" if is_mcp else "figma-api",
                figma_file_key=options.figma_file_key,
                last_synced=source.get("lastModified"),
            ),
        )


def parse_native(
    source: dict[str, Any], options: NativeOptions | dict[str, Any] | None = None
) -> ThemeFile:
    """Parse Figma variables with the default registry."""
    return FigmaNativeAdapter().parse(source, options)
