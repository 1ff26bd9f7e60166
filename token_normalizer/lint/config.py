"""Lint configuration: presets, config files and merging.

A config selects rules and their severities, and drops messages by token
path glob or by collection:

    {
        "extends": "recommended",
        "rules": {"missing-description": false, "deep-nesting": "error"},
        "ignorePatterns": ["internal.*"],
        "ignoreCollections": ["Deprecated"]
    }

`extends` names presets or other config files (relative to the file that
extends them). Files are found by walking up from the working directory.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, validator

from ..errors import ConfigurationError
from ..normalizer_logging import LogCategory, get_category_logger
from .base import Severity

logger = get_category_logger(LogCategory.LINT)

CONFIG_FILES = (
    ".tokenlintrc.json",
    ".tokenlintrc.yaml",
    ".tokenlintrc.yml",
    "tokenlint.config.json",
)

RuleSetting = bool | str


class LintConfig(BaseModel):
    """Lint configuration model with validation."""

    extends: list[str] = Field(default_factory=list)
    rules: dict[str, RuleSetting] = Field(default_factory=dict)
    ignore_patterns: list[str] = Field(default_factory=list, alias="ignorePatterns")
    ignore_collections: list[str] = Field(default_factory=list, alias="ignoreCollections")

    class Config:
        populate_by_name = True
        extra = "forbid"

    @validator("extends", pre=True)
    def validate_extends(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @validator("rules")
    def validate_rules(cls, v: dict[str, Any]) -> dict[str, RuleSetting]:
        severities = {s.value for s in Severity}
        for rule_id, setting in v.items():
            if isinstance(setting, str) and setting not in severities:
                raise ValueError(
                    f'Rule "{rule_id}": severity must be one of {", ".join(sorted(severities))}'
                )
        return v

    def is_rule_enabled(self, rule_id: str) -> bool:
        return self.rules.get(rule_id, True) is not False

    def rule_severity(self, rule_id: str) -> Severity | None:
        """Configured severity override for a rule, if any."""
        setting = self.rules.get(rule_id)
        return Severity(setting) if isinstance(setting, str) else None


_ALL_ERRORS = {
    "invalid-token-name": "error",
    "invalid-color-value": "error",
    "invalid-dimension-value": "error",
    "invalid-duration-value": "error",
    "invalid-font-weight": "error",
    "invalid-typography-value": "error",
    "invalid-shadow-value": "error",
    "invalid-gradient-value": "error",
    "invalid-border-value": "error",
    "invalid-cubic-bezier": "error",
    "broken-reference": "error",
    "circular-reference": "error",
    "missing-default-mode": "error",
}

PRESETS: dict[str, dict[str, Any]] = {
    "recommended": {
        "rules": {
            **_ALL_ERRORS,
            "inconsistent-naming": "warning",
            "deep-nesting": "warning",
            "empty-collection": "warning",
            "missing-description": "info",
            "duplicate-values": "info",
            "mode-consistency": "warning",
            "hidden-from-publishing": "info",
        }
    },
    "strict": {
        "rules": {
            **_ALL_ERRORS,
            "inconsistent-naming": "error",
            "deep-nesting": "error",
            "empty-collection": "error",
            "missing-description": "warning",
            "duplicate-values": "warning",
            "mode-consistency": "error",
            "hidden-from-publishing": "warning",
        }
    },
    "minimal": {
        "rules": {
            **_ALL_ERRORS,
            "inconsistent-naming": False,
            "deep-nesting": False,
            "empty-collection": False,
            "missing-description": False,
            "duplicate-values": False,
            "mode-consistency": False,
            "hidden-from-publishing": False,
        }
    },
}


def list_presets() -> list[str]:
    return list(PRESETS)


def get_preset(name: str) -> LintConfig:
    """Build the config of a named preset.

    Raises:
        ConfigurationError: If no preset has that name.
    """
    if name not in PRESETS:
        raise ConfigurationError(
            f"Unknown lint preset: {name}",
            suggestion=f"Available presets: {', '.join(PRESETS)}",
        )
    return LintConfig(**PRESETS[name])


def parse_config(data: Any, config_file: Path | None = None) -> LintConfig:
    """Validate raw config data into a LintConfig.

    Raises:
        ConfigurationError: If the data does not match the schema.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Lint configuration must be an object",
            config_file=str(config_file) if config_file else None,
        )
    try:
        return LintConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid lint configuration: {e}",
            config_file=str(config_file) if config_file else None,
        ) from e


def merge_configs(base: LintConfig, override: LintConfig) -> LintConfig:
    """Combine two configs; override's rule settings win, ignore lists add up."""
    return LintConfig(
        extends=[],
        rules={**base.rules, **override.rules},
        ignore_patterns=base.ignore_patterns + override.ignore_patterns,
        ignore_collections=base.ignore_collections + override.ignore_collections,
    )


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Walk up from start_dir looking for a lint config file.

    Args:
        start_dir: Directory to start from; the working directory by default.

    Returns:
        Path of the first config file found, or None.
    """
    current = Path(start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for filename in CONFIG_FILES:
            candidate = directory / filename
            if candidate.is_file():
                logger.debug("Found lint config %s", candidate)
                return candidate
    return None


def load_config_file(path: Path) -> LintConfig:
    """Read a JSON or YAML config file without resolving `extends`.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(
            f"Lint config file not found: {path}",
            config_file=str(path),
            suggestion="Check the path given to --config or in extends",
        )

    try:
        content = path.read_text(encoding="utf-8")
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Cannot read lint config: {e}", config_file=str(path)
        ) from e
    return parse_config(data, path)


def resolve_config(
    config: LintConfig,
    config_dir: Path | None = None,
    _seen: frozenset[Path] = frozenset(),
) -> LintConfig:
    """Expand `extends` into a flat config.

    Presets and files are applied in order, then the config itself on top.

    Args:
        config: Config to resolve.
        config_dir: Directory relative `extends` paths are resolved from.

    Raises:
        ConfigurationError: If an extended file is missing or invalid, or the
            extends chain loops.
    """
    config_dir = Path(config_dir or Path.cwd())
    resolved = LintConfig()

    for name in config.extends:
        if name in PRESETS:
            extended = get_preset(name)
        else:
            path = Path(name)
            if not path.is_absolute():
                path = config_dir / path
            path = path.resolve()
            if path in _seen:
                raise ConfigurationError(
                    f"Lint config extends itself: {path}", config_file=str(path)
                )
            extended = resolve_config(load_config_file(path), path.parent, _seen | {path})
        resolved = merge_configs(resolved, extended)

    return merge_configs(resolved, config)


def load_config(
    config_path: Path | None = None, start_dir: Path | None = None
) -> LintConfig:
    """Load the effective lint configuration.

    Uses config_path when given, otherwise the nearest config file above
    start_dir; falls back to the recommended preset when there is none.
    """
    path = Path(config_path) if config_path else find_config_file(start_dir)
    if path is None:
        logger.debug("No lint config found, using the recommended preset")
        return get_preset("recommended")
    path = path.resolve()
    return resolve_config(load_config_file(path), path.parent, frozenset({path}))
