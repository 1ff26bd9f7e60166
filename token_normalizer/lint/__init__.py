"""Token linting: rules, engine and configuration."""

from .base import LintMessage, LintResult, LintRule, LintRuleContext, Severity
from .config import (
    PRESETS,
    LintConfig,
    find_config_file,
    get_preset,
    list_presets,
    load_config,
    load_config_file,
    merge_configs,
    resolve_config,
)
from .engine import TokenLinter, create_linter, lint_theme
from .rules import builtin_rules

__all__ = [
    "PRESETS",
    "LintConfig",
    "LintMessage",
    "LintResult",
    "LintRule",
    "LintRuleContext",
    "Severity",
    "TokenLinter",
    "builtin_rules",
    "create_linter",
    "find_config_file",
    "get_preset",
    "lint_theme",
    "list_presets",
    "load_config",
    "load_config_file",
    "merge_configs",
    "resolve_config",
]
