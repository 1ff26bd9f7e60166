"""Lint engine.

TokenLinter runs every enabled rule over a theme and collects the messages
into one LintResult. A rule that raises does not stop the run: its
exception becomes a single error message for that rule.
"""

from fnmatch import fnmatchcase

from ..normalizer_logging import LogCategory, get_category_logger
from ..registry import TokenTypeRegistry, get_default_registry
from ..schema.tokens import ThemeFile
from .base import LintMessage, LintResult, LintRule, LintRuleContext, Severity
from .config import LintConfig
from .rules import builtin_rules

logger = get_category_logger(LogCategory.LINT)


class TokenLinter:
    """Runs lint rules over themes.

    Rules are keyed by id; the config decides which run, at what severity,
    and which messages are dropped afterwards.
    """

    def __init__(
        self,
        rules: list[LintRule] | None = None,
        config: LintConfig | None = None,
        registry: TokenTypeRegistry | None = None,
    ):
        """Initialize the linter.

        Args:
            rules: Rules to register; the built-in rules when omitted.
            config: Lint configuration; every rule at its default severity
                when omitted.
            registry: Registry handed to rules through their context.
        """
        self.config = config or LintConfig()
        self.registry = registry or get_default_registry()
        self._rules: dict[str, LintRule] = {}
        for rule in builtin_rules() if rules is None else rules:
            self.register(rule)

    def register(self, rule: LintRule) -> None:
        """Register a rule, replacing any rule with the same id."""
        if rule.rule_id in self._rules:
            logger.debug("Replacing lint rule %s", rule.rule_id)
        self._rules[rule.rule_id] = rule

    def unregister(self, rule_id: str) -> None:
        self._rules.pop(rule_id, None)

    def get_rule(self, rule_id: str) -> LintRule | None:
        return self._rules.get(rule_id)

    @property
    def rules(self) -> list[LintRule]:
        """Registered rules in registration order."""
        return list(self._rules.values())

    def lint(self, theme: ThemeFile) -> LintResult:
        """Run every enabled rule over a theme.

        Args:
            theme: Theme to check; never modified.

        Returns:
            LintResult with messages sorted errors first, then warnings,
            then info, keeping report order within a severity.
        """
        messages: list[LintMessage] = []
        for rule in self._rules.values():
            if not self.config.is_rule_enabled(rule.rule_id):
                continue
            messages.extend(self._execute_rule(rule, theme))

        messages = [m for m in messages if not self._is_ignored(m)]
        messages.sort(key=lambda m: m.severity.rank)
        return LintResult(messages=messages)

    def _execute_rule(self, rule: LintRule, theme: ThemeFile) -> list[LintMessage]:
        """Run one rule with error handling and severity override."""
        override = self.config.rule_severity(rule.rule_id)
        context = LintRuleContext(
            rule_id=rule.rule_id,
            severity=override or rule.default_severity,
            registry=self.registry,
        )

        try:
            rule.check(theme, context)
        except Exception as e:
            logger.warning(
                "Lint rule %s failed: %s", rule.rule_id, e, extra={"rule_id": rule.rule_id}
            )
            return [
                LintMessage(
                    rule=rule.rule_id,
                    severity=Severity.ERROR,
                    message=f'Rule "{rule.rule_id}" threw an error: {e}',
                )
            ]

        if override is None:
            return context.messages
        return [
            LintMessage(
                rule=m.rule,
                severity=override,
                message=m.message,
                path=m.path,
                collection=m.collection,
                suggestion=m.suggestion,
            )
            for m in context.messages
        ]

    def _is_ignored(self, message: LintMessage) -> bool:
        if message.path is not None and any(
            fnmatchcase(message.path, pattern) for pattern in self.config.ignore_patterns
        ):
            return True
        if message.collection is not None:
            name = message.collection.split("/", 1)[0]
            return name in self.config.ignore_collections
        return False


def create_linter(
    config: LintConfig | None = None,
    registry: TokenTypeRegistry | None = None,
) -> TokenLinter:
    """Create a linter with the built-in rules."""
    return TokenLinter(config=config, registry=registry)


def lint_theme(theme: ThemeFile, config: LintConfig | None = None) -> LintResult:
    """Lint a theme with the built-in rules."""
    return create_linter(config).lint(theme)
