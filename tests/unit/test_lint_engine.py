"""Tests for the lint engine."""

import logging

import pytest

from token_normalizer.lint import (
    LintConfig,
    LintMessage,
    LintResult,
    LintRule,
    Severity,
    TokenLinter,
    create_linter,
    lint_theme,
)
from token_normalizer.lint.base import LintRuleContext
from token_normalizer.schema.tokens import Color, Token

RED = Color(1.0, 0.0, 0.0, 1.0)


class StubRule(LintRule):
    """Reports one message per token at the given severity."""

    def __init__(self, rule_id="stub", severity=Severity.WARNING):
        self._rule_id = rule_id
        self._severity = severity

    @property
    def rule_id(self):
        return self._rule_id

    @property
    def name(self):
        return "Stub"

    @property
    def description(self):
        return "Reports every token"

    @property
    def default_severity(self):
        return self._severity

    def check(self, theme, context):
        for collection in theme.collections:
            for mode, group in collection.tokens.items():
                for path, _ in group.walk():
                    context.report(
                        f"{self.rule_id} saw {'.'.join(path)}",
                        path=".".join(path),
                        collection=f"{collection.name}/{mode}",
                    )


class ExplodingRule(StubRule):
    def check(self, theme, context):
        raise RuntimeError("boom")


@pytest.fixture
def theme(make_theme):
    return make_theme(
        {
            "color.red": Token(type="color", value=RED),
            "internal.secret": Token(type="color", value=RED),
        }
    )


class TestRegistration:
    """Tests for registering and removing rules."""

    def test_builtin_rules_by_default(self):
        linter = TokenLinter()
        assert len(linter.rules) == 20
        assert linter.get_rule("broken-reference") is not None

    def test_register_and_replace(self):
        linter = TokenLinter(rules=[])
        first = StubRule()
        second = StubRule()
        linter.register(first)
        linter.register(second)
        assert linter.rules == [second]

    def test_unregister(self):
        linter = TokenLinter(rules=[StubRule()])
        linter.unregister("stub")
        linter.unregister("never-registered")
        assert linter.rules == []
        assert linter.get_rule("stub") is None


class TestExecution:
    """Tests for lint()."""

    def test_messages_are_collected(self, theme):
        result = TokenLinter(rules=[StubRule()]).lint(theme)
        assert [m.path for m in result.messages] == ["color.red", "internal.secret"]
        assert result.warning_count == 2
        assert result.passed

    def test_failing_rule_becomes_one_error(self, theme):
        linter = TokenLinter(rules=[ExplodingRule("explodes"), StubRule()])
        result = linter.lint(theme)

        errors = result.for_rule("explodes")
        assert len(errors) == 1
        assert errors[0].severity is Severity.ERROR
        assert errors[0].message == 'Rule "explodes" threw an error: boom'
        assert len(result.for_rule("stub")) == 2
        assert not result.passed

    def test_failing_rule_is_logged_with_arguments(self, theme):
        """The warning defers formatting to the logging framework."""
        records = []
        handler = logging.Handler(logging.DEBUG)
        handler.emit = records.append
        logger = logging.getLogger("token_normalizer.lint")
        logger.addHandler(handler)
        try:
            TokenLinter(rules=[ExplodingRule("explodes")]).lint(theme)
        finally:
            logger.removeHandler(handler)

        warning = next(r for r in records if r.levelno == logging.WARNING)
        assert warning.msg == "Lint rule %s failed: %s"
        assert warning.getMessage() == "Lint rule explodes failed: boom"
        assert warning.rule_id == "explodes"

    def test_disabled_rule_does_not_run(self, theme):
        config = LintConfig(rules={"stub": False})
        result = TokenLinter(rules=[StubRule()], config=config).lint(theme)
        assert result.messages == []

    def test_severity_override(self, theme):
        config = LintConfig(rules={"stub": "error"})
        result = TokenLinter(rules=[StubRule()], config=config).lint(theme)
        assert {m.severity for m in result.messages} == {Severity.ERROR}
        assert result.error_count == 2

    def test_sorted_by_severity(self, theme):
        rules = [
            StubRule("info-rule", Severity.INFO),
            StubRule("warning-rule", Severity.WARNING),
            StubRule("error-rule", Severity.ERROR),
        ]
        result = TokenLinter(rules=rules).lint(theme)
        assert [m.rule for m in result.messages] == [
            "error-rule",
            "error-rule",
            "warning-rule",
            "warning-rule",
            "info-rule",
            "info-rule",
        ]

    def test_ignore_patterns(self, theme):
        config = LintConfig(ignorePatterns=["internal.*"])
        result = TokenLinter(rules=[StubRule()], config=config).lint(theme)
        assert [m.path for m in result.messages] == ["color.red"]

    def test_ignore_collections(self, theme):
        config = LintConfig(ignore_collections=["tokens"])
        result = TokenLinter(rules=[StubRule()], config=config).lint(theme)
        assert result.messages == []

    def test_theme_is_not_modified(self, theme):
        before = theme
        TokenLinter().lint(theme)
        assert theme == before

    def test_lint_theme_uses_builtin_rules(self, small_theme):
        result = lint_theme(small_theme)
        assert result.passed
        assert result.for_rule("circular-reference") == []

    def test_create_linter(self, registry):
        linter = create_linter(registry=registry)
        assert linter.registry is registry
        assert len(linter.rules) == 20


class TestResult:
    """Tests for LintResult and LintMessage."""

    def test_counts_and_to_dict(self):
        result = LintResult(
            messages=[
                LintMessage(rule="a", severity=Severity.ERROR, message="x", path="p"),
                LintMessage(rule="b", severity=Severity.INFO, message="y"),
            ]
        )
        data = result.to_dict()
        assert data["errorCount"] == 1
        assert data["warningCount"] == 0
        assert data["infoCount"] == 1
        assert data["passed"] is False
        assert data["messages"][0] == {
            "rule": "a",
            "severity": "error",
            "message": "x",
            "path": "p",
        }
        assert data["messages"][1] == {"rule": "b", "severity": "info", "message": "y"}

    def test_empty_result_passes(self):
        assert LintResult().passed

    def test_context_report_defaults(self):
        context = LintRuleContext(rule_id="r", severity=Severity.WARNING)
        context.report("one")
        context.report("two", severity=Severity.INFO)
        assert [m.severity for m in context.messages] == [Severity.WARNING, Severity.INFO]
        assert context.messages[0].rule == "r"

    def test_severity_rank(self):
        ranked = sorted(Severity, key=lambda s: s.rank)
        assert ranked == [Severity.ERROR, Severity.WARNING, Severity.INFO]
