"""Lint data model and the base rule class.

Lint findings are plain data: a rule reports messages through a
LintRuleContext and the linter collects them. Severity never changes
control flow; a theme with errors still lints to completion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..registry import TokenTypeRegistry, get_default_registry
from ..schema.tokens import ThemeFile


class Severity(Enum):
    """Severity levels for lint messages."""

    ERROR = "error"  # Fails the lint run
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Sort key: errors first."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


@dataclass(frozen=True)
class LintMessage:
    """One finding reported by a rule."""

    rule: str
    severity: Severity
    message: str
    path: str | None = None  # Dot-joined token path
    collection: str | None = None  # "name" or "name/mode"
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.path is not None:
            data["path"] = self.path
        if self.collection is not None:
            data["collection"] = self.collection
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass
class LintResult:
    """Messages of one lint run, errors first."""

    messages: list[LintMessage] = field(default_factory=list)

    def _count(self, severity: Severity) -> int:
        return sum(1 for m in self.messages if m.severity is severity)

    @property
    def error_count(self) -> int:
        return self._count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(Severity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(Severity.INFO)

    @property
    def passed(self) -> bool:
        """Whether the run produced no errors."""
        return self.error_count == 0

    def for_rule(self, rule_id: str) -> list[LintMessage]:
        """Messages reported by one rule."""
        return [m for m in self.messages if m.rule == rule_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "messages": [m.to_dict() for m in self.messages],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "infoCount": self.info_count,
            "passed": self.passed,
        }


class LintRuleContext:
    """Collects the messages of one rule during one run.

    Rules call report(); the severity defaults to the rule's effective
    severity (its default, or the configured override).
    """

    def __init__(
        self,
        rule_id: str,
        severity: Severity,
        registry: TokenTypeRegistry | None = None,
    ):
        self.rule_id = rule_id
        self.severity = severity
        self.registry = registry or get_default_registry()
        self.messages: list[LintMessage] = []

    def report(
        self,
        message: str,
        path: str | None = None,
        collection: str | None = None,
        suggestion: str | None = None,
        severity: Severity | None = None,
    ) -> None:
        """Record one finding.

        Args:
            message: Human-readable description of the problem.
            path: Token path the finding is about.
            collection: Collection (or "collection/mode") it was found in.
            suggestion: How to fix it.
            severity: Per-message severity; the rule's when omitted.
        """
        self.messages.append(
            LintMessage(
                rule=self.rule_id,
                severity=severity or self.severity,
                message=message,
                path=path,
                collection=collection,
                suggestion=suggestion,
            )
        )


class LintRule(ABC):
    """Abstract base class for lint rules.

    Rules are stateless: check() reads the theme and reports through the
    context. Raising is allowed; the linter turns an exception into a single
    error message for the rule.
    """

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique kebab-case identifier, e.g. 'broken-reference'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What the rule checks."""

    @property
    @abstractmethod
    def default_severity(self) -> Severity:
        """Severity used when the configuration does not set one."""

    @abstractmethod
    def check(self, theme: ThemeFile, context: LintRuleContext) -> None:
        """Inspect a theme and report findings.

        Args:
            theme: Theme to check; never modified.
            context: Sink for this rule's messages.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"
