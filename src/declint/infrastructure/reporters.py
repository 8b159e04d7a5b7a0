"""Reporters turning a LintResult into text. Output only; exit codes belong to the CLI."""

import json
from typing import ClassVar

from declint.domain.protocols import ReporterProtocol
from declint.domain.rules import Violation
from declint.use_cases.lint_files import LintResult


class TextReporter(ReporterProtocol):
    """Xcode-style lines: path:line:column: severity: Name Violation: reason (identifier)."""

    def render(self, result: LintResult) -> str:
        lines = [self.format_violation(violation) for violation in result.violations]
        lines.extend(f"{failure.path}: error: {failure.message}" for failure in result.failures)
        return "\n".join(lines)

    @staticmethod
    def format_violation(violation: Violation) -> str:
        return (
            f"{violation.location}: {violation.severity.value}: "
            f"{violation.rule_name} Violation: {violation.reason} ({violation.rule_identifier})"
        )


class JsonReporter(ReporterProtocol):
    """JSON document with a 'violations' list and a 'failures' list."""

    def render(self, result: LintResult) -> str:
        payload = {
            "violations": [self.violation_to_dict(violation) for violation in result.violations],
            "failures": [{"file": failure.path, "reason": failure.message} for failure in result.failures],
        }
        return json.dumps(payload, indent=2)

    @staticmethod
    def violation_to_dict(violation: Violation) -> dict[str, object]:
        return {
            "rule_id": violation.rule_identifier,
            "type": violation.rule_name,
            "severity": violation.severity.value,
            "file": violation.location.file,
            "byte_offset": violation.location.byte_offset,
            "line": violation.location.line,
            "character": violation.location.column,
            "reason": violation.reason,
        }


class ReporterFactory:
    REPORTERS: ClassVar[dict[str, type[ReporterProtocol]]] = {
        "text": TextReporter,
        "json": JsonReporter,
    }

    @classmethod
    def create(cls, name: str) -> ReporterProtocol:
        try:
            return cls.REPORTERS[name]()
        except KeyError:
            raise ValueError(f"unknown reporter '{name}' (choose from {', '.join(cls.REPORTERS)})") from None
