"""Unit tests for text and JSON reporters."""

import json

import pytest

from declint.domain.rules import Location, Severity, Violation
from declint.infrastructure.reporters import JsonReporter, ReporterFactory, TextReporter
from declint.use_cases.lint_files import FileFailure, FileResult, LintResult


def _result() -> LintResult:
    violation = Violation(
        rule_identifier="deployment_target",
        rule_name="Deployment Target",
        severity=Severity.WARNING,
        location=Location("A.swift", 12, 2, 5),
        reason="Availability attribute is using a version (6.0) ...",
    )
    return LintResult(
        (
            FileResult("A.swift", violations=(violation,)),
            FileResult("B.swift", failure=FileFailure("B.swift", "invalid SourceKitten JSON")),
        )
    )


class TestTextReporter:
    def test_xcode_style_lines(self) -> None:
        lines = TextReporter().render(_result()).splitlines()
        assert lines == [
            "A.swift:2:5: warning: Deployment Target Violation: "
            "Availability attribute is using a version (6.0) ... (deployment_target)",
            "B.swift: error: invalid SourceKitten JSON",
        ]

    def test_empty_result(self) -> None:
        assert TextReporter().render(LintResult()) == ""


class TestJsonReporter:
    def test_payload(self) -> None:
        payload = json.loads(JsonReporter().render(_result()))
        assert payload["violations"] == [
            {
                "rule_id": "deployment_target",
                "type": "Deployment Target",
                "severity": "warning",
                "file": "A.swift",
                "byte_offset": 12,
                "line": 2,
                "character": 5,
                "reason": "Availability attribute is using a version (6.0) ...",
            }
        ]
        assert payload["failures"] == [{"file": "B.swift", "reason": "invalid SourceKitten JSON"}]


class TestReporterFactory:
    def test_known_and_unknown(self) -> None:
        assert isinstance(ReporterFactory.create("json"), JsonReporter)
        with pytest.raises(ValueError, match="unknown reporter"):
            ReporterFactory.create("xml")
