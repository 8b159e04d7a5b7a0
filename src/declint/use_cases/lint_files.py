"""Lint a batch of files with a set of rules, isolating per-file failures."""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from declint.domain.errors import StructuralParseError
from declint.domain.protocols import StructureProviderProtocol
from declint.domain.rules import Rule, Severity, Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFailure:
    """A file whose structure could not be loaded; its rules were not run."""

    path: str
    message: str


@dataclass(frozen=True)
class FileResult:
    path: str
    violations: tuple[Violation, ...] = ()
    failure: FileFailure | None = None


@dataclass(frozen=True)
class LintResult:
    """Per-file results in input order."""

    files: tuple[FileResult, ...] = field(default_factory=tuple)

    @property
    def violations(self) -> list[Violation]:
        return [violation for result in self.files for violation in result.violations]

    @property
    def failures(self) -> list[FileFailure]:
        return [result.failure for result in self.files if result.failure is not None]

    def has_errors(self) -> bool:
        return any(violation.severity is Severity.ERROR for violation in self.violations)


class LintFilesUseCase:
    """Runs every rule over every file. Rules are pure, so files are linted in parallel when jobs > 1."""

    def __init__(
        self,
        structure_provider: StructureProviderProtocol,
        rules: Sequence[Rule],
        jobs: int = 1,
    ) -> None:
        self._structure_provider = structure_provider
        self._rules = tuple(rules)
        self._jobs = max(1, jobs)

    def execute(self, paths: Sequence[str]) -> LintResult:
        if self._jobs == 1 or len(paths) < 2:
            return LintResult(tuple(self.lint_file(path) for path in paths))
        with ThreadPoolExecutor(max_workers=self._jobs) as executor:
            return LintResult(tuple(executor.map(self.lint_file, paths)))

    def lint_file(self, path: str) -> FileResult:
        """Lint one file; a StructuralParseError becomes a FileFailure for this file only."""
        try:
            file = self._structure_provider.load(path)
            violations: list[Violation] = []
            for rule in self._rules:
                violations.extend(rule.validate(file))
        except StructuralParseError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            return FileResult(path=path, failure=FileFailure(path, str(exc)))
        logger.debug("%s: %d violation(s)", path, len(violations))
        return FileResult(path=path, violations=tuple(Violation.sort_by_offset(violations)))
