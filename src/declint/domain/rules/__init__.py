"""Domain models for rules and violations."""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Location",
    "Rule",
    "RuleDescription",
    "RuleKind",
    "Severity",
    "Violation",
]

import logging
from collections.abc import Iterable
from typing import ClassVar, Protocol

from declint.domain.structure import StructureModel

logger = logging.getLogger(__name__)


class Severity(Enum):
    WARNING = "warning"
    ERROR = "error"


class RuleKind(Enum):
    """Registry category of a rule; informational only."""

    LINT = "lint"
    IDIOMATIC = "idiomatic"
    STYLE = "style"
    METRICS = "metrics"
    PERFORMANCE = "performance"


@dataclass(frozen=True)
class Location:
    """Where a violation points: byte offset plus derived 1-based line/column."""

    file: str | None
    byte_offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file or '<nopath>'}:{self.line}:{self.column}"


@dataclass(frozen=True)
class RuleDescription:
    """Static rule metadata used for listing and filtering; never consulted by validate()."""

    identifier: str
    name: str
    description: str
    kind: RuleKind
    default_severity: Severity
    opt_in: bool = False
    non_triggering_examples: tuple[str, ...] = ()
    triggering_examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class Violation:
    """A reported finding. Created by rules only."""

    rule_identifier: str
    rule_name: str
    severity: Severity
    location: Location
    reason: str

    @classmethod
    def from_offset(
        cls,
        *,
        description: RuleDescription,
        severity: Severity,
        file: StructureModel,
        byte_offset: int,
        reason: str | None = None,
    ) -> "Violation | None":
        """Build a Violation located at a byte offset of file; None if the offset splits a character."""
        position = file.query.line_and_column(byte_offset)
        if position is None:
            logger.debug(
                "Dropping %s candidate: offset %d of %s is not a character position",
                description.identifier,
                byte_offset,
                file.path,
            )
            return None
        line, column = position
        return cls(
            rule_identifier=description.identifier,
            rule_name=description.name,
            severity=severity,
            location=Location(file.path, byte_offset, line, column),
            reason=reason or description.description,
        )

    @staticmethod
    def sort_by_offset(violations: Iterable["Violation"]) -> list["Violation"]:
        """Ascending by byte offset; ties keep their input order."""
        return sorted(violations, key=lambda violation: violation.location.byte_offset)


class Rule(Protocol):
    """A unit of analysis: one file in, ordered violations out."""

    description: ClassVar[RuleDescription]

    def validate(self, file: StructureModel) -> list[Violation]:
        """Return violations for file, sorted ascending by byte offset."""
        ...
