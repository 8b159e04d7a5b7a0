from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from declint.domain.structure import StructureModel
    from declint.use_cases.lint_files import LintResult


class StructureProviderProtocol(Protocol):
    """Produces the structure model of one source file."""

    def load(self, path: str) -> "StructureModel":
        """Raise StructuralParseError when the file cannot be turned into a model."""
        ...


class ReporterProtocol(Protocol):
    """Renders a lint result for the user."""

    def render(self, result: "LintResult") -> str:
        ...
