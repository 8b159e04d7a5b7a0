"""Exception hierarchy for declint. Raised at construction and parse boundaries only."""


class DeclintError(Exception):
    """Base class for all declint errors."""


class StructuralParseError(DeclintError):
    """The token stream or declaration tree of a file is malformed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        prefix = f"{path}: " if path else ""
        super().__init__(f"{prefix}{message}")


class MalformedStructureError(StructuralParseError):
    """A declaration tree contains a cycle or a node reachable twice."""


class ConfigurationError(DeclintError):
    """A rule or file configuration value is invalid."""
