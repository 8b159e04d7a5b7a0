"""No extension access modifier rule: flags 'private extension Foo {}' and friends."""

from typing import ClassVar

from declint.domain.config import SeverityConfiguration
from declint.domain.constants import ACCESS_CONTROL_KEYWORDS
from declint.domain.queries import RangeQuery
from declint.domain.rules import RuleDescription, RuleKind, Severity, Violation
from declint.domain.structure import DeclarationKind, DeclarationNode, StructureModel, Token, TokenKind
from declint.domain.traversal import StructureTraversal


class NoExtensionAccessModifierRule:
    """An access modifier on an extension only sets the default for its members; prefer explicit members."""

    description: ClassVar[RuleDescription] = RuleDescription(
        identifier="no_extension_access_modifier",
        name="No Extension Access Modifier",
        description="Prefer not to use extension access modifiers",
        kind=RuleKind.IDIOMATIC,
        default_severity=Severity.ERROR,
        opt_in=True,
        non_triggering_examples=(
            "extension String {}",
            "\n\n extension String {}",
        ),
        triggering_examples=(
            "private extension String {}",
            "public \n extension String {}",
            "open extension String {}",
            "internal extension String {}",
            "fileprivate extension String {}",
        ),
    )

    _ACL_TOKEN_KINDS: ClassVar[frozenset[TokenKind]] = frozenset(
        {TokenKind.ATTRIBUTE_BUILTIN, TokenKind.KEYWORD}
    )

    def __init__(self, configuration: SeverityConfiguration | None = None) -> None:
        self._configuration = configuration or SeverityConfiguration(self.description.default_severity)

    @property
    def configuration(self) -> SeverityConfiguration:
        return self._configuration

    def validate(self, file: StructureModel) -> list[Violation]:
        violations: list[Violation] = []
        for kind, node in StructureTraversal.declarations(file.root):
            violations.extend(self.validate_declaration(file, kind, node))
        return Violation.sort_by_offset(violations)

    def validate_declaration(
        self, file: StructureModel, kind: DeclarationKind, node: DeclarationNode
    ) -> list[Violation]:
        """Check a single declaration; anything but a plain extension is ignored."""
        if kind is not DeclarationKind.EXTENSION:
            return []
        token = RangeQuery.nearest_preceding_token(node.offset, file.tokens)
        if token is None or not self._is_access_control(token):
            return []
        violation = Violation.from_offset(
            description=self.description,
            severity=self._configuration.severity,
            file=file,
            byte_offset=token.offset,
        )
        return [violation] if violation is not None else []

    def _is_access_control(self, token: Token) -> bool:
        return token.kind in self._ACL_TOKEN_KINDS and token.text in ACCESS_CONTROL_KEYWORDS
