"""Deployment target rule: availability checks already satisfied by the deployment target."""

from collections.abc import Iterable
from typing import ClassVar

from declint.domain.config import DeploymentTargetConfiguration
from declint.domain.constants import AVAILABILITY_CONDITION_PATTERN, AVAILABLE_ATTRIBUTE
from declint.domain.rules import RuleDescription, RuleKind, Severity, Violation
from declint.domain.structure import (
    AttributeOccurrence,
    ByteRange,
    DeclarationNode,
    StructureModel,
    TokenKind,
)
from declint.domain.traversal import StructureTraversal
from declint.domain.versions import PlatformVersionScanner


class DeploymentTargetRule:
    """
    Flags @available attributes and #available conditions whose version is at
    or below the configured deployment target for that platform.

    Equal versions are flagged too: the check can never fail on a device
    running the deployment target.
    """

    description: ClassVar[RuleDescription] = RuleDescription(
        identifier="deployment_target",
        name="Deployment Target",
        description=(
            "Availability checks or attributes shouldn't be using older versions "
            "that are satisfied by the deployment target."
        ),
        kind=RuleKind.LINT,
        default_severity=Severity.WARNING,
        non_triggering_examples=(
            "@available(iOS 12.0, *)\nclass A {}",
            "@available(watchOS 4.0, *)\nclass A {}",
            "@available(swift 3.0.2)\nclass A {}",
            "class A {}",
            "if #available(iOS 10.0, *) {}",
            "if #available(iOS 10, *) {}",
            "guard #available(iOS 12.0, *) else { return }",
        ),
        triggering_examples=(
            "@available(iOS 6.0, *)\nclass A {}",
            "@available(iOS 7.0, *)\nclass A {}",
            "@available(iOS 6, *)\nclass A {}",
            "@available(iOS 6.0, macOS 10.12, *)\n class A {}",
            "@available(macOS 10.12, iOS 6.0, *)\n class A {}",
            "@available(macOS 10.7, *)\nclass A {}",
            "@available(OSX 10.7, *)\nclass A {}",
            "@available(watchOS 0.9, *)\nclass A {}",
            "@available(tvOS 8, *)\nclass A {}",
            "if #available(iOS 6.0, *) {}",
            "if #available(iOS 6, *) {}",
            "guard #available(iOS 6.0, *) else { return }",
        ),
    )

    def __init__(self, configuration: DeploymentTargetConfiguration | None = None) -> None:
        self._configuration = configuration or DeploymentTargetConfiguration()
        self._thresholds = self._configuration.thresholds
        self._scanner = PlatformVersionScanner(self._thresholds)

    @property
    def configuration(self) -> DeploymentTargetConfiguration:
        return self._configuration

    def validate(self, file: StructureModel) -> list[Violation]:
        found = self._validate_attributes(file) + self._validate_conditions(file)
        unique: dict[tuple[str, int], Violation] = {}
        for platform, violation in found:
            unique.setdefault((platform, violation.location.byte_offset), violation)
        return Violation.sort_by_offset(unique.values())

    def _validate_attributes(self, file: StructureModel) -> list[tuple[str, Violation]]:
        found: list[tuple[str, Violation]] = []
        for node in StructureTraversal.traverse_depth_first(file.root, self._available_attributes):
            for attribute in node:
                found.extend(self._validate_range(file, attribute.range, "attribute", attribute.offset))
        return found

    @staticmethod
    def _available_attributes(node: DeclarationNode) -> list[AttributeOccurrence] | None:
        if node.kind is None:
            return None
        attributes = [attribute for attribute in node.attributes if attribute.name == AVAILABLE_ATTRIBUTE]
        return attributes or None

    def _validate_conditions(self, file: StructureModel) -> list[tuple[str, Violation]]:
        found: list[tuple[str, Violation]] = []
        for match in file.query.find_matches(AVAILABILITY_CONDITION_PATTERN):
            if not match.tokens or match.tokens[0].kind is not TokenKind.KEYWORD:
                continue
            keyword = match.tokens[0]
            keyword_end = keyword.offset + keyword.length
            remainder = ByteRange(keyword_end, match.range.end - keyword_end)
            if remainder.length <= 0:
                continue
            found.extend(self._validate_range(file, remainder, "condition", keyword.offset))
        return found

    def _validate_range(
        self,
        file: StructureModel,
        byte_range: ByteRange,
        violation_type: str,
        report_offset: int,
    ) -> Iterable[tuple[str, Violation]]:
        for pair in self._scanner.scan(file, byte_range):
            threshold = self._thresholds.resolve(pair.platform)
            if threshold is None or not self._thresholds.is_redundant(pair.platform, pair.version):
                continue
            reason = (
                f"Availability {violation_type} is using a version ({pair.version_text}) that is "
                f"satisfied by the deployment target ({threshold}) for platform {pair.platform}."
            )
            violation = Violation.from_offset(
                description=self.description,
                severity=self._configuration.severity,
                file=file,
                byte_offset=report_offset,
                reason=reason,
            )
            if violation is not None:
                yield pair.platform, violation
