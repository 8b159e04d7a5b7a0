"""Unit tests for DeploymentTargetRule."""

import unittest

from declint.domain.config import DeploymentTargetConfiguration
from declint.domain.rules import Severity
from declint.domain.rules.deployment_target import DeploymentTargetRule
from declint.domain.structure import (
    AttributeOccurrence,
    DeclarationKind,
    DeclarationNode,
    StructureModel,
)
from declint.domain.versions import Version
from tests.structure_fixtures import SwiftSnippet


class TestDeploymentTargetRule(unittest.TestCase):
    """Availability attributes and conditions at or below the deployment target are flagged."""

    def setUp(self) -> None:
        self.rule = DeploymentTargetRule(
            DeploymentTargetConfiguration(ios=Version(9, 0), macos=Version(10, 10))
        )

    def test_newer_attribute_passes(self) -> None:
        self.assertEqual(self.rule.validate(SwiftSnippet.model("@available(iOS 12.0, *)\nclass A {}")), [])

    def test_older_attribute_flagged(self) -> None:
        [violation] = self.rule.validate(SwiftSnippet.model("@available(iOS 6.0, *)\nclass A {}"))
        self.assertEqual(violation.location.byte_offset, 0)
        self.assertIn("attribute", violation.reason)
        self.assertIn("6.0", violation.reason)
        self.assertIn("9.0", violation.reason)
        self.assertIn("iOS", violation.reason)
        self.assertEqual(violation.severity, Severity.WARNING)

    def test_older_condition_flagged_at_keyword(self) -> None:
        source = "if #available(iOS 6.0, *) {}"
        [violation] = self.rule.validate(SwiftSnippet.model(source))
        self.assertEqual(violation.location.byte_offset, SwiftSnippet.offset_of(source, "#available"))
        self.assertIn("condition", violation.reason)
        self.assertEqual(
            violation.reason,
            "Availability condition is using a version (6.0) that is satisfied by "
            "the deployment target (9.0.0) for platform iOS.",
        )

    def test_each_platform_reported_at_attribute_offset(self) -> None:
        source = "class Z {}\n@available(iOS 6.0, macOS 10.9, *)\nclass A {}"
        violations = self.rule.validate(SwiftSnippet.model(source))
        self.assertEqual(len(violations), 2)
        attribute_offset = SwiftSnippet.offset_of(source, "@available")
        self.assertEqual([v.location.byte_offset for v in violations], [attribute_offset, attribute_offset])
        self.assertIn("iOS", violations[0].reason)
        self.assertIn("macOS", violations[1].reason)

    def test_equal_version_is_redundant(self) -> None:
        self.assertEqual(len(self.rule.validate(SwiftSnippet.model("if #available(iOS 9, *) {}"))), 1)
        self.assertEqual(self.rule.validate(SwiftSnippet.model("if #available(iOS 9.0.1, *) {}")), [])

    def test_major_only_version(self) -> None:
        self.assertEqual(len(self.rule.validate(SwiftSnippet.model("@available(iOS 6, *)\nclass A {}"))), 1)

    def test_osx_alias_uses_macos_threshold(self) -> None:
        self.assertEqual(len(self.rule.validate(SwiftSnippet.model("@available(OSX 10.10, *)\nclass A {}"))), 1)
        self.assertEqual(self.rule.validate(SwiftSnippet.model("@available(OSX 10.11, *)\nclass A {}")), [])

    def test_wildcard_only_and_unknown_platforms_ignored(self) -> None:
        self.assertEqual(self.rule.validate(SwiftSnippet.model("@available(*, deprecated)\nclass A {}")), [])
        self.assertEqual(self.rule.validate(SwiftSnippet.model("@available(swift 3.0.2)\nclass A {}")), [])

    def test_malformed_version_skipped_but_scan_continues(self) -> None:
        source = "if #available(iOS 6.0.0.1, *) {}\nif #available(iOS 7.0, *) {}"
        violations = self.rule.validate(SwiftSnippet.model(source))
        self.assertEqual(
            [v.location.byte_offset for v in violations],
            [SwiftSnippet.offset_of(source, "#available", occurrence=1)],
        )

    def test_condition_in_comment_ignored(self) -> None:
        self.assertEqual(self.rule.validate(SwiftSnippet.model("// if #available(iOS 6.0, *) {}")), [])

    def test_results_sorted_across_paths(self) -> None:
        source = (
            "func f() {\n    if #available(iOS 7.0, *) {}\n}\n"
            "@available(iOS 6.0, *)\nclass A {}\n"
            "guard #available(iOS 8, *) else { return }"
        )
        violations = self.rule.validate(SwiftSnippet.model(source))
        offsets = [v.location.byte_offset for v in violations]
        self.assertEqual(offsets, sorted(offsets))
        self.assertEqual(len(violations), 3)
        self.assertEqual(
            [("attribute" in v.reason) for v in violations],
            [False, True, False],
        )

    def test_nested_declarations_are_traversed(self) -> None:
        source = "class A {\n    @available(iOS 6.0, *)\n    func f() {}\n}"
        contents = source.encode("utf-8")
        attribute_offset = SwiftSnippet.offset_of(source, "@available")
        attribute = AttributeOccurrence(
            "source.decl.attribute.available", attribute_offset, len("@available(iOS 6.0, *)")
        )
        func_offset = SwiftSnippet.offset_of(source, "func")
        method = DeclarationNode(
            DeclarationKind.FUNCTION_METHOD_INSTANCE, func_offset, len("func f() {}"), (attribute,)
        )
        klass = DeclarationNode(DeclarationKind.CLASS, 0, len(contents), children=(method,))
        file = StructureModel(
            "A.swift", contents, SwiftSnippet.tokens(source), DeclarationNode(None, 0, len(contents), children=(klass,))
        )
        [violation] = self.rule.validate(file)
        self.assertEqual(violation.location.byte_offset, attribute_offset)
        self.assertEqual((violation.location.line, violation.location.column), (2, 5))

    def test_other_attributes_ignored(self) -> None:
        source = "@available(iOS 6.0, *)\nclass A {}"
        contents = source.encode("utf-8")
        attribute = AttributeOccurrence("source.decl.attribute.objc", 0, 22)
        node = DeclarationNode(DeclarationKind.CLASS, 23, len(contents) - 23, (attribute,))
        file = StructureModel("A.swift", contents, SwiftSnippet.tokens(source), DeclarationNode(None, 0, len(contents), children=(node,)))
        self.assertEqual(self.rule.validate(file), [])

    def test_idempotent(self) -> None:
        file = SwiftSnippet.model("@available(iOS 6.0, macOS 10.9, *)\nclass A {}\nif #available(iOS 7, *) {}")
        self.assertEqual(self.rule.validate(file), self.rule.validate(file))


class TestDeploymentTargetDefaults(unittest.TestCase):
    """Documented examples hold under the default configuration."""

    def test_documented_examples(self) -> None:
        rule = DeploymentTargetRule()
        for example in rule.description.non_triggering_examples:
            with self.subTest(example=example):
                self.assertEqual(rule.validate(SwiftSnippet.model(example)), [])
        for example in rule.description.triggering_examples:
            with self.subTest(example=example):
                self.assertEqual(len(rule.validate(SwiftSnippet.model(example))), 1)

    def test_default_thresholds(self) -> None:
        configuration = DeploymentTargetRule().configuration
        self.assertEqual(configuration.ios, Version(7))
        self.assertEqual(configuration.macos, Version(10, 9))
        self.assertEqual(configuration.tvos, Version(9))
        self.assertEqual(configuration.watchos, Version(1))


class TestDeploymentTargetNewerPlatformVersion(unittest.TestCase):
    """A pair newer than its threshold stays silent even when a sibling pair is flagged."""

    def test_only_the_redundant_platform_is_reported(self) -> None:
        rule = DeploymentTargetRule(DeploymentTargetConfiguration(ios=Version(9), macos=Version(10, 10)))
        violations = rule.validate(SwiftSnippet.model("@available(iOS 6.0, macOS 10.12, *)\nclass A {}"))
        self.assertEqual(len(violations), 1)
        self.assertIn("iOS", violations[0].reason)
