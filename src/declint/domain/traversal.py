"""Depth-first traversal of the declaration tree."""

from collections.abc import Callable, Iterator
from typing import TypeVar

from declint.domain.errors import MalformedStructureError
from declint.domain.structure import DeclarationKind, DeclarationNode

T = TypeVar("T")


class StructureTraversal:
    """Pre-order walks over DeclarationNode trees. No top-level functions."""

    @staticmethod
    def walk(root: DeclarationNode) -> Iterator[DeclarationNode]:
        """
        Yield every node in document order: parent before children, siblings in order.

        Raises MalformedStructureError as soon as a node is reached a second
        time, so a cyclic tree fails instead of looping.
        """
        seen: set[int] = set()
        stack = [root]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                raise MalformedStructureError(
                    f"declaration at offset {node.offset} is reachable more than once"
                )
            seen.add(id(node))
            yield node
            stack.extend(reversed(node.children))

    @staticmethod
    def traverse_depth_first(
        root: DeclarationNode, visit: Callable[[DeclarationNode], T | None]
    ) -> list[T]:
        """Apply visit to every node and collect the non-None results in document order."""
        results: list[T] = []
        for node in StructureTraversal.walk(root):
            result = visit(node)
            if result is not None:
                results.append(result)
        return results

    @staticmethod
    def declarations(root: DeclarationNode) -> Iterator[tuple[DeclarationKind, DeclarationNode]]:
        for node in StructureTraversal.walk(root):
            if node.kind is not None:
                yield node.kind, node
