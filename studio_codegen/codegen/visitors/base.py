"""Base visitor for dispatching on document node tags."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from studio_codegen.models.dom import (
    DerivedStateNode,
    ElementNode,
    NodeTypeError,
    PageNode,
    StudioNode,
)

T = TypeVar("T")


class NodeVisitor(ABC, Generic[T]):
    """Abstract visitor over the closed set of node tags.

    Every tag has an abstract visit method, so a new tag can't be added
    without every visitor implementing it.

    Usage:
        class NameVisitor(NodeVisitor[str]):
            def visit_PageNode(self, node):
                return f"page {node.name}"
            ...
    """

    def visit(self, node: StudioNode) -> T:
        """Dispatch to the visit method for the node's tag."""
        match node:
            case PageNode():
                return self.visit_PageNode(node)
            case ElementNode():
                return self.visit_ElementNode(node)
            case DerivedStateNode():
                return self.visit_DerivedStateNode(node)
        raise NodeTypeError(f"Unknown node type: {type(node).__name__}")

    @abstractmethod
    def visit_PageNode(self, node: PageNode) -> T: ...

    @abstractmethod
    def visit_ElementNode(self, node: ElementNode) -> T: ...

    @abstractmethod
    def visit_DerivedStateNode(self, node: DerivedStateNode) -> T: ...
