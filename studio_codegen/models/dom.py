"""Studio document model.

A document is a flat mapping of node id to node. Page and element nodes form
a tree through their parent placement fields; derived state nodes stand on
their own and are referenced by name from bindings.

Node tags form a closed discriminated union. Consumers match on the concrete
node class, so adding a tag means revisiting every consumer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Literal, TypeGuard, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator
from pydantic.alias_generators import to_camel

from .components import PropValueType

PAGE_CHILDREN_SLOT = "children"


class NodeTypeError(TypeError):
    """Raised when a node is not of the expected tag."""

    pass


class NodeNotFoundError(KeyError):
    """Raised when a node id is not part of the document."""

    def __str__(self) -> str:
        return f"Node not found: {self.args[0]!r}"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Bound properties
# =============================================================================


class ConstProp(_CamelModel):
    """A constant literal value."""

    type: Literal["const"] = "const"
    value: Any = None


class BindingProp(_CamelModel):
    """A direct binding to another node's value, e.g. "input.value"."""

    type: Literal["binding"] = "binding"
    value: str


class BoundExpressionProp(_CamelModel):
    """A template with interpolated references, e.g. "Hello {{input.value}}"."""

    type: Literal["boundExpression"] = "boundExpression"
    value: str
    format: str | None = None


class UnrecognizedProp(_CamelModel):
    """A property with a tag this compiler doesn't know. Resolved as omitted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    type: str
    value: Any = None


_KNOWN_PROP_TAGS = frozenset({"const", "binding", "boundExpression"})


def _prop_tag(value: Any) -> str:
    tag = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return tag if tag in _KNOWN_PROP_TAGS else "unrecognized"


NodeProp = Annotated[
    Union[
        Annotated[ConstProp, Tag("const")],
        Annotated[BindingProp, Tag("binding")],
        Annotated[BoundExpressionProp, Tag("boundExpression")],
        Annotated[UnrecognizedProp, Tag("unrecognized")],
    ],
    Discriminator(_prop_tag),
]


# =============================================================================
# Nodes
# =============================================================================


class _NodeBase(_CamelModel):
    id: str
    name: str
    props: dict[str, NodeProp | None] = Field(default_factory=dict)
    parent_id: str | None = None
    parent_prop: str | None = None
    parent_index: str | None = None


class PageNode(_NodeBase):
    """Root of a page tree."""

    type: Literal["page"] = "page"
    title: str = ""


class ElementNode(_NodeBase):
    """An instance of a component definition."""

    type: Literal["element"] = "element"
    component: str


class DerivedStateNode(_NodeBase):
    """A pure computed value. Its body lives in a separate module keyed by node id."""

    type: Literal["derivedState"] = "derivedState"
    arg_types: dict[str, PropValueType] = Field(default_factory=dict)


StudioNode = Annotated[Union[PageNode, ElementNode, DerivedStateNode], Field(discriminator="type")]


def is_page(node: StudioNode) -> TypeGuard[PageNode]:
    return isinstance(node, PageNode)


def is_element(node: StudioNode) -> TypeGuard[ElementNode]:
    return isinstance(node, ElementNode)


def is_derived_state(node: StudioNode) -> TypeGuard[DerivedStateNode]:
    return isinstance(node, DerivedStateNode)


def assert_is_page(node: StudioNode) -> PageNode:
    if not is_page(node):
        raise NodeTypeError(f'Expected node "{node.id}" to be of type "page", got "{node.type}"')
    return node


def assert_is_element(node: StudioNode) -> ElementNode:
    if not is_element(node):
        raise NodeTypeError(f'Expected node "{node.id}" to be of type "element", got "{node.type}"')
    return node


def assert_is_derived_state(node: StudioNode) -> DerivedStateNode:
    if not is_derived_state(node):
        raise NodeTypeError(
            f'Expected node "{node.id}" to be of type "derivedState", got "{node.type}"'
        )
    return node


# =============================================================================
# Document
# =============================================================================


def _parent_index_key(node: StudioNode) -> tuple[bool, str]:
    # unindexed children go last
    return (node.parent_index is None, node.parent_index or "")


@dataclass(frozen=True)
class DomIndex:
    """Name and placement lookups over a snapshot of a document's nodes.

    Built from the nodes as they are when `StudioDom.build_index` is called;
    later edits to the document are not reflected.
    """

    # node name -> id of the first node (in document order) with that name
    names: Mapping[str, str]
    # parent id -> slot -> children ordered by parent index
    children: Mapping[str, Mapping[str, list[StudioNode]]]

    def get_node_id_by_name(self, name: str) -> str | None:
        return self.names.get(name)

    def get_child_nodes(self, parent: StudioNode) -> dict[str, list[StudioNode]]:
        """Children of `parent` grouped by slot, each slot ordered by parent index.

        A page only exposes its implicit "children" slot.
        """
        slots = self.children.get(parent.id, {})
        if is_page(parent):
            return {PAGE_CHILDREN_SLOT: list(slots.get(PAGE_CHILDREN_SLOT, []))}
        return {prop: list(children) for prop, children in slots.items()}

    def get_descendants(self, node: StudioNode) -> list[StudioNode]:
        """All nodes below `node`, depth-first pre-order."""
        result: list[StudioNode] = []
        for children in self.get_child_nodes(node).values():
            for child in children:
                result.append(child)
                result.extend(self.get_descendants(child))
        return result


class StudioDom(_CamelModel):
    """The document being compiled.

    Lookup methods read the nodes as they are now. A compile takes one
    `build_index()` snapshot up front and works from that.
    """

    nodes: dict[str, StudioNode] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_node_keys(self) -> StudioDom:
        for key, node in self.nodes.items():
            if key != node.id:
                raise ValueError(f"Node stored under {key!r} has id {node.id!r}")
        return self

    @classmethod
    def from_nodes(cls, nodes: Iterable[StudioNode]) -> StudioDom:
        """Build a document from nodes, keeping their order as document order."""
        return cls(nodes={node.id: node for node in nodes})

    def get_node(self, node_id: str) -> StudioNode:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def build_index(self) -> DomIndex:
        names: dict[str, str] = {}
        children: dict[str, dict[str, list[StudioNode]]] = {}
        for node in self.nodes.values():
            names.setdefault(node.name, node.id)
            if node.parent_id is None:
                continue
            slot = node.parent_prop or PAGE_CHILDREN_SLOT
            children.setdefault(node.parent_id, {}).setdefault(slot, []).append(node)
        for slots in children.values():
            for siblings in slots.values():
                # stable: equal parent indexes keep document order
                siblings.sort(key=_parent_index_key)
        return DomIndex(names=names, children=children)

    def get_node_id_by_name(self, name: str) -> str | None:
        """Id of the first node (in document order) with this name."""
        return self.build_index().get_node_id_by_name(name)

    def get_child_nodes(self, parent: StudioNode) -> dict[str, list[StudioNode]]:
        return self.build_index().get_child_nodes(parent)

    def get_descendants(self, node: StudioNode) -> list[StudioNode]:
        return self.build_index().get_descendants(node)
