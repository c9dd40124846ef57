"""Component definition contract.

Component definitions are owned by a catalog and are read-only to the compiler.
Each exposes typed argument metadata and a render function that turns resolved
properties into JSX text.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from studio_codegen.codegen.expressions import ResolvedProps
    from studio_codegen.codegen.node_renderer import NodeRenderer


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropValueType(_CamelModel):
    """Type descriptor of a property value.

    Known types include "string", "number", "boolean", "object", "array",
    "element" and "dataQuery". Extra keys (e.g. a JSON schema) are kept.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    type: str


class ArgControlSpec(_CamelModel):
    """Editor control used for an argument. "slot" and "slots" mark child slots."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    type: str


class OnChangeHandler(_CamelModel):
    """How to extract the new value from a change event.

    The compiler synthesizes `(params...) => setState(value_getter)`.
    """

    params: list[str] = Field(default_factory=list)
    value_getter: str


class ArgTypeDefinition(_CamelModel):
    """Descriptor of one component argument."""

    type_def: PropValueType
    default_value: Any = None
    default_value_prop: str | None = None
    on_change_prop: str | None = None
    on_change_handler: OnChangeHandler | None = None
    control: ArgControlSpec | None = None

    @property
    def has_default(self) -> bool:
        """Whether a default was declared. An explicit None (JSON null) counts."""
        return "default_value" in self.model_fields_set

    @property
    def is_controlled(self) -> bool:
        """Whether the argument names a change property to write its state cell through."""
        return self.on_change_prop is not None


RenderFunction = Callable[["NodeRenderer", "ResolvedProps"], str]


@dataclass(frozen=True)
class ComponentDefinition:
    """A reusable UI primitive: argument metadata plus a render function."""

    arg_types: Mapping[str, ArgTypeDefinition | None]
    render: RenderFunction
    description: str = ""


ComponentCatalog = Mapping[str, ComponentDefinition]
