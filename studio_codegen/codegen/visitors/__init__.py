"""Visitor implementations for node-tag dispatch."""

from .base import NodeVisitor
from .component_lookup import PAGE_COMPONENT, ComponentLookup, PropTypesLookup

__all__ = ["NodeVisitor", "ComponentLookup", "PropTypesLookup", "PAGE_COMPONENT"]
