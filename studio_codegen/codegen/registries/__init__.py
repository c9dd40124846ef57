"""Registry modules for declarative mappings."""

from .components import BUILTIN_COMPONENTS

__all__ = ["BUILTIN_COMPONENTS"]
