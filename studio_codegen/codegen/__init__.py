"""Studio page to React module compiler.

Compiles one page of a studio document into the source of a React module.

The compilation pipeline:
  1. state_collector - discover every binding and allocate state/derived cells
  2. node_renderer   - render the page tree, resolving props via prop_resolver
  3. hooks           - render state, derived state and data loader declarations
  4. imports         - seal and render the deduplicated import header

All phases accumulate artifacts into one CompilationContext per compile.
"""

from .assembler import PageAssembler, render_page_code
from .context import CompilationContext
from .errors import (
    ArgTypeContractError,
    ArgTypeNotFoundError,
    BindingCycleError,
    BindingFormatError,
    BindingParseError,
    CodegenError,
    ComponentNotFoundError,
    ImportsSealedError,
    UncontrolledPropertyError,
    UnresolvedInterpolationError,
    UnsupportedBindingError,
)
from .imports import Imports
from .scope import Scope

__all__ = [
    "render_page_code",
    "PageAssembler",
    "CompilationContext",
    "Imports",
    "Scope",
    "CodegenError",
    "BindingParseError",
    "BindingFormatError",
    "UnresolvedInterpolationError",
    "ComponentNotFoundError",
    "ArgTypeContractError",
    "ArgTypeNotFoundError",
    "UncontrolledPropertyError",
    "UnsupportedBindingError",
    "ImportsSealedError",
    "BindingCycleError",
]
