"""Program assembler: compiles one page of a studio document to a React module.

Phases, in this exact order:
1. Collect all state (bindings anywhere in the page, before any rendering)
2. Render the root node
3. Render state hooks
4. Render derived state hooks
5. Render data loader hooks
6. Seal the import table
7. Render the import header
8. Concatenate everything into one module
"""

from __future__ import annotations

import logging

from studio_codegen.models.components import ComponentCatalog
from studio_codegen.models.dom import StudioDom, assert_is_page
from studio_codegen.models.render import RenderPageConfig, RenderPageResponse

from .context import CompilationContext
from .formatting import INDENT, format_code
from .hooks import render_data_loader_hooks, render_derived_state_hooks, render_state_hooks
from .node_renderer import NodeRenderer
from .registries.components import BUILTIN_COMPONENTS
from .state_collector import collect_all_state

logger = logging.getLogger(__name__)


class PageAssembler:
    """Drives one compile of one page. Not reusable across compiles."""

    def __init__(self, ctx: CompilationContext) -> None:
        self.ctx = ctx
        self.renderer = NodeRenderer(ctx)

    def render(self) -> str:
        """Run all phases and return the module source."""
        collect_all_state(self.ctx)
        root = self.renderer.render_root(self.ctx.page)
        state_hooks = render_state_hooks(self.ctx)
        derived_state_hooks = render_derived_state_hooks(self.ctx)
        data_loader_hooks = render_data_loader_hooks(self.ctx)

        self.ctx.imports.seal()
        imports = self.ctx.imports.render()

        body = [*state_hooks, *data_loader_hooks, *derived_state_hooks]
        lines = [
            imports,
            "",
            f"export default function {self.ctx.app_name}() {{",
            *(f"{INDENT}{line}" for line in body),
            f"{INDENT}return (",
            f"{INDENT * 2}{root}",
            f"{INDENT});",
            "}",
        ]
        return "\n".join(lines) + "\n"


def render_page_code(
    dom: StudioDom,
    page_node_id: str,
    config: RenderPageConfig | None = None,
    components: ComponentCatalog | None = None,
) -> RenderPageResponse:
    """Compile the page `page_node_id` of `dom` to a single React module.

    Args:
        dom: The studio document.
        page_node_id: Id of the page node to compile.
        config: Render options; defaults to non-editor, non-pretty output.
        components: Component catalog keyed by component name; defaults to the built-ins.

    Returns:
        RenderPageResponse holding the module source.

    Raises:
        NodeNotFoundError: If `page_node_id` is not in the document.
        NodeTypeError: If `page_node_id` is not a page.
        CodegenError: If the page can't be compiled.
    """
    config = config or RenderPageConfig()
    page = assert_is_page(dom.get_node(page_node_id))

    ctx = CompilationContext(
        dom=dom,
        page=page,
        components=BUILTIN_COMPONENTS if components is None else components,
        editor=config.editor,
    )
    code = PageAssembler(ctx).render()

    if config.pretty:
        code = format_code(code)

    logger.debug(
        f"Rendered page {page.id}: {len(ctx.state_hooks)} state hooks, "
        f"{len(ctx.memo_hooks)} derived values, {len(ctx.data_loaders)} data loaders"
    )
    return RenderPageResponse(code=code)
