"""Render routes for page code generation."""

import logging

from fastapi import APIRouter, HTTPException

from studio_codegen.codegen import CodegenError, render_page_code
from studio_codegen.models.dom import NodeNotFoundError, NodeTypeError
from studio_codegen.models.render import RenderPageRequest, RenderPageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/render", tags=["render"])


@router.post("/page", response_model=RenderPageResponse)
def render_page(request: RenderPageRequest) -> RenderPageResponse:
    """Compile one page of a studio document to a React module.

    Compile errors (broken bindings, unknown pages) are client errors and
    return 422 with the error message as detail.
    """
    logger.info(
        f"Rendering page {request.page_id} "
        f"(editor={request.config.editor}, pretty={request.config.pretty})"
    )
    try:
        return render_page_code(request.dom, request.page_id, request.config)
    except (CodegenError, NodeTypeError, NodeNotFoundError) as e:
        logger.warning(f"Page {request.page_id}: Failed - {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e
