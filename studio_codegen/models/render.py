"""Page render request and response models.

These models define the interface of the render service and the CLI.
"""

from pydantic import BaseModel, Field

from .dom import StudioDom


class RenderPageConfig(BaseModel):
    """Options for one page compile. Missing options take their defaults."""

    editor: bool = Field(
        default=False,
        description="Emit editor instrumentation (node markers and slot placeholders)",
    )
    pretty: bool = Field(default=False, description="Normalise whitespace and indentation")


class RenderPageRequest(BaseModel):
    """Request body for the page render endpoint."""

    dom: StudioDom
    page_id: str = Field(..., description="Id of the page node to compile")
    config: RenderPageConfig = Field(default_factory=RenderPageConfig)


class RenderPageResponse(BaseModel):
    """Generated module source."""

    code: str
