"""Tag tools."""

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel

from lunchmoney_mcp.app import api_get, format_response, handle_error, mcp
from lunchmoney_mcp.response import ResponseFormat, ResponseFormatField, ResponseMode, ResponseModeField


class GetAllTagsInput(BaseModel):
    """Input for listing tags."""

    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


@mcp.tool(
    name="get_all_tags",
    annotations={
        "title": "Get All Tags",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_all_tags(params: GetAllTagsInput, ctx: Context) -> str:
    """Get a list of all tags associated with the user's account."""
    try:
        tags = await api_get(ctx, "/tags")
    except httpx.HTTPError as e:
        return handle_error(e, "get all tags")

    return format_response(
        ctx, tags, params.response_format, params.response_mode,
        tool_name="tags", summary=f"{len(tags)} tags",
    )
