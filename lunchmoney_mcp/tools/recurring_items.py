"""Recurring item tools."""

from typing import Optional

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel, ConfigDict, Field

from lunchmoney_mcp.app import api_get, compact, format_response, handle_error, mcp
from lunchmoney_mcp.response import ResponseFormat, ResponseFormatField, ResponseMode, ResponseModeField


class GetRecurringItemsInput(BaseModel):
    """Input for listing recurring items."""
    model_config = ConfigDict(str_strip_whitespace=True)

    start_date: Optional[str] = Field(
        default=None, description="Start date in YYYY-MM-DD format. Defaults to first day of current month"
    )
    end_date: Optional[str] = Field(default=None, description="End date in YYYY-MM-DD format")
    debit_as_negative: Optional[bool] = Field(default=None, description="Pass true to return debit amounts as negative")
    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


@mcp.tool(
    name="get_recurring_items",
    annotations={
        "title": "Get Recurring Items",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_recurring_items(params: GetRecurringItemsInput, ctx: Context) -> str:
    """Retrieve a list of recurring items to expect for a specified month."""
    query = compact(
        start_date=params.start_date or None,
        end_date=params.end_date or None,
        debit_as_negative=params.debit_as_negative,
    )
    try:
        data = await api_get(ctx, "/recurring_items", query or None)
    except httpx.HTTPError as e:
        return handle_error(e, "get recurring items")

    items = data.get("recurring_items", data) if isinstance(data, dict) else data
    return format_response(
        ctx, items, params.response_format, params.response_mode,
        tool_name="recurring-items", summary=f"{len(items)} recurring items",
    )
