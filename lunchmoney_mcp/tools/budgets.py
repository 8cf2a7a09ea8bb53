"""Budget tools."""

from typing import Optional

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel, ConfigDict, Field

from lunchmoney_mcp.app import api_delete, api_get, api_put, compact, format_response, handle_error, mcp
from lunchmoney_mcp.response import (
    ResponseFormat,
    ResponseFormatField,
    ResponseMode,
    ResponseModeField,
    serialize,
)


class GetBudgetSummaryInput(BaseModel):
    """Input for the monthly budget summary."""
    model_config = ConfigDict(str_strip_whitespace=True)

    start_date: str = Field(
        ...,
        description=(
            "Start date in YYYY-MM-DD format. Lunch Money currently only supports monthly budgets, "
            "so your date should be the start of a month (eg. 2021-04-01)"
        ),
    )
    end_date: str = Field(
        ...,
        description=(
            "End date in YYYY-MM-DD format. Lunch Money currently only supports monthly budgets, "
            "so your date should be the end of a month (eg. 2021-04-30)"
        ),
    )
    currency: Optional[str] = Field(default=None, description="Currency for budget (defaults to primary currency)")
    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


class UpsertBudgetInput(BaseModel):
    """Input for creating or updating a category budget."""
    model_config = ConfigDict(str_strip_whitespace=True)

    start_date: str = Field(..., description="Budget month start date in YYYY-MM-DD format")
    category_id: int = Field(..., description="Category ID for the budget")
    amount: float = Field(..., description="Budget amount")
    currency: Optional[str] = Field(default=None, description="Currency for budget (defaults to primary currency)")


class RemoveBudgetInput(BaseModel):
    """Input for removing a category budget."""
    model_config = ConfigDict(str_strip_whitespace=True)

    start_date: str = Field(..., description="Budget month start date in YYYY-MM-DD format")
    category_id: int = Field(..., description="Category ID for the budget to remove")


@mcp.tool(
    name="get_budget_summary",
    annotations={
        "title": "Get Budget Summary",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_budget_summary(params: GetBudgetSummaryInput, ctx: Context) -> str:
    """Get budget summary for a specific date range.

    The budgeted and spending amounts are broken down by month.
    """
    query = compact(start_date=params.start_date, end_date=params.end_date, currency=params.currency or None)
    try:
        budgets = await api_get(ctx, "/budgets", query)
    except httpx.HTTPError as e:
        return handle_error(e, "get budget summary")

    return format_response(
        ctx, budgets, params.response_format, params.response_mode,
        tool_name="budgets",
        summary=f"{len(budgets)} budget entries ({params.start_date} to {params.end_date})",
    )


@mcp.tool(
    name="upsert_budget",
    annotations={
        "title": "Upsert Budget",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def upsert_budget(params: UpsertBudgetInput, ctx: Context) -> str:
    """Create or update a budget for a specific category and month."""
    body = compact(
        start_date=params.start_date,
        category_id=params.category_id,
        amount=params.amount,
        currency=params.currency or None,
    )
    try:
        result = await api_put(ctx, "/budgets", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "upsert budget")
    return serialize(result)


@mcp.tool(
    name="remove_budget",
    annotations={
        "title": "Remove Budget",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def remove_budget(params: RemoveBudgetInput, ctx: Context) -> str:
    """Remove a budget for a specific category and month."""
    try:
        await api_delete(
            ctx, "/budgets",
            {"start_date": params.start_date, "category_id": params.category_id},
            parse=False,
        )
    except httpx.HTTPError as e:
        return handle_error(e, "remove budget")
    return "Budget removed successfully"
