"""Plaid-linked account tools."""

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel

from lunchmoney_mcp.app import api_get, api_post, format_response, handle_error, mcp
from lunchmoney_mcp.response import ResponseFormat, ResponseFormatField, ResponseMode, ResponseModeField


class GetAllPlaidAccountsInput(BaseModel):
    """Input for listing Plaid accounts."""

    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


@mcp.tool(
    name="get_all_plaid_accounts",
    annotations={
        "title": "Get All Plaid Accounts",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_all_plaid_accounts(params: GetAllPlaidAccountsInput, ctx: Context) -> str:
    """Get a list of all Plaid accounts associated with the user."""
    try:
        data = await api_get(ctx, "/plaid_accounts")
    except httpx.HTTPError as e:
        return handle_error(e, "get Plaid accounts")

    accounts = data["plaid_accounts"]
    return format_response(
        ctx, accounts, params.response_format, params.response_mode,
        tool_name="plaid-accounts", summary=f"{len(accounts)} Plaid accounts",
    )


@mcp.tool(
    name="trigger_plaid_fetch",
    annotations={
        "title": "Trigger Plaid Fetch",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def trigger_plaid_fetch(ctx: Context) -> str:
    """Trigger a fetch of latest data from Plaid (Experimental).

    Fetching may take up to 5 minutes.
    """
    try:
        await api_post(ctx, "/plaid_accounts/fetch", parse=False)
    except httpx.HTTPError as e:
        return handle_error(e, "trigger Plaid fetch")
    return "Plaid fetch triggered successfully. Fetching may take up to 5 minutes."
