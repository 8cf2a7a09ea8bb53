"""Cryptocurrency holding tools."""

from typing import Optional

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel, Field

from lunchmoney_mcp.app import amount_str, api_get, api_put, compact, format_response, handle_error, mcp
from lunchmoney_mcp.response import (
    ResponseFormat,
    ResponseFormatField,
    ResponseMode,
    ResponseModeField,
    serialize,
)


class GetAllCryptoInput(BaseModel):
    """Input for listing crypto holdings."""

    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


class UpdateManualCryptoInput(BaseModel):
    """Input for updating a manually-managed crypto balance."""

    crypto_id: int = Field(..., description="ID of the crypto asset to update")
    balance: Optional[float] = Field(default=None, description="Updated balance of the crypto asset")


@mcp.tool(
    name="get_all_crypto",
    annotations={
        "title": "Get All Crypto",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_all_crypto(params: GetAllCryptoInput, ctx: Context) -> str:
    """Get a list of all cryptocurrency assets associated with the user.

    Includes both synced (exchange/wallet) and manually-managed holdings.
    """
    try:
        data = await api_get(ctx, "/crypto")
    except httpx.HTTPError as e:
        return handle_error(e, "get crypto assets")

    crypto = data["crypto"]
    return format_response(
        ctx, crypto, params.response_format, params.response_mode,
        tool_name="crypto", summary=f"{len(crypto)} crypto assets",
    )


@mcp.tool(
    name="update_manual_crypto",
    annotations={
        "title": "Update Manual Crypto",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def update_manual_crypto(params: UpdateManualCryptoInput, ctx: Context) -> str:
    """Update a manually-managed cryptocurrency asset balance."""
    body = compact(balance=amount_str(params.balance) if params.balance is not None else None)
    try:
        result = await api_put(ctx, f"/crypto/manual/{params.crypto_id}", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "update crypto asset")
    return serialize(result)
