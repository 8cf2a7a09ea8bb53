"""Manually-managed asset tools."""

from enum import Enum
from typing import Optional

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel, ConfigDict, Field

from lunchmoney_mcp.app import (
    amount_str,
    api_get,
    api_post,
    api_put,
    compact,
    format_response,
    handle_error,
    mcp,
)
from lunchmoney_mcp.response import (
    ResponseFormat,
    ResponseFormatField,
    ResponseMode,
    ResponseModeField,
    serialize,
)


class AssetType(str, Enum):
    CASH = "cash"
    CREDIT = "credit"
    INVESTMENT = "investment"
    REAL_ESTATE = "real estate"
    LOAN = "loan"
    VEHICLE = "vehicle"
    CRYPTOCURRENCY = "cryptocurrency"
    EMPLOYEE_COMPENSATION = "employee compensation"
    OTHER_LIABILITY = "other liability"
    OTHER_ASSET = "other asset"


class GetAllAssetsInput(BaseModel):
    """Input for listing assets."""

    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


class AssetFields(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    subtype_name: Optional[str] = Field(
        default=None, description="Optional subtype (e.g., retirement, checking, savings)"
    )
    display_name: Optional[str] = Field(default=None, description="Display name of the asset (defaults to name)")
    balance_as_of: Optional[str] = Field(
        default=None, description="Date/time the balance is as of in ISO 8601 format"
    )
    currency: Optional[str] = Field(
        default=None, description="Three-letter currency code (defaults to primary currency)"
    )
    institution_name: Optional[str] = Field(default=None, description="Name of the institution holding the asset")
    closed_on: Optional[str] = Field(default=None, description="Date the asset was closed in YYYY-MM-DD format")
    exclude_transactions: Optional[bool] = Field(
        default=None, description="Whether to exclude this asset from transaction options"
    )

    def optional_fields(self):
        return compact(
            subtype_name=self.subtype_name or None,
            display_name=self.display_name or None,
            balance_as_of=self.balance_as_of or None,
            currency=self.currency or None,
            institution_name=self.institution_name or None,
            closed_on=self.closed_on or None,
            exclude_transactions=self.exclude_transactions,
        )


class CreateAssetInput(AssetFields):
    """Input for creating an asset."""

    type_name: AssetType = Field(..., description="Primary type of the asset")
    name: str = Field(..., description="Name of the asset", min_length=1)
    balance: float = Field(..., description="Current balance of the asset")


class UpdateAssetInput(AssetFields):
    """Input for updating an asset. Omitted fields are left unchanged."""

    asset_id: int = Field(..., description="ID of the asset to update")
    type_name: Optional[AssetType] = Field(default=None, description="Primary type of the asset")
    name: Optional[str] = Field(default=None, description="Name of the asset")
    balance: Optional[float] = Field(default=None, description="Current balance of the asset")


@mcp.tool(
    name="get_all_assets",
    annotations={
        "title": "Get All Assets",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_all_assets(params: GetAllAssetsInput, ctx: Context) -> str:
    """Get a list of all manually-managed assets associated with the user."""
    try:
        data = await api_get(ctx, "/assets")
    except httpx.HTTPError as e:
        return handle_error(e, "get assets")

    assets = data["assets"]
    return format_response(
        ctx, assets, params.response_format, params.response_mode,
        tool_name="assets", summary=f"{len(assets)} assets",
    )


@mcp.tool(
    name="create_asset",
    annotations={
        "title": "Create Asset",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def create_asset(params: CreateAssetInput, ctx: Context) -> str:
    """Create a new manually-managed asset.

    Examples:
        - "Add my savings account with 5000 EUR" -> type_name=cash, subtype_name=savings,
          name="Savings", balance=5000, currency=eur
    """
    body = {
        "type_name": params.type_name.value,
        "name": params.name,
        "balance": amount_str(params.balance),
        **params.optional_fields(),
    }
    try:
        result = await api_post(ctx, "/assets", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "create asset")
    return serialize(result)


@mcp.tool(
    name="update_asset",
    annotations={
        "title": "Update Asset",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def update_asset(params: UpdateAssetInput, ctx: Context) -> str:
    """Update an existing manually-managed asset."""
    body = compact(
        type_name=params.type_name.value if params.type_name else None,
        name=params.name or None,
        balance=amount_str(params.balance) if params.balance is not None else None,
    )
    body.update(params.optional_fields())
    try:
        result = await api_put(ctx, f"/assets/{params.asset_id}", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "update asset")
    return serialize(result)
