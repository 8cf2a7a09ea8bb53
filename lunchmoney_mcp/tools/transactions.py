"""Transaction tools: listing, search, CRUD, splits and groups."""

from enum import Enum
from typing import List, Optional

import httpx
from mcp.server.fastmcp import Context
from pydantic import BaseModel, ConfigDict, Field

from lunchmoney_mcp.app import (
    api_delete,
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
from lunchmoney_mcp.windowing import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    search_transactions as filter_transactions,
    strip_plaid_metadata,
    window_transactions,
)

PLAID_METADATA_DESCRIPTION = (
    "Include plaid_metadata in response (default: false). "
    "Set to true when you need original transaction names, "
    "merchant info, or Plaid category suggestions for corrections."
)


# ---------------------------------------------------------------------------
# Enums & Input Models
# ---------------------------------------------------------------------------

class TransactionStatus(str, Enum):
    CLEARED = "cleared"
    UNCLEARED = "uncleared"
    PENDING = "pending"


class GetTransactionsInput(BaseModel):
    """Input for listing transactions in a date range."""
    model_config = ConfigDict(str_strip_whitespace=True)

    start_date: str = Field(..., description="Start date in YYYY-MM-DD format")
    end_date: str = Field(..., description="End date in YYYY-MM-DD format")
    tag_id: Optional[int] = Field(default=None, description="Filter by tag ID")
    recurring_id: Optional[int] = Field(default=None, description="Filter by recurring expense ID")
    plaid_account_id: Optional[int] = Field(default=None, description="Filter by Plaid account ID")
    category_id: Optional[int] = Field(default=None, description="Filter by category ID")
    asset_id: Optional[int] = Field(default=None, description="Filter by asset ID")
    is_group: Optional[bool] = Field(default=None, description="Filter by transaction groups")
    status: Optional[str] = Field(default=None, description="Filter by status: cleared, uncleared, pending")
    offset: int = Field(default=DEFAULT_OFFSET, description="Number of transactions to skip", ge=0)
    limit: int = Field(
        default=DEFAULT_LIMIT,
        description="Maximum transactions to return (default: 1000)",
        ge=0,
    )
    debit_as_negative: Optional[bool] = Field(default=None, description="Pass true to return debit amounts as negative")
    include_plaid_metadata: bool = Field(default=False, description=PLAID_METADATA_DESCRIPTION)
    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


class GetSingleTransactionInput(BaseModel):
    """Input for fetching one transaction."""
    model_config = ConfigDict(str_strip_whitespace=True)

    transaction_id: int = Field(..., description="ID of the transaction to retrieve")
    debit_as_negative: Optional[bool] = Field(default=None, description="Pass true to return debit amounts as negative")


class TransactionFields(BaseModel):
    """Fields shared by inserted and updated transactions."""
    model_config = ConfigDict(str_strip_whitespace=True)

    currency: Optional[str] = Field(default=None, description="Three-letter lowercase currency code")
    category_id: Optional[int] = Field(default=None, description="Category ID")
    asset_id: Optional[int] = Field(default=None, description="Asset ID for manual accounts")
    recurring_id: Optional[int] = Field(default=None, description="Recurring expense ID")
    notes: Optional[str] = Field(default=None, description="Transaction notes")
    status: Optional[TransactionStatus] = Field(default=None, description="Transaction status")
    external_id: Optional[str] = Field(default=None, description="External ID (max 75 characters)", max_length=75)
    tags: Optional[List[int]] = Field(default=None, description="Array of tag IDs")


class NewTransaction(TransactionFields):
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    payee: str = Field(..., description="Payee name")
    amount: str = Field(..., description="Amount as string with up to 4 decimal places")


class TransactionUpdate(TransactionFields):
    date: Optional[str] = Field(default=None, description="Date in YYYY-MM-DD format")
    payee: Optional[str] = Field(default=None, description="Payee name")
    amount: Optional[str] = Field(default=None, description="Amount as string with up to 4 decimal places")


class CreateTransactionsInput(BaseModel):
    """Input for inserting transactions."""
    model_config = ConfigDict(str_strip_whitespace=True)

    transactions: List[NewTransaction] = Field(..., description="Array of transactions to create")
    apply_rules: Optional[bool] = Field(default=None, description="Apply account's rules to transactions")
    skip_duplicates: Optional[bool] = Field(default=None, description="Skip transactions that are potential duplicates")
    check_for_recurring: Optional[bool] = Field(
        default=None, description="Check if transactions are part of recurring expenses"
    )
    debit_as_negative: Optional[bool] = Field(
        default=None, description="Pass true if debits are provided as negative amounts"
    )
    skip_balance_update: Optional[bool] = Field(default=None, description="Skip updating balance for assets/accounts")


class UpdateTransactionInput(BaseModel):
    """Input for updating a transaction."""
    model_config = ConfigDict(str_strip_whitespace=True)

    transaction_id: int = Field(..., description="ID of the transaction to update")
    transaction: TransactionUpdate = Field(..., description="Transaction data to update")
    debit_as_negative: Optional[bool] = Field(
        default=None, description="Pass true if debits are provided as negative amounts"
    )
    skip_balance_update: Optional[bool] = Field(default=None, description="Skip updating balance for assets/accounts")


class UnsplitTransactionsInput(BaseModel):
    """Input for removing transactions from a split."""

    parent_ids: List[int] = Field(..., description="Array of parent transaction IDs to unsplit")
    remove_parents: Optional[bool] = Field(default=None, description="If true, delete parent transactions")


class TransactionGroupIdInput(BaseModel):
    """Input identifying a transaction group."""

    transaction_id: int = Field(..., description="ID of the transaction group")


class CreateTransactionGroupInput(BaseModel):
    """Input for creating a transaction group."""
    model_config = ConfigDict(str_strip_whitespace=True)

    date: str = Field(..., description="Date in YYYY-MM-DD format")
    payee: str = Field(..., description="Payee name for the group")
    category_id: Optional[int] = Field(default=None, description="Category ID for the group")
    notes: Optional[str] = Field(default=None, description="Notes for the group")
    tags: Optional[List[int]] = Field(default=None, description="Array of tag IDs for the group")
    transaction_ids: List[int] = Field(..., description="Array of transaction IDs to group")


class SearchTransactionsInput(BaseModel):
    """Input for local transaction search."""
    # query is matched verbatim, so whitespace is not stripped.

    start_date: str = Field(..., description="Start date in YYYY-MM-DD format")
    end_date: str = Field(..., description="End date in YYYY-MM-DD format")
    query: str = Field(
        ...,
        description="Search query - matches against payee, notes, and original_name (case-insensitive)",
    )
    category_id: Optional[int] = Field(default=None, description="Filter by category ID")
    include_plaid_metadata: bool = Field(default=False, description="Include plaid_metadata in response (default: false)")
    response_format: ResponseFormatField = ResponseFormat.JSON
    response_mode: ResponseModeField = ResponseMode.INLINE


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

@mcp.tool(
    name="get_transactions",
    annotations={
        "title": "Get Transactions",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_transactions(params: GetTransactionsInput, ctx: Context) -> str:
    """Retrieve transactions within a date range with optional filters.

    The Lunch Money API ignores offset/limit, so every matching transaction is
    fetched and the page is cut locally. plaid_metadata is dropped unless
    include_plaid_metadata is true.

    Args:
        params: GetTransactionsInput with dates, filters, offset/limit and output options.

    Returns:
        str: {transactions, total_count, offset, limit, has_more}, or a file summary
        when response_mode is 'file'.
    """
    query = compact(
        start_date=params.start_date,
        end_date=params.end_date,
        tag_id=params.tag_id,
        recurring_id=params.recurring_id,
        plaid_account_id=params.plaid_account_id,
        category_id=params.category_id,
        asset_id=params.asset_id,
        is_group=params.is_group,
        status=params.status,
        debit_as_negative=params.debit_as_negative,
    )
    try:
        data = await api_get(ctx, "/transactions", query)
    except httpx.HTTPError as e:
        return handle_error(e, "get transactions")

    window = window_transactions(data["transactions"], params.offset, params.limit)
    if not params.include_plaid_metadata:
        window.transactions = strip_plaid_metadata(window.transactions)

    return format_response(
        ctx, window.to_dict(), params.response_format, params.response_mode,
        tool_name="transactions",
        summary=(
            f"{len(window.transactions)} of {window.total_count} transactions "
            f"(offset {window.offset}, has_more: {str(window.has_more).lower()})"
        ),
    )


@mcp.tool(
    name="get_single_transaction",
    annotations={
        "title": "Get Single Transaction",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_single_transaction(params: GetSingleTransactionInput, ctx: Context) -> str:
    """Get details of a specific transaction."""
    try:
        data = await api_get(
            ctx, f"/transactions/{params.transaction_id}",
            compact(debit_as_negative=params.debit_as_negative),
        )
    except httpx.HTTPError as e:
        return handle_error(e, "get transaction")
    return serialize(data)


@mcp.tool(
    name="create_transactions",
    annotations={
        "title": "Create Transactions",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def create_transactions(params: CreateTransactionsInput, ctx: Context) -> str:
    """Insert one or more transactions.

    Returns:
        str: The upstream result, typically {"ids": [...]}.
    """
    body = {
        "transactions": [tx.model_dump(mode="json", exclude_none=True) for tx in params.transactions],
        **compact(
            apply_rules=params.apply_rules,
            skip_duplicates=params.skip_duplicates,
            check_for_recurring=params.check_for_recurring,
            debit_as_negative=params.debit_as_negative,
            skip_balance_update=params.skip_balance_update,
        ),
    }
    try:
        result = await api_post(ctx, "/transactions", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "create transactions")
    return serialize(result)


@mcp.tool(
    name="update_transaction",
    annotations={
        "title": "Update Transaction",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def update_transaction(params: UpdateTransactionInput, ctx: Context) -> str:
    """Update an existing transaction. Only the fields provided are sent."""
    body = {
        "transaction": params.transaction.model_dump(mode="json", exclude_none=True),
        **compact(
            debit_as_negative=params.debit_as_negative,
            skip_balance_update=params.skip_balance_update,
        ),
    }
    try:
        result = await api_put(ctx, f"/transactions/{params.transaction_id}", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "update transaction")
    return serialize(result)


@mcp.tool(
    name="unsplit_transactions",
    annotations={
        "title": "Unsplit Transactions",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def unsplit_transactions(params: UnsplitTransactionsInput, ctx: Context) -> str:
    """Remove one or more transactions from a split."""
    body = compact(parent_ids=params.parent_ids, remove_parents=params.remove_parents)
    try:
        result = await api_post(ctx, "/transactions/unsplit", json_body=body)
    except httpx.HTTPError as e:
        return handle_error(e, "unsplit transactions")
    return serialize(result)


@mcp.tool(
    name="get_transaction_group",
    annotations={
        "title": "Get Transaction Group",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def get_transaction_group(params: TransactionGroupIdInput, ctx: Context) -> str:
    """Get details of a transaction group."""
    try:
        result = await api_get(ctx, f"/transactions/group/{params.transaction_id}")
    except httpx.HTTPError as e:
        return handle_error(e, "get transaction group")
    return serialize(result)


@mcp.tool(
    name="create_transaction_group",
    annotations={
        "title": "Create Transaction Group",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def create_transaction_group(params: CreateTransactionGroupInput, ctx: Context) -> str:
    """Create a transaction group from existing transactions."""
    try:
        result = await api_post(
            ctx, "/transactions/group",
            json_body=params.model_dump(mode="json", exclude_none=True),
        )
    except httpx.HTTPError as e:
        return handle_error(e, "create transaction group")
    return serialize(result)


@mcp.tool(
    name="delete_transaction_group",
    annotations={
        "title": "Delete Transaction Group",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def delete_transaction_group(params: TransactionGroupIdInput, ctx: Context) -> str:
    """Delete a transaction group or a single transaction."""
    try:
        await api_delete(ctx, f"/transactions/group/{params.transaction_id}", parse=False)
    except httpx.HTTPError as e:
        return handle_error(e, "delete transaction group")
    return "Transaction group deleted successfully"


@mcp.tool(
    name="search_transactions",
    annotations={
        "title": "Search Transactions",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
async def search_transactions(params: SearchTransactionsInput, ctx: Context) -> str:
    """Search transactions by payee name, notes, or original name.

    Lunch Money has no search endpoint: the whole date range is fetched and
    filtered locally (case-insensitive). Use narrow date ranges for best
    performance.

    Returns:
        str: {query, match_count, transactions}, or a file summary in 'file' mode.
    """
    try:
        data = await api_get(ctx, "/transactions", compact(
            start_date=params.start_date,
            end_date=params.end_date,
            category_id=params.category_id,
        ))
    except httpx.HTTPError as e:
        return handle_error(e, "search transactions")

    matches = filter_transactions(data["transactions"], params.query)
    if not params.include_plaid_metadata:
        matches = strip_plaid_metadata(matches)

    return format_response(
        ctx,
        {"query": params.query, "match_count": len(matches), "transactions": matches},
        params.response_format, params.response_mode,
        tool_name="search-transactions",
        summary=f"{len(matches)} transactions matching '{params.query}'",
    )
