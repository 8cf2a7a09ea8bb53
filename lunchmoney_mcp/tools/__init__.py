"""Tool modules. Importing this package registers every tool on ``lunchmoney_mcp.app.mcp``."""

from lunchmoney_mcp.tools import (  # noqa: F401
    assets,
    budgets,
    categories,
    crypto,
    plaid_accounts,
    recurring_items,
    tags,
    transactions,
)
