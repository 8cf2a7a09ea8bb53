"""
Local pagination and trimming of transaction listings.

The Lunch Money transactions endpoint ignores ``offset``/``limit``, so the
full matching set always comes back and is windowed here.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 1000

PLAID_METADATA_KEY = "plaid_metadata"
SEARCH_FIELDS = ("payee", "notes", "original_name")

Transaction = Dict[str, Any]


@dataclass
class TransactionWindow:
    transactions: List[Transaction] = field(default_factory=list)
    total_count: int = 0
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    has_more: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transactions": self.transactions,
            "total_count": self.total_count,
            "offset": self.offset,
            "limit": self.limit,
            "has_more": self.has_more,
        }


def window_transactions(
    transactions: Sequence[Transaction],
    offset: int = DEFAULT_OFFSET,
    limit: int = DEFAULT_LIMIT,
) -> TransactionWindow:
    """Slice ``transactions`` to ``[offset:offset + limit]``.

    ``total_count`` is the length of the full input. ``has_more`` is true when
    more than ``limit`` records remain after skipping ``offset``.
    """
    if offset < 0 or limit < 0:
        raise ValueError(f"offset and limit must be non-negative, got offset={offset}, limit={limit}")

    total_count = len(transactions)

    remaining = list(transactions[offset:]) if offset > 0 else list(transactions)
    has_more = len(remaining) > limit
    if limit < len(remaining):
        remaining = remaining[:limit]

    return TransactionWindow(
        transactions=remaining,
        total_count=total_count,
        offset=offset,
        limit=limit,
        has_more=has_more,
    )


def strip_plaid_metadata(transactions: Sequence[Transaction]) -> List[Transaction]:
    """Return copies of ``transactions`` without the ``plaid_metadata`` key."""
    return [
        {key: value for key, value in tx.items() if key != PLAID_METADATA_KEY}
        for tx in transactions
    ]


def matches_query(transaction: Transaction, query: str) -> bool:
    """Case-insensitive substring match against payee, notes and original_name."""
    needle = query.lower()
    for name in SEARCH_FIELDS:
        value = transaction.get(name)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def search_transactions(transactions: Sequence[Transaction], query: str) -> List[Transaction]:
    return [tx for tx in transactions if matches_query(tx, query)]
