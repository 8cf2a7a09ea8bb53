"""
Pytest configuration and fixtures
"""
from types import SimpleNamespace

import httpx
import pytest
import pytest_asyncio

from lunchmoney_mcp.app import build_client
from lunchmoney_mcp.response import OutputFormatter

API_URL = "https://api.test/v1"
API_TOKEN = "test-token"


class FakeUpstream:
    """Records requests and replies with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.json = {}
        self.content = None

    def reply(self, status_code=200, json=None, content=None):
        self.status_code = status_code
        self.json = json
        self.content = content

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def formatter(tmp_path):
    """Output formatter writing under a per-test temp root"""
    return OutputFormatter(tmp_path / "out")


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest_asyncio.fixture
async def ctx(upstream, formatter):
    """Stand-in for the FastMCP Context handed to tools"""
    client = build_client(API_URL, API_TOKEN, timeout=5.0, transport=httpx.MockTransport(upstream))
    yield SimpleNamespace(
        request_context=SimpleNamespace(
            lifespan_context={"http": client, "formatter": formatter},
        )
    )
    await client.aclose()


@pytest.fixture
def sample_transactions():
    """Three transactions, two carrying plaid_metadata"""
    return [
        {
            "id": 1,
            "payee": "Coffee Shop",
            "amount": "4.5000",
            "notes": None,
            "original_name": "COFFEE SHOP #123",
            "plaid_metadata": {"merchant_name": "Coffee Shop", "category": ["Food and Drink"]},
        },
        {
            "id": 2,
            "payee": "Bakery",
            "amount": "7.2500",
            "notes": "bread",
            "original_name": "BAKERY",
            "plaid_metadata": {"merchant_name": "Bakery"},
        },
        {
            "id": 3,
            "payee": "Landlord",
            "amount": "1200.0000",
            "notes": "rent, paid after coffee with the landlord",
            "original_name": None,
        },
    ]
