"""
FastMCP application and shared helpers for the Lunch Money tools.

Tool modules under ``lunchmoney_mcp.tools`` register themselves on ``mcp``
and talk to the upstream API through the ``api_*`` helpers below.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx
from mcp.server.fastmcp import Context, FastMCP

from lunchmoney_mcp.config import get_settings
from lunchmoney_mcp.response import FormatOptions, OutputFormatter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: shared httpx client and output formatter
# ---------------------------------------------------------------------------

def build_client(base_url: str, token: str, timeout: float,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Create the bearer-authenticated client used for every upstream call."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers={"Authorization": f"Bearer {token}"},
        transport=transport,
    )


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
    """Manage a shared httpx client across tool calls."""
    settings = get_settings()
    if not settings.api_token:
        logger.warning("LUNCHMONEY_API_TOKEN is not set; upstream calls will be rejected")

    client = build_client(settings.api_url, settings.api_token, settings.timeout)
    try:
        yield {
            "http": client,
            "formatter": OutputFormatter(settings.tmp_dir),
        }
    finally:
        await client.aclose()


mcp = FastMCP("lunchmoney_mcp", lifespan=app_lifespan)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _state(ctx: Context) -> Dict[str, Any]:
    return ctx.request_context.lifespan_context


def _get_client(ctx: Context) -> httpx.AsyncClient:
    """Retrieve the shared httpx client from lifespan state."""
    return _state(ctx)["http"]


def compact(**fields: Any) -> Dict[str, Any]:
    """Keep only the fields that were actually provided (not None)."""
    return {key: value for key, value in fields.items() if value is not None}


async def _api_request(ctx: Context, method: str, path: str, *,
                       params: Optional[Dict[str, Any]] = None,
                       json_body: Any = None,
                       parse: bool = True) -> Any:
    client = _get_client(ctx)
    logger.debug("%s %s params=%s", method, path, params)
    resp = await client.request(method, path, params=params, json=json_body)
    resp.raise_for_status()
    return resp.json() if parse else None


async def api_get(ctx: Context, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    """Make a GET request to the Lunch Money API."""
    return await _api_request(ctx, "GET", path, params=params)


async def api_post(ctx: Context, path: str, json_body: Any = None, parse: bool = True) -> Any:
    """Make a POST request to the Lunch Money API."""
    return await _api_request(ctx, "POST", path, json_body=json_body, parse=parse)


async def api_put(ctx: Context, path: str, json_body: Any) -> Any:
    """Make a PUT request to the Lunch Money API."""
    return await _api_request(ctx, "PUT", path, json_body=json_body)


async def api_delete(ctx: Context, path: str, params: Optional[Dict[str, Any]] = None,
                     parse: bool = True) -> Any:
    """Make a DELETE request to the Lunch Money API."""
    return await _api_request(ctx, "DELETE", path, params=params, parse=parse)


def format_response(ctx: Context, data: Any, response_format, response_mode,
                    tool_name: str, summary: Optional[str] = None) -> str:
    """Shape ``data`` with the lifespan's OutputFormatter."""
    formatter: OutputFormatter = _state(ctx)["formatter"]
    return formatter.format_response(
        data, response_format, response_mode,
        FormatOptions(tool_name=tool_name, summary=summary),
    )


def handle_error(e: httpx.HTTPError, action: str) -> str:
    """Turn an upstream failure into a message the agent can act on.

    Non-2xx responses are reported as ``Failed to <action>: <status text>``
    instead of being raised, so one failing call does not abort the session.
    """
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        reason = e.response.reason_phrase or f"HTTP {status}"
        logger.warning("Upstream call failed (%s): %s %s", action, status, reason)
        if status == 401:
            return f"Failed to {action}: {reason}. Check your LUNCHMONEY_API_TOKEN."
        return f"Failed to {action}: {reason}"
    logger.warning("Upstream call failed (%s): %s", action, e)
    if isinstance(e, httpx.TimeoutException):
        return f"Failed to {action}: request timed out"
    if isinstance(e, httpx.ConnectError):
        return f"Failed to {action}: cannot connect to the Lunch Money API"
    return f"Failed to {action}: {type(e).__name__}: {e}"


def amount_str(value: float) -> str:
    """Render a number the way the API expects amounts: a plain numeric string."""
    # 5000.0 -> "5000", 12.5 -> "12.5"
    return str(int(value)) if float(value).is_integer() else str(value)
