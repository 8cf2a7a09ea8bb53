"""MCP server exposing the Lunch Money personal-finance API as agent tools."""

__version__ = "0.3.0"
