"""Example provider tools - demonstrates the tool implementation pattern."""

from numbers import Number
from typing import Any

from mcp_catalog.mcp.decorators import tool
from mcp_catalog.mcp.registry import CatalogRegistry


@tool(
    name="echo",
    description="Returns its arguments unchanged. Use this to test argument passing.",
    input_schema={
        "type": "object",
        "properties": {
            "text": {
                "type": "string",
                "description": "Text to echo back",
            },
        },
        "required": [],
    },
)
async def echo(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle the echo tool call."""
    return arguments


@tool(
    name="ping",
    description="Returns pong. Use this to test if the server is working.",
)
def ping(arguments: dict[str, Any]) -> str:
    """Handle the ping tool call."""
    return "pong"


@tool(
    name="add",
    description="Adds two numbers and returns their sum.",
    input_schema={
        "type": "object",
        "properties": {
            "a": {"type": "number", "description": "First addend"},
            "b": {"type": "number", "description": "Second addend"},
        },
        "required": ["a", "b"],
    },
)
async def add(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle the add tool call."""
    a = arguments.get("a")
    b = arguments.get("b")
    for key, value in (("a", a), ("b", b)):
        if isinstance(value, bool) or not isinstance(value, Number):
            raise ValueError(f"'{key}' must be a number")
    return {"sum": a + b}


def register_tools(registry: CatalogRegistry) -> None:
    """Register all example provider tools with the registry."""
    for handler in (echo, ping, add):
        registry.add(handler)
