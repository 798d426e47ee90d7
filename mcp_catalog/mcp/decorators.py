"""Decorators that mark functions as catalog tools or prompts."""

from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

_METADATA_ATTR = "_catalog_metadata"


def tool(
    name: str,
    description: str,
    input_schema: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """
    Decorator to mark a function as an MCP tool.

    Usage:
        @tool(
            name="ping",
            description="Returns pong",
            input_schema={"type": "object", "properties": {}},
        )
        async def ping(arguments: dict) -> str:
            return "pong"

    The function is returned unchanged with _catalog_metadata attached;
    CatalogRegistry.add() reads it at registration time.
    """
    def decorator(func: F) -> F:
        setattr(func, _METADATA_ATTR, {
            "kind": "tool",
            "name": name,
            "description": description,
            "input_schema": input_schema,
        })
        return func

    return decorator


def prompt(
    name: str,
    description: str,
    arguments: list[dict[str, Any]] | None = None,
) -> Callable[[F], F]:
    """
    Decorator to mark a function as an MCP prompt renderer.

    ``arguments`` is a list of ``{"name", "description", "required"}`` dicts.
    """
    def decorator(func: F) -> F:
        setattr(func, _METADATA_ATTR, {
            "kind": "prompt",
            "name": name,
            "description": description,
            "arguments": arguments,
        })
        return func

    return decorator


def get_catalog_metadata(func: Callable[..., Any]) -> dict[str, Any] | None:
    """Get catalog metadata from a decorated function."""
    return getattr(func, _METADATA_ATTR, None)
