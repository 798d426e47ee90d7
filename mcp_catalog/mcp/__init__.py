"""MCP dispatcher with JSON-RPC 2.0 and REST transports."""

from mcp_catalog.mcp.models import (
    JsonRpcRequest,
    JsonRpcResponse,
    JsonRpcError,
    Tool,
    Prompt,
    PromptArgument,
    TextContent,
    ToolCallResult,
)
from mcp_catalog.mcp.provider import RegistryProvider
from mcp_catalog.mcp.registry import CatalogRegistry
from mcp_catalog.mcp.dispatcher import Dispatcher, PROTOCOL_VERSION
from mcp_catalog.mcp.errors import (
    INTERNAL_ERROR,
    ErrorKind,
    DispatchError,
)

__all__ = [
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcError",
    "Tool",
    "Prompt",
    "PromptArgument",
    "TextContent",
    "ToolCallResult",
    "RegistryProvider",
    "CatalogRegistry",
    "Dispatcher",
    "PROTOCOL_VERSION",
    "INTERNAL_ERROR",
    "ErrorKind",
    "DispatchError",
]
