"""MCP method handlers for JSON-RPC requests."""

from typing import Any

from pydantic import ValidationError

from mcp_catalog.mcp.dispatcher import Dispatcher, tool_text
from mcp_catalog.mcp.errors import MalformedRequestError, UnknownMethodError
from mcp_catalog.mcp.models import (
    PromptGetParams,
    PromptsListResult,
    TextContent,
    ToolCallParams,
    ToolCallResult,
    ToolsListResult,
)


def _parse_params(model: type, params: dict[str, Any] | None, method: str) -> Any:
    try:
        return model(**(params or {}))
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise MalformedRequestError(
            f"Missing or invalid params for {method}: {', '.join(fields)}"
        ) from e


class MCPHandlers:
    """Handlers for the supported MCP protocol methods."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher
        self._handlers = {
            "initialize": self.handle_initialize,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
            "prompts/list": self.handle_prompts_list,
            "prompts/get": self.handle_prompts_get,
        }

    @property
    def methods(self) -> list[str]:
        """Names of the supported methods."""
        return list(self._handlers)

    async def handle_initialize(self, params: dict[str, Any] | None) -> dict[str, Any]:
        """Handle the initialize request."""
        return self.dispatcher.initialize(params).model_dump()

    async def handle_tools_list(self, params: dict[str, Any] | None) -> dict[str, Any]:
        """Handle the tools/list request."""
        return ToolsListResult(tools=self.dispatcher.list_tools()).model_dump()

    async def handle_tools_call(self, params: dict[str, Any] | None) -> dict[str, Any]:
        """Handle the tools/call request, wrapping the result as text content."""
        call_params = _parse_params(ToolCallParams, params, "tools/call")
        result = await self.dispatcher.call_tool(call_params.name, call_params.arguments)
        return ToolCallResult(content=[TextContent(text=tool_text(result))]).model_dump()

    async def handle_prompts_list(self, params: dict[str, Any] | None) -> dict[str, Any]:
        """Handle the prompts/list request."""
        return PromptsListResult(prompts=self.dispatcher.list_prompts()).model_dump()

    async def handle_prompts_get(self, params: dict[str, Any] | None) -> Any:
        """Handle the prompts/get request; the payload is returned as rendered."""
        get_params = _parse_params(PromptGetParams, params, "prompts/get")
        return await self.dispatcher.get_prompt(get_params.name, get_params.arguments)

    async def dispatch(self, method: str, params: dict[str, Any] | None) -> Any:
        """
        Dispatch a method call to the appropriate handler.

        Raises:
            UnknownMethodError: The method is not one of the supported ones.
            DispatchError: Any failure raised by the dispatcher.
        """
        handler = self._handlers.get(method)
        if handler is None:
            raise UnknownMethodError(method)
        return await handler(params)
