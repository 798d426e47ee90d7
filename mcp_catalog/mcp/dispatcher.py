"""Transport-agnostic dispatcher between callers and the registry provider."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from mcp_catalog import APP_NAME, __version__
from mcp_catalog.mcp.errors import (
    DispatchError,
    MalformedRequestError,
    PromptNotFoundError,
    PromptRenderError,
    ToolExecutionError,
    ToolNotFoundError,
)
from mcp_catalog.mcp.models import (
    Capabilities,
    InitializeParams,
    InitializeResult,
    Prompt,
    ServerInfo,
    Tool,
)
from mcp_catalog.mcp.provider import RegistryProvider

logger = logging.getLogger(__name__)

# MCP protocol version we support
PROTOCOL_VERSION = "2024-11-05"


def default_input_schema() -> dict[str, Any]:
    """Schema advertised for tools that do not declare one."""
    return {"type": "object", "properties": {}, "required": []}


def tool_text(result: Any) -> str:
    """Render a tool result as text: strings pass through, the rest is pretty JSON."""
    if isinstance(result, str):
        return result
    return json.dumps(jsonable_encoder(result), indent=2, ensure_ascii=False)


def _error_detail(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def _require_name(name: Any, kind: str) -> str:
    if not isinstance(name, str) or not name:
        raise MalformedRequestError(f"{kind} name is required")
    return name


def _normalize_arguments(arguments: Any) -> dict[str, Any]:
    if arguments is None:
        return {}
    if not isinstance(arguments, Mapping):
        raise MalformedRequestError("Arguments must be an object")
    return dict(arguments)


class Dispatcher:
    """
    Maps catalog operations onto a RegistryProvider and normalizes outcomes.

    Results are returned raw and failures are raised as DispatchError
    subclasses; the transports decide how either is serialized.
    """

    def __init__(
        self,
        provider: RegistryProvider,
        server_name: str = APP_NAME,
        server_version: str = __version__,
    ):
        self.provider = provider
        self.server_name = server_name
        self.server_version = server_version

    def initialize(self, params: dict[str, Any] | None = None) -> InitializeResult:
        """Describe the server. Never fails, whatever the params."""
        try:
            init_params = InitializeParams(**(params or {}))
            logger.info(
                f"Initialize from {init_params.clientInfo.name} "
                f"{init_params.clientInfo.version}"
            )
        except (TypeError, ValidationError) as e:
            logger.debug(f"Ignoring invalid initialize params: {e}")

        return InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=Capabilities(),
            serverInfo=ServerInfo(
                name=self.server_name,
                version=self.server_version,
            ),
        )

    def list_tools(self) -> list[Tool]:
        """List tool descriptors, filling in the default input schema."""
        return [
            tool if tool.inputSchema is not None
            else tool.model_copy(update={"inputSchema": default_input_schema()})
            for tool in self.provider.list_tools()
        ]

    def list_prompts(self) -> list[Prompt]:
        """List prompt descriptors, defaulting arguments to an empty list."""
        return [
            prompt if prompt.arguments is not None
            else prompt.model_copy(update={"arguments": []})
            for prompt in self.provider.list_prompts()
        ]

    async def call_tool(self, name: Any, arguments: Any = None) -> Any:
        """
        Invoke a tool and return its raw result.

        Raises:
            MalformedRequestError: Name missing or arguments not an object.
            ToolNotFoundError: No tool with this name; the provider is not invoked.
            ToolExecutionError: The provider raised; carries its message.
        """
        name = _require_name(name, "Tool")
        arguments = _normalize_arguments(arguments)

        if not any(tool.name == name for tool in self.provider.list_tools()):
            raise ToolNotFoundError(name)

        logger.info(f"Calling tool: {name}")
        try:
            return await self.provider.invoke_tool(name, arguments)
        except DispatchError:
            raise
        except Exception as e:
            logger.warning(f"Tool {name} failed: {_error_detail(e)}")
            raise ToolExecutionError(name, _error_detail(e)) from e

    async def get_prompt(self, name: Any, arguments: Any = None) -> Any:
        """
        Render a prompt and return the provider's payload unmodified.

        Raises:
            MalformedRequestError: Name missing or arguments not an object.
            PromptNotFoundError: No prompt with this name.
            PromptRenderError: The provider raised; carries its message.
        """
        name = _require_name(name, "Prompt")
        arguments = _normalize_arguments(arguments)

        if not any(prompt.name == name for prompt in self.provider.list_prompts()):
            raise PromptNotFoundError(name)

        logger.info(f"Getting prompt: {name}")
        try:
            return await self.provider.render_prompt(name, arguments)
        except DispatchError:
            raise
        except Exception as e:
            logger.warning(f"Prompt {name} failed: {_error_detail(e)}")
            raise PromptRenderError(name, _error_detail(e)) from e
