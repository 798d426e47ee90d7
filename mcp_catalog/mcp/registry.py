"""In-memory catalog of tools and prompts with plugin-style provider loading."""

import importlib
import inspect
import logging
from typing import Any, Callable

from mcp_catalog.mcp.decorators import get_catalog_metadata
from mcp_catalog.mcp.errors import PromptNotFoundError, ToolNotFoundError
from mcp_catalog.mcp.models import Prompt, PromptArgument, Tool

logger = logging.getLogger(__name__)

# Handlers receive the call arguments and may be sync or async
ToolHandler = Callable[[dict[str, Any]], Any]
PromptRenderer = Callable[[dict[str, Any]], Any]


class ToolDefinition:
    """A registered tool with its metadata and handler."""

    def __init__(
        self,
        name: str,
        description: str,
        input_schema: dict[str, Any] | None,
        handler: ToolHandler,
    ):
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.handler = handler

    def to_mcp_tool(self) -> Tool:
        """Convert to the MCP Tool descriptor."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


class PromptDefinition:
    """A registered prompt template with its renderer."""

    def __init__(
        self,
        name: str,
        description: str,
        arguments: list[dict[str, Any]] | None,
        renderer: PromptRenderer,
    ):
        self.name = name
        self.description = description
        self.arguments = arguments
        self.renderer = renderer

    def to_mcp_prompt(self) -> Prompt:
        """Convert to the MCP Prompt descriptor."""
        arguments = None
        if self.arguments is not None:
            arguments = [PromptArgument(**arg) for arg in self.arguments]
        return Prompt(
            name=self.name,
            description=self.description,
            arguments=arguments,
        )


async def _call(func: Callable[[dict[str, Any]], Any], arguments: dict[str, Any]) -> Any:
    result = func(arguments)
    if inspect.isawaitable(result):
        result = await result
    return result


class CatalogRegistry:
    """Registry of tools and prompts; implements the RegistryProvider protocol."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._prompts: dict[str, PromptDefinition] = {}
        self._providers: set[str] = set()

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_tool(
        self,
        name: str,
        description: str,
        handler: ToolHandler,
        input_schema: dict[str, Any] | None = None,
    ) -> None:
        """Register a tool with the registry."""
        if name in self._tools:
            logger.warning(f"Tool '{name}' already registered, overwriting")
        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            input_schema=input_schema,
            handler=handler,
        )
        logger.debug(f"Registered tool: {name}")

    def register_prompt(
        self,
        name: str,
        description: str,
        renderer: PromptRenderer,
        arguments: list[dict[str, Any]] | None = None,
    ) -> None:
        """Register a prompt template with the registry."""
        if name in self._prompts:
            logger.warning(f"Prompt '{name}' already registered, overwriting")
        self._prompts[name] = PromptDefinition(
            name=name,
            description=description,
            arguments=arguments,
            renderer=renderer,
        )
        logger.debug(f"Registered prompt: {name}")

    def add(self, func: Callable[..., Any]) -> None:
        """Register a function decorated with @tool or @prompt."""
        metadata = get_catalog_metadata(func)
        if metadata is None:
            raise ValueError(f"{func!r} is not decorated with @tool or @prompt")

        if metadata["kind"] == "tool":
            self.register_tool(
                name=metadata["name"],
                description=metadata["description"],
                handler=func,
                input_schema=metadata["input_schema"],
            )
        else:
            self.register_prompt(
                name=metadata["name"],
                description=metadata["description"],
                renderer=func,
                arguments=metadata["arguments"],
            )

    # -------------------------------------------------------------------------
    # RegistryProvider protocol
    # -------------------------------------------------------------------------

    def list_tools(self) -> list[Tool]:
        """List all registered tools in registration order."""
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    async def invoke_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        """Run a tool's handler. Handler exceptions propagate to the caller."""
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return await _call(tool.handler, arguments)

    def list_prompts(self) -> list[Prompt]:
        """List all registered prompts in registration order."""
        return [prompt.to_mcp_prompt() for prompt in self._prompts.values()]

    async def render_prompt(self, name: str, arguments: dict[str, Any]) -> Any:
        """Render a prompt. Renderer exceptions propagate to the caller."""
        prompt = self._prompts.get(name)
        if prompt is None:
            raise PromptNotFoundError(name)
        return await _call(prompt.renderer, arguments)

    # -------------------------------------------------------------------------
    # Provider loading
    # -------------------------------------------------------------------------

    def load_provider(self, provider_name: str) -> bool:
        """
        Load a provider package and register its tools and prompts.

        Providers live in mcp_catalog/providers/<provider_name>/ and expose
        register_tools(registry) in tools.py and/or register_prompts(registry)
        in prompts.py.
        """
        if provider_name in self._providers:
            logger.debug(f"Provider '{provider_name}' already loaded")
            return True

        hooks = {"tools": "register_tools", "prompts": "register_prompts"}
        found = False
        for module_name, hook in hooks.items():
            module_path = f"mcp_catalog.providers.{provider_name}.{module_name}"
            try:
                module = importlib.import_module(module_path)
            except ModuleNotFoundError as e:
                # Only the provider package or its module itself may be absent
                if e.name in (module_path, module_path.rpartition(".")[0]):
                    continue
                logger.warning(f"Could not import provider '{provider_name}': {e}")
                return False
            except Exception as e:
                logger.error(f"Error loading provider '{provider_name}': {e}")
                return False

            register = getattr(module, hook, None)
            if register is None:
                logger.warning(f"Provider module '{module_path}' has no {hook} function")
                continue
            try:
                register(self)
            except Exception as e:
                logger.error(f"Error registering provider '{provider_name}': {e}")
                return False
            found = True

        if not found:
            logger.warning(f"Provider '{provider_name}' registered nothing")
            return False

        self._providers.add(provider_name)
        logger.info(f"Loaded provider: {provider_name}")
        return True

    def load_providers(self, provider_names: list[str]) -> dict[str, bool]:
        """Load multiple providers, returning success status for each."""
        results = {}
        for name in provider_names:
            results[name] = self.load_provider(name)
        return results

    @property
    def tool_count(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)

    @property
    def prompt_count(self) -> int:
        """Return the number of registered prompts."""
        return len(self._prompts)

    @property
    def provider_count(self) -> int:
        """Return the number of loaded providers."""
        return len(self._providers)
