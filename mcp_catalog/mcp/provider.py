"""Registry provider protocol consumed by the dispatcher."""

from typing import Any, Protocol, Sequence, runtime_checkable

from mcp_catalog.mcp.models import Prompt, Tool


@runtime_checkable
class RegistryProvider(Protocol):
    """Owner of the tool/prompt catalog and of their execution.

    The dispatcher depends on nothing else. Listing is synchronous;
    invocation and rendering may suspend.
    """

    def list_tools(self) -> Sequence[Tool]: ...

    async def invoke_tool(self, name: str, arguments: dict[str, Any]) -> Any: ...

    def list_prompts(self) -> Sequence[Prompt]: ...

    async def render_prompt(self, name: str, arguments: dict[str, Any]) -> Any: ...
