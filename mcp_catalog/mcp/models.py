"""Pydantic models for the MCP JSON-RPC 2.0 protocol and catalog descriptors."""

from typing import Any, Literal

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr


# =============================================================================
# JSON-RPC 2.0 Base Models
# =============================================================================


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request object."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: StrictInt | StrictFloat | StrictStr | None = None
    method: str
    params: dict[str, Any] | None = None


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: StrictInt | StrictFloat | StrictStr | None = None
    result: Any = None
    error: JsonRpcError | None = None

    def model_dump(self, **kwargs: Any) -> dict[str, Any]:
        """Exactly one of result/error is emitted; id is always present."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump()
        else:
            data["result"] = self.result
        return data


# =============================================================================
# MCP Content Types
# =============================================================================


class TextContent(BaseModel):
    """Text content returned by tools and prompts."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result of a tools/call request."""

    content: list[TextContent]


# =============================================================================
# Catalog Descriptors
# =============================================================================


class Tool(BaseModel):
    """MCP tool descriptor."""

    name: str = Field(..., description="Unique tool name")
    description: str = Field("", description="Human-readable description")
    inputSchema: dict[str, Any] | None = Field(
        None, description="JSON Schema for tool input (advisory only)"
    )


class PromptArgument(BaseModel):
    """An argument accepted by a prompt template."""

    name: str
    description: str = ""
    required: bool = False


class Prompt(BaseModel):
    """MCP prompt descriptor."""

    name: str
    description: str = ""
    arguments: list[PromptArgument] | None = None


class PromptMessage(BaseModel):
    """A single rendered prompt message."""

    role: Literal["user", "assistant"] = "user"
    content: TextContent


class GetPromptResult(BaseModel):
    """Rendered prompt payload."""

    description: str | None = None
    messages: list[PromptMessage]


# =============================================================================
# MCP Protocol Models
# =============================================================================


class ClientInfo(BaseModel):
    """Client information sent during initialization."""

    name: str
    version: str


class ServerInfo(BaseModel):
    """Server information returned during initialization."""

    name: str
    version: str


class Capabilities(BaseModel):
    """Server capabilities, advertised as present-but-empty feature flags."""

    tools: dict[str, Any] = Field(default_factory=dict)
    prompts: dict[str, Any] = Field(default_factory=dict)
    resources: dict[str, Any] = Field(default_factory=dict)


class InitializeParams(BaseModel):
    """Parameters for initialize request."""

    protocolVersion: str
    capabilities: dict[str, Any] = Field(default_factory=dict)
    clientInfo: ClientInfo


class InitializeResult(BaseModel):
    """Result of initialize request."""

    protocolVersion: str
    capabilities: Capabilities
    serverInfo: ServerInfo


class ToolsListResult(BaseModel):
    """Result of tools/list request."""

    tools: list[Tool]


class PromptsListResult(BaseModel):
    """Result of prompts/list request."""

    prompts: list[Prompt]


class ToolCallParams(BaseModel):
    """Parameters for tools/call request."""

    name: str
    arguments: Any = None


class PromptGetParams(BaseModel):
    """Parameters for prompts/get request."""

    name: str
    arguments: Any = None
