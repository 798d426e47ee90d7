"""Pytest configuration and fixtures."""

from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from mcp_catalog.main import create_app
from mcp_catalog.mcp.dispatcher import Dispatcher
from mcp_catalog.mcp.models import Prompt, Tool
from mcp_catalog.mcp.registry import CatalogRegistry


class FakeProvider:
    """RegistryProvider double that records every invocation."""

    def __init__(
        self,
        tools: list[Tool] | None = None,
        prompts: list[Prompt] | None = None,
        results: dict[str, Any] | None = None,
        errors: dict[str, Exception] | None = None,
    ):
        self.tools = tools or []
        self.prompts = prompts or []
        self.results = results or {}
        self.errors = errors or {}
        self.tool_calls: list[tuple[str, dict[str, Any]]] = []
        self.prompt_calls: list[tuple[str, dict[str, Any]]] = []

    def list_tools(self) -> list[Tool]:
        return list(self.tools)

    async def invoke_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        self.tool_calls.append((name, arguments))
        if name in self.errors:
            raise self.errors[name]
        return self.results.get(name)

    def list_prompts(self) -> list[Prompt]:
        return list(self.prompts)

    async def render_prompt(self, name: str, arguments: dict[str, Any]) -> Any:
        self.prompt_calls.append((name, arguments))
        if name in self.errors:
            raise self.errors[name]
        return self.results.get(name)


@pytest.fixture
def registry() -> CatalogRegistry:
    """Fresh registry with the example provider loaded."""
    registry = CatalogRegistry()
    assert registry.load_provider("example")
    return registry


@pytest.fixture
def empty_registry() -> CatalogRegistry:
    """Registry with nothing registered."""
    return CatalogRegistry()


@pytest.fixture
def app(registry):
    """Application serving the example registry."""
    return create_app(registry=registry)


@pytest.fixture
def client(app):
    """Synchronous test client for FastAPI app."""
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client(app):
    """Async test client for FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Fake provider with one tool and one prompt."""
    return FakeProvider(
        tools=[Tool(name="echo", description="Echo", inputSchema={"type": "object"})],
        prompts=[Prompt(name="hello", description="Hello")],
    )


@pytest.fixture
def dispatcher(fake_provider) -> Dispatcher:
    """Dispatcher over the fake provider."""
    return Dispatcher(fake_provider)


@pytest.fixture
def sample_jsonrpc_request():
    """Sample JSON-RPC request factory."""
    def _make_request(method: str, params: dict = None, id: int = 1):
        return {
            "jsonrpc": "2.0",
            "id": id,
            "method": method,
            "params": params or {},
        }
    return _make_request


@pytest.fixture
def make_provider():
    """Factory for fake providers with custom catalogs."""
    return FakeProvider
