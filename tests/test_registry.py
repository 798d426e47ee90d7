"""Tests for the catalog registry and the example provider."""

import pytest

from mcp_catalog.mcp.decorators import get_catalog_metadata, prompt, tool
from mcp_catalog.mcp.errors import PromptNotFoundError, ToolNotFoundError
from mcp_catalog.mcp.provider import RegistryProvider
from mcp_catalog.mcp.registry import CatalogRegistry
from mcp_catalog.providers.example.prompts import register_prompts
from mcp_catalog.providers.example.tools import add, echo, ping, register_tools


class TestCatalogRegistry:
    """Tests for the registry itself."""

    def test_implements_provider_protocol(self):
        """Test that the registry satisfies the RegistryProvider protocol."""
        assert isinstance(CatalogRegistry(), RegistryProvider)

    def test_register_and_list_tool(self):
        """Test registering and listing a tool."""
        registry = CatalogRegistry()

        async def handler(args):
            return args

        registry.register_tool("test-tool", "A test tool", handler, {"type": "object"})

        tools = registry.list_tools()
        assert len(tools) == 1
        assert tools[0].name == "test-tool"
        assert tools[0].description == "A test tool"
        assert tools[0].inputSchema == {"type": "object"}

    def test_tool_without_schema_lists_none(self):
        """Test that the registry does not invent schemas."""
        registry = CatalogRegistry()
        registry.register_tool("bare", "", lambda args: None)
        assert registry.list_tools()[0].inputSchema is None

    def test_re_register_overwrites(self):
        """Test that registering a name twice keeps one entry."""
        registry = CatalogRegistry()
        registry.register_tool("t", "first", lambda args: 1)
        registry.register_tool("t", "second", lambda args: 2)
        assert registry.tool_count == 1
        assert registry.list_tools()[0].description == "second"

    @pytest.mark.asyncio
    async def test_invoke_sync_and_async_handlers(self):
        """Test that both plain and coroutine handlers are supported."""
        registry = CatalogRegistry()

        async def async_handler(args):
            return {"async": args["x"]}

        registry.register_tool("sync", "", lambda args: args["x"] * 2)
        registry.register_tool("async", "", async_handler)

        assert await registry.invoke_tool("sync", {"x": 2}) == 4
        assert await registry.invoke_tool("async", {"x": 2}) == {"async": 2}

    @pytest.mark.asyncio
    async def test_invoke_unknown_tool(self):
        """Test that unknown tools raise ToolNotFoundError."""
        with pytest.raises(ToolNotFoundError):
            await CatalogRegistry().invoke_tool("nope", {})

    @pytest.mark.asyncio
    async def test_handler_errors_propagate(self):
        """Test that handler exceptions reach the caller unchanged."""
        registry = CatalogRegistry()

        def handler(args):
            raise RuntimeError("boom")

        registry.register_tool("t", "", handler)
        with pytest.raises(RuntimeError, match="boom"):
            await registry.invoke_tool("t", {})

    @pytest.mark.asyncio
    async def test_render_unknown_prompt(self):
        """Test that unknown prompts raise PromptNotFoundError."""
        with pytest.raises(PromptNotFoundError):
            await CatalogRegistry().render_prompt("nope", {})

    def test_prompt_arguments_become_models(self):
        """Test that prompt argument dicts are converted to descriptors."""
        registry = CatalogRegistry()
        registry.register_prompt(
            "p", "desc", lambda args: {}, [{"name": "x", "required": True}]
        )
        prompt_descriptor = registry.list_prompts()[0]
        assert prompt_descriptor.arguments[0].name == "x"
        assert prompt_descriptor.arguments[0].required is True
        assert prompt_descriptor.arguments[0].description == ""

    def test_add_decorated_functions(self):
        """Test registering @tool and @prompt functions."""

        @tool(name="decorated-tool", description="d")
        def my_tool(arguments):
            return None

        @prompt(name="decorated-prompt", description="p")
        def my_prompt(arguments):
            return {"messages": []}

        registry = CatalogRegistry()
        registry.add(my_tool)
        registry.add(my_prompt)
        assert [t.name for t in registry.list_tools()] == ["decorated-tool"]
        assert [p.name for p in registry.list_prompts()] == ["decorated-prompt"]

    def test_add_undecorated_function_fails(self):
        """Test that plain functions cannot be added."""
        with pytest.raises(ValueError):
            CatalogRegistry().add(lambda arguments: None)


class TestProviderLoading:
    """Tests for plugin-style provider loading."""

    def test_load_example_provider(self):
        """Test that the example provider registers tools and prompts."""
        registry = CatalogRegistry()
        assert registry.load_provider("example") is True
        assert registry.tool_count == 3
        assert registry.prompt_count == 2
        assert registry.provider_count == 1

    def test_load_provider_twice(self):
        """Test that loading is idempotent."""
        registry = CatalogRegistry()
        registry.load_provider("example")
        assert registry.load_provider("example") is True
        assert registry.tool_count == 3

    def test_load_missing_provider(self):
        """Test that a missing provider reports failure without raising."""
        registry = CatalogRegistry()
        assert registry.load_providers(["does_not_exist", "example"]) == {
            "does_not_exist": False,
            "example": True,
        }

    def test_missing_dependency_is_not_treated_as_absent_module(self, monkeypatch):
        """Test that a provider importing a missing package fails to load."""
        import mcp_catalog.mcp.registry as registry_module

        real_import = registry_module.importlib.import_module

        def fake_import(name, *args, **kwargs):
            if ".brokenprov." in name:
                raise ModuleNotFoundError("No module named 'mcp_cat'", name="mcp_cat")
            return real_import(name, *args, **kwargs)

        monkeypatch.setattr(registry_module.importlib, "import_module", fake_import)

        registry = CatalogRegistry()
        assert registry.load_provider("brokenprov") is False
        assert registry.provider_count == 0


class TestExampleProvider:
    """Tests for the example tools and prompts."""

    def test_decorators_attach_metadata(self):
        """Test that example handlers carry registration metadata."""
        metadata = get_catalog_metadata(add)
        assert metadata["kind"] == "tool"
        assert metadata["input_schema"]["required"] == ["a", "b"]
        assert get_catalog_metadata(ping)["input_schema"] is None

    @pytest.mark.asyncio
    async def test_echo_returns_arguments(self):
        assert await echo({"text": "hi"}) == {"text": "hi"}

    def test_ping(self):
        assert ping({}) == "pong"

    @pytest.mark.asyncio
    async def test_add(self):
        assert await add({"a": 1.5, "b": 2}) == {"sum": 3.5}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, {"a": 1, "b": "2"}, {"a": True, "b": 1}])
    async def test_add_rejects_non_numbers(self, arguments):
        with pytest.raises(ValueError, match="must be a number"):
            await add(arguments)

    def test_register_functions(self):
        """Test the provider hooks directly."""
        registry = CatalogRegistry()
        register_tools(registry)
        register_prompts(registry)
        assert [t.name for t in registry.list_tools()] == ["echo", "ping", "add"]
        assert [p.name for p in registry.list_prompts()] == ["greeting", "code-review"]

    @pytest.mark.asyncio
    async def test_code_review_defaults_language(self, registry: CatalogRegistry):
        """Test that the optional language argument has a fallback."""
        payload = await registry.render_prompt("code-review", {"code": "x = 1"})
        assert "the given language" in payload["messages"][0]["content"]["text"]
