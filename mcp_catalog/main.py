"""FastAPI MCP Server - Main application entrypoint."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mcp_catalog import APP_NAME, __version__
from mcp_catalog.config.loader import Settings, get_settings, load_catalog_config, get_enabled_providers
from mcp_catalog.mcp.dispatcher import Dispatcher, PROTOCOL_VERSION
from mcp_catalog.mcp.handlers import MCPHandlers
from mcp_catalog.mcp.jsonrpc import JsonRpcProcessor
from mcp_catalog.mcp.models import Capabilities
from mcp_catalog.mcp.provider import RegistryProvider
from mcp_catalog.mcp.registry import CatalogRegistry
from mcp_catalog.mcp.rest import RestAdapter, internal_error_response
from mcp_catalog.utils.logging import setup_logging, set_request_id, get_logger

logger = logging.getLogger(__name__)

router = APIRouter()


def build_registry(settings: Settings) -> CatalogRegistry:
    """Create the catalog registry and load the configured providers."""
    config = load_catalog_config(settings.catalog_config)
    enabled_providers = get_enabled_providers(config)

    registry = CatalogRegistry()
    results = registry.load_providers(enabled_providers)
    for provider, success in results.items():
        if not success:
            logger.warning(f"Failed to load provider: {provider}")
    return registry


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    setup_logging()
    log = get_logger("startup")

    settings: Settings = app.state.settings
    dispatcher: Dispatcher = app.state.dispatcher
    log.info(
        "Starting MCP server",
        server_name=dispatcher.server_name,
        version=dispatcher.server_version,
        port=settings.port,
    )
    log.info(
        "Catalog ready",
        tool_count=len(dispatcher.list_tools()),
        prompt_count=len(dispatcher.list_prompts()),
    )

    yield

    # Shutdown
    log.info("Shutting down MCP server")


def get_dispatcher(request: Request) -> Dispatcher:
    """Dispatcher shared by both transports."""
    return request.app.state.dispatcher


# =============================================================================
# Health and Info Endpoints
# =============================================================================


@router.get("/")
async def root(request: Request) -> dict:
    """Root endpoint with server info."""
    dispatcher = get_dispatcher(request)
    return {
        "name": dispatcher.server_name,
        "version": dispatcher.server_version,
        "description": "MCP server exposing a catalog of tools and prompts",
        "endpoints": {
            "mcp": "/mcp",
            "capabilities": "/mcp/capabilities",
            "info": "/info",
            "health": "/health",
            "tools": "/tools",
            "tool_call": "/tools/{tool_name}/call",
            "prompts": "/prompts",
            "prompt": "/prompts/{prompt_name}",
        },
        "tools_available": len(dispatcher.list_tools()),
        "prompts_available": len(dispatcher.list_prompts()),
        "mcp_protocol_version": PROTOCOL_VERSION,
    }


@router.get("/info")
async def info(request: Request) -> dict:
    """Server identity and capabilities."""
    dispatcher = get_dispatcher(request)
    return {
        "name": dispatcher.server_name,
        "version": dispatcher.server_version,
        "capabilities": Capabilities().model_dump(),
    }


@router.get("/health")
async def health(request: Request) -> dict:
    """Health check endpoint."""
    dispatcher = get_dispatcher(request)
    return {
        "status": "healthy",
        "mcp_ready": True,
        "tools_count": len(dispatcher.list_tools()),
        "prompts_count": len(dispatcher.list_prompts()),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# =============================================================================
# MCP Endpoints
# =============================================================================


@router.post("/mcp")
async def mcp_endpoint(request: Request) -> JSONResponse:
    """
    JSON-RPC endpoint.

    Accepts JSON-RPC 2.0 messages and always answers with an envelope,
    echoing the request id (null when absent).
    """
    body = await request.body()

    processor = JsonRpcProcessor(MCPHandlers(get_dispatcher(request)))
    response = await processor.handle_message(body)

    return JSONResponse(content=response.model_dump())


@router.get("/mcp/capabilities")
async def mcp_capabilities(request: Request) -> dict:
    """Same payload as the initialize method."""
    return get_dispatcher(request).initialize().model_dump()


# =============================================================================
# REST Endpoints
# =============================================================================


@router.get("/tools")
async def list_tools(request: Request) -> dict:
    """List available tools."""
    return RestAdapter(get_dispatcher(request)).list_tools()


@router.post("/tools/{tool_name}/call")
async def call_tool(tool_name: str, request: Request) -> JSONResponse:
    """Execute a tool; the body is {"arguments": {...}} or the arguments themselves."""
    body = await request.body()
    return await RestAdapter(get_dispatcher(request)).call_tool(tool_name, body)


@router.get("/prompts")
async def list_prompts(request: Request) -> dict:
    """List available prompts."""
    return RestAdapter(get_dispatcher(request)).list_prompts()


@router.post("/prompts/{prompt_name}")
async def get_prompt(prompt_name: str, request: Request) -> JSONResponse:
    """Render a prompt; the body is {"arguments": {...}} or the arguments themselves."""
    body = await request.body()
    return await RestAdapter(get_dispatcher(request)).get_prompt(prompt_name, body)


# =============================================================================
# Application Factory
# =============================================================================


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for failures the transports did not recognize."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return internal_error_response()


def create_app(
    registry: RegistryProvider | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        registry: Registry provider to serve. If None, a CatalogRegistry is
            built from the providers enabled in the catalog config.
        settings: Settings override, mainly for tests.
    """
    settings = settings or get_settings()
    if registry is None:
        registry = build_registry(settings)

    app = FastAPI(
        title="MCP Catalog Server",
        description="Tools and prompts over MCP JSON-RPC and REST",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.dispatcher = Dispatcher(registry, server_name=APP_NAME, server_version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = set_request_id(request.headers.get("X-Request-ID"))
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router)
    return app


app = create_app()


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "mcp_catalog.main:app",
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
