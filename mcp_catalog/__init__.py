"""MCP catalog server: tools and prompts over JSON-RPC and REST."""

APP_NAME = "mcp-catalog-server"
__version__ = "1.0.0"
