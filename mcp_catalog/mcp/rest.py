"""REST transport adapter: path-based endpoints over the same dispatcher."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from mcp_catalog.mcp.dispatcher import Dispatcher
from mcp_catalog.mcp.errors import DispatchError, ErrorKind, MalformedRequestError

logger = logging.getLogger(__name__)

# HTTP 400 error codes per dispatch failure kind
REST_ERROR_CODES: dict[ErrorKind, str] = {
    ErrorKind.TOOL_NOT_FOUND: "TOOL_EXECUTION_ERROR",
    ErrorKind.TOOL_EXECUTION_ERROR: "TOOL_EXECUTION_ERROR",
    ErrorKind.PROMPT_NOT_FOUND: "PROMPT_EXECUTION_ERROR",
    ErrorKind.PROMPT_RENDER_ERROR: "PROMPT_EXECUTION_ERROR",
    ErrorKind.MALFORMED_REQUEST: "MALFORMED_REQUEST",
}

INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


def error_body(code: str, message: str) -> dict[str, Any]:
    """REST error body."""
    return {"error": {"code": code, "message": message}}


def internal_error_response() -> JSONResponse:
    """Generic HTTP 500 response; never carries exception details."""
    return JSONResponse(
        status_code=500,
        content=error_body(INTERNAL_SERVER_ERROR, "An unexpected error occurred"),
    )


def dispatch_error_response(error: DispatchError) -> JSONResponse:
    """Map a recognized dispatch failure to an HTTP response."""
    code = REST_ERROR_CODES.get(error.kind)
    if code is None:
        return internal_error_response()
    return JSONResponse(status_code=400, content=error_body(code, error.message))


def extract_arguments(raw_body: bytes) -> dict[str, Any]:
    """
    Read call arguments from a request body.

    Accepts either ``{"arguments": {...}}`` or the arguments object itself.
    An empty body means no arguments.

    Raises:
        MalformedRequestError: Body is not JSON or arguments are not an object.
    """
    if not raw_body.strip():
        return {}

    try:
        body = json.loads(raw_body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedRequestError(f"Invalid JSON body: {e}") from e

    if not isinstance(body, Mapping):
        raise MalformedRequestError("Request body must be a JSON object")

    arguments = body.get("arguments")
    if arguments is None:
        return dict(body)
    if not isinstance(arguments, Mapping):
        raise MalformedRequestError("'arguments' must be a JSON object")
    return dict(arguments)


class RestAdapter:
    """Serve the catalog over plain REST endpoints."""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    def list_tools(self) -> dict[str, Any]:
        return {"tools": [tool.model_dump() for tool in self.dispatcher.list_tools()]}

    def list_prompts(self) -> dict[str, Any]:
        return {"prompts": [prompt.model_dump() for prompt in self.dispatcher.list_prompts()]}

    async def call_tool(self, tool_name: str, raw_body: bytes) -> JSONResponse:
        """Run a tool; the raw result is the response body."""
        try:
            arguments = extract_arguments(raw_body)
            result = await self.dispatcher.call_tool(tool_name, arguments)
        except DispatchError as e:
            logger.info(f"REST tool call {tool_name} failed: {e.kind.value}")
            return dispatch_error_response(e)
        return JSONResponse(content=jsonable_encoder(result))

    async def get_prompt(self, prompt_name: str, raw_body: bytes) -> JSONResponse:
        """Render a prompt; the rendered payload is the response body."""
        try:
            arguments = extract_arguments(raw_body)
            result = await self.dispatcher.get_prompt(prompt_name, arguments)
        except DispatchError as e:
            logger.info(f"REST prompt {prompt_name} failed: {e.kind.value}")
            return dispatch_error_response(e)
        return JSONResponse(content=jsonable_encoder(result))
