"""JSON-RPC 2.0 transport adapter."""

import json
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from mcp_catalog.mcp.errors import DispatchError, MalformedRequestError, make_error_data
from mcp_catalog.mcp.handlers import MCPHandlers
from mcp_catalog.mcp.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse

logger = logging.getLogger(__name__)


def _echo_id(data: Any) -> Any:
    """Pull a usable id out of a raw payload so even invalid requests echo it."""
    if isinstance(data, dict):
        request_id = data.get("id")
        if isinstance(request_id, (int, float, str)) and not isinstance(request_id, bool):
            return request_id
    return None


class JsonRpcProcessor:
    """
    Process JSON-RPC 2.0 messages.

    Every outcome becomes a response envelope. All failures carry the
    internal error code (-32603); only the message tells them apart.
    """

    def __init__(self, handlers: MCPHandlers):
        self.handlers = handlers

    def decode(self, raw_data: str | bytes) -> Any:
        """
        Decode a raw body as JSON.

        Raises:
            MalformedRequestError: Body is not valid JSON.
        """
        try:
            if isinstance(raw_data, bytes):
                raw_data = raw_data.decode("utf-8")
            return json.loads(raw_data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedRequestError(f"Invalid JSON: {e}") from e

    def parse_request(self, data: Any) -> JsonRpcRequest:
        """
        Validate decoded JSON as a JSON-RPC request.

        Raises:
            MalformedRequestError: Not a request object.
        """
        if not isinstance(data, dict):
            raise MalformedRequestError("Invalid JSON-RPC request: expected an object")

        try:
            return JsonRpcRequest(**data)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise MalformedRequestError(f"Invalid JSON-RPC request: {problems}") from e

    def error_response(self, request_id: Any, message: str) -> JsonRpcResponse:
        """Build an error envelope."""
        return JsonRpcResponse(id=request_id, error=JsonRpcError(**make_error_data(message)))

    async def process_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Dispatch a validated request and wrap the outcome."""
        try:
            result = jsonable_encoder(
                await self.handlers.dispatch(request.method, request.params)
            )
            # Strict JSON only: NaN and infinity have no JSON spelling
            json.dumps(result, allow_nan=False)
        except DispatchError as e:
            logger.info(f"{request.method} failed: {e.kind.value}: {e.message}")
            return self.error_response(request.id, e.message)
        except Exception:
            logger.exception(f"Unexpected error handling method {request.method}")
            return self.error_response(request.id, "Internal error")

        return JsonRpcResponse(id=request.id, result=result)

    async def handle_message(self, raw_data: str | bytes) -> JsonRpcResponse:
        """Handle a raw JSON-RPC message end-to-end."""
        try:
            data = self.decode(raw_data)
        except MalformedRequestError as e:
            return self.error_response(None, e.message)

        try:
            request = self.parse_request(data)
        except MalformedRequestError as e:
            return self.error_response(_echo_id(data), e.message)

        return await self.process_request(request)
