"""Dispatch error kinds and JSON-RPC error helpers."""

from enum import Enum
from typing import Any

# Internal JSON-RPC error; every dispatch failure on the JSON-RPC surface uses it
INTERNAL_ERROR = -32603


class ErrorKind(str, Enum):
    """Machine-readable failure kinds raised by the dispatcher."""

    UNKNOWN_METHOD = "UNKNOWN_METHOD"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    TOOL_EXECUTION_ERROR = "TOOL_EXECUTION_ERROR"
    PROMPT_NOT_FOUND = "PROMPT_NOT_FOUND"
    PROMPT_RENDER_ERROR = "PROMPT_RENDER_ERROR"
    MALFORMED_REQUEST = "MALFORMED_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DispatchError(Exception):
    """Base error for all recognized dispatch failures."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        if kind is not None:
            self.kind = kind
        self.message = message
        super().__init__(message)


class UnknownMethodError(DispatchError):
    """The JSON-RPC surface received a method outside the supported set."""

    kind = ErrorKind.UNKNOWN_METHOD

    def __init__(self, method: Any) -> None:
        self.method = method
        super().__init__(f"Unknown method: {method}")


class ToolNotFoundError(DispatchError):
    """Requested tool does not exist in the registry."""

    kind = ErrorKind.TOOL_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolExecutionError(DispatchError):
    """The provider raised while executing a tool."""

    kind = ErrorKind.TOOL_EXECUTION_ERROR

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        super().__init__(detail)


class PromptNotFoundError(DispatchError):
    """Requested prompt does not exist in the registry."""

    kind = ErrorKind.PROMPT_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Prompt not found: {name}")


class PromptRenderError(DispatchError):
    """The provider raised while rendering a prompt."""

    kind = ErrorKind.PROMPT_RENDER_ERROR

    def __init__(self, name: str, detail: str) -> None:
        self.name = name
        super().__init__(detail)


class MalformedRequestError(DispatchError):
    """A required field is missing or has the wrong shape."""

    kind = ErrorKind.MALFORMED_REQUEST


def make_error_data(message: str, code: int = INTERNAL_ERROR) -> dict[str, Any]:
    """Create an error object for a JSON-RPC response."""
    return {"code": code, "message": message}
