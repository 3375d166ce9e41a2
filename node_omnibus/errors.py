"""Typed protocol errors surfaced to MCP clients.

Every error a caller can observe is one of three kinds, each carrying the
JSON-RPC error code the transport layer reports:

* ``MethodNotFoundError`` -- unknown tool, prompt, or content id.
* ``InvalidParamsError`` -- structurally wrong input caught before any side
  effect happens.
* ``InternalError`` -- everything raised once a side effect has begun, with
  the original message preserved in the text.
"""

from __future__ import annotations

from typing import Any

METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base class for errors that propagate to the client unchanged."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: Any | None = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-RPC ``error`` object for this exception."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class MethodNotFoundError(ProtocolError):
    """Raised when a name or id is absent from the relevant registry."""

    code = METHOD_NOT_FOUND


class InvalidParamsError(ProtocolError):
    """Raised for bad input detected before any side effect."""

    code = INVALID_PARAMS


class InternalError(ProtocolError):
    """Raised for any failure during or after a side effect."""

    code = INTERNAL_ERROR
