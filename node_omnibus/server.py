"""MCP binding for the Node Omnibus capability router.

Wires the router's six operations onto the ``mcp`` SDK's low-level server
and runs it over stdio.  This module only translates shapes: descriptors
become ``mcp.types`` models and ``ProtocolError`` becomes ``McpError`` with
the same JSON-RPC code.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TypeVar

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from .config import ServerConfig
from .docstore import DocumentStore
from .errors import ProtocolError
from .prompts import PromptEngine
from .router import CapabilityRouter
from .scaffolder.orchestrator import CommandRunner, ScaffoldingOrchestrator
from .utils import run_command

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_mcp_error(exc: ProtocolError) -> McpError:
    return McpError(types.ErrorData(**exc.to_dict()))


async def _guard(awaitable: Awaitable[T]) -> T:
    try:
        return await awaitable
    except ProtocolError as exc:
        raise to_mcp_error(exc) from exc


class NodeOmnibusServer:
    """One server instance: its own document store, router and MCP server.

    Nothing is shared between instances, so several can coexist in tests.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self.config = config or ServerConfig()
        self.documents = DocumentStore()
        self.prompts = PromptEngine()
        self.orchestrator = ScaffoldingOrchestrator(self.documents, self.config, runner=runner)
        self.router = CapabilityRouter(self.orchestrator, self.prompts, self.documents)
        self.server: Server = Server(
            self.config.server_name, version=self.config.server_version
        )
        self._register_handlers()

    def _register_handlers(self) -> None:
        server = self.server
        router = self.router

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [
                types.Tool(
                    name=descriptor.name,
                    description=descriptor.description,
                    inputSchema=descriptor.input_schema,
                )
                for descriptor in router.list_tools()
            ]

        # Registered on the handler table directly: the SDK decorator folds
        # raised errors into isError results and would drop the error code.
        async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
            params = request.params
            result = await _guard(router.call_tool(params.name, params.arguments or {}))
            return types.ServerResult(
                types.CallToolResult(
                    content=[
                        types.TextContent(type="text", text=item["text"])
                        for item in result["content"]
                    ]
                )
            )

        server.request_handlers[types.CallToolRequest] = call_tool

        @server.list_resources()
        async def list_resources() -> list[types.Resource]:
            return [
                types.Resource(
                    uri=AnyUrl(descriptor.uri),
                    name=descriptor.name,
                    description=descriptor.description,
                    mimeType=descriptor.mime_type,
                )
                for descriptor in router.list_resources()
            ]

        @server.read_resource()
        async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
            result = await _guard(router.read_resource(str(uri)))
            return [
                ReadResourceContents(content=item["text"], mime_type=item["mime_type"])
                for item in result["contents"]
            ]

        @server.list_prompts()
        async def list_prompts() -> list[types.Prompt]:
            return [
                types.Prompt(
                    name=template.name,
                    description=template.description,
                    arguments=[
                        types.PromptArgument(
                            name=argument.name,
                            description=argument.description,
                            required=argument.required,
                        )
                        for argument in template.arguments
                    ],
                )
                for template in router.list_prompts()
            ]

        @server.get_prompt()
        async def get_prompt(
            name: str, arguments: dict[str, str] | None
        ) -> types.GetPromptResult:
            result = await _guard(router.get_prompt(name, arguments))
            return types.GetPromptResult(
                description=result["description"],
                messages=[
                    types.PromptMessage(
                        role=message["role"],
                        content=types.TextContent(
                            type="text", text=message["content"]["text"]
                        ),
                    )
                    for message in result["messages"]
                ],
            )

    async def run(self) -> None:
        """Serve requests on stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Node.js Omnibus MCP server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
