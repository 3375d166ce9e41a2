"""Integration tests for the MCP binding (node_omnibus.server).

Requests are fed straight into the low-level server's handler table, so
the full path from ``mcp.types`` request to router and back is exercised
without a stdio transport.
"""

from __future__ import annotations

from pathlib import Path

import mcp.types as types
import pytest
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from node_omnibus.config import ServerConfig
from node_omnibus.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    InternalError,
    InvalidParamsError,
)
from node_omnibus.server import NodeOmnibusServer, to_mcp_error

pytestmark = pytest.mark.integration


@pytest.fixture
def omnibus(fake_runner) -> NodeOmnibusServer:
    return NodeOmnibusServer(ServerConfig(), runner=fake_runner)


async def _request(omnibus: NodeOmnibusServer, request) -> object:
    handler = omnibus.server.request_handlers[type(request)]
    result = await handler(request)
    return result.root


class TestServerInstances:
    def test_instances_do_not_share_documents(self, fake_runner):
        first = NodeOmnibusServer(runner=fake_runner)
        second = NodeOmnibusServer(runner=fake_runner)

        first.documents.put("alpha", "# Alpha")

        assert "alpha" in first.documents
        assert "alpha" not in second.documents

    def test_server_identity_from_config(self):
        omnibus = NodeOmnibusServer(ServerConfig(server_name="omnibus-test"))
        assert omnibus.server.name == "omnibus-test"


class TestErrorMapping:
    def test_codes_preserved(self):
        error = to_mcp_error(InvalidParamsError("Missing required argument: code"))
        assert error.error.code == INVALID_PARAMS
        assert error.error.message == "Missing required argument: code"
        assert error.error.data is None

    def test_data_carried(self):
        error = to_mcp_error(InternalError("Failed to add script: boom", data={"tool": "add_script"}))
        assert error.error.code == INTERNAL_ERROR
        assert error.error.data == {"tool": "add_script"}


class TestRequests:
    async def test_list_tools(self, omnibus: NodeOmnibusServer):
        result = await _request(omnibus, types.ListToolsRequest(method="tools/list"))

        assert [tool.name for tool in result.tools][0] == "create_project"
        assert len(result.tools) == 7
        assert result.tools[0].inputSchema["required"] == ["name", "type", "path"]

    async def test_list_prompts(self, omnibus: NodeOmnibusServer):
        result = await _request(omnibus, types.ListPromptsRequest(method="prompts/list"))

        debug = next(p for p in result.prompts if p.name == "debug-error")
        assert debug.arguments[0].name == "error"
        assert debug.arguments[0].required is True

    async def test_get_prompt(self, omnibus: NodeOmnibusServer):
        request = types.GetPromptRequest(
            method="prompts/get",
            params=types.GetPromptRequestParams(
                name="git-commit", arguments={"changes": "Add login form"}
            ),
        )
        result = await _request(omnibus, request)

        assert result.messages[0].role == "user"
        assert "Add login form" in result.messages[0].content.text

    async def test_get_prompt_missing_argument(self, omnibus: NodeOmnibusServer):
        request = types.GetPromptRequest(
            method="prompts/get",
            params=types.GetPromptRequestParams(name="analyze-code", arguments={"code": "x"}),
        )
        with pytest.raises(McpError) as excinfo:
            await _request(omnibus, request)

        assert excinfo.value.error.code == INVALID_PARAMS
        assert excinfo.value.error.message == "Missing required argument: language"

    async def test_resources_follow_document_store(
        self, omnibus: NodeOmnibusServer, tmp_path: Path
    ):
        empty = await _request(omnibus, types.ListResourcesRequest(method="resources/list"))
        assert empty.resources == []

        await omnibus.router.call_tool(
            "create_documentation", {"path": str(tmp_path / "billing"), "type": "api"}
        )

        listed = await _request(omnibus, types.ListResourcesRequest(method="resources/list"))
        assert [str(r.uri) for r in listed.resources] == ["docs://billing"]
        assert listed.resources[0].mimeType == "text/markdown"

        read = await _request(
            omnibus,
            types.ReadResourceRequest(
                method="resources/read",
                params=types.ReadResourceRequestParams(uri=AnyUrl("docs://billing")),
            ),
        )
        assert read.contents[0].text.startswith("# API Documentation")

    async def test_read_unknown_resource(self, omnibus: NodeOmnibusServer):
        request = types.ReadResourceRequest(
            method="resources/read",
            params=types.ReadResourceRequestParams(uri=AnyUrl("docs://missing")),
        )
        with pytest.raises(McpError) as excinfo:
            await _request(omnibus, request)

        assert excinfo.value.error.code == METHOD_NOT_FOUND
        assert excinfo.value.error.message == "Documentation not found for missing"


def _call(name: str, arguments: dict) -> types.CallToolRequest:
    return types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )


class TestToolCalls:
    async def test_success(self, omnibus: NodeOmnibusServer, tmp_path: Path):
        result = await _request(
            omnibus,
            _call(
                "create_type_definition",
                {"name": "Invoice", "path": str(tmp_path), "properties": {"total": "number"}},
            ),
        )

        assert not result.isError
        assert result.content[0].text.startswith("Type definition Invoice created successfully")
        assert (tmp_path / "Invoice.ts").is_file()

    async def test_unknown_tool(self, omnibus: NodeOmnibusServer):
        with pytest.raises(McpError) as excinfo:
            await _request(omnibus, _call("nope", {}))

        assert excinfo.value.error.code == METHOD_NOT_FOUND
        assert excinfo.value.error.message == "Unknown tool: nope"

    async def test_unsupported_project_type(self, omnibus: NodeOmnibusServer, tmp_path: Path):
        with pytest.raises(McpError) as excinfo:
            await _request(
                omnibus,
                _call("create_project", {"name": "web", "type": "vue", "path": str(tmp_path)}),
            )

        assert excinfo.value.error.code == INVALID_PARAMS
        assert excinfo.value.error.message == "Unsupported project type: vue"
        assert not (tmp_path / "web").exists()

    async def test_installer_failure(self, make_server, node_project: Path):
        omnibus, runner = make_server(fail_on="npm install")

        with pytest.raises(McpError) as excinfo:
            await _request(
                omnibus, _call("install_packages", {"packages": ["zod"], "path": str(node_project)})
            )

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert excinfo.value.error.message.startswith("Failed to install packages:")
        assert excinfo.value.error.data == {"tool": "install_packages"}
        assert runner.commands == ["npm install zod"]


class TestResourceIds:
    async def test_id_with_space(self, omnibus: NodeOmnibusServer):
        omnibus.documents.put("my app", "# My App")

        listed = await _request(omnibus, types.ListResourcesRequest(method="resources/list"))
        uri = listed.resources[0].uri
        read = await _request(
            omnibus,
            types.ReadResourceRequest(
                method="resources/read",
                params=types.ReadResourceRequestParams(uri=uri),
            ),
        )

        assert str(uri) == "docs://my%20app"
        assert listed.resources[0].name == "Documentation for my app"
        assert read.contents[0].text == "# My App"
