"""Unit tests for capability descriptors (node_omnibus.schemas)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from node_omnibus.schemas import (
    TOOL_DESCRIPTORS,
    ParameterSpec,
    ResourceDescriptor,
    ToolDescriptor,
)

pytestmark = pytest.mark.unit


def _tool(name: str) -> ToolDescriptor:
    return next(d for d in TOOL_DESCRIPTORS if d.name == name)


class TestToolDescriptors:
    def test_seven_unique_names(self):
        names = [d.name for d in TOOL_DESCRIPTORS]
        assert len(names) == 7
        assert len(set(names)) == 7

    def test_create_project_schema(self):
        schema = _tool("create_project").input_schema
        assert schema["type"] == "object"
        assert schema["required"] == ["name", "type", "path"]
        assert schema["properties"]["type"]["enum"] == [
            "react", "node", "next", "express", "fastify",
        ]
        assert schema["properties"]["typescript"] == {
            "type": "boolean",
            "description": "Enable TypeScript support",
            "default": True,
        }

    def test_install_packages_array(self):
        packages = _tool("install_packages").input_schema["properties"]["packages"]
        assert packages["type"] == "array"
        assert packages["items"] == {"type": "string"}

    def test_object_parameters(self):
        props = _tool("generate_component").input_schema["properties"]["props"]
        options = _tool("update_tsconfig").input_schema["properties"]["options"]
        assert props["additionalProperties"] == {"type": "string"}
        assert options["additionalProperties"] is True

    def test_documentation_name_optional(self):
        schema = _tool("create_documentation").input_schema
        assert "name" in schema["properties"]
        assert schema["required"] == ["path", "type"]
        assert schema["properties"]["type"]["enum"] == ["readme", "api", "component"]

    def test_false_default_is_emitted(self):
        # ``dev`` defaults to False; only ``None`` means "no default".
        schema = _tool("install_packages").input_schema["properties"]["dev"]
        assert schema.get("default") is False


class TestFrozenModels:
    def test_descriptor_immutable(self):
        with pytest.raises(ValidationError):
            TOOL_DESCRIPTORS[0].name = "renamed"

    def test_parameter_minimal_schema(self):
        assert ParameterSpec(type="string").to_json_schema() == {
            "type": "string",
            "description": "",
        }

    def test_resource_default_mime_type(self):
        resource = ResourceDescriptor(uri="docs://x", name="x", description="x")
        assert resource.mime_type == "text/markdown"
