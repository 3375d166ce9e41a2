"""Pydantic v2 descriptors for every capability the server exposes.

The action registry (``TOOL_DESCRIPTORS``) is a static, declarative
description of each tool's name, summary and input contract.  Descriptors
are frozen: they are built once at import time and only ever read.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

PROJECT_TYPES: tuple[str, ...] = ("react", "node", "next", "express", "fastify")
COMPONENT_TYPES: tuple[str, ...] = ("functional", "class")
DOCUMENTATION_TYPES: tuple[str, ...] = ("readme", "api", "component")


# ---------------------------------------------------------------------------
# Descriptor models
# ---------------------------------------------------------------------------

class ParameterSpec(BaseModel):
    """One named parameter in a tool's input contract."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="JSON type: string, boolean, array or object")
    description: str = Field(default="")
    enum: Optional[tuple[str, ...]] = Field(default=None, description="Allowed values")
    default: Optional[Any] = Field(default=None)
    items: Optional[dict[str, Any]] = Field(default=None, description="Item schema for arrays")
    additional_properties: Optional[Any] = Field(
        default=None, description="Value schema for objects"
    )

    def to_json_schema(self) -> dict[str, Any]:
        """Render this parameter as a JSON-schema property."""
        schema: dict[str, Any] = {"type": self.type}
        if self.items is not None:
            schema["items"] = dict(self.items)
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.additional_properties is not None:
            schema["additionalProperties"] = self.additional_properties
        schema["description"] = self.description
        if self.default is not None:
            schema["default"] = self.default
        return schema


class ToolDescriptor(BaseModel):
    """An invocable action: name, summary and input contract."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, ParameterSpec] = Field(default_factory=dict)
    required: tuple[str, ...] = Field(default=())

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                name: spec.to_json_schema() for name, spec in self.parameters.items()
            },
            "required": list(self.required),
        }


class PromptArgument(BaseModel):
    """A single argument accepted by a prompt template."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    required: bool = False


class PromptTemplate(BaseModel):
    """A named, parameterised generator of conversation starters."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    arguments: tuple[PromptArgument, ...] = Field(default=())


class ResourceDescriptor(BaseModel):
    """A readable content item synthesised from a Document Store entry."""

    model_config = ConfigDict(frozen=True)

    uri: str
    name: str
    description: str
    mime_type: str = "text/markdown"


# ---------------------------------------------------------------------------
# Action registry
# ---------------------------------------------------------------------------

_STRING_MAP: dict[str, Any] = {"type": "string"}

TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="create_project",
        description="Create a new Node.js project with enhanced configuration",
        parameters={
            "name": ParameterSpec(type="string", description="Project name"),
            "type": ParameterSpec(
                type="string", enum=PROJECT_TYPES, description="Project type"
            ),
            "path": ParameterSpec(type="string", description="Project directory path"),
            "typescript": ParameterSpec(
                type="boolean", description="Enable TypeScript support", default=True
            ),
        },
        required=("name", "type", "path"),
    ),
    ToolDescriptor(
        name="install_packages",
        description="Install npm packages with version management",
        parameters={
            "packages": ParameterSpec(
                type="array", items=_STRING_MAP, description="Package names to install"
            ),
            "path": ParameterSpec(type="string", description="Project directory path"),
            "dev": ParameterSpec(
                type="boolean", description="Install as dev dependency", default=False
            ),
        },
        required=("packages", "path"),
    ),
    ToolDescriptor(
        name="generate_component",
        description="Generate a new React component with TypeScript support",
        parameters={
            "name": ParameterSpec(type="string", description="Component name"),
            "path": ParameterSpec(type="string", description="Component directory path"),
            "type": ParameterSpec(
                type="string", enum=COMPONENT_TYPES, description="Component type"
            ),
            "props": ParameterSpec(
                type="object",
                description="Component props with types",
                additional_properties=_STRING_MAP,
            ),
        },
        required=("name", "path", "type"),
    ),
    ToolDescriptor(
        name="create_type_definition",
        description="Create TypeScript type definitions or interfaces",
        parameters={
            "name": ParameterSpec(type="string", description="Type name"),
            "path": ParameterSpec(type="string", description="File path"),
            "properties": ParameterSpec(
                type="object",
                description="Type properties and their types",
                additional_properties=_STRING_MAP,
            ),
        },
        required=("name", "path", "properties"),
    ),
    ToolDescriptor(
        name="add_script",
        description="Add a new npm script to package.json",
        parameters={
            "path": ParameterSpec(type="string", description="Project directory path"),
            "name": ParameterSpec(type="string", description="Script name"),
            "command": ParameterSpec(type="string", description="Script command"),
        },
        required=("path", "name", "command"),
    ),
    ToolDescriptor(
        name="update_tsconfig",
        description="Update TypeScript configuration",
        parameters={
            "path": ParameterSpec(type="string", description="Project directory path"),
            "options": ParameterSpec(
                type="object",
                description="TypeScript compiler options",
                additional_properties=True,
            ),
        },
        required=("path", "options"),
    ),
    ToolDescriptor(
        name="create_documentation",
        description="Generate project documentation",
        parameters={
            "path": ParameterSpec(type="string", description="Project directory path"),
            "type": ParameterSpec(
                type="string", enum=DOCUMENTATION_TYPES, description="Documentation type"
            ),
            "name": ParameterSpec(
                type="string",
                description="Component or API name for specific documentation",
            ),
        },
        required=("path", "type"),
    ),
)
