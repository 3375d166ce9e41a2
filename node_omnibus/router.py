"""Capability router: maps (surface, name) pairs onto handlers.

Three independent surfaces are served:

* ``tools``     -- list and invoke scaffolding actions.
* ``resources`` -- list and read generated documentation.
* ``prompts``   -- list and render conversation-starter templates.

Each surface owns its own lookup table, built once from an explicit list of
descriptors, so a tool and a prompt may share a name without conflict.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote, unquote, urlsplit

from .docstore import DocumentStore
from .errors import InternalError, InvalidParamsError, MethodNotFoundError, ProtocolError
from .prompts import PROMPT_TEMPLATES, PromptEngine
from .scaffolder.orchestrator import ScaffoldingOrchestrator, ToolHandler
from .schemas import TOOL_DESCRIPTORS, PromptTemplate, ResourceDescriptor, ToolDescriptor

logger = logging.getLogger(__name__)

DOCS_SCHEME = "docs"


class Surface(str, Enum):
    """The three addressable capability categories."""
    TOOLS = "tools"
    RESOURCES = "resources"
    PROMPTS = "prompts"


@dataclass(frozen=True)
class ToolEntry:
    """A tool descriptor paired with its handler (``None`` if unimplemented)."""

    descriptor: ToolDescriptor
    handler: Optional[ToolHandler]


def _index(entries: list[tuple[str, Any]], surface: Surface) -> dict[str, Any]:
    table: dict[str, Any] = {}
    for name, entry in entries:
        if name in table:
            raise ValueError(f"Duplicate {surface.value} name: {name}")
        table[name] = entry
    return table


def resource_uri(doc_id: str) -> str:
    """``docs://<id>`` with the id percent-encoded so any project name is a valid host."""
    return f"{DOCS_SCHEME}://{quote(doc_id, safe='')}"


def resource_id(uri: str) -> str:
    """Extract the document id (host component, case preserved) from *uri*."""
    return unquote(urlsplit(uri).netloc)


class CapabilityRouter:
    """Dispatches requests across the tool, resource and prompt surfaces."""

    def __init__(
        self,
        orchestrator: ScaffoldingOrchestrator,
        prompts: PromptEngine,
        documents: DocumentStore,
        tools: tuple[ToolDescriptor, ...] = TOOL_DESCRIPTORS,
        prompt_templates: tuple[PromptTemplate, ...] = PROMPT_TEMPLATES,
    ) -> None:
        self.prompts = prompts
        self.documents = documents

        handlers = orchestrator.handlers()
        self._tools: dict[str, ToolEntry] = _index(
            [(d.name, ToolEntry(d, handlers.get(d.name))) for d in tools], Surface.TOOLS
        )
        self._prompts: dict[str, PromptTemplate] = _index(
            [(t.name, t) for t in prompt_templates], Surface.PROMPTS
        )

    # -- Generic entry point -----------------------------------------------

    async def dispatch(
        self,
        surface: Surface | str,
        name: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Route one request.

        With no *name* the surface's list operation runs; otherwise the
        named tool is invoked, the named resource URI read, or the named
        prompt rendered with *payload* as its arguments.
        """
        try:
            surface = Surface(surface)
        except ValueError:
            raise MethodNotFoundError(f"Unknown capability surface: {surface}") from None

        if surface is Surface.TOOLS:
            if name is None:
                return self.list_tools()
            return await self.call_tool(name, payload)
        if surface is Surface.RESOURCES:
            if name is None:
                return self.list_resources()
            return await self.read_resource(name)
        if name is None:
            return self.list_prompts()
        return await self.get_prompt(name, payload)

    # -- Tools -------------------------------------------------------------

    def list_tools(self) -> list[ToolDescriptor]:
        return [entry.descriptor for entry in self._tools.values()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Invoke tool *name*.

        Required arguments are not checked here; a handler that dereferences
        an absent field fails and is wrapped as ``InternalError``.
        """
        entry = self._tools.get(name)
        if entry is None or entry.handler is None:
            raise MethodNotFoundError(f"Unknown tool: {name}")

        try:
            return await entry.handler(arguments or {})
        except ProtocolError:
            raise
        except Exception as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            raise InternalError(
                f"Error executing {name}: {exc}", data={"tool": name}
            ) from exc

    # -- Resources ---------------------------------------------------------

    def list_resources(self) -> list[ResourceDescriptor]:
        """One descriptor per stored document, derived on every call."""
        return [
            ResourceDescriptor(
                uri=resource_uri(doc_id),
                name=f"Documentation for {doc_id}",
                description=f"Project documentation and notes for {doc_id}",
            )
            for doc_id, _ in self.documents.items()
        ]

    async def read_resource(self, uri: str) -> dict[str, Any]:
        content = self.documents.get(resource_id(uri))
        return {
            "contents": [
                {"uri": uri, "mime_type": "text/markdown", "text": content},
            ]
        }

    # -- Prompts -----------------------------------------------------------

    def list_prompts(self) -> list[PromptTemplate]:
        return list(self._prompts.values())

    async def get_prompt(
        self, name: str, arguments: dict[str, str] | None
    ) -> dict[str, Any]:
        template = self._prompts.get(name)
        if template is None:
            raise MethodNotFoundError(f"Prompt not found: {name}")

        arguments = arguments or {}
        for argument in template.arguments:
            if argument.required and not arguments.get(argument.name):
                raise InvalidParamsError(f"Missing required argument: {argument.name}")

        return {
            "description": template.description,
            "messages": self.prompts.render(name, arguments),
        }
