"""Markdown documentation generators.

Covers the README written at project creation, the companion doc written
next to a generated component, and the three ``create_documentation``
flavours (whole project, API skeleton, single component).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from ..utils import load_json, read_text
from .templates import TemplateRenderer

NO_PROPS_FALLBACK = "No props defined"

# Example literal per declared prop type, used in usage snippets.
_EXAMPLE_VALUES: dict[str, str] = {
    "string": '"example"',
    "number": "42",
    "boolean": "true",
    "array": '["item1", "item2"]',
    "string[]": '["item1", "item2"]',
    "object": '{ key: "value" }',
}

_PROPS_INTERFACE_RE = re.compile(r"interface (\w+)Props \{([^}]+)\}")


def example_value(type_name: str) -> str:
    """Return an example JSX literal for a prop of *type_name*."""
    return _EXAMPLE_VALUES.get(type_name.lower(), "undefined")


def usage_props(props: dict[str, str]) -> str:
    """Render ``key={example}`` attributes for every declared prop."""
    return " ".join(f"{key}={{{example_value(prop_type)}}}" for key, prop_type in props.items())


def extract_props_block(source: str) -> str:
    """Pull the body of the first ``interface XProps { ... }`` out of *source*.

    This is a textual pattern match, not a TypeScript parse: nested braces
    or unusual formatting defeat it, in which case ``NO_PROPS_FALLBACK`` is
    returned.
    """
    match = _PROPS_INTERFACE_RE.search(source)
    if match is None:
        return NO_PROPS_FALLBACK
    return match.group(2).strip()


class DocumentationGenerator:
    """Renders markdown for projects and components."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def readme(self, name: str, project_type: str, typescript: bool) -> str:
        return self.renderer.render(
            "README.md.j2",
            {"name": name, "type": project_type, "typescript": typescript},
        )

    def component(self, name: str, component_type: str, props: dict[str, str] | None) -> str:
        """Companion doc written beside a freshly generated component."""
        return self.renderer.render(
            "component.md.j2",
            {
                "name": name,
                "type": component_type,
                "props": props or {},
                "usage_props": usage_props(props or {}),
            },
        )

    async def project(self, project_path: str | Path) -> str:
        """Summarise ``package.json`` at *project_path* as a README."""
        package_json: dict[str, Any] = await load_json(Path(project_path) / "package.json")
        return self.renderer.render(
            "project_docs.md.j2",
            {
                "name": package_json.get("name", ""),
                "description": package_json.get("description"),
                "scripts": package_json.get("scripts") or {},
                "dependencies": package_json.get("dependencies") or {},
                "dev_dependencies": package_json.get("devDependencies") or {},
            },
        )

    def api(self) -> str:
        """Static API documentation skeleton; no endpoints are introspected."""
        return self.renderer.render("api_docs.md.j2", {})

    async def component_reference(self, project_path: str | Path, name: str) -> str:
        """Document an existing ``<name>.tsx`` from its props interface."""
        source = await read_text(Path(project_path) / f"{name}.tsx")
        return self.renderer.render(
            "component_docs.md.j2",
            {"name": name, "props_block": extract_props_block(source)},
        )
