"""Scaffolding orchestrator: the implementation of every invocable action.

Owns all filesystem and subprocess side effects.  Each action runs to
completion or raises; nothing is retried and nothing is rolled back, so a
failure part-way through ``create_project`` leaves whatever the completed
steps produced on disk.

Error policy: preconditions checked before any side effect raise
``InvalidParamsError``.  Once a side effect has begun, any failure is
re-raised as ``InternalError`` naming the action (never the step).
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from ..config import ServerConfig
from ..docstore import DocumentStore
from ..errors import InternalError, InvalidParamsError
from ..schemas import DOCUMENTATION_TYPES
from ..utils import CommandError, ensure_dir, load_json, run_command, save_json, write_text
from .documentation import DocumentationGenerator
from .project_templates import build_tsconfig, empty_tsconfig, get_project_template
from .templates import TemplateRenderer

logger = logging.getLogger(__name__)

CommandRunner = Callable[..., Awaitable[tuple[int, str, str]]]
ToolHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


def text_result(text: str) -> dict[str, Any]:
    """Wrap a confirmation string in the tool-call result shape."""
    return {"content": [{"type": "text", "text": text}]}


def document_id(path: str) -> str:
    """Last segment of *path*, ignoring trailing separators."""
    return os.path.basename(os.path.normpath(path))


class ScaffoldingOrchestrator:
    """Implements the seven scaffolding actions.

    Args:
        documents: Store that receives generated READMEs and docs.
        config: Server configuration (external tool names).
        runner: Coroutine ``(cmd, cwd=...) -> (returncode, stdout, stderr)``
            used for every external process.
        renderer: Template renderer for generated files.
    """

    def __init__(
        self,
        documents: DocumentStore,
        config: ServerConfig | None = None,
        runner: CommandRunner = run_command,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.documents = documents
        self.config = config or ServerConfig()
        self.runner = runner
        self.renderer = renderer or TemplateRenderer()
        self.docs = DocumentationGenerator(self.renderer)

    def handlers(self) -> dict[str, ToolHandler]:
        """Action name -> bound handler."""
        return {
            "create_project": self.create_project,
            "install_packages": self.install_packages,
            "generate_component": self.generate_component,
            "create_type_definition": self.create_type_definition,
            "add_script": self.add_script,
            "update_tsconfig": self.update_tsconfig,
            "create_documentation": self.create_documentation,
        }

    # -- Shared helpers ----------------------------------------------------

    async def validate_path(self, path: str) -> None:
        """Ensure *path* is a directory, creating it when absent.

        Raises:
            InvalidParamsError: If *path* exists but is not a directory, or
                cannot be inspected or created.
        """
        target = Path(path)
        try:
            if not await asyncio.to_thread(target.exists):
                await ensure_dir(target)
                return
            is_dir = await asyncio.to_thread(target.is_dir)
        except OSError as exc:
            raise InvalidParamsError(f"Failed to validate/create path {path}: {exc}") from exc

        if not is_dir:
            raise InvalidParamsError(f"Path {path} exists but is not a directory")

    async def _run(self, cmd: list[str], cwd: Path | str) -> tuple[str, str]:
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        returncode, stdout, stderr = await self.runner(cmd, cwd=cwd)
        if returncode != 0:
            raise CommandError(cmd, returncode, stdout, stderr)
        return stdout, stderr

    # -- Actions -----------------------------------------------------------

    async def create_project(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Scaffold ``path/name`` for one of the supported project types.

        Steps run strictly in order: directory, generator, dependencies,
        dev dependencies, tsconfig (TypeScript only), README, document store.
        """
        name = arguments["name"]
        project_type = arguments["type"]
        typescript = arguments.get("typescript", True) is not False
        npm = self.config.npm_executable

        template = get_project_template(
            project_type, typescript, npm=npm, npx=self.config.npx_executable
        )
        project_path = Path(arguments["path"]) / name

        try:
            logger.info("Creating %s project %s at %s", project_type, name, project_path)
            await ensure_dir(project_path)

            logger.info("Running project generator")
            await self._run(template.command, project_path)

            if template.dependencies:
                logger.info("Installing dependencies: %s", ", ".join(template.dependencies))
                await self._run([npm, "install", *template.dependencies], project_path)

            if template.dev_dependencies:
                logger.info(
                    "Installing dev dependencies: %s", ", ".join(template.dev_dependencies)
                )
                await self._run(
                    [npm, "install", "--save-dev", *template.dev_dependencies], project_path
                )

            if typescript:
                await ensure_dir(project_path / "src")
                await save_json(build_tsconfig(project_type), project_path / "tsconfig.json")

            readme = self.docs.readme(name, project_type, typescript)
            await write_text(project_path / "README.md", readme)
            self.documents.put(name, readme)
        except Exception as exc:
            raise InternalError(
                f"Failed to create project: {exc}", data={"tool": "create_project"}
            ) from exc

        language = "TypeScript" if typescript else "JavaScript"
        return text_result(f"Project {name} created successfully with {language} configuration")

    async def install_packages(self, arguments: dict[str, Any]) -> dict[str, Any]:
        packages = arguments["packages"]
        path = arguments["path"]
        dev = bool(arguments.get("dev", False))

        if isinstance(packages, str):
            raise InvalidParamsError("packages must be a list of package names")
        packages = list(packages)

        await self.validate_path(path)

        try:
            package_json = Path(path) / "package.json"
            if not await asyncio.to_thread(package_json.is_file):
                raise FileNotFoundError(f"package.json not found in {path}")

            cmd = [self.config.npm_executable, "install"]
            if dev:
                cmd.append("--save-dev")
            cmd += packages
            stdout, stderr = await self._run(cmd, path)
        except Exception as exc:
            raise InternalError(
                f"Failed to install packages: {exc}", data={"tool": "install_packages"}
            ) from exc

        return text_result(f"Packages installed successfully:\n{stdout}\n{stderr}")

    async def generate_component(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Write ``<name>.tsx`` plus a companion ``<name>.md``.

        Any ``type`` other than ``functional`` produces a class component.
        """
        name = arguments["name"]
        path = arguments["path"]
        component_type = arguments["type"]
        props = arguments.get("props") or {}

        await self.validate_path(path)

        template = (
            "component_functional.tsx.j2"
            if component_type == "functional"
            else "component_class.tsx.j2"
        )
        file_path = Path(path) / f"{name}.tsx"

        try:
            await self.renderer.render_to_file(
                template, file_path, {"name": name, "props": props}
            )
            doc = self.docs.component(name, component_type, props)
            await write_text(Path(path) / f"{name}.md", doc)
        except Exception as exc:
            raise InternalError(
                f"Failed to generate component: {exc}", data={"tool": "generate_component"}
            ) from exc

        return text_result(f"Component {name} created successfully at {file_path}")

    async def create_type_definition(self, arguments: dict[str, Any]) -> dict[str, Any]:
        name = arguments["name"]
        path = arguments["path"]
        properties = arguments["properties"]

        await self.validate_path(path)

        file_path = Path(path) / f"{name}.ts"
        try:
            await self.renderer.render_to_file(
                "type_definition.ts.j2",
                file_path,
                {"name": name, "properties": properties},
            )
        except Exception as exc:
            raise InternalError(
                f"Failed to create type definition: {exc}",
                data={"tool": "create_type_definition"},
            ) from exc

        return text_result(f"Type definition {name} created successfully at {file_path}")

    async def add_script(self, arguments: dict[str, Any]) -> dict[str, Any]:
        path = arguments["path"]
        name = arguments["name"]
        command = arguments["command"]

        await self.validate_path(path)

        package_json_path = Path(path) / "package.json"
        try:
            package_json = await load_json(package_json_path)
            if not package_json.get("scripts"):
                package_json["scripts"] = {}
            package_json["scripts"][name] = command
            await save_json(package_json, package_json_path)
        except Exception as exc:
            raise InternalError(
                f"Failed to add script: {exc}", data={"tool": "add_script"}
            ) from exc

        return text_result(f"Added script '{name}': {command}")

    async def update_tsconfig(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Shallow-merge ``options`` into ``compilerOptions``; caller keys win."""
        path = arguments["path"]
        options = arguments["options"]

        await self.validate_path(path)

        tsconfig_path = Path(path) / "tsconfig.json"
        try:
            try:
                tsconfig = await load_json(tsconfig_path)
            except (OSError, ValueError):
                tsconfig = empty_tsconfig()

            tsconfig["compilerOptions"] = {
                **(tsconfig.get("compilerOptions") or {}),
                **options,
            }
            await save_json(tsconfig, tsconfig_path)
        except Exception as exc:
            raise InternalError(
                f"Failed to update TypeScript configuration: {exc}",
                data={"tool": "update_tsconfig"},
            ) from exc

        return text_result(f"Updated TypeScript configuration at {tsconfig_path}")

    async def create_documentation(self, arguments: dict[str, Any]) -> dict[str, Any]:
        path = arguments["path"]
        doc_type = arguments["type"]
        name = arguments.get("name")

        if doc_type not in DOCUMENTATION_TYPES:
            raise InvalidParamsError(f"Unsupported documentation type: {doc_type}")
        if doc_type == "component" and not name:
            raise InvalidParamsError("Component name is required for component documentation")

        await self.validate_path(path)

        try:
            if doc_type == "readme":
                content = await self.docs.project(path)
                file_name = "README.md"
            elif doc_type == "api":
                content = self.docs.api()
                file_name = "API.md"
            else:
                content = await self.docs.component_reference(path, name)
                file_name = f"{name}.md"

            doc_path = Path(path) / file_name
            await write_text(doc_path, content)
            self.documents.put(document_id(path), content)
        except Exception as exc:
            raise InternalError(
                f"Failed to create documentation: {exc}",
                data={"tool": "create_documentation"},
            ) from exc

        return text_result(f"Documentation created successfully at {doc_path}")
