"""Per-type project bundles: generator command and dependency lists.

Each supported project type maps to the command that bootstraps the project
plus the base runtime and dev dependencies installed right after it.  The
dev list depends on whether TypeScript is enabled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidParamsError
from ..schemas import PROJECT_TYPES

JSX_PROJECT_TYPES: frozenset[str] = frozenset({"react", "next"})

DEFAULT_TSCONFIG_INCLUDE: list[str] = ["src/**/*"]
DEFAULT_TSCONFIG_EXCLUDE: list[str] = ["node_modules", "dist"]


@dataclass(frozen=True)
class ProjectTemplate:
    """Commands and dependencies used to scaffold one project type."""

    command: list[str]
    dependencies: list[str] = field(default_factory=list)
    dev_dependencies: list[str] = field(default_factory=list)


def get_project_template(
    project_type: str,
    typescript: bool,
    npm: str = "npm",
    npx: str = "npx",
) -> ProjectTemplate:
    """Resolve the template bundle for *project_type*.

    Raises:
        InvalidParamsError: If *project_type* is not one of ``PROJECT_TYPES``.
    """
    if project_type not in PROJECT_TYPES:
        raise InvalidParamsError(f"Unsupported project type: {project_type}")

    npm_init = [npm, "init", "-y"]

    if project_type == "react":
        command = [npx, "create-react-app", "./"]
        if typescript:
            command += ["--template", "typescript"]
        return ProjectTemplate(
            command=command,
            dependencies=["react", "react-dom"],
            dev_dependencies=(
                ["@types/react", "@types/react-dom", "@types/node"] if typescript else []
            ),
        )

    if project_type == "next":
        command = [npx, "create-next-app@latest", "./"]
        if typescript:
            command.append("--typescript")
        command += ["--tailwind", "--eslint"]
        return ProjectTemplate(
            command=command,
            dependencies=["next", "react", "react-dom"],
            dev_dependencies=(
                ["@types/node", "@types/react", "@types/react-dom"] if typescript else []
            ),
        )

    if project_type == "express":
        return ProjectTemplate(
            command=npm_init,
            dependencies=["express", "cors", "dotenv"],
            dev_dependencies=(
                [
                    "typescript",
                    "@types/node",
                    "@types/express",
                    "@types/cors",
                    "ts-node",
                    "nodemon",
                ]
                if typescript
                else ["nodemon"]
            ),
        )

    ts_node_dev = ["typescript", "@types/node", "ts-node", "nodemon"]

    if project_type == "fastify":
        return ProjectTemplate(
            command=npm_init,
            dependencies=["fastify", "@fastify/cors", "@fastify/env"],
            dev_dependencies=ts_node_dev if typescript else ["nodemon"],
        )

    # node
    return ProjectTemplate(
        command=npm_init,
        dependencies=[],
        dev_dependencies=ts_node_dev if typescript else ["nodemon"],
    )


def build_tsconfig(project_type: str) -> dict[str, Any]:
    """Return the conventional ``tsconfig.json`` for a new project."""
    compiler_options: dict[str, Any] = {
        "target": "es2020",
        "module": "commonjs",
        "outDir": "./dist",
        "rootDir": "./src",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
    }
    if project_type in JSX_PROJECT_TYPES:
        compiler_options["jsx"] = "react-jsx"

    return {
        "compilerOptions": compiler_options,
        "include": list(DEFAULT_TSCONFIG_INCLUDE),
        "exclude": list(DEFAULT_TSCONFIG_EXCLUDE),
    }


def empty_tsconfig() -> dict[str, Any]:
    """Starting point for ``update_tsconfig`` when no config exists yet."""
    return {
        "compilerOptions": {},
        "include": list(DEFAULT_TSCONFIG_INCLUDE),
        "exclude": list(DEFAULT_TSCONFIG_EXCLUDE),
    }
