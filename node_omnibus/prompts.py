"""Prompt templates offered to MCP clients.

Five fixed templates turn caller arguments into a one-message conversation
starter.  Rendering is pure: no I/O, no shared state.
"""

from __future__ import annotations

import textwrap
from typing import Any

from .errors import InvalidParamsError
from .schemas import PromptArgument, PromptTemplate

PROMPT_TEMPLATES: tuple[PromptTemplate, ...] = (
    PromptTemplate(
        name="create-project",
        description="Guide through creating a new Node.js project with best practices",
        arguments=(
            PromptArgument(
                name="projectType",
                description="Type of project to create (react, node, next, express, fastify)",
                required=True,
            ),
            PromptArgument(
                name="features",
                description="Comma-separated list of features (e.g., typescript,testing,docker)",
                required=False,
            ),
        ),
    ),
    PromptTemplate(
        name="analyze-code",
        description="Analyze code for potential improvements and best practices",
        arguments=(
            PromptArgument(name="code", description="Code to analyze", required=True),
            PromptArgument(name="language", description="Programming language", required=True),
        ),
    ),
    PromptTemplate(
        name="generate-component",
        description="Generate a React component with TypeScript support",
        arguments=(
            PromptArgument(name="name", description="Component name", required=True),
            PromptArgument(
                name="type", description="Component type (functional/class)", required=True
            ),
        ),
    ),
    PromptTemplate(
        name="git-commit",
        description="Generate a descriptive Git commit message",
        arguments=(
            PromptArgument(
                name="changes", description="Git diff or description of changes", required=True
            ),
        ),
    ),
    PromptTemplate(
        name="debug-error",
        description="Get suggestions for debugging a Node.js error",
        arguments=(
            PromptArgument(
                name="error", description="Error message or stack trace", required=True
            ),
        ),
    ),
)

# Extra guidance appended to create-project when the feature token is present.
FEATURE_GUIDANCE: dict[str, str] = {
    "typescript": "6. TypeScript configuration recommendations",
    "testing": "7. Testing setup and frameworks",
    "docker": "8. Docker configuration guidance",
}

_CREATE_PROJECT = textwrap.dedent("""\
    Help me create a new {project_type} project with these requirements:

    1. Project Type: {project_type}
    2. Features: {features}

    Please provide:
    1. Recommended project structure
    2. Essential dependencies to include
    3. Important configuration files
    4. Best practices for this type of project
    5. Common pitfalls to avoid""")


def parse_features(raw: str | None) -> list[str]:
    """Split a comma-separated feature list, trimming each entry."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _user_message(text: str) -> dict[str, Any]:
    return {"role": "user", "content": {"type": "text", "text": text}}


def _create_project(args: dict[str, str]) -> str:
    features = parse_features(args.get("features"))
    lines = [
        _CREATE_PROJECT.format(
            project_type=args.get("projectType", ""),
            features=", ".join(features) if features else "basic setup",
        )
    ]
    for token, guidance in FEATURE_GUIDANCE.items():
        if token in features:
            lines.append(guidance)
    return "\n".join(lines)


def _analyze_code(args: dict[str, str]) -> str:
    return (
        f"Please analyze this {args.get('language', '')} code for potential "
        f"improvements and best practices:\n\n{args.get('code', '')}"
    )


def _generate_component(args: dict[str, str]) -> str:
    return (
        f"Generate a {args.get('type', '')} React component named {args.get('name', '')} "
        "with TypeScript support. Include proper typing, error handling, and common "
        "best practices."
    )


def _git_commit(args: dict[str, str]) -> str:
    return (
        "Generate a concise but descriptive commit message following conventional "
        f"commits format for these changes:\n\n{args.get('changes', '')}"
    )


def _debug_error(args: dict[str, str]) -> str:
    return (
        "Help me debug this Node.js error. Suggest potential causes and solutions:"
        f"\n\n{args.get('error', '')}"
    )


class PromptEngine:
    """Renders the fixed prompt templates."""

    _RENDERERS = {
        "create-project": _create_project,
        "analyze-code": _analyze_code,
        "generate-component": _generate_component,
        "git-commit": _git_commit,
        "debug-error": _debug_error,
    }

    def __init__(self, templates: tuple[PromptTemplate, ...] = PROMPT_TEMPLATES) -> None:
        self.templates = templates

    def render(self, name: str, arguments: dict[str, str] | None = None) -> list[dict[str, Any]]:
        """Render template *name* into an ordered list of messages.

        Raises:
            InvalidParamsError: If *name* is not a known template.
        """
        renderer = self._RENDERERS.get(name)
        if renderer is None:
            raise InvalidParamsError(f"Invalid prompt name: {name}")
        return [_user_message(renderer(arguments or {}))]
