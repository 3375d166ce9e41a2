"""Shared pytest fixtures for the Node Omnibus test suite.

Provides reusable fixtures for:
- A fresh in-memory document store per test
- A fake command runner that records every external process invocation
- Orchestrator, router and server instances wired to that runner
- Minimal Node.js project directories (package.json / tsconfig.json)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from node_omnibus.config import ServerConfig
from node_omnibus.docstore import DocumentStore
from node_omnibus.prompts import PromptEngine
from node_omnibus.router import CapabilityRouter
from node_omnibus.scaffolder.orchestrator import ScaffoldingOrchestrator
from node_omnibus.server import NodeOmnibusServer


# ---------------------------------------------------------------------------
# Fake command runner
# ---------------------------------------------------------------------------

class FakeRunner:
    """Stand-in for ``run_command`` that never spawns a process.

    Every call is recorded as ``(cmd, cwd)``.  ``npm init -y`` writes a
    minimal ``package.json`` into *cwd*, mirroring what npm would do.  A
    command whose joined text contains ``fail_on`` returns a non-zero exit.
    """

    def __init__(
        self,
        stdout: str = "added 1 package",
        stderr: str = "npm WARN deprecated",
        fail_on: str | None = None,
    ) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.fail_on = fail_on
        self.calls: list[tuple[list[str], Path]] = []

    async def __call__(
        self, cmd: list[str], cwd: str | Path | None = None, **_: Any
    ) -> tuple[int, str, str]:
        self.calls.append((list(cmd), Path(cwd) if cwd else Path.cwd()))
        joined = " ".join(cmd)
        if self.fail_on and self.fail_on in joined:
            return (1, "", f"npm ERR! could not run {joined}")
        if cmd[1:] == ["init", "-y"] and cwd:
            package = {"name": Path(cwd).name, "version": "1.0.0", "scripts": {}}
            (Path(cwd) / "package.json").write_text(json.dumps(package), encoding="utf-8")
        return (0, self.stdout, self.stderr)

    @property
    def commands(self) -> list[str]:
        return [" ".join(cmd) for cmd, _ in self.calls]


# ---------------------------------------------------------------------------
# Core components
# ---------------------------------------------------------------------------

@pytest.fixture
def documents() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def orchestrator(documents: DocumentStore, fake_runner: FakeRunner) -> ScaffoldingOrchestrator:
    return ScaffoldingOrchestrator(documents, ServerConfig(), runner=fake_runner)


@pytest.fixture
def make_orchestrator(documents: DocumentStore):
    """Factory for an orchestrator whose runner is configured per test.

    Usage:
        def test_failure(make_orchestrator):
            orch, runner = make_orchestrator(fail_on="--save-dev")
    """
    def factory(**runner_kwargs: Any) -> tuple[ScaffoldingOrchestrator, FakeRunner]:
        runner = FakeRunner(**runner_kwargs)
        return ScaffoldingOrchestrator(documents, ServerConfig(), runner=runner), runner

    return factory


@pytest.fixture
def router(orchestrator: ScaffoldingOrchestrator, documents: DocumentStore) -> CapabilityRouter:
    return CapabilityRouter(orchestrator, PromptEngine(), documents)


# ---------------------------------------------------------------------------
# Project directories
# ---------------------------------------------------------------------------

@pytest.fixture
def node_project(tmp_path: Path) -> Path:
    """A directory holding a realistic ``package.json``."""
    project = tmp_path / "shop-api"
    project.mkdir()
    package = {
        "name": "shop-api",
        "version": "0.1.0",
        "description": "Storefront REST API",
        "scripts": {"start": "node dist/index.js", "dev": "nodemon src/index.ts"},
        "dependencies": {"express": "^4.19.2", "cors": "^2.8.5"},
        "devDependencies": {"typescript": "^5.4.0", "nodemon": "^3.1.0"},
    }
    (project / "package.json").write_text(json.dumps(package, indent=2), encoding="utf-8")
    return project


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

@pytest.fixture
def make_server():
    """Factory for a ``NodeOmnibusServer`` whose runner is configured per test."""
    def factory(**runner_kwargs: Any) -> tuple[NodeOmnibusServer, FakeRunner]:
        runner = FakeRunner(**runner_kwargs)
        return NodeOmnibusServer(ServerConfig(), runner=runner), runner

    return factory
