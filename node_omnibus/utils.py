"""Shared utility functions for the Node Omnibus server.

Provides async command execution, JSON I/O, file-system helpers and the
Rich-based logging setup.  Stdout belongs to the MCP transport, so every
piece of human-readable output goes to stderr.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


class CommandError(Exception):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stdout: str, stderr: str) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = stderr or stdout or "no output"
        super().__init__(
            f"Command failed with exit code {returncode}: {' '.join(cmd)}\n{detail}"
        )


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously and capture its output.

    Args:
        cmd: Program and arguments.  No shell is involved.
        cwd: Working directory for the child process.
        timeout: Optional wall-clock limit in seconds.  ``None`` waits for
            the process however long it takes.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


async def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON object from *path* off the event loop.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    raw = await read_text(path)
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}")
    return data


async def save_json(data: dict[str, Any], path: str | Path) -> None:
    """Write *data* as 2-space indented JSON, off the event loop."""
    content = json.dumps(data, indent=2, ensure_ascii=False)
    await write_text(path, content)


async def write_text(path: str | Path, content: str) -> None:
    """Write *content* to *path* in a worker thread."""
    await asyncio.to_thread(Path(path).write_text, content, "utf-8")


async def read_text(path: str | Path) -> str:
    """Read *path* as UTF-8 in a worker thread."""
    return await asyncio.to_thread(Path(path).read_text, "utf-8")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


async def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    await asyncio.to_thread(dir_path.mkdir, parents=True, exist_ok=True)
    return dir_path


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(level: str = "INFO") -> None:
    """Route the root logger through Rich on stderr.

    Safe to call more than once; an existing ``RichHandler`` is replaced.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level.upper())
    logging.getLogger("mcp").setLevel(logging.WARNING)
