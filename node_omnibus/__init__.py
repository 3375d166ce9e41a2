"""Node Omnibus -- an MCP server for scaffolding Node.js projects."""

__version__ = "1.0.0"
