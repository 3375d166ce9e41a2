"""Node Omnibus scaffolder -- the side-effecting half of the server.

Implements project creation, component and type generation, package.json /
tsconfig.json mutation, and documentation generation for Node.js projects.

Quick usage::

    from node_omnibus.docstore import DocumentStore
    from node_omnibus.scaffolder import ScaffoldingOrchestrator

    orchestrator = ScaffoldingOrchestrator(DocumentStore())
    await orchestrator.create_project(
        {"name": "my-app", "type": "express", "path": "/tmp/projects"}
    )
"""

from node_omnibus.scaffolder.documentation import DocumentationGenerator
from node_omnibus.scaffolder.orchestrator import ScaffoldingOrchestrator
from node_omnibus.scaffolder.templates import TemplateRenderer

__all__ = [
    "DocumentationGenerator",
    "ScaffoldingOrchestrator",
    "TemplateRenderer",
]
