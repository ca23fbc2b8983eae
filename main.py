"""MCP server exposing Spec-Driven Development document tools."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from sdd_server.config import ServerConfig
from sdd_server.dispatcher import ServerContext, ToolDispatcher
from sdd_server.sdd_logging import setup_logging


logger = logging.getLogger("sdd_server.main")


def _given(**arguments: Any) -> Dict[str, Any]:
    """Drop optional arguments the caller left out."""
    return {key: value for key, value in arguments.items() if value is not None}


def create_server(context: ServerContext) -> FastMCP:
    """Build a FastMCP server whose tools all go through one dispatcher."""

    config = context.config
    dispatcher = ToolDispatcher(context)
    mcp = FastMCP(
        config.server_name,
        instructions=(
            f"{config.server_name} {config.server_version}: generates requirements, design and "
            "tasks documents for Spec-Driven Development. Call sdd_guide for the workflow."
        ),
    )

    # Parameter names are the wire argument keys FastMCP advertises.

    @mcp.tool()
    def generate_requirements(
        projectName: str,
        projectDescription: str,
        requirements: List[Dict[str, Any]],
        outputPath: Optional[str] = None,
    ) -> Dict[str, Any]:
        """STEP 1: Generate a requirements document following the SDD template.
        Each requirement needs a `userStory` and a non-empty `acceptanceCriteria` list.
        Writes ./requirements.md unless outputPath (.md or .txt) is given."""

        return dispatcher.dispatch("generate_requirements", _given(
            projectName=projectName,
            projectDescription=projectDescription,
            requirements=requirements,
            outputPath=outputPath,
        ))

    @mcp.tool()
    def generate_design(
        projectName: str,
        projectDescription: str,
        techStack: Dict[str, Any],
        components: Optional[List[str]] = None,
        dataModels: Optional[List[str]] = None,
        outputPath: Optional[str] = None,
    ) -> Dict[str, Any]:
        """STEP 2: Generate a design document following the SDD template.
        techStack may set frontend, backend, database and infrastructure; only the
        entries given appear in the document. Writes ./design.md by default."""

        return dispatcher.dispatch("generate_design", _given(
            projectName=projectName,
            projectDescription=projectDescription,
            techStack=techStack,
            components=components,
            dataModels=dataModels,
            outputPath=outputPath,
        ))

    @mcp.tool()
    def generate_tasks(
        projectName: str,
        estimatedDuration: str,
        keyDeliverables: List[str],
        tasks: List[Dict[str, Any]],
        outputPath: Optional[str] = None,
    ) -> Dict[str, Any]:
        """STEP 3: Generate an implementation plan (tasks) following the SDD template.
        Each task needs name, description, acceptanceCriteria, dependencies and estimate,
        plus an optional requirementRef (e.g. REQ-1). Writes ./tasks.md by default."""

        return dispatcher.dispatch("generate_tasks", _given(
            projectName=projectName,
            estimatedDuration=estimatedDuration,
            keyDeliverables=keyDeliverables,
            tasks=tasks,
            outputPath=outputPath,
        ))

    @mcp.tool()
    def sdd_guide(query: str) -> Dict[str, Any]:
        """Get guidance on the Spec-Driven Development workflow and how to use these tools."""

        return dispatcher.dispatch("sdd_guide", {"query": query})

    return mcp


def main() -> None:
    config = ServerConfig.from_env()
    setup_logging(config.log_level, config.log_file)

    mcp = create_server(ServerContext.from_config(config))
    logger.info(f"{config.server_name} {config.server_version} running on stdio")
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
