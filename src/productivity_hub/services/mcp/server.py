from __future__ import annotations

import logging

from fastmcp import FastMCP

from ...api import get_api_functions
from ...bootstrap import configure_logging

INSTRUCTIONS = (
    "Productivity Hub MCP server exposes a pomodoro timer, a to-do list and a study-spot finder. "
    "Collections sync to the cloud once signed in and stay on this device otherwise."
)

logger = logging.getLogger(__name__)


def build_mcp_server() -> FastMCP:
    server = FastMCP(name="productivity-hub", instructions=INSTRUCTIONS)
    for api_function in get_api_functions():
        logger.debug("Registering MCP tool: %s", api_function.name)
        server.tool(
            api_function.func,
            name=api_function.name,
            description=api_function.description,
            tags=set(api_function.tags),
        )
    return server


def run_mcp_server(host: str = "127.0.0.1", port: int = 8765) -> None:
    import asyncio

    configure_logging()
    server = build_mcp_server()
    asyncio.run(server.run_streamable_http_async(host=host, port=port))
