from __future__ import annotations

from fastmcp import FastMCP

from productivity_hub.api import get_api_functions
from productivity_hub.services.mcp import server as mcp_server


class RecordingServer:
    def __init__(self, name: str, instructions: str) -> None:
        self.name = name
        self.instructions = instructions
        self.tools = {}

    def tool(self, func, *, name, description, tags):
        self.tools[name] = (func, description, tags)
        return func


def test_every_api_function_becomes_a_tool(monkeypatch):
    monkeypatch.setattr(mcp_server, "FastMCP", RecordingServer)

    server = mcp_server.build_mcp_server()

    functions = {function.name: function for function in get_api_functions()}
    assert server.name == "productivity-hub"
    assert set(server.tools) == set(functions)
    func, description, tags = server.tools["add_task"]
    assert func is functions["add_task"].func
    assert description == functions["add_task"].description
    assert tags == {"create", "task"}


def test_builds_a_fastmcp_server():
    assert isinstance(mcp_server.build_mcp_server(), FastMCP)
