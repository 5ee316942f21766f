"""
Demo tools shipped with the server so agents have something to call.
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping

from .core.primitives.tools import Tool, ToolRegistry, ToolResult


def example_tool(params: Mapping[str, Any]) -> ToolResult:
    return ToolResult(content=f"exampleTool invoked with params: {json.dumps(dict(params))}")


def another_tool(params: Mapping[str, Any]) -> ToolResult:
    return ToolResult(content=f"anotherTool invoked with params: {json.dumps(dict(params))}")


def add(params: Mapping[str, Any]) -> ToolResult:
    """Add two numbers."""
    try:
        a = float(params["a"])
        b = float(params["b"])
    except KeyError as exc:
        raise ValueError(f"missing parameter {exc.args[0]!r}") from exc
    return ToolResult(content=str(a + b), metadata={"a": a, "b": b})


ADD_SCHEMA = {
    "type": "object",
    "properties": {
        "a": {"type": "number", "description": "The first float to add."},
        "b": {"type": "number", "description": "The second float to add."},
    },
    "required": ["a", "b"],
}


def builtin_tools() -> List[Tool]:
    return [
        Tool(
            name="exampleTool",
            description="Echoes its parameters back as JSON.",
            func=example_tool,
        ),
        Tool(
            name="anotherTool",
            description="Echoes its parameters back as JSON.",
            func=another_tool,
        ),
        Tool(
            name="add",
            description="This is a tool for adding two numbers. Version: 1.0",
            func=add,
            schema=ADD_SCHEMA,
        ),
    ]


def default_tool_registry() -> ToolRegistry:
    return ToolRegistry(builtin_tools())
