"""FastMCP server exposing bazel-check tools."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from bazel_check.checker import CHECKER_NAME, CheckerRegistry, run_check
from bazel_check.core.workspace import locate_workspace
from bazel_check.errors import ToolInvocationError
from bazel_check.models import CheckRequest


def create_mcp_server(registry: CheckerRegistry) -> FastMCP:
    """Create a FastMCP server wired to the checkers in *registry*."""

    mcp = FastMCP("bazel-check", instructions="Check source files by building the Bazel targets that own them.")
    checker = registry.get(CHECKER_NAME)

    @mcp.tool()
    async def locate_root(path: str) -> str | None:
        """Return the Bazel workspace root enclosing a file, if any."""
        workspace = locate_workspace(path)
        return str(workspace.root) if workspace else None

    @mcp.tool()
    async def list_targets(path: str) -> list[str] | str:
        """List the rules that directly depend on a file."""
        request = CheckRequest(file_path=Path(path))
        try:
            prepared = await asyncio.to_thread(checker.prepare, request)
        except ToolInvocationError as exc:
            return f"Error: {exc}"
        return prepared[1] if prepared else []

    @mcp.tool()
    async def check_file(path: str) -> list[dict[str, Any]] | str:
        """Build the targets owning a file and return the resulting diagnostics."""
        request = CheckRequest(file_path=Path(path))
        diagnostics: list[dict[str, Any]] = []
        for applicable in registry.applicable(request):
            try:
                result = await asyncio.to_thread(run_check, applicable, request)
            except ToolInvocationError as exc:
                return f"Error: {exc}"
            if result is not None:
                diagnostics.extend(d.model_dump(mode="json") for d in result.diagnostics)
        return diagnostics

    @mcp.tool()
    async def verify_file(path: str) -> list[dict[str, str]]:
        """Report whether the workspace root and owning targets can be found."""
        request = CheckRequest(file_path=Path(path))
        results = await asyncio.to_thread(checker.verify, request)
        return [r.model_dump(mode="json") for r in results]

    return mcp
