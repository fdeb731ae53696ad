import typer
from rich.console import Console
from rich.markup import escape

serve_app = typer.Typer(help="Start servers.")
console = Console(stderr=True)


@serve_app.command("mcp")
def mcp(
    ctx: typer.Context,
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from bazel_check.mcp.server import create_mcp_server

    server = create_mcp_server(ctx.obj)
    console.print(f"[green]Starting MCP server (transport: {escape(transport)})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
