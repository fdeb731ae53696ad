import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from bazel_check.checker import CheckerRegistry, run_check
from bazel_check.errors import ToolInvocationError
from bazel_check.models import CheckRequest
from bazel_check.watcher.watchfiles_adapter import WatchfilesWatcher

console = Console()


async def check_changed_files(registry: CheckerRegistry, paths: set[Path]) -> None:
    """Check each changed file in turn, printing one line per diagnostic."""
    for path in sorted(paths):
        request = CheckRequest(file_path=path)
        checked = False
        for checker in registry.applicable(request):
            try:
                result = await asyncio.to_thread(run_check, checker, request)
            except ToolInvocationError as exc:
                console.print(f"[red]{escape(str(exc))}[/red]")
                checked = True
                continue
            if result is None:
                continue
            checked = True
            console.print(f"[bold]{escape(str(path))}[/bold]: {len(result.diagnostics)} diagnostic(s)")
            for d in result.diagnostics:
                console.print(f"  {d.file}:{d.line}:{d.column}: {d.severity.value}: {d.message}", markup=False)
        if not checked:
            console.print(f"[yellow]{escape(str(path))}: nothing to check[/yellow]")


def watch(
    ctx: typer.Context,
    directory: Annotated[Path, typer.Argument(help="Directory to watch.")] = Path("."),
) -> None:
    """Re-check source files whenever they change."""
    registry: CheckerRegistry = ctx.obj

    async def _on_change(paths: set[Path]) -> None:
        await check_changed_files(registry, paths)

    watcher = WatchfilesWatcher(directory, _on_change, registry.extensions)

    async def _run() -> None:
        await watcher.start()
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching {escape(str(directory))}[/green] (Ctrl+C to stop)")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
