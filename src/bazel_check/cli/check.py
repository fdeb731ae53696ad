from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bazel_check.checker import CHECKER_NAME, CheckerDefinition, CheckerRegistry, run_check
from bazel_check.core.workspace import locate_workspace
from bazel_check.errors import ToolInvocationError
from bazel_check.models import CheckRequest, CheckResult, Severity, VerificationStatus

console = Console()

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

_STATUS_STYLES = {
    VerificationStatus.SUCCESS: "green",
    VerificationStatus.WARNING: "yellow",
    VerificationStatus.ERROR: "red",
}

FileArgument = Annotated[Path, typer.Argument(help="Source file to check.")]


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)


def _checker(ctx: typer.Context) -> CheckerDefinition:
    registry: CheckerRegistry = ctx.obj
    return registry.get(CHECKER_NAME)


def _fail(exc: ToolInvocationError) -> typer.Exit:
    console.print(f"[red]{escape(str(exc))}[/red]")
    return typer.Exit(1)


def root(file: FileArgument) -> None:
    """Print the workspace root enclosing a file."""
    workspace = locate_workspace(file)
    if workspace is None:
        console.print(f"[red]No Bazel workspace encloses {escape(str(file))}.[/red]")
        raise typer.Exit(1)
    console.print(str(workspace.root), highlight=False, markup=False, soft_wrap=True)


def targets(ctx: typer.Context, file: FileArgument) -> None:
    """List the rules that directly depend on a file."""
    try:
        prepared = _checker(ctx).prepare(CheckRequest(file_path=file))
    except ToolInvocationError as exc:
        raise _fail(exc) from exc
    if prepared is None:
        console.print("[yellow]No targets found.[/yellow]")
        return
    for target in prepared[1]:
        console.print(target, highlight=False, markup=False, soft_wrap=True)


def command(ctx: typer.Context, file: FileArgument) -> None:
    """Print the build command a check would run."""
    checker = _checker(ctx)
    request = CheckRequest(file_path=file)
    try:
        argv = checker.command(request)
    except ToolInvocationError as exc:
        raise _fail(exc) from exc
    if argv is None:
        console.print("[yellow]Nothing to build.[/yellow]")
        return
    console.print(f"cd {checker.working_directory(request)}", highlight=False, markup=False, soft_wrap=True)
    console.print(" ".join(argv), highlight=False, markup=False, soft_wrap=True)


def check(ctx: typer.Context, file: FileArgument) -> None:
    """Build the targets owning a file and report diagnostics."""
    registry: CheckerRegistry = ctx.obj
    request = CheckRequest(file_path=file)

    results: list[tuple[CheckerDefinition, CheckResult]] = []
    for checker in registry.applicable(request):
        try:
            result = run_check(checker, request)
        except ToolInvocationError as exc:
            raise _fail(exc) from exc
        if result is not None:
            results.append((checker, result))

    if not results:
        console.print("[yellow]Nothing to check.[/yellow]")
        return

    rows = []
    for checker, result in results:
        for d in result.diagnostics:
            style = _SEVERITY_STYLES[d.severity]
            explanation = checker.diagnostic_format.explain(d)
            message = f"{d.message}\n{explanation}" if explanation else d.message
            severity = f"[{style}]{d.severity.value}[/{style}]"
            rows.append((escape(str(d.file)), d.line, d.column, severity, escape(message)))
    _render_table(["file", "line", "column", "severity", "message"], rows)
    statuses = ", ".join(str(result.returncode) for _, result in results)
    console.print(f"({len(rows)} diagnostics, build exit status {statuses})")
    if any(result.has_errors for _, result in results):
        raise typer.Exit(1)


def verify(ctx: typer.Context, file: FileArgument) -> None:
    """Report whether the workspace root and owning targets can be found."""
    results = _checker(ctx).verify(CheckRequest(file_path=file))
    rows = []
    for r in results:
        style = _STATUS_STYLES[r.status]
        rows.append((r.label, f"[{style}]{r.status.value}[/{style}]", escape(r.message)))
    _render_table(["check", "status", "message"], rows)
    if any(r.status is VerificationStatus.ERROR for r in results):
        raise typer.Exit(1)
