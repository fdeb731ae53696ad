import logging
from typing import Annotated

import typer

from bazel_check.checker import CheckerRegistry, create_checker
from bazel_check.cli.check import check, command, root, targets, verify
from bazel_check.cli.serve import serve_app
from bazel_check.cli.watch import watch
from bazel_check.config import get_settings
from bazel_check.diagnostics import DEFAULT_FORMAT, get_format

app = typer.Typer(
    name="bazel-check",
    help="bazel-check: check source files by building the Bazel targets that own them.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    ctx: typer.Context,
    bazel: Annotated[
        str | None, typer.Option("--bazel", help="Bazel executable (env: BAZEL_CHECK_EXECUTABLE).")
    ] = None,
    flag: Annotated[
        list[str] | None,
        typer.Option("--flag", help="Extra build flag, repeatable (env: BAZEL_CHECK_BUILD_FLAGS)."),
    ] = None,
    diagnostic_format: Annotated[
        str, typer.Option("--format", help="Diagnostic format of the compiler being built.")
    ] = DEFAULT_FORMAT,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log Bazel invocations.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        fmt = get_format(diagnostic_format)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--format") from exc
    registry = CheckerRegistry()
    registry.register(create_checker(get_settings(bazel, flag), fmt))
    ctx.obj = registry


app.command("root")(root)
app.command("targets")(targets)
app.command("command")(command)
app.command("check")(check)
app.command("verify")(verify)
app.command("watch")(watch)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
