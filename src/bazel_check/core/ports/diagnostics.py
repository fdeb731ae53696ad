from typing import Protocol

from bazel_check.models import Diagnostic, Workspace


class DiagnosticFormat(Protocol):
    """Turns the output of a compiler run by Bazel into diagnostics."""

    name: str
    build_flag: str
    extensions: frozenset[str]

    def filter(self, output: str) -> list[str]: ...

    def parse(self, records: list[str], workspace: Workspace) -> list[Diagnostic]: ...

    def explain(self, diagnostic: Diagnostic) -> str | None: ...
