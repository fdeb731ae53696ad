"""Checker definition handed to a host, and the pipeline that runs it."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from bazel_check.config import CheckerSettings
from bazel_check.core.command import build_command
from bazel_check.core.ports.diagnostics import DiagnosticFormat
from bazel_check.core.targets import resolve_targets
from bazel_check.core.verify import verify
from bazel_check.core.workspace import locate_workspace, relative_path
from bazel_check.errors import RegistrationError, ToolInvocationError
from bazel_check.models import CheckRequest, CheckResult, VerificationResult, Workspace

logger = logging.getLogger(__name__)

CHECKER_NAME = "bazel"


@dataclass(frozen=True)
class CheckerDefinition:
    name: str
    settings: CheckerSettings
    diagnostic_format: DiagnosticFormat

    def predicate(self, request: CheckRequest) -> bool:
        """The checker is enabled for any file inside a workspace."""
        return locate_workspace(request.file_path) is not None

    def working_directory(self, request: CheckRequest) -> Path | None:
        workspace = locate_workspace(request.file_path)
        return workspace.root if workspace else None

    def command(self, request: CheckRequest) -> list[str] | None:
        """Build command for the request, or None when there is nothing to build.

        Targets are queried on every call.
        """
        prepared = self.prepare(request)
        if prepared is None:
            return None
        _, targets = prepared
        return build_command(targets, settings=self.settings, diagnostic_format=self.diagnostic_format)

    def prepare(self, request: CheckRequest) -> tuple[Workspace, list[str]] | None:
        workspace = locate_workspace(request.file_path)
        if workspace is None:
            return None
        targets = resolve_targets(
            relative_path(workspace, request.file_path),
            workspace=workspace,
            settings=self.settings,
        )
        if not targets:
            return None
        return workspace, targets

    def verify(self, request: CheckRequest) -> list[VerificationResult]:
        return verify(request, settings=self.settings)


def create_checker(
    settings: CheckerSettings,
    diagnostic_format: DiagnosticFormat,
    name: str = CHECKER_NAME,
) -> CheckerDefinition:
    return CheckerDefinition(name=name, settings=settings, diagnostic_format=diagnostic_format)


class CheckerRegistry:
    """Checkers registered by the embedding application at startup."""

    def __init__(self) -> None:
        self._checkers: dict[str, CheckerDefinition] = {}

    def register(self, definition: CheckerDefinition) -> None:
        if definition.name in self._checkers:
            raise RegistrationError(f"Checker '{definition.name}' is already registered.")
        self._checkers[definition.name] = definition
        logger.debug("Registered checker %s", definition.name)

    def get(self, name: str) -> CheckerDefinition:
        return self._checkers[name]

    def __iter__(self) -> Iterator[CheckerDefinition]:
        return iter(self._checkers.values())

    def __len__(self) -> int:
        return len(self._checkers)

    @property
    def extensions(self) -> frozenset[str]:
        """Source suffixes covered by at least one registered checker."""
        return frozenset().union(*(checker.diagnostic_format.extensions for checker in self))

    def applicable(self, request: CheckRequest) -> list[CheckerDefinition]:
        """Checkers whose language matches the file and which are enabled for it."""
        suffix = request.file_path.suffix.lower()
        return [
            checker
            for checker in self
            if suffix in checker.diagnostic_format.extensions and checker.predicate(request)
        ]


def run_check(definition: CheckerDefinition, request: CheckRequest) -> CheckResult | None:
    """Build the targets owning the request's file and collect diagnostics.

    Returns None when the file is outside a workspace or no rule owns it.
    Blocks until the build exits.
    """
    prepared = definition.prepare(request)
    if prepared is None:
        logger.info("Nothing to check for %s", request.file_path)
        return None
    workspace, targets = prepared

    command = build_command(
        targets,
        settings=definition.settings,
        diagnostic_format=definition.diagnostic_format,
    )
    logger.debug("Running %s in %s", command, workspace.root)
    try:
        result = subprocess.run(
            command,
            cwd=workspace.root,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise ToolInvocationError(definition.settings.executable, str(exc)) from exc

    output = "\n".join(part for part in (result.stdout, result.stderr) if part)
    diagnostic_format = definition.diagnostic_format
    diagnostics = diagnostic_format.parse(diagnostic_format.filter(output), workspace)
    logger.info("Build of %s exited %d with %d diagnostic(s)", ", ".join(targets), result.returncode, len(diagnostics))

    return CheckResult(
        request=request,
        workspace=workspace,
        targets=targets,
        command=command,
        returncode=result.returncode,
        diagnostics=diagnostics,
    )
