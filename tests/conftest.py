"""Shared fixtures and helpers for tests."""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from bazel_check.config import CheckerSettings
from bazel_check.diagnostics import RustcJsonFormat

# ---------------------------------------------------------------------------
# Auto-marker: tag every test under tests/ as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# FakeBazel: stands in for subprocess.run when tests need bazel output
# ---------------------------------------------------------------------------


class FakeBazel:
    """Records invocations and answers ``query`` and ``build`` with canned output."""

    def __init__(
        self,
        query_output: str = "",
        query_returncode: int = 0,
        build_output: str = "",
        build_stderr: str = "",
        build_returncode: int = 0,
    ) -> None:
        self.query_output = query_output
        self.query_returncode = query_returncode
        self.build_output = build_output
        self.build_stderr = build_stderr
        self.build_returncode = build_returncode
        self.calls: list[tuple[list[str], Path]] = []

    def __call__(self, args: Sequence[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        argv = list(args)
        self.calls.append((argv, Path(kwargs["cwd"])))
        if argv[1] == "query":
            return subprocess.CompletedProcess(argv, self.query_returncode, self.query_output, "")
        return subprocess.CompletedProcess(argv, self.build_returncode, self.build_output, self.build_stderr)

    def commands(self, subcommand: str) -> list[tuple[list[str], Path]]:
        return [call for call in self.calls if call[0][1] == subcommand]


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """A workspace at ``tmp_path/ws`` with ``src/lib.rs`` inside it."""
    root = tmp_path / "ws"
    (root / "src").mkdir(parents=True)
    (root / "WORKSPACE").write_text("", encoding="utf-8")
    (root / "src" / "lib.rs").write_text("pub fn answer() -> u32 { 42 }\n", encoding="utf-8")
    return root.resolve()


@pytest.fixture
def settings() -> CheckerSettings:
    return CheckerSettings(executable="bazel", build_flags=("--foo",))


@pytest.fixture
def rustc_format() -> RustcJsonFormat:
    return RustcJsonFormat()
