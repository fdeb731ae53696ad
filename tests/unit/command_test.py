"""Tests for assembling the build invocation."""

from __future__ import annotations

import pytest

from bazel_check.config import CheckerSettings
from bazel_check.core.command import BUILD_UI_FLAGS, build_command
from bazel_check.diagnostics import RustcJsonFormat
from bazel_check.errors import NoTargetsError


def test_orders_flags_then_targets(settings: CheckerSettings, rustc_format: RustcJsonFormat) -> None:
    argv = build_command(["//pkg:a"], settings=settings, diagnostic_format=rustc_format)

    assert argv[:2] == ["bazel", "build"]
    assert argv[-1] == "//pkg:a"
    positions = [
        argv.index("--ui_event_filters=-info,-debug,-warning,-stderr"),
        argv.index("--noshow_progress"),
        argv.index("--@rules_rust//:error_format=json"),
        argv.index("--foo"),
        argv.index("//pkg:a"),
    ]
    assert positions == sorted(positions)


def test_full_command(rustc_format: RustcJsonFormat) -> None:
    settings = CheckerSettings(executable="/opt/bazelisk", build_flags=("--config=ci", "--keep_going"))
    argv = build_command(["//a:x", "//b:y"], settings=settings, diagnostic_format=rustc_format)
    assert argv == [
        "/opt/bazelisk",
        "build",
        *BUILD_UI_FLAGS,
        "--@rules_rust//:error_format=json",
        "--config=ci",
        "--keep_going",
        "//a:x",
        "//b:y",
    ]


def test_no_extra_flags(rustc_format: RustcJsonFormat) -> None:
    argv = build_command(["//pkg:a"], settings=CheckerSettings(), diagnostic_format=rustc_format)
    assert argv == ["bazel", "build", *BUILD_UI_FLAGS, "--@rules_rust//:error_format=json", "//pkg:a"]


def test_build_ui_flags_keep_errors() -> None:
    assert "-error" not in BUILD_UI_FLAGS[0]


def test_empty_targets_raise(settings: CheckerSettings, rustc_format: RustcJsonFormat) -> None:
    with pytest.raises(NoTargetsError):
        build_command([], settings=settings, diagnostic_format=rustc_format)


def test_empty_targets_error_is_value_error(settings: CheckerSettings, rustc_format: RustcJsonFormat) -> None:
    with pytest.raises(ValueError):
        build_command([], settings=settings, diagnostic_format=rustc_format)
