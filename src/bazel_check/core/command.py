from collections.abc import Sequence

from bazel_check.config import CheckerSettings
from bazel_check.core.ports.diagnostics import DiagnosticFormat
from bazel_check.errors import NoTargetsError

BUILD_UI_FLAGS = (
    "--ui_event_filters=-info,-debug,-warning,-stderr",
    "--noshow_progress",
)


def build_command(
    targets: Sequence[str],
    *,
    settings: CheckerSettings,
    diagnostic_format: DiagnosticFormat,
) -> list[str]:
    """Assemble the ``bazel build`` invocation; targets always come last."""
    if not targets:
        raise NoTargetsError("Refusing to build without targets.")
    return [
        settings.executable,
        "build",
        *BUILD_UI_FLAGS,
        diagnostic_format.build_flag,
        *settings.build_flags,
        *targets,
    ]
