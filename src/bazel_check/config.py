import os
import shlex
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

DEFAULT_EXECUTABLE = "bazel"


class CheckerSettings(BaseModel):
    """Process-wide checker settings."""

    model_config = ConfigDict(frozen=True)

    executable: str = DEFAULT_EXECUTABLE
    build_flags: tuple[str, ...] = ()


def get_settings(
    executable: str | None = None,
    build_flags: Sequence[str] | None = None,
) -> CheckerSettings:
    """Read settings from the environment, letting explicit arguments win."""
    env_executable = os.getenv("BAZEL_CHECK_EXECUTABLE", DEFAULT_EXECUTABLE)
    env_flags = shlex.split(os.getenv("BAZEL_CHECK_BUILD_FLAGS", ""))
    return CheckerSettings(
        executable=executable or env_executable,
        build_flags=tuple(build_flags) if build_flags else tuple(env_flags),
    )
