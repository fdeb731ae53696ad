from pathlib import Path

from bazel_check.models import Workspace

WORKSPACE_MARKERS = ("WORKSPACE", "WORKSPACE.bazel")


def _has_marker(directory: Path) -> bool:
    return any((directory / marker).is_file() for marker in WORKSPACE_MARKERS)


def locate_workspace(file_path: str | Path) -> Workspace | None:
    """Return the nearest ancestor directory holding a workspace marker."""
    resolved = Path(file_path).resolve()
    start = resolved if resolved.is_dir() else resolved.parent
    for directory in (start, *start.parents):
        if _has_marker(directory):
            return Workspace(root=directory)
    return None


def relative_path(workspace: Workspace, file_path: str | Path) -> str:
    """Path of *file_path* relative to the workspace root, with forward slashes."""
    resolved = Path(file_path).resolve()
    return resolved.relative_to(workspace.root).as_posix()
