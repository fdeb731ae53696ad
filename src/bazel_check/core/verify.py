from bazel_check.config import CheckerSettings
from bazel_check.core.targets import resolve_targets
from bazel_check.core.workspace import locate_workspace, relative_path
from bazel_check.errors import ToolInvocationError
from bazel_check.models import CheckRequest, VerificationResult, VerificationStatus

ROOT_LABEL = "Bazel workspace"
TARGETS_LABEL = "Bazel targets"
NOT_FOUND = "not found"


def verify(request: CheckRequest, *, settings: CheckerSettings) -> list[VerificationResult]:
    """Re-run root and target lookups for *request* and report each outcome.

    A missing root is an error; a root without an owning target is a warning.
    """
    workspace = locate_workspace(request.file_path)
    if workspace is None:
        return [
            VerificationResult(label=ROOT_LABEL, message=NOT_FOUND, status=VerificationStatus.ERROR),
            VerificationResult(label=TARGETS_LABEL, message=NOT_FOUND, status=VerificationStatus.WARNING),
        ]

    root_result = VerificationResult(
        label=ROOT_LABEL,
        message=str(workspace.root),
        status=VerificationStatus.SUCCESS,
    )
    try:
        targets = resolve_targets(
            relative_path(workspace, request.file_path),
            workspace=workspace,
            settings=settings,
        )
    except ToolInvocationError as exc:
        return [
            root_result,
            VerificationResult(label=TARGETS_LABEL, message=str(exc), status=VerificationStatus.ERROR),
        ]

    if targets:
        targets_result = VerificationResult(
            label=TARGETS_LABEL,
            message=", ".join(targets),
            status=VerificationStatus.SUCCESS,
        )
    else:
        targets_result = VerificationResult(
            label=TARGETS_LABEL,
            message=NOT_FOUND,
            status=VerificationStatus.WARNING,
        )
    return [root_result, targets_result]
