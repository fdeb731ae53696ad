import logging
import subprocess

from bazel_check.config import CheckerSettings
from bazel_check.errors import ToolInvocationError
from bazel_check.models import Workspace

logger = logging.getLogger(__name__)

QUERY_UI_FLAGS = (
    "--ui_event_filters=-info,-debug,-warning,-error,-stderr",
    "--noshow_progress",
)


def quote_word(word: str) -> str | None:
    """Quote *word* for a query expression, or None when no quoting can hold it.

    Query words have no escape sequences, so a word with a double quote is
    single-quoted and a word containing both kinds cannot be expressed.
    """
    if '"' not in word:
        return f'"{word}"'
    if "'" not in word:
        return f"'{word}'"
    return None


def rdeps_expression(relative_path: str) -> str:
    """Rules within distance 1 of *relative_path* in the reverse dependency graph."""
    quoted = quote_word(relative_path)
    if quoted is None:
        raise ValueError(f"Cannot quote {relative_path!r} in a query expression.")
    return f'kind(".* rule", rdeps(//..., {quoted}, 1))'


def query_command(relative_path: str, settings: CheckerSettings) -> list[str]:
    return [settings.executable, "query", *QUERY_UI_FLAGS, rdeps_expression(relative_path)]


def parse_query_output(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


def resolve_targets(relative_path: str, *, workspace: Workspace, settings: CheckerSettings) -> list[str]:
    """Ask Bazel which rules directly depend on *relative_path*.

    The query's exit status is ignored; only its standard output counts, so a
    failing query yields whatever labels it managed to print. Raises
    ``ToolInvocationError`` when the executable cannot be started.
    """
    if quote_word(relative_path) is None:
        logger.warning("Skipping target query for %s: path cannot be quoted", relative_path)
        return []
    command = query_command(relative_path, settings)
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
        raise ToolInvocationError(settings.executable, str(exc)) from exc

    targets = parse_query_output(result.stdout or "")
    if not targets:
        logger.info("No rule owns %s (query exit status %d)", relative_path, result.returncode)
    return targets
