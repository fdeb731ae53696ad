"""Diagnostics for rustc's JSON message format as emitted through rules_rust."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from bazel_check.models import Diagnostic, Severity, Workspace

logger = logging.getLogger(__name__)

_LEVELS = {
    "error": Severity.ERROR,
    "error: internal compiler error": Severity.ERROR,
    "warning": Severity.WARNING,
    "failure-note": Severity.INFO,
    "note": Severity.INFO,
    "help": Severity.INFO,
}

_SUMMARY_PREFIXES = ("aborting due to", "For more information about")


class RustcSpan(BaseModel):
    file_name: str
    line_start: int
    line_end: int
    column_start: int
    column_end: int
    is_primary: bool
    label: str | None = None


class RustcCode(BaseModel):
    code: str
    explanation: str | None = None


class RustcMessage(BaseModel):
    message: str
    level: str
    code: RustcCode | None = None
    spans: list[RustcSpan] = []
    children: list[RustcMessage] = []
    rendered: str | None = None


RustcMessage.model_rebuild()  # necessary for recursive types


def _primary_span(spans: list[RustcSpan]) -> RustcSpan | None:
    return next((s for s in spans if s.is_primary), None)


def _is_summary(message: RustcMessage) -> bool:
    return message.message.startswith(_SUMMARY_PREFIXES)


class RustcJsonFormat:
    """Filter, parse and explain rustc JSON diagnostics."""

    name = "rustc-json"
    build_flag = "--@rules_rust//:error_format=json"
    extensions = frozenset({".rs"})

    def filter(self, output: str) -> list[str]:
        return [line.strip() for line in output.splitlines() if line.lstrip().startswith("{")]

    def parse(self, records: list[str], workspace: Workspace) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for record in records:
            try:
                message = RustcMessage.model_validate_json(record)
            except ValidationError:
                logger.debug("Skipping non-diagnostic JSON line: %.80s", record)
                continue
            if _is_summary(message):
                continue
            diagnostics.extend(self._convert(message, workspace))
        return diagnostics

    def explain(self, diagnostic: Diagnostic) -> str | None:
        if diagnostic.code is None:
            return None
        return f"Run `rustc --explain {diagnostic.code}` for details."

    def _convert(self, message: RustcMessage, workspace: Workspace) -> list[Diagnostic]:
        span = _primary_span(message.spans)
        if span is None:
            return []

        text = message.message
        if span.label:
            text = f"{text}: {span.label}"
        # Children without a location of their own belong to the parent message.
        for child in message.children:
            if _primary_span(child.spans) is None:
                text = f"{text}\n{child.level}: {child.message}"

        code = message.code.code if message.code else None
        converted = [self._diagnostic(span, message.level, text, code, workspace)]
        for child in message.children:
            child_span = _primary_span(child.spans)
            if child_span is not None:
                converted.append(self._diagnostic(child_span, child.level, child.message, code, workspace))
        return converted

    @staticmethod
    def _diagnostic(span: RustcSpan, level: str, text: str, code: str | None, workspace: Workspace) -> Diagnostic:
        return Diagnostic(
            file=workspace.root / Path(span.file_name),
            line=span.line_start,
            column=span.column_start,
            end_line=span.line_end,
            end_column=span.column_end,
            severity=_LEVELS.get(level, Severity.ERROR),
            message=text,
            code=code,
        )
