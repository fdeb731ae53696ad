from bazel_check.core.ports.diagnostics import DiagnosticFormat
from bazel_check.diagnostics.rustc import RustcJsonFormat

_FORMATS: dict[str, DiagnosticFormat] = {
    RustcJsonFormat.name: RustcJsonFormat(),
}

DEFAULT_FORMAT = RustcJsonFormat.name


def get_format(name: str = DEFAULT_FORMAT) -> DiagnosticFormat:
    try:
        return _FORMATS[name]
    except KeyError:
        raise ValueError(f"Unsupported diagnostic format '{name}'. Supported: {sorted(_FORMATS)}") from None


__all__ = [
    "DEFAULT_FORMAT",
    "DiagnosticFormat",
    "RustcJsonFormat",
    "get_format",
]
