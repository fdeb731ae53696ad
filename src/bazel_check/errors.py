class BazelCheckError(Exception):
    """Base class for bazel-check failures."""


class ToolInvocationError(BazelCheckError):
    """The configured executable could not be launched at all."""

    def __init__(self, executable: str, reason: str) -> None:
        super().__init__(f"Could not run '{executable}': {reason}")
        self.executable = executable
        self.reason = reason


class NoTargetsError(BazelCheckError, ValueError):
    """A build command was requested for an empty target list."""


class RegistrationError(BazelCheckError):
    """A checker with the same name is already registered."""
