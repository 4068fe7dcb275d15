"""Error types raised by the package and diagnostics reported to editors."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


def _quoted(path: Path) -> str:
    return f'"{path}"'


class AbundantisError(Exception):
    """Base class for every error raised by the package."""

    _fields: tuple = ()

    def __repr__(self) -> str:
        parts = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({parts})"


class ConfigError(AbundantisError):
    """The configuration is invalid."""

    _fields = ("message", "path")

    def __init__(self, message: str, path: Optional[PathLike] = None) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(f"Configuration error: {message}")


class MissingConfigError(AbundantisError):
    """A required configuration field is not set."""

    _fields = ("field", "suggestion")

    def __init__(self, field: str, suggestion: str) -> None:
        self.field = field
        self.suggestion = suggestion
        super().__init__(f"Missing required configuration: `{field}`. {suggestion}")


class UnknownProviderError(AbundantisError):
    """A monorepo provider name is not recognised."""

    _fields = ("provider",)

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(
            f"Unknown provider `{provider}`. Valid options: "
            "turbo, nx, lerna, pnpm, npm, yarn, cargo, custom"
        )


class InvalidGlobError(AbundantisError):
    """A glob pattern cannot be compiled."""

    _fields = ("pattern", "reason")

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid glob pattern `{pattern}`: {reason}")


class WorkspaceNotFoundError(AbundantisError):
    """No workspace root was found."""

    _fields = ("search_path",)

    def __init__(self, search_path: PathLike) -> None:
        self.search_path = Path(search_path)
        super().__init__(
            f"Workspace root not found. Searched from: {_quoted(self.search_path)}"
        )


class ProviderConfigNotFoundError(AbundantisError):
    """The configuration file of a monorepo provider is missing."""

    _fields = ("expected_file", "search_path")

    def __init__(self, expected_file: str, search_path: PathLike) -> None:
        self.expected_file = expected_file
        self.search_path = Path(search_path)
        super().__init__(
            f"Provider config file not found: {expected_file} "
            f"in {_quoted(self.search_path)}"
        )


class ProviderConfigParseError(AbundantisError):
    """The configuration file of a monorepo provider cannot be parsed."""

    _fields = ("path", "reason")

    def __init__(self, path: PathLike, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"Failed to parse provider config `{_quoted(self.path)}`: {reason}"
        )


class CircularDependencyError(AbundantisError):
    """Variables reference each other in a cycle."""

    _fields = ("chain",)

    def __init__(self, chain: str) -> None:
        self.chain = chain
        super().__init__(f"Circular dependency detected: {chain}")


class MaxDepthExceededError(AbundantisError):
    """Interpolation nested deeper than allowed."""

    _fields = ("key", "depth")

    def __init__(self, key: str, depth: int) -> None:
        self.key = key
        self.depth = depth
        super().__init__(f"Max interpolation depth ({depth}) exceeded for `{key}`")


class UndefinedVariableError(AbundantisError):
    """An interpolation refers to a variable that is not defined."""

    _fields = ("key",)

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Undefined variable `{key}` referenced in interpolation")


class AbundantisIOError(AbundantisError):
    """An operating-system error occurred."""

    _fields = ("error",)

    def __init__(self, error: OSError) -> None:
        self.error = error
        super().__init__(f"IO error: {error}")


class AbundantisRuntimeError(AbundantisError):
    """A failure of the runtime machinery."""

    _fields = ("message",)

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Runtime error: {message}")


class CacheError(AbundantisError):
    """A cache operation failed."""

    _fields = ("message",)

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Cache error: {message}")


class SourceError(AbundantisError):
    """Base class for errors raised while loading a variable source."""


class SourceReadError(SourceError):
    """A source could not be read."""

    _fields = ("source_name", "reason")

    def __init__(self, source_name: str, reason: str) -> None:
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"Failed to read source `{source_name}`: {reason}")


class SourceParseError(SourceError):
    """A source file holds invalid syntax."""

    _fields = ("path", "line", "message")

    def __init__(self, path: PathLike, line: int, message: str) -> None:
        self.path = Path(path)
        self.line = line
        self.message = message
        super().__init__(
            f"Parse error in {_quoted(self.path)} at line {line}: {message}"
        )


class RemoteSourceError(SourceError):
    """A remote provider reported a failure."""

    _fields = ("provider", "reason")

    def __init__(self, provider: str, reason: str) -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(f"Remote source error from `{provider}`: {reason}")


class SourceTimeoutError(SourceError):
    """Loading a source took too long."""

    _fields = ("source_name",)

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        super().__init__(f"Timeout while loading source `{source_name}`")


class SourceAuthenticationError(SourceError):
    """A source rejected the credentials."""

    _fields = ("source_name",)

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        super().__init__(f"Authentication failed for source `{source_name}`")


class SourcePermissionError(SourceError):
    """Access to a source was denied."""

    _fields = ("source_name",)

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        super().__init__(f"Permission denied for source `{source_name}`")


class UnsupportedOperationError(SourceError):
    """A source does not support the requested operation."""

    _fields = ("operation", "source_type", "reason")

    def __init__(self, operation: str, source_type: str, reason: str) -> None:
        self.operation = operation
        self.source_type = source_type
        self.reason = reason
        super().__init__(f"Unsupported operation `{operation}` for source: {reason}")


class DiagnosticSeverity(enum.Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


class DiagnosticCode(enum.Enum):
    """Codes that categorise diagnostics."""

    EDF001 = "EDF001"
    EDF002 = "EDF002"
    EDF003 = "EDF003"
    EDF004 = "EDF004"
    RES001 = "RES001"
    RES002 = "RES002"
    RES003 = "RES003"
    WS001 = "WS001"
    WS002 = "WS002"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found in a file."""

    severity: DiagnosticSeverity
    code: DiagnosticCode
    message: str
    path: Path
    line: int
    column: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))