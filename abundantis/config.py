"""Configuration types, their defaults and conversion from plain data."""

from __future__ import annotations

import enum
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import ConfigError, UnknownProviderError

DEFAULT_ENV_FILES = (".env", ".env.local", ".env.development", ".env.production")
DEFAULT_IGNORES = (
    "**/node_modules/**",
    "**/.git/**",
    "**/target/**",
    "**/dist/**",
    "**/build/**",
)
DEFAULT_FILE_ORDER = (".env", ".env.local")
DEFAULT_MAX_DEPTH = 64
DEFAULT_HOT_CACHE_SIZE = 1000
DEFAULT_TTL_SECONDS = 300.0

_U32_MAX = 2**32 - 1


class MonorepoProviderType(enum.Enum):
    """Kinds of monorepo tooling a workspace may use."""

    TURBO = "turbo"
    NX = "nx"
    LERNA = "lerna"
    PNPM = "pnpm"
    NPM = "npm"
    YARN = "yarn"
    CARGO = "cargo"
    CUSTOM = "custom"


class SourcePrecedence(enum.Enum):
    """Kinds of variable sources, used to order them."""

    SHELL = "shell"
    FILE = "file"
    REMOTE = "remote"


class FileMergeMode(enum.Enum):
    """How variables from several files combine."""

    MERGE = "merge"
    OVERRIDE = "override"


@dataclass
class WorkspaceConfig:
    provider: Optional[MonorepoProviderType] = None
    roots: list = field(default_factory=list)
    cascading: bool = False
    env_files: list = field(default_factory=lambda: list(DEFAULT_ENV_FILES))
    ignores: list = field(default_factory=lambda: list(DEFAULT_IGNORES))


@dataclass
class FileResolutionConfig:
    mode: FileMergeMode = FileMergeMode.MERGE
    order: list = field(default_factory=lambda: list(DEFAULT_FILE_ORDER))


@dataclass
class ResolutionConfig:
    precedence: list = field(
        default_factory=lambda: [SourcePrecedence.SHELL, SourcePrecedence.FILE]
    )
    files: FileResolutionConfig = field(default_factory=FileResolutionConfig)
    type_check: bool = True


@dataclass
class InterpolationFeatures:
    defaults: bool = True
    alternates: bool = True
    recursion: bool = True
    commands: bool = False


@dataclass
class InterpolationConfig:
    enabled: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH
    features: InterpolationFeatures = field(default_factory=InterpolationFeatures)


@dataclass
class CacheConfig:
    """Cache settings; ``ttl`` is in seconds."""

    enabled: bool = True
    hot_cache_size: int = DEFAULT_HOT_CACHE_SIZE
    ttl: float = DEFAULT_TTL_SECONDS


@dataclass
class AbundantisConfig:
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    interpolation: InterpolationConfig = field(default_factory=InterpolationConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


# ─── durations ──────────────────────────────────────────────────────────────

_NS = 1
_US = 1_000
_MS = 1_000_000
_SEC = 1_000_000_000
_MIN = 60 * _SEC
_HOUR = 60 * _MIN
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 2_630_016 * _SEC
_YEAR = 31_557_600 * _SEC

_UNITS = {
    **dict.fromkeys(("nanos", "nsec", "ns"), _NS),
    **dict.fromkeys(("usec", "us", "µs"), _US),
    **dict.fromkeys(("millis", "msec", "ms"), _MS),
    **dict.fromkeys(("seconds", "second", "secs", "sec", "s"), _SEC),
    **dict.fromkeys(("minutes", "minute", "mins", "min", "m"), _MIN),
    **dict.fromkeys(("hours", "hour", "hrs", "hr", "h"), _HOUR),
    **dict.fromkeys(("days", "day", "d"), _DAY),
    **dict.fromkeys(("weeks", "week", "w"), _WEEK),
    **dict.fromkeys(("months", "month", "M"), _MONTH),
    **dict.fromkeys(("years", "year", "y"), _YEAR),
}

_DURATION = re.compile(r"\s*(?:\d+\s*[^\W\d_]+\s*)+")
_ITEM = re.compile(r"(\d+)\s*([^\W\d_]+)")


def parse_duration(text: str) -> float:
    """Parse a human-readable duration such as ``"1h 30m"`` into seconds."""
    if not isinstance(text, str) or not _DURATION.fullmatch(text):
        raise ValueError(f"invalid duration: {text!r}")
    total = 0
    for number, unit in _ITEM.findall(text):
        try:
            total += int(number) * _UNITS[unit]
        except KeyError:
            raise ValueError(f"unknown time unit {unit!r} in {text!r}") from None
    return total / _SEC


def format_duration(seconds: float) -> str:
    """Render a number of seconds as a human-readable duration."""
    if seconds < 0:
        raise ValueError("duration cannot be negative")
    nanos = int(round(seconds * _SEC))
    if nanos == 0:
        return "0s"
    whole, sub = divmod(nanos, _SEC)
    years, rest = divmod(whole, _YEAR // _SEC)
    months, rest = divmod(rest, _MONTH // _SEC)
    days, rest = divmod(rest, _DAY // _SEC)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    millis, rest = divmod(sub, _MS)
    micros, nanosecs = divmod(rest, _US)

    plural = [(years, "year"), (months, "month"), (days, "day")]
    plain = [
        (hours, "h"), (minutes, "m"), (secs, "s"),
        (millis, "ms"), (micros, "us"), (nanosecs, "ns"),
    ]
    parts = [f"{n}{name}{'s' if n > 1 else ''}" for n, name in plural if n]
    parts += [f"{n}{name}" for n, name in plain if n]
    return " ".join(parts)


# ─── conversion from plain data ─────────────────────────────────────────────


def _table(value: Any, where: str) -> Mapping:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"`{where}` must be a table")
    return value


def _bool(table: Mapping, key: str, default: bool, where: str) -> bool:
    if key not in table:
        return default
    value = table[key]
    if not isinstance(value, bool):
        raise ConfigError(f"`{where}.{key}` must be a boolean")
    return value


def _uint(table: Mapping, key: str, default: int, where: str, maximum: Optional[int] = None) -> int:
    if key not in table:
        return default
    value = table[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"`{where}.{key}` must be a non-negative integer")
    if maximum is not None and value > maximum:
        raise ConfigError(f"`{where}.{key}` must be at most {maximum}")
    return value


def _strings(table: Mapping, key: str, default: list, where: str) -> list:
    if key not in table:
        return default
    value = table[key]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"`{where}.{key}` must be a list of strings")
    return list(value)


def _enum(enum_type: type, value: Any, where: str):
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        raise ConfigError(f"unknown variant `{value}` for `{where}`") from None


def _provider(value: Any) -> MonorepoProviderType:
    if isinstance(value, MonorepoProviderType):
        return value
    try:
        return MonorepoProviderType(value)
    except ValueError:
        raise UnknownProviderError(str(value)) from None


def _workspace(table: Mapping) -> WorkspaceConfig:
    default = WorkspaceConfig()
    provider = table.get("provider")
    return WorkspaceConfig(
        provider=_provider(provider) if provider is not None else None,
        roots=_strings(table, "roots", default.roots, "workspace"),
        cascading=_bool(table, "cascading", default.cascading, "workspace"),
        env_files=_strings(table, "env_files", default.env_files, "workspace"),
        ignores=_strings(table, "ignores", default.ignores, "workspace"),
    )


def _resolution(table: Mapping) -> ResolutionConfig:
    default = ResolutionConfig()
    precedence = default.precedence
    if "precedence" in table:
        items = table["precedence"]
        if not isinstance(items, (list, tuple)):
            raise ConfigError("`resolution.precedence` must be a list")
        precedence = [_enum(SourcePrecedence, item, "resolution.precedence") for item in items]
    files_table = _table(table.get("files"), "resolution.files")
    files = FileResolutionConfig(
        mode=_enum(FileMergeMode, files_table["mode"], "resolution.files.mode")
        if "mode" in files_table
        else default.files.mode,
        order=_strings(files_table, "order", default.files.order, "resolution.files"),
    )
    return ResolutionConfig(
        precedence=precedence,
        files=files,
        type_check=_bool(table, "type_check", default.type_check, "resolution"),
    )


def _interpolation(table: Mapping) -> InterpolationConfig:
    default = InterpolationConfig()
    features_table = _table(table.get("features"), "interpolation.features")
    where = "interpolation.features"
    features = InterpolationFeatures(
        defaults=_bool(features_table, "defaults", default.features.defaults, where),
        alternates=_bool(features_table, "alternates", default.features.alternates, where),
        recursion=_bool(features_table, "recursion", default.features.recursion, where),
        commands=_bool(features_table, "commands", default.features.commands, where),
    )
    return InterpolationConfig(
        enabled=_bool(table, "enabled", default.enabled, "interpolation"),
        max_depth=_uint(table, "max_depth", default.max_depth, "interpolation", _U32_MAX),
        features=features,
    )


def _cache(table: Mapping) -> CacheConfig:
    default = CacheConfig()
    ttl = default.ttl
    if "ttl" in table:
        raw = table["ttl"]
        if not isinstance(raw, str):
            raise ConfigError("`cache.ttl` must be a duration string such as \"5m\"")
        try:
            ttl = parse_duration(raw)
        except ValueError as exc:
            raise ConfigError(f"`cache.ttl`: {exc}") from None
    return CacheConfig(
        enabled=_bool(table, "enabled", default.enabled, "cache"),
        hot_cache_size=_uint(table, "hot_cache_size", default.hot_cache_size, "cache"),
        ttl=ttl,
    )


def config_from_dict(data: Optional[Mapping]) -> AbundantisConfig:
    """Build a configuration from nested mappings; missing fields take defaults."""
    root = _table(data, "configuration")
    return AbundantisConfig(
        workspace=_workspace(_table(root.get("workspace"), "workspace")),
        resolution=_resolution(_table(root.get("resolution"), "resolution")),
        interpolation=_interpolation(_table(root.get("interpolation"), "interpolation")),
        cache=_cache(_table(root.get("cache"), "cache")),
    )


def config_to_dict(config: AbundantisConfig) -> dict:
    """Turn a configuration into nested plain data."""
    workspace = config.workspace
    resolution = config.resolution
    interpolation = config.interpolation
    features = interpolation.features
    return {
        "workspace": {
            "provider": workspace.provider.value if workspace.provider else None,
            "roots": list(workspace.roots),
            "cascading": workspace.cascading,
            "env_files": list(workspace.env_files),
            "ignores": list(workspace.ignores),
        },
        "resolution": {
            "precedence": [item.value for item in resolution.precedence],
            "files": {
                "mode": resolution.files.mode.value,
                "order": list(resolution.files.order),
            },
            "type_check": resolution.type_check,
        },
        "interpolation": {
            "enabled": interpolation.enabled,
            "max_depth": interpolation.max_depth,
            "features": {
                "defaults": features.defaults,
                "alternates": features.alternates,
                "recursion": features.recursion,
                "commands": features.commands,
            },
        },
        "cache": {
            "enabled": config.cache.enabled,
            "hot_cache_size": config.cache.hot_cache_size,
            "ttl": format_duration(config.cache.ttl),
        },
    }