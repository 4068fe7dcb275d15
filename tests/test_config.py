import copy

import pytest

from abundantis.config import (
    AbundantisConfig,
    CacheConfig,
    FileMergeMode,
    FileResolutionConfig,
    InterpolationConfig,
    InterpolationFeatures,
    MonorepoProviderType,
    ResolutionConfig,
    SourcePrecedence,
    WorkspaceConfig,
    config_from_dict,
    config_to_dict,
    format_duration,
    parse_duration,
)
from abundantis.errors import ConfigError, UnknownProviderError


def test_workspace_config_default():
    config = WorkspaceConfig()
    assert config.provider is None
    assert config.cascading is False
    assert config.roots == []
    assert len(config.env_files) == 4
    assert len(config.ignores) == 5


def test_workspace_config_env_files_default():
    assert WorkspaceConfig().env_files == [
        ".env", ".env.local", ".env.development", ".env.production",
    ]


def test_workspace_config_ignores_default():
    ignores = WorkspaceConfig().ignores
    for pattern in ("**/node_modules/**", "**/.git/**", "**/target/**", "**/dist/**", "**/build/**"):
        assert pattern in ignores


def test_default_lists_are_not_shared():
    first = WorkspaceConfig()
    first.env_files.append(".env.test")
    assert len(WorkspaceConfig().env_files) == 4


def test_resolution_config_default():
    config = ResolutionConfig()
    assert config.precedence == [SourcePrecedence.SHELL, SourcePrecedence.FILE]
    assert config.type_check is True


def test_resolution_config_file_merge_default():
    config = ResolutionConfig()
    assert config.files.mode == FileMergeMode.MERGE
    assert config.files.order == [".env", ".env.local"]


def test_interpolation_config_default():
    config = InterpolationConfig()
    assert config.enabled is True
    assert config.max_depth == 64


def test_interpolation_features_default():
    features = InterpolationConfig().features
    assert features.defaults is True
    assert features.alternates is True
    assert features.recursion is True
    assert features.commands is False


def test_cache_config_default():
    config = CacheConfig()
    assert config.enabled is True
    assert config.hot_cache_size == 1000
    assert config.ttl == 300


def test_abundantis_config_default():
    config = AbundantisConfig()
    assert config.workspace.provider is None
    assert config.interpolation.enabled is True
    assert config.cache.enabled is True
    assert config.workspace.env_files
    assert config.resolution.precedence


@pytest.mark.parametrize(
    "name", ["turbo", "nx", "lerna", "pnpm", "npm", "yarn", "cargo", "custom"]
)
def test_monorepo_provider_types(name):
    config = config_from_dict({"workspace": {"provider": name}})
    assert config.workspace.provider == MonorepoProviderType(name)
    assert config_to_dict(config)["workspace"]["provider"] == name


def test_source_precedence_types():
    config = config_from_dict({"resolution": {"precedence": ["shell", "file", "remote"]}})
    assert config.resolution.precedence == [
        SourcePrecedence.SHELL,
        SourcePrecedence.FILE,
        SourcePrecedence.REMOTE,
    ]
    assert config_to_dict(config)["resolution"]["precedence"] == ["shell", "file", "remote"]


def test_file_merge_mode_types():
    assert FileMergeMode.MERGE == FileMergeMode("merge")
    assert FileMergeMode.OVERRIDE == FileMergeMode("override")
    assert FileMergeMode.MERGE != FileMergeMode.OVERRIDE


def test_workspace_config_with_provider():
    config = WorkspaceConfig(provider=MonorepoProviderType.TURBO)
    assert config.provider == MonorepoProviderType.TURBO
    assert len(config.env_files) == 4


def test_workspace_config_with_custom_roots():
    config = WorkspaceConfig(roots=["apps/*", "packages/*"], cascading=True)
    assert config.roots == ["apps/*", "packages/*"]
    assert config.cascading is True
    assert len(config.ignores) == 5


def test_resolution_config_with_precedence():
    config = ResolutionConfig(precedence=[SourcePrecedence.FILE, SourcePrecedence.SHELL], type_check=False)
    assert config.precedence[0] == SourcePrecedence.FILE
    assert config.precedence[1] == SourcePrecedence.SHELL
    assert config.type_check is False
    assert config.files.order == [".env", ".env.local"]


def test_file_resolution_config_with_mode():
    config = FileResolutionConfig(mode=FileMergeMode.OVERRIDE)
    assert config.mode == FileMergeMode.OVERRIDE
    assert config.order == [".env", ".env.local"]


def test_interpolation_config_with_max_depth():
    config = InterpolationConfig(max_depth=100)
    assert config.max_depth == 100
    assert config.enabled is True


def test_interpolation_features_with_commands():
    features = InterpolationFeatures(commands=True)
    assert features.commands is True
    assert features.defaults is True


def test_cache_config_overrides():
    config = CacheConfig(hot_cache_size=500, ttl=600)
    assert config.hot_cache_size == 500
    assert config.ttl == 600
    assert config.enabled is True


def test_config_clone_is_independent():
    config = AbundantisConfig()
    cloned = copy.deepcopy(config)
    assert cloned == config
    cloned.workspace.roots.append("apps/*")
    assert config.workspace.roots == []


@pytest.mark.parametrize(
    "text, seconds",
    [
        ("5m", 300),
        ("300s", 300),
        ("1h 30m", 5400),
        ("1h30m", 5400),
        ("2days", 172800),
        ("1week", 604800),
        ("250ms", 0.25),
        ("10 seconds", 10),
        ("1year", 31_557_600),
        ("1M", 2_630_016),
    ],
)
def test_parse_duration(text, seconds):
    assert parse_duration(text) == seconds


@pytest.mark.parametrize("text", ["", "300", "5 parsecs", "abc", "-5m", "1.5h"])
def test_parse_duration_rejects(text):
    with pytest.raises(ValueError):
        parse_duration(text)


@pytest.mark.parametrize(
    "seconds, text",
    [
        (0, "0s"),
        (300, "5m"),
        (5400, "1h 30m"),
        (172800, "2days"),
        (90061, "1day 1h 1m 1s"),
        (0.25, "250ms"),
    ],
)
def test_format_duration(seconds, text):
    assert format_duration(seconds) == text


def test_format_duration_rejects_negative():
    with pytest.raises(ValueError):
        format_duration(-1)


@pytest.mark.parametrize("seconds", [1, 59, 3601, 86_400 * 40, 31_557_600 * 2 + 7, 0.001])
def test_duration_round_trip(seconds):
    assert parse_duration(format_duration(seconds)) == pytest.approx(seconds)


def test_config_from_empty_dict_is_default():
    assert config_from_dict({}) == AbundantisConfig()
    assert config_from_dict(None) == AbundantisConfig()


def test_config_from_dict_values():
    config = config_from_dict(
        {
            "workspace": {"provider": "turbo", "roots": ["apps/*"], "cascading": True},
            "resolution": {"precedence": ["file"], "files": {"mode": "override"}},
            "interpolation": {"max_depth": 8, "features": {"commands": True}},
            "cache": {"ttl": "10m", "hot_cache_size": 5},
        }
    )
    assert config.workspace.provider == MonorepoProviderType.TURBO
    assert config.workspace.roots == ["apps/*"]
    assert config.workspace.cascading is True
    assert len(config.workspace.env_files) == 4
    assert config.resolution.precedence == [SourcePrecedence.FILE]
    assert config.resolution.files.mode == FileMergeMode.OVERRIDE
    assert config.resolution.files.order == [".env", ".env.local"]
    assert config.interpolation.max_depth == 8
    assert config.interpolation.features.commands is True
    assert config.interpolation.features.defaults is True
    assert config.cache.ttl == 600
    assert config.cache.hot_cache_size == 5


def test_config_from_dict_unknown_provider():
    with pytest.raises(UnknownProviderError) as info:
        config_from_dict({"workspace": {"provider": "bazel"}})
    assert info.value.provider == "bazel"


@pytest.mark.parametrize(
    "data",
    [
        {"workspace": "x"},
        {"workspace": {"cascading": "yes"}},
        {"workspace": {"roots": "apps"}},
        {"resolution": {"precedence": ["disk"]}},
        {"resolution": {"files": {"mode": "mix"}}},
        {"interpolation": {"max_depth": -1}},
        {"interpolation": {"max_depth": 2**32}},
        {"cache": {"ttl": 300}},
        {"cache": {"ttl": "soon"}},
        {"cache": {"hot_cache_size": True}},
    ],
)
def test_config_from_dict_rejects(data):
    with pytest.raises(ConfigError):
        config_from_dict(data)


def test_config_to_dict_defaults():
    data = config_to_dict(AbundantisConfig())
    assert data["workspace"]["provider"] is None
    assert data["resolution"]["precedence"] == ["shell", "file"]
    assert data["resolution"]["files"]["mode"] == "merge"
    assert data["cache"]["ttl"] == "5m"
    assert data["interpolation"]["max_depth"] == 64


def test_config_dict_round_trip():
    config = AbundantisConfig(
        workspace=WorkspaceConfig(provider=MonorepoProviderType.CARGO, cascading=True),
        resolution=ResolutionConfig(precedence=[SourcePrecedence.REMOTE]),
        cache=CacheConfig(enabled=False, ttl=5400),
    )
    assert config_from_dict(config_to_dict(config)) == config