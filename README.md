# abundantis

Building blocks for managing environment variables that come from several
sources, such as `.env` files, the shell, memory or remote stores. The package
has no third-party dependencies.

## Modules

- `abundantis.config` holds the typed configuration: `AbundantisConfig`,
  which is made of `WorkspaceConfig`, `ResolutionConfig` (with
  `FileResolutionConfig`), `InterpolationConfig` (with
  `InterpolationFeatures`) and `CacheConfig`. Every field has a default.
  There are three enums: `MonorepoProviderType`, `SourcePrecedence` and
  `FileMergeMode`.
  - `config_from_dict(data)` builds a configuration from nested mappings,
    such as the result of parsing a TOML, JSON or YAML file. Missing fields
    take their defaults. A field of the wrong type raises `ConfigError`. An
    unrecognised provider raises `UnknownProviderError`.
  - `config_to_dict(config)` turns a configuration back into plain data.
  - `parse_duration(text)` turns a human-readable duration such as `"5m"` or
    `"1h 30m"` into seconds. `format_duration(seconds)` does the reverse.
    Both are used for `cache.ttl`.
- `abundantis.errors` holds the exceptions. Every error the package defines
  derives from `AbundantisError`. Errors about variable sources derive from
  `SourceError`. Examples are `CircularDependencyError`,
  `MaxDepthExceededError` and `SourceReadError`. The module also defines
  `Diagnostic` records, each with a `DiagnosticSeverity` and a
  `DiagnosticCode`, for editor tooling.
- `abundantis.path_cache` has `PathCache`, a thread-safe cache of canonical
  paths.
  - A path that cannot be resolved is cached and returned as it was given.
  - `stats()` returns a `CacheStats` with the counts of hits, misses and
    errors.
  - `hit_rate()` returns the share of lookups that were hits.
- `abundantis.events` has the event types `SourceAdded`, `SourceRemoved`,
  `VariablesChanged` and `CacheInvalidated`, together with an `EventBus`.
  - Subscribers implement `EventSubscriber.on_event`.
  - `publish` delivers an event synchronously. `publish_async` calls the
    subscribers in a worker thread and logs any subscriber that fails.
  - `subscribe_channel()` opens an `EventReceiver`, a bounded queue that
    receives every event published after it was opened. When the queue is
    full, the oldest event is dropped and counted in `lagged`.
- `abundantis.graph` has `DependencyGraph`, which records which variable
  references which.
  - `detect_cycle(start)` returns the path from `start` into a cycle, or an
    empty list when there is none.
- `abundantis.resolution_cache` has `CacheKey`, `ResolvedVariable`,
  `CachedValue` and `ResolutionCache`. `ResolutionCache` is a two-level
  cache: an LRU "hot" level bounded by `hot_cache_size`, and an unbounded
  level. Entries in both levels expire after the TTL.
  - Each inserted entry is stored in both levels, so `len()` counts it
    twice.
  - A disabled cache stores nothing.

## Example

```python
from abundantis.config import config_from_dict
from abundantis.graph import DependencyGraph

config = config_from_dict({"cache": {"ttl": "10m"}, "workspace": {"provider": "turbo"}})
print(config.cache.ttl)  # 600.0

graph = DependencyGraph()
graph.add_edge("A", "B", None)
graph.add_edge("B", "A", None)
print(graph.detect_cycle("A"))  # ['A', 'B']
```

## What this package does not do

The package provides configuration, errors, caches, events and dependency
graphs. It does not do the following:

- read `.env` files or the shell environment
- discover workspaces or monorepo packages
- interpolate values or resolve a variable across sources
- watch files for changes

It also has no command-line interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```