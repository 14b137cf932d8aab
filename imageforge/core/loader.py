# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# CONFIGURATION LOADER
# -----------------------------------------------------------------------------
# Responsibility: Reads configuration fragments (JSON or YAML) from disk and
# deep-merges them in order, so a build can be described as
#
#   configs/base.yaml + configs/platforms/alpine.yaml + configs/build.yaml
#
# This is an edge component: it does I/O, then hands plain data to the
# ValidationEngine. It validates nothing beyond "is this a mapping".
# -----------------------------------------------------------------------------

import copy
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

import yaml
from rich.console import Console

from imageforge.core.errors import ConfigLoaderError

console = Console(stderr=True)

FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}
DEFAULT_CACHE_TTL = 300.0


@dataclass
class _CacheEntry:
    document: dict[str, Any]
    loaded_at: float
    ttl: float


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge `source` into a copy of `target`.

    Nested mappings merge key by key; lists and scalars from `source` replace
    the target's value.
    """
    merged = copy.deepcopy(dict(target))
    for key, value in source.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigLoader:
    """
    Loads, caches and merges configuration files.

    Cached documents are returned as deep copies so callers cannot mutate
    the cache.
    """

    def __init__(
        self,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        enable_cache: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: dict[Path, _CacheEntry] = {}
        self._cache_ttl = cache_ttl
        self._enable_cache = enable_cache
        self._clock = clock

    def load(self, path: str | Path, fmt: str | None = None) -> dict[str, Any]:
        """
        Load one configuration file.

        Args:
            path: File path, relative to the working directory or absolute.
            fmt: 'json' or 'yaml'; detected from the extension when omitted.

        Returns:
            The parsed top-level mapping.

        Raises:
            ConfigLoaderError: File missing, unsupported format, unparsable
                content, or a top-level value that is not a mapping.
        """
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ConfigLoaderError(
                f"Configuration file not found: {resolved}",
                details={"path": str(resolved)},
                suggestions=[
                    "Check that the file path is correct",
                    "Verify file permissions",
                    "Ensure the file exists",
                ],
            )

        cached = self._cached(resolved)
        if cached is not None:
            return cached

        document = self._parse(resolved, fmt or self._detect_format(resolved))
        if self._enable_cache:
            self._cache[resolved] = _CacheEntry(
                copy.deepcopy(document), self._clock(), self._cache_ttl
            )
        console.print(f"[green][LOADER] Loaded {resolved.name}[/green]")
        return document

    def load_many(self, paths: Sequence[str | Path], fmt: str | None = None) -> dict[str, Any]:
        """
        Load several files and deep-merge them in order (later files win).

        Raises:
            ConfigLoaderError: If no paths are given or any file fails to load.
        """
        if not paths:
            raise ConfigLoaderError(
                "No configuration files provided for merging",
                suggestions=["Pass at least one configuration file"],
            )
        merged: dict[str, Any] = {}
        for path in paths:
            merged = deep_merge(merged, self.load(path, fmt))
        return merged

    def clear_cache(self, path: str | Path | None = None) -> None:
        """Drop one cached file, or the whole cache."""
        if path is None:
            self._cache.clear()
        else:
            self._cache.pop(Path(path).expanduser().resolve(), None)

    def cache_stats(self) -> dict[str, Any]:
        return {"size": len(self._cache), "entries": [str(path) for path in self._cache]}

    def _cached(self, path: Path) -> dict[str, Any] | None:
        if not self._enable_cache:
            return None
        entry = self._cache.get(path)
        if entry is None:
            return None
        if self._clock() - entry.loaded_at > entry.ttl:
            del self._cache[path]
            return None
        return copy.deepcopy(entry.document)

    @staticmethod
    def _detect_format(path: Path) -> str:
        fmt = FORMATS.get(path.suffix.lower())
        if fmt is None:
            raise ConfigLoaderError(
                f"Unsupported configuration file format: {path.suffix or '(none)'}",
                details={"path": str(path), "extension": path.suffix},
                suggestions=[
                    "Use .json for JSON configuration files",
                    "Use .yaml or .yml for YAML configuration files",
                ],
            )
        return fmt

    @staticmethod
    def _parse(path: Path, fmt: str) -> dict[str, Any]:
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigLoaderError(
                f"Failed to read configuration file: {path}",
                details={"path": str(path), "error": str(e)},
                suggestions=["Check file permissions"],
            ) from e

        try:
            if fmt == "json":
                document = json.loads(content)
            elif fmt == "yaml":
                document = yaml.safe_load(content)
            else:
                raise ConfigLoaderError(
                    f"Unsupported configuration format: {fmt}",
                    details={"path": str(path), "format": fmt},
                    suggestions=["Use 'json' or 'yaml'"],
                )
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigLoaderError(
                f"Invalid {fmt.upper()} in configuration file: {path}",
                details={"path": str(path), "error": str(e)},
                suggestions=[f"Check {fmt.upper()} syntax", "Validate the document structure"],
            ) from e

        if not isinstance(document, dict):
            raise ConfigLoaderError(
                f"Configuration file must contain a mapping at the top level: {path}",
                details={"path": str(path), "type": type(document).__name__},
                suggestions=["Wrap the settings in a top-level object"],
            )
        return document
