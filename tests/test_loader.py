"""
Tests for the configuration file loader.
"""

import json

import pytest

from imageforge.core.errors import ConfigLoaderError
from imageforge.core.loader import ConfigLoader, deep_merge


@pytest.fixture
def loader(clock):
    return ConfigLoader(cache_ttl=60, clock=clock)


class TestDeepMerge:
    """Tests for deep_merge()."""

    def test_nested_mappings_merge(self):
        merged = deep_merge({"nginx": {"gzip": True, "ssl": False}}, {"nginx": {"ssl": True}})
        assert merged == {"nginx": {"gzip": True, "ssl": True}}

    def test_lists_and_scalars_are_replaced(self):
        merged = deep_merge({"services": ["nginx"], "n": 1}, {"services": ["php-fpm"], "n": 2})
        assert merged == {"services": ["php-fpm"], "n": 2}

    def test_inputs_are_not_mutated(self):
        target = {"a": {"b": 1}}
        source = {"a": {"c": 2}}
        deep_merge(target, source)
        assert target == {"a": {"b": 1}}
        assert source == {"a": {"c": 2}}


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_load_yaml(self, loader, tmp_path):
        path = tmp_path / "base.yaml"
        path.write_text("nginx:\n  workerProcesses: auto\n  workerConnections: 1024\n")
        assert loader.load(path) == {"nginx": {"workerProcesses": "auto", "workerConnections": 1024}}

    def test_load_json(self, loader, tmp_path):
        path = tmp_path / "build.json"
        path.write_text(json.dumps({"architecture": "arm64"}))
        assert loader.load(path) == {"architecture": "arm64"}

    def test_explicit_format(self, loader, tmp_path):
        path = tmp_path / "config.conf"
        path.write_text("architecture: amd64\n")
        assert loader.load(path, fmt="yaml") == {"architecture": "amd64"}

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(ConfigLoaderError, match="Configuration file not found"):
            loader.load(tmp_path / "absent.yaml")

    def test_unsupported_extension(self, loader, tmp_path):
        path = tmp_path / "config.txt"
        path.write_text("x")
        with pytest.raises(ConfigLoaderError, match=r"Unsupported configuration file format: \.txt"):
            loader.load(path)

    def test_malformed_yaml(self, loader, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("nginx: [unclosed\n")
        with pytest.raises(ConfigLoaderError):
            loader.load(path)

    def test_malformed_json(self, loader, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigLoaderError):
            loader.load(path)

    def test_top_level_must_be_mapping(self, loader, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigLoaderError):
            loader.load(path)

    def test_load_many_merges_in_order(self, loader, tmp_path):
        first = tmp_path / "base.yaml"
        first.write_text("nginx:\n  gzip: true\n  ssl: false\n")
        second = tmp_path / "override.json"
        second.write_text(json.dumps({"nginx": {"ssl": True}}))
        assert loader.load_many([first, second]) == {"nginx": {"gzip": True, "ssl": True}}

    def test_load_many_requires_paths(self, loader):
        with pytest.raises(ConfigLoaderError, match="No configuration files"):
            loader.load_many([])


class TestCache:
    """Tests for the TTL cache."""

    def test_cached_until_ttl_expires(self, loader, clock, tmp_path):
        path = tmp_path / "base.yaml"
        path.write_text("a: 1\n")
        loader.load(path)

        path.write_text("a: 2\n")
        assert loader.load(path) == {"a": 1}

        clock.advance(61)
        assert loader.load(path) == {"a": 2}

    def test_cache_returns_copies(self, loader, tmp_path):
        path = tmp_path / "base.yaml"
        path.write_text("a: {b: 1}\n")
        loader.load(path)["a"]["b"] = 99
        assert loader.load(path) == {"a": {"b": 1}}

    def test_clear_cache(self, loader, tmp_path):
        path = tmp_path / "base.yaml"
        path.write_text("a: 1\n")
        loader.load(path)
        assert loader.cache_stats()["size"] == 1

        path.write_text("a: 2\n")
        loader.clear_cache(path)
        assert loader.cache_stats()["size"] == 0
        assert loader.load(path) == {"a": 2}

    def test_cache_disabled(self, clock, tmp_path):
        loader = ConfigLoader(enable_cache=False, clock=clock)
        path = tmp_path / "base.yaml"
        path.write_text("a: 1\n")
        loader.load(path)
        assert loader.cache_stats()["size"] == 0
