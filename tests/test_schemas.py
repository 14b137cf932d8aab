"""
Tests for the domain schemas (PHP, security, Nginx, s6-overlay, metadata).
"""

import pytest

from imageforge.schemas import (
    BASE_CONFIG_SCHEMA,
    METADATA_SCHEMA,
    NGINX_SCHEMA,
    PHP_SCHEMA,
    PHP_VERSION_SCHEMA,
    S6_OVERLAY_SCHEMA,
    SECURITY_SCHEMA,
)


@pytest.fixture
def nginx():
    return {"workerProcesses": "auto", "workerConnections": 1024, "gzip": True, "ssl": False}


class TestPHPSchema:
    """Tests for the PHP runtime schema."""

    def test_valid_php(self, base_config):
        assert PHP_SCHEMA.validate(base_config["php"]).is_valid

    def test_unsupported_version(self):
        result = PHP_VERSION_SCHEMA.validate("5.6", label="version")
        assert result.errors == ["version must be one of: 7.4, 8.0, 8.1, 8.2, 8.3, 8.4"]

    @pytest.mark.parametrize("version", ["7.4", "8.0"])
    def test_end_of_life_versions_warn(self, version):
        result = PHP_VERSION_SCHEMA.validate(version, label="php.version")
        assert result.is_valid
        assert result.warnings == [f"php.version {version} is end-of-life; consider upgrading"]

    def test_current_version_has_no_warning(self):
        assert PHP_VERSION_SCHEMA.validate("8.3").warnings == []

    def test_at_least_one_extension(self, base_config):
        php = base_config["php"]
        php["extensions"] = []
        result = PHP_SCHEMA.validate(php)
        assert result.errors == ["At least one PHP extension is required in extensions"]

    def test_fpm_max_children_upper_bound(self, base_config):
        php = base_config["php"]
        php["fpm"]["maxChildren"] = 1001
        result = PHP_SCHEMA.validate(php)
        assert result.errors == ["fpm.maxChildren must not exceed 1000"]

    def test_options_sizes(self, base_config):
        php = base_config["php"]
        php["options"] = {"memoryLimit": "256MB"}
        result = PHP_SCHEMA.validate(php)
        assert result.errors == ["options.memoryLimit must be a valid size (e.g., 128M, 512K)"]

    def test_options_timeouts_in_seconds(self, base_config):
        php = base_config["php"]
        php["options"] = {"maxExecutionTime": 7200}
        result = PHP_SCHEMA.validate(php)
        assert result.errors == ["options.maxExecutionTime must not exceed 3600 seconds"]


class TestSecuritySchema:
    """Tests for the security policy schema."""

    def test_valid_security(self, base_config):
        assert SECURITY_SCHEMA.validate(base_config["security"]).is_valid

    def test_non_root_must_be_true(self, base_config):
        security = base_config["security"]
        security["nonRoot"] = False
        result = SECURITY_SCHEMA.validate(security)
        assert result.errors == ["nonRoot must be true for security"]

    def test_capabilities_required_non_empty(self, base_config):
        security = base_config["security"]
        security["capabilities"] = []
        result = SECURITY_SCHEMA.validate(security)
        assert result.errors == ["At least one capability is required in capabilities"]

    def test_user_length(self, base_config):
        security = base_config["security"]
        security["user"] = "u" * 33
        assert SECURITY_SCHEMA.validate(security).errors == ["user cannot exceed 32 characters"]

    def test_unknown_option_rejected(self, base_config):
        security = base_config["security"]
        security["options"] = {"privileged": True}
        assert SECURITY_SCHEMA.validate(security).errors == ["options.privileged is not allowed"]


class TestNginxSchema:
    """Tests for the Nginx schema."""

    def test_valid_nginx_is_echoed(self, nginx):
        result = NGINX_SCHEMA.validate(nginx)
        assert result.is_valid
        assert result.value == nginx

    @pytest.mark.parametrize("connections", [1, 1024, 65535])
    def test_worker_connections_in_range(self, nginx, connections):
        nginx["workerConnections"] = connections
        assert NGINX_SCHEMA.validate(nginx).is_valid

    def test_worker_connections_above_range(self, nginx):
        nginx["workerConnections"] = 65536
        result = NGINX_SCHEMA.validate(nginx)
        assert result.errors == ["workerConnections must not exceed 65535"]

    def test_worker_connections_below_range(self, nginx):
        nginx["workerConnections"] = 0
        result = NGINX_SCHEMA.validate(nginx)
        assert result.errors == ["workerConnections must be at least 1"]

    @pytest.mark.parametrize("processes", ["auto", "4"])
    def test_worker_processes(self, nginx, processes):
        nginx["workerProcesses"] = processes
        assert NGINX_SCHEMA.validate(nginx).is_valid

    def test_worker_processes_invalid(self, nginx):
        nginx["workerProcesses"] = "many"
        result = NGINX_SCHEMA.validate(nginx)
        assert result.errors == ['workerProcesses must be "auto" or a number']

    @pytest.mark.parametrize("window", ["1m", "1h", "30s", "60"])
    def test_rate_limit_window_accepted(self, nginx, window):
        nginx["options"] = {"rateLimit": {"enabled": True, "requests": 100, "window": window}}
        assert NGINX_SCHEMA.validate(nginx).is_valid

    def test_rate_limit_window_rejected(self, nginx):
        nginx["options"] = {"rateLimit": {"enabled": True, "requests": 100, "window": "1min"}}
        result = NGINX_SCHEMA.validate(nginx)
        assert result.errors == [
            "options.rateLimit.window must be a valid duration (e.g., 1m, 1h)"
        ]

    def test_client_max_body_size(self, nginx):
        nginx["options"] = {"clientMaxBodySize": "10M"}
        assert NGINX_SCHEMA.validate(nginx).is_valid

        nginx["options"] = {"clientMaxBodySize": "10MB"}
        result = NGINX_SCHEMA.validate(nginx)
        assert result.errors == ["options.clientMaxBodySize must be a valid size (e.g., 1M, 10M)"]

    def test_proxy_timeout(self, nginx):
        nginx["options"] = {"proxyTimeout": {"connect": "30s", "read": "2 minutes"}}
        result = NGINX_SCHEMA.validate(nginx)
        assert result.errors == [
            "options.proxyTimeout.read must be a valid duration (e.g., 30s, 1m)"
        ]

    def test_gzip_must_be_boolean(self, nginx):
        nginx["gzip"] = "on"
        assert NGINX_SCHEMA.validate(nginx).errors == ["gzip must be a boolean"]


class TestS6OverlaySchema:
    """Tests for the s6-overlay schema."""

    def test_valid(self, base_config):
        assert S6_OVERLAY_SCHEMA.validate(base_config["s6Overlay"]).is_valid

    def test_at_least_one_service(self):
        result = S6_OVERLAY_SCHEMA.validate({"services": [], "crontab": []})
        assert result.errors == ["At least one service is required in services"]

    def test_crontab_is_required(self):
        result = S6_OVERLAY_SCHEMA.validate({"services": ["nginx"]})
        assert result.errors == ["crontab is required"]

    def test_log_level(self):
        document = {"services": ["nginx"], "crontab": [], "options": {"logLevel": "trace"}}
        result = S6_OVERLAY_SCHEMA.validate(document)
        assert result.errors == ["options.logLevel must be one of: debug, info, warn, error"]


class TestMetadataSchema:
    """Tests for optional metadata."""

    def test_iso_date(self):
        assert METADATA_SCHEMA.validate({"lastUpdated": "2026-01-15T08:00:00Z"}).is_valid

    def test_invalid_date(self):
        result = METADATA_SCHEMA.validate({"lastUpdated": "yesterday"})
        assert result.errors == ["lastUpdated must be a valid ISO date"]


class TestBaseConfigSchema:
    """Tests for the composed base configuration."""

    def test_key_order(self):
        assert list(BASE_CONFIG_SCHEMA.shape) == ["php", "security", "nginx", "s6Overlay", "metadata"]

    def test_required_sections(self):
        assert BASE_CONFIG_SCHEMA.required_keys == {"php", "security", "nginx", "s6Overlay"}

    def test_nested_errors_carry_full_path(self, base_config):
        base_config["nginx"]["workerConnections"] = 65536
        result = BASE_CONFIG_SCHEMA.validate(base_config)
        assert result.errors == ["nginx.workerConnections must not exceed 65535"]

    def test_collects_errors_across_sections(self, base_config):
        base_config["php"]["version"] = "9.0"
        base_config["security"]["nonRoot"] = False
        result = BASE_CONFIG_SCHEMA.validate(base_config)
        assert len(result.errors) == 2
        assert result.errors[0].startswith("php.version")
        assert result.errors[1] == "security.nonRoot must be true for security"
