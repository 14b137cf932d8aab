"""
Pytest configuration and fixtures for imageforge tests.
"""

from unittest.mock import MagicMock

import pytest

from imageforge.core.classifier import ErrorClassifier
from imageforge.core.engine import ValidationEngine


class FakeClock:
    """Monotonic clock the tests can advance by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_base_config():
    """A complete, valid base configuration."""
    return {
        "php": {
            "version": "8.3",
            "extensions": ["pdo_mysql", "opcache"],
            "fpm": {
                "maxChildren": 10,
                "startServers": 2,
                "minSpareServers": 1,
                "maxSpareServers": 3,
            },
        },
        "security": {
            "user": "www-data",
            "group": "www-data",
            "nonRoot": True,
            "readOnlyRoot": True,
            "capabilities": ["CHOWN"],
        },
        "nginx": {
            "workerProcesses": "auto",
            "workerConnections": 1024,
            "gzip": True,
            "ssl": False,
        },
        "s6Overlay": {
            "services": ["php-fpm", "nginx"],
            "crontab": [],
        },
    }


def make_alpine_payload():
    return {
        "platform": "alpine",
        "platformSpecific": {
            "packageManager": {"useCache": False, "cleanCache": True},
            "optimizations": {"security": True, "minimal": True, "performance": True},
            "cleanupCommands": ["rm -rf /var/cache/apk/*"],
        },
    }


def make_ubuntu_payload():
    return {
        "platform": "ubuntu",
        "platformSpecific": {
            "packageManager": {"updateLists": True, "upgrade": False, "cleanCache": True},
            "optimizations": {"security": True, "minimal": False, "performance": True},
            "cleanupCommands": ["apt-get clean"],
        },
    }


def make_build_payload():
    return {
        "architecture": "amd64",
        "build": {"baseImage": "php:8.3-fpm-alpine"},
    }


@pytest.fixture
def base_config():
    """Valid base configuration (fresh copy per test)."""
    return make_base_config()


@pytest.fixture
def alpine_payload():
    return make_alpine_payload()


@pytest.fixture
def ubuntu_payload():
    return make_ubuntu_payload()


@pytest.fixture
def build_payload():
    return make_build_payload()


@pytest.fixture
def final_config(base_config, alpine_payload, build_payload):
    """Valid final configuration as one flat document."""
    return {**base_config, **alpine_payload, **build_payload}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def classifier(clock):
    """Quiet classifier with a controllable clock."""
    return ErrorClassifier(clock=clock, verbose=False)


@pytest.fixture
def engine(classifier):
    """Validation engine reporting to the quiet classifier."""
    return ValidationEngine(classifier=classifier)


@pytest.fixture
def mock_docker_client():
    """Mock Docker client for testing."""
    client = MagicMock()
    client.ping.return_value = True

    image = MagicMock()
    image.id = "sha256:abc123def456"
    image.short_id = "sha256:abc123"
    client.images.build.return_value = (
        image,
        iter([{"stream": "Step 1/2 : FROM php:8.3-fpm-alpine\n"}, {"stream": "Successfully built\n"}]),
    )
    client.images.push.return_value = iter(
        [{"status": "Preparing"}, {"status": "Pushed"}, {"status": "latest: digest: sha256:abc"}]
    )
    return client


@pytest.fixture
def final_model(engine, final_config):
    """Validated FinalConfig model."""
    return engine.validate_or_raise(final_config)
