"""
Tests for the ImageBuilder (Docker SDK mocked).
"""

import pytest
from docker.errors import APIError, BuildError

from imageforge.core.errors import DockerBuildError, ErrorType, RegistryError
from imageforge.infra.docker_client import DockerProvider
from imageforge.infra.image_builder import ImageBuilder, default_tag


@pytest.fixture
def builder(mock_docker_client):
    return ImageBuilder(DockerProvider(client=mock_docker_client))


class TestDefaultTag:
    """Tests for default_tag()."""

    def test_tag_from_config(self, final_model):
        assert default_tag(final_model, "php-nginx") == "php-nginx:8.3-alpine-amd64"

    def test_registry_prefix_and_arm_variant(self, engine, final_config):
        final_config["architecture"] = "arm/v7"
        config = engine.validate_or_raise(final_config)
        assert default_tag(config, "php-nginx", "ghcr.io/acme/") == (
            "ghcr.io/acme/php-nginx:8.3-alpine-arm-v7"
        )


class TestBuildOptions:
    """Tests for FinalConfig -> SDK keyword mapping."""

    def test_defaults(self, final_model):
        options = ImageBuilder.build_options(final_model, "app:1")
        assert options == {
            "path": ".",
            "dockerfile": "Dockerfile",
            "tag": "app:1",
            "buildargs": {},
            "nocache": False,
            "platform": "linux/amd64",
            "rm": True,
        }

    def test_no_cache_and_build_args(self, engine, final_config):
        final_config["build"].update(
            {"useCache": False, "buildArgs": {"APP_ENV": "prod"}, "context": "/srv/app"}
        )
        config = engine.validate_or_raise(final_config)
        options = ImageBuilder.build_options(config, "app:1")
        assert options["nocache"] is True
        assert options["buildargs"] == {"APP_ENV": "prod"}
        assert options["path"] == "/srv/app"


class TestBuild:
    """Tests for ImageBuilder.build()."""

    def test_successful_build(self, builder, final_model, mock_docker_client):
        outcome = builder.build(final_model, "app:1")
        assert outcome.image_id == "sha256:abc123def456"
        assert outcome.platform == "linux/amd64"
        assert outcome.log == ["Step 1/2 : FROM php:8.3-fpm-alpine", "Successfully built"]
        mock_docker_client.images.build.assert_called_once()

    def test_build_error_is_wrapped(self, builder, final_model, mock_docker_client):
        mock_docker_client.images.build.side_effect = BuildError(
            "RUN apk add failed", [{"stream": "ERROR: unsatisfiable constraints\n"}]
        )
        with pytest.raises(DockerBuildError) as exc_info:
            builder.build(final_model, "app:1")
        assert "RUN apk add failed" in exc_info.value.message
        assert exc_info.value.details["log"] == ["ERROR: unsatisfiable constraints"]

    def test_daemon_error_is_wrapped(self, builder, final_model, mock_docker_client):
        mock_docker_client.images.build.side_effect = APIError("context not found")
        with pytest.raises(DockerBuildError):
            builder.build(final_model, "app:1")


class TestPush:
    """Tests for ImageBuilder.push()."""

    def test_successful_push(self, builder, mock_docker_client):
        statuses = builder.push("ghcr.io/acme/app:1.0")
        assert statuses == ["Preparing", "Pushed", "latest: digest: sha256:abc"]
        mock_docker_client.images.push.assert_called_once_with(
            "ghcr.io/acme/app", tag="1.0", stream=True, decode=True
        )

    def test_untagged_image_pushes_latest(self, builder, mock_docker_client):
        builder.push("localhost:5000/app")
        mock_docker_client.images.push.assert_called_once_with(
            "localhost:5000/app", tag="latest", stream=True, decode=True
        )

    def test_error_chunk_raises(self, builder, mock_docker_client):
        mock_docker_client.images.push.return_value = iter([{"error": "denied: access forbidden"}])
        with pytest.raises(RegistryError) as exc_info:
            builder.push("app:1")
        assert exc_info.value.error_type == ErrorType.REGISTRY_ERROR

    def test_rate_limit_is_classified(self, builder, mock_docker_client):
        mock_docker_client.images.push.return_value = iter(
            [{"error": "toomanyrequests: You have reached your pull rate limit"}]
        )
        with pytest.raises(RegistryError) as exc_info:
            builder.push("app:1")
        assert exc_info.value.error_type == ErrorType.REGISTRY_RATE_LIMIT_ERROR

    def test_api_error_raises(self, builder, mock_docker_client):
        mock_docker_client.images.push.side_effect = APIError("unauthorized")
        with pytest.raises(RegistryError):
            builder.push("app:1")
