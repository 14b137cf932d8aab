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
# IMAGE BUILDER
# -----------------------------------------------------------------------------
# Responsibility: Turns a validated FinalConfig into Docker SDK build and push
# calls. Knows nothing about schemas; it trusts the FinalConfig it is given.
#
# SDK failures are wrapped into typed errors (DockerBuildError,
# RegistryError) so the ErrorClassifier can pick a retry policy.
# -----------------------------------------------------------------------------

from dataclasses import dataclass
from typing import Any

from docker.errors import BuildError, DockerException
from rich.console import Console

from imageforge.core.errors import DockerBuildError, ErrorType, RegistryError
from imageforge.domain.models import FinalConfig
from imageforge.infra.docker_client import DockerProvider

console = Console(stderr=True)

RATE_LIMIT_MARKERS = ("toomanyrequests", "rate limit")


@dataclass
class BuildOutcome:
    """Result of a successful image build."""

    image_id: str
    tag: str
    platform: str
    log: list[str]


def default_tag(config: FinalConfig, repository: str, registry: str | None = None) -> str:
    """
    Conventional tag for a build, e.g. 'registry/php-nginx:8.3-alpine-arm-v7'.

    Args:
        config: The validated build configuration.
        repository: Image repository name.
        registry: Optional registry/namespace prefix.
    """
    architecture = config.architecture.value.replace("/", "-")
    name = f"{registry.rstrip('/')}/{repository}" if registry else repository
    return f"{name}:{config.php.version.value}-{config.platform.value}-{architecture}"


class ImageBuilder:
    """Builds and pushes images through a DockerProvider."""

    def __init__(self, provider: DockerProvider) -> None:
        self._provider = provider

    @staticmethod
    def build_options(
        config: FinalConfig, tag: str, dockerfile: str = "Dockerfile"
    ) -> dict[str, Any]:
        """
        Map a FinalConfig to `client.images.build` keyword arguments.

        Args:
            config: The validated build configuration.
            tag: Full image tag.
            dockerfile: Dockerfile path relative to the build context.
        """
        return {
            "path": config.build.context,
            "dockerfile": dockerfile,
            "tag": tag,
            "buildargs": dict(config.build.build_args or {}),
            "nocache": not config.build.use_cache,
            "platform": config.docker_platform,
            "rm": True,
        }

    def build(self, config: FinalConfig, tag: str, dockerfile: str = "Dockerfile") -> BuildOutcome:
        """
        Build an image.

        Raises:
            DockerBuildError: If the daemon reports a build failure.
        """
        options = self.build_options(config, tag, dockerfile)
        console.print(f"[cyan][BUILDER] Building {tag} for {options['platform']}[/cyan]")

        client = self._provider.get_client()
        try:
            image, stream = client.images.build(**options)
        except BuildError as e:
            raise DockerBuildError(
                f"Docker build failed for {tag}: {e.msg}",
                details={"tag": tag, "log": _stream_lines(e.build_log)},
                suggestions=["Inspect the build log", "Check the generated Dockerfile"],
            ) from e
        except DockerException as e:
            raise DockerBuildError(
                f"Docker daemon rejected the build for {tag}: {e}",
                details={"tag": tag},
                suggestions=["Ensure the build context exists and Docker is healthy"],
            ) from e

        log = _stream_lines(stream)
        console.print(f"[green][BUILDER] Built {tag} ({image.short_id})[/green]")
        return BuildOutcome(image_id=image.id, tag=tag, platform=options["platform"], log=log)

    def push(self, tag: str) -> list[str]:
        """
        Push an image tag to its registry.

        Returns:
            Status lines reported by the registry.

        Raises:
            RegistryError: If the push is rejected (REGISTRY_RATE_LIMIT_ERROR
                when the registry throttles).
        """
        repository, _, version = tag.rpartition(":")
        if not repository or "/" in version:
            repository, version = tag, "latest"

        console.print(f"[cyan][BUILDER] Pushing {repository}:{version}[/cyan]")
        client = self._provider.get_client()
        try:
            chunks = list(client.images.push(repository, tag=version, stream=True, decode=True))
        except DockerException as e:
            raise _registry_error(tag, str(e)) from e

        statuses = []
        for chunk in chunks:
            if "error" in chunk:
                raise _registry_error(tag, str(chunk["error"]))
            if "status" in chunk:
                statuses.append(chunk["status"])
        console.print(f"[green][BUILDER] Pushed {repository}:{version}[/green]")
        return statuses


def _registry_error(tag: str, reason: str) -> RegistryError:
    throttled = any(marker in reason.lower() for marker in RATE_LIMIT_MARKERS)
    return RegistryError(
        f"Failed to push {tag}: {reason}",
        details={"tag": tag},
        suggestions=["Check registry credentials (docker login)", "Check network access"],
        error_type=ErrorType.REGISTRY_RATE_LIMIT_ERROR if throttled else None,
    )


def _stream_lines(stream) -> list[str]:
    """Collect the 'stream' text of Docker build output chunks."""
    lines = []
    for chunk in stream or []:
        if isinstance(chunk, dict) and chunk.get("stream"):
            lines.append(chunk["stream"].rstrip("\n"))
    return lines
