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
# DOCKER PROVIDER
# -----------------------------------------------------------------------------
# Responsibility: A thin wrapper around the Docker SDK with connection
# validation and clear error reporting.
#
# This is part of the Infrastructure layer - it provides Docker access to the
# ImageBuilder without exposing SDK connection details.
# -----------------------------------------------------------------------------

import os

import docker
from docker import DockerClient
from docker.errors import DockerException
from rich.console import Console
from rich.panel import Panel

from imageforge.core.errors import ErrorSeverity, ErrorType, ForgeError

console = Console(stderr=True)


class DockerProviderError(ForgeError):
    """Raised when the Docker daemon is unreachable."""

    error_type = ErrorType.DOCKER_ERROR
    default_severity = ErrorSeverity.CRITICAL


class DockerProvider:
    """
    Docker SDK connection holder.

    Connects to DOCKER_HOST when set (e.g. a socket proxy), otherwise to the
    local daemon via `docker.from_env()`. The connection is made lazily on
    first use so that constructing a pipeline never touches the daemon.
    """

    def __init__(self, base_url: str | None = None, client: DockerClient | None = None) -> None:
        """
        Initialize the provider.

        Args:
            base_url: Explicit daemon URL; defaults to $DOCKER_HOST.
            client: Pre-built client (used by tests).
        """
        self._base_url = base_url or os.getenv("DOCKER_HOST")
        self._client = client

    def _connect(self) -> DockerClient:
        """
        Establish connection to the Docker daemon.

        Raises:
            DockerProviderError: If the daemon does not answer a ping.
        """
        try:
            if self._base_url:
                client = docker.DockerClient(base_url=self._base_url)
            else:
                client = docker.from_env()
            client.ping()
        except DockerException as e:
            console.print(
                Panel(
                    "[bold red]Docker Engine Unavailable[/bold red]\n\n"
                    "1. Start the Docker daemon (or Docker Desktop)\n"
                    "2. Check DOCKER_HOST if you use a remote engine\n"
                    "3. Run the build again",
                    title="BUILD HALTED",
                    border_style="red",
                )
            )
            raise DockerProviderError(
                f"Docker Engine is not available: {e}",
                details={"base_url": self._base_url},
                suggestions=["Ensure Docker is running and accessible"],
            ) from e

        target = self._base_url or "local Docker"
        console.print(f"[green][DOCKER] Connected to {target}[/green]")
        return client

    def get_client(self) -> DockerClient:
        """
        Get the Docker client, verifying the connection is still alive.

        Raises:
            DockerProviderError: If Docker cannot be reached.
        """
        if self._client is None:
            self._client = self._connect()
            return self._client

        try:
            self._client.ping()
            return self._client
        except DockerException as e:
            console.print(f"[yellow][DOCKER] Connection lost ({e}), reconnecting[/yellow]")
            self._client = self._connect()
            return self._client

    def is_connected(self) -> bool:
        """True if a client exists and the daemon answers a ping."""
        if self._client is None:
            return False
        try:
            self._client.ping()
            return True
        except DockerException:
            return False
