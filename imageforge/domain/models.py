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
# DOMAIN MODELS - BUILD CONFIGURATION LAYERS
# -----------------------------------------------------------------------------
# Typed, immutable views of a validated configuration:
#
#   BaseConfig      - PHP, security, Nginx, s6-overlay (+ metadata)
#   PlatformConfig  - BaseConfig + platform + Alpine/Ubuntu specifics
#   FinalConfig     - PlatformConfig + architecture + build parameters
#
# The validation engine decides what is acceptable; these models only give
# downstream consumers (template renderer, image builder) attribute access.
# Field aliases mirror the camelCase keys of the configuration files.
# -----------------------------------------------------------------------------

from pydantic import BaseModel, ConfigDict, Field

from imageforge.domain.enums import Architecture, PHPVersion, Platform


class _ConfigModel(BaseModel):
    """Common model configuration: frozen, alias-aware, no unknown keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class PHPFpmConfig(_ConfigModel):
    """PHP-FPM process manager pool sizing."""

    max_children: int = Field(..., alias="maxChildren")
    start_servers: int = Field(..., alias="startServers")
    min_spare_servers: int = Field(..., alias="minSpareServers")
    max_spare_servers: int = Field(..., alias="maxSpareServers")
    max_requests: int | None = Field(None, alias="maxRequests")
    process_idle_timeout: int | None = Field(None, alias="processIdleTimeout")


class PHPOptions(_ConfigModel):
    memory_limit: str | None = Field(None, alias="memoryLimit")
    max_execution_time: int | None = Field(None, alias="maxExecutionTime")
    max_input_time: int | None = Field(None, alias="maxInputTime")
    upload_max_filesize: str | None = Field(None, alias="uploadMaxFilesize")
    max_file_uploads: int | None = Field(None, alias="maxFileUploads")


class PHPConfig(_ConfigModel):
    """PHP runtime: version, extensions, FPM pool and php.ini options."""

    version: PHPVersion
    extensions: tuple[str, ...]
    fpm: PHPFpmConfig
    options: PHPOptions | None = None


class SecurityOptions(_ConfigModel):
    drop_all_capabilities: bool | None = Field(None, alias="dropAllCapabilities")
    no_new_privileges: bool | None = Field(None, alias="noNewPrivileges")
    user_namespace: bool | None = Field(None, alias="userNamespace")


class SecurityConfig(_ConfigModel):
    """Container hardening policy."""

    user: str
    group: str
    non_root: bool = Field(..., alias="nonRoot")
    read_only_root: bool = Field(..., alias="readOnlyRoot")
    capabilities: tuple[str, ...]
    seccomp: bool | None = None
    apparmor: bool | None = None
    options: SecurityOptions | None = None


class ProxyTimeout(_ConfigModel):
    connect: str | None = None
    send: str | None = None
    read: str | None = None


class RateLimit(_ConfigModel):
    enabled: bool
    requests: int
    window: str


class NginxOptions(_ConfigModel):
    client_max_body_size: str | None = Field(None, alias="clientMaxBodySize")
    proxy_timeout: ProxyTimeout | None = Field(None, alias="proxyTimeout")
    rate_limit: RateLimit | None = Field(None, alias="rateLimit")


class NginxConfig(_ConfigModel):
    """Nginx worker and feature settings."""

    worker_processes: str = Field(..., alias="workerProcesses")
    worker_connections: int = Field(..., alias="workerConnections")
    gzip: bool
    ssl: bool
    options: NginxOptions | None = None


class S6OverlayOptions(_ConfigModel):
    logging: bool | None = None
    log_level: str | None = Field(None, alias="logLevel")
    notifications: bool | None = None


class S6OverlayConfig(_ConfigModel):
    """s6-overlay process supervision."""

    services: tuple[str, ...]
    crontab: tuple[str, ...]
    options: S6OverlayOptions | None = None


class Metadata(_ConfigModel):
    version: str | None = None
    description: str | None = None
    author: str | None = None
    last_updated: str | None = Field(None, alias="lastUpdated")


class BaseConfig(_ConfigModel):
    """The platform-agnostic core of a build configuration."""

    php: PHPConfig
    security: SecurityConfig
    nginx: NginxConfig
    s6_overlay: S6OverlayConfig = Field(..., alias="s6Overlay")
    metadata: Metadata | None = None


class Optimizations(_ConfigModel):
    security: bool
    minimal: bool
    performance: bool


class AlpinePackageManager(_ConfigModel):
    """apk behaviour."""

    use_cache: bool = Field(..., alias="useCache")
    clean_cache: bool = Field(..., alias="cleanCache")
    repositories: tuple[str, ...] | None = None


class UbuntuPackageManager(_ConfigModel):
    """apt behaviour."""

    update_lists: bool = Field(..., alias="updateLists")
    upgrade: bool
    clean_cache: bool = Field(..., alias="cleanCache")
    repositories: tuple[str, ...] | None = None


class AlpineConfig(_ConfigModel):
    """Alpine-family platform specifics."""

    package_manager: AlpinePackageManager = Field(..., alias="packageManager")
    optimizations: Optimizations
    cleanup_commands: tuple[str, ...] = Field(..., alias="cleanupCommands")
    environment: dict[str, str] | None = None


class UbuntuConfig(_ConfigModel):
    """Debian/Ubuntu-family platform specifics."""

    package_manager: UbuntuPackageManager = Field(..., alias="packageManager")
    optimizations: Optimizations
    cleanup_commands: tuple[str, ...] = Field(..., alias="cleanupCommands")
    environment: dict[str, str] | None = None


class PlatformConfig(BaseConfig):
    """BaseConfig plus the platform family and its package-manager specifics."""

    platform: Platform
    platform_specific: AlpineConfig | UbuntuConfig = Field(..., alias="platformSpecific")


class BuildSettings(_ConfigModel):
    """Docker build parameters."""

    base_image: str = Field(..., alias="baseImage")
    build_args: dict[str, str] | None = Field(None, alias="buildArgs")
    context: str = "."
    use_cache: bool = Field(True, alias="useCache")


class FinalConfig(PlatformConfig):
    """The terminal configuration handed to the template renderer and image builder."""

    architecture: Architecture
    build: BuildSettings

    @property
    def docker_platform(self) -> str:
        """Docker platform string for this build (e.g. 'linux/arm64')."""
        return self.architecture.docker_platform
