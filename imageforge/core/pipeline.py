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
# THE BUILD PIPELINE
# -----------------------------------------------------------------------------
# Responsibility: Drives one image build end to end:
#
#   raw fragments -> ValidationEngine (base -> platform -> final)
#                 -> TemplateRenderer (Dockerfile text)
#                 -> build context (Dockerfile written to disk)
#                 -> ImageBuilder (docker build, optional push)
#
# Every failure after validation is handed to the same ErrorClassifier the
# engine reports to, then re-raised. Validation failures are classified by
# the engine itself.
#
# No renderer ships with imageforge: embedders pass any object with a
# `render(config) -> str` method (see TemplateRenderer).
# -----------------------------------------------------------------------------

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from rich.console import Console

from imageforge.core.engine import ValidationEngine
from imageforge.core.errors import FileWriteError, ForgeError, TemplateError
from imageforge.domain.models import FinalConfig
from imageforge.infra.image_builder import BuildOutcome, ImageBuilder, default_tag

console = Console(stderr=True)

DOCKERFILE_NAME = "Dockerfile"


class TemplateRenderer(Protocol):
    """Renders the Dockerfile for a validated configuration."""

    def render(self, config: FinalConfig) -> str:
        ...


@dataclass
class PipelineResult:
    """Everything one pipeline run produced."""

    config: FinalConfig
    tag: str
    dockerfile_path: Path
    build: BuildOutcome
    push_status: list[str] = field(default_factory=list)


class BuildPipeline:
    """Validation -> rendering -> build -> push, with uniform error reporting."""

    def __init__(
        self,
        engine: ValidationEngine,
        renderer: TemplateRenderer,
        builder: ImageBuilder,
        registry: str | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            engine: Validates the configuration layers; its classifier receives
                every failure of the run.
            renderer: Produces Dockerfile text from a FinalConfig.
            builder: Executes docker build / push.
            registry: Registry prefix used for default tags.
        """
        self._engine = engine
        self._renderer = renderer
        self._builder = builder
        self._registry = registry

    def run(
        self,
        raw_base: Any,
        platform_payload: Any,
        build_payload: Any,
        repository: str,
        tag: str | None = None,
        push: bool = False,
    ) -> PipelineResult:
        """
        Run one build.

        Args:
            raw_base: Base configuration document.
            platform_payload: `platform` + `platformSpecific`.
            build_payload: `architecture` + `build`.
            repository: Image repository, used for the default tag.
            tag: Explicit full tag; overrides the default.
            push: Push the image after a successful build.

        Raises:
            ConfigValidationError: The configuration is invalid.
            TemplateError, FileWriteError, DockerBuildError, RegistryError:
                A later stage failed.
        """
        config = self._engine.compose_or_raise(raw_base, platform_payload, build_payload)
        image_tag = tag or default_tag(config, repository, self._registry)

        try:
            dockerfile = self._render(config)
            dockerfile_path = self._write(config, dockerfile)
            outcome = self._builder.build(config, image_tag, DOCKERFILE_NAME)
            push_status = self._builder.push(image_tag) if push else []
        except ForgeError as e:
            self._engine.classifier.handle(e, {"tag": image_tag})
            raise

        console.print(f"[bold green][PIPELINE] Image ready: {image_tag}[/bold green]")
        return PipelineResult(
            config=config,
            tag=image_tag,
            dockerfile_path=dockerfile_path,
            build=outcome,
            push_status=push_status,
        )

    def _render(self, config: FinalConfig) -> str:
        try:
            dockerfile = self._renderer.render(config)
        except ForgeError:
            raise
        except Exception as e:
            raise TemplateError(
                f"Dockerfile rendering failed: {e}",
                details={"renderer": type(self._renderer).__name__},
                suggestions=["Check your template configuration and data"],
            ) from e
        if not dockerfile or not dockerfile.strip():
            raise TemplateError(
                "Dockerfile rendering produced no output",
                details={"renderer": type(self._renderer).__name__},
            )
        return dockerfile

    @staticmethod
    def _write(config: FinalConfig, dockerfile: str) -> Path:
        path = Path(config.build.context) / DOCKERFILE_NAME
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(dockerfile, encoding="utf-8")
        except OSError as e:
            raise FileWriteError(
                f"Could not write {path}: {e}",
                details={"path": str(path)},
                suggestions=["Check file permissions and disk space"],
            ) from e
        console.print(f"[green][PIPELINE] Dockerfile written: {path}[/green]")
        return path
