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
# THE VALIDATION ENGINE
# -----------------------------------------------------------------------------
# Responsibility: Runs raw configuration data through the three composition
# layers and returns a uniform ValidationResult:
#
#   base      - PHP / security / Nginx / s6-overlay (+ metadata)
#   platform  - base + platform discriminator + Alpine|Ubuntu specifics
#   final     - platform + architecture + build descriptor
#
# Each layer's validator is concatenated onto the previous one, so a later
# layer re-checks everything an earlier layer checked.
#
# The engine never raises for malformed input. Failures come back as errors
# on the result and are handed to the ErrorClassifier as a single
# non-retryable VALIDATION_ERROR. Only the *_or_raise helpers raise.
# -----------------------------------------------------------------------------

from enum import Enum
from typing import Any, Mapping, Sequence

from rich.console import Console

from imageforge.core.classifier import ErrorClassifier
from imageforge.core.errors import ConfigValidationError
from imageforge.core.settings import Settings
from imageforge.domain.models import BaseConfig, FinalConfig, PlatformConfig
from imageforge.schemas import LAYER_SCHEMAS, platform_family
from imageforge.validation import ObjectRule, ValidationIssue, ValidationResult

console = Console(stderr=True)

ROOT_LABEL = "configuration"


class ConfigLayer(str, Enum):
    """The three sequential composition stages."""

    BASE = "base"
    PLATFORM = "platform"
    FINAL = "final"


LAYER_MODELS = {
    ConfigLayer.BASE: BaseConfig,
    ConfigLayer.PLATFORM: PlatformConfig,
    ConfigLayer.FINAL: FinalConfig,
}


class ValidationEngine:
    """
    Orchestrates layered configuration validation.

    Why an object: it carries the fail-fast choice and the classifier every
    failure is reported to. It holds no per-call state.
    """

    def __init__(
        self,
        classifier: ErrorClassifier | None = None,
        abort_early: bool | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            classifier: Receives every validation failure. A private one is
                created from `settings` when omitted.
            abort_early: Stop at the first error instead of collecting all of
                them. Defaults to `settings.abort_early`.
            settings: Runtime settings; defaults to built-in values (the
                environment is only read through `get_settings()`).
        """
        settings = settings or Settings()
        self._classifier = classifier or ErrorClassifier(
            max_history=settings.error_history,
            recent_window_seconds=settings.recent_window_seconds,
            max_retries=settings.max_retries,
        )
        self._abort_early = settings.abort_early if abort_early is None else abort_early

    @property
    def classifier(self) -> ErrorClassifier:
        return self._classifier

    @property
    def abort_early(self) -> bool:
        return self._abort_early

    @staticmethod
    def layers() -> list[str]:
        """Names of the available layers, in composition order."""
        return [layer.value for layer in ConfigLayer]

    def schema(self, layer: str | ConfigLayer) -> ObjectRule:
        """Validator for a layer."""
        return LAYER_SCHEMAS[self._layer(layer).value]

    # -------------------------------------------------------------------------
    # Layer entry points
    # -------------------------------------------------------------------------

    def validate_base(self, raw: Any) -> ValidationResult:
        """Validate a base configuration document."""
        return self.validate(raw, ConfigLayer.BASE)

    def validate_platform(self, base_value: Any, platform_payload: Any) -> ValidationResult:
        """
        Validate a base configuration extended with platform data.

        Args:
            base_value: Base-layer configuration (usually a validated base value).
            platform_payload: Mapping with `platform` and `platformSpecific`.
        """
        return self._extend(base_value, platform_payload, ConfigLayer.PLATFORM)

    def validate_final(self, platform_value: Any, build_payload: Any) -> ValidationResult:
        """
        Validate a platform configuration extended with build data.

        Args:
            platform_value: Platform-layer configuration.
            build_payload: Mapping with `architecture` and `build`.
        """
        return self._extend(platform_value, build_payload, ConfigLayer.FINAL)

    def compose(
        self, raw_base: Any, platform_payload: Any, build_payload: Any
    ) -> ValidationResult:
        """
        Run base -> platform -> final in order.

        Returns:
            The final-layer result, or the result of the first layer that failed.
        """
        _, result = self._compose(raw_base, platform_payload, build_payload)
        return result

    def validate(self, raw: Any, layer: str | ConfigLayer = ConfigLayer.FINAL) -> ValidationResult:
        """
        Validate a complete document against one layer.

        Args:
            raw: Untyped, JSON-shaped input.
            layer: 'base', 'platform' or 'final'.

        Returns:
            ValidationResult; `value` is set only when there are no errors.

        Raises:
            ConfigValidationError: Only for an unknown layer name.
        """
        layer = self._layer(layer)
        console.print(f"[cyan][ENGINE] Validating {layer.value} configuration[/cyan]")

        result = LAYER_SCHEMAS[layer.value].validate(
            raw, abort_early=self._abort_early, label=ROOT_LABEL
        )
        if result.is_valid and layer != ConfigLayer.BASE:
            result = self._check_platform_family(result)

        self._report(result, layer)
        return result

    def validate_many(
        self, documents: Sequence[Any], layer: str | ConfigLayer = ConfigLayer.FINAL
    ) -> list[ValidationResult]:
        """Validate several documents independently against one layer."""
        return [self.validate(document, layer) for document in documents]

    def is_valid(self, raw: Any, layer: str | ConfigLayer = ConfigLayer.FINAL) -> bool:
        return self.validate(raw, layer).is_valid

    # -------------------------------------------------------------------------
    # Typed helpers
    # -------------------------------------------------------------------------

    def validate_or_raise(self, raw: Any, layer: str | ConfigLayer = ConfigLayer.FINAL):
        """
        Validate and return the typed model for the layer.

        Raises:
            ConfigValidationError: If validation fails (already classified).
        """
        layer = self._layer(layer)
        return self._to_model(self.validate(raw, layer), layer)

    def compose_or_raise(
        self, raw_base: Any, platform_payload: Any, build_payload: Any
    ) -> FinalConfig:
        """Run all three layers and return the typed FinalConfig."""
        layer, result = self._compose(raw_base, platform_payload, build_payload)
        return self._to_model(result, layer)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _compose(
        self, raw_base: Any, platform_payload: Any, build_payload: Any
    ) -> tuple[ConfigLayer, ValidationResult]:
        base = self.validate_base(raw_base)
        if not base.is_valid:
            return ConfigLayer.BASE, base
        platform = self.validate_platform(base.value, platform_payload)
        if not platform.is_valid:
            return ConfigLayer.PLATFORM, platform
        return ConfigLayer.FINAL, self.validate_final(platform.value, build_payload)

    def _extend(self, previous: Any, payload: Any, layer: ConfigLayer) -> ValidationResult:
        """Overlay a layer payload onto the previous layer's value and validate."""
        if not isinstance(payload, Mapping):
            message = f"{layer.value} configuration must be an object"
            result = ValidationResult.build(
                None, [ValidationIssue(path=(), kind="object.base", message=message)], []
            )
            self._report(result, layer)
            return result
        merged = {**previous, **payload} if isinstance(previous, Mapping) else previous
        return self.validate(merged, layer)

    @staticmethod
    def _check_platform_family(result: ValidationResult) -> ValidationResult:
        """Warn when the matched platform shape disagrees with the discriminator."""
        value = result.value
        family = platform_family(value["platformSpecific"])
        if family is None or family == value["platform"]:
            return result
        warning = (
            f"platformSpecific matches the {family} configuration "
            f"but platform is {value['platform']}"
        )
        return ValidationResult.build(value, [], [*result.warnings, warning])

    def _report(self, result: ValidationResult, layer: ConfigLayer) -> None:
        for warning in result.warnings:
            console.print(f"[yellow][ENGINE] Warning: {warning}[/yellow]")
        if result.is_valid:
            console.print(f"[green][ENGINE] {layer.value} configuration valid[/green]")
            return

        console.print(
            f"[red][ENGINE] {layer.value} configuration rejected: "
            f"{len(result.errors)} error(s)[/red]"
        )
        self._classifier.handle(self._failure(result, layer))

    @staticmethod
    def _failure(result: ValidationResult, layer: ConfigLayer) -> ConfigValidationError:
        return ConfigValidationError(
            f"{layer.value.capitalize()} configuration validation failed "
            f"with {len(result.errors)} error(s)",
            errors=result.errors,
            layer=layer.value,
            suggestions=result.errors,
        )

    def _to_model(self, result: ValidationResult, layer: ConfigLayer):
        if not result.is_valid:
            raise self._failure(result, layer)
        return LAYER_MODELS[layer].model_validate(result.value)

    @staticmethod
    def _layer(layer: str | ConfigLayer) -> ConfigLayer:
        try:
            return ConfigLayer(layer)
        except ValueError:
            raise ConfigValidationError(
                f"Unknown configuration layer: {layer}",
                suggestions=[f"Use one of: {', '.join(ValidationEngine.layers())}"],
            ) from None
