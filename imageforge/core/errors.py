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
# ERROR TAXONOMY
# -----------------------------------------------------------------------------
# Typed failures raised or reported anywhere in the build pipeline. Every
# error carries a type and severity so the ErrorClassifier can decide on
# retry and reporting policy without inspecting messages.
# -----------------------------------------------------------------------------

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Sequence


class ErrorType(str, Enum):
    """Failure categories understood by the classifier."""

    CONFIG_LOAD_ERROR = "CONFIG_LOAD_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    SECURITY_ERROR = "SECURITY_ERROR"
    DOCKER_ERROR = "DOCKER_ERROR"
    DOCKER_BUILD_ERROR = "DOCKER_BUILD_ERROR"
    DOCKER_PUSH_ERROR = "DOCKER_PUSH_ERROR"
    REGISTRY_ERROR = "REGISTRY_ERROR"
    REGISTRY_RATE_LIMIT_ERROR = "REGISTRY_RATE_LIMIT_ERROR"
    ARGUMENT_ERROR = "ARGUMENT_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    BUILD_ERROR = "BUILD_ERROR"
    MANIFEST_ERROR = "MANIFEST_ERROR"
    TEST_ERROR = "TEST_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ForgeError(Exception):
    """
    Base class for every typed failure in imageforge.

    Attributes:
        error_type: Category used for classification.
        severity: How serious the failure is.
        details: Structured context (paths, offending values, error lists).
        suggestions: Ordered hints shown to the user.
        code: Optional short machine-readable code.
        timestamp: When the error was created (UTC).
    """

    error_type: ErrorType = ErrorType.UNKNOWN_ERROR
    default_severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity | None = None,
        details: dict[str, Any] | None = None,
        suggestions: Sequence[str] = (),
        code: str | None = None,
        error_type: ErrorType | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_type is not None:
            self.error_type = error_type
        self.severity = severity or self.default_severity
        self.details = details or {}
        self.suggestions = tuple(suggestions)
        self.code = code
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation."""
        return {
            "name": type(self).__name__,
            "type": self.error_type.value,
            "severity": self.severity.value,
            "message": self.message,
            "details": self.details,
            "suggestions": list(self.suggestions),
            "code": self.code,
            "timestamp": self.timestamp.isoformat(),
        }

    def user_message(self) -> str:
        """Message followed by numbered suggestions, for terminal output."""
        if not self.suggestions:
            return self.message
        lines = [self.message, "", "Suggestions:"]
        lines.extend(f"{index}. {hint}" for index, hint in enumerate(self.suggestions, 1))
        return "\n".join(lines)


class ConfigValidationError(ForgeError):
    """A configuration failed schema validation. Always terminal for that input."""

    error_type = ErrorType.VALIDATION_ERROR
    default_severity = ErrorSeverity.HIGH

    def __init__(
        self,
        message: str,
        errors: Sequence[str] = (),
        layer: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = {"layer": layer, "errors": list(errors), **kwargs.pop("details", {})}
        super().__init__(message, details=details, **kwargs)
        self.errors = tuple(errors)
        self.layer = layer


class ConfigLoaderError(ForgeError):
    """A configuration file could not be found, read or parsed."""

    error_type = ErrorType.CONFIG_LOAD_ERROR
    default_severity = ErrorSeverity.HIGH


class TemplateError(ForgeError):
    """The Dockerfile template could not be rendered."""

    error_type = ErrorType.TEMPLATE_ERROR


class FileWriteError(ForgeError):
    """A rendered artifact could not be written to the build context."""

    error_type = ErrorType.FILE_WRITE_ERROR


class DockerBuildError(ForgeError):
    """The Docker daemon rejected or failed an image build."""

    error_type = ErrorType.DOCKER_BUILD_ERROR
    default_severity = ErrorSeverity.HIGH


class RegistryError(ForgeError):
    """Pushing to or talking with an image registry failed."""

    error_type = ErrorType.REGISTRY_ERROR
