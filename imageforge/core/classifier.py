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
# ERROR CLASSIFIER
# -----------------------------------------------------------------------------
# Responsibility: Receives every failure in the pipeline, assigns a category,
# severity and recovery policy, and keeps a bounded history for reporting.
#
# The classifier only decides policy. It never sleeps or retries; callers
# that want to retry use `retry_delay()` to compute how long to wait.
#
# State is per instance: two pipelines share history only if they are
# handed the same classifier. All state access is serialized with a lock so
# one classifier can serve concurrent builds.
# -----------------------------------------------------------------------------

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel
from rich.console import Console

from imageforge.core.errors import ErrorSeverity, ErrorType, ForgeError

console = Console(stderr=True)

DEFAULT_USER_ACTION = "Please check the error details and try again."

SEVERITY_STYLES = {
    ErrorSeverity.LOW: "yellow",
    ErrorSeverity.MEDIUM: "red",
    ErrorSeverity.HIGH: "bold red",
    ErrorSeverity.CRITICAL: "bold white on red",
}


class RecoveryStrategy(str, Enum):
    """How a failure may be recovered from."""

    NONE = "NONE"
    RETRY = "RETRY"
    RETRY_WITH_BACKOFF = "RETRY_WITH_BACKOFF"
    RETRY_WITH_EXPONENTIAL_BACKOFF = "RETRY_WITH_EXPONENTIAL_BACKOFF"
    MANUAL_INTERVENTION = "MANUAL_INTERVENTION"


class Classification(BaseModel):
    """The classifier's verdict on one failure."""

    error_type: ErrorType
    severity: ErrorSeverity
    recoverable: bool = False
    retryable: bool = False
    recovery_strategy: RecoveryStrategy = RecoveryStrategy.NONE
    max_retries: int = 0
    retry_delay: float = 0.0
    user_action: str = DEFAULT_USER_ACTION


class ErrorStatistics(BaseModel):
    total_errors: int
    errors_by_type: dict[str, int]
    errors_by_severity: dict[str, int]
    recent_errors: int


@dataclass(frozen=True)
class _Policy:
    strategy: RecoveryStrategy
    max_retries: int = 0
    retry_delay: float = 0.0
    user_action: str = DEFAULT_USER_ACTION
    severity: ErrorSeverity | None = None


_NO_RECOVERY = RecoveryStrategy.NONE

POLICIES: dict[ErrorType, _Policy] = {
    ErrorType.NETWORK_ERROR: _Policy(
        RecoveryStrategy.RETRY, 3, 2.0, "Check your network connection and try again."
    ),
    ErrorType.REGISTRY_ERROR: _Policy(
        RecoveryStrategy.RETRY_WITH_BACKOFF,
        5,
        1.0,
        "Check your registry credentials and network connection.",
    ),
    ErrorType.REGISTRY_RATE_LIMIT_ERROR: _Policy(
        RecoveryStrategy.RETRY_WITH_EXPONENTIAL_BACKOFF,
        5,
        1.0,
        "The registry is rate limiting requests; wait before pushing again.",
    ),
    ErrorType.DOCKER_ERROR: _Policy(
        RecoveryStrategy.RETRY, 2, 3.0, "Ensure Docker is running and accessible."
    ),
    ErrorType.DOCKER_BUILD_ERROR: _Policy(
        RecoveryStrategy.RETRY, 2, 3.0, "Check the build output and the generated Dockerfile."
    ),
    ErrorType.DOCKER_PUSH_ERROR: _Policy(
        RecoveryStrategy.RETRY, 2, 3.0, "Check registry access and try pushing again."
    ),
    ErrorType.FILE_WRITE_ERROR: _Policy(
        RecoveryStrategy.RETRY, 2, 1.0, "Check file permissions and disk space."
    ),
    ErrorType.BUILD_ERROR: _Policy(
        RecoveryStrategy.RETRY, 1, 5.0, "Check your build configuration and dependencies."
    ),
    ErrorType.MANIFEST_ERROR: _Policy(
        RecoveryStrategy.RETRY, 2, 2.0, "Check your manifest configuration and registry access."
    ),
    ErrorType.CONFIG_LOAD_ERROR: _Policy(
        _NO_RECOVERY, user_action="Check the configuration file path and format."
    ),
    ErrorType.VALIDATION_ERROR: _Policy(
        _NO_RECOVERY,
        user_action="Fix the validation errors in your configuration and run the build again.",
        severity=ErrorSeverity.HIGH,
    ),
    ErrorType.SECURITY_ERROR: _Policy(
        _NO_RECOVERY,
        user_action="Address the security issues before proceeding.",
        severity=ErrorSeverity.HIGH,
    ),
    ErrorType.TEMPLATE_ERROR: _Policy(
        _NO_RECOVERY, user_action="Check your template configuration and data."
    ),
    ErrorType.ARGUMENT_ERROR: _Policy(
        _NO_RECOVERY, user_action="Check your command arguments and options."
    ),
    ErrorType.TEST_ERROR: _Policy(
        _NO_RECOVERY, user_action="Review your test configuration and environment."
    ),
    ErrorType.UNKNOWN_ERROR: _Policy(
        RecoveryStrategy.MANUAL_INTERVENTION,
        user_action="This is an unexpected error. Please report it.",
        severity=ErrorSeverity.HIGH,
    ),
}


@dataclass(frozen=True)
class _Record:
    error: ForgeError
    recorded_at: float = field(compare=False)


class ErrorClassifier:
    """
    Classifies failures and keeps a bounded, thread-safe error history.

    Why injectable: Each pipeline (or test) owns its own classifier, so
    histories are never shared by accident.
    """

    def __init__(
        self,
        max_history: int = 100,
        recent_window_seconds: float = 60.0,
        max_retries: int = 3,
        clock: Callable[[], float] = time.monotonic,
        verbose: bool = True,
    ) -> None:
        """
        Initialize the classifier.

        Args:
            max_history: Number of most recent failures to keep.
            recent_window_seconds: Window used for the `recent_errors` statistic.
            max_retries: Upper bound on any suggested retry count.
            clock: Monotonic time source (injectable for tests).
            verbose: Print a user-friendly report for every handled failure.
        """
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self._history: deque[_Record] = deque(maxlen=max_history)
        self._recent_window = recent_window_seconds
        self._max_retries = max_retries
        self._clock = clock
        self._verbose = verbose
        self._lock = threading.Lock()

    @property
    def max_history(self) -> int:
        return self._history.maxlen or 0

    def classify(self, error: ForgeError) -> Classification:
        """
        Classify a failure without recording it.

        Args:
            error: The typed failure.

        Returns:
            Classification with recovery strategy and suggested user action.
        """
        policy = POLICIES.get(error.error_type)
        if policy is None:
            return Classification(error_type=error.error_type, severity=error.severity)

        retryable = policy.strategy in (
            RecoveryStrategy.RETRY,
            RecoveryStrategy.RETRY_WITH_BACKOFF,
            RecoveryStrategy.RETRY_WITH_EXPONENTIAL_BACKOFF,
        )
        return Classification(
            error_type=error.error_type,
            severity=policy.severity or error.severity,
            recoverable=retryable,
            retryable=retryable,
            recovery_strategy=policy.strategy,
            max_retries=min(policy.max_retries, self._max_retries) if retryable else 0,
            retry_delay=policy.retry_delay if retryable else 0.0,
            user_action=policy.user_action,
        )

    def handle(
        self, error: BaseException, context: dict[str, Any] | None = None
    ) -> Classification:
        """
        Record and classify a failure.

        Foreign exceptions are wrapped as UNKNOWN_ERROR first.

        Args:
            error: Any exception raised or reported by the pipeline.
            context: Extra details attached to wrapped foreign exceptions.

        Returns:
            The classification of the (possibly wrapped) failure.
        """
        forge_error = self._ensure_forge_error(error, context)
        with self._lock:
            self._history.append(_Record(forge_error, self._clock()))
        classification = self.classify(forge_error)
        if self._verbose:
            self._report(forge_error, classification)
        return classification

    def history(self) -> list[ForgeError]:
        """Recorded failures, oldest first."""
        with self._lock:
            return [record.error for record in self._history]

    def statistics(self) -> ErrorStatistics:
        """Aggregate counts over the retained history."""
        with self._lock:
            records = list(self._history)
            now = self._clock()

        by_type: dict[str, int] = {}
        by_severity: dict[str, int] = {}
        for record in records:
            error_type = record.error.error_type.value
            severity = record.error.severity.value
            by_type[error_type] = by_type.get(error_type, 0) + 1
            by_severity[severity] = by_severity.get(severity, 0) + 1
        recent = sum(1 for record in records if now - record.recorded_at < self._recent_window)
        return ErrorStatistics(
            total_errors=len(records),
            errors_by_type=by_type,
            errors_by_severity=by_severity,
            recent_errors=recent,
        )

    def clear(self) -> None:
        """Forget all recorded failures."""
        with self._lock:
            self._history.clear()

    @staticmethod
    def _ensure_forge_error(
        error: BaseException, context: dict[str, Any] | None
    ) -> ForgeError:
        if isinstance(error, ForgeError):
            return error
        return ForgeError(
            str(error) or type(error).__name__,
            details={"original_error": type(error).__name__, "context": context or {}},
            error_type=ErrorType.UNKNOWN_ERROR,
        )

    def _report(self, error: ForgeError, classification: Classification) -> None:
        """Print a user-friendly failure report."""
        style = SEVERITY_STYLES.get(classification.severity, "red")
        console.print(
            f"[{style}][CLASSIFIER] {classification.error_type.value} "
            f"({classification.severity.value}): {error.message}[/{style}]"
        )
        for index, hint in enumerate(error.suggestions, 1):
            console.print(f"[dim]  {index}. {hint}[/dim]")
        console.print(f"[cyan][CLASSIFIER] Action: {classification.user_action}[/cyan]")
        if classification.retryable:
            console.print(
                f"[yellow][CLASSIFIER] Retryable: up to {classification.max_retries} "
                f"attempt(s), strategy {classification.recovery_strategy.value}[/yellow]"
            )


def retry_delay(classification: Classification, attempt: int) -> float:
    """
    Seconds to wait before retry number `attempt` (0-based).

    Returns 0 for strategies that do not retry.
    """
    base = classification.retry_delay
    strategy = classification.recovery_strategy
    if strategy == RecoveryStrategy.RETRY:
        return base
    if strategy == RecoveryStrategy.RETRY_WITH_BACKOFF:
        return base * (attempt + 1)
    if strategy == RecoveryStrategy.RETRY_WITH_EXPONENTIAL_BACKOFF:
        return base * (2**attempt)
    return 0.0
