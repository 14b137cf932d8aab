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
# VALIDATION RESULTS
# -----------------------------------------------------------------------------
# The uniform outcome of every validation call: a coerced value (only when
# nothing failed), field-scoped error messages in schema declaration order,
# and non-fatal warnings.
# -----------------------------------------------------------------------------

from typing import Any

from pydantic import BaseModel, ConfigDict


def format_path(path: tuple[str | int, ...], root_label: str = "value") -> str:
    """Render a field path in dotted notation (e.g. 'nginx.options.rateLimit.window')."""
    if not path:
        return root_label
    return ".".join(str(part) for part in path)


class ValidationIssue(BaseModel):
    """A single violated constraint."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str | int, ...] = ()
    kind: str
    message: str

    @property
    def field(self) -> str:
        """Dotted path of the offending field ('' for the root value)."""
        return format_path(self.path, root_label="")


class ValidationResult(BaseModel):
    """
    Result of validating one input against one validator.

    `value` is populated only when `errors` is empty. `errors` holds one
    message per violated constraint, ordered by schema declaration.
    """

    model_config = ConfigDict(frozen=True)

    value: Any = None
    errors: list[str] = []
    warnings: list[str] = []
    issues: list[ValidationIssue] = []

    @classmethod
    def build(
        cls, value: Any, issues: list[ValidationIssue], warnings: list[str]
    ) -> "ValidationResult":
        """Assemble a result, dropping the value when anything failed."""
        return cls(
            value=None if issues else value,
            errors=[issue.message for issue in issues],
            warnings=list(warnings),
            issues=list(issues),
        )

    @property
    def is_valid(self) -> bool:
        """True when no constraint was violated."""
        return not self.errors

    def errors_for(self, field: str) -> list[str]:
        """Messages for one dotted field path and everything nested below it."""
        return [
            issue.message
            for issue in self.issues
            if issue.field == field or issue.field.startswith(f"{field}.")
        ]
