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
# VALIDATOR COMBINATORS
# -----------------------------------------------------------------------------
# A small, closed set of immutable rule types that compose into the
# configuration schemas:
#
#   StringRule / NumberRule / BooleanRule / EnumRule   - leaf constraints
#   ArrayRule / MapRule                                - homogeneous containers
#   ObjectRule                                         - fixed-shape objects
#   AlternativesRule                                   - exactly-one-of shapes
#
# Every rule formats its own failure messages from templates keyed by failure
# kind. `{label}` is always the dotted path of the offending field, so the
# same rule reports 'workerConnections ...' on its own and
# 'nginx.workerConnections ...' once nested inside the base configuration.
# -----------------------------------------------------------------------------

import copy
import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from imageforge.validation.result import ValidationIssue, ValidationResult, format_path


class _Missing:
    """Marker for an absent key (distinct from an explicit null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "any.required": "{label} is required",
        "any.unknown": "{label} is not allowed",
        "string.base": "{label} must be a string",
        "string.min": "{label} must be at least {limit} characters long",
        "string.empty": "{label} cannot be empty",
        "string.max": "{label} cannot exceed {limit} characters",
        "string.pattern": "{label} must match the pattern {pattern}",
        "string.isoDate": "{label} must be a valid ISO date",
        "number.base": "{label} must be a number",
        "number.integer": "{label} must be an integer",
        "number.min": "{label} must be at least {limit}",
        "number.max": "{label} must not exceed {limit}",
        "boolean.base": "{label} must be a boolean",
        "boolean.only": "{label} must be {expected}",
        "enum.only": "{label} must be one of: {valids}",
        "enum.deprecated": "{label} {value} is deprecated",
        "array.base": "{label} must be an array",
        "array.min": "{label} must contain at least {limit} items",
        "array.max": "{label} must contain at most {limit} items",
        "object.base": "{label} must be an object",
        "object.max": "{label} must have at most {limit} entries",
        "alternatives.match": "{label} does not match any of the allowed shapes",
    }
)

_NUMERIC_STRING = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?\s*$")

_ISO_DATE = re.compile(
    r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:T(?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.\d+)?)?"
    r"(?:[Zz]|[+-](?:[01]\d|2[0-3]):[0-5]\d)?)?"
)


class ValidationContext:
    """
    Mutable per-call state threaded through a rule tree.

    Rules themselves never hold state; everything a single validation call
    accumulates (issues, warnings, fail-fast status) lives here.
    """

    def __init__(self, convert: bool = True, abort_early: bool = False, root_label: str = "value"):
        self.convert = convert
        self.abort_early = abort_early
        self.root_label = root_label
        self.issues: list[ValidationIssue] = []
        self.warnings: list[str] = []

    @property
    def halted(self) -> bool:
        """True once fail-fast mode has seen its first issue."""
        return self.abort_early and bool(self.issues)

    def label(self, path: tuple[str | int, ...]) -> str:
        return format_path(path, self.root_label)

    def fail(
        self,
        path: tuple[str | int, ...],
        kind: str,
        messages: Mapping[str, str],
        **params: Any,
    ) -> None:
        template = messages.get(kind) or DEFAULT_MESSAGES[kind]
        message = template.format(label=self.label(path), **params)
        self.issues.append(ValidationIssue(path=path, kind=kind, message=message))

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def fork(self) -> "ValidationContext":
        """A fresh aggregating context sharing this one's options (used to try alternatives)."""
        return ValidationContext(self.convert, False, self.root_label)


@dataclass(frozen=True)
class Rule:
    """Base class for all combinators."""

    messages: Mapping[str, str] = field(default_factory=dict, kw_only=True)

    def check(self, value: Any, path: tuple[str | int, ...], ctx: ValidationContext) -> Any:
        """Validate `value`, record issues on `ctx`, return the (coerced) value."""
        raise NotImplementedError

    def validate(
        self,
        value: Any = MISSING,
        *,
        convert: bool = True,
        abort_early: bool = False,
        label: str = "value",
    ) -> ValidationResult:
        """
        Validate a standalone value.

        Args:
            value: The raw input. Omitting it validates an absent value.
            convert: Coerce numeric strings to numbers and 'true'/'false' to booleans.
            abort_early: Stop at the first violated constraint.
            label: Name used in messages for the root value.

        Returns:
            ValidationResult with the coerced value or the collected errors.
        """
        ctx = ValidationContext(convert=convert, abort_early=abort_early, root_label=label)
        if value is MISSING:
            ctx.fail((), "any.required", self.messages)
            return ValidationResult.build(None, ctx.issues, ctx.warnings)
        coerced = self.check(value, (), ctx)
        return ValidationResult.build(coerced, ctx.issues, ctx.warnings)

    def _fail(self, ctx: ValidationContext, path, kind: str, **params: Any) -> None:
        ctx.fail(path, kind, self.messages, **params)


@dataclass(frozen=True)
class StringRule(Rule):
    """String with optional length bounds, regex pattern and ISO date format."""

    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    iso_date: bool = False

    def check(self, value, path, ctx):
        if not isinstance(value, str):
            self._fail(ctx, path, "string.base")
            return value
        if self.min_length is not None and len(value) < self.min_length:
            kind = "string.empty" if not value else "string.min"
            self._fail(ctx, path, kind, limit=self.min_length)
        elif self.max_length is not None and len(value) > self.max_length:
            self._fail(ctx, path, "string.max", limit=self.max_length)
        elif self.pattern is not None and re.fullmatch(self.pattern, value) is None:
            self._fail(ctx, path, "string.pattern", pattern=self.pattern)
        elif self.iso_date and not _is_iso_date(value):
            self._fail(ctx, path, "string.isoDate")
        return value


@dataclass(frozen=True)
class NumberRule(Rule):
    """Number with optional integer constraint and inclusive bounds."""

    minimum: int | float | None = None
    maximum: int | float | None = None
    integer: bool = False

    def check(self, value, path, ctx):
        if ctx.convert and isinstance(value, str) and _NUMERIC_STRING.match(value):
            value = float(value)
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or (isinstance(value, float) and math.isnan(value))
        ):
            self._fail(ctx, path, "number.base")
            return value
        if isinstance(value, float) and value.is_integer() and not math.isinf(value):
            value = int(value)
        if self.integer and not isinstance(value, int):
            self._fail(ctx, path, "number.integer")
        elif self.minimum is not None and value < self.minimum:
            self._fail(ctx, path, "number.min", limit=self.minimum)
        elif self.maximum is not None and value > self.maximum:
            self._fail(ctx, path, "number.max", limit=self.maximum)
        return value


@dataclass(frozen=True)
class BooleanRule(Rule):
    """Boolean, optionally pinned to a single permitted value."""

    only: bool | None = None

    def check(self, value, path, ctx):
        if ctx.convert and isinstance(value, str) and value.lower() in ("true", "false"):
            value = value.lower() == "true"
        if not isinstance(value, bool):
            self._fail(ctx, path, "boolean.base")
            return value
        if self.only is not None and value is not self.only:
            self._fail(ctx, path, "boolean.only", expected=str(self.only).lower())
        return value


@dataclass(frozen=True)
class EnumRule(Rule):
    """
    Membership in a fixed, ordered set of string values.

    Members listed in `deprecated` are accepted but produce a warning.
    """

    values: tuple[str, ...] = ()
    deprecated: tuple[str, ...] = ()

    def check(self, value, path, ctx):
        if not isinstance(value, str) or value not in self.values:
            self._fail(ctx, path, "enum.only", valids=", ".join(self.values))
            return value
        if value in self.deprecated:
            template = self.messages.get("enum.deprecated") or DEFAULT_MESSAGES["enum.deprecated"]
            ctx.warn(template.format(label=ctx.label(path), value=value))
        return value


@dataclass(frozen=True)
class ArrayRule(Rule):
    """List whose every item satisfies `items`, with optional length bounds."""

    items: Rule | None = None
    min_items: int | None = None
    max_items: int | None = None

    def check(self, value, path, ctx):
        if not isinstance(value, (list, tuple)):
            self._fail(ctx, path, "array.base")
            return value
        if self.min_items is not None and len(value) < self.min_items:
            self._fail(ctx, path, "array.min", limit=self.min_items)
            return list(value)
        if self.max_items is not None and len(value) > self.max_items:
            self._fail(ctx, path, "array.max", limit=self.max_items)
            return list(value)
        if self.items is None:
            return list(value)
        checked = []
        for index, item in enumerate(value):
            if ctx.halted:
                break
            checked.append(self.items.check(item, path + (index,), ctx))
        return checked


@dataclass(frozen=True)
class MapRule(Rule):
    """Free-keyed mapping (e.g. build arguments, environment variables)."""

    keys: StringRule = field(default_factory=lambda: StringRule(min_length=1))
    values: Rule = field(default_factory=lambda: StringRule(min_length=1))
    max_entries: int | None = None

    def check(self, value, path, ctx):
        if not isinstance(value, Mapping):
            self._fail(ctx, path, "object.base")
            return value
        if self.max_entries is not None and len(value) > self.max_entries:
            self._fail(ctx, path, "object.max", limit=self.max_entries)
            return dict(value)
        checked = {}
        for key, item in value.items():
            if ctx.halted:
                break
            entry_path = path + (str(key),)
            self.keys.check(key, entry_path, ctx)
            checked[key] = self.values.check(item, entry_path, ctx)
        return checked


@dataclass(frozen=True)
class Field:
    """
    A keyed slot inside an ObjectRule.

    Attributes:
        rule: Constraint applied when the key is present.
        required: Absence is an error.
        default: Inserted into the validated value when the key is absent.
        deprecated: When set, presence of the key produces this warning.
    """

    rule: Rule
    required: bool = False
    default: Any = MISSING
    deprecated: str | None = None


def required(rule: Rule) -> Field:
    """Shorthand for a required field."""
    return Field(rule, required=True)


def optional(rule: Rule, default: Any = MISSING) -> Field:
    """Shorthand for an optional field, with an optional default."""
    return Field(rule, default=default)


def merge_shapes(parent: Mapping[str, Field], child: Mapping[str, Field]) -> dict[str, Field]:
    """
    Merge two object shapes.

    Keys keep the parent's declaration order; keys new in the child are
    appended in the child's order. On conflict the child's rule and default
    replace the parent's, and the key stays required if either side requires it.
    """
    merged = dict(parent)
    for key, child_field in child.items():
        parent_field = merged.get(key)
        if parent_field is None:
            merged[key] = child_field
            continue
        merged[key] = Field(
            rule=child_field.rule,
            required=parent_field.required or child_field.required,
            default=child_field.default
            if child_field.default is not MISSING
            else parent_field.default,
            deprecated=child_field.deprecated or parent_field.deprecated,
        )
    return merged


@dataclass(frozen=True)
class ObjectRule(Rule):
    """Fixed-shape object. Unknown keys are rejected unless `allow_unknown`."""

    shape: Mapping[str, Field] = field(default_factory=dict)
    allow_unknown: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "shape", MappingProxyType(dict(self.shape)))

    @property
    def required_keys(self) -> frozenset[str]:
        return frozenset(key for key, slot in self.shape.items() if slot.required)

    def concat(self, other: "ObjectRule") -> "ObjectRule":
        """
        Compose two object rules into a new one.

        The result validates the union of both shapes; `other` wins on
        conflicting keys (see `merge_shapes`).
        """
        return ObjectRule(
            shape=merge_shapes(self.shape, other.shape),
            allow_unknown=self.allow_unknown and other.allow_unknown,
            messages={**self.messages, **other.messages},
        )

    def check(self, value, path, ctx):
        if not isinstance(value, Mapping):
            self._fail(ctx, path, "object.base")
            return value
        checked: dict[str, Any] = {}
        for key, slot in self.shape.items():
            if ctx.halted:
                return checked
            key_path = path + (key,)
            if key not in value:
                if slot.required:
                    ctx.fail(key_path, "any.required", slot.rule.messages)
                elif slot.default is not MISSING:
                    checked[key] = copy.deepcopy(slot.default)
                continue
            if slot.deprecated:
                ctx.warn(f"{ctx.label(key_path)} {slot.deprecated}")
            checked[key] = slot.rule.check(value[key], key_path, ctx)
        for key in value:
            if ctx.halted:
                break
            if key in self.shape:
                continue
            if self.allow_unknown:
                checked[key] = value[key]
            else:
                self._fail(ctx, path + (str(key),), "any.unknown")
        return checked


@dataclass(frozen=True)
class AlternativesRule(Rule):
    """
    Exactly-one-of resolution over named candidate shapes.

    Candidates are tried in declaration order. The value is accepted only
    when exactly one candidate validates with zero errors. Otherwise a single
    'alternatives.match' issue is reported and the candidates' own field
    errors are discarded.
    """

    candidates: tuple[tuple[str, Rule], ...] = ()

    def resolve(
        self,
        value: Any,
        ctx: ValidationContext | None = None,
        path: tuple[str | int, ...] = (),
    ) -> tuple[str | None, Any, list[str]]:
        """
        Try every candidate against `value`.

        Returns:
            (name, coerced value, warnings) of the single matching candidate,
            or (None, value, []) when zero or several candidates match.
        """
        parent = ctx or ValidationContext()
        matches = []
        for name, candidate in self.candidates:
            branch = parent.fork()
            coerced = candidate.check(value, path, branch)
            if not branch.issues:
                matches.append((name, coerced, branch.warnings))
        if len(matches) != 1:
            return None, value, []
        return matches[0]

    def check(self, value, path, ctx):
        name, coerced, warnings = self.resolve(value, ctx, path)
        if name is None:
            self._fail(ctx, path, "alternatives.match")
            return value
        for warning in warnings:
            ctx.warn(warning)
        return coerced


def _is_iso_date(value: str) -> bool:
    """
    Accept ISO-8601 calendar dates and date-times.

    Forms: YYYY-MM-DD, optionally followed by THH:MM[:SS[.fraction]] and a
    zone designator (Z or +HH:MM). Week dates and the basic (no separator)
    format are rejected.
    """
    match = _ISO_DATE.fullmatch(value)
    if match is None:
        return False
    fields = match.group("year", "month", "day", "hour", "minute", "second")
    parts = [int(part) for part in fields if part is not None]
    try:
        datetime(*parts)
    except ValueError:
        return False
    return True
