# -----------------------------------------------------------------------------
# VALIDATION LAYER
# -----------------------------------------------------------------------------
# Composable validator combinators and the uniform ValidationResult they
# produce. Schemas for every configuration domain are built from these.
# -----------------------------------------------------------------------------

from .result import ValidationIssue, ValidationResult, format_path
from .rules import (
    MISSING,
    AlternativesRule,
    ArrayRule,
    BooleanRule,
    EnumRule,
    Field,
    MapRule,
    NumberRule,
    ObjectRule,
    Rule,
    StringRule,
    ValidationContext,
    merge_shapes,
    optional,
    required,
)

__all__ = [
    "MISSING",
    "AlternativesRule",
    "ArrayRule",
    "BooleanRule",
    "EnumRule",
    "Field",
    "MapRule",
    "NumberRule",
    "ObjectRule",
    "Rule",
    "StringRule",
    "ValidationContext",
    "ValidationIssue",
    "ValidationResult",
    "format_path",
    "merge_shapes",
    "optional",
    "required",
]
