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
# SHARED SCHEMA BUILDING BLOCKS
# -----------------------------------------------------------------------------
# Patterns and small rule factories reused across configuration domains.
# -----------------------------------------------------------------------------

from imageforge.validation import ArrayRule, BooleanRule, NumberRule, StringRule

# digits + optional K/M/G suffix (e.g. 512K, 10M, 1G)
SIZE_PATTERN = r"\d+[KMG]?"

# digits + optional s/m/h suffix (e.g. 30s, 1m, 1h)
DURATION_PATTERN = r"\d+[smh]?"


def text(min_length: int = 1, max_length: int | None = None, **messages: str) -> StringRule:
    """Bounded string."""
    return StringRule(min_length=min_length, max_length=max_length, messages=_keys(messages))


def size(example: str = "1M, 10M") -> StringRule:
    """Size string such as '128M'."""
    return StringRule(
        pattern=SIZE_PATTERN,
        messages={"string.pattern": f"{{label}} must be a valid size (e.g., {example})"},
    )


def duration(example: str = "30s, 1m") -> StringRule:
    """Duration string such as '30s' or '1h'."""
    return StringRule(
        pattern=DURATION_PATTERN,
        messages={"string.pattern": f"{{label}} must be a valid duration (e.g., {example})"},
    )


def integer(minimum: int, maximum: int, unit: str = "") -> NumberRule:
    """Inclusive integer range, with an optional unit appended to bound messages."""
    suffix = f" {unit}" if unit else ""
    return NumberRule(
        minimum=minimum,
        maximum=maximum,
        integer=True,
        messages={
            "number.min": f"{{label}} must be at least {{limit}}{suffix}",
            "number.max": f"{{label}} must not exceed {{limit}}{suffix}",
        },
    )


def flag() -> BooleanRule:
    return BooleanRule()


def text_list(
    item_max: int,
    max_items: int,
    min_items: int | None = None,
    **messages: str,
) -> ArrayRule:
    """List of bounded, non-empty strings."""
    return ArrayRule(
        items=StringRule(min_length=1, max_length=item_max),
        min_items=min_items,
        max_items=max_items,
        messages=_keys(messages),
    )


def _keys(messages: dict[str, str]) -> dict[str, str]:
    """Translate keyword overrides (array_min=...) into message kinds (array.min)."""
    return {key.replace("_", ".", 1): template for key, template in messages.items()}
