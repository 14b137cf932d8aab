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
# PLATFORM CONFIGURATION COMPOSER
# -----------------------------------------------------------------------------
# Layer 2 of 3. Extends the base validator with the platform discriminator
# and a `platformSpecific` payload that must match exactly one of two
# platform-family shapes:
#
#   Alpine family  - packageManager {useCache, cleanCache, repositories?}
#   Ubuntu family  - packageManager {updateLists, upgrade, cleanCache, repositories?}
#
# Both shapes share optimizations / cleanupCommands / environment; the
# package-manager keys are disjoint, so no payload can satisfy both.
#
# When neither shape matches, only one synthetic message is reported for
# `platformSpecific`. Field errors from the two candidate shapes contradict
# each other and are dropped.
# -----------------------------------------------------------------------------

from imageforge.domain.enums import Platform
from imageforge.schemas.base import BASE_CONFIG_SCHEMA
from imageforge.schemas.common import flag, text_list
from imageforge.validation import (
    AlternativesRule,
    EnumRule,
    MapRule,
    ObjectRule,
    optional,
    required,
)

PLATFORM_ALTERNATIVES_MESSAGE = "{label} must be a valid Alpine or Ubuntu configuration"

PLATFORM_SCHEMA = EnumRule(values=Platform.values())

REPOSITORIES = text_list(item_max=200, max_items=10)

OPTIMIZATIONS_SCHEMA = ObjectRule(
    shape={
        "security": required(flag()),
        "minimal": required(flag()),
        "performance": required(flag()),
    }
)

# Shared by both families; each family adds its own packageManager.
_FAMILY_COMMON = ObjectRule(
    shape={
        "optimizations": required(OPTIMIZATIONS_SCHEMA),
        "cleanupCommands": required(text_list(item_max=200, max_items=20)),
        "environment": optional(MapRule()),
    }
)

ALPINE_FAMILY_SCHEMA = ObjectRule(
    shape={
        "packageManager": required(
            ObjectRule(
                shape={
                    "useCache": required(flag()),
                    "cleanCache": required(flag()),
                    "repositories": optional(REPOSITORIES),
                }
            )
        ),
    }
).concat(_FAMILY_COMMON)

UBUNTU_FAMILY_SCHEMA = ObjectRule(
    shape={
        "packageManager": required(
            ObjectRule(
                shape={
                    "updateLists": required(flag()),
                    "upgrade": required(flag()),
                    "cleanCache": required(flag()),
                    "repositories": optional(REPOSITORIES),
                }
            )
        ),
    }
).concat(_FAMILY_COMMON)

PLATFORM_SPECIFIC_SCHEMA = AlternativesRule(
    candidates=(
        (Platform.ALPINE.value, ALPINE_FAMILY_SCHEMA),
        (Platform.UBUNTU.value, UBUNTU_FAMILY_SCHEMA),
    ),
    messages={"alternatives.match": PLATFORM_ALTERNATIVES_MESSAGE},
)

PLATFORM_LAYER_SCHEMA = ObjectRule(
    shape={
        "platform": required(PLATFORM_SCHEMA),
        "platformSpecific": required(PLATFORM_SPECIFIC_SCHEMA),
    }
)

PLATFORM_CONFIG_SCHEMA = BASE_CONFIG_SCHEMA.concat(PLATFORM_LAYER_SCHEMA)


def platform_family(platform_specific: object) -> str | None:
    """
    Name of the single platform family a payload matches.

    Returns:
        'alpine' or 'ubuntu', or None when the payload matches neither.
    """
    name, _, _ = PLATFORM_SPECIFIC_SCHEMA.resolve(platform_specific)
    return name
