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
# FINAL CONFIGURATION COMPOSER
# -----------------------------------------------------------------------------
# Layer 3 of 3. Extends the platform validator with the target architecture
# and the Docker build descriptor. Because it is concatenated onto the
# platform validator, validating a final configuration re-checks every base
# and platform constraint on the same input.
# -----------------------------------------------------------------------------

from imageforge.domain.enums import Architecture
from imageforge.schemas.common import flag, text
from imageforge.schemas.platform import PLATFORM_CONFIG_SCHEMA
from imageforge.validation import EnumRule, MapRule, ObjectRule, optional, required

ARCHITECTURE_SCHEMA = EnumRule(values=Architecture.values())

BUILD_ARGS_SCHEMA = MapRule(
    keys=text(1, 50),
    values=text(1, 200),
    max_entries=50,
    messages={"object.max": "{label} allows at most {limit} build arguments"},
)

BUILD_SCHEMA = ObjectRule(
    shape={
        "baseImage": required(text(1, 200)),
        "buildArgs": optional(BUILD_ARGS_SCHEMA),
        "context": optional(text(1, 500), default="."),
        "useCache": optional(flag(), default=True),
    }
)

FINAL_LAYER_SCHEMA = ObjectRule(
    shape={
        "architecture": required(ARCHITECTURE_SCHEMA),
        "build": required(BUILD_SCHEMA),
    }
)

FINAL_CONFIG_SCHEMA = PLATFORM_CONFIG_SCHEMA.concat(FINAL_LAYER_SCHEMA)
