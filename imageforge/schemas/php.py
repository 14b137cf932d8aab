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
# PHP RUNTIME SCHEMA
# -----------------------------------------------------------------------------
# Validates the PHP version, the extension list, PHP-FPM pool sizing and the
# optional php.ini runtime options.
# -----------------------------------------------------------------------------

from imageforge.domain.enums import PHPVersion
from imageforge.schemas.common import integer, size, text_list
from imageforge.validation import EnumRule, ObjectRule, optional, required

PHP_VERSION_SCHEMA = EnumRule(
    values=PHPVersion.values(),
    deprecated=PHPVersion.end_of_life(),
    messages={
        "enum.only": "{label} must be one of: {valids}",
        "enum.deprecated": "{label} {value} is end-of-life; consider upgrading",
    },
)

PHP_FPM_SCHEMA = ObjectRule(
    shape={
        "maxChildren": required(integer(1, 1000)),
        "startServers": required(integer(1, 100)),
        "minSpareServers": required(integer(1, 100)),
        "maxSpareServers": required(integer(1, 100)),
        "maxRequests": optional(integer(1, 100000)),
        "processIdleTimeout": optional(integer(1, 3600, unit="seconds")),
    }
)

PHP_OPTIONS_SCHEMA = ObjectRule(
    shape={
        "memoryLimit": optional(size("128M, 512K")),
        "maxExecutionTime": optional(integer(0, 3600, unit="seconds")),
        "maxInputTime": optional(integer(0, 3600, unit="seconds")),
        "uploadMaxFilesize": optional(size("2M, 10M")),
        "maxFileUploads": optional(integer(1, 100)),
    }
)

PHP_SCHEMA = ObjectRule(
    shape={
        "version": required(PHP_VERSION_SCHEMA),
        "extensions": required(
            text_list(
                item_max=50,
                max_items=50,
                min_items=1,
                array_min="At least one PHP extension is required in {label}",
            )
        ),
        "fpm": required(PHP_FPM_SCHEMA),
        "options": optional(PHP_OPTIONS_SCHEMA),
    }
)
