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
# S6-OVERLAY SCHEMA
# -----------------------------------------------------------------------------
# Process supervision: supervised services, cron entries and logging options.
# -----------------------------------------------------------------------------

from imageforge.schemas.common import flag, text_list
from imageforge.validation import EnumRule, ObjectRule, optional, required

LOG_LEVELS = ("debug", "info", "warn", "error")

S6_OVERLAY_SCHEMA = ObjectRule(
    shape={
        "services": required(
            text_list(
                item_max=50,
                max_items=20,
                min_items=1,
                array_min="At least one service is required in {label}",
            )
        ),
        "crontab": required(text_list(item_max=200, max_items=50)),
        "options": optional(
            ObjectRule(
                shape={
                    "logging": optional(flag()),
                    "logLevel": optional(EnumRule(values=LOG_LEVELS)),
                    "notifications": optional(flag()),
                }
            )
        ),
    }
)
