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
# SECURITY POLICY SCHEMA
# -----------------------------------------------------------------------------
# Container hardening: runtime user/group, non-root enforcement, read-only
# root filesystem and the Linux capability allow-list.
# -----------------------------------------------------------------------------

from imageforge.schemas.common import flag, text, text_list
from imageforge.validation import BooleanRule, ObjectRule, optional, required

SECURITY_SCHEMA = ObjectRule(
    shape={
        "user": required(text(1, 32)),
        "group": required(text(1, 32)),
        # Images always drop root; false is rejected rather than warned about.
        "nonRoot": required(
            BooleanRule(only=True, messages={"boolean.only": "{label} must be true for security"})
        ),
        "readOnlyRoot": required(flag()),
        "capabilities": required(
            text_list(
                item_max=20,
                max_items=20,
                min_items=1,
                array_min="At least one capability is required in {label}",
            )
        ),
        "seccomp": optional(flag()),
        "apparmor": optional(flag()),
        "options": optional(
            ObjectRule(
                shape={
                    "dropAllCapabilities": optional(flag()),
                    "noNewPrivileges": optional(flag()),
                    "userNamespace": optional(flag()),
                }
            )
        ),
    }
)
