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
# NGINX SCHEMA
# -----------------------------------------------------------------------------
# Worker sizing, gzip/TLS switches and the optional request-handling options
# (body size, proxy timeouts, rate limiting).
# -----------------------------------------------------------------------------

from imageforge.schemas.common import duration, flag, integer, size
from imageforge.validation import ObjectRule, StringRule, optional, required

WORKER_PROCESSES_PATTERN = r"auto|\d+"

RATE_LIMIT_SCHEMA = ObjectRule(
    shape={
        "enabled": required(flag()),
        "requests": required(integer(1, 10000)),
        "window": required(duration("1m, 1h")),
    }
)

PROXY_TIMEOUT_SCHEMA = ObjectRule(
    shape={
        "connect": optional(duration()),
        "send": optional(duration()),
        "read": optional(duration()),
    }
)

NGINX_SCHEMA = ObjectRule(
    shape={
        "workerProcesses": required(
            StringRule(
                pattern=WORKER_PROCESSES_PATTERN,
                messages={"string.pattern": '{label} must be "auto" or a number'},
            )
        ),
        "workerConnections": required(integer(1, 65535)),
        "gzip": required(flag()),
        "ssl": required(flag()),
        "options": optional(
            ObjectRule(
                shape={
                    "clientMaxBodySize": optional(size()),
                    "proxyTimeout": optional(PROXY_TIMEOUT_SCHEMA),
                    "rateLimit": optional(RATE_LIMIT_SCHEMA),
                }
            )
        ),
    }
)
