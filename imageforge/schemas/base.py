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
# BASE CONFIGURATION COMPOSER
# -----------------------------------------------------------------------------
# Layer 1 of 3. Concatenates the independent domain schemas (PHP, security,
# Nginx, s6-overlay) plus optional metadata into one platform-agnostic
# validator. Platform and final layers are built on top of this one.
# -----------------------------------------------------------------------------

from imageforge.schemas.common import text
from imageforge.schemas.nginx import NGINX_SCHEMA
from imageforge.schemas.php import PHP_SCHEMA
from imageforge.schemas.security import SECURITY_SCHEMA
from imageforge.schemas.supervisor import S6_OVERLAY_SCHEMA
from imageforge.validation import ObjectRule, StringRule, optional, required

METADATA_SCHEMA = ObjectRule(
    shape={
        "version": optional(text(1, 20)),
        "description": optional(text(1, 500)),
        "author": optional(text(1, 100)),
        "lastUpdated": optional(StringRule(iso_date=True)),
    }
)

BASE_CONFIG_SCHEMA = (
    ObjectRule(shape={"php": required(PHP_SCHEMA)})
    .concat(ObjectRule(shape={"security": required(SECURITY_SCHEMA)}))
    .concat(ObjectRule(shape={"nginx": required(NGINX_SCHEMA)}))
    .concat(ObjectRule(shape={"s6Overlay": required(S6_OVERLAY_SCHEMA)}))
    .concat(ObjectRule(shape={"metadata": optional(METADATA_SCHEMA)}))
)
