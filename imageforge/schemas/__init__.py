# -----------------------------------------------------------------------------
# CONFIGURATION SCHEMAS
# -----------------------------------------------------------------------------
# One validator per configuration domain, composed into three layers:
# base -> platform -> final. Each layer is concatenated onto the previous one.
# -----------------------------------------------------------------------------

from .base import BASE_CONFIG_SCHEMA, METADATA_SCHEMA
from .final import ARCHITECTURE_SCHEMA, BUILD_SCHEMA, FINAL_CONFIG_SCHEMA, FINAL_LAYER_SCHEMA
from .nginx import NGINX_SCHEMA
from .php import PHP_FPM_SCHEMA, PHP_SCHEMA, PHP_VERSION_SCHEMA
from .platform import (
    ALPINE_FAMILY_SCHEMA,
    PLATFORM_CONFIG_SCHEMA,
    PLATFORM_LAYER_SCHEMA,
    PLATFORM_SCHEMA,
    PLATFORM_SPECIFIC_SCHEMA,
    UBUNTU_FAMILY_SCHEMA,
    platform_family,
)
from .security import SECURITY_SCHEMA
from .supervisor import S6_OVERLAY_SCHEMA

LAYER_SCHEMAS = {
    "base": BASE_CONFIG_SCHEMA,
    "platform": PLATFORM_CONFIG_SCHEMA,
    "final": FINAL_CONFIG_SCHEMA,
}

__all__ = [
    "ALPINE_FAMILY_SCHEMA",
    "ARCHITECTURE_SCHEMA",
    "BASE_CONFIG_SCHEMA",
    "BUILD_SCHEMA",
    "FINAL_CONFIG_SCHEMA",
    "FINAL_LAYER_SCHEMA",
    "LAYER_SCHEMAS",
    "METADATA_SCHEMA",
    "NGINX_SCHEMA",
    "PHP_FPM_SCHEMA",
    "PHP_SCHEMA",
    "PHP_VERSION_SCHEMA",
    "PLATFORM_CONFIG_SCHEMA",
    "PLATFORM_LAYER_SCHEMA",
    "PLATFORM_SCHEMA",
    "PLATFORM_SPECIFIC_SCHEMA",
    "S6_OVERLAY_SCHEMA",
    "SECURITY_SCHEMA",
    "UBUNTU_FAMILY_SCHEMA",
    "platform_family",
]
