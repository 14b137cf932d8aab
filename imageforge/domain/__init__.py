# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Build selections (enums) and the typed configuration models that the
# validation engine produces for the rendering and build stages.
# -----------------------------------------------------------------------------

from .enums import Architecture, PHPVersion, Platform
from .models import (
    AlpineConfig,
    BaseConfig,
    BuildSettings,
    FinalConfig,
    NginxConfig,
    PHPConfig,
    PlatformConfig,
    S6OverlayConfig,
    SecurityConfig,
    UbuntuConfig,
)

__all__ = [
    "AlpineConfig",
    "Architecture",
    "BaseConfig",
    "BuildSettings",
    "FinalConfig",
    "NginxConfig",
    "PHPConfig",
    "PHPVersion",
    "Platform",
    "PlatformConfig",
    "S6OverlayConfig",
    "SecurityConfig",
    "UbuntuConfig",
]
