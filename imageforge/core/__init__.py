# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The business logic of imageforge:
# - ValidationEngine: layered configuration validation (base/platform/final)
# - ErrorClassifier: failure taxonomy, recovery policy, bounded history
# - ConfigLoader: JSON/YAML fragments, deep merge, TTL cache
# - BuildPipeline: validate -> render -> build -> push. This is the embedding
#   API: callers supply their own TemplateRenderer. It imports the infra
#   layer, so it is imported last.
# - Settings: IMAGEFORGE_* environment configuration
# -----------------------------------------------------------------------------

from .classifier import (
    Classification,
    ErrorClassifier,
    ErrorStatistics,
    RecoveryStrategy,
    retry_delay,
)
from .engine import ConfigLayer, ValidationEngine
from .errors import (
    ConfigLoaderError,
    ConfigValidationError,
    DockerBuildError,
    ErrorSeverity,
    ErrorType,
    FileWriteError,
    ForgeError,
    RegistryError,
    TemplateError,
)
from .loader import ConfigLoader, deep_merge
from .settings import Settings, get_settings
from .pipeline import BuildPipeline, PipelineResult, TemplateRenderer

__all__ = [
    "BuildPipeline",
    "Classification",
    "ConfigLayer",
    "ConfigLoader",
    "ConfigLoaderError",
    "ConfigValidationError",
    "DockerBuildError",
    "ErrorClassifier",
    "ErrorSeverity",
    "ErrorStatistics",
    "ErrorType",
    "FileWriteError",
    "ForgeError",
    "PipelineResult",
    "RecoveryStrategy",
    "RegistryError",
    "Settings",
    "TemplateError",
    "TemplateRenderer",
    "ValidationEngine",
    "deep_merge",
    "get_settings",
    "retry_delay",
]
