# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level infrastructure wrappers:
# - DockerProvider: Docker SDK connection holder
# - ImageBuilder: FinalConfig -> docker build / docker push
# -----------------------------------------------------------------------------

from .docker_client import DockerProvider, DockerProviderError
from .image_builder import BuildOutcome, ImageBuilder, default_tag

__all__ = ["BuildOutcome", "DockerProvider", "DockerProviderError", "ImageBuilder", "default_tag"]
