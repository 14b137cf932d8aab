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
# IMAGEFORGE
# -----------------------------------------------------------------------------
# Layered configuration validation for PHP-FPM + Nginx container images.
#
# Packages:
# - validation: the closed set of validator combinators
# - schemas: PHP / security / Nginx / s6-overlay / platform / build rules
# - domain: enums and typed pydantic models of validated configurations
# - core: engine, error classifier, loader, settings, build pipeline
# - infra: Docker SDK adapters
# -----------------------------------------------------------------------------

__version__ = "0.1.0"

# core first: infra modules import core.errors, and core.pipeline imports infra.
from imageforge.core import BuildPipeline, TemplateRenderer, ValidationEngine  # noqa: E402

__all__ = ["BuildPipeline", "TemplateRenderer", "ValidationEngine", "__version__"]
