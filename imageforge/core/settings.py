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
# SETTINGS
# -----------------------------------------------------------------------------
# Runtime knobs read from the environment (optionally from a .env file in
# the working directory). Every component takes its defaults from here but
# accepts explicit overrides, so tests never depend on the environment.
#
# Environment Variables:
# - IMAGEFORGE_ABORT_EARLY: stop validation at the first error (default false)
# - IMAGEFORGE_ERROR_HISTORY: classifier history capacity (default 100)
# - IMAGEFORGE_RECENT_WINDOW_SECONDS: "recent errors" window (default 60)
# - IMAGEFORGE_MAX_RETRIES: cap on suggested retries (default 3)
# - IMAGEFORGE_CONFIG_CACHE_TTL: config loader cache TTL in seconds (default 300)
# - IMAGEFORGE_REGISTRY: registry/namespace prefix for pushed images
# -----------------------------------------------------------------------------

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "IMAGEFORGE_"


class Settings(BaseModel):
    """Validated runtime settings."""

    abort_early: bool = False
    error_history: int = Field(100, ge=1)
    recent_window_seconds: int = Field(60, ge=1)
    max_retries: int = Field(3, ge=0)
    config_cache_ttl: int = Field(300, ge=0)
    registry: str | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """
        Build settings from IMAGEFORGE_* variables.

        Args:
            environ: Mapping to read instead of os.environ (used by tests).
        """
        source = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = source.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)


def get_settings(dotenv: bool = True) -> Settings:
    """Load .env (when present) and return settings from the environment."""
    if dotenv:
        load_dotenv()
    return Settings.from_env()
