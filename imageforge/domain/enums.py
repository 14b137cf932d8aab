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
# DOMAIN ENUMS - BUILD SELECTIONS
# -----------------------------------------------------------------------------
# The three user selections every image build starts from: PHP version,
# platform family and CPU architecture.
#
# Why Enums: Constrains configuration files and CLI flags to the supported
# matrix. Schemas read the member values once at import time.
# -----------------------------------------------------------------------------

from enum import Enum


class _Selection(str, Enum):
    """Shared helpers for the selection enums."""

    @classmethod
    def values(cls) -> tuple[str, ...]:
        """All member values in declaration order."""
        return tuple(member.value for member in cls)

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls.values()

    @classmethod
    def parse(cls, value: str):
        """
        Convert a raw string into a member.

        Raises:
            ValueError: If the value is not supported, listing the supported values.
        """
        if not cls.is_valid(value):
            raise ValueError(
                f"Invalid {cls._label()}: {value}. Supported: {', '.join(cls.values())}"
            )
        return cls(value)

    @classmethod
    def help_text(cls) -> str:
        """One-line help text for CLI usage."""
        return f"{cls._label().capitalize()} ({', '.join(cls.values())})"

    @classmethod
    def _label(cls) -> str:
        return cls.__name__.lower()


class PHPVersion(_Selection):
    """Supported PHP versions. 7.4 and 8.0 are end-of-life but still buildable."""

    PHP_7_4 = "7.4"
    PHP_8_0 = "8.0"
    PHP_8_1 = "8.1"
    PHP_8_2 = "8.2"
    PHP_8_3 = "8.3"
    PHP_8_4 = "8.4"

    @classmethod
    def end_of_life(cls) -> tuple[str, ...]:
        return (cls.PHP_7_4.value, cls.PHP_8_0.value)

    @classmethod
    def _label(cls) -> str:
        return "PHP version"


class Platform(_Selection):
    """Supported base image families."""

    ALPINE = "alpine"
    UBUNTU = "ubuntu"


class Architecture(_Selection):
    """Target CPU architectures (Docker platform suffixes after 'linux/')."""

    AMD64 = "amd64"
    ARM64 = "arm64"
    ARM_V7 = "arm/v7"
    ARM_V6 = "arm/v6"

    @property
    def docker_platform(self) -> str:
        """Docker platform string, e.g. 'linux/arm/v7'."""
        return f"linux/{self.value}"
