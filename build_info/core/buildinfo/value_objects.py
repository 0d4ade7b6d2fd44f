# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
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

"""Value objects for the BuildInfo domain.

All value objects are immutable and defined by their values, not identity.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Dict, Optional

ENV_PREFIX = "buildInfo.env."
TIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def format_timestamp(value: datetime) -> str:
    """Format *value* with millisecond precision and a numeric zone offset.

    Example: ``2024-01-02T15:04:05.000+0000``.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return (
        value.strftime("%Y-%m-%dT%H:%M:%S.")
        + f"{value.microsecond // 1000:03d}"
        + value.strftime("%z")
    )


def parse_timestamp(value: str) -> datetime:
    """Parse a string produced by :func:`format_timestamp`.

    Raises:
        ValueError: If *value* does not match the format.
    """
    return datetime.strptime(value, TIME_FORMAT)


class ModuleType(str, Enum):
    """Kind of build module."""

    BUILD = "build"
    GENERIC = "generic"
    MAVEN = "maven"
    GRADLE = "gradle"
    DOCKER = "docker"
    NPM = "npm"
    NUGET = "nuget"
    GO = "go"
    PYTHON = "python"
    CARGO = "cargo"


@dataclass(frozen=True)
class Checksum:
    """Content digests of a file.

    Any field may be empty when the digest is unknown.

    Attributes:
        sha1: SHA-1 hex digest.
        md5: MD5 hex digest.
        sha256: SHA-256 hex digest.

    Raises:
        ValueError: If a digest is too long or not hexadecimal.
    """

    sha1: str = ""
    md5: str = ""
    sha256: str = ""

    MAX_LENGTH: ClassVar[int] = 128
    HEX_PATTERN: ClassVar[str] = r"^[0-9a-fA-F]*$"

    def __post_init__(self) -> None:
        """Validate digest format."""
        for name in ("sha1", "md5", "sha256"):
            digest = getattr(self, name)
            if len(digest) > self.MAX_LENGTH:
                raise ValueError(
                    f"Checksum {name} length cannot exceed {self.MAX_LENGTH} "
                    f"characters, got {len(digest)}"
                )
            if not re.match(self.HEX_PATTERN, digest):
                raise ValueError(f"Checksum {name} is not hexadecimal: {digest}")

    def is_empty(self) -> bool:
        """Return True when no digest is known."""
        return not (self.sha1 or self.md5 or self.sha256)

    def to_dict(self) -> Dict[str, str]:
        """Serialize non-empty digests."""
        data = {"sha1": self.sha1, "md5": self.md5, "sha256": self.sha256}
        return {key: value for key, value in data.items() if value}

    @staticmethod
    def from_dict(data: Optional[Dict[str, str]]) -> Optional["Checksum"]:
        """Deserialize digests, returning None when none are present."""
        if not data:
            return None
        checksum = Checksum(
            sha1=data.get("sha1", ""),
            md5=data.get("md5", ""),
            sha256=data.get("sha256", ""),
        )
        return None if checksum.is_empty() else checksum


@dataclass(frozen=True)
class BuildCoordinates:
    """Identity of one build: name, number and optional project key.

    Each component becomes part of a directory name, so separators and
    traversal sequences are rejected.

    Attributes:
        name: Build name.
        number: Build number.
        project_key: Optional project key.

    Raises:
        ValueError: If a component is empty, too long or unsafe.
    """

    name: str
    number: str
    project_key: str = ""

    MAX_LENGTH: ClassVar[int] = 256
    FORBIDDEN_CHARACTERS: ClassVar[tuple] = ("/", "\\", "\x00")

    def __post_init__(self) -> None:
        """Validate coordinate components."""
        if not self.name or not self.name.strip():
            raise ValueError("Build name cannot be empty")
        if not self.number or not self.number.strip():
            raise ValueError("Build number cannot be empty")
        for label, value in (
            ("name", self.name),
            ("number", self.number),
            ("project_key", self.project_key),
        ):
            if len(value) > self.MAX_LENGTH:
                raise ValueError(
                    f"Build {label} length cannot exceed {self.MAX_LENGTH} "
                    f"characters, got {len(value)}"
                )
            if value in (".", ".."):
                raise ValueError(f"Build {label} must not be a relative path: {value}")
            for character in self.FORBIDDEN_CHARACTERS:
                if character in value:
                    raise ValueError(
                        f"Build {label} must not contain {character!r}: {value!r}"
                    )

    @property
    def dir_name(self) -> str:
        """Directory name holding this build's fragments."""
        if self.project_key:
            return f"{self.name}-{self.number}-{self.project_key}"
        return f"{self.name}-{self.number}"

    def __str__(self) -> str:
        """Return string representation."""
        return self.dir_name
