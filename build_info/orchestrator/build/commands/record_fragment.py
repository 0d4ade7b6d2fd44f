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

"""Command DTOs that record one fragment each."""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Union

from build_info.core.buildinfo.entities import Artifact, BuildInfo, Issues, Vcs
from build_info.core.buildinfo.partials import (
    ArtifactsPayload,
    ChecksumPayload,
    EnvPayload,
    Partial,
    VcsPayload,
)
from build_info.core.buildinfo.services import collect_env
from build_info.core.buildinfo.value_objects import (
    BuildCoordinates,
    Checksum,
    ModuleType,
)


@dataclass(frozen=True)
class RecordArtifactsCommand:
    """Record artifacts produced for a module."""

    coordinates: BuildCoordinates
    module_id: str
    artifacts: Tuple[Artifact, ...]
    module_type: ModuleType = ModuleType.GENERIC
    correlation_id: str = ""

    def __post_init__(self) -> None:
        """Validate command fields."""
        if not self.artifacts:
            raise ValueError("artifacts cannot be empty")

    def to_partial(self) -> Partial:
        return Partial(
            module_id=self.module_id,
            module_type=self.module_type,
            payload=ArtifactsPayload(tuple(self.artifacts)),
        )


@dataclass(frozen=True)
class RecordEnvCommand:
    """Record environment variables, keyed under ``buildInfo.env.``."""

    coordinates: BuildCoordinates
    env: Dict[str, str] = field(default_factory=dict)
    correlation_id: str = ""

    @classmethod
    def from_environ(
        cls,
        coordinates: BuildCoordinates,
        environ: Mapping[str, str],
        correlation_id: str = "",
    ) -> "RecordEnvCommand":
        """Build the command from a process environment."""
        return cls(
            coordinates=coordinates,
            env=collect_env(environ),
            correlation_id=correlation_id,
        )

    def to_partial(self) -> Partial:
        return Partial(
            module_id="",
            module_type=ModuleType.GENERIC,
            payload=EnvPayload(dict(self.env)),
        )


@dataclass(frozen=True)
class RecordVcsCommand:
    """Record VCS state and optional issue-tracker data."""

    coordinates: BuildCoordinates
    vcs_list: Tuple[Vcs, ...]
    issues: Optional[Issues] = None
    correlation_id: str = ""

    def to_partial(self) -> Partial:
        return Partial(
            module_id="",
            module_type=ModuleType.GENERIC,
            payload=VcsPayload(vcs_list=tuple(self.vcs_list), issues=self.issues),
        )


@dataclass(frozen=True)
class RecordBuildChecksumCommand:
    """Record the checksum of a referenced build-info document."""

    coordinates: BuildCoordinates
    module_id: str
    checksum: Checksum
    correlation_id: str = ""

    def __post_init__(self) -> None:
        """Validate command fields."""
        if not self.module_id or not self.module_id.strip():
            raise ValueError("module_id cannot be empty")
        if self.checksum.is_empty():
            raise ValueError("checksum cannot be empty")

    def to_partial(self) -> Partial:
        return Partial(
            module_id=self.module_id,
            module_type=ModuleType.BUILD,
            payload=ChecksumPayload(self.checksum),
        )


@dataclass(frozen=True)
class SaveGeneratedBuildInfoCommand:
    """Keep a complete build-info document produced by a build tool."""

    coordinates: BuildCoordinates
    build_info: BuildInfo
    correlation_id: str = ""


RecordFragmentCommand = Union[
    RecordArtifactsCommand,
    RecordEnvCommand,
    RecordVcsCommand,
    RecordBuildChecksumCommand,
]
