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

"""Result DTOs for build orchestrator use cases."""

from dataclasses import dataclass
from typing import Any, Dict

from build_info.core.buildinfo.entities import BuildInfo


@dataclass
class StartBuildResult:
    """Result DTO for StartBuildUseCase."""

    build: str
    started: str
    created: bool


@dataclass
class CollectDependenciesResult:
    """Result DTO for CollectDependenciesUseCase."""

    module_id: str
    dependency_count: int
    unresolved_count: int
    looped_count: int
    location: str


@dataclass
class RecordFragmentResult:
    """Result DTO for RecordFragmentUseCase."""

    build: str
    location: str


@dataclass
class AssembleBuildInfoResult:
    """Result DTO for AssembleBuildInfoUseCase."""

    build_info: BuildInfo
    document: Dict[str, Any]
    partial_count: int
    module_count: int


@dataclass
class CleanBuildResult:
    """Result DTO for CleanBuildUseCase."""

    build: str
    removed: bool
