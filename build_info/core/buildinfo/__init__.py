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

"""BuildInfo domain module."""

from .value_objects import (
    BuildCoordinates,
    Checksum,
    ModuleType,
    ENV_PREFIX,
    format_timestamp,
    parse_timestamp,
)
from .exceptions import (
    BuildInfoDomainError,
    BuildNotStartedError,
    EnvFilterError,
    FragmentStoreError,
    GraphParseError,
    MalformedFragmentError,
)
from .entities import (
    Agent,
    AffectedIssue,
    Artifact,
    BuildInfo,
    Dependency,
    General,
    Issues,
    Module,
    Tracker,
    Vcs,
)
from .partials import (
    ArtifactsPayload,
    ChecksumPayload,
    DependenciesPayload,
    EnvPayload,
    Partial,
    VcsPayload,
)
from .repositories import FragmentRepository

__all__ = [
    "BuildCoordinates",
    "Checksum",
    "ModuleType",
    "ENV_PREFIX",
    "format_timestamp",
    "parse_timestamp",
    "BuildInfoDomainError",
    "BuildNotStartedError",
    "EnvFilterError",
    "FragmentStoreError",
    "GraphParseError",
    "MalformedFragmentError",
    "Agent",
    "AffectedIssue",
    "Artifact",
    "BuildInfo",
    "Dependency",
    "General",
    "Issues",
    "Module",
    "Tracker",
    "Vcs",
    "ArtifactsPayload",
    "ChecksumPayload",
    "DependenciesPayload",
    "EnvPayload",
    "Partial",
    "VcsPayload",
    "FragmentRepository",
]
