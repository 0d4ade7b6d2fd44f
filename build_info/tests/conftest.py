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


"""Shared pytest fixtures for build-info tests."""

from datetime import datetime, timezone

import pytest

from build_info.core.buildinfo.entities import Artifact, Dependency
from build_info.core.buildinfo.value_objects import BuildCoordinates, Checksum
from build_info.infra.fragment_store.in_memory_fragment_store import (
    InMemoryFragmentStore,
)


SHA1_A = "a" * 40
SHA1_B = "b" * 40
MD5_A = "c" * 32
MD5_B = "d" * 32


@pytest.fixture
def coordinates() -> BuildCoordinates:
    """Coordinates of a build without project."""
    return BuildCoordinates(name="b1", number="1")


@pytest.fixture
def project_coordinates() -> BuildCoordinates:
    """Coordinates of a build that belongs to a project."""
    return BuildCoordinates(name="b1", number="1", project_key="proj")


@pytest.fixture
def started_at() -> datetime:
    """A fixed, timezone-aware build start time."""
    return datetime(2024, 1, 2, 15, 4, 5, 123000, tzinfo=timezone.utc)


@pytest.fixture
def memory_store() -> InMemoryFragmentStore:
    """A fresh in-memory fragment store."""
    return InMemoryFragmentStore()


@pytest.fixture
def jar_artifact() -> Artifact:
    """An artifact with known digests."""
    return Artifact(
        name="a.jar",
        type="jar",
        path="libs/a.jar",
        checksum=Checksum(sha1=SHA1_A, md5=MD5_A),
    )


@pytest.fixture
def checksummed_dependency() -> Dependency:
    """A dependency with known digests."""
    return Dependency(
        id="x:1.0",
        type="zip",
        scopes=["compile"],
        checksum=Checksum(sha1=SHA1_A, md5=MD5_A),
        requested_by=[["mod:1.0"]],
    )
