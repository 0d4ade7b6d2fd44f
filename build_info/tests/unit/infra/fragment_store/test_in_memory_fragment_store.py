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


"""Unit tests for InMemoryFragmentStore."""

import threading

import pytest

from build_info.core.buildinfo.entities import Artifact, BuildInfo, General, Module
from build_info.core.buildinfo.exceptions import MalformedFragmentError
from build_info.core.buildinfo.partials import ArtifactsPayload, EnvPayload, Partial
from build_info.core.buildinfo.value_objects import BuildCoordinates, ModuleType


def _partial(name="a.jar", timestamp=1):
    return Partial(
        module_id="m",
        module_type=ModuleType.GENERIC,
        payload=ArtifactsPayload((Artifact(name=name),)),
        timestamp=timestamp,
    )


class TestGeneral:
    """Build-start marker handling."""

    def test_first_writer_wins(self, memory_store, coordinates, started_at):
        """The marker is written once."""
        assert memory_store.save_general(coordinates, General(timestamp=started_at))
        assert not memory_store.save_general(coordinates, General(timestamp=started_at))
        assert memory_store.get_general(coordinates).timestamp == started_at

    def test_missing(self, memory_store, coordinates):
        """Unstarted builds have no marker."""
        assert memory_store.get_general(coordinates) is None


class TestPartials:
    """Partial handling."""

    def test_save_and_read(self, memory_store, coordinates):
        """Every saved partial is read back under a unique key."""
        first = memory_store.save_partial(coordinates, _partial("a.jar"))
        second = memory_store.save_partial(coordinates, _partial("b.jar"))

        assert first != second
        assert memory_store.read_partials(coordinates) == [_partial("a.jar"), _partial("b.jar")]

    def test_builds_isolated(self, memory_store, coordinates, project_coordinates):
        """Builds with different coordinates do not share fragments."""
        memory_store.save_partial(coordinates, _partial())
        assert memory_store.read_partials(project_coordinates) == []

    def test_corrupt_partial(self, memory_store, coordinates):
        """Undecodable content raises MalformedFragmentError."""
        key = memory_store.put_raw_partial(coordinates, "{not json")
        with pytest.raises(MalformedFragmentError) as exc_info:
            memory_store.read_partials(coordinates)
        assert exc_info.value.location == key

    def test_schema_violation(self, memory_store, coordinates):
        """Documents violating the schema are malformed."""
        memory_store.put_raw_partial(coordinates, '{"moduleId": "m"}')
        with pytest.raises(MalformedFragmentError):
            memory_store.read_partials(coordinates)

    def test_concurrent_writers(self, memory_store, coordinates):
        """Writers sharing the store never lose a fragment."""
        def write(index):
            memory_store.save_partial(
                coordinates,
                Partial("", ModuleType.GENERIC, EnvPayload({f"k{index}": "v"}), timestamp=index),
            )

        threads = [threading.Thread(target=write, args=(index,)) for index in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(memory_store.read_partials(coordinates)) == 20


class TestGeneratedAndClean:
    """Generated documents and cleanup."""

    def test_generated(self, memory_store, coordinates):
        """Generated documents are read back."""
        build_info = BuildInfo(name="b1", number="1", modules=[Module(id="m")])
        memory_store.save_generated(coordinates, build_info)
        assert memory_store.read_generated(coordinates) == [build_info]

    def test_clean(self, memory_store, coordinates, started_at):
        """Cleaning removes everything recorded for the build."""
        memory_store.save_general(coordinates, General(timestamp=started_at))
        memory_store.save_partial(coordinates, _partial())

        assert memory_store.clean(coordinates)
        assert memory_store.read_partials(coordinates) == []
        assert memory_store.get_general(coordinates) is None
        assert not memory_store.clean(BuildCoordinates("other", "1"))
