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


"""Unit tests for BuildInfo entities."""

import pytest

from build_info.core.buildinfo.entities import (
    AffectedIssue,
    Agent,
    Artifact,
    BuildInfo,
    Dependency,
    Issues,
    Module,
    Tracker,
    Vcs,
    merge_modules,
)
from build_info.core.buildinfo.value_objects import Checksum, ModuleType


SHA1_A = "a" * 40
SHA1_B = "b" * 40
MD5_A = "c" * 32


class TestDependency:
    """Tests for the Dependency entity."""

    def test_empty_id(self):
        """A dependency needs an id."""
        with pytest.raises(ValueError, match="Dependency id cannot be empty"):
            Dependency(id="")

    def test_identity_key(self):
        """Id, digests and scopes make up the identity key."""
        dependency = Dependency(
            id="x:1.0",
            scopes=["compile", "runtime"],
            checksum=Checksum(sha1="123", md5="456"),
        )
        assert dependency.identity_key() == "x:1.0-123-456-compile,runtime"

    def test_identity_key_without_checksum(self):
        """Missing digests leave empty slots in the key."""
        assert Dependency(id="x:1.0").identity_key() == "x:1.0---"

    def test_has_loop(self):
        """A dependency listed on its own path has a loop."""
        assert Dependency(id="a:1", requested_by=[["b:1", "a:1", "root"]]).has_loop()
        assert not Dependency(id="a:1", requested_by=[["b:1", "root"]]).has_loop()

    def test_to_dict(self):
        """Serialization uses camelCase and flattens the checksum."""
        dependency = Dependency(
            id="x:1.0",
            type="zip",
            checksum=Checksum(sha1="123", md5="456"),
            requested_by=[["mod:1.0"]],
        )
        assert dependency.to_dict() == {
            "id": "x:1.0",
            "type": "zip",
            "requestedBy": [["mod:1.0"]],
            "sha1": "123",
            "md5": "456",
        }

    def test_from_dict(self):
        """Deserialization restores every field."""
        dependency = Dependency.from_dict({
            "id": "x:1.0",
            "scopes": ["test"],
            "sha256": "ab",
            "requestedBy": [["y:2.0", "mod:1.0"]],
        })
        assert dependency.scopes == ["test"]
        assert dependency.checksum == Checksum(sha256="ab")
        assert dependency.requested_by == [["y:2.0", "mod:1.0"]]


class TestArtifact:
    """Tests for the Artifact entity."""

    def test_empty_name(self):
        """An artifact needs a name."""
        with pytest.raises(ValueError, match="Artifact name cannot be empty"):
            Artifact(name=" ")

    def test_identity_key(self):
        """Name and digests make up the identity key."""
        artifact = Artifact(name="a.jar", checksum=Checksum(sha1="123", md5="456"))
        assert artifact.identity_key() == "a.jar-123-456"

    def test_to_dict(self):
        """Empty fields are dropped."""
        artifact = Artifact(name="a.jar", checksum=Checksum(sha1="123"))
        assert artifact.to_dict() == {"name": "a.jar", "sha1": "123"}


class TestModule:
    """Tests for the Module entity."""

    def test_to_dict(self):
        """Artifacts and dependencies appear only when present."""
        module = Module(id="mod:1.0", type=ModuleType.GO)
        assert module.to_dict() == {"type": "go", "id": "mod:1.0", "properties": {}}

    def test_build_module_checksum(self):
        """Build modules carry their checksum at module level."""
        module = Module(id="other/1", type=ModuleType.BUILD, checksum=Checksum(sha1="12"))
        data = module.to_dict()
        assert data["sha1"] == "12"
        assert Module.from_dict(data).checksum == Checksum(sha1="12")


class TestIssues:
    """Tests for the Issues entity."""

    def test_has_tracker(self):
        """A tracker with a name counts."""
        assert Issues(tracker=Tracker(name="JIRA")).has_tracker()
        assert not Issues(tracker=Tracker()).has_tracker()
        assert not Issues().has_tracker()

    def test_to_dict(self):
        """Keys follow the document shape."""
        issues = Issues(
            tracker=Tracker(name="JIRA", version="8"),
            aggregate_build_issues=True,
            aggregation_build_status="Released",
            affected_issues=[AffectedIssue(key="ISS-1", aggregated=True)],
        )
        assert issues.to_dict() == {
            "tracker": {"name": "JIRA", "version": "8"},
            "aggregateBuildIssues": True,
            "aggregationBuildStatus": "Released",
            "affectedIssues": [{"key": "ISS-1", "aggregated": True}],
        }


class TestBuildInfo:
    """Tests for the BuildInfo document."""

    def test_to_dict_drops_empty_sections(self):
        """Empty sections are omitted."""
        build_info = BuildInfo(name="b1", number="1", started="2024-01-02T15:04:05.000+0000")
        assert build_info.to_dict() == {
            "name": "b1",
            "number": "1",
            "started": "2024-01-02T15:04:05.000+0000",
        }

    def test_to_dict_full(self):
        """Populated sections use their document keys."""
        build_info = BuildInfo(
            name="b1",
            number="1",
            agent=Agent(name="build-info-py", version="1.0.0"),
            build_agent=Agent(name="GENERIC"),
            principal="ci",
            url="https://ci.example.com/b1/1",
            modules=[Module(id="m")],
            properties={"buildInfo.env.FOO": "1"},
            vcs_list=[Vcs(url="https://git.example.com/r.git", revision="abc")],
        )
        data = build_info.to_dict()
        assert data["agent"] == {"name": "build-info-py", "version": "1.0.0"}
        assert data["buildAgent"] == {"name": "GENERIC"}
        assert data["artifactoryPrincipal"] == "ci"
        assert data["url"] == "https://ci.example.com/b1/1"
        assert data["properties"] == {"buildInfo.env.FOO": "1"}
        assert data["vcs"] == [{"url": "https://git.example.com/r.git", "revision": "abc"}]
        assert data["modules"][0]["id"] == "m"

    def test_from_dict(self):
        """A serialized document decodes to an equal document."""
        build_info = BuildInfo(
            name="b1",
            number="1",
            modules=[Module(id="m", artifacts=[Artifact(name="a.jar")])],
            issues=Issues(tracker=Tracker(name="JIRA")),
        )
        assert BuildInfo.from_dict(build_info.to_dict()) == build_info

    def test_append_new_module(self):
        """Modules with unknown ids are appended."""
        build_info = BuildInfo(name="b1", number="1", modules=[Module(id="a")])
        build_info.append(BuildInfo(name="b1", number="1", modules=[Module(id="b")]))
        assert [module.id for module in build_info.modules] == ["a", "b"]

    def test_append_merges_same_module(self):
        """Modules with the same id are merged."""
        first = Artifact(name="a.jar", checksum=Checksum(sha1=SHA1_A))
        second = Artifact(name="b.jar", checksum=Checksum(sha1=SHA1_B))
        build_info = BuildInfo(
            name="b1", number="1", modules=[Module(id="m", artifacts=[first])]
        )
        build_info.append(BuildInfo(
            name="b1", number="1", modules=[Module(id="m", artifacts=[first, second])]
        ))
        assert len(build_info.modules) == 1
        assert build_info.modules[0].artifacts == [first, second]


class TestMergeModules:
    """Tests for module merging of generated documents."""

    def test_dependency_scopes_and_paths_unioned(self):
        """Dependencies with equal id and sha1 are combined."""
        into = Module(id="m", dependencies=[
            Dependency(
                id="x:1",
                scopes=["compile"],
                checksum=Checksum(sha1=SHA1_A, md5=MD5_A),
                requested_by=[["m"]],
            ),
        ])
        source = Module(id="m", dependencies=[
            Dependency(
                id="x:1",
                scopes=["compile", "test"],
                checksum=Checksum(sha1=SHA1_A),
                requested_by=[["y:1", "m"]],
            ),
        ])

        merge_modules(source, into)

        assert len(into.dependencies) == 1
        merged = into.dependencies[0]
        assert merged.scopes == ["compile", "test"]
        assert merged.requested_by == [["m"], ["y:1", "m"]]
        assert merged.md5 == MD5_A

    def test_different_sha1_kept_apart(self):
        """Dependencies with different digests stay separate."""
        into = Module(id="m", dependencies=[
            Dependency(id="x:1", checksum=Checksum(sha1=SHA1_A)),
        ])
        source = Module(id="m", dependencies=[
            Dependency(id="x:1", checksum=Checksum(sha1=SHA1_B)),
        ])
        merge_modules(source, into)
        assert len(into.dependencies) == 2

    def test_artifacts_deduplicated_by_sha1(self):
        """Artifacts already present by sha1 are not added again."""
        artifact = Artifact(name="a.jar", checksum=Checksum(sha1=SHA1_A))
        into = Module(id="m", artifacts=[artifact])
        merge_modules(Module(id="m", artifacts=[artifact]), into)
        assert into.artifacts == [artifact]
