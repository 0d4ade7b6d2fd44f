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

"""Domain entities for the BuildInfo aggregate.

Every entity serializes to the camelCase JSON shape of a build-info
document via ``to_dict`` and is rebuilt with ``from_dict``. Checksums are
flattened onto the owning object (``sha1``/``md5``/``sha256`` keys).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from build_info.core.buildinfo.value_objects import (
    Checksum,
    ModuleType,
    format_timestamp,
    parse_timestamp,
)


def _with_checksum(data: Dict[str, Any], checksum: Optional[Checksum]) -> Dict[str, Any]:
    if checksum is not None:
        data.update(checksum.to_dict())
    return data


def _drop_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value not in (None, "", [], {})}


@dataclass
class Dependency:
    """A resolved dependency of a module.

    Attributes:
        id: Canonical ``name:version`` identifier.
        type: Package kind (zip, cargo, npm, ...).
        scopes: Scopes the dependency was resolved in.
        checksum: Content digests, when the package file was found.
        requested_by: Paths back to the module root, nearest parent first.
    """

    id: str
    type: str = ""
    scopes: List[str] = field(default_factory=list)
    checksum: Optional[Checksum] = None
    requested_by: List[List[str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Dependency id cannot be empty")

    @property
    def sha1(self) -> str:
        return self.checksum.sha1 if self.checksum else ""

    @property
    def md5(self) -> str:
        return self.checksum.md5 if self.checksum else ""

    def identity_key(self) -> str:
        """Key under which a module keeps one copy of this dependency."""
        return f"{self.id}-{self.sha1}-{self.md5}-{','.join(self.scopes)}"

    def has_loop(self) -> bool:
        """True when the dependency is its own ancestor on some path."""
        return any(self.id in path for path in self.requested_by)

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_empty({
            "id": self.id,
            "type": self.type,
            "scopes": list(self.scopes),
            "requestedBy": [list(path) for path in self.requested_by],
        })
        return _with_checksum(data, self.checksum)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Dependency":
        return Dependency(
            id=data["id"],
            type=data.get("type", ""),
            scopes=list(data.get("scopes", [])),
            checksum=Checksum.from_dict(data),
            requested_by=[list(path) for path in data.get("requestedBy", [])],
        )


@dataclass
class Artifact:
    """A file produced by the build."""

    name: str
    type: str = ""
    path: str = ""
    checksum: Optional[Checksum] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Artifact name cannot be empty")

    @property
    def sha1(self) -> str:
        return self.checksum.sha1 if self.checksum else ""

    @property
    def md5(self) -> str:
        return self.checksum.md5 if self.checksum else ""

    def identity_key(self) -> str:
        """Artifacts with identical content share this key."""
        return f"{self.name}-{self.sha1}-{self.md5}"

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_empty({"name": self.name, "type": self.type, "path": self.path})
        return _with_checksum(data, self.checksum)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Artifact":
        return Artifact(
            name=data["name"],
            type=data.get("type", ""),
            path=data.get("path", ""),
            checksum=Checksum.from_dict(data),
        )


@dataclass
class Module:
    """One buildable unit of a build."""

    id: str
    type: ModuleType = ModuleType.GENERIC
    checksum: Optional[Checksum] = None
    dependencies: List[Dependency] = field(default_factory=list)
    artifacts: List[Artifact] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "id": self.id,
            "properties": dict(self.properties),
        }
        if self.artifacts:
            data["artifacts"] = [artifact.to_dict() for artifact in self.artifacts]
        if self.dependencies:
            data["dependencies"] = [dep.to_dict() for dep in self.dependencies]
        return _with_checksum(data, self.checksum)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Module":
        return Module(
            id=data.get("id", ""),
            type=ModuleType(data.get("type", ModuleType.GENERIC.value)),
            checksum=Checksum.from_dict(data),
            dependencies=[
                Dependency.from_dict(dep) for dep in data.get("dependencies", [])
            ],
            artifacts=[
                Artifact.from_dict(artifact) for artifact in data.get("artifacts", [])
            ],
            properties=dict(data.get("properties") or {}),
        )


@dataclass
class Vcs:
    """Version-control state of a checked out source tree."""

    url: str = ""
    revision: str = ""
    branch: str = ""
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty({
            "url": self.url,
            "revision": self.revision,
            "branch": self.branch,
            "message": self.message,
        })

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Vcs":
        return Vcs(
            url=data.get("url", ""),
            revision=data.get("revision", ""),
            branch=data.get("branch", ""),
            message=data.get("message", ""),
        )


@dataclass
class Tracker:
    """Issue tracker identity."""

    name: str = ""
    version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty({"name": self.name, "version": self.version})

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Tracker":
        return Tracker(name=data.get("name", ""), version=data.get("version", ""))


@dataclass
class AffectedIssue:
    """An issue referenced by commits of the build."""

    key: str
    url: str = ""
    summary: str = ""
    aggregated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_empty({"key": self.key, "url": self.url, "summary": self.summary})
        if self.aggregated:
            data["aggregated"] = True
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AffectedIssue":
        return AffectedIssue(
            key=data["key"],
            url=data.get("url", ""),
            summary=data.get("summary", ""),
            aggregated=bool(data.get("aggregated", False)),
        )


@dataclass
class Issues:
    """Issue-tracker section of a build-info document."""

    tracker: Optional[Tracker] = None
    aggregate_build_issues: bool = False
    aggregation_build_status: str = ""
    affected_issues: List[AffectedIssue] = field(default_factory=list)

    def has_tracker(self) -> bool:
        return self.tracker is not None and bool(self.tracker.name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.tracker is not None:
            data["tracker"] = self.tracker.to_dict()
        if self.aggregate_build_issues:
            data["aggregateBuildIssues"] = True
        if self.aggregation_build_status:
            data["aggregationBuildStatus"] = self.aggregation_build_status
        if self.affected_issues:
            data["affectedIssues"] = [issue.to_dict() for issue in self.affected_issues]
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Issues":
        tracker = data.get("tracker")
        return Issues(
            tracker=Tracker.from_dict(tracker) if tracker else None,
            aggregate_build_issues=bool(data.get("aggregateBuildIssues", False)),
            aggregation_build_status=data.get("aggregationBuildStatus", ""),
            affected_issues=[
                AffectedIssue.from_dict(issue)
                for issue in data.get("affectedIssues", [])
            ],
        )


@dataclass
class Agent:
    """Name and version of a tool that produced the document."""

    name: str = ""
    version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty({"name": self.name, "version": self.version})

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Agent":
        return Agent(name=data.get("name", ""), version=data.get("version", ""))


@dataclass
class General:
    """Build-start marker, written once when a build begins."""

    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {"timestamp": format_timestamp(self.timestamp)}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "General":
        return General(timestamp=parse_timestamp(data["timestamp"]))


@dataclass
class BuildInfo:
    """Top-level build-info document."""

    name: str
    number: str
    started: str = ""
    agent: Optional[Agent] = None
    build_agent: Optional[Agent] = None
    principal: str = ""
    url: str = ""
    modules: List[Module] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)
    vcs_list: List[Vcs] = field(default_factory=list)
    issues: Optional[Issues] = None

    def append(self, other: "BuildInfo") -> None:
        """Merge the modules of *other* into this document.

        Modules with the same id are merged; others are appended.
        """
        for new_module in other.modules:
            existing = next(
                (module for module in self.modules if module.id == new_module.id),
                None,
            )
            if existing is None:
                self.modules.append(new_module)
            else:
                merge_modules(new_module, existing)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "number": self.number,
        }
        if self.agent is not None:
            data["agent"] = self.agent.to_dict()
        if self.build_agent is not None:
            data["buildAgent"] = self.build_agent.to_dict()
        data["started"] = self.started
        data["modules"] = [module.to_dict() for module in self.modules]
        data["properties"] = dict(self.properties)
        data["artifactoryPrincipal"] = self.principal
        data["url"] = self.url
        data["vcs"] = [vcs.to_dict() for vcs in self.vcs_list]
        if self.issues is not None:
            data["issues"] = self.issues.to_dict()
        return _drop_empty(data)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "BuildInfo":
        agent = data.get("agent")
        build_agent = data.get("buildAgent")
        issues = data.get("issues")
        return BuildInfo(
            name=data.get("name", ""),
            number=data.get("number", ""),
            started=data.get("started", ""),
            agent=Agent.from_dict(agent) if agent else None,
            build_agent=Agent.from_dict(build_agent) if build_agent else None,
            principal=data.get("artifactoryPrincipal", ""),
            url=data.get("url", ""),
            modules=[Module.from_dict(module) for module in data.get("modules", [])],
            properties=dict(data.get("properties") or {}),
            vcs_list=[Vcs.from_dict(vcs) for vcs in data.get("vcs", [])],
            issues=Issues.from_dict(issues) if issues else None,
        )


# ---------------------------------------------------------------------------
# Module merging (generated build-info documents)
# ---------------------------------------------------------------------------
def merge_modules(source: Module, into: Module) -> None:
    """Merge artifacts and dependencies of *source* into *into*."""
    _merge_artifacts(source.artifacts, into.artifacts)
    _merge_dependencies(source.dependencies, into.dependencies)


def _merge_artifacts(source: List[Artifact], into: List[Artifact]) -> None:
    known = {artifact.sha1 for artifact in into}
    for artifact in source:
        if artifact.sha1 not in known:
            into.append(artifact)
            known.add(artifact.sha1)


def _merge_dependencies(source: List[Dependency], into: List[Dependency]) -> None:
    for dependency in source:
        for index, existing in enumerate(into):
            if existing.id == dependency.id and existing.sha1 == dependency.sha1:
                into[index] = Dependency(
                    id=existing.id,
                    type=existing.type,
                    scopes=_union(existing.scopes, dependency.scopes),
                    checksum=existing.checksum,
                    requested_by=_union(existing.requested_by, dependency.requested_by),
                )
                break
        else:
            into.append(dependency)


def _union(first: List[Any], second: List[Any]) -> List[Any]:
    merged = list(first)
    for item in second:
        if item not in merged:
            merged.append(item)
    return merged
