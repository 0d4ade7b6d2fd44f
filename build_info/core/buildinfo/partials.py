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

"""Partial build-info fragments.

A partial is written once per tool invocation and carries exactly one
payload variant. The variants form a closed union; consumers dispatch on
the payload class and treat anything else as a programming error.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from jsonschema import validate

from build_info.core.buildinfo.entities import Artifact, Dependency, Issues, Vcs
from build_info.core.buildinfo.value_objects import Checksum, ModuleType


@dataclass(frozen=True)
class ArtifactsPayload:
    """Artifacts produced by one invocation."""

    artifacts: Tuple[Artifact, ...]


@dataclass(frozen=True)
class DependenciesPayload:
    """Dependencies collected by one invocation."""

    dependencies: Tuple[Dependency, ...]


@dataclass(frozen=True)
class EnvPayload:
    """Collected environment variables."""

    env: Dict[str, str]


@dataclass(frozen=True)
class VcsPayload:
    """VCS state and, optionally, issue-tracker data."""

    vcs_list: Tuple[Vcs, ...]
    issues: Optional[Issues] = None


@dataclass(frozen=True)
class ChecksumPayload:
    """Checksum of a referenced build-info document (build modules)."""

    checksum: Checksum


Payload = Union[
    ArtifactsPayload, DependenciesPayload, EnvPayload, VcsPayload, ChecksumPayload
]

_CHECKSUM_SCHEMA = {
    "type": "object",
    "properties": {
        "sha1": {"type": "string"},
        "md5": {"type": "string"},
        "sha256": {"type": "string"},
    },
}

PARTIAL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["timestamp"],
    "properties": {
        "moduleId": {"type": "string"},
        "moduleType": {"type": "string", "enum": [kind.value for kind in ModuleType]},
        "timestamp": {"type": "integer", "minimum": 0},
        "artifacts": {
            "type": "array",
            "items": {"type": "object", "required": ["name"]},
        },
        "dependencies": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string"},
                    "scopes": {"type": "array", "items": {"type": "string"}},
                    "requestedBy": {
                        "type": "array",
                        "items": {"type": "array", "items": {"type": "string"}},
                    },
                },
            },
        },
        "env": {"type": "object", "additionalProperties": {"type": "string"}},
        "vcsList": {"type": "array", "items": {"type": "object"}},
        "issues": {"type": "object"},
        "checksum": _CHECKSUM_SCHEMA,
    },
}

_PAYLOAD_KEYS = ("artifacts", "dependencies", "env", "vcsList", "checksum")


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Partial:
    """One immutable build-info fragment.

    Attributes:
        module_id: Module the fragment belongs to (may be empty).
        module_type: Kind of module.
        payload: The single payload variant, or None when the stored
            document carried no recognized payload.
        timestamp: Creation time in epoch milliseconds.
    """

    module_id: str
    module_type: ModuleType
    payload: Optional[Payload]
    timestamp: int = field(default_factory=now_millis)

    def __post_init__(self) -> None:
        if self.timestamp < 0:
            raise ValueError(f"Partial timestamp must be non-negative, got {self.timestamp}")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "moduleId": self.module_id,
            "moduleType": self.module_type.value,
            "timestamp": self.timestamp,
        }
        payload = self.payload
        if payload is None:
            return data
        if isinstance(payload, ArtifactsPayload):
            data["artifacts"] = [artifact.to_dict() for artifact in payload.artifacts]
        elif isinstance(payload, DependenciesPayload):
            data["dependencies"] = [dep.to_dict() for dep in payload.dependencies]
        elif isinstance(payload, EnvPayload):
            data["env"] = dict(payload.env)
        elif isinstance(payload, VcsPayload):
            data["vcsList"] = [vcs.to_dict() for vcs in payload.vcs_list]
            if payload.issues is not None:
                data["issues"] = payload.issues.to_dict()
        elif isinstance(payload, ChecksumPayload):
            data["checksum"] = payload.checksum.to_dict()
        else:
            raise TypeError(f"Unknown partial payload: {type(payload).__name__}")
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Partial":
        """Validate and decode a stored fragment.

        Raises:
            jsonschema.ValidationError: If the document violates the schema.
            ValueError: If more than one payload is present.
        """
        validate(instance=data, schema=PARTIAL_SCHEMA)
        present = [key for key in _PAYLOAD_KEYS if key in data]
        if len(present) > 1:
            raise ValueError(f"Partial carries more than one payload: {present}")

        payload: Optional[Payload] = None
        if "artifacts" in data:
            payload = ArtifactsPayload(
                tuple(Artifact.from_dict(item) for item in data["artifacts"])
            )
        elif "dependencies" in data:
            payload = DependenciesPayload(
                tuple(Dependency.from_dict(item) for item in data["dependencies"])
            )
        elif "env" in data:
            payload = EnvPayload(dict(data["env"]))
        elif "vcsList" in data:
            issues = data.get("issues")
            payload = VcsPayload(
                vcs_list=tuple(Vcs.from_dict(item) for item in data["vcsList"]),
                issues=Issues.from_dict(issues) if issues else None,
            )
        elif "checksum" in data:
            checksum = Checksum.from_dict(data["checksum"])
            if checksum is not None:
                payload = ChecksumPayload(checksum)

        return Partial(
            module_id=data.get("moduleId", ""),
            module_type=ModuleType(data.get("moduleType", ModuleType.GENERIC.value)),
            payload=payload,
            timestamp=data["timestamp"],
        )
