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

"""Value objects for the dependency graph domain."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, List, Optional

from build_info.core.buildinfo.entities import Dependency
from build_info.core.buildinfo.value_objects import ModuleType


class DependencyTool(str, Enum):
    """Build tools whose dependency output can be parsed."""

    GO = "go"
    CARGO = "cargo"
    YARN = "yarn"
    NPM = "npm"
    PIP = "pip"

    @property
    def module_type(self) -> ModuleType:
        """Module type recorded for modules built with this tool."""
        return _MODULE_TYPES[self]

    @property
    def dependency_type(self) -> str:
        """Type tag of the package files this tool downloads."""
        return _DEPENDENCY_TYPES[self]


_MODULE_TYPES = {
    DependencyTool.GO: ModuleType.GO,
    DependencyTool.CARGO: ModuleType.CARGO,
    DependencyTool.YARN: ModuleType.NPM,
    DependencyTool.NPM: ModuleType.NPM,
    DependencyTool.PIP: ModuleType.PYTHON,
}

_DEPENDENCY_TYPES = {
    DependencyTool.GO: "zip",
    DependencyTool.CARGO: "cargo",
    DependencyTool.YARN: "npm",
    DependencyTool.NPM: "tgz",
    DependencyTool.PIP: "",
}


@dataclass(frozen=True)
class PackageRef:
    """A package as reported by a build tool, before checksum resolution.

    Attributes:
        id: Canonical ``name:version`` id.
        name: Package name as the tool reports it.
        version: Resolved version.
        integrity: Optional SRI string (npm) used to locate the package file.
    """

    id: str
    name: str
    version: str
    integrity: str = ""


@dataclass
class DependencyGraph:
    """Raw adjacency parsed from tool output, keyed by canonical id.

    Attributes:
        root_id: Id of the module the graph hangs from.
        adjacency: Parent id to ordered, de-duplicated child ids.
        packages: Every non-root package seen in the output.
    """

    root_id: str
    adjacency: Dict[str, List[str]] = field(default_factory=dict)
    packages: Dict[str, PackageRef] = field(default_factory=dict)

    def add_edge(self, parent_id: str, child: PackageRef) -> None:
        """Record ``parent -> child`` once."""
        self.packages.setdefault(child.id, child)
        children = self.adjacency.setdefault(parent_id, [])
        if child.id not in children:
            children.append(child.id)


@dataclass
class ResolvedGraph:
    """Graph ready for requested-by propagation.

    Only packages whose checksums were resolved appear in ``nodes``;
    ``adjacency`` keeps edges to unresolved packages.
    """

    root: Dependency
    adjacency: Dict[str, List[str]]
    nodes: Dict[str, Dependency]


@dataclass(frozen=True)
class CacheEntry:
    """Result of looking a package up in a local package cache."""

    path: Optional[Path]
    found: bool

    @classmethod
    def missing(cls) -> "CacheEntry":
        return cls(path=None, found=False)


@dataclass(frozen=True)
class RequestedByLimits:
    """Bounds applied while propagating requested-by paths.

    Attributes:
        max_paths: Most paths kept per dependency.
        max_path_length: Longest path kept (number of ids).

    Raises:
        ValueError: If a bound is not positive or exceeds its ceiling.
    """

    max_paths: int = 15
    max_path_length: int = 50

    MAX_PATHS_CEILING: ClassVar[int] = 10000
    MAX_PATH_LENGTH_CEILING: ClassVar[int] = 10000

    def __post_init__(self) -> None:
        """Validate limits."""
        if not 1 <= self.max_paths <= self.MAX_PATHS_CEILING:
            raise ValueError(
                f"max_paths must be between 1 and {self.MAX_PATHS_CEILING}, "
                f"got {self.max_paths}"
            )
        if not 1 <= self.max_path_length <= self.MAX_PATH_LENGTH_CEILING:
            raise ValueError(
                f"max_path_length must be between 1 and "
                f"{self.MAX_PATH_LENGTH_CEILING}, got {self.max_path_length}"
            )
