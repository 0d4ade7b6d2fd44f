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

"""CollectDependencies command DTO."""

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Tuple

from build_info.core.buildinfo.value_objects import BuildCoordinates
from build_info.core.dependencies.value_objects import DependencyTool


@dataclass(frozen=True)
class CollectDependenciesCommand:
    """Command to turn captured tool output into a dependencies partial.

    Attributes:
        coordinates: Build identity.
        tool: Tool that produced *output*.
        output: Captured stdout of the tool's dependency command.
        module_id: Module id; defaults to the graph root.
        cache_root: Package cache to resolve checksums from; when None,
            dependencies are recorded without checksums.
        package_name: Yarn root package name (workspace root when empty).
        scopes: Scopes stamped on every collected dependency.
        correlation_id: Request correlation identifier for tracing.
    """

    coordinates: BuildCoordinates
    tool: DependencyTool
    output: str
    module_id: str = ""
    cache_root: Optional[Path] = None
    package_name: str = ""
    scopes: Tuple[str, ...] = ()
    correlation_id: str = ""

    MAX_OUTPUT_SIZE: ClassVar[int] = 64 * 1024 * 1024  # 64 MB

    def __post_init__(self) -> None:
        """Validate command fields."""
        if not self.output or not self.output.strip():
            raise ValueError("output cannot be empty")
        if len(self.output) > self.MAX_OUTPUT_SIZE:
            raise ValueError(
                f"output size {len(self.output)} exceeds maximum "
                f"{self.MAX_OUTPUT_SIZE}"
            )
