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

"""AssembleBuildInfo command DTO."""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

from build_info.core.buildinfo.value_objects import BuildCoordinates


@dataclass(frozen=True)
class AssembleBuildInfoCommand:
    """Command to synthesize the build-info document of a build.

    Attributes:
        coordinates: Build identity.
        principal: Publishing user, stamped on the document only.
        url: Build url, stamped on the document only.
        include_env: Include patterns; configured defaults when None.
        exclude_env: Exclude patterns; configured defaults when None.
        correlation_id: Request correlation identifier for tracing.
    """

    coordinates: BuildCoordinates
    principal: str = ""
    url: str = ""
    include_env: Optional[Tuple[str, ...]] = None
    exclude_env: Optional[Tuple[str, ...]] = None
    correlation_id: str = ""

    URL_MAX_LENGTH: ClassVar[int] = 4096

    def __post_init__(self) -> None:
        """Validate command fields."""
        if len(self.url) > self.URL_MAX_LENGTH:
            raise ValueError(
                f"url must be <= {self.URL_MAX_LENGTH} chars, got {len(self.url)}"
            )
