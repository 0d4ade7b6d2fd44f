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

"""StartBuild and CleanBuild command DTOs."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from build_info.core.buildinfo.value_objects import BuildCoordinates


@dataclass(frozen=True)
class StartBuildCommand:
    """Command to record the start of a build.

    Attributes:
        coordinates: Build identity.
        started: Start time; defaults to now when omitted.
        correlation_id: Request correlation identifier for tracing.
    """

    coordinates: BuildCoordinates
    started: Optional[datetime] = None
    correlation_id: str = ""


@dataclass(frozen=True)
class CleanBuildCommand:
    """Command to remove everything recorded for a build."""

    coordinates: BuildCoordinates
    correlation_id: str = ""
