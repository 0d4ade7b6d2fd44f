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

"""Use cases that open and close the fragment lifecycle of a build."""

import logging
from datetime import datetime, timezone

from build_info.common.logging_utils import log_secure_info
from build_info.core.buildinfo.entities import General
from build_info.core.buildinfo.repositories import FragmentRepository
from build_info.core.buildinfo.value_objects import format_timestamp

from build_info.orchestrator.build.commands.start_build import (
    CleanBuildCommand,
    StartBuildCommand,
)
from build_info.orchestrator.build.dtos import CleanBuildResult, StartBuildResult

logger = logging.getLogger(__name__)


class StartBuildUseCase:
    """Records the build-start marker.

    Starting a build twice keeps the first marker, so the earliest start
    time wins.
    """

    def __init__(self, fragment_repo: FragmentRepository) -> None:
        self._fragment_repo = fragment_repo

    def execute(self, command: StartBuildCommand) -> StartBuildResult:
        """Write the marker if the build has none yet.

        Raises:
            FragmentStoreError: If the marker cannot be written.
        """
        started = command.started or datetime.now(timezone.utc)
        created = self._fragment_repo.save_general(
            command.coordinates, General(timestamp=started)
        )
        if not created:
            existing = self._fragment_repo.get_general(command.coordinates)
            if existing is not None:
                started = existing.timestamp

        log_secure_info(
            "info",
            f"Build {command.coordinates} "
            + ("started" if created else "already started"),
            command.correlation_id,
        )
        return StartBuildResult(
            build=str(command.coordinates),
            started=format_timestamp(started),
            created=created,
        )


class CleanBuildUseCase:
    """Removes every fragment of a build."""

    def __init__(self, fragment_repo: FragmentRepository) -> None:
        self._fragment_repo = fragment_repo

    def execute(self, command: CleanBuildCommand) -> CleanBuildResult:
        removed = self._fragment_repo.clean(command.coordinates)
        if not removed:
            logger.debug("Nothing recorded for build %s", command.coordinates)
        return CleanBuildResult(build=str(command.coordinates), removed=removed)
