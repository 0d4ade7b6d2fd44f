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

"""Use cases that record artifacts, env, VCS and generated documents."""

import logging

from build_info.common.logging_utils import log_secure_info
from build_info.core.buildinfo.repositories import FragmentRepository

from build_info.orchestrator.build.commands.record_fragment import (
    RecordFragmentCommand,
    SaveGeneratedBuildInfoCommand,
)
from build_info.orchestrator.build.dtos import RecordFragmentResult

logger = logging.getLogger(__name__)


class RecordFragmentUseCase:
    """Saves one partial per command as a new, immutable fragment."""

    def __init__(self, fragment_repo: FragmentRepository) -> None:
        self._fragment_repo = fragment_repo

    def execute(self, command: RecordFragmentCommand) -> RecordFragmentResult:
        """Persist the partial described by *command*.

        Raises:
            FragmentStoreError: If the fragment cannot be written.
        """
        partial = command.to_partial()
        location = self._fragment_repo.save_partial(command.coordinates, partial)
        log_secure_info(
            "info",
            f"Recorded {type(partial.payload).__name__} for build {command.coordinates}",
            command.correlation_id,
        )
        return RecordFragmentResult(build=str(command.coordinates), location=location)


class SaveGeneratedBuildInfoUseCase:
    """Keeps a complete build-info document for merging at assembly time."""

    def __init__(self, fragment_repo: FragmentRepository) -> None:
        self._fragment_repo = fragment_repo

    def execute(self, command: SaveGeneratedBuildInfoCommand) -> RecordFragmentResult:
        location = self._fragment_repo.save_generated(
            command.coordinates, command.build_info
        )
        logger.info(
            "Saved generated build-info with %d modules for build %s",
            len(command.build_info.modules),
            command.coordinates,
        )
        return RecordFragmentResult(build=str(command.coordinates), location=location)
