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

# pylint: disable=too-many-arguments,too-many-positional-arguments

"""AssembleBuildInfo use case implementation."""

import logging

from build_info.common.config import AgentConfig, EnvFilterConfig
from build_info.common.logging_utils import log_secure_info
from build_info.core.buildinfo.entities import Agent, BuildInfo
from build_info.core.buildinfo.exceptions import BuildNotStartedError
from build_info.core.buildinfo.repositories import FragmentRepository
from build_info.core.buildinfo.services import EnvFilter, FragmentMergeService
from build_info.core.buildinfo.value_objects import format_timestamp

from build_info.orchestrator.build.commands.assemble_build_info import (
    AssembleBuildInfoCommand,
)
from build_info.orchestrator.build.dtos import AssembleBuildInfoResult

logger = logging.getLogger(__name__)


class AssembleBuildInfoUseCase:
    """Use case for synthesizing the build-info document of a build.

    Orchestrates:
    1. Build-start guard (the marker must exist)
    2. Merging every partial into modules, env, VCS and issues
    3. Environment filtering
    4. Merging generated build-info documents
    5. Stamping agent, principal and url
    """

    def __init__(
        self,
        fragment_repo: FragmentRepository,
        merge_service: FragmentMergeService,
        env_filter: EnvFilter,
        agent_config: AgentConfig,
        env_config: EnvFilterConfig,
    ) -> None:
        self._fragment_repo = fragment_repo
        self._merge_service = merge_service
        self._env_filter = env_filter
        self._agent_config = agent_config
        self._env_config = env_config

    def execute(self, command: AssembleBuildInfoCommand) -> AssembleBuildInfoResult:
        """Assemble the build-info document.

        Raises:
            BuildNotStartedError: If no build-start marker was recorded.
            MalformedFragmentError: If a stored fragment cannot be decoded.
            EnvFilterError: If an include or exclude pattern is invalid.
        """
        coordinates = command.coordinates
        general = self._fragment_repo.get_general(coordinates)
        if general is None:
            log_secure_info(
                "error",
                f"Build {coordinates} has no build-start marker",
                command.correlation_id,
            )
            raise BuildNotStartedError(
                coordinates.name,
                coordinates.number,
                coordinates.project_key,
                correlation_id=command.correlation_id,
            )

        partials = self._fragment_repo.read_partials(coordinates)
        merged = self._merge_service.merge(
            partials, coordinates.name, coordinates.project_key
        )

        build_info = BuildInfo(
            name=coordinates.name,
            number=coordinates.number,
            started=format_timestamp(general.timestamp),
            modules=merged.modules,
            vcs_list=merged.vcs_list,
            issues=merged.issues if merged.issues.has_tracker() else None,
        )
        if merged.env:
            build_info.properties = self._env_filter.apply(
                merged.env,
                self._include_patterns(command),
                self._exclude_patterns(command),
            )

        generated = self._fragment_repo.read_generated(coordinates)
        for document in generated:
            build_info.append(document)

        self._stamp(build_info, command)

        log_secure_info(
            "info",
            f"Assembled build-info for {coordinates}: {len(partials)} partials, "
            f"{len(generated)} generated documents, {len(build_info.modules)} modules",
            command.correlation_id,
        )
        return AssembleBuildInfoResult(
            build_info=build_info,
            document=build_info.to_dict(),
            partial_count=len(partials),
            module_count=len(build_info.modules),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _include_patterns(self, command: AssembleBuildInfoCommand):
        if command.include_env is not None:
            return list(command.include_env)
        return list(self._env_config.include)

    def _exclude_patterns(self, command: AssembleBuildInfoCommand):
        if command.exclude_env is not None:
            return list(command.exclude_env)
        return list(self._env_config.exclude)

    def _stamp(self, build_info: BuildInfo, command: AssembleBuildInfoCommand) -> None:
        agent = self._agent_config
        build_info.agent = Agent(name=agent.name, version=agent.version)
        build_info.build_agent = Agent(
            name=agent.build_agent_name or "GENERIC",
            version=agent.build_agent_version,
        )
        build_info.principal = command.principal
        build_info.url = command.url
