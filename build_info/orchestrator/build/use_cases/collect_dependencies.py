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

"""CollectDependencies use case implementation."""

import json
import logging
from typing import Mapping, Optional

from build_info.common.logging_utils import log_secure_info
from build_info.core.buildinfo.exceptions import GraphParseError
from build_info.core.buildinfo.partials import DependenciesPayload, Partial
from build_info.core.buildinfo.repositories import FragmentRepository
from build_info.core.dependencies.builders import (
    DependencyGraphBuilder,
    parse_cargo_tree,
    parse_go_mod_graph,
    parse_npm_ls,
    parse_pipdeptree,
    parse_yarn_info,
)
from build_info.core.dependencies.interfaces import (
    ChecksumCalculator,
    PackageCacheResolver,
)
from build_info.core.dependencies.services import DependencyCollectionService
from build_info.core.dependencies.value_objects import (
    DependencyGraph,
    DependencyTool,
)

from build_info.orchestrator.build.commands.collect_dependencies import (
    CollectDependenciesCommand,
)
from build_info.orchestrator.build.dtos import CollectDependenciesResult

logger = logging.getLogger(__name__)


class CollectDependenciesUseCase:
    """Use case for turning tool output into a dependencies partial.

    Orchestrates:
    1. Parsing the tool output into a dependency graph
    2. Checksum resolution against the package cache, when one is given
    3. Requested-by propagation over the resolved graph
    4. Persisting the dependencies as a new partial
    """

    def __init__(
        self,
        fragment_repo: FragmentRepository,
        collection_service: DependencyCollectionService,
        checksum_calculator: ChecksumCalculator,
        resolvers: Mapping[DependencyTool, PackageCacheResolver],
    ) -> None:
        self._fragment_repo = fragment_repo
        self._collection_service = collection_service
        self._checksum_calculator = checksum_calculator
        self._resolvers = dict(resolvers)

    def execute(self, command: CollectDependenciesCommand) -> CollectDependenciesResult:
        """Collect the dependencies of one module.

        Raises:
            GraphParseError: If the tool output cannot be parsed.
            FragmentStoreError: If the partial cannot be written.
        """
        graph = self._parse(command)
        builder = DependencyGraphBuilder(
            resolver=self._resolver_for(command),
            checksum_calculator=self._checksum_calculator,
            cache_root=command.cache_root,
        )
        resolved = builder.build(
            graph,
            command.tool.dependency_type,
            scopes=list(command.scopes),
        )
        dependencies = self._collection_service.collect(resolved)

        module_id = command.module_id or graph.root_id
        location = self._fragment_repo.save_partial(
            command.coordinates,
            Partial(
                module_id=module_id,
                module_type=command.tool.module_type,
                payload=DependenciesPayload(tuple(dependencies)),
            ),
        )

        unresolved = len(graph.packages) - len(resolved.nodes)
        if graph.root_id in graph.packages:
            unresolved -= 1
        looped = sum(1 for dependency in dependencies if dependency.has_loop())

        log_secure_info(
            "info",
            f"Collected {len(dependencies)} {command.tool.value} dependencies "
            f"for module {module_id} ({unresolved} unresolved)",
            command.correlation_id,
        )
        return CollectDependenciesResult(
            module_id=module_id,
            dependency_count=len(dependencies),
            unresolved_count=unresolved,
            looped_count=looped,
            location=location,
        )

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def _parse(self, command: CollectDependenciesCommand) -> DependencyGraph:
        tool = command.tool
        if tool == DependencyTool.GO:
            return parse_go_mod_graph(command.output)
        if tool == DependencyTool.CARGO:
            return parse_cargo_tree(command.output)
        if tool == DependencyTool.YARN:
            return parse_yarn_info(command.output, command.package_name)
        if tool == DependencyTool.NPM:
            return parse_npm_ls(self._load_json(tool, command.output))
        if tool == DependencyTool.PIP:
            return parse_pipdeptree(
                self._load_json(tool, command.output),
                command.module_id or command.coordinates.name,
            )
        raise ValueError(f"Unsupported dependency tool: {tool}")

    @staticmethod
    def _load_json(tool: DependencyTool, output: str):
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            logger.error("Invalid %s JSON output", tool.value)
            raise GraphParseError(tool.value, output[:200], str(exc)) from exc

    def _resolver_for(
        self, command: CollectDependenciesCommand
    ) -> Optional[PackageCacheResolver]:
        if command.cache_root is None:
            return None
        resolver = self._resolvers.get(command.tool)
        if resolver is None:
            logger.warning(
                "No package cache resolver for %s, recording dependencies "
                "without checksums",
                command.tool.value,
            )
        return resolver

