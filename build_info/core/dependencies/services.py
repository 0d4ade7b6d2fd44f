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

"""Domain services for dependency collection."""

import logging
from typing import List

from build_info.core.buildinfo.entities import Dependency
from build_info.core.dependencies.propagator import RequestedByPropagator
from build_info.core.dependencies.value_objects import ResolvedGraph

logger = logging.getLogger(__name__)


class DependencyCollectionService:
    """Turns a resolved graph into the dependency list of one module."""

    def __init__(self, propagator: RequestedByPropagator) -> None:
        """Initialize dependency collection service.

        Args:
            propagator: Requested-by propagator to run over the graph.
        """
        self._propagator = propagator

    def collect(self, graph: ResolvedGraph) -> List[Dependency]:
        """Propagate requested-by paths and return the module's dependencies.

        Args:
            graph: Resolved graph; its root is the module itself.

        Returns:
            Dependencies other than the root, sorted by id. Packages that
            are not reachable from the root keep an empty requested-by list.
        """
        propagated = self._propagator.propagate(graph.root, graph.nodes, graph.adjacency)
        dependencies = [
            dependency
            for dependency_id, dependency in sorted(propagated.items())
            if dependency_id != graph.root.id
        ]
        looped = sum(1 for dependency in dependencies if dependency.has_loop())
        logger.info(
            "Collected %d dependencies for %s (%d with loops)",
            len(dependencies),
            graph.root.id,
            looped,
        )
        return dependencies
