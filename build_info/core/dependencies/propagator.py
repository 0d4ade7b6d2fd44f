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

"""Requested-by propagation over a resolved dependency graph.

Starting from the module root, every reachable dependency receives the
list of distinct paths that lead back to the root, nearest parent first
and root id last. The traversal is depth first and driven by an explicit
stack, so deep graphs do not hit the interpreter recursion limit.

Rules applied when a parent hands its paths to a child:

* a child that already has a loop, or already holds ``max_paths``
  paths, is left alone;
* the child's paths that start with the parent are replaced by
  ``[parent] + p`` for every path ``p`` of the parent;
* identical paths are kept once, paths longer than ``max_path_length``
  are dropped and at most ``max_paths`` paths are kept;
* a child whose id shows up on one of its own paths has a loop;
* the child's own children are visited only when its paths changed.

A node that just acquired a loop is still visited once, which is how
every member of a cycle ends up flagged.
"""

import dataclasses
import logging
from typing import (
    Dict,
    FrozenSet,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
)

from build_info.core.buildinfo.entities import Dependency
from build_info.core.dependencies.value_objects import RequestedByLimits

logger = logging.getLogger(__name__)

IdPath = Tuple[str, ...]


class RequestedByPropagator:
    """Computes requested-by paths for the nodes of a dependency graph."""

    def __init__(self, limits: Optional[RequestedByLimits] = None) -> None:
        self._limits = limits or RequestedByLimits()

    @property
    def limits(self) -> RequestedByLimits:
        return self._limits

    def propagate(
        self,
        root: Dependency,
        nodes: Mapping[str, Dependency],
        adjacency: Mapping[str, Sequence[str]],
    ) -> Dict[str, Dependency]:
        """Propagate requested-by paths from *root* through *adjacency*.

        The inputs are not modified.

        Args:
            root: Module root. An empty ``requested_by`` counts as one
                empty path, so direct children receive ``[[root.id]]``.
            nodes: Resolved dependencies by id; children missing here are
                dangling references and are skipped.
            adjacency: Parent id to child ids.

        Returns:
            A copy of *nodes* with ``requested_by`` filled in.
        """
        paths: Dict[str, List[IdPath]] = {
            node_id: [tuple(path) for path in node.requested_by]
            for node_id, node in nodes.items()
        }
        looped: Set[str] = {
            node_id for node_id, node in nodes.items() if node.has_loop()
        }

        if root.has_loop():
            logger.debug("Root %s has a loop, nothing to propagate", root.id)
        else:
            root_paths = [tuple(path) for path in root.requested_by] or [()]
            self._walk(root.id, root_paths, adjacency, paths, looped)

        return {
            node_id: dataclasses.replace(
                node, requested_by=[list(path) for path in paths[node_id]]
            )
            for node_id, node in nodes.items()
        }

    def _walk(
        self,
        root_id: str,
        root_paths: List[IdPath],
        adjacency: Mapping[str, Sequence[str]],
        paths: Dict[str, List[IdPath]],
        looped: Set[str],
    ) -> None:
        # Ids on each path, built once per path and extended for derived paths.
        members: Dict[IdPath, FrozenSet[str]] = {(): frozenset()}
        # Each frame holds the parent's paths as they were when it was entered.
        stack: List[Tuple[str, Tuple[IdPath, ...], Iterator[str]]] = [
            (root_id, tuple(root_paths), iter(adjacency.get(root_id, ())))
        ]
        while stack:
            parent_id, parent_paths, children = stack[-1]
            child_id = next(children, None)
            if child_id is None:
                stack.pop()
                continue
            if child_id not in paths:
                continue
            if child_id in looped or len(paths[child_id]) >= self._limits.max_paths:
                continue

            updated = self._update(child_id, parent_id, parent_paths, paths[child_id])
            if _has_loop(child_id, updated, members):
                looped.add(child_id)
                logger.debug("Dependency %s is its own ancestor", child_id)
            if updated == paths[child_id]:
                continue
            paths[child_id] = updated
            stack.append(
                (child_id, tuple(updated), iter(adjacency.get(child_id, ())))
            )

    def _update(
        self,
        child_id: str,
        parent_id: str,
        parent_paths: Sequence[IdPath],
        current: List[IdPath],
    ) -> List[IdPath]:
        candidates = [path for path in current if not path or path[0] != parent_id]
        candidates.extend((parent_id,) + path for path in parent_paths)

        updated: List[IdPath] = []
        seen: Set[IdPath] = set()
        for path in candidates:
            if len(path) > self._limits.max_path_length or path in seen:
                continue
            seen.add(path)
            updated.append(path)
            if len(updated) >= self._limits.max_paths:
                logger.debug(
                    "Requested-by paths of %s capped at %d",
                    child_id,
                    self._limits.max_paths,
                )
                break
        return updated


def _path_members(path: IdPath, members: Dict[IdPath, FrozenSet[str]]) -> FrozenSet[str]:
    missing = []
    tail = path
    while tail not in members:
        missing.append(tail)
        tail = tail[1:]
    found = members[tail]
    for prefix in reversed(missing):
        found = found | {prefix[0]}
        members[prefix] = found
    return found


def _has_loop(
    node_id: str,
    paths: Sequence[IdPath],
    members: Dict[IdPath, FrozenSet[str]],
) -> bool:
    return any(node_id in _path_members(path, members) for path in paths)
