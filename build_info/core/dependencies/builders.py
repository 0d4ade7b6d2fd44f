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

"""Dependency graph builders.

Each ``parse_*`` function turns the captured output of one build tool
into a :class:`DependencyGraph` keyed by canonical ``name:version`` ids.
:class:`DependencyGraphBuilder` then attaches checksums from the local
package cache, producing the :class:`ResolvedGraph` consumed by the
requested-by propagator.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from build_info.core.buildinfo.entities import Dependency
from build_info.core.buildinfo.exceptions import GraphParseError
from build_info.core.dependencies.interfaces import (
    ChecksumCalculator,
    PackageCacheResolver,
)
from build_info.core.dependencies.locators import (
    dependency_id,
    normalize_virtual_locator,
    yarn_locator_version,
    yarn_package_name,
)
from build_info.core.dependencies.value_objects import (
    DependencyGraph,
    PackageRef,
    ResolvedGraph,
)

logger = logging.getLogger(__name__)

CARGO_LINE_PATTERN = re.compile(r"^([0-9]+)(\S+) v(\S+)( \(.*\))?$")
YARN_WORKSPACE_MARKER = "@workspace:"


# ---------------------------------------------------------------------------
# Go modules
# ---------------------------------------------------------------------------
def _go_package(token: str) -> PackageRef:
    name, _, version = token.replace("@v", ":", 1).partition(":")
    return PackageRef(id=dependency_id(name, version), name=name, version=version)


def parse_go_mod_graph(output: str) -> DependencyGraph:
    """Parse ``go mod graph`` output.

    Each line reads ``parent@vX child@vY``; the main module is the only
    parent without a version. Edges to ``go``/``toolchain`` pseudo
    modules are ignored.

    Raises:
        GraphParseError: If a line does not hold exactly two tokens or the
            main module cannot be found.
    """
    edges: List[Tuple[str, PackageRef]] = []
    root_id = ""
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        tokens = line.split()
        if len(tokens) != 2:
            raise GraphParseError("go", line, "expected 'parent child'")
        parent, child = tokens
        if "@v" not in child:
            continue
        if "@v" in parent:
            parent_id = _go_package(parent).id
        else:
            parent_id = parent
            root_id = root_id or parent
        edges.append((parent_id, _go_package(child)))

    if not root_id:
        raise GraphParseError("go", output[:200], "main module not found")

    graph = DependencyGraph(root_id=root_id)
    for parent_id, child in edges:
        graph.add_edge(parent_id, child)
    return graph


# ---------------------------------------------------------------------------
# Cargo
# ---------------------------------------------------------------------------
def parse_cargo_tree(output: str) -> DependencyGraph:
    """Parse ``cargo tree --prefix depth`` output.

    Lines read ``{depth}{name} v{version}( (...))?``. An explicit stack
    holds the ancestors of the current line: entries at the same or a
    deeper level are popped, so the parent is always the most recent
    node seen at a shallower depth. Lines that do not match the pattern
    (section headers, blank lines) are skipped.

    Raises:
        GraphParseError: If the first package line is not at depth 0.
    """
    graph: Optional[DependencyGraph] = None
    ancestors: List[Tuple[int, str]] = []

    for line in output.splitlines():
        match = CARGO_LINE_PATTERN.match(line.strip())
        if match is None:
            if line.strip():
                logger.debug("Skipping cargo tree line: %s", line)
            continue
        depth = int(match.group(1))
        package = PackageRef(
            id=dependency_id(match.group(2), match.group(3)),
            name=match.group(2),
            version=match.group(3),
        )

        if depth == 0:
            if graph is None:
                graph = DependencyGraph(root_id=package.id)
            ancestors = [(0, package.id)]
            continue
        if graph is None:
            raise GraphParseError("cargo", line, "tree does not start at depth 0")

        while ancestors and ancestors[-1][0] >= depth:
            ancestors.pop()
        if not ancestors:
            raise GraphParseError("cargo", line, "no ancestor at a shallower depth")
        graph.add_edge(ancestors[-1][1], package)
        ancestors.append((depth, package.id))

    if graph is None:
        raise GraphParseError("cargo", output[:200], "no packages found")
    return graph


# ---------------------------------------------------------------------------
# Yarn
# ---------------------------------------------------------------------------
def _yarn_entries(lines: Union[str, Iterable[str]]) -> List[Dict[str, Any]]:
    if isinstance(lines, str):
        lines = lines.splitlines()
    entries = []
    for line in lines:
        if not line.strip():
            continue
        try:
            entries.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise GraphParseError("yarn", line, str(exc)) from exc
    return entries


def parse_yarn_info(
    lines: Union[str, Iterable[str]],
    package_name: str = "",
) -> DependencyGraph:
    """Parse ``yarn info --all --recursive --json`` output (one JSON per line).

    Every locator is normalized with :func:`normalize_virtual_locator`
    before it is used as a key. The root is the entry whose value starts
    with ``<package_name>@``, or the workspace entry when no name is given.

    Raises:
        GraphParseError: If a line is not JSON or no root entry exists.
    """
    entries = _yarn_entries(lines)
    ids_by_locator: Dict[str, PackageRef] = {}
    root_locator = ""

    for entry in entries:
        value = entry.get("value", "")
        locator = normalize_virtual_locator(value)
        name = yarn_package_name(locator)
        version = (entry.get("children") or {}).get("Version") or yarn_locator_version(locator)
        ids_by_locator[locator] = PackageRef(
            id=dependency_id(name, version), name=name, version=version
        )
        if package_name:
            if value.startswith(package_name + "@") and not root_locator:
                root_locator = locator
        elif YARN_WORKSPACE_MARKER in value and not root_locator:
            root_locator = locator

    if not root_locator:
        raise GraphParseError("yarn", package_name or "<workspace>", "root package not found")

    graph = DependencyGraph(root_id=ids_by_locator[root_locator].id)
    for entry in entries:
        parent = ids_by_locator[normalize_virtual_locator(entry.get("value", ""))]
        for child in (entry.get("children") or {}).get("Dependencies") or []:
            child_locator = normalize_virtual_locator(child.get("locator", ""))
            package = ids_by_locator.get(child_locator)
            if package is None:
                name = yarn_package_name(child_locator)
                version = yarn_locator_version(child_locator)
                package = PackageRef(
                    id=dependency_id(name, version), name=name, version=version
                )
            graph.add_edge(parent.id, package)
    return graph


# ---------------------------------------------------------------------------
# npm
# ---------------------------------------------------------------------------
def parse_npm_ls(document: Dict[str, Any]) -> DependencyGraph:
    """Parse ``npm ls --json --all`` output.

    Entries without a resolved version (missing or unmet peers) are
    skipped along with their subtree.

    Raises:
        GraphParseError: If the document has no root name.
    """
    name = document.get("name")
    if not name:
        raise GraphParseError("npm", json.dumps(document)[:200], "root name missing")
    graph = DependencyGraph(root_id=dependency_id(name, document.get("version", "")))
    _walk_npm(graph, graph.root_id, document.get("dependencies") or {})
    return graph


def _walk_npm(graph: DependencyGraph, parent_id: str, children: Dict[str, Any]) -> None:
    for child_name, details in children.items():
        version = details.get("version")
        if not version:
            logger.debug("Skipping npm dependency without version: %s", child_name)
            continue
        package = PackageRef(
            id=dependency_id(child_name, version),
            name=child_name,
            version=version,
            integrity=details.get("integrity", ""),
        )
        graph.add_edge(parent_id, package)
        _walk_npm(graph, package.id, details.get("dependencies") or {})


# ---------------------------------------------------------------------------
# pip
# ---------------------------------------------------------------------------
def parse_pipdeptree(document: List[Dict[str, Any]], root_id: str) -> DependencyGraph:
    """Parse ``pipdeptree --json`` output.

    pipdeptree has no project node, so packages that are nobody's child
    hang directly from *root_id*.

    Raises:
        GraphParseError: If an entry lacks its package key or version.
    """
    graph = DependencyGraph(root_id=root_id)
    children_ids = set()
    top_level: List[PackageRef] = []

    for entry in document:
        package = _pip_package(entry.get("package") or {})
        top_level.append(package)
        for child in entry.get("dependencies") or []:
            child_package = _pip_package(child)
            children_ids.add(child_package.id)
            graph.add_edge(package.id, child_package)

    for package in top_level:
        if package.id not in children_ids:
            graph.add_edge(root_id, package)
    return graph


def _pip_package(data: Dict[str, Any]) -> PackageRef:
    key = data.get("key")
    version = data.get("installed_version")
    if not key or not version:
        raise GraphParseError("pip", json.dumps(data), "package key or version missing")
    return PackageRef(id=dependency_id(key, version), name=key, version=version)


# ---------------------------------------------------------------------------
# Checksum resolution
# ---------------------------------------------------------------------------
class DependencyGraphBuilder:
    """Attaches checksums to the packages of a parsed graph.

    Packages that cannot be found in the cache are left out of the node
    map while their edges stay in the adjacency map.
    """

    def __init__(
        self,
        resolver: Optional[PackageCacheResolver],
        checksum_calculator: ChecksumCalculator,
        cache_root: Optional[Path] = None,
    ) -> None:
        """Initialize the builder.

        Args:
            resolver: Cache resolver; None keeps every package without checksums.
            checksum_calculator: Computes digests of resolved files.
            cache_root: Root of the tool's package cache.
        """
        self._resolver = resolver
        self._checksum_calculator = checksum_calculator
        self._cache_root = cache_root

    def build(
        self,
        graph: DependencyGraph,
        dependency_type: str,
        scopes: Optional[List[str]] = None,
    ) -> ResolvedGraph:
        """Resolve every package of *graph*.

        Raises:
            OSError: If a resolved package file cannot be read.
        """
        nodes: Dict[str, Dependency] = {}
        for package_id, package in sorted(graph.packages.items()):
            if package_id == graph.root_id:
                continue
            checksum = None
            if self._resolver is not None:
                entry = self._resolver.resolve(
                    self._cache_root or Path(),
                    package.name,
                    package.version,
                    package.integrity,
                )
                if not entry.found or entry.path is None:
                    logger.debug("Package not found in cache, skipping: %s", package_id)
                    continue
                checksum = self._checksum_calculator.calculate(entry.path)
            nodes[package_id] = Dependency(
                id=package_id,
                type=dependency_type,
                scopes=list(scopes or []),
                checksum=checksum,
            )
        return ResolvedGraph(
            root=Dependency(id=graph.root_id, requested_by=[[]]),
            adjacency={parent: list(children) for parent, children in graph.adjacency.items()},
            nodes=nodes,
        )
