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

"""Dependency graph domain module."""

from .value_objects import (
    CacheEntry,
    DependencyGraph,
    DependencyTool,
    PackageRef,
    RequestedByLimits,
    ResolvedGraph,
)
from .locators import (
    dependency_id,
    go_mod_decode,
    go_mod_encode,
    normalize_virtual_locator,
    split_dependency_id,
)
from .interfaces import ChecksumCalculator, PackageCacheResolver
from .propagator import RequestedByPropagator
from .builders import (
    DependencyGraphBuilder,
    parse_cargo_tree,
    parse_go_mod_graph,
    parse_npm_ls,
    parse_pipdeptree,
    parse_yarn_info,
)
from .services import DependencyCollectionService

__all__ = [
    "CacheEntry",
    "DependencyGraph",
    "DependencyTool",
    "PackageRef",
    "RequestedByLimits",
    "ResolvedGraph",
    "dependency_id",
    "go_mod_decode",
    "go_mod_encode",
    "normalize_virtual_locator",
    "split_dependency_id",
    "ChecksumCalculator",
    "PackageCacheResolver",
    "RequestedByPropagator",
    "DependencyGraphBuilder",
    "parse_cargo_tree",
    "parse_go_mod_graph",
    "parse_npm_ls",
    "parse_pipdeptree",
    "parse_yarn_info",
    "DependencyCollectionService",
]
