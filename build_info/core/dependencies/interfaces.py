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

"""Ports used by the dependency graph domain.

These define the contracts that infrastructure implementations must satisfy.
"""

from pathlib import Path
from typing import Protocol

from build_info.core.buildinfo.value_objects import Checksum

from .value_objects import CacheEntry


class PackageCacheResolver(Protocol):
    """Port for locating a package file in a tool's local cache."""

    def resolve(
        self,
        cache_root: Path,
        name: str,
        version: str,
        integrity: str = "",
    ) -> CacheEntry:
        """Find the cached file of ``name`` at ``version``.

        Implementations probe at least two candidate locations before
        reporting the package as missing.

        Args:
            cache_root: Root of the tool's package cache.
            name: Package name as reported by the tool.
            version: Resolved version.
            integrity: Optional SRI string for content-addressed caches.

        Returns:
            CacheEntry with ``found=False`` when no candidate exists.
            Missing packages are not an error.
        """
        ...


class ChecksumCalculator(Protocol):
    """Port for computing the content digests of a file."""

    def calculate(self, path: Path) -> Checksum:
        """Return md5, sha1 and sha256 of the file at *path*.

        Raises:
            OSError: If the file cannot be read.
        """
        ...
