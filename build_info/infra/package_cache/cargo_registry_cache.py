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

"""Resolver for ``.crate`` files in the Cargo registry cache."""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from build_info.core.dependencies.value_objects import CacheEntry

logger = logging.getLogger(__name__)

REGISTRY_CACHE_PARTS = ("registry", "cache")


def default_cargo_home(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return ``$CARGO_HOME`` or ``~/.cargo``."""
    environ = os.environ if environ is None else environ
    cargo_home = environ.get("CARGO_HOME")
    return Path(cargo_home) if cargo_home else Path.home() / ".cargo"


class CargoRegistryCacheResolver:
    """Finds ``<name>-<version>.crate`` in the registry caches.

    *cache_root* is the Cargo home. Every registry directory under
    ``registry/cache`` is probed, then the root itself.
    """

    def resolve(
        self,
        cache_root: Path,
        name: str,
        version: str,
        integrity: str = "",
    ) -> CacheEntry:
        file_name = f"{name}-{version}.crate"
        for candidate in self._candidates(cache_root):
            crate_path = candidate / file_name
            if crate_path.is_file():
                return CacheEntry(path=crate_path, found=True)
        logger.debug("Crate %s not found under %s", file_name, cache_root)
        return CacheEntry.missing()

    @staticmethod
    def _candidates(cache_root: Path) -> List[Path]:
        registry_cache = cache_root.joinpath(*REGISTRY_CACHE_PARTS)
        candidates: List[Path] = []
        if registry_cache.is_dir():
            candidates.extend(
                sorted(path for path in registry_cache.iterdir() if path.is_dir())
            )
        candidates.append(registry_cache)
        candidates.append(cache_root)
        return candidates
