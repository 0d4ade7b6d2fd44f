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

"""Resolver for module zips in the Go module download cache."""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from build_info.core.dependencies.locators import go_mod_encode
from build_info.core.dependencies.value_objects import CacheEntry

logger = logging.getLogger(__name__)


def default_go_cache_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return ``$GOMODCACHE/cache/download`` (``$GOPATH/pkg/mod`` by default)."""
    environ = os.environ if environ is None else environ
    module_cache = environ.get("GOMODCACHE")
    if module_cache:
        return Path(module_cache) / "cache" / "download"
    gopath = environ.get("GOPATH") or str(Path.home() / "go")
    first_gopath = gopath.split(os.pathsep)[0]
    return Path(first_gopath) / "pkg" / "mod" / "cache" / "download"


class GoModuleCacheResolver:
    """Finds ``<root>/<encoded name>/@v/v<version>.zip``.

    The download cache is probed first, then its parent directory.
    """

    def resolve(
        self,
        cache_root: Path,
        name: str,
        version: str,
        integrity: str = "",
    ) -> CacheEntry:
        file_name = (version if version.startswith("v") else f"v{version}") + ".zip"
        encoded_name = go_mod_encode(name)
        for candidate in self._candidates(cache_root):
            zip_path = candidate / encoded_name / "@v" / file_name
            if zip_path.is_file():
                return CacheEntry(path=zip_path, found=True)
        logger.debug("The following file is missing: %s", cache_root / encoded_name / "@v" / file_name)
        return CacheEntry.missing()

    @staticmethod
    def _candidates(cache_root: Path) -> List[Path]:
        return [cache_root, cache_root.parent]
