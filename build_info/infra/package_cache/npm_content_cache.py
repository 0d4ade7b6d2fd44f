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

"""Resolver for tarballs in npm's content-addressed cache (cacache)."""

import base64
import binascii
import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

from build_info.core.dependencies.value_objects import CacheEntry

logger = logging.getLogger(__name__)

CACACHE_DIR_NAME = "_cacache"
CONTENT_DIR_NAME = "content-v2"


def default_npm_cache_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return ``$npm_config_cache`` or ``~/.npm``."""
    environ = os.environ if environ is None else environ
    cache = environ.get("npm_config_cache")
    return Path(cache) if cache else Path.home() / ".npm"


def integrity_to_hex(integrity: str) -> Optional[Tuple[str, str]]:
    """Split an SRI string into ``(algorithm, hex digest)``.

    Only the first hash of a multi-hash SRI string is used. Returns None
    when the string is not valid SRI.
    """
    first = integrity.strip().split(" ")[0] if integrity.strip() else ""
    algorithm, separator, encoded = first.partition("-")
    if not separator or not algorithm or not encoded:
        return None
    try:
        digest = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return None
    return algorithm, digest.hex()


class NpmContentCacheResolver:
    """Finds ``content-v2/<algo>/<h[0:2]>/<h[2:4]>/<h[4:]>`` by integrity.

    *cache_root* is the npm cache directory; both ``<root>/_cacache`` and
    the root itself are probed. Packages without integrity cannot be
    located and are reported missing.
    """

    def resolve(
        self,
        cache_root: Path,
        name: str,
        version: str,
        integrity: str = "",
    ) -> CacheEntry:
        parsed = integrity_to_hex(integrity)
        if parsed is None:
            logger.debug("No usable integrity for %s:%s", name, version)
            return CacheEntry.missing()
        algorithm, digest = parsed
        for candidate in self._candidates(cache_root):
            content_path = (
                candidate / CONTENT_DIR_NAME / algorithm / digest[0:2] / digest[2:4] / digest[4:]
            )
            if content_path.is_file():
                return CacheEntry(path=content_path, found=True)
        logger.debug("Package %s:%s not found in npm cache %s", name, version, cache_root)
        return CacheEntry.missing()

    @staticmethod
    def _candidates(cache_root: Path) -> List[Path]:
        return [cache_root / CACACHE_DIR_NAME, cache_root]
