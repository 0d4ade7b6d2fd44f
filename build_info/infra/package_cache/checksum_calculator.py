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

"""Streaming md5/sha1/sha256 calculation for package files."""

import hashlib
from pathlib import Path

from build_info.core.buildinfo.value_objects import Checksum


class FileChecksumCalculator:
    """Computes the three digests of a file in a single read."""

    DEFAULT_CHUNK_SIZE: int = 1024 * 1024  # 1 MB

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._chunk_size = chunk_size

    def calculate(self, path: Path) -> Checksum:
        """Return md5, sha1 and sha256 of the file at *path*.

        Raises:
            OSError: If the file cannot be read.
        """
        md5 = hashlib.md5()
        sha1 = hashlib.sha1()
        sha256 = hashlib.sha256()
        with open(path, "rb") as package_file:
            for chunk in iter(lambda: package_file.read(self._chunk_size), b""):
                md5.update(chunk)
                sha1.update(chunk)
                sha256.update(chunk)
        return Checksum(
            sha1=sha1.hexdigest(),
            md5=md5.hexdigest(),
            sha256=sha256.hexdigest(),
        )
