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

"""File-based implementation of FragmentRepository.

Layout per build::

    <base_path>/<name>-<number>[-<project>]/
        details              build-start marker
        partials/partial-*   one JSON document per fragment
        generated/build-info-*  complete documents produced by build tools

Every fragment is created with ``tempfile.mkstemp`` so concurrent writers
from separate processes never share or overwrite a file.
"""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

from jsonschema import ValidationError

from build_info.common.logging_utils import log_secure_info
from build_info.core.buildinfo.entities import BuildInfo, General
from build_info.core.buildinfo.exceptions import (
    FragmentStoreError,
    MalformedFragmentError,
)
from build_info.core.buildinfo.partials import Partial
from build_info.core.buildinfo.value_objects import BuildCoordinates

logger = logging.getLogger(__name__)

T = TypeVar("T")

DETAILS_FILE_NAME = "details"
PARTIALS_DIR_NAME = "partials"
GENERATED_DIR_NAME = "generated"
PARTIAL_PREFIX = "partial-"
GENERATED_PREFIX = "build-info-"
JSON_SUFFIX = ".json"

_DECODE_ERRORS = (json.JSONDecodeError, ValidationError, ValueError, KeyError, TypeError)


class FileFragmentStore:
    """File-based fragment store.

    Fragments are immutable once written; the only mutation is
    :meth:`clean`, which removes the whole build directory.
    """

    def __init__(self, base_path: Path) -> None:
        """Initialize file-based fragment store.

        Args:
            base_path: Directory under which per-build directories live.

        Raises:
            ValueError: If base_path is not a directory.
            FragmentStoreError: If base_path cannot be created.
        """
        self._base_path = base_path
        try:
            self._base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FragmentStoreError(
                f"Failed to create fragment store at {base_path}: {e}"
            ) from e
        if not self._base_path.is_dir():
            raise ValueError(f"base_path is not a directory: {base_path}")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def build_dir(self, coordinates: BuildCoordinates) -> Path:
        """Directory holding everything recorded for *coordinates*."""
        return self._base_path / coordinates.dir_name

    # ------------------------------------------------------------------
    # Build-start marker
    # ------------------------------------------------------------------
    def save_general(self, coordinates: BuildCoordinates, general: General) -> bool:
        """Write the build-start marker if none exists yet.

        Returns:
            True if the marker was written, False if one already existed.

        Raises:
            FragmentStoreError: If the marker cannot be written.
        """
        details_path = self.build_dir(coordinates) / DETAILS_FILE_NAME
        try:
            details_path.parent.mkdir(parents=True, exist_ok=True)
            # "x" mode makes the first writer win when processes race.
            with open(details_path, "x", encoding="utf-8") as details_file:
                json.dump(general.to_dict(), details_file, indent=2)
        except FileExistsError:
            logger.debug("Build details already recorded for %s", coordinates)
            return False
        except OSError as e:
            log_secure_info("error", f"Failed to write build details for {coordinates}")
            raise FragmentStoreError(
                f"Failed to write build details to {details_path}: {e}"
            ) from e

        logger.info("Build details recorded for %s", coordinates)
        return True

    def get_general(self, coordinates: BuildCoordinates) -> Optional[General]:
        """Return the build-start marker, or None if the build was never started.

        Raises:
            MalformedFragmentError: If the marker cannot be decoded.
        """
        details_path = self.build_dir(coordinates) / DETAILS_FILE_NAME
        if not details_path.is_file():
            return None
        return self._load(details_path, General.from_dict)

    # ------------------------------------------------------------------
    # Partials
    # ------------------------------------------------------------------
    def save_partial(self, coordinates: BuildCoordinates, partial: Partial) -> str:
        """Persist *partial* as a brand-new, uniquely named file.

        Returns:
            Path of the written file.

        Raises:
            FragmentStoreError: If the file cannot be written.
        """
        path = self._write_new(
            self.build_dir(coordinates) / PARTIALS_DIR_NAME,
            PARTIAL_PREFIX,
            partial.to_dict(),
        )
        logger.info(
            "Partial for module '%s' saved to %s", partial.module_id, path.name
        )
        return str(path)

    def read_partials(self, coordinates: BuildCoordinates) -> List[Partial]:
        """Read every partial recorded for the build.

        Raises:
            MalformedFragmentError: If any file cannot be decoded.
            OSError: If a file cannot be read.
        """
        return [
            self._load(path, Partial.from_dict)
            for path in self._list_files(self.build_dir(coordinates) / PARTIALS_DIR_NAME)
        ]

    # ------------------------------------------------------------------
    # Generated build-info documents
    # ------------------------------------------------------------------
    def save_generated(self, coordinates: BuildCoordinates, build_info: BuildInfo) -> str:
        """Persist a complete build-info document produced by a build tool.

        Raises:
            FragmentStoreError: If the file cannot be written.
        """
        path = self._write_new(
            self.build_dir(coordinates) / GENERATED_DIR_NAME,
            GENERATED_PREFIX,
            build_info.to_dict(),
        )
        logger.info("Generated build-info saved to %s", path.name)
        return str(path)

    def read_generated(self, coordinates: BuildCoordinates) -> List[BuildInfo]:
        """Read the generated build-info documents recorded for the build.

        Raises:
            MalformedFragmentError: If any file cannot be decoded.
            OSError: If a file cannot be read.
        """
        return [
            self._load(path, BuildInfo.from_dict)
            for path in self._list_files(self.build_dir(coordinates) / GENERATED_DIR_NAME)
        ]

    def clean(self, coordinates: BuildCoordinates) -> bool:
        """Remove the build directory.

        Returns:
            True if the directory was removed, False if it did not exist.
        """
        build_dir = self.build_dir(coordinates)
        if not build_dir.exists():
            return False
        shutil.rmtree(build_dir)
        logger.info("Removed build directory %s", build_dir)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _write_new(self, directory: Path, prefix: str, data: Dict[str, Any]) -> Path:
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, name = tempfile.mkstemp(prefix=prefix, suffix=JSON_SUFFIX, dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as fragment_file:
                json.dump(data, fragment_file, indent=2)
        except OSError as e:
            log_secure_info("error", f"Failed to write fragment under {directory}")
            raise FragmentStoreError(
                f"Failed to write fragment under {directory}: {e}"
            ) from e
        return Path(name)

    @staticmethod
    def _list_files(directory: Path) -> List[Path]:
        if not directory.is_dir():
            return []
        return sorted(path for path in directory.iterdir() if path.is_file())

    @staticmethod
    def _load(path: Path, decode: Callable[[Dict[str, Any]], T]) -> T:
        content = path.read_text(encoding="utf-8")
        try:
            return decode(json.loads(content))
        except _DECODE_ERRORS as e:
            logger.error("Malformed fragment %s", path)
            raise MalformedFragmentError(str(path), str(e)) from e
