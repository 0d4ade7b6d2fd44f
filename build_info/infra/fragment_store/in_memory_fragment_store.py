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

"""In-memory implementation of FragmentRepository for dev/test."""

import itertools
import json
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar

from jsonschema import ValidationError

from build_info.core.buildinfo.entities import BuildInfo, General
from build_info.core.buildinfo.exceptions import MalformedFragmentError
from build_info.core.buildinfo.partials import Partial
from build_info.core.buildinfo.value_objects import BuildCoordinates

T = TypeVar("T")

_DECODE_ERRORS = (json.JSONDecodeError, ValidationError, ValueError, KeyError, TypeError)


@dataclass
class _BuildRecord:
    general: Optional[str] = None
    partials: Dict[str, str] = field(default_factory=dict)
    generated: Dict[str, str] = field(default_factory=dict)


class InMemoryFragmentStore:
    """In-memory fragment store for development and testing.

    Documents are kept as serialized JSON so reads go through the same
    decoding and validation as the file store. A lock serializes writers
    sharing one instance.
    """

    def __init__(self) -> None:
        self._builds: Dict[str, _BuildRecord] = {}
        self._lock = threading.Lock()
        self._counter = itertools.count(1)

    def save_general(self, coordinates: BuildCoordinates, general: General) -> bool:
        with self._lock:
            record = self._builds.setdefault(coordinates.dir_name, _BuildRecord())
            if record.general is not None:
                return False
            record.general = json.dumps(general.to_dict())
            return True

    def get_general(self, coordinates: BuildCoordinates) -> Optional[General]:
        record = self._builds.get(coordinates.dir_name)
        if record is None or record.general is None:
            return None
        return self._load(f"{coordinates}/details", record.general, General.from_dict)

    def save_partial(self, coordinates: BuildCoordinates, partial: Partial) -> str:
        with self._lock:
            record = self._builds.setdefault(coordinates.dir_name, _BuildRecord())
            key = f"{coordinates}/partials/partial-{next(self._counter):08d}"
            record.partials[key] = json.dumps(partial.to_dict())
            return key

    def read_partials(self, coordinates: BuildCoordinates) -> List[Partial]:
        record = self._builds.get(coordinates.dir_name)
        if record is None:
            return []
        return [
            self._load(key, content, Partial.from_dict)
            for key, content in sorted(record.partials.items())
        ]

    def save_generated(self, coordinates: BuildCoordinates, build_info: BuildInfo) -> str:
        with self._lock:
            record = self._builds.setdefault(coordinates.dir_name, _BuildRecord())
            key = f"{coordinates}/generated/build-info-{next(self._counter):08d}"
            record.generated[key] = json.dumps(build_info.to_dict())
            return key

    def read_generated(self, coordinates: BuildCoordinates) -> List[BuildInfo]:
        record = self._builds.get(coordinates.dir_name)
        if record is None:
            return []
        return [
            self._load(key, content, BuildInfo.from_dict)
            for key, content in sorted(record.generated.items())
        ]

    def clean(self, coordinates: BuildCoordinates) -> bool:
        with self._lock:
            return self._builds.pop(coordinates.dir_name, None) is not None

    def put_raw_partial(self, coordinates: BuildCoordinates, content: str) -> str:
        """Store *content* verbatim as a partial (test helper for corrupt data)."""
        with self._lock:
            record = self._builds.setdefault(coordinates.dir_name, _BuildRecord())
            key = f"{coordinates}/partials/partial-{next(self._counter):08d}"
            record.partials[key] = content
            return key

    @staticmethod
    def _load(key: str, content: str, decode: Callable[[Dict[str, Any]], T]) -> T:
        try:
            return decode(json.loads(content))
        except _DECODE_ERRORS as e:
            raise MalformedFragmentError(key, str(e)) from e
