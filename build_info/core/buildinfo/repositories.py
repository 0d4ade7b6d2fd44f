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

"""Repository interfaces (Protocols) for the BuildInfo domain.

These define the contracts that infrastructure implementations must satisfy.
"""

from typing import List, Optional, Protocol

from .entities import BuildInfo, General
from .partials import Partial
from .value_objects import BuildCoordinates


class FragmentRepository(Protocol):
    """Port for the append-only, per-build fragment store.

    Writers from independent processes may save partials for the same
    build concurrently: every partial is a new, uniquely named record and
    is never edited in place. Readers are expected to run only after all
    writers for the build have finished.
    """

    def save_general(self, coordinates: BuildCoordinates, general: General) -> bool:
        """Write the build-start marker if none exists yet.

        Args:
            coordinates: Build identity.
            general: Marker to persist.

        Returns:
            True if the marker was written, False if one already existed.

        Raises:
            FragmentStoreError: If the store cannot be written.
        """
        ...

    def get_general(self, coordinates: BuildCoordinates) -> Optional[General]:
        """Return the build-start marker, or None when the build was never started.

        Raises:
            MalformedFragmentError: If the marker cannot be decoded.
        """
        ...

    def save_partial(self, coordinates: BuildCoordinates, partial: Partial) -> str:
        """Persist one partial as a brand-new record.

        Args:
            coordinates: Build identity.
            partial: Fragment to persist.

        Returns:
            Location of the stored record.

        Raises:
            FragmentStoreError: If the store cannot be written.
        """
        ...

    def read_partials(self, coordinates: BuildCoordinates) -> List[Partial]:
        """Read every partial recorded for the build.

        Returns:
            Partials in storage order (callers sort by timestamp).

        Raises:
            MalformedFragmentError: If any record cannot be decoded.
        """
        ...

    def save_generated(self, coordinates: BuildCoordinates, build_info: BuildInfo) -> str:
        """Persist a complete build-info document produced by a build tool.

        Returns:
            Location of the stored record.
        """
        ...

    def read_generated(self, coordinates: BuildCoordinates) -> List[BuildInfo]:
        """Read the complete build-info documents recorded for the build.

        Raises:
            MalformedFragmentError: If any document cannot be decoded.
        """
        ...

    def clean(self, coordinates: BuildCoordinates) -> bool:
        """Remove everything recorded for the build.

        Returns:
            True if anything was removed, False if the build was unknown.
        """
        ...
