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

"""Canonical dependency identifiers and tool-native locator handling."""

from typing import Tuple

VIRTUAL_MARKER = "@virtual:"


def dependency_id(name: str, version: str) -> str:
    """Return the canonical ``name:version`` id."""
    if not name:
        raise ValueError("Dependency name cannot be empty")
    return f"{name}:{version}"


def split_dependency_id(value: str) -> Tuple[str, str]:
    """Split a canonical id into ``(name, version)``.

    Raises:
        ValueError: If *value* has no version part.
    """
    name, separator, version = value.partition(":")
    if not separator or not name:
        raise ValueError(f"Not a name:version dependency id: {value}")
    return name, version


def go_mod_encode(path: str) -> str:
    """Escape uppercase letters the way the Go module cache does.

    ``github.com/Azure/go`` becomes ``github.com/!azure/go`` so that the
    path survives case-insensitive filesystems.
    """
    encoded = []
    for character in path:
        if "A" <= character <= "Z":
            encoded.append("!" + character.lower())
        else:
            encoded.append(character)
    return "".join(encoded)


def go_mod_decode(path: str) -> str:
    """Inverse of :func:`go_mod_encode`.

    Raises:
        ValueError: If a ``!`` is not followed by a lowercase letter.
    """
    decoded = []
    escaped = False
    for character in path:
        if escaped:
            if not "a" <= character <= "z":
                raise ValueError(f"Invalid escape sequence in module path: {path}")
            decoded.append(character.upper())
            escaped = False
        elif character == "!":
            escaped = True
        else:
            decoded.append(character)
    if escaped:
        raise ValueError(f"Dangling escape at end of module path: {path}")
    return "".join(decoded)


def normalize_virtual_locator(locator: str) -> str:
    """Strip Yarn virtual-package indirection from a locator.

    ``pkg@virtual:<hash>#npm:1.2.3`` becomes ``pkg@npm:1.2.3``: everything
    up to and including the ``@`` of the first ``@virtual:`` is kept, then
    everything after the last ``#``. Locators without ``@virtual:`` are
    returned unchanged.
    """
    virtual_index = locator.find(VIRTUAL_MARKER)
    if virtual_index == -1:
        return locator
    last_hash = locator.rfind("#")
    if last_hash < virtual_index:
        return locator
    return locator[:virtual_index + 1] + locator[last_hash + 1:]


def yarn_package_name(value: str) -> str:
    """Return the package name of a Yarn ``name@range`` value.

    The leading ``@`` of scoped packages is part of the name.
    """
    at_index = value.find("@", 1)
    if at_index == -1:
        return value
    return value[:at_index]


def yarn_locator_version(locator: str) -> str:
    """Return the version of a normalized ``name@npm:version`` locator."""
    name = yarn_package_name(locator)
    reference = locator[len(name) + 1:]
    _, separator, version = reference.rpartition(":")
    return version if separator else reference
