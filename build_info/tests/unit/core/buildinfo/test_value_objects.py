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


"""Unit tests for BuildInfo value objects."""

from datetime import datetime, timedelta, timezone

import pytest

from build_info.core.buildinfo.value_objects import (
    BuildCoordinates,
    Checksum,
    ModuleType,
    format_timestamp,
    parse_timestamp,
)


class TestTimestamps:
    """Tests for build-info timestamp formatting."""

    def test_millisecond_precision(self):
        """Microseconds are truncated to milliseconds."""
        value = datetime(2024, 1, 2, 15, 4, 5, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-02T15:04:05.123+0000"

    def test_numeric_offset(self):
        """Non-UTC offsets are kept."""
        value = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2024-01-02T15:04:05.000+0200"

    def test_parse_formatted(self):
        """A formatted timestamp parses back to the same instant."""
        value = datetime(2024, 1, 2, 15, 4, 5, 123000, tzinfo=timezone.utc)
        assert parse_timestamp(format_timestamp(value)) == value

    def test_parse_invalid(self):
        """Strings in another format are rejected."""
        with pytest.raises(ValueError):
            parse_timestamp("2024-01-02 15:04:05")


class TestModuleType:
    """Tests for ModuleType."""

    def test_values(self):
        """Module types serialize to their lowercase names."""
        assert ModuleType.BUILD.value == "build"
        assert ModuleType("cargo") is ModuleType.CARGO

    def test_unknown(self):
        """Unknown types are rejected."""
        with pytest.raises(ValueError):
            ModuleType("ant")


class TestChecksum:
    """Tests for Checksum value object."""

    def test_valid(self):
        """Hex digests are accepted."""
        checksum = Checksum(sha1="a" * 40, md5="B" * 32, sha256="0" * 64)
        assert not checksum.is_empty()

    def test_empty(self):
        """A checksum without digests is empty."""
        assert Checksum().is_empty()

    def test_not_hex(self):
        """Non-hex digests are rejected."""
        with pytest.raises(ValueError, match="Checksum sha1 is not hexadecimal"):
            Checksum(sha1="xyz")

    def test_too_long(self):
        """Digests longer than 128 characters are rejected."""
        with pytest.raises(ValueError, match="length cannot exceed 128"):
            Checksum(md5="a" * 129)

    def test_to_dict_drops_empty(self):
        """Only known digests are serialized."""
        assert Checksum(sha1="123", md5="456").to_dict() == {"sha1": "123", "md5": "456"}

    def test_from_dict_without_digests(self):
        """Documents without digests decode to None."""
        assert Checksum.from_dict({"name": "a.jar"}) is None
        assert Checksum.from_dict(None) is None

    def test_immutable(self):
        """Checksum is frozen."""
        checksum = Checksum(sha1="123")
        with pytest.raises(AttributeError):
            checksum.sha1 = "456"


class TestBuildCoordinates:
    """Tests for BuildCoordinates value object."""

    def test_dir_name_without_project(self):
        """Name and number form the directory name."""
        assert BuildCoordinates("b1", "1").dir_name == "b1-1"

    def test_dir_name_with_project(self):
        """The project key is appended when present."""
        coordinates = BuildCoordinates("b1", "1", "proj")
        assert coordinates.dir_name == "b1-1-proj"
        assert str(coordinates) == "b1-1-proj"

    def test_empty_name(self):
        """Empty names are rejected."""
        with pytest.raises(ValueError, match="Build name cannot be empty"):
            BuildCoordinates("  ", "1")

    def test_empty_number(self):
        """Empty numbers are rejected."""
        with pytest.raises(ValueError, match="Build number cannot be empty"):
            BuildCoordinates("b1", "")

    @pytest.mark.parametrize("name", ["a/b", "a\\b", "a\x00b"])
    def test_separator_rejected(self, name):
        """Path separators and NUL are rejected."""
        with pytest.raises(ValueError, match="must not contain"):
            BuildCoordinates(name, "1")

    @pytest.mark.parametrize("number", [".", ".."])
    def test_relative_path_rejected(self, number):
        """Relative path components are rejected."""
        with pytest.raises(ValueError, match="must not be a relative path"):
            BuildCoordinates("b1", number)

    def test_too_long(self):
        """Components are limited to 256 characters."""
        with pytest.raises(ValueError, match="length cannot exceed 256"):
            BuildCoordinates("b" * 257, "1")
