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


"""Unit tests for build-info configuration loading."""

import pytest

from build_info.common.config import (
    DEFAULT_BASE_PATH,
    DEFAULT_MAX_PATH_LENGTH,
    DEFAULT_MAX_PATHS,
    default_config,
    load_config,
    split_patterns,
)


def _write_config(tmp_path, content: str):
    config_file = tmp_path / "build_info.ini"
    config_file.write_text(content)
    return config_file


class TestSplitPatterns:
    """Tests for pattern list splitting."""

    def test_semicolon_separated(self):
        """Semicolons separate patterns."""
        assert split_patterns("*a*;*b*") == ["*a*", "*b*"]

    def test_comma_separated_with_blanks(self):
        """Commas separate patterns and blanks are dropped."""
        assert split_patterns(" *a* , ;*b*; ") == ["*a*", "*b*"]

    def test_empty_string(self):
        """An empty string yields no patterns."""
        assert split_patterns("") == []


class TestDefaultConfig:
    """Tests for the built-in defaults."""

    def test_defaults(self):
        """Defaults use the file store and the documented limits."""
        config = default_config()
        assert config.fragment_store.backend == "file_store"
        assert config.fragment_store.base_path == DEFAULT_BASE_PATH
        assert config.requested_by.max_paths == DEFAULT_MAX_PATHS
        assert config.requested_by.max_path_length == DEFAULT_MAX_PATH_LENGTH
        assert config.env.include == ["*"]
        assert "*password*" in config.env.exclude
        assert config.agent.build_agent_name == "GENERIC"


class TestLoadConfig:
    """Tests for INI file loading."""

    def test_full_config(self, tmp_path):
        """Every section is read."""
        config_file = _write_config(tmp_path, f"""[fragment_store]
backend = memory_store
base_path = {tmp_path}/fragments

[requested_by]
max_paths = 5
max_path_length = 10

[env]
include = FOO_*;BAR_*
exclude = *_SECRET

[agent]
name = ci-agent
version = 2.0.0
build_agent_name = jenkins
build_agent_version = 2.440
""")
        config = load_config(str(config_file))

        assert config.fragment_store.backend == "memory_store"
        assert config.fragment_store.base_path == f"{tmp_path}/fragments"
        assert config.requested_by.max_paths == 5
        assert config.requested_by.max_path_length == 10
        assert config.env.include == ["FOO_*", "BAR_*"]
        assert config.env.exclude == ["*_SECRET"]
        assert config.agent.name == "ci-agent"
        assert config.agent.version == "2.0.0"
        assert config.agent.build_agent_name == "jenkins"
        assert config.agent.build_agent_version == "2.440"

    def test_missing_sections_use_defaults(self, tmp_path):
        """Only the fragment store section is given."""
        config_file = _write_config(tmp_path, "[fragment_store]\nbackend = file_store\n")
        config = load_config(str(config_file))

        assert config.fragment_store.base_path == DEFAULT_BASE_PATH
        assert config.requested_by.max_paths == DEFAULT_MAX_PATHS
        assert config.env.include == ["*"]
        assert config.agent.name == "build-info-py"

    def test_path_from_environment(self, tmp_path, monkeypatch):
        """BUILD_INFO_CONFIG_PATH is used when no path is given."""
        config_file = _write_config(
            tmp_path, "[fragment_store]\nbackend = memory_store\n"
        )
        monkeypatch.setenv("BUILD_INFO_CONFIG_PATH", str(config_file))

        assert load_config().fragment_store.backend == "memory_store"

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_config(str(tmp_path / "absent.ini"))

    def test_empty_file(self, tmp_path):
        """A file without sections is rejected."""
        config_file = _write_config(tmp_path, "")
        with pytest.raises(ValueError, match="Empty configuration file"):
            load_config(str(config_file))

    def test_unknown_backend(self, tmp_path):
        """Only known backends are accepted."""
        config_file = _write_config(tmp_path, "[fragment_store]\nbackend = s3\n")
        with pytest.raises(ValueError, match="Unknown fragment_store backend: s3"):
            load_config(str(config_file))

    def test_non_positive_limit(self, tmp_path):
        """Limits must be positive."""
        config_file = _write_config(tmp_path, "[requested_by]\nmax_paths = 0\n")
        with pytest.raises(ValueError, match="must be positive"):
            load_config(str(config_file))

    def test_percent_sign_is_literal(self, tmp_path):
        """Interpolation is disabled so glob patterns may contain %."""
        config_file = _write_config(tmp_path, "[env]\nexclude = %TEMP%\n")
        assert load_config(str(config_file)).env.exclude == ["%TEMP%"]
