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

"""Configuration loader for build-info collection."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import configparser

DEFAULT_CONFIG_PATH = "/etc/build_info/build_info.ini"
DEFAULT_BASE_PATH = "/tmp/build-info"
DEFAULT_MAX_PATHS = 15
DEFAULT_MAX_PATH_LENGTH = 50
DEFAULT_ENV_EXCLUDE = "*password*;*psw*;*secret*;*key*;*token*;*auth*"
DEFAULT_BUILD_AGENT_NAME = "GENERIC"

_BACKENDS = ("file_store", "memory_store")


@dataclass
class FragmentStoreConfig:
    """Fragment store configuration."""
    backend: str
    base_path: str


@dataclass
class RequestedByConfig:
    """Requested-by propagation limits."""
    max_paths: int = DEFAULT_MAX_PATHS
    max_path_length: int = DEFAULT_MAX_PATH_LENGTH


@dataclass
class EnvFilterConfig:
    """Environment include/exclude glob patterns."""
    include: List[str] = field(default_factory=lambda: ["*"])
    exclude: List[str] = field(
        default_factory=lambda: split_patterns(DEFAULT_ENV_EXCLUDE)
    )


@dataclass
class AgentConfig:
    """Identity of the agent stamped on assembled build-info documents."""
    name: str = "build-info-py"
    version: str = "1.0.0"
    build_agent_name: str = DEFAULT_BUILD_AGENT_NAME
    build_agent_version: str = ""


@dataclass
class BuildInfoConfig:
    """Build-info configuration."""
    fragment_store: FragmentStoreConfig
    requested_by: RequestedByConfig
    env: EnvFilterConfig
    agent: AgentConfig


def split_patterns(raw: str) -> List[str]:
    """Split a ``;`` or ``,`` separated pattern list, dropping blanks."""
    return [
        pattern.strip()
        for pattern in raw.replace(",", ";").split(";")
        if pattern.strip()
    ]


def default_config(base_path: str = DEFAULT_BASE_PATH) -> BuildInfoConfig:
    """Return the configuration used when no INI file is available."""
    return BuildInfoConfig(
        fragment_store=FragmentStoreConfig(backend="file_store", base_path=base_path),
        requested_by=RequestedByConfig(),
        env=EnvFilterConfig(),
        agent=AgentConfig(),
    )


def load_config(config_path: Optional[str] = None) -> BuildInfoConfig:
    """Load build-info configuration from INI file.

    Args:
        config_path: Path to configuration file. If None, uses BUILD_INFO_CONFIG_PATH
                    environment variable or default path.

    Returns:
        BuildInfoConfig instance.

    Raises:
        FileNotFoundError: If config file not found.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = os.getenv("BUILD_INFO_CONFIG_PATH", DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(config_file)

    if not parser.sections():
        raise ValueError(f"Empty configuration file: {config_file}")

    # Parse fragment_store config
    store_section = "fragment_store"
    backend = parser.get(store_section, "backend", fallback="file_store")
    if backend not in _BACKENDS:
        raise ValueError(
            f"Unknown fragment_store backend: {backend}. Allowed: {list(_BACKENDS)}"
        )
    fragment_store = FragmentStoreConfig(
        backend=backend,
        base_path=parser.get(store_section, "base_path", fallback=DEFAULT_BASE_PATH),
    )

    # Parse requested_by limits with defaults
    max_paths = DEFAULT_MAX_PATHS
    max_path_length = DEFAULT_MAX_PATH_LENGTH

    if parser.has_option("requested_by", "max_paths"):
        max_paths = parser.getint("requested_by", "max_paths")

    if parser.has_option("requested_by", "max_path_length"):
        max_path_length = parser.getint("requested_by", "max_path_length")

    if max_paths < 1 or max_path_length < 1:
        raise ValueError(
            "requested_by max_paths and max_path_length must be positive, "
            f"got {max_paths} and {max_path_length}"
        )

    env = EnvFilterConfig(
        include=split_patterns(parser.get("env", "include", fallback="*")),
        exclude=split_patterns(
            parser.get("env", "exclude", fallback=DEFAULT_ENV_EXCLUDE)
        ),
    )

    agent = AgentConfig(
        name=parser.get("agent", "name", fallback=AgentConfig.name),
        version=parser.get("agent", "version", fallback=AgentConfig.version),
        build_agent_name=parser.get(
            "agent", "build_agent_name", fallback=DEFAULT_BUILD_AGENT_NAME
        ),
        build_agent_version=parser.get("agent", "build_agent_version", fallback=""),
    )

    return BuildInfoConfig(
        fragment_store=fragment_store,
        requested_by=RequestedByConfig(
            max_paths=max_paths, max_path_length=max_path_length
        ),
        env=env,
        agent=agent,
    )
