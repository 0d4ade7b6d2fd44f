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

"""Dependency Injector containers for build-info collection."""

import logging
import os
from pathlib import Path

from dependency_injector import containers, providers

from build_info.common.config import BuildInfoConfig, default_config, load_config
from build_info.core.buildinfo.services import EnvFilter, FragmentMergeService
from build_info.core.dependencies.propagator import RequestedByPropagator
from build_info.core.dependencies.services import DependencyCollectionService
from build_info.core.dependencies.value_objects import DependencyTool, RequestedByLimits
from build_info.infra.fragment_store.file_fragment_store import FileFragmentStore
from build_info.infra.fragment_store.in_memory_fragment_store import (
    InMemoryFragmentStore,
)
from build_info.infra.package_cache.cargo_registry_cache import (
    CargoRegistryCacheResolver,
)
from build_info.infra.package_cache.checksum_calculator import FileChecksumCalculator
from build_info.infra.package_cache.go_module_cache import GoModuleCacheResolver
from build_info.infra.package_cache.npm_content_cache import NpmContentCacheResolver
from build_info.orchestrator.build.use_cases.assemble_build_info import (
    AssembleBuildInfoUseCase,
)
from build_info.orchestrator.build.use_cases.collect_dependencies import (
    CollectDependenciesUseCase,
)
from build_info.orchestrator.build.use_cases.record_fragment import (
    RecordFragmentUseCase,
    SaveGeneratedBuildInfoUseCase,
)
from build_info.orchestrator.build.use_cases.start_build import (
    CleanBuildUseCase,
    StartBuildUseCase,
)

logger = logging.getLogger(__name__)


def _load_config() -> BuildInfoConfig:
    """Load the INI configuration, falling back to defaults."""
    try:
        return load_config()
    except (FileNotFoundError, ValueError) as exc:
        logger.warning("Using default build-info configuration: %s", exc)
        return default_config()


def _create_fragment_store(config: BuildInfoConfig):
    """Factory function to create fragment store based on configuration.

    Returns:
        InMemoryFragmentStore or FileFragmentStore based on config.
    """
    if config.fragment_store.backend == "memory_store":
        return InMemoryFragmentStore()
    return FileFragmentStore(base_path=Path(config.fragment_store.base_path))


class DevContainer(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Development profile container.

    Keeps fragments in memory; nothing is written to disk.

    Activated when ENV=dev (default).
    """

    config = providers.Singleton(default_config)

    # --- Fragment store ---
    fragment_store = providers.Singleton(InMemoryFragmentStore)

    # --- Domain services ---
    requested_by_limits = providers.Singleton(
        RequestedByLimits,
        max_paths=config.provided.requested_by.max_paths,
        max_path_length=config.provided.requested_by.max_path_length,
    )

    requested_by_propagator = providers.Singleton(
        RequestedByPropagator,
        limits=requested_by_limits,
    )

    dependency_collection_service = providers.Factory(
        DependencyCollectionService,
        propagator=requested_by_propagator,
    )

    merge_service = providers.Factory(FragmentMergeService)
    env_filter = providers.Factory(EnvFilter)

    # --- Package caches ---
    checksum_calculator = providers.Singleton(FileChecksumCalculator)

    package_cache_resolvers = providers.Dict(
        {
            DependencyTool.GO: providers.Singleton(GoModuleCacheResolver),
            DependencyTool.CARGO: providers.Singleton(CargoRegistryCacheResolver),
            DependencyTool.NPM: providers.Singleton(NpmContentCacheResolver),
        }
    )

    # --- Use cases ---
    start_build_use_case = providers.Factory(
        StartBuildUseCase,
        fragment_repo=fragment_store,
    )

    clean_build_use_case = providers.Factory(
        CleanBuildUseCase,
        fragment_repo=fragment_store,
    )

    record_fragment_use_case = providers.Factory(
        RecordFragmentUseCase,
        fragment_repo=fragment_store,
    )

    save_generated_build_info_use_case = providers.Factory(
        SaveGeneratedBuildInfoUseCase,
        fragment_repo=fragment_store,
    )

    collect_dependencies_use_case = providers.Factory(
        CollectDependenciesUseCase,
        fragment_repo=fragment_store,
        collection_service=dependency_collection_service,
        checksum_calculator=checksum_calculator,
        resolvers=package_cache_resolvers,
    )

    assemble_build_info_use_case = providers.Factory(
        AssembleBuildInfoUseCase,
        fragment_repo=fragment_store,
        merge_service=merge_service,
        env_filter=env_filter,
        agent_config=config.provided.agent,
        env_config=config.provided.env,
    )


class ProdContainer(containers.DeclarativeContainer):  # pylint: disable=R0903
    """Production profile container.

    Reads the INI file named by BUILD_INFO_CONFIG_PATH and keeps fragments
    on disk under the configured base path.

    Activated when ENV=prod.
    """

    config = providers.Singleton(_load_config)

    # --- Fragment store ---
    fragment_store = providers.Singleton(_create_fragment_store, config=config)

    # --- Domain services ---
    requested_by_limits = providers.Singleton(
        RequestedByLimits,
        max_paths=config.provided.requested_by.max_paths,
        max_path_length=config.provided.requested_by.max_path_length,
    )

    requested_by_propagator = providers.Singleton(
        RequestedByPropagator,
        limits=requested_by_limits,
    )

    dependency_collection_service = providers.Factory(
        DependencyCollectionService,
        propagator=requested_by_propagator,
    )

    merge_service = providers.Factory(FragmentMergeService)
    env_filter = providers.Factory(EnvFilter)

    # --- Package caches ---
    checksum_calculator = providers.Singleton(FileChecksumCalculator)

    package_cache_resolvers = providers.Dict(
        {
            DependencyTool.GO: providers.Singleton(GoModuleCacheResolver),
            DependencyTool.CARGO: providers.Singleton(CargoRegistryCacheResolver),
            DependencyTool.NPM: providers.Singleton(NpmContentCacheResolver),
        }
    )

    # --- Use cases ---
    start_build_use_case = providers.Factory(
        StartBuildUseCase,
        fragment_repo=fragment_store,
    )

    clean_build_use_case = providers.Factory(
        CleanBuildUseCase,
        fragment_repo=fragment_store,
    )

    record_fragment_use_case = providers.Factory(
        RecordFragmentUseCase,
        fragment_repo=fragment_store,
    )

    save_generated_build_info_use_case = providers.Factory(
        SaveGeneratedBuildInfoUseCase,
        fragment_repo=fragment_store,
    )

    collect_dependencies_use_case = providers.Factory(
        CollectDependenciesUseCase,
        fragment_repo=fragment_store,
        collection_service=dependency_collection_service,
        checksum_calculator=checksum_calculator,
        resolvers=package_cache_resolvers,
    )

    assemble_build_info_use_case = providers.Factory(
        AssembleBuildInfoUseCase,
        fragment_repo=fragment_store,
        merge_service=merge_service,
        env_filter=env_filter,
        agent_config=config.provided.agent,
        env_config=config.provided.env,
    )


def get_container_class():
    """Select container class based on ENV environment variable.

    Returns:
        DevContainer if ENV=dev (default)
        ProdContainer if ENV=prod
    """
    env = os.getenv("ENV", "dev").lower()

    if env == "prod":
        return ProdContainer

    return DevContainer


Container = get_container_class()

# Singleton container instance shared by callers of the use cases
container = Container()

__all__ = ["Container", "container", "get_container_class"]
