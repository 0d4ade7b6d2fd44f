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

"""Domain services for the BuildInfo aggregate."""

import fnmatch
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Pattern

from build_info.common.logging_utils import log_secure_info
from build_info.core.buildinfo.entities import (
    AffectedIssue,
    Artifact,
    Dependency,
    Issues,
    Module,
    Tracker,
    Vcs,
)
from build_info.core.buildinfo.exceptions import EnvFilterError
from build_info.core.buildinfo.partials import (
    ArtifactsPayload,
    ChecksumPayload,
    DependenciesPayload,
    EnvPayload,
    Partial,
    VcsPayload,
)
from build_info.core.buildinfo.value_objects import ENV_PREFIX, Checksum, ModuleType

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Outcome of merging all partials of one build."""

    modules: List[Module] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    vcs_list: List[Vcs] = field(default_factory=list)
    issues: Issues = field(default_factory=Issues)


class FragmentMergeService:
    """Merges the partials of one build into modules, env, VCS and issues.

    Partials are processed in timestamp order. Artifacts collapse on
    ``name-sha1-md5``; dependencies collapse only when id, digests and
    scopes all match, so the same dependency recorded with and without a
    checksum is kept twice.
    """

    def merge(
        self,
        partials: Iterable[Partial],
        build_name: str,
        project_key: str = "",
    ) -> MergeResult:
        """Merge *partials* into a single result.

        Args:
            partials: Fragments recorded for the build, in any order.
            build_name: Id given to modules recorded without one.
            project_key: Project the build belongs to (used for logging).

        Returns:
            MergeResult with modules sorted by id and their artifacts and
            dependencies sorted by identity key.
        """
        ordered = sorted(partials, key=lambda partial: partial.timestamp)

        module_types: Dict[str, ModuleType] = {}
        module_checksums: Dict[str, Checksum] = {}
        artifacts: Dict[str, Dict[str, Artifact]] = {}
        dependencies: Dict[str, Dict[str, Dependency]] = {}
        env: Dict[str, str] = {}
        vcs_list: List[Vcs] = []
        tracker: Optional[Tracker] = None
        aggregate_build_issues = False
        aggregation_build_status = ""
        affected_issues: Dict[str, AffectedIssue] = {}

        for partial in ordered:
            module_id = partial.module_id or build_name
            payload = partial.payload

            if payload is None:
                continue
            if isinstance(payload, ArtifactsPayload):
                module_types.setdefault(module_id, partial.module_type)
                module_artifacts = artifacts.setdefault(module_id, {})
                for artifact in payload.artifacts:
                    module_artifacts[artifact.identity_key()] = artifact
            elif isinstance(payload, DependenciesPayload):
                module_types.setdefault(module_id, partial.module_type)
                module_dependencies = dependencies.setdefault(module_id, {})
                for dependency in payload.dependencies:
                    module_dependencies[dependency.identity_key()] = dependency
            elif isinstance(payload, EnvPayload):
                env.update(payload.env)
            elif isinstance(payload, VcsPayload):
                vcs_list.extend(payload.vcs_list)
                issues = payload.issues
                if issues is None:
                    continue
                if issues.has_tracker():
                    tracker = issues.tracker
                if issues.aggregate_build_issues:
                    aggregate_build_issues = True
                    aggregation_build_status = issues.aggregation_build_status
                for issue in issues.affected_issues:
                    affected_issues[issue.key] = issue
            elif isinstance(payload, ChecksumPayload):
                if partial.module_type == ModuleType.BUILD:
                    module_types.setdefault(module_id, ModuleType.BUILD)
                    module_checksums[module_id] = payload.checksum
            else:
                raise TypeError(f"Unknown partial payload: {type(payload).__name__}")

        modules = [
            Module(
                id=module_id,
                type=module_type,
                checksum=module_checksums.get(module_id),
                artifacts=_sorted_values(artifacts.get(module_id, {})),
                dependencies=_sorted_values(dependencies.get(module_id, {})),
            )
            for module_id, module_type in sorted(module_types.items())
        ]

        log_secure_info(
            "info",
            f"Merged {len(ordered)} partials into {len(modules)} modules for build "
            f"'{build_name}'" + (f" in project '{project_key}'" if project_key else ""),
        )

        return MergeResult(
            modules=modules,
            env=env,
            vcs_list=vcs_list,
            issues=Issues(
                tracker=tracker,
                aggregate_build_issues=aggregate_build_issues,
                aggregation_build_status=aggregation_build_status,
                affected_issues=[affected_issues[key] for key in sorted(affected_issues)],
            ),
        )


def _sorted_values(entries: Dict[str, object]) -> list:
    return [entries[key] for key in sorted(entries)]


# ---------------------------------------------------------------------------
# Environment collection and filtering
# ---------------------------------------------------------------------------
def collect_env(environ: Mapping[str, str], prefix: str = ENV_PREFIX) -> Dict[str, str]:
    """Return every variable of *environ* keyed under *prefix*."""
    return {f"{prefix}{key}": value for key, value in environ.items()}


class EnvFilter:
    """Case-insensitive glob filtering of environment properties.

    Only keys that start with *prefix* are filtered, and the pattern is
    matched against the key with the prefix removed. Other keys pass
    through untouched. An empty prefix filters every key.
    """

    def __init__(self, prefix: str = ENV_PREFIX) -> None:
        self._prefix = prefix

    def include(self, env: Mapping[str, str], patterns: Iterable[str]) -> Dict[str, str]:
        """Keep the filtered keys that match at least one pattern.

        Raises:
            EnvFilterError: If a pattern cannot be compiled.
        """
        compiled = self._compile(patterns)
        return {
            key: value
            for key, value in env.items()
            if not self._applies(key) or self._matches(key, compiled)
        }

    def exclude(self, env: Mapping[str, str], patterns: Iterable[str]) -> Dict[str, str]:
        """Drop the filtered keys that match at least one pattern.

        Raises:
            EnvFilterError: If a pattern cannot be compiled.
        """
        compiled = self._compile(patterns)
        return {
            key: value
            for key, value in env.items()
            if not (self._applies(key) and self._matches(key, compiled))
        }

    def apply(
        self,
        env: Mapping[str, str],
        include: Iterable[str],
        exclude: Iterable[str],
    ) -> Dict[str, str]:
        """Include, then exclude."""
        return self.exclude(self.include(env, include), exclude)

    def _applies(self, key: str) -> bool:
        return key.startswith(self._prefix)

    def _matches(self, key: str, compiled: List[Pattern[str]]) -> bool:
        name = key[len(self._prefix):].lower()
        return any(pattern.match(name) for pattern in compiled)

    @staticmethod
    def _compile(patterns: Iterable[str]) -> List[Pattern[str]]:
        compiled = []
        for pattern in patterns:
            if not pattern or not pattern.strip():
                raise EnvFilterError(pattern, "pattern cannot be empty")
            if not _classes_closed(pattern):
                logger.error("Invalid environment filter pattern: %s", pattern)
                raise EnvFilterError(pattern, "unterminated character class")
            try:
                compiled.append(re.compile(fnmatch.translate(pattern.lower())))
            except re.error as exc:
                logger.error("Invalid environment filter pattern: %s", pattern)
                raise EnvFilterError(pattern, str(exc)) from exc
        return compiled


def _classes_closed(pattern: str) -> bool:
    """Return False when a ``[`` opens a class that is never closed.

    A ``]`` right after ``[`` or ``[!`` is a literal member, as in
    :mod:`fnmatch`, so ``[]`` and ``[!]`` are unterminated.
    """
    index = 0
    while index < len(pattern):
        if pattern[index] == "[":
            end = index + 1
            if end < len(pattern) and pattern[end] == "!":
                end += 1
            if end < len(pattern) and pattern[end] == "]":
                end += 1
            end = pattern.find("]", end)
            if end < 0:
                return False
            index = end
        index += 1
    return True
