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

"""Domain exceptions for the BuildInfo aggregate."""

from typing import Optional


class BuildInfoDomainError(Exception):
    """Base exception for all build-info domain errors."""

    def __init__(self, message: str, correlation_id: Optional[str] = None) -> None:
        """Initialize build-info domain error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class FragmentStoreError(BuildInfoDomainError, OSError):
    """Infrastructure-level fragment store failure.

    Also an OSError, so callers handling I/O failures see it as one.
    """

    def __init__(
        self,
        message: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize fragment store error.

        Args:
            message: Human-readable error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(message, correlation_id=correlation_id)


class MalformedFragmentError(BuildInfoDomainError):
    """A persisted fragment could not be decoded; the merge is aborted."""

    def __init__(
        self,
        location: str,
        reason: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize malformed fragment error.

        Args:
            location: File path (or store key) of the broken fragment.
            reason: Decoder or schema error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Malformed build-info fragment {location}: {reason}",
            correlation_id=correlation_id,
        )
        self.location = location
        self.reason = reason


class BuildNotStartedError(BuildInfoDomainError):
    """No build-start marker exists for the requested build."""

    def __init__(
        self,
        build_name: str,
        build_number: str,
        project_key: str = "",
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize build not started error.

        Args:
            build_name: Build name.
            build_number: Build number.
            project_key: Optional project key.
            correlation_id: Optional correlation ID for tracing.
        """
        message = (
            "Failed to construct the build-info to be published. "
            "This may be because there were no previous commands, "
            "which collected build-info for "
            f"build-name: <{build_name}>, build-number: <{build_number}>"
        )
        if project_key:
            message += f" and project: <{project_key}>"
        super().__init__(message, correlation_id=correlation_id)
        self.build_name = build_name
        self.build_number = build_number
        self.project_key = project_key


class EnvFilterError(BuildInfoDomainError):
    """An environment include/exclude pattern could not be compiled."""

    def __init__(
        self,
        pattern: str,
        reason: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize env filter error.

        Args:
            pattern: The offending glob pattern.
            reason: Compiler error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Invalid environment filter pattern '{pattern}': {reason}",
            correlation_id=correlation_id,
        )
        self.pattern = pattern
        self.reason = reason


class GraphParseError(BuildInfoDomainError):
    """Captured build-tool output could not be turned into a graph."""

    def __init__(
        self,
        tool: str,
        line: str,
        reason: str,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize graph parse error.

        Args:
            tool: Build tool whose output was being parsed.
            line: The offending line or document excerpt.
            reason: Parser error description.
            correlation_id: Optional correlation ID for tracing.
        """
        super().__init__(
            f"Failed to parse {tool} dependency output ({reason}): {line[:200]}",
            correlation_id=correlation_id,
        )
        self.tool = tool
        self.line = line
        self.reason = reason
