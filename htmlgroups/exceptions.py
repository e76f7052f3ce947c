# htmlgroups — grouped HTML template registry
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Exceptions raised while building and rendering template groups.

Configuration, discovery and compile errors abort a build.  Lookup and
execution errors only ever concern a single render call.
"""

from __future__ import annotations


class TemplatesError(Exception):
    """Base class for all htmlgroups errors."""


# ---------------------------------------------------------------------------
# Build-time errors
# ---------------------------------------------------------------------------


class ConfigurationError(TemplatesError):
    """The configuration failed validation."""


class BasePathMissing(ConfigurationError):
    """No base path was set."""

    def __init__(self) -> None:
        super().__init__("templates: no value set for base_path")


class PathNotFound(ConfigurationError):
    """The base path or a subdirectory does not exist on disk."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"templates: path does not exist: {path!r}")


class InvalidSubdirectory(ConfigurationError):
    """A subdirectory name was empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__(
            "templates: empty or all whitespace string provided for subdirs is not allowed"
        )


class NoEmbeddedSource(ConfigurationError):
    """Embedded mode was selected but no (or an empty) bundle was given."""

    def __init__(self) -> None:
        super().__init__("templates: no embedded files provided")


class InvalidHelper(ConfigurationError):
    """A helper function could not be registered."""


class DiscoveryError(TemplatesError):
    """Listing a template directory failed."""

    def __init__(self, directory: str, reason: object) -> None:
        self.directory = directory
        super().__init__(f"templates: cannot list directory {directory!r}: {reason}")


class CompileError(TemplatesError):
    """The template engine rejected the sources of a group."""

    def __init__(self, group: str, reason: object) -> None:
        self.group = group
        label = f"subdir {group!r}" if group else "base path"
        super().__init__(f"templates: error parsing files at {label}: {reason}")


# ---------------------------------------------------------------------------
# Render-time errors
# ---------------------------------------------------------------------------


class GroupNotFoundError(TemplatesError, LookupError):
    """No compiled group exists for the requested subdirectory."""

    def __init__(self, group: str) -> None:
        self.group = group
        super().__init__(f"templates.show: invalid subdirectory {group!r}")


class ExecutionError(TemplatesError):
    """Executing a template failed (unknown name or runtime error)."""

    def __init__(self, group: str, template_name: str, reason: object) -> None:
        self.group = group
        self.template_name = template_name
        super().__init__(
            f"templates.show: error during execute of {template_name!r} "
            f"in subdir {group!r}: {reason}"
        )
