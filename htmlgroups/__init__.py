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

"""Grouped HTML templates for web applications.

Discovers HTML template files in a base directory and a list of its
subdirectories (on disk or inside an embedded bundle), compiles one Jinja2
environment per subdirectory with the base files inherited into each, and
renders a named template from a named group into an output sink.

Usage::

    from htmlgroups import Config, ResponseRecorder, TemplateRegistry, default_helpers

    config = Config.on_disk("templates", ["app", "docs"], helpers=default_helpers())
    registry = TemplateRegistry(config)
    registry.build()

    response = ResponseRecorder()
    registry.render(response, "app", "index", {"user": "alice"})

Templates are rendered with ``development``, ``use_local_files``,
``cache_bust_files`` and the caller's ``injected_data``.
"""

from htmlgroups.config import DEFAULT_EXTENSION, Config, SourceMode, validate
from htmlgroups.exceptions import (
    BasePathMissing,
    CompileError,
    ConfigurationError,
    DiscoveryError,
    ExecutionError,
    GroupNotFoundError,
    InvalidHelper,
    InvalidSubdirectory,
    NoEmbeddedSource,
    PathNotFound,
    TemplatesError,
)
from htmlgroups.helpers import HelperFunctions, default_helpers
from htmlgroups.registry import BASE_GROUP, CompiledGroup, TemplateRegistry
from htmlgroups.sinks import OutputSink, ResponseRecorder, StreamSink
from htmlgroups.sources import (
    EmbeddedSource,
    OnDiskSource,
    TemplateSource,
    discover,
    list_embedded_files,
    source_for,
)

__all__ = [
    "BASE_GROUP",
    "DEFAULT_EXTENSION",
    "BasePathMissing",
    "CompileError",
    "CompiledGroup",
    "Config",
    "ConfigurationError",
    "DiscoveryError",
    "EmbeddedSource",
    "ExecutionError",
    "GroupNotFoundError",
    "HelperFunctions",
    "InvalidHelper",
    "InvalidSubdirectory",
    "NoEmbeddedSource",
    "OnDiskSource",
    "OutputSink",
    "PathNotFound",
    "ResponseRecorder",
    "SourceMode",
    "StreamSink",
    "TemplateRegistry",
    "TemplateSource",
    "TemplatesError",
    "default_helpers",
    "discover",
    "list_embedded_files",
    "source_for",
    "validate",
]
