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

"""Compiled template groups and the registry that serves them.

Templates are organised by subdirectory.  Each subdirectory is compiled
into its own Jinja2 environment together with every file of the base
directory, so base files (headers, footers, macros) are available in all
groups while groups stay independent of each other: two subdirectories may
both have an ``index.html``.  Base files on their own form the group ``""``.

Within one group the template name is the file's basename.  When a
subdirectory file and a base file share a name, the subdirectory file wins
because subdirectory files are listed first.

Usage::

    registry = TemplateRegistry(Config.on_disk("templates", ["app", "docs"]))
    registry.build()
    registry.render(sink, "app", "index", {"user": user})
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from http import HTTPStatus
from types import MappingProxyType
from typing import Any

from jinja2 import (
    BaseLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    Undefined,
)

from htmlgroups.config import Config, validate
from htmlgroups.exceptions import CompileError, ExecutionError, GroupNotFoundError
from htmlgroups.sinks import OutputSink, ResponseRecorder
from htmlgroups.sources import TemplateSource, discover, source_for

logger = logging.getLogger(__name__)

BASE_GROUP = ""


class _GroupLoader(BaseLoader):
    """Jinja2 loader over the sources of one group, first listed name wins."""

    def __init__(self, sources: list[tuple[str, str, str]]) -> None:
        self._sources: dict[str, tuple[str, str]] = {}
        for name, text, path in sources:
            self._sources.setdefault(name, (text, path))

    def get_source(
        self, environment: Environment, template: str,
    ) -> tuple[str, str, Callable[[], bool]]:
        try:
            text, path = self._sources[template]
        except KeyError:
            raise TemplateNotFound(template) from None
        return text, path, lambda: True

    def list_templates(self) -> list[str]:
        return sorted(self._sources)


@dataclass(frozen=True)
class CompiledGroup:
    """One compiled group of templates; never modified after creation."""

    key: str
    environment: Environment
    templates: Mapping[str, Template]
    paths: tuple[str, ...]

    def __contains__(self, template_name: object) -> bool:
        return template_name in self.templates


def compile_group(
    key: str, paths: list[str], source: TemplateSource, config: Config,
) -> CompiledGroup:
    """Read and compile *paths* into a single group.

    Every template is compiled up front so syntax errors surface here
    rather than on first render.

    Raises :class:`~htmlgroups.exceptions.CompileError` naming *key*.
    """
    try:
        sources = [
            (os.path.basename(path), source.read_text(path), path) for path in paths
        ]
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.error("Error reading template files for group %r: %s", key, exc)
        raise CompileError(key, exc) from exc

    env = Environment(
        loader=_GroupLoader(sources),
        autoescape=True,
        undefined=StrictUndefined if config.strict_undefined else Undefined,
        cache_size=-1,
        auto_reload=False,
    )
    env.globals.update(config.helpers)

    try:
        templates = {name: env.get_template(name) for name in env.list_templates()}
    except TemplateError as exc:
        logger.error("Error parsing template files for group %r: %s", key, exc)
        raise CompileError(key, exc) from exc

    logger.debug("Compiled group %r: %d template(s)", key, len(templates))
    return CompiledGroup(
        key=key,
        environment=env,
        templates=MappingProxyType(templates),
        paths=tuple(paths),
    )


class TemplateRegistry:
    """Builds, holds and renders the compiled template groups of a config.

    :meth:`build` replaces all groups at once; nothing is visible from a
    build that fails.  Rendering only reads the groups.  Builds are not
    synchronised against renders: build once at startup, or serialise
    rebuilds against rendering yourself.

    Args:
        config: Settings to build from.  Render-time values
            (``development``, ``use_local_files``, cache busting pairs) are
            read from it on every render.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config if config is not None else Config.new()
        self._groups: Mapping[str, CompiledGroup] = MappingProxyType({})

    # --- Building -----------------------------------------------------------

    def build(self) -> None:
        """Validate the config, then discover and compile every group.

        Raises :class:`~htmlgroups.exceptions.ConfigurationError`,
        :class:`~htmlgroups.exceptions.DiscoveryError` or
        :class:`~htmlgroups.exceptions.CompileError`.  On discovery or
        compile failure the registry is left empty.
        """
        config = validate(self.config)
        self._groups = MappingProxyType({})

        source = source_for(config)
        groups: dict[str, CompiledGroup] = {}

        base_paths = discover(config.base_path, source, config.extension)
        if base_paths:
            groups[BASE_GROUP] = compile_group(BASE_GROUP, base_paths, source, config)

        for subdir in config.subdirs:
            subdir_path = source.join(config.base_path, subdir)
            subdir_paths = discover(subdir_path, source, config.extension)
            if not subdir_paths:
                logger.debug("No template files in %s, skipping", subdir_path)
                continue
            groups[subdir] = compile_group(
                subdir, subdir_paths + base_paths, source, config,
            )

        self._groups = MappingProxyType(groups)
        logger.info(
            "Built %d template group(s) from %s", len(groups), config.base_path,
        )

    # --- Inspection ---------------------------------------------------------

    @property
    def is_built(self) -> bool:
        return bool(self._groups)

    def groups(self) -> list[str]:
        """Return the keys of all compiled groups (``""`` is the base group)."""
        return list(self._groups)

    def get_group(self, group: str) -> CompiledGroup:
        """Return the compiled group *group*.

        Raises :class:`~htmlgroups.exceptions.GroupNotFoundError`.
        """
        try:
            return self._groups[group]
        except KeyError:
            raise GroupNotFoundError(group) from None

    def template_names(self, group: str) -> list[str]:
        return sorted(self.get_group(group).templates)

    def has_template(self, group: str, template_name: str) -> bool:
        compiled = self._groups.get(group)
        return compiled is not None and self.template_filename(template_name) in compiled

    def __contains__(self, group: object) -> bool:
        return group in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    # --- Rendering ----------------------------------------------------------

    def template_filename(self, template_name: str) -> str:
        """Append the configured extension if *template_name* has none."""
        if not os.path.splitext(template_name)[1]:
            return f"{template_name}.{self.config.extension}"
        return template_name

    def render_context(self, injected_data: Any = None) -> dict[str, Any]:
        """Return the variables every template is rendered with."""
        return {
            "development": self.config.development,
            "use_local_files": self.config.use_local_files,
            "cache_bust_files": self.config.cache_busting_file_pairs,
            "injected_data": injected_data,
        }

    def execute(
        self,
        group: str,
        template_name: str,
        injected_data: Any,
        write: Callable[[str], object],
    ) -> None:
        """Render a template, passing each output chunk to *write*.

        Raises :class:`~htmlgroups.exceptions.GroupNotFoundError` for an
        unknown group and :class:`~htmlgroups.exceptions.ExecutionError`
        if the template is unknown or fails while rendering.
        """
        compiled = self.get_group(group)
        filename = self.template_filename(template_name)

        template = compiled.templates.get(filename)
        if template is None:
            raise ExecutionError(group, filename, TemplateNotFound(filename))

        try:
            for chunk in template.generate(self.render_context(injected_data)):
                write(chunk)
        except Exception as exc:
            raise ExecutionError(group, filename, exc) from exc

    def render(
        self,
        sink: OutputSink,
        group: str,
        template_name: str,
        injected_data: Any = None,
    ) -> bool:
        """Render a template into *sink*.

        Failures never propagate: an unknown group sets a 500 error on the
        sink, a failing or unknown template a 404.  Both are logged.

        Returns ``True`` if the template rendered successfully.
        """
        try:
            self.execute(group, template_name, injected_data, sink.write)
        except GroupNotFoundError as exc:
            logger.error("%s", exc)
            sink.set_error(HTTPStatus.INTERNAL_SERVER_ERROR, str(exc))
            return False
        except ExecutionError as exc:
            logger.error("%s", exc)
            sink.set_error(HTTPStatus.NOT_FOUND, str(exc))
            return False
        return True

    def render_string(
        self, group: str, template_name: str, injected_data: Any = None,
    ) -> str:
        """Render a template and return the output.

        Unlike :meth:`render`, errors are raised to the caller.
        """
        recorder = ResponseRecorder()
        self.execute(group, template_name, injected_data, recorder.write)
        return recorder.body
