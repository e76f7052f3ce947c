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

"""Process-wide default registry for applications that want just one.

This is a thin wrapper around a single :class:`~htmlgroups.config.Config`
and :class:`~htmlgroups.registry.TemplateRegistry`; everything here can be
done with those objects directly.

Usage::

    from htmlgroups import shortcuts

    shortcuts.default_on_disk_config("templates", ["app", "docs"])
    shortcuts.set_development(True)
    shortcuts.build()
    ...
    shortcuts.show(sink, "app", "index", {"user": user})
"""

from __future__ import annotations

from collections.abc import Iterable
from importlib.resources.abc import Traversable
from typing import Any

from htmlgroups.config import Config
from htmlgroups.helpers import default_helpers
from htmlgroups.registry import TemplateRegistry
from htmlgroups.sinks import OutputSink

_registry = TemplateRegistry(Config.new())


def configure(config: Config) -> TemplateRegistry:
    """Replace the default config; previously built groups are dropped."""
    global _registry
    _registry = TemplateRegistry(config)
    return _registry


def default_config() -> Config:
    """Set a config holding only the defaults and return it."""
    return configure(Config.new()).config


def default_on_disk_config(base_path: str, subdirs: Iterable[str] = ()) -> Config:
    """Set an on-disk config with the default helpers and return it."""
    return configure(Config.on_disk(base_path, subdirs, helpers=default_helpers())).config


def default_embedded_config(
    bundle: Traversable, base_path: str, subdirs: Iterable[str] = (),
) -> Config:
    """Set an embedded config with the default helpers and return it."""
    return configure(
        Config.embedded(bundle, base_path, subdirs, helpers=default_helpers())
    ).config


def get_config() -> Config:
    return _registry.config


def get_registry() -> TemplateRegistry:
    return _registry


def build() -> None:
    """Build the default registry (see :meth:`TemplateRegistry.build`)."""
    _registry.build()


def show(sink: OutputSink, subdir: str, template_name: str, injected_data: Any = None) -> bool:
    """Render from the default registry (see :meth:`TemplateRegistry.render`)."""
    return _registry.render(sink, subdir, template_name, injected_data)


def set_development(yes: bool) -> None:
    _registry.config.development = yes


def set_use_local_files(yes: bool) -> None:
    _registry.config.use_local_files = yes


def set_cache_busting_file_pairs(pairs: dict[str, str]) -> None:
    _registry.config.cache_busting_file_pairs = pairs
