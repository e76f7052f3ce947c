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

"""Configuration for building and rendering template groups.

A :class:`Config` is an explicit settings object handed to a
:class:`~htmlgroups.registry.TemplateRegistry`.  It is checked by
:func:`validate` at the start of every build.

Usage::

    from htmlgroups import Config, TemplateRegistry, default_helpers

    config = Config.on_disk("/srv/app/templates", ["app", "docs"])
    config.helpers = default_helpers()
    registry = TemplateRegistry(config)
    registry.build()
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from importlib.resources.abc import Traversable
from typing import Any

from htmlgroups.exceptions import (
    BasePathMissing,
    InvalidSubdirectory,
    NoEmbeddedSource,
    PathNotFound,
)
from htmlgroups.helpers import HelperFunctions

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "html"


class SourceMode(Enum):
    """Where template source files are read from."""

    ON_DISK = "on_disk"
    EMBEDDED = "embedded"


@dataclass
class Config:
    """Settings for discovering, compiling and rendering templates.

    Attributes:
        base_path: Directory holding the base templates.  Files here are
            inherited into every subdirectory group.  For embedded bundles
            this is a path relative to the bundle root.
        subdirs: Names (not full paths) of subdirectories of ``base_path``
            that hold templates.  May be empty.
        extension: Filename extension of template files, without the dot.
        source_mode: Read templates from disk or from ``embedded_bundle``.
        embedded_bundle: Root of the embedded files, required when
            ``source_mode`` is :attr:`SourceMode.EMBEDDED`.
        helpers: Functions made available to every template.  Must be set
            before :meth:`~htmlgroups.registry.TemplateRegistry.build`.
        cache_busting_file_pairs: Original asset filename mapped to its
            cache-busted filename.  Passed to templates as
            ``cache_bust_files``.
        development: Passed to templates, e.g. to show a dev banner.
        use_local_files: Passed to templates to pick locally hosted
            third-party assets instead of CDN copies.
        strict_undefined: Treat access to an undefined variable or
            attribute as an execution error.
    """

    base_path: str = ""
    subdirs: list[str] = field(default_factory=list)
    extension: str = DEFAULT_EXTENSION
    source_mode: SourceMode = SourceMode.ON_DISK
    embedded_bundle: Traversable | None = None
    helpers: HelperFunctions = field(default_factory=HelperFunctions)
    cache_busting_file_pairs: dict[str, str] = field(default_factory=dict)
    development: bool = False
    use_local_files: bool = False
    strict_undefined: bool = True

    def __post_init__(self) -> None:
        self.base_path = os.fspath(self.base_path)
        self.subdirs = list(self.subdirs)
        if not isinstance(self.helpers, HelperFunctions):
            self.helpers = HelperFunctions(self.helpers)

    @property
    def use_embedded(self) -> bool:
        return self.source_mode is SourceMode.EMBEDDED

    # --- Constructors -------------------------------------------------------

    @classmethod
    def new(cls) -> Config:
        """Return a config with only the defaults set."""
        return cls()

    @classmethod
    def on_disk(
        cls,
        base_path: str | os.PathLike[str],
        subdirs: Iterable[str] = (),
        *,
        helpers: Mapping[str, Callable[..., Any]] | None = None,
    ) -> Config:
        """Return a config for template files stored on disk."""
        return cls(
            base_path=os.fspath(base_path),
            subdirs=list(subdirs),
            helpers=HelperFunctions(helpers),
        )

    @classmethod
    def embedded(
        cls,
        bundle: Traversable | None,
        base_path: str,
        subdirs: Iterable[str] = (),
        *,
        helpers: Mapping[str, Callable[..., Any]] | None = None,
    ) -> Config:
        """Return a config for template files inside an embedded bundle."""
        return cls(
            base_path=base_path,
            subdirs=list(subdirs),
            source_mode=SourceMode.EMBEDDED,
            embedded_bundle=bundle,
            helpers=HelperFunctions(helpers),
        )


def _bundle_is_empty(bundle: Traversable | None) -> bool:
    if bundle is None:
        return True
    try:
        return next(iter(bundle.iterdir()), None) is None
    except (OSError, ValueError):
        return True


def validate(config: Config) -> Config:
    """Check *config* and normalise it in place.

    Checks run in a fixed order and the first failure is raised:

    1. ``base_path`` is set (:class:`BasePathMissing`).
    2. On disk: ``base_path`` exists (:class:`PathNotFound`).
    3. Every subdirectory name is non-blank (:class:`InvalidSubdirectory`);
       on disk each one must also exist (:class:`PathNotFound`).
    4. A blank ``extension`` is replaced by :data:`DEFAULT_EXTENSION`.
    5. Embedded: a non-empty bundle was provided (:class:`NoEmbeddedSource`).

    Existence is not checked for embedded bundles; their layout is known
    at packaging time.  Nothing is ever created on disk.

    Returns the same *config* object.
    """
    config.base_path = os.fspath(config.base_path).strip()
    if not config.base_path:
        raise BasePathMissing()

    if not config.use_embedded and not os.path.exists(config.base_path):
        raise PathNotFound(config.base_path)

    for idx, name in enumerate(config.subdirs):
        name = name.strip()
        if not name:
            raise InvalidSubdirectory()
        if config.use_embedded:
            name = name.replace("\\", "/")
        else:
            name = name.replace("/", os.sep)
            full_path = os.path.join(config.base_path, name)
            if not os.path.exists(full_path):
                raise PathNotFound(full_path)
        config.subdirs[idx] = name

    config.extension = config.extension.strip().lstrip(".")
    if not config.extension:
        config.extension = DEFAULT_EXTENSION

    if config.use_embedded and _bundle_is_empty(config.embedded_bundle):
        raise NoEmbeddedSource()

    if not isinstance(config.helpers, HelperFunctions):
        config.helpers = HelperFunctions(config.helpers)

    logger.debug(
        "Validated template config: base=%s subdirs=%s extension=%s mode=%s",
        config.base_path, config.subdirs, config.extension, config.source_mode.value,
    )
    return config
