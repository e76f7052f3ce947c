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

"""Template file discovery for on-disk and embedded sources.

Template sources come either from the filesystem or from an embedded
bundle, i.e. any :class:`importlib.resources.abc.Traversable` such as
``importlib.resources.files("myapp")`` or a :class:`zipfile.Path`.
Both are accessed through the :class:`TemplateSource` interface, which is
selected once per configuration by :func:`source_for`.

Embedded bundles always address files with ``/`` separators, whatever the
host OS, so :class:`EmbeddedSource` normalises every path it is given and
every path it returns.
"""

from __future__ import annotations

import logging
import os
import posixpath
from abc import ABC, abstractmethod
from collections.abc import Iterator
from importlib.resources.abc import Traversable

from htmlgroups.config import Config, SourceMode
from htmlgroups.exceptions import DiscoveryError, NoEmbeddedSource

logger = logging.getLogger(__name__)


class TemplateSource(ABC):
    """Where template files are listed and read from."""

    @abstractmethod
    def normalize(self, path: str) -> str:
        """Return *path* in the separator form this source expects."""

    @abstractmethod
    def join(self, directory: str, name: str) -> str:
        """Join a directory path and an entry name."""

    @abstractmethod
    def iter_entries(self, directory: str) -> Iterator[tuple[str, bool]]:
        """Yield ``(name, is_dir)`` for each immediate entry of *directory*.

        Raises :class:`OSError` or :class:`ValueError` if the directory
        cannot be listed.
        """

    @abstractmethod
    def read_text(self, path: str) -> str:
        """Return the decoded contents of the file at *path*."""


class OnDiskSource(TemplateSource):
    """Template files stored on the local filesystem (native separators)."""

    def normalize(self, path: str) -> str:
        return path

    def join(self, directory: str, name: str) -> str:
        return os.path.join(directory, name)

    def iter_entries(self, directory: str) -> Iterator[tuple[str, bool]]:
        with os.scandir(directory) as entries:
            for entry in entries:
                yield entry.name, entry.is_dir()

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as fh:
            return fh.read()


class EmbeddedSource(TemplateSource):
    """Template files inside an embedded bundle (always ``/`` separated).

    Args:
        bundle: Root of the bundle; paths are resolved relative to it.
    """

    def __init__(self, bundle: Traversable | None) -> None:
        if bundle is None:
            raise NoEmbeddedSource()
        self.bundle = bundle

    def normalize(self, path: str) -> str:
        return path.replace("\\", "/")

    def join(self, directory: str, name: str) -> str:
        return self.normalize(posixpath.join(self.normalize(directory), name))

    def _resolve(self, path: str) -> Traversable:
        node = self.bundle
        for part in self.normalize(path).split("/"):
            if part in ("", "."):
                continue
            node = node.joinpath(part)
        return node

    def iter_entries(self, directory: str) -> Iterator[tuple[str, bool]]:
        for child in self._resolve(directory).iterdir():
            yield child.name, child.is_dir()

    def read_text(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")


def source_for(config: Config) -> TemplateSource:
    """Return the source implementation matching ``config.source_mode``."""
    if config.source_mode is SourceMode.EMBEDDED:
        return EmbeddedSource(config.embedded_bundle)
    return OnDiskSource()


def discover(directory: str, source: TemplateSource, extension: str) -> list[str]:
    """Return full paths of the template files directly inside *directory*.

    Only files whose extension is exactly ``"." + extension`` are kept, so
    ``report.html.bak`` does not match ``html``.  Nested directories are
    not descended into.  An existing directory without matching files
    yields an empty list.

    Raises :class:`~htmlgroups.exceptions.DiscoveryError` if the directory
    cannot be listed.
    """
    directory = source.normalize(directory)
    suffix = "." + extension
    try:
        entries = sorted(source.iter_entries(directory))
    except (OSError, ValueError) as exc:
        raise DiscoveryError(directory, exc) from exc

    paths = [
        source.join(directory, name)
        for name, is_dir in entries
        if not is_dir and os.path.splitext(name)[1] == suffix
    ]
    logger.debug("Found %d template file(s) in %s", len(paths), directory)
    return paths


def list_embedded_files(bundle: Traversable) -> list[str]:
    """Return (and log) the path of every entry in an embedded bundle.

    Meant for diagnostics only, to confirm which files actually made it
    into the bundle.  Paths are relative to the bundle root and ``/``
    separated; directories are listed before their contents.
    """
    found: list[str] = []

    def _walk(node: Traversable, prefix: str) -> None:
        for child in sorted(node.iterdir(), key=lambda c: c.name):
            path = f"{prefix}{child.name}"
            found.append(path)
            logger.info("%s", path)
            if child.is_dir():
                _walk(child, path + "/")

    _walk(bundle, "")
    return found
