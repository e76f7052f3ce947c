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

"""Helper functions exposed to templates.

Helpers are plain callables made available as globals in every compiled
group, e.g. ``{{ addInt(3, 4) }}``.  They are registered in a
:class:`HelperFunctions` table, which checks each entry when it is added
rather than when a template first calls it.

The default helpers (see :func:`default_helpers`) are:

* ``indexOf(needle, haystack)``: position of *needle* in *haystack*, or ``-1``
* ``dateReformat(date, fmt)``: reformat a ``yyyy-mm-dd`` date with ``strftime``
* ``addInt(x, y)``: integer addition
"""

from __future__ import annotations

import inspect
import keyword
from collections.abc import Callable, Iterator, Mapping
from datetime import datetime
from typing import Any

from htmlgroups.exceptions import InvalidHelper

INPUT_DATE_FORMAT = "%Y-%m-%d"


class HelperFunctions(Mapping[str, Callable[..., Any]]):
    """Validated, read-only mapping of helper name to callable.

    Entries are added with :meth:`register`; the mapping interface is
    read-only so a table can be handed to the template engine as is.
    """

    def __init__(self, helpers: Mapping[str, Callable[..., Any]] | None = None) -> None:
        self._funcs: dict[str, Callable[..., Any]] = {}
        for name, func in (helpers or {}).items():
            self.register(name, func)

    def register(self, name: str, func: Callable[..., Any]) -> None:
        """Add *func* under *name*, replacing any existing entry.

        Raises :class:`~htmlgroups.exceptions.InvalidHelper` if *name* is not
        usable as a template identifier or *func* is not a callable with an
        inspectable signature.
        """
        if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
            raise InvalidHelper(f"templates: invalid helper name {name!r}")
        if not callable(func):
            raise InvalidHelper(f"templates: helper {name!r} is not callable")
        try:
            inspect.signature(func)
        except (TypeError, ValueError) as exc:
            raise InvalidHelper(f"templates: helper {name!r} has no usable signature") from exc
        self._funcs[name] = func

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self._funcs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._funcs)

    def __len__(self) -> int:
        return len(self._funcs)

    def __repr__(self) -> str:
        return f"HelperFunctions({sorted(self._funcs)!r})"


def index_of(needle: str, haystack: str) -> int:
    """Return the position of *needle* in *haystack*, or -1 if absent."""
    return haystack.find(needle)


def date_reformat(date: str, fmt: str) -> str:
    """Reformat a ``yyyy-mm-dd`` date string using a ``strftime`` format.

    Invalid input dates are returned unchanged.
    """
    try:
        parsed = datetime.strptime(date, INPUT_DATE_FORMAT)
    except (TypeError, ValueError):
        return date
    return parsed.strftime(fmt)


def add_int(x: int, y: int) -> int:
    return x + y


def default_helpers() -> HelperFunctions:
    """Return a new table holding the built-in helpers."""
    return HelperFunctions(
        {
            "indexOf": index_of,
            "dateReformat": date_reformat,
            "addInt": add_int,
        }
    )
