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

"""Output sinks that rendered HTML is written to.

Any object with ``write(chunk)`` and ``set_error(status, message)`` can be
used as a sink.  Two ready-made sinks are provided: :class:`ResponseRecorder`
keeps the response in memory (handy in tests and for frameworks that want
a finished body), :class:`StreamSink` forwards chunks to a text stream.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class OutputSink(Protocol):
    """Destination for rendered output."""

    def write(self, chunk: str) -> object: ...

    def set_error(self, status: int, message: str) -> None: ...


class ResponseRecorder:
    """In-memory sink recording the status code and body of a response.

    On :meth:`set_error` any partial output is discarded and the body
    becomes the error message, mirroring a plain-text error response.
    """

    def __init__(self) -> None:
        self.status: int = HTTPStatus.OK
        self.error: str | None = None
        self._chunks: list[str] = []

    def write(self, chunk: str) -> int:
        self._chunks.append(chunk)
        return len(chunk)

    def set_error(self, status: int, message: str) -> None:
        self.status = status
        self.error = message
        self._chunks = [message + "\n"]

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def body(self) -> str:
        return "".join(self._chunks)

    @property
    def content(self) -> bytes:
        return self.body.encode("utf-8")


class StreamSink:
    """Sink that writes chunks straight to a text stream.

    Errors cannot be unwritten from a stream, so they are only recorded
    on the sink (``status`` and ``error``) for the caller to act on.
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self.status: int = HTTPStatus.OK
        self.error: str | None = None

    def write(self, chunk: str) -> int:
        return self.stream.write(chunk)

    def set_error(self, status: int, message: str) -> None:
        self.status = status
        self.error = message
