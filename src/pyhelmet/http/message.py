# Copyright 2026 Firefly Software Solutions Inc.
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
"""Immutable HTTP message values passed through middleware chains.

Header storage is Starlette's :class:`~starlette.datastructures.Headers`:
an immutable, case-insensitive multi-dict over raw ``(bytes, bytes)`` pairs.
Every "mutation" below returns a new value.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field

from starlette.datastructures import Headers


def _as_headers(value: Headers | Mapping[str, str] | None) -> Headers:
    if isinstance(value, Headers):
        return value
    return Headers(headers=dict(value or {}))


def _encode(text: str) -> bytes:
    return text.encode("latin-1")


@dataclass(frozen=True)
class Request:
    """A minimal request value for driving chains outside an ASGI server.

    Middleware chains treat requests as opaque, so any object works;
    the Starlette bridge passes :class:`starlette.requests.Request` instead.
    """

    method: str = "GET"
    path: str = "/"
    headers: Headers = field(default_factory=Headers)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _as_headers(self.headers))


@dataclass(frozen=True)
class Response:
    """An HTTP response whose headers are only changed by copying."""

    status_code: int = 200
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _as_headers(self.headers))

    @classmethod
    def from_raw(cls, status_code: int, raw_headers: list[tuple[bytes, bytes]], body: bytes = b"") -> Response:
        """Build a response from ASGI-style raw header pairs (lower-cased names)."""
        return cls(status_code=status_code, headers=Headers(raw=list(raw_headers)), body=body)

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def get_header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name, default)

    def with_header(self, name: str, value: str) -> Response:
        """Return a copy with *name* set to *value*, replacing earlier values."""
        key = _encode(name.lower())
        raw = [(k, v) for k, v in self.headers.raw if k != key]
        raw.append((key, _encode(value)))
        return dataclasses.replace(self, headers=Headers(raw=raw))

    def without_header(self, name: str) -> Response:
        """Return a copy without *name*; returns ``self`` when it is absent."""
        if not self.has_header(name):
            return self
        key = _encode(name.lower())
        raw = [(k, v) for k, v in self.headers.raw if k != key]
        return dataclasses.replace(self, headers=Headers(raw=raw))
