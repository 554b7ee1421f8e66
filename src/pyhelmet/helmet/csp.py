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
"""Content-Security-Policy directive formatting."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

DEFAULT_DIRECTIVES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "default-src": ("'self'",),
        "base-uri": ("'self'",),
        "font-src": ("'self'", "https:", "data:"),
        "form-action": ("'self'",),
        "frame-ancestors": ("'self'",),
        "img-src": ("'self'", "data:"),
        "object-src": ("'none'",),
        "script-src": ("'self'",),
        "script-src-attr": ("'none'",),
        "style-src": ("'self'", "https:", "'unsafe-inline'"),
        "upgrade-insecure-requests": (),
    }
)


def format_directives(directives: Mapping[str, Any]) -> str:
    """Render *directives* as a policy string.

    ``None`` values are skipped, scalars count as a single token and an empty
    sequence renders the bare directive name. Directives keep mapping order
    and are joined with ``;``; tokens are joined with one space.

    >>> format_directives({"default-src": ["'self'"], "upgrade-insecure-requests": []})
    "default-src 'self';upgrade-insecure-requests"
    """
    parts: list[str] = []
    for name, value in directives.items():
        if value is None:
            continue
        tokens = [str(v) for v in _tokens(value)]
        parts.append(" ".join([name, *tokens]))
    return ";".join(parts)


def _tokens(value: Any) -> Iterable[Any]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        return (value,)
    return value
