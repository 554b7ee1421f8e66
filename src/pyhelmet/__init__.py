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
"""pyhelmet: security headers for async HTTP middleware chains."""

__version__ = "0.1.0"

from pyhelmet.helmet import ConfigResolver, HelmetMiddleware, ResolvedRuleSet, resolve
from pyhelmet.http import Request, Response
from pyhelmet.kernel import (
    ConfigurationException,
    ConflictingOptionError,
    InvalidOptionError,
    PyHelmetException,
    TypeMismatchError,
)
from pyhelmet.web import MiddlewareChain, MiddlewareDispatcher, build_chain

__all__ = [
    "__version__",
    "ConfigResolver",
    "ConfigurationException",
    "ConflictingOptionError",
    "HelmetMiddleware",
    "InvalidOptionError",
    "MiddlewareChain",
    "MiddlewareDispatcher",
    "PyHelmetException",
    "Request",
    "ResolvedRuleSet",
    "Response",
    "TypeMismatchError",
    "build_chain",
    "resolve",
]
