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
"""CORS policy data holder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

from flycors.cors.constants import contains_wildcard


@dataclass
class CorsPolicy:
    """Resolved Cross-Origin Resource Sharing settings.

    Usually produced by :meth:`CorsPolicyBuilder.build`, which gives every
    policy its own lists. Callers may also create and fill one directly to
    seed a builder.

    The ``allow_any_*`` flags are not stored: each one reports whether the
    matching list currently contains the ``"*"`` wildcard.
    """

    origins: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    exposed_headers: list[str] = field(default_factory=list)
    supports_credentials: bool = False
    preflight_max_age: timedelta | None = None

    @property
    def allow_any_origin(self) -> bool:
        return contains_wildcard(self.origins)

    @property
    def allow_any_method(self) -> bool:
        return contains_wildcard(self.methods)

    @property
    def allow_any_header(self) -> bool:
        return contains_wildcard(self.headers)

    def __str__(self) -> str:
        max_age = "null" if self.preflight_max_age is None else str(self.preflight_max_age.total_seconds())
        return (
            f"AllowAnyHeader: {self.allow_any_header}, "
            f"AllowAnyMethod: {self.allow_any_method}, "
            f"AllowAnyOrigin: {self.allow_any_origin}, "
            f"PreflightMaxAge: {max_age}, "
            f"SupportsCredentials: {self.supports_credentials}, "
            f"Origins: {{{','.join(self.origins)}}}, "
            f"Methods: {{{','.join(self.methods)}}}, "
            f"Headers: {{{','.join(self.headers)}}}, "
            f"ExposedHeaders: {{{','.join(self.exposed_headers)}}}"
        )
