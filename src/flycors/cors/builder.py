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
"""Fluent builder for CORS policies."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

import structlog

from flycors.cors.constants import ANY_ORIGIN
from flycors.cors.policy import CorsPolicy

if TYPE_CHECKING:
    from flycors.config.properties.cors import CorsPolicyProperties

logger = structlog.get_logger("flycors.cors")


class CorsPolicyBuilder:
    """Accumulates CORS settings and produces independent :class:`CorsPolicy` snapshots.

    Usage::

        policy = (
            CorsPolicyBuilder("https://app.example.com")
            .with_methods("GET", "POST")
            .allow_any_header()
            .allow_credentials()
            .set_preflight_max_age(timedelta(minutes=10))
            .build()
        )

    Nothing is validated or deduplicated; values are kept exactly as given.
    """

    def __init__(self, *origins: str) -> None:
        self._origins: list[str] = list(origins)
        self._methods: list[str] = []
        self._headers: list[str] = []
        self._exposed_headers: list[str] = []
        self._supports_credentials = False
        self._preflight_max_age: timedelta | None = None

    @classmethod
    def from_policy(cls, policy: CorsPolicy) -> CorsPolicyBuilder:
        """Start from a copy of *policy*; later changes to either side stay separate."""
        builder = cls(*policy.origins)
        builder._methods = list(policy.methods)
        builder._headers = list(policy.headers)
        builder._exposed_headers = list(policy.exposed_headers)
        builder._supports_credentials = policy.supports_credentials
        builder._preflight_max_age = policy.preflight_max_age
        return builder

    @classmethod
    def from_properties(cls, props: CorsPolicyProperties) -> CorsPolicyBuilder:
        """Start from a policy bound from configuration (``max_age`` in seconds)."""
        builder = (
            cls(*props.origins)
            .with_methods(*props.methods)
            .with_headers(*props.headers)
            .with_exposed_headers(*props.exposed_headers)
        )
        builder._supports_credentials = props.supports_credentials
        if props.max_age is not None:
            builder.set_preflight_max_age(timedelta(seconds=props.max_age))
        return builder

    # ── origins ────────────────────────────────────────────────

    def with_origins(self, *origins: str) -> CorsPolicyBuilder:
        self._origins.extend(origins)
        return self

    def allow_any_origin(self) -> CorsPolicyBuilder:
        self._origins.append(ANY_ORIGIN)
        return self

    # ── methods ────────────────────────────────────────────────

    def with_methods(self, *methods: str) -> CorsPolicyBuilder:
        self._methods.extend(methods)
        return self

    def allow_any_method(self) -> CorsPolicyBuilder:
        self._methods.append(ANY_ORIGIN)
        return self

    # ── headers ────────────────────────────────────────────────

    def with_headers(self, *headers: str) -> CorsPolicyBuilder:
        self._headers.extend(headers)
        return self

    def allow_any_header(self) -> CorsPolicyBuilder:
        self._headers.append(ANY_ORIGIN)
        return self

    def with_exposed_headers(self, *exposed_headers: str) -> CorsPolicyBuilder:
        self._exposed_headers.extend(exposed_headers)
        return self

    # ── preflight & credentials ────────────────────────────────

    def set_preflight_max_age(self, max_age: timedelta) -> CorsPolicyBuilder:
        """How long browsers may cache a preflight result. Replaces any earlier value."""
        self._preflight_max_age = max_age
        return self

    def allow_credentials(self) -> CorsPolicyBuilder:
        self._supports_credentials = True
        return self

    def disallow_credentials(self) -> CorsPolicyBuilder:
        self._supports_credentials = False
        return self

    # ── build ──────────────────────────────────────────────────

    def build(self) -> CorsPolicy:
        """Snapshot the current settings into a new policy with its own lists."""
        policy = CorsPolicy(
            origins=list(self._origins),
            methods=list(self._methods),
            headers=list(self._headers),
            exposed_headers=list(self._exposed_headers),
            supports_credentials=self._supports_credentials,
            preflight_max_age=self._preflight_max_age,
        )
        logger.debug(
            "cors_policy_built",
            origins=policy.origins,
            allow_any_origin=policy.allow_any_origin,
            supports_credentials=policy.supports_credentials,
        )
        return policy
