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
"""Registry of named CORS policies."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from flycors.config.properties.cors import CorsProperties
from flycors.core.config import Config
from flycors.cors.builder import CorsPolicyBuilder
from flycors.cors.constants import DEFAULT_POLICY_NAME
from flycors.cors.policy import CorsPolicy
from flycors.kernel.exceptions import InvalidPolicyNameException, PolicyNotFoundException

if TYPE_CHECKING:
    from flycors.logging.port import LoggingPort

logger = structlog.get_logger("flycors.cors")

PolicySource = CorsPolicy | Callable[[CorsPolicyBuilder], Any]


class CorsOptions:
    """Holds CORS policies by name, plus which name is the default.

    A policy is registered either ready-made or through a callable that
    configures a fresh :class:`CorsPolicyBuilder`::

        options = CorsOptions()
        options.add_policy("public", lambda b: b.allow_any_origin().with_methods("GET"))
        options.add_default_policy(CorsPolicyBuilder("https://app.example.com").build())
    """

    def __init__(self, default_policy_name: str = DEFAULT_POLICY_NAME) -> None:
        self.default_policy_name = default_policy_name
        self._policies: dict[str, CorsPolicy] = {}

    @classmethod
    def from_config(cls, config: Config, logging_port: LoggingPort | None = None) -> CorsOptions:
        """Register every policy found under ``flycors.cors.policies``.

        When *logging_port* is given it is configured from the same config
        (``flycors.logging.*``) before any policy is loaded, and the load
        summary is logged through it.
        """
        log = logger
        if logging_port is not None:
            logging_port.configure(config)
            log = logging_port.get_logger("flycors.cors")

        props = config.bind(CorsProperties)
        options = cls(props.default_policy_name or DEFAULT_POLICY_NAME)
        for name, policy_props in props.policies.items():
            options.add_policy(name, CorsPolicyBuilder.from_properties(policy_props).build())
        log.info(
            "cors_policies_loaded",
            policies=options.policy_names,
            default_policy=options.default_policy_name,
        )
        return options

    @property
    def policy_names(self) -> list[str]:
        return list(self._policies)

    def add_policy(self, name: str, policy: PolicySource) -> None:
        """Register a snapshot of *policy* under *name*, replacing any policy already there.

        A ready-made policy is copied, so later changes to it are not seen here.
        """
        if not name:
            raise InvalidPolicyNameException(
                "CORS policy name must not be empty",
                code="CORS_POLICY_NAME_EMPTY",
            )
        if isinstance(policy, CorsPolicy):
            builder = CorsPolicyBuilder.from_policy(policy)
        else:
            builder = CorsPolicyBuilder()
            policy(builder)
        if name in self._policies:
            logger.debug("cors_policy_replaced", policy=name)
        self._policies[name] = builder.build()

    def add_default_policy(self, policy: PolicySource) -> None:
        self.add_policy(self.default_policy_name, policy)

    def get_policy(self, name: str) -> CorsPolicy | None:
        return self._policies.get(name)

    def require_policy(self, name: str) -> CorsPolicy:
        """Like :meth:`get_policy`, but a missing name is an error."""
        policy = self._policies.get(name)
        if policy is None:
            raise PolicyNotFoundException(
                f"No CORS policy registered under '{name}'",
                code="CORS_POLICY_NOT_FOUND",
                context={"policy": name},
            )
        return policy
