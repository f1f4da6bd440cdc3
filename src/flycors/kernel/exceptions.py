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
"""Unified exception hierarchy for flycors.

All library exceptions inherit from FlyCorsException, so callers can catch
a single type or target a specific subclass.

Categories:
- BusinessException: invalid input and missing policies
- InfrastructureException: configuration loading and binding failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyCorsException(Exception):
    """Base exception for all flycors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_POLICY_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(FlyCorsException):
    """Rule violations in how policies are named, registered or looked up."""


class ValidationException(BusinessException):
    """Input validation failures."""


class InvalidPolicyNameException(ValidationException):
    """A policy was registered under an empty name."""


class ResourceNotFoundException(BusinessException):
    """Requested resource does not exist."""


class PolicyNotFoundException(ResourceNotFoundException):
    """No CORS policy is registered under the requested name."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(FlyCorsException):
    """Failures outside the policy model itself."""


class ConfigurationException(InfrastructureException):
    """Configuration could not be loaded, resolved or bound."""
