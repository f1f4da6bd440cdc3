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
"""CORS configuration properties."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from flycors.core.config import config_properties


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class CorsPolicyProperties(BaseModel):
    """One named policy under flycors.cors.policies.<name>.*"""

    model_config = ConfigDict(alias_generator=_kebab, populate_by_name=True)

    origins: list[str] = Field(default_factory=list)
    methods: list[str] = Field(default_factory=list)
    headers: list[str] = Field(default_factory=list)
    exposed_headers: list[str] = Field(default_factory=list)
    supports_credentials: bool = False
    max_age: int | None = Field(default=None, ge=0)  # seconds


@config_properties(prefix="flycors.cors")
class CorsProperties(BaseModel):
    """Configuration for registered CORS policies (flycors.cors.*)."""

    model_config = ConfigDict(alias_generator=_kebab, populate_by_name=True)

    default_policy_name: str | None = None
    policies: dict[str, CorsPolicyProperties] = Field(default_factory=dict)
