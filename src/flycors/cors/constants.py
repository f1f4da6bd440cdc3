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
"""Wildcard sentinel and derivation helpers shared by policies and builders."""

from __future__ import annotations

from collections.abc import Iterable

ANY_ORIGIN = "*"
"""Wildcard entry meaning "any" in origins, methods or headers."""

DEFAULT_POLICY_NAME = "__DefaultCorsPolicy"


def contains_wildcard(values: Iterable[str]) -> bool:
    """Return True if *values* holds the ``"*"`` wildcard entry."""
    return ANY_ORIGIN in values
