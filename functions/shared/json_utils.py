# Copyright 2025 Google LLC
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
# ==============================================================================


"""
Key-casing helpers for moving records between the camelCase shape used by
local storage and the API, and the snake_case columns of the remote tables.
"""

from __future__ import annotations

import re
from typing import Any, Callable

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def convert_keys(data: Any, converter: Callable[[str], str]) -> Any:
    """Recursively rename every dict key in `data` with `converter`."""
    if isinstance(data, dict):
        return {
            (converter(key) if isinstance(key, str) else key): convert_keys(
                value, converter
            )
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [convert_keys(item, converter) for item in data]
    return data
