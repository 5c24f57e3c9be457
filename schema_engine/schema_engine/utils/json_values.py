# Copyright 2025 TIER IV, inc.
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

"""Helpers for plain JSON values (None/bool/int/float/str/list/dict)."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from functools import lru_cache
from typing import Any, Optional, Tuple


def is_number(value: Any) -> bool:
    # bool is an int subclass but a distinct JSON kind
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integer_value(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def deep_equals(a: Any, b: Any) -> bool:
    """Structural, type-respecting equality for JSON values.

    ``True`` never equals ``1``; ``1`` equals ``1.0``; object key order is ignored.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) or is_number(b):
        return is_number(a) and is_number(b) and a == b
    if a is None or b is None:
        return a is None and b is None
    if is_array(a) or is_array(b):
        if not (is_array(a) and is_array(b)) or len(a) != len(b):
            return False
        return all(deep_equals(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) or isinstance(b, dict):
        if not (isinstance(a, dict) and isinstance(b, dict)) or len(a) != len(b):
            return False
        return all(k in b and deep_equals(v, b[k]) for k, v in a.items())
    return a == b


def first_duplicate(items) -> Optional[Tuple[int, int]]:
    """Return the first ``(i, j)`` pair (i < j, smallest j) of deep-equal elements."""
    for j in range(1, len(items)):
        for i in range(j):
            if deep_equals(items[i], items[j]):
                return i, j
    return None


def _to_fraction(number) -> Fraction:
    if isinstance(number, int):
        return Fraction(number)
    # repr() gives the shortest decimal that round-trips, so 0.1 becomes exactly 1/10
    return Fraction(Decimal(repr(number)))


def is_multiple_of(value, divisor) -> bool:
    """Exact rational ``multipleOf`` check."""
    # only floats can be non-finite; math.isfinite overflows on very large ints
    if any(isinstance(x, float) and not math.isfinite(x) for x in (value, divisor)) or divisor == 0:
        return False
    try:
        quotient = _to_fraction(value) / _to_fraction(divisor)
    except (InvalidOperation, ValueError, ZeroDivisionError):
        return False
    return quotient.denominator == 1


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern:
    """Compile and cache a schema regex; raises ``re.error`` when invalid."""
    return re.compile(pattern)


def describe(value: Any, limit: int = 60) -> str:
    """Render ``value`` as JSON text for error messages, truncated to ``limit``."""
    text = json.dumps(value, default=str)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text
