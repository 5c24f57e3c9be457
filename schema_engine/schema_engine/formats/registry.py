from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from ..exceptions import FormatRegistrationError
from .predicates import BUILTIN_FORMATS

logger = logging.getLogger(__name__)

FormatPredicate = Callable[[str], None]


class FormatRegistry:
    """Maps format names to predicates.

    Unknown format names are a no-op success: ``format`` is advisory in Draft-07.
    """

    def __init__(self, predicates: Optional[Dict[str, FormatPredicate]] = None):
        self._predicates: Dict[str, FormatPredicate] = dict(
            BUILTIN_FORMATS if predicates is None else predicates
        )

    def register(self, name: str, predicate: Optional[FormatPredicate] = None):
        """Register ``predicate`` for ``name``; usable as a decorator.

        A predicate raises ``ValueError`` with a reason for non-conforming strings.
        """
        if not isinstance(name, str) or not name:
            raise FormatRegistrationError(f"Format name must be a non-empty string, got: {name!r}")

        def _register(func: FormatPredicate) -> FormatPredicate:
            if not callable(func):
                raise FormatRegistrationError(f"Format predicate for '{name}' is not callable")
            if name in self._predicates:
                logger.debug(f"Overriding format predicate '{name}'")
            self._predicates[name] = func
            return func

        if predicate is None:
            return _register
        return _register(predicate)

    def unregister(self, name: str) -> None:
        self._predicates.pop(name, None)

    def known_formats(self):
        return sorted(self._predicates)

    def validate(self, value: str, format_name: str) -> Optional[str]:
        """Return ``None`` when ``value`` conforms, else the reason it does not."""
        predicate = self._predicates.get(format_name)
        if predicate is None:
            return None
        try:
            predicate(value)
        except ValueError as exc:
            return str(exc) or f"not a valid {format_name}"
        return None

    def is_valid(self, value: str, format_name: str) -> bool:
        return self.validate(value, format_name) is None

    def copy(self) -> "FormatRegistry":
        return FormatRegistry(self._predicates)


default_formats = FormatRegistry()


def validate_format(value: str, format_name: str) -> Optional[str]:
    return default_formats.validate(value, format_name)


def is_valid_format(value: str, format_name: str) -> bool:
    return default_formats.is_valid(value, format_name)
