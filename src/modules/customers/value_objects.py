"""PhoneNumber value object.

An instance can only be obtained through ``PhoneNumber(raw)``, which
validates and normalises, so holding a ``PhoneNumber`` means holding a
valid number.  ``_restore`` exists for the ORM field only: it rehydrates
a value that already went through the constructor before being stored.
"""

from __future__ import annotations

import re
from typing import Any, Final

from modules.customers.exceptions import InvalidPhoneNumber

PHONE_PATTERN: Final = re.compile(r"^[+]?[0-9\s\-()]{5,20}$")
_STRIP_PATTERN: Final = re.compile(r"[^0-9+]")


class PhoneNumber:
    """Immutable, normalised phone number (digits and ``+`` only)."""

    __slots__ = ("_value",)

    _value: str

    def __init__(self, raw: Any) -> None:
        if not self.is_valid(raw):
            raise InvalidPhoneNumber("Invalid phone number")
        object.__setattr__(self, "_value", _STRIP_PATTERN.sub("", raw.strip()))

    @staticmethod
    def is_valid(raw: Any) -> bool:
        """Return ``True`` if *raw* (trimmed) matches the accepted pattern."""
        return isinstance(raw, str) and PHONE_PATTERN.match(raw.strip()) is not None

    @classmethod
    def _restore(cls, normalized: str) -> PhoneNumber:
        instance = object.__new__(cls)
        object.__setattr__(instance, "_value", normalized)
        return instance

    @property
    def value(self) -> str:
        return self._value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("PhoneNumber is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (PhoneNumber._restore, (self._value,))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PhoneNumber):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"PhoneNumber({self._value!r})"
