"""RedisCache Keys - Key Validation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Redis uses braces for cluster hash tags and several other characters in
pattern syntax, so keys containing any of them are refused outright.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, List, Tuple

from rediscache_core.errors import InvalidKeyError

RESERVED_CHARACTERS = "{}()/\\@:"


class KeyValidator:
    """Validates cache keys and key collections.

    Example:
        validator = KeyValidator()
        validator.validate("user.1")          # ok
        validator.validate("user:1")          # raises InvalidKeyError
        keys = validator.validate_all(k for k in ("a", "b"))
    """

    def __init__(self, reserved: str = RESERVED_CHARACTERS):
        """Initialize validator.

        Args:
            reserved: Characters that may not appear in a key
        """
        self.reserved = frozenset(reserved)

    def validate(self, key: Any) -> None:
        """Validate a single key.

        Args:
            key: Candidate key

        Raises:
            InvalidKeyError: If the key is not a non-empty string free of
                reserved characters
        """
        if not isinstance(key, str) or key == "":
            raise InvalidKeyError("Invalid key value.")
        if not self.reserved.isdisjoint(key):
            raise InvalidKeyError("Invalid key value.")

    def validate_all(self, keys: Any) -> List[str]:
        """Validate a key collection.

        The collection is consumed exactly once, so generators are accepted.

        Args:
            keys: Iterable of candidate keys

        Returns:
            The keys as a list, in input order

        Raises:
            InvalidKeyError: If ``keys`` is not iterable, is empty, or holds
                an invalid key
        """
        items = self._materialize(keys)
        if not items:
            raise InvalidKeyError("Invalid key values.")

        for key in items:
            self.validate(key)
        return items

    def pairs(self, values: Any) -> List[Tuple[str, Any]]:
        """Validate a key/value collection.

        Args:
            values: Mapping, or iterable of ``(key, value)`` pairs

        Returns:
            List of ``(key, value)`` tuples in input order

        Raises:
            InvalidKeyError: If the input has the wrong shape, is empty, or
                holds an invalid key
        """
        if isinstance(values, Mapping):
            items = list(values.items())
        else:
            items = []
            for pair in self._materialize(values):
                if not isinstance(pair, tuple) or len(pair) != 2:
                    raise InvalidKeyError(
                        f"Key/value pair is expected, got {type(pair).__name__}"
                    )
                items.append(pair)

        self.validate_all([key for key, _ in items])
        return items

    @staticmethod
    def _materialize(iterable: Any) -> list:
        if isinstance(iterable, (str, bytes)) or not isinstance(iterable, Iterable):
            raise InvalidKeyError(
                f"Iterable is expected, got {type(iterable).__name__}"
            )
        return list(iterable)


default_validator = KeyValidator()


__all__ = ["KeyValidator", "RESERVED_CHARACTERS", "default_validator"]
