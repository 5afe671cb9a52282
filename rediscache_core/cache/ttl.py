"""RedisCache TTL - Time-To-Live Normalization.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum, auto
from typing import Any, Optional, Union

from dateutil.relativedelta import relativedelta

from rediscache_core.errors import InvalidTtlError

# Calendar intervals are resolved against this instant, so "1 month" is
# always January 1970 (31 days) rather than an average month length.
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

RawTtl = Union[None, int, float, str, timedelta, relativedelta]


class TtlKind(Enum):
    """Normalized TTL kinds."""

    INFINITE = auto()   # Never expires
    EXPIRED = auto()    # Already expired, write must become a delete
    ABSOLUTE = auto()   # Expires after a positive number of seconds


@dataclass(frozen=True)
class NormalizedTtl:
    """A TTL in canonical form.

    Attributes:
        kind: TTL kind
        seconds: Seconds for ABSOLUTE, the non-positive source value for
            EXPIRED, None for INFINITE
    """

    kind: TtlKind
    seconds: Optional[int] = None

    @classmethod
    def infinite(cls) -> "NormalizedTtl":
        return cls(TtlKind.INFINITE)

    @classmethod
    def from_seconds(cls, seconds: int) -> "NormalizedTtl":
        """Build from a second count, mapping ``<= 0`` to EXPIRED."""
        if seconds <= 0:
            return cls(TtlKind.EXPIRED, seconds)
        return cls(TtlKind.ABSOLUTE, seconds)

    @property
    def is_infinite(self) -> bool:
        return self.kind is TtlKind.INFINITE

    @property
    def is_expired(self) -> bool:
        return self.kind is TtlKind.EXPIRED


class TtlNormalizer:
    """Converts raw TTL input into a NormalizedTtl.

    Accepted input:
    - None: no expiry
    - int / float: seconds (floats truncated)
    - str: leading integer of the string, 0 when there is none
    - timedelta / relativedelta: interval length measured from the epoch

    Example:
        normalizer = TtlNormalizer()
        normalizer.normalize(relativedelta(hours=6, minutes=8)).seconds  # 22080
        normalizer.normalize("").is_expired                              # True
    """

    def normalize(self, raw: RawTtl) -> NormalizedTtl:
        """Normalize a raw TTL.

        Args:
            raw: Raw TTL value

        Returns:
            NormalizedTtl instance

        Raises:
            InvalidTtlError: If the value type is not supported
        """
        if raw is None:
            return NormalizedTtl.infinite()

        return NormalizedTtl.from_seconds(self.to_seconds(raw))

    def to_seconds(self, raw: Any) -> int:
        """Convert a non-None raw TTL to a signed number of seconds."""
        if isinstance(raw, (timedelta, relativedelta)):
            return int(((EPOCH + raw) - EPOCH).total_seconds())

        # bool is an int subclass but never a meaningful TTL
        if isinstance(raw, bool):
            raise InvalidTtlError(f"Unsupported TTL type: {type(raw).__name__}")

        if isinstance(raw, int):
            return raw

        if isinstance(raw, float):
            return self._truncate(raw)

        if isinstance(raw, str):
            # Numeric prefix, so "12abc" is 12 and "1.5e2" is 150
            match = _LEADING_NUMBER.match(raw)
            if not match:
                return 0
            number = match.group(1)
            if number.lstrip("+-").isdigit():
                return int(number)
            return self._truncate(float(number))

        raise InvalidTtlError(f"Unsupported TTL type: {type(raw).__name__}")

    @staticmethod
    def _truncate(value: float) -> int:
        if not math.isfinite(value):
            raise InvalidTtlError(f"TTL must be finite, got {value!r}")
        return int(value)


default_normalizer = TtlNormalizer()


__all__ = [
    "EPOCH",
    "NormalizedTtl",
    "RawTtl",
    "TtlKind",
    "TtlNormalizer",
    "default_normalizer",
]
