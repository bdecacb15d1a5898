"""A string that is written to JSON as an integer."""

from __future__ import annotations

import re


class StringFromInt(str):
    """Raw JSON text kept as a string and emitted as an integer."""

    def to_json(self) -> str:
        """JSON text of the integer held; "null" is written as 0."""
        if self == "null":
            return "0"
        if not re.fullmatch(r"[+-]?[0-9]+", self) or not -(1 << 63) <= int(self) < 1 << 63:
            raise ValueError(f"invalid 64-bit integer {str(self)!r}")
        return str(int(self))

    @classmethod
    def from_json(cls, data: str | bytes | bytearray) -> StringFromInt:
        """Keep the raw JSON text exactly as given."""
        return cls(data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data)