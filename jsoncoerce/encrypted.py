"""Integer and string values that may arrive encrypted in JSON."""

from __future__ import annotations

import binascii
import json
import math
import re
from decimal import Decimal
from typing import Any

from jsoncoerce.passphrase import decrypt_by_passphrase

_ENCRYPTED_PREFIX = "0x02"
_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def _loads(data: str | bytes | bytearray) -> Any:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    value = json.loads(data, parse_constant=_reject_constant)
    return "" if value is None else value


def _decrypt_hex(text: str) -> str:
    return decrypt_by_passphrase(binascii.unhexlify(text[2:]))


def _format_float(number: int | float) -> str:
    """Shortest round-trip text, exponent form outside 1e-4 <= |x| < 1e6."""
    try:
        number = float(number)
    except OverflowError as exc:
        raise ValueError(f"number {number!r} out of range") from exc
    if math.isinf(number):
        raise ValueError(f"number {number!r} out of range")
    decimal = Decimal(repr(number)).normalize()
    power = decimal.adjusted()
    if -4 <= power < 6:
        return format(decimal, "f")
    sign, digits, _ = decimal.as_tuple()
    text = "".join(map(str, digits))
    mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
    return f"{'-' if sign else ''}{mantissa}e{power:+03d}"


class Int64Encrypted(int):
    """An integer carried in JSON as a string, possibly encrypted."""

    def to_json(self) -> str:
        """JSON text: the bare decimal integer."""
        return str(int(self))

    @classmethod
    def from_json(cls, data: str | bytes | bytearray) -> Int64Encrypted:
        """Parse a JSON string; unparsable plain text gives 0."""
        value = _loads(data)
        if not isinstance(value, str):
            raise ValueError(f"expected a JSON string, got {value!r}")
        if value.startswith(_ENCRYPTED_PREFIX):
            value = _decrypt_hex(value)
            if _INTEGER.fullmatch(value) is None:
                raise ValueError(f"invalid integer {value!r}")
            if not _INT64_MIN <= int(value) <= _INT64_MAX:
                raise ValueError(f"integer {value!r} out of range")
            return cls(int(value))
        if _INTEGER.fullmatch(value) is None:
            return cls(0)
        return cls(min(max(int(value), _INT64_MIN), _INT64_MAX))

    @classmethod
    def scan(cls, value: Any) -> Int64Encrypted:
        """Build from a database integer."""
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        raise TypeError(f"failed to unmarshal Int64Encrypted value: {value!r}")

    def value(self) -> int:
        """Database form: the plain integer."""
        return int(self)


class StringEncrypted(str):
    """A string carried in JSON as text or a number, possibly encrypted."""

    @classmethod
    def from_json(cls, data: str | bytes | bytearray) -> StringEncrypted:
        """Parse a JSON string or number, decrypting and normalising text."""
        value = _loads(data)
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError(f"expected a JSON string or number, got {value!r}")
        if not isinstance(value, str):
            return cls(_format_float(value))
        if value.startswith(_ENCRYPTED_PREFIX):
            value = _decrypt_hex(value)
        return cls(value.replace("\u00a0", " ").replace("'", '"'))

    @classmethod
    def scan(cls, value: Any) -> StringEncrypted:
        """Build from a database string or bytes."""
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(bytes(value).decode("utf-8", errors="replace"))
        raise TypeError(f"failed to unmarshal String value: {value!r}")

    def value(self) -> str:
        """Database form: the plain string."""
        return str(self)