"""
JSON-RPC quantity encoding and decoding.

Quantities are unsigned integers of a fixed width, written on the wire as
0x-prefixed hex without leading zeros ("0x0" for zero). The helpers below
are parametrized over the width (U64 / U128) and the shape of the value:
scalar, flat list, nested list, or optional nested list.

Decoding is deliberately lenient in the same way the reference clients are:
hex strings, plain decimal strings and JSON integers are all accepted, as
long as the value fits the requested width.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Optional, Sequence

from eth_utils import is_0x_prefixed, remove_0x_prefix, to_hex


U64 = 64
U128 = 128

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class DecodeError(ValueError):
    """Malformed wire value. ``field`` is the JSON key it was read from."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        if field is not None:
            message = f"{field}: {message}"
        super().__init__(message)
        self.field = field


def _max_value(bits: int) -> int:
    return (1 << bits) - 1


def _check_range(value: int, bits: int) -> None:
    if value < 0:
        raise ValueError(f"quantity must be non-negative, got {value}")
    if value > _max_value(bits):
        raise ValueError(f"quantity {value:#x} does not fit in {bits} bits")


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def encode_quantity(value: int, bits: int = U128) -> str:
    """Encode an unsigned integer as a JSON-RPC quantity string."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"quantity must be int, got {type(value).__name__}")
    _check_range(value, bits)
    return to_hex(value)


def decode_quantity(raw: Any, bits: int = U128, field: Optional[str] = None) -> int:
    """Decode a quantity from its wire form.

    Accepts "0x"-prefixed hex, decimal strings and non-negative JSON
    integers. Raises DecodeError for anything else or on overflow.
    """
    if isinstance(raw, bool):
        raise DecodeError(f"expected quantity, got {raw!r}", field)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        value = _parse_quantity_str(raw, field)
    else:
        raise DecodeError(f"expected quantity, got {type(raw).__name__}", field)

    try:
        _check_range(value, bits)
    except ValueError as e:
        raise DecodeError(str(e), field) from e
    return value


def _parse_quantity_str(raw: str, field: Optional[str]) -> int:
    if is_0x_prefixed(raw):
        digits = remove_0x_prefix(raw)
        if not digits or not _HEX_DIGITS.issuperset(digits):
            raise DecodeError(f"invalid hex quantity {raw!r}", field)
        return int(digits, 16)
    if not raw or not raw.isascii() or not raw.isdigit():
        raise DecodeError(f"invalid quantity {raw!r}", field)
    try:
        return int(raw, 10)
    except ValueError as e:
        # exceeds the interpreter's int/str conversion limit
        raise DecodeError(f"quantity {raw[:16]}... is too large", field) from e


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------

def encode_quantity_list(values: Sequence[int], bits: int = U128) -> list[str]:
    return [encode_quantity(v, bits) for v in values]


def decode_quantity_list(raw: Any, bits: int = U128,
                         field: Optional[str] = None) -> list[int]:
    if not isinstance(raw, list):
        raise DecodeError(f"expected array, got {type(raw).__name__}", field)
    return [decode_quantity(item, bits, field) for item in raw]


def encode_quantity_matrix(rows: Sequence[Sequence[int]],
                           bits: int = U128) -> list[list[str]]:
    return [encode_quantity_list(row, bits) for row in rows]


def decode_quantity_matrix(raw: Any, bits: int = U128,
                           field: Optional[str] = None) -> list[list[int]]:
    if not isinstance(raw, list):
        raise DecodeError(f"expected array of arrays, got {type(raw).__name__}", field)
    return [decode_quantity_list(row, bits, field) for row in raw]


def decode_optional_quantity_matrix(raw: Any, bits: int = U128,
                                    field: Optional[str] = None) -> Optional[list[list[int]]]:
    """Like decode_quantity_matrix, but JSON null decodes to None."""
    if raw is None:
        return None
    return decode_quantity_matrix(raw, bits, field)


# ---------------------------------------------------------------------------
# Ratios
# ---------------------------------------------------------------------------

def format_ratio(value: float) -> str:
    """Format a float the way serde_json (ryu) prints it.

    Shortest round-trip digits. Plain decimal while the decimal exponent
    lies in (-5, 16]; otherwise scientific notation without a "+" sign or
    zero padding, e.g. "1e-7" or "1.5e16". Whole numbers keep a ".0".
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"ratio must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"ratio must be finite, got {value!r}")
    if value == 0.0:
        return "-0.0" if math.copysign(1.0, value) < 0 else "0.0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    prefix = "-" if sign else ""
    # value == 0.<digits> * 10**point
    point = len(digits) + exponent

    if 0 <= exponent and point <= 16:
        return f"{prefix}{digits}{'0' * exponent}.0"
    if 0 < point <= 16:
        return f"{prefix}{digits[:point]}.{digits[point:]}"
    if -5 < point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{prefix}{mantissa}e{point - 1}"


def encode_ratio_list(values: Sequence[float]) -> str:
    """JSON array text for a list of ratios, formatted with format_ratio."""
    return "[" + ",".join(format_ratio(v) for v in values) + "]"


def decode_ratio_list(raw: Any, field: Optional[str] = None) -> list[float]:
    """Decode an array of JSON numbers. Integers are widened to float."""
    if not isinstance(raw, list):
        raise DecodeError(f"expected array, got {type(raw).__name__}", field)
    ratios = []
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise DecodeError(f"expected number, got {item!r}", field)
        try:
            ratio = float(item)
        except OverflowError as e:
            raise DecodeError("number out of range", field) from e
        if not math.isfinite(ratio):
            raise DecodeError(f"expected finite number, got {ratio!r}", field)
        ratios.append(ratio)
    return ratios
