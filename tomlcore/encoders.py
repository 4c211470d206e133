"""Text encoders for scalar values, keys and strings.

Every encoder returns the exact text the document format expects for a single
value and never consults the host locale. The formatter decides *where* the
text goes; these functions decide *what* it looks like.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum, auto

from .date_time import Date, DateTime, Time, TimeOffset

INF_TOKEN = "inf"
NEG_INF_TOKEN = "-inf"
NAN_TOKEN = "nan"

_BARE_KEY_CHARACTERS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-")

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


class ValueFormat(Enum):
    """Per-value rendering hint for integers (and, in the encoder only, floats)."""

    NONE = auto()
    BINARY = auto()
    OCTAL = auto()
    HEXADECIMAL = auto()


_INTEGER_FORMAT_SPECS = {
    ValueFormat.BINARY: "b",
    ValueFormat.OCTAL: "o",
    ValueFormat.HEXADECIMAL: "X",
}


def encode_integer(value: int, fmt: ValueFormat = ValueFormat.NONE) -> str:
    """Render ``value`` as digits only, without any radix prefix.

    A radix hint is honoured only for non-negative values; everything else is
    signed base 10. Zero is always ``0``.
    """
    if not value:
        return "0"
    if fmt is not ValueFormat.NONE and value >= 0:
        return format(value, _INTEGER_FORMAT_SPECS[fmt])
    return str(value)


def _shortest_decimal(value: float) -> str:
    # repr() yields the shortest digit string that round-trips; pick the
    # shorter of its fixed and scientific spellings (fixed on a tie).
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    assert isinstance(exponent, int)
    digits = "".join(str(d) for d in digit_tuple)
    count = len(digits)

    if exponent >= 0:
        fixed = digits + "0" * exponent
    elif -exponent < count:
        fixed = f"{digits[:count + exponent]}.{digits[count + exponent:]}"
    else:
        fixed = "0." + "0" * (-exponent - count) + digits

    scientific_exponent = exponent + count - 1
    mantissa = digits[0] if count == 1 else f"{digits[0]}.{digits[1:]}"
    exponent_sign = "-" if scientific_exponent < 0 else "+"
    scientific = f"{mantissa}e{exponent_sign}{abs(scientific_exponent):02d}"

    text = fixed if len(fixed) <= len(scientific) else scientific
    return f"-{text}" if sign else text


def _hexadecimal_float(value: float) -> str:
    text = value.hex()
    negative = text.startswith("-")
    mantissa, _, exponent = text.lstrip("-").removeprefix("0x").partition("p")
    whole, _, fraction = mantissa.partition(".")
    fraction = fraction.rstrip("0")
    text = f"{whole}.{fraction}p{exponent}" if fraction else f"{whole}p{exponent}"
    return f"-{text}" if negative else text


def encode_float(value: float, fmt: ValueFormat = ValueFormat.NONE) -> str:
    if math.isnan(value):
        return NAN_TOKEN
    if math.isinf(value):
        return NEG_INF_TOKEN if value < 0 else INF_TOKEN

    if fmt is ValueFormat.HEXADECIMAL:
        return _hexadecimal_float(value)

    text = _shortest_decimal(value)
    if not any(c in text for c in ".eE"):
        text += ".0"
    return text


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def _zero_pad(value: int, width: int) -> str:
    return str(value).rjust(width, "0")


def encode_date(value: Date) -> str:
    return f"{_zero_pad(value.year, 4)}-{_zero_pad(value.month, 2)}-{_zero_pad(value.day, 2)}"


def encode_time(value: Time) -> str:
    text = f"{_zero_pad(value.hour, 2)}:{_zero_pad(value.minute, 2)}:{_zero_pad(value.second, 2)}"
    if value.nanosecond:
        nanoseconds = value.nanosecond
        digits = 9
        while nanoseconds % 10 == 0:
            nanoseconds //= 10
            digits -= 1
        text += "." + _zero_pad(nanoseconds, digits)
    return text


def encode_time_offset(value: TimeOffset) -> str:
    if not value.minutes:
        return "Z"

    minutes = value.minutes
    sign = "+"
    if minutes < 0:
        sign = "-"
        minutes = -minutes
    hours = minutes // 60
    if hours:
        hour_text = _zero_pad(hours, 2)
        minutes -= hours * 60
    else:
        hour_text = "00"
    return f"{sign}{hour_text}:{_zero_pad(minutes, 2)}"


def encode_date_time(value: DateTime) -> str:
    text = f"{encode_date(value.date)}T{encode_time(value.time)}"
    if value.offset is not None:
        text += encode_time_offset(value.offset)
    return text


def is_bare_key(text: str) -> bool:
    return bool(text) and all(c in _BARE_KEY_CHARACTERS for c in text)


def _is_control(c: str) -> bool:
    return c < "\x20" or c == "\x7f"


def _escape(c: str) -> str:
    if c in _ESCAPES:
        return _ESCAPES[c]
    if _is_control(c):
        return f"\\u{ord(c):04X}"
    return c


def quote_string(
    text: str,
    *,
    literal_allowed: bool = True,
    multi_line_allowed: bool = False,
    bare_allowed: bool = False,
) -> str:
    """Quote ``text`` as a key (``bare_allowed``) or as a string value.

    Preference order: bare key, literal string, escaped basic string. The
    triple-quoted forms are only chosen when ``multi_line_allowed`` and the
    text contains a newline.
    """
    if not text:
        return "''" if literal_allowed else '""'

    if bare_allowed and is_bare_key(text):
        return text

    multi_line = multi_line_allowed and "\n" in text

    literal = literal_allowed
    if literal:
        for c in text:
            if c == "'" or (_is_control(c) and c != "\t" and not (multi_line and c == "\n")):
                literal = False
                break

    # a newline right after the opening delimiter is trimmed by readers
    lead = "\n" if multi_line and text.startswith("\n") else ""

    if literal:
        quote = "'''" if multi_line else "'"
        return f"{quote}{lead}{text}{quote}"

    quote = '"""' if multi_line else '"'
    if multi_line:
        body = "".join(c if c == "\n" else _escape(c) for c in text)
    else:
        body = "".join(_escape(c) for c in text)
    return f"{quote}{lead}{body}{quote}"
