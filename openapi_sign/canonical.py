"""
Canonical JSON serialization for request signing
Deterministic, sorted keys, no whitespace, float64 numbers in %g form
"""

from decimal import Decimal
from typing import Any
import math

from .errors import SerializationError
from .value import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    normalize,
)

# Exponent at which %g switches to scientific notation for shortest output.
_EXP_PRECISION = 6


def escape_string(s: str) -> str:
    """Escape a string for canonical JSON."""
    result = ['"']
    for c in s:
        code = ord(c)
        if c == '"':
            result.append('\\"')
        elif c == '\\':
            result.append('\\\\')
        elif c == '\n':
            result.append('\\n')
        elif c == '\r':
            result.append('\\r')
        elif c == '\t':
            result.append('\\t')
        elif code < 0x20:
            result.append(f'\\u{code:04x}')
        else:
            result.append(c)
    result.append('"')
    return ''.join(result)


def format_number(value: float) -> str:
    """
    Render a float64 the way Go's "%g" verb does.

    Digits are the shortest that round-trip. Scientific notation is used when
    the decimal exponent is below -4 or at least 6, with a signed exponent of
    at least two digits: 1e+06, 1.5e-07, 2.92221003212e+11.
    """
    if not math.isfinite(value):
        raise SerializationError(f"unsupported value: {value!r}", value)

    if value == 0:
        return '-0' if math.copysign(1.0, value) < 0 else '0'

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = ''.join(str(d) for d in digit_tuple)
    nd = len(digits)
    # position of the decimal point relative to the first digit
    dp = nd + exponent
    exp = dp - 1

    out = ['-'] if sign else []

    if exp < -4 or exp >= _EXP_PRECISION:
        out.append(digits[0])
        if nd > 1:
            out.append('.')
            out.append(digits[1:])
        out.append('e')
        out.append('-' if exp < 0 else '+')
        out.append(f'{abs(exp):02d}')
        return ''.join(out)

    if dp > 0:
        out.append(digits[:dp].ljust(dp, '0'))
    else:
        out.append('0')

    frac = nd - dp
    if frac > 0:
        out.append('.')
        for i in range(frac):
            j = dp + i
            out.append(digits[j] if j >= 0 else '0')
    return ''.join(out)


class _Literal(str):
    """Punctuation queued for output while walking the tree."""


def _render_scalar(value: JsonValue) -> str:
    if isinstance(value, JsonNull):
        return 'null'

    if isinstance(value, JsonBool):
        return 'true' if value.value else 'false'

    if isinstance(value, JsonNumber):
        return format_number(value.value)

    if isinstance(value, JsonString):
        return escape_string(value.value)

    raise SerializationError(f"Unsupported type in canonical JSON: {type(value)}", value)


def canonicalize(value: JsonValue) -> str:
    """
    Canonicalize a JSON value tree to a deterministic string.

    Rules:
    - Object keys sorted lexicographically, array order kept
    - No whitespace
    - Numbers as float64 in %g form
    - Proper string escaping
    """
    out = []
    # tree nodes still to render, or _Literal text to emit
    stack = [value]
    while stack:
        item = stack.pop()

        if isinstance(item, _Literal):
            out.append(item)

        elif isinstance(item, JsonArray):
            if not item.items:
                out.append('[]')
                continue
            parts = [_Literal('[')]
            for i, v in enumerate(item.items):
                if i:
                    parts.append(_Literal(','))
                parts.append(v)
            parts.append(_Literal(']'))
            stack.extend(reversed(parts))

        elif isinstance(item, JsonObject):
            if not item.members:
                out.append('{}')
                continue
            parts = [_Literal('{')]
            for i, k in enumerate(sorted(item.members.keys())):
                if i:
                    parts.append(_Literal(','))
                parts.append(_Literal(escape_string(k) + ':'))
                parts.append(item.members[k])
            parts.append(_Literal('}'))
            stack.extend(reversed(parts))

        else:
            out.append(_render_scalar(item))

    return ''.join(out)


def canonicalize_bytes(value: JsonValue) -> bytes:
    """Canonicalize to UTF-8 bytes."""
    return canonicalize(value).encode('utf-8')


def canonicalize_body(body: Any) -> str:
    """Normalize a native request body and canonicalize it."""
    return canonicalize(normalize(body))
