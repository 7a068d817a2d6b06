"""Typed decoding of whitespace-separated numeric text.

Every numeric body in a RIVL document (material parameters, transform
matrices, material lists, group child lists) goes through tokenize()
and the scalar parsers here.

Numbers are read with the same leniency as C's atof/atol: surrounding
whitespace is skipped (attribute values are not tokenized), the longest
valid numeric prefix of a token is used and a token with no numeric
prefix reads as zero. Pass strict=True to reject such tokens instead.
"""

import re

from ..exceptions import FormatError
from .rivl_constants import TOKEN_SEPARATORS, VALUE_TYPES

_SPLIT_RE = re.compile("[" + re.escape(TOKEN_SEPARATORS) + "]+")

# Longest prefix accepted by strtod (decimal forms, inf/nan)
_FLOAT_PREFIX_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX_RE = re.compile(r"[+-]?\d+")

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


def tokenize(text):
    """Split ``text`` on runs of space, tab, newline and carriage return."""
    if not text:
        return []
    return [tok for tok in _SPLIT_RE.split(text) if tok]


def parse_float(token, strict=False, on_lenient=None):
    """Parse a float token.

    Args:
        token: the token text
        strict: raise FormatError instead of falling back to the numeric prefix
        on_lenient: optional callable(token, value) invoked when the token was
            not a complete number and the prefix fallback was used

    Returns:
        float value
    """
    token = token.strip(TOKEN_SEPARATORS)
    match = _FLOAT_PREFIX_RE.match(token)
    if match is not None and match.end() == len(token):
        return float(token)
    if strict:
        raise FormatError(f"invalid float value {token!r}")
    value = float(match.group(0)) if match is not None else 0.0
    if on_lenient is not None:
        on_lenient(token, value)
    return value


def parse_int(token, strict=False, on_lenient=None):
    """Parse a signed integer token (same leniency rules as parse_float)."""
    token = token.strip(TOKEN_SEPARATORS)
    match = _INT_PREFIX_RE.match(token)
    if match is not None and match.end() == len(token):
        return int(token)
    if strict:
        raise FormatError(f"invalid integer value {token!r}")
    value = int(match.group(0)) if match is not None else 0
    if on_lenient is not None:
        on_lenient(token, value)
    return value


def parse_int32(token, strict=False, on_lenient=None):
    """Parse an integer and wrap it to signed 32 bits, like an int32 cast of atol."""
    value = parse_int(token, strict, on_lenient)
    if value < INT32_MIN or value > INT32_MAX:
        if strict:
            raise FormatError(f"integer value {token!r} out of 32-bit range")
        value = (value - INT32_MIN) % (1 << 32) + INT32_MIN
    return value


def parse_index(token, strict=False, on_lenient=None):
    """Parse a node table index token."""
    return parse_int(token, strict, on_lenient)


def value_arity(type_tag):
    """Return the number of tokens a value of ``type_tag`` consumes."""
    try:
        return VALUE_TYPES[type_tag][1]
    except KeyError:
        raise FormatError(f"unknown parameter type {type_tag!r}") from None


def decode_value(type_tag, text, strict=False, on_lenient=None):
    """Decode ``text`` as a value of the given type tag.

    ``float``/``int`` return a python scalar; the 2/3/4 component tags
    return a tuple. Tokens beyond the ones the type needs are ignored.

    Raises:
        FormatError: unknown type tag, or fewer tokens than the type needs
    """
    count = value_arity(type_tag)
    scalar_type = VALUE_TYPES[type_tag][0]

    tokens = tokenize(text)
    if len(tokens) < count:
        raise FormatError(
            f"{type_tag} value needs {count} token(s), found {len(tokens)} in {text!r}"
        )

    parse = parse_float if scalar_type is float else parse_int32
    values = tuple(parse(tok, strict, on_lenient) for tok in tokens[:count])
    if count == 1:
        return values[0]
    return values


def decode_floats(text, count, strict=False, on_lenient=None):
    """Decode exactly ``count`` float tokens, or raise FormatError."""
    tokens = tokenize(text)
    if len(tokens) != count:
        raise FormatError(f"expected {count} float values, found {len(tokens)}")
    return [parse_float(tok, strict, on_lenient) for tok in tokens]


def decode_indices(text, strict=False, on_lenient=None):
    """Decode a whitespace-separated list of node table indices."""
    return [parse_index(tok, strict, on_lenient) for tok in tokenize(text)]
