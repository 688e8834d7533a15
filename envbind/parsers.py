"""
ABOUTME: Built-in conversion rules from environment text to typed field values
ABOUTME: Dispatches on the declared field type for scalars, durations and homogeneous sequences
"""

import math
import re
import struct
from datetime import timedelta
from decimal import Decimal
from types import UnionType
from typing import Any, Callable, Dict, List, Optional, Union, get_args, get_origin

from .converters import ConverterRegistry
from .exceptions import ParseError, UnsupportedTypeError
from .types import INT64_MAX, INT_BOUNDS, Float32, Float64, Int64, Uint, Uint64

UNION_TYPES = (Union, UnionType)

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_DURATION_PART_RE = re.compile(r"([0-9]*(?:\.[0-9]*)?)(ns|us|µs|μs|ms|s|m|h)")

_INF_SPELLINGS = frozenset({"inf", "infinity"})

_TRUE = frozenset({"1", "t", "true"})
_FALSE = frozenset({"0", "f", "false"})

# nanoseconds per unit
_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}


def parse_str(text: str) -> str:
    return text


def parse_bool(text: str) -> bool:
    """Accept true/false, t/f in any case, and the digits 1/0."""
    lowered = text.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError("invalid syntax")


def _int_parser(target_type: Any) -> Callable[[str], int]:
    low, high = INT_BOUNDS[target_type]
    # unsigned types take no sign at all
    pattern = _UINT_RE if low >= 0 else _INT_RE

    def parse_int(text: str) -> int:
        if not pattern.fullmatch(text):
            raise ValueError("invalid syntax")
        value = int(text, 10)
        if not low <= value <= high:
            raise ValueError("value out of range")
        return value

    return parse_int


def parse_float(text: str) -> float:
    """Parse a decimal or exponential literal as a double."""
    if not _FLOAT_RE.fullmatch(text):
        raise ValueError("invalid syntax")
    value = float(text)
    if math.isinf(value) and text.lstrip("+-").lower() not in _INF_SPELLINGS:
        raise ValueError("value out of range")
    return value


def parse_float32(text: str) -> float:
    """Parse a float literal and round it to single precision."""
    value = parse_float(text)
    try:
        rounded = struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError as e:
        raise ValueError("value out of range") from e
    if math.isinf(rounded) and not math.isinf(value):
        raise ValueError("value out of range")
    return rounded


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration literal such as ``300ms``, ``1.5h`` or ``2h45m``.

    Valid units are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and ``h``.
    A leading sign is allowed and the bare literal ``0`` means zero.
    Precision below one microsecond is truncated.

    Raises:
        ValueError: If the text is not a valid duration.
    """
    remaining = text
    negative = False
    if remaining[:1] in ("-", "+"):
        negative = remaining[0] == "-"
        remaining = remaining[1:]

    if remaining == "0":
        return timedelta(0)
    if not remaining:
        raise ValueError("invalid duration")

    total = Decimal(0)
    pos = 0
    while pos < len(remaining):
        match = _DURATION_PART_RE.match(remaining, pos)
        if match is None:
            raise ValueError("invalid duration")
        number, unit = match.groups()
        if not any(c.isdigit() for c in number):
            raise ValueError("invalid duration")
        total += Decimal(number) * _DURATION_UNITS[unit]
        pos = match.end()

    if total > INT64_MAX:
        raise ValueError("invalid duration")

    microseconds = int(total) // 1_000
    return timedelta(microseconds=-microseconds if negative else microseconds)


SCALAR_PARSERS: Dict[Any, Callable[[str], Any]] = {
    str: parse_str,
    bool: parse_bool,
    int: _int_parser(int),
    Int64: _int_parser(Int64),
    Uint: _int_parser(Uint),
    Uint64: _int_parser(Uint64),
    float: parse_float,
    Float64: parse_float,
    Float32: parse_float32,
    timedelta: parse_duration,
}


def unwrap_optional(target_type: Any) -> Any:
    """Return ``T`` for ``Optional[T]``, otherwise the type unchanged."""
    if get_origin(target_type) in UNION_TYPES:
        args = [arg for arg in get_args(target_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return target_type


def sequence_element(target_type: Any) -> Optional[Any]:
    """
    Return the element type of ``list[T]`` or ``tuple[T, ...]``.

    Bare ``list``/``tuple`` and fixed-length tuples yield ``Ellipsis`` so
    callers can tell "a sequence we cannot split" from "not a sequence".
    """
    origin = get_origin(target_type) or target_type
    if origin is list:
        args = get_args(target_type)
        return args[0] if len(args) == 1 else Ellipsis
    if origin is tuple:
        args = get_args(target_type)
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return Ellipsis
    return None


def _is_scalar(target_type: Any, converters: ConverterRegistry) -> bool:
    return target_type in converters or _hashable_in(target_type, SCALAR_PARSERS)


def _hashable_in(target_type: Any, table: Dict[Any, Any]) -> bool:
    try:
        return target_type in table
    except TypeError:
        return False


def check_supported(target_type: Any, converters: Optional[ConverterRegistry] = None) -> None:
    """
    Make sure a declared type has a conversion rule.

    Raises:
        UnsupportedTypeError: If neither a custom converter, a scalar rule
            nor a sequence of a supported element type applies.
    """
    converters = converters if converters is not None else ConverterRegistry()
    if target_type in converters:
        return
    target_type = unwrap_optional(target_type)
    if _is_scalar(target_type, converters):
        return
    element = sequence_element(target_type)
    if element is None:
        raise UnsupportedTypeError()
    if element is Ellipsis or not _is_scalar(unwrap_optional(element), converters):
        raise UnsupportedTypeError("Unsupported slice type")


def _convert_scalar(
    target_type: Any, text: str, converters: ConverterRegistry, field: str
) -> Any:
    if target_type in converters:
        return converters.convert(target_type, text)
    target_type = unwrap_optional(target_type)
    if target_type in converters:
        return converters.convert(target_type, text)
    parser = SCALAR_PARSERS[target_type]
    try:
        return parser(text)
    except ValueError as e:
        raise ParseError(field, text, str(e)) from e


def convert(
    target_type: Any,
    raw: str,
    separator: str = ",",
    converters: Optional[ConverterRegistry] = None,
    field: str = "value",
) -> Any:
    """
    Convert raw environment text to a value of ``target_type``.

    Custom converters win over built-in rules for their exact type. Sequence
    types are split on ``separator`` and every element is converted; the first
    bad element fails the whole value.

    Parameters:
        target_type: Declared type of the destination field.
        raw (str): Text read from the environment or a default literal.
        separator (str): Element separator for sequence types.
        converters (ConverterRegistry, optional): Custom converters for this pass.
        field (str): Field name used in error messages.

    Returns:
        Any: The converted value.

    Raises:
        UnsupportedTypeError: If the type has no conversion rule.
        ParseError: If the text is not valid for the type.
        CustomParserError: If a custom converter fails.
    """
    converters = converters if converters is not None else ConverterRegistry()
    check_supported(target_type, converters)

    if target_type in converters or _is_scalar(unwrap_optional(target_type), converters):
        return _convert_scalar(target_type, raw, converters, field)

    sequence_type = unwrap_optional(target_type)
    element_type = sequence_element(sequence_type)
    values: List[Any] = []
    for index, text in enumerate(raw.split(separator)):
        try:
            values.append(_convert_scalar(element_type, text, converters, field))
        except ParseError as e:
            raise ParseError(field, text, e.reason, index=index) from e

    if (get_origin(sequence_type) or sequence_type) is tuple:
        return tuple(values)
    return values
