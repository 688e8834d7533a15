"""
ABOUTME: Environment binding package for populating typed dataclass configuration
ABOUTME: Provides bind entry points, field tag helpers, sized types and error classes
"""

from .binder import (
    StructWalker,
    bind,
    bind_with_converters,
    bind_with_prefix,
    bind_with_prefix_and_converters,
)
from .converters import ConverterRegistry
from .environment import Environment, load_environment
from .exceptions import (
    CustomParserError,
    EnvBindError,
    NotAStructPointerError,
    ParseError,
    RequiredVarError,
    UnsupportedOptionError,
    UnsupportedTypeError,
)
from .parsers import convert
from .tags import FieldDescriptor, env, parse_tag
from .types import Float32, Float64, Int64, Uint, Uint64

__version__ = "0.1.0"
__all__ = [
    "bind",
    "bind_with_prefix",
    "bind_with_converters",
    "bind_with_prefix_and_converters",
    "StructWalker",
    "ConverterRegistry",
    "Environment",
    "load_environment",
    "convert",
    "env",
    "parse_tag",
    "FieldDescriptor",
    "Int64",
    "Uint",
    "Uint64",
    "Float32",
    "Float64",
    "EnvBindError",
    "NotAStructPointerError",
    "UnsupportedOptionError",
    "RequiredVarError",
    "UnsupportedTypeError",
    "ParseError",
    "CustomParserError",
]
