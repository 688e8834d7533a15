"""
ABOUTME: Struct walker that binds dataclass fields to environment variables
ABOUTME: Provides the bind entry points with optional prefix and custom converters
"""

import dataclasses
import logging
from typing import Any, Mapping, Optional, TypeVar, get_type_hints

from .converters import ConverterFunc, ConverterRegistry, as_registry
from .environment import Environment
from .exceptions import NotAStructPointerError, RequiredVarError
from .parsers import check_supported, convert, unwrap_optional
from .tags import FieldDescriptor, describe

T = TypeVar("T")

Converters = Optional[Mapping[Any, ConverterFunc]]


def is_struct_pointer(target: Any) -> bool:
    """Return True if ``target`` is a dataclass instance whose fields can be assigned."""
    if isinstance(target, type) or not dataclasses.is_dataclass(target):
        return False
    return not target.__dataclass_params__.frozen


def _is_nested_struct(declared: Any) -> bool:
    inner = unwrap_optional(declared)
    return isinstance(inner, type) and dataclasses.is_dataclass(inner)


class StructWalker:
    """Walks one dataclass tree for a single binding pass."""

    def __init__(
        self,
        environment: Environment,
        prefix: str = "",
        converters: Optional[ConverterRegistry] = None,
    ):
        self.environment = environment
        self.prefix = prefix
        self.converters = converters if converters is not None else ConverterRegistry()

    def walk(self, target: Any) -> None:
        """
        Bind every tagged field of ``target`` in declaration order.

        Private fields (leading underscore) and fields without an env tag are
        skipped. Untagged fields holding a dataclass are walked recursively
        with the same prefix unless they are None. The first error stops the
        walk; fields bound before it keep their values.
        """
        if not is_struct_pointer(target):
            raise NotAStructPointerError()

        hints = get_type_hints(type(target))
        for field in dataclasses.fields(target):
            if field.name.startswith("_"):
                continue

            declared = hints.get(field.name, field.type)
            descriptor = describe(field)

            if descriptor is None:
                if _is_nested_struct(declared):
                    self._walk_nested(target, field.name)
                continue

            if not descriptor.bound:
                continue

            self._bind_field(target, field.name, declared, descriptor)

    def _walk_nested(self, target: Any, name: str) -> None:
        nested = getattr(target, name)
        if nested is None:
            logging.debug(f"Skipping unset nested block {type(target).__name__}.{name}")
            return
        logging.debug(f"Entering nested block {type(target).__name__}.{name}")
        self.walk(nested)

    def _bind_field(
        self, target: Any, name: str, declared: Any, descriptor: FieldDescriptor
    ) -> None:
        label = f"{type(target).__name__}.{name}"
        check_supported(declared, self.converters)

        key = self.prefix + descriptor.name
        value, present = self.environment.lookup(descriptor.name, self.prefix)

        if not present:
            if descriptor.required:
                raise RequiredVarError(key)
            if descriptor.default is None:
                return
            logging.debug(f"{key} not set, using default for {label}")
            value = descriptor.default

        # an empty value counts as set but leaves the field at its zero value
        if value == "":
            return

        setattr(
            target,
            name,
            convert(declared, value, descriptor.separator, self.converters, field=label),
        )
        logging.debug(f"Bound {label} from {key}")


def bind(
    target: T,
    prefix: str = "",
    converters: Converters = None,
    environ: Optional[Mapping[str, str]] = None,
) -> T:
    """
    Populate a dataclass instance from environment variables.

    Parameters:
        target: Mutable dataclass instance to fill in place.
        prefix (str): Prepended to every variable name, including nested blocks.
        converters (Mapping | ConverterRegistry, optional): Custom converters
            keyed by exact field type, tried before the built-in rules.
        environ (Mapping[str, str], optional): Variables to read instead of
            a snapshot of ``os.environ``.

    Returns:
        The same ``target``, for chaining.

    Raises:
        NotAStructPointerError: If ``target`` is not a mutable dataclass instance.
        UnsupportedOptionError: If a tag carries an unknown option.
        RequiredVarError: If a required variable is not set.
        UnsupportedTypeError: If a tagged field has no conversion rule.
        ParseError: If a value cannot be converted.
        CustomParserError: If a custom converter fails.
    """
    if not is_struct_pointer(target):
        raise NotAStructPointerError()

    registry = as_registry(converters)
    walker = StructWalker(Environment(environ), prefix, registry)
    logging.debug(
        f"Binding {type(target).__name__} with prefix {prefix!r} "
        f"and {len(registry)} custom converters"
    )
    walker.walk(target)
    return target


def bind_with_prefix(target: T, prefix: str) -> T:
    """Bind ``target`` reading every variable as ``prefix + name``."""
    return bind(target, prefix=prefix)


def bind_with_converters(target: T, converters: Converters) -> T:
    """Bind ``target`` with custom converters for specific field types."""
    return bind(target, converters=converters)


def bind_with_prefix_and_converters(target: T, prefix: str, converters: Converters) -> T:
    return bind(target, prefix=prefix, converters=converters)
