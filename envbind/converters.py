"""
ABOUTME: Registry of caller-supplied converters for custom field types
ABOUTME: Maps an exact target type to a function turning raw text into a value
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .exceptions import CustomParserError

ConverterFunc = Callable[[str], Any]


class ConverterRegistry:
    """Custom converters consulted before the built-in conversion rules."""

    def __init__(self, converters: Optional[Mapping[Any, ConverterFunc]] = None):
        """
        Initialize the registry, optionally seeded from a mapping of type to converter.
        """
        self._converters: Dict[Any, ConverterFunc] = {}
        for target_type, func in (converters or {}).items():
            self.register(target_type, func)

    def register(self, target_type: Any, func: ConverterFunc) -> None:
        """
        Register a converter for an exact type, replacing any previous one.

        Raises:
            TypeError: If ``func`` is not callable.
        """
        if not callable(func):
            raise TypeError(f"Converter for {target_type!r} is not callable")
        self._converters[target_type] = func
        logging.debug(f"Registered converter for {target_type!r}")

    def convert(self, target_type: Any, raw: str) -> Any:
        """
        Run the converter registered for ``target_type`` on ``raw``.

        Raises:
            KeyError: If no converter is registered for the type.
            CustomParserError: If the converter raises; the underlying error is chained.
        """
        func = self._converters[target_type]
        try:
            return func(raw)
        except Exception as e:
            raise CustomParserError(str(e)) from e

    def __contains__(self, target_type: Any) -> bool:
        try:
            return target_type in self._converters
        except TypeError:
            # unhashable annotations never have a converter
            return False

    def __len__(self) -> int:
        return len(self._converters)


def as_registry(
    converters: Union[ConverterRegistry, Mapping[Any, ConverterFunc], None],
) -> ConverterRegistry:
    """Return ``converters`` as a registry, wrapping plain mappings."""
    if isinstance(converters, ConverterRegistry):
        return converters
    return ConverterRegistry(converters)
