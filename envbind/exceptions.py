"""
ABOUTME: Custom exception classes for environment binding
ABOUTME: Provides specific error types for invalid targets, tags, missing variables and conversion failures
"""

from typing import Optional


class EnvBindError(Exception):
    """Base class for every binding error."""

    pass


class NotAStructPointerError(EnvBindError):
    """The binding target is not a mutable dataclass instance."""

    def __init__(self, message: str = "Expected a pointer to a Struct"):
        super().__init__(message)


class UnsupportedOptionError(EnvBindError):
    """An env tag carries an option other than ``required``."""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Env tag option {option} not supported.")


class RequiredVarError(EnvBindError):
    """A required variable is absent from the environment."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Required environment variable {key} is not set")


class UnsupportedTypeError(EnvBindError):
    """A field's declared type has no conversion rule."""

    def __init__(self, message: str = "Type is not supported"):
        super().__init__(message)


class ParseError(EnvBindError):
    """A raw value could not be converted to the field's type."""

    def __init__(
        self,
        field: str,
        value: str,
        reason: str,
        index: Optional[int] = None,
    ):
        self.field = field
        self.value = value
        self.reason = reason
        self.index = index
        if index is None:
            message = f"Invalid value {value!r} for field '{field}': {reason}"
        else:
            message = (
                f"Invalid value {value!r} at element {index} "
                f"of field '{field}': {reason}"
            )
        super().__init__(message)


class CustomParserError(EnvBindError):
    """A registered custom converter raised."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Custom parser error: {reason}")
