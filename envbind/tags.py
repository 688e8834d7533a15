"""
ABOUTME: Field metadata extraction for environment binding
ABOUTME: Parses env tags into descriptors carrying variable name, options, default and separator
"""

from dataclasses import Field, dataclass
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import UnsupportedOptionError

TAG_KEY = "env"
DEFAULT_KEY = "envDefault"
SEPARATOR_KEY = "envSeparator"

DEFAULT_SEPARATOR = ","
REQUIRED = "required"
SUPPORTED_OPTIONS = frozenset({REQUIRED})


@dataclass(frozen=True)
class FieldDescriptor:
    """Parsed binding metadata for one dataclass field."""

    name: str
    required: bool = False
    options: Tuple[str, ...] = ()
    default: Optional[str] = None
    separator: str = DEFAULT_SEPARATOR

    @property
    def bound(self) -> bool:
        """An empty variable name means the field is not bound."""
        return bool(self.name)


def parse_tag(tag: str) -> Tuple[str, Tuple[str, ...]]:
    """
    Split an env tag of the form ``NAME[,option[,option...]]``.

    The first comma-delimited token is the variable name and may be empty.
    Every following non-empty token must be a supported option; the first
    one that is not raises, even when the other options are valid.

    Returns:
        tuple: The variable name and the recognized options in tag order.

    Raises:
        UnsupportedOptionError: If an option token is not recognized.
    """
    name = ""
    options: List[str] = []
    token: List[str] = []
    in_name = True

    for char in tag + DEFAULT_SEPARATOR:
        if char != DEFAULT_SEPARATOR:
            token.append(char)
            continue
        text = "".join(token)
        token = []
        if in_name:
            name = text
            in_name = False
        elif not text:
            continue
        elif text in SUPPORTED_OPTIONS:
            options.append(text)
        else:
            raise UnsupportedOptionError(text)

    return name, tuple(options)


def describe(field: Field) -> Optional[FieldDescriptor]:
    """Build the descriptor for a field, or None when it carries no env tag."""
    metadata = field.metadata
    if TAG_KEY not in metadata:
        return None

    name, options = parse_tag(str(metadata[TAG_KEY]))
    default = metadata.get(DEFAULT_KEY)
    return FieldDescriptor(
        name=name,
        required=REQUIRED in options,
        options=options,
        default=None if default is None else str(default),
        separator=str(metadata.get(SEPARATOR_KEY) or DEFAULT_SEPARATOR),
    )


def env(
    tag: str,
    *,
    required: bool = False,
    default: Optional[Any] = None,
    separator: Optional[str] = None,
) -> Dict[str, str]:
    """
    Build field metadata binding a dataclass field to an environment variable.

    Use it as ``field(default=0, metadata=env("PORT", default="8080"))``.

    Parameters:
        tag (str): Variable name, optionally followed by comma-separated options.
        required (bool): Append the ``required`` option to the tag.
        default (Any, optional): Literal used when the variable is absent; stored as text.
        separator (str, optional): Element separator for list and tuple fields.

    Returns:
        dict: Metadata mapping for ``dataclasses.field``.
    """
    if required:
        tag = f"{tag},{REQUIRED}"
    metadata = {TAG_KEY: tag}
    if default is not None:
        metadata[DEFAULT_KEY] = str(default)
    if separator is not None:
        metadata[SEPARATOR_KEY] = separator
    return metadata
