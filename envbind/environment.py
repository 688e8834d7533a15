"""
ABOUTME: Environment variable access for binding passes
ABOUTME: Resolves optionally prefixed variable names against a snapshot of the process environment
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

from dotenv import load_dotenv


class Environment:
    """Read-only snapshot of environment variables taken for one binding pass."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Capture the variables a binding pass will read.

        Parameters:
            environ (Mapping[str, str], optional): Variables to use instead of the process environment.
        """
        source = os.environ if environ is None else environ
        self._vars = dict(source)

    def lookup(self, name: str, prefix: str = "") -> Tuple[str, bool]:
        """Return the value of ``prefix + name`` and whether it is set."""
        key = prefix + name
        if key in self._vars:
            return self._vars[key], True
        return "", False


def load_environment(path: Union[str, Path] = ".env") -> bool:
    """
    Load variables from a dotenv file into the process environment.

    Variables already present in the environment are left untouched.

    Parameters:
        path (str | Path): Location of the dotenv file.

    Returns:
        bool: True if the file existed and was loaded.
    """
    env_path = Path(path)
    if not env_path.is_file():
        logging.debug(f"No dotenv file at {env_path}")
        return False
    load_dotenv(env_path, override=False)
    logging.debug(f"Loaded environment from {env_path}")
    return True
