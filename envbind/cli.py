"""
ABOUTME: Command-line interface for checking a configuration class against the environment
ABOUTME: Handles argument parsing, dotenv loading, logging setup and exit codes
"""

import argparse
import importlib
import logging
import sys
from typing import Any, List, Optional

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .binder import bind
from .environment import load_environment
from .exceptions import EnvBindError

console = Console()


def cli(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace: Target class path, prefix, dotenv path and log level.
    """
    p = argparse.ArgumentParser(
        description="Bind a dataclass configuration from environment variables"
    )
    p.add_argument(
        "target",
        help="Configuration dataclass as package.module:ClassName",
    )
    p.add_argument(
        "--prefix",
        default="",
        help="Prefix prepended to every variable name",
    )
    p.add_argument(
        "--env-file",
        default=".env",
        help="Dotenv file loaded before binding (existing variables win)",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"envbind {__version__}",
    )
    return p.parse_args(argv)


def load_target(path: str) -> Any:
    """
    Import the class named by ``package.module:ClassName``.

    Raises:
        ValueError: If the path has no ``:`` separator.
        ImportError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Target must look like package.module:ClassName, got '{path}'")
    module = importlib.import_module(module_name)
    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj


def main(argv: Optional[List[str]] = None) -> None:
    """
    Execute the CLI: load the dotenv file, bind the target class and report the outcome.

    Exits with status 1 when the target cannot be loaded or binding fails.
    """
    a = cli(argv)

    logging.basicConfig(
        level=getattr(logging, a.log_level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    if load_environment(a.env_file):
        console.print(f"✅ Loaded environment from {a.env_file}")

    try:
        config_class = load_target(a.target)
        config = config_class()
        bind(config, prefix=a.prefix)
    except EnvBindError as e:
        console.print(f"❌ Configuration error: {e}")
        sys.exit(1)
    except (ValueError, ImportError, AttributeError) as e:
        console.print(f"❌ Could not load {a.target}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n❌ Interrupted by user")
        sys.exit(1)
    except Exception as exc:
        console.print(f"❌ Fatal error: {exc}")
        logging.exception("Fatal error occurred")
        sys.exit(1)

    console.print(f"✅ {type(config).__name__} bound from environment")


if __name__ == "__main__":
    main()
