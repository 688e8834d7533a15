"""
ABOUTME: Pytest configuration and shared fixtures
ABOUTME: Provides isolated environments and the default/prefixed binding modes for all tests
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from unittest.mock import patch

import pytest

from envbind import bind, bind_with_converters, bind_with_prefix, bind_with_prefix_and_converters


@dataclass
class BindingMode:
    """Sets variables and runs a bind with or without a prefix."""

    prefix: str = ""

    def setenv(self, key: str, value: str) -> None:
        os.environ[self.prefix + key] = value

    def run(self, target):
        if self.prefix:
            return bind_with_prefix(target, self.prefix)
        return bind(target)

    def run_with_converters(self, target, converters):
        if self.prefix:
            return bind_with_prefix_and_converters(target, self.prefix, converters)
        return bind_with_converters(target, converters)


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def clean_env():
    """Run the test against an empty process environment, restored afterwards."""
    with patch.dict(os.environ, {}, clear=True):
        yield os.environ


@pytest.fixture(params=["default", "prefix"])
def mode(request, clean_env):
    """Run the test once with plain names and once with the PREFIX_ prefix."""
    return BindingMode("PREFIX_" if request.param == "prefix" else "")


@pytest.fixture
def test_env_vars():
    """Provide a full set of variables for the Config fixture class."""
    return {
        "somevar": "somevalue",
        "othervar": "true",
        "PORT": "8080",
        "STRINGS": "string1,string2,string3",
        "SEPSTRINGS": "string1:string2:string3",
        "NUMBERS": "1,2,3,4",
        "NUMBERS64": "1,2,2147483640,-2147483640",
        "UNUMBERS64": "1,2,214748364011,9147483641",
        "BOOLS": "t,TRUE,0,1",
        "DURATION": "1s",
        "FLOAT32": "3.40282346638528859811704183484516925440e+38",
        "FLOAT64": "1.797693134862315708145274237317043567981e+308",
        "FLOAT32S": "1.0,2.0,3.0",
        "FLOAT64S": "1.0,2.0,3.0",
        "UINTVAL": "44",
        "UINT64VAL": "6464",
        "INT64VAL": "-7575",
        "DURATIONS": "1s,2s,3s",
    }
