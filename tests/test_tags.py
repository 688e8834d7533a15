"""
ABOUTME: Unit tests for env tag parsing and field descriptors
ABOUTME: Tests the tag grammar, option validation and the env() metadata helper
"""

from dataclasses import dataclass, field, fields

import pytest

from envbind.exceptions import UnsupportedOptionError
from envbind.tags import (
    DEFAULT_KEY,
    SEPARATOR_KEY,
    TAG_KEY,
    FieldDescriptor,
    describe,
    env,
    parse_tag,
)


class TestParseTag:
    """Test the name[,option...] grammar."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("PORT", ("PORT", ())),
            ("PORT,", ("PORT", ())),
            ("PORT,required", ("PORT", ("required",))),
            ("PORT,,required,", ("PORT", ("required",))),
            ("", ("", ())),
            (",required", ("", ("required",))),
        ],
    )
    def test_valid_tags(self, tag, expected):
        assert parse_tag(tag) == expected

    def test_unknown_option(self):
        with pytest.raises(UnsupportedOptionError) as exc_info:
            parse_tag("VAR,not_supported!")
        assert exc_info.value.option == "not_supported!"
        assert str(exc_info.value) == "Env tag option not_supported! not supported."

    def test_unknown_option_after_valid_one(self):
        """Test that a valid option does not excuse an unknown one."""
        with pytest.raises(UnsupportedOptionError, match="option1"):
            parse_tag("SECRET_KEY,required,option1")

    def test_options_are_case_sensitive(self):
        with pytest.raises(UnsupportedOptionError):
            parse_tag("VAR,Required")


class TestDescribe:
    """Test building descriptors from dataclass fields."""

    def _field(self, **kwargs):
        @dataclass
        class config:
            value: str = field(default="", **kwargs)

        return fields(config)[0]

    def test_field_without_tag(self):
        assert describe(self._field()) is None
        assert describe(self._field(metadata={"other": "x"})) is None

    def test_full_metadata(self):
        descriptor = describe(
            self._field(
                metadata={TAG_KEY: "HOSTS,required", DEFAULT_KEY: "a:b", SEPARATOR_KEY: ":"}
            )
        )
        assert descriptor == FieldDescriptor(
            name="HOSTS",
            required=True,
            options=("required",),
            default="a:b",
            separator=":",
        )
        assert descriptor.bound

    def test_defaults(self):
        descriptor = describe(self._field(metadata={TAG_KEY: "VAR"}))
        assert descriptor.required is False
        assert descriptor.default is None
        assert descriptor.separator == ","

    def test_empty_name_is_unbound(self):
        assert not describe(self._field(metadata={TAG_KEY: ","})).bound

    def test_empty_separator_falls_back_to_comma(self):
        descriptor = describe(self._field(metadata={TAG_KEY: "VAR", SEPARATOR_KEY: ""}))
        assert descriptor.separator == ","

    def test_unknown_option_raises(self):
        with pytest.raises(UnsupportedOptionError):
            describe(self._field(metadata={TAG_KEY: "VAR,optional"}))


class TestEnvHelper:
    """Test the env() metadata builder."""

    def test_minimal(self):
        assert env("PORT") == {TAG_KEY: "PORT"}

    def test_all_arguments(self):
        assert env("PORT", required=True, default=3000, separator=";") == {
            TAG_KEY: "PORT,required",
            DEFAULT_KEY: "3000",
            SEPARATOR_KEY: ";",
        }

    def test_raw_tag_options_are_kept(self):
        assert env("PORT,required")[TAG_KEY] == "PORT,required"
