"""Identifier normalization for generated command class constants."""

from __future__ import annotations

import enum
import re
from typing import Optional


COMMAND_CLASS_PREFIX = "COMMAND_CLASS_"

RE_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class IdentifierStyle(enum.Enum):
    VERBATIM = "verbatim"
    UPPER_CAMEL = "upper_camel"

    @classmethod
    def parse(cls, value: str) -> "IdentifierStyle":
        text = value.strip().lower().replace("-", "_")
        for style in cls:
            if style.value == text:
                return style
        raise ValueError(
            "Unsupported identifier style '{}'. Expected one of: {}".format(
                value,
                ", ".join(style.value for style in cls),
            )
        )


def to_upper_camel(token: str) -> str:
    """Convert SCREAMING_SNAKE_CASE to UpperCamelCase.

    Any letter or digit that follows a separator (or starts the token) is
    upper-cased, every other letter is lower-cased and separators are dropped.
    """
    result = []
    upper_next = True
    for ch in token:
        if ch.isalnum():
            result.append(ch.upper() if upper_next else ch.lower())
            upper_next = False
        else:
            upper_next = True
    return "".join(result)


def normalize(token: str, style: IdentifierStyle) -> str:
    if style is IdentifierStyle.VERBATIM:
        return token
    return to_upper_camel(token)


def is_valid_identifier(name: str) -> bool:
    return bool(RE_IDENTIFIER.match(name))


def strip_command_class_prefix(name: str) -> Optional[str]:
    if not name.startswith(COMMAND_CLASS_PREFIX):
        return None
    return name[len(COMMAND_CLASS_PREFIX):]


def strip_command_prefix(class_short_name: str, command_name: str) -> str:
    # Commands that do not carry their class name keep the full name.
    prefix = class_short_name + "_"
    if command_name.startswith(prefix):
        return command_name[len(prefix):]
    return command_name


def type_name(short_name: str) -> str:
    """UpperCamelCase type name for a prefix-stripped source name."""
    return to_upper_camel(short_name)


def to_snake(short_name: str) -> str:
    token = re.sub(r"[^A-Za-z0-9]+", "_", short_name)
    return re.sub(r"_+", "_", token).strip("_").lower()
