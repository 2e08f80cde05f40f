"""Command class catalog and version resolution.

Command classes are read in document order. For every numeric command class
code only the definition with the highest version survives; its commands are
taken from that definition alone and never merged with older versions.
"""

from __future__ import annotations

import string
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .naming import (
    IdentifierStyle,
    is_valid_identifier,
    normalize,
    strip_command_class_prefix,
    strip_command_prefix,
)


COMMAND_CLASS_TAG = "cmd_class"
COMMAND_TAG = "cmd"

MAX_CODE = 0xFF


@dataclass(frozen=True)
class CommandEntry:
    raw_name: str
    code: int
    display_name: str


@dataclass(frozen=True)
class CommandClassEntry:
    raw_name: str
    code: int
    version: int
    display_name: str
    commands: Tuple[CommandEntry, ...] = ()

    @property
    def short_name(self) -> str:
        return strip_command_class_prefix(self.raw_name) or self.raw_name


@dataclass(frozen=True)
class Catalog:
    """Resolved command classes, ordered by display name."""

    command_classes: Tuple[CommandClassEntry, ...]
    versions: Mapping[int, int] = field(default_factory=dict, hash=False, compare=False)
    _by_name: Mapping[str, CommandClassEntry] = field(
        init=False, repr=False, hash=False, compare=False
    )
    _by_code: Mapping[int, CommandClassEntry] = field(
        init=False, repr=False, hash=False, compare=False
    )

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.command_classes, key=lambda e: e.display_name))
        object.__setattr__(self, "command_classes", ordered)
        object.__setattr__(self, "versions", MappingProxyType(dict(self.versions)))
        object.__setattr__(
            self, "_by_name", MappingProxyType({e.display_name: e for e in ordered})
        )
        object.__setattr__(self, "_by_code", MappingProxyType({e.code: e for e in ordered}))

    def __iter__(self) -> Iterator[CommandClassEntry]:
        return iter(self.command_classes)

    def __len__(self) -> int:
        return len(self.command_classes)

    def get(self, display_name: str) -> Optional[CommandClassEntry]:
        return self._by_name.get(display_name)

    def by_code(self, code: int) -> Optional[CommandClassEntry]:
        return self._by_code.get(code)

    def version_of(self, code: int) -> Optional[int]:
        return self.versions.get(code)

    @property
    def command_count(self) -> int:
        return sum(len(entry.commands) for entry in self.command_classes)


def local_tag(element: ET.Element) -> str:
    tag = element.tag
    if isinstance(tag, str) and tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def parse_code(text: Optional[str]) -> Optional[int]:
    """Parse a ``0x``-prefixed 8-bit code; ``None`` when malformed."""
    if text is None or len(text) < 3 or text[:2].lower() != "0x":
        return None
    payload = text[2:].strip()
    if not payload or any(ch not in string.hexdigits for ch in payload):
        return None
    value = int(payload, 16)
    if value > MAX_CODE:
        return None
    return value


def parse_version(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    payload = text.strip()
    if not payload or not all(ch in string.digits for ch in payload):
        return None
    return int(payload)


def parse_commands(
    class_short_name: str,
    fragment: ET.Element,
    style: IdentifierStyle,
    warnings: Optional[List[str]] = None,
) -> List[CommandEntry]:
    """Extract the commands declared directly under one ``cmd_class`` node.

    Only direct children are considered. Duplicate codes and duplicate names
    are passed through in document order.
    """
    if warnings is None:
        warnings = []
    commands: List[CommandEntry] = []
    for node in fragment:
        if local_tag(node) != COMMAND_TAG:
            continue
        name = node.get("name")
        if name is None:
            warnings.append(f"{class_short_name}: command without name skipped")
            continue
        code = parse_code(node.get("key"))
        if code is None:
            warnings.append(
                f"{class_short_name}.{name}: invalid key {node.get('key')!r}, command skipped"
            )
            continue
        display_name = normalize(strip_command_prefix(class_short_name, name), style)
        if not is_valid_identifier(display_name):
            warnings.append(
                f"{class_short_name}.{name}: invalid identifier {display_name!r}, command skipped"
            )
            continue
        commands.append(CommandEntry(raw_name=name, code=code, display_name=display_name))
    return commands


class CatalogBuilder:
    """Accumulates command class nodes and resolves versions per code."""

    def __init__(self, style: IdentifierStyle) -> None:
        self.style = style
        self.warnings: List[str] = []
        self.skipped = 0
        self._entries: Dict[str, CommandClassEntry] = {}
        self._names_by_code: Dict[int, str] = {}
        self._versions: Dict[int, int] = {}

    def _skip(self, message: str) -> bool:
        self.skipped += 1
        self.warnings.append(message)
        return False

    def add(self, node: ET.Element) -> bool:
        """Apply one ``cmd_class`` node; returns True when it was installed."""
        name = node.get("name")
        if name is None:
            return self._skip("command class without name skipped")

        code = parse_code(node.get("key"))
        if code is None:
            return self._skip(f"{name}: invalid key {node.get('key')!r}, command class skipped")

        version = parse_version(node.get("version"))
        if version is None:
            return self._skip(
                f"{name}: invalid version {node.get('version')!r}, command class skipped"
            )

        short_name = strip_command_class_prefix(name)
        if short_name is None:
            return self._skip(f"{name}: missing COMMAND_CLASS_ prefix, command class skipped")

        display_name = normalize(short_name, self.style)
        if not is_valid_identifier(display_name):
            return self._skip(
                f"{name}: invalid identifier {display_name!r}, command class skipped"
            )

        prior_version = self._versions.get(code)
        if prior_version is not None and version <= prior_version:
            return self._skip(
                f"{name}: version {version} does not supersede version {prior_version}"
                f" of 0x{code:02x}, command class skipped"
            )

        holder = self._entries.get(display_name)
        if holder is not None and holder.code != code:
            return self._skip(
                f"{name}: identifier {display_name!r} already used by 0x{holder.code:02x},"
                " command class skipped"
            )

        if prior_version is not None:
            del self._entries[self._names_by_code.pop(code)]
            del self._versions[code]

        commands = parse_commands(short_name, node, self.style, self.warnings)
        self._entries[display_name] = CommandClassEntry(
            raw_name=name,
            code=code,
            version=version,
            display_name=display_name,
            commands=tuple(commands),
        )
        self._names_by_code[code] = display_name
        self._versions[code] = version
        return True

    def build(self) -> Catalog:
        return Catalog(
            command_classes=tuple(self._entries.values()),
            versions=self._versions,
        )


def ingest(nodes: Iterable[ET.Element], style: IdentifierStyle) -> Catalog:
    builder = CatalogBuilder(style)
    for node in nodes:
        builder.add(node)
    return builder.build()
