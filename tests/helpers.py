# tests/helpers.py

import xml.etree.ElementTree as ET
from typing import Optional, Sequence, Tuple


def command_class_xml(
    name: Optional[str],
    key: Optional[str],
    version: Optional[str],
    commands: Sequence[Tuple[Optional[str], Optional[str]]] = (),
) -> str:
    attrs = []
    for attr, value in (("key", key), ("version", version), ("name", name)):
        if value is not None:
            attrs.append(f'{attr}="{value}"')
    body = []
    for cmd_name, cmd_key in commands:
        cmd_attrs = []
        if cmd_key is not None:
            cmd_attrs.append(f'key="{cmd_key}"')
        if cmd_name is not None:
            cmd_attrs.append(f'name="{cmd_name}"')
        body.append(f"<cmd {' '.join(cmd_attrs)} />")
    return f"<cmd_class {' '.join(attrs)}>{''.join(body)}</cmd_class>"


def make_class(name, key, version, commands=()) -> ET.Element:
    return ET.fromstring(command_class_xml(name, key, version, commands))


def document_xml(*classes: str) -> str:
    return '<?xml version="1.0" encoding="utf-8"?>\n<zw_classes>' + "".join(classes) + "</zw_classes>"
