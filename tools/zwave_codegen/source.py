"""Streaming reader for the command class XML document."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from .catalog import COMMAND_CLASS_TAG, Catalog, CatalogBuilder, local_tag
from .errors import InputError


def iter_command_class_nodes(handle: BinaryIO) -> Iterator[ET.Element]:
    """Yield each ``cmd_class`` element that is a direct child of the root.

    Elements are yielded complete (with their ``cmd`` children) and detached
    from the tree once the caller moves on.
    """
    depth = -1
    root: Optional[ET.Element] = None
    for event, element in ET.iterparse(handle, events=("start", "end")):
        if event == "start":
            depth += 1
            if root is None:
                root = element
            continue

        if depth == 1:
            if local_tag(element) == COMMAND_CLASS_TAG:
                yield element
            root.remove(element)
        depth -= 1


def load_catalog(input_path: Path, builder: CatalogBuilder) -> Catalog:
    try:
        with input_path.open("rb") as handle:
            for node in iter_command_class_nodes(handle):
                builder.add(node)
    except FileNotFoundError as exc:
        raise InputError(f"Input file not found: {input_path}") from exc
    except OSError as exc:
        raise InputError(f"Could not read input file '{input_path}': {exc}") from exc
    except ET.ParseError as exc:
        raise InputError(f"Invalid XML in file '{input_path}': {exc}") from exc
    return builder.build()
