"""Render a resolved catalog into named artifacts and write them out."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .catalog import Catalog
from .errors import OutputError
from .profiles import Profile


INDEX_OWNER = "the command class index"


@dataclass(frozen=True)
class Artifact:
    name: str
    text: str


def emit(
    catalog: Catalog,
    profile: Profile,
    namespace: Optional[str] = None,
    warnings: Optional[List[str]] = None,
) -> List[Artifact]:
    """Produce the command class index followed by one artifact per class.

    Command classes without commands only appear in the index. When two
    classes map to the same file name, the later one in key order keeps its
    index entry but gets no command artifact, and a warning is recorded.
    """
    if namespace is None:
        namespace = profile.default_namespace
    if warnings is None:
        warnings = []

    artifacts = [Artifact(profile.index_file_name, profile.render_index(catalog, namespace))]
    owners = {profile.index_file_name: INDEX_OWNER}
    for entry in catalog:
        if not entry.commands:
            continue
        file_name = profile.command_file_name(entry)
        if file_name in owners:
            warnings.append(
                f"{entry.raw_name}: file name {file_name!r} already used by"
                f" {owners[file_name]}, commands not written"
            )
            continue
        owners[file_name] = entry.raw_name
        artifacts.append(Artifact(file_name, profile.render_commands(entry, namespace)))
    return artifacts


def clear_directory(output_dir: Path) -> None:
    if output_dir.exists() and not output_dir.is_dir():
        raise OutputError(f"Output path is not a directory: {output_dir}")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for child in output_dir.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
    except OSError as exc:
        raise OutputError(f"Could not prepare output directory '{output_dir}': {exc}") from exc


def write_artifacts(output_dir: Path, artifacts: Sequence[Artifact]) -> List[Path]:
    """Replace the contents of ``output_dir`` with ``artifacts``."""
    clear_directory(output_dir)
    written: List[Path] = []
    for artifact in artifacts:
        path = output_dir / artifact.name
        try:
            with path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(artifact.text)
        except OSError as exc:
            raise OutputError(f"Could not write '{path}': {exc}") from exc
        written.append(path)
    return written
