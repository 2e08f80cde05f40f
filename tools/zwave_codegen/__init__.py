"""Generate Z-Wave command class enumerations from command class XML."""

from .catalog import Catalog, CatalogBuilder, CommandClassEntry, CommandEntry, ingest, parse_commands
from .emitter import Artifact, emit, write_artifacts
from .errors import ConfigError, GenerationError, InputError, OutputError
from .naming import IdentifierStyle, normalize
from .profiles import PROFILES, Profile, get_profile

__all__ = [
    "Artifact",
    "Catalog",
    "CatalogBuilder",
    "CommandClassEntry",
    "CommandEntry",
    "ConfigError",
    "GenerationError",
    "IdentifierStyle",
    "InputError",
    "OutputError",
    "PROFILES",
    "Profile",
    "emit",
    "get_profile",
    "ingest",
    "normalize",
    "parse_commands",
    "write_artifacts",
]
