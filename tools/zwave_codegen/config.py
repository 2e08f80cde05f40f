"""Generator settings from defaults, an optional YAML file and CLI flags."""

from __future__ import annotations

import os
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from .errors import ConfigError
from .naming import IdentifierStyle
from .profiles import Profile, get_profile


DEFAULT_INPUT = Path("input") / "ZWave_custom_cmd_classes.xml"
DEFAULT_OUTPUT = Path("output")
DEFAULT_PROFILE = "javascript"

KNOWN_KEYS = ("input", "output", "profile", "identifier_style", "namespace", "variables")


@dataclass
class GeneratorConfig:
    input_path: Path = DEFAULT_INPUT
    output_path: Path = DEFAULT_OUTPUT
    profile: Profile = field(default_factory=lambda: get_profile(DEFAULT_PROFILE))
    identifier_style: Optional[IdentifierStyle] = None
    namespace: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def style(self) -> IdentifierStyle:
        if self.identifier_style is not None:
            return self.identifier_style
        return self.profile.identifier_style


def _as_mapping(value: Any, context: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{context}: expected mapping, got {type(value).__name__}")
    return dict(value)


def _as_str(value: Any, context: str) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ConfigError(f"{context}: expected string, got {type(value).__name__}")
    text = value.strip()
    if not text:
        raise ConfigError(f"{context}: value must not be empty")
    return text


def _substitute_variables(value: Any, variables: Mapping[str, str]) -> Any:
    if isinstance(value, dict):
        return {k: _substitute_variables(v, variables) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_variables(v, variables) for v in value]
    if isinstance(value, str):
        expanded = os.path.expandvars(value)
        return string.Template(expanded).safe_substitute(variables)
    return value


def _unknown_keys(mapping: Mapping[str, Any], known_keys: Iterable[str], context: str) -> List[str]:
    known = set(known_keys)
    return [f"{context}: unknown key '{k}'" for k in sorted(mapping.keys()) if k not in known]


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in file '{path}': {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level")

    variables = {
        str(k): _as_str(v, f"{path}: variables.{k}")
        for k, v in _as_mapping(loaded.get("variables"), f"{path}: variables").items()
    }
    return _substitute_variables(loaded, variables)


def _resolve_path(value: Any, context: str, base_dir: Optional[Path]) -> Path:
    path = Path(_as_str(value, context))
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


def resolve_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> GeneratorConfig:
    """Merge defaults, the YAML file at ``config_path`` and CLI ``overrides``.

    ``None`` values in ``overrides`` mean "not given on the command line".
    Relative paths from the YAML file are taken relative to that file.
    """
    config = GeneratorConfig()

    file_values: Dict[str, Any] = {}
    base_dir: Optional[Path] = None
    context = "config"
    if config_path is not None:
        file_values = load_config_file(config_path)
        base_dir = config_path.resolve().parent
        context = str(config_path)
        config.warnings.extend(_unknown_keys(file_values, KNOWN_KEYS, context))

    layers = [(file_values, base_dir, context), (dict(overrides or {}), None, "command line")]
    for values, layer_dir, layer_context in layers:
        if values.get("input") is not None:
            config.input_path = _resolve_path(values["input"], f"{layer_context}: input", layer_dir)
        if values.get("output") is not None:
            config.output_path = _resolve_path(
                values["output"], f"{layer_context}: output", layer_dir
            )
        if values.get("profile") is not None:
            config.profile = get_profile(_as_str(values["profile"], f"{layer_context}: profile"))
        if values.get("identifier_style") is not None:
            text = _as_str(values["identifier_style"], f"{layer_context}: identifier_style")
            try:
                config.identifier_style = IdentifierStyle.parse(text)
            except ValueError as exc:
                raise ConfigError(f"{layer_context}: {exc}") from exc
        if values.get("namespace") is not None:
            config.namespace = _as_str(values["namespace"], f"{layer_context}: namespace")

    return config
