"""
Engine configuration.

Options can be given in code or read from a YAML file:

    markers:
      begin: "<%"
      end: "%>"
    trimming: true
    allow_json: true
    allow_expressions: true
    debug: stderr        # log | stderr
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .diagnostics import DEBUG_STREAMS
from .errors import ConfigError
from .template.scanner import DEFAULT_MARKERS, Markers

_yaml = YAML(typ="safe")

_KNOWN_KEYS = {"markers", "trimming", "allow_json", "allow_expressions", "debug"}


@dataclass
class TemplateOptions:
    """
    Engine-wide options.

    allow_json / allow_expressions are the default evaluator switches for
    variable assignments, loop sources and debug tags. Value tags always
    apply their own rule on top of them.
    """
    begin_marker: str = DEFAULT_MARKERS.begin
    end_marker: str = DEFAULT_MARKERS.end
    trimming: bool = True
    allow_json: bool = True
    allow_expressions: bool = True
    debug_stream: str = "log"

    @property
    def markers(self) -> Markers:
        return Markers(self.begin_marker, self.end_marker)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TemplateOptions:
        """
        Creates options from a parsed YAML mapping.

        Raises:
            ConfigError: Unknown keys or values of the wrong type
        """
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        opts = cls()

        markers = data.get("markers")
        if markers is not None:
            if not isinstance(markers, dict):
                raise ConfigError("'markers' must be a mapping with 'begin' and 'end'")
            opts.begin_marker = _require_marker(markers, "begin", opts.begin_marker)
            opts.end_marker = _require_marker(markers, "end", opts.end_marker)

        for key in ("trimming", "allow_json", "allow_expressions"):
            if key in data:
                value = data[key]
                if not isinstance(value, bool):
                    raise ConfigError(f"'{key}' must be a boolean, got {value!r}")
                setattr(opts, key, value)

        if "debug" in data:
            stream = data["debug"]
            if stream not in DEBUG_STREAMS:
                raise ConfigError(
                    f"'debug' must be one of: {', '.join(DEBUG_STREAMS)}, got {stream!r}"
                )
            opts.debug_stream = stream

        return opts


def _require_marker(markers: Dict[str, Any], key: str, default: str) -> str:
    value = markers.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'markers.{key}' must be a non-empty string")
    return value


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file and returns a mapping."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Malformed YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_options(path: Path) -> TemplateOptions:
    """
    Loads engine options from a YAML file.

    A missing file yields default options.

    Raises:
        ConfigError: Malformed YAML or invalid option values
    """
    return TemplateOptions.from_dict(_read_yaml_map(Path(path)))


__all__ = ["TemplateOptions", "load_options"]
