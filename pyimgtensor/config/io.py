"""Config-file readers for tensor generation options.

Files hold a single object whose keys are ``TensorGenConfig`` fields, e.g.::

    {"front_end": "tflite", "element_type": "qasymm8", "width": 224, "height": 224}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Mapping

from pyimgtensor.errors import ConfigurationError


def _read_json(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in config {source!r}: {exc}") from exc


def _read_yaml(text: str, source: str) -> Any:
    try:
        import yaml  # type: ignore[import-not-found]
    except Exception as exc:  # noqa: BLE001 - dependency boundary
        raise ImportError(
            f"Reading {source!r} requires PyYAML.\n"
            "Install it via:\n"
            "  pip install 'pyimgtensor[yaml]'"
        ) from exc

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in config {source!r}: {exc}") from exc


_READERS: Mapping[str, Callable[[str, str], Any]] = {
    ".json": _read_json,
    ".yml": _read_yaml,
    ".yaml": _read_yaml,
}


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a JSON (or, with PyYAML installed, YAML) options file into a dict.

    An empty YAML document yields ``{}``. Field values are validated later by
    :meth:`TensorGenConfig.from_mapping`.
    """

    config_path = Path(path)
    reader = _READERS.get(config_path.suffix.lower())
    if reader is None:
        raise ConfigurationError(
            f"Unsupported config extension {config_path.suffix!r} for {str(config_path)!r}; "
            f"expected one of: {', '.join(sorted(_READERS))}"
        )

    data = reader(config_path.read_text(encoding="utf-8"), str(config_path))
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            f"Config {str(config_path)!r} must hold an object, got {type(data).__name__}"
        )
    return dict(data)
