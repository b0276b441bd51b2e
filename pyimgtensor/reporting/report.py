from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

REPORT_SCHEMA_VERSION = 1


def stamp_report_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Attach run-level metadata to report payloads without changing their shape."""

    stamped = dict(payload)
    stamped.setdefault("schema_version", int(REPORT_SCHEMA_VERSION))
    stamped.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    try:
        from pyimgtensor import __version__ as pyimgtensor_version
    except Exception:
        pyimgtensor_version = None
    stamped.setdefault("pyimgtensor_version", pyimgtensor_version)
    return stamped


def build_tensor_report(result: Any, *, config: Any | None = None) -> dict[str, Any]:
    """Describe a generated tensor file.

    Raw tensor files carry no shape metadata, so this sidecar is the only
    record of how to interpret the bytes.
    """

    payload: dict[str, Any] = {"tensor": result.to_dict()}
    if config is not None:
        payload["config"] = config.to_dict()
    return stamp_report_payload(payload)


def save_tensor_report(path: str | Path, payload: dict[str, Any]) -> None:
    """Save a report dict as JSON."""

    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
