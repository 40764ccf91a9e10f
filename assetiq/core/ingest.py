from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from assetiq.core.errors import MalformedRequest
from assetiq.core.health import HealthRequest
from assetiq.impact.engine import parse_impact_request
from assetiq.impact.models import FleetState, ProposedChange


def load_request_json(path: str | Path) -> dict[str, Any]:
    """
    Read a request document from disk.

    The file must hold a single JSON object; anything else is a
    MalformedRequest. Missing files raise FileNotFoundError so the CLI can
    tell "wrong path" apart from "bad payload".
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Request file not found: {p}")
    if p.is_dir():
        raise IsADirectoryError(f"Request path is a directory, expected a file: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedRequest(f"{p}: invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})") from e

    if not isinstance(data, dict):
        raise MalformedRequest(f"{p}: top-level JSON must be an object")
    return data


def load_health_request(path: str | Path) -> HealthRequest:
    return HealthRequest.from_dict(load_request_json(path))


def load_impact_request(path: str | Path) -> tuple[ProposedChange, FleetState]:
    return parse_impact_request(load_request_json(path))
