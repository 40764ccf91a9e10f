from __future__ import annotations

from copy import deepcopy
from typing import Any


def normalize_report_json(data: dict[str, Any]) -> dict[str, Any]:
    """
    Blank out fields that vary run-to-run (wall-clock generation time) so two
    reports for the same request and as_of compare equal.
    """
    d = deepcopy(data)

    meta = d.get("meta", {})
    if isinstance(meta, dict):
        meta["generated_at"] = "<redacted>"

    return d
