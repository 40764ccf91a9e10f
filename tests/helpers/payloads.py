from __future__ import annotations

from typing import Any


def health_request(asset_id: str, *components: dict[str, Any]) -> dict[str, Any]:
    return {
        "assetId": asset_id,
        "assetType": "power_transformer",
        "assetName": f"{asset_id} test unit",
        "components": list(components),
    }


def component(cid: str, name: str, ctype: str, **readings: Any) -> dict[str, Any]:
    """readings use the wire names: currentHealth, ageYears, temperature, ..."""
    return {"id": cid, "name": name, "type": ctype, **readings}
