from __future__ import annotations

import argparse
import json
from datetime import datetime
from pathlib import Path
from typing import Any

from assetiq.core.issues import KnownIssueRegistry
from assetiq.impact.demo import demo_change_dict, demo_fleet_dict
from assetiq.impact.models import ChangeType

# ----------------------------
# Demo assets
# ----------------------------

DEMO_ASSETS: dict[str, dict[str, Any]] = {
    "BGE-TF-001": {
        "assetType": "power_transformer",
        "assetName": "Westport 230/115kV Transformer T1",
        "components": [
            {"id": "BGE-TF-001-WDG", "name": "Winding Insulation", "type": "winding", "ageYears": 42,
             "currentHealth": 52, "temperature": 88, "moisture": 22, "loadPercent": 86},
            {"id": "BGE-TF-001-HVB", "name": "HV Bushings", "type": "bushing", "ageYears": 42, "currentHealth": 61},
            {"id": "BGE-TF-001-COOL", "name": "Cooling System", "type": "cooling_system", "ageYears": 18},
            {"id": "BGE-TF-001-OLTC", "name": "On-Load Tap Changer", "type": "tap_changer", "ageYears": 42,
             "currentHealth": 74},
            {"id": "BGE-TF-001-SA", "name": "Surge Arresters", "type": "surge_arrester", "ageYears": 9},
        ],
    },
    "COMED-TF-004": {
        "assetType": "power_transformer",
        "assetName": "Crawford 345kV Autotransformer",
        "components": [
            {"id": "COMED-TF-004-WDG", "name": "Winding Insulation", "type": "winding", "ageYears": 47,
             "temperature": 105, "moisture": 40, "loadPercent": 94},
            {"id": "COMED-TF-004-HVB", "name": "HV Bushings", "type": "bushing", "ageYears": 47},
            {"id": "COMED-TF-004-OIL", "name": "Oil System", "type": "oil_system", "ageYears": 47},
            {"id": "COMED-TF-004-PROT", "name": "Protection Relays", "type": "protection_system", "ageYears": 12,
             "currentHealth": 88},
        ],
    },
    "PECO-TF-001": {
        "assetType": "power_transformer",
        "assetName": "Plymouth Meeting 230kV Transformer",
        "components": [
            {"id": "PECO-TF-001-WDG", "name": "Winding Insulation", "type": "winding", "ageYears": 35},
            {"id": "PECO-TF-001-COOL", "name": "Cooling System", "type": "cooling_system", "ageYears": 35},
            {"id": "PECO-TF-001-LVB", "name": "LV Bushings", "type": "bushing", "ageYears": 35},
            {"id": "PECO-TF-001-CT", "name": "Bushing CTs", "type": "current_transformer", "ageYears": 35,
             "currentHealth": 81},
        ],
    },
}


def demo_health_request(asset_id: str = "BGE-TF-001") -> dict[str, Any]:
    try:
        asset = DEMO_ASSETS[asset_id]
    except KeyError:
        raise ValueError(f"No demo asset {asset_id!r}; choose from {', '.join(DEMO_ASSETS)}") from None
    return {
        "assetId": asset_id,
        "assetType": asset["assetType"],
        "assetName": asset["assetName"],
        "components": [dict(c) for c in asset["components"]],
        "environmentData": {"temperature": 31, "humidity": 68, "loadPercent": 86, "windSpeed": 12},
    }


def demo_impact_request(as_of: datetime, change_type: str = "fuel_switch") -> dict[str, Any]:
    return {"change": demo_change_dict(change_type), "fleetState": demo_fleet_dict(as_of)}


def write_json(path: Path, payload: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


# ----------------------------
# CLI
# ----------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="assetiq-demo",
        description="Write deterministic demo requests for the AssetIQ health and impact engines.",
    )
    p.add_argument("--out-dir", default="data", help="Directory for the request files (default: data)")
    p.add_argument("--asset", default="BGE-TF-001", choices=sorted(DEMO_ASSETS),
                   help="Demo asset for the health request")
    p.add_argument("--change", default="fuel_switch", choices=[t.value for t in ChangeType],
                   help="Change type for the impact request")
    p.add_argument("--as-of", default="2026-01-15T08:00:00",
                   help="Snapshot time (ISO format); fleet dates are relative to it")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    out_dir = Path(args.out_dir)
    as_of = datetime.fromisoformat(args.as_of)

    health_path = write_json(out_dir / "health_request.json", demo_health_request(args.asset))
    impact_path = write_json(out_dir / "impact_request.json", demo_impact_request(as_of, args.change))

    known = "yes" if args.asset in KnownIssueRegistry.default() else "no"
    print(f"Health request: {health_path} (asset {args.asset}, known issues: {known})")
    print(f"Impact request: {impact_path} (change {args.change}, as of {as_of.isoformat()})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
