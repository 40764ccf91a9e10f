from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

try:
    import tomllib  # py3.11+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


# ----------------------------
# Primary config object
# ----------------------------

@dataclass(frozen=True)
class AssetIQConfig:
    """
    Single, flattened config object used by the CLI/runtime.

    Supports the simple style:
      [assetiq]
      input, out, json_out, impact_input, impact_json_out, as_of, top_predictions, log_level

    Also supports structured style:
      [meta], [report], [runtime]
    """
    schema_version: str = "v1"

    # IO
    input: str = "data/health_request.json"
    out: str = "outputs/assetiq_report.pdf"
    json_out: str = "outputs/assetiq_report.json"
    impact_input: str = "data/impact_request.json"
    impact_json_out: str = "outputs/assetiq_impact.json"

    # analysis knobs
    as_of: str | None = None
    top_predictions: int = 5

    # runtime
    log_level: str = "WARNING"


# ----------------------------
# Helpers
# ----------------------------

def _as_dict(x: Any) -> dict[str, Any]:
    return x if isinstance(x, dict) else {}


def _get(d: dict[str, Any], key: str, default: Any) -> Any:
    return d.get(key, default) if isinstance(d, dict) else default


def _coerce_int(x: Any, default: int) -> int:
    try:
        return int(x)
    except (TypeError, ValueError):
        return default


def _coerce_str(x: Any, default: str) -> str:
    if x is None:
        return default
    s = str(x)
    return s if s.strip() else default


def _coerce_opt_str(x: Any) -> str | None:
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def _coerce_as_of(x: Any) -> str | None:
    # tomllib parses bare TOML datetimes into datetime objects
    if isinstance(x, datetime):
        return x.isoformat()
    return _coerce_opt_str(x)


def parse_as_of(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


# ----------------------------
# Load + merge
# ----------------------------

def load_config(path: str | Path | None) -> AssetIQConfig:
    """
    Load TOML config. If missing/None, returns safe defaults.
    Never raises for missing file (config is optional).
    """
    if not path:
        return AssetIQConfig()

    p = Path(path)
    if not p.exists():
        return AssetIQConfig()

    data = tomllib.loads(p.read_text(encoding="utf-8"))

    # Preferred simple table
    aiq = _as_dict(data.get("assetiq", {}))

    # Optional structured tables
    meta = _as_dict(data.get("meta", {}))
    report = _as_dict(data.get("report", {}))
    runtime = _as_dict(data.get("runtime", {}))

    schema_version = _coerce_str(_get(meta, "schema_version", "v1"), "v1")

    input_path = _coerce_str(_get(aiq, "input", AssetIQConfig.input), AssetIQConfig.input)
    out_pdf = _coerce_str(_get(aiq, "out", _get(report, "pdf", AssetIQConfig.out)), AssetIQConfig.out)
    json_out = _coerce_str(_get(aiq, "json_out", _get(report, "json", AssetIQConfig.json_out)), AssetIQConfig.json_out)
    impact_input = _coerce_str(_get(aiq, "impact_input", AssetIQConfig.impact_input), AssetIQConfig.impact_input)
    impact_json_out = _coerce_str(
        _get(aiq, "impact_json_out", _get(report, "impact_json", AssetIQConfig.impact_json_out)),
        AssetIQConfig.impact_json_out,
    )

    as_of = _coerce_as_of(_get(aiq, "as_of", _get(runtime, "as_of", None)))

    top_predictions = _coerce_int(
        _get(aiq, "top_predictions", _get(report, "top_predictions", AssetIQConfig.top_predictions)),
        AssetIQConfig.top_predictions,
    )
    log_level = _coerce_str(
        _get(aiq, "log_level", _get(runtime, "log_level", AssetIQConfig.log_level)),
        AssetIQConfig.log_level,
    ).upper()

    return AssetIQConfig(
        schema_version=schema_version,
        input=input_path,
        out=out_pdf,
        json_out=json_out,
        impact_input=impact_input,
        impact_json_out=impact_json_out,
        as_of=as_of,
        top_predictions=top_predictions,
        log_level=log_level,
    )


def merge_config(cfg: AssetIQConfig, args: Any) -> AssetIQConfig:
    """
    Merge CLI args over file config.
    Accepts a dict or an argparse namespace; only applies values that are
    present AND not None/empty.
    """
    def lookup(name: str) -> Any:
        if isinstance(args, dict):
            return args.get(name)
        return getattr(args, name, None)

    def pick_str(name: str, cur: str) -> str:
        v = lookup(name)
        if v is not None and str(v).strip():
            return str(v).strip()
        return cur

    def pick_opt_str(name: str, cur: str | None) -> str | None:
        v = lookup(name)
        if v is None:
            return cur
        s = str(v).strip()
        return s or cur

    def pick_int(name: str, cur: int) -> int:
        v = lookup(name)
        if v is not None:
            return _coerce_int(v, cur)
        return cur

    return AssetIQConfig(
        schema_version=cfg.schema_version,
        input=pick_str("input", cfg.input),
        out=pick_str("out", cfg.out),
        json_out=pick_str("json_out", cfg.json_out),
        impact_input=pick_str("impact_input", cfg.impact_input),
        impact_json_out=pick_str("impact_json_out", cfg.impact_json_out),
        as_of=pick_opt_str("as_of", cfg.as_of),
        top_predictions=pick_int("top_predictions", cfg.top_predictions),
        log_level=pick_str("log_level", cfg.log_level).upper(),
    )
