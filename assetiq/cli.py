from __future__ import annotations

import argparse
import logging
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from assetiq.core.config import AssetIQConfig, load_config, merge_config, parse_as_of
from assetiq.core.contract import ASSETIQ_DECISION_VERSION
from assetiq.core.errors import ImpactChainError, InputError
from assetiq.core.fleet import asset_verdict, predictions_frame
from assetiq.core.health import HealthInferenceEngine
from assetiq.core.ingest import load_health_request, load_impact_request
from assetiq.impact.engine import ImpactPropagationEngine
from assetiq.impact.models import to_naive_utc
from assetiq.report.json_report import write_health_json, write_impact_json
from assetiq.report.pdf_report import write_pdf_report

try:
    ASSETIQ_PACKAGE_VERSION = version("assetiq")
except PackageNotFoundError:
    ASSETIQ_PACKAGE_VERSION = "dev"

logger = logging.getLogger(__name__)


def _console_safe(s: str) -> str:
    # Windows consoles choke on some glyphs; PDF output is left alone
    return str(s).replace("°", " deg").replace("→", "->").replace("•", "-")


def build_arg_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Path to config TOML (optional)")
    common.add_argument("--as-of", dest="as_of", default=None,
                        help="Analysis time (ISO format). Default: config value, else now")
    common.add_argument("--log-level", dest="log_level", default=None,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")

    p = argparse.ArgumentParser(
        prog="assetiq",
        description=f"AssetIQ {ASSETIQ_PACKAGE_VERSION}: asset health inference and change impact analysis",
    )
    sub = p.add_subparsers(dest="command", required=True)

    h = sub.add_parser("health", parents=[common], help="Run health inference for one asset")
    h.add_argument("--input", default=None, help="Health request JSON (defaults from config or built-in)")
    h.add_argument("--out", default=None, help="Output PDF path (defaults from config or built-in)")
    h.add_argument("--json-out", "--json", dest="json_out", default=None, help="JSON report output path")
    h.add_argument("--no-pdf", action="store_true", help="Skip the PDF report")
    h.add_argument("--top", dest="top_predictions", type=int, default=None,
                   help="How many predictions to list in the report tables")

    i = sub.add_parser("impact", parents=[common], help="Propagate a proposed change across the fleet")
    i.add_argument("--input", dest="impact_input", default=None,
                   help="Impact request JSON {change, fleetState} (defaults from config or built-in)")
    i.add_argument("--json-out", "--json", dest="impact_json_out", default=None, help="JSON report output path")

    return p


def _explicit(args: argparse.Namespace) -> dict[str, Any]:
    """Only the flags the user actually passed, so they override the file config."""
    keys = ("input", "out", "json_out", "impact_input", "impact_json_out", "as_of", "top_predictions", "log_level")
    return {k: getattr(args, k) for k in keys if getattr(args, k, None) is not None}


def _resolve_as_of(cfg: AssetIQConfig) -> datetime | None:
    value = parse_as_of(cfg.as_of)
    return to_naive_utc(value) if value is not None else None


def run_health(cfg: AssetIQConfig, as_of: datetime | None, *, pdf: bool) -> int:
    request = load_health_request(cfg.input)
    report = HealthInferenceEngine().analyze(request, as_of=as_of)

    frame = predictions_frame(report)
    verdict = asset_verdict(frame)
    generated_at = datetime.now().strftime("%Y-%m-%d %H:%M")

    json_path = write_health_json(cfg.json_out, report, generated_at=generated_at, top_n=cfg.top_predictions)
    pdf_path: Path | None = None
    if pdf:
        pdf_path = write_pdf_report(
            cfg.out,
            report,
            frame.head(max(0, cfg.top_predictions)),
            verdict,
            generated_at=generated_at,
            top_n=cfg.top_predictions,
        )

    if pdf_path is not None:
        print(f"Report generated: {pdf_path.resolve()}")
    print(f"JSON saved:      {json_path.resolve()}")
    print(f"Asset:           {report.asset_id} | Overall Health: {report.overall_health_score}")
    print(f"Verdict:         {_console_safe(verdict)}")
    if report.predictions:
        top = report.predictions[0]
        print(f"Top prediction:  [{top.priority.upper()}] {_console_safe(top.title)}")
    return 0


def run_impact(cfg: AssetIQConfig, as_of: datetime | None) -> int:
    change, state = load_impact_request(cfg.impact_input)
    result = ImpactPropagationEngine().analyze(change, state, as_of=as_of)

    generated_at = datetime.now().strftime("%Y-%m-%d %H:%M")
    json_path = write_impact_json(
        cfg.impact_json_out,
        result,
        generated_at=generated_at,
        decision_version=ASSETIQ_DECISION_VERSION,
    )

    s = result.summary
    print(f"JSON saved:      {json_path.resolve()}")
    print(f"Change:          {change.id} ({change.type.value})")
    print(f"Overall risk:    {result.overall_risk} | confidence {result.overall_confidence:.2f}")
    print(
        f"Impacts:         {s.total} total | {s.critical} critical | {s.high} high | "
        f"{s.medium} medium | {s.low} low | {s.positive} positive"
    )
    if result.recommendations:
        print("Recommendations:")
        for r in result.recommendations:
            print(f" - [{r.priority}] {_console_safe(r.action)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    # load_config returns defaults when the file is missing
    cfg = merge_config(load_config(args.config), _explicit(args))

    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("resolved config: %s", cfg)

    try:
        as_of = _resolve_as_of(cfg)
    except ValueError as e:
        print(f"ERROR: invalid as_of {cfg.as_of!r}: {e}")
        return 2

    try:
        if args.command == "health":
            return run_health(cfg, as_of, pdf=not args.no_pdf)
        return run_impact(cfg, as_of)
    except (FileNotFoundError, IsADirectoryError, InputError) as e:
        print(f"ERROR: {e}")
        return 2
    except ImpactChainError as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
