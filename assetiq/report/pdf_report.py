from __future__ import annotations

from pathlib import Path

import pandas as pd
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from assetiq.core.health import HealthReport, Prediction

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


def _wrap_lines(c: canvas.Canvas, text: str, max_width: float, font_name: str, font_size: int) -> list[str]:
    words = (text or "").split()
    if not words:
        return [""]

    lines: list[str] = []
    current = words[0]
    for w in words[1:]:
        test = f"{current} {w}"
        if c.stringWidth(test, font_name, font_size) <= max_width:
            current = test
        else:
            lines.append(current)
            current = w
    lines.append(current)
    return lines


def _draw_wrapped(
    c: canvas.Canvas,
    x: float,
    y: float,
    text: str,
    max_width: float,
    line_height: int = 13,
    font_name: str = FONT,
    font_size: int = 10,
) -> float:
    c.setFont(font_name, font_size)
    for line in _wrap_lines(c, text, max_width, font_name, font_size):
        c.drawString(x, y, line)
        y -= line_height
    return y


def _draw_curve(
    c: canvas.Canvas,
    x: float,
    y: float,
    w: float,
    h: float,
    history: list[float],
    projected: list[float],
) -> None:
    """
    Health curve on a fixed 0..100 axis: history solid, projection dashed.

    (x, y) is the bottom-left corner of the plot box.
    """
    values = history + projected
    if len(values) < 2:
        return

    c.setLineWidth(0.4)
    c.rect(x, y, w, h)
    c.setFont(FONT, 7)
    c.drawRightString(x - 3, y + h - 3, "100")
    c.drawRightString(x - 3, y, "0")

    dx = w / (len(values) - 1)

    def point(i: int) -> tuple[float, float]:
        v = min(100.0, max(0.0, float(values[i])))
        return x + i * dx, y + v / 100.0 * h

    c.setLineWidth(1.0)
    for i in range(1, len(values)):
        if i >= len(history):
            c.setDash(3, 2)
        x0, y0 = point(i - 1)
        x1, y1 = point(i)
        c.line(x0, y0, x1, y1)
    c.setDash()


def _draw_footer(c: canvas.Canvas, page_w: float, y: float, text: str, left: float, right: float) -> None:
    c.setFont(FONT, 8)
    c.drawRightString(page_w - right, y, text)
    c.drawString(left, y, "AssetIQ")


def _prediction_lines(p: Prediction) -> list[str]:
    life = p.remaining_life
    lines = [
        f"Predicted issue: {p.predicted_issue}",
        f"Current health {p.current_health:g}% | remaining life {life.value} {life.unit} ({life.percent_remaining}%) "
        f"| confidence {p.confidence}%",
        f"Recommended: {p.recommended_action}",
        f"Repair cost {p.currency} {p.repair_cost_min:,}-{p.repair_cost_max:,} | "
        f"downtime {p.downtime_min_hours}-{p.downtime_max_hours}h | "
        f"cost of inaction {p.currency} {p.cost_of_inaction:,}",
        f"Maintenance window: {p.window_start:%Y-%m-%d} to {p.window_end:%Y-%m-%d}",
    ]
    if p.parts_required:
        lines.append(f"Parts: {', '.join(p.parts_required)}")
    return lines


def write_pdf_report(
    out_path: str | Path,
    report: HealthReport,
    frame: pd.DataFrame,
    verdict: str,
    generated_at: str | None = None,
    top_n: int = 5,
) -> Path:
    """
    Three pages: component overview, detail for the top predictions with
    the degradation curve, and the reasoning trail.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(out_path), pagesize=letter)
    page_w, page_h = letter

    left = 34
    right = 44
    max_width = page_w - left - right

    col_w = {"component": 130, "type": 70, "health": 44, "remaining": 70, "conf": 40, "pri": 50, "action": 130}
    order = ["component", "type", "health", "remaining", "conf", "pri", "action"]
    xs: dict[str, float] = {}
    x = left
    for k in order:
        xs[k] = x
        x += col_w[k]

    footer = f"Generated {generated_at}" if generated_at else ""

    # ======================
    # PAGE 1: ASSET OVERVIEW
    # ======================
    y = page_h - 60
    c.setFont(FONT_BOLD, 18)
    c.drawString(left, y, f"AssetIQ Health Overview: {report.asset_name}")
    y -= 24

    c.setFont(FONT, 10)
    c.drawString(left, y, f"Asset {report.asset_id} ({report.asset_type}) | as of {report.as_of:%Y-%m-%d %H:%M}")
    y -= 14
    c.drawString(
        left, y,
        f"Overall health {report.overall_health_score}/100 | analysis version {report.analysis_version} | "
        f"next analysis {report.next_analysis:%Y-%m-%d %H:%M}",
    )
    y -= 22

    c.setFont(FONT_BOLD, 12)
    c.drawString(left, y, "Asset Verdict")
    y -= 16
    y = _draw_wrapped(c, left, y, verdict, max_width, line_height=14, font_size=11)
    y -= 14

    c.setFont(FONT_BOLD, 9)
    for key, label in zip(order, ["Component", "Type", "Health", "Remaining", "Conf", "Priority", "Action"]):
        c.drawString(xs[key], y, label)
    y -= 14

    c.setFont(FONT, 9)
    if frame.empty:
        c.drawString(left, y, "No component data available.")
        y -= 14
    for _, r in frame.iterrows():
        if y < 96:
            _draw_footer(c, page_w, 24, footer, left, right)
            c.showPage()
            y = page_h - 60
            c.setFont(FONT_BOLD, 12)
            c.drawString(left, y, "AssetIQ Health Overview (cont.)")
            y -= 24

        pri = str(r["priority"])
        name_font = FONT_BOLD if pri == "critical" else FONT
        c.setFont(name_font, 9)
        marker = "! " if pri == "critical" else ""
        y_name = _draw_wrapped(c, xs["component"], y, f"{marker}{r['component']}", col_w["component"] - 4,
                               line_height=11, font_name=name_font, font_size=9)
        c.setFont(FONT, 9)
        c.drawString(xs["type"], y, str(r["type"]))
        c.drawString(xs["health"], y, f"{float(r['health']):.1f}")
        c.drawString(xs["remaining"], y, str(r["remaining"]))
        c.drawString(xs["conf"], y, f"{int(r['confidence'])}%")
        c.drawString(xs["pri"], y, pri.upper())
        y_action = _draw_wrapped(c, xs["action"], y, str(r["action"]), col_w["action"] - 2,
                                 line_height=10, font_size=8)
        y = min(y_name, y_action) - 8

    _draw_footer(c, page_w, 24, footer, left, right)

    # ==========================
    # PAGE 2: TOP PREDICTIONS
    # ==========================
    c.showPage()
    y = page_h - 60
    c.setFont(FONT_BOLD, 16)
    c.drawString(left, y, "Degradation Outlook")
    y -= 18

    history = [p.health_score for p in report.degradation_curve if not p.is_projected]
    projected = [p.health_score for p in report.degradation_curve if p.is_projected]
    if history:
        c.setFont(FONT, 9)
        c.drawString(left, y, "Health index: history (solid) and projection (dashed)")
        y -= 74
        _draw_curve(c, left + 24, y, max_width - 24, 60, history, projected)
        y -= 24

    c.setFont(FONT_BOLD, 13)
    c.drawString(left, y, "Key Predictions")
    y -= 18

    top = report.predictions[: max(0, int(top_n))]
    if not top:
        c.setFont(FONT, 10)
        c.drawString(left, y, "No predictions produced.")
    for p in top:
        if y < 140:
            _draw_footer(c, page_w, 24, footer, left, right)
            c.showPage()
            y = page_h - 60

        c.setFont(FONT_BOLD, 10)
        c.drawString(left, y, f"[{p.priority.upper()}] {p.title}")
        y -= 14
        for line in _prediction_lines(p):
            y = _draw_wrapped(c, left + 16, y, line, max_width - 16, line_height=12, font_size=9)
        c.setLineWidth(0.3)
        c.line(left, y + 6, page_w - right, y + 6)
        y -= 12

    _draw_footer(c, page_w, 24, f"{report.asset_id} | Health {report.overall_health_score}", left, right)

    # ======================
    # PAGE 3: REASONING TRAIL
    # ======================
    c.showPage()
    y = page_h - 60
    c.setFont(FONT_BOLD, 14)
    c.drawString(left, y, "Reasoning Trail")
    y -= 22

    names = {p.component_id: p.component_name for p in report.predictions}
    for step in report.reasoning_chain:
        if y < 72:
            _draw_footer(c, page_w, 24, footer, left, right)
            c.showPage()
            y = page_h - 60
        font = FONT_BOLD if step.is_key else FONT
        text = f"- {names.get(step.component_id, step.component_id)}: {step.text} ({step.source_type}, {step.confidence}%)"
        y = _draw_wrapped(c, left, y, text, max_width, line_height=12, font_name=font, font_size=9)
        y -= 3

    y -= 10
    if y > 96:
        c.setFont(FONT_BOLD, 11)
        c.drawString(left, y, "Sources Queried")
        y -= 14
        sources = ", ".join(s.name for s in report.sources_queried)
        _draw_wrapped(c, left, y, sources, max_width, line_height=12, font_size=9)

    _draw_footer(c, page_w, 24, f"Version {report.analysis_version}", left, right)

    c.save()
    return out_path
