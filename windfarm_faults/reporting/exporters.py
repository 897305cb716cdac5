"""Excel and PDF exports of a derived fault view."""

from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..analytics.pipeline import DerivedView
from ..analytics.summaries import format_duration, summary_to_frame
from ..analytics.table import build_fault_table


def _criteria_frame(view: DerivedView) -> pd.DataFrame:
    criteria = view.criteria
    date_range = "All dates"
    if criteria.date_range is not None:
        start, end = criteria.date_range
        date_range = f"{start:%Y-%m-%d %H:%M:%S} to {end:%Y-%m-%d %H:%M:%S}"
    return pd.DataFrame(
        [
            {"Filter": "Site", "Value": criteria.site},
            {"Filter": "Device", "Value": criteria.device_name or "All"},
            {"Filter": "Date range", "Value": date_range},
            {"Filter": "Code", "Value": criteria.code or "Any"},
        ]
    )


def _top_duration_table(view: DerivedView) -> pd.DataFrame:
    frame = view.top_duration
    return pd.DataFrame(
        {
            "Alarm Code": frame.get("code", pd.Series(dtype="object")),
            "Device Name": frame.get("device_name", pd.Series(dtype="string")),
            "Duration (seconds)": frame.get("duration_seconds", pd.Series(dtype="float")),
        }
    )


def _top_frequency_table(view: DerivedView) -> pd.DataFrame:
    return view.top_frequency.rename(columns={"code": "Alarm Code", "count": "Faults"})


def _category_table(view: DerivedView) -> pd.DataFrame:
    table = view.categories.rename(
        columns={"category": "Category", "duration_seconds": "Duration (seconds)", "count": "Faults"}
    )
    table["Duration"] = table["Duration (seconds)"].map(format_duration)
    return table


def export_excel_report(view: DerivedView, *, path: str | Path | None = None) -> bytes | Path:
    """
    Build a workbook with the filtered faults and every aggregate.

    If ``path`` is provided, the workbook is written to disk and the path is returned.
    Otherwise the bytes object is returned for download workflows.
    """
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:  # type: ignore[arg-type]
        build_fault_table(view.faults).to_excel(writer, sheet_name="Faults", index=False)
        pd.concat(
            [summary_to_frame(view.summary), _criteria_frame(view).rename(columns={"Filter": "Metric"})],
            ignore_index=True,
        ).to_excel(writer, sheet_name="Summary", index=False)

        top_duration = _top_duration_table(view)
        if not top_duration.empty:
            top_duration.to_excel(writer, sheet_name="Top Duration", index=False)

        top_frequency = _top_frequency_table(view)
        if not top_frequency.empty:
            top_frequency.to_excel(writer, sheet_name="Top Frequency", index=False)

        categories = _category_table(view)
        if not categories.empty:
            categories.to_excel(writer, sheet_name="Categories", index=False)

    buffer.seek(0)
    if path is None:
        return buffer.getvalue()

    target = Path(path)
    target.write_bytes(buffer.read())
    return target


def build_pdf_report(view: DerivedView) -> bytes:
    """Create a short PDF with the headline metrics and the ranked tables."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=36,
        rightMargin=36,
        topMargin=42,
        bottomMargin=36,
    )
    styles = getSampleStyleSheet()
    story = [
        Paragraph(f"Fault Analytics: {view.criteria.site}", styles["Title"]),
        Spacer(1, 12),
        Paragraph("Filters", styles["Heading2"]),
        _table(_criteria_frame(view)),
        Spacer(1, 12),
        Paragraph("Headline Metrics", styles["Heading2"]),
        _table(summary_to_frame(view.summary)),
        Spacer(1, 12),
    ]

    sections = (
        ("Top 10 Faults by Duration", _top_duration_table(view)),
        ("Top 10 Codes by Frequency", _top_frequency_table(view)),
        ("Faults by Category", _category_table(view)),
    )
    for heading, frame in sections:
        if frame.empty:
            continue
        story.extend([Paragraph(heading, styles["Heading2"]), _table(frame), Spacer(1, 12)])

    doc.build(story)
    buffer.seek(0)
    return buffer.getvalue()


def _table(df: pd.DataFrame) -> Table:
    values = [df.columns.tolist()] + df.astype(str).values.tolist()
    tbl = Table(values, hAlign="LEFT")
    tbl.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#0b3d2e")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
            ]
        )
    )
    return tbl
