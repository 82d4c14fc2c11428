from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from core.reporting.contexts import PdfReportContext
from core.services.layout.zones import zone_of
from core.services.scheduling.calendar import task_finish_date, task_start_date


def _fmt(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PdfReportRenderer:
    def render(self, ctx: PdfReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=landscape(A4),
            leftMargin=40,
            rightMargin=40,
            topMargin=40,
            bottomMargin=40,
        )

        styles = getSampleStyleSheet()
        schedule = ctx.diagram.schedule
        story = []

        # ---------------- Title ----------------
        story.append(Paragraph(f"Network Schedule - {ctx.diagram.plan_name}", styles["Title"]))
        story.append(Spacer(1, 12))

        # ---------------- Summary ----------------
        info = [
            f"Plan ID: {ctx.diagram.plan_id}",
            f"Start date: {ctx.start_date.isoformat()}",
            f"Project duration: {_fmt(schedule.project_duration)}",
            f"Tasks total: {len(schedule.tasks)}",
            f"Critical tasks: {len(schedule.critical_task_ids)}",
            f"Zones: {len(ctx.diagram.layout.zones)}",
        ]
        for line in info:
            story.append(Paragraph(line, styles["Normal"]))

        story.append(Spacer(1, 16))

        # ---------------- Diagram ----------------
        if ctx.network_png_path:
            story.append(Paragraph("Network Diagram", styles["Heading2"]))
            story.append(Spacer(1, 8))
            img = Image(ctx.network_png_path)
            img._restrictSize(720, 300)
            story.append(img)
            story.append(Spacer(1, 16))

        # ---------------- Schedule ----------------
        story.append(Paragraph("Schedule", styles["Heading2"]))
        story.append(Spacer(1, 8))

        data = [["ID", "Zone", "Name", "Start", "Finish", "Dur", "TF", "FF"]]
        critical_rows = []
        for index, task in enumerate(schedule.tasks, start=1):
            data.append([
                task.id,
                zone_of(task),
                task.name,
                task_start_date(ctx.start_date, task).isoformat(),
                task_finish_date(ctx.start_date, task).isoformat(),
                _fmt(task.duration),
                _fmt(task.total_float),
                _fmt(task.free_float),
            ])
            if task.is_critical:
                critical_rows.append(index)

        table = Table(data, colWidths=[60, 90, 200, 80, 80, 50, 50, 50], repeatRows=1)
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ALIGN", (5, 1), (-1, -1), "RIGHT"),
        ]
        for index in critical_rows:
            style.append(("TEXTCOLOR", (0, index), (-1, index), colors.red))
        table.setStyle(TableStyle(style))
        story.append(table)

        doc.build(story)
        return output_path
