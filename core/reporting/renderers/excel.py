from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from core.reporting.contexts import ScheduleReportContext
from core.services.layout.zones import zone_of
from core.services.scheduling.calendar import task_finish_date, task_start_date

SCHEDULE_HEADERS = [
    "Task ID",
    "Zone",
    "Name",
    "Start",
    "Finish",
    "Duration",
    "Type",
    "Predecessors",
    "ES",
    "EF",
    "LS",
    "LF",
    "Total Float",
    "Free Float",
    "Critical",
    "Summary",
]


class ScheduleExcelRenderer:
    def render(self, ctx: ScheduleReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        schedule = ctx.diagram.schedule

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        critical_font = Font(color="EF4444", bold=True)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"

        ws["A1"] = f"Network Schedule - {ctx.diagram.plan_name}"
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        kv("Plan ID", ctx.diagram.plan_id)
        kv("Plan name", ctx.diagram.plan_name)
        kv("Start date", ctx.start_date.isoformat())
        kv("Project duration", schedule.project_duration)
        kv("Tasks - total", len(schedule.tasks))
        kv("Summary tasks", len(schedule.summary_task_ids))
        kv("Critical tasks", len(schedule.critical_task_ids))
        kv("Critical path", ", ".join(schedule.critical_task_ids))
        kv("Generated on", ctx.generated_on.isoformat())

        ws.column_dimensions["A"].width = 24
        ws.column_dimensions["B"].width = 40

        # ---------------- Schedule ----------------
        ws_tasks = wb.create_sheet("Schedule")
        for col_index, h in enumerate(SCHEDULE_HEADERS, start=1):
            cell = ws_tasks.cell(row=1, column=col_index, value=h)
            cell.font = header_font
            cell.alignment = center
            cell.fill = header_fill
            cell.border = thin_border

        for row_index, task in enumerate(schedule.tasks, start=2):
            values = [
                task.id,
                zone_of(task),
                task.name,
                task_start_date(ctx.start_date, task).isoformat(),
                task_finish_date(ctx.start_date, task).isoformat(),
                task.duration,
                task.type.value,
                ", ".join(task.predecessors),
                task.early_start,
                task.early_finish,
                task.late_start,
                task.late_finish,
                task.total_float,
                task.free_float,
                "Yes" if task.is_critical else "No",
                "Yes" if task.is_summary else "No",
            ]
            for col_index, value in enumerate(values, start=1):
                cell = ws_tasks.cell(row=row_index, column=col_index, value=value)
                cell.border = thin_border
                if task.is_critical:
                    cell.font = critical_font

        ws_tasks.column_dimensions["A"].width = 14
        ws_tasks.column_dimensions["B"].width = 18
        ws_tasks.column_dimensions["C"].width = 32
        for col_letter in ("D", "E", "H"):
            ws_tasks.column_dimensions[col_letter].width = 14

        # ---------------- Zones ----------------
        ws_zones = wb.create_sheet("Zones")
        headers = ["Zone", "Start Row", "Rows", "Color"]
        for c, h in enumerate(headers, start=1):
            cell = ws_zones.cell(1, c, h)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = center
            cell.border = thin_border

        for r, zone in enumerate(ctx.diagram.layout.zones, start=2):
            values = [zone.name, zone.start_row, zone.row_count, zone.color]
            for c, v in enumerate(values, 1):
                cell = ws_zones.cell(r, c, v)
                cell.border = thin_border
            ws_zones.cell(r, 4).fill = PatternFill("solid", fgColor=zone.color.lstrip("#").upper())

        ws_zones.column_dimensions["A"].width = 24
        ws_zones.column_dimensions["D"].width = 12

        wb.save(output_path)
        return output_path
