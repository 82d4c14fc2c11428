from datetime import date, timedelta
from pathlib import Path
from typing import Dict, Tuple

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
from matplotlib import ticker
from matplotlib.dates import date2num

from core.domain.enums import TaskType
from core.reporting.contexts import ScheduleReportContext

CRITICAL_COLOR = "#ef4444"
NORMAL_COLOR = "#1e293b"
VIRTUAL_COLOR = "#64748b"
SUMMARY_COLOR = "#0f172a"
BAR_HEIGHT = 0.18


class NetworkDiagramPngRenderer:
    """
    Time-scaled network diagram: one row per layout row, zones as coloured bands,
    each task drawn from its early start to its early finish.
    """

    def render(self, ctx: ScheduleReportContext, output_path: Path) -> Path:
        rows = list(ctx.diagram.layout.rows)
        if not rows:
            raise ValueError("No tasks available for network diagram")
        output_path.parent.mkdir(parents=True, exist_ok=True)

        def x_of(offset) -> float:
            return date2num(ctx.start_date + timedelta(days=float(offset or 0)))

        total_rows = max(ctx.diagram.layout.total_rows, 1)
        fig, ax = plt.subplots(figsize=(14, max(3.0, 0.9 * total_rows + 1.5)))

        for index, zone in enumerate(ctx.diagram.layout.zones):
            ax.axhspan(
                zone.start_row - 0.5,
                zone.end_row - 0.5,
                color=zone.color,
                alpha=0.08 if index % 2 == 0 else 0.14,
                linewidth=0,
            )

        anchors: Dict[str, Tuple[float, float, float]] = {}
        for row in rows:
            task = row.task
            y = row.global_row_index
            start = x_of(task.early_start)
            finish = x_of(task.early_finish)
            anchors[task.id] = (start, finish, y)

            if task.is_critical:
                color = CRITICAL_COLOR
            elif task.is_summary:
                color = SUMMARY_COLOR
            elif task.type == TaskType.VIRTUAL:
                color = VIRTUAL_COLOR
            else:
                color = NORMAL_COLOR

            if task.type == TaskType.MILESTONE or finish <= start:
                ax.scatter([start], [y], marker="D", s=60, color=color, zorder=3)
            else:
                ax.barh(
                    y,
                    finish - start,
                    left=start,
                    height=BAR_HEIGHT,
                    color="white" if task.type == TaskType.VIRTUAL else color,
                    edgecolor=color,
                    linewidth=1.2,
                    linestyle="--" if task.type == TaskType.VIRTUAL else "-",
                    zorder=2,
                )
            ax.text(
                (start + finish) / 2,
                y - 0.22,
                task.name or task.id,
                ha="center",
                va="bottom",
                fontsize=8,
                color=color,
            )

        for edge in ctx.diagram.view.visible_edges:
            source = anchors.get(edge.predecessor_id)
            target = anchors.get(edge.successor_id)
            if source is None or target is None:
                continue
            ax.annotate(
                "",
                xy=(target[0], target[2]),
                xytext=(source[1], source[2]),
                arrowprops={"arrowstyle": "->", "color": VIRTUAL_COLOR, "linewidth": 0.8},
                zorder=1,
            )

        ax.set_yticks([zone.start_row + (zone.row_count - 1) / 2 for zone in ctx.diagram.layout.zones])
        ax.set_yticklabels([zone.name for zone in ctx.diagram.layout.zones], fontsize=9)
        for label, zone in zip(ax.get_yticklabels(), ctx.diagram.layout.zones):
            label.set_color(zone.color)
        ax.set_ylim(total_rows - 0.5, -0.5)

        end_offset = ctx.diagram.layout.project_duration or 1
        ax.set_xlim(x_of(0) - 0.5, x_of(end_offset) + 0.5)
        locator = mdates.AutoDateLocator(minticks=4, maxticks=12)
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
        ax.xaxis.set_minor_locator(ticker.NullLocator())

        today = ctx.generated_on or date.today()
        ax.axvline(date2num(today), color="red", linestyle="--", linewidth=1)

        ax.set_title(ctx.diagram.plan_name or "Network Schedule")
        ax.grid(True, axis="x", linestyle=":", linewidth=0.5)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
