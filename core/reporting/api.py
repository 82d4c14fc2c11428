"""Reporting API wrappers around renderer classes."""

from contextlib import suppress
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from core.domain.plan import ProjectPlan
from core.reporting.contexts import PdfReportContext, ScheduleReportContext
from core.reporting.renderers.excel import ScheduleExcelRenderer
from core.reporting.renderers.network import NetworkDiagramPngRenderer
from core.reporting.renderers.pdf import PdfReportRenderer
from core.services.planning.service import PlanningService


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _cleanup_temp_artifact(path: Path | None, temp_dir: Path | None = None) -> None:
    if path:
        with suppress(FileNotFoundError, PermissionError, OSError):
            path.unlink()

    parent = temp_dir if temp_dir is not None else (path.parent if path else None)
    if parent is None:
        return
    if parent.exists():
        with suppress(FileNotFoundError, PermissionError, OSError):
            if not any(parent.iterdir()):
                parent.rmdir()


def _build_context(
    planning_service: PlanningService,
    plan: ProjectPlan,
    collapsed_ids: Optional[Iterable[str]],
    as_of: date | None,
) -> ScheduleReportContext:
    as_of = as_of or date.today()
    return ScheduleReportContext(
        diagram=planning_service.build_diagram(plan, collapsed_ids),
        start_date=plan.start_date or as_of,
        generated_on=as_of,
    )


def generate_network_png(
    planning_service: PlanningService,
    plan: ProjectPlan,
    output_path: str | Path,
    collapsed_ids: Optional[Iterable[str]] = None,
    as_of: date | None = None,
) -> Path:
    ctx = _build_context(planning_service, plan, collapsed_ids, as_of)
    return NetworkDiagramPngRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_excel_report(
    planning_service: PlanningService,
    plan: ProjectPlan,
    output_path: str | Path,
    collapsed_ids: Optional[Iterable[str]] = None,
    as_of: date | None = None,
) -> Path:
    ctx = _build_context(planning_service, plan, collapsed_ids, as_of)
    return ScheduleExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_pdf_report(
    planning_service: PlanningService,
    plan: ProjectPlan,
    output_path: str | Path,
    temp_dir: str | Path = "tmp_reports",
    collapsed_ids: Optional[Iterable[str]] = None,
    as_of: date | None = None,
) -> Path:
    ctx = _build_context(planning_service, plan, collapsed_ids, as_of)
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)
    network_path: Path | None = temp_dir / f"network_{plan.id}.png"
    try:
        NetworkDiagramPngRenderer().render(ctx, network_path)
    except ValueError:
        network_path = None

    pdf_ctx = PdfReportContext(
        diagram=ctx.diagram,
        start_date=ctx.start_date,
        generated_on=ctx.generated_on,
        network_png_path=str(network_path) if network_path else None,
    )
    try:
        return PdfReportRenderer().render(pdf_ctx, _ensure_parent(Path(output_path)))
    finally:
        _cleanup_temp_artifact(network_path, temp_dir=temp_dir)
