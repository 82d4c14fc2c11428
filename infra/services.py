from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Optional

from core.domain.plan import ProjectPlan
from core.events.domain_events import domain_events
from core.exceptions import DomainError
from core.reporting import api as reporting_api
from core.services.planning import PlanningService
from core.services.scheduling import SchedulingEngine
from infra.operational_support import bind_trace_id, get_operational_support
from infra.path import default_export_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportBundle:
    trace_id: str
    network_png: Path
    excel_report: Path
    pdf_report: Path


def build_services() -> dict[str, Any]:
    scheduling_engine = SchedulingEngine()
    planning_service = PlanningService(scheduling_engine, domain_events)
    return {
        "scheduling_engine": scheduling_engine,
        "planning_service": planning_service,
        "events": domain_events,
    }


def export_plan_bundle(
    planning_service: PlanningService,
    plan: ProjectPlan,
    output_dir: str | Path | None = None,
    collapsed_ids: Optional[Iterable[str]] = None,
    as_of: date | None = None,
) -> ExportBundle:
    """
    Writes the network PNG, the schedule workbook and the PDF report for one plan.

    Each export runs under its own trace id; domain failures are recorded as support
    events before they propagate.
    """
    out_dir = Path(output_dir) if output_dir is not None else default_export_dir()
    out_dir.mkdir(parents=True, exist_ok=True)
    collapsed = list(collapsed_ids) if collapsed_ids is not None else None

    with bind_trace_id(None) as trace_id:
        try:
            png = reporting_api.generate_network_png(
                planning_service, plan, out_dir / f"network_{plan.id}.png", collapsed, as_of
            )
            xlsx = reporting_api.generate_excel_report(
                planning_service, plan, out_dir / f"schedule_{plan.id}.xlsx", collapsed, as_of
            )
            pdf = reporting_api.generate_pdf_report(
                planning_service,
                plan,
                out_dir / f"schedule_{plan.id}.pdf",
                temp_dir=out_dir / "tmp",
                collapsed_ids=collapsed,
                as_of=as_of,
            )
        except DomainError as exc:
            logger.error("Export of plan %s failed: %s", plan.id, exc)
            get_operational_support().emit_event(
                event_type="plan.export.failed",
                level="ERROR",
                message=str(exc),
                data={"plan_id": plan.id, "code": exc.code, "cycle": list(getattr(exc, "cycle", ()))},
            )
            raise

        logger.info("Exported plan %s to %s", plan.id, out_dir)
        return ExportBundle(trace_id=trace_id, network_png=png, excel_report=xlsx, pdf_report=pdf)


__all__ = ["ExportBundle", "build_services", "export_plan_bundle"]
