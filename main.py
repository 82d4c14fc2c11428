# main.py
from datetime import date

from infra.logging_config import setup_logging
from infra.sample_plan import build_sample_plan
from infra.services import build_services, export_plan_bundle


def main() -> None:
    setup_logging()
    services = build_services()
    plan = build_sample_plan(start_date=date.today())
    bundle = export_plan_bundle(services["planning_service"], plan)
    print(f"Network diagram: {bundle.network_png}")
    print(f"Schedule workbook: {bundle.excel_report}")
    print(f"PDF report: {bundle.pdf_report}")


if __name__ == "__main__":
    main()
