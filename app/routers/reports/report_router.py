from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.reports.report_schemas import (
    DashboardStats,
    FinancialReport,
    ReportPeriod,
)
from app.services.reports.report_service import dashboard_stats, financial_report
from app.utils.excel_export import generate_report_excel
from app.utils.get_user import get_current_user
from app.utils.pdf_generators.report_pdf import generate_report_pdf
from app.utils.response import (
    success_response,
    file_response,
    APIResponse,
    PDF_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
)
from app.utils.logger import get_logger

router = APIRouter(prefix="/reports", tags=["Reports"])
logger = get_logger(__name__)


@router.get("/dashboard", response_model=APIResponse[DashboardStats])
async def dashboard_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    on: date | None = Query(None, description="Reference date, defaults to today"),
):
    stats = await dashboard_stats(db, on)
    return success_response("Dashboard fetched successfully", stats)


@router.get("/financial", response_model=APIResponse[FinancialReport])
async def financial_report_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    period: ReportPeriod = Query("monthly"),
    category: str = Query("all"),
    on: date | None = Query(None),
):
    report = await financial_report(db, period=period, category=category, today=on)
    return success_response("Report generated successfully", report)


@router.get("/financial/pdf")
async def financial_report_pdf_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    period: ReportPeriod = Query("monthly"),
    category: str = Query("all"),
    on: date | None = Query(None),
):
    report = await financial_report(db, period=period, category=category, today=on)
    logger.info("Report PDF export", extra={"period": period, "rows": len(report.rows)})
    return file_response(
        generate_report_pdf(report),
        f"{period}-report-{report.generated_at:%Y%m%d}.pdf",
        PDF_MEDIA_TYPE,
    )


@router.get("/financial/excel")
async def financial_report_excel_api(
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
    period: ReportPeriod = Query("monthly"),
    category: str = Query("all"),
    on: date | None = Query(None),
):
    report = await financial_report(db, period=period, category=category, today=on)
    logger.info("Report Excel export", extra={"period": period, "rows": len(report.rows)})
    return file_response(
        generate_report_excel(report),
        f"{period}-report-{report.generated_at:%Y%m%d}.xlsx",
        XLSX_MEDIA_TYPE,
    )
