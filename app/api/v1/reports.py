# app/api/v1/reports.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.rbac import require_admin
from app.schemas.report import ReportSummary
from app.services.reports import build_summary

router = APIRouter(dependencies=[Depends(require_admin)])

@router.get("/summary", response_model=ReportSummary)
def summary(db: Session = Depends(get_db)):
    return build_summary(db)
