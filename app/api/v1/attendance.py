# app/api/v1/attendance.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.config import settings
from app.core.rbac import require_staff
from app.crud.attendance import attendance_crud
from app.crud.mapping import entity_of
from app.models.attendance import AttendanceRecord
from app.schemas.attendance import AttendanceOut, AttendanceToday, CheckinIn, CheckinOut

router = APIRouter(dependencies=[Depends(require_staff)])

def _to_schema(rec: AttendanceRecord) -> AttendanceOut:
    return AttendanceOut.model_validate(entity_of("attendance", rec))

@router.post("/checkin", response_model=CheckinOut, status_code=status.HTTP_201_CREATED)
def checkin(body: CheckinIn, db: Session = Depends(get_db)):
    rec, student = attendance_crud.checkin(db, identifier=body.identifier, photo=body.photo)
    first_name = (student.name or "").split(" ")[0]
    return CheckinOut(
        record=_to_schema(rec),
        student_name=student.name,
        message=f"Presença: {first_name} registrada!",
        dismiss_after_seconds=settings.NOTIFICATION_TIMEOUT_SECONDS,
    )

@router.get("/today", response_model=AttendanceToday)
def list_today(db: Session = Depends(get_db)):
    rows = attendance_crud.list_today(db)
    return AttendanceToday(total=len(rows), records=[_to_schema(r) for r in rows])
