# app/crud/attendance.py
import logging
from datetime import datetime, time, timedelta, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, PolicyDeniedError
from app.crud.base import CRUDBase
from app.crud.student import student_crud
from app.models.attendance import AttendanceRecord
from app.models.student import Student
from app.services.enrollment import only_digits

logger = logging.getLogger(__name__)

def _tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)

def local_day_bounds(now: datetime) -> Tuple[datetime, datetime]:
    """Início/fim (UTC) do dia civil de `now` no fuso configurado."""
    tz = _tz()
    local = now.astimezone(tz)
    start = datetime.combine(local.date(), time.min, tzinfo=tz)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

def display_hour(instant: datetime) -> str:
    return instant.astimezone(_tz()).strftime("%H:%M")

class CRUDAttendance(CRUDBase[AttendanceRecord, None, None]):
    def _notice(self) -> dict:
        return {"dismissAfterSeconds": settings.NOTIFICATION_TIMEOUT_SECONDS}

    def checkin(self, db: Session, *, identifier: str, photo: Optional[str] = None,
                now: Optional[datetime] = None) -> Tuple[AttendanceRecord, Student]:
        cpf = only_digits(identifier)
        student = student_crud.get_by_cpf(db, cpf)
        if student is None:
            logger.info("Check-in recusado: cpf=%s não encontrado", cpf or "-")
            raise NotFoundError("STUDENT_NOT_FOUND", "Servidor não encontrado.", self._notice())
        if student.blocked:
            logger.info("Check-in recusado: cpf=%s bloqueado", cpf)
            raise PolicyDeniedError("ACCESS_BLOCKED", "ACESSO BLOQUEADO PELO SISTEMA.", self._notice())

        instant = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
        rec = AttendanceRecord(
            student_cpf=student.cpf,
            timestamp=instant,
            hour=display_hour(instant),
            photo_url=photo,
        )
        db.add(rec)
        self.commit(db, rec)
        logger.info("Presença registrada: cpf=%s às %s", student.cpf, rec.hour)
        return rec, student

    def list_today(self, db: Session, now: Optional[datetime] = None) -> List[AttendanceRecord]:
        start, end = local_day_bounds(now or datetime.now(timezone.utc))
        stmt = (
            select(AttendanceRecord)
            .where(AttendanceRecord.timestamp >= start, AttendanceRecord.timestamp < end)
            .order_by(AttendanceRecord.timestamp.desc(), AttendanceRecord.id.desc())
        )
        return list(db.execute(stmt).scalars().all())

attendance_crud = CRUDAttendance(AttendanceRecord)
