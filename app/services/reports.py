# app/services/reports.py
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.crud.attendance import attendance_crud
from app.models.student import Student
from app.schemas.report import HourCount, ModalityCount, ReportSummary
from app.services.enrollment import Modality

def build_summary(db: Session, now: Optional[datetime] = None) -> ReportSummary:
    """Contagens do painel: alunos por situação/modalidade e presenças do dia por hora."""
    rows = db.execute(
        select(Student.modality, Student.on_waitlist, func.count(Student.id))
        .group_by(Student.modality, Student.on_waitlist)
    ).all()
    per_modality = {m.value: {"active": 0, "waitlisted": 0} for m in Modality}
    for modality, waiting, n in rows:
        bucket = per_modality.setdefault(modality, {"active": 0, "waitlisted": 0})
        bucket["waitlisted" if waiting else "active"] += n

    blocked = db.scalar(select(func.count(Student.id)).where(Student.blocked.is_(True))) or 0

    today = attendance_crud.list_today(db, now or datetime.now(timezone.utc))
    by_hour = Counter(rec.hour[:2] + "h" for rec in today)

    active = sum(b["active"] for b in per_modality.values())
    waitlisted = sum(b["waitlisted"] for b in per_modality.values())
    return ReportSummary(
        total_students=active + waitlisted,
        active_students=active,
        waitlisted_students=waitlisted,
        blocked_students=blocked,
        attendance_today=len(today),
        by_modality=[ModalityCount(modality=m, **b) for m, b in per_modality.items()],
        checkins_by_hour=[HourCount(hour=h, checkins=n) for h, n in sorted(by_hour.items())],
    )
