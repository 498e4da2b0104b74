from typing import List
from app.schemas.base import CamelModel

class ModalityCount(CamelModel):
    modality: str
    active: int
    waitlisted: int

class HourCount(CamelModel):
    hour: str
    checkins: int

class ReportSummary(CamelModel):
    total_students: int
    active_students: int
    waitlisted_students: int
    blocked_students: int
    attendance_today: int
    by_modality: List[ModalityCount]
    checkins_by_hour: List[HourCount]
