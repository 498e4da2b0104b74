from __future__ import annotations
from typing import List, Optional
from datetime import datetime
from pydantic import Field

from app.schemas.base import CamelModel

class CheckinIn(CamelModel):
    identifier: str = Field(min_length=1, description="CPF, com ou sem pontuação")
    photo: Optional[str] = None

class AttendanceOut(CamelModel):
    id: int
    student_cpf: str
    timestamp: datetime
    hour: str
    photo: Optional[str] = None

class CheckinOut(CamelModel):
    record: AttendanceOut
    student_name: str
    message: str
    dismiss_after_seconds: int

class AttendanceToday(CamelModel):
    total: int
    records: List[AttendanceOut]
