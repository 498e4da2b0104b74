from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import DateTime, String, Text
from app.db.base_class import Base

class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # referencia Student.cpf (não o id): o histórico sobrevive à exclusão do aluno
    student_cpf: Mapped[str] = mapped_column(String(11), index=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    hour: Mapped[str] = mapped_column(String(5))
    photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
