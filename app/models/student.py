from datetime import date, datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Boolean, Date, DateTime, Integer, String
from app.db.base_class import Base

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Student(Base):
    __tablename__ = "students"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    cpf: Mapped[str] = mapped_column(String(11), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(160), index=True)
    department: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    birth_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    age: Mapped[int] = mapped_column(Integer, default=0)
    gender: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    blocked: Mapped[bool] = mapped_column(Boolean, default=False)
    on_waitlist: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    # chave da turma (modalidade + dias + horário + turma)
    modality: Mapped[str] = mapped_column(String(20))
    training_days: Mapped[str] = mapped_column(String(40))
    training_time: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    turma: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # microssegundos: a fila de espera é ordenada por este campo
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    documents: Mapped[List["Document"]] = relationship(  # noqa: F821
        "Document", back_populates="student", cascade="all, delete-orphan"
    )
