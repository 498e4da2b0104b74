from datetime import date
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Date, ForeignKey, String, Text
from app.db.base_class import Base

class Document(Base):
    __tablename__ = "documents"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200))
    file_name: Mapped[str] = mapped_column(String(255))
    upload_date: Mapped[date] = mapped_column(Date, index=True)
    file_url: Mapped[str] = mapped_column(Text)
    file_type: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    student_id: Mapped[Optional[int]] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), nullable=True, index=True)

    student = relationship("Student", back_populates="documents")
