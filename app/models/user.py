from enum import Enum
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, DateTime, String
from app.db.base_class import Base

class UserRole(str, Enum):
    admin = "admin"
    teacher = "teacher"

ROLE_LABELS_PT = {
    UserRole.admin: "Administrador",
    UserRole.teacher: "Professor",
}

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120))
    email: Mapped[str] = mapped_column(String(160), unique=True, index=True)
    cpf: Mapped[Optional[str]] = mapped_column(String(11), nullable=True)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.teacher.value)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
