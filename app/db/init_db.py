# app/db/init_db.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security_password import hash_password
from app.crud.user import normalize_email
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)

def init_db(db: Session) -> None:
    """Garante o primeiro administrador (idempotente)."""
    email = normalize_email(settings.ADMIN_EMAIL)
    admin = db.scalar(select(User).where(User.email == email))
    if admin:
        return
    db.add(User(
        name=settings.ADMIN_NAME,
        email=email,
        role=UserRole.admin.value,
        active=True,
        hashed_password=hash_password(settings.ADMIN_PASSWORD),
    ))
    db.commit()
    logger.info("Administrador inicial criado: %s", email)
