# app/crud/user.py
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.core.security_password import hash_password, verify_and_maybe_upgrade
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

def normalize_email(email: str) -> str:
    return (email or "").strip().lower()

class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    not_found_code = "USER_NOT_FOUND"
    not_found_message = "Usuário não encontrado."

    def create(self, db: Session, obj_in: UserCreate, extra=None) -> User:
        data = obj_in.model_dump()
        data["email"] = normalize_email(data["email"])
        data["hashed_password"] = hash_password(data.pop("password"))
        if extra: data.update(extra)
        return super().create(db, data)

    def update_user(self, db: Session, db_obj: User, obj_in: UserUpdate) -> User:
        data = obj_in.model_dump(exclude_unset=True)
        if data.get("password"):
            data["hashed_password"] = hash_password(data.pop("password"))
        data.pop("password", None)
        return self.update(db, db_obj, data)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()

    def list_by_name(self, db: Session) -> List[User]:
        return list(db.execute(select(User).order_by(User.name, User.id)).scalars().all())

    def authenticate(self, db: Session, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user or not user.active:
            return None
        ok, new_hash = verify_and_maybe_upgrade(password, user.hashed_password)
        if not ok:
            return None
        if new_hash:
            user.hashed_password = new_hash
            self.commit(db, user)
            logger.info("Hash de senha atualizado para %s", user.email)
        return user

user_crud = CRUDUser(User)
