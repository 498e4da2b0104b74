# app/api/v1/users.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.errors import ConfirmationRequiredError, ConflictError, DomainError
from app.core.rbac import require_admin
from app.crud.user import user_crud
from app.models.user import ROLE_LABELS_PT, User as UserModel
from app.schemas.user import UserCreate, UserOut, UserUpdate

router = APIRouter(dependencies=[Depends(require_admin)])

def to_user_out(u: UserModel) -> UserOut:
    return UserOut(
        id=u.id,
        name=u.name,
        email=u.email,
        cpf=u.cpf,
        role=u.role,
        role_label=ROLE_LABELS_PT.get(u.role),
        active=u.active,
    )

@router.get("/", response_model=List[UserOut])
def list_users(db: Session = Depends(get_db)):
    return [to_user_out(u) for u in user_crud.list_by_name(db)]

@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    if user_crud.get_by_email(db, body.email):
        raise ConflictError("EMAIL_TAKEN", "E-mail já cadastrado.")
    return to_user_out(user_crud.create(db, body))

@router.put("/{user_id}", response_model=UserOut)
def update_user(body: UserUpdate, user_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    u = user_crud.get_or_404(db, user_id)
    return to_user_out(user_crud.update_user(db, u, body))

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int = Path(..., ge=1),
    confirm: bool = False,
    db: Session = Depends(get_db),
    current: UserModel = Depends(require_admin),
):
    if not confirm:
        raise ConfirmationRequiredError("Deseja realmente remover este usuário? Envie confirm=true.")
    if current.id == user_id:
        raise DomainError("SELF_DELETE", "Não é possível remover o próprio usuário.")
    user_crud.remove(db, user_id)
