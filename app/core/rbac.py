# app/core/rbac.py
from fastapi import Depends, HTTPException, status
from app.api.deps import get_current_user
from app.models.user import ROLE_LABELS_PT, UserRole

ROLE_ADMIN = UserRole.admin.value      # Administrador
ROLE_TEACHER = UserRole.teacher.value  # Professor

def require_roles(*roles: str):
    allowed = set(roles)
    def dep(user = Depends(get_current_user)):
        if user.role not in allowed:
            label = ROLE_LABELS_PT.get(user.role, user.role)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Acesso negado para o perfil '{label}'.",
            )
        return user
    return dep

require_admin = require_roles(ROLE_ADMIN)
require_staff = require_roles(ROLE_ADMIN, ROLE_TEACHER)
