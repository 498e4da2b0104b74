# app/api/v1/auth.py
from __future__ import annotations
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user
from app.api.v1.users import to_user_out
from app.core.tokens import create_access_token, create_refresh_token, decode_refresh
from app.crud.user import normalize_email, user_crud
from app.models.user import User
from app.schemas.token import RefreshIn, TokenPair
from app.schemas.user import UserOut

router = APIRouter()

def ensure_password_policy(password: str):
    if not isinstance(password, str) or len(password) < 8 or len(password) > 128:
        raise HTTPException(status_code=400, detail="Senha fora do padrão (8–128).")

def issue_tokens_for(user: User) -> dict:
    return {
        "access_token": create_access_token(sub=user.email, role=user.role),
        "refresh_token": create_refresh_token(sub=user.email, role=user.role),
        "token_type": "bearer",
    }

async def _extract_credentials_from_request(request: Request) -> tuple[str, str]:
    ct = request.headers.get("content-type", "").lower()
    if ct.startswith("application/json"):
        data = await request.json()
        if isinstance(data, dict):
            email = normalize_email(data.get("username") or data.get("email") or "")
            password = data.get("password") or ""
            if email and password:
                return email, password
    else:
        parsed = parse_qs((await request.body()).decode(), keep_blank_values=True)
        email = normalize_email((parsed.get("username", [""])[0]) or "")
        password = (parsed.get("password", [""])[0]) or ""
        if email and password:
            return email, password
    raise HTTPException(
        status_code=422,
        detail=[{"loc": ["body"], "msg": "Esperado JSON {email,password} ou form-urlencoded username/password", "type": "value_error"}],
    )

@router.post("/login", response_model=TokenPair)
async def login(request: Request, db: Session = Depends(get_db)):
    email, password = await _extract_credentials_from_request(request)
    ensure_password_policy(password)
    user = user_crud.authenticate(db, email, password)
    if not user:
        raise HTTPException(status_code=401, detail="Credenciais inválidas.")
    return TokenPair(**issue_tokens_for(user), user=to_user_out(user))

@router.post("/refresh", response_model=TokenPair)
def refresh(body: RefreshIn, db: Session = Depends(get_db)):
    payload = decode_refresh(body.token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token")
    user = user_crud.get_by_email(db, payload["sub"])
    if not user or not user.active:
        raise HTTPException(status_code=401, detail="Usuário não encontrado ou inativo")
    return TokenPair(**issue_tokens_for(user), user=to_user_out(user))

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return to_user_out(user)
