# app/schemas/token.py
from typing import Optional
from pydantic import BaseModel

from app.schemas.user import UserOut

class RefreshIn(BaseModel):
    token: str

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Optional[UserOut] = None
