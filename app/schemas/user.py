# app/schemas/user.py
from __future__ import annotations
from typing import Literal, Optional
from pydantic import EmailStr, Field, field_validator

from app.schemas.base import CamelModel
from app.services.enrollment import only_digits

RoleName = Literal["admin", "teacher"]

class UserBase(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr
    cpf: Optional[str] = None
    role: RoleName = "teacher"
    active: bool = True

    @field_validator("cpf", mode="before")
    @classmethod
    def _so_digitos(cls, v):
        if v in (None, ""):
            return None
        return only_digits(str(v))

class UserCreate(UserBase):
    password: str = Field(min_length=8, max_length=128)

class UserUpdate(CamelModel):
    name: Optional[str] = None
    active: Optional[bool] = None
    role: Optional[RoleName] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)

class UserOut(CamelModel):
    id: int
    name: str
    email: str
    cpf: Optional[str] = None
    role: str
    role_label: Optional[str] = None
    active: bool = True
