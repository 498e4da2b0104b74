from __future__ import annotations
import datetime as dt
from typing import Optional
from pydantic import Field

from app.schemas.base import CamelModel

class DocumentCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    file_name: str = Field(min_length=1, max_length=255)
    file_url: str = Field(min_length=1, description="data URL (data:<mime>;base64,...)")
    file_type: Optional[str] = None
    student_id: Optional[int] = None

class DocumentOut(CamelModel):
    id: int
    title: str
    file_name: str
    upload_date: dt.date
    file_url: str
    file_type: Optional[str] = None
    student_id: Optional[int] = None
