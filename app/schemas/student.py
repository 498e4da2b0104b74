from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.schemas.base import CamelModel
from app.services.enrollment import (
    Gender,
    Modality,
    TrainingDays,
    Turma,
    is_legal_time,
    legal_times,
    only_digits,
)

def _normalize_cpf(value: str) -> str:
    if value is None:
        raise ValueError("CPF obrigatório.")
    digits = only_digits(str(value))
    if len(digits) != 11:
        raise ValueError("CPF deve conter 11 dígitos.")
    return digits

def check_training_time(modality: str, training_time: Optional[str]) -> None:
    if not training_time:
        raise ValueError("Por favor, selecione um horário.")
    if not is_legal_time(modality, training_time):
        raise ValueError(
            f"Horário '{training_time}' indisponível para {modality}. "
            f"Opções: {', '.join(legal_times(modality))}."
        )

class SlotKeyIn(CamelModel):
    modality: Modality
    training_days: TrainingDays
    training_time: str
    turma: Optional[Turma] = None

    @model_validator(mode="after")
    def _check_time(self):
        check_training_time(self.modality, self.training_time)
        return self

class SlotKeyOut(CamelModel):
    modality: str
    training_days: str
    training_time: Optional[str] = None
    turma: Optional[str] = None

class StudentBase(CamelModel):
    name: str = Field(min_length=1, max_length=160)
    department: str = ""
    phone: str = ""
    birth_date: Optional[dt.date] = None
    gender: Gender = Gender.masculino
    modality: Modality = Modality.academia
    training_days: TrainingDays = TrainingDays.seg_qua_sex
    training_time: Optional[str] = None
    turma: Optional[Turma] = None

class StudentCreate(StudentBase):
    cpf: str
    blocked: bool = False

    @field_validator("cpf", mode="before")
    @classmethod
    def _valida_cpf(cls, v):
        return _normalize_cpf(v)

    @model_validator(mode="after")
    def _check_time(self):
        check_training_time(self.modality, self.training_time)
        return self

_REQUIRED_ON_UPDATE = ("name", "gender", "modality", "training_days", "training_time")

class StudentUpdate(CamelModel):
    # cpf e createdAt não mudam depois da matrícula
    name: Optional[str] = Field(default=None, min_length=1, max_length=160)
    department: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[dt.date] = None
    gender: Optional[Gender] = None
    modality: Optional[Modality] = None
    training_days: Optional[TrainingDays] = None
    training_time: Optional[str] = None
    turma: Optional[Turma] = None

    @model_validator(mode="after")
    def _sem_nulos_obrigatorios(self):
        # omitido = não altera; null explícito só vale para campos opcionais
        nulls = [
            f for f in _REQUIRED_ON_UPDATE
            if f in self.model_fields_set and getattr(self, f) is None
        ]
        if nulls:
            raise ValueError(f"Campos obrigatórios não podem ser nulos: {', '.join(nulls)}.")
        return self

class StudentOut(CamelModel):
    id: int
    cpf: str
    name: str
    department: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[dt.date] = None
    age: int = 0
    gender: Optional[str] = None
    blocked: bool = False
    on_waitlist: bool = False
    modality: str
    training_days: str
    training_time: Optional[str] = None
    turma: Optional[str] = None
    created_at: dt.datetime

class EnrollmentResult(CamelModel):
    student: StudentOut
    waitlisted: bool
    warning: Optional[str] = None
    next_view: str

class BlockUpdate(CamelModel):
    blocked: bool

class RosterGroup(CamelModel):
    training_time: str
    count: int
    students: List[StudentOut]

class WaitlistEntry(StudentOut):
    position: int

class StudentDeletion(CamelModel):
    deleted_id: int
    vacated_slot: Optional[SlotKeyOut] = None
    promoted: Optional[StudentOut] = None

class PromotionResult(CamelModel):
    slot: SlotKeyOut
    promoted: Optional[StudentOut] = None

class SlotOccupancy(CamelModel):
    training_time: str
    occupancy: int
    capacity: int
    full: bool

class ScheduleOut(CamelModel):
    modality: str
    training_days: List[str]
    training_times: List[str]
    capacity: int
