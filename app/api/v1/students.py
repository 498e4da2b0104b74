# app/api/v1/students.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.errors import ConfirmationRequiredError, InvalidSlotError
from app.core.rbac import require_admin
from app.crud.mapping import entity_of
from app.crud.student import student_crud
from app.models.student import Student as StudentModel
from app.schemas.student import (
    BlockUpdate,
    EnrollmentResult,
    PromotionResult,
    RosterGroup,
    SlotKeyIn,
    SlotKeyOut,
    StudentCreate,
    StudentDeletion,
    StudentOut,
    StudentUpdate,
    WaitlistEntry,
)
from app.services.enrollment import (
    WAITLIST_WARNING,
    SlotKey,
    Turma,
    Modality,
    TrainingDays,
    group_by_time,
    waitlist_positions,
)

router = APIRouter(dependencies=[Depends(require_admin)])

def _to_schema(s: StudentModel) -> StudentOut:
    return StudentOut.model_validate(entity_of("student", s))

def _slot_out(key: SlotKey) -> SlotKeyOut:
    return SlotKeyOut(**key.as_dict())

@router.get("/", response_model=List[StudentOut])
def list_students(
    q: Optional[str] = Query(None, description="Busca por nome ou CPF"),
    db: Session = Depends(get_db),
):
    return [_to_schema(s) for s in student_crud.list_by_name(db, q)]

@router.post("/", response_model=EnrollmentResult, status_code=status.HTTP_201_CREATED)
def enroll_student(body: StudentCreate, db: Session = Depends(get_db)):
    s = student_crud.enroll(db, body)
    return EnrollmentResult(
        student=_to_schema(s),
        waitlisted=s.on_waitlist,
        warning=WAITLIST_WARNING if s.on_waitlist else None,
        next_view="waitlist" if s.on_waitlist else "students-list",
    )

@router.get("/roster", response_model=List[RosterGroup])
def roster(
    q: Optional[str] = Query(None, description="Busca por nome ou CPF"),
    db: Session = Depends(get_db),
):
    groups = group_by_time(student_crud.list_by_name(db, q))
    return [
        RosterGroup(training_time=time, count=len(members), students=[_to_schema(s) for s in members])
        for time, members in groups
    ]

@router.get("/waitlist", response_model=List[WaitlistEntry])
def waitlist(
    q: Optional[str] = Query(None, description="Busca por nome ou CPF"),
    modality: Optional[Modality] = Query(None, description="Filtro de turma: exige trainingDays e trainingTime"),
    training_days: Optional[TrainingDays] = Query(None, alias="trainingDays"),
    training_time: Optional[str] = Query(None, alias="trainingTime"),
    turma: Optional[Turma] = Query(None),
    db: Session = Depends(get_db),
):
    key = None
    slot_parts = (modality, training_days, training_time)
    if any(p is not None for p in (*slot_parts, turma)) and not all(slot_parts):
        raise InvalidSlotError(
            "INCOMPLETE_SLOT_FILTER",
            "Para filtrar por turma informe modality, trainingDays e trainingTime.",
        )
    if all(slot_parts):
        key = SlotKey(modality.value, training_days.value, training_time, turma.value if turma else None)
    entries = waitlist_positions(student_crud.waitlist(db, key))
    # posição calculada antes do filtro: continua sendo a posição real na fila
    term = (q or "").strip().lower()
    if term:
        entries = [(pos, s) for pos, s in entries if term in s.name.lower() or term in s.cpf]
    return [
        WaitlistEntry(position=pos, **_to_schema(s).model_dump())
        for pos, s in entries
    ]

@router.post("/waitlist/promote", response_model=PromotionResult)
def promote_from_waitlist(body: SlotKeyIn, db: Session = Depends(get_db)):
    key = SlotKey.of(body)
    promoted = student_crud.promote_next(db, key)
    return PromotionResult(slot=_slot_out(key), promoted=_to_schema(promoted) if promoted else None)

@router.patch("/cpf/{cpf}/block", response_model=StudentOut)
def set_block(cpf: str, body: BlockUpdate, db: Session = Depends(get_db)):
    return _to_schema(student_crud.set_blocked(db, cpf, body.blocked))

@router.post("/cpf/{cpf}/toggle-block", response_model=StudentOut)
def toggle_block(cpf: str, db: Session = Depends(get_db)):
    return _to_schema(student_crud.toggle_blocked(db, cpf))

@router.get("/{student_id}", response_model=StudentOut)
def get_student(student_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return _to_schema(student_crud.get_or_404(db, student_id))

@router.put("/{student_id}", response_model=StudentOut)
def update_student(
    body: StudentUpdate,
    student_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    s = student_crud.get_or_404(db, student_id)
    return _to_schema(student_crud.update_profile(db, s, body))

@router.delete("/{student_id}", response_model=StudentDeletion)
def delete_student(
    student_id: int = Path(..., ge=1),
    confirm: bool = Query(False, description="Confirmação explícita da remoção"),
    promote: bool = Query(True, description="Promover o primeiro da fila se a vaga liberar"),
    db: Session = Depends(get_db),
):
    if not confirm:
        raise ConfirmationRequiredError("Deseja realmente remover esta matrícula? Envie confirm=true.")
    deleted_id, vacated, promoted = student_crud.remove_student(db, student_id, promote=promote)
    return StudentDeletion(
        deleted_id=deleted_id,
        vacated_slot=_slot_out(vacated) if vacated else None,
        promoted=_to_schema(promoted) if promoted else None,
    )
