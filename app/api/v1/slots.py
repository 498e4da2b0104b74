# app/api/v1/slots.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.config import settings
from app.core.rbac import require_admin, require_staff
from app.crud.student import student_crud
from app.schemas.student import ScheduleOut, SlotOccupancy
from app.services.enrollment import TRAINING_TIMES, Modality, TrainingDays, Turma

router = APIRouter()

@router.get("/schedules", response_model=List[ScheduleOut], dependencies=[Depends(require_staff)])
def schedules():
    days = [d.value for d in TrainingDays]
    return [
        ScheduleOut(
            modality=m.value,
            training_days=days,
            training_times=list(TRAINING_TIMES[m]),
            capacity=settings.SLOT_CAPACITY,
        )
        for m in Modality
    ]

@router.get("/slots/occupancy", response_model=List[SlotOccupancy], dependencies=[Depends(require_admin)])
def slot_occupancy(
    modality: Modality = Query(...),
    training_days: TrainingDays = Query(..., alias="trainingDays"),
    turma: Optional[Turma] = Query(None),
    db: Session = Depends(get_db),
):
    grid = student_crud.occupancy_grid(db, modality.value, training_days.value, turma.value if turma else None)
    return [
        SlotOccupancy(training_time=time, occupancy=occ, capacity=settings.SLOT_CAPACITY, full=full)
        for time, occ, full in grid
    ]
