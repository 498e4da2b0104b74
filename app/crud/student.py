# app/crud/student.py
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidSlotError, NotFoundError
from app.crud.base import CRUDBase
from app.crud.mapping import to_backend
from app.models.student import Student
from app.models.training_slot import TrainingSlot
from app.schemas.student import StudentCreate, StudentUpdate, check_training_time
from app.services.enrollment import (
    SlotKey,
    TRAINING_TIMES,
    Modality,
    age_on,
    must_wait,
    occupancy,
    only_digits,
    select_promotion,
)

logger = logging.getLogger(__name__)

_SLOT_FIELDS = ("modality", "training_days", "training_time", "turma")

class CRUDStudent(CRUDBase[Student, StudentCreate, StudentUpdate]):
    not_found_code = "STUDENT_NOT_FOUND"
    not_found_message = "Servidor não encontrado."

    # ---------------- consultas ----------------

    def list_by_name(self, db: Session, q: Optional[str] = None) -> List[Student]:
        stmt = select(Student)
        if q and q.strip():
            term = q.strip()
            conds = [Student.name.ilike(f"%{term}%")]
            digits = only_digits(term)
            if digits:
                conds.append(Student.cpf.contains(digits))
            stmt = stmt.where(or_(*conds))
        stmt = stmt.order_by(Student.name, Student.id)
        return list(db.execute(stmt).scalars().all())

    def get_by_cpf(self, db: Session, cpf: str) -> Optional[Student]:
        digits = only_digits(cpf)
        if not digits:
            return None
        return db.execute(select(Student).where(Student.cpf == digits)).scalar_one_or_none()

    def _slot_filter(self, key: SlotKey):
        conds = [Student.modality == key.modality, Student.training_days == key.training_days]
        conds.append(Student.training_time.is_(None) if key.training_time is None else Student.training_time == key.training_time)
        conds.append(Student.turma.is_(None) if key.turma is None else Student.turma == key.turma)
        return conds

    def slot_members(self, db: Session, key: SlotKey, exclude_id: Optional[int] = None) -> List[Student]:
        stmt = select(Student).where(*self._slot_filter(key))
        if exclude_id is not None:
            stmt = stmt.where(Student.id != exclude_id)
        return list(db.execute(stmt).scalars().all())

    def waitlist(self, db: Session, key: Optional[SlotKey] = None) -> List[Student]:
        stmt = select(Student).where(Student.on_waitlist.is_(True))
        if key is not None:
            stmt = stmt.where(*self._slot_filter(key))
        return list(db.execute(stmt.order_by(Student.created_at, Student.id)).scalars().all())

    def occupancy_grid(self, db: Session, modality: str, training_days: str,
                       turma: Optional[str] = None) -> List[Tuple[str, int, bool]]:
        rows = db.execute(
            select(Student).where(
                Student.modality == modality,
                Student.training_days == training_days,
                Student.on_waitlist.is_(False),
            )
        ).scalars().all()
        grid = []
        for time in TRAINING_TIMES[Modality(modality)]:
            key = SlotKey(modality, training_days, time, turma)
            occ = occupancy(key, rows)
            grid.append((time, occ, occ >= settings.SLOT_CAPACITY))
        return grid

    # ---------------- trava da turma ----------------

    def _lock_slot(self, db: Session, key: SlotKey) -> TrainingSlot:
        """
        Serializa contagem + gravação na mesma turma (SELECT ... FOR UPDATE).
        A linha é criada na primeira matrícula; corrida na criação cai no
        UNIQUE e a transação (ainda vazia) é refeita.
        """
        cols = {
            "modality": key.modality,
            "training_days": key.training_days,
            "training_time": key.training_time or "",
            "turma": key.turma or "",
        }
        stmt = select(TrainingSlot).filter_by(**cols).with_for_update()
        slot = db.execute(stmt).scalar_one_or_none()
        if slot is None:
            slot = TrainingSlot(**cols)
            db.add(slot)
            try:
                db.flush()
            except IntegrityError:
                db.rollback()
                slot = db.execute(stmt).scalar_one_or_none()
                if slot is None:
                    # não foi a corrida pela mesma chave: erro real de gravação
                    raise
        return slot

    # ---------------- regras ----------------

    def enroll(self, db: Session, obj_in: StudentCreate, today: Optional[date] = None) -> Student:
        data = to_backend("student", obj_in.model_dump(by_alias=True))
        data["age"] = age_on(data.get("birth_date"), today or date.today())
        key = SlotKey.of(obj_in)
        try:
            self._lock_slot(db, key)
            data["on_waitlist"] = must_wait(key, self.slot_members(db, key), settings.SLOT_CAPACITY)
            student = Student(**data)
            db.add(student)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.warning("Matrícula não gravada para cpf=%s", data.get("cpf"))
            raise
        db.refresh(student)
        if student.on_waitlist:
            logger.info("Turma lotada %s: cpf=%s na fila de espera", key, student.cpf)
        else:
            logger.info("Matrícula admitida em %s: cpf=%s", key, student.cpf)
        return student

    def update_profile(self, db: Session, db_obj: Student, obj_in: StudentUpdate,
                       today: Optional[date] = None) -> Student:
        data = to_backend("student", obj_in.model_dump(by_alias=True, exclude_unset=True))
        old_key = SlotKey.of(db_obj)
        merged = {f: data.get(f, getattr(db_obj, f)) for f in _SLOT_FIELDS}
        try:
            check_training_time(merged["modality"], merged["training_time"])
        except ValueError as exc:
            raise InvalidSlotError("INVALID_TRAINING_TIME", str(exc)) from None
        new_key = SlotKey(**merged)

        try:
            if new_key != old_key:
                # mudar de turma é uma nova decisão de vaga (ignorando o próprio aluno)
                self._lock_slot(db, new_key)
                others = self.slot_members(db, new_key, exclude_id=db_obj.id)
                data["on_waitlist"] = must_wait(new_key, others, settings.SLOT_CAPACITY)
            if "birth_date" in data:
                data["age"] = age_on(data["birth_date"], today or date.today())
            for field, value in data.items():
                setattr(db_obj, field, value)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(db_obj)
        if new_key != old_key:
            logger.info("Aluno id=%s mudou de %s para %s (fila=%s)", db_obj.id, old_key, new_key, db_obj.on_waitlist)
        return db_obj

    def set_blocked(self, db: Session, cpf: str, blocked: bool) -> Student:
        student = self.get_by_cpf(db, cpf)
        if student is None:
            raise NotFoundError(self.not_found_code, self.not_found_message)
        student.blocked = blocked
        self.commit(db, student)
        logger.info("cpf=%s %s", student.cpf, "bloqueado" if blocked else "desbloqueado")
        return student

    def toggle_blocked(self, db: Session, cpf: str) -> Student:
        student = self.get_by_cpf(db, cpf)
        if student is None:
            raise NotFoundError(self.not_found_code, self.not_found_message)
        return self.set_blocked(db, student.cpf, not student.blocked)

    def _promote_locked(self, db: Session, key: SlotKey) -> Optional[Student]:
        candidate = select_promotion(key, self.slot_members(db, key), settings.SLOT_CAPACITY)
        if candidate is not None:
            candidate.on_waitlist = False
        return candidate

    def promote_next(self, db: Session, key: SlotKey) -> Optional[Student]:
        """Primeiro da fila da turma vira ativo, se houver vaga."""
        try:
            self._lock_slot(db, key)
            promoted = self._promote_locked(db, key)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        if promoted is not None:
            db.refresh(promoted)
            logger.info("Promovido da fila em %s: cpf=%s", key, promoted.cpf)
        return promoted

    def remove_student(self, db: Session, id: int, promote: bool = True) -> Tuple[int, Optional[SlotKey], Optional[Student]]:
        """
        Exclui o aluno. Se ele ocupava vaga, devolve a turma liberada e,
        com promote=True, promove o primeiro da fila na mesma transação.
        """
        student = self.get_or_404(db, id)
        student_id, cpf = student.id, student.cpf
        key = SlotKey.of(student)
        was_active = not student.on_waitlist
        promoted = None
        try:
            if was_active:
                self._lock_slot(db, key)
            db.delete(student)
            db.flush()
            if was_active and promote:
                promoted = self._promote_locked(db, key)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        if promoted is not None:
            db.refresh(promoted)
            logger.info("Vaga liberada em %s ocupada por cpf=%s", key, promoted.cpf)
        logger.info("Matrícula removida: id=%s cpf=%s", student_id, cpf)
        return student_id, (key if was_active else None), promoted

student_crud = CRUDStudent(Student)
