from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, UniqueConstraint
from app.db.base_class import Base

class TrainingSlot(Base):
    """Linha de trava por turma: matrícula e promoção fazem SELECT ... FOR UPDATE nela."""

    __tablename__ = "training_slots"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    modality: Mapped[str] = mapped_column(String(20))
    training_days: Mapped[str] = mapped_column(String(40))
    training_time: Mapped[str] = mapped_column(String(10), default="")
    turma: Mapped[str] = mapped_column(String(20), default="")

    __table_args__ = (
        UniqueConstraint("modality", "training_days", "training_time", "turma", name="uq_training_slot_key"),
    )
