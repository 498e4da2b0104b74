# app/services/enrollment.py
"""
Regras de matrícula: vagas por turma, fila de espera e promoção.

Funções puras: recebem os alunos já carregados (ORM ou qualquer objeto com
os mesmos atributos snake_case) e nunca tocam no banco.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

class Modality(str, Enum):
    academia = "Academia"
    funcional = "Funcional"
    danca = "Dança"

class TrainingDays(str, Enum):
    seg_qua_sex = "Segunda, Quarta e Sexta"
    ter_qui = "Terça e Quinta"

class Turma(str, Enum):
    a = "Turma A"
    b = "Turma B"

class Gender(str, Enum):
    masculino = "Masculino"
    feminino = "Feminino"

_ACADEMIA_TIMES = ("06h", "07h", "11h", "12h", "13h", "17h", "18h", "19h")
_AULA_TIMES = ("07h10", "11h10", "17h10", "18h")

TRAINING_TIMES: Dict[Modality, Tuple[str, ...]] = {
    Modality.academia: _ACADEMIA_TIMES,
    Modality.funcional: _AULA_TIMES,
    Modality.danca: _AULA_TIMES,
}

UNSCHEDULED = "Não Definido"
WAITLIST_WARNING = "AVISO: Turma lotada. Adicionado à FILA DE ESPERA."

def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value

def only_digits(text: Optional[str]) -> str:
    return re.sub(r"\D", "", text or "")

def legal_times(modality: Modality | str) -> Tuple[str, ...]:
    return TRAINING_TIMES[Modality(_plain(modality))]

def is_legal_time(modality: Modality | str, training_time: Optional[str]) -> bool:
    if not training_time:
        return False
    return training_time in legal_times(modality)

def age_on(birth_date: Optional[date], today: date) -> int:
    """Idade em anos completos; nunca negativa."""
    if birth_date is None:
        return 0
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return max(years, 0)


@dataclass(frozen=True)
class SlotKey:
    """Modalidade + dias + horário + turma: o grupo com limite de vagas."""

    modality: str
    training_days: str
    training_time: Optional[str]
    turma: Optional[str] = None

    @classmethod
    def of(cls, obj: Any) -> "SlotKey":
        return cls(
            modality=_plain(obj.modality),
            training_days=_plain(obj.training_days),
            training_time=_plain(obj.training_time) or None,
            turma=_plain(getattr(obj, "turma", None)) or None,
        )

    def matches(self, obj: Any) -> bool:
        return SlotKey.of(obj) == self

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {
            "modality": self.modality,
            "training_days": self.training_days,
            "training_time": self.training_time,
            "turma": self.turma,
        }


def occupancy(key: SlotKey, students: Iterable[Any]) -> int:
    return sum(1 for s in students if not s.on_waitlist and key.matches(s))

def must_wait(key: SlotKey, students: Iterable[Any], capacity: int) -> bool:
    """True quando a turma já tem `capacity` alunos ativos."""
    return occupancy(key, students) >= capacity

def _queue_order(student: Any) -> Tuple[datetime, int]:
    return (student.created_at or datetime.max, student.id or 0)

def queue_for(key: SlotKey, students: Iterable[Any]) -> List[Any]:
    return sorted(
        (s for s in students if s.on_waitlist and key.matches(s)),
        key=_queue_order,
    )

def select_promotion(key: SlotKey, students: Sequence[Any], capacity: int) -> Optional[Any]:
    """Primeiro da fila (FIFO por created_at) se a turma tiver vaga."""
    if must_wait(key, students, capacity):
        return None
    queue = queue_for(key, students)
    return queue[0] if queue else None

def group_by_time(students: Iterable[Any]) -> List[Tuple[str, List[Any]]]:
    # mantém a ordem recebida dentro de cada grupo (nome ascendente)
    groups: Dict[str, List[Any]] = {}
    for s in students:
        if s.on_waitlist:
            continue
        groups.setdefault(s.training_time or UNSCHEDULED, []).append(s)
    return [(time, groups[time]) for time in sorted(groups)]

def waitlist_positions(students: Iterable[Any]) -> List[Tuple[int, Any]]:
    queue = sorted((s for s in students if s.on_waitlist), key=_queue_order)
    return list(enumerate(queue, start=1))
