# tests/factories.py
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

BASE_TIME = datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)


def student_payload(n, **overrides):
    data = {
        "cpf": str(n).rjust(11, "0"),
        "name": f"Servidor {n:03d}",
        "department": "SEAD",
        "phone": "62999990000",
        "birthDate": "1990-05-20",
        "gender": "Masculino",
        "modality": "Academia",
        "trainingDays": "Segunda, Quarta e Sexta",
        "trainingTime": "06h",
    }
    data.update(overrides)
    return data


def fake_student(id, *, on_waitlist=False, minutes=0, modality="Academia",
                 training_days="Segunda, Quarta e Sexta", training_time="06h",
                 turma=None, name=None):
    """Objeto com os atributos de Student, para as regras puras."""
    return SimpleNamespace(
        id=id,
        name=name or f"Servidor {id:03d}",
        on_waitlist=on_waitlist,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        modality=modality,
        training_days=training_days,
        training_time=training_time,
        turma=turma,
    )
