# tests/test_mapping.py
from datetime import date, datetime, timezone

import pytest

from app.crud.mapping import entity_of, from_backend, to_backend

ROWS = {
    "student": {
        "id": 1, "cpf": "11111111111", "name": "Ana", "department": "SEAD",
        "phone": "62999990000", "birth_date": date(1990, 5, 20), "age": 34,
        "gender": "Feminino", "blocked": False, "on_waitlist": True,
        "modality": "Dança", "training_days": "Terça e Quinta",
        "training_time": "18h", "turma": "Turma B",
        "created_at": datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc),
    },
    "attendance": {
        "id": 9, "student_cpf": "11111111111",
        "timestamp": datetime(2024, 3, 4, 10, 5, tzinfo=timezone.utc),
        "hour": "07:05", "photo_url": "data:image/jpeg;base64,AAAA",
    },
    "document": {
        "id": 3, "title": "Atestado", "file_name": "atestado.pdf",
        "upload_date": date(2024, 3, 4), "file_url": "data:application/pdf;base64,JVBE",
        "file_type": "application/pdf", "student_id": 1,
    },
    "user": {
        "id": 2, "name": "Prof", "email": "prof@go.gov.br", "cpf": None,
        "role": "teacher", "active": True, "hashed_password": "$argon2id$...",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    },
}


@pytest.mark.parametrize("entity", sorted(ROWS))
def test_round_trip_both_directions(entity):
    row = ROWS[entity]
    assert to_backend(entity, from_backend(entity, row)) == row
    api_side = from_backend(entity, row)
    assert from_backend(entity, to_backend(entity, api_side)) == api_side


def test_field_names_are_translated():
    api_side = from_backend("attendance", ROWS["attendance"])
    assert api_side["studentCpf"] == "11111111111"
    assert api_side["photo"].startswith("data:image/jpeg")
    assert "photo_url" not in api_side


def test_partial_payload_keeps_only_given_fields():
    assert to_backend("student", {"trainingTime": "07h"}) == {"training_time": "07h"}


def test_unknown_field_is_rejected():
    with pytest.raises(KeyError):
        to_backend("student", {"nickname": "x"})


def test_unknown_entity_is_rejected():
    with pytest.raises(KeyError):
        from_backend("payments", {})


def test_entity_of_reads_orm_columns(db):
    from app.models.document import Document

    doc = Document(title="Regulamento", file_name="reg.pdf", upload_date=date(2024, 3, 4),
                   file_url="data:application/pdf;base64,JVBE", file_type="application/pdf")
    db.add(doc)
    db.commit()
    out = entity_of("document", doc)
    assert out["fileName"] == "reg.pdf"
    assert out["studentId"] is None
