# tests/test_reports_api.py
from datetime import datetime, timezone

from app.crud.attendance import attendance_crud
from app.services.reports import build_summary
from tests.factories import student_payload


def test_summary_counts_by_situation(client, db):
    for n in range(1, 13):
        client.post("/api/v1/students/", json=student_payload(n))
    client.post("/api/v1/students/", json=student_payload(13))
    client.post("/api/v1/students/", json=student_payload(14, modality="Dança", trainingTime="18h"))
    client.patch("/api/v1/students/cpf/00000000014/block", json={"blocked": True})

    body = client.get("/api/v1/reports/summary").json()
    assert body["totalStudents"] == 14
    assert body["activeStudents"] == 13
    assert body["waitlistedStudents"] == 1
    assert body["blockedStudents"] == 1
    by_modality = {m["modality"]: m for m in body["byModality"]}
    assert by_modality["Academia"] == {"modality": "Academia", "active": 12, "waitlisted": 1}
    assert by_modality["Dança"]["active"] == 1
    assert by_modality["Funcional"]["active"] == 0


def test_summary_groups_checkins_by_hour(client, db):
    client.post("/api/v1/students/", json=student_payload(1))
    now = datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc)
    attendance_crud.checkin(db, identifier="00000000001", now=now)
    attendance_crud.checkin(db, identifier="00000000001", now=now.replace(minute=40))
    attendance_crud.checkin(db, identifier="00000000001", now=now.replace(hour=21))

    summary = build_summary(db, now=now)
    assert summary.attendance_today == 3
    assert [(h.hour, h.checkins) for h in summary.checkins_by_hour] == [("07h", 2), ("18h", 1)]


def test_reports_are_admin_only(teacher_client):
    assert teacher_client.get("/api/v1/reports/summary").status_code == 403
