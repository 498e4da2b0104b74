# tests/test_students_api.py
from app.services.enrollment import WAITLIST_WARNING
from tests.factories import student_payload

URL = "/api/v1/students/"


def _enroll(client, n, **overrides):
    r = client.post(URL, json=student_payload(n, **overrides))
    assert r.status_code == 201, r.text
    return r.json()


def _fill_slot(client, count, start=1, **overrides):
    return [_enroll(client, i, **overrides) for i in range(start, start + count)]


def test_enroll_admits_when_slot_has_room(client):
    body = _enroll(client, 1)
    assert body["waitlisted"] is False
    assert body["warning"] is None
    assert body["nextView"] == "students-list"
    student = body["student"]
    assert student["cpf"] == "00000000001"
    assert student["onWaitlist"] is False
    assert student["age"] > 30
    assert "createdAt" in student


def test_enroll_normalizes_cpf_punctuation(client):
    r = client.post(URL, json=student_payload(1, cpf="123.456.789-09"))
    assert r.status_code == 201
    assert r.json()["student"]["cpf"] == "12345678909"


def test_scenario_thirteenth_student_goes_to_waitlist(client):
    _fill_slot(client, 12)
    body = _enroll(client, 13)
    assert body["waitlisted"] is True
    assert body["student"]["onWaitlist"] is True
    assert body["warning"] == WAITLIST_WARNING
    assert body["nextView"] == "waitlist"


def test_scenario_twelfth_student_is_admitted(client):
    _fill_slot(client, 11)
    body = _enroll(client, 12)
    assert body["waitlisted"] is False


def test_full_slot_does_not_affect_other_turma(client):
    _fill_slot(client, 12, turma="Turma A")
    body = _enroll(client, 13, turma="Turma B")
    assert body["waitlisted"] is False


def test_empty_training_time_is_rejected(client):
    r = client.post(URL, json=student_payload(1, trainingTime=""))
    assert r.status_code == 422
    assert "selecione um horário" in r.text


def test_time_must_belong_to_modality(client):
    r = client.post(URL, json=student_payload(1, modality="Funcional", trainingTime="06h"))
    assert r.status_code == 422


def test_unknown_modality_is_rejected(client):
    r = client.post(URL, json=student_payload(1, modality="Natação"))
    assert r.status_code == 422


def test_cpf_must_have_eleven_digits(client):
    r = client.post(URL, json=student_payload(1, cpf="123"))
    assert r.status_code == 422


def test_duplicate_cpf_conflicts(client):
    _enroll(client, 1)
    r = client.post(URL, json=student_payload(1, name="Outro Nome"))
    assert r.status_code == 409
    assert r.json()["code"] == "UNIQUE_VIOLATION"


def test_list_is_sorted_by_name_and_searchable(client):
    _enroll(client, 1, name="Carlos Souza")
    _enroll(client, 2, name="Ana Lima")
    _enroll(client, 3, name="Bruno Reis")
    names = [s["name"] for s in client.get(URL).json()]
    assert names == ["Ana Lima", "Bruno Reis", "Carlos Souza"]

    found = client.get(URL, params={"q": "souza"}).json()
    assert [s["name"] for s in found] == ["Carlos Souza"]
    by_cpf = client.get(URL, params={"q": "000.000.000-02"}).json()
    assert [s["cpf"] for s in by_cpf] == ["00000000002"]


def test_roster_groups_admitted_students_by_time(client):
    _enroll(client, 1, trainingTime="18h")
    _enroll(client, 2, trainingTime="06h")
    _fill_slot(client, 11, start=10)
    _enroll(client, 30)  # 06h lotado: vai para a fila
    groups = client.get(URL + "roster").json()
    assert [g["trainingTime"] for g in groups] == ["06h", "18h"]
    assert groups[0]["count"] == 12
    assert all(not s["onWaitlist"] for g in groups for s in g["students"])


def test_waitlist_positions_follow_enrollment_order(client):
    _fill_slot(client, 12)
    _enroll(client, 20, name="Zeca")
    _enroll(client, 21, name="Amanda")
    entries = client.get(URL + "waitlist").json()
    assert [(e["position"], e["name"]) for e in entries] == [(1, "Zeca"), (2, "Amanda")]

    filtered = client.get(URL + "waitlist", params={"q": "amanda"}).json()
    assert [(e["position"], e["name"]) for e in filtered] == [(2, "Amanda")]


def test_waitlist_can_be_filtered_by_slot(client):
    _fill_slot(client, 12)
    _enroll(client, 20)
    params = {"modality": "Academia", "trainingDays": "Segunda, Quarta e Sexta", "trainingTime": "07h"}
    assert client.get(URL + "waitlist", params=params).json() == []
    params["trainingTime"] = "06h"
    assert len(client.get(URL + "waitlist", params=params).json()) == 1


def test_delete_requires_confirmation(client):
    s = _enroll(client, 1)["student"]
    r = client.delete(URL + str(s["id"]))
    assert r.status_code == 428
    assert r.json()["code"] == "CONFIRMATION_REQUIRED"
    assert client.get(URL + str(s["id"])).status_code == 200


def test_delete_admitted_student_promotes_first_in_queue(client):
    admitted = _fill_slot(client, 12)
    first = _enroll(client, 20)["student"]
    second = _enroll(client, 21)["student"]

    victim = admitted[5]["student"]
    r = client.delete(URL + str(victim["id"]), params={"confirm": "true"})
    assert r.status_code == 200
    body = r.json()
    assert body["deletedId"] == victim["id"]
    assert body["vacatedSlot"]["trainingTime"] == "06h"
    assert body["promoted"]["id"] == first["id"]
    assert body["promoted"]["onWaitlist"] is False

    active = [s for s in client.get(URL).json() if not s["onWaitlist"]]
    assert len(active) == 12
    queue = client.get(URL + "waitlist").json()
    assert [(e["position"], e["id"]) for e in queue] == [(1, second["id"])]


def test_delete_without_promotion_leaves_queue(client):
    admitted = _fill_slot(client, 12)
    _enroll(client, 20)
    r = client.delete(URL + str(admitted[0]["student"]["id"]), params={"confirm": "true", "promote": "false"})
    assert r.status_code == 200
    assert r.json()["promoted"] is None
    assert len(client.get(URL + "waitlist").json()) == 1

    r = client.post(URL + "waitlist/promote", json={
        "modality": "Academia", "trainingDays": "Segunda, Quarta e Sexta", "trainingTime": "06h",
    })
    assert r.status_code == 200
    assert r.json()["promoted"]["cpf"] == "00000000020"
    assert client.get(URL + "waitlist").json() == []


def test_promote_on_full_slot_does_nothing(client):
    _fill_slot(client, 12)
    _enroll(client, 20)
    r = client.post(URL + "waitlist/promote", json={
        "modality": "Academia", "trainingDays": "Segunda, Quarta e Sexta", "trainingTime": "06h",
    })
    assert r.status_code == 200
    assert r.json()["promoted"] is None


def test_delete_waitlisted_student_vacates_nothing(client):
    _fill_slot(client, 12)
    waiting = _enroll(client, 20)["student"]
    body = client.delete(URL + str(waiting["id"]), params={"confirm": "true"}).json()
    assert body["vacatedSlot"] is None
    assert body["promoted"] is None


def test_delete_unknown_student_is_not_found(client):
    r = client.delete(URL + "999", params={"confirm": "true"})
    assert r.status_code == 404
    assert r.json()["code"] == "STUDENT_NOT_FOUND"


def test_block_and_toggle_by_cpf(client):
    _enroll(client, 1)
    r = client.patch(URL + "cpf/000.000.000-01/block", json={"blocked": True})
    assert r.status_code == 200
    assert r.json()["blocked"] is True
    r = client.post(URL + "cpf/00000000001/toggle-block")
    assert r.json()["blocked"] is False
    assert client.post(URL + "cpf/99999999999/toggle-block").status_code == 404


def test_update_profile_keeps_slot(client):
    s = _enroll(client, 1)["student"]
    r = client.put(URL + str(s["id"]), json={"name": "Nome Novo", "phone": "6230000000"})
    assert r.status_code == 200
    assert r.json()["name"] == "Nome Novo"
    assert r.json()["onWaitlist"] is False


def test_moving_into_full_slot_puts_student_on_waitlist(client):
    _fill_slot(client, 12)
    mover = _enroll(client, 30, trainingTime="07h")["student"]
    r = client.put(URL + str(mover["id"]), json={"trainingTime": "06h"})
    assert r.status_code == 200
    assert r.json()["onWaitlist"] is True


def test_update_rejects_time_of_other_modality(client):
    s = _enroll(client, 1)["student"]
    r = client.put(URL + str(s["id"]), json={"modality": "Dança"})
    assert r.status_code == 422
    assert r.json()["code"] == "INVALID_TRAINING_TIME"


def test_update_unknown_student_is_not_found(client):
    assert client.put(URL + "999", json={"name": "X"}).status_code == 404


def test_teacher_cannot_manage_students(teacher_client):
    assert teacher_client.get(URL).status_code == 403
    assert teacher_client.post(URL, json=student_payload(1)).status_code == 403


def test_update_rejects_null_for_required_fields(client):
    s = _enroll(client, 1)["student"]
    for field in ("name", "trainingDays", "modality", "gender", "trainingTime"):
        r = client.put(URL + str(s["id"]), json={field: None})
        assert r.status_code == 422, (field, r.text)
    unchanged = client.get(URL + str(s["id"])).json()
    assert unchanged["name"] == s["name"]
    assert unchanged["trainingDays"] == "Segunda, Quarta e Sexta"


def test_update_accepts_null_for_optional_fields(client):
    s = _enroll(client, 1, turma="Turma A")["student"]
    r = client.put(URL + str(s["id"]), json={"turma": None, "birthDate": None})
    assert r.status_code == 200
    assert r.json()["turma"] is None
    assert r.json()["age"] == 0


def test_waitlist_partial_slot_filter_is_rejected(client):
    r = client.get(URL + "waitlist", params={"modality": "Academia", "trainingDays": "Segunda, Quarta e Sexta"})
    assert r.status_code == 422
    assert r.json()["code"] == "INCOMPLETE_SLOT_FILTER"
    assert client.get(URL + "waitlist", params={"turma": "Turma A"}).status_code == 422
