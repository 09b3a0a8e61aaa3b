import pytest
from sqlalchemy.exc import IntegrityError

from catalog.extensions import db
from catalog.models import Class
from catalog.services.class_service import INVITE_CODE_LENGTH, generate_invite_code


def test_classes_listing_embeds_subject_and_teacher(client, catalog):
    body = client.get("/classes").get_json()

    assert [c["id"] for c in body["data"]] == [200, 101, 100]
    first = body["data"][0]
    assert first["subject"]["name"] == "Modern Europe"
    assert first["teacher"]["name"] == "Tom Tutor"
    assert body["pagination"]["total"] == 3


def test_classes_filtered_by_subject_and_teacher(client, catalog):
    body = client.get("/classes?subject=algo&teacher=tara").get_json()
    assert [c["id"] for c in body["data"]] == [101, 100]
    assert body["pagination"]["total"] == 2

    body = client.get("/classes?subject=algo&teacher=tom").get_json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 0


def test_classes_pagination(client, catalog):
    body = client.get("/classes?page=2&limit=2").get_json()

    assert [c["id"] for c in body["data"]] == [100]
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2}


def test_class_details(client, catalog):
    response = client.get("/classes/100")

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["inviteCode"] == "algoa01"
    assert data["subject"]["id"] == 10
    assert data["department"]["name"] == "CS"
    assert data["teacher"]["id"] == "t1"


def test_class_details_errors(client, catalog):
    assert client.get("/classes/abc").status_code == 400
    response = client.get("/classes/12345")
    assert response.status_code == 404
    assert response.get_json() == {"error": "No Class found."}


def test_class_users_by_role(client, catalog):
    students = client.get("/classes/100/users?role=student").get_json()
    teachers = client.get("/classes/100/users?role=teacher").get_json()

    assert [u["id"] for u in students["data"]] == ["s1"]
    assert [u["id"] for u in teachers["data"]] == ["t1"]
    assert client.get("/classes/101/users?role=student").get_json()["data"] == []


def test_class_users_errors(client, catalog):
    assert client.get("/classes/100/users?role=admin").status_code == 400
    assert client.get("/classes/100/users?role=TEACHER").status_code == 400
    assert client.get("/classes/999/users?role=student").status_code == 404


def test_create_class_generates_invite_code(client, catalog):
    response = client.post("/classes", json={
        "subjectId": 20,
        "teacherId": "t2",
        "name": "Europe Lab",
    })

    assert response.status_code == 201
    created = db.session.get(Class, response.get_json()["data"]["id"])
    assert len(created.invite_code) == INVITE_CODE_LENGTH
    assert created.schedules == []


def test_create_class_missing_fields(client, catalog):
    assert client.post("/classes", json={"name": "Orphan"}).status_code == 400
    assert client.post("/classes", json={
        "subjectId": "ten", "teacherId": "t1", "name": "Bad",
    }).status_code == 400


def test_invite_code_alphabet():
    code = generate_invite_code()
    assert len(code) == INVITE_CODE_LENGTH
    assert code.isalnum() and code == code.lower()


@pytest.mark.parametrize("payload", [
    {"subjectId": 999, "teacherId": "t1", "name": "No subject"},
    {"subjectId": 10, "teacherId": "nobody", "name": "No teacher"},
])
def test_create_class_unknown_reference(client, catalog, payload):
    response = client.post("/classes", json=payload)

    assert response.status_code == 404
    assert db.session.query(Class).filter_by(name=payload["name"]).count() == 0


def test_storage_rejects_orphan_class(app, catalog):
    db.session.add(Class(subject_id=10, teacher_id="nobody", name="Orphan", schedules=[]))

    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()
