# tests/conftest.py
from datetime import datetime, timedelta

import pytest

from catalog import create_app
from catalog.config import TestConfig
from catalog.extensions import db
from catalog.models import Class, Department, Enrollment, Subject, User

BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)


def at(minutes):
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog(app):
    """
    CS (1) -> Algorithms (10) -> classes 100, 101, both taught by t1.
    s1 is enrolled in class 100 only. History (2) -> Modern Europe (20)
    -> class 200 taught by t2, with s2 enrolled.
    """
    users = [
        User(id="t1", name="Tara Teacher", email="tara@uni.test", role="teacher", created_at=at(1)),
        User(id="t2", name="Tom Tutor", email="tom@uni.test", role="teacher", created_at=at(2)),
        User(id="s1", name="Sam Student", email="sam@uni.test", role="student", created_at=at(3)),
        User(id="s2", name="Sue Scholar", email="sue@uni.test", role="student", created_at=at(4)),
        User(id="a1", name="Ada Admin", email="ada@uni.test", role="admin", created_at=at(5)),
    ]
    departments = [
        Department(id=1, code="CS", name="CS", description="Computing", created_at=at(10)),
        Department(id=2, code="HIS", name="History", created_at=at(11)),
    ]
    subjects = [
        Subject(id=10, department_id=1, name="Algorithms", code="CS201", created_at=at(20)),
        Subject(id=20, department_id=2, name="Modern Europe", code="HIS101", created_at=at(21)),
    ]
    classes = [
        Class(id=100, subject_id=10, teacher_id="t1", name="Algorithms A",
              invite_code="algoa01", schedules=[], created_at=at(30)),
        Class(id=101, subject_id=10, teacher_id="t1", name="Algorithms B",
              invite_code="algob02", schedules=[], created_at=at(31)),
        Class(id=200, subject_id=20, teacher_id="t2", name="Europe Seminar",
              invite_code="euro003", schedules=[], created_at=at(32)),
    ]
    enrollments = [
        Enrollment(student_id="s1", class_id=100),
        Enrollment(student_id="s2", class_id=200),
    ]

    db.session.add_all(users + departments)
    db.session.flush()
    db.session.add_all(subjects)
    db.session.flush()
    db.session.add_all(classes)
    db.session.flush()
    db.session.add_all(enrollments)
    db.session.commit()

    return {
        "users": {u.id: u for u in users},
        "departments": {d.id: d for d in departments},
        "subjects": {s.id: s for s in subjects},
        "classes": {c.id: c for c in classes},
    }
