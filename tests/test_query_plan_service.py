from sqlalchemy import func, select

from catalog.extensions import db
from catalog.models import Department, Enrollment, Subject
from catalog.services.department_service import department_with_totals, total_subjects
from catalog.services.filter_service import Equals, FilterSchema
from catalog.services.pagination_service import Page
from catalog.services.query_plan_service import QueryPlan, empty_result
from catalog.services.subject_service import subject_with_department
from catalog.services.topology_service import (
    DEPARTMENT_LISTING,
    ENROLLED,
    TEACHING,
    subjects_reachable,
)
from tests.conftest import at


def _department_plan(predicate=None):
    return QueryPlan(
        DEPARTMENT_LISTING,
        entities=(Department,),
        aggregates=(total_subjects,),
        predicate=predicate if predicate is not None else FilterSchema().build({}),
        shape=department_with_totals,
    )


def _reachable_subjects_plan(path, user_id):
    return QueryPlan(
        subjects_reachable(path),
        entities=(Subject, Department),
        predicate=FilterSchema(member=Equals(path.member_key)).build({"member": user_id}),
        shape=subject_with_department,
    )


def test_department_count_ignores_subject_fan_out(catalog):
    db.session.add_all([
        Subject(id=11, department_id=1, name="Data Structures", code="CS202", created_at=at(40)),
        Subject(id=12, department_id=1, name="Compilers", code="CS301", created_at=at(41)),
    ])
    db.session.commit()

    plan = _department_plan()
    joined_rows = db.session.execute(
        DEPARTMENT_LISTING.apply(select(func.count()))
    ).scalar_one()

    assert joined_rows == 4
    assert plan.count() == 2
    assert len(plan.rows()) == plan.count()

    totals = {row["id"]: row["totalSubjects"] for row in plan.rows()}
    assert totals == {1: 3, 2: 1}


def test_department_without_subjects_is_still_listed(catalog):
    db.session.add(Department(id=3, code="ART", name="Art", created_at=at(50)))
    db.session.commit()

    rows = _department_plan().rows()
    assert [row["id"] for row in rows] == [3, 2, 1]
    assert rows[0]["totalSubjects"] == 0


def test_fan_out_pages_do_not_overlap(catalog):
    db.session.add_all([
        Subject(id=11, department_id=1, name="Data Structures", code="CS202", created_at=at(40)),
        Subject(id=21, department_id=2, name="Ancient Rome", code="HIS201", created_at=at(41)),
    ])
    db.session.commit()

    plan = _department_plan()
    first = plan.execute(Page(number=1, limit=1))
    second = plan.execute(Page(number=2, limit=1))
    third = plan.execute(Page(number=3, limit=1))

    assert first.total == second.total == 2
    assert [r["id"] for r in first.data] == [2]
    assert [r["id"] for r in second.data] == [1]
    assert third.data == []


def test_equal_timestamps_are_ordered_by_id(app):
    db.session.add_all([
        Department(id=1, code="A", name="A", created_at=at(0)),
        Department(id=2, code="B", name="B", created_at=at(0)),
        Department(id=3, code="C", name="C", created_at=at(0)),
    ])
    db.session.commit()

    assert [r["id"] for r in _department_plan().rows()] == [3, 2, 1]


def test_duplicate_enrollments_count_once(catalog):
    # s1: already in 100, enrolled again in 100 and also in 101
    db.session.add_all([
        Enrollment(student_id="s1", class_id=100),
        Enrollment(student_id="s1", class_id=101),
    ])
    db.session.commit()

    plan = _reachable_subjects_plan(ENROLLED, "s1")
    result = plan.execute(Page(number=1, limit=10))

    assert result.total == 1
    assert [row["id"] for row in result.data] == [10]
    assert len(plan.rows()) == result.total


def test_teacher_with_two_classes_counts_subject_once(catalog):
    plan = _reachable_subjects_plan(TEACHING, "t1")
    result = plan.execute(Page(number=1, limit=10))

    assert result.total == 1
    assert [row["name"] for row in result.data] == ["Algorithms"]


def test_both_role_paths_give_the_same_row_shape(catalog):
    teacher_rows = _reachable_subjects_plan(TEACHING, "t1").rows()
    student_rows = _reachable_subjects_plan(ENROLLED, "s1").rows()

    assert teacher_rows and student_rows
    assert set(teacher_rows[0]) == set(student_rows[0])
    assert teacher_rows[0]["department"]["name"] == "CS"
    assert teacher_rows[0] == student_rows[0]


def test_first_returns_none_when_nothing_matches(catalog):
    plan = _department_plan(Department.id == 999)
    assert plan.first() is None


def test_empty_result_envelope():
    result = empty_result()
    assert result.data == []
    assert result.total == 0
    assert result.page.meta(result.total)["limit"] == 0
