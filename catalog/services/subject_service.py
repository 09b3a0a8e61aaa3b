# catalog/services/subject_service.py
from sqlalchemy import func, select

from catalog.app_logger import get_logger
from catalog.exceptions import NotFoundError, ValidationError
from catalog.extensions import db
from catalog.models.class_model import Class
from catalog.models.department import Department
from catalog.models.subject import Subject
from catalog.models.user import User
from catalog.services.filter_service import Contains, Equals, FilterSchema
from catalog.services.query_plan_service import QueryPlan
from catalog.services.topology_service import (
    CLASS_TEACHER,
    SUBJECT_LISTING,
    Teacher,
    Topology,
    members_of_classes,
    membership_path,
)
from catalog.utils.request_params import parse_entity_id

logger = get_logger(__name__)

SUBJECT_FILTERS = FilterSchema(
    search=Contains(Subject.name, Subject.code),
    department=Contains(Department.name),
)

SUBJECT_CLASS_FILTERS = FilterSchema(
    search=Contains(Class.name, Class.invite_code),
    subject_id=Equals(Class.subject_id),
)

SUBJECT_CLASS_LISTING = Topology(Class, CLASS_TEACHER)

SUBJECT_MEMBER_FILTERS = FilterSchema(
    search=Contains(User.name, User.email),
    role=Equals(User.role),
    subject_id=Equals(Class.subject_id),
)


# =========================================================
# ROW SHAPES
# =========================================================

def subject_with_department(row):
    subject, department = row
    return {
        **subject.to_dict(),
        "department": department.to_dict() if department else None,
    }


def class_with_teacher(row):
    class_, teacher = row
    return {
        **class_.to_dict(),
        "teacher": teacher.to_dict() if teacher else None,
    }


def user_row(row):
    return row[0].to_dict()


# =========================================================
# SUBJECT READ OPERATIONS
# =========================================================

def list_subjects(params):
    plan = QueryPlan(
        SUBJECT_LISTING,
        entities=(Subject, Department),
        predicate=SUBJECT_FILTERS.build(params.filters),
        shape=subject_with_department,
    )
    return plan.execute(params.page)


def get_subject_or_404(subject_id: int) -> Subject:
    subject = db.session.get(Subject, subject_id)
    if subject is None:
        raise NotFoundError("Subject not found.")
    return subject


def get_subject_details(subject_id: int):
    plan = QueryPlan(
        SUBJECT_LISTING,
        entities=(Subject, Department),
        predicate=Subject.id == subject_id,
        shape=subject_with_department,
    )
    subject = plan.first()
    if subject is None:
        raise NotFoundError("Subject not found.")

    class_count = db.session.execute(
        select(func.count())
        .select_from(Class)
        .where(Class.subject_id == subject_id)
    ).scalar_one()

    return {"subject": subject, "totals": {"classes": class_count}}


def list_subject_classes(subject_id: int, params):
    get_subject_or_404(subject_id)

    scoped = params.with_scope(subject_id=subject_id)
    plan = QueryPlan(
        SUBJECT_CLASS_LISTING,
        entities=(Class, Teacher),
        predicate=SUBJECT_CLASS_FILTERS.build(scoped.filters),
        shape=class_with_teacher,
    )
    return plan.execute(scoped.page)


def list_subject_users(subject_id: int, role, params):
    """
    Teachers owning a class of the subject, or students enrolled in one.
    A user appears once however many of the subject's classes they share.
    """
    get_subject_or_404(subject_id)

    path = membership_path(role)
    logger.debug("Subject %s users via %s path", subject_id, path.role)

    scoped = params.with_scope(subject_id=subject_id, role=path.role.value)
    plan = QueryPlan(
        members_of_classes(path),
        entities=(User,),
        predicate=SUBJECT_MEMBER_FILTERS.build(scoped.filters),
        shape=user_row,
    )
    return plan.execute(scoped.page)


# =========================================================
# SUBJECT CREATE
# =========================================================

def add_subject(department_id, name, code, description=None) -> int:
    if department_id in (None, "") or not name or not code:
        raise ValidationError("departmentId, name and code are required")

    department_id = parse_entity_id(department_id, "department")
    if db.session.get(Department, department_id) is None:
        raise NotFoundError("Department not found.")

    subject = Subject(
        department_id=department_id,
        name=str(name).strip(),
        code=str(code).strip(),
        description=description
    )
    db.session.add(subject)
    db.session.commit()
    return subject.id
