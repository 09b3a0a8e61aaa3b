# catalog/services/class_service.py
import random
import string

from catalog.app_logger import get_logger
from catalog.exceptions import NotFoundError, ValidationError
from catalog.extensions import db
from catalog.models.class_model import Class
from catalog.models.department import Department
from catalog.models.subject import Subject
from catalog.models.user import User
from catalog.services.filter_service import Contains, Equals, FilterSchema
from catalog.services.query_plan_service import QueryPlan
from catalog.services.subject_service import user_row
from catalog.services.topology_service import (
    CLASS_DETAIL,
    CLASS_LISTING,
    Teacher,
    members_of_classes,
    membership_path,
)
from catalog.utils.request_params import parse_entity_id

logger = get_logger(__name__)

INVITE_CODE_ALPHABET = string.ascii_lowercase + string.digits
INVITE_CODE_LENGTH = 7

CLASS_FILTERS = FilterSchema(
    search=Contains(Class.name, Class.invite_code),
    subject=Contains(Subject.name),
    teacher=Contains(Teacher.name),
)

CLASS_MEMBER_FILTERS = FilterSchema(
    search=Contains(User.name, User.email),
    role=Equals(User.role),
    class_id=Equals(Class.id),
)


def _as_dict(entity):
    return entity.to_dict() if entity is not None else None


def class_with_subject_and_teacher(row):
    class_, subject, teacher = row
    return {
        **class_.to_dict(),
        "subject": _as_dict(subject),
        "teacher": _as_dict(teacher),
    }


def class_details(row):
    class_, subject, department, teacher = row
    return {
        **class_.to_dict(),
        "subject": _as_dict(subject),
        "department": _as_dict(department),
        "teacher": _as_dict(teacher),
    }


# ----------------------------
# READ
# ----------------------------

def list_classes(params):
    plan = QueryPlan(
        CLASS_LISTING,
        entities=(Class, Subject, Teacher),
        predicate=CLASS_FILTERS.build(params.filters),
        shape=class_with_subject_and_teacher,
    )
    return plan.execute(params.page)


def get_class_details(class_id: int):
    plan = QueryPlan(
        CLASS_DETAIL,
        entities=(Class, Subject, Department, Teacher),
        predicate=Class.id == class_id,
        shape=class_details,
    )
    details = plan.first()
    if details is None:
        raise NotFoundError("No Class found.")
    return details


def list_class_users(class_id: int, role, params):
    if db.session.get(Class, class_id) is None:
        raise NotFoundError("No Class found.")

    path = membership_path(role)
    logger.debug("Class %s users via %s path", class_id, path.role)

    scoped = params.with_scope(class_id=class_id, role=path.role.value)
    plan = QueryPlan(
        members_of_classes(path),
        entities=(User,),
        predicate=CLASS_MEMBER_FILTERS.build(scoped.filters),
        shape=user_row,
    )
    return plan.execute(scoped.page)


# ----------------------------
# CREATE
# ----------------------------

def generate_invite_code() -> str:
    """Short shareable token. Collisions are possible and not checked."""
    return "".join(random.choices(INVITE_CODE_ALPHABET, k=INVITE_CODE_LENGTH))


def add_class(subject_id, teacher_id, name, description=None) -> int:
    if subject_id in (None, "") or not teacher_id or not name:
        raise ValidationError("subjectId, teacherId and name are required")

    subject_id = parse_entity_id(subject_id, "subject")
    if db.session.get(Subject, subject_id) is None:
        raise NotFoundError("Subject not found.")
    # Existence only; whether the user really has role "teacher" is not checked
    if db.session.get(User, str(teacher_id)) is None:
        raise NotFoundError("Teacher not found.")

    class_ = Class(
        subject_id=subject_id,
        teacher_id=str(teacher_id),
        name=str(name).strip(),
        description=description,
        invite_code=generate_invite_code(),
        schedules=[]
    )
    db.session.add(class_)
    db.session.commit()
    return class_.id
