# catalog/services/user_service.py
from catalog.app_logger import get_logger
from catalog.exceptions import NotFoundError
from catalog.extensions import db
from catalog.models.class_model import Class
from catalog.models.department import Department
from catalog.models.subject import Subject
from catalog.models.user import User
from catalog.services.class_service import class_with_subject_and_teacher
from catalog.services.filter_service import Contains, Equals, FilterSchema
from catalog.services.query_plan_service import QueryPlan, empty_result
from catalog.services.subject_service import subject_with_department, user_row
from catalog.services.topology_service import (
    USER_LISTING,
    Teacher,
    classes_reachable,
    departments_reachable,
    membership_path,
    subjects_reachable,
)

logger = get_logger(__name__)

USER_FILTERS = FilterSchema(
    search=Contains(User.name, User.email),
    role=Equals(User.role),
)


def department_row(row):
    return row[0].to_dict()


# What each "/users/<id>/..." listing selects once the role path is known
REACHABLE = {
    "departments": (departments_reachable, (Department,), department_row),
    "subjects": (subjects_reachable, (Subject, Department), subject_with_department),
    "classes": (classes_reachable, (Class, Subject, Teacher), class_with_subject_and_teacher),
}


# ----------------------------
# READ
# ----------------------------

def list_users(params):
    plan = QueryPlan(
        USER_LISTING,
        entities=(User,),
        predicate=USER_FILTERS.build(params.filters),
        shape=user_row,
    )
    return plan.execute(params.page)


def get_user_or_404(user_id: str) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


def list_reachable(user_id: str, target: str, params):
    """
    Departments / subjects / classes a user is attached to.

    Teachers reach classes they own, students the classes they are
    enrolled in. Any other role has no path and gets an empty page.
    """
    user = get_user_or_404(user_id)

    path = membership_path(user.role)
    if not path.applies:
        logger.debug("User %s has role %s, no %s to list", user_id, user.role, target)
        return empty_result()

    build_topology, entities, shape = REACHABLE[target]
    plan = QueryPlan(
        build_topology(path),
        entities=entities,
        predicate=FilterSchema(member=Equals(path.member_key)).build({"member": user.id}),
        shape=shape,
    )
    return plan.execute(params.page)


def list_user_departments(user_id: str, params):
    return list_reachable(user_id, "departments", params)


def list_user_subjects(user_id: str, params):
    return list_reachable(user_id, "subjects", params)


def list_user_classes(user_id: str, params):
    return list_reachable(user_id, "classes", params)
