# catalog/services/topology_service.py
"""
Join topologies: which tables a listing walks through to reach the rows
it filters or counts on.

Every hop is a LEFT OUTER JOIN. A base row is only dropped when the
predicate itself references a joined column that came back NULL.
"""
import enum
from typing import NamedTuple

from sqlalchemy.orm import aliased

from catalog.models import Class, Department, Enrollment, Subject, User


class Role(str, enum.Enum):
    TEACHER = "teacher"
    STUDENT = "student"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Join(NamedTuple):
    target: object
    onclause: object


class Topology:
    def __init__(self, base, *joins, fans_out=False):
        self.base = base
        self.joins = tuple(joins)
        # True when one base row can appear on several joined rows
        self.fans_out = fans_out

    def extend(self, *joins, fans_out=False):
        return Topology(
            self.base,
            *self.joins,
            *joins,
            fans_out=self.fans_out or fans_out
        )

    def apply(self, stmt):
        stmt = stmt.select_from(self.base)
        for target, onclause in self.joins:
            stmt = stmt.outerjoin(target, onclause)
        return stmt

    def __repr__(self):
        hops = " -> ".join(
            [self.base.__name__] + [_entity_name(j.target) for j in self.joins]
        )
        return f"<Topology {hops}{' (fan-out)' if self.fans_out else ''}>"


def _entity_name(entity):
    return getattr(entity, "__name__", None) or str(entity)


# The class owner, selected next to class rows
Teacher = aliased(User, name="teacher")

CLASS_SUBJECT = Join(Subject, Class.subject_id == Subject.id)
CLASS_TEACHER = Join(Teacher, Class.teacher_id == Teacher.id)
SUBJECT_DEPARTMENT = Join(Department, Subject.department_id == Department.id)
DEPARTMENT_SUBJECTS = Join(Subject, Subject.department_id == Department.id)
SUBJECT_CLASSES = Join(Class, Class.subject_id == Subject.id)


# =========================================================
# ROLE PATHS
# =========================================================

class MembershipPath(NamedTuple):
    """
    How a user is attached to a class.

    class_links: joins from Class that expose member_key.
    member_key:  column holding the user id once class_links are joined.
    user_links:  joins from User that reach Class.
    """
    role: Role | None
    class_links: tuple
    member_key: object
    user_links: tuple

    @property
    def applies(self) -> bool:
        return self.role is not None

    @property
    def fans_out(self) -> bool:
        return bool(self.class_links)


TEACHING = MembershipPath(
    role=Role.TEACHER,
    class_links=(),
    member_key=Class.teacher_id,
    user_links=(Join(Class, Class.teacher_id == User.id),),
)

ENROLLED = MembershipPath(
    role=Role.STUDENT,
    class_links=(Join(Enrollment, Enrollment.class_id == Class.id),),
    member_key=Enrollment.student_id,
    user_links=(
        Join(Enrollment, Enrollment.student_id == User.id),
        Join(Class, Class.id == Enrollment.class_id),
    ),
)

NO_PATH = MembershipPath(role=None, class_links=(), member_key=None, user_links=())

_PATHS = {
    Role.TEACHER: TEACHING,
    Role.STUDENT: ENROLLED,
}


def membership_path(role) -> MembershipPath:
    return _PATHS.get(Role.parse(role), NO_PATH)


# =========================================================
# FIXED TOPOLOGIES
# =========================================================

DEPARTMENT_LISTING = Topology(Department, DEPARTMENT_SUBJECTS, fans_out=True)
SUBJECT_LISTING = Topology(Subject, SUBJECT_DEPARTMENT)
CLASS_LISTING = Topology(Class, CLASS_SUBJECT, CLASS_TEACHER)
CLASS_DETAIL = CLASS_LISTING.extend(SUBJECT_DEPARTMENT)
USER_LISTING = Topology(User)


# =========================================================
# ROLE-DEPENDENT TOPOLOGIES
# =========================================================

def departments_reachable(path: MembershipPath) -> Topology:
    return Topology(
        Department,
        DEPARTMENT_SUBJECTS,
        SUBJECT_CLASSES,
        *path.class_links,
        fans_out=True
    )


def subjects_reachable(path: MembershipPath) -> Topology:
    return Topology(
        Subject,
        SUBJECT_DEPARTMENT,
        SUBJECT_CLASSES,
        *path.class_links,
        fans_out=True
    )


def classes_reachable(path: MembershipPath) -> Topology:
    return CLASS_LISTING.extend(*path.class_links, fans_out=path.fans_out)


def members_of_classes(path: MembershipPath) -> Topology:
    """User rows that teach in / are enrolled in some class."""
    return Topology(User, *path.user_links, fans_out=True)
