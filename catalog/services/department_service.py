# catalog/services/department_service.py
from sqlalchemy import func, select

from catalog.exceptions import NotFoundError
from catalog.extensions import db
from catalog.models.class_model import Class
from catalog.models.department import Department
from catalog.models.subject import Subject
from catalog.services.filter_service import Contains, Equals, FilterSchema
from catalog.services.query_plan_service import QueryPlan
from catalog.services.subject_service import SUBJECT_FILTERS, subject_with_department
from catalog.services.topology_service import DEPARTMENT_LISTING, SUBJECT_LISTING

DEPARTMENT_FILTERS = FilterSchema(
    search=Contains(Department.name, Department.code),
)

DEPARTMENT_SUBJECT_FILTERS = FilterSchema(
    search=SUBJECT_FILTERS.fields["search"],
    department_id=Equals(Subject.department_id),
)

total_subjects = func.count(Subject.id).label("total_subjects")


def department_with_totals(row):
    department, subject_count = row
    return {**department.to_dict(), "totalSubjects": subject_count}


# ----------------------------
# READ
# ----------------------------

def list_departments(params):
    plan = QueryPlan(
        DEPARTMENT_LISTING,
        entities=(Department,),
        aggregates=(total_subjects,),
        predicate=DEPARTMENT_FILTERS.build(params.filters),
        shape=department_with_totals,
    )
    return plan.execute(params.page)


def get_department_or_404(department_id: int) -> Department:
    department = db.session.get(Department, department_id)
    if department is None:
        raise NotFoundError("Department not found.")
    return department


def get_department_details(department_id: int):
    department = get_department_or_404(department_id)

    subject_count = db.session.execute(
        select(func.count())
        .select_from(Subject)
        .where(Subject.department_id == department_id)
    ).scalar_one()

    class_count = db.session.execute(
        select(func.count())
        .select_from(Class)
        .join(Subject, Class.subject_id == Subject.id)
        .where(Subject.department_id == department_id)
    ).scalar_one()

    return {
        "department": department.to_dict(),
        "totals": {"subjects": subject_count, "classes": class_count},
    }


def list_department_subjects(department_id: int, params):
    get_department_or_404(department_id)

    scoped = params.with_scope(department_id=department_id)
    plan = QueryPlan(
        SUBJECT_LISTING,
        entities=(Subject, Department),
        predicate=DEPARTMENT_SUBJECT_FILTERS.build(scoped.filters),
        shape=subject_with_department,
    )
    return plan.execute(scoped.page)
