# catalog/services/query_plan_service.py
from typing import NamedTuple

from sqlalchemy import distinct, func, inspect, select

from catalog.app_logger import get_logger
from catalog.extensions import db
from catalog.services.pagination_service import EMPTY_PAGE, Page

logger = get_logger(__name__)


class PageResult(NamedTuple):
    data: list
    page: Page
    total: int


def empty_result() -> PageResult:
    return PageResult(data=[], page=EMPTY_PAGE, total=0)


def _entity_columns(entity):
    mapper = inspect(entity).mapper
    return [getattr(entity, attr.key) for attr in mapper.column_attrs]


class QueryPlan:
    """
    One topology + one predicate, executed two ways.

    The count and the page are both derived from this object, so they
    always see the same joins and the same WHERE clause. When the
    topology fans out, the count is distinct on the base primary key and
    the listing is grouped on every selected entity column.
    """

    def __init__(self, topology, entities, predicate, shape, aggregates=()):
        self.topology = topology
        self.entities = tuple(entities)
        self.aggregates = tuple(aggregates)
        self.predicate = predicate
        self.shape = shape

        base = topology.base
        self.key = inspect(base).mapper.primary_key[0]
        self.order_by = (base.created_at.desc(), self.key.desc())

    def _scoped(self, stmt):
        return self.topology.apply(stmt).where(self.predicate)

    def group_by_columns(self):
        columns = []
        for entity in self.entities:
            columns.extend(_entity_columns(entity))
        return columns

    # ----------------------------
    # STATEMENTS
    # ----------------------------

    def count_statement(self):
        if self.topology.fans_out:
            counted = func.count(distinct(self.key))
        else:
            counted = func.count()
        return self._scoped(select(counted))

    def list_statement(self, page: Page | None = None):
        stmt = self._scoped(select(*self.entities, *self.aggregates))

        if self.topology.fans_out or self.aggregates:
            stmt = stmt.group_by(*self.group_by_columns())

        stmt = stmt.order_by(*self.order_by)

        if page is not None:
            stmt = stmt.limit(page.limit).offset(page.offset)
        return stmt

    # ----------------------------
    # EXECUTION
    # ----------------------------

    def count(self, session=None) -> int:
        session = session or db.session
        return session.execute(self.count_statement()).scalar_one() or 0

    def rows(self, page: Page | None = None, session=None) -> list:
        session = session or db.session
        result = session.execute(self.list_statement(page)).all()
        return [self.shape(row) for row in result]

    def execute(self, page: Page, session=None) -> PageResult:
        logger.debug("Running %r page=%s limit=%s", self.topology, page.number, page.limit)
        total = self.count(session)
        data = self.rows(page, session)
        return PageResult(data=data, page=page, total=total)

    def first(self, session=None):
        session = session or db.session
        row = session.execute(self.list_statement().limit(1)).first()
        return self.shape(row) if row is not None else None
