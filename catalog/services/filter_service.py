# catalog/services/filter_service.py
from sqlalchemy import and_, or_, true

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """
    Makes user text literal inside a LIKE pattern.
    Backslash goes first, otherwise the later escapes would be doubled.
    """
    return (
        text
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(text: str) -> str:
    return f"%{escape_like(text)}%"


class Contains:
    """Case-insensitive substring match, OR-ed across the given columns."""

    def __init__(self, *columns):
        if not columns:
            raise ValueError("Contains needs at least one column")
        self.columns = columns

    def predicate(self, value):
        pattern = contains_pattern(str(value))
        return or_(*(
            column.ilike(pattern, escape=LIKE_ESCAPE)
            for column in self.columns
        ))


class Equals:
    def __init__(self, column):
        self.column = column

    def predicate(self, value):
        return self.column == value


def _is_present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


class FilterSchema:
    """
    Binds named request parameters to the columns they filter on.

    build() returns one predicate: the AND of every present parameter,
    or a match-all clause when nothing is present.
    """

    def __init__(self, **fields):
        self.fields = fields

    @property
    def names(self):
        return tuple(self.fields)

    def build(self, params):
        conditions = [
            field.predicate(params[name])
            for name, field in self.fields.items()
            if _is_present(params.get(name))
        ]
        if not conditions:
            return true()
        return and_(*conditions)
