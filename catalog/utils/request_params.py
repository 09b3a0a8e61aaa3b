# catalog/utils/request_params.py
"""
Parses query-string and path values once, at the route boundary.
Services receive the resulting values and never touch `request`.
"""
import re
from dataclasses import dataclass, field, replace

from flask import current_app

from catalog.exceptions import ValidationError
from catalog.services.pagination_service import Page, normalize_pagination
from catalog.services.topology_service import Role

REQUIRED_ROLES = (Role.TEACHER, Role.STUDENT)

ID_PATTERN = re.compile(r"[0-9]+")
MAX_ENTITY_ID = 2 ** 63 - 1


@dataclass(frozen=True)
class ListParams:
    page: Page = field(default_factory=Page)
    filters: dict = field(default_factory=dict)

    def with_scope(self, **scope) -> "ListParams":
        return replace(self, filters={**self.filters, **scope})


def parse_list_params(args, *filter_names) -> ListParams:
    config = current_app.config
    page = normalize_pagination(
        args.get("page"),
        args.get("limit"),
        default_limit=config.get("PAGINATION_DEFAULT_LIMIT", 10),
        max_limit=config.get("PAGINATION_MAX_LIMIT", 100),
    )

    filters = {}
    for name in filter_names:
        value = args.get(name)
        if value is not None and value.strip():
            filters[name] = value.strip()

    return ListParams(page=page, filters=filters)


def parse_entity_id(raw, label: str) -> int:
    """Plain digit strings (or ints) that fit a BIGINT column."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"Invalid {label} id.")
    text = str(raw).strip()
    if not ID_PATTERN.fullmatch(text) or int(text) > MAX_ENTITY_ID:
        raise ValidationError(f"Invalid {label} id.")
    return int(text)


def parse_role(raw, allowed=REQUIRED_ROLES) -> Role:
    role = Role.parse(raw) if raw else None
    if role is None or role not in allowed:
        raise ValidationError("Invalid role")
    return role
