# catalog/utils/responses.py
from catalog.services.query_plan_service import PageResult


def paginated(result: PageResult) -> dict:
    return {
        "data": list(result.data),
        "pagination": result.page.meta(result.total),
    }


def detail(data) -> dict:
    return {"data": data}


def created(entity_id) -> dict:
    return {"data": {"id": entity_id}}
