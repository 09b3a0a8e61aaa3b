class CatalogError(Exception):
    """Base class for errors a route turns into a client response."""

    status_code = 400


class ValidationError(CatalogError):
    """Malformed input: bad id, unknown enum value, missing field."""

    status_code = 400


class NotFoundError(CatalogError):
    """Well-formed id that matches nothing."""

    status_code = 404
