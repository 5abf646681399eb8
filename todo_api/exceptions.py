from typing import Any


class TodoApiError(Exception):
    """Base application error.

    ``message`` is safe to return to the caller. ``context`` is for logs only.
    """

    code = "internal_error"
    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred", context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ValidationError(TodoApiError):
    code = "validation_error"
    status_code = 400

    def __init__(self, message: str = "Validation failed", field: str | None = None, context: dict[str, Any] | None = None):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message, ctx)
        self.field = field


class RouteNotFound(TodoApiError):
    code = "not_found"

    def __init__(self, method: str, path: str, status_code: int = 500):
        super().__init__("Not Found", {"method": method, "path": path})
        self.status_code = status_code


class StorageError(TodoApiError):
    """Anything on the path from the secret store to the database."""


class CredentialRetrievalError(StorageError):
    code = "credential_error"

    def __init__(self, message: str = "Failed to retrieve database credentials", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class DatabaseConnectionError(StorageError):
    code = "database_unavailable"

    def __init__(self, message: str = "Unable to connect to the database", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class QueryError(StorageError):
    code = "query_error"

    def __init__(self, message: str = "Database query failed", context: dict[str, Any] | None = None):
        super().__init__(message, context)


class SchemaBootstrapError(StorageError):
    code = "schema_error"

    def __init__(self, message: str = "Unable to create the todos table", context: dict[str, Any] | None = None):
        super().__init__(message, context)
