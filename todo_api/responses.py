from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from todo_api.exceptions import TodoApiError
from todo_api.middleware.request_id import request_id_var

CORS_HEADERS = {
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "OPTIONS,POST,GET",
}


def format_response(status_code: int, body: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=dict(CORS_HEADERS))


def error_response(exc: TodoApiError, message: str | None = None) -> JSONResponse:
    """Caller-facing error: a short message, a code and the request id. Never exc.context."""
    body = {"message": message or exc.message, "code": exc.code}
    request_id = request_id_var.get()
    if request_id:
        body["requestId"] = request_id
    return format_response(exc.status_code, body)
