import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

access_logger = logging.getLogger("todo_api.access")


def resolve_request_id(request: Request) -> str:
    # Mangum exposes the Lambda context object in the scope
    lambda_context = request.scope.get("aws.context")
    aws_request_id = getattr(lambda_context, "aws_request_id", None)
    if aws_request_id:
        return aws_request_id
    return request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]


def resolve_caller(request: Request) -> str:
    """Identity the API Gateway authorizer attached to the event, if any."""
    lambda_event = request.scope.get("aws.event") or {}
    authorizer = (lambda_event.get("requestContext") or {}).get("authorizer") or {}
    claims = authorizer.get("claims") or {}
    return claims.get("cognito:username") or claims.get("sub") or "-"


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = resolve_request_id(request)
        token = request_id_var.set(rid)
        request.state.request_id = rid
        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            response.headers["X-Request-ID"] = rid

            status = response.status_code
            if status >= 500:
                level = logging.ERROR
            elif status >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO
            access_logger.log(
                level,
                "%s %s %d %.1fms caller=%s",
                request.method,
                request.url.path,
                status,
                duration_ms,
                resolve_caller(request),
                extra={"method": request.method, "path": request.url.path, "status": status},
            )
            return response
        finally:
            request_id_var.reset(token)
