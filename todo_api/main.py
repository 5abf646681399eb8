import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.config import Settings
from todo_api.context import AppContext
from todo_api.exceptions import RouteNotFound, TodoApiError
from todo_api.logging_config import configure_logging
from todo_api.middleware.request_id import RequestIDMiddleware
from todo_api.responses import error_response
from todo_api.routers import todo_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Mangum runs startup/shutdown around every invocation; run_once keeps
    # the bootstrap to one successful pass per process.
    await app.state.context.bootstrapper.run_once()
    yield


def create_app(settings: Settings | None = None, secrets_client=None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Todo API",
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.context = AppContext.from_settings(settings, secrets_client=secrets_client)

    app.add_middleware(RequestIDMiddleware)
    app.include_router(todo_router.router, prefix="/todos", tags=["Todos"])

    @app.exception_handler(TodoApiError)
    async def todo_api_error_handler(request: Request, exc: TodoApiError):
        logger.warning("%s: %s %s", exc.code, exc.message, exc.context)
        return error_response(exc)

    async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
        missing = RouteNotFound(request.method, request.url.path, settings.fallback_status_code)
        logger.info("No route for %s %s", request.method, request.url.path)
        return error_response(missing)

    # 404: unknown path, 405: known path with an unsupported method
    app.add_exception_handler(404, route_not_found_handler)
    app.add_exception_handler(405, route_not_found_handler)

    return app


app = create_app()
