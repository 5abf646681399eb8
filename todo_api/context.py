import logging
from dataclasses import dataclass, field

from fastapi import Request

from todo_api.bootstrap import SchemaBootstrapper
from todo_api.config import Settings
from todo_api.credentials import CredentialResolver, create_secrets_client
from todo_api.database import Database, create_engine_from_settings
from todo_api.services.todo_service import TodoService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Process-wide collaborators, built once when the app is created."""

    settings: Settings
    database: Database
    bootstrapper: SchemaBootstrapper = field(init=False)
    todo_service: TodoService = field(init=False)

    def __post_init__(self):
        self.bootstrapper = SchemaBootstrapper(self.database)
        self.todo_service = TodoService(self.database)

    @classmethod
    def from_settings(cls, settings: Settings, secrets_client=None) -> "AppContext":
        resolver = None
        if settings.uses_secret_store:
            if secrets_client is None:
                secrets_client = create_secrets_client(settings.aws_region)
            resolver = CredentialResolver(secrets_client, settings.db_secret_arn)
            logger.info("Database credentials come from secret %s", settings.db_secret_arn)
        engine = create_engine_from_settings(settings, resolver)
        return cls(settings=settings, database=Database(engine))

    async def close(self) -> None:
        await self.database.dispose()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_todo_service(request: Request) -> TodoService:
    return get_context(request).todo_service
