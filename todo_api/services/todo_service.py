import logging

from todo_api.database import Database
from todo_api.exceptions import QueryError, StorageError
from todo_api.models.todo import Todo
from todo_api.repositories.todo_repo import TodoRepository
from todo_api.schemas.todo import TodoCreate

logger = logging.getLogger(__name__)


class TodoService:
    def __init__(self, database: Database):
        self.database = database
        self.repo = TodoRepository()

    async def list_todos(self) -> list[Todo]:
        async with self.database.session() as db:
            try:
                return await self.repo.list(db)
            except StorageError:
                raise
            except Exception as exc:
                logger.exception("Database query failed")
                raise QueryError("Unable to fetch rows from the database") from exc

    async def create_todo(self, todo_in: TodoCreate) -> Todo:
        async with self.database.session() as db:
            try:
                return await self.repo.create(db, todo_in.value)
            except StorageError:
                raise
            except Exception as exc:
                logger.exception("Database insert failed")
                raise QueryError("Unable to insert todo into the database") from exc
