import logging

from sqlalchemy.schema import CreateTable

from todo_api.database import Database
from todo_api.exceptions import SchemaBootstrapError, StorageError
from todo_api.models.todo import Todo

logger = logging.getLogger(__name__)


class SchemaBootstrapper:
    """Creates the todos table if it is missing.

    ``ensure`` is safe to call repeatedly and from concurrent processes
    because it only issues CREATE TABLE IF NOT EXISTS. Once it has succeeded
    in this process ``run_once`` stops touching the database.
    """

    def __init__(self, database: Database):
        self.database = database
        self.ready = False

    async def ensure(self) -> None:
        statement = CreateTable(Todo.__table__, if_not_exists=True)
        try:
            async with self.database.session() as session:
                await session.execute(statement)
                await session.commit()
        except StorageError as exc:
            raise SchemaBootstrapError() from exc
        except Exception as exc:
            logger.exception("Creating table %r failed", Todo.__tablename__)
            raise SchemaBootstrapError() from exc
        self.ready = True
        logger.info('Table "%s" checked/created.', Todo.__tablename__)

    async def run_once(self) -> bool:
        if self.ready:
            return True
        try:
            await self.ensure()
        except SchemaBootstrapError:
            logger.error("Schema bootstrap failed, will retry on next startup", exc_info=True)
            return False
        return True
