from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.models.todo import Todo


class TodoRepository:
    async def create(self, db: AsyncSession, text: str) -> Todo:
        result = await db.scalars(insert(Todo).values(todo=text).returning(Todo))
        todo = result.one()
        await db.commit()
        return todo

    async def list(self, db: AsyncSession) -> list[Todo]:
        # no ORDER BY: rows come back in whatever order the database picks
        result = await db.execute(select(Todo))
        return list(result.scalars().all())
