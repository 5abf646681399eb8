from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class TodoCreate(BaseModel):
    value: StrictStr = Field(min_length=1)


class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    todo: str
    created_at: datetime | None


class TodoListOut(BaseModel):
    todos: list[TodoOut]


class NewTodoOut(BaseModel):
    newTodo: TodoOut
