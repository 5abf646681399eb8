import json
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from todo_api.context import get_todo_service
from todo_api.exceptions import StorageError, ValidationError
from todo_api.responses import error_response, format_response
from todo_api.schemas.todo import NewTodoOut, TodoCreate, TodoListOut, TodoOut
from todo_api.services.todo_service import TodoService

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_json_body(request: Request) -> dict:
    """Request body as a JSON object; anything else counts as ``{}``."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        logger.info("Ignoring request body that is not valid JSON")
        return {}
    return body if isinstance(body, dict) else {}


@router.get("")
async def list_todos(service: TodoService = Depends(get_todo_service)):
    try:
        todos = await service.list_todos()
    except StorageError as exc:
        return error_response(exc, "Error fetching rows from database")
    out = TodoListOut(todos=[TodoOut.model_validate(t) for t in todos])
    return format_response(200, out)


@router.post("")
async def create_todo(request: Request, service: TodoService = Depends(get_todo_service)):
    body = await read_json_body(request)
    try:
        todo_in = TodoCreate.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError("Todo value is required", field="value") from exc

    try:
        todo = await service.create_todo(todo_in)
    except StorageError as exc:
        return error_response(exc, "Error adding new todo")
    return format_response(201, NewTodoOut(newTodo=TodoOut.model_validate(todo)))
