import pytest

from fakes import SECRET_ARN

CORS = {
    "access-control-allow-headers": "Content-Type",
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "OPTIONS,POST,GET",
}


def assert_cors(res):
    for name, value in CORS.items():
        assert res.headers[name] == value


async def test_create_todo(client):
    res = await client.post("/todos", json={"value": "Buy milk"})
    assert res.status_code == 201
    assert_cors(res)
    new_todo = res.json()["newTodo"]
    assert new_todo["todo"] == "Buy milk"
    assert isinstance(new_todo["id"], int) and new_todo["id"] > 0
    assert new_todo["created_at"]


async def test_create_assigns_fresh_ids(client):
    first = (await client.post("/todos", json={"value": "one"})).json()["newTodo"]
    second = (await client.post("/todos", json={"value": "two"})).json()["newTodo"]
    assert first["id"] != second["id"]


@pytest.mark.parametrize(
    "content",
    [
        b"{}",
        b'{"value": ""}',
        b'{"value": null}',
        b'{"value": 42}',
        b'{"text": "wrong field"}',
        b'["value"]',
        b"not json",
        b"",
    ],
)
async def test_create_requires_value(client, content):
    res = await client.post("/todos", content=content, headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert_cors(res)
    body = res.json()
    assert body["message"] == "Todo value is required"
    assert body["code"] == "validation_error"

    listed = await client.get("/todos")
    assert listed.json()["todos"] == []


async def test_list_todos_empty(client):
    res = await client.get("/todos")
    assert res.status_code == 200
    assert_cors(res)
    assert res.json() == {"todos": []}


async def test_list_contains_every_insert(client):
    values = ["water plants", "call mum", "file taxes"]
    created = []
    for value in values:
        res = await client.post("/todos", json={"value": value})
        created.append(res.json()["newTodo"])

    res = await client.get("/todos")
    assert res.status_code == 200
    todos = res.json()["todos"]
    assert len(todos) >= len(values)
    by_id = {t["id"]: t for t in todos}
    for todo in created:
        assert by_id[todo["id"]]["todo"] == todo["todo"]
        assert set(by_id[todo["id"]]) == {"id", "todo", "created_at"}


async def test_request_id_is_echoed(client):
    res = await client.get("/todos", headers={"X-Request-ID": "trace-42"})
    assert res.headers["x-request-id"] == "trace-42"


async def test_list_hides_secret_store_failure(broken_secret_client):
    res = await broken_secret_client.get("/todos")
    assert res.status_code == 500
    assert_cors(res)
    body = res.json()
    assert body["message"] == "Error fetching rows from database"
    assert body["code"] == "credential_error"
    assert "secret-detail-7f3a" not in res.text
    assert SECRET_ARN not in res.text


async def test_create_hides_secret_store_failure(broken_secret_client):
    res = await broken_secret_client.post("/todos", json={"value": "Buy milk"})
    assert res.status_code == 500
    assert_cors(res)
    assert res.json()["message"] == "Error adding new todo"
    assert "secret-detail-7f3a" not in res.text
    assert "AccessDenied" not in res.text


async def test_validation_runs_before_storage(broken_secret_client):
    res = await broken_secret_client.post("/todos", json={})
    assert res.status_code == 400
