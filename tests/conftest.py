import os

# todo_api.main builds a module-level app on import; explicit Settings(...) in
# fixtures override this
os.environ.setdefault("DB_SECRET_ARN", "arn:aws:secretsmanager:us-east-2:123456789012:secret:unused")

import pytest
from httpx import ASGITransport, AsyncClient

from fakes import SECRET_ARN, FakeSecretsClient, access_denied
from todo_api.config import Settings
from todo_api.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}")


@pytest.fixture
async def initialized_app(settings):
    app = create_app(settings)
    await app.state.context.bootstrapper.run_once()
    yield app
    await app.state.context.close()


@pytest.fixture
async def client(initialized_app):
    async with AsyncClient(transport=ASGITransport(app=initialized_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def broken_secret_app():
    settings = Settings(db_secret_arn=SECRET_ARN, db_ssl=False)
    app = create_app(settings, secrets_client=FakeSecretsClient(error=access_denied("secret-detail-7f3a")))
    yield app
    await app.state.context.close()


@pytest.fixture
async def broken_secret_client(broken_secret_app):
    async with AsyncClient(transport=ASGITransport(app=broken_secret_app), base_url="http://test") as ac:
        yield ac
