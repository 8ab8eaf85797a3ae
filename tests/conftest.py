from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from wealthwise.core.config import Settings
from wealthwise.core.dependencies import get_chat_service
from wealthwise.main import create_app
from wealthwise.services.openai_service import ChatService
from wealthwise.services.user_store import UserStore


def make_completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def static_dir(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html><body>WealthWise</body></html>")
    (public / "app.js").write_text("console.log('wealthwise');")
    return public


@pytest.fixture
def settings(static_dir):
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        OPENAI_API_KEY=None,
        ENVIRONMENT="production",
        STATIC_DIR=static_dir,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_store(app):
    db = app.state.session_factory()
    try:
        yield UserStore(db)
    finally:
        db.close()


@pytest.fixture
def openai_client():
    fake = MagicMock()
    fake.chat.completions.create.return_value = make_completion(
        "Start by building an emergency fund covering three to six months of expenses."
    )
    return fake


@pytest.fixture
def configured_chat(app, openai_client):
    service = ChatService(api_key="sk-test", model="gpt-4o", client=openai_client)
    app.dependency_overrides[get_chat_service] = lambda: service
    yield service
    app.dependency_overrides.clear()
