import httpx
import pytest
import pytest_asyncio

from app.config import Settings
from app.main import create_app


class FakeClient:
    """Подставной CompletionClient: запоминает вызовы, отдаёт заданный ответ."""

    def __init__(self, text="Paris.", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, prompt, temperature):
        self.calls.append((prompt, temperature))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("OPENAI_API_KEY", "COMPLETION_OPENAI_API_KEY", "COMPLETION_TEMPERATURE"):
        monkeypatch.delenv(key, raising=False)


def make_settings(**overrides) -> Settings:
    values = {"OPENAI_API_KEY": "test-openai-key"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest_asyncio.fixture
async def client(settings, fake_client):
    app = create_app(settings, fake_client)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def settings_factory():
    return make_settings
